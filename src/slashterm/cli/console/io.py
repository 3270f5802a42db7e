"""Output sink contract for console commands.

Only ``println`` is required. Everything else is an optional capability:
commands look it up with ``getattr`` and fall back to ``println`` when a
sink does not provide it.

    print_lines(lines)      append several lines at once
    write(text)             append to the current line; a trailing "\\n" ends it
    start_live(id, text)    open a named region that can be rewritten in place
    update_live(id, text)   replace the text of a live region
    end_live(id)            stop tracking a live region
    clear_screen()          clear the terminal
    lock_input()            refuse any further input for the session
"""

from __future__ import annotations

from typing import Protocol


class IO(Protocol):
    def println(self, line: str) -> None: ...


def print_lines(io: IO, lines: list[str]) -> None:
    """Print lines through ``io.print_lines`` or one ``println`` each."""
    batch = getattr(io, "print_lines", None)
    if batch is not None:
        batch(lines)
        return
    for line in lines:
        io.println(line)


class TranscriptIO:
    """
    IO sink backed by an in-memory list of messages.

    Used to embed the command core in hosts that render a message list
    (and in tests). With ``coalesce`` on, every print of one invocation
    lands in the same message, joined by newlines. Live regions are a map
    of live id to message index.

    Args:
        messages: Shared transcript to append to (a new list if omitted)
        coalesce: Join all output of this sink into one message
        keep: Number of leading messages that survive clear_screen()
    """

    def __init__(
        self,
        messages: list[str] | None = None,
        coalesce: bool = False,
        keep: int = 0,
    ) -> None:
        self.messages: list[str] = messages if messages is not None else []
        self.coalesce = coalesce
        self.keep = keep
        self.locked = False
        self._index: int | None = None
        self._open: int | None = None
        self._live: dict[str, int] = {}

    def _valid(self, idx: int | None) -> bool:
        return idx is not None and 0 <= idx < len(self.messages)

    def _append(self, text: str) -> None:
        if self.coalesce and self._valid(self._index):
            existing = self.messages[self._index]
            self.messages[self._index] = f"{existing}\n{text}" if existing else text
            return
        self.messages.append(text)
        if self.coalesce:
            self._index = len(self.messages) - 1

    def println(self, line: str) -> None:
        self._open = None
        self._append(line)

    def print_lines(self, lines: list[str]) -> None:
        if not lines:
            return
        self.println("\n".join(lines))

    def write(self, text: str) -> None:
        closing = text.endswith("\n")
        if closing:
            text = text[:-1]
        if text:
            if self._valid(self._open):
                self.messages[self._open] += text
            else:
                self.messages.append(text)
                self._open = len(self.messages) - 1
        if closing:
            self._open = None

    def start_live(self, live_id: str, text: str) -> None:
        self.messages.append(text)
        idx = len(self.messages) - 1
        if self.coalesce:
            self._index = idx
        self._live[live_id] = idx

    def update_live(self, live_id: str, text: str) -> None:
        idx = self._live.get(live_id)
        if idx is None:
            self._append(text)
            return
        if self._valid(idx):
            self.messages[idx] = text

    def end_live(self, live_id: str) -> None:
        self._live.pop(live_id, None)

    def clear_screen(self) -> None:
        self._index = None
        self._open = None
        self._live.clear()
        del self.messages[self.keep:]

    def lock_input(self) -> None:
        self.locked = True
