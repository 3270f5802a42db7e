"""Tab completion for the interactive console."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from .command_registry import CommandRouter

# Flags offered after a command name
_COMMAND_FLAGS = {
    "status": ["--json", "--quiet", "-q"],
}


class ConsoleCompleter(Completer):
    """Tab-completion provider for the console REPL."""

    def __init__(self, router: CommandRouter) -> None:
        self._router = router

    def get_completions(self, document: Document, complete_event: CompleteEvent):
        text = document.text_before_cursor.lstrip()

        if not text.startswith("/"):
            return

        parts = text.split()

        if len(parts) <= 1 and not text.endswith(" "):
            # Completing the command name (or an alias)
            for candidate in sorted(self._router.get_completions()):
                if candidate.startswith(text):
                    cmd = self._router.get(candidate[1:])
                    meta = cmd.summary[:40] if cmd else ""
                    yield Completion(candidate, start_position=-len(text), display_meta=meta)
            return

        cmd = self._router.get(parts[0][1:])
        if cmd is None:
            return

        current = "" if text.endswith(" ") else parts[-1]

        if cmd.name == "help" and len(parts) <= 2:
            # /help <command>
            for other in self._router.list():
                if other.name.startswith(current):
                    yield Completion(
                        other.name, start_position=-len(current), display_meta="command"
                    )
            return

        for flag in _COMMAND_FLAGS.get(cmd.name, []):
            if flag.startswith(current) and flag not in parts:
                yield Completion(flag, start_position=-len(current), display_meta="flag")
