"""Rich output helpers for the interactive console."""

from collections.abc import Callable

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

console = Console()


def make_table(
    title: str, columns: list[tuple[str, str]], rows: list[list[str]], show_lines: bool = False
) -> None:
    """Create and print a Rich table.

    Args:
        title: Table title
        columns: List of (name, style) tuples
        rows: List of row data (each row is a list of strings)
        show_lines: Whether to show lines between rows
    """
    table = Table(title=title, show_lines=show_lines)
    for name, style in columns:
        table.add_column(name, style=style)
    for row in rows:
        table.add_row(*row)
    console.print(table)


class RichConsoleIO:
    """
    IO sink that renders straight to a Rich console.

    Command output is printed verbatim (no markup, no highlighting). Live
    regions are ``rich.live.Live`` displays keyed by their id.
    """

    def __init__(self, out: Console | None = None, on_lock: Callable[[], None] | None = None) -> None:
        self.console = out or console
        self._on_lock = on_lock
        self._live: dict[str, Live] = {}

    def println(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False)

    def print_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.println(line)

    def write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def start_live(self, live_id: str, text: str) -> None:
        self.end_live(live_id)
        live = Live(Text(text), console=self.console, auto_refresh=False)
        live.start(refresh=True)
        self._live[live_id] = live

    def update_live(self, live_id: str, text: str) -> None:
        live = self._live.get(live_id)
        if live is None:
            self.println(text)
            return
        live.update(Text(text), refresh=True)

    def end_live(self, live_id: str) -> None:
        live = self._live.pop(live_id, None)
        if live is not None:
            live.stop()

    def clear_screen(self) -> None:
        self.console.clear()

    def lock_input(self) -> None:
        if self._on_lock is not None:
            self._on_lock()
