"""Main REPL loop for the slashterm interactive console."""

from __future__ import annotations

import asyncio
from datetime import datetime

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from slashterm.config.paths import SlashtermPaths
from slashterm.config.settings import Settings
from slashterm.core.runtime import ModelRuntime
from slashterm.core.session import Session

from .commands import create_slash_system
from .completer import ConsoleCompleter
from .renderer import RichConsoleIO


class ConsoleApp:
    """Interactive console application."""

    def __init__(
        self,
        paths: SlashtermPaths | None = None,
        settings: Settings | None = None,
        runtime: ModelRuntime | None = None,
        out: Console | None = None,
    ) -> None:
        self.paths = paths or SlashtermPaths()
        self.paths.ensure_directories()
        self.settings = settings or Settings.load(paths=self.paths)
        self.session = Session(self.settings, runtime or ModelRuntime(self.settings))
        self.router = create_slash_system(self.session.as_context())
        self.io = RichConsoleIO(out, on_lock=self.lock)
        self._running = True
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        """Refuse any further input for this session."""
        self._locked = True

    def quit(self) -> None:
        """Signal the REPL to exit."""
        self._running = False

    def _print_banner(self) -> None:
        """Print the login banner."""
        now = datetime.now()
        size = f"{self.settings.model_size_mb:g}MB"
        self.io.console.print(
            f"Last login: {now:%a %b %d %H:%M:%S} on ttys030\n"
            f"zsh: no llm loaded\n"
            f"    run /download to install {self.settings.model_name} ({size})\n"
            f"    run /load to load it if you already downloaded it\n"
            f"    run /help for commands",
            markup=False,
            highlight=False,
        )

    async def handle_line(self, text: str) -> None:
        """Process one line of input: a slash command or implicit chat."""
        if not text.strip() or self._locked:
            return

        try:
            handled = await self.router.dispatch(text, self.io)
            if not handled:
                if self.settings.implicit_chat:
                    await self.router.dispatch_implicit(text, self.io)
                else:
                    self.io.console.print("[dim]Type a /command. Use /help for a list.[/dim]")
        except (KeyboardInterrupt, asyncio.CancelledError):
            # Ctrl-C interrupts the running command, not the console
            task = asyncio.current_task()
            if task is not None and hasattr(task, "uncancel"):
                task.uncancel()
            self.io.console.print("[dim]interrupted[/dim]")

        # Fresh context for the next line
        self.router.set_context(self.session.as_context())

    async def run_async(self) -> None:
        """Run the interactive console REPL."""
        self._print_banner()

        session: PromptSession = PromptSession(
            history=InMemoryHistory(),
            completer=ConsoleCompleter(self.router),
            complete_while_typing=False,
        )

        try:
            while self._running and not self._locked:
                try:
                    text = await session.prompt_async("❯ ")
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    break

                await self.handle_line(text)
        finally:
            await self.session.unload()

    def run(self) -> None:
        asyncio.run(self.run_async())
