"""Command router and base command for the interactive console."""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable

from .context import CommandContext
from .io import IO
from .parser import Flags, parse_line

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for all console commands.

    Commands hold no session state; everything they need arrives through
    ``run``. ``run`` may be a plain method or a coroutine.
    """

    # Subclasses must define these
    name: str = ""
    aliases: tuple[str, ...] = ()
    summary: str = ""
    usage: str = ""
    examples: list[str] = []

    @abstractmethod
    def run(
        self, args: list[str], flags: Flags, io: IO, ctx: CommandContext
    ) -> Awaitable[None] | None:
        """Execute the command."""
        ...


class CommandRouter:
    """
    Routes slash command lines to registered commands.

    The name/alias table is built once from the given commands; on a
    collision the command registered last wins. One dispatch at a time:
    nothing here guards against overlapping dispatch() calls or against
    set_context() during a dispatch.
    """

    def __init__(self, commands: list[BaseCommand], default_command: str | None = None) -> None:
        self._commands = list(commands)
        self._by_name: dict[str, BaseCommand] = {}
        for command in self._commands:
            self._by_name[command.name] = command
            for alias in command.aliases:
                self._by_name[alias] = command
        self._default_command = default_command
        self._ctx: CommandContext | None = None

    def set_context(self, ctx: CommandContext) -> None:
        """Bind the context used by subsequent dispatches."""
        self._ctx = ctx

    def get(self, name: str) -> BaseCommand | None:
        """Get a command by name or alias."""
        return self._by_name.get(name)

    def list(self) -> list[BaseCommand]:
        """All commands in registration order, without duplicates."""
        return list(dict.fromkeys(self._commands))

    def get_completions(self) -> list[str]:
        """Get all command names and aliases for tab completion."""
        return [f"/{name}" for name in self._by_name]

    async def dispatch(self, raw: str, io: IO) -> bool:
        """
        Dispatch a raw input line.

        Returns False if the line is not a slash command. Every slash line
        is consumed (True), including unknown commands and failing ones.
        """
        text = raw.strip()
        if not text.startswith("/"):
            return False

        parsed = parse_line(text[1:])
        command = self._by_name.get(parsed.command)
        if command is None:
            io.println(f"command not found: /{parsed.command}")
            io.println("type /help for a list of commands")
            return True

        await self._run(command, parsed.args, parsed.flags, io)
        return True

    async def dispatch_implicit(self, text: str, io: IO) -> bool:
        """
        Run the default command with the whole line as its only argument.

        Returns False if no default command is configured.
        """
        if self._default_command is None:
            return False
        command = self._by_name.get(self._default_command)
        if command is None:
            return False

        await self._run(command, [text], {}, io)
        return True

    async def _run(self, command: BaseCommand, args: list[str], flags: Flags, io: IO) -> None:
        ctx = self._ctx
        if ctx is None:
            logger.error(f"No context bound, refusing to run /{command.name}")
            io.println("Error: command context unavailable")
            return

        try:
            result = command.run(args, flags, io, ctx)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Command /{command.name} failed: {e}")
            io.println(f"Error: {str(e) or type(e).__name__}")
