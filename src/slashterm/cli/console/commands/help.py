"""Help, clear and exit commands."""

from collections.abc import Callable

from ..command_registry import BaseCommand
from ..context import CommandContext
from ..io import IO
from ..parser import Flags


def _alias_suffix(command: BaseCommand, sep: str) -> str:
    if not command.aliases:
        return ""
    return f" ({sep.join(command.aliases)})"


class HelpCommand(BaseCommand):
    name = "help"
    aliases = ("h", "?")
    summary = "Show available commands or help for a specific command"
    usage = "/help [command]"
    examples = ["/help", "/help status"]

    def __init__(self, commands: Callable[[], list[BaseCommand]]) -> None:
        self._commands = commands

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        if args:
            self._show_command_help(args[0], io)
        else:
            self._show_all(io)

    def _find(self, name: str) -> BaseCommand | None:
        for command in self._commands():
            if command.name == name or name in command.aliases:
                return command
        return None

    def _show_command_help(self, name: str, io: IO) -> None:
        command = self._find(name)
        if command is None:
            io.println(f"No help for: {name}")
            return

        io.println(f"{command.name}{_alias_suffix(command, ', ')}")
        if command.summary:
            io.println(command.summary)
        if command.usage:
            io.println(f"usage: {command.usage}")
        for example in command.examples:
            io.println(f"  {example}")

    def _show_all(self, io: IO) -> None:
        io.println("Available commands:")
        for command in self._commands():
            io.println(f"/{command.name}{_alias_suffix(command, ',')}  - {command.summary}")


class ClearCommand(BaseCommand):
    name = "clear"
    aliases = ("cls",)
    summary = "Clear the terminal"
    usage = "/clear"
    examples = ["/clear"]

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        clear_screen = getattr(io, "clear_screen", None)
        if clear_screen is not None:
            clear_screen()


class ExitCommand(BaseCommand):
    name = "exit"
    summary = "End the session"
    usage = "/exit"
    examples = ["/exit"]

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        io.println("logout\n\n[Process completed]")
        lock_input = getattr(io, "lock_input", None)
        if lock_input is not None:
            lock_input()
