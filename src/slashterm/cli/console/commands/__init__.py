"""Slash commands available in the console."""

from ..command_registry import CommandRouter
from ..context import CommandContext
from .chat import ChatCommand, NoThinkCommand, ThinkCommand
from .help import ClearCommand, ExitCommand, HelpCommand
from .model import ClearCacheCommand, DownloadCommand, LoadCommand, UnloadCommand
from .status import StatusCommand


def create_slash_system(ctx: CommandContext | None = None) -> CommandRouter:
    """Build the router with the full command set, optionally bound to ctx.

    Lines that are not slash commands go to /chat via dispatch_implicit().
    """
    router: CommandRouter | None = None

    def all_commands():
        return router.list() if router is not None else []

    router = CommandRouter(
        [
            HelpCommand(all_commands),
            StatusCommand(),
            DownloadCommand(),
            LoadCommand(),
            UnloadCommand(),
            ClearCacheCommand(),
            ClearCommand(),
            ExitCommand(),
            ThinkCommand(),
            NoThinkCommand(),
            ChatCommand(),
        ],
        default_command="chat",
    )
    if ctx is not None:
        router.set_context(ctx)
    return router
