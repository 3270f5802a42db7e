"""Session status command."""

import json

from ..command_registry import BaseCommand
from ..context import CommandContext
from ..io import IO, print_lines
from ..parser import Flags


def _status_label(downloaded: bool, loaded: bool) -> str:
    if not downloaded:
        return "offline"
    return "active" if loaded else "downloaded"


def format_mb(size: float) -> str:
    """Format a megabyte count without a trailing .0."""
    return f"{size:g}MB"


class StatusCommand(BaseCommand):
    name = "status"
    summary = "Show model and session status"
    usage = "/status [--json] [--quiet|-q]"
    examples = ["/status", "/status --json"]

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        state = ctx.get_state()
        payload = {
            "model": state.model_name or "not installed",
            "sizeMB": state.model_size_mb,
            "downloaded": state.downloaded,
            "loaded": state.loaded,
            "chats": state.chats,
            "status": _status_label(state.downloaded, state.loaded),
        }

        if flags.get("json"):
            io.println(json.dumps(payload, indent=2, ensure_ascii=False))
            return

        if flags.get("quiet", flags.get("q")):
            return

        size = format_mb(payload["sizeMB"]) if payload["sizeMB"] else "-"
        print_lines(
            io,
            [
                f"model:        {payload['model']}",
                f"size:         {size}",
                f"status:       {payload['status']}{' ✓' if payload['loaded'] else ''}",
                f"memory:       {'loaded' if payload['loaded'] else '-'}",
                f"chats:        {payload['chats']}",
                "privacy:      local / offline",
            ],
        )
