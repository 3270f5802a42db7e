"""Model lifecycle commands: download, load, unload, clear-cache."""

import math

from ..command_registry import BaseCommand
from ..context import CommandContext
from ..io import IO
from ..parser import Flags
from .status import format_mb

DEFAULT_MODEL_SIZE_MB = 639
DEFAULT_MODEL_NAME = "starter.gguf"
BAR_WIDTH = 20


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def progress_bar(pct: float) -> str:
    """Render a fixed-width progress bar, e.g. ``[██████░░░░...] 30%``.

    Halves round up, so 12.5% fills 3 of 20 cells and reads 13%.
    """
    filled = max(0, min(BAR_WIDTH, _round_half_up(pct / 100 * BAR_WIDTH)))
    return f"[{'█' * filled}{'░' * (BAR_WIDTH - filled)}] {_round_half_up(pct)}%"


class DownloadCommand(BaseCommand):
    name = "download"
    summary = "Download the starter model"
    usage = "/download"
    examples = ["/download"]

    live_id = "download"

    async def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        state = ctx.get_state()
        total = state.model_size_mb or DEFAULT_MODEL_SIZE_MB
        model_name = state.model_name or DEFAULT_MODEL_NAME
        banner = f"→ fetching model: {model_name} ({format_mb(total)})"

        start_live = getattr(io, "start_live", None)
        update_live = getattr(io, "update_live", None)
        end_live = getattr(io, "end_live", None)

        first = f"{banner}\n  {progress_bar(0)}"
        if start_live is not None:
            start_live(self.live_id, first)
        else:
            io.println(first)

        def on_progress(loaded_mb: float, total_mb: float) -> None:
            pct = min(100, loaded_mb / (total_mb or total) * 100)
            message = f"{banner}\n  {progress_bar(pct)}"
            if update_live is not None:
                update_live(self.live_id, message)
            else:
                io.println(message)

        try:
            await ctx.actions.download(on_progress)
        finally:
            if end_live is not None:
                end_live(self.live_id)

        io.println("install complete.\nrun /load to activate the model.")


class LoadCommand(BaseCommand):
    name = "load"
    summary = "Load the model into memory"
    usage = "/load"
    examples = ["/load"]

    async def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        state = ctx.get_state()
        if not state.downloaded:
            io.println("zsh: no llm downloaded\n\t run /download first")
            return
        if state.loaded:
            io.println("model already active.")
            return

        io.println(f"loading {state.model_name or 'model'} ...")
        await ctx.actions.load()
        io.println(
            "✓ model loaded\n"
            "threads: 8\n"
            "context: 4096 tokens\n"
            "latency: ~11ms/token\n"
            " tip: type a message to start chatting"
        )


class UnloadCommand(BaseCommand):
    name = "unload"
    summary = "Unload the model from memory"
    usage = "/unload"
    examples = ["/unload"]

    async def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        if not ctx.get_state().loaded:
            io.println("model already unloaded.")
            return

        await ctx.actions.unload()
        io.println("model unloaded. (run /load to activate again)")


class ClearCacheCommand(BaseCommand):
    name = "clear-cache"
    summary = "Delete all cached models"
    usage = "/clear-cache"
    examples = ["/clear-cache"]

    async def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        state = ctx.get_state()
        if not state.downloaded and not state.loaded:
            io.println("no cached models to clear.")
            return

        if state.loaded:
            io.println("unloading model and clearing cache...")
        else:
            io.println("clearing cached models...")
        await ctx.actions.clear_cache()
        io.println("model cache cleared.")
