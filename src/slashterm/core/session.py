"""Host-owned session state and the actions exposed to commands."""

import logging

from slashterm.cli.console.context import (
    CommandContext,
    ProgressCallback,
    SessionState,
    StreamCallback,
)
from slashterm.config.settings import Settings

from .runtime import ModelRuntime

logger = logging.getLogger(__name__)


class Session:
    """
    State of one console session plus the action set commands call.

    Lifecycle: offline -> downloaded -> loaded <-> downloaded. Only the
    session mutates this state; commands see it through snapshots.
    """

    def __init__(self, settings: Settings, runtime: ModelRuntime) -> None:
        self.settings = settings
        self.runtime = runtime
        self.downloaded = runtime.is_downloaded()
        self.loaded = False
        self.chats = 0
        self.thinking = settings.thinking
        self.conversation: list[dict[str, str]] = [
            {"role": "system", "content": settings.system_prompt},
        ]

    def snapshot(self) -> SessionState:
        return SessionState(
            downloaded=self.downloaded,
            loaded=self.loaded,
            chats=self.chats,
            model_name=self.settings.model_name,
            model_size_mb=self.settings.model_size_mb,
            thinking=self.thinking,
        )

    def as_context(self) -> CommandContext:
        return CommandContext(get_state=self.snapshot, actions=self)

    async def download(self, on_progress: ProgressCallback | None = None) -> None:
        await self.runtime.download(on_progress)
        self.downloaded = True

    async def load(self) -> None:
        await self.runtime.load()
        self.loaded = True
        self.downloaded = True

    async def unload(self) -> None:
        await self.runtime.unload()
        self.loaded = False

    async def chat(self, prompt: str, on_stream: StreamCallback | None = None) -> str:
        """Send a user turn; the turn is dropped again if the model fails."""
        self.conversation.append({"role": "user", "content": prompt})
        try:
            result = await self.runtime.chat(self.conversation, on_stream)
        except BaseException:
            self.conversation.pop()
            raise

        self.conversation.append({"role": "assistant", "content": result})
        self.chats += 1
        logger.debug(f"Chat #{self.chats} completed ({len(result)} chars)")
        return result

    async def clear_cache(self) -> None:
        await self.runtime.clear_cache()
        self.loaded = False
        self.downloaded = False

    def set_thinking(self, enabled: bool) -> None:
        self.thinking = enabled
