"""Session context handed to console commands."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

ProgressCallback = Callable[[float, float], None]  # (loaded_mb, total_mb)
StreamCallback = Callable[[str], None]  # cumulative generated text


@dataclass(frozen=True)
class SessionState:
    """Point-in-time view of the session. Do not keep one across an await."""

    downloaded: bool = False
    loaded: bool = False
    chats: int = 0
    model_name: str | None = None
    model_size_mb: float | None = None
    thinking: bool = False


class SessionActions(Protocol):
    """Operations commands may invoke on the model runtime."""

    async def download(self, on_progress: ProgressCallback | None = None) -> None: ...

    async def load(self) -> None: ...

    async def unload(self) -> None: ...

    async def chat(self, prompt: str, on_stream: StreamCallback | None = None) -> str: ...

    async def clear_cache(self) -> None: ...

    def set_thinking(self, enabled: bool) -> None: ...


@dataclass
class CommandContext:
    """Externally owned state accessor plus action set."""

    get_state: Callable[[], SessionState]
    actions: SessionActions
