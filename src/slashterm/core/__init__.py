"""Model runtime and session state for slashterm."""

from .runtime import ModelNotDownloadedError, ModelNotLoadedError, ModelRuntime, ModelRuntimeError
from .session import Session

__all__ = [
    "ModelRuntime",
    "ModelRuntimeError",
    "ModelNotDownloadedError",
    "ModelNotLoadedError",
    "Session",
]
