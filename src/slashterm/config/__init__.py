"""Configuration module for slashterm."""

from .paths import SlashtermPaths
from .settings import Settings

__all__ = [
    "Settings",
    "SlashtermPaths",
]
