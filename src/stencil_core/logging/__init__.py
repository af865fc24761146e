"""Stencil Logging - Component-scoped colored logging."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    ContextLogger,
    LogConfig,
    NormalizeLogger,
    StencilLogger,
)

__all__ = [
    # Logger classes
    "StencilLogger",
    "ContextLogger",
    "NormalizeLogger",
    "LogConfig",
    # Colors
    "RESET",
    "RED",
    "YELLOW",
    "CYAN",
    "LIGHT_BLUE",
    "GREEN",
    "ORANGE",
    "MAGENTA",
]
