"""Shared types for stencil.

Import from here rather than submodules:
    from stencil_core.types import LogLevel, MatchKind
"""

from .enums import LogFormat, LogLevel, MatchKind
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "MatchKind",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
