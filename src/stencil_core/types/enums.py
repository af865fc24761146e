"""Shared enumerations for stencil."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class MatchKind(str, Enum):
    """How a context rule decides whether it applies to a template."""

    GLOBAL = "global"
    SEARCH = "search"  # Case-sensitive substring of the template name
    REGEX = "regex"
