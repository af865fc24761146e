"""HTML entity codec applied recursively to strings in nested data."""

import html
from typing import Any

from .walk import NOT_A_CONTAINER, TEXT_TYPES, CycleGuard, decode_text, rebuild


def escape_text(text: str | bytes | bytearray) -> str:
    """HTML-encode a single string.

    Quotes, ampersands and angle brackets are encoded. Existing entities
    are encoded again, so ``unescape_text(escape_text(s)) == s``.
    """
    return html.escape(decode_text(text), quote=True)


def unescape_text(text: str | bytes | bytearray) -> str:
    """Decode HTML entities in a single string."""
    return html.unescape(decode_text(text))


def _apply(value: Any, transform: Any, guard: CycleGuard) -> Any:
    if isinstance(value, TEXT_TYPES):
        return transform(value)

    with guard.visit(value):
        rebuilt = rebuild(value, lambda item: _apply(item, transform, guard))
    return value if rebuilt is NOT_A_CONTAINER else rebuilt


def escape(value: Any) -> Any:
    """HTML-encode strings, recursing into containers and traversables.

    Containers are rebuilt (tuples and iterables become lists, mappings
    become dicts); values that are neither text nor containers are
    returned as-is.

    Args:
        value: String or nested data

    Returns:
        Escaped copy of value
    """
    return _apply(value, escape_text, CycleGuard())


def unescape(value: Any) -> Any:
    """Decode HTML entities in strings, recursing like ``escape``.

    Args:
        value: String or nested data

    Returns:
        Decoded copy of value
    """
    return _apply(value, unescape_text, CycleGuard())
