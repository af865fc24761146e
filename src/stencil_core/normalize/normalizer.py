"""Normalize arbitrary values into render-ready data trees."""

from collections.abc import Sequence
from enum import Enum
from numbers import Number
from typing import Any

from .codec import escape_text
from .transformers import NOT_CONVERTED, build_chain, convert_object
from .walk import NOT_A_CONTAINER, TEXT_TYPES, CycleGuard, decode_text, rebuild


def stringify_scalar(value: Any) -> str:
    """Text form of a scalar: "true"/"false" for booleans, "" for None."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Normalizer:
    """Recursively convert values into a tree of dicts, lists and scalars.

    Supports:
    - Strings and bytes (optionally HTML-escaped)
    - Mappings, sequences and any other iterable (rebuilt, never mutated)
    - Opaque objects, via configured transformers then built-in strategies
    - Scalars (optionally converted to strings)

    Objects no strategy can convert are returned unchanged.
    """

    def __init__(
        self,
        escape: bool = False,
        transformers: Sequence[Any] = (),
        stringify: bool = False,
        logger: Any = None,
    ):
        """Initialize normalizer.

        Args:
            escape: HTML-escape every string in the output
            transformers: Transformer references tried before built-in strategies
            stringify: Convert numbers, booleans and None to strings
            logger: Optional StencilLogger instance

        Raises:
            StencilError(INVALID_TRANSFORMER): If a transformer reference is unusable
        """
        self.escape = escape
        self.stringify = stringify
        self._chain = build_chain(transformers)
        self._logger = logger.normalize() if logger else None

    def normalize(self, value: Any) -> Any:
        """Normalize a value.

        Args:
            value: Any value

        Returns:
            Canonical tree for value

        Raises:
            StencilError(CYCLIC_VALUE): If value contains itself
        """
        return self._node(value, CycleGuard())

    def _text(self, value: str | bytes | bytearray) -> str:
        return escape_text(value) if self.escape else decode_text(value)

    def _node(self, value: Any, guard: CycleGuard) -> Any:
        if isinstance(value, TEXT_TYPES):
            return self._text(value)

        if value is None or isinstance(value, Number):
            return self._text(stringify_scalar(value)) if self.stringify else value

        if isinstance(value, Enum):
            return self._node(value.value, guard)

        with guard.visit(value):
            rebuilt = rebuild(value, lambda item: self._node(item, guard))
            if rebuilt is not NOT_A_CONTAINER:
                return rebuilt

            converted = convert_object(value, self._chain, self._logger)
            if converted is NOT_CONVERTED:
                return value
            return rebuild(converted, lambda item: self._node(item, guard))


def normalize(
    value: Any,
    escape: bool = False,
    transformers: Sequence[Any] = (),
    stringify: bool = False,
    logger: Any = None,
) -> Any:
    """Normalize a value into a tree of dicts, lists and scalars.

    Args:
        value: Any value
        escape: HTML-escape every string in the output
        transformers: Transformer references tried before built-in strategies
        stringify: Convert numbers, booleans and None to strings
        logger: Optional StencilLogger instance

    Returns:
        Canonical tree for value
    """
    return Normalizer(escape, transformers, stringify, logger).normalize(value)
