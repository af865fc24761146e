"""Container rebuilding shared by the text codec and the normalizer."""

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from stencil_core.errors import create_error

TEXT_TYPES = (str, bytes, bytearray)

# Returned by rebuild() for values that are neither containers nor traversables
NOT_A_CONTAINER = object()


def decode_text(value: str | bytes | bytearray) -> str:
    """Return text, decoding bytes as UTF-8 with invalid sequences replaced."""
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def is_container(value: Any) -> bool:
    """Check if value is a mapping or a non-text sequence."""
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, TEXT_TYPES)


def _is_canonical_key(key: Any) -> bool:
    # bool is an int subclass but not a canonical key
    return isinstance(key, str) or (isinstance(key, int) and not isinstance(key, bool))


def _rebuild_mapping(value: Mapping, convert: Callable[[Any], Any]) -> dict[str | int, Any]:
    pairs = list(value.items())
    taken = {key for key, _ in pairs if _is_canonical_key(key)}
    result: dict[str | int, Any] = {}
    for position, (key, item) in enumerate(pairs, start=1):
        if not _is_canonical_key(key):
            # Next free integer at or after the position, never an existing key
            key = position
            while key in taken:
                key += 1
            taken.add(key)
        result[key] = convert(item)
    return result


def rebuild(value: Any, convert: Callable[[Any], Any]) -> Any:
    """Rebuild a container or traversable with every element converted.

    - Mappings become dicts. String and integer keys are kept; any other key
      is replaced by the element's 1-based position in the mapping, moved
      up to the next free integer when that position is already a key.
    - Lists, tuples and other non-text sequences become lists.
    - Iterables exposing ``items()`` yield key/value pairs and become
      dicts. String keys are kept; every other key is renumbered from 1,
      counting only the renumbered keys. Non-iterable objects are never
      traversed, even when they have an ``items()`` method.
    - Other iterables are consumed once and become lists.

    Args:
        value: Value to rebuild
        convert: Called on every element value

    Returns:
        The rebuilt container, or NOT_A_CONTAINER if value is not one
    """
    if isinstance(value, TEXT_TYPES):
        return NOT_A_CONTAINER

    if isinstance(value, Mapping):
        return _rebuild_mapping(value, convert)

    if isinstance(value, Sequence):
        return [convert(item) for item in value]

    # pydantic models iterate over (field, value) tuples; they are records, not collections
    if isinstance(value, BaseModel) or not isinstance(value, Iterable):
        return NOT_A_CONTAINER

    if callable(getattr(value, "items", None)):
        result: dict[str | int, Any] = {}
        counter = 0
        for key, item in value.items():
            if not isinstance(key, str):
                counter += 1
                key = counter
            result[key] = convert(item)
        return result

    return [convert(item) for item in value]


class CycleGuard:
    """Track values on the current recursion path to reject cyclic input."""

    def __init__(self) -> None:
        self._active: set[int] = set()

    @contextmanager
    def visit(self, value: Any) -> Iterator[None]:
        """Mark value as being rebuilt for the duration of the block.

        Raises:
            StencilError(CYCLIC_VALUE): If value is already on the path
        """
        key = id(value)
        if key in self._active:
            raise create_error(
                "CYCLIC_VALUE",
                value_type=type(value).__name__,
                component="normalize",
            )
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)
