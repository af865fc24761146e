"""Object-to-container conversion strategies.

An opaque object is converted by the first strategy that yields a
container, in this order:

1. configured transformers, in the order given
2. a ``to_array()`` / ``toArray()`` method
3. an ``as_array()`` / ``asArray()`` method
4. a JSON round trip (pydantic models, objects exposing ``__json__()``)
5. a snapshot of the object's public fields
"""

import importlib
import json
from collections.abc import Callable, Sequence
from dataclasses import fields, is_dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from stencil_core.errors import create_error

from .walk import is_container

Strategy = tuple[str, Callable[[Any], Any]]

# Returned by convert_object() when no strategy produced a container
NOT_CONVERTED = object()


@runtime_checkable
class Transformer(Protocol):
    """Converts an object into a mapping or a list."""

    def transform(self, value: Any) -> Any:
        """Return a container for value."""
        ...


def import_transformer(path: str) -> Any:
    """Import a transformer from ``package.module.Name`` or ``package.module:Name``.

    Raises:
        StencilError(INVALID_TRANSFORMER): If the path cannot be imported
    """
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise create_error(
            "INVALID_TRANSFORMER",
            transformer=path,
            reason="expected an import path like 'package.module.Name'",
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise create_error(
            "INVALID_TRANSFORMER",
            transformer=path,
            reason=f"cannot import module {module_name!r}: {e}",
        ) from e

    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise create_error(
            "INVALID_TRANSFORMER",
            transformer=path,
            reason=f"module {module_name!r} has no attribute {attr!r}",
        ) from e


def resolve_transformer(ref: Any) -> Strategy:
    """Turn a transformer reference into a named conversion strategy.

    Args:
        ref: Import path, class (instantiated without arguments), instance
            with a ``transform`` method, or plain callable

    Returns:
        (name, function) pair

    Raises:
        StencilError(INVALID_TRANSFORMER): If ref cannot be used
    """
    if isinstance(ref, str):
        ref = import_transformer(ref)

    if isinstance(ref, type):
        try:
            instance = ref()
        except Exception as e:
            raise create_error(
                "INVALID_TRANSFORMER",
                transformer=ref.__name__,
                reason=f"cannot instantiate: {e}",
            ) from e
        if not isinstance(instance, Transformer):
            raise create_error(
                "INVALID_TRANSFORMER",
                transformer=ref.__name__,
                reason="class has no transform() method",
            )
        return f"transformer:{ref.__name__}", instance.transform

    if isinstance(ref, Transformer):
        return f"transformer:{type(ref).__name__}", ref.transform

    if callable(ref):
        return f"transformer:{getattr(ref, '__name__', type(ref).__name__)}", ref

    raise create_error(
        "INVALID_TRANSFORMER",
        transformer=ref,
        reason="not callable and has no transform() method",
    )


def _method(*names: str) -> Callable[[Any], Any]:
    def call(value: Any) -> Any:
        for name in names:
            method = getattr(value, name, None)
            if callable(method):
                return method()
        return None

    return call


def json_round_trip(value: Any) -> Any:
    """Serialize then parse a JSON-capable object, None if it is not one."""
    if isinstance(value, BaseModel):
        return json.loads(value.model_dump_json())
    hook = getattr(value, "__json__", None)
    if callable(hook):
        return json.loads(json.dumps(hook()))
    return None


def public_fields(value: Any) -> Any:
    """Snapshot an object's public attributes, None if it has none to read."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in fields(value) if not f.name.startswith("_")}

    try:
        attributes = vars(value)
    except TypeError:
        attributes = None
    if attributes is not None:
        return {k: v for k, v in attributes.items() if not k.startswith("_")}

    slots = getattr(type(value), "__slots__", None)
    if slots is None:
        return None
    if isinstance(slots, str):
        slots = [slots]
    return {
        name: getattr(value, name)
        for name in slots
        if not name.startswith("_") and hasattr(value, name)
    }


BUILTIN_STRATEGIES: list[Strategy] = [
    ("to_array", _method("to_array", "toArray")),
    ("as_array", _method("as_array", "asArray")),
    ("json", json_round_trip),
    ("fields", public_fields),
]


def build_chain(transformers: Sequence[Any] = ()) -> list[Strategy]:
    """Build the ranked strategy list: configured transformers first."""
    return [resolve_transformer(ref) for ref in transformers] + BUILTIN_STRATEGIES


def convert_object(value: Any, chain: list[Strategy], logger: Any = None) -> Any:
    """Convert an opaque object with the first strategy yielding a container.

    Strategies that raise or return a non-container are skipped. Never raises.

    Args:
        value: Object to convert
        chain: Ranked strategies from build_chain()
        logger: Optional NormalizeLogger

    Returns:
        The container, or NOT_CONVERTED
    """
    for name, strategy in chain:
        try:
            result = strategy(value)
        except Exception as e:
            if logger:
                logger.strategy_failed(name, type(value).__name__, e)
            continue
        if is_container(result):
            return result

    if logger:
        logger.passthrough(type(value).__name__)
    return NOT_CONVERTED
