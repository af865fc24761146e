"""Context rules and the registry that resolves them per template."""

from .registry import ContextRegistry
from .rules import ContextRule, GlobalContext, RegexContext, SearchContext

__all__ = [
    "ContextRegistry",
    "ContextRule",
    "GlobalContext",
    "SearchContext",
    "RegexContext",
]
