"""Stencil Core - data preparation for template rendering.

Selects the context data that applies to a template and normalizes
arbitrary values into render-ready trees.
"""

from stencil_core.context import (
    ContextRegistry,
    ContextRule,
    GlobalContext,
    RegexContext,
    SearchContext,
)
from stencil_core.engine import DataEngine, create_engine
from stencil_core.errors import StencilError
from stencil_core.normalize import Normalizer, escape, normalize, unescape

__version__ = "0.1.0"

__all__ = [
    "DataEngine",
    "create_engine",
    "ContextRegistry",
    "ContextRule",
    "GlobalContext",
    "SearchContext",
    "RegexContext",
    "Normalizer",
    "normalize",
    "escape",
    "unescape",
    "StencilError",
]
