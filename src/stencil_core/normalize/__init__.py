"""Value normalization and HTML entity codec for template data."""

from .codec import escape, escape_text, unescape, unescape_text
from .normalizer import Normalizer, normalize, stringify_scalar
from .transformers import Transformer, build_chain, resolve_transformer

__all__ = [
    "Normalizer",
    "normalize",
    "stringify_scalar",
    "escape",
    "unescape",
    "escape_text",
    "unescape_text",
    "Transformer",
    "build_chain",
    "resolve_transformer",
]
