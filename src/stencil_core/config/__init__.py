"""Stencil configuration - option models and YAML loading."""

from .loader import ConfigLoader, deep_merge, load_config, resolve_env_vars
from .models import EngineConfig, LoggingComponentsConfig, LoggingConfig, RenderConfig

__all__ = [
    # Config models
    "EngineConfig",
    "RenderConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    # Loader
    "ConfigLoader",
    "load_config",
    "deep_merge",
    "resolve_env_vars",
]
