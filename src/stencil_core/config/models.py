"""Stencil configuration data models."""

from dataclasses import dataclass, field
from typing import Any

from stencil_core.types import LogFormat, LogLevel


@dataclass
class RenderConfig:
    """Options applied when preparing data for a render pass."""

    autoescape: bool = True
    stringify: bool = False
    transformers: list[str] = field(default_factory=list)  # Import paths


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    engine: bool = True
    context: bool = True
    normalize: bool = True
    config: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_data: bool = True
    truncate_at: int = 200
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)


@dataclass
class EngineConfig:
    """Complete engine configuration."""

    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def options(self) -> dict[str, Any]:
        """Flat option names used by DataEngine.option()."""
        return {
            "autoescape": self.render.autoescape,
            "stringify": self.render.stringify,
            "transformers": list(self.render.transformers),
            "log_level": self.logging.level.value,
            "log_format": self.logging.format.value,
        }
