"""Stencil Logger - Component-scoped colored logging for data preparation."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from stencil_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from stencil_core.types import LogFormat, LogLevel


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_data: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "engine": True,
                "context": True,
                "normalize": True,
                "config": True,
            }


class StencilLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def context(self) -> "ContextLogger":
        """Get a logger for context rule registration and resolution."""
        return ContextLogger(self)

    def normalize(self) -> "NormalizeLogger":
        """Get a logger for value normalization events."""
        return NormalizeLogger(self)

    def configure(self, config: LogConfig) -> None:
        """Update configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (engine, context, normalize, config)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "engine": MAGENTA,
            "context": GREEN,
            "normalize": ORANGE,
            "config": CYAN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_data:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class ContextLogger:
    """Logger for context rule events."""

    def __init__(self, parent: StencilLogger):
        """Initialize context logger.

        Args:
            parent: Parent StencilLogger instance
        """
        self.parent = parent

    def rule_added(self, kind: str, needle: str | None, keys: list[str], position: int) -> None:
        """Log a rule appended to the registry.

        Args:
            kind: Rule kind (global, search, regex or a custom class name)
            needle: Rule needle, None for global rules
            keys: Payload keys the rule contributes
            position: Zero-based registration position
        """
        context = {
            "event": "rule_added",
            "kind": kind,
            "needle": needle,
            "keys": keys,
            "position": position,
        }

        message = f"Context rule #{position} added ({kind}"
        if needle is not None:
            message += f": {needle!r}"
        message += ")"

        self.parent._log(LogLevel.DEBUG, "context", message, context)

    def resolved(self, template: str, matched: int, total: int, keys: list[str]) -> None:
        """Log the outcome of resolving context for a template.

        Args:
            template: Template identifier
            matched: Number of matching rules
            total: Number of registered rules
            keys: Keys of the merged payload
        """
        context = {
            "event": "context_resolved",
            "template": template,
            "matched": matched,
            "total": total,
            "keys": keys,
        }

        message = f"Context for '{template}' resolved ({matched}/{total} rules matched)"

        self.parent._log(LogLevel.DEBUG, "context", message, context)


class NormalizeLogger:
    """Logger for object conversion events during normalization."""

    def __init__(self, parent: StencilLogger):
        """Initialize normalize logger.

        Args:
            parent: Parent StencilLogger instance
        """
        self.parent = parent

    def strategy_failed(self, strategy: str, value_type: str, error: Exception) -> None:
        """Log a conversion strategy that raised and was skipped.

        Args:
            strategy: Strategy name (e.g. "transformer:MyTransformer", "to_array")
            value_type: Type name of the value being converted
            error: Exception raised by the strategy
        """
        context = {
            "event": "strategy_failed",
            "strategy": strategy,
            "value_type": value_type,
            "error": str(error),
            "error_type": type(error).__name__,
        }

        message = f"Strategy '{strategy}' failed for {value_type}: {error}"

        self.parent._log(LogLevel.DEBUG, "normalize", message, context)

    def passthrough(self, value_type: str) -> None:
        """Log an object no strategy could convert.

        Args:
            value_type: Type name of the unconverted value
        """
        context = {
            "event": "passthrough",
            "value_type": value_type,
        }

        message = f"No conversion for {value_type}, passing through unchanged"

        self.parent._log(LogLevel.DEBUG, "normalize", message, context)
