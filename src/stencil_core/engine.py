"""Data engine: context rules and value normalization behind one object."""

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, TextIO

from stencil_core.config import ConfigLoader, EngineConfig, LoggingConfig
from stencil_core.context import (
    ContextRegistry,
    ContextRule,
    GlobalContext,
    RegexContext,
    SearchContext,
)
from stencil_core.errors import create_error
from stencil_core.logging import LogConfig, StencilLogger
from stencil_core.normalize import Normalizer, escape, normalize, unescape


class DataEngine:
    """Prepare the data handed to templates.

    Owns one ContextRegistry for its whole lifetime, so rules registered on
    an engine never leak into another one.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        logger: StencilLogger | None = None,
    ):
        """Initialize engine.

        Args:
            config: Engine configuration (defaults to EngineConfig())
            logger: Optional logger

        Raises:
            StencilError(INVALID_TRANSFORMER): If a configured transformer is unusable
        """
        self.config = config or EngineConfig()
        self._logger = logger
        self.registry = ContextRegistry(logger)
        self._normalizer = Normalizer(
            escape=self.config.render.autoescape,
            transformers=self.config.render.transformers,
            stringify=self.config.render.stringify,
            logger=logger,
        )

    def add_context(self, data: Mapping[str, Any], needle: str, is_regex: bool = False) -> None:
        """Add data for templates whose name contains or matches needle.

        Args:
            data: Template variables
            needle: Substring of the template name, or a regex if is_regex
            is_regex: Treat needle as a regular expression
        """
        rule = RegexContext(needle, data) if is_regex else SearchContext(needle, data)
        self.registry.add(rule)

    def add_global_context(self, data: Mapping[str, Any]) -> None:
        """Add data to all templates."""
        self.registry.add(GlobalContext(data))

    def add_context_using(self, rule: ContextRule) -> None:
        """Add a custom context rule."""
        self.registry.add(rule)

    def context_for(self, template: str) -> dict[str, Any]:
        """Merged context data for a template."""
        return self.registry.resolve(template)

    def prepare(self, template: str, data: Mapping[str, Any] | None = None) -> Any:
        """Build the data for one render pass of a template.

        Context data is merged first, then the caller's data on top of it.
        The result is normalized with the engine's render options.

        Args:
            template: Template identifier
            data: Caller data for this render

        Returns:
            Normalized dict of template variables
        """
        if data is not None and not isinstance(data, Mapping):
            raise create_error(
                "INVALID_ARGUMENT",
                argument="Render data",
                expected="a mapping",
                actual_type=type(data).__name__,
                template=template if isinstance(template, str) else None,
                component="engine",
            )
        merged = self.context_for(template)
        if data:
            merged.update(data)
        return self._normalizer.normalize(merged)

    def entities(self, data: Any) -> Any:
        """HTML-encode strings in data, recursively."""
        return escape(data)

    def decode(self, data: Any) -> Any:
        """Decode HTML entities in data, recursively."""
        return unescape(data)

    def arraize(
        self,
        data: Any = None,
        escape: bool = False,
        transformers: Sequence[Any] = (),
        stringify: bool = False,
    ) -> Any:
        """Normalize data into dicts, lists and scalars.

        Args:
            data: Value to convert (None converts to an empty dict)
            escape: HTML-escape strings
            transformers: Transformer references tried before built-in strategies
            stringify: Convert scalars to strings

        Returns:
            Normalized data
        """
        if data is None:
            data = {}
        return normalize(data, escape, transformers, stringify, self._logger)

    def option(self, name: str | None = None) -> Any:
        """Return all options, or the option called name.

        Raises:
            StencilError(INVALID_ARGUMENT): If name is not a string
            StencilError(UNKNOWN_OPTION): If no option has that name
        """
        options = self.config.options()
        if name is None:
            return options
        if not isinstance(name, str):
            raise create_error(
                "INVALID_ARGUMENT",
                argument="Option name",
                expected="a string",
                actual_type=type(name).__name__,
                component="engine",
            )
        if name not in options:
            raise create_error(
                "UNKNOWN_OPTION",
                option=name,
                available=", ".join(options),
                component="engine",
            )
        return options[name]


def build_logger(config: LoggingConfig, output: TextIO = sys.stdout) -> StencilLogger:
    """Create a logger from the logging section of the configuration."""
    log_config = LogConfig(
        level=config.level,
        format=config.format,
        show_data=config.show_data,
        truncate_at=config.truncate_at,
        components={
            "engine": config.components.engine,
            "context": config.components.context,
            "normalize": config.components.normalize,
            "config": config.components.config,
        },
        output=output,
    )
    return StencilLogger(log_config)


def create_engine(
    config_path: str | Path | None = None,
    options: dict[str, Any] | None = None,
    log_output: TextIO = sys.stdout,
) -> DataEngine:
    """Load configuration, set up logging and build an engine.

    Args:
        config_path: Optional path to a YAML config file
        options: Values deep-merged over the file, e.g. {"render": {"autoescape": False}}
        log_output: Stream for log lines

    Returns:
        Configured DataEngine
    """
    config = ConfigLoader().load(config_path, overrides=options)
    logger = build_logger(config.logging, log_output)
    return DataEngine(config, logger)
