"""Stencil configuration loader."""

import os
import re
import typing
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from stencil_core.errors import create_error
from stencil_core.types import LogLevel, ValidationIssue, ValidationResult

from .models import EngineConfig

CONFIG_PATH_ENV = "STENCIL_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "stencil.yaml"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        StencilError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg, component="config")
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
                component="config",
            )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


_BOOL_STRINGS = {"true": True, "yes": True, "1": True, "false": False, "no": False, "0": False}


class ConfigLoader:
    """Load and validate engine configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional StencilLogger instance
        """
        self._config: EngineConfig | None = None
        self._logger = logger

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> EngineConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. STENCIL_CONFIG_PATH environment variable
        2. ./stencil.yaml
        3. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found
            overrides: Values deep-merged over the file contents

        Returns:
            Loaded EngineConfig instance

        Raises:
            StencilError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                if self._logger:
                    self._logger._log(
                        LogLevel.INFO, "config", "No config file found, using default configuration"
                    )
                return self.load_from_dict(overrides or {})
            raise create_error("CONFIG_NOT_FOUND", path=str(config_path), component="config")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
                component="config",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration file must contain a mapping",
                component="config",
            )

        data = _resolve_env_vars_recursive(data)
        if overrides:
            data = deep_merge(data, overrides)

        return self.load_from_dict(data)

    def load_defaults(self) -> EngineConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any]) -> EngineConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Loaded EngineConfig instance

        Raises:
            StencilError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
                component="config",
            )

        try:
            config = self._convert_field(EngineConfig, data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
                component="config",
            ) from e

        self._config = config

        if self._logger:
            self._logger._log(LogLevel.DEBUG, "config", "Configuration loaded successfully")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        valid_keys = {f.name for f in fields(EngineConfig)}
        for key in data:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in valid_keys:
            if section in data and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(path=section, message=f"{section} must be a dictionary")
                )

        render = data.get("render")
        if isinstance(render, dict):
            for flag in ("autoescape", "stringify"):
                if flag in render and self._as_bool(render[flag]) is None:
                    errors.append(
                        ValidationIssue(path=f"render.{flag}", message=f"{flag} must be a boolean")
                    )
            transformers = render.get("transformers", [])
            if not isinstance(transformers, list):
                errors.append(
                    ValidationIssue(
                        path="render.transformers",
                        message="transformers must be a list of import paths",
                    )
                )
            else:
                for i, ref in enumerate(transformers):
                    if not isinstance(ref, str) or not ref:
                        errors.append(
                            ValidationIssue(
                                path=f"render.transformers[{i}]",
                                message="transformer must be a non-empty import path",
                            )
                        )

        logging_section = data.get("logging")
        if isinstance(logging_section, dict) and "truncate_at" in logging_section:
            value = logging_section["truncate_at"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(
                    ValidationIssue(
                        path="logging.truncate_at",
                        message="truncate_at must be a positive integer",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> EngineConfig:
        """Get current configuration.

        Raises:
            StencilError: If configuration not loaded
        """
        if self._config is None:
            raise create_error(
                "CONFIG_INVALID", detail="Configuration not loaded", component="config"
            )
        return self._config

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)
        return Path(DEFAULT_CONFIG_FILE)

    @staticmethod
    def _as_bool(value: Any) -> bool | None:
        # Env var interpolation leaves strings behind, e.g. "${AUTOESCAPE:-true}"
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _BOOL_STRINGS.get(value.strip().lower())
        return None

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        if field_type is bool:
            converted = self._as_bool(value)
            return value if converted is None else converted

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                hints = typing.get_type_hints(field_type)
                kwargs = {
                    f.name: self._convert_field(hints[f.name], value[f.name])
                    for f in fields(field_type)
                    if f.name in value
                }
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            if isinstance(value, str):
                return field_type(value)
            return value

        return value


def load_config(path: str | Path | None = None, logger: Any = None) -> EngineConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file
        logger: Optional StencilLogger instance

    Returns:
        Loaded EngineConfig instance
    """
    return ConfigLoader(logger).load(path)
