"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, StencilError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Register or replace an error template.

        Args:
            template: Template to register under its code
        """
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: StencilError | None = None,
    ) -> StencilError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            StencilError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return StencilError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            retryable=template.default_retryable,
            template=context.get("template"),
            component=context.get("component"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # VALIDATION Errors
        self._templates["INVALID_RULE"] = ErrorTemplate(
            code="INVALID_RULE",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid context rule: {reason}",
            suggestion_template=(
                "Pass a non-empty string needle; regex needles must compile with re.compile()"
            ),
        )

        self._templates["INVALID_PAYLOAD"] = ErrorTemplate(
            code="INVALID_PAYLOAD",
            category=ErrorCategory.VALIDATION,
            message_template="Context data must be a mapping, got {payload_type}",
            suggestion_template="Pass a dict (or any Mapping) of template variables",
        )

        self._templates["INVALID_ARGUMENT"] = ErrorTemplate(
            code="INVALID_ARGUMENT",
            category=ErrorCategory.VALIDATION,
            message_template="{argument} must be {expected}, got {actual_type}",
        )

        self._templates["INVALID_TRANSFORMER"] = ErrorTemplate(
            code="INVALID_TRANSFORMER",
            category=ErrorCategory.VALIDATION,
            message_template="Cannot use transformer {transformer!r}",
            detail_template="{reason}",
            suggestion_template=(
                "Use a class, an instance with a transform() method, a callable, "
                "or a 'package.module.Name' import path"
            ),
        )

        # NORMALIZATION Errors
        self._templates["CYCLIC_VALUE"] = ErrorTemplate(
            code="CYCLIC_VALUE",
            category=ErrorCategory.NORMALIZATION,
            message_template="Cannot normalize cyclic value of type {value_type}",
            detail_template="The value contains itself, directly or through nested items",
            suggestion_template="Break the reference cycle before passing data to a template",
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            detail_template="{detail}",
            suggestion_template="Check the configuration file syntax and values",
        )

        self._templates["CONFIG_NOT_FOUND"] = ErrorTemplate(
            code="CONFIG_NOT_FOUND",
            category=ErrorCategory.CONFIG,
            message_template="Configuration file not found: {path}",
            suggestion_template="Create the file or set STENCIL_CONFIG_PATH",
        )

        self._templates["UNKNOWN_OPTION"] = ErrorTemplate(
            code="UNKNOWN_OPTION",
            category=ErrorCategory.CONFIG,
            message_template="Unknown engine option: {option}",
            detail_template="Available options: {available}",
        )
