"""Stencil error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    VALIDATION = "VALIDATION"
    NORMALIZATION = "NORMALIZATION"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class StencilError(Exception):
    """Structured error with context. Base exception for all stencil errors."""

    # Identity
    code: str  # e.g., "INVALID_RULE"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    retryable: bool = False  # Caller errors are never worth retrying
    template: str | None = None  # Template identifier being prepared
    component: str | None = None  # "context", "normalize", "config"

    # Error chain
    cause: "StencilError | None" = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for callers that report errors as data.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "retryable": self.retryable,
            "template": self.template,
            "component": self.component,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(
        self,
        template: str | None = None,
        component: str | None = None,
    ) -> "StencilError":
        """Return copy with additional context.

        Args:
            template: Optional template identifier
            component: Optional component name

        Returns:
            New StencilError instance with updated context
        """
        return StencilError(
            code=self.code,
            category=self.category,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            retryable=self.retryable,
            template=template or self.template,
            component=component or self.component,
            cause=self.cause,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Context rule needle must be a string, got {needle_type}"
    detail_template: str | None = None
    suggestion_template: str | None = None
    default_retryable: bool = False
