"""Context rules: template variables bound to a template-name predicate."""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from stencil_core.errors import create_error
from stencil_core.types import MatchKind


def check_template(template: Any) -> str:
    if not isinstance(template, str):
        raise create_error(
            "INVALID_ARGUMENT",
            argument="Template name",
            expected="a string",
            actual_type=type(template).__name__,
            component="context",
        )
    return template


def _check_needle(needle: Any) -> str:
    if not isinstance(needle, str):
        raise create_error(
            "INVALID_RULE",
            reason=f"needle must be a string, got {type(needle).__name__}",
            component="context",
        )
    if not needle:
        raise create_error(
            "INVALID_RULE",
            reason="needle must not be empty",
            component="context",
        )
    return needle


class ContextRule(ABC):
    """Base class for context rules.

    A rule holds a read-only payload of template variables and decides,
    through ``matches``, whether that payload applies to a template.
    Subclass it to plug custom matching into a registry.
    """

    kind: MatchKind | None = None

    def __init__(self, data: Mapping[str, Any]):
        """Initialize rule payload.

        Args:
            data: Template variables this rule contributes

        Raises:
            StencilError(INVALID_PAYLOAD): If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise create_error(
                "INVALID_PAYLOAD",
                payload_type=type(data).__name__,
                component="context",
            )
        self._payload = MappingProxyType(dict(data))

    @property
    def payload(self) -> Mapping[str, Any]:
        """Read-only view of the rule's template variables."""
        return self._payload

    @property
    def needle(self) -> str | None:
        """String the template name is compared to, None when unused."""
        return None

    @abstractmethod
    def accept(self, template: str) -> bool:
        """Check if this rule applies to an already validated template name.

        Args:
            template: Template identifier

        Returns:
            True if the payload should be merged for this template
        """

    def matches(self, template: str) -> bool:
        """Check if this rule applies to a template.

        Args:
            template: Template identifier

        Returns:
            True if the payload should be merged for this template

        Raises:
            StencilError(INVALID_ARGUMENT): If template is not a string
        """
        return self.accept(check_template(template))

    def describe(self) -> str:
        """Short label used in logs."""
        return self.kind.value if self.kind else type(self).__name__

    def __repr__(self) -> str:
        keys = ", ".join(self._payload)
        if self.needle is None:
            return f"{type(self).__name__}(keys=[{keys}])"
        return f"{type(self).__name__}(needle={self.needle!r}, keys=[{keys}])"


class GlobalContext(ContextRule):
    """Data shared by every template."""

    kind = MatchKind.GLOBAL

    def accept(self, template: str) -> bool:
        return True


class SearchContext(ContextRule):
    """Data for templates whose name contains a given string (case-sensitive)."""

    kind = MatchKind.SEARCH

    def __init__(self, needle: str, data: Mapping[str, Any]):
        """Initialize search rule.

        Args:
            needle: Substring to look for in template names
            data: Template variables this rule contributes

        Raises:
            StencilError(INVALID_RULE): If needle is not a non-empty string
            StencilError(INVALID_PAYLOAD): If data is not a mapping
        """
        self._needle = _check_needle(needle)
        super().__init__(data)

    @property
    def needle(self) -> str:
        return self._needle

    def accept(self, template: str) -> bool:
        return self._needle in template


class RegexContext(ContextRule):
    """Data for templates whose name matches a regular expression anywhere."""

    kind = MatchKind.REGEX

    def __init__(self, needle: str, data: Mapping[str, Any]):
        """Initialize regex rule.

        Args:
            needle: Regular expression searched in template names
            data: Template variables this rule contributes

        Raises:
            StencilError(INVALID_RULE): If needle is not a string or does not compile
            StencilError(INVALID_PAYLOAD): If data is not a mapping
        """
        self._needle = _check_needle(needle)
        try:
            self._pattern = re.compile(self._needle)
        except re.error as e:
            raise create_error(
                "INVALID_RULE",
                reason=f"invalid regular expression {needle!r}: {e}",
                component="context",
            ) from e
        super().__init__(data)

    @property
    def needle(self) -> str:
        return self._needle

    def accept(self, template: str) -> bool:
        return self._pattern.search(template) is not None
