"""Ordered registry of context rules."""

import threading
from collections.abc import Iterator
from typing import Any

from stencil_core.errors import create_error

from .rules import ContextRule, check_template


class ContextRegistry:
    """Ordered collection of context rules.

    Resolution merges the payload of every matching rule in registration
    order, so a later rule overrides keys set by an earlier one. There is no
    priority or specificity: callers control overrides through the order in
    which they add rules.
    """

    def __init__(self, logger: Any = None):
        """Initialize an empty registry.

        Args:
            logger: Optional StencilLogger instance
        """
        self._rules: list[ContextRule] = []
        self._lock = threading.Lock()
        self._logger = logger.context() if logger else None

    def add(self, rule: ContextRule) -> None:
        """Append a rule.

        Args:
            rule: Rule to register

        Raises:
            StencilError(INVALID_ARGUMENT): If rule is not a ContextRule
        """
        if not isinstance(rule, ContextRule):
            raise create_error(
                "INVALID_ARGUMENT",
                argument="Context rule",
                expected="a ContextRule",
                actual_type=type(rule).__name__,
                component="context",
            )

        with self._lock:
            self._rules.append(rule)
            position = len(self._rules) - 1

        if self._logger:
            self._logger.rule_added(rule.describe(), rule.needle, list(rule.payload), position)

    def resolve(self, template: str) -> dict[str, Any]:
        """Merge the payloads of all rules matching a template.

        Args:
            template: Template identifier

        Returns:
            New dict with the merged variables, empty if no rule matches

        Raises:
            StencilError(INVALID_ARGUMENT): If template is not a string
        """
        check_template(template)
        rules = self.rules

        merged: dict[str, Any] = {}
        matched = 0
        for rule in rules:
            if rule.matches(template):
                merged.update(rule.payload)
                matched += 1

        if self._logger:
            self._logger.resolved(template, matched, len(rules), list(merged))

        return merged

    @property
    def rules(self) -> tuple[ContextRule, ...]:
        """Snapshot of registered rules in registration order."""
        with self._lock:
            return tuple(self._rules)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[ContextRule]:
        return iter(self.rules)
