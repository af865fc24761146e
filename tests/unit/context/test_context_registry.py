"""Unit tests for ContextRegistry."""

import json
import threading

import pytest

from stencil_core.context import ContextRegistry, GlobalContext, RegexContext, SearchContext
from stencil_core.errors import StencilError


class TestResolve:
    """Resolution merges matching payloads in registration order."""

    def test_empty_registry(self):
        assert ContextRegistry().resolve("anything") == {}

    def test_no_match_returns_empty(self):
        registry = ContextRegistry()
        registry.add(SearchContext("user", {"x": 1}))
        assert registry.resolve("admin/home") == {}

    def test_later_rule_overrides_earlier(self):
        registry = ContextRegistry()
        registry.add(GlobalContext({"x": 1}))
        registry.add(SearchContext("home", {"x": 2, "y": 3}))

        assert registry.resolve("home") == {"x": 2, "y": 3}
        assert registry.resolve("other") == {"x": 1}

    def test_global_registered_last_wins(self):
        registry = ContextRegistry()
        registry.add(SearchContext("home", {"x": 2}))
        registry.add(GlobalContext({"x": 1}))

        assert registry.resolve("home") == {"x": 1}

    def test_merges_disjoint_keys(self):
        registry = ContextRegistry()
        registry.add(GlobalContext({"site": "s"}))
        registry.add(RegexContext("^admin/", {"role": "admin"}))
        registry.add(SearchContext("home", {"page": "home"}))

        assert registry.resolve("admin/home") == {"site": "s", "role": "admin", "page": "home"}

    def test_resolve_is_idempotent_and_pure(self):
        registry = ContextRegistry()
        rule = GlobalContext({"items": [1, 2]})
        registry.add(rule)

        first = registry.resolve("t")
        first["extra"] = True
        second = registry.resolve("t")

        assert second == {"items": [1, 2]}
        assert dict(rule.payload) == {"items": [1, 2]}

    def test_duplicate_rules_are_kept(self):
        registry = ContextRegistry()
        rule = GlobalContext({"x": 1})
        registry.add(rule)
        registry.add(rule)
        assert len(registry) == 2

    def test_non_string_template(self):
        with pytest.raises(StencilError) as exc_info:
            ContextRegistry().resolve(None)
        assert exc_info.value.code == "INVALID_ARGUMENT"


class TestAdd:
    """add() appends rules."""

    def test_rules_in_order(self):
        registry = ContextRegistry()
        a = GlobalContext({})
        b = SearchContext("x", {})
        registry.add(a)
        registry.add(b)
        assert registry.rules == (a, b)
        assert list(registry) == [a, b]

    def test_rejects_non_rule(self):
        with pytest.raises(StencilError) as exc_info:
            ContextRegistry().add({"x": 1})
        assert exc_info.value.code == "INVALID_ARGUMENT"

    def test_concurrent_adds(self):
        registry = ContextRegistry()

        def worker(n):
            for i in range(50):
                registry.add(GlobalContext({f"k{n}-{i}": i}))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 200
        assert len(registry.resolve("t")) == 200


class TestLogging:
    """Registry events are logged when a logger is given."""

    def test_logs_add_and_resolve(self, json_logger, log_stream):
        registry = ContextRegistry(json_logger)
        registry.add(SearchContext("home", {"x": 1}))
        registry.resolve("home")

        events = [json.loads(line) for line in log_stream.getvalue().splitlines()]
        assert [e["event"] for e in events] == ["rule_added", "context_resolved"]
        assert events[0]["kind"] == "search"
        assert events[0]["needle"] == "home"
        assert events[1]["matched"] == 1
        assert events[1]["keys"] == ["x"]
