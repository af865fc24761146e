"""Unit tests for context rule variants."""

import pytest

from stencil_core.context import ContextRule, GlobalContext, RegexContext, SearchContext
from stencil_core.errors import StencilError
from stencil_core.types import MatchKind


class TestGlobalContext:
    """GlobalContext applies to every template."""

    @pytest.mark.parametrize("template", ["", "user/profile", "admin/home", "x"])
    def test_matches_everything(self, template):
        rule = GlobalContext({"site": "stencil"})
        assert rule.matches(template) is True

    def test_kind_and_needle(self):
        rule = GlobalContext({})
        assert rule.kind is MatchKind.GLOBAL
        assert rule.needle is None


class TestSearchContext:
    """SearchContext matches on case-sensitive substring containment."""

    def test_substring_match(self):
        rule = SearchContext("user", {"x": 1})
        assert rule.matches("user/profile") is True
        assert rule.matches("admin/profile") is False

    def test_exact_match(self):
        assert SearchContext("home", {}).matches("home") is True

    def test_case_sensitive(self):
        assert SearchContext("User", {}).matches("user/profile") is False

    def test_regex_metacharacters_are_literal(self):
        rule = SearchContext("a.b", {})
        assert rule.matches("a.b/c") is True
        assert rule.matches("axb/c") is False

    def test_needle_must_be_string(self):
        with pytest.raises(StencilError) as exc_info:
            SearchContext(42, {})
        assert exc_info.value.code == "INVALID_RULE"
        assert "int" in exc_info.value.message

    def test_needle_must_not_be_empty(self):
        with pytest.raises(StencilError) as exc_info:
            SearchContext("", {})
        assert exc_info.value.code == "INVALID_RULE"


class TestRegexContext:
    """RegexContext searches a regular expression in the template name."""

    def test_anchored_pattern(self):
        rule = RegexContext("^admin/", {"role": "admin"})
        assert rule.matches("admin/home") is True
        assert rule.matches("home/admin") is False

    def test_matches_anywhere(self):
        assert RegexContext(r"\d+", {}).matches("page-42") is True

    def test_invalid_pattern(self):
        with pytest.raises(StencilError) as exc_info:
            RegexContext("([a-z", {})
        assert exc_info.value.code == "INVALID_RULE"
        assert "([a-z" in exc_info.value.message

    def test_needle_must_be_string(self):
        with pytest.raises(StencilError) as exc_info:
            RegexContext(None, {})
        assert exc_info.value.code == "INVALID_RULE"


class TestPayload:
    """Payload validation and immutability."""

    @pytest.mark.parametrize("data", [["a"], "text", 3, None])
    def test_payload_must_be_mapping(self, data):
        with pytest.raises(StencilError) as exc_info:
            GlobalContext(data)
        assert exc_info.value.code == "INVALID_PAYLOAD"

    def test_payload_checked_after_needle(self):
        with pytest.raises(StencilError) as exc_info:
            SearchContext("user", ["not", "a", "mapping"])
        assert exc_info.value.code == "INVALID_PAYLOAD"

    def test_payload_is_read_only(self):
        rule = GlobalContext({"x": 1})
        with pytest.raises(TypeError):
            rule.payload["x"] = 2  # type: ignore[index]

    def test_payload_is_copied(self):
        data = {"x": 1}
        rule = GlobalContext(data)
        data["x"] = 2
        assert rule.payload["x"] == 1


class TestMatchesArgument:
    """matches() requires a string template name."""

    @pytest.mark.parametrize("rule", [GlobalContext({}), SearchContext("a", {})])
    def test_non_string_template(self, rule):
        with pytest.raises(StencilError) as exc_info:
            rule.matches(123)
        assert exc_info.value.code == "INVALID_ARGUMENT"


class TestCustomRule:
    """ContextRule can be subclassed for custom matching."""

    def test_custom_subclass(self):
        class EndsWith(ContextRule):
            def __init__(self, suffix, data):
                self.suffix = suffix
                super().__init__(data)

            def accept(self, template):
                return template.endswith(self.suffix)

        rule = EndsWith(".html", {"layout": "base"})
        assert rule.matches("index.html") is True
        assert rule.matches("index.txt") is False
        assert rule.describe() == "EndsWith"

    def test_repr_lists_keys(self):
        assert repr(SearchContext("user", {"a": 1, "b": 2})) == (
            "SearchContext(needle='user', keys=[a, b])"
        )
