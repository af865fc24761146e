"""Property-based tests for context rule matching and resolution."""

import re

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stencil_core.context import ContextRegistry, GlobalContext, RegexContext, SearchContext

names = st.text(max_size=40)
keys = st.from_regex(r"^[a-z]{1,6}$", fullmatch=True)
payloads = st.dictionaries(keys, st.integers(), max_size=5)


@pytest.mark.property
class TestRuleMatching:
    """Matching semantics hold for arbitrary template names."""

    @given(names)
    @settings(max_examples=100)
    def test_global_matches_every_template(self, template):
        assert GlobalContext({}).matches(template)

    @given(st.text(min_size=1, max_size=10), names)
    @settings(max_examples=200)
    def test_search_is_substring_containment(self, needle, template):
        assert SearchContext(needle, {}).matches(template) == (needle in template)

    @given(st.text(min_size=1, max_size=10), names, names)
    @settings(max_examples=100)
    def test_search_matches_when_embedded(self, needle, prefix, suffix):
        assert SearchContext(needle, {}).matches(prefix + needle + suffix)

    @given(st.text(min_size=1, max_size=10), names)
    @settings(max_examples=100)
    def test_escaped_regex_agrees_with_search(self, needle, template):
        regex = RegexContext(re.escape(needle), {})
        assert regex.matches(template) == SearchContext(needle, {}).matches(template)


@pytest.mark.property
class TestResolution:
    """Registry resolution is an ordered last-write-wins merge."""

    @given(names)
    @settings(max_examples=50)
    def test_empty_registry_resolves_empty(self, template):
        assert ContextRegistry().resolve(template) == {}

    @given(st.lists(payloads, max_size=6), names)
    @settings(max_examples=100)
    def test_global_rules_merge_in_order(self, payload_list, template):
        registry = ContextRegistry()
        expected: dict = {}
        for payload in payload_list:
            registry.add(GlobalContext(payload))
            expected.update(payload)

        assert registry.resolve(template) == expected

    @given(
        st.lists(st.tuples(st.sampled_from(["a", "b", "ab"]), payloads), max_size=6),
        st.sampled_from(["a", "b", "ab", "c"]),
    )
    @settings(max_examples=100)
    def test_only_matching_rules_contribute(self, rules, template):
        registry = ContextRegistry()
        expected: dict = {}
        for needle, payload in rules:
            registry.add(SearchContext(needle, payload))
            if needle in template:
                expected.update(payload)

        assert registry.resolve(template) == expected
        assert registry.resolve(template) == registry.resolve(template)
