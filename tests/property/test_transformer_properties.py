"""
Property-based tests for rewrite rule compilation and application.

Property 6: Malformed patterns never change the output
Property 7: Rules compose left to right
"""

import re
from hypothesis import given, strategies as st

from pr_changelog.changelog.transformer import validate_transformers, transform
from pr_changelog.models.configuration import Transformer


BAD_PATTERNS = ["(", "[a-", "*abc", "(?P<x", "a{2,1}", "\\"]

words = st.text(alphabet="abcxyz -#", max_size=40)
literal_rules = st.lists(
    st.tuples(st.text(alphabet="abcxyz", min_size=1, max_size=3), st.text(alphabet="abcxyz", max_size=3)),
    max_size=5,
)


class TestTransformerProperties:
    """Property tests for validate_transformers and transform."""

    @given(text=words, rules=literal_rules, bad=st.lists(st.sampled_from(BAD_PATTERNS), max_size=3))
    def test_bad_patterns_have_no_effect(self, text, rules, bad):
        """
        Property: Adding malformed rules does not change any output.

        Given: Valid literal rules and some malformed patterns
        When: Both rule lists are compiled and applied
        Then: The output matches the one produced by the valid rules alone
        """
        valid = [Transformer(pattern=p, target=t) for p, t in rules]
        mixed = list(valid)
        for index, pattern in enumerate(bad):
            mixed.insert(index % (len(mixed) + 1), Transformer(pattern=pattern, target="BROKEN"))

        assert len(validate_transformers(mixed)) == len(valid)
        assert transform(text, validate_transformers(mixed)) == transform(text, validate_transformers(valid))

    @given(text=words, rules=literal_rules)
    def test_rules_compose_sequentially(self, text, rules):
        """
        Property: Applying all rules equals applying them one at a time.

        Given: A list of literal rules
        When: They are applied together
        Then: The result equals feeding each rule the previous output
        """
        compiled = validate_transformers([Transformer(pattern=p, target=t) for p, t in rules])

        expected = text
        for pattern, target in rules:
            expected = re.sub(pattern, target, expected)

        assert transform(text, compiled) == expected

    @given(text=words)
    def test_empty_rules_are_identity(self, text):
        """
        Property: Without rules the text is returned unchanged.
        """
        assert transform(text, validate_transformers([])) == text
