"""Tests for clir.routing.pattern — literal, root, and regex matching."""

import re

import pytest

from clir.routing.pattern import ROOT, Pattern


class TestCompile:
    def test_root(self) -> None:
        p = Pattern.compile("")
        assert p.is_root
        assert not p.is_regex
        assert p.source == ROOT

    def test_plain_word_is_literal(self) -> None:
        p = Pattern.compile("dance")
        assert not p.is_regex
        assert not p.is_root

    def test_hyphenated_word_is_literal(self) -> None:
        assert not Pattern.compile("dry-run").is_regex

    def test_metacharacters_make_regex(self) -> None:
        p = Pattern.compile(r"\w+")
        assert p.is_regex
        assert p.source == r"\w+"

    def test_compiled_regex(self) -> None:
        compiled = re.compile("dance")
        p = Pattern.compile(compiled)
        assert p.is_regex
        assert p.regex is compiled

    def test_equality_follows_kind_and_flags(self) -> None:
        assert Pattern.compile(r"\w+") == Pattern.compile(re.compile(r"\w+"))
        assert Pattern.literal("v1.2") != Pattern.compile("v1.2")
        assert Pattern.compile(re.compile("a")) != Pattern.compile(re.compile("a", re.IGNORECASE))

    def test_pattern_passes_through(self) -> None:
        p = Pattern.literal("a.b")
        assert Pattern.compile(p) is p

    def test_invalid_regex(self) -> None:
        with pytest.raises(re.error):
            Pattern.compile("(unclosed")

    def test_frozen(self) -> None:
        p = Pattern.compile("dance")
        with pytest.raises(AttributeError):
            p.source = "sleep"  # type: ignore[misc]


class TestMatch:
    def test_root_matches_only_absence(self) -> None:
        p = Pattern.compile("")
        assert p.match(None) == ()
        assert p.match("") is None
        assert p.match("dance") is None

    def test_literal(self) -> None:
        p = Pattern.compile("dance")
        assert p.match("dance") == ("dance",)
        assert p.match("dancer") is None
        assert p.match(None) is None

    def test_regex_full_match(self) -> None:
        p = Pattern.compile(r"\w+")
        assert p.match("dance") == ("dance",)

    def test_regex_groups_follow_full_match(self) -> None:
        p = Pattern.compile(r"(\w+)-(\d+)")
        assert p.match("item-42") == ("item-42", "item", "42")

    def test_regex_is_anchored_both_ends(self) -> None:
        p = Pattern.compile(r"\d+")
        assert p.match("42") == ("42",)
        assert p.match("x42") is None
        assert p.match("42x") is None

    def test_regex_never_matches_absence(self) -> None:
        assert Pattern.compile(r".*").match(None) is None

    def test_regex_may_match_empty_token(self) -> None:
        assert Pattern.compile(r".*").match("") == ("",)

    def test_unmatched_optional_group_is_empty(self) -> None:
        p = Pattern.compile(r"(\d+)(x)?")
        assert p.match("42") == ("42", "42", "")

    def test_literal_with_metacharacters(self) -> None:
        p = Pattern.literal("v1.2")
        assert p.match("v1.2") == ("v1.2",)
        assert p.match("v1x2") is None

    def test_str(self) -> None:
        assert str(Pattern.compile(r"\w+")) == r"\w+"
