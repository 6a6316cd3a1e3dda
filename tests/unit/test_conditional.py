"""Tests for conditional evaluation and visibility resolution."""

from __future__ import annotations

import logging

import pytest

from blockfields.conditional import (
    Operator,
    build_dependents,
    evaluate,
    is_empty,
    is_visible,
    resolve_visibility,
    values_equal,
)
from blockfields.exceptions import InvalidConditionalError
from blockfields.models.config import Conditional, parse_fields


def rule(operator: str, value=None) -> dict:
    return {"field": "watched", "operator": operator, "value": value}


class TestEquality:
    """Tests for == and !=."""

    @pytest.mark.parametrize(
        "left,right,expected",
        [
            (None, None, True),
            (None, "", False),
            ("", None, False),
            (True, "yes", True),
            (False, 0, True),
            (1, 1.0, True),
            ("Video", "video", True),
            (5.0, "5", True),
            (5, "6", False),
        ],
    )
    def test_values_equal(self, left, right, expected) -> None:
        """Loose equality follows the None, bool, number, text order."""
        assert values_equal(left, right) is expected

    def test_not_equal_is_negation(self) -> None:
        assert evaluate(rule("!=", "a"), "b") is True
        assert evaluate(rule("!=", "a"), "A") is False


class TestOrdering:
    """Tests for numeric comparison operators."""

    def test_greater_than(self) -> None:
        assert evaluate({"field": "q", "operator": ">", "value": 10}, 15) is True
        assert evaluate({"field": "q", "operator": ">", "value": 10}, 10) is False

    def test_strings_are_parsed(self) -> None:
        assert evaluate(rule(">=", "3"), "3.0") is True
        assert evaluate(rule("<", 2), " 1 ") is True

    def test_non_numeric_never_matches(self) -> None:
        """NaN comparisons are always false."""
        assert evaluate(rule(">", 1), "abc") is False
        assert evaluate(rule("<=", 1), [1, 2]) is False

    def test_blank_counts_as_zero(self) -> None:
        """An empty number field compares as 0."""
        assert evaluate(rule("<=", 5), None) is True
        assert evaluate(rule("<=", 5), "") is True
        assert evaluate(rule(">", 0), "  ") is False

    def test_bool_counts_as_number(self) -> None:
        assert evaluate(rule(">", 0), True) is True


class TestContains:
    """Tests for contains and not_contains."""

    def test_list_membership(self) -> None:
        assert evaluate(rule("contains", "b"), ["a", "b"]) is True
        assert evaluate(rule("not_contains", "c"), ["a", "b"]) is True

    def test_substring_is_case_insensitive(self) -> None:
        assert evaluate(rule("contains", "WORLD"), "hello world") is True

    def test_none_contains_nothing(self) -> None:
        assert evaluate(rule("contains", "a"), None) is False
        assert evaluate(rule("not_contains", "a"), None) is True


class TestMembership:
    """Tests for in and not_in."""

    def test_in_list(self) -> None:
        assert evaluate(rule("in", ["a", "b"]), "a") is True
        assert evaluate(rule("in", ["a", "b"]), "c") is False
        assert evaluate(rule("not_in", ["a", "b"]), "c") is True

    def test_non_list_comparand_never_matches(self, caplog: pytest.LogCaptureFixture) -> None:
        """A scalar comparand matches nothing, so in fails and not_in passes, with a warning."""
        with caplog.at_level(logging.WARNING, logger="blockfields.conditional"):
            assert evaluate(rule("in", "a"), "a") is False
            assert evaluate(rule("not_in", "a"), "a") is True
        assert "needs a list" in caplog.text

    def test_bools_only_match_bools(self) -> None:
        assert evaluate(rule("in", [1, 0]), True) is False
        assert evaluate(rule("not_in", [1]), True) is True
        assert evaluate(rule("in", [True]), True) is True
        assert evaluate(rule("in", [1.0]), 1) is True
        assert evaluate(rule("contains", 1), [True, "x"]) is False


class TestEmptiness:
    """Tests for empty and not_empty."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, (), set()])
    def test_empty_values(self, value) -> None:
        assert is_empty(value) is True
        assert evaluate(rule("empty"), value) is True

    @pytest.mark.parametrize("value", [0, False, "0", ["x"]])
    def test_non_empty_values(self, value) -> None:
        assert evaluate(rule("empty"), value) is False
        assert evaluate(rule("not_empty"), value) is True


class TestUnknownOperator:
    """Tests for fail-open behaviour."""

    def test_unknown_operator_stays_visible(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="blockfields.conditional"):
            assert evaluate(rule("matches", "x"), "y") is True
        assert "Unknown conditional operator" in caplog.text

    def test_operator_set_is_closed(self) -> None:
        assert len(Operator) == 12

    def test_accepts_conditional_instances(self) -> None:
        assert evaluate(Conditional("watched", "==", 3), 3) is True

    def test_malformed_mapping_raises(self) -> None:
        with pytest.raises(InvalidConditionalError):
            evaluate({"operator": "=="}, 1)


class TestResolveVisibility:
    """Tests for schema-wide visibility resolution."""

    def test_chain_hides_transitively(self, chain_schema) -> None:
        """A hidden watched field hides every field downstream of it."""
        fields = parse_fields(chain_schema)
        visibility = resolve_visibility(fields, {"kind": "text", "source": "youtube"})

        assert visibility == {"kind": True, "source": False, "videoUrl": False}

    def test_chain_all_visible(self, chain_schema) -> None:
        fields = parse_fields(chain_schema)
        visibility = resolve_visibility(fields, {"kind": "video", "source": "youtube"})

        assert all(visibility.values())

    def test_missing_watched_field_hides(self) -> None:
        fields = parse_fields(
            {"a": {"type": "text", "conditional": {"field": "ghost", "operator": "empty"}}}
        )
        assert resolve_visibility(fields, {}) == {"a": False}

    def test_cycle_uses_raw_values(self, caplog: pytest.LogCaptureFixture) -> None:
        fields = parse_fields(
            {
                "a": {"type": "text", "conditional": {"field": "b", "operator": "not_empty"}},
                "b": {"type": "text", "conditional": {"field": "a", "operator": "not_empty"}},
            }
        )
        with caplog.at_level(logging.WARNING, logger="blockfields.conditional"):
            visibility = resolve_visibility(fields, {"a": "x", "b": "y"})

        assert visibility == {"a": True, "b": True}
        assert "cycle" in caplog.text

    def test_is_visible(self, cta_schema) -> None:
        fields = parse_fields(cta_schema)
        assert is_visible("ctaText", fields, {"showCTA": True}) is True
        assert is_visible("ctaText", fields, {"showCTA": False}) is False
        assert is_visible("nope", fields, {}) is None

    def test_build_dependents(self, chain_schema) -> None:
        dependents = build_dependents(parse_fields(chain_schema))
        assert dependents == {"kind": ["source"], "source": ["videoUrl"]}
