"""Tests for the standard rule library."""

import re

import pytest

from fieldrules.errors import InvalidRuleError
from fieldrules.validators.base import BaseRule, FunctionRule, as_rule
from fieldrules.validators.models import ErrorCode
from fieldrules.validators.rules import (
    Conditional,
    Enums,
    MatchRegex,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    Required,
)

EMAIL_RE = r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$"


class TestRequired:
    """Tests for Required."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_fails(self, collector, value):
        assert Required().evaluate("Name", value, collector) is False
        assert collector.count == 1
        failure = collector.first()
        assert failure.field == "Name"
        assert failure.message == "is required"
        assert failure.code == ErrorCode.REQUIRED

    @pytest.mark.parametrize("value", [0, -1, False, "x", " ", [], {}])
    def test_present_passes(self, collector, value):
        assert Required().evaluate("Field", value, collector) is True
        assert not collector.has_failures()

    def test_custom_message(self, collector):
        assert Required(message="name please").evaluate("Name", "", collector) is False
        assert collector.first().message == "name please"
        assert collector.first().code == ErrorCode.REQUIRED_CUSTOM

    def test_empty_custom_message_falls_back(self, collector):
        Required(message="").evaluate("Name", None, collector)
        assert collector.first().message == "is required"
        assert collector.first().code == ErrorCode.REQUIRED


class TestMinLength:
    """Tests for MinLength."""

    def test_boundary(self, collector):
        rule = MinLength(3)
        assert rule.evaluate("Name", "abc", collector) is True
        assert rule.evaluate("Name", "ab", collector) is False
        assert collector.count == 1
        assert collector.first().code == ErrorCode.TOO_SHORT
        assert collector.first().message == "must be at least 3 characters long"

    def test_wrong_type(self, collector):
        assert MinLength(3).evaluate("Name", 12345, collector) is False
        assert collector.first().code == ErrorCode.NOT_A_STRING
        assert collector.first().message == "must be a string"

    def test_invalid_configuration(self):
        with pytest.raises(InvalidRuleError):
            MinLength(-1)
        with pytest.raises(InvalidRuleError):
            MinLength("3")


    def test_counts_characters_not_bytes(self, collector):
        assert MinLength(5).evaluate("Name", "héllo", collector) is True
        assert MinLength(6).evaluate("Name", "héllo", collector) is False
        assert collector.count == 1


class TestMaxLength:
    """Tests for MaxLength."""

    def test_boundary(self, collector):
        rule = MaxLength(5)
        assert rule.evaluate("Name", "abcde", collector) is True
        assert rule.evaluate("Name", "abcdef", collector) is False
        assert collector.first().code == ErrorCode.TOO_LONG

    def test_counts_characters_not_bytes(self, collector):
        assert MaxLength(5).evaluate("Name", "héllo", collector) is True

    def test_wrong_type(self, collector):
        assert MaxLength(5).evaluate("Name", None, collector) is False
        assert collector.first().code == ErrorCode.NOT_A_STRING


class TestMinValue:
    """Tests for MinValue."""

    def test_boundary(self, collector):
        rule = MinValue(18)
        assert rule.evaluate("Age", 18, collector) is True
        assert rule.evaluate("Age", 17, collector) is False
        assert collector.first().code == ErrorCode.TOO_SMALL
        assert collector.first().message == "must be at least 18"

    @pytest.mark.parametrize("value", ["18", 18.0, True, None])
    def test_wrong_type(self, collector, value):
        assert MinValue(0).evaluate("Age", value, collector) is False
        assert collector.count == 1
        assert collector.first().code == ErrorCode.NOT_AN_INTEGER


class TestMaxValue:
    """Tests for MaxValue."""

    def test_boundary(self, collector):
        rule = MaxValue(120)
        assert rule.evaluate("Age", 120, collector) is True
        assert rule.evaluate("Age", 121, collector) is False
        assert collector.first().code == ErrorCode.TOO_LARGE


class TestMatchRegex:
    """Tests for MatchRegex."""

    def test_match_and_mismatch(self, collector):
        rule = MatchRegex(EMAIL_RE)
        assert rule.evaluate("Email", "dalei@example.com", collector) is True
        assert rule.evaluate("Email", "invalid_email", collector) is False
        assert collector.count == 1
        assert collector.first().code == ErrorCode.FORMAT_INVALID
        assert collector.first().message == "format is invalid"

    def test_compiled_once(self, collector):
        rule = MatchRegex(EMAIL_RE)
        compiled = rule.pattern
        verdicts = [rule.evaluate("Email", "invalid_email", collector) for _ in range(3)]
        assert verdicts == [False, False, False]
        assert rule.pattern is compiled

    def test_unanchored_pattern_searches(self, collector):
        assert MatchRegex(r"\d+").evaluate("Code", "abc123", collector) is True

    def test_accepts_compiled_pattern(self, collector):
        rule = MatchRegex(re.compile(r"^[A-Z]+$"))
        assert rule.evaluate("Code", "ABC", collector) is True
        assert rule.evaluate("Code", "abc", collector) is False

    def test_wrong_type(self, collector):
        assert MatchRegex(EMAIL_RE).evaluate("Email", 42, collector) is False
        assert collector.first().code == ErrorCode.PATTERN_NOT_A_STRING

    def test_invalid_pattern_raises_at_construction(self):
        with pytest.raises(InvalidRuleError):
            MatchRegex("([a-z")


class TestEnums:
    """Tests for Enums."""

    def test_membership(self, collector):
        rule = Enums("a", "b")
        assert rule.evaluate("Kind", "a", collector) is True
        assert rule.evaluate("Kind", "b", collector) is True
        assert rule.evaluate("Kind", "c", collector) is False
        assert collector.first().code == ErrorCode.NOT_IN_ENUM
        assert collector.first().message == "value is not in enums"

    def test_wrong_type(self, collector):
        assert Enums("1", "2").evaluate("Kind", 1, collector) is False
        assert collector.first().code == ErrorCode.PATTERN_NOT_A_STRING

    def test_no_allowed_values_rejects_everything(self, collector):
        assert Enums().evaluate("Kind", "", collector) is False


class TestConditional:
    """Tests for Conditional."""

    def test_predicate_false_skips_rule(self, collector):
        wrapped = FunctionRule(lambda *_: pytest.fail("wrapped rule must not run"))
        assert Conditional(lambda: False, wrapped).evaluate("Name", "", collector) is True
        assert not collector.has_failures()

    def test_predicate_true_delegates(self, collector):
        direct = type(collector)()
        expected = MinLength(6).evaluate("Name", "dalei", direct)

        actual = Conditional(lambda: True, MinLength(6)).evaluate("Name", "dalei", collector)

        assert actual == expected
        assert collector.failures == direct.failures

    def test_predicate_evaluated_every_call(self, collector):
        state = {"enabled": False}
        rule = Conditional(lambda: state["enabled"], Required())

        assert rule.evaluate("Name", None, collector) is True
        state["enabled"] = True
        assert rule.evaluate("Name", None, collector) is False
        assert collector.count == 1

    def test_wraps_plain_callable(self, collector):
        def never(field_name, value, ec):
            ec.add(field_name, "never valid")
            return False

        assert Conditional(lambda: True, never).evaluate("X", 1, collector) is False
        assert collector.first().message == "never valid"

    def test_non_callable_predicate(self):
        with pytest.raises(InvalidRuleError):
            Conditional(True, Required())


class TestCustomRules:
    """Tests for caller-defined rules."""

    def test_function_rule_none_is_pass(self, collector):
        rule = as_rule(lambda field_name, value, ec: None)
        assert isinstance(rule, FunctionRule)
        assert rule.evaluate("X", 1, collector) is True

    def test_function_rule_name(self):
        def even_only(field_name, value, ec):
            return None

        assert as_rule(even_only).name == "even_only"

    def test_subclass(self, collector):
        class Even(BaseRule):
            @property
            def name(self):
                return "Even"

            def evaluate(self, field_name, value, collector):
                if value % 2:
                    return self._fail(collector, field_name, "must be even")
                return True

        rule = Even()
        assert as_rule(rule) is rule
        assert rule("N", 3, collector) is False
        assert collector.first().code == 0

    def test_as_rule_rejects_non_callables(self):
        with pytest.raises(InvalidRuleError):
            as_rule("Required")
