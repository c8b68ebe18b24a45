"""Standard rule library: presence, length, magnitude, format, enum, conditional."""

import re
from typing import Any, Callable, Pattern, Union

from fieldrules.errors import InvalidRuleError
from fieldrules.validators.base import BaseRule, as_rule
from fieldrules.validators.models import ErrorCode, FailureCollector

DEFAULT_REQUIRED_MESSAGE = "is required"
NOT_A_STRING_MESSAGE = "must be a string"
NOT_AN_INTEGER_MESSAGE = "must be an integer"


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _is_integer(value: Any) -> bool:
    # bool is an int subclass but not a number for validation purposes
    return isinstance(value, int) and not isinstance(value, bool)


def _check_bound(bound: Any, what: str) -> int:
    if not _is_integer(bound):
        raise InvalidRuleError(f"{what} must be an integer, got {type(bound).__name__}")
    return bound


class Required(BaseRule):
    """Fails when the value is None or an empty string.

    Zero, False and empty containers all pass. With a non-empty ``message``
    the failure uses it and REQUIRED_CUSTOM instead of the default.
    """

    def __init__(self, message: str = ""):
        self.message = message

    @property
    def name(self) -> str:
        return "Required"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not _is_missing(value):
            return True
        if self.message:
            return self._fail(collector, field_name, self.message, ErrorCode.REQUIRED_CUSTOM)
        return self._fail(collector, field_name, DEFAULT_REQUIRED_MESSAGE, ErrorCode.REQUIRED)


class MinLength(BaseRule):
    """String of at least ``minimum`` characters."""

    def __init__(self, minimum: int):
        self.minimum = _check_bound(minimum, "MinLength")
        if minimum < 0:
            raise InvalidRuleError("MinLength must not be negative")

    @property
    def name(self) -> str:
        return f"MinLength({self.minimum})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not isinstance(value, str):
            return self._fail(collector, field_name, NOT_A_STRING_MESSAGE, ErrorCode.NOT_A_STRING)
        if len(value) < self.minimum:
            return self._fail(
                collector,
                field_name,
                f"must be at least {self.minimum} characters long",
                ErrorCode.TOO_SHORT,
            )
        return True


class MaxLength(BaseRule):
    """String of at most ``maximum`` characters."""

    def __init__(self, maximum: int):
        self.maximum = _check_bound(maximum, "MaxLength")
        if maximum < 0:
            raise InvalidRuleError("MaxLength must not be negative")

    @property
    def name(self) -> str:
        return f"MaxLength({self.maximum})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not isinstance(value, str):
            return self._fail(collector, field_name, NOT_A_STRING_MESSAGE, ErrorCode.NOT_A_STRING)
        if len(value) > self.maximum:
            return self._fail(
                collector,
                field_name,
                f"must be at most {self.maximum} characters long",
                ErrorCode.TOO_LONG,
            )
        return True


class MinValue(BaseRule):
    """Integer greater than or equal to ``minimum``. Floats and bools fail the type check."""

    def __init__(self, minimum: int):
        self.minimum = _check_bound(minimum, "MinValue")

    @property
    def name(self) -> str:
        return f"MinValue({self.minimum})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not _is_integer(value):
            return self._fail(collector, field_name, NOT_AN_INTEGER_MESSAGE, ErrorCode.NOT_AN_INTEGER)
        if value < self.minimum:
            return self._fail(collector, field_name, f"must be at least {self.minimum}", ErrorCode.TOO_SMALL)
        return True


class MaxValue(BaseRule):
    """Integer less than or equal to ``maximum``."""

    def __init__(self, maximum: int):
        self.maximum = _check_bound(maximum, "MaxValue")

    @property
    def name(self) -> str:
        return f"MaxValue({self.maximum})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not _is_integer(value):
            return self._fail(collector, field_name, NOT_AN_INTEGER_MESSAGE, ErrorCode.NOT_AN_INTEGER)
        if value > self.maximum:
            return self._fail(collector, field_name, f"must be at most {self.maximum}", ErrorCode.TOO_LARGE)
        return True


class MatchRegex(BaseRule):
    """String containing a match for ``pattern``.

    The pattern is compiled once here and reused read-only on every call.
    Matching uses ``search``, so anchor the pattern with ``^``/``$`` for a
    full match.
    """

    def __init__(self, pattern: Union[str, Pattern[str]]):
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            try:
                self.pattern = re.compile(pattern)
            except (re.error, TypeError) as e:
                raise InvalidRuleError(f"Invalid regular expression {pattern!r}: {e}") from e

    @property
    def name(self) -> str:
        return f"MatchRegex({self.pattern.pattern!r})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not isinstance(value, str):
            return self._fail(collector, field_name, NOT_A_STRING_MESSAGE, ErrorCode.PATTERN_NOT_A_STRING)
        if self.pattern.search(value) is None:
            return self._fail(collector, field_name, "format is invalid", ErrorCode.FORMAT_INVALID)
        return True


class Enums(BaseRule):
    """String equal to one of the allowed literals."""

    def __init__(self, *allowed: str):
        self.allowed = tuple(allowed)

    @property
    def name(self) -> str:
        return f"Enums({', '.join(map(repr, self.allowed))})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not isinstance(value, str):
            return self._fail(collector, field_name, NOT_A_STRING_MESSAGE, ErrorCode.PATTERN_NOT_A_STRING)
        if value in self.allowed:
            return True
        return self._fail(collector, field_name, "value is not in enums", ErrorCode.NOT_IN_ENUM)


class Conditional(BaseRule):
    """Runs ``rule`` only while ``predicate()`` is true.

    The predicate is called on every evaluation, never cached, so state that
    changes between passes changes which rules apply. When it is false the
    wrapped rule is not invoked at all.
    """

    def __init__(self, predicate: Callable[[], bool], rule: Any):
        if not callable(predicate):
            raise InvalidRuleError("Conditional predicate must be callable")
        self.predicate = predicate
        self.rule = as_rule(rule)

    @property
    def name(self) -> str:
        return f"Conditional({self.rule.name})"

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        if not self.predicate():
            return True
        return self.rule.evaluate(field_name, value, collector)
