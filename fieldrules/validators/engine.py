"""Validation Engine: field registry and the validation pass.

Usage:
    validator = StructValidator()
    validator.add_field("Name", user.name, Required(), MinLength(3))
    validator.add_field("Email", user.email, Required(), MatchRegex(EMAIL_RE))
    failures = validator.validate()
    if failures.has_failures():
        print(failures.render())
"""

import copy
import time
from typing import Any, Iterable, Optional

from fieldrules.config import get_settings
from fieldrules.log import get_logger
from fieldrules.validators.base import BaseRule, as_rule
from fieldrules.validators.models import ErrorCode, FailureCollector

logger = get_logger(__name__)


def _snapshot(value: Any) -> Any:
    """Deep copy if possible, else shallow copy, else the value itself."""
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as e:
        deep_error = e
    try:
        snapshot = copy.copy(value)
        kind = "shallow"
    except (TypeError, copy.Error):
        snapshot = value
        kind = "reference"
    logger.debug("value_not_copied", value_type=type(value).__name__, fallback=kind, error=str(deep_error))
    return snapshot


class FieldValidator:
    """One field's captured value plus its ordered rules.

    The value is deep-copied at construction, so later changes to the
    caller's record do not affect validation. Values that cannot be
    deep-copied (locks, open files, generators) fall back to a shallow
    copy, then to the original reference.
    """

    def __init__(self, value: Any, rules: Iterable[Any] = ()):
        self.value = _snapshot(value)
        self.rules: list[BaseRule] = [as_rule(r) for r in rules]

    def add_rules(self, *rules: Any) -> None:
        self.rules.extend(as_rule(r) for r in rules)

    def run(self, field_name: str, collector: FailureCollector, stop_on_first_failure: bool = False) -> bool:
        """Evaluate every rule in order.

        Returns:
            True if all evaluated rules passed
        """
        passed = True
        for rule in self.rules:
            if _evaluate(rule, field_name, self.value, collector):
                continue
            passed = False
            if stop_on_first_failure:
                break
        return passed

    def __repr__(self) -> str:
        return f"FieldValidator(value={self.value!r}, rules={self.rules!r})"


def _evaluate(rule: BaseRule, field_name: str, value: Any, collector: FailureCollector) -> bool:
    """Run one rule, turning an unexpected exception into a RULE_ERROR failure."""
    before = len(collector)
    try:
        ok = rule.evaluate(field_name, value, collector)
    except Exception as e:
        logger.error("rule_failed", rule=rule.name, field=field_name, error=str(e))
        # One record per rule: drop anything the rule added before raising
        del collector.failures[before:]
        collector.add(field_name, f"rule '{rule.name}' crashed: {e}", ErrorCode.RULE_ERROR)
        return False

    if not ok and get_settings().LOG_FAILURES:
        for failure in collector.failures[before:]:
            logger.debug("rule_rejected", rule=rule.name, field=field_name, message=failure.message, code=failure.code)
    return ok


class StructValidator:
    """Registry of fields under validation for one record.

    Design principles:
        - Deterministic: fields run in registration order, rules in list order
        - Collect-all by default: every rule of every field runs
        - stop_on_first_failure ends the pass at the first failing rule
        - Re-runnable: each validate() builds a fresh collector
    """

    def __init__(self, stop_on_first_failure: Optional[bool] = None):
        """Initialize an empty registry.

        Args:
            stop_on_first_failure: Stop the whole pass at the first failure.
                If None, uses the STOP_ON_FIRST_FAILURE setting.
        """
        if stop_on_first_failure is None:
            stop_on_first_failure = get_settings().STOP_ON_FIRST_FAILURE
        self.stop_on_first_failure = stop_on_first_failure
        self.fields: dict[str, FieldValidator] = {}

    def add_field(self, field_name: str, value: Any, *rules: Any) -> None:
        """Register a field, replacing any existing entry under the same name.

        A replaced field keeps its original position in the run order.
        """
        if not isinstance(field_name, str) or not field_name:
            raise ValueError("field_name must be a non-empty string")
        self.fields[field_name] = FieldValidator(value, rules)

    def add_field_group(self, field_names: Iterable[str], *rules: Any) -> None:
        """Append the same rules to every already registered field in the group.

        Names that are not registered yet are skipped, not created.
        """
        rules = tuple(as_rule(r) for r in rules)
        for field_name in field_names:
            field = self.fields.get(field_name)
            if field is None:
                logger.debug("field_group_skip", field=field_name)
                continue
            field.add_rules(*rules)

    def remove_field(self, field_name: str) -> None:
        """Remove a field by name. Unknown names are ignored."""
        self.fields.pop(field_name, None)

    def field_names(self) -> list[str]:
        return list(self.fields)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, field_name: str) -> FieldValidator:
        return self.fields[field_name]

    def validate(self) -> FailureCollector:
        """Run all rules of all fields and collect the failures.

        Returns:
            FailureCollector holding every failure in discovery order, or
            only the first one when stop_on_first_failure is set
        """
        start_time = time.perf_counter()
        collector = FailureCollector()
        stopped_early = False

        for field_name, field in self.fields.items():
            passed = field.run(field_name, collector, self.stop_on_first_failure)
            if not passed and self.stop_on_first_failure:
                stopped_early = True
                break

        total_duration = (time.perf_counter() - start_time) * 1000

        logger.info(
            "validation_complete",
            fields=len(self.fields),
            failures=collector.count,
            failed_fields=collector.fields(),
            stop_on_first_failure=self.stop_on_first_failure,
            stopped_early=stopped_early,
            duration_ms=round(total_duration, 2),
        )

        return collector

    def validate_or_raise(self) -> FailureCollector:
        """Like validate(), but raise ValidationFailed if anything failed."""
        collector = self.validate()
        collector.raise_if_failed()
        return collector
