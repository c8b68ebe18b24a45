"""Base rule: abstract class every validation rule implements.

Each rule is a standalone, independently testable unit. New rules are added
without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from fieldrules.errors import InvalidRuleError
from fieldrules.validators.models import ErrorCode, FailureCollector


class BaseRule(ABC):
    """Abstract base for all field rules.

    Contract:
        - evaluate() is deterministic: same value → same verdict
        - evaluate() returns True on pass, False on failure
        - on failure it appends exactly one ValidationFailure to the collector
        - wrong-typed values are failures, never exceptions
        - no side effects apart from collector writes
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        """Check one field's value.

        Args:
            field_name: Name the value was registered under
            value: Captured field value (any type)
            collector: Shared collector for the current pass

        Returns:
            True if the value passes, False if a failure was recorded
        """
        ...

    def __call__(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        return self.evaluate(field_name, value, collector)

    def __repr__(self) -> str:
        return f"<{self.name}>"

    # ── Helper Methods ──

    def _fail(
        self,
        collector: FailureCollector,
        field_name: str,
        message: str,
        code: ErrorCode = ErrorCode.UNCATEGORIZED,
    ) -> bool:
        """Record one failure and return the fail signal."""
        collector.add(field_name, message, code)
        return False


class FunctionRule(BaseRule):
    """Adapts a plain callable ``(field_name, value, collector) -> bool | None``.

    A ``None`` return counts as a pass, so simple checks only need to return
    on failure.
    """

    def __init__(self, func: Callable[[str, Any, FailureCollector], Optional[bool]], name: Optional[str] = None):
        self.func = func
        self._name = name or getattr(func, "__name__", "FunctionRule")

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, field_name: str, value: Any, collector: FailureCollector) -> bool:
        return self.func(field_name, value, collector) is not False


def as_rule(obj: Any) -> BaseRule:
    """Coerce a rule or a bare callable into a BaseRule."""
    if isinstance(obj, BaseRule):
        return obj
    if callable(obj):
        return FunctionRule(obj)
    raise InvalidRuleError(f"Expected a rule or callable, got {type(obj).__name__}")
