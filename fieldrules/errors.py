"""Exception types.

Rule violations are never raised: they are recorded in a FailureCollector.
These exceptions cover misconfigured rules and the opt-in "raise if anything
failed" helpers.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldrules.validators.models import FailureCollector


class FieldRulesError(Exception):
    """Base class for all fieldrules exceptions."""


class InvalidRuleError(FieldRulesError, ValueError):
    """A rule was constructed or registered with an unusable configuration."""


class ValidationFailed(FieldRulesError):
    """Raised by raise_if_failed() / validate_or_raise() when failures exist."""

    def __init__(self, failures: "FailureCollector"):
        self.failures = failures
        super().__init__(failures.error_text().rstrip("\n"))
