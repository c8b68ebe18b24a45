"""Field Validator: per-field rule evaluation with aggregated failure reporting.

Usage:
    from fieldrules.validators import StructValidator, Required, MinLength

    validator = StructValidator()
    validator.add_field("Name", user.name, Required(), MinLength(3))
    failures = validator.validate()
    if failures.has_failures():
        # Surface failures.render() or iterate failures
"""

from fieldrules.validators.base import BaseRule, FunctionRule, as_rule
from fieldrules.validators.engine import FieldValidator, StructValidator
from fieldrules.validators.models import ErrorCode, FailureCollector, ValidationFailure
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

__all__ = [
    "BaseRule",
    "FunctionRule",
    "as_rule",
    "FieldValidator",
    "StructValidator",
    "ErrorCode",
    "FailureCollector",
    "ValidationFailure",
    "Conditional",
    "Enums",
    "MatchRegex",
    "MaxLength",
    "MaxValue",
    "MinLength",
    "MinValue",
    "Required",
]
