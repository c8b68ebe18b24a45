"""fieldrules: declarative, composable per-field validation."""

from fieldrules.errors import FieldRulesError, InvalidRuleError, ValidationFailed
from fieldrules.validators import (
    BaseRule,
    Conditional,
    Enums,
    ErrorCode,
    FailureCollector,
    FieldValidator,
    FunctionRule,
    MatchRegex,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    Required,
    StructValidator,
    ValidationFailure,
    as_rule,
)

__version__ = "0.1.0"

__all__ = [
    "FieldRulesError",
    "InvalidRuleError",
    "ValidationFailed",
    "BaseRule",
    "Conditional",
    "Enums",
    "ErrorCode",
    "FailureCollector",
    "FieldValidator",
    "FunctionRule",
    "MatchRegex",
    "MaxLength",
    "MaxValue",
    "MinLength",
    "MinValue",
    "Required",
    "StructValidator",
    "ValidationFailure",
    "as_rule",
]
