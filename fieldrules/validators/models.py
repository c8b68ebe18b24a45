"""Validation models: error codes, the failure record, and the failure collector.

Everything here is in-memory and deterministic: same registrations → same
failures, in the same order.
"""

from enum import IntEnum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldrules.errors import ValidationFailed


class ErrorCode(IntEnum):
    """Numeric failure categories for every standard rule.

    0 means "uncategorized" and is left out of rendered reports.
    """

    UNCATEGORIZED = 0

    # Presence
    REQUIRED = 1001
    REQUIRED_CUSTOM = 1002

    # Length
    NOT_A_STRING = 1003
    TOO_SHORT = 1004

    # Magnitude
    NOT_AN_INTEGER = 1005
    TOO_SMALL = 1006

    # Format / enum membership
    PATTERN_NOT_A_STRING = 1007
    FORMAT_INVALID = 1008
    NOT_IN_ENUM = 1009

    # Upper bounds
    TOO_LONG = 1010
    TOO_LARGE = 1011

    # A rule raised instead of reporting
    RULE_ERROR = 1099


class ValidationFailure(BaseModel):
    """A single validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(min_length=1, description="Name of the failing field")
    message: str = Field(description="Human-readable description of the violation")
    code: int = Field(default=ErrorCode.UNCATEGORIZED, description="Numeric category, 0 = uncategorized")

    def __str__(self) -> str:
        return f"Field '{self.field}': {self.message}"


class FailureCollector(BaseModel):
    """Ordered, append-only accumulation of failures for one validation pass.

    Order is discovery order: fields in registration order, rules in
    registration order within a field.
    """

    failures: list[ValidationFailure] = Field(default_factory=list)

    def add(self, field: str, message: str, code: int = ErrorCode.UNCATEGORIZED) -> ValidationFailure:
        """Append a failure. No deduplication: one entry per failing rule."""
        failure = ValidationFailure(field=field, message=message, code=int(code))
        self.failures.append(failure)
        return failure

    def has_failures(self) -> bool:
        return len(self.failures) > 0

    @property
    def count(self) -> int:
        return len(self.failures)

    def __len__(self) -> int:
        return len(self.failures)

    def __iter__(self) -> Iterator[ValidationFailure]:  # type: ignore[override]
        return iter(self.failures)

    def first(self) -> Optional[ValidationFailure]:
        return self.failures[0] if self.failures else None

    def for_field(self, field: str) -> list[ValidationFailure]:
        """All failures recorded against one field, in discovery order."""
        return [f for f in self.failures if f.field == field]

    def fields(self) -> list[str]:
        """Distinct failing field names, in the order they first failed."""
        return list(dict.fromkeys(f.field for f in self.failures))

    def summary(self) -> dict[str, int]:
        """Count of failures per field."""
        counts: dict[str, int] = {}
        for failure in self.failures:
            counts[failure.field] = counts.get(failure.field, 0) + 1
        return counts

    def error_text(self) -> str:
        """Short form: one ``Field 'x': message`` line per failure."""
        return "".join(f"{failure}\n" for failure in self.failures)

    def render(self) -> str:
        """Multi-line diagnostic report. Not meant to be parsed."""
        if not self.has_failures():
            return "No errors"

        blocks = []
        for i, failure in enumerate(self.failures, start=1):
            lines = [
                f"Error {i}:",
                f"  Field: {failure.field}",
                f"  Message: {failure.message}",
            ]
            if failure.code != 0:
                lines.append(f"  Code: {failure.code}")
            blocks.append("\n".join(lines) + "\n\n")
        return "".join(blocks)

    def raise_if_failed(self) -> None:
        """Raise ValidationFailed carrying this collector if anything failed."""
        if self.has_failures():
            raise ValidationFailed(self)

    def __str__(self) -> str:
        return self.render()
