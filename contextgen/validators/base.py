"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Protocol, Sequence


@dataclass
class ValidationIssue:
    """Represents a single invariant violation in a rendered payload."""

    path: str
    detail: str


class ValidationError(RuntimeError):
    """Raised when validation fails for one or more fields."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


class Validator(Protocol):
    """Protocol implemented by payload validators."""

    name: str

    def validate(self, payload: Mapping[str, Any]) -> List[ValidationIssue]:
        """Run validation and return any issues."""


__all__ = ["ValidationError", "ValidationIssue", "Validator"]
