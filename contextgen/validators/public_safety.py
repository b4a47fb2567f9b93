"""Validator that blocks internal classification data from public payloads."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple

from .base import ValidationError, ValidationIssue, Validator

FORBIDDEN_KEYS: Tuple[str, ...] = (
    "engine",
    "blueprint",
    "confidence",
    "confidence_level",
    "risk_flags",
    "reasoning",
    "scores",
)


class PublicSafetyValidator(Validator):
    """Rejects payloads carrying internal keys or any numeric value."""

    name = "public_safety"

    def __init__(self, *, forbidden_keys: Iterable[str] = FORBIDDEN_KEYS) -> None:
        self._forbidden = frozenset(forbidden_keys)

    def validate(self, payload: Mapping[str, Any]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        self._walk(payload, "$", issues)
        return issues

    def _walk(self, value: Any, path: str, issues: List[ValidationIssue]) -> None:
        if isinstance(value, Mapping):
            for key, item in value.items():
                child = f"{path}.{key}"
                if key in self._forbidden:
                    issues.append(ValidationIssue(path=child, detail=f"internal key '{key}'"))
                self._walk(item, child, issues)
            return
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self._walk(item, f"{path}[{index}]", issues)
            return
        # bool is an int subclass and is allowed.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            issues.append(ValidationIssue(path=path, detail=f"numeric value {value!r}"))


def ensure_public_safe(payload: Mapping[str, Any]) -> None:
    """Raise ValidationError when ``payload`` leaks internal data."""
    issues = PublicSafetyValidator().validate(payload)
    if issues:
        summary = "; ".join(f"{issue.path}: {issue.detail}" for issue in issues)
        raise ValidationError(f"Public payload is not safe: {summary}", issues)


__all__ = ["FORBIDDEN_KEYS", "PublicSafetyValidator", "ensure_public_safe"]
