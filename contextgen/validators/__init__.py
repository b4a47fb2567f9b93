"""Validation package for public outputs."""

from .base import ValidationError, ValidationIssue, Validator
from .public_safety import FORBIDDEN_KEYS, PublicSafetyValidator, ensure_public_safe

__all__ = [
    "FORBIDDEN_KEYS",
    "PublicSafetyValidator",
    "ValidationError",
    "ValidationIssue",
    "Validator",
    "ensure_public_safe",
]
