"""Constraint prompt stack for downstream language models."""

from .builder import (
    PromptConstraints,
    build_prompt_stack,
    generate_allowed_scope,
    generate_excluded_concepts,
)

__all__ = [
    "PromptConstraints",
    "build_prompt_stack",
    "generate_allowed_scope",
    "generate_excluded_concepts",
]
