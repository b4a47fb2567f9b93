"""Renderers for the public projection and the internal report."""

from .canonical import (
    CanonicalOutput,
    canonical_json,
    generate_outputs,
    public_json,
    render_markdown,
    render_prompt,
    render_summary,
)
from .public import PublicContext, build_public_context, derive_audience, derive_content_nature
from .report import classification_output, render_report

__all__ = [
    "CanonicalOutput",
    "PublicContext",
    "build_public_context",
    "canonical_json",
    "classification_output",
    "derive_audience",
    "derive_content_nature",
    "generate_outputs",
    "public_json",
    "render_markdown",
    "render_prompt",
    "render_report",
    "render_summary",
]
