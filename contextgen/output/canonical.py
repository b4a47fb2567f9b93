"""Canonical outputs: public JSON, fixed-section Markdown, AI prompt and user summary.

Every renderer works on the public projection only. The same context always
renders byte-identical text.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from ..context.schema import CanonicalContext
from ..templating import render_template
from .public import build_public_context, derive_content_nature


@dataclass(frozen=True)
class CanonicalOutput:
    json: str
    markdown: str
    prompt: str
    summary: str


def to_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def public_json(context: CanonicalContext) -> str:
    return to_json(build_public_context(context).to_dict())


def canonical_json(context: CanonicalContext) -> str:
    """Full canonical record, internal fields included. Not for public surfaces."""
    return to_json(context.to_dict())


def _template_fields(context: CanonicalContext) -> Dict[str, Any]:
    public = build_public_context(context).to_dict()
    return {
        "project": public["project"],
        "audience": public["audience"],
        "proposal": public["proposal"],
        "stack": public["technology_stack"],
        "structure": public["structure"],
        "capabilities": public["capabilities"],
        "limitations": public["limitations"],
        "excluded_concepts": public["excluded_concepts"],
    }


def render_markdown(context: CanonicalContext) -> str:
    text = render_template("canonical.md.j2", **_template_fields(context))
    return text.rstrip("\n") + "\n"


def render_prompt(context: CanonicalContext) -> str:
    return render_template("prompt.txt.j2", context_json=public_json(context))


def render_summary(context: CanonicalContext) -> str:
    text = render_template(
        "summary.md.j2",
        content_nature=derive_content_nature(context),
        **_template_fields(context),
    )
    return text.rstrip("\n") + "\n"


def generate_outputs(context: CanonicalContext) -> CanonicalOutput:
    return CanonicalOutput(
        json=public_json(context),
        markdown=render_markdown(context),
        prompt=render_prompt(context),
        summary=render_summary(context),
    )


__all__ = [
    "CanonicalOutput",
    "canonical_json",
    "generate_outputs",
    "public_json",
    "render_markdown",
    "render_prompt",
    "render_summary",
    "to_json",
]
