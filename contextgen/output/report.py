"""Internal classification report.

The report exposes blueprint names, scores and confidence factors. It exists
for debugging the classifier and must never be served on a public surface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Tuple

from ..analyzers.blueprints import get_blueprint
from ..analyzers.confidence import confidence_level, get_confidence_factors
from ..analyzers.intent import INTENTS
from ..prompting.builder import build_prompt_stack
from ..templating import render_template
from .canonical import to_json

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..pipeline import AnalysisResult


def classification_output(result: "AnalysisResult") -> Dict[str, Any]:
    """Audit record of the scoring path."""
    signals = result.signals
    intent = result.intent
    selection = result.selection
    structure = result.structure
    return {
        "classification": {
            "primary_intent": intent.primary_intent,
            "secondary_intent": intent.secondary_intent,
            "project_type": result.classification.project_type,
            "confidence": result.confidence,
        },
        "signals": {
            "one_page": signals.one_page,
            "has_primary_cta": signals.has_primary_cta,
            "has_checkout": signals.has_checkout,
            "has_auth_library": signals.auth_lib_present,
            "auth_usage_detected": signals.auth_usage_detected,
            "has_dashboard_ui": signals.has_dashboard_ui,
            "has_blog_structure": signals.has_blog_posts or signals.has_editorial_flow,
            "has_dynamic_routes": signals.dynamic_routes,
            "seo_configuration_detected": signals.seo_heavy,
            "content_update_frequency": signals.content_mutation_frequency,
        },
        "scores": {name: intent.scores[name] for name in INTENTS},
        "blueprint": {
            "primary": selection.primary_blueprint,
            "secondary": selection.secondary_blueprint,
            "confidence": selection.confidence,
            "excluded": list(selection.excluded_blueprints),
        },
        "source": {
            "method": "static-analysis",
            "confidence_level": confidence_level(result.confidence),
        },
        "structure": {
            "dominant_structure": structure.dominant_structure,
            "structural_confidence": structure.structural_confidence,
            "overrides_applied": not structure.overrides.is_empty(),
        },
    }


def _key_dependencies(result: "AnalysisResult") -> List[Tuple[str, str]]:
    return [
        (name, result.scan.dependency_version(name) or "unknown")
        for name in result.overview.key_dependencies
    ]


def render_report(result: "AnalysisResult") -> str:
    primary = get_blueprint(result.selection.primary_blueprint)
    secondary = (
        get_blueprint(result.selection.secondary_blueprint)
        if result.selection.secondary_blueprint
        else None
    )
    prompt_stack = build_prompt_stack(
        primary,
        result.signals,
        result.structure.dominant_structure,
        confidence_level(result.confidence),
    )
    text = render_template(
        "report.md.j2",
        primary=primary,
        secondary=secondary,
        confidence=result.confidence,
        structure=result.structure,
        intent=result.intent,
        intent_names=INTENTS,
        final_intent=result.final_intent,
        final_domain=result.final_domain,
        final_type=result.final_type,
        classification=result.classification,
        overview=result.overview,
        scan=result.scan,
        key_dependencies=_key_dependencies(result),
        classification_json=to_json(classification_output(result)),
        factors=get_confidence_factors(result.structure, result.intent, result.signals),
        prompt_stack=prompt_stack,
        summary=render_one_line_summary(result),
    )
    return text.rstrip("\n") + "\n"


def render_one_line_summary(result: "AnalysisResult") -> str:
    primary = get_blueprint(result.selection.primary_blueprint)
    names = primary.name
    if result.selection.secondary_blueprint:
        names += f" + {result.selection.secondary_blueprint}"
    return f"{names}: {primary.objective}. {result.overview.description}"


__all__ = ["classification_output", "render_one_line_summary", "render_report"]
