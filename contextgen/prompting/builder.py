"""Builds the constraint prompt stack handed to a downstream language model.

The stack has three layers, always in this order: a confinement prompt that
fences the model inside the detected blueprint and signals, a self-validation
checklist, and an output format contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..analyzers.blueprints import Blueprint
from ..analyzers.confidence import ConfidenceLevel
from ..analyzers.signals import ProjectSignals
from ..analyzers.structure import DominantStructure
from ..templating import render_template
from .constants import (
    ALWAYS_EXCLUDED,
    DEFAULT_ALLOWED_SCOPE,
    OUTPUT_CONTRACT,
    SECTION_SEPARATOR,
    VALIDATION_CHECKLIST,
)


@dataclass(frozen=True)
class PromptConstraints:
    excluded_concepts: Tuple[str, ...]
    allowed_scope: Tuple[str, ...]
    confidence_level: ConfidenceLevel
    structural_dominance: DominantStructure


def generate_excluded_concepts(blueprint: Blueprint, signals: ProjectSignals) -> Tuple[str, ...]:
    excluded: List[str] = []
    if not signals.auth_usage_detected and not signals.auth_lib_present:
        excluded += ["SaaS platforms", "Multi-tenant systems", "User dashboards", "Authentication flows"]
    if not signals.has_checkout:
        excluded += ["Payment systems", "E-commerce checkout flows"]
    if not signals.has_dashboard_ui:
        excluded += ["Admin panels", "Data visualization dashboards"]
    if blueprint.output.no_ui:
        excluded += ["User interfaces", "Frontend components"]
    if not blueprint.output.stateful:
        excluded += ["State management systems", "User sessions"]
    if blueprint.output.seo_irrelevant:
        excluded += ["SEO optimization", "Metadata management"]
    excluded.extend(ALWAYS_EXCLUDED)
    return tuple(dict.fromkeys(excluded))


def generate_allowed_scope(blueprint: Blueprint) -> Tuple[str, ...]:
    output = blueprint.output
    table = (
        (output.content_driven, ("Content management", "Content rendering")),
        (output.seo_critical, ("SEO optimization", "Metadata management")),
        (output.cta_driven, ("Call-to-action elements", "Conversion tracking")),
        (output.stateful, ("State management", "User sessions")),
        (output.auth_required, ("Authentication", "User management")),
        (output.data_heavy, ("Data visualization", "Analytics")),
        (output.search_critical, ("Search functionality", "Content indexing")),
    )
    allowed = tuple(item for enabled, items in table if enabled for item in items)
    return allowed or DEFAULT_ALLOWED_SCOPE


def build_confinement_prompt(constraints: PromptConstraints) -> str:
    return render_template(
        "confinement.txt.j2",
        excluded_concepts=constraints.excluded_concepts,
        allowed_scope=constraints.allowed_scope,
        confidence_level=constraints.confidence_level,
        structural_dominance=constraints.structural_dominance,
    )


def build_prompt_stack(
    blueprint: Blueprint,
    signals: ProjectSignals,
    structural_dominance: DominantStructure,
    confidence_level: ConfidenceLevel,
) -> str:
    constraints = PromptConstraints(
        excluded_concepts=generate_excluded_concepts(blueprint, signals),
        allowed_scope=generate_allowed_scope(blueprint),
        confidence_level=confidence_level,
        structural_dominance=structural_dominance,
    )
    return SECTION_SEPARATOR.join(
        (build_confinement_prompt(constraints), VALIDATION_CHECKLIST, OUTPUT_CONTRACT)
    )


__all__ = [
    "PromptConstraints",
    "build_confinement_prompt",
    "build_prompt_stack",
    "generate_allowed_scope",
    "generate_excluded_concepts",
]
