"""Structural dominance detection and intent override policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, Tuple

from .intent import IntentName, IntentResult
from .signals import ProjectSignals

DominantStructure = Literal["EDITORIAL", "PRESENTATIONAL", "OPERATIONAL", "HYBRID"]

OVERRIDE_STRUCTURAL_THRESHOLD = 0.8
OVERRIDE_INTENT_CEILING = 0.7


@dataclass(frozen=True)
class StructureOverrides:
    intent: Optional[IntentName] = None
    domain: Optional[str] = None
    type: Optional[str] = None

    def is_empty(self) -> bool:
        return self.intent is None and self.domain is None and self.type is None


@dataclass(frozen=True)
class StructureValidation:
    dominant_structure: DominantStructure
    structural_confidence: float
    overrides: StructureOverrides = field(default_factory=StructureOverrides)
    reasoning: Tuple[str, ...] = ()


@dataclass(frozen=True)
class _StructureRule:
    structure: DominantStructure
    confidence: float
    matches: Callable[[ProjectSignals], bool]
    overrides: StructureOverrides
    reason: str


_EDITORIAL = StructureOverrides(intent="INFORM", domain="content", type="blog")
_PRESENTATIONAL = StructureOverrides(intent="PRESENT", domain="product", type="landing")
_OPERATIONAL = StructureOverrides(intent="OPERATE", domain="service", type="saas")

# Evaluated in order; the first match wins.
STRUCTURE_RULES: Tuple[_StructureRule, ...] = (
    _StructureRule(
        "EDITORIAL",
        0.9,
        lambda s: s.has_blog_posts
        and s.has_editorial_flow
        and s.content_mutation_frequency == "high"
        and s.dynamic_routes,
        _EDITORIAL,
        "Editorial structure detected: blog posts + editorial flow + high content mutation + dynamic routes",
    ),
    _StructureRule(
        "EDITORIAL",
        0.85,
        lambda s: s.has_blog_posts
        and s.has_editorial_flow
        and s.content_mutation_frequency != "low",
        _EDITORIAL,
        "Editorial structure detected: blog posts + editorial flow + content mutation",
    ),
    _StructureRule(
        "PRESENTATIONAL",
        0.85,
        lambda s: s.one_page
        and s.content_mutation_frequency == "low"
        and not s.has_editorial_flow
        and not s.has_blog_posts,
        _PRESENTATIONAL,
        "Presentational structure detected: one page + low content mutation + no editorial flow",
    ),
    _StructureRule(
        "OPERATIONAL",
        0.9,
        lambda s: s.has_dashboard_ui and s.auth_usage_detected and s.app_state,
        _OPERATIONAL,
        "Operational structure detected: dashboard UI + auth usage + app state",
    ),
    _StructureRule(
        "OPERATIONAL",
        0.8,
        lambda s: s.has_dashboard_ui and s.auth_usage_detected,
        _OPERATIONAL,
        "Operational structure detected: dashboard UI + auth usage",
    ),
)


def validate_dominant_structure(signals: ProjectSignals) -> StructureValidation:
    for rule in STRUCTURE_RULES:
        if rule.matches(signals):
            return StructureValidation(
                dominant_structure=rule.structure,
                structural_confidence=rule.confidence,
                overrides=rule.overrides,
                reasoning=(rule.reason,),
            )
    return StructureValidation(
        dominant_structure="HYBRID",
        structural_confidence=0.6,
        reasoning=("Hybrid structure: no single dominant pattern detected",),
    )


def should_override_intent(validation: StructureValidation, intent: IntentResult) -> bool:
    """Strong structure beats a weak intent, and clear structure beats a contradicting one."""
    if (
        validation.structural_confidence >= OVERRIDE_STRUCTURAL_THRESHOLD
        and intent.confidence < OVERRIDE_INTENT_CEILING
    ):
        return True
    if validation.dominant_structure == "EDITORIAL" and intent.primary_intent != "INFORM":
        return True
    if validation.dominant_structure == "OPERATIONAL" and intent.primary_intent != "OPERATE":
        return True
    return False


__all__ = [
    "DominantStructure",
    "STRUCTURE_RULES",
    "StructureOverrides",
    "StructureValidation",
    "should_override_intent",
    "validate_dominant_structure",
]
