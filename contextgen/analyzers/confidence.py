"""Final confidence: structural match, intent dominance and signal completeness."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from .intent import MAX_CONFIDENCE, IntentResult
from .signals import ProjectSignals
from .structure import StructureValidation

ConfidenceLevel = Literal["high", "medium", "low"]

STRUCTURAL_WEIGHT = 0.6
DOMINANCE_WEIGHT = 0.3
COMPLETENESS_WEIGHT = 0.1

HIGH_THRESHOLD = 0.8
LOW_THRESHOLD = 0.6

REQUIRED_SIGNALS: Tuple[str, ...] = (
    "one_page",
    "has_primary_cta",
    "has_checkout",
    "auth_lib_present",
    "has_dashboard_ui",
    "has_blog_posts",
    "dynamic_routes",
    "has_editorial_flow",
    "content_mutation_frequency",
)


@dataclass(frozen=True)
class ConfidenceFactors:
    structural_match: float
    intent_dominance: float
    signal_completeness: float

    @property
    def combined(self) -> float:
        value = (
            self.structural_match * STRUCTURAL_WEIGHT
            + self.intent_dominance * DOMINANCE_WEIGHT
            + self.signal_completeness * COMPLETENESS_WEIGHT
        )
        return min(max(value, 0.0), MAX_CONFIDENCE)


def get_confidence_factors(
    structure: StructureValidation,
    intent: IntentResult,
    signals: ProjectSignals,
) -> ConfidenceFactors:
    total = intent.total_score
    dominance = intent.top_score / total if total > 0 else 0.5
    defined = sum(1 for name in REQUIRED_SIGNALS if getattr(signals, name, None) is not None)
    return ConfidenceFactors(
        structural_match=structure.structural_confidence,
        intent_dominance=dominance,
        signal_completeness=defined / len(REQUIRED_SIGNALS),
    )


def calculate_confidence(
    structure: StructureValidation,
    intent: IntentResult,
    signals: ProjectSignals,
) -> float:
    """Combine the three factors with weights 0.6/0.3/0.1, capped at 0.95."""
    return get_confidence_factors(structure, intent, signals).combined


def confidence_level(confidence: float) -> ConfidenceLevel:
    if confidence >= HIGH_THRESHOLD:
        return "high"
    if confidence < LOW_THRESHOLD:
        return "low"
    return "medium"


__all__ = [
    "ConfidenceFactors",
    "ConfidenceLevel",
    "REQUIRED_SIGNALS",
    "calculate_confidence",
    "confidence_level",
    "get_confidence_factors",
]
