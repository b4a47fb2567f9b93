"""Intent scoring over ProjectSignals with a fixed weight matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from .scoring import WeightRule, flag, rank, score
from .signals import ProjectSignals

IntentName = Literal["INFORM", "PRESENT", "CONVERT", "OPERATE"]

INTENTS: tuple[IntentName, ...] = ("INFORM", "PRESENT", "CONVERT", "OPERATE")

# Higher wins when scores are within one point of each other.
INTENT_PRIORITY: Mapping[str, int] = MappingProxyType(
    {"OPERATE": 4, "CONVERT": 3, "PRESENT": 2, "INFORM": 1}
)

MAX_CONFIDENCE = 0.95

INTENT_WEIGHTS: tuple[WeightRule, ...] = (
    WeightRule(flag("has_blog_posts"), "INFORM", 3),
    WeightRule(flag("seo_heavy"), "INFORM", 3),
    WeightRule(flag("dynamic_routes"), "INFORM", 1),
    WeightRule(flag("has_primary_cta"), "INFORM", 1),
    WeightRule(flag("seo_heavy"), "PRESENT", 1),
    WeightRule(flag("one_page"), "PRESENT", 2),
    WeightRule(flag("personal_identity"), "PRESENT", 2),
    WeightRule(flag("has_projects"), "PRESENT", 2),
    WeightRule(flag("one_page"), "CONVERT", 2),
    WeightRule(flag("has_primary_cta"), "CONVERT", 3),
    WeightRule(flag("has_checkout"), "CONVERT", 4),
    WeightRule(flag("dynamic_routes"), "OPERATE", 1),
    WeightRule(flag("auth_lib_present"), "OPERATE", 1),
    WeightRule(flag("auth_usage_detected"), "OPERATE", 3),
    WeightRule(flag("has_dashboard_ui"), "OPERATE", 4),
    WeightRule(flag("app_state"), "OPERATE", 2),
)


@dataclass(frozen=True)
class IntentResult:
    primary_intent: IntentName
    secondary_intent: Optional[IntentName]
    scores: Mapping[str, int] = field(default_factory=dict)
    confidence: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))

    @property
    def total_score(self) -> int:
        return sum(self.scores.values())

    @property
    def top_score(self) -> int:
        return max(self.scores.values()) if self.scores else 0


def calculate_intent_scores(signals: ProjectSignals) -> dict[str, int]:
    return score(signals, INTENT_WEIGHTS, INTENTS)


def determine_intent(scores: Mapping[str, int]) -> IntentResult:
    """Resolve primary/secondary intent.

    A lead of more than one point wins outright. Otherwise every intent within
    one point of the top score is ordered by INTENT_PRIORITY.
    """
    ordered = rank(dict(scores))
    top_name, top_score = ordered[0]
    runner_up = ordered[1][1] if len(ordered) > 1 else 0
    gap = top_score - runner_up

    secondary: Optional[str] = None
    if gap > 1:
        primary = top_name
        if gap < 3 and runner_up > 0:
            secondary = ordered[1][0]
    else:
        tied = [item for item in ordered if abs(item[1] - top_score) <= 1]
        tied.sort(key=lambda item: -INTENT_PRIORITY[item[0]])
        primary = tied[0][0]
        if len(tied) > 1 and tied[1][1] > 0:
            secondary = tied[1][0]

    total = sum(scores.values())
    score_dominance = top_score / total if total > 0 else 0.5
    gap_dominance = min(gap / max(top_score, 1), 1.0) if len(ordered) > 1 else 1.0
    confidence = min(score_dominance * 0.6 + gap_dominance * 0.4, MAX_CONFIDENCE)

    return IntentResult(
        primary_intent=primary,  # type: ignore[arg-type]
        secondary_intent=secondary,  # type: ignore[arg-type]
        scores=scores,
        confidence=max(confidence, 0.0),
    )


def detect_intent(signals: ProjectSignals) -> IntentResult:
    return determine_intent(calculate_intent_scores(signals))


__all__ = [
    "INTENTS",
    "INTENT_PRIORITY",
    "INTENT_WEIGHTS",
    "IntentName",
    "IntentResult",
    "MAX_CONFIDENCE",
    "calculate_intent_scores",
    "detect_intent",
    "determine_intent",
]
