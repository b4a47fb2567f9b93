"""Blueprint selection: hard exclusions first, then weighted scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..logging import get_logger
from .blueprints import BLUEPRINT_FOR_TYPE, DEFAULT_BLUEPRINT
from .intent import MAX_CONFIDENCE, IntentResult
from .scoring import ExclusionRule, WeightRule, absent, all_of, any_of, excluded, flag, rank, score
from .signals import ProjectSignals
from .structure import StructureValidation

logger = get_logger("selector")

FALLBACK_CONFIDENCE = 0.5
NON_POSITIVE_TOTAL_CONFIDENCE = 0.7
SECONDARY_GAP = 3

# Table order is also the tie-break order when scores are equal.
SCORED_BLUEPRINTS: Tuple[str, ...] = (
    "LandingCROBlueprint",
    "PortfolioBlueprint",
    "ContentSiteBlueprint",
    "SaaSAppBlueprint",
    "DashboardBlueprint",
    "EcommerceBlueprint",
    "DocumentationBlueprint",
    "InternalToolBlueprint",
    "APIServiceBlueprint",
    "AutomationScriptBlueprint",
)


def _many_pages(signals: ProjectSignals) -> bool:
    return signals.page_count > 5


def _low_mutation(signals: ProjectSignals) -> bool:
    return signals.content_mutation_frequency == "low"


EXCLUSION_RULES: Tuple[ExclusionRule, ...] = (
    ExclusionRule(
        all_of(absent("has_editorial_flow"), absent("dynamic_routes"), _low_mutation),
        "ContentSiteBlueprint",
        "no editorial flow, no dynamic routes and low content mutation",
    ),
    ExclusionRule(
        all_of(absent("auth_usage_detected"), absent("has_dashboard_ui")),
        "SaaSAppBlueprint",
        "no auth usage and no dashboard",
    ),
    ExclusionRule(absent("has_checkout"), "EcommerceBlueprint", "no checkout"),
    ExclusionRule(flag("has_checkout"), "PortfolioBlueprint", "portfolios never transact"),
    ExclusionRule(
        all_of(flag("has_dashboard_ui"), flag("auth_usage_detected")),
        "PortfolioBlueprint",
        "portfolios have no multi-user dashboards",
    ),
    ExclusionRule(
        all_of(absent("has_dashboard_ui"), absent("app_state")),
        "DashboardBlueprint",
        "no dashboard and no app state",
    ),
    ExclusionRule(
        any_of(flag("has_dashboard_ui"), flag("one_page")),
        "APIServiceBlueprint",
        "has a dashboard or a single page UI",
    ),
    ExclusionRule(
        any_of(_many_pages, flag("has_dashboard_ui")),
        "AutomationScriptBlueprint",
        "more than five pages or a dashboard",
    ),
)

BLUEPRINT_WEIGHTS: Tuple[WeightRule, ...] = (
    WeightRule(flag("one_page"), "LandingCROBlueprint", 3),
    WeightRule(flag("has_primary_cta"), "LandingCROBlueprint", 4),
    WeightRule(flag("personal_identity"), "LandingCROBlueprint", 1),
    WeightRule(flag("seo_heavy"), "LandingCROBlueprint", 1),
    WeightRule(flag("has_blog_posts"), "LandingCROBlueprint", -2),
    WeightRule(flag("has_editorial_flow"), "LandingCROBlueprint", -2),
    WeightRule(flag("auth_usage_detected"), "LandingCROBlueprint", -3),
    WeightRule(flag("has_projects"), "PortfolioBlueprint", 6),
    WeightRule(flag("personal_identity"), "PortfolioBlueprint", 4),
    WeightRule(flag("seo_heavy"), "PortfolioBlueprint", 2),
    WeightRule(flag("one_page"), "PortfolioBlueprint", 1),
    WeightRule(flag("has_primary_cta"), "PortfolioBlueprint", 1),
    WeightRule(flag("has_blog_posts"), "ContentSiteBlueprint", 5),
    WeightRule(flag("has_editorial_flow"), "ContentSiteBlueprint", 4),
    WeightRule(flag("seo_heavy"), "ContentSiteBlueprint", 4),
    WeightRule(flag("dynamic_routes"), "ContentSiteBlueprint", 3),
    WeightRule(flag("one_page"), "ContentSiteBlueprint", -1),
    WeightRule(
        all_of(flag("has_primary_cta"), absent("has_editorial_flow")), "ContentSiteBlueprint", -2
    ),
    WeightRule(flag("auth_usage_detected"), "SaaSAppBlueprint", 5),
    WeightRule(flag("has_dashboard_ui"), "SaaSAppBlueprint", 5),
    WeightRule(flag("app_state"), "SaaSAppBlueprint", 3),
    WeightRule(flag("one_page"), "SaaSAppBlueprint", -2),
    WeightRule(absent("auth_usage_detected"), "SaaSAppBlueprint", -4),
    WeightRule(flag("has_dashboard_ui"), "DashboardBlueprint", 5),
    WeightRule(flag("app_state"), "DashboardBlueprint", 4),
    WeightRule(flag("auth_usage_detected"), "DashboardBlueprint", 4),
    WeightRule(flag("one_page"), "DashboardBlueprint", -3),
    WeightRule(flag("seo_heavy"), "DashboardBlueprint", -3),
    WeightRule(flag("has_checkout"), "EcommerceBlueprint", 5),
    WeightRule(flag("has_primary_cta"), "EcommerceBlueprint", 2),
    WeightRule(absent("has_checkout"), "EcommerceBlueprint", -5),
)

INTENT_BONUSES: Mapping[str, Tuple[Tuple[str, int], ...]] = MappingProxyType(
    {
        "CONVERT": (("LandingCROBlueprint", 2), ("EcommerceBlueprint", 1)),
        "PRESENT": (("PortfolioBlueprint", 2), ("LandingCROBlueprint", 1)),
        "INFORM": (("ContentSiteBlueprint", 2),),
        "OPERATE": (("SaaSAppBlueprint", 2), ("DashboardBlueprint", 2)),
    }
)


@dataclass(frozen=True)
class BlueprintSelection:
    primary_blueprint: str
    secondary_blueprint: Optional[str]
    confidence: float
    excluded_blueprints: Tuple[str, ...]
    scores: Mapping[str, int] = field(default_factory=dict)
    forced: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))


def exclude_impossible_blueprints(signals: ProjectSignals) -> Tuple[str, ...]:
    return excluded(signals, EXCLUSION_RULES)


def calculate_blueprint_scores(signals: ProjectSignals, intent: IntentResult) -> Dict[str, int]:
    scores = score(signals, BLUEPRINT_WEIGHTS, SCORED_BLUEPRINTS)
    for name, bonus in INTENT_BONUSES.get(intent.primary_intent, ()):
        scores[name] += bonus
    return scores


def _forced_blueprint(
    signals: ProjectSignals,
    structure: StructureValidation,
    excluded_names: Tuple[str, ...],
) -> Optional[str]:
    forced_type = structure.overrides.type
    if forced_type is None:
        return None
    name = BLUEPRINT_FOR_TYPE.get(forced_type)
    if name is None or name in excluded_names:
        return None
    # A one-page personal site with projects is a portfolio, not a sales page.
    if (
        name == "LandingCROBlueprint"
        and signals.has_projects
        and signals.personal_identity
        and "PortfolioBlueprint" not in excluded_names
    ):
        return "PortfolioBlueprint"
    return name


def select_blueprint(
    signals: ProjectSignals,
    intent: IntentResult,
    structure: StructureValidation | None = None,
) -> BlueprintSelection:
    """Pick primary/secondary blueprints.

    ``intent`` must already carry the final (possibly overridden) primary
    intent; it only contributes the intent bonus.
    """
    excluded_names = exclude_impossible_blueprints(signals)

    if structure is not None:
        forced = _forced_blueprint(signals, structure, excluded_names)
        if forced is not None:
            logger.debug("Structure override forces %s", forced)
            return BlueprintSelection(
                primary_blueprint=forced,
                secondary_blueprint=None,
                confidence=min(max(structure.structural_confidence, 0.0), MAX_CONFIDENCE),
                excluded_blueprints=excluded_names,
                forced=True,
            )

    scores = {
        name: value
        for name, value in calculate_blueprint_scores(signals, intent).items()
        if name not in excluded_names
    }
    ordered = rank(scores)
    if not ordered:
        return BlueprintSelection(
            primary_blueprint=DEFAULT_BLUEPRINT,
            secondary_blueprint=None,
            confidence=FALLBACK_CONFIDENCE,
            excluded_blueprints=excluded_names,
        )

    primary, primary_score = ordered[0]
    secondary = None
    if len(ordered) > 1 and primary_score - ordered[1][1] < SECONDARY_GAP:
        secondary = ordered[1][0]

    total = sum(value for _, value in ordered)
    confidence = primary_score / total if total > 0 else NON_POSITIVE_TOTAL_CONFIDENCE

    return BlueprintSelection(
        primary_blueprint=primary,
        secondary_blueprint=secondary,
        confidence=min(max(confidence, 0.0), MAX_CONFIDENCE),
        excluded_blueprints=excluded_names,
        scores=scores,
    )


__all__ = [
    "BLUEPRINT_WEIGHTS",
    "BlueprintSelection",
    "EXCLUSION_RULES",
    "INTENT_BONUSES",
    "SCORED_BLUEPRINTS",
    "calculate_blueprint_scores",
    "exclude_impossible_blueprints",
    "select_blueprint",
]
