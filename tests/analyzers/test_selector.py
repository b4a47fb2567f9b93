from __future__ import annotations

from dataclasses import replace

import pytest

from contextgen.analyzers.intent import IntentResult, detect_intent
from contextgen.analyzers.selector import (
    NON_POSITIVE_TOTAL_CONFIDENCE,
    exclude_impossible_blueprints,
    select_blueprint,
)
from contextgen.analyzers.structure import (
    StructureOverrides,
    StructureValidation,
    validate_dominant_structure,
)
from tests._fixtures.projects import (
    BLOG,
    LANDING,
    PORTFOLIO,
    SAAS,
    SHOP,
    blank_signals,
    signals_for,
)


def test_exclusions_for_a_static_blog() -> None:
    excluded = exclude_impossible_blueprints(signals_for(BLOG, "acme-blog"))

    assert "ContentSiteBlueprint" not in excluded
    assert "SaaSAppBlueprint" in excluded
    assert "EcommerceBlueprint" in excluded
    assert "DashboardBlueprint" in excluded


def test_checkout_excludes_portfolio() -> None:
    excluded = exclude_impossible_blueprints(signals_for(SHOP, "acme-shop"))

    assert "PortfolioBlueprint" in excluded
    assert "EcommerceBlueprint" not in excluded


def test_scored_selection_for_shop() -> None:
    signals = signals_for(SHOP, "acme-shop")

    selection = select_blueprint(signals, detect_intent(signals))

    assert selection.primary_blueprint == "EcommerceBlueprint"
    assert selection.secondary_blueprint == "LandingCROBlueprint"
    assert selection.scores["EcommerceBlueprint"] == 8
    assert selection.scores["LandingCROBlueprint"] == 6
    assert selection.confidence == pytest.approx(8 / 14)
    assert not selection.forced


@pytest.mark.parametrize(
    ("files", "repo_name", "expected"),
    [
        (BLOG, "acme-blog", "ContentSiteBlueprint"),
        (SAAS, "acme-app", "SaaSAppBlueprint"),
        (LANDING, "acme-launch", "LandingCROBlueprint"),
        (PORTFOLIO, "jane-portfolio", "PortfolioBlueprint"),
    ],
)
def test_structure_forces_blueprint(files, repo_name: str, expected: str) -> None:
    signals = signals_for(files, repo_name)
    structure = validate_dominant_structure(signals)

    selection = select_blueprint(signals, detect_intent(signals), structure)

    assert selection.forced
    assert selection.primary_blueprint == expected
    assert selection.secondary_blueprint is None
    assert selection.confidence == structure.structural_confidence


def test_excluded_forced_blueprint_falls_back_to_scoring() -> None:
    signals = signals_for(LANDING, "acme-launch")
    structure = StructureValidation(
        "OPERATIONAL", 0.9, overrides=StructureOverrides(type="ecommerce")
    )

    selection = select_blueprint(signals, detect_intent(signals), structure)

    assert not selection.forced
    assert selection.primary_blueprint != "EcommerceBlueprint"


def test_non_positive_total_uses_fixed_confidence() -> None:
    signals = blank_signals()
    intent = IntentResult(primary_intent="INFORM", secondary_intent=None)

    selection = select_blueprint(signals, intent)

    assert selection.primary_blueprint == "LandingCROBlueprint"
    assert selection.secondary_blueprint == "PortfolioBlueprint"
    assert selection.confidence == NON_POSITIVE_TOTAL_CONFIDENCE


@pytest.mark.parametrize(
    ("files", "repo_name"),
    [
        (BLOG, "acme-blog"),
        (SAAS, "acme-app"),
        (LANDING, "acme-launch"),
        (PORTFOLIO, "jane-portfolio"),
        (SHOP, "acme-shop"),
    ],
)
@pytest.mark.parametrize("intent_name", ["INFORM", "PRESENT", "CONVERT", "OPERATE"])
def test_selection_never_returns_an_excluded_blueprint(files, repo_name: str, intent_name: str) -> None:
    signals = signals_for(files, repo_name)
    intent = replace(detect_intent(signals), primary_intent=intent_name)
    structure = validate_dominant_structure(signals)

    for selection in (select_blueprint(signals, intent), select_blueprint(signals, intent, structure)):
        assert selection.primary_blueprint not in selection.excluded_blueprints
        assert selection.secondary_blueprint not in selection.excluded_blueprints
