from __future__ import annotations

import json
import threading

import pytest

from contextgen.config import OUTPUT_FORMATS
from contextgen.normalizer import EmptyProjectError, IngestionCancelledError
from contextgen.pipeline import Pipeline, analyze_mapping, analyze_path
from tests._fixtures.projects import BLOG, LANDING, PORTFOLIO, SAAS, SHOP, analyze


@pytest.mark.parametrize(
    ("files", "repo_name", "intent", "blueprint"),
    [
        (BLOG, "acme-blog", "INFORM", "ContentSiteBlueprint"),
        (SAAS, "acme-app", "OPERATE", "SaaSAppBlueprint"),
        (LANDING, "acme-launch", "PRESENT", "LandingCROBlueprint"),
        (PORTFOLIO, "jane-portfolio", "PRESENT", "PortfolioBlueprint"),
        (SHOP, "acme-shop", "CONVERT", "EcommerceBlueprint"),
    ],
)
def test_scenarios(files, repo_name: str, intent: str, blueprint: str) -> None:
    result = analyze(files, repo_name)

    assert result.final_intent == intent
    assert result.blueprint.name == blueprint
    assert result.context.project.blueprint == blueprint
    assert result.context.project.name == repo_name


def test_content_site_is_static_and_public() -> None:
    result = analyze(BLOG, "acme-blog")

    assert result.context.project.intent == "inform"
    assert result.context.project.statefulness == "stateless"
    assert not result.context.project.auth_required
    assert result.confidence > 0.85


def test_application_requires_auth() -> None:
    result = analyze(SAAS, "acme-app")

    assert result.rules.repository_type == "frontend"
    assert result.context.project.statefulness == "stateful"
    assert result.context.project.auth_required
    assert "Authentication flows" not in result.context.excluded_concepts


def test_shop_keeps_payments_in_scope() -> None:
    result = analyze(SHOP, "acme-shop")

    assert "Payment systems" not in result.context.excluded_concepts
    assert "Payment systems" in analyze(BLOG, "acme-blog").context.excluded_concepts


def test_structure_override_only_changes_the_final_intent() -> None:
    result = analyze(LANDING, "acme-launch")

    assert result.override_applied
    assert result.intent.primary_intent == "CONVERT"
    assert result.final_intent == "PRESENT"
    assert result.context.project.intent == "present"
    # The heuristic classifier runs independently and is not overridden.
    assert result.classification.intent == "sell"


def test_runs_are_deterministic() -> None:
    first = analyze(SAAS, "acme-app")
    second = analyze(dict(reversed(list(SAAS.items()))), "acme-app")

    assert first.json == second.json
    assert first.markdown == second.markdown
    assert first.prompt == second.prompt
    assert first.render("report") == second.render("report")


@pytest.mark.parametrize("output_format", OUTPUT_FORMATS)
def test_render_every_format(output_format: str) -> None:
    text = analyze(BLOG, "acme-blog").render(output_format)

    assert text
    if output_format in ("json", "canonical"):
        assert json.loads(text)["project"]["name"] == "acme-blog"


def test_render_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown output format 'yaml'"):
        analyze(BLOG).render("yaml")


def test_analyze_path_uses_directory_name(repo_builder) -> None:
    repo_builder.write(LANDING)

    result = analyze_path(repo_builder.path())

    assert result.repo_name == "repo"
    assert result.blueprint.name == "LandingCROBlueprint"


def test_analyze_path_prefers_configured_project_name(repo_builder) -> None:
    repo_builder.write(
        {
            **BLOG,
            ".contextgen.yml": """
                project:
                  name: acme-journal
                exclude_paths:
                  - drafts/
            """,
            "drafts/secret.mdx": "# draft\n",
        }
    )

    result = analyze_path(repo_builder.path())

    assert result.context.project.name == "acme-journal"
    assert "drafts/secret.mdx" not in result.normalized.files


def test_explicit_repo_name_wins(repo_builder) -> None:
    repo_builder.write(BLOG)

    assert analyze_path(repo_builder.path(), repo_name="override").repo_name == "override"


def test_empty_mapping_is_rejected() -> None:
    with pytest.raises(EmptyProjectError):
        analyze_mapping([], None, {})


def test_cancelled_run_stops_before_scanning() -> None:
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(IngestionCancelledError, match="cancelled during scan"):
        Pipeline().analyze_mapping(list(BLOG), None, BLOG, cancel_event=cancel)


def test_expired_timeout_aborts_the_run(repo_builder) -> None:
    repo_builder.write(BLOG)

    with pytest.raises(IngestionCancelledError, match="timed out"):
        Pipeline().analyze_path(repo_builder.path(), timeout=-1)
