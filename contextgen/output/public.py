"""Public projection of the Canonical Context.

The projection is an explicit allow-list: each public field is copied by
name, so nothing added to the canonical schema later leaks by default.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from ..context.schema import CanonicalContext, ProposalInfo, plain_data

PORTFOLIO_AUDIENCE = (
    "Recruiters evaluating technical capability",
    "Hiring managers",
    "Technical reviewers",
    "Potential freelance clients",
)
APPLICATION_AUDIENCE = ("End users", "Internal stakeholders", "Developers maintaining the system")
COMMERCE_AUDIENCE = ("Customers", "Operations", "Marketing")
CONTENT_AUDIENCE = ("Readers", "Content editors", "Search traffic")
BACKEND_AUDIENCE = ("Developers integrating the API", "Platform engineers", "Internal services")
DEFAULT_AUDIENCE = ("End users", "Developers", "Stakeholders")


@dataclass(frozen=True)
class PublicProject:
    name: str
    repository_type: str
    intent: str
    complexity: str
    statefulness: str
    seo_relevant: bool
    auth_required: bool


@dataclass(frozen=True)
class PublicStack:
    framework: str
    language: Tuple[str, ...]
    styling: Tuple[str, ...]
    ui_libraries: Tuple[str, ...]
    deployment: Optional[str]


@dataclass(frozen=True)
class PublicStructure:
    routing_model: str
    entry_point: str


@dataclass(frozen=True)
class PublicContext:
    project: PublicProject
    audience: Tuple[str, ...]
    proposal: ProposalInfo
    technology_stack: PublicStack
    structure: PublicStructure
    capabilities: Tuple[str, ...]
    limitations: Tuple[str, ...]
    excluded_concepts: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return plain_data(asdict(self))


def derive_audience(context: CanonicalContext) -> Tuple[str, ...]:
    """Map the canonical record to human reader roles."""
    if any(
        "portfolio" in item.lower() or "showcase" in item.lower()
        for item in context.proposal.what_it_is
    ):
        return PORTFOLIO_AUDIENCE

    capabilities = {item.lower() for item in context.capabilities}
    if "user authentication" in capabilities or "user dashboard" in capabilities:
        return APPLICATION_AUDIENCE
    if "e-commerce transactions" in capabilities:
        return COMMERCE_AUDIENCE
    if "content publishing" in capabilities:
        return CONTENT_AUDIENCE
    if context.project.repository_type == "backend":
        return BACKEND_AUDIENCE
    return DEFAULT_AUDIENCE


def derive_content_nature(context: CanonicalContext) -> str:
    bits = ["Mostly stateless" if context.project.statefulness == "stateless" else "Stateful"]
    if context.project.seo_relevant:
        bits.append("SEO-relevant")
    capabilities = [item.lower() for item in context.capabilities]
    for needle, label in (
        ("internationalization", "Multilingual (i18n)"),
        ("content publishing", "Content-driven"),
        ("static site generation", "Static-export friendly"),
    ):
        if any(needle in item for item in capabilities):
            bits.append(label)
    return ", ".join(bits)


def build_public_context(context: CanonicalContext) -> PublicContext:
    project = context.project
    stack = context.technical_stack
    return PublicContext(
        project=PublicProject(
            name=project.name,
            repository_type=project.repository_type,
            intent=project.intent,
            complexity=project.complexity,
            statefulness=project.statefulness,
            seo_relevant=project.seo_relevant,
            auth_required=project.auth_required,
        ),
        audience=derive_audience(context),
        proposal=ProposalInfo(
            what_it_is=context.proposal.what_it_is,
            what_it_does=context.proposal.what_it_does,
            what_it_does_not_do=context.proposal.what_it_does_not_do,
            core_value_proposition=context.proposal.core_value_proposition,
        ),
        technology_stack=PublicStack(
            framework=stack.framework.name,
            language=stack.language,
            styling=stack.styling,
            ui_libraries=stack.ui_libraries,
            deployment=stack.deployment,
        ),
        structure=PublicStructure(
            routing_model=context.structure.routing_model,
            entry_point=context.structure.entry_point,
        ),
        capabilities=context.capabilities,
        limitations=context.limitations,
        excluded_concepts=context.excluded_concepts,
    )


__all__ = [
    "PublicContext",
    "PublicProject",
    "PublicStack",
    "PublicStructure",
    "build_public_context",
    "derive_audience",
    "derive_content_nature",
]
