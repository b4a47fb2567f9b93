"""Canonical Context schema: the stable, immutable output record."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional, Tuple

ENGINE_NAME = "Codebase Context Engine"
ENGINE_VERSION = "1.0.0"

AudienceName = Literal["developers", "end-users", "customers", "internal"]
Level = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class EngineInfo:
    name: str
    version: str
    mode: str
    confidence_level: Level
    analysis_type: str


@dataclass(frozen=True)
class ProjectInfo:
    name: str
    repository_type: str
    blueprint: str
    intent: str
    complexity: Level
    statefulness: str
    seo_relevant: bool
    auth_required: bool


@dataclass(frozen=True)
class AudienceInfo:
    primary: AudienceName
    technical_level: Level


@dataclass(frozen=True)
class ProposalInfo:
    what_it_is: Tuple[str, ...]
    what_it_does: Tuple[str, ...]
    what_it_does_not_do: Tuple[str, ...]
    core_value_proposition: str


@dataclass(frozen=True)
class FrameworkInfo:
    name: str
    version: Optional[str]


@dataclass(frozen=True)
class AuthInfo:
    provider: Optional[str]
    library: Optional[str]


@dataclass(frozen=True)
class DatabaseInfo:
    name: Optional[str]
    orm: Optional[str]


@dataclass(frozen=True)
class CmsInfo:
    name: Optional[str]
    type: Optional[str]


@dataclass(frozen=True)
class TechnicalStack:
    framework: FrameworkInfo
    language: Tuple[str, ...]
    styling: Tuple[str, ...]
    ui_libraries: Tuple[str, ...]
    animation: Tuple[str, ...]
    state_management: Tuple[str, ...]
    auth: Optional[AuthInfo]
    database: Optional[DatabaseInfo]
    cms: Optional[CmsInfo]
    deployment: Optional[str]


@dataclass(frozen=True)
class StructureInfo:
    routing_model: str
    folder_structure: Tuple[str, ...]
    entry_point: str


@dataclass(frozen=True)
class SourceInfo:
    method: str
    confidence: Level


@dataclass(frozen=True)
class CanonicalContext:
    """Final merged record. Field order is the serialized key order."""

    engine: EngineInfo
    project: ProjectInfo
    audience: AudienceInfo
    proposal: ProposalInfo
    technical_stack: TechnicalStack
    structure: StructureInfo
    capabilities: Tuple[str, ...]
    limitations: Tuple[str, ...]
    excluded_concepts: Tuple[str, ...]
    risk_flags: Tuple[str, ...]
    source: SourceInfo

    def to_dict(self) -> Dict[str, Any]:
        return plain_data(asdict(self))


def plain_data(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: plain_data(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_data(item) for item in value]
    return value


__all__ = [
    "AudienceInfo",
    "AuthInfo",
    "CanonicalContext",
    "CmsInfo",
    "DatabaseInfo",
    "ENGINE_NAME",
    "ENGINE_VERSION",
    "EngineInfo",
    "FrameworkInfo",
    "ProjectInfo",
    "ProposalInfo",
    "SourceInfo",
    "StructureInfo",
    "TechnicalStack",
    "plain_data",
]
