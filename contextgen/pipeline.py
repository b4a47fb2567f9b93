"""Pipeline orchestration: normalize, classify, assemble and render one project."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .analyzers.blueprints import Blueprint, get_blueprint
from .analyzers.classifier import ProjectClassification, classify_project
from .analyzers.confidence import calculate_confidence
from .analyzers.evidence import EvidenceGraph, build_evidence_graph
from .analyzers.intent import IntentName, IntentResult, detect_intent
from .analyzers.rules import RuleResult, apply_rules
from .analyzers.selector import BlueprintSelection, select_blueprint
from .analyzers.signals import ProjectSignals, collect_signals
from .analyzers.structure import (
    StructureValidation,
    should_override_intent,
    validate_dominant_structure,
)
from .config import ConfigError, IngestionSettings, OUTPUT_FORMATS, load_config
from .context.assembler import assemble_context
from .context.proposal import Proposal, generate_proposal
from .context.schema import CanonicalContext
from .context.scope import ScopeDefinition, generate_scope_definition
from .logging import get_logger, log_stage
from .models import NormalizedProject, ProjectOverview, ScanResult
from .normalizer import RunBudget, normalize_mapping, normalize_project
from .output.canonical import CanonicalOutput, canonical_json, generate_outputs
from .output.public import build_public_context
from .output.report import render_report
from .scanner import scan_project, summarize_project
from .validators import PublicSafetyValidator, ValidationError


@dataclass(frozen=True)
class AnalysisResult:
    """Every stage output of one run, plus the rendered public outputs."""

    repo_name: Optional[str]
    normalized: NormalizedProject
    scan: ScanResult
    overview: ProjectOverview
    classification: ProjectClassification
    signals: ProjectSignals
    intent: IntentResult
    structure: StructureValidation
    override_applied: bool
    final_intent: IntentName
    final_domain: str
    final_type: str
    selection: BlueprintSelection
    blueprint: Blueprint
    confidence: float
    evidence: EvidenceGraph
    rules: RuleResult
    scope: ScopeDefinition
    proposal: Proposal
    context: CanonicalContext
    outputs: CanonicalOutput

    @property
    def json(self) -> str:
        return self.outputs.json

    @property
    def markdown(self) -> str:
        return self.outputs.markdown

    @property
    def prompt(self) -> str:
        return self.outputs.prompt

    @property
    def summary(self) -> str:
        return self.outputs.summary

    def render(self, output_format: str) -> str:
        """Return the output named by ``output_format`` (see OUTPUT_FORMATS)."""
        if output_format == "canonical":
            return canonical_json(self.context)
        if output_format == "report":
            return render_report(self)
        if output_format in ("json", "markdown", "prompt", "summary"):
            return getattr(self.outputs, output_format)
        raise ValueError(
            f"Unknown output format '{output_format}'; expected one of {', '.join(OUTPUT_FORMATS)}"
        )


class Pipeline:
    """Runs the deterministic analysis stages in order.

    The pipeline holds configuration only; every call to :meth:`run` works on
    its own inputs, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        settings: IngestionSettings | None = None,
        *,
        strict: bool = True,
    ) -> None:
        self.settings = settings
        self.strict = strict
        self.logger = get_logger("pipeline")
        self._safety = PublicSafetyValidator()

    def analyze_path(
        self,
        path: str | Path,
        *,
        repo_name: str | None = None,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        root = Path(path).expanduser().resolve()
        settings = self.settings
        project_name: Optional[str] = None
        if settings is None and root.is_dir():
            try:
                config = load_config(root)
            except ConfigError as exc:
                self.logger.warning("Ignoring invalid configuration: %s", exc)
            else:
                settings = config.ingestion
                project_name = config.project_name
        settings = settings or IngestionSettings()

        budget = RunBudget.start(timeout if timeout is not None else settings.timeout, cancel_event)
        self.logger.info("Analyzing %s", root)
        with log_stage(self.logger, "normalize"):
            normalized = normalize_project(root, settings=settings, budget=budget)
        return self.run(normalized, repo_name=repo_name or project_name or root.name, budget=budget)

    def analyze_mapping(
        self,
        files: Iterable[str],
        folders: Iterable[str] | None = None,
        file_map: Mapping[str, str] | None = None,
        *,
        repo_name: str | None = None,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        settings = self.settings or IngestionSettings()
        budget = RunBudget.start(timeout if timeout is not None else settings.timeout, cancel_event)
        with log_stage(self.logger, "normalize"):
            normalized = normalize_mapping(files, folders, file_map, settings=settings)
        return self.run(normalized, repo_name=repo_name, budget=budget)

    def run(
        self,
        normalized: NormalizedProject,
        *,
        repo_name: str | None = None,
        budget: RunBudget | None = None,
    ) -> AnalysisResult:
        budget = budget or RunBudget()

        budget.check("scan")
        with log_stage(self.logger, "scan"):
            scan = scan_project(normalized)
            overview = summarize_project(scan, normalized)

        budget.check("classify")
        with log_stage(self.logger, "classify"):
            classification = classify_project(scan, normalized)
            signals = collect_signals(scan, normalized, repo_name)
            intent = detect_intent(signals)

        budget.check("structure")
        with log_stage(self.logger, "structure"):
            structure = validate_dominant_structure(signals)
            final_intent: IntentName = intent.primary_intent
            final_domain: str = classification.domain
            final_type: str = classification.project_type
            override_applied = should_override_intent(structure, intent)
            if override_applied:
                overrides = structure.overrides
                final_intent = overrides.intent or final_intent
                final_domain = overrides.domain or final_domain
                final_type = overrides.type or final_type
                self.logger.debug(
                    "Structure %s overrides intent %s -> %s",
                    structure.dominant_structure,
                    intent.primary_intent,
                    final_intent,
                )

        budget.check("blueprint")
        with log_stage(self.logger, "blueprint"):
            selection = select_blueprint(
                signals,
                replace(intent, primary_intent=final_intent),
                structure,
            )
            blueprint = get_blueprint(selection.primary_blueprint)
            confidence = calculate_confidence(structure, intent, signals)

        budget.check("rules")
        with log_stage(self.logger, "rules"):
            evidence = build_evidence_graph(scan, normalized, signals)
            rules = apply_rules(evidence)
            for line in rules.reasoning:
                self.logger.debug("rule: %s", line)

        budget.check("assemble")
        with log_stage(self.logger, "assemble"):
            scope = generate_scope_definition(evidence, blueprint, rules.repository_type)
            proposal = generate_proposal(evidence, blueprint, final_intent, rules)
            context = assemble_context(
                scan=scan,
                overview=overview,
                evidence=evidence,
                rules=rules,
                blueprint=blueprint,
                scope=scope,
                proposal=proposal,
                confidence=confidence,
                repo_name=repo_name,
            )

        budget.check("render")
        with log_stage(self.logger, "render"):
            self._check_public_safety(context)
            outputs = generate_outputs(context)

        self.logger.info(
            "Classified %s as %s (%s, confidence %.2f)",
            context.project.name,
            context.project.intent,
            blueprint.name,
            confidence,
        )
        return AnalysisResult(
            repo_name=repo_name,
            normalized=normalized,
            scan=scan,
            overview=overview,
            classification=classification,
            signals=signals,
            intent=intent,
            structure=structure,
            override_applied=override_applied,
            final_intent=final_intent,
            final_domain=final_domain,
            final_type=final_type,
            selection=selection,
            blueprint=blueprint,
            confidence=confidence,
            evidence=evidence,
            rules=rules,
            scope=scope,
            proposal=proposal,
            context=context,
            outputs=outputs,
        )

    def _check_public_safety(self, context: CanonicalContext) -> None:
        issues = self._safety.validate(build_public_context(context).to_dict())
        if not issues:
            return
        for issue in issues:
            self.logger.error("Public output leak at %s: %s", issue.path, issue.detail)
        if self.strict:
            raise ValidationError("Public context failed the safety check", issues)


def analyze_path(path: str | Path, **kwargs) -> AnalysisResult:
    return Pipeline().analyze_path(path, **kwargs)


def analyze_mapping(
    files: Iterable[str],
    folders: Iterable[str] | None = None,
    file_map: Mapping[str, str] | None = None,
    **kwargs,
) -> AnalysisResult:
    return Pipeline().analyze_mapping(files, folders, file_map, **kwargs)


__all__ = ["AnalysisResult", "Pipeline", "analyze_mapping", "analyze_path"]
