"""Deterministic analysis stages: evidence, signals, scoring and rules."""

from __future__ import annotations

from .blueprints import BLUEPRINTS, Blueprint, get_blueprint
from .classifier import ProjectClassification, classify_project
from .confidence import ConfidenceFactors, calculate_confidence, confidence_level
from .evidence import EvidenceGraph, build_evidence_graph
from .intent import IntentResult, detect_intent
from .rules import RuleResult, apply_rules
from .selector import BlueprintSelection, select_blueprint
from .signals import ProjectSignals, collect_signals
from .structure import StructureValidation, should_override_intent, validate_dominant_structure

__all__ = [
    "BLUEPRINTS",
    "Blueprint",
    "BlueprintSelection",
    "ConfidenceFactors",
    "EvidenceGraph",
    "IntentResult",
    "ProjectClassification",
    "ProjectSignals",
    "RuleResult",
    "StructureValidation",
    "apply_rules",
    "build_evidence_graph",
    "calculate_confidence",
    "classify_project",
    "collect_signals",
    "confidence_level",
    "detect_intent",
    "get_blueprint",
    "select_blueprint",
    "should_override_intent",
    "validate_dominant_structure",
]
