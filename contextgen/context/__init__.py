"""Canonical Context: scope, proposal and the assembled record."""

from __future__ import annotations

from .assembler import assemble_context
from .proposal import Proposal, generate_proposal
from .schema import ENGINE_NAME, ENGINE_VERSION, CanonicalContext
from .scope import ScopeDefinition, generate_scope_definition

__all__ = [
    "CanonicalContext",
    "ENGINE_NAME",
    "ENGINE_VERSION",
    "Proposal",
    "ScopeDefinition",
    "assemble_context",
    "generate_proposal",
    "generate_scope_definition",
]
