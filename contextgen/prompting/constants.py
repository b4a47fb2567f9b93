"""Fixed text blocks for the constraint prompt stack."""

from __future__ import annotations

SECTION_SEPARATOR = "\n\n---\n\n"

VALIDATION_CHECKLIST = (
    "Before producing the final answer, perform an internal validation:\n"
    "\n"
    "CHECKLIST:\n"
    "- Does this output introduce features not listed in signals?\n"
    "- Does this output contradict the primary intent?\n"
    "- Does this output assume backend or authentication when not detected?\n"
    "- Does this output exceed the declared complexity or domain?\n"
    "\n"
    "If any answer is YES:\n"
    "- Remove the conflicting part\n"
    '- Or explicitly mark it as "Out of scope"'
)

OUTPUT_CONTRACT = """OUTPUT FORMAT RULES:
- Use declarative language, not speculative
- Avoid words like "could", "might", "maybe"
- Clearly separate detected facts from assumptions
- When uncertain, label as "Low confidence"
- Never recommend architectural changes unless explicitly requested"""

# Never assumed, whatever the blueprint says.
ALWAYS_EXCLUDED: tuple[str, ...] = (
    "Databases or APIs unless explicitly detected",
    "Background jobs or queues",
    "Microservices architecture",
    "Serverless functions",
)

DEFAULT_ALLOWED_SCOPE: tuple[str, ...] = ("Basic project structure",)


__all__ = [
    "ALWAYS_EXCLUDED",
    "DEFAULT_ALLOWED_SCOPE",
    "OUTPUT_CONTRACT",
    "SECTION_SEPARATOR",
    "VALIDATION_CHECKLIST",
]
