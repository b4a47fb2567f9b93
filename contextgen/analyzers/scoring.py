"""Declarative weight and exclusion tables evaluated by one generic scorer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

Condition = Callable[[Any], bool]


def flag(name: str) -> Condition:
    """Condition that holds when attribute ``name`` of the subject is truthy."""

    def _check(subject: Any) -> bool:
        return bool(getattr(subject, name))

    _check.__name__ = name
    return _check


def absent(name: str) -> Condition:
    """Condition that holds when attribute ``name`` of the subject is falsy."""

    def _check(subject: Any) -> bool:
        return not getattr(subject, name)

    _check.__name__ = f"not {name}"
    return _check


def all_of(*conditions: Condition) -> Condition:
    def _check(subject: Any) -> bool:
        return all(condition(subject) for condition in conditions)

    _check.__name__ = " and ".join(condition.__name__ for condition in conditions)
    return _check


def any_of(*conditions: Condition) -> Condition:
    def _check(subject: Any) -> bool:
        return any(condition(subject) for condition in conditions)

    _check.__name__ = " or ".join(condition.__name__ for condition in conditions)
    return _check


@dataclass(frozen=True)
class WeightRule:
    """Adds ``weight`` to ``target`` whenever ``when`` holds for the subject."""

    when: Condition
    target: str
    weight: int


@dataclass(frozen=True)
class ExclusionRule:
    """Removes ``target`` from consideration whenever ``when`` holds."""

    when: Condition
    target: str
    reason: str


def score(subject: Any, rules: Iterable[WeightRule], targets: Sequence[str]) -> Dict[str, int]:
    """Evaluate ``rules`` against ``subject``; every target starts at zero.

    The returned dict preserves the order of ``targets`` so that stable sorts
    over it break ties the same way on every run.
    """
    totals: Dict[str, int] = {target: 0 for target in targets}
    for rule in rules:
        if rule.target not in totals:
            raise KeyError(f"Weight rule targets unknown name '{rule.target}'")
        if rule.when(subject):
            totals[rule.target] += rule.weight
    return totals


def excluded(subject: Any, rules: Iterable[ExclusionRule]) -> Tuple[str, ...]:
    """Return the unique excluded targets in rule order."""
    names: List[str] = []
    for rule in rules:
        if rule.target not in names and rule.when(subject):
            names.append(rule.target)
    return tuple(names)


def rank(scores: Dict[str, int]) -> List[Tuple[str, int]]:
    """Sort by score descending; equal scores keep their table order."""
    return sorted(scores.items(), key=lambda item: -item[1])


__all__ = [
    "Condition",
    "ExclusionRule",
    "WeightRule",
    "absent",
    "all_of",
    "any_of",
    "excluded",
    "flag",
    "rank",
    "score",
]
