"""
Target and condition evaluation against a sign collection.

Both are per-sign checks over the signs of the predicate's own kind; signs
of any other kind never disqualify. A target with no sign of its kind is
vacuously met. A condition with no sign of its kind:

    measurement kinds   → vacuously met
    flag kinds          → the flag is read as its absent value (False)

so "has a central venous line" fails without a CVL sign, while "no liver
failure" holds without a liver-failure sign.
"""
from __future__ import annotations

from typing import Iterable, List

from .base import Condition, Sign, Target


def _relevant(target: Target, signs: Iterable[Sign]) -> List[Sign]:
    return [s for s in signs if target.applies_to(s)]


def target_met(target: Target, signs: Iterable[Sign]) -> bool:
    """True iff no sign contradicts the target."""
    return all(target(s) for s in signs)


def condition_met(condition: Condition, signs: Iterable[Sign]) -> bool:
    """True iff the condition holds for every sign of its kind."""
    relevant = _relevant(condition.target, signs)
    if not relevant:
        absent = condition.target.absent_value
        if absent is None:
            return True
        return bool(condition.target.predicate(absent)) == condition.expected
    return all(condition.holds_for(s) for s in relevant)


def conditions_met(conditions: Iterable[Condition], signs: Iterable[Sign]) -> bool:
    """All conditions met; an empty condition list is vacuously satisfied."""
    signs = list(signs)
    return all(condition_met(c, signs) for c in conditions)
