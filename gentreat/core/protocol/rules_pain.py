"""
Pain Protocol

Signs consumed:
    pain_score     (0–10) : target: ≤ 1
    liver_failure  (flag) : paracetamol is withheld in liver failure

Escalation ladder (least invasive first):
    1. Paracetamol : only without liver failure
    2. Morphine    : unconditional, when pain persists
"""
from __future__ import annotations

from .base import Protocol
from .factories import (
    create_liver_failure_condition,
    create_order,
    create_pain_score_target,
    create_protocol,
    create_treatment,
)

PROTOCOL_NAME = "pain"

# ── Thresholds ────────────────────────────────────────────────────────────────

PAIN_SCORE_TARGET_MAX = 1    # no pain

# ── Targets & conditions ──────────────────────────────────────────────────────

NO_PAIN = create_pain_score_target(
    lambda score: score <= PAIN_SCORE_TARGET_MAX,
    f"pain score <= {PAIN_SCORE_TARGET_MAX}",
)

NO_LIVER_FAILURE = create_liver_failure_condition(False)

# ── Orders & treatments ───────────────────────────────────────────────────────

PARACETAMOL = create_order("paracetamol")
MORPHINE    = create_order("morphine")

PARACETAMOL_FOR_NO_PAIN = create_treatment(NO_PAIN, PARACETAMOL)
MORPHINE_FOR_NO_PAIN    = create_treatment(NO_PAIN, MORPHINE)


def build_pain_protocol() -> Protocol:
    return (
        create_protocol(PROTOCOL_NAME, [NO_LIVER_FAILURE], PARACETAMOL_FOR_NO_PAIN)
        .next_step([], MORPHINE_FOR_NO_PAIN)    # morphine if pain persists
    )
