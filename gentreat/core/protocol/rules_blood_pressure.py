"""
Blood Pressure Protocol

Signs consumed:
    blood_pressure       (mmHg): target: > 60
    central_venous_line  (flag): noradrenaline needs central access

Escalation ladder (least invasive first):
    1. Dopamine      : while blood pressure stays below 160
    2. Noradrenaline : added on top once a central venous line is in place,
                        still only below 160
"""
from __future__ import annotations

from .base import Protocol
from .factories import (
    create_blood_pressure_condition,
    create_blood_pressure_target,
    create_central_venous_line_condition,
    create_order,
    create_protocol,
    create_treatment,
)

PROTOCOL_NAME = "blood_pressure"

# ── Thresholds ────────────────────────────────────────────────────────────────

BP_TARGET_MIN = 60      # mmHg, aim of vasopressor therapy
BP_CEILING    = 160     # mmHg, no vasopressors at or above this

# ── Targets & conditions ──────────────────────────────────────────────────────

BP_ABOVE_TARGET = create_blood_pressure_target(
    lambda bp: bp > BP_TARGET_MIN,
    f"blood pressure > {BP_TARGET_MIN}",
)

BP_BELOW_CEILING = create_blood_pressure_condition(
    lambda bp: bp < BP_CEILING,
    True,
    f"blood pressure < {BP_CEILING}",
)

HAS_CENTRAL_VENOUS_LINE = create_central_venous_line_condition(True)

# ── Orders & treatments ───────────────────────────────────────────────────────

DOPAMINE      = create_order("dopamine")
NORADRENALINE = create_order("noradrenaline")

DOPAMINE_FOR_BP      = create_treatment(BP_ABOVE_TARGET, DOPAMINE)
NORADRENALINE_FOR_BP = create_treatment(BP_ABOVE_TARGET, NORADRENALINE)


def build_blood_pressure_protocol() -> Protocol:
    return (
        create_protocol(PROTOCOL_NAME, [BP_BELOW_CEILING], DOPAMINE_FOR_BP)
        .next_step([HAS_CENTRAL_VENOUS_LINE, BP_BELOW_CEILING], NORADRENALINE_FOR_BP)
    )
