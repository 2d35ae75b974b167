"""
Value constructors for building protocols and patient data by hand.

    pain = create_pain_score(3)
    no_pain = create_pain_score_target(lambda score: score <= 1, "pain score <= 1")
    protocol = create_protocol("pain", [no_liver_failure], paracetamol)
"""
from __future__ import annotations

from typing import Callable, Iterable

from .base import (
    BloodPressure,
    CentralVenousLine,
    Condition,
    LiverFailure,
    Order,
    PainScore,
    Patient,
    PatientSigns,
    PatientTreatment,
    Protocol,
    Sign,
    SignKind,
    Target,
    Treatment,
)


def create_patient(label: str) -> Patient:
    return Patient(label)


# ── Signs ─────────────────────────────────────────────────────────────────────

def create_blood_pressure(mmhg: int) -> BloodPressure:
    return BloodPressure(mmhg)


def create_pain_score(score: int) -> PainScore:
    return PainScore(score)


def create_liver_failure(present: bool) -> LiverFailure:
    return LiverFailure(present)


def create_central_venous_line(present: bool) -> CentralVenousLine:
    return CentralVenousLine(present)


def create_patient_signs(patient: Patient, signs: Iterable[Sign] = ()) -> PatientSigns:
    return PatientSigns(patient, tuple(signs))


# ── Targets ───────────────────────────────────────────────────────────────────

def create_target(kind: SignKind, predicate: Callable, description: str = "") -> Target:
    return Target(kind, predicate, description)


def create_blood_pressure_target(predicate: Callable[[int], bool], description: str = "") -> Target:
    return create_target(SignKind.BLOOD_PRESSURE, predicate, description)


def create_pain_score_target(predicate: Callable[[int], bool], description: str = "") -> Target:
    return create_target(SignKind.PAIN_SCORE, predicate, description)


# ── Conditions ────────────────────────────────────────────────────────────────

def create_blood_pressure_condition(
    predicate: Callable[[int], bool],
    expected: bool = True,
    description: str = "",
) -> Condition:
    return Condition(create_blood_pressure_target(predicate, description), expected)


def create_central_venous_line_condition(expected: bool) -> Condition:
    """``True``: the patient must have a central venous line; ``False``: must not."""
    target = create_target(SignKind.CENTRAL_VENOUS_LINE, lambda present: present,
                           "central venous line")
    return Condition(target, expected)


def create_liver_failure_condition(expected: bool) -> Condition:
    """``True``: the patient must be in liver failure; ``False``: must not."""
    target = create_target(SignKind.LIVER_FAILURE, lambda present: present, "liver failure")
    return Condition(target, expected)


# ── Orders, treatments, protocols ─────────────────────────────────────────────

def create_order(label: str) -> Order:
    return Order(label)


def create_treatment(target: Target, order: Order) -> Treatment:
    return Treatment(target, order)


def create_protocol(name: str, conditions: Iterable[Condition], treatment: Treatment) -> Protocol:
    """Start a protocol with its first (least invasive) step."""
    return Protocol(name).next_step(conditions, treatment)


def create_patient_treatment(patient: Patient, treatments: Iterable[Treatment] = ()) -> PatientTreatment:
    return PatientTreatment.of(patient, treatments)
