"""
Protocol Evaluation Layer

Decides which treatments of an ordered protocol should be active for the
current signs of a patient.

Usage:
    from gentreat.core.protocol import evaluate, ProtocolEngine

    new_treatment = evaluate(protocol, signs, current_treatment)
"""
from .base import (
    SignKind,
    Sign,
    BloodPressure,
    PainScore,
    LiverFailure,
    CentralVenousLine,
    Patient,
    PatientSigns,
    Target,
    Condition,
    Order,
    Treatment,
    ProtocolStep,
    Protocol,
    PatientTreatment,
)
from .evaluation import target_met, condition_met, conditions_met
from .consistency import check_consistency, find_conflicts
from .engine import ProtocolEngine, evaluate, evaluate_all, evaluate_treatment, summarise

__all__ = [
    "SignKind",
    "Sign",
    "BloodPressure",
    "PainScore",
    "LiverFailure",
    "CentralVenousLine",
    "Patient",
    "PatientSigns",
    "Target",
    "Condition",
    "Order",
    "Treatment",
    "ProtocolStep",
    "Protocol",
    "PatientTreatment",
    "target_met",
    "condition_met",
    "conditions_met",
    "check_consistency",
    "find_conflicts",
    "ProtocolEngine",
    "evaluate",
    "evaluate_all",
    "evaluate_treatment",
    "summarise",
]
