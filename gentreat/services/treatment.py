"""
Treatment Service

Turns API-level inputs (sign dicts, order labels, protocol names) into
domain values, runs the protocol engine and packages the result.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from gentreat.core.protocol import (
    Patient,
    PatientTreatment,
    ProtocolEngine,
    Sign,
    summarise,
)
from gentreat.utils.exceptions import UnknownOrderError
from gentreat.utils.logging import get_logger

logger = get_logger(__name__)


class TreatmentService:
    """Stateless wrapper around a ProtocolEngine; holds no patient data."""

    def __init__(self, engine: Optional[ProtocolEngine] = None):
        self.engine = engine or ProtocolEngine()

    def parse_signs(self, signs: Iterable[Dict[str, Any]]) -> List[Sign]:
        """Raises SignError for unknown kinds or mistyped values."""
        return [Sign.from_kind(s["kind"], s["value"]) for s in signs]

    def resolve_treatment(self, patient: Patient, order_labels: Iterable[str]) -> PatientTreatment:
        treatments = []
        for label in order_labels:
            treatment = self.engine.find_treatment(label)
            if treatment is None:
                raise UnknownOrderError(label, details={"patient_id": patient.label})
            treatments.append(treatment)
        return PatientTreatment.of(patient, treatments)

    def evaluate(
        self,
        patient_id: str,
        protocols: List[str],
        signs: Iterable[Dict[str, Any]],
        current_treatment: Iterable[str] = (),
        include_trace: bool = False,
    ) -> Dict[str, Any]:
        """
        Evaluate ``protocols`` in order for one patient.

        Returns:
            {
                "patient_id": ...,
                "treatments": [{"order": ..., "target": ...}],
                "added": [...], "removed": [...],
                "trace": [...] or None
            }
        """
        patient = Patient(patient_id)
        parsed = self.parse_signs(signs)
        before = self.resolve_treatment(patient, current_treatment)

        trace: List[str] = []
        sink = trace.append if include_trace else None
        after = self.engine.evaluate_many(protocols, parsed, before, sink)

        diff = summarise(before, after)
        logger.info(
            f"TreatmentService [{patient_id}]: {protocols} → "
            f"active={diff['active']} added={diff['added']} removed={diff['removed']}"
        )

        return {
            "patient_id": patient_id,
            "treatments": [
                {"order": t.order.label, "target": str(t.target)}
                for t in after.treatments
            ],
            "added": diff["added"],
            "removed": diff["removed"],
            "trace": trace if include_trace else None,
        }

    def describe_protocols(self) -> List[Dict[str, Any]]:
        out = []
        for name in self.engine.registered_protocols():
            protocol = self.engine.get_protocol(name)
            out.append({
                "name": protocol.name,
                "steps": [
                    {
                        "conditions": [str(c) for c in step.conditions],
                        "order": step.treatment.order.label,
                        "target": str(step.treatment.target),
                    }
                    for step in protocol.steps
                ],
            })
        return out
