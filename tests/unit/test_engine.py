"""
Unit Tests for the Protocol Evaluation Engine

Escalation, deactivation, idempotence and the pain / blood pressure
scenarios, plus the named-protocol registry.
"""
import pytest

from gentreat.core.protocol import (
    BloodPressure,
    CentralVenousLine,
    PainScore,
    PatientTreatment,
    ProtocolEngine,
    evaluate,
    evaluate_all,
    evaluate_treatment,
    summarise,
)
from gentreat.core.protocol.factories import create_patient_treatment, create_protocol
from gentreat.core.protocol.rules_blood_pressure import (
    DOPAMINE_FOR_BP,
    NORADRENALINE_FOR_BP,
)
from gentreat.core.protocol.rules_pain import MORPHINE_FOR_NO_PAIN, PARACETAMOL_FOR_NO_PAIN
from gentreat.utils.exceptions import ProtocolConsistencyError, UnknownProtocolError


def _orders(treatment: PatientTreatment) -> set:
    return {o.label for o in treatment.orders}


class TestPainProtocol:

    def test_pain_without_liver_failure(self, pain_protocol, empty_treatment, pain3):
        result = evaluate(pain_protocol, [pain3], empty_treatment)
        assert _orders(result) == {"paracetamol"}

    def test_pain_with_liver_failure(self, pain_protocol, empty_treatment, pain3, lvf):
        result = evaluate(pain_protocol, [pain3, lvf], empty_treatment)
        assert _orders(result) == {"morphine"}

    def test_no_signs(self, pain_protocol, empty_treatment):
        assert len(evaluate(pain_protocol, [], empty_treatment)) == 0

    def test_persistent_pain_escalates(self, pain_protocol, empty_treatment, pain3):
        first = evaluate(pain_protocol, [pain3], empty_treatment)
        second = evaluate(pain_protocol, [pain3], first)
        assert _orders(second) == {"paracetamol", "morphine"}

    def test_pain_resolved_removes_all(self, pain_protocol, patient):
        current = create_patient_treatment(patient, [PARACETAMOL_FOR_NO_PAIN, MORPHINE_FOR_NO_PAIN])
        assert len(evaluate(pain_protocol, [PainScore(0)], current)) == 0


class TestBloodPressureProtocol:

    def test_with_central_line_escalates_on_second_pass(self, bp_protocol, empty_treatment, bp40, cvl):
        once = evaluate(bp_protocol, [bp40, cvl], empty_treatment)
        assert _orders(once) == {"dopamine"}
        twice = evaluate(bp_protocol, [bp40, cvl], once)
        assert _orders(twice) == {"dopamine", "noradrenaline"}

    def test_without_central_line_stays_on_dopamine(self, bp_protocol, empty_treatment, bp40):
        once = evaluate(bp_protocol, [bp40], empty_treatment)
        twice = evaluate(bp_protocol, [bp40], once)
        assert _orders(once) == {"dopamine"}
        assert _orders(twice) == {"dopamine"}

    def test_line_removed_drops_noradrenaline(self, bp_protocol, patient, bp40):
        current = create_patient_treatment(patient, [DOPAMINE_FOR_BP, NORADRENALINE_FOR_BP])
        result = evaluate(bp_protocol, [bp40, CentralVenousLine(False)], current)
        assert _orders(result) == {"dopamine"}

    def test_above_ceiling_removes_everything(self, bp_protocol, patient, cvl):
        current = create_patient_treatment(patient, [DOPAMINE_FOR_BP, NORADRENALINE_FOR_BP])
        assert len(evaluate(bp_protocol, [BloodPressure(170), cvl], current)) == 0


class TestEngineProperties:

    def test_idempotent_at_fixed_point(self, bp_protocol, empty_treatment, bp40, cvl):
        signs = [bp40, cvl]
        fixed = evaluate(bp_protocol, signs, evaluate(bp_protocol, signs, empty_treatment))
        assert evaluate(bp_protocol, signs, fixed) == fixed

    def test_all_targets_met_gives_empty(self, pain_protocol, bp_protocol, patient):
        current = create_patient_treatment(patient, [
            DOPAMINE_FOR_BP, NORADRENALINE_FOR_BP, PARACETAMOL_FOR_NO_PAIN, MORPHINE_FOR_NO_PAIN,
        ])
        signs = [BloodPressure(80), PainScore(0), CentralVenousLine(True)]
        result = evaluate_all([pain_protocol, bp_protocol], signs, current)
        assert len(result) == 0

    def test_escalation_stops_after_first_addition(self, pain_protocol, empty_treatment, pain3):
        trace = []
        result = evaluate(pain_protocol, [pain3], empty_treatment, trace.append)
        assert _orders(result) == {"paracetamol"}
        assert len(trace) == 1

    def test_deactivation_continues_scan(self, patient):
        protocol = create_protocol("mixed", [], PARACETAMOL_FOR_NO_PAIN).next_step([], DOPAMINE_FOR_BP)
        current = create_patient_treatment(patient, [PARACETAMOL_FOR_NO_PAIN])
        trace = []
        result = evaluate(protocol, [PainScore(0), BloodPressure(40)], current, trace.append)
        assert _orders(result) == {"dopamine"}
        assert len(trace) == 2

    def test_input_not_modified(self, pain_protocol, empty_treatment, pain3):
        evaluate(pain_protocol, [pain3], empty_treatment)
        assert len(empty_treatment) == 0

    def test_empty_protocol(self, empty_treatment, pain3):
        from gentreat.core.protocol import Protocol
        assert evaluate(Protocol("empty"), [pain3], empty_treatment) is empty_treatment

    def test_trace_lines(self, pain_protocol, empty_treatment, pain3, lvf):
        trace = []
        evaluate(pain_protocol, [pain3, lvf], empty_treatment, trace.append)
        assert trace == [
            "conditions met: False, target met: False for treatment paracetamol",
            "conditions met: True, target met: False for treatment morphine",
        ]

    def test_signs_may_be_generator(self, pain_protocol, empty_treatment):
        result = evaluate(pain_protocol, (PainScore(s) for s in [3]), empty_treatment)
        assert _orders(result) == {"paracetamol"}


class TestComposition:

    def test_two_protocols_thread_treatment(self, pain_protocol, bp_protocol, empty_treatment, pain3, bp40):
        after_pain = evaluate(pain_protocol, [pain3], empty_treatment)
        after_bp = evaluate(bp_protocol, [bp40], after_pain)
        assert _orders(after_bp) == {"paracetamol", "dopamine"}
        assert evaluate_all([pain_protocol, bp_protocol], [pain3, bp40], empty_treatment) == after_bp

    def test_evaluate_treatment(self, empty_treatment, bp40):
        started = evaluate_treatment(DOPAMINE_FOR_BP, [bp40], empty_treatment)
        assert DOPAMINE_FOR_BP in started
        stopped = evaluate_treatment(DOPAMINE_FOR_BP, [BloodPressure(80)], started)
        assert DOPAMINE_FOR_BP not in stopped

    def test_summarise(self, patient):
        before = create_patient_treatment(patient, [DOPAMINE_FOR_BP, PARACETAMOL_FOR_NO_PAIN])
        after = create_patient_treatment(patient, [DOPAMINE_FOR_BP, NORADRENALINE_FOR_BP])
        assert summarise(before, after) == {
            "added": ["noradrenaline"],
            "removed": ["paracetamol"],
            "active": ["dopamine", "noradrenaline"],
        }


class TestProtocolEngine:

    def test_registered_protocols(self):
        engine = ProtocolEngine()
        assert engine.registered_protocols() == ["pain", "blood_pressure"]

    def test_evaluate_by_name(self, empty_treatment, pain3):
        engine = ProtocolEngine()
        assert _orders(engine.evaluate("pain", [pain3], empty_treatment)) == {"paracetamol"}

    def test_evaluate_many(self, empty_treatment, pain3, bp40):
        engine = ProtocolEngine()
        result = engine.evaluate_many(["pain", "blood_pressure"], [pain3, bp40], empty_treatment)
        assert _orders(result) == {"paracetamol", "dopamine"}

    def test_unknown_protocol(self):
        with pytest.raises(UnknownProtocolError) as exc:
            ProtocolEngine().get_protocol("sepsis")
        assert exc.value.code == "UNKNOWN_PROTOCOL"
        assert exc.value.details["available"] == ["pain", "blood_pressure"]

    def test_find_treatment(self):
        engine = ProtocolEngine()
        assert engine.find_treatment("noradrenaline") == NORADRENALINE_FOR_BP
        assert engine.find_treatment("aspirin") is None

    def test_strict_rejects_inconsistent_protocol(self):
        from gentreat.core.protocol import Treatment
        from gentreat.core.protocol.rules_blood_pressure import BP_ABOVE_TARGET, BP_BELOW_CEILING
        bad = create_protocol("bad", [], PARACETAMOL_FOR_NO_PAIN).next_step(
            [BP_BELOW_CEILING], Treatment(BP_ABOVE_TARGET, PARACETAMOL_FOR_NO_PAIN.order)
        )
        with pytest.raises(ProtocolConsistencyError):
            ProtocolEngine([bad], strict=True)
        assert ProtocolEngine([bad], strict=False).registered_protocols() == ["bad"]
