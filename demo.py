"""
End-to-End Demo Script for the Protocol Evaluation Engine

Walks through the treatment loop with hand-built patient data:
1. Create a patient and their signs
2. Check individual targets and conditions
3. Evaluate the pain protocol
4. Evaluate the blood pressure protocol twice (escalation)
5. Thread one treatment set through both protocols

Run: python demo.py
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from gentreat.core.protocol import (
    condition_met,
    evaluate,
    evaluate_all,
    summarise,
    target_met,
)
from gentreat.core.protocol.factories import (
    create_blood_pressure,
    create_central_venous_line,
    create_liver_failure,
    create_pain_score,
    create_patient,
    create_patient_signs,
    create_patient_treatment,
)
from gentreat.core.protocol.rules_blood_pressure import (
    BP_ABOVE_TARGET,
    BP_BELOW_CEILING,
    HAS_CENTRAL_VENOUS_LINE,
    build_blood_pressure_protocol,
)
from gentreat.core.protocol.rules_pain import NO_LIVER_FAILURE, build_pain_protocol


def show(label, treatment):
    print(f"   {label:45} → {[o.label for o in treatment.orders]}")


def main():
    print("=" * 60)
    print("GENTREAT PROTOCOL EVALUATION - DEMO")
    print("=" * 60)
    print()

    # ---- Patient & signs ----
    print("[1/5] Creating patient and signs...")
    patient = create_patient("Test Patient")
    bp40 = create_blood_pressure(40)
    pain = create_pain_score(3)
    cvl = create_central_venous_line(True)
    lvf = create_liver_failure(True)
    signs = create_patient_signs(patient, [bp40, pain, cvl, lvf])
    print(f"   {patient}: {[str(s) for s in signs]}")
    print()

    # ---- Targets & conditions ----
    print("[2/5] Checking targets and conditions...")
    print(f"   {BP_ABOVE_TARGET} with {bp40}: {target_met(BP_ABOVE_TARGET, [bp40])}")
    print(f"   {BP_BELOW_CEILING} with {bp40}: {condition_met(BP_BELOW_CEILING, [bp40])}")
    print(f"   {HAS_CENTRAL_VENOUS_LINE} with {cvl}: {condition_met(HAS_CENTRAL_VENOUS_LINE, [cvl])}")
    print(f"   {NO_LIVER_FAILURE} with {lvf}: {condition_met(NO_LIVER_FAILURE, [lvf])}")
    print()

    pain_protocol = build_pain_protocol()
    bp_protocol = build_blood_pressure_protocol()
    empty = create_patient_treatment(patient)

    # ---- Pain ----
    print("[3/5] Pain protocol...")
    show("no signs", evaluate(pain_protocol, [], empty))
    first = evaluate(pain_protocol, [pain], empty)
    show("pain", first)
    show("pain, already on paracetamol", evaluate(pain_protocol, [pain], first))
    show("pain with liver failure", evaluate(pain_protocol, [pain, lvf], empty))
    print()

    # ---- Blood pressure ----
    print("[4/5] Blood pressure protocol (evaluated twice)...")
    trace = []
    once = evaluate(bp_protocol, [bp40, cvl], empty, trace.append)
    twice = evaluate(bp_protocol, [bp40, cvl], once, trace.append)
    show("bp 40 with central line, pass 1", once)
    show("bp 40 with central line, pass 2", twice)
    for line in trace:
        print(f"      {line}")
    no_line = evaluate(bp_protocol, [bp40], evaluate(bp_protocol, [bp40], empty))
    show("bp 40 without central line, pass 2", no_line)
    print()

    # ---- Both ----
    print("[5/5] Pain then blood pressure on one treatment set...")
    combined = evaluate_all([pain_protocol, bp_protocol], [pain, bp40], empty)
    show("pain and bp 40", combined)
    print(f"   diff: {summarise(empty, combined)}")
    print()
    print("=" * 60)


if __name__ == "__main__":
    main()
