"""
Protocol Evaluation Engine

Walks an ordered protocol against the current signs and returns the updated
treatment set of the patient.

For each step, in order:

    conditions met, target unmet, treatment not active  → add it, STOP
    conditions met, target unmet, treatment active      → keep, next step
    conditions met, target met                          → remove, next step
    conditions not met                                  → remove, next step

At most one treatment is added per pass: the first rung of the ladder that
is indicated. Anything no longer justified is removed on the way down.

Usage:
    from gentreat.core.protocol import ProtocolEngine

    engine = ProtocolEngine()
    new_treatment = engine.evaluate("pain", signs, current_treatment)

Adding a protocol:
    1. Create  gentreat/core/protocol/rules_<name>.py
    2. Implement build_<name>_protocol() -> Protocol
    3. Register it in _PROTOCOL_BUILDERS below.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from gentreat import config
from gentreat.utils.exceptions import UnknownProtocolError
from gentreat.utils.logging import get_logger, trace_sink
from .base import PatientTreatment, Protocol, Sign, Treatment
from .consistency import check_consistency
from .evaluation import conditions_met, target_met
from .rules_blood_pressure import build_blood_pressure_protocol
from .rules_pain import build_pain_protocol

logger = get_logger(__name__)

DiagnosticSink = Callable[[str], None]

# ── Registry: name → protocol builder ────────────────────────────────────────
_PROTOCOL_BUILDERS = {
    "pain":           build_pain_protocol,
    "blood_pressure": build_blood_pressure_protocol,
}


def trace_line(conds_met: bool, targ_met: bool, treatment: Treatment) -> str:
    return f"conditions met: {conds_met}, target met: {targ_met} for treatment {treatment.order}"


def evaluate(
    protocol: Protocol,
    signs: Iterable[Sign],
    current: PatientTreatment,
    sink: Optional[DiagnosticSink] = None,
) -> PatientTreatment:
    """
    Evaluate one protocol and return the new treatment set.

    Args:
        protocol: Escalation ladder to walk.
        signs:    Current signs of the patient.
        current:  Currently active treatments; not modified.
        sink:     Optional callback receiving one trace line per visited step.
    """
    signs = list(signs)
    result = current
    log_trace = trace_sink(logger, protocol.name) if config.TRACE_EVALUATION else None
    context = {"protocol": protocol.name, "patient": current.patient}

    for step in protocol.steps:
        treatment = step.treatment
        conds_met = conditions_met(step.conditions, signs)
        targ_met = target_met(treatment.target, signs)

        line = trace_line(conds_met, targ_met, treatment)
        if sink is not None:
            sink(line)
        if log_trace is not None:
            log_trace(line)

        if conds_met and not targ_met:
            if treatment not in result:
                logger.info(f"add {treatment.order}", extra=context)
                return result.add(treatment)
            continue

        if treatment in result:
            reason = "target met" if conds_met else "conditions not met"
            logger.info(f"remove {treatment.order} ({reason})", extra=context)
        result = result.remove(treatment)

    return result


def evaluate_all(
    protocols: Iterable[Protocol],
    signs: Iterable[Sign],
    current: PatientTreatment,
    sink: Optional[DiagnosticSink] = None,
) -> PatientTreatment:
    """Evaluate several protocols in turn, threading the treatment set through."""
    signs = list(signs)
    result = current
    for protocol in protocols:
        result = evaluate(protocol, signs, result, sink)
    return result


def evaluate_treatment(
    treatment: Treatment,
    signs: Iterable[Sign],
    current: PatientTreatment,
) -> PatientTreatment:
    """Add ``treatment`` while its target is unmet, remove it once met."""
    if target_met(treatment.target, signs):
        return current.remove(treatment)
    return current.add(treatment)


def summarise(before: PatientTreatment, after: PatientTreatment) -> Dict:
    """
    Compact diff of two treatment sets, suitable for JSON responses.

    Example output:
    {
        "added":   ["noradrenaline"],
        "removed": [],
        "active":  ["dopamine", "noradrenaline"]
    }
    """
    return {
        "added":   [o.label for o in after.orders if o not in before],
        "removed": [o.label for o in before.orders if o not in after],
        "active":  [o.label for o in after.orders],
    }


class ProtocolEngine:
    """
    Named-protocol front end over evaluate().

    Protocols are built once at construction; with strict checking enabled
    each one is checked for orders reused with different targets.
    """

    def __init__(
        self,
        protocols: Optional[Iterable[Protocol]] = None,
        strict: Optional[bool] = None,
    ):
        strict = config.STRICT_PROTOCOLS if strict is None else strict
        if protocols is None:
            protocols = [build() for build in _PROTOCOL_BUILDERS.values()]

        self._protocols: Dict[str, Protocol] = {}
        for protocol in protocols:
            if strict:
                check_consistency(protocol)
            self._protocols[protocol.name] = protocol
        logger.debug(f"ProtocolEngine: registered {list(self._protocols)} (strict={strict})")

    def registered_protocols(self) -> List[str]:
        return list(self._protocols)

    def get_protocol(self, name: str) -> Protocol:
        try:
            return self._protocols[name]
        except KeyError:
            raise UnknownProtocolError(name, details={"available": self.registered_protocols()})

    def find_treatment(self, order_label: str) -> Optional[Treatment]:
        """First treatment with this order label across registered protocols."""
        for protocol in self._protocols.values():
            for treatment in protocol.treatments:
                if treatment.order.label == order_label:
                    return treatment
        return None

    def evaluate(
        self,
        name: str,
        signs: Iterable[Sign],
        current: PatientTreatment,
        sink: Optional[DiagnosticSink] = None,
    ) -> PatientTreatment:
        return evaluate(self.get_protocol(name), signs, current, sink)

    def evaluate_many(
        self,
        names: Iterable[str],
        signs: Iterable[Sign],
        current: PatientTreatment,
        sink: Optional[DiagnosticSink] = None,
    ) -> PatientTreatment:
        protocols = [self.get_protocol(n) for n in names]
        return evaluate_all(protocols, signs, current, sink)
