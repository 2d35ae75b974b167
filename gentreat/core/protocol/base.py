"""
Protocol Engine Base Types

Value types shared by the evaluation engine, the protocol library and the
API layer: signs, targets, conditions, orders, treatments, protocols and
the active treatment set of a patient.

Everything here is immutable configuration except PatientTreatment, which
changes by replacement: add() and remove() return a new value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple, Type, Union

from gentreat.utils.exceptions import SignError


class SignKind(str, Enum):
    """Tag of a Sign variant."""
    BLOOD_PRESSURE      = "blood_pressure"
    PAIN_SCORE          = "pain_score"
    LIVER_FAILURE       = "liver_failure"
    CENTRAL_VENOUS_LINE = "central_venous_line"


# ── Signs ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Sign:
    """
    An observed patient fact: a tagged, immutable payload.

    Subclasses form a closed set of variants. Flag variants set
    ``absent_value`` to the payload assumed when the flag was never
    observed; measurement variants leave it ``None``.
    """
    value: Any

    kind: ClassVar[SignKind]
    payload_type: ClassVar[type] = object
    absent_value: ClassVar[Optional[bool]] = None

    def __post_init__(self):
        # bool is an int subclass; keep flags out of measurements and vice versa
        if isinstance(self.value, bool) != (self.payload_type is bool) or \
                not isinstance(self.value, self.payload_type):
            raise SignError(
                f"{type(self).__name__} expects {self.payload_type.__name__}, "
                f"got {type(self.value).__name__}",
                kind=self.kind.value,
                details={"value": repr(self.value)},
            )

    @property
    def is_flag(self) -> bool:
        return self.payload_type is bool

    @staticmethod
    def from_kind(kind: Union[SignKind, str], value: Any) -> "Sign":
        """Build the Sign variant registered for ``kind``."""
        try:
            sign_kind = SignKind(kind)
        except ValueError:
            raise SignError(
                f"Unknown sign kind: {kind}. Valid: {[k.value for k in SignKind]}",
                kind=str(kind),
            )
        return SIGN_TYPES[sign_kind](value)

    def __str__(self) -> str:
        return f"{self.kind.value}={self.value}"


@dataclass(frozen=True)
class BloodPressure(Sign):
    """Mean arterial blood pressure in mmHg."""
    value: int
    kind = SignKind.BLOOD_PRESSURE
    payload_type = int


@dataclass(frozen=True)
class PainScore(Sign):
    """Pain score on a 0-10 scale."""
    value: int
    kind = SignKind.PAIN_SCORE
    payload_type = int


@dataclass(frozen=True)
class LiverFailure(Sign):
    value: bool
    kind = SignKind.LIVER_FAILURE
    payload_type = bool
    absent_value = False


@dataclass(frozen=True)
class CentralVenousLine(Sign):
    value: bool
    kind = SignKind.CENTRAL_VENOUS_LINE
    payload_type = bool
    absent_value = False


SIGN_TYPES: Dict[SignKind, Type[Sign]] = {
    SignKind.BLOOD_PRESSURE:      BloodPressure,
    SignKind.PAIN_SCORE:          PainScore,
    SignKind.LIVER_FAILURE:       LiverFailure,
    SignKind.CENTRAL_VENOUS_LINE: CentralVenousLine,
}


# ── Patient ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Patient:
    """The patient receiving treatment."""
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PatientSigns:
    """All signs observed for one patient. Several signs of one kind may coexist."""
    patient: Patient
    signs: Tuple[Sign, ...] = ()

    def add_sign(self, sign: Sign) -> "PatientSigns":
        return PatientSigns(self.patient, self.signs + (sign,))

    def of_kind(self, kind: SignKind) -> List[Sign]:
        return [s for s in self.signs if s.kind == kind]

    def __iter__(self) -> Iterator[Sign]:
        return iter(self.signs)

    def __len__(self) -> int:
        return len(self.signs)


# ── Targets & conditions ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Target:
    """
    An aim expressed as a predicate over the payload of one sign kind.

    Total over all signs: a sign of another kind never disqualifies the
    target, so calling it on such a sign returns True.
    """
    kind: SignKind
    predicate: Callable[[Any], bool]
    description: str = ""

    def applies_to(self, sign: Sign) -> bool:
        return sign.kind == self.kind

    @property
    def absent_value(self) -> Optional[bool]:
        """Payload assumed when no sign of this kind was observed, if any."""
        return SIGN_TYPES[self.kind].absent_value

    def __call__(self, sign: Sign) -> bool:
        if not self.applies_to(sign):
            return True
        return bool(self.predicate(sign.value))

    def __str__(self) -> str:
        return self.description or self.kind.value


@dataclass(frozen=True)
class Condition:
    """A precondition: holds for a sign iff the target's verdict equals ``expected``."""
    target: Target
    expected: bool = True

    @property
    def kind(self) -> SignKind:
        return self.target.kind

    def holds_for(self, sign: Sign) -> bool:
        if not self.target.applies_to(sign):
            return True
        return bool(self.target.predicate(sign.value)) == self.expected

    def __str__(self) -> str:
        return str(self.target) if self.expected else f"not ({self.target})"


# ── Orders & treatments ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Order:
    """The prescribable action, identified by its label."""
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, eq=False)
class Treatment:
    """
    An Order together with the Target it aims to satisfy.

    Two treatments are the same treatment iff their orders are equal;
    the target is carried along as rationale only.
    """
    target: Target
    order: Order

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Treatment):
            return NotImplemented
        return self.order == other.order

    def __hash__(self) -> int:
        return hash(self.order)

    def __str__(self) -> str:
        return f"{self.order} ({self.target})"


# ── Protocol ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProtocolStep:
    """One rung of the escalation ladder."""
    conditions: Tuple[Condition, ...]
    treatment: Treatment


@dataclass(frozen=True)
class Protocol:
    """
    Ordered (conditions, treatment) steps. List order is precedence.

    Protocols only grow by appending a step; next_step() returns a new value.
    """
    name: str
    steps: Tuple[ProtocolStep, ...] = ()

    def next_step(self, conditions: Iterable[Condition], treatment: Treatment) -> "Protocol":
        step = ProtocolStep(tuple(conditions), treatment)
        return Protocol(self.name, self.steps + (step,))

    @property
    def treatments(self) -> List[Treatment]:
        return [step.treatment for step in self.steps]

    def __iter__(self) -> Iterator[ProtocolStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)


# ── Patient treatment ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PatientTreatment:
    """
    The active treatments of one patient, keyed by Order.

    At most one Treatment per Order is stored; the first one added wins.
    """
    patient: Patient
    entries: Dict[Order, Treatment] = field(default_factory=dict)

    # value compared by content, never used as a key
    __hash__ = None

    @classmethod
    def of(cls, patient: Patient, treatments: Iterable[Treatment] = ()) -> "PatientTreatment":
        entries: Dict[Order, Treatment] = {}
        for treatment in treatments:
            entries.setdefault(treatment.order, treatment)
        return cls(patient, entries)

    def add(self, treatment: Treatment) -> "PatientTreatment":
        if treatment.order in self.entries:
            return self
        entries = dict(self.entries)
        entries[treatment.order] = treatment
        return PatientTreatment(self.patient, entries)

    def remove(self, treatment: Treatment) -> "PatientTreatment":
        if treatment.order not in self.entries:
            return self
        entries = dict(self.entries)
        del entries[treatment.order]
        return PatientTreatment(self.patient, entries)

    @property
    def orders(self) -> List[Order]:
        return list(self.entries)

    @property
    def treatments(self) -> List[Treatment]:
        return list(self.entries.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Treatment):
            return item.order in self.entries
        return item in self.entries

    def __iter__(self) -> Iterator[Treatment]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        orders = ", ".join(o.label for o in self.entries)
        return f"{self.patient}: [{orders}]"
