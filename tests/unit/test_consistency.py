"""
Unit Tests for the protocol consistency check.
"""
import pytest

from gentreat.core.protocol import Order, Treatment, check_consistency, find_conflicts
from gentreat.core.protocol.factories import create_protocol
from gentreat.core.protocol.rules_blood_pressure import (
    BP_ABOVE_TARGET,
    build_blood_pressure_protocol,
)
from gentreat.core.protocol.rules_pain import (
    MORPHINE_FOR_NO_PAIN,
    PARACETAMOL_FOR_NO_PAIN,
    build_pain_protocol,
)
from gentreat.utils.exceptions import ProtocolConsistencyError, ProtocolError


def test_shipped_protocols_are_consistent():
    for protocol in (build_pain_protocol(), build_blood_pressure_protocol()):
        assert find_conflicts(protocol) == []
        assert check_consistency(protocol) is protocol


def test_same_target_reused_is_allowed():
    protocol = create_protocol("p", [], PARACETAMOL_FOR_NO_PAIN).next_step([], PARACETAMOL_FOR_NO_PAIN)
    assert check_consistency(protocol) is protocol


def test_shared_target_different_orders_is_allowed():
    protocol = create_protocol("p", [], PARACETAMOL_FOR_NO_PAIN).next_step([], MORPHINE_FOR_NO_PAIN)
    assert find_conflicts(protocol) == []


def test_order_reused_with_different_target():
    conflicting = Treatment(BP_ABOVE_TARGET, Order("paracetamol"))
    protocol = (
        create_protocol("p", [], PARACETAMOL_FOR_NO_PAIN)
        .next_step([], MORPHINE_FOR_NO_PAIN)
        .next_step([], conflicting)
    )
    assert find_conflicts(protocol) == [(0, 2, Order("paracetamol"))]

    with pytest.raises(ProtocolConsistencyError) as exc:
        check_consistency(protocol)
    assert isinstance(exc.value, ProtocolError)
    assert exc.value.to_dict() == {
        "error": "PROTOCOL_CONSISTENCY_ERROR",
        "message": "Order 'paracetamol' is used with different targets in protocol 'p'",
        "details": {"protocol": "p", "order": "paracetamol", "steps": [0, 2], "conflicts": 1},
    }
