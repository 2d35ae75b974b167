"""
Construction-time protocol consistency check.

A protocol that lists the same order twice with different targets would let
the second step silently inherit the first step's rationale, because the
treatment set only tracks orders. check_consistency() rejects that.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from gentreat.utils.exceptions import ProtocolConsistencyError
from gentreat.utils.logging import get_logger
from .base import Order, Protocol, Target

logger = get_logger(__name__)


def find_conflicts(protocol: Protocol) -> List[Tuple[int, int, Order]]:
    """Return (first_step, conflicting_step, order) for every reused order with a new target."""
    seen: Dict[Order, Tuple[int, Target]] = {}
    conflicts: List[Tuple[int, int, Order]] = []
    for index, step in enumerate(protocol.steps):
        order = step.treatment.order
        if order not in seen:
            seen[order] = (index, step.treatment.target)
            continue
        first_index, first_target = seen[order]
        if step.treatment.target != first_target:
            conflicts.append((first_index, index, order))
    return conflicts


def check_consistency(protocol: Protocol) -> Protocol:
    """
    Raise ProtocolConsistencyError on the first conflicting step.

    Returns the protocol unchanged so it can be used inline when registering.
    """
    conflicts = find_conflicts(protocol)
    if conflicts:
        first, second, order = conflicts[0]
        logger.error(
            f"Protocol '{protocol.name}': order '{order}' at steps {first} and {second} "
            f"has different targets"
        )
        raise ProtocolConsistencyError(
            f"Order '{order}' is used with different targets in protocol '{protocol.name}'",
            protocol=protocol.name,
            order=order.label,
            details={"steps": [first, second], "conflicts": len(conflicts)},
        )
    return protocol
