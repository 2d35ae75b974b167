"""
Custom Exception Hierarchy

Specific exception types for construction-side and service errors, each
carrying structured error information for API responses. The evaluation
engine itself never raises.
"""
from typing import Optional, Dict, Any


class GenTreatError(Exception):
    """Base exception for all GenTreat errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class SignError(GenTreatError):
    """Unknown sign kind, or a payload of the wrong type for its kind."""

    def __init__(
        self,
        message: str,
        kind: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SIGN_ERROR",
            details={"kind": kind, **(details or {})}
        )
        self.kind = kind


class ProtocolError(GenTreatError):
    """Errors in protocol construction or lookup."""

    def __init__(
        self,
        message: str,
        protocol: str = "unknown",
        code: str = "PROTOCOL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details={"protocol": protocol, **(details or {})}
        )
        self.protocol = protocol


class ProtocolConsistencyError(ProtocolError):
    """Two steps of one protocol use the same order with different targets."""

    def __init__(
        self,
        message: str,
        protocol: str = "unknown",
        order: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            protocol=protocol,
            code="PROTOCOL_CONSISTENCY_ERROR",
            details={"order": order, **(details or {})}
        )
        self.order = order


class UnknownProtocolError(ProtocolError):
    """Requested protocol is not registered."""

    def __init__(self, protocol: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Unknown protocol: {protocol}",
            protocol=protocol,
            code="UNKNOWN_PROTOCOL",
            details=details
        )


class UnknownOrderError(GenTreatError):
    """An active order label could not be resolved to a known treatment."""

    def __init__(self, order: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Unknown order: {order}",
            code="UNKNOWN_ORDER",
            details={"order": order, **(details or {})}
        )
        self.order = order
