"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    GenTreatError,
    SignError,
    ProtocolError,
    ProtocolConsistencyError,
    UnknownProtocolError,
    UnknownOrderError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "GenTreatError",
    "SignError",
    "ProtocolError",
    "ProtocolConsistencyError",
    "UnknownProtocolError",
    "UnknownOrderError",
]
