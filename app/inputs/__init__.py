"""
Calculator input handling: limits, canonicalization and sessions.
"""

from app.inputs.limits import Limit, LimitSet, ValidationResult, canonicalize, safe_value, validate
from app.inputs.instruments import INSTRUMENTS, Instrument, Option, get_instrument
from app.inputs.session import (
    CalculatorInputError,
    CalculatorSession,
    InvalidOptionError,
    ReadOnlyParameterError,
    SessionState,
    UnknownParameterError,
)

__all__ = [
    "Limit",
    "LimitSet",
    "ValidationResult",
    "canonicalize",
    "safe_value",
    "validate",
    "INSTRUMENTS",
    "Instrument",
    "Option",
    "get_instrument",
    "CalculatorInputError",
    "CalculatorSession",
    "InvalidOptionError",
    "ReadOnlyParameterError",
    "SessionState",
    "UnknownParameterError",
]
