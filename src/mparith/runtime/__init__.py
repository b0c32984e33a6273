"""
Runtime state for multiprecision evaluation.

Scratch arena, diagnostics, constant caches and the evaluation context
that threads them through every kernel.
"""

from mparith.runtime.arena import ArenaCursor, DigitArena
from mparith.runtime.constants_cache import CachedConstant, ConstantCache, ConstantSlot
from mparith.runtime.context import MPContext
from mparith.runtime.diagnostics import (
    ArenaExhausted,
    DiagnosticReport,
    Diagnostics,
    Errno,
    ErrorKind,
    LoggingDiagnostics,
    MPDomainError,
    MPError,
    MPRangeError,
    UninitialisedValueError,
)

__all__ = [
    # Arena
    "ArenaCursor",
    "DigitArena",
    # Constant cache
    "CachedConstant",
    "ConstantCache",
    "ConstantSlot",
    # Context
    "MPContext",
    # Diagnostics: types
    "DiagnosticReport",
    "Diagnostics",
    "Errno",
    "ErrorKind",
    "LoggingDiagnostics",
    # Diagnostics: exceptions
    "ArenaExhausted",
    "MPDomainError",
    "MPError",
    "MPRangeError",
    "UninitialisedValueError",
]
