"""
mparith — arbitrary-precision decimal arithmetic

Sign-magnitude числа по основанию RADIX = 10^7 с явной рабочей точностью,
guard-цифрами и общей scratch-ареной.

Examples:
    >>> from mparith import Bignum, MPContext
    >>> from mparith.core.math import pi, mp_to_string
    >>> ctx = MPContext()
    >>> z = pi(ctx, Bignum.empty(4), 4)
    >>> mp_to_string(ctx, z, 4)
    '3.141592653589793238463e+0'
"""

from mparith.core.domain import Bignum, BignumRecord, MPConfig, load_config
from mparith.runtime import (
    LoggingDiagnostics,
    MPContext,
    MPDomainError,
    MPError,
    MPRangeError,
)

__version__ = "0.1.0"

__all__ = [
    "Bignum",
    "BignumRecord",
    "MPConfig",
    "load_config",
    "MPContext",
    "LoggingDiagnostics",
    "MPError",
    "MPDomainError",
    "MPRangeError",
]
