"""
Domain models and value objects.

Contains the Bignum buffer, library-wide radix constants, the engine
configuration and the serialized record model.
"""

from mparith.core.domain.bignum import (
    BITS_BITS,
    DIV_OVERFLOW,
    DOUBLE_ACCURACY,
    HALF_RADIX,
    LOG_RADIX,
    LONG_MP_DIGITS,
    LONGLONG_MP_DIGITS,
    MAX_MP_EXPONENT,
    MAX_REPR_INT,
    MUL_OVERFLOW,
    RADIX,
    Bignum,
)
from mparith.core.domain.config import MPConfig, load_config
from mparith.core.domain.record import BignumRecord

__all__ = [
    # Bignum: constants
    "BITS_BITS",
    "DIV_OVERFLOW",
    "DOUBLE_ACCURACY",
    "HALF_RADIX",
    "LOG_RADIX",
    "LONG_MP_DIGITS",
    "LONGLONG_MP_DIGITS",
    "MAX_MP_EXPONENT",
    "MAX_REPR_INT",
    "MUL_OVERFLOW",
    "RADIX",
    # Bignum: types
    "Bignum",
    # Config
    "MPConfig",
    "load_config",
    # Record
    "BignumRecord",
]
