"""
Contract Validation Module

Модуль для валидации JSON контрактов движка mparith.
"""

from .validators import (
    SchemaLoader,
    parse_bignum_record,
    validate_bignum_record,
    validate_mp_config,
)

__all__ = [
    "SchemaLoader",
    "validate_bignum_record",
    "validate_mp_config",
    "parse_bignum_record",
]
