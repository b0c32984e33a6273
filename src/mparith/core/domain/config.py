"""
MPConfig — конфигурация multiprecision движка

Неизменяемая (frozen) Pydantic модель с параметрами точности, ширины
машинных типов и ограничений арены. Загружается из JSON с предварительной
валидацией по JSON Schema (mp_config.json).
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator

from mparith.core.domain.bignum import (
    BITS_BITS,
    LOG_RADIX,
    LONG_MP_DIGITS,
    LONGLONG_MP_DIGITS,
    MAX_MP_EXPONENT,
    RADIX,
)


class MPConfig(BaseModel):
    """
    Конфигурация движка.

    Инварианты:
    - 2^bits_radix_bits < RADIX (слово bit-pattern помещается в одну цифру)
    - Точности уровней >= 2 цифр
    """

    long_digits: int = Field(
        default=LONG_MP_DIGITS, ge=2, description="Точность уровня LONG (цифры RADIX)"
    )
    longlong_digits: int = Field(
        default=LONGLONG_MP_DIGITS, ge=2, description="Точность уровня LONG LONG по умолчанию"
    )
    int_bits: int = Field(
        default=64, ge=8, le=1024, description="Ширина машинного целого для int-конверсий"
    )
    bits_radix_bits: int = Field(
        default=BITS_BITS, ge=1, description="Ширина слова bit-pattern (BITS_RADIX = 2^bits)"
    )
    max_exponent: int = Field(
        default=MAX_MP_EXPONENT, gt=0, description="Предел |exponent| (в цифрах RADIX)"
    )
    arena_limit_digits: int = Field(
        default=50_000_000, gt=0, description="Предел живых цифр в арене"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("bits_radix_bits")
    @classmethod
    def validate_bits_radix(cls, v: int) -> int:
        """Слово bit-pattern должно быть меньше RADIX."""
        if 2**v >= RADIX:
            raise ValueError(f"2^bits_radix_bits must be below RADIX={RADIX}, got bits={v}")
        return v

    # =========================================================================
    # GUARD DIGITS
    # =========================================================================

    def guard_digits(self, digits: int) -> int:
        """
        Число guard-цифр для рабочей точности digits.

        Уровень LONG получает 2 цифры; для остальных точностей 2 цифры при
        LOG_RADIX > 5 и 3 цифры при меньшем основании.
        """
        if digits == self.long_digits:
            return 2
        return 3 if LOG_RADIX <= 5 else 2

    def fun_digits(self, digits: int) -> int:
        """Расширенная точность временных буферов: digits + guard."""
        return digits + self.guard_digits(digits)

    @staticmethod
    def digits_for_decimals(decimals: int) -> int:
        """Число цифр RADIX, вмещающее decimals десятичных знаков."""
        return 2 + -(-decimals // LOG_RADIX)

    # =========================================================================
    # МАШИННЫЕ ГРАНИЦЫ
    # =========================================================================

    @property
    def int_max(self) -> int:
        return 2 ** (self.int_bits - 1) - 1

    @property
    def int_min(self) -> int:
        return -(2 ** (self.int_bits - 1))

    @property
    def unsigned_max(self) -> int:
        return 2**self.int_bits - 1

    @property
    def bits_radix(self) -> int:
        return 2**self.bits_radix_bits


def load_config(path: Union[str, Path]) -> MPConfig:
    """
    Загрузка конфигурации из JSON файла.

    Документ сначала проверяется по JSON Schema mp_config.json, затем
    передаётся в Pydantic модель.

    Args:
        path: Путь к JSON файлу

    Returns:
        MPConfig

    Raises:
        jsonschema.ValidationError: Документ не соответствует схеме
        pydantic.ValidationError: Нарушены инварианты модели
    """
    from mparith.core.contracts.validators import validate_mp_config

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_mp_config(data)
    return MPConfig(**data)
