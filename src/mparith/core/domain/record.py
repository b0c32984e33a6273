"""
BignumRecord — сериализуемое представление Bignum

Frozen Pydantic модель для обмена значениями через JSON:
    {"sign": "+", "exponent": 0, "digits": [3, 1415926, 5358979]}

Дублирует контракт bignum_record.json (JSON Schema).
"""

from typing import List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from mparith.core.domain.bignum import RADIX


class BignumRecord(BaseModel):
    """Сериализованный bignum (знак, экспонента, цифры-модули)."""

    sign: Literal["+", "-"] = Field(..., description="Знак значения")
    exponent: int = Field(..., description="Степень RADIX ведущей цифры")
    digits: List[int] = Field(..., min_length=1, description="Цифры-модули в [0, RADIX)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("digits")
    @classmethod
    def validate_digits(cls, v: List[int]) -> List[int]:
        """Каждая цифра в [0, RADIX)."""
        for k, d in enumerate(v):
            if not 0 <= d < RADIX:
                raise ValueError(f"digit #{k + 1} = {d} outside [0, {RADIX})")
        return v

    @model_validator(mode="after")
    def validate_canonical_zero(self) -> "BignumRecord":
        """Нулевая ведущая цифра только у канонического нуля."""
        if self.digits[0] == 0:
            if any(self.digits):
                raise ValueError("leading digit is zero but value is not")
            if self.exponent != 0 or self.sign != "+":
                raise ValueError("zero must have exponent 0 and sign '+'")
        return self
