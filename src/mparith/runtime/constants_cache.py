"""
ConstantCache — кэш констант с меткой точности

Одна ячейка на константу (π, ln(RADIX), ln(10)). Ячейка хранит значение,
вычисленное с наибольшей запрошенной до сих пор точностью. Вычисление
значений выполняют модули mparith.core.math; кэш только хранит их.

Таблицы коэффициентов (Spouge для gamma) зависят от точности целиком:
таблица хранится под ключом (имя, digits) и выдаётся только для той же
точности.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from mparith.core.domain.bignum import Bignum

logger = logging.getLogger(__name__)


class ConstantSlot(str, Enum):
    """Кэшируемые константы"""

    PI = "pi"
    LN_RADIX = "ln_radix"
    LN_TEN = "ln_10"


@dataclass
class CachedConstant:
    """Значение и число его цифр"""

    value: Bignum
    digits: int


def _copy(value: Bignum, digits: int) -> Bignum:
    return Bignum(
        digits=list(value.digits[:digits]),
        exponent=value.exponent,
        negative=value.negative,
        initialised=True,
    )


class ConstantCache:
    """Ленивый кэш констант: растёт, никогда не сжимается."""

    def __init__(self) -> None:
        self._slots: Dict[ConstantSlot, CachedConstant] = {}
        self._tables: Dict[Tuple[str, int], List[Bignum]] = {}

    def lookup(self, slot: ConstantSlot, digits: int) -> Optional[CachedConstant]:
        """Ячейка, если её точности достаточно для digits цифр."""
        cached = self._slots.get(slot)
        if cached is None or cached.digits < digits:
            return None
        return cached

    def store(self, slot: ConstantSlot, value: Bignum, digits: int) -> None:
        """Замена ячейки копией value с digits цифрами."""
        self._slots[slot] = CachedConstant(value=_copy(value, digits), digits=digits)
        logger.debug("constant %s cached at %d digits", slot.value, digits)

    def cached_digits(self, slot: ConstantSlot) -> int:
        cached = self._slots.get(slot)
        return cached.digits if cached else 0

    def lookup_table(self, name: str, digits: int) -> Optional[List[Bignum]]:
        """Таблица name, построенная ровно для digits цифр."""
        return self._tables.get((name, digits))

    def store_table(self, name: str, values: Sequence[Bignum], digits: int) -> List[Bignum]:
        """Сохранение копий values; возвращает сохранённую таблицу."""
        table = [_copy(value, digits) for value in values]
        self._tables[(name, digits)] = table
        logger.debug("table %s cached at %d digits (%d entries)", name, digits, len(table))
        return table

    def clear(self) -> None:
        self._slots.clear()
        self._tables.clear()
