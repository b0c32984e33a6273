"""
Bignum — десятичное число произвольной точности (sign-magnitude)

Значение:
    sign · (digit[1] + digit[2]·R⁻¹ + … + digit[N]·R⁻⁽ᴺ⁻¹⁾) · R^exponent

где R = RADIX = 10⁷. Цифры хранятся как модули в [0, R), знак хранится
отдельным флагом `negative`. Рабочая точность N не является частью значения:
буфер имеет фиксированную ёмкость, а каждая операция получает N явно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ (после любой публичной операции):
1. Все цифры лежат в [0, RADIX)
2. digit[1] == 0 ⇔ значение равно нулю; ноль имеет exponent == 0 и знак "+"
3. Результат округлён half-away-from-zero по (N+1)-й цифре
"""

import sys
from dataclasses import dataclass, field
from typing import Final, List

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Основание: степень десяти, такая что RADIX² точно представимо в double
RADIX: Final[int] = 10_000_000
LOG_RADIX: Final[int] = 7
HALF_RADIX: Final[int] = RADIX // 2

# Максимальное целое, точно представимое в double (2^53)
MAX_REPR_INT: Final[int] = 9_007_199_254_740_992

# Количество гарантированно верных десятичных знаков double минус один
DOUBLE_ACCURACY: Final[int] = sys.float_info.dig - 1

# Предел модуля экспоненты (в цифрах RADIX)
MAX_MP_EXPONENT: Final[int] = 142857

# Точности уровней LONG и LONG LONG (в цифрах RADIX)
LONG_MP_DIGITS: Final[int] = 5
LONGLONG_MP_DIGITS: Final[int] = 10

# Ширина машинного слова для bit-pattern конверсий (BITS_RADIX = 2^BITS_BITS < RADIX)
BITS_BITS: Final[int] = 23

# =============================================================================
# ПОРОГИ ПЕРИОДИЧЕСКОЙ НОРМАЛИЗАЦИИ
# =============================================================================
# Число столбцов свёртки, после которого аккумулятор нормализуется.
# Для mul взаимодействуют два буфера, для div три.
MUL_OVERFLOW: Final[int] = MAX_REPR_INT // (2 * RADIX * RADIX) - 1
DIV_OVERFLOW: Final[int] = MAX_REPR_INT // (3 * RADIX * RADIX) - 1


# =============================================================================
# ЗНАЧЕНИЕ
# =============================================================================


@dataclass(eq=False)
class Bignum:
    """
    Буфер bignum фиксированной ёмкости.

    Буфер мутабелен: все операции пишут результат в переданный вызывающим
    выходной буфер. Сравнение значений выполняется функциями из
    mparith.core.math.compare, а не через ==.

    Attributes:
        digits: Цифры-модули, digits[0] соответствует digit[1]
        exponent: Степень RADIX ведущей цифры
        negative: Знак (ноль никогда не бывает отрицательным)
        initialised: Флаг инициализации
    """

    digits: List[int]
    exponent: int = 0
    negative: bool = False
    initialised: bool = field(default=False)

    @classmethod
    def empty(cls, precision: int) -> "Bignum":
        """Неинициализированный буфер ёмкостью precision цифр."""
        if precision < 1:
            raise ValueError(f"precision must be positive, got {precision}")
        return cls(digits=[0] * precision)

    @classmethod
    def zero(cls, precision: int) -> "Bignum":
        """Инициализированный ноль ёмкостью precision цифр."""
        z = cls.empty(precision)
        z.initialised = True
        return z

    @property
    def precision(self) -> int:
        """Ёмкость буфера в цифрах RADIX."""
        return len(self.digits)

    @property
    def sign(self) -> int:
        """Знак значения: -1, 0 или 1."""
        if self.digits[0] == 0:
            return 0
        return -1 if self.negative else 1

    def is_zero(self) -> bool:
        return self.digits[0] == 0

    def negate(self) -> None:
        """Смена знака на месте; ноль остаётся положительным."""
        if self.digits[0] != 0:
            self.negative = not self.negative

    def set_sign(self, negative: bool) -> None:
        """Установка знака с сохранением канонического нуля."""
        self.negative = negative and self.digits[0] != 0
