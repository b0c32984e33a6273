"""
Representation & Normalization — общие примитивы представления

Функции этого модуля разделяют все остальные ядра:
- перенос/заём (normalize, normalize_light) в ненормализованных буферах
- округление расширенного рабочего буфера в N цифр (round_internal)
- присваивание, копирование, сравнение на идентичность
- контроль экспоненты

Индексы цифр в коде нулевые: digits[0] — ведущая цифра digit[1].
"""

from typing import List

from mparith.core.domain.bignum import HALF_RADIX, RADIX, Bignum
from mparith.runtime.context import MPContext

# =============================================================================
# ПЕРЕНОСЫ
# =============================================================================


def normalize(d: List[int], first: int, stop: int) -> None:
    """
    Общая нормализация: перенос/заём через целочисленное деление.

    Обрабатывает индексы stop-1 … first справа налево, перенося излишек в
    соседнюю левую цифру. Допускает произвольно большие отклонения цифр
    (после multiply-accumulate).

    Args:
        d: Цифры буфера (изменяются на месте)
        first: Первый нормализуемый индекс (>= 1)
        stop: Индекс за последним нормализуемым
    """
    for j in range(stop - 1, first - 1, -1):
        k = d[j]
        if k >= RADIX or k < 0:
            carry, d[j] = divmod(k, RADIX)
            d[j - 1] += carry


def normalize_light(d: List[int], first: int, stop: int) -> None:
    """
    Быстрая нормализация: каждая цифра не дальше одного шага RADIX от [0, RADIX).

    Args:
        d: Цифры буфера (изменяются на месте)
        first: Первый нормализуемый индекс (>= 1)
        stop: Индекс за последним нормализуемым
    """
    for j in range(stop - 1, first - 1, -1):
        k = d[j]
        if k >= RADIX:
            d[j] = k - RADIX
            d[j - 1] += 1
        elif k < 0:
            d[j] = k + RADIX
            d[j - 1] -= 1


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_internal(z: Bignum, w: Bignum, digits: int, negative: bool = False) -> Bignum:
    """
    Округление рабочего буфера w (модуль, >= digits + 2 цифр) в z.

    Если ведущая цифра w нулевая, значение сдвигается влево и округляется
    по цифре N+2, иначе по цифре N+1 (half away from zero). Перенос из
    ведущей цифры сдвигает окно вправо с увеличением экспоненты.

    Args:
        z: Выходной буфер (>= digits цифр)
        w: Рабочий буфер с нормализованными цифрами после ведущей
        digits: Точность результата
        negative: Знак результата

    Returns:
        z
    """
    wd = w.digits
    exponent = w.exponent
    last = digits + 1 if wd[0] == 0 else digits

    if wd[last] >= HALF_RADIX:
        wd[last - 1] += 1
        if wd[last - 1] >= RADIX:
            normalize(wd, 1, last)

    if wd[0] >= RADIX:
        carry, wd[0] = divmod(wd[0], RADIX)
        wd[1 : digits + 1] = wd[:digits]
        wd[0] = carry
        exponent += 1

    if wd[0] == 0:
        z.digits[:digits] = wd[1 : digits + 1]
        z.exponent = exponent - 1
    else:
        z.digits[:digits] = wd[:digits]
        z.exponent = exponent

    if z.digits[0] == 0:
        z.exponent = 0

    z.set_sign(negative)
    z.initialised = True
    return z


# =============================================================================
# ПРИСВАИВАНИЕ
# =============================================================================


def set_zero(z: Bignum, digits: int) -> Bignum:
    z.digits[:digits] = [0] * digits
    z.exponent = 0
    z.negative = False
    z.initialised = True
    return z


def set_short(z: Bignum, value: int, exponent: int, digits: int) -> Bignum:
    """
    z = value · RADIX^exponent для |value| < RADIX.

    Args:
        z: Выходной буфер
        value: Однозначное (в RADIX) значение со знаком
        exponent: Степень RADIX
        digits: Точность

    Returns:
        z
    """
    if abs(value) >= RADIX:
        raise ValueError(f"value {value} does not fit one digit")

    set_zero(z, digits)
    if value != 0:
        z.digits[0] = abs(value)
        z.exponent = exponent
        z.negative = value < 0
    return z


def move(z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = x (первые digits цифр, экспонента, знак, статус)."""
    if z is not x:
        z.digits[:digits] = x.digits[:digits]
        z.exponent = x.exponent
        z.negative = x.negative
        z.initialised = x.initialised
    return z


def same(x: Bignum, y: Bignum, digits: int) -> bool:
    """Побитовая идентичность первых digits цифр, экспоненты и знака."""
    return (
        x.exponent == y.exponent
        and x.negative == y.negative
        and x.digits[:digits] == y.digits[:digits]
    )


def near_unity(x: Bignum) -> bool:
    """Значение вида ±1.0000000… (digits[0] == 1, digits[1] == 0, exponent 0)."""
    return x.exponent == 0 and x.digits[0] == 1 and x.digits[1] == 0


# =============================================================================
# КОНТРОЛЬ ЭКСПОНЕНТЫ
# =============================================================================


def check_exponent(ctx: MPContext, z: Bignum) -> None:
    """
    Raises:
        MPRangeError: |exponent| выходит за предел конфигурации
    """
    if abs(z.exponent) > ctx.config.max_exponent:
        ctx.range_error(
            f"exponent {z.exponent} exceeds limit {ctx.config.max_exponent}"
        )
