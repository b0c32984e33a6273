"""
Precision Conversion — перенос значений между рабочими точностями

- lengthen: копирование с дополнением нулями
- shorten: округление в меньшую точность через окно с 2 guard-цифрами
- trunc / round_mp / entier: целая часть (к нулю / ties away / floor)
- eps_mp: порог аргумента для редукции в трансцендентных ядрах
- cached_constant: выдача кэшированной константы в нужной точности
"""

from typing import Callable

from mparith.core.domain.bignum import HALF_RADIX, Bignum
from mparith.core.math.arithmetic import add, minus_one, sub
from mparith.core.math.normalization import move, round_internal, same, set_short, set_zero
from mparith.runtime.constants_cache import ConstantSlot
from mparith.runtime.context import MPContext

# =============================================================================
# СМЕНА ТОЧНОСТИ
# =============================================================================


def lengthen(ctx: MPContext, z: Bignum, digits_z: int, x: Bignum, digits_x: int) -> Bignum:
    """
    z (digits_z цифр) = x (digits_x цифр), digits_z >= digits_x.

    Raises:
        MPDomainError: digits_z < digits_x
    """
    ctx.require_initialised(x)
    if digits_z < digits_x:
        ctx.domain_error(f"cannot lengthen {digits_x} digits to {digits_z}")

    move(z, x, digits_x)
    z.digits[digits_x:digits_z] = [0] * (digits_z - digits_x)
    return z


def shorten(ctx: MPContext, z: Bignum, digits_z: int, x: Bignum, digits_x: int) -> Bignum:
    """
    z (digits_z цифр) = x (digits_x цифр), округление по цифре digits_z + 1.

    Raises:
        MPDomainError: digits_z >= digits_x
    """
    ctx.require_initialised(x)
    if digits_z >= digits_x:
        ctx.domain_error(f"cannot shorten {digits_x} digits to {digits_z}")
    if x.is_zero():
        return set_zero(z, digits_z)

    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_z + 2)
        w.exponent = x.exponent + 1
        w.digits[1 : digits_z + 2] = x.digits[: digits_z + 1]
        round_internal(z, w, digits_z, x.negative)
    return z


# =============================================================================
# ЦЕЛАЯ ЧАСТЬ
# =============================================================================


def trunc(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = целая часть x (усечение к нулю).

    Raises:
        MPRangeError: Целая часть не помещается в digits цифр
    """
    ctx.require_initialised(x)
    if x.exponent < 0:
        return set_zero(z, digits)
    if x.exponent >= digits:
        ctx.range_error(f"integral part of value needs more than {digits} digits")

    move(z, x, digits)
    k = x.exponent + 1
    z.digits[k:digits] = [0] * (digits - k)
    return z


def round_mp(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = ближайшее целое к x, половины от нуля."""
    ctx.require_initialised(x)
    with ctx.arena.scope() as arena:
        y = set_short(arena.alloc(digits), HALF_RADIX, -1, digits)
        if x.negative:
            sub(ctx, y, x, y, digits)
        else:
            add(ctx, y, x, y, digits)
        trunc(ctx, z, y, digits)
    return z


def entier(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = floor(x)"""
    ctx.require_initialised(x)
    if not x.negative:
        return trunc(ctx, z, x, digits)

    with ctx.arena.scope() as arena:
        t = arena.alloc(digits)
        trunc(ctx, t, x, digits)
        if not same(t, x, digits):
            minus_one(ctx, t, t, digits)
        move(z, t, digits)
    return z


# =============================================================================
# ПОРОГ РЕДУКЦИИ
# =============================================================================


def eps_mp(x: Bignum, digits: int) -> bool:
    """
    Достаточно ли велик |x|, чтобы продолжать редукцию аргумента.

    Редукция (деление пополам в exp, на три в sin) идёт, пока |x| >= 1 или
    ведущая цифра при экспоненте -1 превышает 10⁵ (N <= 10) либо 10⁴.
    """
    if x.is_zero():
        return False
    if x.exponent > -1:
        return True
    if x.exponent < -1:
        return False
    threshold = 100_000 if digits <= 10 else 10_000
    return x.digits[0] > threshold


# =============================================================================
# КЭШИРОВАННЫЕ КОНСТАНТЫ
# =============================================================================


def cached_constant(
    ctx: MPContext,
    slot: ConstantSlot,
    z: Bignum,
    digits: int,
    compute: Callable[[Bignum, int], Bignum],
) -> Bignum:
    """
    z = константа slot в точности digits.

    Если кэш контекста хранит не меньше digits цифр, значение округляется
    из кэша; иначе константа вычисляется заново в точности FUN_DIGITS(digits)
    и заменяет содержимое ячейки.

    Args:
        ctx: Контекст вычислений
        slot: Ячейка кэша
        z: Выходной буфер
        digits: Требуемая точность
        compute: compute(buffer, digits) пишет константу в buffer
    """
    cached = ctx.constants.lookup(slot, digits)
    if cached is None:
        digits_g = ctx.fun_digits(digits)
        with ctx.arena.scope() as arena:
            value = compute(arena.alloc(digits_g), digits_g)
            ctx.constants.store(slot, value, digits_g)
        cached = ctx.constants.lookup(slot, digits)

    if cached.digits == digits:
        return move(z, cached.value, digits)
    return shorten(ctx, z, digits, cached.value, cached.digits)
