"""
Elementary Transcendentals — sqrt, cbrt, hypot

Метод:
1. Масштабирование аргумента: обращение при отрицательной экспоненте,
   рекурсия по остатку экспоненты mod 2 (mod 3) при |exponent| >= 2 (3)
2. Начальное приближение из double
3. Метод Ньютона с удвоением рабочей точности на каждом шаге
"""

import math

from mparith.core.domain.bignum import DOUBLE_ACCURACY, LOG_RADIX, Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    div_digit,
    half,
    mul,
    plus_one,
    rec,
)
from mparith.core.math.compare import gt
from mparith.core.math.conversions import mp_to_real, real_to_mp
from mparith.core.math.normalization import move, set_zero
from mparith.core.math.precision import lengthen, shorten
from mparith.runtime.context import MPContext


def _newton_digits(decimals: int, digits_g: int) -> int:
    """Рабочая точность шага Ньютона с decimals верными знаками."""
    return min(1 + decimals // LOG_RADIX, digits_g)


def sqrt(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = √x

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент, x >= 0
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: x < 0
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)
    if x.negative:
        ctx.domain_error("square root of negative value")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = arena.alloc(digits_g)
        tmp = arena.alloc(digits_g)

        reciprocal = x_g.exponent < 0
        if reciprocal:
            rec(ctx, x_g, x_g, digits_g)

        if abs(x_g.exponent) >= 2:
            expo = x_g.exponent
            x_g.exponent = expo % 2
            sqrt(ctx, z_g, x_g, digits_g)
            z_g.exponent += expo // 2
        else:
            real_to_mp(ctx, z_g, math.sqrt(mp_to_real(ctx, x_g, digits_g)), digits_g)
            decimals = DOUBLE_ACCURACY
            while True:
                decimals *= 2
                digits_h = _newton_digits(decimals, digits_g)
                div(ctx, tmp, x_g, z_g, digits_h)
                add(ctx, tmp, z_g, tmp, digits_h)
                half(ctx, z_g, tmp, digits_h)
                if decimals >= 2 * digits_g * LOG_RADIX:
                    break

        if reciprocal:
            rec(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def cbrt(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = ∛x (определён для любого знака x).

    Итерация Ньютона: z ← (2z + x/z²) / 3.
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    negative = x.negative
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        x_g.negative = False
        z_g = arena.alloc(digits_g)
        tmp = arena.alloc(digits_g)

        reciprocal = x_g.exponent < 0
        if reciprocal:
            rec(ctx, x_g, x_g, digits_g)

        if abs(x_g.exponent) >= 3:
            expo = x_g.exponent
            x_g.exponent = expo % 3
            cbrt(ctx, z_g, x_g, digits_g)
            z_g.exponent += expo // 3
        else:
            real_to_mp(ctx, z_g, mp_to_real(ctx, x_g, digits_g) ** (1.0 / 3.0), digits_g)
            decimals = DOUBLE_ACCURACY
            while True:
                decimals *= 2
                digits_h = _newton_digits(decimals, digits_g)
                mul(ctx, tmp, z_g, z_g, digits_h)
                div(ctx, tmp, x_g, tmp, digits_h)
                add(ctx, tmp, tmp, z_g, digits_h)
                add(ctx, tmp, tmp, z_g, digits_h)
                div_digit(ctx, z_g, tmp, 3, digits_h)
                if decimals >= digits_g * LOG_RADIX:
                    break

        if reciprocal:
            rec(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    z.set_sign(negative)
    return z


def hypot(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = √(x² + y²) в форме max · √(1 + (min/max)²).
    """
    ctx.require_initialised(x, y)
    with ctx.arena.scope() as arena:
        u = abs_mp(ctx, arena.alloc(digits), x, digits)
        v = abs_mp(ctx, arena.alloc(digits), y, digits)
        t = arena.alloc(digits)
        if u.is_zero():
            return move(z, v, digits)
        if v.is_zero():
            return move(z, u, digits)

        big, small = (u, v) if gt(ctx, u, v, digits) else (v, u)
        div(ctx, t, small, big, digits)
        mul(ctx, t, t, t, digits)
        plus_one(ctx, t, t, digits)
        sqrt(ctx, t, t, digits)
        mul(ctx, z, big, t, digits)
    return z
