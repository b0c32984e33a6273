"""
Integer-valued arithmetic: truncated quotient, remainder, integer power.

All three lengthen their operands to guard precision, work there and
shorten the result back.
"""

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import div, div_digit, mul, rec, sub
from mparith.core.math.normalization import set_short
from mparith.core.math.precision import lengthen, shorten, trunc
from mparith.runtime.context import MPContext


def over(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = trunc(x / y)

    Raises:
        MPDomainError: y == 0
    """
    ctx.require_initialised(x, y)
    if y.is_zero():
        ctx.domain_error("integer division by zero")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y_g = lengthen(ctx, arena.alloc(digits_g), digits_g, y, digits)
        z_g = arena.alloc(digits_g)
        div(ctx, z_g, x_g, y_g, digits_g)
        trunc(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def over_digit(ctx: MPContext, z: Bignum, x: Bignum, y: int, digits: int) -> Bignum:
    """z = trunc(x / y) для машинного целого y."""
    ctx.require_initialised(x)
    if y == 0:
        ctx.domain_error("integer division by zero")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = arena.alloc(digits_g)
        div_digit(ctx, z_g, x_g, y, digits_g)
        trunc(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def mod(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = x - y · trunc(x / y); знак результата совпадает со знаком x.

    Raises:
        MPDomainError: y == 0
    """
    ctx.require_initialised(x, y)
    if y.is_zero():
        ctx.domain_error("modulo by zero")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y_g = lengthen(ctx, arena.alloc(digits_g), digits_g, y, digits)
        z_g = arena.alloc(digits_g)
        over(ctx, z_g, x_g, y_g, digits_g)
        mul(ctx, z_g, y_g, z_g, digits_g)
        sub(ctx, z_g, x_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def pow_int(ctx: MPContext, z: Bignum, x: Bignum, n: int, digits: int) -> Bignum:
    """
    z = x^n, square-and-multiply; при n < 0 результат обращается.

    Raises:
        MPDomainError: x == 0 и n < 0
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    negative_power = n < 0
    n = abs(n)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        while n > 0:
            if n & 1:
                mul(ctx, z_g, z_g, x_g, digits_g)
            n >>= 1
            if n > 0:
                mul(ctx, x_g, x_g, x_g, digits_g)
        if negative_power:
            rec(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z
