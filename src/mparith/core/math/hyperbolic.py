"""
Hyperbolic Family — sinh, cosh, tanh и обратные функции

sinh/cosh вычисляются совместно из eˣ и e⁻ˣ. Когда одно из них равно
1.0000000… (|x| мал), разность eˣ - e⁻ˣ теряет значащие цифры, и обе
экспоненты пересчитываются через expm1.
"""

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import add, div, half, minus_one, mul, one_minus, plus_one, rec, sub
from mparith.core.math.explog import exp, expm1, ln
from mparith.core.math.normalization import move, near_unity, set_zero
from mparith.core.math.precision import lengthen, shorten
from mparith.core.math.roots import sqrt
from mparith.runtime.context import MPContext


def hyp(ctx: MPContext, sh: Bignum, ch: Bignum, x: Bignum, digits: int) -> None:
    """
    sh = sinh(x), ch = cosh(x) в точности digits (без guard-цифр).

    Args:
        ctx: Контекст вычислений
        sh: Выходной буфер sinh
        ch: Выходной буфер cosh
        x: Аргумент
        digits: Рабочая точность
    """
    with ctx.arena.scope() as arena:
        x_g = move(arena.alloc(digits), x, digits)
        e_plus = exp(ctx, arena.alloc(digits), x_g, digits)
        e_minus = rec(ctx, arena.alloc(digits), e_plus, digits)
        add(ctx, ch, e_plus, e_minus, digits)
        if near_unity(e_plus) or near_unity(e_minus):
            expm1(ctx, e_plus, x_g, digits)
            x_g.negate()
            expm1(ctx, e_minus, x_g, digits)
        sub(ctx, sh, e_plus, e_minus, digits)
        half(ctx, sh, sh, digits)
        half(ctx, ch, ch, digits)


def sinh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = sinh(x)"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        sh = arena.alloc(digits_g)
        hyp(ctx, sh, arena.alloc(digits_g), x_g, digits_g)
        shorten(ctx, z, digits, sh, digits_g)
    return z


def cosh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = cosh(x)"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        ch = arena.alloc(digits_g)
        hyp(ctx, arena.alloc(digits_g), ch, x_g, digits_g)
        shorten(ctx, z, digits, ch, digits_g)
    return z


def tanh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = tanh(x) = sinh(x) / cosh(x)"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        sh = arena.alloc(digits_g)
        ch = arena.alloc(digits_g)
        hyp(ctx, sh, ch, x_g, digits_g)
        div(ctx, sh, sh, ch, digits_g)
        shorten(ctx, z, digits, sh, digits_g)
    return z


def asinh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = arsinh(x) = sign(x) · ln(|x| + √(x² + 1))

    При |x| < RADIX⁻¹ точность удваивается: x² + 1 близко к единице.
    Если логарифм обращается в ноль, возвращается сам x.
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    if x.exponent >= -1:
        digits_g = ctx.fun_digits(digits)
    else:
        digits_g = 2 * ctx.fun_digits(digits)

    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        x_g.negative = False
        y_g = arena.alloc(digits_g)
        z_g = arena.alloc(digits_g)

        mul(ctx, y_g, x_g, x_g, digits_g)
        plus_one(ctx, y_g, y_g, digits_g)
        sqrt(ctx, y_g, y_g, digits_g)
        add(ctx, y_g, y_g, x_g, digits_g)
        ln(ctx, z_g, y_g, digits_g)

        if z_g.is_zero():
            return move(z, x, digits)
        shorten(ctx, z, digits, z_g, digits_g)
    z.set_sign(x.negative)
    return z


def acosh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = arcosh(x) = ln(x + √(x² - 1))

    Для x = 1.0000000… точность удваивается: x² - 1 близко к нулю.

    Raises:
        MPDomainError: x < 1
    """
    ctx.require_initialised(x)
    if x.negative or x.is_zero() or x.exponent < 0:
        ctx.domain_error("inverse hyperbolic cosine of value below one")

    if near_unity(x):
        digits_g = 2 * ctx.fun_digits(digits)
    else:
        digits_g = ctx.fun_digits(digits)

    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y_g = arena.alloc(digits_g)
        z_g = arena.alloc(digits_g)

        mul(ctx, y_g, x_g, x_g, digits_g)
        minus_one(ctx, y_g, y_g, digits_g)
        sqrt(ctx, y_g, y_g, digits_g)
        add(ctx, y_g, y_g, x_g, digits_g)
        ln(ctx, z_g, y_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def atanh(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = artanh(x) = ln((1 + x) / (1 - x)) / 2

    Raises:
        MPDomainError: |x| >= 1
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)
    if x.exponent >= 0:
        ctx.domain_error("inverse hyperbolic tangent outside (-1, 1)")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y_g = arena.alloc(digits_g)
        z_g = arena.alloc(digits_g)

        plus_one(ctx, z_g, x_g, digits_g)
        one_minus(ctx, y_g, x_g, digits_g)
        div(ctx, y_g, z_g, y_g, digits_g)
        ln(ctx, z_g, y_g, digits_g)
        half(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z
