"""
Exponential/Logarithm Family — exp, expm1, ln, log, pow

exp:
    Аргумент делится пополам m раз, пока eps_mp(x) истинно; ряд Тейлора
    Σxᵏ/k! суммируется до падения экспоненты члена на digits_g ниже
    экспоненты суммы; результат возводится в квадрат m раз.

ln:
    ln(1/x) = -ln(x); ln(x·RADIXᵏ) = ln(x) + k·ln(RADIX). Для x = 1.0000000…
    ряд Тейлора по (x - 1), иначе метод Ньютона z ← z - 1 + x·exp(-z) с
    удвоением точности.

ln(RADIX) и ln(10) кэшируются в контексте.
"""

import math

from mparith.core.domain.bignum import DOUBLE_ACCURACY, LOG_RADIX, Bignum
from mparith.core.math.arithmetic import (
    add,
    div,
    div_digit,
    half,
    minus_one,
    mul,
    mul_digit,
    rec,
)
from mparith.core.math.conversions import mp_to_real, real_to_mp
from mparith.core.math.normalization import move, near_unity, set_short, set_zero
from mparith.core.math.precision import cached_constant, eps_mp, lengthen, shorten
from mparith.runtime.constants_cache import ConstantSlot
from mparith.runtime.context import MPContext

# =============================================================================
# РЯД ТЕЙЛОРА
# =============================================================================


def _taylor_exp_tail(ctx: MPContext, total: Bignum, x: Bignum, digits: int) -> None:
    """
    total += Σ_{k>=2} xᵏ/k!

    Член ряда ведётся рекуррентно: tₖ = tₖ₋₁ · x / k, так что делитель
    всегда мал. Сумма начинается с переданного значения total (1 + x для
    exp, x для expm1) и обрывается, когда экспонента члена опускается на
    digits ниже экспоненты суммы.
    """
    with ctx.arena.scope() as arena:
        term = move(arena.alloc(digits), x, digits)
        n = 1
        while True:
            n += 1
            mul(ctx, term, term, x, digits)
            div_digit(ctx, term, term, n, digits)
            if term.is_zero() or term.exponent <= total.exponent - digits:
                break
            add(ctx, total, total, term, digits)


# =============================================================================
# EXP
# =============================================================================


def exp(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = eˣ

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Показатель
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPRangeError: Результат выходит за предел экспоненты
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_short(z, 1, 0, digits)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        total = arena.alloc(digits_g)

        m = 0
        while eps_mp(x_g, digits_g):
            m += 1
            half(ctx, x_g, x_g, digits_g)

        set_short(total, 1, 0, digits_g)
        add(ctx, total, total, x_g, digits_g)
        _taylor_exp_tail(ctx, total, x_g, digits_g)

        for _ in range(m):
            mul(ctx, total, total, total, digits_g)

        shorten(ctx, z, digits, total, digits_g)
    return z


def expm1(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = eˣ - 1 (без вычитания единицы, для x вблизи нуля).

    Для малого |x| (eps_mp ложно) ряд Σxᵏ/k! без единицы; иначе
    exp(x) - 1 в расширенной точности, где вычитание теряет не больше
    трёх десятичных знаков из guard-цифр.
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        if eps_mp(x_g, digits_g):
            total = exp(ctx, arena.alloc(digits_g), x_g, digits_g)
            minus_one(ctx, total, total, digits_g)
        else:
            total = move(arena.alloc(digits_g), x_g, digits_g)
            _taylor_exp_tail(ctx, total, x_g, digits_g)

        shorten(ctx, z, digits, total, digits_g)
    return z


# =============================================================================
# LN
# =============================================================================


def _ln_taylor(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> None:
    """z = ln(x) для x = 1.0000000…; x изменяется (становится x - 1)."""
    with ctx.arena.scope() as arena:
        power = arena.alloc(digits)
        tmp = arena.alloc(digits)

        minus_one(ctx, x, x, digits)
        mul(ctx, power, x, x, digits)
        move(z, x, digits)

        n = 2
        while not power.is_zero():
            div_digit(ctx, tmp, power, n, digits)
            if tmp.exponent <= z.exponent - digits:
                break
            if n % 2 == 0:
                tmp.negate()
            add(ctx, z, z, tmp, digits)
            mul(ctx, power, power, x, digits)
            n += 1


def _ln_newton(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> None:
    """z = ln(x), Ньютон z ← z - 1 + x/exp(z) с удвоением точности."""
    real_to_mp(ctx, z, math.log(mp_to_real(ctx, x, digits)), digits)
    with ctx.arena.scope() as arena:
        tmp = arena.alloc(digits)
        decimals = DOUBLE_ACCURACY
        while True:
            decimals *= 2
            digits_h = min(1 + decimals // LOG_RADIX, digits)
            exp(ctx, tmp, z, digits_h)
            div(ctx, tmp, x, tmp, digits_h)
            minus_one(ctx, z, z, digits_h)
            add(ctx, z, z, tmp, digits_h)
            if decimals >= digits * LOG_RADIX:
                break


def ln(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = ln(x)

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент, x > 0
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: x <= 0
    """
    ctx.require_initialised(x)
    if x.is_zero() or x.negative:
        ctx.domain_error("logarithm of non-positive value")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = arena.alloc(digits_g)

        inverted = x_g.exponent < 0
        if inverted:
            rec(ctx, x_g, x_g, digits_g)

        expo = 0
        if abs(x_g.exponent) >= 2:
            expo = x_g.exponent
            x_g.exponent = 0

        if near_unity(x_g):
            _ln_taylor(ctx, z_g, x_g, digits_g)
        else:
            _ln_newton(ctx, z_g, x_g, digits_g)

        if expo != 0:
            ln_base = ln_radix(ctx, arena.alloc(digits_g), digits_g)
            mul_digit(ctx, ln_base, ln_base, expo, digits_g)
            add(ctx, z_g, z_g, ln_base, digits_g)

        if inverted:
            z_g.negate()
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def ln_radix(ctx: MPContext, z: Bignum, digits: int) -> Bignum:
    """z = ln(RADIX), кэшируется."""

    def compute(buffer: Bignum, digits_g: int) -> Bignum:
        with ctx.arena.scope() as arena:
            radix = set_short(arena.alloc(digits_g), 1, 1, digits_g)
            return ln(ctx, buffer, radix, digits_g)

    return cached_constant(ctx, ConstantSlot.LN_RADIX, z, digits, compute)


def ln_ten(ctx: MPContext, z: Bignum, digits: int) -> Bignum:
    """z = ln(10), кэшируется."""

    def compute(buffer: Bignum, digits_g: int) -> Bignum:
        with ctx.arena.scope() as arena:
            ten = set_short(arena.alloc(digits_g), 10, 0, digits_g)
            return ln(ctx, buffer, ten, digits_g)

    return cached_constant(ctx, ConstantSlot.LN_TEN, z, digits, compute)


def log(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = log₁₀(x) = ln(x) / ln(10)

    Raises:
        MPDomainError: x <= 0
    """
    ctx.require_initialised(x)
    if x.is_zero() or x.negative:
        ctx.domain_error("logarithm of non-positive value")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = ln(ctx, arena.alloc(digits_g), x_g, digits_g)
        ten = ln_ten(ctx, arena.alloc(digits_g), digits_g)
        div(ctx, z_g, z_g, ten, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def pow_mp(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = xʸ = exp(y · ln x)

    Raises:
        MPDomainError: x < 0, либо x == 0 при y <= 0
    """
    ctx.require_initialised(x, y)
    if x.is_zero():
        if y.is_zero() or y.negative:
            ctx.domain_error("zero raised to a non-positive power")
        return set_zero(z, digits)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y_g = lengthen(ctx, arena.alloc(digits_g), digits_g, y, digits)
        z_g = ln(ctx, arena.alloc(digits_g), x_g, digits_g)
        mul(ctx, z_g, y_g, z_g, digits_g)
        exp(ctx, z_g, z_g, digits_g)
        shorten(ctx, z, digits, z_g, digits_g)
    return z
