"""
Error Function — erf, erfc и обратные к ним

erf:
    erf(x) = 2x/√π · Σ (-1)ᵏ x²ᵏ / (k!·(2k + 1))
    Ряд знакопеременный, слагаемые растут до ~e^(x²), поэтому сумма
    считается в удвоенной точности. При |x| >= √((N·LOG_RADIX + 1)·ln 10)
    результат равен ±1 в пределах точности.

erfc:
    x < 2:   1 - erf(x)
    x >= 2:  x·e^(-x²)·G(1/2, x²)/√π, G — верхняя цепная дробь неполной
             gamma; относительная точность сохраняется и для малых erfc.

inverf / inverfc:
    Newton по erf (|y| <= 1/2) или по erfc (остальные случаи), от
    начального приближения в double:
        z ← z - (erf(z) - y)·(√π/2)·e^(z²)
        z ← z - (q - erfc(z))·(√π/2)·e^(z²)
"""

import logging
import math

from mparith.core.domain.bignum import HALF_RADIX, LOG_RADIX, Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    div_digit,
    half,
    mul,
    mul_digit,
    one_minus,
    sub,
)
from mparith.core.math.compare import ge, gt, lt
from mparith.core.math.conversions import int_to_mp, mp_to_real, real_to_mp
from mparith.core.math.explog import exp, ln, ln_ten
from mparith.core.math.gamic import g_cfrac_upper
from mparith.core.math.normalization import move, same, set_short, set_zero
from mparith.core.math.precision import lengthen, shorten
from mparith.core.math.roots import sqrt
from mparith.core.math.trig import PiMultiplier, pi
from mparith.runtime.context import MPContext

logger = logging.getLogger(__name__)

# Предел итераций Newton
NEWTON_LIMIT = 64

# Выше этого -ln(q) стартовое приближение inverfc берётся из асимптотики
_LOG_START_LIMIT = 600.0


# =============================================================================
# ERF / ERFC
# =============================================================================


def _saturation_bound(ctx: MPContext, z: Bignum, digits: int, digits_g: int) -> Bignum:
    """z = √((digits·LOG_RADIX + 1)·ln 10)"""
    with ctx.arena.scope() as arena:
        int_to_mp(ctx, z, digits * LOG_RADIX + 1, digits_g)
        mul(ctx, z, z, ln_ten(ctx, arena.alloc(digits_g), digits_g), digits_g)
        sqrt(ctx, z, z, digits_g)
    return z


def erf(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = erf(x)

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент
        digits: Рабочая точность

    Returns:
        z
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    negative = x.negative
    digits_g = ctx.fun_digits(2 * digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        abs_mp(ctx, x_g, x_g, digits_g)
        bound = _saturation_bound(ctx, arena.alloc(digits_g), digits, digits_g)
        if ge(ctx, x_g, bound, digits_g):
            set_short(z, -1 if negative else 1, 0, digits)
            return z

        y = mul(ctx, arena.alloc(digits_g), x_g, x_g, digits_g)
        s = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        t = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        u = arena.alloc(digits_g)
        k = 1
        while True:
            mul(ctx, t, y, t, digits_g)
            div_digit(ctx, t, t, k, digits_g)
            div_digit(ctx, u, t, 2 * k + 1, digits_g)
            if k % 2:
                sub(ctx, s, s, u, digits_g)
            else:
                add(ctx, s, s, u, digits_g)
            if u.is_zero() or s.exponent - u.exponent >= digits_g:
                break
            k += 1

        mul(ctx, s, x_g, s, digits_g)
        mul_digit(ctx, s, s, 2, digits_g)
        div(ctx, s, s, pi(ctx, u, digits_g, PiMultiplier.SQRT_PI), digits_g)
        s.set_sign(negative)
        shorten(ctx, z, digits, s, digits_g)
    return z


def erfc(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = erfc(x) = 1 - erf(x)

    Raises:
        MPRangeError: erfc(x) ниже предела экспоненты
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        two = set_short(arena.alloc(digits_g), 2, 0, digits_g)
        r = arena.alloc(digits_g)
        if lt(ctx, x_g, two, digits_g):
            erf(ctx, r, x_g, digits_g)
            one_minus(ctx, r, r, digits_g)
        else:
            square = mul(ctx, arena.alloc(digits_g), x_g, x_g, digits_g)
            one_half = set_short(two, HALF_RADIX, -1, digits_g)
            g_cfrac_upper(ctx, r, one_half, square, digits_g)
            mul(ctx, r, r, x_g, digits_g)
            square.negate()
            exp(ctx, square, square, digits_g)
            mul(ctx, r, r, square, digits_g)
            div(ctx, r, r, pi(ctx, square, digits_g, PiMultiplier.SQRT_PI), digits_g)
        shorten(ctx, z, digits, r, digits_g)
    return z


# =============================================================================
# НАЧАЛЬНЫЕ ПРИБЛИЖЕНИЯ
# =============================================================================


def _erf_start(y: float) -> float:
    """Корень erf(z) = y в double, |y| <= 1/2."""
    z = y * math.sqrt(math.pi) / 2
    for _ in range(8):
        z -= (math.erf(z) - y) * math.sqrt(math.pi) / 2 * math.exp(z * z)
    return z


def _erfc_start(log_q: float) -> float:
    """Корень erfc(z) = q > 0 в double по L = -ln q, q <= 1/2."""
    if log_q < _LOG_START_LIMIT:
        # Newton по ln erfc(z) + L
        z = math.sqrt(log_q)
        for _ in range(50):
            value = math.erfc(z)
            slope = -2 / math.sqrt(math.pi) * math.exp(-z * z) / value
            step = (math.log(value) + log_q) / slope
            z -= step
            if abs(step) <= 1e-15 * z:
                break
        return z
    # erfc(z) ≈ e^(-z²)/(z·√π)
    z = math.sqrt(log_q)
    for _ in range(30):
        z = math.sqrt(log_q - math.log(z * math.sqrt(math.pi)))
    return z


# =============================================================================
# NEWTON
# =============================================================================


def _newton(ctx: MPContext, z: Bignum, target: Bignum, complementary: bool, digits: int) -> Bignum:
    """
    Уточнение z на месте: erf(z) = target либо erfc(z) = target.

    z и target в точности digits.
    """
    with ctx.arena.scope() as arena:
        scale = pi(ctx, arena.alloc(digits), digits, PiMultiplier.SQRT_PI)
        half(ctx, scale, scale, digits)
        f = arena.alloc(digits)
        w = arena.alloc(digits)
        for iteration in range(NEWTON_LIMIT):
            if complementary:
                erfc(ctx, f, z, digits)
                sub(ctx, f, target, f, digits)
            else:
                erf(ctx, f, z, digits)
                sub(ctx, f, f, target, digits)
            mul(ctx, w, z, z, digits)
            exp(ctx, w, w, digits)
            mul(ctx, f, f, w, digits)
            mul(ctx, f, f, scale, digits)
            sub(ctx, z, z, f, digits)
            if f.is_zero() or z.exponent - f.exponent >= digits - 1:
                logger.debug("inverse error function converged after %d steps", iteration + 1)
                break
    return z


def _solve_erfc(ctx: MPContext, z: Bignum, q: Bignum, digits: int) -> Bignum:
    """z: erfc(z) = q для 0 < q <= 1/2, в точности digits."""
    with ctx.arena.scope() as arena:
        log_q = ln(ctx, arena.alloc(digits), q, digits)
        start = _erfc_start(-mp_to_real(ctx, log_q, digits))
        real_to_mp(ctx, z, start, digits)
    return _newton(ctx, z, q, True, digits)


def inverf(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = inverf(x): erf(z) = x

    Для |x| > 1/2 решается erfc(z) = 1 - |x|, что сохраняет точность
    вблизи ±1.

    Raises:
        MPDomainError: |x| >= 1
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        y = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        abs_mp(ctx, y, y, digits_g)
        one = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        if ge(ctx, y, one, digits_g):
            ctx.domain_error("inverse error function needs |x| < 1")
        if y.is_zero():
            return set_zero(z, digits)

        r = arena.alloc(digits_g)
        one_half = set_short(arena.alloc(digits_g), HALF_RADIX, -1, digits_g)
        if gt(ctx, y, one_half, digits_g):
            one_minus(ctx, y, y, digits_g)
            _solve_erfc(ctx, r, y, digits_g)
        else:
            real_to_mp(ctx, r, _erf_start(mp_to_real(ctx, y, digits_g)), digits_g)
            _newton(ctx, r, y, False, digits_g)
        r.set_sign(x.negative)
        shorten(ctx, z, digits, r, digits_g)
    return z


def inverfc(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = inverfc(x): erfc(z) = x

    Raises:
        MPDomainError: x <= 0 или x >= 2
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        q = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        two = set_short(arena.alloc(digits_g), 2, 0, digits_g)
        if q.is_zero() or q.negative or ge(ctx, q, two, digits_g):
            ctx.domain_error("inverse complementary error function needs 0 < x < 2")

        one_half = set_short(arena.alloc(digits_g), HALF_RADIX, -1, digits_g)
        one = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        if same(q, one, digits_g):
            return set_zero(z, digits)
        r = arena.alloc(digits_g)
        three_halves = move(arena.alloc(digits_g), one_half, digits_g)
        mul_digit(ctx, three_halves, three_halves, 3, digits_g)

        if lt(ctx, q, one_half, digits_g):
            _solve_erfc(ctx, r, q, digits_g)
        elif gt(ctx, q, three_halves, digits_g):
            # erfc(-z) = 2 - erfc(z)
            sub(ctx, q, two, q, digits_g)
            _solve_erfc(ctx, r, q, digits_g)
            r.negate()
        else:
            one_minus(ctx, q, q, digits_g)
            inverf(ctx, r, q, digits_g)
        shorten(ctx, z, digits, r, digits_g)
    return z
