"""
Trigonometric Family — π, sin, cos, tan и обратные функции

π:
    AGM Borwein & Borwein; итерации до побитового совпадения соседних
    приближений, кэш с меткой точности.

sin:
    x mod 2π → |x| с учётом знака → отражение в [0, π/2] → деление на 3,
    пока eps_mp(x) истинно → ряд Тейлора → восстановление
    sin(3x) = sin(x)(3 - 4sin²x) по числу делений.

atan:
    Ряд Тейлора для |x| < 0.01, обращение atan(x) = π/2 - atan(1/x) при
    |x| >= 2, иначе метод Ньютона z ← z - cos(z)(sin(z) - x·cos(z)).

Варианты в градусах (…dg) и с множителем π (…pi) приводят аргумент и
вызывают основные ядра.
"""

import math
from enum import Enum
from typing import Callable, Tuple

from mparith.core.domain.bignum import DOUBLE_ACCURACY, HALF_RADIX, LOG_RADIX, RADIX, Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    div_digit,
    half,
    minus_one,
    mul,
    mul_digit,
    one_minus,
    plus_one,
    rec,
    sub,
)
from mparith.core.math.compare import gt
from mparith.core.math.conversions import mp_to_real, real_to_mp
from mparith.core.math.integer_ops import mod
from mparith.core.math.normalization import move, same, set_short, set_zero
from mparith.core.math.precision import cached_constant, eps_mp, lengthen, shorten
from mparith.core.math.roots import sqrt
from mparith.runtime.constants_cache import ConstantSlot
from mparith.runtime.context import MPContext

# Предел итераций AGM сверх log2 числа десятичных знаков
_AGM_EXTRA_PASSES = 4

Kernel = Callable[[MPContext, Bignum, Bignum, int], Bignum]


# =============================================================================
# π
# =============================================================================


class PiMultiplier(str, Enum):
    """Множитель при π"""

    PI = "pi"
    TWO_PI = "2pi"
    HALF_PI = "pi/2"
    PI_OVER_180 = "pi/180"
    ONE_EIGHTY_OVER_PI = "180/pi"
    SQRT_PI = "sqrt(pi)"
    SQRT_TWO_PI = "sqrt(2pi)"


def _agm_pi(ctx: MPContext, pi_g: Bignum, digits: int) -> Bignum:
    """
    π по AGM Borwein & Borwein.

    x₀ = √2, π₀ = 2 + √2, y₁ = ⁴√2;
    x ← (√x + 1/√x)/2, π ← π(x + 1)/(y + 1), y ← (y√x + 1/√x)/(y + 1).
    """
    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        two = set_short(arena.alloc(digits), 2, 0, digits)
        x_g = set_short(arena.alloc(digits), 2, 0, digits)
        y_g = arena.alloc(digits)
        u_g = arena.alloc(digits)
        v_g = arena.alloc(digits)

        sqrt(ctx, x_g, x_g, digits)
        add(ctx, pi_g, x_g, two, digits)
        sqrt(ctx, y_g, x_g, digits)

        passes = math.ceil(math.log2(digits * LOG_RADIX)) + _AGM_EXTRA_PASSES
        for _ in range(passes):
            # Новый x
            sqrt(ctx, u_g, x_g, digits)
            div(ctx, v_g, one, u_g, digits)
            add(ctx, u_g, u_g, v_g, digits)
            half(ctx, x_g, u_g, digits)
            # Новый π
            add(ctx, u_g, x_g, one, digits)
            add(ctx, v_g, y_g, one, digits)
            div(ctx, u_g, u_g, v_g, digits)
            mul(ctx, v_g, pi_g, u_g, digits)
            if same(v_g, pi_g, digits):
                break
            move(pi_g, v_g, digits)
            # Новый y
            sqrt(ctx, u_g, x_g, digits)
            div(ctx, v_g, one, u_g, digits)
            mul(ctx, u_g, y_g, u_g, digits)
            add(ctx, u_g, u_g, v_g, digits)
            add(ctx, v_g, y_g, one, digits)
            div(ctx, y_g, u_g, v_g, digits)
    return pi_g


def pi(
    ctx: MPContext, z: Bignum, digits: int, multiplier: PiMultiplier = PiMultiplier.PI
) -> Bignum:
    """
    z = multiplier · π

    Значение π кэшируется в контексте; повторный запрос той же или меньшей
    точности не пересчитывает AGM.

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        digits: Рабочая точность
        multiplier: Множитель (π, 2π, π/2, π/180, 180/π, √π, √(2π))

    Returns:
        z
    """
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        pi_g = cached_constant(
            ctx,
            ConstantSlot.PI,
            arena.alloc(digits_g),
            digits_g,
            lambda buffer, n: _agm_pi(ctx, buffer, n),
        )
        if multiplier == PiMultiplier.TWO_PI:
            mul_digit(ctx, pi_g, pi_g, 2, digits_g)
        elif multiplier == PiMultiplier.HALF_PI:
            half(ctx, pi_g, pi_g, digits_g)
        elif multiplier == PiMultiplier.PI_OVER_180:
            div_digit(ctx, pi_g, pi_g, 180, digits_g)
        elif multiplier == PiMultiplier.ONE_EIGHTY_OVER_PI:
            rec(ctx, pi_g, pi_g, digits_g)
            mul_digit(ctx, pi_g, pi_g, 180, digits_g)
        elif multiplier == PiMultiplier.SQRT_PI:
            sqrt(ctx, pi_g, pi_g, digits_g)
        elif multiplier == PiMultiplier.SQRT_TWO_PI:
            mul_digit(ctx, pi_g, pi_g, 2, digits_g)
            sqrt(ctx, pi_g, pi_g, digits_g)
        shorten(ctx, z, digits, pi_g, digits_g)
    return z


# =============================================================================
# SIN / COS / TAN
# =============================================================================


def sin(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = sin(x)

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент (радианы)
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPRangeError: Аргумент настолько велик, что x mod 2π не определён
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        pi_g = pi(ctx, arena.alloc(digits_g), digits_g)
        tpi = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.TWO_PI)
        hpi = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.HALF_PI)
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = arena.alloc(digits_g)
        sqr = arena.alloc(digits_g)
        power = arena.alloc(digits_g)

        # Приведение к [0, π/2]
        mod(ctx, x_g, x_g, tpi, digits_g)
        negative = x_g.negative
        x_g.negative = False
        flip = False
        if gt(ctx, x_g, pi_g, digits_g):
            sub(ctx, x_g, x_g, pi_g, digits_g)
            flip = True
        if gt(ctx, x_g, hpi, digits_g):
            sub(ctx, x_g, pi_g, x_g, digits_g)

        # Деление на 3
        m = 0
        while eps_mp(x_g, digits_g):
            m += 1
            div_digit(ctx, x_g, x_g, 3, digits_g)

        # Ряд Тейлора: x - x³/3! + x⁵/5! - …, tₙ = tₙ₋₂ · x² / ((n - 1)n)
        mul(ctx, sqr, x_g, x_g, digits_g)
        move(power, x_g, digits_g)
        move(z_g, x_g, digits_g)
        n = 1
        even = False
        while True:
            n += 2
            mul(ctx, power, power, sqr, digits_g)
            div_digit(ctx, power, power, n - 1, digits_g)
            div_digit(ctx, power, power, n, digits_g)
            if power.is_zero() or power.exponent <= z_g.exponent - digits_g:
                break
            if even:
                add(ctx, z_g, z_g, power, digits_g)
            else:
                sub(ctx, z_g, z_g, power, digits_g)
            even = not even

        # Восстановление: sin(3x) = sin(x)(3 - 4sin²x)
        three = set_short(arena.alloc(digits_g), 3, 0, digits_g)
        for _ in range(m):
            mul(ctx, sqr, z_g, z_g, digits_g)
            mul_digit(ctx, sqr, sqr, 4, digits_g)
            sub(ctx, sqr, three, sqr, digits_g)
            mul(ctx, z_g, z_g, sqr, digits_g)

        if negative != flip:
            z_g.negate()
        shorten(ctx, z, digits, z_g, digits_g)
    return z


def cos(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = cos(x) = sin(π/2 - (x mod 2π))"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        tpi = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.TWO_PI)
        hpi = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.HALF_PI)
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        mod(ctx, x_g, x_g, tpi, digits_g)
        sub(ctx, x_g, hpi, x_g, digits_g)
        y = shorten(ctx, arena.alloc(digits), digits, x_g, digits_g)
        sin(ctx, z, y, digits)
    return z


def _tan_parts(
    ctx: MPContext, sns: Bignum, cns: Bignum, x: Bignum, digits: int
) -> bool:
    """
    sns = sin(x), cns = |cos(x)| в точности digits (x уже в этой точности).

    Returns:
        Нужна ли смена знака отношения sin/|cos|
    """
    with ctx.arena.scope() as arena:
        pi_g = pi(ctx, arena.alloc(digits), digits)
        hpi = pi(ctx, arena.alloc(digits), digits, PiMultiplier.HALF_PI)
        x_g = arena.alloc(digits)
        y_g = arena.alloc(digits)

        mod(ctx, x_g, x, pi_g, digits)
        if not x_g.negative:
            sub(ctx, y_g, x_g, hpi, digits)
            negate = y_g.sign > 0
        else:
            add(ctx, y_g, x_g, hpi, digits)
            negate = y_g.sign < 0

        sin(ctx, sns, x_g, digits)
        mul(ctx, cns, sns, sns, digits)
        one_minus(ctx, cns, cns, digits)
        sqrt(ctx, cns, cns, digits)
    return negate


def tan(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = tan(x) = sin(x) / √(1 - sin²x) со сменой знака по полупериоду.

    Raises:
        MPDomainError: cos(x) == 0
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        sns = arena.alloc(digits_g)
        cns = arena.alloc(digits_g)
        negate = _tan_parts(ctx, sns, cns, x_g, digits_g)
        if cns.is_zero():
            ctx.domain_error("tangent undefined where cosine vanishes")
        div(ctx, sns, sns, cns, digits_g)
        if negate:
            sns.negate()
        shorten(ctx, z, digits, sns, digits_g)
    return z


def cot(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = cot(x) = √(1 - sin²x) / sin(x)

    Raises:
        MPDomainError: sin(x) == 0
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        sns = arena.alloc(digits_g)
        cns = arena.alloc(digits_g)
        negate = _tan_parts(ctx, sns, cns, x_g, digits_g)
        if sns.is_zero():
            ctx.domain_error("cotangent undefined where sine vanishes")
        div(ctx, cns, cns, sns, digits_g)
        if negate:
            cns.negate()
        shorten(ctx, z, digits, cns, digits_g)
    return z


def _reciprocal_of(ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int) -> Bignum:
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        kernel(ctx, x_g, x_g, digits_g)
        rec(ctx, x_g, x_g, digits_g)
        shorten(ctx, z, digits, x_g, digits_g)
    return z


def csc(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = 1/sin(x); MPDomainError при sin(x) == 0."""
    ctx.require_initialised(x)
    return _reciprocal_of(ctx, sin, z, x, digits)


def sec(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = 1/cos(x); MPDomainError при cos(x) == 0."""
    ctx.require_initialised(x)
    return _reciprocal_of(ctx, cos, z, x, digits)


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


def atan(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = arctan(x)

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент
        digits: Рабочая точность

    Returns:
        z ∈ (-π/2, π/2)
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        z_g = arena.alloc(digits_g)
        tmp = arena.alloc(digits_g)
        negative = x_g.negative
        x_g.negative = False

        # atan(x) = π/2 - atan(1/x) для x >= 2
        flip = x_g.exponent > 0 or (x_g.exponent == 0 and x_g.digits[0] > 1)
        if flip:
            rec(ctx, x_g, x_g, digits_g)

        if x_g.exponent < -1 or (x_g.exponent == -1 and x_g.digits[0] < RADIX // 100):
            # Ряд Тейлора: x - x³/3 + x⁵/5 - …
            sqr = mul(ctx, arena.alloc(digits_g), x_g, x_g, digits_g)
            power = mul(ctx, arena.alloc(digits_g), sqr, x_g, digits_g)
            move(z_g, x_g, digits_g)
            n = 3
            even = False
            while not power.is_zero():
                div_digit(ctx, tmp, power, n, digits_g)
                if tmp.exponent <= z_g.exponent - digits_g:
                    break
                if even:
                    add(ctx, z_g, z_g, tmp, digits_g)
                else:
                    sub(ctx, z_g, z_g, tmp, digits_g)
                even = not even
                mul(ctx, power, power, sqr, digits_g)
                n += 2
        else:
            # Метод Ньютона: z ← z - cos(z)(sin(z) - x·cos(z))
            sns = arena.alloc(digits_g)
            cns = arena.alloc(digits_g)
            real_to_mp(ctx, z_g, math.atan(mp_to_real(ctx, x_g, digits_g)), digits_g)
            decimals = DOUBLE_ACCURACY
            while True:
                decimals *= 2
                digits_h = min(1 + decimals // LOG_RADIX, digits_g)
                sin(ctx, sns, z_g, digits_h)
                mul(ctx, tmp, sns, sns, digits_h)
                one_minus(ctx, tmp, tmp, digits_h)
                sqrt(ctx, cns, tmp, digits_h)
                mul(ctx, tmp, x_g, cns, digits_h)
                sub(ctx, tmp, sns, tmp, digits_h)
                mul(ctx, tmp, tmp, cns, digits_h)
                sub(ctx, z_g, z_g, tmp, digits_h)
                if decimals >= 2 * digits_g * LOG_RADIX:
                    break

        if flip:
            hpi = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.HALF_PI)
            sub(ctx, z_g, hpi, z_g, digits_g)

        shorten(ctx, z, digits, z_g, digits_g)
    z.set_sign(negative)
    return z


def atan2(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = угол точки (x, y) в (-π, π].

    Args:
        x: Абсцисса
        y: Ордината

    Raises:
        MPDomainError: x == y == 0
    """
    ctx.require_initialised(x, y)
    if x.is_zero() and y.is_zero():
        ctx.domain_error("angle of the origin is undefined")

    flip = y.negative
    if x.is_zero():
        pi(ctx, z, digits, PiMultiplier.HALF_PI)
    else:
        digits_g = ctx.fun_digits(digits)
        with ctx.arena.scope() as arena:
            u = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
            v = lengthen(ctx, arena.alloc(digits_g), digits_g, y, digits)
            u.negative = False
            v.negative = False
            t = div(ctx, arena.alloc(digits_g), v, u, digits_g)
            atan(ctx, t, t, digits_g)
            if x.negative:
                pi_g = pi(ctx, arena.alloc(digits_g), digits_g)
                sub(ctx, t, pi_g, t, digits_g)
            shorten(ctx, z, digits, t, digits_g)

    if flip:
        z.negate()
    return z


def _one_minus_square_root(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = √(1 - x²)

    Raises:
        MPDomainError: |x| > 1
    """
    mul(ctx, z, x, x, digits)
    one_minus(ctx, z, z, digits)
    if z.negative:
        ctx.domain_error("argument outside [-1, 1]")
    return sqrt(ctx, z, z, digits)


def asin(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = arcsin(x) = atan(x / √(1 - x²)), ±π/2 при x = ±1.

    Raises:
        MPDomainError: |x| > 1
    """
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y = _one_minus_square_root(ctx, arena.alloc(digits_g), x_g, digits_g)
        if y.is_zero():
            pi(ctx, z, digits, PiMultiplier.HALF_PI)
            z.set_sign(x.negative)
            return z
        div(ctx, y, x_g, y, digits_g)
        atan(ctx, y, y, digits_g)
        shorten(ctx, z, digits, y, digits_g)
    return z


def acos(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = arccos(x) = atan(√(1 - x²)/x) + [π при x < 0], π/2 при x = 0.

    Raises:
        MPDomainError: |x| > 1
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return pi(ctx, z, digits, PiMultiplier.HALF_PI)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        y = _one_minus_square_root(ctx, arena.alloc(digits_g), x_g, digits_g)
        div(ctx, y, y, x_g, digits_g)
        atan(ctx, y, y, digits_g)
        if x.negative:
            pi_g = pi(ctx, arena.alloc(digits_g), digits_g)
            add(ctx, y, y, pi_g, digits_g)
        shorten(ctx, z, digits, y, digits_g)
    return z


def _of_reciprocal(ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int) -> Bignum:
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        rec(ctx, x_g, x_g, digits_g)
        kernel(ctx, x_g, x_g, digits_g)
        shorten(ctx, z, digits, x_g, digits_g)
    return z


def acsc(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = arcsin(1/x); MPDomainError при |x| < 1."""
    ctx.require_initialised(x)
    return _of_reciprocal(ctx, asin, z, x, digits)


def asec(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = arccos(1/x); MPDomainError при |x| < 1."""
    ctx.require_initialised(x)
    return _of_reciprocal(ctx, acos, z, x, digits)


def acot(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = arctan(1/x); MPDomainError при x == 0."""
    ctx.require_initialised(x)
    return _of_reciprocal(ctx, atan, z, x, digits)


# =============================================================================
# ГРАДУСЫ
# =============================================================================


def _in_degrees(ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = kernel(x · π/180)"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        scale = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.PI_OVER_180)
        mul(ctx, x_g, x_g, scale, digits_g)
        kernel(ctx, x_g, x_g, digits_g)
        shorten(ctx, z, digits, x_g, digits_g)
    return z


def _to_degrees(ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = kernel(x) · 180/π"""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        kernel(ctx, x_g, x_g, digits_g)
        scale = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.ONE_EIGHTY_OVER_PI)
        mul(ctx, x_g, x_g, scale, digits_g)
        shorten(ctx, z, digits, x_g, digits_g)
    return z


def sindg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _in_degrees(ctx, sin, z, x, digits)


def cosdg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _in_degrees(ctx, cos, z, x, digits)


def tandg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _in_degrees(ctx, tan, z, x, digits)


def cotdg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _in_degrees(ctx, cot, z, x, digits)


def asindg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _to_degrees(ctx, asin, z, x, digits)


def acosdg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _to_degrees(ctx, acos, z, x, digits)


def atandg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _to_degrees(ctx, atan, z, x, digits)


def acotdg(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    return _to_degrees(ctx, acot, z, x, digits)


def atan2dg(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """Угол точки (x, y) в градусах."""
    ctx.require_initialised(x, y)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        t = arena.alloc(digits_g)
        atan2(
            ctx,
            t,
            lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits),
            lengthen(ctx, arena.alloc(digits_g), digits_g, y, digits),
            digits_g,
        )
        scale = pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.ONE_EIGHTY_OVER_PI)
        mul(ctx, t, t, scale, digits_g)
        shorten(ctx, z, digits, t, digits_g)
    return z


# =============================================================================
# МНОЖИТЕЛЬ π
# =============================================================================


def _fraction_of_unit(ctx: MPContext, x: Bignum, digits: int, arena) -> Tuple[Bignum, Bignum]:
    """(x mod 1, 1/2) в точности digits."""
    one = set_short(arena.alloc(digits), 1, 0, digits)
    f = mod(ctx, arena.alloc(digits), x, one, digits)
    one_half = set_short(arena.alloc(digits), HALF_RADIX, -1, digits)
    return f, one_half


def _times_pi(ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = kernel(π · x)"""
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        pi_g = pi(ctx, arena.alloc(digits_g), digits_g)
        mul(ctx, x_g, x_g, pi_g, digits_g)
        kernel(ctx, x_g, x_g, digits_g)
        shorten(ctx, z, digits, x_g, digits_g)
    return z


def sinpi(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = sin(πx), точный ноль для целых x."""
    ctx.require_initialised(x)
    with ctx.arena.scope() as arena:
        f, _ = _fraction_of_unit(ctx, x, digits, arena)
        if f.is_zero():
            return set_zero(z, digits)
    return _times_pi(ctx, sin, z, x, digits)


def cospi(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = cos(πx), точный ноль для полуцелых x."""
    ctx.require_initialised(x)
    with ctx.arena.scope() as arena:
        f, one_half = _fraction_of_unit(ctx, x, digits, arena)
        f.negative = False
        if same(f, one_half, digits):
            return set_zero(z, digits)
    return _times_pi(ctx, cos, z, x, digits)


def tanpi(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = tan(πx): точный ноль для целых x, ±1 для x = k ± 1/4.

    Raises:
        MPDomainError: x полуцелое
    """
    return _quarter_period(ctx, tan, z, x, digits, cotangent=False)


def cotpi(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = cot(πx): точный ноль для полуцелых x, ±1 для x = k ± 1/4.

    Raises:
        MPDomainError: x целое
    """
    return _quarter_period(ctx, cot, z, x, digits, cotangent=True)


def _quarter_period(
    ctx: MPContext, kernel: Kernel, z: Bignum, x: Bignum, digits: int, cotangent: bool
) -> Bignum:
    """z = kernel(π·f), f = x mod 1 в [-1/2, 1/2], с точными значениями в 0, ±1/4, ±1/2."""
    ctx.require_initialised(x)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        f, one_half = _fraction_of_unit(ctx, x_g, digits_g, arena)
        if f.is_zero():
            if cotangent:
                ctx.domain_error("cotangent undefined at integer multiples of pi")
            return set_zero(z, digits)

        magnitude = abs_mp(ctx, arena.alloc(digits_g), f, digits_g)
        if gt(ctx, magnitude, one_half, digits_g):
            if f.negative:
                plus_one(ctx, f, f, digits_g)
            else:
                minus_one(ctx, f, f, digits_g)
            abs_mp(ctx, magnitude, f, digits_g)

        if same(magnitude, one_half, digits_g):
            if not cotangent:
                ctx.domain_error("tangent undefined at half-integer multiples of pi")
            return set_zero(z, digits)

        quarter = half(ctx, arena.alloc(digits_g), one_half, digits_g)
        if same(magnitude, quarter, digits_g):
            return set_short(z, -1 if f.negative else 1, 0, digits)

        pi_g = pi(ctx, arena.alloc(digits_g), digits_g)
        mul(ctx, f, f, pi_g, digits_g)
        kernel(ctx, f, f, digits_g)
        shorten(ctx, z, digits, f, digits_g)
    return z
