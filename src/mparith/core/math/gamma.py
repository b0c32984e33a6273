"""
Gamma Family — gamma, ln gamma, beta, ln beta, неполная beta

gamma (Spouge):
    Γ(z + 1) = (z + a)^(z + 1/2) · e^-(z + a) · [c₀ + Σ_{k=1}^{a-1} cₖ/(z + k)]
    c₀ = √(2π), cₖ = (-1)^(k-1) · (a - k)^(k - 1/2) · e^(a - k) / (k - 1)!

    Параметр a — наименьший, при котором оценка относительной ошибки
    a^(-1/2) · (2π)^-(a + 1/2) ниже 10^-(digits · LOG_RADIX). Слагаемые
    суммы знакопеременны и велики, поэтому сумма считается в удвоенной
    точности. Таблица cₖ строится один раз на точность и хранится в кэше
    контекста.

    0 < x < 1: Γ(x) = Γ(x + 1)/x.
    x < 0:     Γ(x) = π / (sin(πx) · Γ(1 - x)).

beta_inc:
    I_x(s, t) = xˢ(1 - x)ᵗ / (s·B(s, t)) · 1/(1 + d₁/(1 + d₂/(1 + …)))
    d₂ₘ₊₁ = -(s + m)(s + t + m)x / ((s + 2m)(s + 2m + 1))
    d₂ₘ   = m(t - m)x / ((s + 2m - 1)(s + 2m))
    Цепная дробь считается методом Lentz и быстро сходится при
    x <= (s + 1)/(s + t + 2); иначе I_x(s, t) = 1 - I_{1-x}(t, s).
"""

import math
from typing import List

from mparith.core.domain.bignum import HALF_RADIX, LOG_RADIX, Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    minus_one,
    mul,
    one_minus,
    plus_one,
    rec,
    sub,
)
from mparith.core.math.compare import gt, le
from mparith.core.math.conversions import int_to_mp
from mparith.core.math.explog import exp, ln, pow_mp
from mparith.core.math.integer_ops import mod
from mparith.core.math.normalization import move, same, set_short, set_zero
from mparith.core.math.precision import entier, lengthen, shorten
from mparith.core.math.trig import PiMultiplier, pi, sinpi
from mparith.runtime.context import MPContext

# Ключ таблицы коэффициентов в кэше контекста
SPOUGE_TABLE = "spouge"

# Число звеньев цепной дроби beta_inc на десятичный знак точности
_LENTZ_TERMS_PER_DECIMAL = 4


# =============================================================================
# ПАРАМЕТРЫ SPOUGE
# =============================================================================


def spouge_parameter(digits: int) -> int:
    """Наименьшее a с оценкой ошибки Spouge ниже 10^-(digits · LOG_RADIX)."""
    log_limit = -digits * LOG_RADIX
    a = 1
    while -(math.log10(a) / 2 + (a + 0.5) * math.log10(2 * math.pi)) > log_limit:
        a += 1
    return a


def gamma_digits(ctx: MPContext, digits: int) -> int:
    """Рабочая точность суммы Spouge: удвоенная digits плюс guard."""
    return ctx.fun_digits(2 * digits)


def spouge_table(ctx: MPContext, digits: int) -> List[Bignum]:
    """
    Коэффициенты c₀ … c_{a-1} для точности digits (из кэша контекста).

    Returns:
        Список из a значений в точности gamma_digits(digits)
    """
    digits_g = gamma_digits(ctx, digits)
    cached = ctx.constants.lookup_table(SPOUGE_TABLE, digits_g)
    if cached is not None:
        return cached

    a = spouge_parameter(digits)
    with ctx.arena.scope() as arena:
        values = [pi(ctx, arena.alloc(digits_g), digits_g, PiMultiplier.SQRT_TWO_PI)]
        one_half = set_short(arena.alloc(digits_g), HALF_RADIX, -1, digits_g)
        factorial = set_short(arena.alloc(digits_g), 1, 0, digits_g)
        dk = arena.alloc(digits_g)
        ak = arena.alloc(digits_g)
        power = arena.alloc(digits_g)
        growth = arena.alloc(digits_g)
        for k in range(1, a):
            int_to_mp(ctx, dk, k, digits_g)
            int_to_mp(ctx, ak, a - k, digits_g)
            sub(ctx, power, dk, one_half, digits_g)
            pow_mp(ctx, power, ak, power, digits_g)
            exp(ctx, growth, ak, digits_g)
            mul(ctx, power, power, growth, digits_g)
            values.append(div(ctx, arena.alloc(digits_g), power, factorial, digits_g))
            # (-1)^k · k!
            mul(ctx, factorial, factorial, dk, digits_g)
            factorial.negate()
        return ctx.constants.store_table(SPOUGE_TABLE, values, digits_g)


def _spouge_sum(
    ctx: MPContext, total: Bignum, z: Bignum, table: List[Bignum], digits: int
) -> Bignum:
    """total = c₀ + Σ cₖ/(z + k), от малых слагаемых к большим."""
    with ctx.arena.scope() as arena:
        term = arena.alloc(digits)
        move(total, table[0], digits)
        for k in range(len(table) - 1, 0, -1):
            int_to_mp(ctx, term, k, digits)
            add(ctx, term, z, term, digits)
            div(ctx, term, table[k], term, digits)
            add(ctx, total, total, term, digits)
    return total


def _spouge_terms(ctx: MPContext, arena, x: Bignum, digits: int):
    """
    Общая часть gamma и lngamma для x >= 1.

    Returns:
        (z + a, z + 1/2, сумма) для z = x - 1 в точности gamma_digits(digits)
    """
    digits_g = gamma_digits(ctx, digits)
    table = spouge_table(ctx, digits)
    z_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
    minus_one(ctx, z_g, z_g, digits_g)
    total = _spouge_sum(ctx, arena.alloc(digits_g), z_g, table, digits_g)

    base = int_to_mp(ctx, arena.alloc(digits_g), len(table), digits_g)
    add(ctx, base, z_g, base, digits_g)
    power = set_short(arena.alloc(digits_g), HALF_RADIX, -1, digits_g)
    add(ctx, power, z_g, power, digits_g)
    return base, power, total


# =============================================================================
# ПОЛЮСА И ЗНАК
# =============================================================================


def _is_pole(ctx: MPContext, x: Bignum, digits: int) -> bool:
    """x == 0 или целое отрицательное."""
    if x.is_zero():
        return True
    if not x.negative:
        return False
    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        return mod(ctx, arena.alloc(digits), x, one, digits).is_zero()


def _check_pole(ctx: MPContext, x: Bignum, digits: int, name: str) -> None:
    if _is_pole(ctx, x, digits):
        ctx.domain_error(f"{name} has a pole at zero and negative integers")


def gamma_negative(ctx: MPContext, x: Bignum, digits: int) -> bool:
    """Γ(x) < 0: x < 0 и ⌊x⌋ нечётно."""
    if not x.negative:
        return False
    with ctx.arena.scope() as arena:
        two = set_short(arena.alloc(digits), 2, 0, digits)
        floor = entier(ctx, arena.alloc(digits), x, digits)
        return not mod(ctx, floor, floor, two, digits).is_zero()


# =============================================================================
# GAMMA / LN GAMMA
# =============================================================================


def gamma(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = Γ(x)

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Аргумент
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: x == 0 или x целое отрицательное
        MPRangeError: Γ(x) выходит за предел экспоненты
    """
    ctx.require_initialised(x)
    _check_pole(ctx, x, digits, "gamma")

    if x.negative or x.exponent < 0:
        digits_g = ctx.fun_digits(digits)
        with ctx.arena.scope() as arena:
            x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
            if x.negative:
                # Γ(x) = π / (sin(πx) · Γ(1 - x))
                u = one_minus(ctx, arena.alloc(digits_g), x_g, digits_g)
                gamma(ctx, u, u, digits_g)
                v = sinpi(ctx, arena.alloc(digits_g), x_g, digits_g)
                mul(ctx, u, u, v, digits_g)
                v = pi(ctx, v, digits_g)
                div(ctx, u, v, u, digits_g)
            else:
                u = plus_one(ctx, arena.alloc(digits_g), x_g, digits_g)
                gamma(ctx, u, u, digits_g)
                div(ctx, u, u, x_g, digits_g)
            shorten(ctx, z, digits, u, digits_g)
        return z

    digits_g = gamma_digits(ctx, digits)
    with ctx.arena.scope() as arena:
        base, power, total = _spouge_terms(ctx, arena, x, digits)
        pow_mp(ctx, power, base, power, digits_g)
        base.negate()
        exp(ctx, base, base, digits_g)
        mul(ctx, power, power, base, digits_g)
        mul(ctx, power, power, total, digits_g)
        shorten(ctx, z, digits, power, digits_g)
    return z


def lngamma(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = ln|Γ(x)|

    x >= 1: (z + 1/2)·ln(z + a) - (z + a) + ln(сумма), z = x - 1.

    Raises:
        MPDomainError: x == 0 или x целое отрицательное
    """
    ctx.require_initialised(x)
    _check_pole(ctx, x, digits, "ln gamma")

    if x.negative or x.exponent < 0:
        digits_g = ctx.fun_digits(digits)
        with ctx.arena.scope() as arena:
            x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
            u = arena.alloc(digits_g)
            v = arena.alloc(digits_g)
            if x.negative:
                # ln|Γ(x)| = ln π - ln|sin(πx)| - ln|Γ(1 - x)|
                one_minus(ctx, u, x_g, digits_g)
                lngamma(ctx, u, u, digits_g)
                sinpi(ctx, v, x_g, digits_g)
                abs_mp(ctx, v, v, digits_g)
                ln(ctx, v, v, digits_g)
                add(ctx, u, u, v, digits_g)
                pi(ctx, v, digits_g)
                ln(ctx, v, v, digits_g)
                sub(ctx, u, v, u, digits_g)
            else:
                plus_one(ctx, u, x_g, digits_g)
                lngamma(ctx, u, u, digits_g)
                ln(ctx, v, x_g, digits_g)
                sub(ctx, u, u, v, digits_g)
            shorten(ctx, z, digits, u, digits_g)
        return z

    digits_g = gamma_digits(ctx, digits)
    with ctx.arena.scope() as arena:
        base, power, total = _spouge_terms(ctx, arena, x, digits)
        result = ln(ctx, arena.alloc(digits_g), base, digits_g)
        mul(ctx, result, result, power, digits_g)
        sub(ctx, result, result, base, digits_g)
        ln(ctx, total, total, digits_g)
        add(ctx, result, result, total, digits_g)
        shorten(ctx, z, digits, result, digits_g)
    return z


# =============================================================================
# BETA
# =============================================================================


def lnbeta(ctx: MPContext, z: Bignum, a: Bignum, b: Bignum, digits: int) -> Bignum:
    """
    z = ln|B(a, b)| = ln|Γ(a)| + ln|Γ(b)| - ln|Γ(a + b)|

    Raises:
        MPDomainError: a, b или a + b — полюс gamma
    """
    ctx.require_initialised(a, b)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        a_g = lengthen(ctx, arena.alloc(digits_g), digits_g, a, digits)
        b_g = lengthen(ctx, arena.alloc(digits_g), digits_g, b, digits)
        ab = add(ctx, arena.alloc(digits_g), a_g, b_g, digits_g)
        lngamma(ctx, ab, ab, digits_g)
        lngamma(ctx, a_g, a_g, digits_g)
        lngamma(ctx, b_g, b_g, digits_g)
        add(ctx, a_g, a_g, b_g, digits_g)
        sub(ctx, a_g, a_g, ab, digits_g)
        shorten(ctx, z, digits, a_g, digits_g)
    return z


def beta(ctx: MPContext, z: Bignum, a: Bignum, b: Bignum, digits: int) -> Bignum:
    """
    z = B(a, b) = exp(ln|B(a, b)|) со знаком Γ(a)·Γ(b)/Γ(a + b).

    Raises:
        MPDomainError: a, b или a + b — полюс gamma
    """
    ctx.require_initialised(a, b)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        a_g = lengthen(ctx, arena.alloc(digits_g), digits_g, a, digits)
        b_g = lengthen(ctx, arena.alloc(digits_g), digits_g, b, digits)
        ab = add(ctx, arena.alloc(digits_g), a_g, b_g, digits_g)
        negative = (
            gamma_negative(ctx, a_g, digits_g)
            ^ gamma_negative(ctx, b_g, digits_g)
            ^ gamma_negative(ctx, ab, digits_g)
        )
        u = lnbeta(ctx, arena.alloc(digits_g), a_g, b_g, digits_g)
        exp(ctx, u, u, digits_g)
        u.set_sign(negative)
        shorten(ctx, z, digits, u, digits_g)
    return z


def _beta_fraction(
    ctx: MPContext, z: Bignum, s: Bignum, t: Bignum, x: Bignum, digits: int
) -> Bignum:
    """z = I_x(s, t) цепной дробью для x <= (s + 1)/(s + t + 2)."""
    with ctx.arena.scope() as arena:
        f = set_short(arena.alloc(digits), 1, 0, digits)
        previous = set_short(arena.alloc(digits), 1, 0, digits)
        c = set_short(arena.alloc(digits), 1, 0, digits)
        d = set_zero(arena.alloc(digits), digits)
        term = arena.alloc(digits)
        m_g = arena.alloc(digits)
        u = arena.alloc(digits)
        v = arena.alloc(digits)
        w = arena.alloc(digits)

        for n in range(_LENTZ_TERMS_PER_DECIMAL * digits * LOG_RADIX):
            if n == 0:
                set_short(term, 1, 0, digits)
            elif n % 2 == 0:
                # d₂ₘ = m(t - m)x / ((s + 2m - 1)(s + 2m))
                m = n // 2
                int_to_mp(ctx, m_g, m, digits)
                sub(ctx, u, t, m_g, digits)
                mul(ctx, u, u, m_g, digits)
                mul(ctx, u, u, x, digits)
                int_to_mp(ctx, w, 2 * m, digits)
                add(ctx, w, s, w, digits)
                minus_one(ctx, v, w, digits)
                div(ctx, term, u, v, digits)
                div(ctx, term, term, w, digits)
            else:
                # d₂ₘ₊₁ = -(s + m)(s + t + m)x / ((s + 2m)(s + 2m + 1))
                m = (n - 1) // 2
                int_to_mp(ctx, m_g, m, digits)
                add(ctx, u, s, m_g, digits)
                add(ctx, v, u, t, digits)
                mul(ctx, u, u, v, digits)
                mul(ctx, u, u, x, digits)
                u.negate()
                int_to_mp(ctx, w, 2 * m, digits)
                add(ctx, w, s, w, digits)
                plus_one(ctx, v, w, digits)
                div(ctx, term, u, v, digits)
                div(ctx, term, term, w, digits)

            # d ← 1/(1 + term·d), c ← 1 + term/c, f ← f·c·d
            mul(ctx, d, term, d, digits)
            plus_one(ctx, d, d, digits)
            rec(ctx, d, d, digits)
            div(ctx, c, term, c, digits)
            plus_one(ctx, c, c, digits)
            mul(ctx, f, f, c, digits)
            mul(ctx, f, f, d, digits)
            if same(f, previous, digits):
                break
            move(previous, f, digits)
        minus_one(ctx, f, f, digits)

        # xˢ(1 - x)ᵗ / (s·B(s, t)) · f
        pow_mp(ctx, u, x, s, digits)
        one_minus(ctx, v, x, digits)
        pow_mp(ctx, v, v, t, digits)
        beta(ctx, w, s, t, digits)
        mul(ctx, u, u, v, digits)
        div(ctx, u, u, s, digits)
        div(ctx, u, u, w, digits)
        mul(ctx, z, u, f, digits)
    return z


def beta_inc(ctx: MPContext, z: Bignum, s: Bignum, t: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = I_x(s, t), регуляризованная неполная beta-функция.

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        s, t: Параметры, s > 0, t > 0
        x: Верхний предел, 0 <= x <= 1
        digits: Рабочая точность

    Raises:
        MPDomainError: x вне [0, 1] либо s <= 0 или t <= 0
    """
    ctx.require_initialised(s, t, x)
    if s.is_zero() or s.negative or t.is_zero() or t.negative:
        ctx.domain_error("incomplete beta needs positive parameters")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        if x.negative or gt(ctx, x, one, digits):
            ctx.domain_error("incomplete beta needs 0 <= x <= 1")
        if x.is_zero():
            return set_zero(z, digits)
        if same(x, one, digits):
            return set_short(z, 1, 0, digits)

        s_g = lengthen(ctx, arena.alloc(digits_g), digits_g, s, digits)
        t_g = lengthen(ctx, arena.alloc(digits_g), digits_g, t, digits)
        x_g = lengthen(ctx, arena.alloc(digits_g), digits_g, x, digits)
        result = arena.alloc(digits_g)

        # Граница (s + 1)/(s + t + 2)
        u = plus_one(ctx, arena.alloc(digits_g), s_g, digits_g)
        v = plus_one(ctx, arena.alloc(digits_g), t_g, digits_g)
        add(ctx, v, u, v, digits_g)
        div(ctx, u, u, v, digits_g)

        if le(ctx, x_g, u, digits_g):
            _beta_fraction(ctx, result, s_g, t_g, x_g, digits_g)
        else:
            one_minus(ctx, x_g, x_g, digits_g)
            _beta_fraction(ctx, result, t_g, s_g, x_g, digits_g)
            one_minus(ctx, result, result, digits_g)
        shorten(ctx, z, digits, result, digits_g)
    return z
