"""
Incomplete Gamma — обобщённая неполная gamma-функция

    I(p, x, y, μ) = ∫ₓʸ s^(p-1) · e^(-μs) ds,   0 <= x <= y <= +∞

Метод Abergel–Moisan: интеграл представляется разностью A - B двух
величин вида m · eᶰ, где m — значение G-функции

    x <= p:  G(p, x) = e^(x - p·ln|x|) · ∫₀^|x| s^(p-1) · e^(-sign(x)·s) ds
    иначе:   G(p, x) = e^(x - p·ln x)  · ∫ₓ^∞  s^(p-1) · e^(-s) ds

G вычисляется цепными дробями (Lentz) или интегрированием по частям
(x < 0, целое p). Если вычитание A - B теряет больше одного десятичного
знака, интеграл пересчитывается методом Romberg.

Верхний предел y = None означает +∞. Время счёта быстро растёт с
точностью, поэтому рабочая точность ограничена уровнями LONG + LONG LONG;
при обрезке отправляется предупреждение ErrorKind.PRECISION.
"""

from typing import List, Optional, Tuple

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    half,
    minus_one,
    mul,
    mul_digit,
    plus_one,
    rec,
    sub,
)
from mparith.core.math.compare import ge, gt, lt
from mparith.core.math.conversions import int_to_mp, mp_to_int
from mparith.core.math.explog import exp, ln
from mparith.core.math.gamma import lngamma
from mparith.core.math.normalization import move, same, set_short, set_zero
from mparith.core.math.precision import lengthen, shorten, trunc
from mparith.core.math.roots import sqrt
from mparith.runtime.context import MPContext

# Предел итераций цепных дробей
ITMAX = 1_000_000

# Предел итераций Romberg
NITERMAX_ROMBERG = 16

# Допуск для потери точности при вычитании A - B
TOL_DIFF_DIGIT = 2_000_000  # 0.2 в старшей цифре RADIX

# Пара (m, n): значение m · eᶰ; n = None означает -∞ (значение 0)
Scaled = Tuple[Bignum, Optional[Bignum]]


def _eps(digits: int) -> Bignum:
    return set_short(Bignum.empty(digits), 1, 1 - digits, digits)


def _tiny(ctx: MPContext, digits: int) -> Bignum:
    return set_short(Bignum.empty(digits), 1, 10 - ctx.config.max_exponent, digits)


def _converged(ctx: MPContext, delta: Bignum, eps: Bignum, digits: int) -> bool:
    """|delta - 1| < eps"""
    with ctx.arena.scope() as arena:
        t = minus_one(ctx, arena.alloc(digits), delta, digits)
        abs_mp(ctx, t, t, digits)
        return lt(ctx, t, eps, digits)


# =============================================================================
# G-ФУНКЦИЯ
# =============================================================================


def plim(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = граница выбора представления G: x при x > 0, 0 при -9 <= x <= 0,
    иначе 5·√(-x) - 5.
    """
    ctx.require_initialised(x)
    if not x.negative and not x.is_zero():
        return move(z, x, digits)

    with ctx.arena.scope() as arena:
        nine = set_short(arena.alloc(digits), -9, 0, digits)
        if ge(ctx, x, nine, digits):
            return set_zero(z, digits)
        t = abs_mp(ctx, arena.alloc(digits), x, digits)
        sqrt(ctx, t, t, digits)
        mul_digit(ctx, t, t, 5, digits)
        set_short(nine, 5, 0, digits)
        sub(ctx, z, t, nine, digits)
    return z


def g_cfrac_lower(ctx: MPContext, z: Bignum, p: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = G(p, x) цепной дробью для x <= p:

        G(p, x) = 1/(p - (p·x)/(p + 1 + x/(p + 2 - ((p + 1)·x)/(p + 3 + 2x/(…)))))

    Первый шаг Lentz выполняется вручную.
    """
    ctx.require_initialised(p, x)
    if x.is_zero():
        return set_zero(z, digits)

    eps = _eps(digits)
    tiny = _tiny(ctx, digits)
    with ctx.arena.scope() as arena:
        an = set_short(arena.alloc(digits), 1, 0, digits)
        bn = move(arena.alloc(digits), p, digits)
        f = div(ctx, arena.alloc(digits), an, bn, digits)
        c = div(ctx, arena.alloc(digits), an, tiny, digits)
        d = rec(ctx, arena.alloc(digits), bn, digits)
        k_g = arena.alloc(digits)
        t = arena.alloc(digits)
        delta = arena.alloc(digits)

        n = 2
        while True:
            k = n // 2
            int_to_mp(ctx, k_g, k, digits)
            if n % 2:
                move(an, k_g, digits)
            else:
                # -(p - 1 + k)
                minus_one(ctx, t, p, digits)
                add(ctx, an, t, k_g, digits)
                an.negate()
            mul(ctx, an, an, x, digits)
            plus_one(ctx, bn, bn, digits)

            mul(ctx, t, an, d, digits)
            add(ctx, d, t, bn, digits)
            if d.is_zero():
                move(d, tiny, digits)
            div(ctx, t, an, c, digits)
            add(ctx, c, bn, t, digits)
            if c.is_zero():
                move(c, tiny, digits)
            rec(ctx, d, d, digits)
            mul(ctx, delta, d, c, digits)
            mul(ctx, f, f, delta, digits)
            n += 1
            if _converged(ctx, delta, eps, digits) or n >= ITMAX:
                break
        move(z, f, digits)
    return z


def g_cfrac_upper(
    ctx: MPContext, z: Bignum, p: Bignum, x: Optional[Bignum], digits: int
) -> Bignum:
    """
    z = G(p, x) цепной дробью для 0 < p < x; x = None (+∞) даёт 0.

        G(p, x) = 1/(x + 1 - p - (1 - p)/(x + 3 - p - 2(2 - p)/(x + 5 - p - …)))

    Если b₁ = x + 1 - p равно нулю, дробь начинается со второго звена и
    результат обращается.
    """
    if x is None:
        return set_zero(z, digits)
    ctx.require_initialised(p, x)

    eps = _eps(digits)
    tiny = _tiny(ctx, digits)
    with ctx.arena.scope() as arena:
        an = set_short(arena.alloc(digits), 1, 0, digits)
        bn = plus_one(ctx, arena.alloc(digits), x, digits)
        sub(ctx, bn, bn, p, digits)
        leading = not bn.is_zero()
        f = arena.alloc(digits)
        c = arena.alloc(digits)
        d = arena.alloc(digits)
        t = arena.alloc(digits)
        i_g = arena.alloc(digits)
        delta = arena.alloc(digits)

        if leading:
            n = 2
        else:
            # a₂ = p - 1, b₂ = x + 3 - p
            minus_one(ctx, an, p, digits)
            set_short(bn, 3, 0, digits)
            add(ctx, bn, x, bn, digits)
            sub(ctx, bn, bn, p, digits)
            n = 3
        div(ctx, f, an, bn, digits)
        div(ctx, c, an, tiny, digits)
        rec(ctx, d, bn, digits)

        i = n - 1
        while True:
            # aₙ = -i · (i - p) = i · (p - i)
            int_to_mp(ctx, i_g, i, digits)
            sub(ctx, t, p, i_g, digits)
            mul(ctx, an, i_g, t, digits)
            set_short(t, 2, 0, digits)
            add(ctx, bn, bn, t, digits)

            mul(ctx, t, an, d, digits)
            add(ctx, d, t, bn, digits)
            if d.is_zero():
                move(d, tiny, digits)
            div(ctx, t, an, c, digits)
            add(ctx, c, bn, t, digits)
            if c.is_zero():
                move(c, tiny, digits)
            rec(ctx, d, d, digits)
            mul(ctx, delta, d, c, digits)
            mul(ctx, f, f, delta, digits)
            i += 1
            n += 1
            if _converged(ctx, delta, eps, digits) or n >= ITMAX:
                break

        if leading:
            move(z, f, digits)
        else:
            rec(ctx, z, f, digits)
    return z


def g_ibp(ctx: MPContext, z: Bignum, p: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = G(p, x) интегрированием по частям для x < 0, |x| < max(1, p - 1)
    и целого p > 0.

        G(p, x) = ((-1)^p · e^(-t + lnΓ(p) - (p - 1)·ln t) + S) / t,  t = |x|
    """
    ctx.require_initialised(p, x)
    eps = _eps(digits)
    p_int = mp_to_int(ctx, p, digits)
    odd = p_int % 2 != 0
    with ctx.arena.scope() as arena:
        t = abs_mp(ctx, arena.alloc(digits), x, digits)
        tt = mul(ctx, arena.alloc(digits), t, t, digits)
        rec(ctx, tt, tt, digits)
        c = rec(ctx, arena.alloc(digits), t, digits)
        d = minus_one(ctx, arena.alloc(digits), p, digits)
        u = sub(ctx, arena.alloc(digits), t, d, digits)
        s = mul(ctx, arena.alloc(digits), c, u, digits)
        v = arena.alloc(digits)
        delta = arena.alloc(digits)

        steps = 0
        limit = (p_int - 2) // 2
        while True:
            # c ← c·d(d - 1)/t², d ← d - 2
            minus_one(ctx, u, d, digits)
            mul(ctx, u, d, u, digits)
            mul(ctx, u, u, tt, digits)
            mul(ctx, c, c, u, digits)
            set_short(u, 2, 0, digits)
            sub(ctx, d, d, u, digits)
            sub(ctx, u, t, d, digits)
            mul(ctx, delta, c, u, digits)
            add(ctx, s, s, delta, digits)
            steps += 1
            abs_mp(ctx, u, delta, digits)
            abs_mp(ctx, v, s, digits)
            mul(ctx, v, v, eps, digits)
            stop = lt(ctx, u, v, digits)
            if stop or steps >= limit:
                break

        if odd and not stop:
            div(ctx, u, c, t, digits)
            mul(ctx, u, d, u, digits)
            add(ctx, s, s, u, digits)

        # -t + lnΓ(p) - (p - 1)·ln t
        ln(ctx, v, t, digits)
        minus_one(ctx, u, p, digits)
        mul(ctx, u, u, v, digits)
        lngamma(ctx, v, p, digits)
        sub(ctx, u, v, u, digits)
        sub(ctx, u, u, t, digits)
        exp(ctx, u, u, digits)
        if odd:
            u.negate()
        add(ctx, u, u, s, digits)
        div(ctx, z, u, t, digits)
    return z


def g_func(ctx: MPContext, z: Bignum, p: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = G(p, x): выбор представления по plim(x)."""
    with ctx.arena.scope() as arena:
        bound = plim(ctx, arena.alloc(digits), x, digits)
        if ge(ctx, p, bound, digits):
            return g_cfrac_lower(ctx, z, p, x, digits)
    if x.negative:
        return g_ibp(ctx, z, p, x, digits)
    return g_cfrac_upper(ctx, z, p, x, digits)


# =============================================================================
# ОБОБЩЁННАЯ НЕПОЛНАЯ GAMMA
# =============================================================================


def _scaled_at(
    ctx: MPContext, arena, p: Bignum, bound: Optional[Bignum], mu: Bignum, digits: int
) -> Scaled:
    """(G(p, μ·b), p·ln b - μ·b); для b = 0 и b = +∞ вклад нулевой."""
    m = arena.alloc(digits)
    if bound is None or bound.is_zero():
        return set_zero(m, digits), None
    mub = mul(ctx, arena.alloc(digits), mu, bound, digits)
    g_func(ctx, m, p, mub, digits)
    n = ln(ctx, arena.alloc(digits), bound, digits)
    mul(ctx, n, p, n, digits)
    sub(ctx, n, n, mub, digits)
    return m, n


def _below_plim(ctx: MPContext, p: Bignum, mu: Bignum, bound: Bignum, digits: int) -> bool:
    """p < plim(μ·b)"""
    with ctx.arena.scope() as arena:
        t = mul(ctx, arena.alloc(digits), mu, bound, digits)
        plim(ctx, t, t, digits)
        return lt(ctx, p, t, digits)


def _complete_gamma(
    ctx: MPContext, z: Bignum, p: Bignum, mu: Bignum, digits: int
) -> Bignum:
    """z = lnΓ(p) - p·ln μ, логарифм ∫₀^∞ s^(p-1)·e^(-μs) ds."""
    with ctx.arena.scope() as arena:
        t = ln(ctx, arena.alloc(digits), mu, digits)
        mul(ctx, t, p, t, digits)
        lngamma(ctx, z, p, digits)
        sub(ctx, z, z, t, digits)
    return z


def _integrand(
    ctx: MPContext, z: Bignum, s: Bignum, sigma: Bignum, mu: Bignum, p: Bignum, digits: int
) -> Bignum:
    """z = s^(p-1)·e^(-μs - σ)"""
    with ctx.arena.scope() as arena:
        t = arena.alloc(digits)
        if s.is_zero():
            minus_one(ctx, t, p, digits)
            if not t.is_zero():
                return set_zero(z, digits)
        else:
            ln(ctx, t, s, digits)
            minus_one(ctx, z, p, digits)
            mul(ctx, t, z, t, digits)
        mul(ctx, z, mu, s, digits)
        sub(ctx, t, t, z, digits)
        sub(ctx, t, t, sigma, digits)
        exp(ctx, z, t, digits)
    return z


def _romberg(
    ctx: MPContext,
    rho: Bignum,
    sigma: Bignum,
    x: Bignum,
    y: Bignum,
    mu: Bignum,
    p: Bignum,
    digits: int,
) -> None:
    """(ρ, σ) с ρ·e^σ = I(p, x, y, μ) по методу Romberg, σ = (p - 1)·ln y - μ·y."""
    with ctx.arena.scope() as arena:
        t = ln(ctx, arena.alloc(digits), y, digits)
        minus_one(ctx, sigma, p, digits)
        mul(ctx, sigma, sigma, t, digits)
        mul(ctx, t, mu, y, digits)
        sub(ctx, sigma, sigma, t, digits)

        # Трапеция на [x, y]; подынтегральная функция в y равна 1
        width = sub(ctx, arena.alloc(digits), y, x, digits)
        first = _integrand(ctx, arena.alloc(digits), x, sigma, mu, p, digits)
        plus_one(ctx, first, first, digits)
        mul(ctx, first, first, width, digits)
        previous: List[Bignum] = [half(ctx, first, first, digits)]

        relneeded = mul_digit(ctx, arena.alloc(digits), _eps(digits), 10, digits)
        relerr = arena.alloc(digits)
        h = half(ctx, arena.alloc(digits), width, digits)
        total = arena.alloc(digits)
        node = arena.alloc(digits)
        value = arena.alloc(digits)
        pow4 = arena.alloc(digits)
        pow2 = 1

        for n in range(1, NITERMAX_ROMBERG + 1):
            # Середины: x + (2j - 1)·h, j = 1 … 2ⁿ⁻¹
            set_zero(total, digits)
            for j in range(1, pow2 + 1):
                int_to_mp(ctx, node, 2 * j - 1, digits)
                mul(ctx, node, node, h, digits)
                add(ctx, node, x, node, digits)
                _integrand(ctx, value, node, sigma, mu, p, digits)
                add(ctx, total, total, value, digits)

            row = [arena.alloc(digits) for _ in range(n + 1)]
            half(ctx, row[0], previous[0], digits)
            mul(ctx, value, h, total, digits)
            add(ctx, row[0], row[0], value, digits)
            set_short(pow4, 4, 0, digits)
            for m in range(1, n + 1):
                # (4ᵐ·R[n][m-1] - R[n-1][m-1]) / (4ᵐ - 1)
                mul(ctx, value, pow4, row[m - 1], digits)
                sub(ctx, value, value, previous[m - 1], digits)
                minus_one(ctx, total, pow4, digits)
                div(ctx, row[m], value, total, digits)
                mul_digit(ctx, pow4, pow4, 4, digits)

            half(ctx, h, h, digits)
            pow2 *= 2
            sub(ctx, relerr, row[n], row[n - 1], digits)
            div(ctx, relerr, relerr, row[n], digits)
            abs_mp(ctx, relerr, relerr, digits)
            previous = row
            if not gt(ctx, relerr, relneeded, digits):
                break
        move(rho, previous[-1], digits)


def _dgamic(
    ctx: MPContext,
    rho: Bignum,
    sigma: Bignum,
    x: Bignum,
    y: Optional[Bignum],
    mu: Bignum,
    p: Bignum,
    digits: int,
) -> bool:
    """
    (ρ, σ) с ρ·e^σ = I(p, x, y, μ).

    Returns:
        False, если интеграл равен нулю (x == y)
    """
    if y is not None and same(x, y, digits):
        set_zero(rho, digits)
        set_zero(sigma, digits)
        return False
    if x.is_zero() and y is None:
        set_short(rho, 1, 0, digits)
        _complete_gamma(ctx, sigma, p, mu, digits)
        return True

    with ctx.arena.scope() as arena:
        mx, nx = _scaled_at(ctx, arena, p, x, mu, digits)
        my, ny = _scaled_at(ctx, arena, p, y, mu, digits)

        if mu.negative:
            (m_a, n_a), (m_b, n_b) = (my, ny), (mx, nx)
        elif not x.is_zero() and _below_plim(ctx, p, mu, x, digits):
            (m_a, n_a), (m_b, n_b) = (mx, nx), (my, ny)
        elif y is None or _below_plim(ctx, p, mu, y, digits):
            # Γ(p)/μᵖ - нижний интеграл до x - верхний от y
            m_a = set_short(arena.alloc(digits), 1, 0, digits)
            n_a = _complete_gamma(ctx, arena.alloc(digits), p, mu, digits)
            candidates = [(m, n) for m, n in ((mx, nx), (my, ny)) if n is not None]
            m_b = set_zero(arena.alloc(digits), digits)
            n_b: Optional[Bignum] = None
            if candidates:
                n_b = candidates[0][1]
                for _, n in candidates[1:]:
                    if gt(ctx, n, n_b, digits):
                        n_b = n
                t = arena.alloc(digits)
                for m, n in candidates:
                    sub(ctx, t, n, n_b, digits)
                    exp(ctx, t, t, digits)
                    mul(ctx, t, m, t, digits)
                    add(ctx, m_b, m_b, t, digits)
        else:
            (m_a, n_a), (m_b, n_b) = (my, ny), (mx, nx)

        # ρ = m_a - m_b·e^(n_b - n_a), σ = n_a
        if n_b is None:
            move(rho, m_a, digits)
        else:
            t = sub(ctx, arena.alloc(digits), n_b, n_a, digits)
            exp(ctx, t, t, digits)
            mul(ctx, t, m_b, t, digits)
            sub(ctx, rho, m_a, t, digits)
        move(sigma, n_a, digits)

        if y is not None:
            ratio = div(ctx, arena.alloc(digits), rho, m_a, digits)
            tolerance = set_short(arena.alloc(digits), TOL_DIFF_DIGIT, -1, digits)
            if lt(ctx, ratio, tolerance, digits):
                _romberg(ctx, rho, sigma, x, y, mu, p, digits)
    return True


# =============================================================================
# ТОЧНОСТЬ
# =============================================================================


def _precision_cap(ctx: MPContext) -> int:
    return ctx.config.long_digits + ctx.config.longlong_digits


def _working_digits(ctx: MPContext, digits: int) -> Tuple[int, bool]:
    """(рабочая точность, обрезана ли она)"""
    cap = _precision_cap(ctx)
    if digits <= ctx.fun_digits(cap):
        return ctx.fun_digits(digits), False
    ctx.precision_warning(f"incomplete gamma evaluated at {cap} digits, not {digits}")
    return ctx.fun_digits(cap), True


def _load(ctx: MPContext, z: Bignum, digits_z: int, x: Bignum, digits_x: int) -> Bignum:
    if digits_z >= digits_x:
        return lengthen(ctx, z, digits_z, x, digits_x)
    return shorten(ctx, z, digits_z, x, digits_x)


def _store(
    ctx: MPContext, z: Bignum, digits: int, value: Bignum, digits_g: int, capped: bool
) -> Bignum:
    if not capped:
        return shorten(ctx, z, digits, value, digits_g)
    cap = _precision_cap(ctx)
    with ctx.arena.scope() as arena:
        t = shorten(ctx, arena.alloc(cap), cap, value, digits_g)
        lengthen(ctx, z, digits, t, cap)
    return z


def _is_integer(ctx: MPContext, x: Bignum, digits: int) -> bool:
    with ctx.arena.scope() as arena:
        t = trunc(ctx, arena.alloc(digits), x, digits)
        return same(t, x, digits)


def _check_domain(
    ctx: MPContext, p: Bignum, x: Bignum, y: Optional[Bignum], mu: Bignum, digits: int
) -> None:
    if p.is_zero() or p.negative:
        ctx.domain_error("incomplete gamma needs p > 0")
    if mu.is_zero():
        ctx.domain_error("incomplete gamma needs mu != 0")
    if x.negative:
        ctx.domain_error("incomplete gamma needs x >= 0")
    if y is not None and gt(ctx, x, y, digits):
        ctx.domain_error("incomplete gamma needs x <= y")
    if mu.negative:
        if y is None:
            ctx.domain_error("incomplete gamma with mu < 0 needs a finite upper bound")
        if not _is_integer(ctx, p, digits):
            ctx.domain_error("incomplete gamma with mu < 0 needs integer p")


# =============================================================================
# ПУБЛИЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def gamma_inc_g(
    ctx: MPContext,
    z: Bignum,
    p: Bignum,
    x: Bignum,
    y: Optional[Bignum],
    mu: Bignum,
    digits: int,
) -> Bignum:
    """
    z = ∫ₓʸ s^(p-1) · e^(-μs) ds

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        p: Показатель, p > 0 (целый при μ < 0)
        x: Нижний предел, x >= 0
        y: Верхний предел, y >= x; None означает +∞ (только при μ > 0)
        mu: Коэффициент экспоненты, μ != 0
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: Аргументы вне области определения
        MPRangeError: Результат выходит за предел экспоненты
    """
    ctx.require_initialised(p, x, mu)
    if y is not None:
        ctx.require_initialised(y)
    _check_domain(ctx, p, x, y, mu, digits)

    digits_g, capped = _working_digits(ctx, digits)
    with ctx.arena.scope() as arena:
        p_g = _load(ctx, arena.alloc(digits_g), digits_g, p, digits)
        x_g = _load(ctx, arena.alloc(digits_g), digits_g, x, digits)
        mu_g = _load(ctx, arena.alloc(digits_g), digits_g, mu, digits)
        y_g = None if y is None else _load(ctx, arena.alloc(digits_g), digits_g, y, digits)
        rho = arena.alloc(digits_g)
        sigma = arena.alloc(digits_g)
        if not _dgamic(ctx, rho, sigma, x_g, y_g, mu_g, p_g, digits_g) or rho.is_zero():
            return set_zero(z, digits)
        exp(ctx, sigma, sigma, digits_g)
        mul(ctx, rho, rho, sigma, digits_g)
        _store(ctx, z, digits, rho, digits_g, capped)
    return z


def gamma_inc_f(ctx: MPContext, z: Bignum, p: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = Γ(p, x) = ∫ₓ^∞ s^(p-1) · e^(-s) ds"""
    with ctx.arena.scope() as arena:
        mu = set_short(arena.alloc(digits), 1, 0, digits)
        return gamma_inc_g(ctx, z, p, x, None, mu, digits)


def gamma_inc_gf(ctx: MPContext, z: Bignum, p: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = G(p, x)

    Raises:
        MPDomainError: p <= 0, либо x < 0 с дробным p в области
            интегрирования по частям
    """
    ctx.require_initialised(p, x)
    if p.is_zero() or p.negative:
        ctx.domain_error("incomplete gamma needs p > 0")

    digits_g, capped = _working_digits(ctx, digits)
    with ctx.arena.scope() as arena:
        p_g = _load(ctx, arena.alloc(digits_g), digits_g, p, digits)
        x_g = _load(ctx, arena.alloc(digits_g), digits_g, x, digits)
        if x.negative:
            bound = plim(ctx, arena.alloc(digits_g), x_g, digits_g)
            if lt(ctx, p_g, bound, digits_g) and not _is_integer(ctx, p_g, digits_g):
                ctx.domain_error("G(p, x) for large negative x needs integer p")
        g = g_func(ctx, arena.alloc(digits_g), p_g, x_g, digits_g)
        _store(ctx, z, digits, g, digits_g, capped)
    return z
