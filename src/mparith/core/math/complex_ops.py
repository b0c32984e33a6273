"""
Complex Variants — комплексные функции над парами (re, im)

Каждая функция принимает пару буферов (re, im), перезаписывает её
результатом и возвращает ту же пару. Вычисления идут в точности
FUN_DIGITS(digits) с одним округлением в конце.

Выбор формулы по сравнению модулей компонент:
    cdiv:  |c| >= |d| → q = d/c, иначе q = c/d (Smith)
    csqrt: |re| >= |im| → t = im/re, иначе t = re/im

Обратные функции (casin, cacos, catan) используют представление через
u = |z + 1|, v = |z - 1| (для catan: |z + i|, |z - i|).
"""

from typing import Tuple

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    half,
    minus_one,
    mul,
    plus_one,
    sub,
)
from mparith.core.math.compare import ge, gt
from mparith.core.math.explog import exp, ln
from mparith.core.math.hyperbolic import acosh, hyp
from mparith.core.math.normalization import move, set_short, set_zero
from mparith.core.math.precision import lengthen, shorten
from mparith.core.math.roots import hypot, sqrt
from mparith.core.math.trig import PiMultiplier, acos, asin, atan, atan2, cos, pi, sin
from mparith.runtime.context import MPContext

Pair = Tuple[Bignum, Bignum]


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ
# =============================================================================


def _lengthen_pair(ctx: MPContext, arena, re: Bignum, im: Bignum, digits: int, digits_g: int) -> Pair:
    return (
        lengthen(ctx, arena.alloc(digits_g), digits_g, re, digits),
        lengthen(ctx, arena.alloc(digits_g), digits_g, im, digits),
    )


def _shorten_pair(
    ctx: MPContext, re: Bignum, im: Bignum, digits: int, re_g: Bignum, im_g: Bignum, digits_g: int
) -> Pair:
    shorten(ctx, re, digits, re_g, digits_g)
    shorten(ctx, im, digits, im_g, digits_g)
    return re, im


def _times_i(re: Bignum, im: Bignum, digits: int, sign: int) -> None:
    """(re, im) ← (re + i·im) · (sign · i), sign = ±1."""
    old_re = re.digits[:digits], re.exponent, re.negative
    move(re, im, digits)
    im.digits[:digits], im.exponent, im.negative = old_re
    if sign > 0:
        re.negate()
    else:
        im.negate()


def _exceeds_unit(ctx: MPContext, x: Bignum, digits: int) -> bool:
    """|x| > 1"""
    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        return gt(ctx, abs_mp(ctx, arena.alloc(digits), x, digits), one, digits)


def _clamp_unit(ctx: MPContext, x: Bignum, digits: int) -> None:
    """Ограничить |x| <= 1 (погрешность округления в u - v)."""
    if _exceeds_unit(ctx, x, digits):
        set_short(x, -1 if x.negative else 1, 0, digits)


def _arcosh_of(ctx: MPContext, z: Bignum, a: Bignum, digits: int) -> Bignum:
    """z = ln(a + √(a² - 1)) для a >= 1 с отсечением отрицательного a² - 1."""
    with ctx.arena.scope() as arena:
        t = mul(ctx, arena.alloc(digits), a, a, digits)
        minus_one(ctx, t, t, digits)
        if t.negative:
            set_zero(t, digits)
        sqrt(ctx, t, t, digits)
        add(ctx, t, a, t, digits)
        ln(ctx, z, t, digits)
    return z


def _half_sum_and_difference(
    ctx: MPContext, a: Bignum, b: Bignum, re: Bignum, im: Bignum, digits: int
) -> None:
    """a = (|z + 1| + |z - 1|)/2, b = (|z + 1| - |z - 1|)/2 для z = re + i·im."""
    with ctx.arena.scope() as arena:
        u = arena.alloc(digits)
        v = arena.alloc(digits)
        plus_one(ctx, a, re, digits)
        minus_one(ctx, b, re, digits)
        hypot(ctx, u, a, im, digits)
        hypot(ctx, v, b, im, digits)
        add(ctx, a, u, v, digits)
        half(ctx, a, a, digits)
        sub(ctx, b, u, v, digits)
        half(ctx, b, b, digits)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def cmul(ctx: MPContext, a: Bignum, b: Bignum, c: Bignum, d: Bignum, digits: int) -> Pair:
    """
    (a, b) ← (a + bi)(c + di) = (ac - bd) + (ad + bc)i

    Args:
        ctx: Контекст вычислений
        a, b: Первый множитель, перезаписывается результатом
        c, d: Второй множитель
        digits: Рабочая точность

    Returns:
        (a, b)
    """
    ctx.require_initialised(a, b, c, d)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        la, lb = _lengthen_pair(ctx, arena, a, b, digits, digits_g)
        lc, ld = _lengthen_pair(ctx, arena, c, d, digits, digits_g)
        ac = mul(ctx, arena.alloc(digits_g), la, lc, digits_g)
        bd = mul(ctx, arena.alloc(digits_g), lb, ld, digits_g)
        ad = mul(ctx, arena.alloc(digits_g), la, ld, digits_g)
        bc = mul(ctx, arena.alloc(digits_g), lb, lc, digits_g)
        sub(ctx, la, ac, bd, digits_g)
        add(ctx, lb, ad, bc, digits_g)
        return _shorten_pair(ctx, a, b, digits, la, lb, digits_g)


def cdiv(ctx: MPContext, a: Bignum, b: Bignum, c: Bignum, d: Bignum, digits: int) -> Pair:
    """
    (a, b) ← (a + bi) / (c + di), алгоритм Smith.

    |c| >= |d|: q = d/c, r = c + dq, результат ((a + bq)/r, (b - aq)/r)
    |c| <  |d|: q = c/d, r = d + cq, результат ((aq + b)/r, (bq - a)/r)

    Делитель (c, d) не изменяется.

    Raises:
        MPDomainError: c == d == 0
    """
    ctx.require_initialised(a, b, c, d)
    if c.is_zero() and d.is_zero():
        ctx.domain_error("complex division by zero")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        la, lb = _lengthen_pair(ctx, arena, a, b, digits, digits_g)
        lc, ld = _lengthen_pair(ctx, arena, c, d, digits, digits_g)
        q = arena.alloc(digits_g)
        r = arena.alloc(digits_g)
        re = arena.alloc(digits_g)
        im = arena.alloc(digits_g)

        if ge(ctx, abs_mp(ctx, q, lc, digits_g), abs_mp(ctx, r, ld, digits_g), digits_g):
            div(ctx, q, ld, lc, digits_g)
            mul(ctx, r, ld, q, digits_g)
            add(ctx, r, r, lc, digits_g)
            mul(ctx, re, lb, q, digits_g)
            add(ctx, re, re, la, digits_g)
            div(ctx, re, re, r, digits_g)
            mul(ctx, im, la, q, digits_g)
            sub(ctx, im, lb, im, digits_g)
            div(ctx, im, im, r, digits_g)
        else:
            div(ctx, q, lc, ld, digits_g)
            mul(ctx, r, lc, q, digits_g)
            add(ctx, r, r, ld, digits_g)
            mul(ctx, re, la, q, digits_g)
            add(ctx, re, re, lb, digits_g)
            div(ctx, re, re, r, digits_g)
            mul(ctx, im, lb, q, digits_g)
            sub(ctx, im, im, la, digits_g)
            div(ctx, im, im, r, digits_g)
        return _shorten_pair(ctx, a, b, digits, re, im, digits_g)


# =============================================================================
# КОРЕНЬ, ЭКСПОНЕНТА, ЛОГАРИФМ
# =============================================================================


def csqrt(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← √(re + i·im), главная ветвь (re >= 0).

    w = √|x| · √((1 + √(1 + t²))/2), t = y/x   при |x| >= |y|
    w = √|y| · √((t + √(1 + t²))/2), t = x/y   иначе
    """
    ctx.require_initialised(re, im)
    if re.is_zero() and im.is_zero():
        return set_zero(re, digits), set_zero(im, digits)

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        x = abs_mp(ctx, arena.alloc(digits_g), re_g, digits_g)
        y = abs_mp(ctx, arena.alloc(digits_g), im_g, digits_g)
        t = arena.alloc(digits_g)
        u = arena.alloc(digits_g)
        v = arena.alloc(digits_g)
        w = arena.alloc(digits_g)

        if ge(ctx, x, y, digits_g):
            div(ctx, t, y, x, digits_g)
            mul(ctx, v, t, t, digits_g)
            plus_one(ctx, u, v, digits_g)
            sqrt(ctx, v, u, digits_g)
            plus_one(ctx, u, v, digits_g)
            half(ctx, v, u, digits_g)
            sqrt(ctx, u, v, digits_g)
            sqrt(ctx, v, x, digits_g)
        else:
            div(ctx, t, x, y, digits_g)
            mul(ctx, v, t, t, digits_g)
            plus_one(ctx, u, v, digits_g)
            sqrt(ctx, v, u, digits_g)
            add(ctx, u, t, v, digits_g)
            half(ctx, v, u, digits_g)
            sqrt(ctx, u, v, digits_g)
            sqrt(ctx, v, y, digits_g)
        mul(ctx, w, u, v, digits_g)

        # Re = w, Im = y/(2w) либо Re = |y|/(2w), Im = ±w
        add(ctx, u, w, w, digits_g)
        if not re_g.negative:
            div(ctx, im_g, im_g, u, digits_g)
            move(re_g, w, digits_g)
        else:
            div(ctx, re_g, y, u, digits_g)
            w.set_sign(im_g.negative)
            move(im_g, w, digits_g)
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def cexp(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """(re, im) ← e^re · (cos im + i·sin im)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        u = exp(ctx, arena.alloc(digits_g), re_g, digits_g)
        cos(ctx, re_g, im_g, digits_g)
        sin(ctx, im_g, im_g, digits_g)
        mul(ctx, re_g, re_g, u, digits_g)
        mul(ctx, im_g, im_g, u, digits_g)
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def cln(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← ln|z| + i·arg(z)

    Raises:
        MPDomainError: z == 0
    """
    ctx.require_initialised(re, im)
    if re.is_zero() and im.is_zero():
        ctx.domain_error("logarithm of complex zero")

    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        s = hypot(ctx, arena.alloc(digits_g), re_g, im_g, digits_g)
        t = atan2(ctx, arena.alloc(digits_g), re_g, im_g, digits_g)
        ln(ctx, re_g, s, digits_g)
        move(im_g, t, digits_g)
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


# =============================================================================
# ТРИГОНОМЕТРИЯ
# =============================================================================


def _csin_g(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> None:
    """sin(x + iy) = sin x·cosh y + i·cos x·sinh y на месте, без округления."""
    if im.is_zero():
        sin(ctx, re, re, digits)
        set_zero(im, digits)
        return
    with ctx.arena.scope() as arena:
        s = sin(ctx, arena.alloc(digits), re, digits)
        c = cos(ctx, arena.alloc(digits), re, digits)
        sh = arena.alloc(digits)
        ch = arena.alloc(digits)
        hyp(ctx, sh, ch, im, digits)
        mul(ctx, re, s, ch, digits)
        mul(ctx, im, c, sh, digits)


def _ccos_g(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> None:
    """cos(x + iy) = cos x·cosh y - i·sin x·sinh y на месте, без округления."""
    if im.is_zero():
        cos(ctx, re, re, digits)
        set_zero(im, digits)
        return
    with ctx.arena.scope() as arena:
        s = sin(ctx, arena.alloc(digits), re, digits)
        c = cos(ctx, arena.alloc(digits), re, digits)
        sh = arena.alloc(digits)
        ch = arena.alloc(digits)
        hyp(ctx, sh, ch, im, digits)
        sh.negate()
        mul(ctx, re, c, ch, digits)
        mul(ctx, im, s, sh, digits)


def csin(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """(re, im) ← sin(re + i·im)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _csin_g(ctx, re_g, im_g, digits_g)
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def ccos(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """(re, im) ← cos(re + i·im)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _ccos_g(ctx, re_g, im_g, digits_g)
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def ctan(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← csin(z) / ccos(z)

    Raises:
        MPDomainError: ccos(z) == 0
    """
    ctx.require_initialised(re, im)
    with ctx.arena.scope() as arena:
        s = move(arena.alloc(digits), re, digits)
        t = move(arena.alloc(digits), im, digits)
        csin(ctx, s, t, digits)
        ccos(ctx, re, im, digits)
        cdiv(ctx, s, t, re, im, digits)
        move(re, s, digits)
        move(im, t, digits)
    return re, im


def casin(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← arcsin(re + i·im)

    Для вещественного |x| > 1 результат (±π/2, arcosh|x|).
    """
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        negative_im = im_g.negative

        if im_g.is_zero():
            if not _exceeds_unit(ctx, re_g, digits_g):
                asin(ctx, re_g, re_g, digits_g)
                set_zero(im_g, digits_g)
            else:
                negative = re_g.negative
                re_g.negative = False
                acosh(ctx, im_g, re_g, digits_g)
                pi(ctx, re_g, digits_g, PiMultiplier.HALF_PI)
                re_g.set_sign(negative)
        else:
            a = arena.alloc(digits_g)
            b = arena.alloc(digits_g)
            _half_sum_and_difference(ctx, a, b, re_g, im_g, digits_g)
            _arcosh_of(ctx, im_g, a, digits_g)
            _clamp_unit(ctx, b, digits_g)
            asin(ctx, re_g, b, digits_g)
            if negative_im:
                im_g.negate()
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def cacos(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← arccos(re + i·im)

    Для вещественного |x| > 1 результат (0 или π, -arcosh|x|).
    """
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        negative_im = im_g.negative

        if im_g.is_zero():
            if not _exceeds_unit(ctx, re_g, digits_g):
                acos(ctx, re_g, re_g, digits_g)
                set_zero(im_g, digits_g)
            else:
                negative = re_g.negative
                re_g.negative = False
                acosh(ctx, im_g, re_g, digits_g)
                im_g.negate()
                if negative:
                    pi(ctx, re_g, digits_g)
                else:
                    set_zero(re_g, digits_g)
        else:
            a = arena.alloc(digits_g)
            b = arena.alloc(digits_g)
            _half_sum_and_difference(ctx, a, b, re_g, im_g, digits_g)
            _arcosh_of(ctx, im_g, a, digits_g)
            _clamp_unit(ctx, b, digits_g)
            acos(ctx, re_g, b, digits_g)
            if not negative_im:
                im_g.negate()
        return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)


def catan(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    (re, im) ← arctan(re + i·im)

    Re = arg(1 - x² - y², 2x)/2, Im = ln(|z + i| / |z - i|)/2.

    Raises:
        MPDomainError: z == ±i
    """
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        re_g, im_g = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        u = arena.alloc(digits_g)
        v = arena.alloc(digits_g)

        if im_g.is_zero():
            atan(ctx, re_g, re_g, digits_g)
            set_zero(im_g, digits_g)
            return _shorten_pair(ctx, re, im, digits, re_g, im_g, digits_g)

        a = plus_one(ctx, arena.alloc(digits_g), im_g, digits_g)
        b = minus_one(ctx, arena.alloc(digits_g), im_g, digits_g)
        hypot(ctx, u, re_g, a, digits_g)
        hypot(ctx, v, re_g, b, digits_g)
        if v.is_zero():
            ctx.domain_error("complex arctangent pole at z = i")
        div(ctx, u, u, v, digits_g)
        ln(ctx, v, u, digits_g)

        mul(ctx, a, re_g, re_g, digits_g)
        mul(ctx, b, im_g, im_g, digits_g)
        add(ctx, a, a, b, digits_g)
        minus_one(ctx, u, a, digits_g)
        u.negate()
        if u.is_zero():
            pi(ctx, u, digits_g, PiMultiplier.HALF_PI)
            u.set_sign(re_g.negative)
        else:
            denominator_negative = u.negative
            add(ctx, a, re_g, re_g, digits_g)
            div(ctx, a, a, u, digits_g)
            atan(ctx, u, a, digits_g)
            if denominator_negative:
                pi_g = pi(ctx, a, digits_g)
                if re_g.negative:
                    sub(ctx, u, u, pi_g, digits_g)
                else:
                    add(ctx, u, u, pi_g, digits_g)

        # Re и Im вычислены удвоенными
        half(ctx, u, u, digits_g)
        half(ctx, v, v, digits_g)
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


# =============================================================================
# ГИПЕРБОЛИЧЕСКИЕ
# =============================================================================


def csinh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """sinh(z) = -i·sin(iz)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _times_i(u, v, digits_g, 1)
        _csin_g(ctx, u, v, digits_g)
        _times_i(u, v, digits_g, -1)
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


def ccosh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """cosh(z) = cos(iz)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _times_i(u, v, digits_g, 1)
        _ccos_g(ctx, u, v, digits_g)
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


def ctanh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """tanh(z) = -i·tan(iz)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _times_i(u, v, digits_g, 1)
        ctan(ctx, u, v, digits_g)
        _times_i(u, v, digits_g, -1)
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


def casinh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """
    asinh(z) = i·asin(-iz)

    На разрезе re == 0, |im| > 1 берётся Re >= 0, как в C99 для +0.
    """
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    on_cut = re.is_zero()
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _times_i(u, v, digits_g, -1)
        casin(ctx, u, v, digits_g)
        _times_i(u, v, digits_g, 1)
        if on_cut and u.negative:
            u.negate()
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


def cacosh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """acosh(z) = ±i·acos(z), знак выбирается так, что Re >= 0"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        cacos(ctx, u, v, digits_g)
        _times_i(u, v, digits_g, 1)
        if u.negative:
            u.negate()
            v.negate()
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)


def catanh(ctx: MPContext, re: Bignum, im: Bignum, digits: int) -> Pair:
    """atanh(z) = i·atan(-iz)"""
    ctx.require_initialised(re, im)
    digits_g = ctx.fun_digits(digits)
    with ctx.arena.scope() as arena:
        u, v = _lengthen_pair(ctx, arena, re, im, digits, digits_g)
        _times_i(u, v, digits_g, -1)
        catan(ctx, u, v, digits_g)
        _times_i(u, v, digits_g, 1)
        return _shorten_pair(ctx, re, im, digits, u, v, digits_g)
