"""
Core Arithmetic — O(N²) ядра сложения, умножения и деления

Все функции пишут результат в выходной буфер z (допускается совпадение z
с операндом) и возвращают z. Рабочая точность digits передаётся явно.

Сложение/вычитание:
    Знаковая диспетчеризация по паре флагов (x.negative, y.negative) на два
    ядра по модулям. Знаки операндов никогда не изменяются.

Умножение:
    Свёртка в буфер N+2 цифр с периодической нормализацией каждые
    MUL_OVERFLOW столбцов.

Деление (алгоритм Smith):
    Рабочий остаток N+4 цифр, оценка цифры частного по 4 ведущим цифрам
    остатка и делителя, нормализация каждые DIV_OVERFLOW шагов.
"""

from typing import List

from mparith.core.domain.bignum import (
    DIV_OVERFLOW,
    HALF_RADIX,
    LOG_RADIX,
    MUL_OVERFLOW,
    RADIX,
    Bignum,
)
from mparith.core.math.normalization import (
    check_exponent,
    move,
    normalize,
    normalize_light,
    round_internal,
    set_short,
    set_zero,
)
from mparith.runtime.context import MPContext

# =============================================================================
# ВЫРАВНИВАНИЕ
# =============================================================================


def _window(v: Bignum, top: int, digits: int) -> List[int]:
    """
    Цифры v, выровненные по экспоненте top, в окне из digits + 1 позиций.

    Позиция j окна имеет вес RADIX^(top - j).
    """
    width = digits + 1
    shift = min(top - v.exponent, width)
    row = [0] * shift + v.digits[: min(digits, width - shift)]
    return row + [0] * (width - len(row))


def _trunc_div(a: int, b: int) -> int:
    """Целочисленное деление с усечением к нулю (b > 0)."""
    q = abs(a) // b
    return -q if a < 0 else q


# =============================================================================
# ЯДРА ПО МОДУЛЯМ
# =============================================================================


def _add_magnitudes(
    ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int, negative: bool
) -> Bignum:
    """z = ±(|x| + |y|)"""
    digits_h = digits + 2
    top = max(x.exponent, y.exponent)
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_h)
        w.exponent = top + 1
        w.digits[1:digits_h] = [
            a + b for a, b in zip(_window(x, top, digits), _window(y, top, digits))
        ]
        normalize_light(w.digits, 1, digits_h)
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def _sub_magnitudes(
    ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int, negative: bool
) -> Bignum:
    """
    z = ±(|x| - |y|)

    Знак разности инвертирует negative. Ведущие нули, возникшие при
    сокращении близких по модулю операндов, сдвигаются влево с уменьшением
    экспоненты до округления.
    """
    digits_h = digits + 2
    top = max(x.exponent, y.exponent)
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_h)
        wd = w.digits
        w.exponent = top + 1
        wd[1:digits_h] = [
            a - b for a, b in zip(_window(x, top, digits), _window(y, top, digits))
        ]

        # Знак определяется первой ненулевой цифрой
        fnz = next((j for j in range(1, digits_h) if wd[j] != 0), None)
        if fnz is None:
            return set_zero(z, digits)
        if wd[fnz] < 0:
            negative = not negative
            wd[fnz:digits_h] = [-d for d in wd[fnz:digits_h]]

        normalize_light(wd, 1, digits_h)

        # Коррекция сокращения
        shift = next(j for j in range(digits_h) if wd[j] != 0)
        if shift > 0:
            wd[: digits_h - shift] = wd[shift:digits_h]
            wd[digits_h - shift : digits_h] = [0] * shift
            w.exponent -= shift

        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = x + y

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x, y: Слагаемые
        digits: Рабочая точность

    Returns:
        z
    """
    ctx.require_initialised(x, y)
    if x.is_zero():
        return move(z, y, digits)
    if y.is_zero():
        return move(z, x, digits)

    signs = (x.negative, y.negative)
    if signs == (False, False):
        return _add_magnitudes(ctx, z, x, y, digits, negative=False)
    if signs == (True, True):
        return _add_magnitudes(ctx, z, x, y, digits, negative=True)
    if signs == (False, True):
        return _sub_magnitudes(ctx, z, x, y, digits, negative=False)
    return _sub_magnitudes(ctx, z, y, x, digits, negative=False)


def sub(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = x - y

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Уменьшаемое
        y: Вычитаемое
        digits: Рабочая точность

    Returns:
        z
    """
    ctx.require_initialised(x, y)
    if y.is_zero():
        return move(z, x, digits)
    if x.is_zero():
        move(z, y, digits)
        z.negate()
        return z

    signs = (x.negative, y.negative)
    if signs == (False, False):
        return _sub_magnitudes(ctx, z, x, y, digits, negative=False)
    if signs == (True, True):
        return _sub_magnitudes(ctx, z, x, y, digits, negative=True)
    if signs == (False, True):
        return _add_magnitudes(ctx, z, x, y, digits, negative=False)
    return _add_magnitudes(ctx, z, x, y, digits, negative=True)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = x · y (schoolbook свёртка)

    Произведения цифр накапливаются без переносов; при digits >= MUL_OVERFLOW
    буфер нормализуется каждые MUL_OVERFLOW столбцов, чтобы частичные суммы
    оставались в пределах точно представимых целых.
    """
    ctx.require_initialised(x, y)
    if x.is_zero() or y.is_zero():
        return set_zero(z, digits)

    negative = x.negative != y.negative
    digits_h = digits + 2
    xd = x.digits[:digits]
    yd = y.digits[:digits]
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_h)
        wd = w.digits
        w.exponent = x.exponent + y.exponent + 1
        for i in range(digits - 1, -1, -1):
            if digits >= MUL_OVERFLOW and (digits - i) % MUL_OVERFLOW == 0:
                normalize(wd, 1, digits_h)
            yi = yd[i]
            if yi:
                for j, xj in enumerate(xd[: min(digits + 1 - i, digits)]):
                    wd[i + j + 1] += yi * xj
        normalize(wd, 1, digits_h)
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def mul_digit(ctx: MPContext, z: Bignum, x: Bignum, y: int, digits: int) -> Bignum:
    """
    z = x · y для машинного целого y (O(N)).

    Args:
        y: Множитель, |y| < RADIX

    Raises:
        ValueError: |y| >= RADIX
    """
    ctx.require_initialised(x)
    if abs(y) >= RADIX:
        raise ValueError(f"multiplier {y} does not fit one digit")
    if x.is_zero() or y == 0:
        return set_zero(z, digits)

    negative = x.negative != (y < 0)
    y = abs(y)
    digits_h = digits + 2
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_h)
        w.exponent = x.exponent + 1
        w.digits[1 : digits + 1] = [y * d for d in x.digits[:digits]]
        normalize(w.digits, 1, digits_h)
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def half(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = x / 2 (умножение на RADIX/2 со сдвигом на одну цифру)."""
    ctx.require_initialised(x)
    if x.is_zero():
        return set_zero(z, digits)

    digits_h = digits + 2
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_h)
        w.exponent = x.exponent
        w.digits[1 : digits + 1] = [HALF_RADIX * d for d in x.digits[:digits]]
        normalize(w.digits, 1, digits_h)
        round_internal(z, w, digits, x.negative)
    check_exponent(ctx, z)
    return z


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def div(ctx: MPContext, z: Bignum, x: Bignum, y: Bignum, digits: int) -> Bignum:
    """
    z = x / y (алгоритм Smith)

    Цифра частного оценивается отношением четырёх ведущих цифр остатка к
    четырём ведущим цифрам делителя. Оценка вычисляется в целых числах без
    потери точности; ошибка оценки компенсируется знаковыми цифрами
    остатка и финальной нормализацией.

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        x: Делимое
        y: Делитель
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: Деление на ноль
    """
    ctx.require_initialised(x, y)
    if y.is_zero():
        ctx.domain_error("division by zero")
    if x.is_zero():
        return set_zero(z, digits)

    negative = x.negative != y.negative
    digits_w = digits + 4
    yd = y.digits[:digits] + [0, 0, 0]
    y_lead = ((yd[0] * RADIX + yd[1]) * RADIX + yd[2]) * RADIX + yd[3]
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_w)
        wd = w.digits
        w.exponent = x.exponent - y.exponent
        wd[1 : digits + 1] = x.digits[:digits]

        for k in range(1, digits + 3):
            tail = wd[k + 2] if k + 2 < digits_w else 0
            xn = ((wd[k - 1] * RADIX + wd[k]) * RADIX + wd[k + 1]) * RADIX + tail
            q = _trunc_div(xn * RADIX, y_lead)
            if q != 0:
                for m in range(min(digits, digits + 3 - k)):
                    wd[k + m] -= q * yd[m]
            wd[k] += wd[k - 1] * RADIX
            wd[k - 1] = q
            if k % DIV_OVERFLOW == 0:
                normalize(wd, k + 1, digits_w)

        # Остаток за последней цифрой частного не участвует в округлении
        wd[digits + 2 :] = [0] * (digits_w - digits - 2)
        normalize(wd, 1, digits + 2)
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def div_digit(ctx: MPContext, z: Bignum, x: Bignum, y: int, digits: int) -> Bignum:
    """
    z = x / y для машинного целого y (O(N)), |y| < RADIX.

    Raises:
        MPDomainError: y == 0
        ValueError: |y| >= RADIX
    """
    ctx.require_initialised(x)
    if abs(y) >= RADIX:
        raise ValueError(f"divisor {y} does not fit one digit")
    if y == 0:
        ctx.domain_error("division by zero")
    if x.is_zero():
        return set_zero(z, digits)

    negative = x.negative != (y < 0)
    y = abs(y)
    y_lead = y * RADIX * RADIX
    digits_w = digits + 4
    with ctx.arena.scope() as arena:
        w = arena.alloc(digits_w)
        wd = w.digits
        w.exponent = x.exponent
        wd[1 : digits + 1] = x.digits[:digits]

        for k in range(1, digits + 3):
            tail = wd[k + 2] if k + 2 < digits_w else 0
            xn = ((wd[k - 1] * RADIX + wd[k]) * RADIX + wd[k + 1]) * RADIX + tail
            q = _trunc_div(xn, y_lead)
            wd[k] += wd[k - 1] * RADIX - q * y
            wd[k - 1] = q

        wd[digits + 2 :] = [0] * (digits_w - digits - 2)
        normalize(wd, 1, digits + 2)
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def rec(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """
    z = 1 / x

    Raises:
        MPDomainError: x == 0
    """
    ctx.require_initialised(x)
    if x.is_zero():
        ctx.domain_error("reciprocal of zero")

    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        div(ctx, z, one, x, digits)
    return z


# =============================================================================
# МЕЛКИЕ ОПЕРАЦИИ
# =============================================================================


def abs_mp(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    ctx.require_initialised(x)
    move(z, x, digits)
    z.negative = False
    return z


def minus(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    ctx.require_initialised(x)
    move(z, x, digits)
    z.negate()
    return z


def _with_one(ctx: MPContext, op, z: Bignum, x: Bignum, digits: int, one_first: bool) -> Bignum:
    with ctx.arena.scope() as arena:
        one = set_short(arena.alloc(digits), 1, 0, digits)
        if one_first:
            op(ctx, z, one, x, digits)
        else:
            op(ctx, z, x, one, digits)
    return z


def one_minus(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = 1 - x"""
    return _with_one(ctx, sub, z, x, digits, one_first=True)


def plus_one(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = x + 1"""
    return _with_one(ctx, add, z, x, digits, one_first=False)


def minus_one(ctx: MPContext, z: Bignum, x: Bignum, digits: int) -> Bignum:
    """z = x - 1"""
    return _with_one(ctx, sub, z, x, digits, one_first=False)


def ten_up(ctx: MPContext, z: Bignum, n: int, digits: int) -> Bignum:
    """
    z = 10^n (точно).

    Examples:
        n = 9  → 100 · RADIX^1
        n = -1 → 1000000 · RADIX^-1
    """
    set_short(z, 10 ** (n % LOG_RADIX), n // LOG_RADIX, digits)
    check_exponent(ctx, z)
    return z
