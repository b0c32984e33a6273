"""
Conversions — bignum ⇄ машинные целые, double, строки, bit-pattern, record

Целые и беззнаковые: проверка диапазона по ширине машинного целого
(MPConfig.int_bits) и по точности N.

Double: старшие цифры масштабируются напрямую (не более 4 цифр RADIX,
больше double не различает); обратная конверсия берёт 15 значащих цифр.

Строки: синтаксис [sign] digits [. digits] [(e|E) sign digits].
Точное представление mp_to_string проходит через string_to_mp без потерь.

Bit-pattern: слова по BITS_RADIX = 2^bits_radix_bits (старшее слово первым),
повторным делением/умножением на BITS_RADIX.
"""

import math
import re
import sys
from typing import List, Sequence

from mparith.core.domain.bignum import LOG_RADIX, MAX_REPR_INT, RADIX, Bignum
from mparith.core.domain.record import BignumRecord
from mparith.core.math.arithmetic import add, mul_digit, sub
from mparith.core.math.integer_ops import over_digit
from mparith.core.math.normalization import (
    check_exponent,
    move,
    round_internal,
    set_short,
    set_zero,
)
from mparith.core.math.precision import lengthen, shorten
from mparith.runtime.context import MPContext

# Синтаксис десятичного числа
_NUMBER_PATTERN = re.compile(r"\s*([+-]?)(\d*)(?:\.(\d*))?(?:[eE]([+-]?\d+))?\s*")

# Число значащих цифр, извлекаемых из double
_REAL_DIGITS = 15

# Цифры RADIX, участвующие в конверсии в double
_REAL_TERMS = 4


# =============================================================================
# ЦЕЛЫЕ
# =============================================================================


def _pack_integer(ctx: MPContext, z: Bignum, k: int, digits: int) -> Bignum:
    limbs: List[int] = []
    n = abs(k)
    while n:
        n, r = divmod(n, RADIX)
        limbs.append(r)

    if not limbs:
        return set_zero(z, digits)
    if len(limbs) > digits:
        ctx.range_error(f"integer {k} needs more than {digits} digits")

    set_zero(z, digits)
    z.digits[: len(limbs)] = limbs[::-1]
    z.exponent = len(limbs) - 1
    z.negative = k < 0
    return z


def int_to_mp(ctx: MPContext, z: Bignum, k: int, digits: int) -> Bignum:
    """
    z = k для машинного целого k.

    Raises:
        MPRangeError: k вне ширины машинного целого или не помещается в digits цифр

    Examples:
        >>> int_to_mp(ctx, z, 123, 10)   # digits = [123, 0, …], exponent = 0
    """
    if not ctx.config.int_min <= k <= ctx.config.int_max:
        ctx.range_error(f"integer {k} exceeds {ctx.config.int_bits}-bit range")
    return _pack_integer(ctx, z, k, digits)


def unsigned_to_mp(ctx: MPContext, z: Bignum, k: int, digits: int) -> Bignum:
    """
    z = k для беззнакового машинного целого.

    Raises:
        MPRangeError: k < 0 или k превышает unsigned_max
    """
    if not 0 <= k <= ctx.config.unsigned_max:
        ctx.range_error(f"unsigned {k} exceeds {ctx.config.int_bits}-bit range")
    return _pack_integer(ctx, z, k, digits)


def _integral_part(ctx: MPContext, x: Bignum, digits: int) -> int:
    ctx.require_initialised(x)
    if x.exponent >= digits:
        ctx.range_error(f"exponent {x.exponent} too large for {digits} digits")
    total = 0
    for d in x.digits[: x.exponent + 1]:
        total = total * RADIX + d
    return total


def mp_to_int(ctx: MPContext, x: Bignum, digits: int) -> int:
    """
    Целая часть x (усечение к нулю) как машинное целое.

    Raises:
        MPRangeError: Значение вне ширины машинного целого
    """
    total = _integral_part(ctx, x, digits)
    value = -total if x.negative else total
    if not ctx.config.int_min <= value <= ctx.config.int_max:
        ctx.range_error(f"value exceeds {ctx.config.int_bits}-bit integer range")
    return value


def mp_to_unsigned(ctx: MPContext, x: Bignum, digits: int) -> int:
    """
    Целая часть x как беззнаковое машинное целое.

    Raises:
        MPRangeError: Отрицательное значение или переполнение
    """
    total = _integral_part(ctx, x, digits)
    if x.negative and total != 0:
        ctx.range_error("negative value cannot convert to unsigned")
    if total > ctx.config.unsigned_max:
        ctx.range_error(f"value exceeds {ctx.config.int_bits}-bit unsigned range")
    return total


# =============================================================================
# DOUBLE
# =============================================================================


def mp_to_real(ctx: MPContext, x: Bignum, digits: int) -> float:
    """
    x как double.

    Используются старшие цифры (не более _REAL_TERMS); значения ниже
    минимальной нормализованной степени десяти дают 0.

    Raises:
        MPRangeError: Значение не представимо в double (переполнение)
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return 0.0
    if x.exponent * LOG_RADIX <= sys.float_info.min_10_exp:
        return 0.0

    terms = min(digits, _REAL_TERMS)
    mantissa = 0
    for d in x.digits[:terms]:
        mantissa = mantissa * RADIX + d
    value = float(f"{mantissa}e{LOG_RADIX * (x.exponent - terms + 1)}")
    if math.isinf(value):
        ctx.range_error("value exceeds double range")
    return -value if x.negative else value


def real_to_mp(ctx: MPContext, z: Bignum, x: float, digits: int) -> Bignum:
    """
    z = x для double x.

    Целые значения ниже 2^53 переносятся точно; остальные через
    _REAL_DIGITS значащих цифр.

    Raises:
        MPDomainError: x — NaN или бесконечность
    """
    if not math.isfinite(x):
        ctx.domain_error(f"cannot convert {x} to a multiprecision value")
    if x == 0.0:
        return set_zero(z, digits)
    if x.is_integer() and abs(x) < MAX_REPR_INT:
        return _pack_integer(ctx, z, int(x), digits)

    mantissa, _, exp_text = f"{abs(x):.{_REAL_DIGITS - 1}e}".partition("e")
    return _pack_decimal(ctx, z, x < 0, mantissa.replace(".", ""), int(exp_text), digits)


# =============================================================================
# СТРОКИ
# =============================================================================


def _pack_decimal(
    ctx: MPContext, z: Bignum, negative: bool, mantissa: str, expo: int, digits: int
) -> Bignum:
    """
    z = ±0.d₁d₂… · 10^(expo + 1), где mantissa = "d₁d₂…", d₁ != 0.

    Десятичные цифры группируются по LOG_RADIX так, чтобы d₁ попал в
    позицию 10^expo, затем результат округляется в digits цифр.
    """
    exponent, offset = divmod(expo, LOG_RADIX)
    padded = "0" * (LOG_RADIX - 1 - offset) + mantissa[: (digits + 2) * LOG_RADIX]
    padded += "0" * (-len(padded) % LOG_RADIX)
    groups = [int(padded[j : j + LOG_RADIX]) for j in range(0, len(padded), LOG_RADIX)]

    with ctx.arena.scope() as arena:
        w = arena.alloc(max(digits + 2, len(groups) + 1))
        w.exponent = exponent + 1
        w.digits[1 : len(groups) + 1] = groups
        round_internal(z, w, digits, negative)
    check_exponent(ctx, z)
    return z


def string_to_mp(ctx: MPContext, z: Bignum, text: str, digits: int) -> Bignum:
    """
    Разбор десятичной строки.

    Args:
        ctx: Контекст вычислений
        z: Выходной буфер
        text: Строка вида [sign] digits [. digits] [(e|E) sign digits]
        digits: Рабочая точность

    Returns:
        z

    Raises:
        MPDomainError: Строка не соответствует синтаксису
        MPRangeError: Экспонента вне допустимого диапазона

    Examples:
        >>> string_to_mp(ctx, z, "3.14159", 10)
        >>> string_to_mp(ctx, z, "-1.5e-20", 10)
    """
    match = _NUMBER_PATTERN.fullmatch(text)
    if match is None or not (match.group(2) or match.group(3)):
        ctx.domain_error(f"malformed number {text!r}")

    sign, int_part, frac_part, exp_part = match.groups()
    all_digits = int_part + (frac_part or "")
    significant = all_digits.lstrip("0")
    if not significant:
        return set_zero(z, digits)

    leading_zeros = len(all_digits) - len(significant)
    expo = len(int_part) - 1 - leading_zeros + int(exp_part or 0)
    if abs(expo) > (ctx.config.max_exponent + 1) * LOG_RADIX:
        ctx.range_error(f"exponent of {text.strip()!r} out of range")
    return _pack_decimal(ctx, z, sign == "-", significant.rstrip("0"), expo, digits)


def _decimal_digits(x: Bignum, digits: int) -> str:
    groups = x.digits[:digits]
    return (str(groups[0]) + "".join(f"{d:07d}" for d in groups[1:])).rstrip("0")


def mp_to_string(ctx: MPContext, x: Bignum, digits: int) -> str:
    """
    Точная научная запись x: [-]d.ddd…e±k.

    Все digits цифр переносятся без округления, поэтому
    string_to_mp(mp_to_string(x)) восстанавливает x.
    """
    ctx.require_initialised(x)
    if x.is_zero():
        return "0.0e+0"

    text = _decimal_digits(x, digits)
    expo = LOG_RADIX * x.exponent + len(str(x.digits[0])) - 1
    sign = "-" if x.negative else ""
    return f"{sign}{text[0]}.{text[1:] or '0'}e{expo:+d}"


def mp_to_fixed(ctx: MPContext, x: Bignum, digits: int, after: int) -> str:
    """
    Запись с фиксированной точкой, after знаков после точки.

    Округление half away from zero.

    Raises:
        ValueError: after < 0
    """
    ctx.require_initialised(x)
    if after < 0:
        raise ValueError(f"after must be non-negative, got {after}")

    mantissa = 0
    for d in x.digits[:digits]:
        mantissa = mantissa * RADIX + d
    scale = LOG_RADIX * (x.exponent - digits + 1) + after
    if scale >= 0:
        scaled = mantissa * 10**scale
    else:
        scaled, remainder = divmod(mantissa, 10**-scale)
        if 2 * remainder >= 10**-scale:
            scaled += 1

    text = str(scaled).rjust(after + 1, "0")
    if after > 0:
        text = f"{text[:-after]}.{text[-after:]}"
    return f"-{text}" if x.negative and scaled != 0 else text


# =============================================================================
# BIT-PATTERN
# =============================================================================


def bits_width(digits: int) -> int:
    """Число бит, гарантированно представимых digits цифрами."""
    return math.ceil(digits * LOG_RADIX * math.log2(10)) - 1


def bits_words(ctx: MPContext, digits: int) -> int:
    """Число слов BITS_RADIX в bit-pattern точности digits."""
    return math.ceil(bits_width(digits) / ctx.config.bits_radix_bits)


def _top_word_bits(ctx: MPContext, digits: int) -> int:
    return bits_width(digits) - ctx.config.bits_radix_bits * (bits_words(ctx, digits) - 1)


def mp_to_bits(ctx: MPContext, x: Bignum, digits: int) -> List[int]:
    """
    Неотрицательное целое x как слова BITS_RADIX (старшее первым).

    Raises:
        MPRangeError: Отрицательное значение или ширина больше bits_width(digits)
    """
    ctx.require_initialised(x)
    if x.negative:
        ctx.range_error("negative value has no bit pattern")

    radix = ctx.config.bits_radix
    words = bits_words(ctx, digits)
    row = [0] * words
    with ctx.arena.scope() as arena:
        u = move(arena.alloc(digits), x, digits)
        v = arena.alloc(digits)
        w = arena.alloc(digits)
        for k in range(words - 1, -1, -1):
            move(w, u, digits)
            over_digit(ctx, u, u, radix, digits)
            mul_digit(ctx, v, u, radix, digits)
            sub(ctx, v, w, v, digits)
            row[k] = mp_to_unsigned(ctx, v, digits)
        if not u.is_zero() or row[0] >= 2 ** _top_word_bits(ctx, digits):
            ctx.range_error(f"value exceeds {bits_width(digits)}-bit pattern")
    return row


def bits_to_mp(ctx: MPContext, z: Bignum, row: Sequence[int], digits: int) -> Bignum:
    """
    z = значение слов BITS_RADIX (старшее первым).

    Слова маскируются по ширине слова, старшее слово по остатку ширины.

    Raises:
        ValueError: Число слов не равно bits_words(digits)
    """
    words = bits_words(ctx, digits)
    if len(row) != words:
        raise ValueError(f"expected {words} words for {digits} digits, got {len(row)}")

    radix = ctx.config.bits_radix
    set_zero(z, digits)
    with ctx.arena.scope() as arena:
        v = set_short(arena.alloc(digits), 1, 0, digits)
        w = arena.alloc(digits)
        for k in range(words - 1, -1, -1):
            mask = (2 ** _top_word_bits(ctx, digits) if k == 0 else radix) - 1
            mul_digit(ctx, w, v, row[k] & mask, digits)
            add(ctx, z, z, w, digits)
            if k > 0:
                mul_digit(ctx, v, v, radix, digits)
    return z


def check_bits_value(ctx: MPContext, u: Bignum, digits: int) -> None:
    """
    Проверка, что u помещается в bit-pattern точности digits.

    Raises:
        MPRangeError: Значение шире bits_width(digits)
    """
    ctx.require_initialised(u)
    if u.exponent >= digits - 1:
        mp_to_bits(ctx, u, digits)


# =============================================================================
# RECORD
# =============================================================================


def bignum_to_record(ctx: MPContext, x: Bignum, digits: int) -> BignumRecord:
    ctx.require_initialised(x)
    return BignumRecord(
        sign="-" if x.negative else "+",
        exponent=x.exponent,
        digits=list(x.digits[:digits]),
    )


def record_to_bignum(ctx: MPContext, z: Bignum, record: BignumRecord, digits: int) -> Bignum:
    """
    z = значение record, округлённое (или дополненное нулями) до digits цифр.
    """
    size = len(record.digits)
    with ctx.arena.scope() as arena:
        t = arena.alloc(size)
        t.digits[:] = record.digits
        t.exponent = record.exponent
        t.set_sign(record.sign == "-")
        if size > digits:
            shorten(ctx, z, digits, t, size)
        else:
            lengthen(ctx, z, digits, t, size)
    check_exponent(ctx, z)
    return z
