"""
Тесты конверсий bignum ⇄ внешние представления

Проверяет:
1. Машинные целые (знаковые и беззнаковые) с контролем диапазона
2. double в обе стороны
3. Десятичные строки: синтаксис, точная научная запись, фиксированная точка
4. Bit-pattern слова BITS_RADIX
5. BignumRecord
"""

import math

import pytest

from mparith.core.domain.bignum import Bignum
from mparith.core.domain.config import MPConfig
from mparith.core.domain.record import BignumRecord
from mparith.core.math.arithmetic import div
from mparith.core.math.conversions import (
    bignum_to_record,
    bits_to_mp,
    bits_width,
    bits_words,
    check_bits_value,
    int_to_mp,
    mp_to_bits,
    mp_to_fixed,
    mp_to_int,
    mp_to_real,
    mp_to_string,
    mp_to_unsigned,
    real_to_mp,
    record_to_bignum,
    string_to_mp,
    unsigned_to_mp,
)
from mparith.core.math.normalization import same
from mparith.runtime.context import MPContext
from mparith.runtime.diagnostics import Errno, MPDomainError, MPRangeError

DIGITS = 4


def out(digits=DIGITS):
    return Bignum.empty(digits)


# =============================================================================
# ЦЕЛЫЕ
# =============================================================================


class TestIntegers:
    """Тесты конверсий машинных целых"""

    def test_int_to_mp(self, ctx) -> None:
        z = int_to_mp(ctx, out(), 123, DIGITS)
        assert z.digits == [123, 0, 0, 0]
        assert z.exponent == 0
        assert z.initialised

    def test_negative_multi_digit(self, ctx) -> None:
        z = int_to_mp(ctx, out(), -12345678901, DIGITS)
        assert z.digits[:2] == [1234, 5678901]
        assert z.exponent == 1
        assert mp_to_string(ctx, z, DIGITS) == "-1.2345678901e+10"

    def test_zero(self, ctx) -> None:
        z = int_to_mp(ctx, out(), 0, DIGITS)
        assert z.is_zero()

    def test_int_range(self, ctx) -> None:
        """Значение вне 64-битного диапазона — ошибка диапазона"""
        int_to_mp(ctx, out(), -(2**63), DIGITS)
        with pytest.raises(MPRangeError):
            int_to_mp(ctx, out(), 2**63, DIGITS)
        assert ctx.errno == Errno.ERANGE

    def test_int_wider_than_precision(self, ctx) -> None:
        with pytest.raises(MPRangeError, match="needs more than 2 digits"):
            int_to_mp(ctx, out(2), 10**14, 2)

    def test_unsigned(self, ctx) -> None:
        z = unsigned_to_mp(ctx, out(), 2**64 - 1, DIGITS)
        assert mp_to_unsigned(ctx, z, DIGITS) == 2**64 - 1
        with pytest.raises(MPRangeError):
            unsigned_to_mp(ctx, out(), -1, DIGITS)

    def test_mp_to_int_truncates(self, ctx, num) -> None:
        assert mp_to_int(ctx, num("-12.9"), DIGITS) == -12
        assert mp_to_int(ctx, num("0.999"), DIGITS) == 0

    def test_mp_to_int_overflow(self, ctx, num) -> None:
        with pytest.raises(MPRangeError):
            mp_to_int(ctx, num("1e20"), DIGITS)
        with pytest.raises(MPRangeError):
            mp_to_int(ctx, num("1e30"), DIGITS)

    def test_mp_to_unsigned_negative(self, ctx, num) -> None:
        with pytest.raises(MPRangeError, match="negative"):
            mp_to_unsigned(ctx, num("-1"), DIGITS)
        assert mp_to_unsigned(ctx, num("-0.5"), DIGITS) == 0

    def test_narrow_machine_integer(self) -> None:
        ctx = MPContext(MPConfig(int_bits=16))
        int_to_mp(ctx, out(), 32767, DIGITS)
        with pytest.raises(MPRangeError, match="16-bit"):
            int_to_mp(ctx, out(), 32768, DIGITS)


# =============================================================================
# DOUBLE
# =============================================================================


class TestReal:
    """Тесты конверсий double"""

    def test_mp_to_real(self, ctx, num) -> None:
        assert mp_to_real(ctx, num("3.14159"), DIGITS) == pytest.approx(3.14159, rel=1e-15)
        assert mp_to_real(ctx, num("-2.5e-10"), DIGITS) == pytest.approx(-2.5e-10, rel=1e-15)
        assert mp_to_real(ctx, Bignum.zero(DIGITS), DIGITS) == 0.0

    def test_real_to_mp_fraction(self, ctx) -> None:
        assert mp_to_string(ctx, real_to_mp(ctx, out(), 0.1, DIGITS), DIGITS) == "1.0e-1"
        assert mp_to_string(ctx, real_to_mp(ctx, out(), -2.5, DIGITS), DIGITS) == "-2.5e+0"

    def test_real_to_mp_integer_is_exact(self, ctx) -> None:
        z = real_to_mp(ctx, out(), 12345.0, DIGITS)
        assert mp_to_string(ctx, z, DIGITS) == "1.2345e+4"

    def test_large_round_trip(self, ctx) -> None:
        z = real_to_mp(ctx, out(), 1e300, DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(1e300, rel=1e-14)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, ctx, value) -> None:
        with pytest.raises(MPDomainError):
            real_to_mp(ctx, out(), value, DIGITS)

    def test_overflow_and_underflow(self, ctx, num) -> None:
        with pytest.raises(MPRangeError, match="double range"):
            mp_to_real(ctx, num("1e400"), DIGITS)
        assert mp_to_real(ctx, num("1e-400"), DIGITS) == 0.0


# =============================================================================
# СТРОКИ
# =============================================================================


class TestStrings:
    """Тесты разбора и записи десятичных строк"""

    def test_digits_layout(self, ctx) -> None:
        z = string_to_mp(ctx, out(), "3.14159", DIGITS)
        assert z.digits == [3, 1415900, 0, 0]
        assert z.exponent == 0

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("123", "1.23e+2"),
            ("-1.5e-20", "-1.5e-20"),
            ("  42  ", "4.2e+1"),
            ("+0.000", "0.0e+0"),
            ("007", "7.0e+0"),
            (".5", "5.0e-1"),
            ("5.", "5.0e+0"),
            ("1E3", "1.0e+3"),
            ("0.0000001", "1.0e-7"),
        ],
    )
    def test_parse(self, ctx, source, expected) -> None:
        z = string_to_mp(ctx, out(), source, DIGITS)
        assert mp_to_string(ctx, z, DIGITS) == expected

    @pytest.mark.parametrize("source", ["abc", "", "1.2.3", "e5", ".", "1e", "--1", "1 2"])
    def test_malformed(self, ctx, source) -> None:
        with pytest.raises(MPDomainError, match="malformed number"):
            string_to_mp(ctx, out(), source, DIGITS)
        assert ctx.errno == Errno.EDOM

    def test_exponent_out_of_range(self, ctx) -> None:
        with pytest.raises(MPRangeError):
            string_to_mp(ctx, out(), "1e2000000", DIGITS)

    def test_rounding_to_precision(self, ctx) -> None:
        z = string_to_mp(ctx, out(2), "3.14159265358979323846", 2)
        assert z.digits == [3, 1415927]

    def test_exact_round_trip(self, ctx) -> None:
        """mp_to_string переносит все цифры: обратный разбор даёт то же значение"""
        one = string_to_mp(ctx, out(), "1", DIGITS)
        three = string_to_mp(ctx, out(), "-3", DIGITS)
        x = div(ctx, out(), one, three, DIGITS)
        back = string_to_mp(ctx, out(), mp_to_string(ctx, x, DIGITS), DIGITS)
        assert same(back, x, DIGITS)

    @pytest.mark.parametrize(
        "source, after, expected",
        [
            ("-1.005", 2, "-1.01"),
            ("123", 0, "123"),
            ("-0.001", 2, "0.00"),
            ("1.5e10", 1, "15000000000.0"),
            ("0.5", 0, "1"),
        ],
    )
    def test_fixed(self, ctx, source, after, expected) -> None:
        z = string_to_mp(ctx, out(), source, DIGITS)
        assert mp_to_fixed(ctx, z, DIGITS, after) == expected

    def test_fixed_rounds_long_fraction(self, ctx, num) -> None:
        x = div(ctx, out(), num("2"), num("3"), DIGITS)
        assert mp_to_fixed(ctx, x, DIGITS, 5) == "0.66667"

    def test_fixed_rejects_negative_places(self, ctx, num) -> None:
        with pytest.raises(ValueError):
            mp_to_fixed(ctx, num("1"), DIGITS, -1)


# =============================================================================
# BIT-PATTERN
# =============================================================================


class TestBits:
    """Тесты bit-pattern конверсий (BITS_RADIX = 2^23)"""

    def test_widths(self, ctx) -> None:
        assert bits_width(2) == 46
        assert bits_words(ctx, 2) == 2

    def test_small_value(self, ctx) -> None:
        x = int_to_mp(ctx, out(2), 5, 2)
        assert mp_to_bits(ctx, x, 2) == [0, 5]

    def test_two_words(self, ctx) -> None:
        x = int_to_mp(ctx, out(2), 2**23 + 1, 2)
        assert mp_to_bits(ctx, x, 2) == [1, 1]
        z = bits_to_mp(ctx, out(2), [1, 1], 2)
        assert mp_to_int(ctx, z, 2) == 2**23 + 1

    def test_round_trip(self, ctx) -> None:
        x = int_to_mp(ctx, out(2), 2**46 - 1, 2)
        row = mp_to_bits(ctx, x, 2)
        assert row == [2**23 - 1, 2**23 - 1]
        assert same(bits_to_mp(ctx, out(2), row, 2), x, 2)

    def test_words_are_masked(self, ctx) -> None:
        z = bits_to_mp(ctx, out(2), [2**23 + 3, 0], 2)
        assert mp_to_int(ctx, z, 2) == 3 * 2**23

    def test_too_wide(self, ctx) -> None:
        x = int_to_mp(ctx, out(2), 2**46, 2)
        with pytest.raises(MPRangeError, match="46-bit pattern"):
            mp_to_bits(ctx, x, 2)
        with pytest.raises(MPRangeError):
            check_bits_value(ctx, x, 2)

    def test_negative(self, ctx) -> None:
        x = int_to_mp(ctx, out(2), -1, 2)
        with pytest.raises(MPRangeError, match="negative"):
            mp_to_bits(ctx, x, 2)

    def test_wrong_word_count(self, ctx) -> None:
        with pytest.raises(ValueError, match="expected 2 words"):
            bits_to_mp(ctx, out(2), [1, 2, 3], 2)

    def test_check_small_value(self, ctx) -> None:
        check_bits_value(ctx, int_to_mp(ctx, out(2), 7, 2), 2)


# =============================================================================
# RECORD
# =============================================================================


class TestRecord:
    """Тесты BignumRecord конверсий"""

    def test_to_record(self, ctx, num) -> None:
        record = bignum_to_record(ctx, num("-3.5"), DIGITS)
        assert record.sign == "-"
        assert record.exponent == 0
        assert record.digits == [3, 5000000, 0, 0]

    def test_zero_record_is_canonical(self, ctx) -> None:
        record = bignum_to_record(ctx, Bignum.zero(DIGITS), DIGITS)
        assert record.sign == "+"
        assert record.exponent == 0

    def test_from_longer_record_rounds(self, ctx) -> None:
        record = BignumRecord(sign="+", exponent=0, digits=[3, 1415926, 5358979])
        z = record_to_bignum(ctx, out(2), record, 2)
        assert z.digits == [3, 1415927]

    def test_from_shorter_record_pads(self, ctx) -> None:
        record = BignumRecord(sign="-", exponent=1, digits=[12])
        z = record_to_bignum(ctx, out(), record, DIGITS)
        assert z.digits == [12, 0, 0, 0]
        assert mp_to_string(ctx, z, DIGITS) == "-1.2e+8"

    def test_round_trip(self, ctx, num) -> None:
        x = num("-2.718281828459045")
        back = record_to_bignum(ctx, out(), bignum_to_record(ctx, x, DIGITS), DIGITS)
        assert same(back, x, DIGITS)
