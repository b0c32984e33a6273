"""
Тесты gamma-семейства: gamma, lngamma, beta, lnbeta, beta_inc

Эталоны — точные значения (факториалы, √π, рациональные B(a, b)) и
math.gamma / math.lgamma в пределах точности double.
"""

import math

import pytest

from mparith.core.domain.bignum import LOG_RADIX, Bignum
from mparith.core.math.arithmetic import add, mul
from mparith.core.math.conversions import mp_to_real
from mparith.core.math.explog import ln
from mparith.core.math.gamma import (
    SPOUGE_TABLE,
    beta,
    beta_inc,
    gamma,
    gamma_digits,
    lnbeta,
    lngamma,
    spouge_parameter,
)
from mparith.core.math.normalization import same
from mparith.runtime.diagnostics import MPDomainError

DIGITS = 4

SQRT_PI = "1.77245385090551602729816748334114518279754945612239"
HALF_SQRT_PI = "0.88622692545275801364908374167057259139877472806119"
MINUS_TWO_SQRT_PI = "-3.54490770181103205459633496668229036559509891224478"
LN_PI = "1.14472988584940017414342735135305871164729481291531"
PI = "3.14159265358979323846264338327950288419716939937511"


def out(digits=DIGITS):
    return Bignum.empty(digits)


# =============================================================================
# SPOUGE
# =============================================================================


class TestSpougeParameter:
    """Тесты выбора параметра a"""

    @pytest.mark.parametrize("digits", [2, 4, 8])
    def test_error_bound_reached(self, digits) -> None:
        a = spouge_parameter(digits)
        bound = -(math.log10(a) / 2 + (a + 0.5) * math.log10(2 * math.pi))
        assert bound <= -digits * LOG_RADIX

    def test_smallest(self) -> None:
        a = spouge_parameter(4) - 1
        bound = -(math.log10(a) / 2 + (a + 0.5) * math.log10(2 * math.pi))
        assert bound > -4 * LOG_RADIX

    def test_grows_with_precision(self) -> None:
        assert spouge_parameter(8) > spouge_parameter(4)

    def test_table_cached_per_precision(self, ctx, num) -> None:
        gamma(ctx, out(), num("5"), DIGITS)
        table = ctx.constants.lookup_table(SPOUGE_TABLE, gamma_digits(ctx, DIGITS))
        assert table is not None
        assert len(table) == spouge_parameter(DIGITS)

        gamma(ctx, out(), num("7.5"), DIGITS)
        assert ctx.constants.lookup_table(SPOUGE_TABLE, gamma_digits(ctx, DIGITS)) is table


# =============================================================================
# GAMMA
# =============================================================================


class TestGamma:
    """Тесты Γ(x)"""

    @pytest.mark.parametrize(
        "x, expected",
        [
            ("1", "1"),
            ("2", "1"),
            ("5", "24"),
            ("10", "362880"),
            ("30", "8841761993739701954543616000000"),
        ],
    )
    def test_factorials(self, ctx, num, assert_close, x, expected) -> None:
        assert_close(gamma(ctx, out(), num(x), DIGITS), expected, decimals=24)

    def test_half(self, ctx, num, assert_close) -> None:
        assert_close(gamma(ctx, out(), num("0.5"), DIGITS), SQRT_PI, decimals=24)

    def test_three_halves(self, ctx, num, assert_close) -> None:
        assert_close(gamma(ctx, out(), num("1.5"), DIGITS), HALF_SQRT_PI, decimals=24)

    def test_reflection(self, ctx, num, assert_close) -> None:
        """Γ(-1/2) = -2√π"""
        z = gamma(ctx, out(), num("-0.5"), DIGITS)
        assert z.negative
        assert_close(z, MINUS_TWO_SQRT_PI, decimals=23)

    @pytest.mark.parametrize("x", ["0.1", "0.75", "2.5", "7.3", "15.75", "-0.3", "-2.5", "-5.1"])
    def test_matches_double(self, ctx, num, x) -> None:
        z = gamma(ctx, out(), num(x), DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(math.gamma(float(x)), rel=1e-13)

    @pytest.mark.parametrize("x", ["0", "-1", "-4"])
    def test_poles(self, ctx, num, x) -> None:
        with pytest.raises(MPDomainError, match="pole"):
            gamma(ctx, out(), num(x), DIGITS)

    def test_recurrence(self, ctx, num, assert_close) -> None:
        """Γ(x + 1) = x·Γ(x)"""
        g = gamma(ctx, out(), num("3.25"), DIGITS)
        g_next = gamma(ctx, out(), num("4.25"), DIGITS)
        assert_close(mul(ctx, out(), g, num("3.25"), DIGITS), g_next, decimals=23)


class TestLnGamma:
    """Тесты ln|Γ(x)|"""

    def test_one_and_two(self, ctx, num, assert_close) -> None:
        assert_close(lngamma(ctx, out(), num("1"), DIGITS), "0", decimals=24)
        assert_close(lngamma(ctx, out(), num("2"), DIGITS), "0", decimals=24)

    def test_large_factorial(self, ctx, num, assert_close) -> None:
        """ln Γ(30) = ln 29!, без переполнения промежуточных значений"""
        factorial = ln(ctx, out(), num("8841761993739701954543616000000"), DIGITS)
        assert_close(lngamma(ctx, out(), num("30"), DIGITS), factorial, decimals=24)

    @pytest.mark.parametrize("x", ["0.1", "3.7", "50", "1000.5", "-3.3", "-0.7"])
    def test_matches_double(self, ctx, num, x) -> None:
        z = lngamma(ctx, out(), num(x), DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(math.lgamma(float(x)), rel=1e-13)

    def test_pole(self, ctx, num) -> None:
        with pytest.raises(MPDomainError, match="pole"):
            lngamma(ctx, out(), num("-2"), DIGITS)


# =============================================================================
# BETA
# =============================================================================


class TestBeta:
    """Тесты B(a, b) и ln|B(a, b)|"""

    def test_integer_arguments(self, ctx, num, assert_close) -> None:
        """B(2, 3) = 1/12"""
        z = beta(ctx, out(), num("2"), num("3"), DIGITS)
        assert_close(z, "0.083333333333333333333333333333")

    def test_halves(self, ctx, num, assert_close) -> None:
        """B(1/2, 1/2) = π"""
        assert_close(beta(ctx, out(), num("0.5"), num("0.5"), DIGITS), PI)
        assert_close(lnbeta(ctx, out(), num("0.5"), num("0.5"), DIGITS), LN_PI)

    def test_symmetric(self, ctx, num, assert_close) -> None:
        a = beta(ctx, out(), num("1.25"), num("3.5"), DIGITS)
        b = beta(ctx, out(), num("3.5"), num("1.25"), DIGITS)
        assert_close(a, b, decimals=24)

    def test_negative_argument_sign(self, ctx, num, assert_close) -> None:
        """B(-1/2, 2) = Γ(-1/2)·Γ(2)/Γ(3/2) = -4"""
        z = beta(ctx, out(), num("-0.5"), num("2"), DIGITS)
        assert z.negative
        assert_close(z, "-4")

    def test_lnbeta_matches_lgamma(self, ctx, num) -> None:
        expected = math.lgamma(2.5) + math.lgamma(7.25) - math.lgamma(9.75)
        z = lnbeta(ctx, out(), num("2.5"), num("7.25"), DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(expected, rel=1e-13)

    def test_pole(self, ctx, num) -> None:
        with pytest.raises(MPDomainError):
            beta(ctx, out(), num("-1"), num("2.5"), DIGITS)


class TestBetaInc:
    """Тесты регуляризованной неполной beta I_x(s, t)"""

    @pytest.mark.parametrize(
        "s, t, x, expected",
        [
            ("1", "1", "0.3", "0.3"),
            ("2", "1", "0.2", "0.04"),
            ("1", "3", "0.3", "0.657"),
            ("1", "3", "0.9", "0.999"),
            ("2.5", "2.5", "0.5", "0.5"),
        ],
    )
    def test_closed_forms(self, ctx, num, assert_close, s, t, x, expected) -> None:
        z = beta_inc(ctx, out(), num(s), num(t), num(x), DIGITS)
        assert_close(z, expected, decimals=22)

    def test_symmetry(self, ctx, num, assert_close) -> None:
        """I_x(s, t) + I_{1-x}(t, s) = 1 по обе стороны границы цепной дроби"""
        left = beta_inc(ctx, out(), num("2.5"), num("1.5"), num("0.3"), DIGITS)
        right = beta_inc(ctx, out(), num("1.5"), num("2.5"), num("0.7"), DIGITS)
        assert_close(add(ctx, out(), left, right, DIGITS), "1", decimals=22)

    def test_upper_region_uses_swapped_parameters(self, ctx, num, assert_close) -> None:
        """x выше (s + 1)/(s + t + 2): I_0.8(3, 2) = 4x³ - 3x⁴"""
        z = beta_inc(ctx, out(), num("3"), num("2"), num("0.8"), DIGITS)
        assert_close(z, "0.8192", decimals=22)

    def test_endpoints(self, ctx, num) -> None:
        assert beta_inc(ctx, out(), num("2"), num("3"), num("0"), DIGITS).is_zero()
        one = beta_inc(ctx, out(), num("2"), num("3"), num("1"), DIGITS)
        assert same(one, num("1"), DIGITS)

    @pytest.mark.parametrize(
        "s, t, x",
        [("2", "3", "-0.1"), ("2", "3", "1.5"), ("0", "3", "0.5"), ("2", "-1", "0.5")],
    )
    def test_domain(self, ctx, num, s, t, x) -> None:
        with pytest.raises(MPDomainError):
            beta_inc(ctx, out(), num(s), num(t), num(x), DIGITS)
