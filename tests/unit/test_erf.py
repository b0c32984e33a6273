"""
Тесты функции ошибок: erf, erfc, inverf, inverfc

Эталоны — math.erf / math.erfc и erf(1) с 50 знаками; обратные функции
проверяются подстановкой в прямые.
"""

import math

import pytest

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import add
from mparith.core.math.conversions import mp_to_real
from mparith.core.math.erf import erf, erfc, inverf, inverfc
from mparith.core.math.normalization import same
from mparith.runtime.diagnostics import MPDomainError

DIGITS = 4

ERF_1 = "0.84270079294971486934122063508260925929606699796630"
ERFC_1 = "0.15729920705028513065877936491739074070393300203370"


def out(digits=DIGITS):
    return Bignum.empty(digits)


class TestErf:
    """Тесты erf(x)"""

    def test_zero(self, ctx, num) -> None:
        assert erf(ctx, out(), num("0"), DIGITS).is_zero()

    def test_one_high_precision(self, ctx, num, assert_close) -> None:
        assert_close(erf(ctx, out(), num("1"), DIGITS), ERF_1, decimals=25)

    @pytest.mark.parametrize("x", ["1e-8", "0.1", "0.5", "-1.5", "3", "-5.5"])
    def test_matches_double(self, ctx, num, x) -> None:
        z = erf(ctx, out(), num(x), DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(math.erf(float(x)), rel=1e-14)

    def test_odd(self, ctx, num) -> None:
        plus = erf(ctx, out(), num("0.75"), DIGITS)
        minus = erf(ctx, out(), num("-0.75"), DIGITS)
        assert plus.digits[:DIGITS] == minus.digits[:DIGITS]
        assert minus.negative and not plus.negative

    @pytest.mark.parametrize("x, expected", [("10", "1"), ("-12", "-1")])
    def test_saturation(self, ctx, num, x, expected) -> None:
        assert same(erf(ctx, out(), num(x), DIGITS), num(expected), DIGITS)


class TestErfc:
    """Тесты erfc(x)"""

    def test_one_high_precision(self, ctx, num, assert_close) -> None:
        assert_close(erfc(ctx, out(), num("1"), DIGITS), ERFC_1, decimals=24)

    @pytest.mark.parametrize("x", ["0.5", "-1", "1.99", "2", "4.5", "10", "25"])
    def test_matches_double(self, ctx, num, x) -> None:
        z = erfc(ctx, out(), num(x), DIGITS)
        assert mp_to_real(ctx, z, DIGITS) == pytest.approx(math.erfc(float(x)), rel=1e-13)

    def test_reflection(self, ctx, num, assert_close) -> None:
        """erfc(x) + erfc(-x) = 2"""
        total = add(
            ctx,
            out(),
            erfc(ctx, out(), num("2.5"), DIGITS),
            erfc(ctx, out(), num("-2.5"), DIGITS),
            DIGITS,
        )
        assert_close(total, "2", decimals=24)

    def test_relative_accuracy_far_tail(self, ctx, num, assert_close) -> None:
        """erfc(30) ~ 2.56e-393 за пределом double, с полной относительной точностью"""
        z = erfc(ctx, out(), num("30"), DIGITS)
        assert not z.negative
        assert mp_to_real(ctx, z, DIGITS) == 0.0
        assert_close(inverfc(ctx, out(), z, DIGITS), "30", decimals=24)


class TestInverf:
    """Тесты inverf(x)"""

    def test_zero(self, ctx, num) -> None:
        assert inverf(ctx, out(), num("0"), DIGITS).is_zero()

    def test_half_matches_double(self, ctx, num) -> None:
        z = inverf(ctx, out(), num("0.5"), DIGITS)
        assert math.erf(mp_to_real(ctx, z, DIGITS)) == pytest.approx(0.5, rel=1e-15)

    @pytest.mark.parametrize("y", ["1e-10", "0.25", "-0.5", "0.9", "-0.999999", "0.9999999999999999"])
    def test_inverts_erf(self, ctx, num, assert_close, y) -> None:
        z = inverf(ctx, out(), num(y), DIGITS)
        assert z.negative == y.startswith("-")
        assert_close(erf(ctx, out(), z, DIGITS), y, decimals=24)

    @pytest.mark.parametrize("y", ["1", "-1", "1.5"])
    def test_domain(self, ctx, num, y) -> None:
        with pytest.raises(MPDomainError):
            inverf(ctx, out(), num(y), DIGITS)


class TestInverfc:
    """Тесты inverfc(x)"""

    def test_one(self, ctx, num) -> None:
        assert inverfc(ctx, out(), num("1"), DIGITS).is_zero()

    @pytest.mark.parametrize("q", ["1e-300", "1e-50", "0.01", "0.3", "0.75", "1.2", "1.7", "1.999"])
    def test_inverts_erfc(self, ctx, num, assert_close, q) -> None:
        z = inverfc(ctx, out(), num(q), DIGITS)
        assert_close(erfc(ctx, out(), z, DIGITS), q, decimals=22)

    def test_sign(self, ctx, num) -> None:
        assert not inverfc(ctx, out(), num("0.2"), DIGITS).negative
        assert inverfc(ctx, out(), num("1.8"), DIGITS).negative

    @pytest.mark.parametrize("q", ["0", "-0.5", "2", "3"])
    def test_domain(self, ctx, num, q) -> None:
        with pytest.raises(MPDomainError):
            inverfc(ctx, out(), num(q), DIGITS)
