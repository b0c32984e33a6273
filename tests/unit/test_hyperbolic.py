"""
Тесты гиперболических функций
"""

import math

import pytest

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import mul, sub
from mparith.core.math.conversions import mp_to_real
from mparith.core.math.hyperbolic import acosh, asinh, atanh, cosh, hyp, sinh, tanh
from mparith.runtime.diagnostics import MPDomainError

DIGITS = 4

SINH1 = "1.17520119364380145688238185059560081515571798133410"
COSH1 = "1.54308063481524377847790562075706168260152911236587"
ASINH1 = "0.88137358701954302523260932497979230902816032826163"
ACOSH2 = "1.31695789692481670862504634730796844402698197146751"
ATANH_HALF = "0.54930614433405484569762261846126285232374527891137"


def out(digits=DIGITS):
    return Bignum.empty(digits)


class TestSinhCosh:
    """Тесты sinh, cosh, tanh"""

    def test_unit_argument(self, ctx, num, assert_close) -> None:
        assert_close(sinh(ctx, out(), num("1"), DIGITS), SINH1)
        assert_close(cosh(ctx, out(), num("1"), DIGITS), COSH1)

    def test_parity(self, ctx, num, assert_close) -> None:
        assert_close(sinh(ctx, out(), num("-1"), DIGITS), "-" + SINH1)
        assert_close(cosh(ctx, out(), num("-1"), DIGITS), COSH1)

    def test_joint_evaluation(self, ctx, num, assert_close) -> None:
        """hyp заполняет оба буфера за один вызов"""
        sh, ch = out(), out()
        hyp(ctx, sh, ch, num("1"), DIGITS)
        assert_close(sh, SINH1, decimals=19)
        assert_close(ch, COSH1, decimals=19)

    def test_small_argument_keeps_digits(self, ctx, num, assert_close) -> None:
        """sinh(x) ≈ x + x³/6 без потери цифр при x → 0"""
        z = sinh(ctx, out(), num("1e-10"), DIGITS)
        assert_close(z, "1.000000000000000000001666666666666667e-10")

    def test_identity(self, ctx, num, assert_close) -> None:
        """cosh² - sinh² = 1"""
        s = sinh(ctx, out(), num("3"), DIGITS)
        c = cosh(ctx, out(), num("3"), DIGITS)
        mul(ctx, s, s, s, DIGITS)
        mul(ctx, c, c, c, DIGITS)
        assert_close(sub(ctx, c, c, s, DIGITS), "1", decimals=18)

    @pytest.mark.parametrize("x", [0.5, -2.25, 10.0])
    def test_matches_double(self, ctx, num, x) -> None:
        for kernel, reference in ((sinh, math.sinh), (cosh, math.cosh), (tanh, math.tanh)):
            z = kernel(ctx, out(), num(repr(x)), DIGITS)
            assert mp_to_real(ctx, z, DIGITS) == pytest.approx(reference(x), rel=1e-13)

    def test_zero(self, ctx) -> None:
        assert sinh(ctx, out(), Bignum.zero(DIGITS), DIGITS).is_zero()
        assert tanh(ctx, out(), Bignum.zero(DIGITS), DIGITS).is_zero()


class TestInverse:
    """Тесты asinh, acosh, atanh"""

    def test_asinh(self, ctx, num, assert_close) -> None:
        assert_close(asinh(ctx, out(), num("1"), DIGITS), ASINH1)

    def test_asinh_is_odd(self, ctx, num, assert_close) -> None:
        assert_close(asinh(ctx, out(), num("-1"), DIGITS), "-" + ASINH1)

    def test_asinh_tiny_argument(self, ctx, num, assert_close) -> None:
        assert_close(asinh(ctx, out(), num("1e-30"), DIGITS), "1e-30")

    def test_asinh_inverse_of_sinh(self, ctx, num, assert_close) -> None:
        y = sinh(ctx, out(), num("2"), DIGITS)
        assert_close(asinh(ctx, y, y, DIGITS), "2", decimals=19)

    def test_acosh(self, ctx, num, assert_close) -> None:
        assert_close(acosh(ctx, out(), num("2"), DIGITS), ACOSH2)

    def test_acosh_one(self, ctx, num) -> None:
        assert acosh(ctx, out(), num("1"), DIGITS).is_zero()

    def test_acosh_inverse_of_cosh(self, ctx, num, assert_close) -> None:
        y = acosh(ctx, out(), num("3"), DIGITS)
        assert_close(cosh(ctx, y, y, DIGITS), "3", decimals=19)

    @pytest.mark.parametrize("x", ["0.5", "-2", "0"])
    def test_acosh_below_one(self, ctx, num, x) -> None:
        with pytest.raises(MPDomainError, match="below one"):
            acosh(ctx, out(), num(x), DIGITS)

    def test_atanh(self, ctx, num, assert_close) -> None:
        assert_close(atanh(ctx, out(), num("0.5"), DIGITS), ATANH_HALF)
        assert_close(atanh(ctx, out(), num("-0.5"), DIGITS), "-" + ATANH_HALF)

    def test_atanh_zero(self, ctx) -> None:
        assert atanh(ctx, out(), Bignum.zero(DIGITS), DIGITS).is_zero()

    @pytest.mark.parametrize("x", ["1", "-1.5"])
    def test_atanh_outside_interval(self, ctx, num, x) -> None:
        with pytest.raises(MPDomainError, match=r"outside \(-1, 1\)"):
            atanh(ctx, out(), num(x), DIGITS)
