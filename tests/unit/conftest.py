"""
Общие фикстуры unit-тестов mparith

- ctx: свежий контекст вычислений на каждый тест
- num: фабрика значений из десятичной строки
- assert_close: сравнение с эталоном по относительной погрешности
"""

from typing import Callable, Union

import pytest

from mparith.core.domain.bignum import LOG_RADIX, Bignum
from mparith.core.math.arithmetic import sub
from mparith.core.math.conversions import mp_to_string, string_to_mp
from mparith.runtime.context import MPContext

# Точность по умолчанию: 4 цифры RADIX (22-28 десятичных знаков)
DEFAULT_DIGITS = 4


def decimal_exponent(x: Bignum) -> int:
    """Десятичный порядок ведущей значащей цифры x."""
    return LOG_RADIX * x.exponent + len(str(x.digits[0])) - 1


@pytest.fixture
def ctx() -> MPContext:
    """Контекст с конфигурацией по умолчанию."""
    return MPContext()


@pytest.fixture
def num(ctx: MPContext) -> Callable[..., Bignum]:
    """num("3.14") → Bignum с DEFAULT_DIGITS цифрами."""

    def make(text: str, digits: int = DEFAULT_DIGITS) -> Bignum:
        return string_to_mp(ctx, Bignum.empty(digits), text, digits)

    return make


@pytest.fixture
def assert_close(ctx: MPContext) -> Callable[..., None]:
    """
    assert_close(actual, expected, decimals=20, digits=DEFAULT_DIGITS)

    |actual - expected| <= 10^-decimals · |expected|; для нулевого эталона
    погрешность абсолютная.
    """

    def check(
        actual: Bignum,
        expected: Union[str, Bignum],
        decimals: int = 20,
        digits: int = DEFAULT_DIGITS,
    ) -> None:
        if isinstance(expected, str):
            expected = string_to_mp(ctx, Bignum.empty(digits), expected, digits)
        diff = sub(ctx, Bignum.empty(digits), actual, expected, digits)
        if diff.is_zero():
            return
        scale = 0 if expected.is_zero() else decimal_exponent(expected)
        assert decimal_exponent(diff) - scale <= -decimals, (
            f"{mp_to_string(ctx, actual, digits)} != {mp_to_string(ctx, expected, digits)}"
        )

    return check
