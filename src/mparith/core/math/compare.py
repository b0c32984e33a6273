"""
Predicates — сравнения bignum

Все сравнения устроены одинаково: разность x - y в рабочей точности и
проверка знака результата.
"""

from mparith.core.domain.bignum import Bignum
from mparith.core.math.arithmetic import sub
from mparith.runtime.context import MPContext


def compare(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> int:
    """
    Знак разности x - y.

    Returns:
        -1, 0 или 1
    """
    with ctx.arena.scope() as arena:
        v = arena.alloc(digits)
        sub(ctx, v, x, y, digits)
        return v.sign


def eq(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) == 0


def ne(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) != 0


def lt(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) < 0


def le(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) <= 0


def gt(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) > 0


def ge(ctx: MPContext, x: Bignum, y: Bignum, digits: int) -> bool:
    return compare(ctx, x, y, digits) >= 0
