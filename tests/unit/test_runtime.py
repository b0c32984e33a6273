"""
Тесты runtime: арена, диагностики, контекст, кэш констант

Проверяет:
1. LIFO дисциплину DigitArena и освобождение на исключениях
2. Исчерпание арены (фатальная ошибка)
3. Классификацию ошибок: DOMAIN без отчёта, RANGE с отчётом
4. Атрибуцию диагностик к позиции вызывающего
5. Рост ячеек кэша констант и таблицы коэффициентов
"""

import logging

import pytest

from mparith.core.domain.bignum import Bignum
from mparith.core.domain.config import MPConfig
from mparith.core.math.arithmetic import div, mul
from mparith.core.math.conversions import int_to_mp, string_to_mp
from mparith.core.math.precision import trunc
from mparith.core.math.trig import pi, sin
from mparith.runtime import (
    ArenaExhausted,
    ConstantCache,
    ConstantSlot,
    DigitArena,
    Errno,
    ErrorKind,
    LoggingDiagnostics,
    MPContext,
    MPDomainError,
    MPError,
    MPRangeError,
    UninitialisedValueError,
)

# =============================================================================
# DIGIT ARENA
# =============================================================================


class TestDigitArena:
    """Тесты стекового аллокатора"""

    def test_alloc_returns_initialised_zero(self) -> None:
        arena = DigitArena(100)
        z = arena.alloc(6)
        assert z.initialised
        assert z.is_zero()
        assert arena.in_use == 6
        assert arena.depth == 1

    def test_release_rolls_back_to_cursor(self) -> None:
        arena = DigitArena(100)
        arena.alloc(4)
        cursor = arena.mark()
        inner = arena.alloc(10)
        arena.alloc(10)
        assert arena.in_use == 24

        arena.release(cursor)
        assert arena.in_use == 4
        assert arena.depth == 1
        assert not inner.initialised

    def test_scope_releases_on_exception(self) -> None:
        """scope() освобождает буферы на любом пути выхода"""
        arena = DigitArena(100)
        with pytest.raises(ZeroDivisionError):
            with arena.scope():
                arena.alloc(8)
                raise ZeroDivisionError
        assert arena.in_use == 0
        assert arena.depth == 0

    def test_high_water(self) -> None:
        arena = DigitArena(100)
        with arena.scope():
            arena.alloc(30)
            arena.alloc(20)
        arena.alloc(10)
        assert arena.high_water == 50

    def test_exhaustion(self, caplog: pytest.LogCaptureFixture) -> None:
        """Превышение предела — ArenaExhausted с критическим логом"""
        arena = DigitArena(10)
        arena.alloc(8)
        with caplog.at_level(logging.CRITICAL, logger="mparith.runtime.arena"):
            with pytest.raises(ArenaExhausted, match="cannot allocate 3 digits"):
                arena.alloc(3)
        assert "arena exhausted" in caplog.text

    def test_exhaustion_is_memory_error(self) -> None:
        arena = DigitArena(1)
        with pytest.raises(MemoryError):
            arena.alloc(2)

    def test_stale_cursor_rejected(self) -> None:
        """Курсор глубже текущей вершины нарушает LIFO"""
        arena = DigitArena(100)
        outer = arena.mark()
        arena.alloc(5)
        inner = arena.mark()
        arena.release(outer)
        with pytest.raises(RuntimeError, match="beyond current depth"):
            arena.release(inner)

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            DigitArena(0)


class TestArenaBalance:
    """Ядра возвращают арену в исходное состояние"""

    def test_transcendental_leaves_arena_empty(self, ctx: MPContext) -> None:
        x = string_to_mp(ctx, Bignum.empty(6), "10.5", 6)
        sin(ctx, Bignum.empty(6), x, 6)
        assert ctx.arena.in_use == 0
        assert ctx.arena.depth == 0
        assert ctx.arena.high_water > 0

    def test_error_path_leaves_arena_empty(self, ctx: MPContext) -> None:
        x = int_to_mp(ctx, Bignum.empty(4), 1, 4)
        zero = Bignum.zero(4)
        with pytest.raises(MPDomainError):
            div(ctx, Bignum.empty(4), x, zero, 4)
        assert ctx.arena.in_use == 0

    def test_small_arena_limit(self) -> None:
        ctx = MPContext(MPConfig(arena_limit_digits=20))
        x = int_to_mp(ctx, Bignum.empty(50), 3, 50)
        with pytest.raises(ArenaExhausted):
            mul(ctx, Bignum.empty(50), x, x, 50)


# =============================================================================
# DIAGNOSTICS
# =============================================================================


class TestDiagnostics:
    """Тесты классификации и отчётов"""

    def test_domain_error_sets_errno_without_report(self, ctx: MPContext) -> None:
        with pytest.raises(MPDomainError) as exc_info:
            ctx.domain_error("no result")
        assert exc_info.value.kind == ErrorKind.DOMAIN
        assert ctx.errno == Errno.EDOM
        assert ctx.diagnostics.reports == []

    def test_range_error_reports(self, ctx: MPContext, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            with pytest.raises(MPRangeError):
                ctx.range_error("too big")
        assert ctx.errno == Errno.ERANGE
        assert ctx.diagnostics.last.kind == ErrorKind.RANGE
        assert ctx.diagnostics.last.message == "too big"
        assert "range error" in caplog.text

    def test_exception_hierarchy(self) -> None:
        assert issubclass(MPDomainError, ArithmeticError)
        assert issubclass(MPRangeError, OverflowError)
        assert issubclass(UninitialisedValueError, MPError)

    def test_clear_errno(self, ctx: MPContext) -> None:
        with pytest.raises(MPDomainError):
            ctx.domain_error("x")
        ctx.clear_errno()
        assert ctx.errno == Errno.NONE

    def test_uninitialised_operand(self, ctx: MPContext) -> None:
        """Чтение неинициализированного значения — отчёт и исключение"""
        with pytest.raises(UninitialisedValueError):
            mul(ctx, Bignum.empty(4), Bignum.empty(4), Bignum.zero(4), 4)
        assert ctx.diagnostics.last.kind == ErrorKind.UNINITIALISED

    def test_position_attribution(self, ctx: MPContext) -> None:
        """Отчёт получает позицию, переданную через ctx.at()"""
        x = string_to_mp(ctx, Bignum.empty(2), "1e20", 2)
        with ctx.at("line 3"):
            with pytest.raises(MPRangeError) as exc_info:
                trunc(ctx, Bignum.empty(2), x, 2)
        assert exc_info.value.position == "line 3"
        assert ctx.diagnostics.last.context == "line 3"
        assert ctx.position is None

    def test_custom_diagnostics(self) -> None:
        """Любой объект с report(kind, context, message) принимается"""
        received = []

        class Collector:
            def report(self, kind, context, message):
                received.append((kind, message))

        ctx = MPContext(diagnostics=Collector())
        with pytest.raises(MPRangeError):
            ctx.range_error("overflow")
        assert received == [(ErrorKind.RANGE, "overflow")]

    def test_logging_diagnostics_clear(self) -> None:
        diagnostics = LoggingDiagnostics()
        diagnostics.report(ErrorKind.RANGE, None, "m")
        diagnostics.clear()
        assert diagnostics.last is None

    def test_precision_warning_does_not_raise(
        self, ctx: MPContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Урезанная точность: отчёт уровня WARNING, errno не меняется"""
        with caplog.at_level(logging.WARNING, logger="mparith.runtime.diagnostics"):
            ctx.precision_warning("evaluated at 15 digits")
        assert ctx.errno == Errno.NONE
        assert ctx.diagnostics.last.kind == ErrorKind.PRECISION
        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "precision warning" in caplog.text


# =============================================================================
# CONSTANT CACHE
# =============================================================================


class TestConstantCache:
    """Тесты кэша констант"""

    def test_lookup_requires_enough_digits(self) -> None:
        cache = ConstantCache()
        value = Bignum(digits=[3, 1415926, 5358979], initialised=True)
        cache.store(ConstantSlot.PI, value, 3)
        assert cache.lookup(ConstantSlot.PI, 2) is not None
        assert cache.lookup(ConstantSlot.PI, 4) is None
        assert cache.cached_digits(ConstantSlot.PI) == 3

    def test_store_copies_value(self) -> None:
        cache = ConstantCache()
        value = Bignum(digits=[3, 1415926], initialised=True)
        cache.store(ConstantSlot.PI, value, 2)
        value.digits[0] = 4
        assert cache.lookup(ConstantSlot.PI, 2).value.digits[0] == 3

    def test_pi_cache_grows(self, ctx: MPContext) -> None:
        """Запрос большей точности пересчитывает ячейку"""
        pi(ctx, Bignum.empty(4), 4)
        first = ctx.constants.cached_digits(ConstantSlot.PI)
        assert first > 4

        pi(ctx, Bignum.empty(3), 3)
        assert ctx.constants.cached_digits(ConstantSlot.PI) == first

        pi(ctx, Bignum.empty(8), 8)
        assert ctx.constants.cached_digits(ConstantSlot.PI) > max(first, 8)

    def test_table_requires_exact_digits(self) -> None:
        cache = ConstantCache()
        values = [
            Bignum(digits=[2, 5, 0], initialised=True),
            Bignum(digits=[7, 0, 0], initialised=True),
        ]
        stored = cache.store_table("coefficients", values, 3)
        values[0].digits[0] = 9
        assert cache.lookup_table("coefficients", 3) is stored
        assert stored[0].digits[0] == 2
        assert cache.lookup_table("coefficients", 2) is None
        assert cache.lookup_table("coefficients", 4) is None

    def test_clear(self, ctx: MPContext) -> None:
        pi(ctx, Bignum.empty(4), 4)
        ctx.constants.store_table("coefficients", [Bignum.zero(3)], 3)
        ctx.constants.clear()
        assert ctx.constants.cached_digits(ConstantSlot.PI) == 0
        assert ctx.constants.lookup_table("coefficients", 3) is None
