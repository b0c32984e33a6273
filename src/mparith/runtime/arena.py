"""
DigitArena — стековый аллокатор временных bignum буферов

Дисциплина LIFO:
    cursor = arena.mark()
    w = arena.alloc(digits + 2)
    ...
    arena.release(cursor)

или, с гарантированным освобождением на любом пути выхода (включая
исключения):
    with arena.scope():
        w = arena.alloc(digits + 2)

Арена никогда не освобождает отдельные буферы, только откатывает курсор.
Освобождённые буферы помечаются неинициализированными.

Одна арена обслуживает одну цепочку вызовов: параллельное использование
одного экземпляра не допускается.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List

from mparith.core.domain.bignum import Bignum
from mparith.runtime.diagnostics import ArenaExhausted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArenaCursor:
    """Снимок состояния арены"""

    depth: int
    in_use: int


class DigitArena:
    """
    Стековый аллокатор буферов.

    Attributes:
        limit: Предел суммарной ёмкости живых буферов (в цифрах)
        in_use: Текущая суммарная ёмкость живых буферов
        high_water: Максимум in_use за время жизни арены
    """

    def __init__(self, limit: int):
        if limit <= 0:
            raise ValueError(f"arena limit must be positive, got {limit}")
        self.limit = limit
        self.in_use = 0
        self.high_water = 0
        self._live: List[Bignum] = []

    @property
    def depth(self) -> int:
        """Число живых буферов."""
        return len(self._live)

    def mark(self) -> ArenaCursor:
        return ArenaCursor(depth=len(self._live), in_use=self.in_use)

    def alloc(self, precision: int) -> Bignum:
        """
        Выделение обнулённого буфера ёмкостью precision цифр.

        Raises:
            ArenaExhausted: Превышен предел арены
        """
        if self.in_use + precision > self.limit:
            logger.critical(
                "arena exhausted: %d digits live, %d requested, limit %d",
                self.in_use,
                precision,
                self.limit,
            )
            raise ArenaExhausted(
                f"cannot allocate {precision} digits ({self.in_use} of {self.limit} in use)"
            )

        z = Bignum.zero(precision)
        self._live.append(z)
        self.in_use += precision
        if self.in_use > self.high_water:
            self.high_water = self.in_use
        return z

    def release(self, cursor: ArenaCursor) -> None:
        """
        Откат арены к курсору.

        Raises:
            RuntimeError: Курсор старше текущей вершины (нарушение LIFO)
        """
        if cursor.depth > len(self._live):
            raise RuntimeError(
                f"arena cursor depth {cursor.depth} beyond current depth {len(self._live)}"
            )

        for z in self._live[cursor.depth :]:
            z.initialised = False
        del self._live[cursor.depth :]
        self.in_use = cursor.in_use

    @contextmanager
    def scope(self) -> Iterator["DigitArena"]:
        """Область временных буферов с освобождением на выходе."""
        cursor = self.mark()
        try:
            yield self
        finally:
            self.release(cursor)
