"""
MPContext — контекст вычислений

Объединяет всё изменяемое состояние одной цепочки вычислений:
- конфигурацию (MPConfig)
- арену временных буферов (DigitArena)
- получателя диагностик (Diagnostics)
- кэш констант (ConstantCache)
- индикатор ошибки errno и токен текущей позиции

Каждое ядро получает контекст первым аргументом. Контекст не разделяется
между потоками: для параллельных вычислений создаются отдельные контексты.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, NoReturn, Optional

from mparith.core.domain.bignum import Bignum
from mparith.core.domain.config import MPConfig
from mparith.runtime.arena import DigitArena
from mparith.runtime.constants_cache import ConstantCache
from mparith.runtime.diagnostics import (
    Diagnostics,
    Errno,
    ErrorKind,
    LoggingDiagnostics,
    MPDomainError,
    MPRangeError,
    UninitialisedValueError,
)

logger = logging.getLogger(__name__)


class MPContext:
    """
    Контекст вычислений.

    Args:
        config: Конфигурация (по умолчанию MPConfig())
        diagnostics: Получатель диагностик (по умолчанию LoggingDiagnostics)
    """

    def __init__(
        self,
        config: Optional[MPConfig] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.config = config if config is not None else MPConfig()
        self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self.arena = DigitArena(self.config.arena_limit_digits)
        self.constants = ConstantCache()
        self.errno = Errno.NONE
        self.position: Any = None

    # =========================================================================
    # ТОЧНОСТЬ
    # =========================================================================

    def fun_digits(self, digits: int) -> int:
        return self.config.fun_digits(digits)

    # =========================================================================
    # ПОЗИЦИЯ
    # =========================================================================

    @contextmanager
    def at(self, position: Any) -> Iterator["MPContext"]:
        """Атрибуция диагностик к позиции вызывающего."""
        saved = self.position
        self.position = position
        try:
            yield self
        finally:
            self.position = saved

    # =========================================================================
    # ОШИБКИ
    # =========================================================================

    def clear_errno(self) -> None:
        self.errno = Errno.NONE

    def domain_error(self, message: str) -> NoReturn:
        """Нет результата: errno = EDOM, MPDomainError."""
        self.errno = Errno.EDOM
        raise MPDomainError(message, self.position)

    def range_error(self, message: str) -> NoReturn:
        """Переполнение: errno = ERANGE, отчёт, MPRangeError."""
        self.errno = Errno.ERANGE
        self.diagnostics.report(ErrorKind.RANGE, self.position, message)
        raise MPRangeError(message, self.position)

    def precision_warning(self, message: str) -> None:
        """Точность урезана: отчёт без исключения, errno не меняется."""
        self.diagnostics.report(ErrorKind.PRECISION, self.position, message)

    def require_initialised(self, *values: Bignum) -> None:
        """
        Проверка флага инициализации операндов.

        Raises:
            UninitialisedValueError: Хотя бы один операнд не инициализирован
        """
        for x in values:
            if not x.initialised:
                message = "value has not been initialised"
                self.diagnostics.report(ErrorKind.UNINITIALISED, self.position, message)
                raise UninitialisedValueError(message, self.position)
