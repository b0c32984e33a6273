"""
Diagnostics — классификация ошибок и интерфейс отчётов

Классы ошибок:
- DOMAIN: аргумент вне области определения (деление на ноль, ln(x<=0),
  sqrt(x<0), atan2(0, 0), некорректная строка). Не репортится: операция
  выставляет errno = EDOM и поднимает MPDomainError ("нет результата").
- RANGE: переполнение при конверсии или усечении. Репортится через
  Diagnostics.report и поднимает MPRangeError, прерывая текущее вычисление.
- UNINITIALISED: чтение неинициализированного значения (ошибка программиста).
- ALLOCATION: исчерпание арены, фатально.
- PRECISION: предупреждение; запрошенная точность урезана до предела
  алгоритма, вычисление продолжается.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol

logger = logging.getLogger(__name__)


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


class ErrorKind(str, Enum):
    """Тип диагностики"""

    DOMAIN = "domain"
    RANGE = "range"
    UNINITIALISED = "uninitialised"
    ALLOCATION = "allocation"
    PRECISION = "precision"


class Errno(str, Enum):
    """Индикатор ошибки (аналог errno)"""

    NONE = "none"
    EDOM = "EDOM"
    ERANGE = "ERANGE"


# =============================================================================
# ИСКЛЮЧЕНИЯ
# =============================================================================


class MPError(Exception):
    """
    Базовая ошибка multiprecision движка.

    Attributes:
        kind: Тип ошибки
        message: Текст сообщения
        position: Непрозрачный токен позиции, переданный вызывающим
    """

    def __init__(self, kind: ErrorKind, message: str, position: Any = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position


class MPDomainError(MPError, ArithmeticError):
    """Аргумент вне области определения: операция не дала результата."""

    def __init__(self, message: str, position: Any = None):
        super().__init__(ErrorKind.DOMAIN, message, position)


class MPRangeError(MPError, OverflowError):
    """Переполнение: текущее вычисление прерывается."""

    def __init__(self, message: str, position: Any = None):
        super().__init__(ErrorKind.RANGE, message, position)


class UninitialisedValueError(MPError, RuntimeError):
    """Чтение значения, которому ничего не присвоено."""

    def __init__(self, message: str, position: Any = None):
        super().__init__(ErrorKind.UNINITIALISED, message, position)


class ArenaExhausted(MPError, MemoryError):
    """Арена не может выделить буфер."""

    def __init__(self, message: str, position: Any = None):
        super().__init__(ErrorKind.ALLOCATION, message, position)


# =============================================================================
# ИНТЕРФЕЙС ОТЧЁТОВ
# =============================================================================


class Diagnostics(Protocol):
    """Получатель диагностик: report(kind, context, message)."""

    def report(self, kind: ErrorKind, context: Any, message: str) -> None:
        ...


@dataclass(frozen=True)
class DiagnosticReport:
    """Зафиксированная диагностика"""

    kind: ErrorKind
    context: Any
    message: str


class LoggingDiagnostics:
    """
    Реализация Diagnostics по умолчанию.

    Пишет каждую диагностику в logging (уровень ERROR, для PRECISION
    WARNING) и сохраняет её в списке reports для последующего анализа
    вызывающим.
    """

    def __init__(self) -> None:
        self.reports: List[DiagnosticReport] = []

    def report(self, kind: ErrorKind, context: Any, message: str) -> None:
        self.reports.append(DiagnosticReport(kind=kind, context=context, message=message))
        if kind == ErrorKind.PRECISION:
            logger.warning("%s warning at %r: %s", kind.value, context, message)
        else:
            logger.error("%s error at %r: %s", kind.value, context, message)

    @property
    def last(self) -> Optional[DiagnosticReport]:
        return self.reports[-1] if self.reports else None

    def clear(self) -> None:
        self.reports.clear()
