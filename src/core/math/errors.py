"""
Fixed-Point Errors — исключения ядра SD59x18

Таксономия ошибок:
- DomainError: операнд вне допустимой области операции
  (отрицательный аргумент sqrt/log, деление на ноль, MIN_VALUE в abs/mul/div)
- FixedPointOverflowError: истинный результат не помещается в контейнер
  signed-256 (или вход превышает верхнюю границу exp/exp2/sqrt)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибка выбрасывается в точке обнаружения и никогда не подавляется
2. Частичных результатов нет: операция либо успешна, либо падает целиком
3. Каждая ошибка несёт имя операции и операнды для диагностики
"""

import logging
from typing import Any

_log = logging.getLogger(__name__)


class FixedPointError(Exception):
    """
    Базовая ошибка fixed-point ядра.

    Attributes:
        operation: Имя операции, в которой обнаружена ошибка (например, 'mul')
        operands: Операнды операции (raw int значения)
    """

    def __init__(self, operation: str, message: str, *operands: Any) -> None:
        self.operation = operation
        self.operands = operands
        super().__init__(f"{operation}: {message}")
        _log.debug("%s raised in %s, operands=%r", type(self).__name__, operation, operands)


class DomainError(FixedPointError, ValueError):
    """
    Операнд вне области определения операции.

    Примеры: sqrt(-1.0), log2(0.0), div(x, 0), abs_(MIN_VALUE).
    """

    pass


class FixedPointOverflowError(FixedPointError, OverflowError):
    """
    Результат не помещается в диапазон [MIN_VALUE, MAX_VALUE]
    (или промежуточное значение не помещается в unsigned-256).

    Примеры: mul(MAX_VALUE, 2.0), exp2(192.0), from_int(2**255).
    """

    pass
