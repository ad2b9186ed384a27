"""
Errors — таксономия ошибок арифметического ядра

Две категории:
- InvariantViolation: нарушение инварианта или предусловия (ошибка программиста
  или дефект самого ядра). Никогда не перехватывается внутри библиотеки.
- NumberParseError: некорректный внешний ввод (десятичные строки, литералы
  дробей, коэффициенты полиномов). Восстанавливаемая ошибка, сообщается пользователю.
"""

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvariantViolation(Exception):
    """
    Критическое нарушение инварианта BigInt/Fraction.

    Примеры:
    - знак не равен +1/-1, ведущий нулевой блок, отрицательный ноль
    - нулевой знаменатель, переданный в Fraction.create
    - неточное деление там, где точность гарантирована алгоритмом
    - gcd(0, 0)
    """
    pass


class ZeroDivisorViolation(InvariantViolation, ZeroDivisionError):
    """Деление на ноль (BigInt.divide, divide_by_block, Fraction.invert)."""
    pass


class NumberParseError(ValueError):
    """Некорректная десятичная строка или литерал дроби."""
    pass


# =============================================================================
# HELPERS
# =============================================================================


def fail(message: str, error: type = InvariantViolation) -> NoReturn:
    """
    Зафиксировать диагностику и прервать вычисление.

    Args:
        message: Диагностическое сообщение
        error: Класс исключения (InvariantViolation или подкласс)

    Raises:
        InvariantViolation: всегда
    """
    logger.critical("invariant violation: %s", message)
    raise error(message)
