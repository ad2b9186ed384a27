"""RPN Evaluator — вычисление постфиксных выражений над дробями.

Токены разделяются пробельными символами:
- бинарные операторы: + - * / ^
- унарный оператор: ! (факториал)
- % — результат последнего вычисленного выражения
- литералы дробей: p, p/q, -p/q
- quit — завершение работы

После обработки строки на стеке должно остаться ровно одно значение:
оно становится новым "последним результатом".
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from src.core.domain.binding import Binding
from src.core.math import fraction
from src.core.math.fraction import Fraction
from src.rpn.config import EvaluatorConfig
from src.rpn.stack import ExpressionError, OperandStack

logger = logging.getLogger(__name__)

QUIT_TOKEN = "quit"
LAST_RESULT_TOKEN = "%"
FACTORIAL_TOKEN = "!"


@dataclass(frozen=True)
class EvaluationResult:
    """Результат обработки одной строки."""

    value: Optional[Fraction]
    quit_requested: bool
    tokens_evaluated: int


def _checked_divide(left: Fraction, right: Fraction) -> Fraction:
    if right.is_zero():
        raise ExpressionError("division by zero")
    return fraction.divide(left, right)


def _checked_exponent(base: Fraction, power: Fraction) -> Fraction:
    if not power.is_integer() or power.numerator.sign < 0:
        raise ExpressionError(f"exponent must be a nonnegative integer, got {power}")
    return fraction.exponent(base, power)


def _checked_factorial(value: Fraction) -> Fraction:
    n = value.numerator
    if not value.is_integer() or n.sign < 0 or n.used != 1:
        raise ExpressionError(
            f"factorial needs a nonnegative integer below 2^32, got {value}"
        )
    return fraction.factorial(value)


BINARY_OPERATORS: Dict[str, Callable[[Fraction, Fraction], Fraction]] = {
    "+": fraction.add,
    "-": fraction.subtract,
    "*": fraction.multiply,
    "/": _checked_divide,
    "^": _checked_exponent,
}

UNARY_OPERATORS: Dict[str, Callable[[Fraction], Fraction]] = {
    FACTORIAL_TOKEN: _checked_factorial,
}


class RPNEvaluator:
    """Построчный вычислитель RPN выражений с памятью последнего результата."""

    def __init__(self, config: Optional[EvaluatorConfig] = None):
        """
        Args:
            config: конфигурация калькулятора (default: EvaluatorConfig())
        """
        self.config = config or EvaluatorConfig()
        self._last_result: Binding[Fraction] = Binding(Fraction.zero(), name="last_result")

    @property
    def last_result(self) -> Fraction:
        return self._last_result.value

    def evaluate_line(self, line: str) -> EvaluationResult:
        """Вычисление одной строки.

        Args:
            line: строка выражения без завершающего перевода строки

        Returns:
            EvaluationResult; при quit value=None и quit_requested=True

        Raises:
            ExpressionError: пустое/слишком длинное выражение, нехватка
                операндов, лишние значения на стеке, недопустимый операнд
            NumberParseError: некорректный литерал дроби
        """
        if len(line) > self.config.max_line_length:
            raise ExpressionError(
                f"expression longer than {self.config.max_line_length} characters"
            )

        tokens = line.split()
        if not tokens:
            raise ExpressionError("empty expression")

        stack = OperandStack()
        for count, token in enumerate(tokens, start=1):
            if token == QUIT_TOKEN:
                logger.info("quit requested", extra={"line": line})
                return EvaluationResult(value=None, quit_requested=True, tokens_evaluated=count)
            self._apply(token, stack)

        if len(stack) != 1:
            raise ExpressionError(
                f"expression must leave exactly one value, got {len(stack)}"
            )

        value = stack.pop()
        self._last_result.replace(value)
        logger.debug("evaluated expression", extra={"line": line})
        return EvaluationResult(value=value, quit_requested=False, tokens_evaluated=len(tokens))

    def _apply(self, token: str, stack: OperandStack) -> None:
        binary = BINARY_OPERATORS.get(token)
        if binary is not None:
            # Порядок важен: правый операнд снимается первым
            left, right = stack.pop_pair(token)
            stack.push(binary(left, right))
            return

        unary = UNARY_OPERATORS.get(token)
        if unary is not None:
            stack.push(unary(stack.pop(token)))
            return

        if token == LAST_RESULT_TOKEN:
            stack.push(self.last_result)
            return

        stack.push(Fraction.parse(token))
