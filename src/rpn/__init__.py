"""RPN — интерактивный калькулятор постфиксных выражений над точными дробями.

- Стек операндов (list-based)
- Память последнего результата (%)
- Конфигурация через EvaluatorConfig
"""

from .config import EvaluatorConfig
from .evaluator import EvaluationResult, RPNEvaluator
from .stack import ExpressionError, OperandStack, StackUnderflowError

__all__ = [
    "EvaluatorConfig",
    "EvaluationResult",
    "RPNEvaluator",
    "ExpressionError",
    "OperandStack",
    "StackUnderflowError",
]
