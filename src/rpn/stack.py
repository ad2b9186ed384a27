"""
OperandStack — стек операндов RPN калькулятора

Обычный список в роли стека: снятое значение сразу потребляется оператором.
"""

from typing import List

from src.core.math.fraction import Fraction


class ExpressionError(ValueError):
    """Некорректное постфиксное выражение (сообщается пользователю)."""
    pass


class StackUnderflowError(ExpressionError):
    """Оператору не хватило операндов."""
    pass


class OperandStack:
    """LIFO стек дробей."""

    def __init__(self):
        self._items: List[Fraction] = []

    def push(self, value: Fraction) -> None:
        self._items.append(value)

    def pop(self, token: str = "") -> Fraction:
        """
        Снять верхний операнд.

        Raises:
            StackUnderflowError: Стек пуст
        """
        if not self._items:
            where = f" for '{token}'" if token else ""
            raise StackUnderflowError(f"stack underflow: missing operand{where}")
        return self._items.pop()

    def pop_pair(self, token: str = "") -> tuple[Fraction, Fraction]:
        """Снять два операнда в порядке записи: (левый, правый)."""
        right = self.pop(token)
        left = self.pop(token)
        return left, right

    def peek(self) -> Fraction:
        if not self._items:
            raise StackUnderflowError("stack underflow: stack is empty")
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OperandStack({[str(item) for item in self._items]})"
