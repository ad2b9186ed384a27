"""
Binding — изменяемая привязка переменной с семантикой перемещения

replace() устанавливает новое значение и освобождает старое: у значения
всегда один владелец, ссылки на старое значение привязка не сохраняет.
"""

from typing import Generic, Optional, TypeVar

from src.core.math.errors import fail

T = TypeVar("T")


class Binding(Generic[T]):
    """Единственный владелец одного значения."""

    __slots__ = ("_value", "_name")

    def __init__(self, value: Optional[T] = None, name: str = "value"):
        self._value = value
        self._name = name

    @property
    def value(self) -> T:
        if self._value is None:
            fail(f"binding '{self._name}' is empty")
        return self._value

    def is_empty(self) -> bool:
        return self._value is None

    def replace(self, new_value: T) -> None:
        """Установить new_value вместо текущего значения (старое освобождается)."""
        if new_value is None:
            fail(f"cannot bind None to '{self._name}'")
        self._value = new_value

    def take(self) -> T:
        """Забрать значение, оставив привязку пустой."""
        value = self.value
        self._value = None
        return value

    def __repr__(self) -> str:
        return f"Binding({self._name}={self._value!r})"
