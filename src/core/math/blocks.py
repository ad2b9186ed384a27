"""
BlockVector — растущий массив 32-битных блоков

Хранилище модуля (magnitude) BigInt: позиционная запись по основанию 2^32,
младший блок первым. Ёмкость (capacity) и логическая длина (used) — разные
понятия: ёмкость удваивается, пока не покроет запрошенную длину.

ИНВАРИАНТЫ:
1. 1 <= used <= capacity
2. Каждый блок в диапазоне [0, 2^32)
3. Позиции [used, capacity) всегда нулевые
"""

from typing import Final, Iterable

from src.core.math.errors import fail

# =============================================================================
# BLOCK CONSTANTS
# =============================================================================

BLOCK_BITS: Final[int] = 32
BLOCK_BASE: Final[int] = 1 << BLOCK_BITS
BLOCK_MASK: Final[int] = BLOCK_BASE - 1
HALF_BLOCK_BASE: Final[int] = 1 << (BLOCK_BITS - 1)


class BlockVector:
    """Growable vector of unsigned 32-bit blocks with amortised doubling."""

    __slots__ = ("_data", "_used")

    def __init__(self, capacity: int = 1):
        if capacity < 1:
            fail(f"BlockVector capacity must be >= 1, got {capacity}")
        self._data = [0] * capacity
        self._used = 1

    @classmethod
    def from_blocks(cls, blocks: Iterable[int]) -> "BlockVector":
        """
        Построить вектор из последовательности блоков (младший первым).

        Хвостовые нули не удаляются: используйте trim() при необходимости.
        """
        items = list(blocks)
        if not items:
            items = [0]
        for block in items:
            _check_block(block)
        vector = cls(len(items))
        vector._data[:] = items
        vector._used = len(items)
        return vector

    @property
    def used(self) -> int:
        return self._used

    @property
    def capacity(self) -> int:
        return len(self._data)

    def ensure_used(self, n: int) -> None:
        """
        Гарантировать логическую длину не меньше n.

        Ёмкость удваивается, пока не станет >= n; новые позиции между
        старым used и n уже нулевые (хвост буфера всегда обнулён).
        """
        if n <= self._used:
            return
        capacity = len(self._data)
        if capacity < n:
            while capacity < n:
                capacity *= 2
            self._data.extend([0] * (capacity - len(self._data)))
        self._used = n

    def get(self, index: int) -> int:
        """Блок на позиции index; 0 за пределами used."""
        if index < self._used:
            return self._data[index]
        return 0

    def top(self) -> int:
        """Старший используемый блок."""
        return self._data[self._used - 1]

    def append(self, block: int) -> None:
        _check_block(block)
        position = self._used
        self.ensure_used(position + 1)
        self._data[position] = block

    def trim(self) -> None:
        """Отбросить старшие нулевые блоки, оставив минимум один."""
        used = self._used
        while used > 1 and self._data[used - 1] == 0:
            used -= 1
        self._used = used

    def copy(self) -> "BlockVector":
        clone = BlockVector(len(self._data))
        clone._data[:] = self._data
        clone._used = self._used
        return clone

    def to_tuple(self) -> tuple[int, ...]:
        return tuple(self._data[: self._used])

    def __len__(self) -> int:
        return self._used

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self._used:
            raise IndexError(f"block index {index} out of range (used={self._used})")
        return self._data[index]

    def __setitem__(self, index: int, block: int) -> None:
        if not 0 <= index < self._used:
            raise IndexError(f"block index {index} out of range (used={self._used})")
        _check_block(block)
        self._data[index] = block

    def __iter__(self):
        return iter(self._data[: self._used])

    def __repr__(self) -> str:
        return f"BlockVector(used={self._used}, capacity={len(self._data)}, blocks={list(self)})"


def _check_block(block: int) -> None:
    if not 0 <= block <= BLOCK_MASK:
        fail(f"block value {block} outside [0, 2^32)")
