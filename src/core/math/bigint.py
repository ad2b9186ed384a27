"""
BigInt — целое число произвольной точности

Представление sign-magnitude:
- sign: +1 или -1
- magnitude: BlockVector беззнаковых 32-битных блоков, младший блок первым

Модуль реализует:
- Построение из малого беззнакового значения и из десятичной строки
- Сравнение (по модулю и со знаком)
- Сложение/вычитание с переносом и заёмом по блокам
- Умножение (школьная свёртка)
- Деление на один блок и полное деление (normalize/estimate/correct, Knuth D)
- GCD (алгоритм Евклида) и десятичное представление

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sign ∈ {+1, -1}
2. used >= 1, старший используемый блок ненулевой (кроме нуля)
3. Ноль: ровно один блок со значением 0 и sign = +1
4. Операции никогда не изменяют аргументы: результат всегда новый BigInt
5. Нарушение инварианта → InvariantViolation (фатально)

СЕМАНТИКА ДЕЛЕНИЯ:
    divide(x, y) → (q, r) с округлением частного вниз (floor):
    x == q * y + r,  |r| < |y|,  знак r совпадает со знаком y (если r != 0)
"""

import logging
from typing import Final, NamedTuple

from src.core.math.blocks import (
    BLOCK_BASE,
    BLOCK_BITS,
    BLOCK_MASK,
    HALF_BLOCK_BASE,
    BlockVector,
)
from src.core.math.errors import NumberParseError, ZeroDivisorViolation, fail

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Десятичная конверсия идёт порциями по 9 цифр: 10^9 < 2^32 помещается в один блок
DECIMAL_CHUNK_DIGITS: Final[int] = 9
DECIMAL_CHUNK_BASE: Final[int] = 10**DECIMAL_CHUNK_DIGITS

# После нормализации пробная цифра частного превышает истинную не более чем на 2
MAX_DIVISION_CORRECTIONS: Final[int] = 2

_DECIMAL_DIGITS: Final[frozenset] = frozenset("0123456789")


# =============================================================================
# BIGINT
# =============================================================================


class BigInt:
    """
    Знаковое целое произвольной длины.

    Экземпляры неизменяемы снаружи: все операции возвращают новый объект.
    """

    __slots__ = ("_sign", "_blocks")

    def __init__(self, value: int = 0):
        if isinstance(value, bool) or not isinstance(value, int):
            fail(f"BigInt block value must be int, got {type(value).__name__}")
        if not 0 <= value <= BLOCK_MASK:
            fail(f"BigInt block value must be in [0, 2^32), got {value}")
        self._sign = 1
        self._blocks = BlockVector(1)
        self._blocks[0] = value

    @classmethod
    def _from_vector(cls, sign: int, blocks: BlockVector) -> "BigInt":
        """Принять владение готовым вектором блоков (move)."""
        result = cls.__new__(cls)
        result._sign = sign
        result._blocks = blocks
        validate(result)
        return result

    @classmethod
    def from_decimal_string(cls, text: str) -> "BigInt":
        """
        Разбор десятичной строки с необязательным ведущим '-'.

        Args:
            text: Строка вида "123", "-45", "007"

        Returns:
            BigInt со значением строки ("-0" → 0 со знаком +1)

        Raises:
            NumberParseError: Пустая строка, одиночный '-', любые символы кроме 0-9

        Examples:
            >>> str(BigInt.from_decimal_string("-18446744073709551616"))
            '-18446744073709551616'
        """
        if not isinstance(text, str):
            raise NumberParseError(f"decimal string expected, got {type(text).__name__}")

        negative = text.startswith("-")
        digits = text[1:] if negative else text
        if not digits or any(ch not in _DECIMAL_DIGITS for ch in digits):
            raise NumberParseError(f"malformed decimal string: {text!r}")

        blocks = BlockVector(max(1, len(digits) // DECIMAL_CHUNK_DIGITS))
        head = len(digits) % DECIMAL_CHUNK_DIGITS or DECIMAL_CHUNK_DIGITS
        _multiply_add_small(blocks, DECIMAL_CHUNK_BASE, int(digits[:head]))
        for start in range(head, len(digits), DECIMAL_CHUNK_DIGITS):
            chunk = digits[start : start + DECIMAL_CHUNK_DIGITS]
            _multiply_add_small(blocks, DECIMAL_CHUNK_BASE, int(chunk))
        blocks.trim()

        is_zero_value = blocks.used == 1 and blocks.get(0) == 0
        sign = -1 if negative and not is_zero_value else 1
        return cls._from_vector(sign, blocks)

    @classmethod
    def from_int(cls, value: int) -> "BigInt":
        """Конверсия из встроенного int (разбиение на блоки по 32 бита)."""
        if isinstance(value, bool) or not isinstance(value, int):
            fail(f"int expected, got {type(value).__name__}")
        sign = -1 if value < 0 else 1
        magnitude = -value if value < 0 else value
        blocks = []
        while True:
            blocks.append(magnitude & BLOCK_MASK)
            magnitude >>= BLOCK_BITS
            if not magnitude:
                break
        return cls._from_vector(sign, BlockVector.from_blocks(blocks))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        return self._sign

    @property
    def blocks(self) -> tuple[int, ...]:
        """Используемые блоки, младший первым."""
        return self._blocks.to_tuple()

    @property
    def used(self) -> int:
        return self._blocks.used

    @property
    def capacity(self) -> int:
        return self._blocks.capacity

    def is_zero(self) -> bool:
        return self._blocks.used == 1 and self._blocks.get(0) == 0

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self._sign == other._sign and self.blocks == other.blocks

    def __hash__(self) -> int:
        return hash((self._sign, self.blocks))

    def __lt__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) >= 0

    def __add__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return multiply(self, other)

    def __floordiv__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other).quotient

    def __mod__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other).remainder

    def __divmod__(self, other: "BigInt") -> "DivisionResult":
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other)

    def __neg__(self) -> "BigInt":
        return negate(self)

    def __abs__(self) -> "BigInt":
        return absolute(self)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        value = 0
        for block in reversed(self.blocks):
            value = (value << BLOCK_BITS) | block
        return self._sign * value

    def __str__(self) -> str:
        return to_decimal_string(self)

    def __repr__(self) -> str:
        return f"BigInt(sign={self._sign}, blocks={list(self.blocks)})"


class DivisionResult(NamedTuple):
    """Результат полного деления: частное и остаток (оба BigInt)."""

    quotient: BigInt
    remainder: BigInt


class BlockDivisionResult(NamedTuple):
    """Результат деления на один блок: частное BigInt и остаток-цифра."""

    quotient: BigInt
    remainder: int


# =============================================================================
# VALIDATION
# =============================================================================


def validate(x: BigInt) -> None:
    """
    Проверка инвариантов BigInt.

    Raises:
        InvariantViolation: При любом нарушении (фатально)
    """
    if not isinstance(x, BigInt):
        fail(f"BigInt expected, got {type(x).__name__}")

    if x._sign != 1 and x._sign != -1:
        fail("BigInt must have sign 1 or -1")

    blocks = x._blocks
    if blocks.used < 1:
        fail("BigInt must use at least one block (even if zero)")

    if blocks.used > 1 and blocks.top() == 0:
        fail("BigInt cannot have trailing zero blocks (except 0, which has exactly one)")

    if blocks.used == 1 and blocks.get(0) == 0 and x._sign == -1:
        fail("Zero must have positive sign")


# =============================================================================
# SIGN & COPY
# =============================================================================


def copy(x: BigInt) -> BigInt:
    validate(x)
    return BigInt._from_vector(x._sign, x._blocks.copy())


def negate(x: BigInt) -> BigInt:
    """Смена знака; ноль остаётся положительным."""
    validate(x)
    sign = 1 if x.is_zero() else -x._sign
    return BigInt._from_vector(sign, x._blocks.copy())


def absolute(x: BigInt) -> BigInt:
    validate(x)
    return BigInt._from_vector(1, x._blocks.copy())


def _with_sign(x: BigInt, sign: int) -> BigInt:
    # Переносит владение блоками x: допустимо только для промежуточных значений
    return BigInt._from_vector(1 if x.is_zero() else sign, x._blocks)


def _zero() -> BigInt:
    return BigInt(0)


# =============================================================================
# COMPARISON
# =============================================================================


def compare_absolute(x: BigInt, y: BigInt) -> int:
    """
    Сравнение по модулю: -1, 0 или 1.

    Сканирование от старшего блока к младшему по большей из двух длин;
    первая позиция с различными блоками определяет результат.
    """
    validate(x)
    validate(y)

    a = x._blocks
    b = y._blocks
    for i in range(max(a.used, b.used) - 1, -1, -1):
        left = a.get(i)
        right = b.get(i)
        if left != right:
            return 1 if left > right else -1
    return 0


def compare(x: BigInt, y: BigInt) -> int:
    """
    Сравнение со знаком: -1, 0 или 1.

    Сначала знак, затем модуль; для двух отрицательных результат инвертируется.
    """
    validate(x)
    validate(y)

    if x._sign != y._sign:
        return 1 if x._sign > y._sign else -1

    return x._sign * compare_absolute(x, y)


# =============================================================================
# ADDITION & SUBTRACTION
# =============================================================================


def add(x: BigInt, y: BigInt) -> BigInt:
    """
    Сложение.

    Одинаковые знаки: поблочное сложение с переносом.
    Разные знаки: из большего модуля вычитается меньший, знак — у большего.

    Examples:
        >>> add(BigInt(4294967295), BigInt(4294967295)).blocks
        (4294967294, 1)
    """
    validate(x)
    validate(y)

    if x._sign == y._sign:
        return BigInt._from_vector(x._sign, _add_magnitudes(x._blocks, y._blocks))

    cmp = compare_absolute(x, y)
    if cmp == 0:
        return _zero()

    larger, smaller = (x, y) if cmp > 0 else (y, x)
    return BigInt._from_vector(larger._sign, _subtract_magnitudes(larger._blocks, smaller._blocks))


def subtract(x: BigInt, y: BigInt) -> BigInt:
    """x - y == add(x, -y); знак y снаружи не меняется."""
    validate(y)
    flipped = BigInt._from_vector(1 if y.is_zero() else -y._sign, y._blocks)
    return add(x, flipped)


def _add_magnitudes(a: BlockVector, b: BlockVector) -> BlockVector:
    n = max(a.used, b.used)
    out = BlockVector(n)
    out.ensure_used(n)

    carry = 0
    for i in range(n):
        total = a.get(i) + b.get(i) + carry
        out[i] = total & BLOCK_MASK
        carry = total >> BLOCK_BITS

    if carry:
        out.append(1)
    return out


def _subtract_magnitudes(larger: BlockVector, smaller: BlockVector) -> BlockVector:
    # Записываются только ненулевые позиции: хвостовых нулей в результате нет
    out = BlockVector(larger.used)

    borrow = 0
    for i in range(larger.used):
        diff = larger[i] - smaller.get(i) - borrow
        if diff < 0:
            diff += BLOCK_BASE
            borrow = 1
        else:
            borrow = 0
        if diff:
            out.ensure_used(i + 1)
            out[i] = diff

    if borrow:
        fail("magnitude subtraction underflow: minuend smaller than subtrahend")
    return out


# =============================================================================
# MULTIPLICATION
# =============================================================================


def multiply(x: BigInt, y: BigInt) -> BigInt:
    """
    Умножение школьной свёрткой.

    Для каждой пары блоков (i, j) 64-битное произведение добавляется в позицию
    i+j, перенос (старшие 32 бита + переполнение сложения) идёт дальше.
    Длина результата наращивается по требованию.
    """
    validate(x)
    validate(y)

    if x.is_zero() or y.is_zero():
        return _zero()

    a = x.blocks
    b = y.blocks
    out = BlockVector(len(a) + len(b))

    for i, left in enumerate(a):
        carry = 0
        for j, right in enumerate(b):
            product = left * right
            k = i + j
            out.ensure_used(k + 1)
            total = out[k] + (product & BLOCK_MASK) + carry
            out[k] = total & BLOCK_MASK
            carry = (product >> BLOCK_BITS) + (total >> BLOCK_BITS)

        k = i + len(b)
        while carry:
            out.ensure_used(k + 1)
            total = out[k] + carry
            out[k] = total & BLOCK_MASK
            carry = total >> BLOCK_BITS
            k += 1

    out.trim()
    return BigInt._from_vector(x._sign * y._sign, out)


def _multiply_add_small(blocks: BlockVector, factor: int, addend: int) -> None:
    """blocks = blocks * factor + addend (на месте; factor, addend < 2^32)."""
    carry = addend
    for i in range(blocks.used):
        total = blocks[i] * factor + carry
        blocks[i] = total & BLOCK_MASK
        carry = total >> BLOCK_BITS
    if carry:
        blocks.append(carry)


# =============================================================================
# BLOCK SHIFTS
# =============================================================================


def shift_left(x: BigInt, places: int) -> BigInt:
    """Умножение на 2^(32*places)."""
    validate(x)
    if places < 0:
        fail(f"shift places must be non-negative, got {places}")
    if x.is_zero() or places == 0:
        return copy(x)

    out = BlockVector(x.used + places)
    out.ensure_used(x.used + places)
    for i, block in enumerate(x.blocks):
        out[i + places] = block
    return BigInt._from_vector(x._sign, out)


def shift_right(x: BigInt, places: int) -> BigInt:
    """Отбрасывание places младших блоков (деление модуля на 2^(32*places))."""
    validate(x)
    if places < 0:
        fail(f"shift places must be non-negative, got {places}")
    if places >= x.used:
        return _zero()

    out = BlockVector.from_blocks(x.blocks[places:])
    return BigInt._from_vector(x._sign, out)


# =============================================================================
# DIVISION
# =============================================================================


def divide_by_block(x: BigInt, divisor: int) -> BlockDivisionResult:
    """
    Деление на один ненулевой блок.

    Блоки обрабатываются от старшего к младшему с окном
    remainder * 2^32 + block. Частное несёт знак x (усечение),
    остаток — остаток от деления |x|.

    Raises:
        ZeroDivisorViolation: divisor == 0
        InvariantViolation: divisor вне [1, 2^32)
    """
    validate(x)
    if divisor == 0:
        fail("division by zero block", ZeroDivisorViolation)
    if not 0 < divisor <= BLOCK_MASK:
        fail(f"block divisor must be in [1, 2^32), got {divisor}")

    quotient = BlockVector(x.used)
    quotient.ensure_used(x.used)

    remainder = 0
    for i in range(x.used - 1, -1, -1):
        window = (remainder << BLOCK_BITS) | x._blocks[i]
        digit, remainder = divmod(window, divisor)
        quotient[i] = digit

    quotient.trim()
    result = BigInt._from_vector(1, quotient)
    return BlockDivisionResult(_with_sign(result, x._sign), remainder)


def divide(x: BigInt, y: BigInt) -> DivisionResult:
    """
    Полное деление с остатком (Knuth D: normalize / estimate / correct).

    1. Нормализация: множитель d, чтобы старший блок |y|*d был >= 2^31
    2. Деление модулей |x|*d на |y|*d скользящим окном по одному блоку частного
    3. Отрицательное частное с ненулевым остатком: частное на единицу дальше
       от нуля, остаток отражается (|y|*d - r)
    4. Снятие нормализации: остаток делится на d, деление обязано быть точным

    Returns:
        DivisionResult(quotient, remainder): x == q*y + r, |r| < |y|

    Raises:
        ZeroDivisorViolation: y == 0

    Examples:
        >>> q, r = divide(BigInt.from_int(-7), BigInt(2))
        >>> int(q), int(r)
        (-4, 1)
    """
    validate(x)
    validate(y)
    if y.is_zero():
        fail("division by zero", ZeroDivisorViolation)

    quotient_sign = x._sign * y._sign

    top = y._blocks.top()
    factor = 1 if top >= HALF_BLOCK_BASE else BLOCK_BASE // (top + 1)
    scale = BigInt(factor)

    dividend = multiply(absolute(x), scale)
    divisor = multiply(absolute(y), scale)
    if divisor.used != y.used:
        fail("normalisation changed the divisor length")

    quotient, remainder = _long_divide(dividend, divisor)

    if quotient_sign < 0 and not remainder.is_zero():
        remainder = subtract(divisor, remainder)
        quotient = add(quotient, BigInt(1))

    remainder, leftover = divide_by_block(remainder, factor)
    if leftover != 0:
        fail(f"normalisation factor {factor} left remainder {leftover}")

    return DivisionResult(_with_sign(quotient, quotient_sign), _with_sign(remainder, y._sign))


def _long_divide(dividend: BigInt, divisor: BigInt) -> tuple[BigInt, BigInt]:
    """Деление неотрицательных модулей; старший блок divisor >= 2^31."""
    n = divisor.used
    m = dividend.used - n
    if m < 0:
        return _zero(), dividend

    divisor_top = divisor._blocks.top()
    window = shift_right(dividend, m)
    quotient = BlockVector(m + 1)

    for j in range(m, -1, -1):
        # Оценка по двум старшим блокам окна: trial - 2 <= q <= trial
        high = window._blocks.get(n)
        low = window._blocks.get(n - 1)
        trial = min(((high << BLOCK_BITS) | low) // divisor_top, BLOCK_MASK)

        product = multiply(divisor, BigInt(trial))
        corrections = 0
        while compare_absolute(product, window) > 0:
            corrections += 1
            if corrections > MAX_DIVISION_CORRECTIONS:
                fail(
                    f"quotient digit estimate needed more than "
                    f"{MAX_DIVISION_CORRECTIONS} corrections"
                )
            trial -= 1
            product = subtract(product, divisor)

        window = subtract(window, product)
        if j > 0:
            window = add(shift_left(window, 1), BigInt(dividend._blocks[j - 1]))

        if trial:
            quotient.ensure_used(j + 1)
            quotient[j] = trial

    return BigInt._from_vector(1, quotient), window


# =============================================================================
# GCD
# =============================================================================


def gcd(x: BigInt, y: BigInt) -> BigInt:
    """
    Наибольший общий делитель (Евклид на модулях).

    gcd(a, 0) == |a|. gcd(0, 0) не определён.

    Raises:
        InvariantViolation: x == 0 и y == 0
    """
    validate(x)
    validate(y)
    if x.is_zero() and y.is_zero():
        fail("gcd(0, 0) is undefined")

    u = absolute(x)
    v = absolute(y)
    while not v.is_zero():
        u, v = v, divide(u, v).remainder
    return u


# =============================================================================
# RENDERING
# =============================================================================


def to_decimal_string(x: BigInt) -> str:
    """
    Десятичная запись: '-' для отрицательных, "0" для нуля.

    Повторное деление на 10^9 собирает порции цифр от младших к старшим.
    """
    validate(x)
    if x.is_zero():
        return "0"

    chunks = []
    current = absolute(x)
    while not current.is_zero():
        current, chunk = divide_by_block(current, DECIMAL_CHUNK_BASE)
        chunks.append(chunk)

    digits = str(chunks[-1]) + "".join(
        str(chunk).rjust(DECIMAL_CHUNK_DIGITS, "0") for chunk in reversed(chunks[:-1])
    )
    return "-" + digits if x._sign < 0 else digits


def to_block_string(x: BigInt) -> str:
    """Сырые блоки младшим первым, например "- 4294967294 1"."""
    validate(x)
    text = " ".join(str(block) for block in x.blocks)
    return "- " + text if x._sign < 0 else text
