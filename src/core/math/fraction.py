"""
Fraction — несократимая дробь над BigInt

Представление: (numerator, denominator), оба BigInt.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator > 0 (знак целиком в числителе)
2. gcd(|numerator|, denominator) == 1
3. Ноль: 0/1 со знаком +1
4. Каждая операция принимает несократимые дроби и возвращает новую несократимую дробь

Сокращение выполняется до умножения (перекрёстные GCD), чтобы промежуточные
значения оставались как можно меньше.
"""

import logging
from typing import Callable

from src.core.math import bigint
from src.core.math.bigint import BigInt
from src.core.math.errors import NumberParseError, ZeroDivisorViolation, fail

logger = logging.getLogger(__name__)

FractionOperation = Callable[["Fraction", "Fraction"], "Fraction"]


# =============================================================================
# FRACTION
# =============================================================================


class Fraction:
    """Рациональное число в несократимой форме."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: BigInt, denominator: BigInt):
        reduced = create(numerator, denominator)
        self._numerator = reduced._numerator
        self._denominator = reduced._denominator

    @classmethod
    def _from_reduced(cls, numerator: BigInt, denominator: BigInt) -> "Fraction":
        result = cls.__new__(cls)
        result._numerator = numerator
        result._denominator = denominator
        return result

    @classmethod
    def create(cls, numerator: BigInt, denominator: BigInt) -> "Fraction":
        return create(numerator, denominator)

    @classmethod
    def from_strings(cls, numerator: str, denominator: str) -> "Fraction":
        """
        Дробь из двух десятичных строк.

        Raises:
            NumberParseError: Некорректная строка или нулевой знаменатель
        """
        n = BigInt.from_decimal_string(numerator)
        d = BigInt.from_decimal_string(denominator)
        if d.is_zero():
            raise NumberParseError(f"zero denominator in {numerator}/{denominator}")
        return create(n, d)

    @classmethod
    def parse(cls, text: str) -> "Fraction":
        """
        Литерал "p" или "p/q" (p может быть со знаком '-', q — без знака).

        Examples:
            >>> str(Fraction.parse("-3/6"))
            '-1/2'
        """
        if not isinstance(text, str):
            raise NumberParseError(f"fraction literal expected, got {type(text).__name__}")

        parts = text.split("/")
        if len(parts) == 1:
            return cls.from_strings(parts[0], "1")
        if len(parts) == 2:
            if parts[1].startswith("-"):
                raise NumberParseError(f"denominator must be unsigned: {text!r}")
            return cls.from_strings(parts[0], parts[1])
        raise NumberParseError(f"malformed fraction literal: {text!r}")

    @classmethod
    def from_int(cls, value: int) -> "Fraction":
        return cls._from_reduced(BigInt.from_int(value), BigInt(1))

    @classmethod
    def zero(cls) -> "Fraction":
        return cls._from_reduced(BigInt(0), BigInt(1))

    @classmethod
    def one(cls) -> "Fraction":
        return cls._from_reduced(BigInt(1), BigInt(1))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def numerator(self) -> BigInt:
        return self._numerator

    @property
    def denominator(self) -> BigInt:
        return self._denominator

    def is_zero(self) -> bool:
        return self._numerator.is_zero()

    def is_integer(self) -> bool:
        return _is_one(self._denominator)

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        # Несократимая форма единственна
        return self._numerator == other._numerator and self._denominator == other._denominator

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    def __lt__(self, other: "Fraction") -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: "Fraction") -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: "Fraction") -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: "Fraction") -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return compare(self, other) >= 0

    def __add__(self, other: "Fraction") -> "Fraction":
        if not isinstance(other, Fraction):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: "Fraction") -> "Fraction":
        if not isinstance(other, Fraction):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: "Fraction") -> "Fraction":
        if not isinstance(other, Fraction):
            return NotImplemented
        return multiply(self, other)

    def __truediv__(self, other: "Fraction") -> "Fraction":
        if not isinstance(other, Fraction):
            return NotImplemented
        return divide(self, other)

    def __pow__(self, other: "Fraction") -> "Fraction":
        if not isinstance(other, Fraction):
            return NotImplemented
        return exponent(self, other)

    def __neg__(self) -> "Fraction":
        return negate(self)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return f"Fraction({to_string(self)!r})"


# =============================================================================
# VALIDATION
# =============================================================================


def validate(x: Fraction) -> None:
    """
    Проверка инвариантов знаменателя и знака.

    Несократимость проверяется отдельно (check_reduced): она требует GCD.
    """
    if not isinstance(x, Fraction):
        fail(f"Fraction expected, got {type(x).__name__}")
    bigint.validate(x._numerator)
    bigint.validate(x._denominator)
    if x._denominator.is_zero():
        fail("Fraction denominator must be nonzero")
    if x._denominator.sign != 1:
        fail("Fraction sign must live on the numerator")


def check_reduced(x: Fraction) -> None:
    """
    Полная проверка: validate + gcd(|n|, d) == 1.

    Raises:
        InvariantViolation: Дробь не в несократимой форме
    """
    validate(x)
    if not _is_one(bigint.gcd(x._numerator, x._denominator)):
        fail(f"Fraction {to_string(x)} is not in lowest terms")


def _is_one(x: BigInt) -> bool:
    return x.used == 1 and x.sign == 1 and x.blocks[0] == 1


def _exact_divide(x: BigInt, y: BigInt) -> BigInt:
    quotient, remainder = bigint.divide(x, y)
    if not remainder.is_zero():
        fail(f"division of {x} by {y} expected to be exact")
    return quotient


def _normalised(numerator: BigInt, denominator: BigInt) -> Fraction:
    # Знак переносится в числитель; ноль всегда положительный
    if denominator.sign < 0:
        numerator = bigint.negate(numerator)
        denominator = bigint.absolute(denominator)
    if numerator.is_zero():
        return Fraction.zero()
    return Fraction._from_reduced(numerator, denominator)


# =============================================================================
# CONSTRUCTION
# =============================================================================


def create(numerator: BigInt, denominator: BigInt) -> Fraction:
    """
    Дробь n/d, сокращённая через gcd(n, d).

    Examples:
        >>> str(create(BigInt(479001600), BigInt(1048576)))
        '467775/1024'

    Raises:
        ZeroDivisorViolation: d == 0
    """
    bigint.validate(numerator)
    bigint.validate(denominator)
    if denominator.is_zero():
        fail("Fraction denominator must be nonzero", ZeroDivisorViolation)

    g = bigint.gcd(numerator, denominator)
    return _normalised(_exact_divide(numerator, g), _exact_divide(denominator, g))


def negate(x: Fraction) -> Fraction:
    validate(x)
    return Fraction._from_reduced(bigint.negate(x._numerator), x._denominator)


def invert(x: Fraction) -> Fraction:
    """
    1/x: числитель и знаменатель меняются местами, знак переносится в числитель.

    Raises:
        ZeroDivisorViolation: x == 0
    """
    validate(x)
    if x.is_zero():
        fail("cannot invert a zero fraction", ZeroDivisorViolation)
    return _normalised(x._denominator, x._numerator)


# =============================================================================
# ARITHMETIC
# =============================================================================


def add(x: Fraction, y: Fraction) -> Fraction:
    """
    Сложение через g = gcd(dx, dy):

        t = nx * (dy/g) + ny * (dx/g)
        g2 = gcd(t, g)
        result = (t/g2) / ((dx/g) * (dy/g2))
    """
    validate(x)
    validate(y)

    g = bigint.gcd(x._denominator, y._denominator)
    dx = _exact_divide(x._denominator, g)
    dy = _exact_divide(y._denominator, g)

    t = bigint.add(bigint.multiply(x._numerator, dy), bigint.multiply(y._numerator, dx))
    if t.is_zero():
        return Fraction.zero()

    g2 = bigint.gcd(t, g)
    numerator = _exact_divide(t, g2)
    denominator = bigint.multiply(dx, _exact_divide(y._denominator, g2))
    return _normalised(numerator, denominator)


def subtract(x: Fraction, y: Fraction) -> Fraction:
    return add(x, negate(y))


def multiply(x: Fraction, y: Fraction) -> Fraction:
    """
    Умножение с предварительным перекрёстным сокращением:

        a = gcd(nx, dy), b = gcd(dx, ny)
        result = ((nx/a) * (ny/b)) / ((dx/b) * (dy/a))
    """
    validate(x)
    validate(y)

    if x.is_zero() or y.is_zero():
        return Fraction.zero()

    a = bigint.gcd(x._numerator, y._denominator)
    b = bigint.gcd(x._denominator, y._numerator)

    numerator = bigint.multiply(_exact_divide(x._numerator, a), _exact_divide(y._numerator, b))
    denominator = bigint.multiply(_exact_divide(x._denominator, b), _exact_divide(y._denominator, a))
    return _normalised(numerator, denominator)


def divide(x: Fraction, y: Fraction) -> Fraction:
    return multiply(x, invert(y))


def exponent(base: Fraction, power: Fraction) -> Fraction:
    """
    Возведение в неотрицательную целую степень (бинарное возведение).

    Младший бит показателя извлекается делением на 2; при бите 1 аккумулятор
    умножается на текущую степень основания, основание возводится в квадрат.

    Raises:
        InvariantViolation: power не является неотрицательным целым
    """
    validate(base)
    validate(power)
    if not power.is_integer() or power._numerator.sign != 1:
        fail(f"exponent must be a nonnegative integer, got {to_string(power)}")

    result = Fraction.one()
    square = base
    remaining = power._numerator
    while not remaining.is_zero():
        remaining, bit = bigint.divide_by_block(remaining, 2)
        if bit:
            result = multiply(result, square)
        if not remaining.is_zero():
            square = multiply(square, square)
    return result


def factorial(x: Fraction) -> Fraction:
    """
    n! для малого неотрицательного целого n (один блок, знаменатель 1).

    Raises:
        InvariantViolation: x не является неотрицательным целым < 2^32
    """
    validate(x)
    n = x._numerator
    if not x.is_integer() or n.sign != 1 or n.used != 1:
        fail(f"factorial requires a nonnegative integer below 2^32, got {to_string(x)}")

    product = BigInt(1)
    for k in range(2, n.blocks[0] + 1):
        product = bigint.multiply(product, BigInt(k))
    return Fraction._from_reduced(product, BigInt(1))


def combine(x: Fraction, y: Fraction, operation: FractionOperation) -> Fraction:
    """
    Поточечное объединение двух дробей произвольной бинарной операцией.

    Используется полиномами для покоэффициентного сложения/вычитания.
    Результат операции обязан быть несократимой дробью.
    """
    validate(x)
    validate(y)
    result = operation(x, y)
    validate(result)
    return result


# =============================================================================
# COMPARISON & RENDERING
# =============================================================================


def compare(x: Fraction, y: Fraction) -> int:
    """Сравнение nx*dy с ny*dx (знаменатели положительны)."""
    validate(x)
    validate(y)
    return bigint.compare(
        bigint.multiply(x._numerator, y._denominator),
        bigint.multiply(y._numerator, x._denominator),
    )


def to_string(x: Fraction) -> str:
    """Формат numerator/denominator, например "-3/5" или "120/1"."""
    validate(x)
    return f"{bigint.to_decimal_string(x._numerator)}/{bigint.to_decimal_string(x._denominator)}"
