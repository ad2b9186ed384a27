"""
Polynomial — полином с рациональными коэффициентами

Immutable Pydantic модель: коэффициенты хранятся по возрастанию степени
(индекс = степень переменной). Старшие нулевые коэффициенты отбрасываются,
нулевой полином — ровно один коэффициент 0/1.

Все арифметические операции создают новый экземпляр.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.math import fraction
from src.core.math.errors import NumberParseError
from src.core.math.fraction import Fraction, FractionOperation


def _zero_coefficients() -> tuple[Fraction, ...]:
    return (Fraction.zero(),)


def _ensure_length(coefficients: list, length: int) -> None:
    """Дорастить список коэффициентов нулями до длины length."""
    while len(coefficients) < length:
        coefficients.append(Fraction.zero())


# =============================================================================
# POLYNOMIAL MODEL
# =============================================================================


class Polynomial(BaseModel):
    """
    Полином c_0 + c_1*x + ... + c_n*x^n.

    Immutable модель (frozen=True): add/subtract/multiply возвращают новый полином.
    """

    coefficients: tuple[Fraction, ...] = Field(
        default_factory=_zero_coefficients,
        description="Коэффициенты по возрастанию степени",
    )

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("coefficients")
    @classmethod
    def trim_high_zeros(cls, v: tuple[Fraction, ...]) -> tuple[Fraction, ...]:
        """Отбросить старшие нулевые коэффициенты (минимум один остаётся)."""
        end = len(v)
        while end > 1 and v[end - 1].is_zero():
            end -= 1
        if end == 0:
            return _zero_coefficients()
        return tuple(v[:end])

    @classmethod
    def parse(cls, text: str) -> "Polynomial":
        """
        Разбор коэффициентов, разделённых пробелами, начиная со свободного члена.

        Examples:
            >>> str(Polynomial.parse("1 0 -1/2"))
            '-1/2 * x^2 + 0/1 * x^1 + 1/1'

        Raises:
            NumberParseError: Пустой ввод или некорректный литерал коэффициента
        """
        tokens = text.split()
        if not tokens:
            raise NumberParseError("polynomial needs at least one coefficient")
        return cls(coefficients=tuple(Fraction.parse(token) for token in tokens))

    @property
    def degree(self) -> int:
        """Степень полинома (0 для констант, включая нулевой полином)."""
        return len(self.coefficients) - 1

    def coefficient(self, power: int) -> Fraction:
        """Коэффициент при x^power (0 за пределами степени)."""
        if power < 0:
            raise ValueError(f"power must be non-negative, got {power}")
        if power < len(self.coefficients):
            return self.coefficients[power]
        return Fraction.zero()

    def is_zero(self) -> bool:
        return len(self.coefficients) == 1 and self.coefficients[0].is_zero()

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def combine(self, other: "Polynomial", operation: FractionOperation) -> "Polynomial":
        """
        Покоэффициентное объединение двух полиномов.

        Отсутствующие коэффициенты более короткого полинома считаются нулевыми.
        """
        length = max(len(self.coefficients), len(other.coefficients))
        result = [
            fraction.combine(self.coefficient(i), other.coefficient(i), operation)
            for i in range(length)
        ]
        return Polynomial(coefficients=tuple(result))

    def add(self, other: "Polynomial") -> "Polynomial":
        return self.combine(other, fraction.add)

    def subtract(self, other: "Polynomial") -> "Polynomial":
        return self.combine(other, fraction.subtract)

    def multiply(self, other: "Polynomial") -> "Polynomial":
        """Полная свёртка коэффициентов."""
        if self.is_zero() or other.is_zero():
            return Polynomial()

        result: list = []
        for i, left in enumerate(self.coefficients):
            if left.is_zero():
                continue
            for j, right in enumerate(other.coefficients):
                _ensure_length(result, i + j + 1)
                result[i + j] = fraction.add(result[i + j], fraction.multiply(left, right))
        return Polynomial(coefficients=tuple(result))

    def __add__(self, other: "Polynomial") -> "Polynomial":
        return self.add(other)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        return self.subtract(other)

    def __mul__(self, other: "Polynomial") -> "Polynomial":
        return self.multiply(other)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """
        Запись от старшей степени к младшей: "c_n * x^n + ... + c_1 * x^1 + c_0".
        """
        terms = []
        for power in range(self.degree, -1, -1):
            coeff = fraction.to_string(self.coefficients[power])
            terms.append(coeff if power == 0 else f"{coeff} * x^{power}")
        return " + ".join(terms)

    def __str__(self) -> str:
        return self.to_string()
