"""
Тесты для BigInt engine

Проверяет:
1. Построение из блока и из десятичной строки (включая некорректный ввод)
2. Инварианты (знак, старшие нули, отрицательный ноль)
3. Сравнение, сложение, вычитание, умножение
4. Деление на блок и полное деление (floor-семантика)
5. GCD и десятичное представление
6. Свойства: коммутативность, тождества, корректность деления

Встроенный int используется как эталон.
"""

import math
import random

import pytest

from src.core.math import bigint
from src.core.math.bigint import (
    BigInt,
    add,
    compare,
    compare_absolute,
    divide,
    divide_by_block,
    gcd,
    multiply,
    negate,
    shift_left,
    shift_right,
    subtract,
    to_block_string,
    to_decimal_string,
)
from src.core.math.blocks import BLOCK_MASK, BlockVector
from src.core.math.errors import InvariantViolation, NumberParseError, ZeroDivisorViolation

# =============================================================================
# HELPERS
# =============================================================================

BIT_LENGTHS = [1, 8, 31, 32, 33, 63, 64, 65, 96, 128, 200, 333, 512]


def _random_ints(seed: int, count: int, allow_zero: bool = True) -> list[int]:
    rng = random.Random(seed)
    values = []
    while len(values) < count:
        bits = rng.choice(BIT_LENGTHS)
        value = rng.getrandbits(bits)
        # Граничные формы: 2^k и 2^k - 1
        shape = rng.random()
        if shape < 0.1:
            value = (1 << bits) - 1
        elif shape < 0.2:
            value = 1 << bits
        if rng.random() < 0.5:
            value = -value
        if value == 0 and not allow_zero:
            continue
        values.append(value)
    return values


def _pairs(seed: int, count: int, nonzero_second: bool = False) -> list[tuple[int, int]]:
    left = _random_ints(seed, count)
    right = _random_ints(seed + 1, count, allow_zero=not nonzero_second)
    return list(zip(left, right))


def big(value: int) -> BigInt:
    return BigInt.from_int(value)


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Тесты построения BigInt"""

    def test_from_small_value(self) -> None:
        """BigInt(value): один блок, знак +1"""
        x = BigInt(42)
        assert x.blocks == (42,)
        assert x.sign == 1
        assert x.used == 1

    def test_default_is_zero(self) -> None:
        """BigInt() — ноль"""
        assert BigInt().is_zero()
        assert BigInt(0).sign == 1

    def test_max_block_value(self) -> None:
        """Максимальное значение блока 2^32 - 1"""
        assert BigInt(BLOCK_MASK).blocks == (BLOCK_MASK,)

    def test_out_of_range_value_rejected(self) -> None:
        """Значение вне [0, 2^32) — нарушение предусловия"""
        with pytest.raises(InvariantViolation):
            BigInt(1 << 32)
        with pytest.raises(InvariantViolation):
            BigInt(-1)

    def test_from_int_multi_block(self) -> None:
        """from_int разбивает значение на блоки младшим первым"""
        x = big(-(1 << 64))
        assert x.blocks == (0, 0, 1)
        assert x.sign == -1

    def test_int_conversion_roundtrip(self) -> None:
        """int(BigInt.from_int(v)) == v"""
        for value in _random_ints(seed=7, count=100):
            assert int(big(value)) == value


class TestDecimalParsing:
    """Тесты разбора десятичных строк"""

    def test_simple(self) -> None:
        """Простое положительное число"""
        assert BigInt.from_decimal_string("12345").blocks == (12345,)

    def test_negative(self) -> None:
        """Ведущий '-' задаёт знак"""
        x = BigInt.from_decimal_string("-18446744073709551616")
        assert x.sign == -1
        assert x.blocks == (0, 0, 1)

    def test_block_boundary(self) -> None:
        """2^32 занимает два блока"""
        assert BigInt.from_decimal_string("4294967296").blocks == (0, 1)

    def test_leading_zeros_accepted(self) -> None:
        """Ведущие нули нормализуются"""
        assert BigInt.from_decimal_string("0007").blocks == (7,)
        assert BigInt.from_decimal_string("0000000000000000000").is_zero()

    def test_negative_zero_is_positive(self) -> None:
        """Строка "-0" → ноль со знаком +1"""
        x = BigInt.from_decimal_string("-0")
        assert x.is_zero()
        assert x.sign == 1

    def test_long_string(self) -> None:
        """Длинная строка совпадает с эталоном"""
        text = "9" * 100 + "1234567890" * 7
        assert int(BigInt.from_decimal_string(text)) == int(text)

    @pytest.mark.parametrize(
        "text",
        ["", "-", "--1", "+5", " 5", "5 ", "1 2", "12a", "0x10", "1.5", "٣", "1_000"],
    )
    def test_malformed_rejected(self, text: str) -> None:
        """Некорректные строки → NumberParseError"""
        with pytest.raises(NumberParseError):
            BigInt.from_decimal_string(text)

    def test_non_string_rejected(self) -> None:
        """Не-строка → NumberParseError"""
        with pytest.raises(NumberParseError):
            BigInt.from_decimal_string(123)  # type: ignore[arg-type]


class TestDecimalRendering:
    """Тесты десятичного представления"""

    def test_zero(self) -> None:
        """Ноль рендерится как 0"""
        assert to_decimal_string(BigInt(0)) == "0"

    def test_negative(self) -> None:
        """Отрицательные с '-'"""
        assert to_decimal_string(big(-42)) == "-42"

    def test_inner_zero_chunks_padded(self) -> None:
        """Внутренние порции дополняются нулями"""
        assert to_decimal_string(big(10**18 + 5)) == "1000000000000000005"
        assert to_decimal_string(big(10**9)) == "1000000000"

    def test_roundtrip(self) -> None:
        """to_decimal_string(from_decimal_string(s)) == s"""
        for value in _random_ints(seed=11, count=150):
            text = to_decimal_string(big(value))
            assert text == str(value)
            assert to_decimal_string(BigInt.from_decimal_string(text)) == text

    def test_str_dunder(self) -> None:
        """str() использует десятичное представление"""
        assert str(big(-(2**100))) == str(-(2**100))

    def test_block_string(self) -> None:
        """Сырые блоки младшим первым"""
        assert to_block_string(big(-((1 << 32) + 5))) == "- 5 1"
        assert to_block_string(big(7)) == "7"


# =============================================================================
# INVARIANTS
# =============================================================================


class TestValidation:
    """Тесты проверки инвариантов"""

    def test_bad_sign(self) -> None:
        """Знак вне {+1, -1}"""
        with pytest.raises(InvariantViolation, match="sign"):
            BigInt._from_vector(2, BlockVector.from_blocks([1]))

    def test_trailing_zero_block(self) -> None:
        """Старший нулевой блок недопустим"""
        with pytest.raises(InvariantViolation, match="trailing zero"):
            BigInt._from_vector(1, BlockVector.from_blocks([1, 0]))

    def test_negative_zero(self) -> None:
        """Отрицательный ноль недопустим"""
        with pytest.raises(InvariantViolation, match="Zero must have positive sign"):
            BigInt._from_vector(-1, BlockVector.from_blocks([0]))

    def test_non_bigint_operand(self) -> None:
        """Операнд не BigInt"""
        with pytest.raises(InvariantViolation):
            add(BigInt(1), 1)  # type: ignore[arg-type]

    def test_negate_zero_stays_positive(self) -> None:
        """Смена знака нуля не даёт отрицательный ноль"""
        assert negate(BigInt(0)).sign == 1
        assert (-BigInt(0)).sign == 1

    def test_results_satisfy_invariants(self) -> None:
        """Результаты операций проходят validate"""
        for a, b in _pairs(seed=3, count=60, nonzero_second=True):
            x, y = big(a), big(b)
            for result in (add(x, y), subtract(x, y), multiply(x, y), *divide(x, y)):
                bigint.validate(result)
                assert result.capacity >= result.used


# =============================================================================
# COMPARISON
# =============================================================================


class TestComparison:
    """Тесты сравнения"""

    def test_compare_absolute_ignores_sign(self) -> None:
        """Сравнение модулей"""
        assert compare_absolute(big(-5), big(3)) == 1
        assert compare_absolute(big(3), big(-5)) == -1
        assert compare_absolute(big(-5), big(5)) == 0

    def test_compare_absolute_different_lengths(self) -> None:
        """Более длинное значение больше по модулю"""
        assert compare_absolute(big(1 << 32), big(BLOCK_MASK)) == 1

    def test_compare_signs(self) -> None:
        """Знак решает при разных знаках"""
        assert compare(big(-5), big(3)) == -1
        assert compare(big(0), big(-1)) == 1
        assert compare(big(0), big(0)) == 0

    def test_compare_both_negative_flips(self) -> None:
        """Для двух отрицательных результат инвертируется"""
        assert compare(big(-5), big(-3)) == -1
        assert compare(big(-3), big(-5)) == 1

    def test_compare_matches_oracle(self) -> None:
        """compare совпадает со встроенным сравнением"""
        for a, b in _pairs(seed=5, count=200):
            expected = (a > b) - (a < b)
            assert compare(big(a), big(b)) == expected

    def test_rich_comparisons(self) -> None:
        """Операторы сравнения и сортировка"""
        values = [big(v) for v in (5, -3, 1 << 40, 0, -(1 << 40))]
        assert [int(v) for v in sorted(values)] == sorted(int(v) for v in values)
        assert big(3) <= big(3)
        assert big(4) > big(3)
        assert big(-4) < big(3)

    def test_equality_and_hash(self) -> None:
        """Равные значения равны и имеют одинаковый hash"""
        a = BigInt.from_decimal_string("123456789012345678901234567890")
        b = big(123456789012345678901234567890)
        assert a == b
        assert hash(a) == hash(b)
        assert a != big(-123456789012345678901234567890)


# =============================================================================
# ADDITION & SUBTRACTION
# =============================================================================


class TestAddition:
    """Тесты сложения и вычитания"""

    def test_carry_creates_new_block(self) -> None:
        """(2^32-1) + (2^32-1) → блоки [4294967294, 1]"""
        result = add(BigInt(4294967295), BigInt(4294967295))
        assert result.blocks == (4294967294, 1)
        assert result.sign == 1

    def test_carry_chain(self) -> None:
        """Перенос через всю цепочку блоков"""
        result = add(big((1 << 128) - 1), BigInt(1))
        assert result.blocks == (0, 0, 0, 0, 1)

    def test_opposite_signs_equal_magnitude_is_zero(self) -> None:
        """x + (-x) == 0 со знаком +1"""
        result = add(big(1 << 70), big(-(1 << 70)))
        assert result.is_zero()
        assert result.sign == 1

    def test_borrow_leaves_no_trailing_zero(self) -> None:
        """Заём не оставляет старших нулевых блоков"""
        result = add(big(1 << 64), big(-1))
        assert result.blocks == (BLOCK_MASK, BLOCK_MASK)

    def test_sign_of_larger_magnitude(self) -> None:
        """Знак результата — у большего по модулю"""
        assert int(add(big(3), big(-10))) == -7
        assert int(add(big(-3), big(10))) == 7

    def test_add_matches_oracle(self) -> None:
        """add совпадает со встроенным сложением"""
        for a, b in _pairs(seed=13, count=300):
            assert int(add(big(a), big(b))) == a + b

    def test_subtract_matches_oracle(self) -> None:
        """subtract совпадает со встроенным вычитанием"""
        for a, b in _pairs(seed=17, count=300):
            assert int(subtract(big(a), big(b))) == a - b

    def test_commutativity(self) -> None:
        """add(x, y) == add(y, x)"""
        for a, b in _pairs(seed=19, count=100):
            assert add(big(a), big(b)) == add(big(b), big(a))

    def test_subtract_self_is_zero(self) -> None:
        """subtract(x, x) == 0"""
        for a in _random_ints(seed=23, count=50):
            x = big(a)
            result = subtract(x, x)
            assert result.is_zero()
            assert result.sign == 1

    def test_subtract_does_not_mutate_operand(self) -> None:
        """Знак и блоки вычитаемого не меняются"""
        x = big(10)
        y = big(-(1 << 40))
        before = (y.sign, y.blocks)
        subtract(x, y)
        assert (y.sign, y.blocks) == before

    def test_operators(self) -> None:
        """Операторы + и -"""
        assert int(big(5) + big(-8)) == -3
        assert int(big(5) - big(-8)) == 13


# =============================================================================
# MULTIPLICATION
# =============================================================================


class TestMultiplication:
    """Тесты умножения"""

    def test_max_blocks(self) -> None:
        """(2^32-1)^2 → два блока"""
        result = multiply(BigInt(BLOCK_MASK), BigInt(BLOCK_MASK))
        assert int(result) == BLOCK_MASK * BLOCK_MASK
        assert result.used == 2

    def test_zero_short_circuit(self) -> None:
        """Умножение на ноль → ноль со знаком +1"""
        result = multiply(big(-(1 << 90)), BigInt(0))
        assert result.is_zero()
        assert result.sign == 1

    def test_sign_is_product_of_signs(self) -> None:
        """Знак — произведение знаков"""
        assert multiply(big(-3), big(4)).sign == -1
        assert multiply(big(-3), big(-4)).sign == 1

    def test_matches_oracle(self) -> None:
        """multiply совпадает со встроенным умножением"""
        for a, b in _pairs(seed=29, count=200):
            assert int(multiply(big(a), big(b))) == a * b

    def test_commutativity(self) -> None:
        """multiply(x, y) == multiply(y, x)"""
        for a, b in _pairs(seed=31, count=100):
            assert multiply(big(a), big(b)) == multiply(big(b), big(a))

    def test_all_ones_carry_propagation(self) -> None:
        """(2^256-1)^2: максимальные переносы"""
        value = (1 << 256) - 1
        assert int(big(value) * big(value)) == value * value


# =============================================================================
# SHIFTS
# =============================================================================


class TestShifts:
    """Тесты сдвигов на целые блоки"""

    def test_shift_left(self) -> None:
        """Сдвиг влево добавляет младшие нулевые блоки"""
        assert shift_left(BigInt(1), 2).blocks == (0, 0, 1)
        assert int(shift_left(big(-7), 1)) == -7 << 32

    def test_shift_left_zero_stays_zero(self) -> None:
        """Сдвиг нуля — ноль"""
        assert shift_left(BigInt(0), 3).blocks == (0,)

    def test_shift_right(self) -> None:
        """Сдвиг вправо отбрасывает младшие блоки"""
        assert shift_right(big((1 << 64) + 5), 1).blocks == (0, 1)

    def test_shift_right_past_end_is_zero(self) -> None:
        """Сдвиг за пределы длины — ноль"""
        result = shift_right(big(-(1 << 40)), 5)
        assert result.is_zero()
        assert result.sign == 1

    def test_negative_places_rejected(self) -> None:
        """Отрицательный сдвиг — нарушение предусловия"""
        with pytest.raises(InvariantViolation):
            shift_left(BigInt(1), -1)


# =============================================================================
# DIVISION
# =============================================================================


class TestDivideByBlock:
    """Тесты деления на один блок"""

    def test_basic(self) -> None:
        """Частное и остаток-цифра"""
        quotient, remainder = divide_by_block(big(10**20), 7)
        assert int(quotient) == 10**20 // 7
        assert remainder == 10**20 % 7

    def test_quotient_keeps_dividend_sign(self) -> None:
        """Частное несёт знак делимого (усечение), остаток — от модуля"""
        quotient, remainder = divide_by_block(big(-7), 2)
        assert int(quotient) == -3
        assert remainder == 1

    def test_zero_quotient_is_positive(self) -> None:
        """Нулевое частное всегда положительно"""
        quotient, remainder = divide_by_block(big(-1), 2)
        assert quotient.is_zero()
        assert quotient.sign == 1
        assert remainder == 1

    def test_matches_oracle(self) -> None:
        """Совпадение с эталоном для случайных значений"""
        rng = random.Random(37)
        for value in _random_ints(seed=41, count=150):
            d = rng.randint(1, BLOCK_MASK)
            quotient, remainder = divide_by_block(big(value), d)
            assert int(quotient) == int(abs(value) // d) * (-1 if value < 0 else 1)
            assert remainder == abs(value) % d

    def test_zero_divisor(self) -> None:
        """Деление на 0 — ZeroDivisorViolation"""
        with pytest.raises(ZeroDivisorViolation):
            divide_by_block(BigInt(5), 0)

    def test_divisor_out_of_range(self) -> None:
        """Делитель вне одного блока отклоняется"""
        with pytest.raises(InvariantViolation):
            divide_by_block(BigInt(5), 1 << 32)


class TestDivide:
    """Тесты полного деления"""

    def test_floor_semantics_all_signs(self) -> None:
        """Знаки частного и остатка как у divmod"""
        for a, b in [(7, 2), (-7, 2), (7, -2), (-7, -2), (6, -3), (-6, 3)]:
            q, r = divide(big(a), big(b))
            assert (int(q), int(r)) == divmod(a, b)

    def test_matches_oracle(self) -> None:
        """divide совпадает с divmod для случайных значений"""
        for a, b in _pairs(seed=43, count=300, nonzero_second=True):
            q, r = divide(big(a), big(b))
            assert (int(q), int(r)) == divmod(a, b)

    def test_reconstruction_property(self) -> None:
        """q*y + r == x и |r| < |y|"""
        for a, b in _pairs(seed=47, count=200, nonzero_second=True):
            x, y = big(a), big(b)
            q, r = divide(x, y)
            assert add(multiply(q, y), r) == x
            assert compare_absolute(r, y) < 0

    def test_normalisation_needed(self) -> None:
        """Делитель с маленьким старшим блоком (нормализация d > 1)"""
        x = (1 << 200) + 12345
        for y in [(1 << 32) + 1, (1 << 64) + 3, 3 * (1 << 96) + 7, (1 << 33) - 1]:
            q, r = divide(big(x), big(y))
            assert (int(q), int(r)) == divmod(x, y)

    def test_correction_heavy_cases(self) -> None:
        """Случаи, где пробная цифра частного переоценивается"""
        cases = [
            ((1 << 96) - 1, (1 << 64) - (1 << 32) + 1),
            ((1 << 128) - (1 << 64), (1 << 64) - 1),
            (0x7FFFFFFF800000010000000000000000, 0x800000008000000200000005),
            ((1 << 160) - 1, (1 << 95) + (1 << 63) + 1),
        ]
        for a, b in cases:
            q, r = divide(big(a), big(b))
            assert (int(q), int(r)) == divmod(a, b)

    def test_dividend_shorter_than_divisor(self) -> None:
        """|x| < |y| по длине: частное 0 или -1"""
        assert tuple(int(v) for v in divide(big(5), big(1 << 70))) == divmod(5, 1 << 70)
        assert tuple(int(v) for v in divide(big(-5), big(1 << 70))) == divmod(-5, 1 << 70)

    def test_zero_dividend(self) -> None:
        """0 / y == 0 с нулевым остатком"""
        q, r = divide(BigInt(0), big(-(1 << 50)))
        assert q.is_zero() and q.sign == 1
        assert r.is_zero() and r.sign == 1

    def test_divide_self_is_one(self) -> None:
        """divide(x, x) == 1 для ненулевых x"""
        for a in _random_ints(seed=53, count=60, allow_zero=False):
            q, r = divide(big(a), big(a))
            assert int(q) == 1
            assert r.is_zero()

    def test_division_by_zero(self) -> None:
        """Деление на ноль — фатальная ошибка"""
        with pytest.raises(ZeroDivisorViolation):
            divide(BigInt(5), BigInt(0))
        with pytest.raises(ZeroDivisionError):
            divide(BigInt(5), BigInt(0))

    def test_operators(self) -> None:
        """Операторы //, % и divmod"""
        x, y = big(-(10**30)), big(7)
        assert int(x // y) == -(10**30) // 7
        assert int(x % y) == -(10**30) % 7
        assert tuple(int(v) for v in divmod(x, y)) == divmod(-(10**30), 7)


# =============================================================================
# GCD
# =============================================================================


class TestGCD:
    """Тесты наибольшего общего делителя"""

    def test_gcd_with_zero(self) -> None:
        """gcd(a, 0) == |a|"""
        for a in _random_ints(seed=59, count=40, allow_zero=False):
            assert int(gcd(big(a), BigInt(0))) == abs(a)
            assert int(gcd(BigInt(0), big(a))) == abs(a)

    def test_gcd_zero_zero_rejected(self) -> None:
        """gcd(0, 0) не определён"""
        with pytest.raises(InvariantViolation, match="gcd"):
            gcd(BigInt(0), BigInt(0))

    def test_gcd_matches_oracle(self) -> None:
        """gcd совпадает с math.gcd"""
        for a, b in _pairs(seed=61, count=100, nonzero_second=True):
            assert int(gcd(big(a), big(b))) == math.gcd(a, b)

    def test_gcd_of_factorials(self) -> None:
        """gcd(30!, 20!) == 20!"""
        result = gcd(big(math.factorial(30)), big(math.factorial(20)))
        assert int(result) == math.factorial(20)

    def test_gcd_is_positive(self) -> None:
        """Результат всегда неотрицательный"""
        assert gcd(big(-12), big(-18)).sign == 1
        assert int(gcd(big(-12), big(-18))) == 6
