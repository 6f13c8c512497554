"""
Тесты для Fraction / LongFraction / BigFraction

Проверяет:
1. Конструирование и нормализацию (знак, несократимость, ноль)
2. Разбор и форматирование "<numerator>/<denominator>"
3. Арифметику с дробями и целыми, операторы
4. Переполнение на границах int32/int64
5. Сравнение, равенство, hash
6. Преобразования (to_decimal, round, *_value_exact, float, int)
7. Алгебраические законы и parse(str(f)) == f (hypothesis) для всех разрядностей
8. Сквозные сценарии
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN, Decimal
from fractions import Fraction as Rational

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st
from pydantic import ValidationError

from exactmath.core.domain.fraction import BigFraction, Fraction, LongFraction
from exactmath.core.errors import (
    FractionFormatError,
    InexactResultError,
    IntegerOverflowError,
    InvalidArgumentError,
)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1

FRACTION_TYPES = [Fraction, LongFraction, BigFraction]


def _rational(fraction) -> Rational:
    return Rational(fraction.numerator, fraction.denominator)


# Границы компонентов, при которых законы не выходят за разрядность:
# произведения трёх дробей и НОК знаменателей остаются в пределах типа
LAW_WIDTHS = [(Fraction, 2**7), (LongFraction, 2**15), (BigFraction, 10**30)]


def _fractions(fraction_type, bound: int):
    return st.builds(
        fraction_type.value_of,
        st.integers(min_value=-bound, max_value=bound),
        st.integers(min_value=-bound, max_value=bound).filter(lambda d: d != 0),
    )


def _full_range_fractions(fraction_type):
    kind = fraction_type.KIND
    low = kind.min_value if kind.bounded else -(10**40)
    high = kind.max_value if kind.bounded else 10**40
    # Смена знака MIN (числителя при отрицательном знаменателе или самого
    # знаменателя) переполняет тип
    return st.builds(
        fraction_type.value_of,
        st.integers(min_value=low + 1, max_value=high),
        st.integers(min_value=low + 1, max_value=high).filter(lambda d: d != 0),
    )


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


class TestConstruction:
    """Тесты для value_of и нормализации"""

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    def test_reduced(self, fraction_type) -> None:
        fraction = fraction_type.value_of(6, 8)
        assert (fraction.numerator, fraction.denominator) == (3, 4)

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    def test_sign_moves_to_numerator(self, fraction_type) -> None:
        assert str(fraction_type.value_of(2, -4)) == "-1/2"
        assert str(fraction_type.value_of(-2, -4)) == "1/2"

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    def test_zero_is_canonical(self, fraction_type) -> None:
        zero = fraction_type.value_of(0, -17)
        assert (zero.numerator, zero.denominator) == (0, 1)
        assert zero == fraction_type.ZERO

    def test_integer_default_denominator(self) -> None:
        assert str(Fraction.value_of(5)) == "5/1"

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    def test_zero_denominator(self, fraction_type) -> None:
        with pytest.raises(InvalidArgumentError):
            fraction_type.value_of(1, 0)

    def test_out_of_range_component(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Fraction.value_of(INT32_MAX + 1, 2)
        assert LongFraction.value_of(INT32_MAX + 1, 2).numerator == 2**30

    def test_min_numerator_allowed(self) -> None:
        """MIN int32 в числителе представим; сокращение не переполняется"""
        fraction = Fraction.value_of(INT32_MIN, 2)
        assert (fraction.numerator, fraction.denominator) == (-(2**30), 1)
        assert Fraction.value_of(INT32_MIN).numerator == INT32_MIN

    def test_min_denominator_overflows(self) -> None:
        """Перенос знака из MIN знаменателя не представим"""
        with pytest.raises(IntegerOverflowError):
            Fraction.value_of(1, INT32_MIN)

    def test_keyword_constructor_normalizes(self) -> None:
        fraction = Fraction(numerator=10, denominator=-4)
        assert (fraction.numerator, fraction.denominator) == (-5, 2)

    def test_keyword_constructor_validates(self) -> None:
        with pytest.raises(ValidationError):
            Fraction(numerator=1, denominator=0)
        with pytest.raises(ValidationError):
            Fraction(numerator="1", denominator=2)

    def test_immutable(self) -> None:
        fraction = Fraction.value_of(1, 2)
        with pytest.raises(ValidationError):
            fraction.numerator = 3

    def test_constants(self) -> None:
        assert Fraction.ONE_HALF == Fraction.value_of(1, 2)
        assert Fraction.TWO_THIRDS == Fraction.value_of(2, 3)
        assert LongFraction.THREE_QUARTERS == LongFraction.value_of(3, 4)
        assert BigFraction.ONE_THIRD == BigFraction.value_of(1, 3)
        assert BigFraction.ONE_QUARTER == BigFraction.value_of(1, 4)
        assert isinstance(LongFraction.ONE, LongFraction)


# =============================================================================
# РАЗБОР И ФОРМАТИРОВАНИЕ
# =============================================================================


class TestParse:
    """Тесты для parse / str"""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("4/7", "4/7"), (" 4 / 7 ", "4/7"), ("-6/8", "-3/4"), ("+1/-2", "-1/2"), ("0/5", "0/1")],
    )
    def test_valid(self, text: str, expected: str) -> None:
        assert str(Fraction.parse(text)) == expected

    def test_round_trip(self) -> None:
        fraction = BigFraction.value_of(-(10**40), 3)
        assert BigFraction.parse(str(fraction)) == fraction
        minimum = Fraction.value_of(INT32_MIN, 3)
        assert str(minimum) == "-2147483648/3"
        assert Fraction.parse(str(minimum)) == minimum

    @pytest.mark.parametrize("text", ["1", "1/", "/2", "a/2", "1/2/3", "1.5/2", "1/0", ""])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(FractionFormatError):
            Fraction.parse(text)

    def test_ascii_control_characters_trimmed(self) -> None:
        assert Fraction.parse("\t1/2\n") == Fraction.ONE_HALF
        assert Fraction.parse("\r 3 /\x0b4 ") == Fraction.THREE_QUARTERS

    @pytest.mark.parametrize("text", ["\u00a01/2", "1/\u20032", "1/2\u3000"])
    def test_unicode_whitespace_rejected(self, text: str) -> None:
        """Пробелы вне U+0000..U+0020 не обрезаются"""
        with pytest.raises(FractionFormatError):
            Fraction.parse(text)

    def test_out_of_range(self) -> None:
        with pytest.raises(FractionFormatError):
            Fraction.parse("2147483648/1")
        assert LongFraction.parse("2147483648/1").numerator == 2**31

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid fraction"):
            Fraction.parse("x")

    def test_none(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Fraction.parse(None)

    def test_repr(self) -> None:
        assert repr(LongFraction.value_of(-1, 3)) == "LongFraction(-1, 3)"


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты для add/subtract/multiply/divide/reciprocal/negate/abs/pow"""

    def test_add(self) -> None:
        assert Fraction.ONE_HALF.add(Fraction.ONE_THIRD) == Fraction.value_of(5, 6)
        assert Fraction.ONE_QUARTER.add(Fraction.ONE_QUARTER) == Fraction.ONE_HALF

    def test_add_int(self) -> None:
        assert Fraction.ONE_HALF.add(2) == Fraction.value_of(5, 2)

    def test_subtract(self) -> None:
        assert Fraction.ONE_HALF.subtract(Fraction.ONE_THIRD) == Fraction.value_of(1, 6)
        assert Fraction.ONE_HALF.subtract(1) == Fraction.value_of(-1, 2)

    def test_multiply(self) -> None:
        assert Fraction.TWO_THIRDS.multiply(Fraction.THREE_QUARTERS) == Fraction.ONE_HALF
        assert Fraction.TWO_THIRDS.multiply(3) == Fraction.value_of(2)
        assert Fraction.TWO_THIRDS.multiply(0) == Fraction.ZERO

    def test_divide(self) -> None:
        assert Fraction.ONE_HALF.divide(Fraction.ONE_QUARTER) == Fraction.value_of(2)
        assert Fraction.ONE_HALF.divide(-2) == Fraction.value_of(-1, 4)

    def test_divide_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Fraction.ONE_HALF.divide(Fraction.ZERO)
        with pytest.raises(ZeroDivisionError):
            Fraction.ONE_HALF.divide(0)

    def test_reciprocal(self) -> None:
        assert Fraction.value_of(-2, 3).reciprocal() == Fraction.value_of(-3, 2)
        with pytest.raises(ZeroDivisionError):
            Fraction.ZERO.reciprocal()

    def test_negate_abs(self) -> None:
        assert Fraction.ONE_HALF.negate() == Fraction.value_of(-1, 2)
        assert Fraction.value_of(-1, 2).abs() == Fraction.ONE_HALF

    def test_negate_min_overflows(self) -> None:
        minimum = Fraction.value_of(INT32_MIN)
        with pytest.raises(IntegerOverflowError):
            minimum.negate()
        with pytest.raises(IntegerOverflowError):
            minimum.abs()

    def test_pow(self) -> None:
        assert Fraction.TWO_THIRDS.pow(2) == Fraction.value_of(4, 9)
        assert Fraction.TWO_THIRDS.pow(-2) == Fraction.value_of(9, 4)
        assert Fraction.TWO_THIRDS.pow(0) == Fraction.ONE
        assert Fraction.value_of(-1, 2).pow(3) == Fraction.value_of(-1, 8)

    def test_pow_zero_negative_exponent(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Fraction.ZERO.pow(-1)

    def test_pow_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            Fraction.ONE_HALF.pow(31)
        assert BigFraction.ONE_HALF.pow(100).denominator == 2**100

    def test_add_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            Fraction.value_of(INT32_MAX).add(1)
        with pytest.raises(IntegerOverflowError):
            LongFraction.value_of(1, INT64_MAX).add(LongFraction.value_of(1, INT64_MAX - 1))

    def test_mixed_types_rejected(self) -> None:
        with pytest.raises(TypeError):
            Fraction.ONE_HALF.add(LongFraction.ONE_HALF)

    def test_none_operand(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Fraction.ONE_HALF.add(None)


class TestOperators:
    """Тесты для перегруженных операторов"""

    def test_binary_operators(self) -> None:
        half, third = BigFraction.ONE_HALF, BigFraction.ONE_THIRD
        assert half + third == BigFraction.value_of(5, 6)
        assert half - third == BigFraction.value_of(1, 6)
        assert half * third == BigFraction.value_of(1, 6)
        assert half / third == BigFraction.value_of(3, 2)
        assert half**-2 == BigFraction.value_of(4)

    def test_int_operands(self) -> None:
        half = Fraction.ONE_HALF
        assert 1 + half == Fraction.value_of(3, 2)
        assert 1 - half == half
        assert 3 * half == Fraction.value_of(3, 2)
        assert 1 / half == Fraction.value_of(2)
        assert half / 2 == Fraction.ONE_QUARTER

    def test_unary_operators(self) -> None:
        assert -Fraction.ONE_HALF == Fraction.value_of(-1, 2)
        assert abs(Fraction.value_of(-1, 2)) == Fraction.ONE_HALF

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            Fraction.ONE_HALF + 0.5
        with pytest.raises(TypeError):
            Fraction.ONE_HALF + LongFraction.ONE_HALF

    def test_bool(self) -> None:
        assert not Fraction.ZERO
        assert Fraction.ONE_THIRD


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestComparison:
    """Тесты для compare_to, ==, hash"""

    def test_compare_to(self) -> None:
        assert Fraction.ONE_THIRD.compare_to(Fraction.ONE_HALF) == -1
        assert Fraction.ONE_HALF.compare_to(Fraction.ONE_THIRD) == 1
        assert Fraction.ONE_HALF.compare_to(Fraction.value_of(2, 4)) == 0

    def test_ordering_operators(self) -> None:
        assert Fraction.value_of(-1, 2) < Fraction.ZERO < Fraction.ONE_QUARTER
        assert Fraction.THREE_QUARTERS >= Fraction.value_of(6, 8)
        assert sorted([Fraction.ONE, Fraction.ONE_THIRD, Fraction.ONE_HALF]) == [
            Fraction.ONE_THIRD,
            Fraction.ONE_HALF,
            Fraction.ONE,
        ]

    def test_compare_near_limits(self) -> None:
        """Деление на НОД знаменателей избегает переполнения"""
        left = Fraction.value_of(INT32_MAX - 1, INT32_MAX)
        right = Fraction.value_of(INT32_MAX - 2, INT32_MAX)
        assert left > right

    def test_equality_and_hash(self) -> None:
        assert Fraction.value_of(2, 4) == Fraction.ONE_HALF
        assert hash(Fraction.value_of(2, 4)) == hash(Fraction.ONE_HALF)
        assert len({Fraction.value_of(1, 2), Fraction.value_of(3, 6)}) == 1

    def test_different_widths_not_equal(self) -> None:
        assert Fraction.ONE_HALF != LongFraction.ONE_HALF

    def test_signum_is_integer(self) -> None:
        assert Fraction.value_of(-3, 4).signum() == -1
        assert Fraction.ZERO.signum() == 0
        assert Fraction.value_of(4, 2).is_integer()
        assert not Fraction.ONE_HALF.is_integer()


# =============================================================================
# ПРЕОБРАЗОВАНИЯ
# =============================================================================


class TestConversions:
    """Тесты для to_decimal / round / *_value_exact / float / int"""

    def test_to_decimal_exact(self) -> None:
        assert str(Fraction.value_of(3, 8).to_decimal()) == "0.375"
        assert str(Fraction.value_of(-7, 4).to_decimal()) == "-1.75"

    def test_to_decimal_non_terminating(self) -> None:
        with pytest.raises(InexactResultError):
            Fraction.ONE_THIRD.to_decimal()

    def test_to_decimal_with_scale(self) -> None:
        assert str(Fraction.TWO_THIRDS.to_decimal(4)) == "0.6667"
        assert str(Fraction.TWO_THIRDS.to_decimal(4, ROUND_FLOOR)) == "0.6666"

    def test_round(self) -> None:
        assert Fraction.value_of(5, 2).round() == 3
        assert Fraction.value_of(5, 2).round(ROUND_HALF_EVEN) == 2
        assert Fraction.value_of(-5, 2).round() == -3
        assert Fraction.value_of(1, 3).round(ROUND_CEILING) == 1

    def test_value_exact(self) -> None:
        assert Fraction.value_of(6, 3).int_value_exact() == 2
        assert LongFraction.value_of(INT64_MAX).long_value_exact() == INT64_MAX
        assert BigFraction.value_of(2**64).big_integer_value_exact() == 2**64

    def test_value_exact_non_integer(self) -> None:
        with pytest.raises(InexactResultError):
            Fraction.ONE_HALF.int_value_exact()

    def test_value_exact_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            BigFraction.value_of(2**64).long_value_exact()
        with pytest.raises(IntegerOverflowError):
            LongFraction.value_of(2**40).int_value_exact()

    def test_float(self) -> None:
        assert Fraction.ONE_QUARTER.double_value() == 0.25
        assert Fraction.ONE_THIRD.float_value() == pytest.approx(1 / 3)
        assert float(BigFraction.value_of(10**400, 10**399)) == 10.0

    def test_int_truncates(self) -> None:
        assert int(Fraction.value_of(7, 2)) == 3
        assert int(Fraction.value_of(-7, 2)) == -3


# =============================================================================
# АЛГЕБРАИЧЕСКИЕ ЗАКОНЫ
# =============================================================================


class TestAlgebraicLaws:
    """Свойства всех трёх разрядностей (hypothesis)"""

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_add_matches_rational(self, fraction_type, bound: int, data) -> None:
        a, b = (data.draw(_fractions(fraction_type, bound)) for _ in range(2))
        assert _rational(a.add(b)) == _rational(a) + _rational(b)

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_multiply_matches_rational(self, fraction_type, bound: int, data) -> None:
        a, b = (data.draw(_fractions(fraction_type, bound)) for _ in range(2))
        assert _rational(a.multiply(b)) == _rational(a) * _rational(b)

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_commutativity(self, fraction_type, bound: int, data) -> None:
        a, b = (data.draw(_fractions(fraction_type, bound)) for _ in range(2))
        assert a.add(b) == b.add(a)
        assert a.multiply(b) == b.multiply(a)

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_associativity(self, fraction_type, bound: int, data) -> None:
        a, b, c = (data.draw(_fractions(fraction_type, bound)) for _ in range(3))
        assert a.add(b).add(c) == a.add(b.add(c))
        assert a.multiply(b).multiply(c) == a.multiply(b.multiply(c))

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_distributivity(self, fraction_type, bound: int, data) -> None:
        a, b, c = (data.draw(_fractions(fraction_type, bound)) for _ in range(3))
        assert a.multiply(b.add(c)) == a.multiply(b).add(a.multiply(c))

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_inverses(self, fraction_type, bound: int, data) -> None:
        a = data.draw(_fractions(fraction_type, bound))
        assert a.add(a.negate()) == fraction_type.ZERO
        assert a.subtract(a) == fraction_type.ZERO
        assume(a.signum() != 0)
        assert a.multiply(a.reciprocal()) == fraction_type.ONE
        assert a.divide(a) == fraction_type.ONE
        assert a.reciprocal().reciprocal() == a

    @pytest.mark.parametrize(("fraction_type", "bound"), LAW_WIDTHS)
    @given(data=st.data())
    def test_compare_matches_rational(self, fraction_type, bound: int, data) -> None:
        a, b = (data.draw(_fractions(fraction_type, bound)) for _ in range(2))
        expected = (_rational(a) > _rational(b)) - (_rational(a) < _rational(b))
        assert a.compare_to(b) == expected

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    @given(data=st.data())
    def test_parse_str_round_trip(self, fraction_type, data) -> None:
        """parse(str(f)) == f на всём диапазоне разрядности"""
        fraction = data.draw(_full_range_fractions(fraction_type))
        assert fraction_type.parse(str(fraction)) == fraction

    @pytest.mark.parametrize("fraction_type", FRACTION_TYPES)
    @given(data=st.data())
    def test_invariants(self, fraction_type, data) -> None:
        """Знаменатель положителен, дробь несократима"""
        fraction = data.draw(_full_range_fractions(fraction_type))
        assert fraction.denominator > 0
        assert Rational(fraction.numerator, fraction.denominator).denominator == fraction.denominator


# =============================================================================
# СКВОЗНЫЕ СЦЕНАРИИ
# =============================================================================


class TestScenarios:
    """Сквозные сценарии"""

    def test_harmonic_sum(self) -> None:
        """1 + 1/2 + ... + 1/10 = 7381/2520"""
        total = Fraction.ZERO
        for k in range(1, 11):
            total += Fraction.value_of(1, k)
        assert str(total) == "7381/2520"
        assert str(total.to_decimal(6)) == "2.928968"

    def test_parse_compute_format(self) -> None:
        result = LongFraction.parse("3/4").multiply(LongFraction.parse("-8/9")).add(1)
        assert str(result) == "1/3"

    def test_int32_harmonic_overflow(self) -> None:
        """Гармоническая сумма быстро выходит за int32"""
        total = Fraction.ZERO
        with pytest.raises(IntegerOverflowError):
            for k in range(1, 100):
                total = total.add(Fraction.value_of(1, k))
