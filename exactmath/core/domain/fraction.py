"""
Fraction — Неизменяемые несократимые дроби

Три структурно одинаковых типа, различающихся разрядностью числителя
и знаменателя:
- Fraction: int32
- LongFraction: int64
- BigFraction: произвольная точность

Логика реализована один раз в BaseFraction поверх IntegerKind; подкласс
задаёт только KIND. Вся промежуточная арифметика выполняется с контролем
переполнения в разрядности KIND.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator != 0 (нарушение — ошибка конструирования)
2. denominator > 0 (знак хранится только в числителе)
3. gcd(|numerator|, denominator) == 1; для нуля denominator == 1
4. Экземпляры неизменяемы (frozen=True); операции возвращают новые дроби
5. Равенство и hash определены над несократимой парой (numerator, denominator)

ФОРМАТ ТЕКСТА:
    "<numerator>/<denominator>" — десятичные целые с необязательным знаком,
    пробел и управляющие символы (U+0000..U+0020) вокруг компонентов
    допускаются при разборе; str() выводит "%d/%d".
"""

import re
from decimal import Decimal
from typing import Any, ClassVar, Final, Self

from pydantic import BaseModel, StrictInt, model_validator

from exactmath.core.contracts.checks import require_not_none
from exactmath.core.errors import (
    FractionFormatError,
    InexactResultError,
    InvalidArgumentError,
)
from exactmath.core.math import decimals
from exactmath.core.math.checked import (
    BIGINT,
    INT32,
    INT64,
    IntegerKind,
    abs_exact,
    add_exact,
    multiply_exact,
    negate_exact,
    pow_exact,
    subtract_exact,
)
from exactmath.core.math.divisibility import gcd, lcm

# Грамматика целого компонента: необязательный знак и ASCII-цифры
_INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")

# Обрезаются только управляющие символы и пробел (U+0000..U+0020)
_TRIMMED_CHARACTERS: Final[str] = "".join(map(chr, range(0x21)))


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _normalize_and_reduce(numerator: int, denominator: int, kind: IntegerKind) -> tuple[int, int]:
    """
    Приведение пары к каноническому виду (знак в числителе, несократимость).

    Вызывается только с проверенными аргументами (denominator != 0, оба в kind).
    НОД считается без ограничения разрядности: он не превосходит denominator,
    а числитель kind.min_value остаётся допустимым.

    Raises:
        IntegerOverflowError: Если при смене знака значение не помещается в kind
    """
    if numerator == 0:
        return 0, 1

    if denominator < 0:
        numerator = negate_exact(numerator, kind)
        denominator = negate_exact(denominator, kind)

    reductor = gcd(numerator, denominator)
    if reductor > 1:
        numerator //= reductor
        denominator //= reductor
    return numerator, denominator


# =============================================================================
# BASE FRACTION
# =============================================================================


class BaseFraction(BaseModel):
    """
    Несократимая дробь над целыми разрядности KIND.

    Создаётся через value_of(), parse() или арифметические операции.
    Immutable модель (frozen=True): все операции возвращают новый экземпляр.
    """

    KIND: ClassVar[IntegerKind]

    ZERO: ClassVar[Any]
    ONE: ClassVar[Any]
    ONE_HALF: ClassVar[Any]
    ONE_THIRD: ClassVar[Any]
    ONE_QUARTER: ClassVar[Any]
    TWO_THIRDS: ClassVar[Any]
    THREE_QUARTERS: ClassVar[Any]

    numerator: StrictInt
    denominator: StrictInt

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data: Any) -> Any:
        """Проверка знаменателя и приведение к несократимому виду."""
        if not isinstance(data, dict):
            return data
        numerator = data.get("numerator")
        denominator = data.get("denominator")
        if not (_is_int(numerator) and _is_int(denominator)):
            return data
        cls.KIND.require(numerator, "Numerator")
        cls.KIND.require(denominator, "Denominator")
        if denominator == 0:
            raise InvalidArgumentError("Denominator must not be zero")
        numerator, denominator = _normalize_and_reduce(numerator, denominator, cls.KIND)
        return {**data, "numerator": numerator, "denominator": denominator}

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def value_of(cls, numerator: int, denominator: int = 1) -> Self:
        """
        Дробь numerator/denominator в несократимом виде.

        Args:
            numerator: Числитель (в пределах KIND)
            denominator: Знаменатель (в пределах KIND, не ноль; default: 1)

        Raises:
            InvalidArgumentError: Если аргумент отсутствует, вне KIND или denominator == 0
            IntegerOverflowError: Если нормализация знака переполняет KIND

        Examples:
            >>> str(Fraction.value_of(2, -4))
            '-1/2'
        """
        cls.KIND.require(numerator, "Numerator")
        cls.KIND.require(denominator, "Denominator")
        if denominator == 0:
            raise InvalidArgumentError("Denominator must not be zero")
        return cls._of(numerator, denominator)

    @classmethod
    def _of(cls, numerator: int, denominator: int) -> Self:
        # Внутренний конструктор: аргументы уже проверены
        numerator, denominator = _normalize_and_reduce(numerator, denominator, cls.KIND)
        return cls.model_construct(numerator=numerator, denominator=denominator)

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Разбор текста "<numerator>/<denominator>".

        Raises:
            InvalidArgumentError: Если text is None
            FractionFormatError: Если нет '/', компонент не целое KIND или знаменатель ноль

        Examples:
            >>> Fraction.parse(" 4 / 7 ") == Fraction.value_of(4, 7)
            True
        """
        require_not_none(text, "Text")
        numerator_text, separator, denominator_text = text.partition("/")
        if not separator:
            raise FractionFormatError(text)

        numerator_text = numerator_text.strip(_TRIMMED_CHARACTERS)
        denominator_text = denominator_text.strip(_TRIMMED_CHARACTERS)
        if not (
            _INTEGER_PATTERN.fullmatch(numerator_text)
            and _INTEGER_PATTERN.fullmatch(denominator_text)
        ):
            raise FractionFormatError(text)

        numerator = int(numerator_text)
        denominator = int(denominator_text)
        if not (cls.KIND.contains(numerator) and cls.KIND.contains(denominator)):
            raise FractionFormatError(text)
        if denominator == 0:
            raise FractionFormatError(text)
        return cls._of(numerator, denominator)

    # -------------------------------------------------------------------------
    # Проверка операндов
    # -------------------------------------------------------------------------

    def _require_fraction(self, other: Any) -> Self:
        require_not_none(other, "Other fraction")
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Expected {type(self).__name__}, got {type(other).__name__}"
            )
        return other

    def _require_value(self, value: Any) -> int:
        return self.KIND.require(value, "Value")

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: Self | int) -> Self:
        """
        Сумма с дробью или целым.

        При равных знаменателях складываются числители, иначе числители
        приводятся к НОК знаменателей.

        Raises:
            IntegerOverflowError: Если промежуточное значение не помещается в KIND
        """
        kind = self.KIND
        if _is_int(other):
            value = self._require_value(other)
            if value == 0:
                return self
            return self._of(
                add_exact(self.numerator, multiply_exact(value, self.denominator, kind), kind),
                self.denominator,
            )

        other = self._require_fraction(other)
        if other.numerator == 0:
            return self
        if self.denominator == other.denominator:
            return self._of(add_exact(self.numerator, other.numerator, kind), self.denominator)

        common_denominator = lcm(self.denominator, other.denominator, kind)
        coefficient = common_denominator // self.denominator
        other_coefficient = common_denominator // other.denominator
        return self._of(
            add_exact(
                multiply_exact(coefficient, self.numerator, kind),
                multiply_exact(other_coefficient, other.numerator, kind),
                kind,
            ),
            common_denominator,
        )

    def subtract(self, other: Self | int) -> Self:
        """
        Разность с дробью или целым.

        Raises:
            IntegerOverflowError: Если промежуточное значение не помещается в KIND
        """
        kind = self.KIND
        if _is_int(other):
            value = self._require_value(other)
            if value == 0:
                return self
            return self._of(
                subtract_exact(self.numerator, multiply_exact(value, self.denominator, kind), kind),
                self.denominator,
            )

        other = self._require_fraction(other)
        if other.numerator == 0:
            return self
        if self.denominator == other.denominator:
            return self._of(
                subtract_exact(self.numerator, other.numerator, kind), self.denominator
            )

        common_denominator = lcm(self.denominator, other.denominator, kind)
        coefficient = common_denominator // self.denominator
        other_coefficient = common_denominator // other.denominator
        return self._of(
            subtract_exact(
                multiply_exact(coefficient, self.numerator, kind),
                multiply_exact(other_coefficient, other.numerator, kind),
                kind,
            ),
            common_denominator,
        )

    def multiply(self, other: Self | int) -> Self:
        """
        Произведение с дробью или целым.

        Raises:
            IntegerOverflowError: Если произведение не помещается в KIND
        """
        kind = self.KIND
        if _is_int(other):
            value = self._require_value(other)
            if value == 0:
                return self.ZERO
            if value == 1:
                return self
            return self._of(multiply_exact(value, self.numerator, kind), self.denominator)

        other = self._require_fraction(other)
        if other.numerator == 0:
            return self.ZERO
        if other == self.ONE:
            return self
        return self._of(
            multiply_exact(self.numerator, other.numerator, kind),
            multiply_exact(self.denominator, other.denominator, kind),
        )

    def divide(self, other: Self | int) -> Self:
        """
        Частное от деления на дробь или целое.

        Raises:
            ZeroDivisionError: Если делитель равен нулю
            IntegerOverflowError: Если промежуточное значение не помещается в KIND
        """
        kind = self.KIND
        if _is_int(other):
            value = self._require_value(other)
            if value == 0:
                raise ZeroDivisionError("Division by zero")
            if value == 1:
                return self
            return self._of(self.numerator, multiply_exact(value, self.denominator, kind))

        other = self._require_fraction(other)
        if other.numerator == 0:
            raise ZeroDivisionError("Division by zero")
        if other == self.ONE:
            return self
        return self._of(
            multiply_exact(self.numerator, other.denominator, kind),
            multiply_exact(self.denominator, other.numerator, kind),
        )

    def reciprocal(self) -> Self:
        """
        Обратная дробь denominator/numerator.

        Raises:
            ZeroDivisionError: Если числитель равен нулю
        """
        if self.numerator == 0:
            raise ZeroDivisionError("Division by zero")
        return self._of(self.denominator, self.numerator)

    def negate(self) -> Self:
        """
        Противоположная дробь.

        Raises:
            IntegerOverflowError: Если numerator == KIND.min_value
        """
        return self._of(negate_exact(self.numerator, self.KIND), self.denominator)

    def abs(self) -> Self:
        """
        Абсолютное значение.

        Raises:
            IntegerOverflowError: Если numerator == KIND.min_value
        """
        if self.numerator < 0:
            return self._of(abs_exact(self.numerator, self.KIND), self.denominator)
        return self

    def pow(self, exponent: int) -> Self:
        """
        Целая степень; отрицательный показатель — степень обратной дроби.

        Raises:
            ZeroDivisionError: Если дробь равна нулю и exponent < 0
            IntegerOverflowError: Если степень не помещается в KIND
        """
        BIGINT.require(exponent, "Exponent")
        if exponent == 0:
            return self.ONE
        if exponent == 1:
            return self

        kind = self.KIND
        if exponent < 0:
            if self.numerator == 0:
                raise ZeroDivisionError("Division by zero")
            return self._of(
                pow_exact(self.denominator, -exponent, kind),
                pow_exact(self.numerator, -exponent, kind),
            )
        return self._of(
            pow_exact(self.numerator, exponent, kind),
            pow_exact(self.denominator, exponent, kind),
        )

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare_to(self, other: Self) -> int:
        """
        Сравнение: -1, 0 или 1.

        Числители умножаются на знаменатель другой дроби, делённый на НОД
        знаменателей, а не на сам знаменатель: меньше риск переполнения.

        Raises:
            IntegerOverflowError: Если перекрёстное произведение не помещается в KIND
        """
        other = self._require_fraction(other)
        kind = self.KIND
        reductor = gcd(self.denominator, other.denominator, kind)
        left = multiply_exact(self.numerator, other.denominator // reductor, kind)
        right = multiply_exact(self.denominator // reductor, other.numerator, kind)
        return (left > right) - (left < right)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.numerator == other.numerator and self.denominator == other.denominator

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.numerator, self.denominator))

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare_to(other) >= 0

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    def signum(self) -> int:
        """Знак дроби: -1, 0 или 1."""
        return (self.numerator > 0) - (self.numerator < 0)

    def is_integer(self) -> bool:
        """Является ли дробь целым числом."""
        return self.denominator == 1

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def to_decimal(self, scale: int | None = None, rounding: str = decimals.DEFAULT_ROUNDING) -> Decimal:
        """
        Десятичное значение дроби.

        Args:
            scale: Число дробных разрядов; None — точное значение
            rounding: Политика округления (используется при заданном scale)

        Raises:
            InexactResultError: Если scale is None, а десятичная запись бесконечна
                (знаменатель содержит простые множители кроме 2 и 5)
        """
        if scale is None:
            return decimals.exact_quotient(self.numerator, self.denominator)
        return decimals.round_ratio(self.numerator, self.denominator, scale, rounding)

    def round(self, rounding: str = decimals.DEFAULT_ROUNDING) -> int:
        """
        Округление до целого согласно политике.

        Raises:
            IntegerOverflowError: Если результат не помещается в KIND
        """
        return self.KIND.narrow(int(self.to_decimal(0, rounding)))

    def _exact_integer(self) -> int:
        if self.denominator != 1:
            raise InexactResultError(f"Not an integer: {self}")
        return self.numerator

    def int_value_exact(self) -> int:
        """
        Точное значение как int32.

        Raises:
            InexactResultError: Если дробь не целая
            IntegerOverflowError: Если значение не помещается в int32
        """
        return INT32.narrow(self._exact_integer())

    def long_value_exact(self) -> int:
        """Точное значение как int64."""
        return INT64.narrow(self._exact_integer())

    def big_integer_value_exact(self) -> int:
        """Точное целое значение произвольной точности."""
        return self._exact_integer()

    def double_value(self) -> float:
        """Ближайший float."""
        return self.numerator / self.denominator

    def float_value(self) -> float:
        return self.double_value()

    def __float__(self) -> float:
        return self.double_value()

    def __int__(self) -> int:
        # Усечение к нулю
        quotient = abs(self.numerator) // self.denominator
        return quotient if self.numerator >= 0 else -quotient

    def __bool__(self) -> bool:
        return self.numerator != 0

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.numerator}, {self.denominator})"

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def _is_operand(self, other: object) -> bool:
        return isinstance(other, type(self)) or _is_int(other)

    def __add__(self, other: Any) -> Self:
        return self.add(other) if self._is_operand(other) else NotImplemented

    def __radd__(self, other: Any) -> Self:
        return self.add(other) if _is_int(other) else NotImplemented

    def __sub__(self, other: Any) -> Self:
        return self.subtract(other) if self._is_operand(other) else NotImplemented

    def __rsub__(self, other: Any) -> Self:
        if not _is_int(other):
            return NotImplemented
        return self.value_of(other).subtract(self)

    def __mul__(self, other: Any) -> Self:
        return self.multiply(other) if self._is_operand(other) else NotImplemented

    def __rmul__(self, other: Any) -> Self:
        return self.multiply(other) if _is_int(other) else NotImplemented

    def __truediv__(self, other: Any) -> Self:
        return self.divide(other) if self._is_operand(other) else NotImplemented

    def __rtruediv__(self, other: Any) -> Self:
        if not _is_int(other):
            return NotImplemented
        return self.value_of(other).divide(self)

    def __pow__(self, exponent: Any) -> Self:
        return self.pow(exponent) if _is_int(exponent) else NotImplemented

    def __neg__(self) -> Self:
        return self.negate()

    def __abs__(self) -> Self:
        return self.abs()


def _install_constants(cls: type[BaseFraction]) -> None:
    """Именованные константы, вычисляемые один раз при импорте."""
    cls.ZERO = cls.value_of(0)
    cls.ONE = cls.value_of(1)
    cls.ONE_HALF = cls.value_of(1, 2)
    cls.ONE_THIRD = cls.value_of(1, 3)
    cls.ONE_QUARTER = cls.value_of(1, 4)
    cls.TWO_THIRDS = cls.value_of(2, 3)
    cls.THREE_QUARTERS = cls.value_of(3, 4)


# =============================================================================
# ВАРИАНТЫ РАЗРЯДНОСТИ
# =============================================================================


class Fraction(BaseFraction):
    """Дробь над int32."""

    KIND: ClassVar[IntegerKind] = INT32


class LongFraction(BaseFraction):
    """Дробь над int64."""

    KIND: ClassVar[IntegerKind] = INT64


class BigFraction(BaseFraction):
    """Дробь над целыми произвольной точности."""

    KIND: ClassVar[IntegerKind] = BIGINT


for _fraction_type in (Fraction, LongFraction, BigFraction):
    _install_constants(_fraction_type)
