"""
Checked Arithmetic — Арифметика с контролем переполнения

Модуль обеспечивает точные операции над целыми фиксированной разрядности:
- IntegerKind: описание разрядности (int16/int32/int64 или неограниченная)
- add/subtract/multiply/negate/abs/increment/decrement/pow с контролем переполнения
- Точные сужающие преобразования (to_int_exact, to_long_exact, ...)
- Перегрузки для Decimal (не переполняются; существуют для единообразия вызовов)

Переполнение определяется расширением: результат вычисляется в неограниченном
int и проверяется на границы разрядности. Wraparound не используется никогда.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат либо точный, либо IntegerOverflowError — без молчаливого усечения
2. negate_exact/abs_exact падают ровно для MIN_VALUE разрядности
3. Для BIGINT переполнение невозможно
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Union

from exactmath.core.contracts.checks import (
    check_argument,
    require_not_none,
    validate_finite,
    validate_non_negative,
)
from exactmath.core.errors import InexactResultError, IntegerOverflowError
from exactmath.core.math import decimals

Number = Union[int, Decimal]


# =============================================================================
# РАЗРЯДНОСТИ
# =============================================================================


@dataclass(frozen=True)
class IntegerKind:
    """
    Разрядность целого числа со знаком.

    bits=None означает неограниченную разрядность (произвольная точность).
    """

    name: str
    bits: int | None = None

    @property
    def bounded(self) -> bool:
        return self.bits is not None

    @property
    def min_value(self) -> int | None:
        return None if self.bits is None else -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int | None:
        return None if self.bits is None else (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        """Помещается ли value в разрядность."""
        if self.bits is None:
            return True
        return self.min_value <= value <= self.max_value

    def narrow(self, value: int) -> int:
        """
        Сужение математического результата до разрядности.

        Raises:
            IntegerOverflowError: Если value не помещается
        """
        if not self.contains(value):
            raise IntegerOverflowError(f"Integer overflow ({self.name}): {value}", self.name)
        return value

    def require(self, value: int, name: str) -> int:
        """
        Проверка операнда: int (не bool) в пределах разрядности.

        Raises:
            InvalidArgumentError: Если value не int или вне диапазона
        """
        require_not_none(value, name)
        check_argument(
            isinstance(value, int) and not isinstance(value, bool),
            "{} must be an int, got {!r}",
            name,
            value,
        )
        check_argument(self.contains(value), "{} does not fit {}: {}", name, self.name, value)
        return value

    def __str__(self) -> str:
        return self.name


INT16: Final[IntegerKind] = IntegerKind("int16", 16)
INT32: Final[IntegerKind] = IntegerKind("int32", 32)
INT64: Final[IntegerKind] = IntegerKind("int64", 64)
BIGINT: Final[IntegerKind] = IntegerKind("bigint")


def _is_decimal(*values: object) -> bool:
    return any(isinstance(value, Decimal) for value in values)


# =============================================================================
# CHECKED ОПЕРАЦИИ
# =============================================================================


def add_exact(x: Number, y: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Сумма с контролем переполнения.

    Args:
        x: Первое слагаемое
        y: Второе слагаемое
        kind: Разрядность операндов и результата (для Decimal игнорируется)

    Returns:
        x + y

    Raises:
        IntegerOverflowError: Если сумма не помещается в kind

    Examples:
        >>> add_exact(2**31 - 2, 1, INT32)
        2147483647
        >>> add_exact(2**31 - 1, 1, INT32)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        IntegerOverflowError: Integer overflow (int32): 2147483648
    """
    if _is_decimal(x, y):
        return decimals.add_exact(x, y)
    return kind.narrow(kind.require(x, "X") + kind.require(y, "Y"))


def subtract_exact(x: Number, y: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Разность с контролем переполнения.

    Raises:
        IntegerOverflowError: Если разность не помещается в kind
    """
    if _is_decimal(x, y):
        return decimals.subtract_exact(x, y)
    return kind.narrow(kind.require(x, "X") - kind.require(y, "Y"))


def multiply_exact(x: Number, y: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Произведение с контролем переполнения.

    Raises:
        IntegerOverflowError: Если произведение не помещается в kind
    """
    if _is_decimal(x, y):
        return decimals.multiply_exact(x, y)
    return kind.narrow(kind.require(x, "X") * kind.require(y, "Y"))


def negate_exact(x: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Смена знака.

    Raises:
        IntegerOverflowError: Если x == kind.min_value
    """
    if _is_decimal(x):
        return decimals.negate_exact(x)
    return kind.narrow(-kind.require(x, "X"))


def abs_exact(x: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Абсолютное значение.

    Raises:
        IntegerOverflowError: Если x == kind.min_value
    """
    if _is_decimal(x):
        return decimals.abs_exact(x)
    return kind.narrow(abs(kind.require(x, "X")))


def increment_exact(x: int, kind: IntegerKind = BIGINT) -> int:
    """x + 1 с контролем переполнения."""
    return kind.narrow(kind.require(x, "X") + 1)


def decrement_exact(x: int, kind: IntegerKind = BIGINT) -> int:
    """x - 1 с контролем переполнения."""
    return kind.narrow(kind.require(x, "X") - 1)


def pow_exact(base: int, exponent: int, kind: IntegerKind = BIGINT) -> int:
    """
    Неотрицательная целая степень с контролем переполнения.

    Raises:
        InvalidArgumentError: Если exponent < 0
        IntegerOverflowError: Если результат не помещается в kind
    """
    kind.require(base, "Base")
    BIGINT.require(exponent, "Exponent")
    validate_non_negative(exponent, "Exponent")
    if exponent == 0:
        return 1
    if kind.bounded and abs(base) > 1 and exponent >= kind.bits:
        # |base|^exponent >= 2^bits — заведомо вне диапазона, не считаем огромную степень
        raise IntegerOverflowError(f"Integer overflow ({kind.name}): {base}^{exponent}", kind.name)
    return kind.narrow(base**exponent)


def abs_difference(x: Number, y: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    |x - y| с контролем переполнения.

    Raises:
        IntegerOverflowError: Если разность или её модуль не помещается в kind
    """
    return abs_exact(subtract_exact(x, y, kind), kind)


# =============================================================================
# ЧЁТНОСТЬ И ЗНАК
# =============================================================================


def is_even(x: int) -> bool:
    """Чётно ли x."""
    return (BIGINT.require(x, "X") & 1) == 0


def is_odd(x: int) -> bool:
    """Нечётно ли x."""
    return (BIGINT.require(x, "X") & 1) != 0


def signum(x: Number | float) -> int:
    """
    Знак числа: -1, 0 или 1.

    Raises:
        InvalidArgumentError: Если x is None или NaN
    """
    require_not_none(x, "X")
    if isinstance(x, Decimal):
        return decimals.signum(x)
    if isinstance(x, float):
        check_argument(not math.isnan(x), "X must not be NaN")
    return (x > 0) - (x < 0)


# =============================================================================
# ТОЧНЫЕ СУЖАЮЩИЕ ПРЕОБРАЗОВАНИЯ
# =============================================================================


def narrow_exact(x: Number | float, kind: IntegerKind) -> int:
    """
    Точное преобразование в целое заданной разрядности.

    Args:
        x: int, Decimal или float
        kind: Целевая разрядность

    Returns:
        Целое значение x

    Raises:
        InvalidArgumentError: Если x is None или float не конечен
        InexactResultError: Если x имеет ненулевую дробную часть
        IntegerOverflowError: Если значение не помещается в kind
    """
    require_not_none(x, "X")
    if isinstance(x, Decimal):
        decimals.require_decimal(x, "X")
        if x != x.to_integral_value():
            raise InexactResultError(f"Not an integer: {x}")
        value = int(x)
    elif isinstance(x, float):
        validate_finite(x, "X")
        if not x.is_integer():
            raise InexactResultError(f"Not an integer: {x}")
        value = int(x)
    else:
        value = BIGINT.require(x, "X")
    return kind.narrow(value)


def to_short_exact(x: Number | float) -> int:
    """Точное преобразование в int16."""
    return narrow_exact(x, INT16)


def to_int_exact(x: Number | float) -> int:
    """Точное преобразование в int32."""
    return narrow_exact(x, INT32)


def to_long_exact(x: Number | float) -> int:
    """Точное преобразование в int64."""
    return narrow_exact(x, INT64)


def to_big_integer_exact(x: Number | float) -> int:
    """Точное преобразование в целое произвольной точности."""
    return narrow_exact(x, BIGINT)


# =============================================================================
# СРАВНЕНИЕ С ТОЛЕРАНТНОСТЬЮ
# =============================================================================


def equals_within(x: float, y: float, tolerance: float) -> bool:
    """
    Равенство float с абсолютной толерантностью: |x - y| <= tolerance.

    Raises:
        InvalidArgumentError: Если x, y или tolerance не конечны, либо tolerance < 0

    Examples:
        >>> equals_within(1.0, 1.05, 0.1)
        True
        >>> equals_within(1.0, 1.5, 0.1)
        False
    """
    validate_finite(x, "X")
    validate_finite(y, "Y")
    validate_finite(tolerance, "Tolerance")
    validate_non_negative(tolerance, "Tolerance")
    return abs(x - y) <= tolerance
