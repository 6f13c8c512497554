"""
Decimals — Точная арифметика над decimal.Decimal

Decimal используется как десятичный тип произвольной точности.
Scale значения — число дробных разрядов (-exponent).

Модуль обеспечивает:
- Точные операции (add/subtract/multiply/negate/abs/power) в EXACT_CONTEXT
- Деление с явным scale и политикой округления (одно округление, без double rounding)
- Интроспекцию: scale, magnitude, integral/fractional part
- Точное десятичное представление рационального числа

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна операция не использует thread-local контекст decimal (prec=28)
2. Деление вычисляется над целыми числами и округляется ровно один раз
3. Результат divide/set_scale имеет ровно запрошенный scale
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from fractions import Fraction as Rational
from typing import Final

from exactmath.core.contracts.checks import check_argument, require_not_none
from exactmath.core.errors import InexactResultError

# =============================================================================
# КОНТЕКСТ И КОНСТАНТЫ
# =============================================================================

# Контекст точных вычислений: сложение и умножение никогда не округляются.
# Неточное деление в этом контексте недопустимо (MemoryError), поэтому
# деление выполняется только через divide()/round_ratio().
EXACT_CONTEXT: Final[Context] = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

DEFAULT_ROUNDING: Final[str] = ROUND_HALF_UP

ROUNDING_MODES: Final[frozenset[str]] = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    }
)

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)

# Маркеры дробного остатка для round_ratio: < 1/2, = 1/2, > 1/2
_BELOW_HALF: Final[Decimal] = Decimal("0.4")
_HALF: Final[Decimal] = Decimal("0.5")
_ABOVE_HALF: Final[Decimal] = Decimal("0.6")


# =============================================================================
# ВАЛИДАЦИЯ И ИНТРОСПЕКЦИЯ
# =============================================================================


def require_decimal(value: Decimal | None, name: str) -> Decimal:
    """
    Проверка, что значение — конечный Decimal.

    Raises:
        InvalidArgumentError: Если value is None, не Decimal, NaN или Inf
    """
    require_not_none(value, name)
    check_argument(isinstance(value, Decimal), "{} must be a Decimal, got {!r}", name, value)
    check_argument(value.is_finite(), "{} must be finite, got {}", name, value)
    return value


def require_rounding(rounding: str | None) -> str:
    """Проверка политики округления (одна из констант ROUND_* модуля decimal)."""
    require_not_none(rounding, "Rounding mode")
    check_argument(rounding in ROUNDING_MODES, "Unknown rounding mode: {}", rounding)
    return rounding


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Конверсия в Decimal без потери точности.

    Float не принимается: двоичное представление неточно, используйте str(value).

    Raises:
        InvalidArgumentError: Если value is None, float, bool или нечисловая строка
    """
    require_not_none(value, "Value")
    if isinstance(value, Decimal):
        return require_decimal(value, "Value")
    check_argument(
        isinstance(value, (int, str)) and not isinstance(value, bool),
        "Value must be a Decimal, int or str, got {!r}",
        value,
    )
    try:
        result = Decimal(value)
    except InvalidOperation:
        result = None
    check_argument(result is not None and result.is_finite(), "Invalid decimal: {!r}", value)
    return result


def _unsigned_zero(x: Decimal) -> Decimal:
    # -0 после округления (например, -0.4 → -0) выводится как 0
    return x.copy_abs() if x.is_zero() else x


def unit(scale: int) -> Decimal:
    """Decimal 1·10^(-scale), например unit(3) == Decimal('0.001')."""
    return Decimal((0, (1,), -scale))


def scale_of(x: Decimal) -> int:
    """Scale (число дробных разрядов) значения; отрицательный для 1E+3 и т.п."""
    return -x.as_tuple().exponent


def precision_of(x: Decimal) -> int:
    """Число значащих разрядов немасштабированного значения (для нуля — 1)."""
    return len(x.as_tuple().digits)


def magnitude(x: Decimal) -> int:
    """
    Magnitude — число разрядов слева от десятичной точки (precision - scale).

    Examples:
        >>> magnitude(Decimal("1000"))
        4
        >>> magnitude(Decimal("12.5"))
        2
        >>> magnitude(Decimal("0.05"))
        -1
    """
    require_decimal(x, "X")
    return precision_of(x) - scale_of(x)


def signum(x: Decimal) -> int:
    """Знак значения: -1, 0 или 1."""
    require_decimal(x, "X")
    if x.is_zero():
        return 0
    return -1 if x.is_signed() else 1


# =============================================================================
# ТОЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def add_exact(x: Decimal, y: Decimal) -> Decimal:
    """Точная сумма (Decimal не переполняется)."""
    return EXACT_CONTEXT.add(require_decimal(x, "X"), require_decimal(y, "Y"))


def subtract_exact(x: Decimal, y: Decimal) -> Decimal:
    """Точная разность."""
    return EXACT_CONTEXT.subtract(require_decimal(x, "X"), require_decimal(y, "Y"))


def multiply_exact(x: Decimal, y: Decimal) -> Decimal:
    """Точное произведение."""
    return EXACT_CONTEXT.multiply(require_decimal(x, "X"), require_decimal(y, "Y"))


def negate_exact(x: Decimal) -> Decimal:
    """Точная смена знака."""
    return EXACT_CONTEXT.minus(require_decimal(x, "X"))


def abs_exact(x: Decimal) -> Decimal:
    """Точное абсолютное значение."""
    return EXACT_CONTEXT.abs(require_decimal(x, "X"))


def power_exact(x: Decimal, n: int) -> Decimal:
    """
    Точная неотрицательная целая степень.

    Вычисляется над немасштабированным целым: (c·10^e)^n = c^n · 10^(e·n).
    """
    require_decimal(x, "X")
    check_argument(n >= 0, "Exponent must not be negative: {}", n)
    sign, digits, exponent = x.as_tuple()
    coefficient = int("".join(map(str, digits)))
    result = coefficient**n
    if sign and n % 2 == 1:
        result = -result
    return EXACT_CONTEXT.scaleb(Decimal(result), exponent * n)


# =============================================================================
# ОКРУГЛЕНИЕ И ДЕЛЕНИЕ
# =============================================================================


def round_ratio(
    numerator: int, denominator: int, scale: int, rounding: str = DEFAULT_ROUNDING
) -> Decimal:
    """
    Округление рационального numerator/denominator до заданного scale.

    Целочисленное деление даёт floor(q) и остаток; остаток заменяется
    маркером (0.4 / 0.5 / 0.6), сохраняющим его положение относительно
    половины, после чего quantize применяет политику округления.
    Результат совпадает с однократным округлением точного частного.

    Args:
        numerator: Числитель
        denominator: Знаменатель (не ноль)
        scale: Число дробных разрядов результата
        rounding: Политика округления (ROUND_*)

    Returns:
        Decimal со scale == scale

    Raises:
        ZeroDivisionError: Если denominator == 0
    """
    require_rounding(rounding)
    if denominator == 0:
        raise ZeroDivisionError("Division by zero")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    if scale >= 0:
        scaled_numerator = numerator * 10**scale
        scaled_denominator = denominator
    else:
        scaled_numerator = numerator
        scaled_denominator = denominator * 10 ** (-scale)

    quotient, remainder = divmod(scaled_numerator, scaled_denominator)
    if remainder == 0:
        return EXACT_CONTEXT.scaleb(Decimal(quotient), -scale)

    twice = 2 * remainder
    if twice < scaled_denominator:
        marker = _BELOW_HALF
    elif twice == scaled_denominator:
        marker = _HALF
    else:
        marker = _ABOVE_HALF

    # quotient — floor, поэтому quotient + marker лежит строго между quotient и quotient + 1
    approximation = EXACT_CONTEXT.add(Decimal(quotient), marker)
    rounded = approximation.quantize(ONE, rounding=rounding, context=EXACT_CONTEXT)
    return _unsigned_zero(EXACT_CONTEXT.scaleb(rounded, -scale))


def divide(x: Decimal, y: Decimal, scale: int, rounding: str = DEFAULT_ROUNDING) -> Decimal:
    """
    Деление с явным scale результата и политикой округления.

    Raises:
        ZeroDivisionError: Если y == 0
        InvalidArgumentError: Если x или y не конечные Decimal
    """
    require_decimal(x, "X")
    require_decimal(y, "Y")
    if y.is_zero():
        raise ZeroDivisionError("Division by zero")
    x_numerator, x_denominator = x.as_integer_ratio()
    y_numerator, y_denominator = y.as_integer_ratio()
    return round_ratio(x_numerator * y_denominator, x_denominator * y_numerator, scale, rounding)


def set_scale(x: Decimal, scale: int, rounding: str = DEFAULT_ROUNDING) -> Decimal:
    """Округление (или дополнение нулями) до ровно scale дробных разрядов."""
    require_decimal(x, "X")
    require_rounding(rounding)
    return _unsigned_zero(x.quantize(unit(scale), rounding=rounding, context=EXACT_CONTEXT))


def exact_quotient(numerator: int, denominator: int) -> Decimal:
    """
    Точное десятичное представление numerator/denominator.

    Знаменатель несократимой дроби должен раскладываться только на 2 и 5,
    иначе десятичная запись бесконечна. Результат имеет минимальный scale,
    при котором представление точное.

    Raises:
        ZeroDivisionError: Если denominator == 0
        InexactResultError: Если частное не представимо конечной десятичной дробью
    """
    if denominator == 0:
        raise ZeroDivisionError("Division by zero")
    ratio = Rational(numerator, denominator)
    remaining = ratio.denominator
    twos = fives = 0
    while remaining % 2 == 0:
        remaining //= 2
        twos += 1
    while remaining % 5 == 0:
        remaining //= 5
        fives += 1
    if remaining != 1:
        raise InexactResultError(
            f"Non-terminating decimal expansion: {ratio.numerator}/{ratio.denominator}"
        )
    scale = max(twos, fives)
    return EXACT_CONTEXT.scaleb(Decimal(ratio.numerator * 10**scale // ratio.denominator), -scale)


# =============================================================================
# ЦЕЛАЯ И ДРОБНАЯ ЧАСТИ
# =============================================================================


def integral_part(x: Decimal) -> Decimal:
    """
    Целая часть (округление к нулю), scale 0.

    Examples:
        >>> integral_part(Decimal("-2.7"))
        Decimal('-2')
    """
    require_decimal(x, "X")
    return x.quantize(ONE, rounding=ROUND_DOWN, context=EXACT_CONTEXT)


def fractional_part(x: Decimal) -> Decimal:
    """
    Дробная часть со знаком x: x - integral_part(x).

    Examples:
        >>> fractional_part(Decimal("-2.75"))
        Decimal('-0.75')
    """
    require_decimal(x, "X")
    return EXACT_CONTEXT.subtract(x, integral_part(x))


def to_rational(x: Decimal) -> Rational:
    """Точное рациональное значение Decimal."""
    return Rational(require_decimal(x, "X"))
