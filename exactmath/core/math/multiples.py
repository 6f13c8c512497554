"""
Multiples — Округление до кратного

ceil/floor/round "до ближайшего кратного base" для целых любой разрядности
и Decimal. Целочисленные варианты проходят через точное деление Decimal,
а не через float: двойной точности недостаточно для корректного результата
на границах int64.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. base строго положительный, иначе InvalidArgumentError
2. Результат кратен base
3. Целочисленный результат, не помещающийся в kind → IntegerOverflowError
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from exactmath.core.contracts.checks import require_not_none, validate_positive
from exactmath.core.math import decimals
from exactmath.core.math.checked import BIGINT, IntegerKind, Number


def round_to_multiple(
    number: Number,
    base: Number,
    rounding: str = decimals.DEFAULT_ROUNDING,
    kind: IntegerKind = BIGINT,
) -> Number:
    """
    Кратное base, ближайшее к number согласно политике округления.

    Вычисляется как base · round(number / base) при scale 0.

    Args:
        number: Округляемое значение (int или Decimal)
        base: Положительная база (int или Decimal)
        rounding: Политика округления (default: ROUND_HALF_UP)
        kind: Разрядность целочисленного результата

    Returns:
        Decimal, если хотя бы один аргумент Decimal; иначе int разрядности kind

    Raises:
        InvalidArgumentError: Если number/base is None или base <= 0
        IntegerOverflowError: Если целочисленный результат не помещается в kind

    Examples:
        >>> round_to_multiple(7, 5)
        5
        >>> round_to_multiple(Decimal("0.37"), Decimal("0.25"))
        Decimal('0.25')
    """
    require_not_none(number, "Number")
    require_not_none(base, "Base")
    decimals.require_rounding(rounding)

    if isinstance(number, Decimal) or isinstance(base, Decimal):
        number_decimal = decimals.to_decimal(number)
        base_decimal = decimals.to_decimal(base)
        validate_positive(base_decimal, "Base")
        quotient = decimals.divide(number_decimal, base_decimal, 0, rounding)
        return decimals.multiply_exact(base_decimal, quotient)

    kind.require(number, "Number")
    kind.require(base, "Base")
    validate_positive(base, "Base")
    quotient = decimals.round_ratio(number, base, 0, rounding)
    return kind.narrow(base * int(quotient))


def ceil_to_multiple(number: Number, base: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Наименьшее кратное base, не меньшее number.

    Examples:
        >>> ceil_to_multiple(7, 5)
        10
        >>> ceil_to_multiple(-7, 5)
        -5
    """
    return round_to_multiple(number, base, ROUND_CEILING, kind)


def floor_to_multiple(number: Number, base: Number, kind: IntegerKind = BIGINT) -> Number:
    """
    Наибольшее кратное base, не большее number.

    Examples:
        >>> floor_to_multiple(7, 5)
        5
        >>> floor_to_multiple(-7, 5)
        -10
    """
    return round_to_multiple(number, base, ROUND_FLOOR, kind)
