"""
Divisibility — НОД и НОК

Бинарный алгоритм НОД (алгоритм Стейна) для целых любой разрядности:
только сдвиги, сравнения и checked-вычитание, без оператора деления.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. gcd(0, 0) == 0, lcm(0, 0) == 0
2. Результат gcd неотрицательный и не зависит от знаков операндов
3. lcm делит |x| на НОД до умножения (меньше риск переполнения)
4. MIN_VALUE разрядности как операнд → IntegerOverflowError (|MIN| не представим)
"""

from exactmath.core.math.checked import (
    BIGINT,
    IntegerKind,
    abs_exact,
    multiply_exact,
    subtract_exact,
)


def gcd(x: int, y: int, kind: IntegerKind = BIGINT) -> int:
    """
    Наибольший общий делитель (алгоритм Стейна).

    Args:
        x: Первый операнд
        y: Второй операнд
        kind: Разрядность операндов

    Returns:
        НОД(|x|, |y|); gcd(x, 0) == |x|

    Raises:
        IntegerOverflowError: Если x или y равен kind.min_value

    Examples:
        >>> gcd(12, 18)
        6
        >>> gcd(-4, 0)
        4
    """
    kind.require(x, "X")
    kind.require(y, "Y")
    if x < 0:
        x = abs_exact(x, kind)
    if y < 0:
        y = abs_exact(y, kind)

    if x == 0:
        return y
    if y == 0:
        return x
    if x == y:
        return y

    # Общая степень двойки
    shift = 0
    while ((x | y) & 1) == 0:
        x >>= 1
        y >>= 1
        shift += 1

    while (x & 1) == 0:
        x >>= 1

    # Инвариант цикла: x нечётно
    while True:
        while (y & 1) == 0:
            y >>= 1
        if x > y:
            x, y = y, x
        y = subtract_exact(y, x, kind)
        if y == 0:
            break

    return x << shift


def lcm(x: int, y: int, kind: IntegerKind = BIGINT) -> int:
    """
    Наименьшее общее кратное: (|x| / gcd(x, y)) · |y|.

    Raises:
        IntegerOverflowError: Если x или y равен kind.min_value или НОК не помещается в kind

    Examples:
        >>> lcm(4, 6)
        12
        >>> lcm(0, 0)
        0
    """
    kind.require(x, "X")
    kind.require(y, "Y")
    if x == 0 and y == 0:
        return 0
    return multiply_exact(abs_exact(x, kind) // gcd(x, y, kind), abs_exact(y, kind), kind)
