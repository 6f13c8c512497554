"""
Powers — Целая степень и корень n-й степени для Decimal

- power(x, n, scale): бинарное возведение в степень (square-and-multiply)
- root(x, n, scale): корень n-й степени методом Ньютона-Рафсона

Промежуточные значения считаются с запасом точности (PrecisionConfig),
округление до запрошенного scale выполняется один раз на выходе.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from exactmath.core.config import PrecisionConfig, resolve_config
from exactmath.core.contracts.checks import check_argument, require_not_none
from exactmath.core.errors import DomainViolation
from exactmath.core.math import decimals
from exactmath.core.math.checked import BIGINT, is_even, is_odd
from exactmath.core.math.evaluators import evaluate_newton_raphson

logger = logging.getLogger(__name__)


def _multiply_and_scale(x: Decimal, y: Decimal, scale: int) -> Decimal:
    return decimals.set_scale(decimals.multiply_exact(x, y), scale, ROUND_HALF_UP)


def power(x: Decimal, n: int, scale: int, config: PrecisionConfig | None = None) -> Decimal:
    """
    x в целой степени n с заданным scale.

    Args:
        x: Основание
        n: Показатель (любой знак; отрицательный → 1 / x^(-n))
        scale: Число дробных разрядов результата
        config: Конфигурация точности (pow_margin)

    Returns:
        x^n, округлённое до scale (ROUND_HALF_UP)

    Raises:
        InvalidArgumentError: Если x/n отсутствуют
        ZeroDivisionError: Если x == 0 и n < 0

    Examples:
        >>> power(Decimal("-9.9"), 3, 3)
        Decimal('-970.299')
    """
    decimals.require_decimal(x, "X")
    BIGINT.require(n, "N")
    config = resolve_config(config)

    if n == 0:
        return decimals.set_scale(decimals.ONE, scale)
    if n < 0:
        return decimals.divide(decimals.ONE, power(x, -n, scale, config), scale, ROUND_HALF_UP)

    internal_scale = scale + config.pow_margin

    result = decimals.ONE
    while n > 0:
        if is_odd(n):
            result = _multiply_and_scale(result, x, internal_scale)
        if n > 1:  # последнее возведение в квадрат не нужно
            x = _multiply_and_scale(x, x, internal_scale)
        n >>= 1

    return decimals.set_scale(result, scale, ROUND_HALF_UP)


def root(x: Decimal, n: int, scale: int, config: PrecisionConfig | None = None) -> Decimal:
    """
    Корень n-й степени из x с заданным scale.

    Поправка Ньютона: (yⁿ - x) / (n·yⁿ⁻¹), начальное приближение x / n.

    Args:
        x: Подкоренное значение
        n: Степень корня (положительная)
        scale: Число дробных разрядов результата
        config: Конфигурация точности (root_margin, max_iterations)

    Returns:
        x^(1/n), округлённое до scale

    Raises:
        InvalidArgumentError: Если n <= 0
        DomainViolation: Если n чётное и x < 0

    Examples:
        >>> root(Decimal(3), 2, 10)
        Decimal('1.7320508076')
    """
    decimals.require_decimal(x, "X")
    require_not_none(n, "N")
    BIGINT.require(n, "N")
    check_argument(n > 0, "N must be positive: {}", n)
    if is_even(n) and x < 0:
        raise DomainViolation(f"X must not be negative for even N: {x}, {n}")
    config = resolve_config(config)

    if n == 1:
        return decimals.set_scale(x, scale, ROUND_HALF_UP)
    if x.is_zero():
        return decimals.set_scale(decimals.ZERO, scale)
    if x == decimals.ONE:
        return decimals.set_scale(decimals.ONE, scale)

    decimal_n = Decimal(n)
    internal_scale = scale + config.root_margin

    def correction(y: Decimal) -> Decimal:
        # (y^n - x) / (n · y^(n-1))
        numerator = decimals.subtract_exact(decimals.power_exact(y, n), x)
        denominator = decimals.multiply_exact(decimal_n, decimals.power_exact(y, n - 1))
        return decimals.divide(numerator, denominator, internal_scale, ROUND_HALF_UP)

    initial_guess = decimals.divide(x, decimal_n, internal_scale, ROUND_HALF_UP)
    logger.debug("root: x=%s n=%d initial_guess=%s", x, n, initial_guess)
    return evaluate_newton_raphson(correction, x, initial_guess, scale, config)
