"""
Special Functions — exp, ln и двоичные логарифмы

- exp(x, scale): ряд Маклорена при |x| < 1, иначе разложение на целую
  и дробную части: e^x = (e^(1 + f/i))^i
- ln(x, scale): метод Ньютона с поправкой (e^y - x) / e^y при x < 1000,
  иначе ln(x) = m · ln(x^(1/m)), где m = magnitude(x)
- ceil_ld/floor_ld: целочисленные двоичные логарифмы через bit_length
- ld: двоичный логарифм float

Функции взаимно рекурсивны (ln → exp → power, ln → root → ln); рекурсия
конечна, т.к. каждое сведение уменьшает аргумент или показатель.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from exactmath.core.config import PrecisionConfig, resolve_config
from exactmath.core.contracts.checks import validate_finite, validate_positive
from exactmath.core.errors import DomainViolation
from exactmath.core.math import decimals
from exactmath.core.math.checked import BIGINT
from exactmath.core.math.evaluators import evaluate_maclaurin, evaluate_newton_raphson, exp_term
from exactmath.core.math.powers import power, root

logger = logging.getLogger(__name__)


# =============================================================================
# ДВОИЧНЫЕ ЛОГАРИФМЫ
# =============================================================================


def ceil_ld(x: int) -> int:
    """
    Наименьшее целое, не меньшее log2(x).

    Raises:
        InvalidArgumentError: Если x <= 0

    Examples:
        >>> ceil_ld(8), ceil_ld(9)
        (3, 4)
    """
    BIGINT.require(x, "X")
    validate_positive(x, "X")
    return (x - 1).bit_length()


def floor_ld(x: int) -> int:
    """
    Наибольшее целое, не большее log2(x).

    Raises:
        InvalidArgumentError: Если x <= 0

    Examples:
        >>> floor_ld(8), floor_ld(9)
        (3, 3)
    """
    BIGINT.require(x, "X")
    validate_positive(x, "X")
    return x.bit_length() - 1


def ld(x: float) -> float:
    """Двоичный логарифм конечного float."""
    validate_finite(x, "X")
    return math.log(x) / math.log(2.0)


# =============================================================================
# EXP
# =============================================================================


def exp(x: Decimal, scale: int, config: PrecisionConfig | None = None) -> Decimal:
    """
    e^x с заданным scale.

    При x >= 1 ошибка вычисления внутреннего показателя 1 + f/i усиливается
    возведением в степень i и величиной e^x. Поэтому к exp_margin добавляются
    разряды целой части e^x (не более 0.4343·i + 1) и разряды i.

    Args:
        x: Показатель
        scale: Число дробных разрядов результата
        config: Конфигурация точности (exp_margin)

    Returns:
        e^x, округлённое до scale (ROUND_HALF_UP)

    Examples:
        >>> exp(Decimal("2.0"), 6)
        Decimal('7.389056')
    """
    decimals.require_decimal(x, "X")
    config = resolve_config(config)

    if x.is_zero():
        return decimals.set_scale(decimals.ONE, scale)
    if x < 0:
        return decimals.divide(
            decimals.ONE, exp(decimals.negate_exact(x), scale, config), scale, ROUND_HALF_UP
        )

    internal_scale = scale + config.exp_margin

    if x < decimals.ONE:
        # Ряд Маклорена сходится быстро
        result = evaluate_maclaurin(exp_term, x, internal_scale, config)
        return decimals.set_scale(result, scale, ROUND_HALF_UP)

    # e^x = (e^(1 + f/i))^i, где i — целая, f — дробная часть x
    integral = decimals.integral_part(x)
    fractional = decimals.fractional_part(x)
    whole = int(integral)
    internal_scale += whole * 4343 // 10000 + 1 + len(str(whole))

    inner_exponent = decimals.add_exact(
        decimals.ONE, decimals.divide(fractional, integral, internal_scale, ROUND_HALF_UP)
    )
    logger.debug("exp: range reduction x=%s -> (e^%s)^%s", x, inner_exponent, integral)

    result = power(
        evaluate_maclaurin(exp_term, inner_exponent, internal_scale, config),
        whole,
        internal_scale,
        config,
    )
    return decimals.set_scale(result, scale, ROUND_HALF_UP)


# =============================================================================
# LN
# =============================================================================


def ln(x: Decimal, scale: int, config: PrecisionConfig | None = None) -> Decimal:
    """
    Натуральный логарифм с заданным scale.

    Args:
        x: Аргумент (строго положительный)
        scale: Число дробных разрядов результата
        config: Конфигурация точности (ln_margin, ln_reduction_threshold)

    Returns:
        ln(x), округлённый до scale (ROUND_HALF_UP)

    Raises:
        DomainViolation: Если x <= 0

    Examples:
        >>> ln(Decimal("0.5"), 6)
        Decimal('-0.693147')
    """
    decimals.require_decimal(x, "X")
    if x <= 0:
        raise DomainViolation(f"X must be positive: {x}")
    config = resolve_config(config)

    internal_scale = scale + config.ln_margin

    if x < config.ln_reduction_threshold:

        def correction(y: Decimal) -> Decimal:
            # (e^y - x) / e^y
            e_to_y = exp(y, internal_scale, config)
            return decimals.divide(
                decimals.subtract_exact(e_to_y, x), e_to_y, internal_scale, ROUND_HALF_UP
            )

        return evaluate_newton_raphson(correction, x, x, scale, config)

    # ln(x) = m · ln(x^(1/m)), x^(1/m) < 10
    magnitude = decimals.magnitude(x)
    logger.debug("ln: range reduction x=%s via root of degree %d", x, magnitude)
    reduced = root(x, magnitude, internal_scale, config)
    result = decimals.multiply_exact(Decimal(magnitude), ln(reduced, internal_scale, config))
    return decimals.set_scale(result, scale, ROUND_HALF_UP)
