"""
Evaluators — Итерационные вычислители произвольной точности

Два обобщённых драйвера над Decimal:
- evaluate_newton_raphson: итерация y ← y - f(y) до неподвижной точки
- evaluate_maclaurin: суммирование ряда до члена ниже порога точности

Функции параметризуются вызываемыми объектами (correction / term function),
не имеют состояния и безопасны для конкурентного вызова.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Порог остановки: |поправка| (или |член ряда|) <= 10^-(scale+1)
2. Результат округляется до scale (ROUND_HALF_UP) только на выходе
3. Лимит итераций отсутствует, пока PrecisionConfig.max_iterations не задан:
   сходимость — предусловие вызывающего кода
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction as Rational
from math import factorial
from typing import Callable

from exactmath.core.config import PrecisionConfig, resolve_config
from exactmath.core.contracts.checks import check_argument, require_not_none
from exactmath.core.errors import ConvergenceError
from exactmath.core.math import decimals

logger = logging.getLogger(__name__)

CorrectionFunction = Callable[[Decimal], Decimal]
TermFunction = Callable[[Decimal, int], Rational]


def _check_iterations(iterations: int, config: PrecisionConfig, evaluator: str) -> None:
    if config.max_iterations is not None and iterations >= config.max_iterations:
        raise ConvergenceError(
            f"{evaluator} did not converge within {config.max_iterations} iterations"
        )


# =============================================================================
# NEWTON-RAPHSON
# =============================================================================


def evaluate_newton_raphson(
    correction: CorrectionFunction,
    x: Decimal,
    initial_guess: Decimal,
    scale: int,
    config: PrecisionConfig | None = None,
) -> Decimal:
    """
    Метод Ньютона-Рафсона для Decimal.

    correction отображает текущую оценку y в поправку f(y)/f'(y)
    (например, (yⁿ - x) / (n·yⁿ⁻¹) для корня), уже посчитанную с запасом
    точности вызывающего кода.

    Args:
        correction: Функция поправки y -> f(y)/f'(y)
        x: Целевое значение (аргумент вычисляемой функции)
        initial_guess: Начальное приближение
        scale: Число дробных разрядов результата
        config: Конфигурация точности (лимит итераций)

    Returns:
        Неподвижная точка, округлённая до scale (ROUND_HALF_UP)

    Raises:
        InvalidArgumentError: Если аргументы отсутствуют
        ConvergenceError: Если задан max_iterations и он исчерпан
    """
    require_not_none(correction, "Correction function")
    decimals.require_decimal(x, "X")
    decimals.require_decimal(initial_guess, "Initial guess")
    config = resolve_config(config)

    acceptable_error = decimals.unit(scale + 1)
    value = initial_guess
    iterations = 0

    while True:
        delta = correction(value)
        value = decimals.subtract_exact(value, delta)
        iterations += 1
        if decimals.abs_exact(delta) <= acceptable_error:
            break
        _check_iterations(iterations, config, "Newton-Raphson")

    logger.debug("Newton-Raphson converged for x=%s in %d iterations (scale=%d)", x, iterations, scale)
    return decimals.set_scale(value, scale, ROUND_HALF_UP)


# =============================================================================
# MACLAURIN
# =============================================================================


def evaluate_maclaurin(
    term_function: TermFunction,
    x: Decimal,
    scale: int,
    config: PrecisionConfig | None = None,
) -> Decimal:
    """
    Сумма ряда Маклорена, заданного функцией k-го члена.

    Члены суммируются точно (рациональные числа), сумма округляется один раз.
    Суммирование останавливается после первого члена, модуль которого при
    scale + series_margin разрядах не превышает 10^-(scale+1).

    Args:
        term_function: (x, k) -> k-й член ряда (точное рациональное значение)
        x: Аргумент
        scale: Число дробных разрядов результата
        config: Конфигурация точности

    Returns:
        Сумма ряда, округлённая до scale (ROUND_HALF_UP)
    """
    require_not_none(term_function, "Term function")
    decimals.require_decimal(x, "X")
    config = resolve_config(config)

    acceptable_error = decimals.unit(scale + 1)
    term_scale = scale + config.series_margin
    value = Rational(0)
    k = 0

    while True:
        term = term_function(x, k)
        k += 1
        value += term
        rounded_term = decimals.round_ratio(term.numerator, term.denominator, term_scale)
        if decimals.abs_exact(rounded_term) <= acceptable_error:
            break
        _check_iterations(k, config, "Maclaurin series")

    logger.debug("Maclaurin series for x=%s summed %d terms (scale=%d)", x, k, scale)
    return decimals.round_ratio(value.numerator, value.denominator, scale, ROUND_HALF_UP)


# =============================================================================
# ЧЛЕНЫ РЯДОВ
# =============================================================================


def exp_term(x: Decimal, k: int) -> Rational:
    """
    k-й член ряда Маклорена для e^x: x^k / k!.

    Examples:
        >>> exp_term(Decimal("0.5"), 2)
        Fraction(1, 8)
    """
    check_argument(k >= 0, "Term index must not be negative: {}", k)
    return decimals.to_rational(x) ** k / factorial(k)
