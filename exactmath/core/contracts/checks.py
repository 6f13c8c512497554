"""
Argument Checks — Проверки предусловий

Единая точка валидации аргументов на публичной границе операций.
Внутренние функции, получающие уже проверенные значения, повторно не валидируют.

Все проверки бросают InvalidArgumentError (подкласс ValueError).
"""

import math
from typing import Any, TypeVar

from exactmath.core.errors import InvalidArgumentError

T = TypeVar("T")


def check_argument(condition: bool, message: str, *args: Any) -> None:
    """
    Проверка произвольного условия на аргументы.

    Args:
        condition: Условие, которое должно быть истинным
        message: Сообщение об ошибке (str.format-шаблон)
        *args: Аргументы для шаблона сообщения

    Raises:
        InvalidArgumentError: Если condition ложно

    Examples:
        >>> check_argument(2 > 1, "Unreachable")
        >>> check_argument(False, "Base must be positive: {}", -3)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        InvalidArgumentError: Base must be positive: -3
    """
    if not condition:
        raise InvalidArgumentError(message.format(*args) if args else message)


def require_not_none(value: T | None, name: str) -> T:
    """
    Проверка, что обязательный аргумент передан.

    Returns:
        Сам value (для использования в выражениях)

    Raises:
        InvalidArgumentError: Если value is None
    """
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что float конечен (не NaN, не Inf).

    Raises:
        InvalidArgumentError: Если value NaN или ±Inf
    """
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value}")


def validate_positive(value: Any, name: str) -> None:
    """
    Валидация, что значение строго положительное.

    Работает для int, Decimal и float (float дополнительно проверяется на конечность).

    Raises:
        InvalidArgumentError: Если value is None или value <= 0
    """
    require_not_none(value, name)
    if isinstance(value, float):
        validate_finite(value, name)
    if not value > 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")


def validate_non_negative(value: Any, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Raises:
        InvalidArgumentError: Если value is None или value < 0
    """
    require_not_none(value, name)
    if isinstance(value, float):
        validate_finite(value, name)
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative, got {value}")
