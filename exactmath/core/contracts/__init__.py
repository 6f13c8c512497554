"""
Argument contracts.

Проверки предусловий публичных операций.
"""

from exactmath.core.contracts.checks import (
    check_argument,
    require_not_none,
    validate_finite,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    "check_argument",
    "require_not_none",
    "validate_finite",
    "validate_non_negative",
    "validate_positive",
]
