"""
Domain value objects.

Неизменяемые несократимые дроби фиксированной и произвольной разрядности.
"""

from exactmath.core.domain.fraction import BaseFraction, BigFraction, Fraction, LongFraction

__all__ = [
    "BaseFraction",
    "Fraction",
    "LongFraction",
    "BigFraction",
]
