"""
exactmath — точная рациональная арифметика и функции произвольной точности.

Пакет содержит:
- core.math: checked-арифметика, НОД/НОК, округление до кратного,
  итерационные вычислители и функции pow/root/exp/ln над Decimal
- core.domain: неизменяемые дроби трёх разрядностей
"""

__version__ = "1.6.0"
