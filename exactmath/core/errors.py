"""
Exceptions — Иерархия ошибок exactmath

Каждое исключение наследует подходящий builtin, поэтому вызывающий код может
ловить как конкретный тип, так и стандартный (ValueError, ArithmeticError).

Таксономия:
- InvalidArgumentError: отсутствующий/недопустимый аргумент
- IntegerOverflowError: результат не помещается в разрядность типа
- InexactResultError: точное преобразование невозможно без потери информации
- DomainViolation: значение вне области определения функции
- ConvergenceError: превышен лимит итераций вычислителя
- FractionFormatError: текст не соответствует грамматике "<int>/<int>"

Деление на ноль сигнализируется стандартным ZeroDivisionError.
"""


class InvalidArgumentError(ValueError):
    """Аргумент отсутствует или нарушает предусловие операции."""


class IntegerOverflowError(OverflowError):
    """
    Результат целочисленной операции не помещается в разрядность типа.

    Атрибут kind_name содержит имя разрядности (например, 'int32').
    """

    def __init__(self, message: str = "Integer overflow", kind_name: str | None = None):
        super().__init__(message)
        self.kind_name = kind_name


class InexactResultError(ArithmeticError):
    """Точное преобразование невозможно (дробная часть, бесконечная десятичная дробь)."""


class DomainViolation(ArithmeticError):
    """Аргумент вне области определения (чётный корень из отрицательного, ln(x ≤ 0))."""


class ConvergenceError(ArithmeticError):
    """Итерационный вычислитель не сошёлся за заданное число итераций."""


class FractionFormatError(ValueError):
    """Текст не является дробью вида "<numerator>/<denominator>"."""

    def __init__(self, text: str):
        super().__init__(f"Invalid fraction: {text!r}")
        self.text = text
