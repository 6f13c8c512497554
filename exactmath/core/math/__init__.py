"""
Core math modules для exactmath

Точная целочисленная арифметика с контролем переполнения и функции
произвольной точности над Decimal.
"""

# Checked arithmetic
from exactmath.core.math.checked import (
    # Integer kinds
    BIGINT,
    INT16,
    INT32,
    INT64,
    IntegerKind,
    # Overflow-checked operations
    abs_difference,
    abs_exact,
    add_exact,
    decrement_exact,
    increment_exact,
    multiply_exact,
    negate_exact,
    pow_exact,
    subtract_exact,
    # Predicates
    equals_within,
    is_even,
    is_odd,
    signum,
    # Narrowing
    narrow_exact,
    to_big_integer_exact,
    to_int_exact,
    to_long_exact,
    to_short_exact,
)

# Decimal helpers
from exactmath.core.math.decimals import (
    DEFAULT_ROUNDING,
    ROUNDING_MODES,
    divide,
    fractional_part,
    integral_part,
    magnitude,
    set_scale,
)

# Divisibility
from exactmath.core.math.divisibility import gcd, lcm

# Multiples
from exactmath.core.math.multiples import (
    ceil_to_multiple,
    floor_to_multiple,
    round_to_multiple,
)

# Evaluators
from exactmath.core.math.evaluators import (
    evaluate_maclaurin,
    evaluate_newton_raphson,
    exp_term,
)

# Powers and special functions
from exactmath.core.math.powers import power, root
from exactmath.core.math.special_functions import ceil_ld, exp, floor_ld, ld, ln

__all__ = [
    # Checked — Integer kinds
    "BIGINT",
    "INT16",
    "INT32",
    "INT64",
    "IntegerKind",
    # Checked — Operations
    "abs_difference",
    "abs_exact",
    "add_exact",
    "decrement_exact",
    "increment_exact",
    "multiply_exact",
    "negate_exact",
    "pow_exact",
    "subtract_exact",
    # Checked — Predicates
    "equals_within",
    "is_even",
    "is_odd",
    "signum",
    # Checked — Narrowing
    "narrow_exact",
    "to_big_integer_exact",
    "to_int_exact",
    "to_long_exact",
    "to_short_exact",
    # Decimals
    "DEFAULT_ROUNDING",
    "ROUNDING_MODES",
    "divide",
    "fractional_part",
    "integral_part",
    "magnitude",
    "set_scale",
    # Divisibility
    "gcd",
    "lcm",
    # Multiples
    "ceil_to_multiple",
    "floor_to_multiple",
    "round_to_multiple",
    # Evaluators
    "evaluate_maclaurin",
    "evaluate_newton_raphson",
    "exp_term",
    # Powers
    "power",
    "root",
    # Special functions
    "ceil_ld",
    "exp",
    "floor_ld",
    "ld",
    "ln",
]
