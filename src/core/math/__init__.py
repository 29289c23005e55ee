"""
Core math modules: знаковое fixed-point ядро SD59x18

Математические примитивы с гарантией корректности на границах контейнера
signed-256: wide mul-div, знаковая арифметика, степени, корни,
логарифмы и экспоненты.
"""

# Errors
from src.core.math.errors import (
    DomainError,
    FixedPointError,
    FixedPointOverflowError,
)

# Wide Math (unsigned primitives)
from src.core.math.wide_math import (
    EXP2_FACTORS,
    UINT256_MAX,
    exp2_binary,
    most_significant_bit,
    mul_div,
    mul_div_fixed_point,
    mul_div_signed,
    sqrt_uint,
)

# SD59x18 kernel
from src.core.math.sd59x18 import (
    # Constants
    DECIMALS,
    E,
    EXP2_MAX_INPUT,
    EXP2_MIN_INPUT,
    EXP_MAX_INPUT,
    EXP_MIN_INPUT,
    HALF_SCALE,
    LOG2_10,
    LOG2_E,
    LOG2_ITERATIONS,
    MAX_INT,
    MAX_VALUE,
    MAX_WHOLE,
    MIN_INT,
    MIN_VALUE,
    MIN_WHOLE,
    PI,
    SCALE,
    SQRT_MAX_INPUT,
    UNIT,
    # Elementary
    abs_,
    add,
    avg,
    ceil,
    div,
    floor,
    frac,
    from_int,
    inv,
    mul,
    neg,
    sub,
    to_int,
    # Power / root
    gm,
    pow_,
    powu,
    sqrt,
    # Transcendental
    exp,
    exp2,
    ln,
    log2,
    log10,
)

__all__ = [
    # Errors
    "DomainError",
    "FixedPointError",
    "FixedPointOverflowError",
    # Wide Math
    "EXP2_FACTORS",
    "UINT256_MAX",
    "exp2_binary",
    "most_significant_bit",
    "mul_div",
    "mul_div_fixed_point",
    "mul_div_signed",
    "sqrt_uint",
    # SD59x18 — Constants
    "DECIMALS",
    "E",
    "EXP2_MAX_INPUT",
    "EXP2_MIN_INPUT",
    "EXP_MAX_INPUT",
    "EXP_MIN_INPUT",
    "HALF_SCALE",
    "LOG2_10",
    "LOG2_E",
    "LOG2_ITERATIONS",
    "MAX_INT",
    "MAX_VALUE",
    "MAX_WHOLE",
    "MIN_INT",
    "MIN_VALUE",
    "MIN_WHOLE",
    "PI",
    "SCALE",
    "SQRT_MAX_INPUT",
    "UNIT",
    # SD59x18 — Elementary
    "abs_",
    "add",
    "avg",
    "ceil",
    "div",
    "floor",
    "frac",
    "from_int",
    "inv",
    "mul",
    "neg",
    "sub",
    "to_int",
    # SD59x18 — Power / root
    "gm",
    "pow_",
    "powu",
    "sqrt",
    # SD59x18 — Transcendental
    "exp",
    "exp2",
    "ln",
    "log2",
    "log10",
]
