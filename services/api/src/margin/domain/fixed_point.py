"""Fixed-point helpers for DeepBook margin values.

On-chain rates and ratios are integers scaled by FLOAT_SCALAR (1e9 == 1.0).
Arithmetic stays on Python ints; only normalize() produces a float.
"""

FLOAT_SCALAR = 1_000_000_000


def mul(a: int, b: int) -> int:
    """Multiply two scaled values, rounding down like the Move math module."""
    return (a * b) // FLOAT_SCALAR


def div(a: int, b: int) -> int:
    """Scaled quotient a / b, rounded down. Raises ZeroDivisionError on b == 0."""
    return (a * FLOAT_SCALAR) // b


def normalize(value: int) -> float:
    """Convert a scaled integer to a plain fraction (0.12 == 12%)."""
    return value / FLOAT_SCALAR
