"""
Error-free transformations for floating-point addition.

Each function returns a tuple ``(s, t)`` where ``s`` is the floating-point
result rounded to nearest and ``t`` is the rounding error, so that ``s + t``
equals the exact mathematical result.

The functions are generic over any floating value supporting ``+`` and ``-``
(Python floats, numpy scalars, 0-d torch tensors). Both operands must have the
same width; no casting is done here.
"""

from typing import Tuple, TypeVar

T = TypeVar("T")


def two_sum(a: T, b: T) -> Tuple[T, T]:
    """
    2Sum algorithm (Knuth, Møller).

    Computes ``s = fl(a + b)`` and the error ``t = (a + b) - s`` for any
    operands, whatever their magnitudes and signs.

    Args:
        a: First addend
        b: Second addend

    Returns:
        Tuple of (rounded_sum, error)
    """
    s = a + b
    bb = s - a
    error = (a - (s - bb)) + (b - bb)
    return s, error


def fast_two_sum(a: T, b: T) -> Tuple[T, T]:
    """
    Fast2Sum algorithm (Dekker).

    Same result as :func:`two_sum` in half the operations, but the error is
    exact only when one operand is zero or the exponent of ``a`` is at least
    the exponent of ``b`` (which ``|a| >= |b|`` guarantees). Otherwise the
    error term is silently wrong; use :func:`two_sum` for unordered operands.

    Args:
        a: Addend of larger magnitude
        b: Addend of smaller magnitude

    Returns:
        Tuple of (rounded_sum, error)
    """
    s = a + b
    error = b - (s - a)
    return s, error


def two_sub(a: T, b: T) -> Tuple[T, T]:
    """
    Subtraction counterpart of :func:`two_sum`.

    Returns ``s = fl(a - b)`` and ``t = (a - b) - s``; bit-identical to
    ``two_sum(a, -b)``.
    """
    s = a - b
    aa = s + b
    bb = aa - s
    error = (a - aa) - (b - bb)
    return s, error
