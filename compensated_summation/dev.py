"""
Alternative summation implementations for development use only.

Straight-loop versions of the accumulators and a few related algorithms,
used to cross-check ``core`` in the test suite and as baselines in the
benchmarks. Nothing here is part of the stable API.
"""

from typing import Iterable

from .eft import fast_two_sum, two_sum
from .numeric import infer_float_type, iter_values, resolve_float_type


def _prepare(values, dtype):
    if dtype is None:
        return infer_float_type(values)
    return resolve_float_type(dtype), values


def naive_sum(values: Iterable, dtype=None):
    """Left-to-right rounded addition, no compensation."""
    float_type, values = _prepare(values, dtype)
    cast = float_type.cast
    s = float_type.zero()
    with float_type.errstate():
        for x in iter_values(values):
            s = s + cast(x)
    return s


def classic_kahan_sum(values: Iterable, dtype=None):
    """
    Kahan's original compensated summation (1965).

    The correction assumes the running sum dominates each input, so it
    loses small terms absorbed by a much larger later one, e.g.
    ``[1.0, 1e100, 1.0, -1e100]`` sums to ``0.0``.
    """
    float_type, values = _prepare(values, dtype)
    cast = float_type.cast
    s = float_type.zero()
    c = float_type.zero()
    with float_type.errstate():
        for x in iter_values(values):
            y = cast(x) + c
            t = s + y
            c = y - (t - s)
            s = t
        return s + c


def kahan_babuska_sum(values: Iterable, dtype=None):
    """Alternative implementation of ``KahanBabuska.from_iterable(values).total()``."""
    float_type, values = _prepare(values, dtype)
    cast = float_type.cast
    s = float_type.zero()
    c = float_type.zero()
    with float_type.errstate():
        for x in iter_values(values):
            x = cast(x)
            t = s + x
            if abs(s) >= abs(x):
                c = c + (x - (t - s))
            else:
                c = c + (s - (t - x))
            s = t
        return s + c


def kahan_babuska_neumaier_sum(values: Iterable, dtype=None):
    """Alternative implementation of ``KahanBabuskaNeumaier.from_iterable(values).total()``."""
    float_type, values = _prepare(values, dtype)
    cast = float_type.cast
    s = float_type.zero()
    c = float_type.zero()
    with float_type.errstate():
        for x in iter_values(values):
            s, d = two_sum(s, cast(x))
            c = c + d
        return s + c


def abs_two_sum(a, b):
    """Alternative implementation of ``two_sum`` ordering the operands for ``fast_two_sum``."""
    if abs(a) >= abs(b):
        return fast_two_sum(a, b)
    return fast_two_sum(b, a)


def kahan_babuska_neumaier_abs_two_sum(values: Iterable, dtype=None):
    """Same as :func:`kahan_babuska_neumaier_sum`, using :func:`abs_two_sum`."""
    float_type, values = _prepare(values, dtype)
    cast = float_type.cast
    s = float_type.zero()
    c = float_type.zero()
    with float_type.errstate():
        for x in iter_values(values):
            s, d = abs_two_sum(s, cast(x))
            c = c + d
        return s + c
