"""
One-shot compensated reductions.

Convenience wrappers that reduce a whole sequence into a fresh accumulator
and return its total. Lists, tuples, generators, numpy arrays and torch
tensors are accepted; arrays and tensors are summed in their own dtype
unless ``dtype`` is given.
"""

from typing import Iterable

from .core import KahanBabuska, KahanBabuskaNeumaier
from .numeric import infer_float_type, iter_values, resolve_float_type


def kahan_babuska_sum(values: Iterable, dtype=None):
    """
    Compute sum using Kahan-Babuska compensated summation.

    Args:
        values: Sequence of values to sum
        dtype: Floating-point width; inferred from ``values`` when omitted

    Returns:
        Compensated sum, in the summation width
    """
    return KahanBabuska.from_iterable(values, dtype).total()


def kahan_babuska_neumaier_sum(values: Iterable, dtype=None):
    """
    Compute sum using Kahan-Babuska-Neumaier compensated summation.

    Args:
        values: Sequence of values to sum
        dtype: Floating-point width; inferred from ``values`` when omitted

    Returns:
        Compensated sum, in the summation width
    """
    return KahanBabuskaNeumaier.from_iterable(values, dtype).total()


def compensated_mean(values: Iterable, dtype=None):
    """
    Compute mean using compensated summation.

    Args:
        values: Sequence of values
        dtype: Floating-point width; inferred from ``values`` when omitted

    Returns:
        Compensated mean, or zero for an empty sequence
    """
    if dtype is None:
        float_type, values = infer_float_type(values)
    else:
        float_type = resolve_float_type(dtype)

    acc = KahanBabuskaNeumaier(float_type)
    n = 0
    for value in iter_values(values):
        acc.add(value)
        n += 1

    if n == 0:
        return float_type.zero()
    with float_type.errstate():
        return float_type.cast(acc.total() / n)
