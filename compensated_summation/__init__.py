"""
Compensated Summation Library

Summation of finite-precision floating-point numbers with much smaller
rounding error than naive left-to-right addition.

This library provides:
- Error-free transformations of a single addition (two_sum, fast_two_sum)
- Kahan-Babuska and Kahan-Babuska-Neumaier compensated accumulators
- One-shot compensated reductions over sequences, arrays and tensors
- Support for Python floats, numpy floating scalars and torch scalars
"""

import logging

from .eft import two_sum, fast_two_sum, two_sub
from .numeric import FloatType, resolve_float_type
from .core import (
    CompensatedAccumulator,
    KahanBabuska,
    KahanBabuskaNeumaier,
    KahanBabuška,
    KahanBabuškaNeumaier,
)
from .algorithms import (
    kahan_babuska_sum,
    kahan_babuska_neumaier_sum,
    compensated_mean,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__author__ = "Compensated Summation Contributors"

__all__ = [
    "two_sum",
    "fast_two_sum",
    "two_sub",
    "FloatType",
    "resolve_float_type",
    "CompensatedAccumulator",
    "KahanBabuska",
    "KahanBabuskaNeumaier",
    "KahanBabuška",
    "KahanBabuškaNeumaier",
    "kahan_babuska_sum",
    "kahan_babuska_neumaier_sum",
    "compensated_mean",
]
