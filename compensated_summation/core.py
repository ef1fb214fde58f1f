"""
Compensated summation accumulators.

This module contains the Kahan-Babuska and Kahan-Babuska-Neumaier
accumulators. Both keep a running sum and a running compensation term and
expose the same operations; they differ only in how the rounding error of
each step is obtained.
"""

from typing import Iterable

from .eft import two_sub, two_sum
from .numeric import FloatType, infer_float_type, iter_values, resolve_float_type


class CompensatedAccumulator:
    """
    Base class for compensated running sums.

    Inputs are cast to the accumulator's width before use, so an accumulator
    built for ``np.float32`` rounds every step in single precision.

    Attributes:
        sum: Running sum
        comp: Running compensation of the rounding error
        float_type: Width of ``sum`` and ``comp``
    """

    __slots__ = ("sum", "comp", "float_type")
    __hash__ = None

    def __init__(self, dtype=None, device=None):
        """
        Initialize an empty accumulator.

        Args:
            dtype: Floating-point width (see ``resolve_float_type``);
                defaults to Python ``float``
            device: Device for torch dtypes
        """
        self.float_type: FloatType = resolve_float_type(dtype, device)
        self.sum = self.float_type.zero()
        self.comp = self.float_type.zero()

    @classmethod
    def from_iterable(cls, values: Iterable, dtype=None, device=None):
        """
        Build an accumulator holding the compensated sum of ``values``.

        Equivalent to calling :meth:`add` on a fresh accumulator for each
        value in order. With ``dtype=None`` the width is taken from the
        values themselves.
        """
        if dtype is None:
            dtype, values = infer_float_type(values, device)
        acc = cls(dtype, device)
        acc.extend(values)
        return acc

    def _add(self, value):
        raise NotImplementedError

    def _sub(self, value):
        raise NotImplementedError

    def add(self, value):
        """Add ``value`` with compensation."""
        with self.float_type.errstate():
            self._add(self.float_type.cast(value))

    def sub(self, value):
        """Subtract ``value`` with compensation."""
        with self.float_type.errstate():
            self._sub(self.float_type.cast(value))

    def extend(self, values: Iterable):
        """Add every value of ``values`` in order."""
        cast = self.float_type.cast
        with self.float_type.errstate():
            for value in iter_values(values):
                self._add(cast(value))

    def total(self):
        """Get the estimated total sum."""
        with self.float_type.errstate():
            return self.sum + self.comp

    def copy(self):
        other = type(self).__new__(type(self))
        other.float_type = self.float_type
        other.sum = self.float_type.copy(self.sum)
        other.comp = self.float_type.copy(self.comp)
        return other

    def reset(self):
        """Reset the accumulator to zero."""
        self.sum = self.float_type.zero()
        self.comp = self.float_type.zero()

    def __iadd__(self, value):
        self.add(value)
        return self

    def __isub__(self, value):
        self.sub(value)
        return self

    def __add__(self, value):
        result = self.copy()
        result.add(value)
        return result

    def __sub__(self, value):
        result = self.copy()
        result.sub(value)
        return result

    def __float__(self):
        return float(self.total())

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (
            self.float_type == other.float_type
            and bool(self.sum == other.sum)
            and bool(self.comp == other.comp)
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(sum={float(self.sum)!r}, "
            f"comp={float(self.comp)!r}, dtype={self.float_type.name!r})"
        )


class KahanBabuska(CompensatedAccumulator):
    """
    Kahan-Babuska compensated summation.

    Each step derives the rounding error of ``sum + value`` from whichever
    operand has the larger magnitude and adds it to the compensation.

    Example:
        >>> acc = KahanBabuska()
        >>> for x in [1.0, 1e100, 1.0, -1e100]:
        ...     acc += x
        >>> acc.total()
        2.0
    """

    __slots__ = ()

    def _add(self, value):
        s = self.sum
        t = s + value
        absolute = self.float_type.absolute
        if absolute(s) >= absolute(value):
            correction = (s - t) + value
        else:
            correction = (value - t) + s
        self.comp = self.comp + correction
        self.sum = t

    def _sub(self, value):
        self._add(-value)


class KahanBabuskaNeumaier(CompensatedAccumulator):
    """
    Kahan-Babuska-Neumaier compensated summation.

    Each step obtains the exact rounding error from :func:`two_sum`, with no
    assumption on the relative magnitude of the running sum and the input.

    Example:
        >>> acc = KahanBabuskaNeumaier()
        >>> acc += 0.1
        >>> acc += 0.2
        >>> acc -= 0.3
        >>> acc.total() == 2.0 ** -55
        True
    """

    __slots__ = ()

    def _add(self, value):
        t, error = two_sum(self.sum, value)
        self.comp = self.comp + error
        self.sum = t

    def _sub(self, value):
        t, error = two_sub(self.sum, value)
        self.comp = self.comp + error
        self.sum = t


# Same classes, with the correct spelling of the second surname.
KahanBabuška = KahanBabuska
KahanBabuškaNeumaier = KahanBabuskaNeumaier
