"""
Floating-point widths the summation algorithms are generic over.

A :class:`FloatType` bundles what the accumulators need from a number type:
an additive identity, absolute value, copying and rounding of foreign values
into the width. Addition and subtraction are the value type's own operators;
casting every input first keeps them within a single width. Running values
are replaced, never updated in place.
"""

import contextlib
import itertools
import logging
from typing import Any, Iterable, Optional, Tuple

import numpy as np
import torch

logger = logging.getLogger(__name__)


class FloatType:
    """
    Capability set of one floating-point width.

    Subclasses provide ``zero`` and ``cast``; the remaining capabilities have
    defaults that suit immutable scalar types.
    """

    name = "float"

    def zero(self):
        """Additive identity of this width."""
        raise NotImplementedError

    def cast(self, value):
        """Round ``value`` to nearest in this width."""
        raise NotImplementedError

    def absolute(self, value):
        return abs(value)

    def copy(self, value):
        return value

    def errstate(self):
        """Context in which non-finite arithmetic stays silent."""
        return contextlib.nullcontext()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def _key(self):
        return (self.name,)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class PythonFloat(FloatType):
    """Python's built-in ``float`` (IEEE-754 binary64)."""

    name = "float64"

    def zero(self) -> float:
        return 0.0

    def cast(self, value) -> float:
        return float(value)

    def __repr__(self):
        return "PythonFloat()"


class NumpyFloat(FloatType):
    """
    A numpy floating scalar type (``float16``, ``float32``, ``float64``,
    ``longdouble``).

    Attributes:
        scalar_type: The numpy scalar class, e.g. ``np.float32``
    """

    def __init__(self, scalar_type):
        self.scalar_type = np.dtype(scalar_type).type
        self.name = np.dtype(self.scalar_type).name

    def zero(self):
        return self.scalar_type(0)

    def cast(self, value):
        if isinstance(value, self.scalar_type):
            return value
        if isinstance(value, torch.Tensor):
            if value.dim() != 0:
                raise ValueError(f"Expected a scalar, got a tensor of shape {tuple(value.shape)}")
            value = value.item()
        result = self.scalar_type(value)
        if not isinstance(result, self.scalar_type):
            raise ValueError(f"Expected a scalar, got an array of shape {np.shape(result)}")
        return result

    def errstate(self):
        return np.errstate(over="ignore", invalid="ignore")


class TorchFloat(FloatType):
    """
    0-dimensional torch tensors of a floating dtype.

    Attributes:
        dtype: Floating torch dtype
        device: Device holding the running values
    """

    def __init__(self, dtype=torch.float32, device=None):
        if not dtype.is_floating_point:
            raise TypeError(f"Expected a floating torch dtype, got {dtype}")
        self.dtype = dtype
        self.device = torch.device(device) if device is not None else torch.device("cpu")
        self.name = str(dtype).replace("torch.", "")

    def zero(self) -> torch.Tensor:
        return torch.zeros((), dtype=self.dtype, device=self.device)

    def cast(self, value) -> torch.Tensor:
        if isinstance(value, np.generic):
            value = value.item()
        tensor = torch.as_tensor(value, dtype=self.dtype, device=self.device)
        if tensor.dim() != 0:
            raise ValueError(f"Expected a scalar, got a tensor of shape {tuple(tensor.shape)}")
        return tensor

    def copy(self, value):
        return value.clone()

    def _key(self):
        return (self.dtype, self.device)

    def __repr__(self):
        return f"TorchFloat({self.dtype}, device={str(self.device)!r})"


PYTHON_FLOAT = PythonFloat()


def resolve_float_type(dtype=None, device=None) -> FloatType:
    """
    Map a dtype specification to a :class:`FloatType`.

    Args:
        dtype: ``None``/``float``/``"float"`` for Python floats, a
            :class:`FloatType`, a floating ``torch.dtype``, or anything
            ``numpy.dtype`` accepts with a floating kind
        device: Torch device, only used with torch dtypes

    Returns:
        The matching float type

    Raises:
        TypeError: If ``dtype`` does not name a floating-point width
    """
    if isinstance(dtype, FloatType):
        return dtype
    if dtype is None or dtype is float or (isinstance(dtype, str) and dtype == "float"):
        return PYTHON_FLOAT
    if isinstance(dtype, torch.dtype):
        float_type = TorchFloat(dtype, device)
    else:
        try:
            np_dtype = np.dtype(dtype)
        except TypeError:
            raise TypeError(f"Unknown dtype: {dtype!r}") from None
        if np_dtype.kind != "f":
            raise TypeError(f"Expected a floating dtype, got {np_dtype}")
        float_type = NumpyFloat(np_dtype)
    logger.debug("Resolved dtype %r to %r", dtype, float_type)
    return float_type


def float_type_of(value: Any) -> FloatType:
    """
    Width of a single floating value.

    Raises:
        TypeError: If ``value`` is not a real floating or integer scalar
    """
    if isinstance(value, np.floating):
        return NumpyFloat(type(value))
    if isinstance(value, torch.Tensor):
        return TorchFloat(value.dtype, value.device)
    if isinstance(value, (float, int, np.integer)) and not isinstance(value, bool):
        return PYTHON_FLOAT
    raise TypeError(f"Cannot determine a floating-point width for {type(value).__name__}")


def iter_values(values: Iterable) -> Iterable:
    """Flatten numpy arrays and torch tensors; pass other iterables through."""
    if isinstance(values, (np.ndarray, torch.Tensor)):
        return values.reshape(-1)
    return values


def infer_float_type(values: Iterable, device=None) -> Tuple[FloatType, Iterable]:
    """
    Infer the width of a sequence of values.

    Arrays and tensors answer from their dtype (integer ones promote to
    float64); other iterables are peeked at their first element.

    Args:
        values: Values to be summed
        device: Torch device overriding the tensor's own

    Returns:
        Tuple of (float_type, values) where ``values`` is a flattened or
        re-chained iterable to consume in place of the argument
    """
    if isinstance(values, np.ndarray):
        dtype = values.dtype if values.dtype.kind == "f" else np.float64
        return NumpyFloat(dtype), values.reshape(-1)
    if isinstance(values, torch.Tensor):
        dtype = values.dtype if values.is_floating_point() else torch.float64
        return TorchFloat(dtype, device or values.device), values.reshape(-1)

    iterator = iter(values)
    try:
        first = next(iterator)
    except StopIteration:
        return PYTHON_FLOAT, ()
    float_type = float_type_of(first)
    if device is not None and isinstance(float_type, TorchFloat):
        float_type = TorchFloat(float_type.dtype, device)
    logger.debug("Inferred %r from first value of type %s", float_type, type(first).__name__)
    return float_type, itertools.chain([first], iterator)
