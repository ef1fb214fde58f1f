#!/usr/bin/env python3
"""
Pytest configuration and fixtures for compensated summation tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import struct
from fractions import Fraction

import numpy as np
import pytest
import torch

from compensated_summation import KahanBabuska, KahanBabuskaNeumaier


@pytest.fixture(params=[KahanBabuska, KahanBabuskaNeumaier], ids=["kb", "kbn"])
def accumulator_cls(request):
    """Parameterized fixture over both accumulator kinds."""
    return request.param


@pytest.fixture(params=[None, np.float32, np.float64, torch.float32, torch.float64],
                ids=["python", "np32", "np64", "torch32", "torch64"])
def dtype(request):
    """Parameterized fixture for the supported floating-point widths."""
    return request.param


@pytest.fixture
def cancellation_data():
    """Small terms absorbed and then exposed again by a huge cancelling pair."""
    return [1.0, 1e100, 1.0, -1e100]


@pytest.fixture
def challenging_float32():
    """Float32 data where naive summation loses the middle term."""
    return np.array([1e8, 1.0, -1e8], dtype=np.float32)


@pytest.fixture
def lognormal_data():
    """Values spanning a huge dynamic range, with random signs."""
    rng = np.random.default_rng(42)
    values = rng.lognormal(0.0, 40.0, 1000)
    signs = rng.choice([-1.0, 1.0], 1000)
    return (signs * values).tolist()


@pytest.fixture
def harmonic_float32():
    """Harmonic series data for accuracy testing."""
    n = 1000
    return (1.0 / np.arange(1, n + 1)).astype(np.float32)


@pytest.fixture
def ill_conditioned_data():
    """Ill-conditioned data spanning many orders of magnitude."""
    rng = np.random.default_rng(42)
    n = 1000

    exponents = rng.uniform(-10, 10, n)
    signs = rng.choice([-1, 1], n)
    data = signs * 10.0 ** exponents
    # Append the negated values so the exact sum is tiny compared to its terms
    return np.concatenate([data, -data[::-1], [1.0]]).tolist()


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def exact(value) -> Fraction:
        """Exact rational value of a floating value no wider than binary64."""
        return Fraction(float(value))

    @classmethod
    def exact_sum(cls, values) -> Fraction:
        """Exact rational sum of a sequence."""
        return sum((cls.exact(v) for v in values), Fraction(0))

    @staticmethod
    def reference_sum(values) -> float:
        """Correctly rounded binary64 sum."""
        return math.fsum(float(v) for v in values)

    @staticmethod
    def absolute_error(computed, reference) -> float:
        return abs(float(computed) - float(reference))


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "property: marks hypothesis property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        if "property" in item.name:
            item.add_marker(pytest.mark.property)


# Custom assertion helpers
def float_bits(value) -> bytes:
    """Bit pattern of a floating value, for bit-for-bit comparisons."""
    if isinstance(value, torch.Tensor):
        return value.cpu().numpy().tobytes()
    if isinstance(value, np.generic):
        return value.tobytes()
    return struct.pack("<d", value)


def assert_bitwise_equal(a, b):
    """Assert that two floating values have identical bit patterns."""
    assert float_bits(a) == float_bits(b), f"{a!r} and {b!r} differ bitwise"


def is_nan(value) -> bool:
    return math.isnan(float(value))
