#!/usr/bin/env python3
"""
Unit tests for the one-shot reductions and the development baselines.

Tests the compensated_summation.algorithms and compensated_summation.dev modules.
"""

import math

import numpy as np
import pytest
import torch

from compensated_summation import (
    KahanBabuska,
    KahanBabuskaNeumaier,
    compensated_mean,
    kahan_babuska_neumaier_sum,
    kahan_babuska_sum,
)
from compensated_summation import dev
from tests.conftest import AccuracyChecker, assert_bitwise_equal

reductions = pytest.mark.parametrize(
    "reduce", [kahan_babuska_sum, kahan_babuska_neumaier_sum], ids=["kb", "kbn"]
)


@reductions
class TestReductions:
    """Test cases shared by kahan_babuska_sum and kahan_babuska_neumaier_sum."""

    def test_basic_functionality(self, reduce):
        values = [1.0, 2.0, 3.0, 4.0, 5.0]
        assert reduce(values) == 15.0

    def test_empty_input(self, reduce):
        result = reduce([])
        assert result == 0.0
        assert type(result) is float

    def test_single_element(self, reduce):
        assert reduce([42.5]) == 42.5

    def test_different_input_types(self, reduce):
        """Lists, tuples, generators, arrays and tensors all reduce."""
        assert reduce([1.0, 2.0, 3.0]) == 6.0
        assert reduce((1.0, 2.0, 3.0)) == 6.0
        assert reduce(x for x in [1.0, 2.0, 3.0]) == 6.0
        assert reduce(range(4)) == 6.0
        assert reduce(np.array([1.0, 2.0, 3.0])) == 6.0
        assert reduce(torch.tensor([1.0, 2.0, 3.0])).item() == 6.0

    def test_width_follows_input(self, reduce):
        assert type(reduce(np.array([1.0, 2.0], dtype=np.float32))) is np.float32
        assert type(reduce([np.float16(1.0), np.float16(2.0)])) is np.float16
        assert reduce(torch.tensor([1.0], dtype=torch.float64)).dtype == torch.float64
        assert type(reduce(np.arange(4))) is np.float64

    def test_explicit_dtype(self, reduce):
        values = [1e8, 1.0, -1e8]
        result = reduce(values, dtype=np.float32)
        assert type(result) is np.float32
        assert result == 1.0

    def test_multidimensional_array_is_flattened(self, reduce):
        values = np.arange(12, dtype=np.float64).reshape(3, 4)
        assert reduce(values) == 66.0

    def test_cancellation(self, reduce, cancellation_data):
        assert reduce(cancellation_data) == 2.0
        assert dev.naive_sum(cancellation_data) == 0.0

    def test_matches_accumulator(self, reduce, lognormal_data):
        cls = KahanBabuska if reduce is kahan_babuska_sum else KahanBabuskaNeumaier
        assert_bitwise_equal(reduce(lognormal_data), cls.from_iterable(lognormal_data).total())

    def test_precision_improvement(self, reduce, ill_conditioned_data):
        """Compensated sum is closer to the correctly rounded one than naive summation."""
        reference = AccuracyChecker.reference_sum(ill_conditioned_data)

        naive_error = abs(dev.naive_sum(ill_conditioned_data) - reference)
        compensated_error = abs(reduce(ill_conditioned_data) - reference)

        assert compensated_error <= naive_error
        assert compensated_error < 1e-9

    def test_harmonic_float32(self, reduce, harmonic_float32):
        """Float32 compensated sum is within one float32 rounding of the exact sum."""
        exact = AccuracyChecker.reference_sum(harmonic_float32)

        result = reduce(harmonic_float32)
        naive = dev.naive_sum(harmonic_float32)

        assert type(result) is np.float32
        assert abs(float(result) - exact) <= np.finfo(np.float32).eps * exact
        assert abs(float(result) - exact) <= abs(float(naive) - exact)

    def test_large_random_against_fsum(self, reduce):
        rng = np.random.default_rng(42)
        values = (rng.standard_normal(100000) * 10.0 ** rng.integers(-8, 8, 100000)).tolist()

        assert reduce(values) == pytest.approx(math.fsum(values), rel=1e-15, abs=1e-300)


class TestCompensatedMean:
    """Test cases for compensated_mean."""

    def test_basic_mean(self):
        assert compensated_mean([1.0, 2.0, 3.0, 4.0]) == 2.5

    def test_empty_input(self):
        assert compensated_mean([]) == 0.0
        assert type(compensated_mean([], dtype=np.float32)) is np.float32

    def test_cancellation(self, cancellation_data):
        assert compensated_mean(cancellation_data) == 0.5

    def test_width_follows_input(self):
        result = compensated_mean(np.array([1.0, 2.0], dtype=np.float32))
        assert type(result) is np.float32
        assert result == np.float32(1.5)

        result = compensated_mean(torch.tensor([1.0, 2.0]))
        assert result.dtype == torch.float32
        assert result.item() == 1.5

    def test_explicit_dtype(self):
        result = compensated_mean([1e8, 1.0, -1e8, 3.0], dtype=np.float32)
        assert type(result) is np.float32
        assert result == np.float32(1.0)


class TestDevBaselines:
    """Test cases for the development-only reference implementations."""

    def test_naive_sum_loses_cancellation(self, cancellation_data):
        assert dev.naive_sum(cancellation_data) == 0.0

    def test_naive_sum_width(self):
        result = dev.naive_sum([1e8, 1.0, -1e8], dtype=np.float32)
        assert type(result) is np.float32
        assert result == 0.0

    def test_classic_kahan(self):
        assert dev.classic_kahan_sum([0.1] * 10) == 1.0
        assert dev.classic_kahan_sum([0.1, 0.2, -0.3]) == 0.0
        assert dev.classic_kahan_sum([1.0, 1e100, 1.0, -1e100]) == 0.0

    def test_kahan_babuska_variants_agree(self):
        """Both compensated formulations produce identical totals on finite data."""
        for seed in range(10):
            rng = np.random.default_rng(seed)
            values = (rng.lognormal(0.0, 40.0, 1000) * rng.choice([-1.0, 1.0], 1000)).tolist()

            kb = dev.kahan_babuska_sum(values)
            kbn = dev.kahan_babuska_neumaier_sum(values)
            kbn_abs = dev.kahan_babuska_neumaier_abs_two_sum(values)

            assert kb == kbn == kbn_abs

    def test_abs_two_sum(self):
        assert dev.abs_two_sum(1.0, 1e100) == (1e100, 1.0)
        assert dev.abs_two_sum(1e100, 1.0) == (1e100, 1.0)

    def test_empty_input(self):
        for func in (
            dev.naive_sum,
            dev.classic_kahan_sum,
            dev.kahan_babuska_sum,
            dev.kahan_babuska_neumaier_sum,
            dev.kahan_babuska_neumaier_abs_two_sum,
        ):
            assert func([]) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
