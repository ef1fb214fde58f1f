#!/usr/bin/env python3
"""
Basic usage examples for the Compensated Summation Library.

This script demonstrates the error-free transformations and the two
compensated accumulators, and where naive summation goes wrong.
"""

import math

import numpy as np
import torch

from compensated_summation import (
    KahanBabuska,
    KahanBabuskaNeumaier,
    fast_two_sum,
    kahan_babuska_neumaier_sum,
    two_sum,
)
from compensated_summation import dev


def demonstrate_error_free_transform():
    """Show the exact rounding error of a single addition."""
    print("=" * 60)
    print("DEMONSTRATION: Error-Free Transformation")
    print("=" * 60)

    s, t = two_sum(0.1, 0.2)
    print(f"0.1 + 0.2 rounds to  {s!r}")
    print(f"rounding error       {t!r}")
    print()

    s, t = two_sum(1.0, 1e100)
    print(f"two_sum(1.0, 1e100)      = ({s!r}, {t!r})")
    s, t = fast_two_sum(1.0, 1e100)
    print(f"fast_two_sum(1.0, 1e100) = ({s!r}, {t!r})  <- |a| < |b|, error lost")
    print()


def demonstrate_precision_loss():
    """Show how standard summation loses precision."""
    print("=" * 60)
    print("DEMONSTRATION: Precision Loss in Standard Summation")
    print("=" * 60)

    data = [1.0, 1e100, 1.0, -1e100]
    print(f"Test data: {data}")
    print("Expected result: 2.0")
    print()

    print(f"Naive sum:                 {dev.naive_sum(data)}")
    print(f"Classic Kahan sum:         {dev.classic_kahan_sum(data)}")
    print(f"Kahan-Babuska:             {KahanBabuska.from_iterable(data).total()}")
    print(f"Kahan-Babuska-Neumaier:    {KahanBabuskaNeumaier.from_iterable(data).total()}")
    print()


def demonstrate_incremental_accumulation():
    """Feed values one at a time and read the total on demand."""
    print("=" * 60)
    print("DEMONSTRATION: Incremental Accumulation")
    print("=" * 60)

    acc = KahanBabuskaNeumaier()
    naive = 0.0
    for _ in range(1_000_000):
        acc += 0.1
        naive += 0.1

    print("One million additions of 0.1")
    print(f"Naive:        {naive!r}")
    print(f"Compensated:  {acc.total()!r}")
    print(f"math.fsum:    {math.fsum([0.1] * 1_000_000)!r}")
    print()


def demonstrate_precisions():
    """Summation in single precision with numpy and torch."""
    print("=" * 60)
    print("DEMONSTRATION: Single Precision")
    print("=" * 60)

    data = (1.0 / np.arange(1, 100_001)).astype(np.float32)
    reference = math.fsum(data.astype(np.float64).tolist())

    naive = dev.naive_sum(data)
    compensated = kahan_babuska_neumaier_sum(data)
    print("Harmonic series, 100000 float32 terms")
    print(f"Reference:    {reference:.10f}")
    print(f"Naive:        {float(naive):.10f}  (error {abs(float(naive) - reference):.2e})")
    print(f"Compensated:  {float(compensated):.10f}  (error {abs(float(compensated) - reference):.2e})")

    acc = KahanBabuskaNeumaier(torch.float32)
    acc.extend(torch.from_numpy(data[:1000]))
    print(f"torch.float32, first 1000 terms: {acc.total().item():.7f}")
    print()


def main():
    """Run all demonstrations."""
    demonstrate_error_free_transform()
    demonstrate_precision_loss()
    demonstrate_incremental_accumulation()
    demonstrate_precisions()


if __name__ == "__main__":
    main()
