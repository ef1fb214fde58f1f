#!/usr/bin/env python3
"""
Accuracy comparison benchmarks for compensated summation algorithms.

This script systematically tests the numerical accuracy of the summation
algorithms across challenging test cases, against a correctly rounded
reference computed with math.fsum.
"""

import math
import time
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from compensated_summation import kahan_babuska_sum, kahan_babuska_neumaier_sum
from compensated_summation import dev


class AccuracyBenchmark:
    """
    Accuracy benchmark suite for summation algorithms.
    """

    def __init__(self):
        self.algorithms = {
            'naive': dev.naive_sum,
            'classic_kahan': dev.classic_kahan_sum,
            'kahan_babuska': kahan_babuska_sum,
            'kahan_babuska_neumaier': kahan_babuska_neumaier_sum,
        }

        self.results = []

    def generate_test_case(self, case_type: str, size: int, dtype=np.float32) -> Tuple[np.ndarray, float]:
        """
        Generate test cases with a reference result.

        Args:
            case_type: Type of test case
            size: Array size
            dtype: Data type

        Returns:
            Tuple of (test_array, reference_result)
        """
        rng = np.random.default_rng(42)

        if case_type == 'absorbed_small_terms':
            # Small terms absorbed by a huge pair that later cancels
            data = np.ones(size, dtype=dtype)
            big = np.finfo(dtype).max / 4
            data[1] = big
            data[-1] = -big

        elif case_type == 'geometric_series':
            powers = np.arange(size, dtype=np.float64)
            data = (0.5 ** powers).astype(dtype)

        elif case_type == 'harmonic_series':
            denominators = np.arange(1, size + 1, dtype=np.float64)
            data = (1.0 / denominators).astype(dtype)

        elif case_type == 'pathological_cancellation':
            # Pattern: [1, -1+e, 1, -1+e, ...]
            epsilon = np.finfo(dtype).eps * 10
            data = np.zeros(size, dtype=dtype)
            data[::2] = 1.0
            data[1::2] = -1.0 + epsilon

        elif case_type == 'random_normal':
            data = rng.normal(0, 1, size).astype(dtype)

        elif case_type == 'lognormal':
            # Huge dynamic range with random signs
            sigma = 40.0 if dtype == np.float64 else 4.0
            data = (rng.lognormal(0.0, sigma, size) * rng.choice([-1, 1], size)).astype(dtype)

        elif case_type == 'ill_conditioned':
            exponents = rng.uniform(-10, 10, size)
            signs = rng.choice([-1, 1], size)
            data = (signs * 10.0 ** exponents).astype(dtype)

        else:
            raise ValueError(f"Unknown test case type: {case_type}")

        return data, math.fsum(data.astype(np.float64).tolist())

    def run_single_benchmark(self, test_name: str, data: np.ndarray, reference: float) -> Dict:
        """
        Run benchmark on a single test case.

        Args:
            test_name: Name of the test case
            data: Test data
            reference: Reference result

        Returns:
            Dictionary with benchmark results
        """
        results = {
            'test_name': test_name,
            'size': len(data),
            'reference_result': reference,
            'condition_number': self._estimate_condition_number(data),
        }

        for alg_name, algorithm in self.algorithms.items():
            start_time = time.perf_counter()
            result = float(algorithm(data))
            elapsed_time = time.perf_counter() - start_time

            absolute_error = abs(result - reference)
            if reference != 0:
                relative_error = absolute_error / abs(reference)
            else:
                relative_error = absolute_error

            results[f'{alg_name}_result'] = result
            results[f'{alg_name}_time'] = elapsed_time
            results[f'{alg_name}_abs_error'] = absolute_error
            results[f'{alg_name}_rel_error'] = relative_error

        return results

    def _estimate_condition_number(self, data: np.ndarray) -> float:
        """Estimate condition number for summation problem."""
        if len(data) == 0:
            return 1.0

        values = data.astype(np.float64).tolist()
        abs_sum = math.fsum(abs(v) for v in values)
        result_sum = abs(math.fsum(values))

        if result_sum == 0:
            return np.inf
        return abs_sum / result_sum

    def run_comprehensive_benchmark(self) -> pd.DataFrame:
        """
        Run benchmark across all test cases and sizes.

        Returns:
            DataFrame with all benchmark results
        """
        test_cases = [
            'absorbed_small_terms',
            'geometric_series',
            'harmonic_series',
            'pathological_cancellation',
            'random_normal',
            'lognormal',
            'ill_conditioned',
        ]

        sizes = [100, 1000, 10000]
        dtypes = [np.float32, np.float64]

        total_tests = len(test_cases) * len(sizes) * len(dtypes)
        print("Running accuracy benchmark...")
        print(f"Test cases: {len(test_cases)}")
        print(f"Sizes: {sizes}")
        print(f"Data types: {[dt.__name__ for dt in dtypes]}")
        print(f"Total combinations: {total_tests}")
        print()

        test_count = 0
        for case_type in test_cases:
            for size in sizes:
                for dtype in dtypes:
                    test_count += 1
                    test_name = f"{case_type}_{dtype.__name__}_{size}"
                    print(f"[{test_count}/{total_tests}] Running {test_name}...")

                    data, reference = self.generate_test_case(case_type, size, dtype)
                    result = self.run_single_benchmark(test_name, data, reference)
                    result['case_type'] = case_type
                    result['dtype'] = dtype.__name__
                    self.results.append(result)

        return pd.DataFrame(self.results)

    def analyze_results(self, df: pd.DataFrame) -> None:
        """
        Analyze and display benchmark results.

        Args:
            df: DataFrame with benchmark results
        """
        print("\n" + "=" * 80)
        print("ACCURACY BENCHMARK ANALYSIS")
        print("=" * 80)

        for dtype_name, dtype_df in df.groupby('dtype'):
            print(f"\nRELATIVE ERROR BY ALGORITHM ({dtype_name}):")
            print("-" * 70)
            print(f"{'Algorithm':<24} {'Mean Rel Error':<15} {'Median Rel Error':<17} {'Max Rel Error':<15}")
            print("-" * 70)

            for alg in self.algorithms:
                col = f'{alg}_rel_error'
                print(f"{alg:<24} {dtype_df[col].mean():<15.2e} "
                      f"{dtype_df[col].median():<17.2e} {dtype_df[col].max():<15.2e}")

        print("\nERROR BY TEST CASE TYPE:")
        print("-" * 40)

        for case_type in df['case_type'].unique():
            case_df = df[df['case_type'] == case_type]
            print(f"\n{case_type}:")
            for alg in self.algorithms:
                print(f"  {alg}: {case_df[f'{alg}_rel_error'].median():.2e}")

        print("\nPERFORMANCE COMPARISON:")
        print("-" * 30)
        print(f"{'Algorithm':<24} {'Mean Time (ms)':<15} {'Relative Speed':<15}")
        print("-" * 55)

        naive_time = df['naive_time'].mean()
        for alg in self.algorithms:
            mean_time = df[f'{alg}_time'].mean()
            print(f"{alg:<24} {mean_time * 1000:<15.3f} {naive_time / mean_time:<15.2f}x")

    def plot_results(self, df: pd.DataFrame, save_plots: bool = True) -> None:
        """
        Plot median relative error against array size.

        Args:
            df: DataFrame with benchmark results
            save_plots: Whether to save plots to files
        """
        fig, axes = plt.subplots(1, 2, figsize=(14, 6), sharey=True)

        for ax, (dtype_name, dtype_df) in zip(axes, df.groupby('dtype')):
            for alg in self.algorithms:
                size_errors = dtype_df.groupby('size')[f'{alg}_rel_error'].median()
                # Zero errors cannot be drawn on a log axis
                size_errors = size_errors.clip(lower=1e-20)
                ax.loglog(size_errors.index, size_errors.values, 'o-', label=alg, markersize=6)

            ax.set_xlabel('Array Size')
            ax.set_title(f'Accuracy vs Array Size ({dtype_name})')
            ax.grid(True, alpha=0.3)

        axes[0].set_ylabel('Median Relative Error')
        axes[0].legend()

        if save_plots:
            plt.savefig('accuracy_vs_size.png', dpi=300, bbox_inches='tight')
        plt.show()


def main():
    """Run the complete accuracy benchmark suite."""
    print("COMPENSATED SUMMATION LIBRARY - ACCURACY BENCHMARK")
    print("=" * 60)

    benchmark = AccuracyBenchmark()
    results_df = benchmark.run_comprehensive_benchmark()

    results_df.to_csv('accuracy_benchmark_results.csv', index=False)
    print("\nResults saved to accuracy_benchmark_results.csv")

    benchmark.analyze_results(results_df)
    benchmark.plot_results(results_df)

    print("\n" + "=" * 60)
    print("Accuracy benchmark completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
