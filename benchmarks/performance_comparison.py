#!/usr/bin/env python3
"""
Performance comparison benchmarks for compensated summation algorithms.

This script measures the throughput of the accumulators and of their
straight-loop alternatives on wide-range lognormal data.
"""

import time
from typing import Callable, Dict

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from compensated_summation import KahanBabuska, KahanBabuskaNeumaier
from compensated_summation import dev


class PerformanceBenchmark:
    """
    Throughput benchmark suite for summation algorithms.
    """

    def __init__(self):
        self.algorithms = {
            'naive': dev.naive_sum,
            'KahanBabuska': lambda x: KahanBabuska.from_iterable(x).total(),
            'kahan_babuska_sum': dev.kahan_babuska_sum,
            'KahanBabuskaNeumaier': lambda x: KahanBabuskaNeumaier.from_iterable(x).total(),
            'kahan_babuska_neumaier_sum': dev.kahan_babuska_neumaier_sum,
            'kahan_babuska_neumaier_abs_two_sum': dev.kahan_babuska_neumaier_abs_two_sum,
        }

        self.results = []

    def benchmark_execution_time(self, func: Callable, data: list,
                                 num_runs: int = 5) -> Dict:
        """
        Benchmark execution time with multiple runs.

        Args:
            func: Function to benchmark
            data: Input data
            num_runs: Number of timed runs

        Returns:
            Dictionary with timing statistics
        """
        # Warm-up run
        func(data)

        times = []
        for _ in range(num_runs):
            start = time.perf_counter()
            func(data)
            times.append(time.perf_counter() - start)

        return {
            'mean_time': np.mean(times),
            'std_time': np.std(times),
            'min_time': np.min(times),
        }

    def run_scalability_benchmark(self) -> pd.DataFrame:
        """
        Benchmark every algorithm over increasing input sizes.

        Returns:
            DataFrame with timing results
        """
        rng = np.random.default_rng(42)
        values = rng.lognormal(0.0, 40.0, 100_000).tolist()

        for n in [1, 10, 100, 10_000, 100_000]:
            data = values[:n]
            print(f"Size {n}:")

            for alg_name, algorithm in self.algorithms.items():
                stats = self.benchmark_execution_time(algorithm, data)
                stats.update({
                    'algorithm': alg_name,
                    'size': n,
                    'throughput': n / stats['min_time'],
                })
                self.results.append(stats)
                print(f"  {alg_name:<36} {stats['min_time'] * 1e3:10.3f} ms")

        return pd.DataFrame(self.results)

    def analyze_scalability_results(self, df: pd.DataFrame) -> None:
        """Print throughput per algorithm relative to naive summation."""
        print("\n" + "=" * 80)
        print("THROUGHPUT (elements / second)")
        print("=" * 80)

        table = df.pivot(index='size', columns='algorithm', values='throughput')
        print(table.to_string(float_format=lambda v: f"{v:.3e}"))

        print("\nSLOWDOWN RELATIVE TO NAIVE (largest size):")
        largest = table.iloc[-1]
        for alg in self.algorithms:
            print(f"  {alg:<36} {largest['naive'] / largest[alg]:.2f}x")

    def plot_performance_results(self, df: pd.DataFrame, save_plots: bool = True) -> None:
        plt.figure(figsize=(12, 8))

        for alg in self.algorithms:
            alg_df = df[df['algorithm'] == alg]
            plt.loglog(alg_df['size'], alg_df['throughput'], 'o-', label=alg, markersize=6)

        plt.xlabel('Number of Elements')
        plt.ylabel('Throughput (elements / s)')
        plt.title('Compensated Summation Throughput')
        plt.legend()
        plt.grid(True, alpha=0.3)

        if save_plots:
            plt.savefig('throughput_vs_size.png', dpi=300, bbox_inches='tight')
        plt.show()


def main():
    """Run the performance benchmark suite."""
    print("COMPENSATED SUMMATION LIBRARY - PERFORMANCE BENCHMARK")
    print("=" * 60)

    benchmark = PerformanceBenchmark()
    results_df = benchmark.run_scalability_benchmark()

    results_df.to_csv('performance_benchmark_results.csv', index=False)
    print("\nResults saved to performance_benchmark_results.csv")

    benchmark.analyze_scalability_results(results_df)
    benchmark.plot_performance_results(results_df)


if __name__ == "__main__":
    main()
