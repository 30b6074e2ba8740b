#!/usr/bin/env python3
"""
Basic usage examples for the KBN Summation Library.

This script demonstrates compensated sums, the streaming accumulator and
the moment functions on inputs where naive floating-point arithmetic fails.
"""

import math
import time

import numpy as np

# Import the KBN summation library
import sys
sys.path.append('..')

from kbnsum import (
    CompensatedAccumulator,
    compensated_sum,
    cumulative_sum,
    lane_sum,
    mean,
    weighted_mean,
    corrected_sample_std,
    unweighted_unbiased_variance,
    weighted_unbiased_variance,
)


def demonstrate_precision_loss():
    """Show how standard summation loses precision."""
    print("=" * 60)
    print("DEMONSTRATION: Precision Loss in Standard Summation")
    print("=" * 60)

    data = [1.0, 1e100, 1.0, -1e100]
    print(f"Test data: {data}")
    print("Expected result: 2.0")
    print()

    print(f"Built-in sum result:  {sum(data)}")
    print(f"NumPy sum result:     {np.sum(data)}")
    print(f"KBN sum result:       {compensated_sum(data)}")
    print(f"Cumulative KBN sums:  {cumulative_sum(data)}")
    print()


def demonstrate_large_array_summation():
    """Compare summation accuracy on a large mixed-magnitude array."""
    print("=" * 60)
    print("DEMONSTRATION: Large Array Summation")
    print("=" * 60)

    np.random.seed(42)
    n = 200000
    large_values = np.random.normal(1e12, 1e11, n // 2)
    small_values = np.random.normal(0, 1, n // 2)
    data = np.concatenate([large_values, -large_values, small_values])
    np.random.shuffle(data)

    reference = math.fsum(data)
    print(f"Array size: {len(data):,}")
    print(f"Exact sum (math.fsum): {reference!r}")
    print()

    algorithms = [
        ("Built-in sum", sum),
        ("NumPy sum", lambda x: float(np.sum(x))),
        ("KBN sum", compensated_sum),
    ]

    print(f"{'Algorithm':<20} {'Time (ms)':<12} {'Relative Error':<15}")
    print("-" * 50)

    for name, algorithm in algorithms:
        start_time = time.time()
        result = algorithm(data)
        elapsed = (time.time() - start_time) * 1000

        relative_error = abs(result - reference) / abs(reference)
        print(f"{name:<20} {elapsed:8.2f}     {relative_error:.2e}")

    print()


def demonstrate_incremental_summation():
    """Show incremental summation with CompensatedAccumulator."""
    print("=" * 60)
    print("DEMONSTRATION: Incremental Summation")
    print("=" * 60)

    acc = CompensatedAccumulator()
    naive = 0.0
    for _ in range(1000000):
        acc.ingest(0.1)
        naive += 0.1

    print("Adding 0.1 one million times")
    print(f"Naive running sum: {naive!r}")
    print(f"Accumulator:       {acc.value()!r}")
    print()

    lanes = np.full((1000, 4), 0.1)
    print(f"Lane sum of 1000 x 4 vectors of 0.1: {lane_sum(lanes)}")
    print()


def demonstrate_moments():
    """Means and variances, weighted and unweighted."""
    print("=" * 60)
    print("DEMONSTRATION: Moments")
    print("=" * 60)

    print(f"weighted_mean([80, 90], [20, 30]) = {weighted_mean([80, 90], [20, 30])}")

    expanded = [2.0, 2.0, 4.0, 5.0, 5.0, 5.0]
    print(f"Unbiased variance of {expanded}: {unweighted_unbiased_variance(expanded)}")
    print(f"Repeat-weighted variance of [2, 4, 5] x [2, 1, 3]: "
          f"{weighted_unbiased_variance([2.0, 4.0, 5.0], [2, 1, 3])}")

    data = np.array([1000000.1, 1000000.3] * 500 + [1000000.2])
    naive_var = np.mean(data ** 2) - np.mean(data) ** 2
    print(f"Mean of NumAcc3-like data:  {mean(data)!r}")
    print(f"Corrected std (certified 0.1): {corrected_sample_std(data)!r}")
    print(f"Naive E[x^2] - E[x]^2 variance: {naive_var!r}")
    print()


def main():
    demonstrate_precision_loss()
    demonstrate_large_array_summation()
    demonstrate_incremental_summation()
    demonstrate_moments()


if __name__ == "__main__":
    main()
