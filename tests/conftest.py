#!/usr/bin/env python3
"""
Pytest configuration and fixtures for KBN summation tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import sys
import os

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kbnsum import config as kbn_config


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    return seed


@pytest.fixture
def simple_data():
    """Simple test data for basic functionality tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def canonical_cancellation():
    """The classic case naive summation gets wrong: exact answer is 2."""
    return [1.0, 1e100, 1.0, -1e100]


@pytest.fixture
def wide_range_data():
    """Mostly positive values spanning ~16 orders of magnitude."""
    rng = np.random.RandomState(42)
    n = 2000
    exponents = rng.uniform(-8, 8, n)
    signs = np.where(rng.uniform(size=n) < 0.8, 1.0, -1.0)
    return signs * 10.0 ** exponents


@pytest.fixture
def ill_conditioned_lanes():
    """Stack of vectors whose columns cancel catastrophically."""
    rng = np.random.RandomState(7)
    n, width = 64, 8
    exponents = rng.uniform(-20, 20, (n, width))
    signs = rng.choice([-1.0, 1.0], (n, width))
    data = signs * 10.0 ** exponents
    data[-1] = -data[:-1].sum(axis=0)
    return data


def _numacc(first: float, low: float, high: float, pairs: int) -> np.ndarray:
    values = np.empty(2 * pairs + 1)
    values[0] = first
    values[1::2] = low
    values[2::2] = high
    return values


# NIST StRD univariate "NumAcc" datasets: (values, certified mean,
# certified standard deviation, relative tolerance)
NUMACC_DATASETS = {
    "acc1": (np.array([10000001.0, 10000003.0, 10000002.0]), 10000002.0, 1.0, 1e-16),
    "acc2": (_numacc(1.2, 1.1, 1.3, 500), 1.2, 0.1, 1e-14),
    "acc3": (_numacc(1000000.2, 1000000.1, 1000000.3, 500), 1000000.2, 0.1, 1e-9),
    "acc4": (_numacc(10000000.2, 10000000.1, 10000000.3, 500), 10000000.2, 0.1, 1e-8),
}


@pytest.fixture(params=sorted(NUMACC_DATASETS))
def numacc_dataset(request):
    """Parameterized fixture over the reference accuracy datasets."""
    values, certified_mean, certified_std, tolerance = NUMACC_DATASETS[request.param]
    return request.param, values.copy(), certified_mean, certified_std, tolerance


@pytest.fixture
def vector_threshold(monkeypatch):
    """Set the blocked-product threshold for one test."""
    def _set(value: int):
        monkeypatch.setattr(kbn_config, "PRODUCT_VECTOR_THRESHOLD", value)
    return _set


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def relative_error(computed: float, reference: float) -> float:
        """Calculate relative error."""
        if reference == 0:
            return abs(computed)
        return abs(computed - reference) / abs(reference)

    @staticmethod
    def relative_accuracy_status(result: float, expected: float,
                                 relative_error: float) -> int:
        """
        Decide whether a result is within the margin of error.

        Returns:
            0 within tolerance, -1 when the expected value is subnormal,
            1 for a mismatch or an unexpected NaN/Inf
        """
        r_nan, e_nan = math.isnan(result), math.isnan(expected)
        r_inf, e_inf = math.isinf(result), math.isinf(expected)
        ae = abs(expected)

        if r_nan or e_nan:
            return 1 if r_nan != e_nan else 0
        if r_inf or e_inf:
            r_sign = math.copysign(1, result) if r_inf else 0
            e_sign = math.copysign(1, expected) if e_inf else 0
            return 1 if r_sign != e_sign else 0
        if 0 < ae < sys.float_info.min:
            return -1
        if expected != 0.0:
            return 1 if abs(result - expected) / ae > relative_error else 0
        return 1 if abs(result) > relative_error else 0


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
        "markers", "accuracy: marks tests against reference datasets"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "large" in item.name or "permutation" in item.name:
            item.add_marker(pytest.mark.slow)
        if "numacc" in item.name or "reference" in item.name:
            item.add_marker(pytest.mark.accuracy)


def is_negative_zero(value: float) -> bool:
    return value == 0.0 and math.copysign(1.0, value) < 0


# Custom assertion helpers
def assert_relative_error(computed, reference, max_relative_error):
    """Assert that relative error is within bounds."""
    if reference == 0:
        assert abs(computed) <= max_relative_error
    else:
        relative_error = abs(computed - reference) / abs(reference)
        assert relative_error <= max_relative_error, (
            f"Relative error {relative_error} exceeds threshold {max_relative_error}\n"
            f"Computed: {computed}, Reference: {reference}"
        )
