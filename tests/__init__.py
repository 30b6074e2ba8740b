"""
Test suite for the KBN Summation Library.

Test Structure:
- test_core.py: KBN step, accumulator and lane sum
- test_summation.py: plain, weighted and cumulative sums
- test_elementwise.py: products and broadcast arithmetic
- test_moments.py: means, variances, standard deviations
- test_config.py: environment-driven constants
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=kbnsum

    # Run only fast tests
    pytest -m "not slow"
"""
