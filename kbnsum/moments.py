"""
First and second moments built on compensated summation.

Every variance accepts an optional precomputed mean. ``None`` means the mean
was not supplied and is computed from the sample (weighted where weights
apply); any float given is used as is.

The two weighted variances are different estimators and are not
interchangeable:

- :func:`weighted_biased_variance` takes reliability weights and corrects by
  ``W / (W**2 - sum(w**2))``.
- :func:`weighted_unbiased_variance` takes integer repeat counts and divides
  by ``W - 1``, matching the unbiased variance of the expanded sample.

References:
    https://stats.stackexchange.com/questions/47325 (bias correction in
    weighted variance)
    https://mathoverflow.net/questions/11803 (unbiased estimate of the
    variance of a weighted mean)
"""

import math
from typing import Optional

import numpy as np

from .elementwise import broadcast_sub_in_place, product_in_place, product_no_check
from .errors import DivisionByZeroError
from .summation import _sum_sample
from .utils import (
    ArrayLike,
    as_float_array,
    as_repeat_weights,
    as_sample,
    length_parity,
    moment_length_check,
)

DIVISION_ZERO = "Division by zero is imminent"


def _weighted_mean_sample(x: np.ndarray, weights: Optional[np.ndarray]) -> float:
    if weights is None:
        return _sum_sample(x) / len(x)
    sum_weights = _sum_sample(weights)
    if sum_weights == 0.0:
        raise DivisionByZeroError("Sum of weights is zero")
    return _sum_sample(product_no_check(x, weights)) / sum_weights


def mean(x: ArrayLike) -> float:
    """
    Arithmetic average using compensated summation.

    Args:
        x: Sample values

    Returns:
        Mean; may be Inf, -Inf or NaN for poorly filtered input

    Raises:
        MissingInputError: If ``x`` is None
        SizeTooSmallError: If ``x`` is empty
    """
    x = as_float_array(x)
    moment_length_check(len(x), "mean")
    return _weighted_mean_sample(x, None)


def weighted_mean(x: ArrayLike, weights: Optional[ArrayLike] = None) -> float:
    """
    Weighted arithmetic average, ``sum(x * w) / sum(w)``.

    Args:
        x: Sample values
        weights: Corresponding weights, or None for the plain mean

    Returns:
        Weighted mean

    Raises:
        LengthMismatchError: If weights differ in length from ``x``
        DivisionByZeroError: If the weights sum to exactly zero
    """
    x = as_float_array(x)
    moment_length_check(len(x), "mean")
    if weights is not None:
        weights = as_float_array(weights, "weights")
        length_parity(len(x), len(weights))
    return _weighted_mean_sample(x, weights)


def _resolve_mean(expected_mean: Optional[float], x: np.ndarray,
                  weights: Optional[np.ndarray] = None) -> float:
    if expected_mean is None:
        return _weighted_mean_sample(x, weights)
    return float(expected_mean)


def _squared_deviations(x: np.ndarray, center: float) -> np.ndarray:
    # x is a private copy, so it is reused as scratch
    broadcast_sub_in_place(x, center)
    with np.errstate(over="ignore", invalid="ignore", under="ignore"):
        np.multiply(x, x, out=x)
    return x


def _biased_variance_sample(x: np.ndarray, expected_mean: Optional[float]) -> float:
    center = _resolve_mean(expected_mean, x)
    return _sum_sample(_squared_deviations(x, center)) / len(x)


def _unbiased_variance_sample(x: np.ndarray, expected_mean: Optional[float]) -> float:
    center = _resolve_mean(expected_mean, x)
    return _sum_sample(_squared_deviations(x, center)) / (len(x) - 1)


def unweighted_biased_variance(x: ArrayLike, expected_mean: Optional[float] = None) -> float:
    """Population variance, ``sum((x - mean)**2) / N``."""
    x = as_sample(x)
    moment_length_check(len(x), "unweighted_biased_variance")
    return _biased_variance_sample(x, expected_mean)


def unweighted_unbiased_variance(x: ArrayLike, expected_mean: Optional[float] = None) -> float:
    """
    Sample variance, ``sum((x - mean)**2) / (N - 1)``.

    Raises:
        SizeTooSmallError: If fewer than two values are given
    """
    x = as_sample(x)
    moment_length_check(len(x), "unweighted_unbiased_variance")
    return _unbiased_variance_sample(x, expected_mean)


def weighted_biased_variance(x: ArrayLike, weights: ArrayLike,
                             expected_mean: Optional[float] = None) -> float:
    """
    Variance with reliability weights.

    Computes ``sum(w * (x - mean)**2) * W / (W**2 - sum(w**2))`` where ``W``
    is the sum of weights and ``mean`` the weighted mean (unless supplied).

    Args:
        x: Sample values
        weights: Reliability (inverse-variance) weights
        expected_mean: Precomputed mean, or None to compute it

    Returns:
        Weighted variance

    Raises:
        MissingInputError: If ``x`` or ``weights`` is None
        LengthMismatchError: If the lengths differ
        DivisionByZeroError: If ``W**2 == sum(w**2)``, i.e. a single
            effective observation, or the weights sum to zero
    """
    x = as_sample(x)
    moment_length_check(len(x), "weighted_biased_variance")
    weights = as_float_array(weights, "weights")
    length_parity(len(x), len(weights))

    center = _resolve_mean(expected_mean, x, weights)
    sum_weights = _sum_sample(weights)
    scratch = _squared_deviations(x, center)
    product_in_place(scratch, weights)
    variance = _sum_sample(scratch) * sum_weights

    sum_squared_weights = _sum_sample(product_no_check(weights, weights))
    sum_weights *= sum_weights
    if sum_weights == sum_squared_weights:
        raise DivisionByZeroError(DIVISION_ZERO)
    return variance / (sum_weights - sum_squared_weights)


def weighted_unbiased_variance(x: ArrayLike, weights: ArrayLike) -> float:
    """
    Unbiased variance with integer repeat weights.

    ``weights[i]`` counts how many times ``x[i]`` was observed, so the result
    equals :func:`unweighted_unbiased_variance` of the expanded sample.

    Raises:
        InvalidWeightsError: If the weights are not integers
        DivisionByZeroError: If the counts total 0 or 1
    """
    x = as_sample(x)
    moment_length_check(len(x), "weighted_unbiased_variance")
    counts = as_repeat_weights(weights)
    length_parity(len(x), len(counts))

    weight_sum = int(counts.sum())
    if weight_sum in (0, 1):
        raise DivisionByZeroError(DIVISION_ZERO)

    widened = counts.astype(np.float64)
    actual_mean = _sum_sample(product_no_check(x, widened)) / weight_sum
    scratch = _squared_deviations(x, actual_mean)
    product_in_place(scratch, widened)
    return _sum_sample(scratch) / (weight_sum - 1)


def uncorrected_sample_std(x: ArrayLike, expected_mean: Optional[float] = None) -> float:
    """Standard deviation with the ``1 / N`` factor."""
    x = as_sample(x)
    moment_length_check(len(x), "uncorrected_sample_std")
    return math.sqrt(_biased_variance_sample(x, expected_mean))


def corrected_sample_std(x: ArrayLike, expected_mean: Optional[float] = None) -> float:
    """Standard deviation with the ``1 / (N - 1)`` factor."""
    x = as_sample(x)
    moment_length_check(len(x), "corrected_sample_std")
    return math.sqrt(_unbiased_variance_sample(x, expected_mean))
