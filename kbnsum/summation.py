"""
Compensated summation functions.

All sums here use the Kahan-Babuska-Neumaier scheme from :mod:`kbnsum.core`.
Results may be Inf, -Inf or NaN when the data overflows, contains NaN, or
produces an undefined operation such as ``inf - inf``.

References:
    Klein, A. "A Generalized Kahan-Babuska-Summation-Algorithm",
    Computing 76, 279-293 (2006). https://doi.org/10.1007/s00607-005-0139-x
"""

from typing import Optional

import numpy as np

from .core import CompensatedAccumulator
from .elementwise import product_no_check
from .utils import ArrayLike, as_float_array, length_parity


def _sum_sample(values: np.ndarray) -> float:
    # values is already a flat float64 array
    if len(values) == 0:
        return 0.0
    elif len(values) == 1:
        return float(values[0])

    acc = CompensatedAccumulator()
    acc.ingest_many(values)
    return acc.value()


def _cumulative_sample(values: np.ndarray) -> np.ndarray:
    if len(values) == 0:
        return np.zeros(1)
    elif len(values) == 1:
        return values.copy()

    result = np.empty(len(values))
    acc = CompensatedAccumulator()
    for i, value in enumerate(values.tolist()):
        acc.ingest(value)
        result[i] = acc.value()
    return result


def compensated_sum(values: ArrayLike) -> float:
    """
    Compute sum using KBN compensated summation.

    Args:
        values: Sequence of values to sum

    Returns:
        Compensated sum; 0.0 for empty input and the element itself for a
        single value

    Raises:
        MissingInputError: If ``values`` is None
    """
    return _sum_sample(as_float_array(values, "values"))


def _weighted(values: np.ndarray, weights: ArrayLike) -> np.ndarray:
    weights = as_float_array(weights, "weights")
    length_parity(len(values), len(weights))
    return product_no_check(values, weights)


def weighted_sum(values: ArrayLike, weights: Optional[ArrayLike] = None) -> float:
    """
    Weighted compensated sum.

    Args:
        values: Sequence of values
        weights: Corresponding weights, or None for a plain sum

    Returns:
        ``compensated_sum(values * weights)``

    Raises:
        LengthMismatchError: If weights are given with a different length
    """
    values = as_float_array(values, "values")
    if weights is None:
        return _sum_sample(values)
    return _sum_sample(_weighted(values, weights))


def cumulative_sum(values: ArrayLike) -> np.ndarray:
    """
    Running compensated sums, ``[x1, x1 + x2, x1 + x2 + x3, ...]``.

    One accumulator is carried along the array, so the cost is linear.
    Empty input gives ``array([0.0])``.
    """
    return _cumulative_sample(as_float_array(values, "values"))


def weighted_cumulative_sum(values: ArrayLike,
                            weights: Optional[ArrayLike] = None) -> np.ndarray:
    """Weighted :func:`cumulative_sum`; plain cumulative sum when weights are None."""
    values = as_float_array(values, "values")
    if weights is None:
        return _cumulative_sample(values)
    return _cumulative_sample(_weighted(values, weights))
