"""
KBN Summation Library

High-accuracy summation, averaging and dispersion statistics for arrays of
floating-point values, built on Kahan-Babuska-Neumaier compensated summation.

This library provides:
- A streaming compensated accumulator
- Plain, weighted and cumulative compensated sums
- A lane-wise sum over stacks of vectors (NumPy or torch)
- Elementwise products with a blocked path for large arrays
- Mean, weighted mean, biased/unbiased and weighted variances, and
  standard deviations
"""

from .core import CompensatedAccumulator, lane_sum, neumaier_step
from .summation import (
    compensated_sum,
    weighted_sum,
    cumulative_sum,
    weighted_cumulative_sum,
)
from .elementwise import (
    product,
    product_in_place,
    product_no_check,
    broadcast_add,
    broadcast_sub,
    broadcast_add_in_place,
    broadcast_sub_in_place,
)
from .moments import (
    mean,
    weighted_mean,
    unweighted_biased_variance,
    unweighted_unbiased_variance,
    weighted_biased_variance,
    weighted_unbiased_variance,
    uncorrected_sample_std,
    corrected_sample_std,
)
from .errors import (
    KBNSumError,
    MissingInputError,
    SizeTooSmallError,
    LengthMismatchError,
    DivisionByZeroError,
    InvalidWeightsError,
)

__version__ = "1.0.0"
__author__ = "KBN Summation Contributors"

__all__ = [
    "CompensatedAccumulator",
    "lane_sum",
    "neumaier_step",
    "compensated_sum",
    "weighted_sum",
    "cumulative_sum",
    "weighted_cumulative_sum",
    "product",
    "product_in_place",
    "product_no_check",
    "broadcast_add",
    "broadcast_sub",
    "broadcast_add_in_place",
    "broadcast_sub_in_place",
    "mean",
    "weighted_mean",
    "unweighted_biased_variance",
    "unweighted_unbiased_variance",
    "weighted_biased_variance",
    "weighted_unbiased_variance",
    "uncorrected_sample_std",
    "corrected_sample_std",
    "KBNSumError",
    "MissingInputError",
    "SizeTooSmallError",
    "LengthMismatchError",
    "DivisionByZeroError",
    "InvalidWeightsError",
]
