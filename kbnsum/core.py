"""
Core compensated summation.

This module contains the Kahan-Babuska-Neumaier (KBN) step shared by every
summation path, the streaming accumulator built on it, and the lane-wise sum
that runs the same step over whole vectors of lanes at once.
"""

import logging
from typing import Any, Callable, Iterable, Sequence, Tuple, Union

import numpy as np
import torch

from . import config
from .errors import LengthMismatchError, MissingInputError
from .utils import as_sample

logger = logging.getLogger(__name__)


def _select_scalar(mask: bool, if_true: float, if_false: float) -> float:
    return if_true if mask else if_false


def neumaier_step(total: Any, corrector: Any, value: Any,
                  select: Callable = _select_scalar) -> Tuple[Any, Any]:
    """
    Single KBN step.

    Generic over the lane type: ``total``, ``corrector`` and ``value`` may be
    floats, NumPy arrays or torch tensors, provided ``select`` picks
    elementwise between two candidates of that type (a conditional
    expression, ``np.where`` or ``torch.where``).

    Args:
        total: Running uncorrected sum
        corrector: Running first-order correction
        value: Value to add

    Returns:
        Tuple of (new_total, new_corrector)
    """
    temp = total + value
    # take the rounding error from whichever operand is larger in magnitude
    correction = select(abs(total) >= abs(value),
                        (total - temp) + value,
                        (value - temp) + total)
    return temp, corrector - correction


class CompensatedAccumulator:
    """
    Streaming KBN accumulator.

    The compensated sum is ``unevaluated_sum - corrector``. NaN and
    infinities propagate per IEEE-754 and are never filtered.

    Instances are single-owner objects with no locking; sharing one between
    threads is the caller's responsibility.

    Attributes:
        unevaluated_sum: The conventional sum with no corrections
        corrector: First-order error corrector
    """

    def __init__(self):
        self.reset()

    def ingest(self, value: float):
        """
        Add one value with compensation.

        Args:
            value: Value to add to the accumulator
        """
        self.unevaluated_sum, self.corrector = neumaier_step(
            self.unevaluated_sum, self.corrector, float(value)
        )

    def ingest_many(self, values: Union[Iterable[float], np.ndarray, torch.Tensor]):
        """Add every element of ``values`` in the given order."""
        if not isinstance(values, np.ndarray) or values.dtype != np.float64:
            values = as_sample(values, "values")
        for value in values.ravel().tolist():
            self.unevaluated_sum, self.corrector = neumaier_step(
                self.unevaluated_sum, self.corrector, value
            )

    def value(self) -> float:
        """Get compensated sum."""
        return self.unevaluated_sum - self.corrector

    def reset(self):
        """Reset the accumulator; an untouched accumulator reads -0.0."""
        self.unevaluated_sum = -0.0
        self.corrector = 0.0

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(unevaluated_sum={self.unevaluated_sum!r}, "
                f"corrector={self.corrector!r})")


def _lane_reduce(rows, total, corrector, select):
    for row in rows:
        total, corrector = neumaier_step(total, corrector, row, select)
    return total - corrector


def lane_sum(vectors: Union[Sequence[Sequence[float]], np.ndarray, torch.Tensor]
             ) -> Union[np.ndarray, torch.Tensor]:
    """
    Compensated sum of same-indexed lanes across a stack of vectors.

    Each row of ``vectors`` plays the part of one vector register and each
    column one lane. Lane ``j`` of the result is bit-for-bit what a
    :class:`CompensatedAccumulator` gives over column ``j``.

    Args:
        vectors: 2-D NumPy array or torch tensor of shape (N, W), or a
            sequence of N equal-length vectors

    Returns:
        W-lane vector of sums; a torch tensor (same dtype and device) for
        torch input, otherwise a float64 NumPy array

    Raises:
        MissingInputError: If ``vectors`` is None
        LengthMismatchError: If the vectors differ in lane count
    """
    if vectors is None:
        raise MissingInputError("vectors")

    if isinstance(vectors, torch.Tensor):
        if vectors.dim() == 1:
            if vectors.numel() == 0:
                return torch.zeros(config.PREFERRED_LANE_WIDTH, dtype=vectors.dtype,
                                   device=vectors.device)
            vectors = vectors.unsqueeze(0)
        if vectors.dim() != 2:
            raise ValueError(f"Expected a 2-D tensor, got {vectors.dim()} dimensions")
        width = vectors.shape[1]
        logger.debug("torch lane sum: %d vectors x %d lanes", vectors.shape[0], width)
        if vectors.shape[0] == 0:
            return torch.zeros(width, dtype=vectors.dtype, device=vectors.device)
        total = torch.full((width,), -0.0, dtype=vectors.dtype, device=vectors.device)
        corrector = torch.zeros(width, dtype=vectors.dtype, device=vectors.device)
        return _lane_reduce(vectors, total, corrector, torch.where)

    if isinstance(vectors, np.ndarray):
        stack = vectors.astype(np.float64)
        if stack.ndim == 1:
            if stack.size == 0:
                return np.zeros(config.PREFERRED_LANE_WIDTH)
            stack = stack.reshape(1, -1)
        if stack.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got {stack.ndim} dimensions")
    else:
        rows = [as_sample(row, "vectors") for row in vectors]
        if not rows:
            return np.zeros(config.PREFERRED_LANE_WIDTH)
        for row in rows[1:]:
            if len(row) != len(rows[0]):
                raise LengthMismatchError(len(rows[0]), len(row))
        stack = np.vstack(rows)

    width = stack.shape[1]
    logger.debug("numpy lane sum: %d vectors x %d lanes", stack.shape[0], width)
    if stack.shape[0] == 0:
        return np.zeros(width)
    total = np.full(width, -0.0)
    corrector = np.zeros(width)
    with np.errstate(invalid="ignore", over="ignore"):
        return _lane_reduce(stack, total, corrector, np.where)
