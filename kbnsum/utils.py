"""
Input coercion and precondition checks shared by the public functions.
"""

from typing import Iterable, Union

import numpy as np
import torch

from .errors import (
    InvalidWeightsError,
    LengthMismatchError,
    MissingInputError,
    SizeTooSmallError,
)

ArrayLike = Union[Iterable[float], np.ndarray, torch.Tensor]

# Smallest sample each moment operation accepts.
MOMENT_MIN_LENGTH = {
    "mean": 1,
    "unweighted_biased_variance": 1,
    "unweighted_unbiased_variance": 2,
    "weighted_biased_variance": 1,
    "weighted_unbiased_variance": 1,
    "uncorrected_sample_std": 1,
    "corrected_sample_std": 2,
}


def _to_numpy(values, widen: bool = True):
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu()
        return values.double().numpy() if widen else values.numpy()
    if isinstance(values, np.ndarray):
        return values
    if not hasattr(values, "__len__"):
        # generators and other one-shot iterators
        values = list(values)
    return np.asarray(values)


def as_sample(values: ArrayLike, name: str = "x") -> np.ndarray:
    """
    Return a fresh, flat float64 copy of ``values``.

    Args:
        values: List, tuple, iterator, NumPy array or torch tensor
        name: Argument name used in the error message

    Returns:
        1-D float64 array that the caller does not share

    Raises:
        MissingInputError: If ``values`` is None
    """
    if values is None:
        raise MissingInputError(name)
    return np.array(_to_numpy(values), dtype=np.float64).ravel()


def as_float_array(values: ArrayLike, name: str = "x") -> np.ndarray:
    """Like :func:`as_sample`, but float64 arrays come back without a copy.

    Only for inputs the caller reads and never writes.
    """
    if isinstance(values, np.ndarray) and values.dtype == np.float64:
        return values.ravel()
    return as_sample(values, name)


def as_repeat_weights(weights: ArrayLike, name: str = "weights") -> np.ndarray:
    """Return integer repeat counts as a flat int64 array."""
    if weights is None:
        raise MissingInputError(name)
    array = _to_numpy(weights, widen=False)
    if not isinstance(array, np.ndarray):
        array = np.asarray(array)
    if array.size == 0:
        return np.zeros(0, dtype=np.int64)
    if array.dtype.kind not in "iu":
        raise InvalidWeightsError(
            f"Repeat weights must be integers, got dtype {array.dtype}"
        )
    return array.astype(np.int64).ravel()


def length_parity(left: int, right: int) -> None:
    """Raise LengthMismatchError unless both lengths agree."""
    if left != right:
        raise LengthMismatchError(left, right)


def moment_length_check(length: int, operation: str) -> None:
    """Raise SizeTooSmallError if ``length`` is below the operation's minimum."""
    required = MOMENT_MIN_LENGTH[operation]
    if length < required:
        raise SizeTooSmallError(operation, required, length)
