"""
Elementwise array arithmetic feeding the weighted sums and variances.

Products switch from a scalar loop to a blocked, register-width loop once the
arrays grow past ``config.PRODUCT_VECTOR_THRESHOLD``. Plain multiplication has
no compensation, so both paths produce identical bits.
"""

import logging
from typing import Optional

import numpy as np

from . import config
from .errors import MissingInputError
from .utils import ArrayLike, as_float_array, as_sample, length_parity

logger = logging.getLogger(__name__)


def _scalar_product(x: np.ndarray, y: np.ndarray) -> list:
    return [a * b for a, b in zip(x.tolist(), y.tolist())]


def _blocked_product(x: np.ndarray, y: np.ndarray, width: int,
                     out: np.ndarray) -> np.ndarray:
    bound = len(x) - len(x) % width
    with np.errstate(over="ignore", invalid="ignore", under="ignore"):
        np.multiply(x[:bound].reshape(-1, width), y[:bound].reshape(-1, width),
                    out=out[:bound].reshape(-1, width))
    out[bound:] = _scalar_product(x[bound:], y[bound:])
    return out


def product_no_check(x: np.ndarray, y: np.ndarray,
                     out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Elementwise product of two flat float64 arrays, without input checks.

    The caller guarantees equal lengths and float64 dtype. ``out`` may be one
    of the inputs.

    Args:
        x: A flat float64 array
        y: A flat float64 array of the same length
        out: Contiguous flat float64 array to write into, or None for a new one

    Returns:
        ``out``, or the new array
    """
    if out is None:
        out = np.empty(len(x))
    if len(x) > config.PRODUCT_VECTOR_THRESHOLD:
        width = config.PREFERRED_LANE_WIDTH
        logger.debug("blocked product: %d elements, %d lanes", len(x), width)
        return _blocked_product(x, y, width, out)
    out[:] = _scalar_product(x, y)
    return out


def product(x: ArrayLike, y: ArrayLike) -> np.ndarray:
    """
    Elementwise product of two equally long arrays.

    Integer inputs are widened to float64 before multiplying.

    Args:
        x: A vector of values
        y: Another vector (values or weights)

    Returns:
        New float64 array with ``x[i] * y[i]``

    Raises:
        MissingInputError: If either input is None
        LengthMismatchError: If the lengths differ
    """
    x = as_float_array(x, "x")
    y = as_float_array(y, "y")
    length_parity(len(x), len(y))
    return product_no_check(x, y)


def _require_float_array(x, name: str = "x") -> np.ndarray:
    if x is None:
        raise MissingInputError(name)
    if not isinstance(x, np.ndarray) or x.dtype != np.float64:
        raise TypeError(f"In-place operations need a float64 numpy array for '{name}'")
    return x


def product_in_place(x: np.ndarray, y: ArrayLike) -> None:
    """
    Same as :func:`product`, but writes the result into ``x``.

    ``x`` may have any shape; it is multiplied in row-major order against the
    flattened ``y``, so only the total sizes must agree.
    """
    x = _require_float_array(x)
    y = as_float_array(y, "y")
    length_parity(x.size, len(y))
    if x.flags.c_contiguous:
        flat = x.reshape(-1)
        product_no_check(flat, y, out=flat)
    else:
        x[...] = product_no_check(x.ravel(), y).reshape(x.shape)


def broadcast_add(x: ArrayLike, shift: float) -> np.ndarray:
    """Return a float64 copy of ``x`` with ``shift`` added to every element."""
    scratch = as_sample(x, "x")
    scratch += shift
    return scratch


def broadcast_sub(x: ArrayLike, shift: float) -> np.ndarray:
    """Return a float64 copy of ``x`` with ``shift`` subtracted from every element."""
    scratch = as_sample(x, "x")
    scratch -= shift
    return scratch


def broadcast_add_in_place(x: np.ndarray, shift: float) -> None:
    _require_float_array(x)
    x += shift


def broadcast_sub_in_place(x: np.ndarray, shift: float) -> None:
    _require_float_array(x)
    x -= shift
