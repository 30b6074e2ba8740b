"""
Tunable constants.

Values are read once from the environment at import time. They are looked up
through this module at call time, so tests and callers may also reassign them.
"""

import os


def _int_from_env(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


# Arrays longer than this take the blocked elementwise-product path.
PRODUCT_VECTOR_THRESHOLD = _int_from_env("KBNSUM_VECTOR_THRESHOLD", 5000, 0)

# Doubles per vector register (256-bit).
PREFERRED_LANE_WIDTH = _int_from_env("KBNSUM_LANE_WIDTH", 4, 1)
