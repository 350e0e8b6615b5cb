"""Vector utilities for NumPy arrays.

All vectors are expected to be shaped (..., 3). The orbital plane of spawned
bodies is x-z, so the plane normal ("up") is +y.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]

UP = np.array([0.0, 1.0, 0.0], dtype=np.float64)


def norm(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return the L2 norm along an axis."""
    return np.linalg.norm(v, axis=axis)


def unit(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return unit vectors with safe handling of zero vectors."""
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v, axis=axis, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        u = np.where(n > 0.0, v / n, 0.0)
    return u


def cross(a: ArrayF, b: ArrayF) -> ArrayF:
    return np.cross(a, b)


def finite_rows(*arrays: ArrayF) -> NDArray[np.bool_]:
    """Return a (N,) mask of rows that are finite in every given (N, 3) array."""
    mask = np.ones(np.asarray(arrays[0]).shape[0], dtype=bool)
    for arr in arrays:
        mask &= np.all(np.isfinite(arr), axis=-1)
    return mask


def prograde_direction(pos: ArrayF) -> ArrayF:
    """Unit direction of a counter-clockwise circular orbit seen from +y.

    For pos = (d, 0, 0) this is (0, 0, 1), the spawn heading.
    """
    return unit(np.cross(unit(pos), UP))
