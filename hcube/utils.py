"""Small numeric helpers used across the package.

These stay pure NumPy so that the search itself only depends on NumPy.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

Array = np.ndarray


def as_point(values: Any) -> Array:
    """Convert ``values`` to a 1D float64 array."""
    point = np.asarray(values, dtype=float)
    if point.ndim == 0:
        point = point.reshape(1)
    return point


def distance(a: Array, b: Array) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def to_value(raw: Any) -> float:
    """Coerce an objective's return value to float.

    Anything that cannot be read as a single real number becomes NaN, which
    the search treats as the worst possible value.
    """
    try:
        arr = np.asarray(raw, dtype=float)
    except (TypeError, ValueError):
        return math.nan
    if arr.size != 1:
        return math.nan
    return float(arr.reshape(()))


def selection_score(value: float) -> float:
    """Map a value to its ranking score; non-finite values rank last."""
    return value if math.isfinite(value) else -math.inf


def population_size_for(dim: int, factor: int = 10, minimum: int = 10) -> int:
    """Number of points drawn per round for a problem of dimension ``dim``."""
    if dim <= 0:
        raise ValueError("dim must be positive")
    return max(int(minimum), int(factor) * int(dim))


__all__ = ["as_point", "distance", "population_size_for", "selection_score", "to_value"]
