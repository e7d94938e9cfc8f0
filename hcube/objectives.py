"""Benchmark objectives for demos and tests.

All functions take a 1D array and return a float. ``sphere`` and
``rastrigin`` have their global minimum of 0 at the origin.
"""

from __future__ import annotations

import math

import numpy as np


def sphere(x: np.ndarray) -> float:
    """Sum of squares."""
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x))


def rastrigin(x: np.ndarray) -> float:
    """Rastrigin function ``10 n + sum(x_i^2 - 10 cos(2 pi x_i))``.

    Highly multimodal with a regular lattice of local minima; the usual search
    domain is ``[-5.12, 5.12]^n``.
    """
    x = np.asarray(x, dtype=float)
    return float(10.0 * x.size + np.sum(x**2 - 10.0 * np.cos(2.0 * math.pi * x)))


def summation(x: np.ndarray) -> float:
    """Plain sum of the coordinates."""
    return float(np.sum(np.asarray(x, dtype=float)))


def nan_function(x: np.ndarray) -> float:
    """Always NaN; exercises the non-finite handling."""
    return math.nan


__all__ = ["nan_function", "rastrigin", "sphere", "summation"]
