"""Core containers shared by the region tracker and the search driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List

import numpy as np

Array = np.ndarray
Point = np.ndarray
Objective = Callable[[Point], float]


def frozen_copy(point: Array) -> Point:
    """Return a read-only float64 copy of ``point``."""
    out = np.array(point, dtype=float, copy=True)
    out.flags.writeable = False
    return out


class Sense(Enum):
    """Direction of optimization."""

    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


class TerminationReason(Enum):
    """Why a run stopped, listed in reporting priority."""

    CONVERGED = "converged"
    MAX_EVALUATIONS = "max_evaluations"
    MAX_LOOPS = "max_loops"
    MAX_TIME = "max_time"


_MESSAGES = {
    TerminationReason.CONVERGED: "Input and output tolerances satisfied.",
    TerminationReason.MAX_EVALUATIONS: "Maximum function evaluations reached.",
    TerminationReason.MAX_LOOPS: "Maximum iterations reached.",
    TerminationReason.MAX_TIME: "Time budget exhausted.",
}


@dataclass(frozen=True, eq=False)
class Evaluation:
    """One objective call: the point and the value it produced.

    ``value`` is stored as returned (after negation for minimization) and may
    be non-finite.
    """

    point: Point
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", frozen_copy(self.point))
        object.__setattr__(self, "value", float(self.value))

    @property
    def is_finite(self) -> bool:
        return bool(np.isfinite(self.value))


@dataclass(frozen=True, eq=False)
class SearchRegion:
    """Axis-aligned hypercube ``center +/- radius`` clipped to ``[lower, upper]``.

    The cube itself may reach outside the global bounds; clipping happens when
    sampling limits are computed. The center always lies inside the bounds.
    """

    center: Point
    radius: float
    lower: float
    upper: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", frozen_copy(self.center))
        object.__setattr__(self, "radius", float(self.radius))
        if self.center.ndim != 1 or self.center.size == 0:
            raise ValueError(f"center must be a non-empty 1D array, got shape {self.center.shape}")
        if not (self.radius > 0.0 and np.isfinite(self.radius)):
            raise ValueError(f"radius must be positive and finite, got {self.radius}")
        if np.any(self.center < self.lower) or np.any(self.center > self.upper):
            raise ValueError("center lies outside the global bounds")

    @property
    def dim(self) -> int:
        return int(self.center.size)

    @property
    def low(self) -> Array:
        """Per-dimension lower sampling limit."""
        # offsets stay within the box width, so nothing overflows near huge bounds
        return np.maximum(self.lower, self.center - np.minimum(self.radius, self.center - self.lower))

    @property
    def high(self) -> Array:
        """Per-dimension upper sampling limit."""
        return np.minimum(self.upper, self.center + np.minimum(self.radius, self.upper - self.center))

    def contains(self, point: Array) -> bool:
        """Return True if ``point`` lies within the clipped region."""
        point = np.asarray(point, dtype=float)
        return bool(np.all(point >= self.low) and np.all(point <= self.high))


@dataclass(frozen=True, eq=False)
class HypercubeResult:
    """Outcome of one optimization run.

    Values are reported in the caller's sense: ``best_value`` is the maximum
    found by :meth:`maximize` or the minimum found by :meth:`minimize`.

    Attributes:
        best_point: Best point found (read-only copy).
        best_value: Objective value at ``best_point``.
        evaluations: Number of objective calls made.
        iterations: Number of completed search rounds.
        elapsed: Wall-clock seconds spent in the run.
        termination_reason: Why the run stopped.
        history: Best value after each round, when recording was requested.
    """

    best_point: Point
    best_value: float
    evaluations: int
    iterations: int
    elapsed: float
    termination_reason: TerminationReason
    history: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        object.__setattr__(self, "best_point", frozen_copy(self.best_point))
        object.__setattr__(self, "history", list(self.history))

    @property
    def success(self) -> bool:
        return self.termination_reason is TerminationReason.CONVERGED

    @property
    def message(self) -> str:
        return _MESSAGES[self.termination_reason]


__all__ = [
    "Array",
    "Evaluation",
    "HypercubeResult",
    "Objective",
    "Point",
    "SearchRegion",
    "Sense",
    "TerminationReason",
    "frozen_copy",
]
