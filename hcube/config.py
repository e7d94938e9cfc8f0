"""Run configuration and search policy for the hypercube optimizer.

:class:`OptimizerConfig` describes one run: where to start, the box to search
and the tolerances and budgets that end the run. It is validated as a whole by
:meth:`OptimizerConfig.validate`, which reports every violation at once.

:class:`SearchParams` holds the numeric policy of the region tracker (shrink
factors, population size, extrapolation step). The defaults favour steady
progress on smooth problems; tune them per problem rather than editing code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .errors import ConfigError, ConfigErrorKind, ConfigViolation
from .utils import as_point, population_size_for


@dataclass(frozen=True, eq=False)
class OptimizerConfig:
    """Parameters of a single optimization run.

    Attributes:
        initial_point: Starting point; must lie inside ``[lower, upper]``.
        lower: Lower bound applied to every dimension.
        upper: Upper bound applied to every dimension.
        input_tol: Convergence tolerance on the change of the best point.
        output_tol: Convergence tolerance on the change of the best value.
        max_loops: Maximum number of search rounds.
        max_evals: Maximum number of objective calls, the initial one included.
        max_seconds: Wall-clock budget in seconds.
        dim: Intended dimensionality. ``None`` accepts the initial point's.
    """

    initial_point: np.ndarray
    lower: float
    upper: float
    input_tol: float = 1e-6
    output_tol: float = 1e-8
    max_loops: int = 1000
    max_evals: int = 10_000
    max_seconds: float = 60.0
    dim: Optional[int] = None
    _point_error: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            point = as_point(self.initial_point).copy()
        except (TypeError, ValueError) as exc:
            object.__setattr__(self, "_point_error", f"not convertible to floats: {exc}")
            point = np.empty(0, dtype=float)
        point.flags.writeable = False
        object.__setattr__(self, "initial_point", point)

    @property
    def ndim(self) -> int:
        return int(self.initial_point.size)

    def violations(self) -> List[ConfigViolation]:
        """Return every constraint this configuration breaks."""
        found: List[ConfigViolation] = []

        def add(kind: ConfigErrorKind, name: str, message: str) -> None:
            found.append(ConfigViolation(kind, name, message))

        finite = math.isfinite(self.lower) and math.isfinite(self.upper)
        bounds_ok = finite and self.lower < self.upper
        if not finite:
            add(ConfigErrorKind.INVALID_BOUNDS, "lower/upper", "bounds must be finite")
        elif self.lower >= self.upper:
            add(
                ConfigErrorKind.INVALID_BOUNDS,
                "lower/upper",
                f"lower ({self.lower}) must be strictly less than upper ({self.upper})",
            )
        elif not math.isfinite(self.upper - self.lower):
            bounds_ok = False
            add(
                ConfigErrorKind.INVALID_BOUNDS,
                "lower/upper",
                f"box width upper - lower overflows for [{self.lower}, {self.upper}]",
            )

        for name in ("input_tol", "output_tol"):
            value = getattr(self, name)
            if not value > 0:
                add(ConfigErrorKind.INVALID_TOLERANCE, name, f"must be positive, got {value}")

        for name in ("max_loops", "max_evals", "max_seconds"):
            value = getattr(self, name)
            if not value > 0:
                add(ConfigErrorKind.INVALID_BUDGET, name, f"must be positive, got {value}")

        if self._point_error is not None:
            add(ConfigErrorKind.INVALID_DIMENSION, "initial_point", self._point_error)
            return found
        point = self.initial_point
        if point.ndim != 1 or point.size == 0:
            add(
                ConfigErrorKind.INVALID_DIMENSION,
                "initial_point",
                f"must be a non-empty 1D array, got shape {point.shape}",
            )
            return found
        if self.dim is not None and point.size != self.dim:
            add(
                ConfigErrorKind.INVALID_DIMENSION,
                "initial_point",
                f"expected dimension {self.dim}, got {point.size}",
            )
        if not np.all(np.isfinite(point)):
            add(
                ConfigErrorKind.INITIAL_POINT_OUT_OF_BOUNDS,
                "initial_point",
                "coordinates must be finite",
            )
        elif bounds_ok:
            outside = np.flatnonzero((point < self.lower) | (point > self.upper))
            if outside.size:
                add(
                    ConfigErrorKind.INITIAL_POINT_OUT_OF_BOUNDS,
                    "initial_point",
                    f"coordinates {outside.tolist()} lie outside [{self.lower}, {self.upper}]",
                )
        return found

    def validate(self) -> None:
        """Raise :class:`ConfigError` listing all violations, if any."""
        found = self.violations()
        if found:
            raise ConfigError(found)


@dataclass(frozen=True)
class SearchParams:
    """Numeric policy of the displace-and-shrink update.

    Attributes:
        improve_shrink: Radius factor after a round that improved the best.
        stall_shrink: Radius factor after a round that did not.
        min_radius: Floor keeping the region non-degenerate.
        initial_radius: Starting radius; ``None`` means half the box width.
        population_factor: Points drawn per dimension each round.
        min_population: Lower limit on the points drawn each round.
        extrapolation: Multiple of the last improvement step by which the
            center is pushed past the new best.
    """

    improve_shrink: float = 0.9
    stall_shrink: float = 0.5
    min_radius: float = 1e-12
    initial_radius: Optional[float] = None
    population_factor: int = 10
    min_population: int = 10
    extrapolation: float = 1.0

    def __post_init__(self) -> None:
        for name in ("improve_shrink", "stall_shrink"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must lie in (0, 1], got {value}")
        if not self.min_radius > 0.0:
            raise ValueError(f"min_radius must be positive, got {self.min_radius}")
        if self.initial_radius is not None and not 0.0 < self.initial_radius < math.inf:
            raise ValueError(f"initial_radius must be positive and finite, got {self.initial_radius}")
        if self.population_factor < 1 or self.min_population < 1:
            raise ValueError("population_factor and min_population must be at least 1")
        if self.extrapolation < 0.0:
            raise ValueError(f"extrapolation must be non-negative, got {self.extrapolation}")

    def population_size(self, dim: int) -> int:
        return population_size_for(dim, self.population_factor, self.min_population)


__all__ = ["OptimizerConfig", "SearchParams"]
