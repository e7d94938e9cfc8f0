"""Region tracker: sampling from the hypercube and the displace-and-shrink rule.

Everything here is pure computation over validated inputs. The objective is
never called from this module; the search driver evaluates the points returned
by :func:`sample` and hands the evaluations back to :func:`update`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import OptimizerConfig, SearchParams
from .core import Array, Evaluation, Point, SearchRegion
from .utils import selection_score


def clip(point: Array, lower: float, upper: float) -> Array:
    """Clamp every coordinate of ``point`` into ``[lower, upper]``."""
    return np.clip(np.asarray(point, dtype=float), lower, upper)


def initial_region(config: OptimizerConfig, params: Optional[SearchParams] = None) -> SearchRegion:
    """Region centred on the initial point.

    The default radius is half the box width, so the first round can reach at
    least half of the domain in every dimension.
    """
    params = params or SearchParams()
    radius = params.initial_radius
    if radius is None:
        radius = 0.5 * (config.upper - config.lower)
    return SearchRegion(
        center=config.initial_point,
        radius=max(float(radius), params.min_radius),
        lower=config.lower,
        upper=config.upper,
    )


def sample(
    region: SearchRegion,
    population_size: int,
    best: Optional[Evaluation],
    rng: np.random.Generator,
) -> List[Point]:
    """Draw ``population_size`` uniform points from ``region``.

    Each coordinate is drawn independently from
    ``[max(lower, c - r), min(upper, c + r)]``. The current best point is
    appended as an extra sample so a round can never lose the incumbent.
    """
    if population_size < 0:
        raise ValueError("population_size must be non-negative")
    low = region.low
    high = region.high
    draws = rng.uniform(low, high, size=(population_size, region.dim))
    # uniform() is half-open; keep rounding at the top edge inside the bounds
    draws = np.minimum(np.maximum(draws, low), high)
    points = [row for row in draws]
    if best is not None:
        points.append(np.array(best.point, dtype=float))
    return points


def best_of(evaluations: Sequence[Evaluation]) -> Optional[Evaluation]:
    """Highest-scoring evaluation; ties go to the first occurrence.

    Non-finite values score lowest. Returns ``None`` when nothing is finite.
    """
    candidate: Optional[Evaluation] = None
    candidate_score = -np.inf
    for evaluation in evaluations:
        score = selection_score(evaluation.value)
        if score > candidate_score:
            candidate = evaluation
            candidate_score = score
    return candidate


def update(
    region: SearchRegion,
    best: Evaluation,
    evaluations: Sequence[Evaluation],
    params: Optional[SearchParams] = None,
) -> Tuple[SearchRegion, Evaluation, bool]:
    """Apply one displace-and-shrink step.

    On improvement the center moves past the new best by the improvement step
    (``candidate + extrapolation * (candidate - best)``, clipped to the
    bounds) and the radius shrinks gently. Otherwise the region re-centres on
    the incumbent and shrinks hard. The radius never drops below
    ``params.min_radius``.

    Returns:
        ``(new_region, new_best, improved)``.
    """
    params = params or SearchParams()
    candidate = best_of(evaluations)
    improved = candidate is not None and selection_score(candidate.value) > selection_score(
        best.value
    )

    if improved:
        step = candidate.point - best.point
        center = clip(candidate.point + params.extrapolation * step, region.lower, region.upper)
        new_best = candidate
        factor = params.improve_shrink
    else:
        center = best.point
        new_best = best
        factor = params.stall_shrink

    radius = max(region.radius * factor, params.min_radius)
    new_region = SearchRegion(center=center, radius=radius, lower=region.lower, upper=region.upper)
    return new_region, new_best, improved


__all__ = ["best_of", "clip", "initial_region", "sample", "update"]
