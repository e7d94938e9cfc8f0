"""Search driver for the hypercube optimizer.

The driver evaluates the initial point, then repeats sample -> evaluate ->
update until the region has collapsed onto a stable best point or a budget
runs out. Minimization is maximization of the negated objective; results are
reported back in the caller's sense.

Example
-------
>>> import numpy as np
>>> from hcube import OptimizerConfig, HypercubeOptimizer
>>> config = OptimizerConfig(
...     initial_point=np.array([5.0, 5.0, 5.0]), lower=-10.0, upper=10.0,
...     input_tol=0.01, output_tol=1e-4, max_loops=2000, max_evals=5000,
...     max_seconds=30,
... )
>>> res = HypercubeOptimizer(config, seed=0).minimize(lambda x: float(x @ x))
>>> res.evaluations <= 5000
True
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import OptimizerConfig, SearchParams
from .core import Evaluation, HypercubeResult, Objective, Point, SearchRegion, Sense, TerminationReason
from .logging import get_logger
from .region import initial_region, sample, update
from .utils import distance, to_value

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, eq=False)
class OptimizerState:
    """Snapshot of a run between two rounds.

    A new snapshot replaces the previous one after every round; callbacks
    receive it read-only.
    """

    region: SearchRegion
    best: Evaluation
    iteration: int
    eval_count: int
    start_time: float


class _Evaluator:
    """Counts objective calls, enforces the budget and remembers results."""

    def __init__(self, objective: Objective, sign: float, max_evals: int) -> None:
        self._objective = objective
        self._sign = sign
        self._max_evals = max_evals
        self._seen: Dict[bytes, float] = {}
        self.count = 0

    @property
    def remaining(self) -> int:
        return self._max_evals - self.count

    def __call__(self, point: Point) -> Optional[Evaluation]:
        """Evaluate ``point`` once; ``None`` when the budget is spent."""
        key = np.ascontiguousarray(point, dtype=float).tobytes()
        if key in self._seen:
            return Evaluation(point, self._seen[key])
        if self.remaining <= 0:
            return None
        arg = np.array(point, dtype=float)
        arg.flags.writeable = False
        value = self._sign * to_value(self._objective(arg))
        self.count += 1
        if not np.isfinite(value):
            logger.debug("objective returned non-finite value at %s", arg)
        self._seen[key] = value
        return Evaluation(point, value)


class HypercubeOptimizer:
    """Derivative-free global optimizer over a box ``[lower, upper]^n``.

    The configuration is validated on construction; an invalid configuration
    raises :class:`~hcube.errors.ConfigError` and no optimizer is created.
    Once constructed, :meth:`maximize` and :meth:`minimize` always return a
    :class:`~hcube.core.HypercubeResult`.

    Args:
        config: Run configuration.
        params: Region-update policy. Defaults to :class:`SearchParams`.
        seed: Seed for a fresh ``numpy.random.default_rng`` per run.
        rng: Explicit generator; takes precedence over ``seed`` and is shared
            across runs of this optimizer.
        clock: Monotonic clock returning seconds. Defaults to
            ``time.monotonic``.
        callback: Called with the :class:`OptimizerState` after every round.
        history: Record the best value after every round in the result.
    """

    def __init__(
        self,
        config: OptimizerConfig,
        params: Optional[SearchParams] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Clock] = None,
        callback: Optional[Callable[[OptimizerState], None]] = None,
        history: bool = False,
    ) -> None:
        config.validate()
        self.config = config
        self.params = params or SearchParams()
        self.seed = seed
        self._rng = rng
        self._clock = clock or time.monotonic
        self._callback = callback
        self._history = history

    @property
    def dim(self) -> int:
        return self.config.ndim

    @property
    def population_size(self) -> int:
        return self.params.population_size(self.dim)

    def maximize(self, objective: Objective) -> HypercubeResult:
        """Search for the maximum of ``objective``."""
        return self.run(objective, Sense.MAXIMIZE)

    def minimize(self, objective: Objective) -> HypercubeResult:
        """Search for the minimum of ``objective``."""
        return self.run(objective, Sense.MINIMIZE)

    def run(self, objective: Objective, sense: Sense = Sense.MAXIMIZE) -> HypercubeResult:
        """Run the search loop until convergence or an exhausted budget."""
        config = self.config
        sign = 1.0 if sense is Sense.MAXIMIZE else -1.0
        rng = self._rng if self._rng is not None else np.random.default_rng(self.seed)
        evaluate = _Evaluator(objective, sign, config.max_evals)
        hist: List[float] = []

        start = self._clock()
        first = evaluate(config.initial_point)
        state = OptimizerState(
            region=initial_region(config, self.params),
            best=first,
            iteration=0,
            eval_count=evaluate.count,
            start_time=start,
        )
        logger.info(
            "%s: dim=%d population=%d bounds=[%g, %g]",
            sense.value,
            self.dim,
            self.population_size,
            config.lower,
            config.upper,
        )

        while True:
            reason = self._budget_exhausted(state)
            if reason is not None:
                break

            points = sample(state.region, self.population_size, state.best, rng)
            batch: List[Evaluation] = []
            for point in points:
                evaluation = evaluate(point)
                if evaluation is None:
                    break
                batch.append(evaluation)

            region, best, improved = update(state.region, state.best, batch, self.params)
            converged = self._converged(state, region, best)
            state = replace(
                state,
                region=region,
                best=best,
                iteration=state.iteration + 1,
                eval_count=evaluate.count,
            )
            if self._history:
                hist.append(sign * state.best.value)
            logger.debug(
                "iteration %d: best=%.6g radius=%.3g improved=%s evals=%d",
                state.iteration,
                sign * best.value,
                region.radius,
                improved,
                state.eval_count,
            )
            if self._callback is not None:
                self._callback(state)
            if converged:
                reason = TerminationReason.CONVERGED
                break

        result = HypercubeResult(
            best_point=state.best.point,
            best_value=sign * state.best.value,
            evaluations=state.eval_count,
            iterations=state.iteration,
            elapsed=self._clock() - state.start_time,
            termination_reason=reason,
            history=hist,
        )
        logger.info(
            "%s after %d iterations and %d evaluations: best=%.6g",
            result.message,
            result.iterations,
            result.evaluations,
            result.best_value,
        )
        return result

    def _budget_exhausted(self, state: OptimizerState) -> Optional[TerminationReason]:
        config = self.config
        if state.eval_count >= config.max_evals:
            return TerminationReason.MAX_EVALUATIONS
        if state.iteration >= config.max_loops:
            return TerminationReason.MAX_LOOPS
        if self._clock() - state.start_time >= config.max_seconds:
            return TerminationReason.MAX_TIME
        return None

    def _converged(self, state: OptimizerState, region: SearchRegion, best: Evaluation) -> bool:
        """Best point and value stable within tolerance and the region collapsed."""
        old = state.best
        if not (best.is_finite and old.is_finite):
            return False
        return (
            distance(best.point, old.point) < self.config.input_tol
            and abs(best.value - old.value) < self.config.output_tol
            and region.radius < self.config.input_tol
        )


def maximize(
    objective: Objective,
    config: OptimizerConfig,
    params: Optional[SearchParams] = None,
    **kwargs,
) -> HypercubeResult:
    """Convenience wrapper around :meth:`HypercubeOptimizer.maximize`."""
    return HypercubeOptimizer(config, params, **kwargs).maximize(objective)


def minimize(
    objective: Objective,
    config: OptimizerConfig,
    params: Optional[SearchParams] = None,
    **kwargs,
) -> HypercubeResult:
    """Convenience wrapper around :meth:`HypercubeOptimizer.minimize`."""
    return HypercubeOptimizer(config, params, **kwargs).minimize(objective)


__all__ = ["HypercubeOptimizer", "OptimizerState", "maximize", "minimize"]
