import numpy as np
import pytest

from hcube import Evaluation, OptimizerConfig, SearchParams, SearchRegion
from hcube.region import best_of, clip, initial_region, sample, update


def region_at(center, radius=1.0, lower=-10.0, upper=10.0) -> SearchRegion:
    return SearchRegion(center=np.asarray(center, dtype=float), radius=radius, lower=lower, upper=upper)


def test_region_rejects_bad_geometry():
    with pytest.raises(ValueError):
        region_at([0.0, 0.0], radius=0.0)
    with pytest.raises(ValueError):
        region_at([11.0, 0.0])


def test_region_limits_are_clipped():
    region = region_at([9.5, -9.8, 0.0], radius=1.0)
    assert np.allclose(region.low, [8.5, -10.0, -1.0])
    assert np.allclose(region.high, [10.0, -8.8, 1.0])
    assert region.dim == 3


def test_initial_region_defaults_to_half_box_width():
    config = OptimizerConfig(initial_point=np.array([5.0, 5.0]), lower=-10.0, upper=10.0)
    region = initial_region(config)
    assert region.radius == 10.0
    assert np.array_equal(region.center, [5.0, 5.0])
    assert initial_region(config, SearchParams(initial_radius=2.5)).radius == 2.5


def test_clip():
    assert np.array_equal(clip(np.array([-3.0, 0.5, 7.0]), 0.0, 1.0), [0.0, 0.5, 1.0])


def test_sample_stays_inside_region_and_bounds(rng):
    region = region_at([9.0, -9.0, 0.0, 10.0], radius=3.0)
    points = sample(region, 200, None, rng)
    assert len(points) == 200
    stacked = np.vstack(points)
    assert np.all(stacked >= region.low)
    assert np.all(stacked <= region.high)
    assert np.all(stacked >= -10.0) and np.all(stacked <= 10.0)


def test_sample_appends_current_best(rng):
    region = region_at([0.0, 0.0])
    best = Evaluation(np.array([0.25, -0.5]), 3.0)
    points = sample(region, 10, best, rng)
    assert len(points) == 11
    assert np.array_equal(points[-1], best.point)


def test_sample_is_reproducible():
    region = region_at([1.0, 2.0, 3.0], radius=0.5)
    a = sample(region, 5, None, np.random.default_rng(7))
    b = sample(region, 5, None, np.random.default_rng(7))
    assert all(np.array_equal(x, y) for x, y in zip(a, b))


def test_best_of_prefers_first_on_ties_and_skips_non_finite():
    evals = [
        Evaluation(np.array([0.0]), np.nan),
        Evaluation(np.array([1.0]), 2.0),
        Evaluation(np.array([2.0]), np.inf),
        Evaluation(np.array([3.0]), 2.0),
    ]
    assert best_of(evals) is evals[1]
    assert best_of([Evaluation(np.array([0.0]), np.nan)]) is None
    assert best_of([]) is None


def test_update_displaces_past_improvement():
    region = region_at([0.0, 0.0], radius=2.0)
    best = Evaluation(np.array([0.0, 0.0]), 1.0)
    better = Evaluation(np.array([1.0, 0.5]), 5.0)
    new_region, new_best, improved = update(region, best, [better, best])
    assert improved
    assert new_best is better
    assert np.allclose(new_region.center, [2.0, 1.0])
    assert new_region.radius == pytest.approx(2.0 * 0.9)


def test_update_clips_displaced_center():
    region = region_at([8.0, 0.0], radius=2.0)
    best = Evaluation(np.array([8.0, 0.0]), 0.0)
    better = Evaluation(np.array([9.5, 0.0]), 1.0)
    new_region, _, improved = update(region, best, [better])
    assert improved
    assert np.allclose(new_region.center, [10.0, 0.0])


def test_update_recenters_and_shrinks_on_stall():
    region = region_at([3.0, 3.0], radius=4.0)
    best = Evaluation(np.array([1.0, 1.0]), 10.0)
    worse = Evaluation(np.array([2.0, 2.0]), 9.0)
    equal = Evaluation(np.array([0.0, 0.0]), 10.0)
    new_region, new_best, improved = update(region, best, [worse, equal])
    assert not improved
    assert new_best is best
    assert np.array_equal(new_region.center, best.point)
    assert new_region.radius == pytest.approx(2.0)


def test_update_with_only_non_finite_values_is_a_stall():
    region = region_at([0.0], radius=1.0)
    best = Evaluation(np.array([0.0]), -3.0)
    junk = [Evaluation(np.array([0.5]), np.nan), Evaluation(np.array([-0.5]), np.inf)]
    _, new_best, improved = update(region, best, junk)
    assert not improved
    assert new_best is best


def test_finite_candidate_improves_on_non_finite_best():
    region = region_at([0.0], radius=1.0)
    best = Evaluation(np.array([0.0]), np.nan)
    candidate = Evaluation(np.array([0.5]), -100.0)
    _, new_best, improved = update(region, best, [candidate])
    assert improved
    assert new_best is candidate


def test_update_radius_is_floored():
    params = SearchParams(min_radius=1e-3)
    region = region_at([0.0], radius=1.5e-3)
    best = Evaluation(np.array([0.0]), 0.0)
    new_region, _, _ = update(region, best, [], params)
    assert new_region.radius == 1e-3
    again, _, _ = update(new_region, best, [], params)
    assert again.radius == 1e-3


def test_evaluation_is_immutable():
    source = np.array([1.0, 2.0])
    evaluation = Evaluation(source, 4)
    source[0] = 9.0
    assert evaluation.point[0] == 1.0
    assert isinstance(evaluation.value, float)
    with pytest.raises(ValueError):
        evaluation.point[1] = 0.0


def test_region_rejects_infinite_radius():
    with pytest.raises(ValueError):
        region_at([0.0], radius=np.inf)
