"""
Example: minimizing Rastrigin and the sphere function with hcube

Runs the hypercube search on two benchmark objectives and prints the best
point found together with the reason the search stopped.
"""

import numpy as np

from hcube import OptimizerConfig, SearchParams, minimize, rastrigin, sphere


def example_sphere():
    """Smooth bowl in three dimensions."""
    print("=" * 60)
    print("Example 1: Sphere function on [-10, 10]^3")
    print("=" * 60)

    config = OptimizerConfig(
        initial_point=np.array([5.0, 5.0, 5.0]),
        lower=-10.0,
        upper=10.0,
        input_tol=0.01,
        output_tol=1e-4,
        max_loops=2000,
        max_evals=5000,
        max_seconds=30,
    )
    result = minimize(sphere, config, seed=0)
    print(f"Termination: {result.termination_reason.value}")
    print(f"Best point: {result.best_point}")
    print(f"Best value: {result.best_value:.3e}")
    print(f"Iterations: {result.iterations}, evaluations: {result.evaluations}")
    print()


def example_rastrigin():
    """Multimodal landscape in eight dimensions, shifted box."""
    print("=" * 60)
    print("Example 2: Rastrigin function on [0, 120]^8")
    print("=" * 60)

    config = OptimizerConfig(
        initial_point=np.full(8, 60.0),
        lower=0.0,
        upper=120.0,
        input_tol=0.01,
        output_tol=0.01,
        max_loops=500,
        max_evals=4000,
        max_seconds=120,
    )
    params = SearchParams(stall_shrink=0.7)
    result = minimize(rastrigin, config, params, seed=0)
    print(f"Termination: {result.termination_reason.value}")
    print(f"Best value: {result.best_value:.4f}")
    print(f"Iterations: {result.iterations}, evaluations: {result.evaluations}")
    print()


if __name__ == "__main__":
    example_sphere()
    example_rastrigin()
    print("Done.")
