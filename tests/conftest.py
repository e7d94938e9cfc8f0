"""Pytest configuration and shared fixtures for hcube tests.

Provides a deterministic numpy RNG, seeded from the ``TEST_RNG_SEED``
environment variable (default 0).
"""

import os

import numpy as np
import pytest


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests."""
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def seed() -> int:
    """Seed for optimizers constructed inside a test."""
    return _seed()


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy's legacy global RNG for every test."""
    np.random.seed(_seed())
