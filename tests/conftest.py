"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


# Realistic scale of each hardware feature (MYCT, MMIN, MMAX, CACH, CHMIN, CHMAX)
HARDWARE_BASE_ROW = np.array([100.0, 1000.0, 2000.0, 8.0, 2.0, 4.0])


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Well-conditioned six-feature dataset with low noise."""
    n = 100
    X = rng.standard_normal((n, 6))
    beta_true = np.array([1.0, -2.0, 0.5, 3.0, -1.0, 0.25])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def perfect_fit_data(rng):
    """Targets reproduced exactly by a known linear function of the features."""
    n = 30
    X = rng.standard_normal((n, 6))
    beta_true = np.array([2.0, 0.5, -1.5, 1.0, 0.0, -0.75])
    y = X @ beta_true
    return X, y, beta_true


@pytest.fixture
def hardware_data(rng):
    """
    Twelve machines scattered around one base configuration.

    Each feature is perturbed independently by about 5% so the design has
    full column rank; targets sit near 50 with small noise.
    """
    n = 12
    X = HARDWARE_BASE_ROW * (1.0 + 0.05 * rng.standard_normal((n, 6)))
    theta = 50.0 / (6 * HARDWARE_BASE_ROW)
    y = X @ theta + rng.standard_normal(n) * 0.05
    return X, y


@pytest.fixture
def collinear_data(rng):
    """Dataset whose third feature duplicates the first (X'X singular)."""
    n = 50
    X = rng.standard_normal((n, 6))
    X[:, 2] = X[:, 0]
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def ten_samples(rng):
    """Ten well-conditioned samples for fold arithmetic checks."""
    X = rng.standard_normal((10, 6))
    y = X @ np.array([1.0, 2.0, 3.0, -1.0, -2.0, 0.5]) + rng.standard_normal(10) * 0.1
    return X, y
