"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Three predictors plus a constant, low noise."""
    n = 100
    X = rng.standard_normal((n, 3))
    beta_true = np.array([0.5, 1.0, -2.0, 0.5])
    y = beta_true[0] + X @ beta_true[1:] + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def line_data():
    """y = 2 + 3x exactly."""
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = 2.0 + 3.0 * x
    return x, y


@pytest.fixture
def noisy_line_data(rng):
    """One predictor, y = 1.5 - 0.7x + noise."""
    n = 50
    x = rng.uniform(0.0, 10.0, n)
    y = 1.5 - 0.7 * x + rng.standard_normal(n) * 0.3
    return x, y


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail).

    Integer-valued so that X'X is formed exactly.
    """
    n = 100
    x1 = rng.integers(-5, 6, n).astype(float)
    x2 = rng.integers(-5, 6, n).astype(float)
    x3 = x1 + x2  # Perfect collinearity
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y
