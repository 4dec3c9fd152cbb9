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
def doas_system_data(rng):
    """
    Small DOAS-like fit: two absorbers with very different magnitudes
    plus a quadratic polynomial, observed over 200 pixels.
    """
    m = 200
    wavelength = np.linspace(-1.0, 1.0, m)
    absorber_1 = 1e-19 * (1.0 + np.sin(7.0 * wavelength))
    absorber_2 = 3e-20 * np.exp(-(wavelength - 0.2) ** 2 / 0.05)
    A = np.column_stack([
        absorber_1,
        absorber_2,
        np.ones(m),
        wavelength,
        wavelength ** 2,
    ])
    x_true = np.array([2.5e18, -4.0e18, 0.3, -0.05, 0.01])
    b = A @ x_true + rng.standard_normal(m) * 1e-3
    return A, b, x_true


@pytest.fixture
def well_conditioned_data(rng):
    """Random full-column-rank system with an exact solution."""
    m, n = 50, 4
    A = rng.standard_normal((m, n))
    x_true = np.array([1.0, -2.0, 0.5, 3.0])
    b = A @ x_true
    return A, b, x_true


@pytest.fixture
def rank_deficient_matrix(rng):
    """6 x 4 matrix of rank 3 (last column = sum of the first two)."""
    base = rng.standard_normal((6, 3))
    return np.column_stack([base, base[:, 0] + base[:, 1]])
