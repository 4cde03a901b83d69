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
def line_data(rng):
    """Noisy straight line y = 2 + 0.5x on 40 points."""
    x = np.linspace(0.0, 20.0, 40)
    y = 2.0 + 0.5 * x + rng.normal(0.0, 1.0, x.size)
    return x, y


@pytest.fixture
def wave_data(rng):
    """Noisy sine wave on a jittered unit grid for smoothing tests."""
    x = np.arange(60.0) + rng.uniform(-0.3, 0.3, 60)
    y = np.sin(x / 6.0) + rng.normal(0.0, 0.2, x.size)
    return x, y
