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
def basic_data():
    """Six subjects, two censored (time 2 and 4)."""
    return {
        "time": np.array([1, 2, 3, 4, 5, 6], dtype=np.float64),
        "status": np.array([1, 0, 1, 0, 1, 1], dtype=np.float64),
    }


@pytest.fixture
def trial_data(rng):
    """Two-arm trial with exponential times and ~30% censoring.

    Arm labels appear in the order "placebo", "active" in the raw rows.
    """
    n = 80
    arm = np.where(np.arange(n) % 3 == 0, "active", "placebo")
    arm[0] = "placebo"
    rate = np.where(arm == "active", 0.1, 0.2)
    time = np.round(rng.exponential(1.0 / rate), 1) + 0.1
    status = rng.binomial(1, 0.7, n)
    weight = rng.uniform(0.5, 2.0, n)
    return {"time": time, "status": status, "arm": arm, "w": weight}
