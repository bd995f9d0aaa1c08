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
def censored_sample(rng):
    """Exponential event times with independent exponential censoring."""
    n = 250
    event_time = rng.exponential(12.0, size=n).round(1)
    censor_time = rng.exponential(20.0, size=n).round(1)
    time = np.minimum(event_time, censor_time)
    event = event_time <= censor_time
    return time, event
