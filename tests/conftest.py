"""
Pytest configuration and shared fixtures for dimple tests.
"""

import numpy as np
import pandas as pd
import pytest

from dimple.config.schema import DimpleConfig


@pytest.fixture
def rng():
    """Provide seeded numpy Generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def default_config():
    """Provide default DimpleConfig."""
    return DimpleConfig()


@pytest.fixture
def shared_mask_frame(rng):
    """100 rows; A and B missing together on the first 20 rows, C complete."""
    n = 100
    df = pd.DataFrame({
        "A": rng.normal(size=n),
        "B": rng.normal(size=n),
        "C": rng.normal(size=n),
    })
    df.loc[:19, ["A", "B"]] = np.nan
    return df


@pytest.fixture
def complete_frame(rng):
    """50 x 4 frame without missing values."""
    return pd.DataFrame(rng.normal(size=(50, 4)), columns=["w", "x", "y", "z"])


@pytest.fixture
def random_missing_frame(rng):
    """200 x 6 frame with ~20% cells missing at random."""
    x = rng.normal(size=(200, 6))
    x[rng.random(size=x.shape) < 0.2] = np.nan
    return pd.DataFrame(x, columns=[f"v{j}" for j in range(6)])
