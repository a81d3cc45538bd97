"""
Test configuration and fixtures.
"""

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pytest

from gaussian_sums.utils import random_generator, reset_shared_generator

SEED = 2025


@pytest.fixture
def rng():
    """Provide a freshly seeded generator."""
    return random_generator(SEED)


@pytest.fixture(autouse=True)
def close_figures():
    """Close every pyplot figure a test leaves open."""
    yield
    plt.close("all")


@pytest.fixture
def client():
    """Provide an HTTP client on a re-seeded shared generator."""
    from fastapi.testclient import TestClient

    from gaussian_sums.index import app

    reset_shared_generator(SEED)
    with TestClient(app) as test_client:
        yield test_client
