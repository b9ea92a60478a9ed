"""
Pytest configuration and shared fixtures for the levelset_pde test suite.

Grids are indexed phi[i, j] with axis 0 = x and axis 1 = y
(np.meshgrid(..., indexing="ij")) and unit spacing unless stated otherwise.
"""

import pytest

import numpy as np

from levelset_pde.types import VelocityField

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "mathematical: Mathematical property validation tests")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Grid Fixtures
# =============================================================================


@pytest.fixture
def index_grid():
    """Factory for (I, J) index meshgrids of a given shape."""

    def _make(nx: int, ny: int):
        return np.meshgrid(np.arange(nx, dtype=float), np.arange(ny, dtype=float), indexing="ij")

    return _make


@pytest.fixture
def ramp_5x5(index_grid):
    """Linear ramp phi[i, j] = i on a 5x5 grid."""
    I, _ = index_grid(5, 5)
    return I.copy()


@pytest.fixture
def circle_sdf(index_grid):
    """Signed distance to a circle of radius 10 centered in a 41x41 grid."""
    I, J = index_grid(41, 41)
    radius = 10.0
    r = np.sqrt((I - 20.0) ** 2 + (J - 20.0) ** 2)
    return r - radius, r, radius


@pytest.fixture
def still_velocity():
    """Factory for an all-zero velocity field of a given shape."""

    def _make(shape):
        return VelocityField(np.zeros(shape), np.zeros(shape))

    return _make


@pytest.fixture
def rng():
    """Deterministic random generator for reproducible tests."""
    return np.random.default_rng(42)
