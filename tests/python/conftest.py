"""Pytest configuration for fastnorm tests."""

import sys
import os

# Add src to path so fastnorm can be imported without installing
_src = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))
if _src not in sys.path:
    sys.path.insert(0, _src)

import pytest
import numpy as np

# =============================================================================
# Check available components
# =============================================================================

SCIPY_AVAILABLE = False

try:
    from fastnorm.optim import disable_logging
    disable_logging()
except ImportError:
    pass

try:
    import scipy  # noqa: F401
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "numba: tests requiring Numba")
    config.addinivalue_line("markers", "slow: slow tests")


# =============================================================================
# Fixtures - Arrays
# =============================================================================

@pytest.fixture
def arr():
    """Random float64 array (1000 elements)."""
    np.random.seed(42)
    return np.random.rand(1000)


@pytest.fixture
def small_arr():
    """Small array for quick tests (100 elements)."""
    np.random.seed(42)
    return np.random.rand(100)


@pytest.fixture
def normal_samples():
    """Standard normal draws spanning both tails (10000 elements)."""
    np.random.seed(42)
    return np.random.randn(10000)


@pytest.fixture
def intervals():
    """Paired (lower, upper) bounds with lower <= upper (1000 intervals)."""
    np.random.seed(42)
    a = np.random.randn(1000) * 2.0
    b = np.random.randn(1000) * 2.0
    return np.minimum(a, b), np.maximum(a, b)


# =============================================================================
# Skip Decorators
# =============================================================================

requires_scipy = pytest.mark.skipif(
    not SCIPY_AVAILABLE,
    reason="SciPy not available"
)
