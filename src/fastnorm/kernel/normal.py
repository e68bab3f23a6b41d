"""Vectorized Normal Distribution Kernels.

Element-wise PDF, CDF and interval probability over float64 arrays,
with shared scalar parameters (mu, sigma) broadcast over every element.

Design:
    - In-place kernels write into a caller-provided ``out`` buffer and
      never allocate; ``*_new`` variants return a fresh array
    - The element count is len(x) (len(lower) for intervals); a short
      ``out``/``upper`` raises ValueError instead of writing out of bounds
    - Elements are independent, loops run with prange
    - No fast-math: NaN/inf inputs and sigma <= 0 follow IEEE-754, and
      the erf polynomial is evaluated in its published Horner order

Example:
    x = np.linspace(-3.0, 3.0, 7)
    out = np.empty_like(x)
    normal_cdf(x, 0.0, 1.0, out)
"""

import numpy as np
from numba import prange

from fastnorm.optim import parallel_jit, assume, unlikely, vectorize
from fastnorm.kernel.math._stats import (
    erf_approx_scalar,
    normal_pdf_scalar,
    normal_cdf_scalar,
    normal_prob_scalar,
    normal_cdf_precise_scalar,
    normal_prob_precise_scalar,
)

__all__ = [
    # In-place
    'normal_pdf',
    'normal_cdf',
    'normal_prob',
    'normal_cdf_precise',
    'normal_prob_precise',
    'erf_approx',

    # Allocating
    'normal_pdf_new',
    'normal_cdf_new',
    'normal_prob_new',
]


# =============================================================================
# In-place Kernels
# =============================================================================

@parallel_jit(fastmath=False, cache=True)
def normal_pdf(
    x: np.ndarray,
    mu: float,
    sigma: float,
    out: np.ndarray
) -> None:
    """Normal density at each x[i].

    Args:
        x: Points to evaluate, float64[n]
        mu: Mean
        sigma: Standard deviation (not validated)
        out: Output densities, at least n elements
    """
    n = len(x)
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(x) elements")
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = normal_pdf_scalar(x[i], mu, sigma)


@parallel_jit(fastmath=False, cache=True)
def normal_cdf(
    x: np.ndarray,
    mu: float,
    sigma: float,
    out: np.ndarray
) -> None:
    """Normal CDF at each x[i] (A&S 7.1.26, abs error < 1e-7).

    Args:
        x: Points to evaluate, float64[n]
        mu: Mean
        sigma: Standard deviation (not validated)
        out: Output probabilities, at least n elements
    """
    n = len(x)
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(x) elements")
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = normal_cdf_scalar(x[i], mu, sigma)


@parallel_jit(fastmath=False, cache=True)
def normal_prob(
    lower: np.ndarray,
    upper: np.ndarray,
    mu: float,
    sigma: float,
    out: np.ndarray
) -> None:
    """P(lower[i] <= X <= upper[i]) for each interval i.

    Computed as CDF(upper[i]) - CDF(lower[i]); negative when
    lower[i] > upper[i], never clamped.

    Args:
        lower: Interval lower bounds, float64[n]
        upper: Interval upper bounds, at least n elements
        mu: Mean
        sigma: Standard deviation (not validated)
        out: Output probabilities, at least n elements
    """
    n = len(lower)
    if unlikely(len(upper) < n):
        raise ValueError("upper must have at least len(lower) elements")
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(lower) elements")
    assume(len(upper) >= n)
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = normal_prob_scalar(lower[i], upper[i], mu, sigma)


@parallel_jit(fastmath=False, cache=True)
def normal_cdf_precise(
    x: np.ndarray,
    mu: float,
    sigma: float,
    out: np.ndarray
) -> None:
    """Normal CDF at each x[i] to full double precision (libm erfc).

    Args:
        x: Points to evaluate, float64[n]
        mu: Mean
        sigma: Standard deviation (not validated)
        out: Output probabilities, at least n elements
    """
    n = len(x)
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(x) elements")
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = normal_cdf_precise_scalar(x[i], mu, sigma)


@parallel_jit(fastmath=False, cache=True)
def normal_prob_precise(
    lower: np.ndarray,
    upper: np.ndarray,
    mu: float,
    sigma: float,
    out: np.ndarray
) -> None:
    """Interval probability to full double precision (libm erfc).

    Args:
        lower: Interval lower bounds, float64[n]
        upper: Interval upper bounds, at least n elements
        mu: Mean
        sigma: Standard deviation (not validated)
        out: Output probabilities, at least n elements
    """
    n = len(lower)
    if unlikely(len(upper) < n):
        raise ValueError("upper must have at least len(lower) elements")
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(lower) elements")
    assume(len(upper) >= n)
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = normal_prob_precise_scalar(lower[i], upper[i], mu, sigma)


@parallel_jit(fastmath=False, cache=True)
def erf_approx(x: np.ndarray, out: np.ndarray) -> None:
    """A&S 7.1.26 error function at each x[i], abs error < 1.5e-7."""
    n = len(x)
    if unlikely(len(out) < n):
        raise ValueError("out must have at least len(x) elements")
    assume(len(out) >= n)

    vectorize(8)
    for i in prange(n):
        out[i] = erf_approx_scalar(x[i])


# =============================================================================
# Convenience Functions (allocating versions)
# =============================================================================

@parallel_jit(fastmath=False, cache=True)
def normal_pdf_new(x: np.ndarray, mu: float, sigma: float) -> np.ndarray:
    """Allocating version of normal_pdf."""
    n = len(x)
    out = np.empty(n, dtype=np.float64)

    for i in prange(n):
        out[i] = normal_pdf_scalar(x[i], mu, sigma)

    return out


@parallel_jit(fastmath=False, cache=True)
def normal_cdf_new(x: np.ndarray, mu: float, sigma: float) -> np.ndarray:
    """Allocating version of normal_cdf."""
    n = len(x)
    out = np.empty(n, dtype=np.float64)

    for i in prange(n):
        out[i] = normal_cdf_scalar(x[i], mu, sigma)

    return out


@parallel_jit(fastmath=False, cache=True)
def normal_prob_new(
    lower: np.ndarray,
    upper: np.ndarray,
    mu: float,
    sigma: float
) -> np.ndarray:
    """Allocating version of normal_prob."""
    n = len(lower)
    if unlikely(len(upper) < n):
        raise ValueError("upper must have at least len(lower) elements")
    assume(len(upper) >= n)
    out = np.empty(n, dtype=np.float64)

    for i in prange(n):
        out[i] = normal_prob_scalar(lower[i], upper[i], mu, sigma)

    return out
