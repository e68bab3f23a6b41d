"""NumPy Front Door.

Convenience wrappers over fastnorm.kernel.normal that accept any
array-like (or a plain scalar), take care of dtype/layout and optionally
fill a caller-supplied buffer.

    >>> import fastnorm
    >>> fastnorm.cdf([-1.96, 0.0, 1.96])
    array([0.0249979 , 0.5       , 0.9750021 ])
    >>> fastnorm.prob(-1.0, 1.0)
    0.6826894...

Shape handling:
    Inputs of any shape are processed flattened; results keep the input
    shape. Scalar inputs return a Python float.

Parameters:
    mu and sigma must be scalars. Their values are not validated:
    sigma <= 0 yields inf/NaN per IEEE-754, exactly as the kernels do.
"""

import numbers
from typing import Optional, Union

import numpy as np

from fastnorm.kernel.normal import (
    normal_pdf,
    normal_cdf,
    normal_prob,
    normal_cdf_precise,
    normal_prob_precise,
)

__all__ = [
    'pdf',
    'cdf',
    'prob',
]


ArrayLike = Union[float, np.ndarray, list, tuple]


# =============================================================================
# Argument Handling
# =============================================================================

def _as_float64(values, name: str) -> np.ndarray:
    """float64 view of ``values``; 0-d for scalars, C-contiguous otherwise."""
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be convertible to float64: {e}") from e
    # ascontiguousarray would promote 0-d to shape (1,)
    if arr.ndim > 0:
        arr = np.ascontiguousarray(arr)
    return arr


def _as_param(value, name: str) -> float:
    if isinstance(value, np.ndarray):
        if value.ndim != 0:
            raise TypeError(f"{name} must be a scalar, got array of shape {value.shape}")
        value = value.item()
    if not isinstance(value, numbers.Real):
        raise TypeError(f"{name} must be a real scalar, got {type(value).__name__}")
    return float(value)


def _check_out(out: np.ndarray, size: int) -> np.ndarray:
    """Validate a caller buffer and return a flat view of it."""
    if not isinstance(out, np.ndarray):
        raise ValueError(f"out must be a numpy.ndarray, got {type(out).__name__}")
    if out.dtype != np.float64:
        raise ValueError(f"out must have dtype float64, got {out.dtype}")
    if not out.flags.c_contiguous:
        raise ValueError("out must be C-contiguous")
    if not out.flags.writeable:
        raise ValueError("out must be writeable")
    if out.size != size:
        raise ValueError(f"out has {out.size} elements, expected {size}")
    return out.reshape(-1)


def _finish(flat: np.ndarray, shape: tuple, out: Optional[np.ndarray]):
    if out is not None:
        return out
    if shape == ():
        return float(flat[0])
    return flat.reshape(shape)


# =============================================================================
# Public API
# =============================================================================

def pdf(
    x: ArrayLike,
    mu: float = 0.0,
    sigma: float = 1.0,
    out: Optional[np.ndarray] = None
):
    """Normal density at ``x``.

    Args:
        x: Points to evaluate (scalar or array-like)
        mu: Mean
        sigma: Standard deviation
        out: Optional float64 C-contiguous buffer with x's size

    Returns:
        ``out`` if given, else a new array shaped like x (float for scalar x)
    """
    xs = _as_float64(x, 'x')
    flat_x = xs.reshape(-1)
    flat_out = _check_out(out, xs.size) if out is not None else np.empty(xs.size)

    normal_pdf(flat_x, _as_param(mu, 'mu'), _as_param(sigma, 'sigma'), flat_out)
    return _finish(flat_out, xs.shape, out)


def cdf(
    x: ArrayLike,
    mu: float = 0.0,
    sigma: float = 1.0,
    out: Optional[np.ndarray] = None,
    precise: bool = False
):
    """Normal CDF P(X <= x).

    Args:
        x: Points to evaluate (scalar or array-like)
        mu: Mean
        sigma: Standard deviation
        out: Optional float64 C-contiguous buffer with x's size
        precise: Use libm erfc (full precision) instead of the
                 A&S 7.1.26 approximation (abs error < 1e-7)

    Returns:
        ``out`` if given, else a new array shaped like x (float for scalar x)
    """
    xs = _as_float64(x, 'x')
    flat_x = xs.reshape(-1)
    flat_out = _check_out(out, xs.size) if out is not None else np.empty(xs.size)

    kernel = normal_cdf_precise if precise else normal_cdf
    kernel(flat_x, _as_param(mu, 'mu'), _as_param(sigma, 'sigma'), flat_out)
    return _finish(flat_out, xs.shape, out)


def prob(
    lower: ArrayLike,
    upper: ArrayLike,
    mu: float = 0.0,
    sigma: float = 1.0,
    out: Optional[np.ndarray] = None,
    precise: bool = False
):
    """Interval probability P(lower <= X <= upper) = CDF(upper) - CDF(lower).

    Intervals are paired by position. ``lower > upper`` gives a negative
    probability; values are not clamped to [0, 1].

    Args:
        lower: Lower bounds (scalar or array-like)
        upper: Upper bounds, same shape as lower
        mu: Mean
        sigma: Standard deviation
        out: Optional float64 C-contiguous buffer with lower's size
        precise: Use libm erfc instead of the A&S approximation

    Returns:
        ``out`` if given, else a new array shaped like lower
        (float for scalar bounds)

    Raises:
        ValueError: if lower and upper differ in shape
    """
    lo = _as_float64(lower, 'lower')
    hi = _as_float64(upper, 'upper')
    if lo.shape != hi.shape:
        raise ValueError(f"lower and upper must have the same shape, got {lo.shape} and {hi.shape}")

    flat_out = _check_out(out, lo.size) if out is not None else np.empty(lo.size)

    kernel = normal_prob_precise if precise else normal_prob
    kernel(lo.reshape(-1), hi.reshape(-1), _as_param(mu, 'mu'), _as_param(sigma, 'sigma'), flat_out)
    return _finish(flat_out, lo.shape, out)
