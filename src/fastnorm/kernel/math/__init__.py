"""Scalar Mathematical Kernels.

Numba-compiled scalar functions for the Normal distribution. They are
inlined into the vectorized kernels (fastnorm.kernel.normal) and the C
entry points (fastnorm.cabi), and are callable from Python as well.

Strategy:
    - Approx versions (A&S 7.1.26 erf) are the default, max error ~1.5e-7
    - Precise versions go through libm erfc for full double precision
"""

from ._stats import (
    # Approx (default)
    erf_approx_scalar,
    normal_pdf_scalar,
    normal_cdf_scalar,
    normal_prob_scalar,

    # Precise
    normal_cdf_precise_scalar,
    normal_prob_precise_scalar,
)

__all__ = [
    'erf_approx_scalar',
    'normal_pdf_scalar',
    'normal_cdf_scalar',
    'normal_prob_scalar',
    'normal_cdf_precise_scalar',
    'normal_prob_precise_scalar',
]
