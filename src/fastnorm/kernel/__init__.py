"""fastnorm Kernel Module.

Numba-compiled kernels for the Normal distribution.

Submodules:
    math: Scalar functions (erf approximation, PDF, CDF, interval probability)
    normal: Vectorized in-place and allocating kernels over float64 arrays

All vectorized kernels take 1-D float64 arrays; element count is implied
by the input array.
"""

from . import math
from . import normal

__all__ = [
    'math',
    'normal',
]
