"""fastnorm: Numba-compiled Normal distribution kernels.

Vectorized PDF, CDF (Abramowitz & Stegun 7.1.26 error function) and
interval probability over float64 arrays, plus C ABI entry points for
embedding into host statistical environments.

Quick Start:
    import numpy as np
    import fastnorm

    fastnorm.pdf(0.0)                          # 0.3989422804014327
    fastnorm.cdf(np.array([-1.0, 0.0, 1.0]))
    fastnorm.prob(-1.959964, 1.959964)         # ~0.95

    # Zero-allocation kernels
    from fastnorm.kernel.normal import normal_cdf
    out = np.empty(1000)
    normal_cdf(np.random.randn(1000), 0.0, 1.0, out)

Submodules:
    api: NumPy front door (pdf, cdf, prob)
    kernel: Scalar and vectorized Numba kernels
    cabi: C ABI callbacks (normal_pdf_c, normal_cdf_c, normal_prob_c)
    optim: JIT decorators, LLVM intrinsics, loop hints, logging
"""

__version__ = '0.1.0'

from . import optim
from . import kernel
from .api import pdf, cdf, prob

__all__ = [
    '__version__',
    'optim',
    'kernel',
    'pdf',
    'cdf',
    'prob',
]
