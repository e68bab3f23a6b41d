"""C ABI Entry Points.

Host-callable callbacks with the classic all-pointer calling convention
used by statistical environments that load shared routines through a
foreign-function interface (R's ``.C`` being the typical host):

    void normal_pdf_c (int *n, double *x, double *mu, double *sigma, double *out);
    void normal_cdf_c (int *n, double *x, double *mu, double *sigma, double *out);
    void normal_prob_c(int *n, double *lower, double *upper,
                       double *mu, double *sigma, double *out);

Each is a Numba cfunc: ``.address`` is the raw function pointer to hand
to a host, ``.ctypes`` is a ctypes-callable wrapper.

Caller obligation: every buffer holds at least ``*n`` doubles. There is
no way to check this through raw pointers. ``*n <= 0`` writes nothing.

Example:
    import ctypes
    from fastnorm.cabi import normal_pdf_c

    x = np.linspace(-2.0, 2.0, 5)
    out = np.empty_like(x)
    dptr = ctypes.POINTER(ctypes.c_double)
    normal_pdf_c.ctypes(
        ctypes.byref(ctypes.c_int(len(x))),
        x.ctypes.data_as(dptr),
        ctypes.byref(ctypes.c_double(0.0)),
        ctypes.byref(ctypes.c_double(1.0)),
        out.ctypes.data_as(dptr),
    )
"""

from typing import Dict

from numba import carray, cfunc, types

from fastnorm.optim import unlikely
from fastnorm.optim._logging import get_logger
from fastnorm.kernel.math._stats import (
    normal_pdf_scalar,
    normal_cdf_scalar,
    normal_prob_scalar,
)

__all__ = [
    'normal_pdf_c',
    'normal_cdf_c',
    'normal_prob_c',
    'entry_points',
]


logger = get_logger('cabi')


_INT_P = types.CPointer(types.intc)
_DBL_P = types.CPointer(types.float64)

_POINT_SIG = types.void(_INT_P, _DBL_P, _DBL_P, _DBL_P, _DBL_P)
_INTERVAL_SIG = types.void(_INT_P, _DBL_P, _DBL_P, _DBL_P, _DBL_P, _DBL_P)


@cfunc(_POINT_SIG, nogil=True, error_model='numpy')
def normal_pdf_c(n_ptr, x_ptr, mu_ptr, sigma_ptr, out_ptr):
    n = n_ptr[0]
    if unlikely(n <= 0):
        return

    x = carray(x_ptr, (n,))
    out = carray(out_ptr, (n,))
    mu = mu_ptr[0]
    sigma = sigma_ptr[0]

    for i in range(n):
        out[i] = normal_pdf_scalar(x[i], mu, sigma)


@cfunc(_POINT_SIG, nogil=True, error_model='numpy')
def normal_cdf_c(n_ptr, x_ptr, mu_ptr, sigma_ptr, out_ptr):
    n = n_ptr[0]
    if unlikely(n <= 0):
        return

    x = carray(x_ptr, (n,))
    out = carray(out_ptr, (n,))
    mu = mu_ptr[0]
    sigma = sigma_ptr[0]

    for i in range(n):
        out[i] = normal_cdf_scalar(x[i], mu, sigma)


@cfunc(_INTERVAL_SIG, nogil=True, error_model='numpy')
def normal_prob_c(n_ptr, lower_ptr, upper_ptr, mu_ptr, sigma_ptr, out_ptr):
    n = n_ptr[0]
    if unlikely(n <= 0):
        return

    lower = carray(lower_ptr, (n,))
    upper = carray(upper_ptr, (n,))
    out = carray(out_ptr, (n,))
    mu = mu_ptr[0]
    sigma = sigma_ptr[0]

    for i in range(n):
        out[i] = normal_prob_scalar(lower[i], upper[i], mu, sigma)


def entry_points() -> Dict[str, int]:
    """Map of C symbol name -> function address, for host registration."""
    addresses = {
        'normal_pdf_c': normal_pdf_c.address,
        'normal_cdf_c': normal_cdf_c.address,
        'normal_prob_c': normal_prob_c.address,
    }
    for name, address in addresses.items():
        logger.debug('%s at 0x%x', name, address)
    return addresses
