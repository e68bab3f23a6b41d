"""Tests for fastnorm.cabi C ABI entry points."""

import ctypes

import pytest
import numpy as np

pytest.importorskip("numba")

from fastnorm.optim import disable_logging
disable_logging()

from fastnorm.cabi import normal_pdf_c, normal_cdf_c, normal_prob_c, entry_points
from fastnorm.kernel.normal import normal_pdf, normal_cdf, normal_prob


DPTR = ctypes.POINTER(ctypes.c_double)


def _ptr(arr):
    return arr.ctypes.data_as(DPTR)


def _call_point(entry, x, mu, sigma, n=None):
    out = np.full(len(x), -7.0)
    count = ctypes.c_int(len(x) if n is None else n)
    entry.ctypes(
        ctypes.byref(count),
        _ptr(x),
        ctypes.byref(ctypes.c_double(mu)),
        ctypes.byref(ctypes.c_double(sigma)),
        _ptr(out),
    )
    return out


class TestPointEntryPoints:

    def test_pdf_matches_kernel(self, normal_samples):
        x = np.ascontiguousarray(normal_samples[:500])
        expected = np.empty_like(x)
        normal_pdf(x, 0.5, 1.5, expected)

        out = _call_point(normal_pdf_c, x, 0.5, 1.5)

        np.testing.assert_allclose(out, expected, rtol=1e-15)

    def test_cdf_matches_kernel(self, normal_samples):
        x = np.ascontiguousarray(normal_samples[:500])
        expected = np.empty_like(x)
        normal_cdf(x, -1.0, 2.0, expected)

        out = _call_point(normal_cdf_c, x, -1.0, 2.0)

        np.testing.assert_allclose(out, expected, rtol=1e-15)

    def test_reference_values(self):
        x = np.array([0.0, 1.959964])

        pdf_out = _call_point(normal_pdf_c, x, 0.0, 1.0)
        cdf_out = _call_point(normal_cdf_c, x, 0.0, 1.0)

        assert abs(pdf_out[0] - 0.398942280401433) < 1e-15
        assert abs(cdf_out[0] - 0.5) < 1.5e-7
        assert abs(cdf_out[1] - 0.975) < 1.5e-7

    def test_zero_sigma_follows_ieee(self):
        out = _call_point(normal_cdf_c, np.array([-1.0, 1.0]), 0.0, 0.0)

        np.testing.assert_array_equal(out, [0.0, 1.0])

    def test_non_positive_count_writes_nothing(self):
        x = np.array([0.0, 1.0, 2.0])

        assert np.all(_call_point(normal_pdf_c, x, 0.0, 1.0, n=0) == -7.0)
        assert np.all(_call_point(normal_cdf_c, x, 0.0, 1.0, n=-3) == -7.0)

    def test_partial_count(self):
        """Only the first *n elements are written."""
        x = np.array([0.0, 1.0, 2.0, 3.0])

        out = _call_point(normal_pdf_c, x, 0.0, 1.0, n=2)

        assert np.all(out[:2] > 0.0)
        assert np.all(out[2:] == -7.0)


class TestIntervalEntryPoint:

    def test_prob_matches_kernel(self, intervals):
        lower, upper = intervals
        expected = np.empty_like(lower)
        normal_prob(lower, upper, 0.0, 1.0, expected)

        out = np.empty_like(lower)
        normal_prob_c.ctypes(
            ctypes.byref(ctypes.c_int(len(lower))),
            _ptr(lower),
            _ptr(upper),
            ctypes.byref(ctypes.c_double(0.0)),
            ctypes.byref(ctypes.c_double(1.0)),
            _ptr(out),
        )

        np.testing.assert_allclose(out, expected, rtol=1e-15, atol=1e-16)

    def test_95_interval(self):
        lower = np.array([-1.959964])
        upper = np.array([1.959964])
        out = np.empty(1)

        normal_prob_c.ctypes(
            ctypes.byref(ctypes.c_int(1)),
            _ptr(lower),
            _ptr(upper),
            ctypes.byref(ctypes.c_double(0.0)),
            ctypes.byref(ctypes.c_double(1.0)),
            _ptr(out),
        )

        assert abs(out[0] - 0.95) < 3e-7


class TestAddresses:

    def test_entry_points(self):
        addresses = entry_points()

        assert set(addresses) == {'normal_pdf_c', 'normal_cdf_c', 'normal_prob_c'}
        assert all(isinstance(a, int) and a != 0 for a in addresses.values())
        assert addresses['normal_pdf_c'] == normal_pdf_c.address

    def test_address_is_callable(self):
        """A raw address can be rebound with ctypes, as a host would."""
        proto = ctypes.CFUNCTYPE(
            None,
            ctypes.POINTER(ctypes.c_int), DPTR, DPTR, DPTR, DPTR,
        )
        fn = proto(entry_points()['normal_cdf_c'])

        x = np.array([-1.0, 0.0, 1.0])
        out = np.empty(3)
        fn(
            ctypes.byref(ctypes.c_int(3)),
            _ptr(x),
            ctypes.byref(ctypes.c_double(0.0)),
            ctypes.byref(ctypes.c_double(1.0)),
            _ptr(out),
        )

        assert abs(out[1] - 0.5) < 1.5e-7
        np.testing.assert_allclose(out[0] + out[2], 1.0, rtol=1e-15)
