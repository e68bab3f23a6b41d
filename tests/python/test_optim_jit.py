"""Tests for fastnorm.optim JIT decorators."""

import warnings

import pytest
import numpy as np

pytest.importorskip("numba")

from numba import njit, prange
from fastnorm.optim import (
    optimized_jit, fast_jit, parallel_jit, assume, vectorize,
    OptimizedDispatcher, inspect_hints, get_modified_ir,
)


class TestOptimizedJit:
    """Test optimized_jit decorator."""

    def test_basic_compilation(self, arr):
        @optimized_jit
        def sum_arr(arr):
            total = 0.0
            for i in range(len(arr)):
                total += arr[i]
            return total

        assert np.isclose(sum_arr(arr), np.sum(arr))

    def test_with_options(self, arr):
        @optimized_jit(fastmath=True, cache=False)
        def fast_sum(arr):
            total = 0.0
            for i in range(len(arr)):
                total += arr[i]
            return total

        assert np.isclose(fast_sum(arr), np.sum(arr))
        assert fast_sum.targetoptions['fastmath']

    def test_with_intrinsics(self, arr):
        @optimized_jit
        def optimized_sum(arr):
            n = len(arr)
            assume(n > 0)

            vectorize(8)
            total = 0.0
            for i in range(n):
                total += arr[i]
            return total

        assert np.isclose(optimized_sum(arr), np.sum(arr))

    def test_returns_dispatcher(self):
        @optimized_jit
        def my_func(arr):
            return np.sum(arr)

        assert isinstance(my_func, OptimizedDispatcher)
        assert my_func.__name__ == 'my_func'
        assert 'my_func' in repr(my_func)

    def test_inspect_llvm(self, arr):
        @optimized_jit
        def my_func(arr):
            return len(arr)

        _ = my_func(arr)
        assert 'define' in my_func.inspect_llvm()

    def test_division_by_zero_is_ieee(self):
        """Default error_model gives inf/NaN instead of ZeroDivisionError."""
        @optimized_jit
        def ratio(a, b):
            return a / b

        assert ratio(1.0, 0.0) == np.inf
        assert np.isnan(ratio(0.0, 0.0))

    def test_process_hints_disabled(self, small_arr):
        @optimized_jit(process_hints=False)
        def plain(arr):
            vectorize(8)
            total = 0.0
            for i in range(len(arr)):
                total += arr[i]
            return total

        _ = plain(small_arr)
        assert get_modified_ir(plain) is None


class TestComposition:
    """OptimizedDispatcher inside other compiled code."""

    def test_called_from_njit(self):
        @optimized_jit(inline='always')
        def square(x):
            return x * x

        @njit
        def sum_squares(arr):
            total = 0.0
            for x in arr:
                total += square(x)
            return total

        assert sum_squares(np.array([1.0, 2.0, 3.0])) == 14.0

    def test_called_from_optimized_jit(self):
        @optimized_jit
        def half(x):
            return 0.5 * x

        @optimized_jit
        def apply(arr, out):
            for i in range(len(arr)):
                out[i] = half(arr[i])

        out = np.empty(3)
        apply(np.array([2.0, 4.0, 6.0]), out)
        np.testing.assert_array_equal(out, [1.0, 2.0, 3.0])


class TestFastJit:
    """Test fast_jit decorator."""

    def test_basic(self, arr):
        @fast_jit
        def fast_sum(arr):
            total = 0.0
            for x in arr:
                total += x
            return total

        assert np.isclose(fast_sum(arr), np.sum(arr))
        assert fast_sum.targetoptions['fastmath']


class TestParallelJit:
    """Test parallel_jit decorator."""

    def test_basic(self, arr):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")

            @parallel_jit
            def par_double(arr, out):
                for i in prange(len(arr)):
                    out[i] = arr[i] * 2.0

            out = np.empty_like(arr)
            par_double(arr, out)

        np.testing.assert_array_equal(out, arr * 2.0)
        assert par_double.targetoptions['parallel']

    def test_fastmath_override(self):
        """fastmath=False keeps NaN handling intact."""
        @parallel_jit(fastmath=False)
        def is_nan(arr, out):
            for i in prange(len(arr)):
                out[i] = 1.0 if arr[i] != arr[i] else 0.0

        out = np.empty(2)
        is_nan(np.array([np.nan, 1.0]), out)

        np.testing.assert_array_equal(out, [1.0, 0.0])
        assert not is_nan.targetoptions['fastmath']


class TestDebugUtilities:

    def test_inspect_hints(self, small_arr):
        @optimized_jit
        def hinted(arr):
            vectorize(4)
            total = 0.0
            for i in range(len(arr)):
                total += arr[i]
            return total

        _ = hinted(small_arr)
        found = inspect_hints(hinted)

        assert len(found) == 1
        hints = next(iter(found.values()))
        assert any(h.hint_type == 'VECTORIZE' and h.value == 4 for h in hints)

    def test_inspect_hints_uncompiled(self):
        @optimized_jit
        def never_called(x):
            return x

        assert inspect_hints(never_called) == {}

    def test_inspect_hints_plain_function(self):
        assert inspect_hints(len) == {}

    def test_get_modified_ir_plain_function(self):
        assert get_modified_ir(len) is None
