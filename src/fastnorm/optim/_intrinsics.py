"""LLVM Intrinsics for Numba.

Thin wrappers that emit LLVM intrinsics directly from nopython code.
They work inside both @njit and @optimized_jit functions.

    - assume(cond): llvm.assume, the optimizer may treat cond as true
    - likely(cond): llvm.expect.i1(cond, true), returns cond
    - unlikely(cond): llvm.expect.i1(cond, false), returns cond

Example:
    from fastnorm.optim import optimized_jit, assume, unlikely

    @optimized_jit
    def scale(x, factor, out):
        n = len(x)
        if unlikely(len(out) < n):
            raise ValueError("out is too short")
        assume(len(out) >= n)
        for i in range(n):
            out[i] = x[i] * factor

Note:
    assume() with a condition that is false at runtime is undefined
    behavior. Only assert what the surrounding code has already checked.
"""

from numba import types
from numba.core import cgutils
from numba.extending import intrinsic
import llvmlite.ir as lir


__all__ = [
    'assume',
    'likely',
    'unlikely',
]


_I1 = lir.IntType(1)


def _expect(builder, cond, expected):
    fnty = lir.FunctionType(_I1, [_I1, _I1])
    fn = cgutils.get_or_insert_function(builder.module, fnty, 'llvm.expect.i1')
    return builder.call(fn, [cond, lir.Constant(_I1, expected)])


@intrinsic
def assume(typingctx, cond_ty):
    """Tell LLVM that ``cond`` always holds.

    Typical use is bounding array lengths so that bounds-related branches
    and loop guards can be folded away.
    """
    if not isinstance(cond_ty, types.Boolean):
        return None

    sig = types.void(cond_ty)

    def codegen(context, builder, sig, args):
        [cond] = args
        fnty = lir.FunctionType(lir.VoidType(), [_I1])
        fn = cgutils.get_or_insert_function(builder.module, fnty, 'llvm.assume')
        builder.call(fn, [cond])
        return context.get_dummy_value()

    return sig, codegen


@intrinsic
def likely(typingctx, cond_ty):
    """Branch hint: ``cond`` is usually true. Returns ``cond`` unchanged."""
    if not isinstance(cond_ty, types.Boolean):
        return None

    sig = types.boolean(cond_ty)

    def codegen(context, builder, sig, args):
        [cond] = args
        return _expect(builder, cond, 1)

    return sig, codegen


@intrinsic
def unlikely(typingctx, cond_ty):
    """Branch hint: ``cond`` is usually false. Returns ``cond`` unchanged."""
    if not isinstance(cond_ty, types.Boolean):
        return None

    sig = types.boolean(cond_ty)

    def codegen(context, builder, sig, args):
        [cond] = args
        return _expect(builder, cond, 0)

    return sig, codegen
