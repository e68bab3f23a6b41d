"""Loop Optimization Hints for Numba.

Each hint inserts a marker into the LLVM IR right before the loop it is
meant for. OptimizedDispatcher (see _jit.py) scans compiled IR for these
markers and derives the corresponding !llvm.loop metadata.

Available hints:
    - vectorize(width): vectorize the next loop with the given width
    - no_vectorize(): keep the next loop scalar
    - unroll(count): unroll the next loop (0 = full unroll)
    - no_unroll(): keep the next loop rolled
    - interleave(count): interleave count for the next loop

Example:
    from fastnorm.optim import optimized_jit, vectorize

    @optimized_jit
    def scale(arr, factor):
        vectorize(8)
        for i in range(len(arr)):
            arr[i] *= factor

Note:
    Widths and counts must be integer literals so the marker can carry
    them at compile time.
"""

from numba import types
from numba.core import cgutils
from numba.extending import intrinsic
import llvmlite.ir as lir


__all__ = [
    'vectorize',
    'no_vectorize',
    'unroll',
    'no_unroll',
    'interleave',
    'MARKER_PREFIX',
]


# =============================================================================
# Marker Format
# =============================================================================
#
#   __FASTNORM_LOOP_<KIND>_<VALUE>__   e.g. __FASTNORM_LOOP_VECTORIZE_8__
#   __FASTNORM_LOOP_<KIND>__           e.g. __FASTNORM_LOOP_NO_UNROLL__
#
# The marker is a load from a weak global named after it. Inline asm
# comments are not used: LLVM builds without an asm parser abort the
# process when finalizing a module that contains them.
# =============================================================================

MARKER_PREFIX = '__FASTNORM_LOOP_'


def _marker_name(kind, value=None):
    if value is None:
        return f'{MARKER_PREFIX}{kind}__'
    return f'{MARKER_PREFIX}{kind}_{value}__'


def _insert_marker(builder, marker_name):
    """Insert ``marker_name`` into the IR at the builder's position."""
    module = builder.module
    try:
        gv = module.get_global(marker_name)
    except KeyError:
        gv = lir.GlobalVariable(module, lir.IntType(32), marker_name)
        gv.initializer = lir.Constant(lir.IntType(32), 0)
        # weak: may be overridden at link time, so the load can't be folded
        gv.linkage = 'weak'

    load_val = builder.load(gv)

    # assume(load >= 0) keeps the load alive through optimization
    assume_fnty = lir.FunctionType(lir.VoidType(), [lir.IntType(1)])
    assume_fn = cgutils.get_or_insert_function(module, assume_fnty, 'llvm.assume')
    zero = lir.Constant(lir.IntType(32), 0)
    builder.call(assume_fn, [builder.icmp_signed('>=', load_val, zero)])


def _literal_value(value_ty):
    """Literal integer carried by ``value_ty``, or None to let Numba retry."""
    if isinstance(value_ty, types.IntegerLiteral):
        return value_ty.literal_value
    return None


def _marker_codegen(marker):
    def codegen(context, builder, sig, args):
        _insert_marker(builder, marker)
        return context.get_dummy_value()
    return codegen


# =============================================================================
# Vectorization
# =============================================================================

@intrinsic
def vectorize(typingctx, width_ty):
    """Vectorize the next loop with ``width`` lanes.

    Translates to: !{"llvm.loop.vectorize.width", i32 <width>}

    Example:
        @optimized_jit
        def double(arr):
            vectorize(8)
            for i in range(len(arr)):
                arr[i] *= 2.0
    """
    width = _literal_value(width_ty)
    if width is None:
        return None
    return types.void(types.intp), _marker_codegen(_marker_name('VECTORIZE', width))


@intrinsic
def no_vectorize(typingctx):
    """Keep the next loop scalar.

    Translates to: !{"llvm.loop.vectorize.enable", i1 false}
    """
    return types.void(), _marker_codegen(_marker_name('NO_VECTORIZE'))


# =============================================================================
# Unrolling
# =============================================================================

@intrinsic
def unroll(typingctx, count_ty):
    """Unroll the next loop ``count`` times.

    count=0 requests a full unroll (trip count must be known).
    """
    count = _literal_value(count_ty)
    if count is None:
        return None
    return types.void(types.intp), _marker_codegen(_marker_name('UNROLL', count))


@intrinsic
def no_unroll(typingctx):
    """Disable unrolling for the next loop."""
    return types.void(), _marker_codegen(_marker_name('NO_UNROLL'))


# =============================================================================
# Interleaving
# =============================================================================

@intrinsic
def interleave(typingctx, count_ty):
    """Interleave ``count`` iterations of the next loop.

    Translates to: !{"llvm.loop.interleave.count", i32 <count>}
    """
    count = _literal_value(count_ty)
    if count is None:
        return None
    return types.void(types.intp), _marker_codegen(_marker_name('INTERLEAVE', count))
