"""fastnorm Optimization Toolkit for Numba.

Low-level tools used to compile the fastnorm kernels: LLVM intrinsics,
loop optimization hints and JIT decorators that understand them.

Quick Start:
    from fastnorm.optim import parallel_jit, assume, vectorize
    from numba import prange

    @parallel_jit(fastmath=False)
    def scale(x, factor, out):
        n = len(x)
        assume(len(out) >= n)

        vectorize(8)
        for i in prange(n):
            out[i] = x[i] * factor

Available Components:

    JIT Decorators:
        - optimized_jit: @njit plus loop hint processing
        - fast_jit: @optimized_jit(fastmath=True)
        - parallel_jit: @optimized_jit(parallel=True, fastmath=True)

    LLVM Intrinsics (work with @njit and @optimized_jit):
        - assume(condition)
        - likely(condition)
        - unlikely(condition)

    Loop Hints (metadata derived by @optimized_jit):
        - vectorize(width), no_vectorize()
        - unroll(count), no_unroll()
        - interleave(count)

    Logging:
        - enable_logging(level), disable_logging(), get_logger(name)

    Utilities:
        - inspect_hints(func), get_modified_ir(func)
        - IRProcessor, LoopHint, HintType, process_ir
"""

from ._logging import (
    get_logger,
    enable_logging,
    disable_logging,
)

# =============================================================================
# LLVM Intrinsics
# =============================================================================

from ._intrinsics import (
    assume,
    likely,
    unlikely,
)

# =============================================================================
# Loop Optimization Hints
# =============================================================================

from ._loop_hints import (
    vectorize,
    no_vectorize,
    unroll,
    no_unroll,
    interleave,
)

# =============================================================================
# JIT Decorators
# =============================================================================

from ._jit import (
    optimized_jit,
    fast_jit,
    parallel_jit,
    OptimizedDispatcher,
    inspect_hints,
    get_modified_ir,
)

# =============================================================================
# IR Processing
# =============================================================================

from ._ir_processor import (
    IRProcessor,
    LoopHint,
    HintType,
    process_ir,
)


__all__ = [
    # Logging
    'get_logger',
    'enable_logging',
    'disable_logging',

    # JIT Decorators
    'optimized_jit',
    'fast_jit',
    'parallel_jit',
    'OptimizedDispatcher',

    # LLVM Intrinsics
    'assume',
    'likely',
    'unlikely',

    # Loop Hints
    'vectorize',
    'no_vectorize',
    'unroll',
    'no_unroll',
    'interleave',

    # IR Processing
    'IRProcessor',
    'LoopHint',
    'HintType',
    'process_ir',

    # Utilities
    'inspect_hints',
    'get_modified_ir',
]
