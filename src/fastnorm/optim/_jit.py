"""JIT Decorators with Loop Hint Processing.

@optimized_jit works like Numba's @njit, and additionally:
1. Compiles the function with Numba
2. On first call, scans the generated LLVM IR for loop hint markers
3. Records the IR annotated with the corresponding LLVM loop metadata

Usage:
    from fastnorm.optim import optimized_jit, vectorize, assume

    @optimized_jit
    def total(arr):
        n = len(arr)
        assume(n > 0)

        vectorize(8)
        acc = 0.0
        for i in range(n):
            acc += arr[i]
        return acc

Options:
    @optimized_jit(fastmath=True, parallel=True, cache=True)
    def my_func(...):
        ...

Note:
    The compiled code itself is the code Numba produced. The annotated IR
    is kept for inspection (get_modified_ir, inspect_hints).
"""

from typing import Any, Callable, Dict, Optional, Union

from numba import njit, types
from numba.core.dispatcher import Dispatcher

from ._ir_processor import IRProcessor
from ._loop_hints import MARKER_PREFIX
from ._logging import get_logger


__all__ = [
    'optimized_jit',
    'fast_jit',
    'parallel_jit',
    'OptimizedDispatcher',
    'inspect_hints',
    'get_modified_ir',
]


logger = get_logger('optim.jit')


# =============================================================================
# Dispatcher Wrapper
# =============================================================================

class OptimizedDispatcher:
    """Wrapper around a Numba Dispatcher that adds IR post-processing.

    Behaves like the wrapped dispatcher, both when called from Python and
    when referenced from other compiled functions.

    Attributes:
        _dispatcher: The underlying Numba Dispatcher
        _process_hints: Whether to process loop hints
        _processed_signatures: Signatures whose IR has been scanned
        _modified_irs: Annotated IR per signature
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        process_hints: bool = True,
        verbose: bool = False,
    ):
        self._dispatcher = dispatcher
        self._process_hints = process_hints
        self._verbose = verbose
        self._processed_signatures = set()
        self._ir_processor = IRProcessor(verbose=verbose) if process_hints else None
        self._modified_irs: Dict[Any, str] = {}

    def __call__(self, *args, **kwargs):
        result = self._dispatcher(*args, **kwargs)

        # Fast path: nothing new compiled by this call
        if self._process_hints and len(self._dispatcher.signatures) != len(self._processed_signatures):
            self._process_new_signatures()

        return result

    def _process_new_signatures(self):
        for sig in self._dispatcher.signatures:
            if sig not in self._processed_signatures:
                self._processed_signatures.add(sig)
                self._process_signature(sig)

    def _loaded_from_cache(self, sig) -> bool:
        """Whether ``sig`` came from the on-disk cache (no IR to inspect)."""
        return self._dispatcher.stats.cache_hits.get(sig, 0) > 0

    def _process_signature(self, sig):
        if self._loaded_from_cache(sig):
            logger.debug('Skipping hints for cached %s%s', self.__name__, sig)
            return

        try:
            ir = self._dispatcher.inspect_llvm(sig)
        except Exception as e:
            logger.warning('Could not fetch IR for %s%s: %s', self.__name__, sig, e)
            return

        if MARKER_PREFIX not in ir:
            return

        level = 'info' if self._verbose else 'debug'
        getattr(logger, level)('Processing hints for %s%s', self.__name__, sig)

        try:
            modified_ir, hints = self._ir_processor.process(ir)
        except Exception as e:
            logger.warning('Failed to process IR for %s%s: %s', self.__name__, sig, e)
            return

        if hints:
            self._modified_irs[sig] = modified_ir
            getattr(logger, level)('Applied %d loop hints to %s', len(hints), self.__name__)

    # ==========================================================================
    # Dispatcher Interface
    # ==========================================================================

    @property
    def _numba_type_(self):
        """Type as the wrapped dispatcher when used inside compiled code."""
        return types.Dispatcher(self._dispatcher)

    @property
    def signatures(self):
        return self._dispatcher.signatures

    def inspect_llvm(self, signature=None):
        """LLVM IR for ``signature``; the annotated IR when hints were applied."""
        if signature is None and self._dispatcher.signatures:
            signature = self._dispatcher.signatures[0]

        if signature in self._modified_irs:
            return self._modified_irs[signature]

        return self._dispatcher.inspect_llvm(signature)

    def inspect_asm(self, signature=None):
        return self._dispatcher.inspect_asm(signature)

    def inspect_types(self, file=None):
        return self._dispatcher.inspect_types(file)

    @property
    def py_func(self):
        return self._dispatcher.py_func

    @property
    def __name__(self):
        return self._dispatcher.__name__

    @property
    def __doc__(self):
        return self._dispatcher.__doc__

    def __repr__(self):
        return f"<OptimizedDispatcher({self._dispatcher.__name__})>"

    def __getattr__(self, name):
        return getattr(self._dispatcher, name)


# =============================================================================
# Decorators
# =============================================================================

def optimized_jit(
    func: Optional[Callable] = None,
    *,
    # Our options
    process_hints: bool = True,
    verbose: bool = False,
    # Numba options (passed through)
    nogil: bool = True,
    cache: bool = False,
    parallel: bool = False,
    fastmath: bool = False,
    error_model: str = 'numpy',
    locals: Optional[Dict] = None,
    boundscheck: bool = False,
    **numba_options
) -> Union[Callable, OptimizedDispatcher]:
    """Numba @njit with loop hint processing.

    Args:
        func: Function to compile (when used without parentheses)
        process_hints: Scan compiled IR for loop hints (default: True)
        verbose: Log hint processing at INFO instead of DEBUG

        # Standard Numba options:
        nogil: Release the GIL during execution (default: True)
        cache: Cache compiled code to disk (default: False)
        parallel: Enable automatic parallelization / prange (default: False)
        fastmath: Enable fast-math flags (default: False)
        error_model: 'numpy' lets float division by zero produce inf/NaN,
                     'python' raises ZeroDivisionError (default: 'numpy')
        locals: Dictionary of local variable types
        boundscheck: Enable array bounds checking (default: False)
        **numba_options: Anything else njit accepts (e.g. inline='always')

    Returns:
        OptimizedDispatcher wrapping the compiled function

    Example:
        @optimized_jit
        def add_one(arr):
            vectorize(8)
            for i in range(len(arr)):
                arr[i] += 1.0

        @optimized_jit(parallel=True, cache=True)
        def add_one_parallel(arr):
            ...
    """
    numba_opts = {
        'nogil': nogil,
        'cache': cache,
        'parallel': parallel,
        'fastmath': fastmath,
        'error_model': error_model,
        'boundscheck': boundscheck,
        **numba_options
    }
    if locals is not None:
        numba_opts['locals'] = locals

    def decorator(fn: Callable) -> OptimizedDispatcher:
        dispatcher = njit(**numba_opts)(fn)
        return OptimizedDispatcher(
            dispatcher,
            process_hints=process_hints,
            verbose=verbose,
        )

    # Handle both @optimized_jit and @optimized_jit()
    if func is not None:
        return decorator(func)
    return decorator


def fast_jit(func: Optional[Callable] = None, **kwargs) -> Union[Callable, OptimizedDispatcher]:
    """Shorthand for @optimized_jit(fastmath=True)."""
    kwargs.setdefault('fastmath', True)
    return optimized_jit(func, **kwargs)


def parallel_jit(func: Optional[Callable] = None, **kwargs) -> Union[Callable, OptimizedDispatcher]:
    """Shorthand for @optimized_jit(parallel=True, fastmath=True).

    fastmath can be switched off for kernels that must keep IEEE semantics:

        @parallel_jit(fastmath=False)
        def kernel(x, out):
            for i in prange(len(x)):
                ...
    """
    kwargs.setdefault('parallel', True)
    kwargs.setdefault('fastmath', True)
    return optimized_jit(func, **kwargs)


# =============================================================================
# Debug Utilities
# =============================================================================

def inspect_hints(func: OptimizedDispatcher) -> Dict[Any, list]:
    """Log and return the loop hints found in each compiled signature.

    Example:
        my_func(np.zeros(10))  # trigger compilation
        inspect_hints(my_func)
    """
    if not isinstance(func, OptimizedDispatcher):
        logger.info('%r is not an OptimizedDispatcher', func)
        return {}

    if not func.signatures:
        logger.info('%s has not been compiled yet, call it first', func.__name__)
        return {}

    processor = IRProcessor()
    found = {}

    for sig in func.signatures:
        if func._loaded_from_cache(sig):
            logger.info('Signature %s: loaded from cache, IR not available', sig)
            continue

        hints = processor.scan_markers(func._dispatcher.inspect_llvm(sig))
        found[sig] = hints

        logger.info('Signature %s: %d loop hints', sig, len(hints))
        for hint in hints:
            logger.info('  %s(%s) at line %d', hint.hint_type, hint.value, hint.line_number)

    return found


def get_modified_ir(func: OptimizedDispatcher, signature=None) -> Optional[str]:
    """Annotated IR of ``func`` for ``signature`` (first one by default), or None."""
    if not isinstance(func, OptimizedDispatcher):
        return None

    if signature is None and func._modified_irs:
        signature = next(iter(func._modified_irs.keys()))

    return func._modified_irs.get(signature)
