"""Logging for the fastnorm package.

All modules log through children of the ``fastnorm`` logger. The package
installs a NullHandler only; applications decide where records go.

Usage:
    from fastnorm.optim import enable_logging, disable_logging

    enable_logging()          # INFO and above to stderr
    enable_logging('DEBUG')   # everything, including IR processing
    disable_logging()         # silence the package
"""

import logging
from typing import Optional, Union


__all__ = [
    'get_logger',
    'enable_logging',
    'disable_logging',
]


ROOT_LOGGER_NAME = 'fastnorm'
_FORMAT = '[%(name)s] %(levelname)s: %(message)s'

_root = logging.getLogger(ROOT_LOGGER_NAME)
_root.addHandler(logging.NullHandler())

# Handler installed by enable_logging(), kept so repeated calls don't stack
_stream_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``get_logger('optim.jit')``."""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def enable_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Send package log records to stderr at ``level`` and above.

    Args:
        level: Logging level (int or name such as 'DEBUG')

    Returns:
        The package root logger
    """
    global _stream_handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if _stream_handler is None:
        _stream_handler = logging.StreamHandler()
        _stream_handler.setFormatter(logging.Formatter(_FORMAT))
        _root.addHandler(_stream_handler)

    _root.setLevel(level)
    _root.disabled = False
    return _root


def disable_logging() -> None:
    """Silence all fastnorm loggers."""
    global _stream_handler

    if _stream_handler is not None:
        _root.removeHandler(_stream_handler)
        _stream_handler = None

    _root.setLevel(logging.CRITICAL + 1)
