"""
Per-second rates from kernel counters in the /proc filesystem.

This package samples monotonically increasing counters, keeps the
previous snapshot (optionally on disk) and reports the delta per second.
"""

from .core import DeltaRateEngine, compute_rate, validate_counter
from .store import SnapshotStore
from .exceptions import (
    ProcRateError,
    ConfigurationError,
    SourceUnavailableError,
    StateError,
    ValidationError
)
from .constants import (
    STATUS_OK,
    STATUS_WARN,
    STATUS_ERROR,
    STATUS_INFO,
    EXIT_SUCCESS,
    EXIT_FAILURE,
    EXIT_INVALID_USAGE
)

__all__ = [
    'DeltaRateEngine',
    'SnapshotStore',
    'compute_rate',
    'validate_counter',
    'ProcRateError',
    'ConfigurationError',
    'SourceUnavailableError',
    'StateError',
    'ValidationError',
    'STATUS_OK',
    'STATUS_WARN',
    'STATUS_ERROR',
    'STATUS_INFO',
    'EXIT_SUCCESS',
    'EXIT_FAILURE',
    'EXIT_INVALID_USAGE'
]
