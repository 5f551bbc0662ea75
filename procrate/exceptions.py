"""Custom exceptions used by the procrate package."""


class ProcRateError(Exception):
    """Base class for sampling and rate computation errors."""


class ConfigurationError(ProcRateError):
    """Raised when file locations or the persistence target are unusable."""


class SourceUnavailableError(ConfigurationError):
    """Raised when a counter file cannot be opened or read."""


class StateError(ProcRateError):
    """Raised when rates are requested before a baseline exists."""


class ValidationError(ProcRateError):
    """Raised when a snapshot is missing a key or holds a non-counter value."""
