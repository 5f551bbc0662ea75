"""
Status, exit code and filesystem constants.

These constants keep output formatting consistent between the library
and the command-line sampler.
"""

# Status indicators
STATUS_OK = "OK"
STATUS_WARN = "WARN"
STATUS_ERROR = "ERROR"
STATUS_INFO = "INFO"

# Exit codes (Unix standard)
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INVALID_USAGE = 2

# Root of the process-information filesystem
DEFAULT_PROC_PATH = "/proc"

# Reserved key carrying the capture time in a persisted snapshot
TIME_KEY = "time"

# Decimal places kept in every reported rate
RATE_PRECISION = 2
