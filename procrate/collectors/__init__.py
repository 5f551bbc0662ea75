"""
Snapshot sources for kernel counter files.

Available collectors:
- ProcStatsCollector: process creation and scheduling counts via /proc/stat and /proc/loadavg
- PgSwStatsCollector: paging and swapping counters via /proc/stat or /proc/vmstat
"""

from .base import SnapshotSource, resolve_files
from .pgswstats import PgSwStatsCollector
from .procstats import ProcStatsCollector

COLLECTORS = {
    "procstats": ProcStatsCollector,
    "pgswstats": PgSwStatsCollector,
}

__all__ = [
    'COLLECTORS',
    'SnapshotSource',
    'resolve_files',
    'ProcStatsCollector',
    'PgSwStatsCollector'
]
