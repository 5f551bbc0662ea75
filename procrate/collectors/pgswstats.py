"""
Paging and swapping collector.

Reads page and swap counters from /proc/stat, falling back to
/proc/vmstat on kernels that no longer report them there.
"""

import re
from typing import Dict, Mapping, Optional

from .base import read_lines, resolve_files

_PAGE_RE = re.compile(r"^page\s+(\d+)\s+(\d+)$")
_SWAP_RE = re.compile(r"^swap\s+(\d+)\s+(\d+)$")
_VMSTAT_RE = re.compile(r"^(pgpgin|pgpgout|pswpin|pswpout|pgfault|pgmajfault)\s+(\d+)")


class PgSwStatsCollector:
    """
    Collect paging and swapping counters.

    Keys (all monotonic counters):
    - pgpgin / pgpgout: pages paged in from / out to disk
    - pswpin / pswpout: pages swapped in from / out to disk
    - pgfault: page faults, minor plus major (vmstat only)
    - pgmajfault: major faults that required disk I/O (vmstat only)
    """

    DEFAULT_FILES = {
        "stat": "stat",
        "vmstat": "vmstat",
    }

    counters = None

    def __init__(self, files: Optional[Mapping[str, Optional[str]]] = None):
        """
        Initialize collector.

        Args:
            files: Optional ``base_path`` and per-role overrides for the
                ``stat`` and ``vmstat`` files
        """
        self.files = resolve_files(self.DEFAULT_FILES, files)

    def capture(self) -> Dict[str, int]:
        """
        Take a snapshot of paging and swapping counters.

        Returns:
            Dictionary of counters

        Raises:
            SourceUnavailableError: If a required file cannot be read
        """
        stats = {}
        for line in read_lines(self.files["stat"]):
            line = line.rstrip("\n")
            match = _PAGE_RE.match(line)
            if match:
                stats["pgpgin"], stats["pgpgout"] = int(match.group(1)), int(match.group(2))
                continue
            match = _SWAP_RE.match(line)
            if match:
                stats["pswpin"], stats["pswpout"] = int(match.group(1)), int(match.group(2))

        # Paging and swapping moved out of /proc/stat in 2.6
        if "pswpout" not in stats:
            for line in read_lines(self.files["vmstat"]):
                match = _VMSTAT_RE.match(line)
                if match:
                    stats.setdefault(match.group(1), int(match.group(2)))

        return stats
