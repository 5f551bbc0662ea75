"""
Process statistics collector.

Combines /proc/stat and /proc/loadavg into one snapshot.
"""

import re
from typing import Dict, Mapping, Optional

from ..exceptions import ValidationError
from .base import read_lines, resolve_files

_PROCESSES_RE = re.compile(r"^processes\s+(\d+)")
_PROCS_RE = re.compile(r"^procs_(blocked|running)\s+(\d+)")


class ProcStatsCollector:
    """
    Collect process creation and scheduling counts.

    Keys:
    - new: processes created since boot (rate per second when sampled)
    - runqueue: currently runnable kernel scheduling entities
    - count: kernel scheduling entities that currently exist
    - blocked: processes blocked waiting for I/O
    - running: processes in runnable state
    """

    DEFAULT_FILES = {
        "stat": "stat",
        "loadavg": "loadavg",
    }

    # Only the fork counter is monotonic; the other keys are gauges.
    counters = ("new",)

    def __init__(self, files: Optional[Mapping[str, Optional[str]]] = None):
        """
        Initialize collector.

        Args:
            files: Optional ``base_path`` and per-role overrides for the
                ``stat`` and ``loadavg`` files
        """
        self.files = resolve_files(self.DEFAULT_FILES, files)

    def capture(self) -> Dict[str, int]:
        """
        Take a snapshot of process statistics.

        Returns:
            Dictionary of process counts

        Raises:
            SourceUnavailableError: If either file cannot be read
            ValidationError: If /proc/stat has no processes line or
                /proc/loadavg is malformed
        """
        stats = self._procs()
        stats.update(self._loadavg())
        return stats

    def _procs(self) -> Dict[str, int]:
        stats = {}
        for line in read_lines(self.files["stat"]):
            match = _PROCESSES_RE.match(line)
            if match:
                stats["new"] = int(match.group(1))
                continue
            match = _PROCS_RE.match(line)
            if match:
                stats[match.group(1)] = int(match.group(2))
        if "new" not in stats:
            raise ValidationError(f"no processes line in {self.files['stat']}")
        return stats

    def _loadavg(self) -> Dict[str, int]:
        # Format: "0.20 0.18 0.12 1/80 11206"
        path = self.files["loadavg"]
        lines = read_lines(path)
        fields = lines[0].split() if lines else []
        try:
            runqueue, count = fields[3].split("/")
            return {"runqueue": int(runqueue), "count": int(count)}
        except (IndexError, ValueError) as exc:
            raise ValidationError(f"unexpected content in {path}: {lines[:1]!r}") from exc
