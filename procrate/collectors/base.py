"""
Shared pieces of the snapshot sources.
"""

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

from ..constants import DEFAULT_PROC_PATH
from ..exceptions import ConfigurationError, SourceUnavailableError

BASE_PATH_KEY = "base_path"


class SnapshotSource(Protocol):
    """Anything able to capture a flat mapping of counter name to value."""

    def capture(self) -> Dict[str, int]:
        ...


def resolve_files(defaults: Mapping[str, str],
                  overrides: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, str]:
    """
    Merge file overrides into a family's defaults and build full paths.

    Args:
        defaults: File role to file name, e.g. {"stat": "stat"}
        overrides: Optional ``base_path`` plus per-role file names. A
            ``base_path`` of None or "" uses the file names as given.

    Returns:
        File role to resolved path

    Raises:
        ConfigurationError: If an override names an unknown file role
    """
    files = dict(defaults)
    base_path: Optional[str] = DEFAULT_PROC_PATH

    for role, name in (overrides or {}).items():
        if role == BASE_PATH_KEY:
            base_path = name
        elif role not in defaults:
            known = ", ".join(sorted([BASE_PATH_KEY, *defaults]))
            raise ConfigurationError(f"unknown file role '{role}' (expected one of: {known})")
        elif not name:
            raise ConfigurationError(f"empty file name for role '{role}'")
        else:
            files[role] = name

    if not base_path:
        return files
    return {role: str(Path(base_path) / name) for role, name in files.items()}


def read_lines(path: str) -> List[str]:
    """
    Read a counter file.

    Raises:
        SourceUnavailableError: If the file cannot be opened or read
    """
    try:
        with open(path) as f:
            return f.readlines()
    except OSError as exc:
        raise SourceUnavailableError(f"unable to open {path} ({exc.strerror or exc})") from exc
