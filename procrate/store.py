"""
Snapshot persistence.

Stores one snapshot and its capture time as a YAML mapping so that a
later process can compute rates without sampling twice.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import yaml

from .constants import TIME_KEY
from .exceptions import ConfigurationError, ValidationError

LOG = logging.getLogger(__name__)


class SnapshotStore:
    """
    YAML file holding a snapshot plus a reserved ``time`` field.

    A missing file means there is no persisted state. A file that exists
    but cannot be read or parsed is an error.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[Tuple[Dict[str, int], float]]:
        """
        Load the persisted snapshot.

        Returns:
            Tuple of (snapshot without the time field, capture time), or
            None if nothing has been persisted yet

        Raises:
            ConfigurationError: If the file exists but cannot be read
            ValidationError: If the file content is not a valid snapshot
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOG.debug("No persisted snapshot at %s", self.path)
            return None
        except OSError as exc:
            raise ConfigurationError(f"unable to read {self.path}: {exc}") from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValidationError(f"corrupt snapshot file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValidationError(f"corrupt snapshot file {self.path}: not a mapping")

        data = dict(data)
        captured_at = data.pop(TIME_KEY, None)
        if isinstance(captured_at, bool) or not isinstance(captured_at, (int, float)):
            raise ValidationError(
                f"corrupt snapshot file {self.path}: missing or invalid '{TIME_KEY}'"
            )

        return {str(key): value for key, value in data.items()}, float(captured_at)

    def save(self, snapshot: Dict[str, int], captured_at: float) -> None:
        """
        Persist a snapshot and its capture time.

        The file is replaced atomically.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        payload = {key: int(value) for key, value in snapshot.items()}
        payload[TIME_KEY] = float(captured_at)

        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent,
                                            prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    yaml.safe_dump(payload, f, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise ConfigurationError(f"unable to write {self.path}: {exc}") from exc

        LOG.debug("Snapshot persisted to %s (%d keys)", self.path, len(snapshot))
