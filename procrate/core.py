"""
Core delta-rate engine.

Holds the previous counter snapshot of one metric source and turns each
fresh snapshot into per-second rates.
"""

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .constants import RATE_PRECISION, TIME_KEY
from .exceptions import ConfigurationError, StateError, ValidationError
from .store import SnapshotStore

LOG = logging.getLogger(__name__)


def validate_counter(key: str, value: Any) -> int:
    """
    Return a counter value as a non-negative int.

    Args:
        key: Counter name, used in the error message
        value: Raw value from a source or a persisted snapshot

    Returns:
        The value as an int

    Raises:
        ValidationError: If the value is not a non-negative integer or a
            string of decimal digits
    """
    if isinstance(value, bool):
        raise ValidationError(f"invalid value for key '{key}': {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValidationError(f"invalid value for key '{key}': {value!r}")
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise ValidationError(f"invalid value for key '{key}': {value!r}")


def compute_rate(previous: int, current: int, elapsed: float) -> float:
    """
    Apply the per-key rate rule.

    A counter that did not move or went backwards (reboot, wraparound)
    reports 0.00. With no elapsed time the raw difference is returned
    instead of dividing by zero.

    Args:
        previous: Counter value at the earlier sample
        current: Counter value at the later sample
        elapsed: Seconds between the two samples, already rounded

    Returns:
        Amount per second rounded to two decimals
    """
    if current <= previous:
        return round(0.0, RATE_PRECISION)
    if elapsed > 0:
        return round((current - previous) / elapsed, RATE_PRECISION)
    return round(float(current - previous), RATE_PRECISION)


class DeltaRateEngine:
    """
    Compute per-second rates from successive snapshots of one source.

    The engine owns its baseline: each successful compute() replaces the
    previous snapshot with the one it just captured. Keys listed in the
    source's ``counters`` attribute go through the rate rule; any other
    key is a gauge and is reported with its current value. A source with
    no ``counters`` attribute is treated as counters only.
    """

    def __init__(self, source: Any,
                 persist_path: Optional[Union[str, Path]] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize engine with no baseline.

        Args:
            source: Object exposing capture() -> Dict[str, int]
            persist_path: Optional YAML file carrying the baseline across
                process restarts
            clock: Callable returning the current time in seconds

        Raises:
            ConfigurationError: If the persistence directory is missing or
                not writable
        """
        self.source = source
        self.clock = clock
        self.store: Optional[SnapshotStore] = None
        if persist_path is not None:
            self.store = SnapshotStore(_check_persist_path(persist_path))

        self._previous: Optional[Dict[str, int]] = None
        self._previous_time: Optional[float] = None
        self.resumed = False

    @property
    def initialized(self) -> bool:
        return self._previous is not None

    @property
    def previous(self) -> Optional[Tuple[Dict[str, int], float]]:
        """Copy of the current baseline snapshot and its capture time."""
        if self._previous is None:
            return None
        return dict(self._previous), self._previous_time

    @property
    def counters(self) -> Optional[Tuple[str, ...]]:
        counters = getattr(self.source, "counters", None)
        return tuple(counters) if counters is not None else None

    def initialize(self) -> None:
        """
        Establish the baseline snapshot.

        Adopts the persisted snapshot when a store is configured and holds
        one, otherwise captures a fresh snapshot now.

        Raises:
            SourceUnavailableError: If the source files cannot be read
            ConfigurationError: If the persisted state cannot be read
            ValidationError: If the persisted state is corrupt
        """
        loaded = self.store.load() if self.store is not None else None
        if loaded is not None:
            snapshot, captured_at = loaded
            self._previous = self._normalize(snapshot)
            self._previous_time = captured_at
            self.resumed = True
            LOG.debug("Baseline loaded from %s (%d keys, time %.2f)",
                      self.store.path, len(snapshot), captured_at)
            return

        captured_at = self.clock()
        snapshot = self._normalize(self.source.capture())
        self._previous = snapshot
        self._previous_time = captured_at
        self.resumed = False
        LOG.debug("Baseline captured (%d keys, time %.2f)", len(snapshot), captured_at)

    init = initialize

    def compute(self) -> Dict[str, Union[float, int]]:
        """
        Capture a new snapshot and compute rates against the baseline.

        Returns:
            Mapping with the same keys as the new snapshot: rates per second
            for counters, current values for gauges

        Raises:
            StateError: If initialize() has not been called
            SourceUnavailableError: If the source files cannot be read
            ValidationError: If a key disappeared or a value is invalid
            ConfigurationError: If the new baseline cannot be persisted
        """
        if self._previous is None:
            raise StateError(
                f"{type(self).__name__}: there are no initial statistics defined"
            )

        current_time = self.clock()
        raw = self.source.capture()

        previous = self._previous
        for key in previous:
            if key not in raw:
                raise ValidationError(f"not defined key found '{key}'")
        current = self._normalize(raw)

        elapsed = round(current_time - self._previous_time, RATE_PRECISION)
        counters = self.counters

        results: Dict[str, Union[float, int]] = {}
        for key, value in current.items():
            if counters is not None and key not in counters:
                results[key] = value
                continue
            if key not in previous:
                raise ValidationError(f"not defined key found '{key}'")
            if previous[key] > value:
                LOG.debug("Counter '%s' went backwards (%d -> %d), reporting 0.00",
                          key, previous[key], value)
            results[key] = compute_rate(previous[key], value, elapsed)

        if self.store is not None:
            self.store.save(current, current_time)

        self._previous = current
        self._previous_time = current_time
        return results

    get = compute

    def raw(self) -> Dict[str, int]:
        """
        Capture a snapshot without computing rates.

        Returns:
            The source snapshot, unmodified; the baseline is not touched
        """
        return self.source.capture()

    def _normalize(self, snapshot: Dict[str, Any]) -> Dict[str, int]:
        for key in self.counters or ():
            if key not in snapshot:
                raise ValidationError(f"not defined key found '{key}'")
        return {key: validate_counter(key, value) for key, value in snapshot.items()
                if key != TIME_KEY}


def _check_persist_path(persist_path: Union[str, Path]) -> Path:
    path = Path(persist_path)
    parent = path.parent
    if not parent.is_dir():
        raise ConfigurationError(f"persistence directory does not exist: {parent}")
    if not os.access(parent, os.W_OK):
        raise ConfigurationError(f"persistence directory is not writable: {parent}")
    return path
