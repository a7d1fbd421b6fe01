"""Snapshot retention tracking.

This module records snapshot file names in a dedicated tracking store and
evicts the oldest snapshot once the configured maximum is exceeded. The
tracking file is advisory: snapshot files removed by hand are skipped
silently when their turn for eviction comes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.constants import (
    TRACKING_FILE_NAME,
    TRACKING_NOTE,
    TRACKING_NOTE_KEY,
    TRACKING_SNAPSHOTS_KEY,
)
from core.logging_config import get_logger
from store.json_store import JsonStore

_LOGGER = get_logger(__name__)


def tracking_file_path(snapshot_dir: Path) -> Path:
    """Return the tracking store path inside a snapshot directory."""
    return snapshot_dir / TRACKING_FILE_NAME


class RetentionTracker:
    """Fixed-capacity FIFO eviction over snapshot file names."""

    def __init__(self, tracking_store: JsonStore, snapshot_dir: Path, max_snapshots: float) -> None:
        """Seed the tracking store and persist it.

        Args:
            tracking_store: Store opened at the tracking file path.
            snapshot_dir: Directory holding tracked snapshot files.
            max_snapshots: Number of snapshots to keep.
        """
        self._store = tracking_store
        self._snapshot_dir = snapshot_dir
        self._max_snapshots = max_snapshots
        with self._store.lock:
            self._store.set_local(TRACKING_NOTE_KEY, TRACKING_NOTE)
            self._store.update_local(TRACKING_SNAPSHOTS_KEY, lambda shots: shots or [])
            self._store.persist()

    @property
    def max_snapshots(self) -> float:
        """Configured retention cap."""
        return self._max_snapshots

    @property
    def tracking_store(self) -> JsonStore:
        """Store holding the tracked snapshot list."""
        return self._store

    def snapshots(self) -> list[str]:
        """Return tracked snapshot file names, oldest first."""
        return list(self._store.get(TRACKING_SNAPSHOTS_KEY) or [])

    def record(self, file_name: str) -> list[str]:
        """Track a new snapshot and evict the oldest ones over capacity.

        Normally at most one entry is evicted; more go when the cap was
        lowered since the tracking file was written.

        Args:
            file_name: Snapshot file name relative to the snapshot directory.

        Returns:
            Evicted file names, oldest first.
        """
        evicted: list[str] = []

        def _append_and_trim(shots: Any) -> list[str]:
            tracked = list(shots or [])
            tracked.append(file_name)
            while len(tracked) > self._max_snapshots:
                evicted.append(tracked.pop(0))
            return tracked

        self._store.update(TRACKING_SNAPSHOTS_KEY, _append_and_trim)
        for evicted_name in evicted:
            self._remove_snapshot_file(evicted_name)
        return evicted

    def _remove_snapshot_file(self, file_name: str) -> None:
        removed_path = self._snapshot_dir / file_name
        if not removed_path.exists():
            _LOGGER.info("snapshot_eviction_missing", file_name=file_name)
            return
        removed_path.unlink()
        _LOGGER.info(
            "snapshot_evicted",
            file_name=file_name,
            snapshot_dir=str(self._snapshot_dir),
            max_snapshots=self._max_snapshots,
        )
