"""Periodic snapshot scheduling.

This module drives snapshot creation and retention on a background
thread at a fixed interval. A failing tick is logged and re-raised,
which ends the periodic task; there is no retry.
"""

from __future__ import annotations

from pathlib import Path
import threading

from core.constants import SCHEDULER_JOIN_TIMEOUT_SECONDS, SCHEDULER_THREAD_NAME
from core.logging_config import get_logger
from core.types import Clock
from store.json_store import JsonStore
from store.retention_tracker import RetentionTracker
from store.snapshot_writer import current_millis

_LOGGER = get_logger(__name__)


class SnapshotScheduler:
    """Fixed-interval snapshot timer for one store."""

    def __init__(
        self,
        store: JsonStore,
        snapshot_dir: Path,
        interval_ms: float,
        indented: bool = False,
        tracker: RetentionTracker | None = None,
        clock: Clock = current_millis,
    ) -> None:
        """Configure the scheduler without starting it.

        Args:
            store: Store whose live data is snapshotted.
            snapshot_dir: Directory receiving snapshot files.
            interval_ms: Tick period in milliseconds.
            indented: Whether snapshot files are pretty-printed.
            tracker: Optional retention tracker updated after each snapshot.
            clock: Epoch-millisecond time source for snapshot names.
        """
        self._store = store
        self._snapshot_dir = snapshot_dir
        self._interval_seconds = interval_ms / 1000.0
        self._indented = indented
        self._tracker = tracker
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._tick_count = 0
        self._last_error: BaseException | None = None

    @property
    def is_running(self) -> bool:
        """Return whether the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def tick_count(self) -> int:
        """Number of completed ticks."""
        return self._tick_count

    @property
    def last_error(self) -> BaseException | None:
        """Error that ended the background thread, if any."""
        return self._last_error

    @property
    def tracker(self) -> RetentionTracker | None:
        """Retention tracker updated by each tick, if configured."""
        return self._tracker

    def start(self) -> None:
        """Start the background thread; a running scheduler is left alone."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=SCHEDULER_THREAD_NAME,
            daemon=True,
        )
        self._thread.start()
        _LOGGER.info(
            "snapshot_scheduler_started",
            file_path=str(self._store.file_path),
            snapshot_dir=str(self._snapshot_dir),
            interval_seconds=self._interval_seconds,
        )

    def stop(self) -> None:
        """Stop the background thread and wait for it to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        if thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=SCHEDULER_JOIN_TIMEOUT_SECONDS)
        self._thread = None
        _LOGGER.info("snapshot_scheduler_stopped", ticks=self._tick_count)

    def tick(self) -> str:
        """Write one snapshot and apply retention.

        Returns:
            Generated snapshot file name.
        """
        file_name = self._store.make_snapshot(self._snapshot_dir, self._indented, self._clock)
        if self._tracker is not None:
            self._tracker.record(file_name)
        self._tick_count += 1
        return file_name

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self.tick()
            except Exception as error:
                self._last_error = error
                _LOGGER.error(
                    "snapshot_tick_failed",
                    file_path=str(self._store.file_path),
                    snapshot_dir=str(self._snapshot_dir),
                    error=str(error),
                )
                raise
