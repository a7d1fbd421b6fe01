"""Store construction and the path-keyed instance registry.

``build_store`` wires a store together with its optional snapshot
scheduler and retention tracker. ``StoreRegistry`` hands out one shared
store per file path unless ``force_new`` is requested. Tracking stores
are always shared by path, so every store snapshotting into one folder
appends to the same retention list.
"""

from __future__ import annotations

from pathlib import Path
import threading
from typing import cast

from core.logging_config import get_logger
from core.types import Clock, SnapshotOptions, StoreOptions, validate_file_path
from schedule.snapshot_scheduler import SnapshotScheduler
from store.json_store import JsonStore
from store.retention_tracker import RetentionTracker, tracking_file_path
from store.snapshot_writer import current_millis

_LOGGER = get_logger(__name__)


def build_store(
    file_path: str | Path,
    options: StoreOptions | None = None,
    registry: StoreRegistry | None = None,
    clock: Clock = current_millis,
) -> JsonStore:
    """Build a fresh store and start its snapshot scheduler when enabled.

    Args:
        file_path: JSON file used as the store.
        options: Store options.
        registry: Registry used to open the tracking store; None uses the
            process-wide tracking registry.
        clock: Epoch-millisecond time source for snapshot names.

    Returns:
        New store instance.

    Raises:
        StoreArgumentError: If the path or snapshot options are invalid.
        DataShapeError: If an existing file does not hold a JSON object.
    """
    options = options or StoreOptions()
    validate_file_path(file_path)
    if options.snapshots is not None:
        options.snapshots.validate()
    store = JsonStore(file_path, options)
    if not options.snapshots_enabled:
        return store
    snapshots = cast(SnapshotOptions, options.snapshots)
    snapshot_dir = snapshots.directory
    tracker = None
    if snapshots.max_snapshots is not None:
        tracker = build_tracker(snapshot_dir, snapshots.max_snapshots, registry)
    scheduler = SnapshotScheduler(
        store,
        snapshot_dir,
        float(cast(float, snapshots.interval_ms)),
        indented=snapshots.indented,
        tracker=tracker,
        clock=clock,
    )
    store.attach_scheduler(scheduler)
    scheduler.start()
    return store


def build_tracker(
    snapshot_dir: Path,
    max_snapshots: float,
    registry: StoreRegistry | None = None,
) -> RetentionTracker:
    """Build a retention tracker over the shared tracking store of a folder.

    Args:
        snapshot_dir: Snapshot directory holding the tracking file.
        max_snapshots: Retention cap.
        registry: Registry owning the tracking store; None uses the
            process-wide tracking registry.

    Returns:
        Retention tracker bound to the shared tracking store.
    """
    owner = registry if registry is not None else _TRACKING_STORES
    tracking_store = owner.open(tracking_file_path(snapshot_dir))
    return RetentionTracker(tracking_store, snapshot_dir, max_snapshots)


class StoreRegistry:
    """Path-keyed cache of open stores.

    Keys are resolved absolute paths, so different spellings of one file
    share a store. Stores replaced through force_new stay owned by the
    registry until close_all.
    """

    def __init__(self, clock: Clock = current_millis) -> None:
        self._instances: dict[str, JsonStore] = {}
        self._owned: list[JsonStore] = []
        # Re-entrant: building a store may open its tracking store here.
        self._lock = threading.RLock()
        self._clock = clock

    def open(self, file_path: str | Path, options: StoreOptions | None = None) -> JsonStore:
        """Return the registered store for a path, building it when needed.

        The registry lock is held while building, so concurrent opens of
        one path never start two schedulers.

        Args:
            file_path: JSON file used as the store.
            options: Store options; force_new always builds and registers
                a fresh store. Options are ignored on a registry hit.

        Returns:
            Shared or freshly built store.
        """
        options = options or StoreOptions()
        key = _registry_key(file_path)
        with self._lock:
            existing = self._instances.get(key)
            if existing is not None and not options.force_new:
                _LOGGER.debug("store_registry_hit", file_path=key)
                return existing
            store = build_store(file_path, options, registry=self, clock=self._clock)
            self._instances[key] = store
            self._owned.append(store)
            return store

    def get(self, file_path: str | Path) -> JsonStore | None:
        """Return the registered store for a path without building one."""
        with self._lock:
            return self._instances.get(_registry_key(file_path))

    def forget(self, file_path: str | Path) -> JsonStore | None:
        """Drop a path from the registry and stop its scheduler.

        Returns:
            The removed store, or None when the path was not registered.
        """
        with self._lock:
            store = self._instances.pop(_registry_key(file_path), None)
            if store is not None:
                self._owned = [owned for owned in self._owned if owned is not store]
        if store is not None:
            store.close()
        return store

    def close_all(self) -> None:
        """Stop every scheduler this registry started and empty it."""
        with self._lock:
            stores = self._owned
            self._owned = []
            self._instances.clear()
        for store in stores:
            store.close()

    def __contains__(self, file_path: object) -> bool:
        if not isinstance(file_path, (str, Path)) or not str(file_path):
            return False
        with self._lock:
            return _registry_key(file_path) in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)


_TRACKING_STORES = StoreRegistry()


def open_store(
    file_path: str | Path,
    options: StoreOptions | None = None,
    registry: StoreRegistry | None = None,
) -> JsonStore:
    """Open a store through a registry, or build a standalone one.

    Args:
        file_path: JSON file used as the store.
        options: Store options.
        registry: Registry to share instances through; None builds a
            fresh unregistered store.

    Returns:
        Store instance.
    """
    if registry is None:
        return build_store(file_path, options)
    return registry.open(file_path, options)


def _registry_key(file_path: str | Path) -> str:
    return str(validate_file_path(file_path).expanduser().resolve())
