"""File-backed JSON key/value store.

This module keeps a JSON object in memory and mirrors it to one file.
Write operations persist the whole document immediately, while their
``*_local`` variants only touch memory until ``persist`` is called.
"""

from __future__ import annotations

from pathlib import Path
import threading
from typing import TYPE_CHECKING, Any

from core.constants import ARRAY_MODE_KEYS, ARRAY_MODE_PAIRS, ARRAY_MODE_VALUES
from core.errors import StoreArgumentError
from core.logging_config import get_logger
from core.types import ArrayMode, Clock, StoreEntry, StoreOptions, UpdateFn, validate_file_path
from store.json_file_io import create_empty_document, read_document, write_document
from store.snapshot_writer import current_millis, write_snapshot

if TYPE_CHECKING:
    from schedule.snapshot_scheduler import SnapshotScheduler

_LOGGER = get_logger(__name__)


class JsonStore:
    """Single-file JSON key/value store.

    Every operation holds the store lock, so a scheduled snapshot never
    observes a half-applied mutation.
    """

    def __init__(self, file_path: str | Path, options: StoreOptions | None = None) -> None:
        """Open or create the backing file.

        Args:
            file_path: JSON file used as the store.
            options: Store options; defaults apply when omitted.

        Raises:
            StoreArgumentError: If file_path is missing or not a path.
            DataShapeError: If an existing file does not hold a JSON object.
        """
        self.file_path = validate_file_path(file_path)
        self.options = options or StoreOptions()
        self.data: dict[str, Any] = {}
        self._lock = threading.RLock()
        self._scheduler: SnapshotScheduler | None = None
        if self.file_path.exists():
            self.reload()
            _LOGGER.info("store_loaded", file_path=str(self.file_path), key_count=len(self.data))
        else:
            create_empty_document(self.file_path)
            _LOGGER.info("store_created", file_path=str(self.file_path))

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock guarding the in-memory mapping."""
        return self._lock

    @property
    def scheduler(self) -> SnapshotScheduler | None:
        """Snapshot scheduler attached to this store, if any."""
        return self._scheduler

    def attach_scheduler(self, scheduler: SnapshotScheduler) -> None:
        """Attach the scheduler that close() should stop."""
        self._scheduler = scheduler

    def reload(self) -> None:
        """Replace in-memory data with the file contents.

        Unsaved local mutations are discarded.

        Raises:
            DataShapeError: If the file does not hold a JSON object.
        """
        with self._lock:
            self.data = read_document(self.file_path)

    fetch_data_from_file = reload

    def persist(self) -> None:
        """Write the whole in-memory mapping to the backing file.

        Raises:
            StoreSerializationError: If the data cannot be encoded as JSON.
        """
        with self._lock:
            write_document(self.file_path, self.data, self.options.indented)

    save_data_to_file = persist

    def make_snapshot(
        self,
        target_dir: str | Path,
        indented: bool = False,
        clock: Clock = current_millis,
    ) -> str:
        """Write the live in-memory data to a timestamped snapshot file.

        Pending local mutations are included even though the main file
        does not hold them yet.

        Returns:
            Generated snapshot file name.
        """
        with self._lock:
            return write_snapshot(self.data, self.file_path, Path(target_dir), indented, clock)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for key, or default when absent."""
        with self._lock:
            return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store value under key and persist."""
        with self._lock:
            self.data[key] = value
            self.persist()

    def set_local(self, key: str, value: Any) -> None:
        """Store value under key in memory only."""
        with self._lock:
            self.data[key] = value

    def update(self, key: str, fn: UpdateFn) -> None:
        """Replace the value for key with fn(current) and persist.

        The current value is None when key is absent. Nothing changes
        when fn raises.
        """
        with self._lock:
            self.set(key, fn(self.get(key)))

    def update_local(self, key: str, fn: UpdateFn) -> None:
        """Replace the value for key with fn(current) in memory only."""
        with self._lock:
            self.set_local(key, fn(self.get(key)))

    def delete(self, key: str) -> None:
        """Remove key if present and persist."""
        with self._lock:
            self.data.pop(key, None)
            self.persist()

    def delete_local(self, key: str) -> None:
        """Remove key if present in memory only."""
        with self._lock:
            self.data.pop(key, None)

    def delete_all(self) -> None:
        """Replace the mapping with an empty one and persist."""
        with self._lock:
            self.data = {}
            self.persist()

    def delete_all_local(self) -> None:
        """Replace the mapping with an empty one in memory only."""
        with self._lock:
            self.data = {}

    def has(self, key: str) -> bool:
        """Return whether key is present, including keys holding None."""
        with self._lock:
            return key in self.data

    def array(self, mode: ArrayMode | None = None) -> list[Any]:
        """Project the mapping into a list in insertion order.

        Args:
            mode: "keys" for keys, "values" for values, None or "pairs"
                for StoreEntry key/value pairs.

        Returns:
            Projected list.

        Raises:
            StoreArgumentError: If mode is not recognized.
        """
        with self._lock:
            if mode == ARRAY_MODE_KEYS:
                return list(self.data.keys())
            if mode == ARRAY_MODE_VALUES:
                return list(self.data.values())
            if mode is None or mode == ARRAY_MODE_PAIRS:
                return [StoreEntry(key=key, value=value) for key, value in self.data.items()]
        raise StoreArgumentError(
            f"Unsupported array mode '{mode}'. Use 'keys', 'values', or omit the mode."
        )

    def close(self) -> None:
        """Stop the attached snapshot scheduler, if any."""
        if self._scheduler is not None:
            self._scheduler.stop()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self.data

    def __len__(self) -> int:
        with self._lock:
            return len(self.data)

    def __repr__(self) -> str:
        return f"JsonStore(file_path={str(self.file_path)!r})"
