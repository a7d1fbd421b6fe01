"""Shared typed models.

This module defines the immutable option models consumed by the store
factory, the snapshot scheduler, and the CLI. Validation happens here so
that a store is never built from a half-valid configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Callable, Literal, Mapping

from core.errors import StoreArgumentError

ArrayMode = Literal["keys", "values", "pairs"]
Clock = Callable[[], int]
UpdateFn = Callable[[Any], Any]


@dataclass(frozen=True)
class StoreEntry:
    """One key/value pair from a store projection.

    Attributes:
        key: Store key.
        value: Stored JSON-compatible value.
    """

    key: str
    value: Any


@dataclass(frozen=True)
class SnapshotOptions:
    """Periodic snapshot settings.

    Attributes:
        enabled: Whether the snapshot scheduler runs.
        path: Directory receiving snapshot files.
        interval_ms: Tick period in milliseconds.
        indented: Whether snapshot files are pretty-printed.
        max_snapshots: Retention cap; None disables retention tracking.
    """

    enabled: bool = False
    path: str | os.PathLike[str] | None = None
    interval_ms: float | None = None
    indented: bool = False
    max_snapshots: float | None = None

    def validate(self) -> None:
        """Check settings required by an enabled scheduler.

        Raises:
            StoreArgumentError: If path, interval, or cap is invalid.
        """
        if not self.enabled:
            return
        if not _is_valid_path(self.path):
            raise StoreArgumentError("Provide a valid folder path for database snapshots")
        if not _is_number(self.interval_ms):
            raise StoreArgumentError(
                "Provide the interval in milliseconds for snapshot creation"
            )
        if self.interval_ms <= 0:  # type: ignore[operator]
            raise StoreArgumentError(
                f"Snapshot interval must be positive, got {self.interval_ms}"
            )
        if self.max_snapshots is not None:
            if not _is_number(self.max_snapshots):
                raise StoreArgumentError(
                    f"Snapshot maximum must be a number, got {self.max_snapshots!r}"
                )
            if self.max_snapshots < 0:
                raise StoreArgumentError(
                    f"Snapshot maximum must not be negative, got {self.max_snapshots}"
                )

    @property
    def directory(self) -> Path:
        """Return the snapshot directory as a path."""
        return Path(self.path)  # type: ignore[arg-type]


@dataclass(frozen=True)
class StoreOptions:
    """Store construction options.

    Attributes:
        force_new: Bypass the registry and always build a fresh store.
        indented: Pretty-print the main data file.
        snapshots: Periodic snapshot settings.
    """

    force_new: bool = False
    indented: bool = False
    snapshots: SnapshotOptions | None = None

    @property
    def snapshots_enabled(self) -> bool:
        """Return whether the snapshot scheduler should run."""
        return self.snapshots is not None and self.snapshots.enabled

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "StoreOptions":
        """Build options from a plain mapping.

        Args:
            payload: Option mapping with keys force_new (or forceNew),
                indented and snapshots. Snapshot keys are enabled, path,
                interval, indented and max.

        Returns:
            Typed store options.
        """
        if not payload:
            return cls()
        snapshot_payload = payload.get("snapshots")
        snapshots = None
        if snapshot_payload:
            snapshots = SnapshotOptions(
                enabled=bool(snapshot_payload.get("enabled", False)),
                path=snapshot_payload.get("path"),
                interval_ms=snapshot_payload.get("interval"),
                indented=bool(snapshot_payload.get("indented", False)),
                max_snapshots=snapshot_payload.get("max"),
            )
        force_new = payload.get("force_new", payload.get("forceNew", False))
        return cls(
            force_new=bool(force_new),
            indented=bool(payload.get("indented", False)),
            snapshots=snapshots,
        )


def validate_file_path(file_path: object) -> Path:
    """Validate a store file path argument.

    Args:
        file_path: Candidate path value.

    Returns:
        The path as a Path object.

    Raises:
        StoreArgumentError: If the path is missing, empty, or not path-like.
    """
    if not _is_valid_path(file_path):
        raise StoreArgumentError("Provide a valid file path for the database")
    return Path(file_path)  # type: ignore[arg-type]


def _is_valid_path(value: object) -> bool:
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    return isinstance(value, str) and bool(value)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
