"""Unit tests for store option models."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import StoreArgumentError
from core.types import SnapshotOptions, StoreOptions, validate_file_path


def test_from_mapping_reads_option_table() -> None:
    """Mapping options should map onto typed snapshot settings."""
    options = StoreOptions.from_mapping(
        {
            "forceNew": True,
            "indented": True,
            "snapshots": {
                "enabled": True,
                "path": "snaps",
                "interval": 500,
                "indented": True,
                "max": 4,
            },
        }
    )

    assert options == StoreOptions(
        force_new=True,
        indented=True,
        snapshots=SnapshotOptions(
            enabled=True, path="snaps", interval_ms=500, indented=True, max_snapshots=4
        ),
    )


def test_from_mapping_without_payload_uses_defaults() -> None:
    """Missing options should produce defaults with snapshots disabled."""
    options = StoreOptions.from_mapping(None)

    assert options == StoreOptions() and not options.snapshots_enabled


@pytest.mark.parametrize(
    "snapshot_options",
    [
        SnapshotOptions(enabled=True, path="", interval_ms=100),
        SnapshotOptions(enabled=True, path=None, interval_ms=100),
        SnapshotOptions(enabled=True, path="snaps", interval_ms=None),
        SnapshotOptions(enabled=True, path="snaps", interval_ms="100"),  # type: ignore[arg-type]
        SnapshotOptions(enabled=True, path="snaps", interval_ms=True),  # type: ignore[arg-type]
        SnapshotOptions(enabled=True, path="snaps", interval_ms=0),
        SnapshotOptions(enabled=True, path="snaps", interval_ms=100, max_snapshots=-1),
        SnapshotOptions(enabled=True, path="snaps", interval_ms=100, max_snapshots="3"),  # type: ignore[arg-type]
        SnapshotOptions(enabled=True, path="snaps", interval_ms=100, max_snapshots=True),  # type: ignore[arg-type]
    ],
)
def test_validate_rejects_invalid_snapshot_settings(snapshot_options: SnapshotOptions) -> None:
    """Enabled snapshots need a directory, a positive interval, and a valid cap."""
    with pytest.raises(StoreArgumentError):
        snapshot_options.validate()


def test_validate_accepts_fractional_snapshot_cap() -> None:
    """Any non-negative number is a usable retention cap."""
    options = SnapshotOptions(enabled=True, path="snaps", interval_ms=100, max_snapshots=2.5)

    options.validate()

    assert options.max_snapshots == 2.5


def test_validate_ignores_disabled_snapshots() -> None:
    """Disabled snapshot settings are not checked."""
    SnapshotOptions(enabled=False, path=None, interval_ms=None).validate()


def test_validate_file_path_accepts_path_objects(tmp_path: Path) -> None:
    """Path objects and strings should both be accepted."""
    assert validate_file_path(tmp_path / "db.json") == tmp_path / "db.json"


@pytest.mark.parametrize("file_path", [None, "", 42])
def test_validate_file_path_rejects_missing_values(file_path: object) -> None:
    """Missing or non-path values should be rejected."""
    with pytest.raises(StoreArgumentError):
        validate_file_path(file_path)
