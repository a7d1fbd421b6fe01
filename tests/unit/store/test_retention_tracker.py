"""Unit tests for snapshot retention tracking."""

from __future__ import annotations

import json

from core.constants import TRACKING_NOTE
from store.json_store import JsonStore
from store.retention_tracker import RetentionTracker, tracking_file_path


def _tracker(snapshot_dir, max_snapshots: float) -> RetentionTracker:
    tracking_store = JsonStore(tracking_file_path(snapshot_dir))
    return RetentionTracker(tracking_store, snapshot_dir, max_snapshots)


def _touch(snapshot_dir, file_name: str) -> str:
    (snapshot_dir / file_name).write_text("{}", encoding="utf-8")
    return file_name


def test_tracker_seeds_tracking_file(tmp_path) -> None:
    """A new tracker should persist the note and an empty list."""
    _tracker(tmp_path, 2)

    payload = json.loads(tracking_file_path(tmp_path).read_text(encoding="utf-8"))

    assert payload == {"note": TRACKING_NOTE, "snapshots": []}


def test_tracker_keeps_existing_list(tmp_path) -> None:
    """Reopening the tracker should preserve previously tracked names."""
    first = _tracker(tmp_path, 3)
    first.record(_touch(tmp_path, "snapshot-db-1.json"))

    second = _tracker(tmp_path, 3)

    assert second.snapshots() == ["snapshot-db-1.json"]


def test_record_evicts_oldest_over_capacity(tmp_path) -> None:
    """The oldest snapshot should be untracked and deleted once over max."""
    tracker = _tracker(tmp_path, 2)
    names = [_touch(tmp_path, f"snapshot-db-{index}.json") for index in range(3)]

    evicted = [tracker.record(name) for name in names]

    assert (
        evicted == [[], [], ["snapshot-db-0.json"]]
        and tracker.snapshots() == names[1:]
        and not (tmp_path / names[0]).exists()
        and all((tmp_path / name).exists() for name in names[1:])
    )


def test_record_tolerates_missing_evicted_file(tmp_path) -> None:
    """A snapshot deleted by hand should be dropped without error."""
    tracker = _tracker(tmp_path, 1)
    tracker.record("snapshot-db-1.json")

    evicted = tracker.record(_touch(tmp_path, "snapshot-db-2.json"))

    assert evicted == ["snapshot-db-1.json"] and tracker.snapshots() == ["snapshot-db-2.json"]


def test_record_persists_tracking_list(tmp_path) -> None:
    """Each record should rewrite the tracking file."""
    tracker = _tracker(tmp_path, 5)

    tracker.record(_touch(tmp_path, "snapshot-db-1.json"))
    payload = json.loads(tracking_file_path(tmp_path).read_text(encoding="utf-8"))

    assert payload["snapshots"] == ["snapshot-db-1.json"]


def test_lowered_cap_trims_down_to_max(tmp_path) -> None:
    """A smaller cap on reopen should evict until the list fits."""
    wide = _tracker(tmp_path, 5)
    for index in range(4):
        wide.record(_touch(tmp_path, f"snapshot-db-{index}.json"))
    narrow = _tracker(tmp_path, 2)

    evicted = narrow.record(_touch(tmp_path, "snapshot-db-9.json"))

    assert evicted == [
        "snapshot-db-0.json",
        "snapshot-db-1.json",
        "snapshot-db-2.json",
    ] and narrow.snapshots() == ["snapshot-db-3.json", "snapshot-db-9.json"]


def test_zero_cap_removes_new_snapshot(tmp_path) -> None:
    """A cap of zero keeps no snapshots at all."""
    tracker = _tracker(tmp_path, 0)
    name = _touch(tmp_path, "snapshot-db-1.json")

    tracker.record(name)

    assert tracker.snapshots() == [] and not (tmp_path / name).exists()


def test_fractional_cap_keeps_whole_snapshots_below_it(tmp_path) -> None:
    """A cap of 2.5 keeps at most two snapshots."""
    tracker = _tracker(tmp_path, 2.5)
    names = [_touch(tmp_path, f"snapshot-db-{index}.json") for index in range(3)]

    for name in names:
        tracker.record(name)

    assert tracker.snapshots() == names[1:] and not (tmp_path / names[0]).exists()
