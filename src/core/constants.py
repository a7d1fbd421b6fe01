"""Core constants used across jsonstore modules.

This module centralizes file names, defaults, and format settings.
Keeping values here avoids magic literals in store logic.
"""

from __future__ import annotations

JSON_ENCODING = "utf-8"
JSON_INDENT = 4
EMPTY_DOCUMENT = "{}"
SNAPSHOT_FILE_PREFIX = "snapshot"
SNAPSHOT_FILE_EXTENSION = ".json"
TRACKING_FILE_NAME = "snapshot-tracking.json"
TRACKING_SNAPSHOTS_KEY = "snapshots"
TRACKING_NOTE_KEY = "note"
TRACKING_NOTE = (
    "This only tracks which snapshots are the oldest to delete when maximum "
    "snapshots are reached. In the event you lose some files in this folder, "
    "you don't NEED this one."
)
ARRAY_MODE_KEYS = "keys"
ARRAY_MODE_VALUES = "values"
ARRAY_MODE_PAIRS = "pairs"
SCHEDULER_THREAD_NAME = "jsonstore-snapshots"
SCHEDULER_JOIN_TIMEOUT_SECONDS = 5.0
