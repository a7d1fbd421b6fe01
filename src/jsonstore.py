"""Public SDK surface for jsonstore.

This module provides a stable import path for library users.
It re-exports the store, its factory functions, and typed option models.
"""

from __future__ import annotations

from core.config import JsonStoreConfig
from core.errors import (
    DataShapeError,
    JsonStoreConfigError,
    JsonStoreError,
    StoreArgumentError,
    StoreSerializationError,
)
from core.types import SnapshotOptions, StoreEntry, StoreOptions
from schedule.snapshot_scheduler import SnapshotScheduler
from store.instance_registry import StoreRegistry, build_store, open_store
from store.json_store import JsonStore
from store.retention_tracker import RetentionTracker

__all__ = [
    "DataShapeError",
    "JsonStore",
    "JsonStoreConfig",
    "JsonStoreConfigError",
    "JsonStoreError",
    "RetentionTracker",
    "SnapshotOptions",
    "SnapshotScheduler",
    "StoreArgumentError",
    "StoreEntry",
    "StoreOptions",
    "StoreRegistry",
    "StoreSerializationError",
    "build_store",
    "open_store",
]
