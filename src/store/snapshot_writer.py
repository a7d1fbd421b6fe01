"""Snapshot file writer.

This module writes timestamped full copies of store data into a snapshot
directory and returns the generated file name for retention tracking.
"""

from __future__ import annotations

from pathlib import Path
import time
from typing import Any

from core.constants import JSON_ENCODING, SNAPSHOT_FILE_EXTENSION, SNAPSHOT_FILE_PREFIX
from core.logging_config import get_logger
from core.types import Clock
from store.json_file_io import encode_document

_LOGGER = get_logger(__name__)


def current_millis() -> int:
    """Return wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def snapshot_base_name(source_path: Path) -> str:
    """Return the store file name without its last extension.

    Args:
        source_path: Main store file path.

    Returns:
        Base name used inside snapshot file names.
    """
    parts = source_path.name.split(".")
    if len(parts) > 1:
        parts.pop()
    return ".".join(parts)


def snapshot_file_name(source_path: Path, millis: int) -> str:
    """Build a snapshot file name for one timestamp."""
    base_name = snapshot_base_name(source_path)
    return f"{SNAPSHOT_FILE_PREFIX}-{base_name}-{millis}{SNAPSHOT_FILE_EXTENSION}"


def write_snapshot(
    payload: dict[str, Any],
    source_path: Path,
    target_dir: Path,
    indented: bool,
    clock: Clock = current_millis,
) -> str:
    """Write one snapshot file.

    Args:
        payload: Live store mapping to serialize.
        source_path: Main store file path, used for naming.
        target_dir: Snapshot directory, created when missing.
        indented: Whether to pretty-print the snapshot.
        clock: Epoch-millisecond time source.

    Returns:
        Generated snapshot file name (not the full path).

    Raises:
        StoreSerializationError: If the payload cannot be encoded.
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    text = encode_document(payload, indented)
    millis = clock()
    file_name = snapshot_file_name(source_path, millis)
    while (target_dir / file_name).exists():
        millis += 1
        file_name = snapshot_file_name(source_path, millis)
    (target_dir / file_name).write_text(text, encoding=JSON_ENCODING)
    _LOGGER.info(
        "snapshot_created",
        source_path=str(source_path),
        snapshot_dir=str(target_dir),
        file_name=file_name,
        key_count=len(payload),
    )
    return file_name
