"""JSON document IO for store and snapshot files.

This module isolates encoding, decoding, and shape checks so that the
store keeps to its key/value flow. File system errors propagate as
OSError; only JSON-level problems become domain errors.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import EMPTY_DOCUMENT, JSON_ENCODING, JSON_INDENT
from core.errors import DataShapeError, StoreSerializationError


def encode_document(payload: dict[str, Any], indented: bool) -> str:
    """Encode a store mapping as JSON text.

    Args:
        payload: Mapping to encode.
        indented: Whether to pretty-print with four-space indentation.

    Returns:
        Encoded JSON text.

    Raises:
        StoreSerializationError: If the mapping holds circular references
            or values JSON cannot represent.
    """
    try:
        if indented:
            return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise StoreSerializationError(f"Failed to encode store data as JSON: {error}.") from error


def write_document(file_path: Path, payload: dict[str, Any], indented: bool) -> None:
    """Encode and overwrite one JSON document.

    The file is written in place; a crash mid-write can leave it truncated.
    """
    text = encode_document(payload, indented)
    file_path.write_text(text, encoding=JSON_ENCODING)


def create_empty_document(file_path: Path) -> None:
    """Create parent directories and write an empty JSON object."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(EMPTY_DOCUMENT, encoding=JSON_ENCODING)


def read_document(file_path: Path) -> dict[str, Any]:
    """Read and validate one JSON object document.

    Args:
        file_path: Document path.

    Returns:
        Parsed mapping.

    Raises:
        DataShapeError: If content is not valid JSON or not an object.
    """
    text = file_path.read_text(encoding=JSON_ENCODING)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise DataShapeError(
            f"Failed to parse store file at {file_path}: {error.msg}. "
            "Restore the file from a snapshot or remove it."
        ) from error
    if not isinstance(payload, dict):
        raise DataShapeError(
            f"Data is not a valid object in {file_path}: "
            f"expected JSON object at top level, got {type(payload).__name__}."
        )
    return payload
