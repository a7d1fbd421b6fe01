"""jsonstore exception hierarchy.

This module defines traceable domain errors with clear boundaries.
File system errors are not wrapped and surface as OSError.
"""

from __future__ import annotations


class JsonStoreError(Exception):
    """Base exception for all jsonstore failures."""


class JsonStoreConfigError(JsonStoreError):
    """Raised for invalid environment configuration."""


class StoreArgumentError(JsonStoreError, ValueError):
    """Raised for invalid store paths or snapshot options."""


class DataShapeError(JsonStoreError):
    """Raised when a store file does not hold a JSON object."""


class StoreSerializationError(JsonStoreError):
    """Raised when store data cannot be encoded as JSON."""
