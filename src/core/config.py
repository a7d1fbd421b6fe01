"""Runtime configuration model for jsonstore.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.errors import JsonStoreConfigError
from core.types import SnapshotOptions, StoreOptions

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class JsonStoreConfig:
    """Validated runtime configuration.

    Attributes:
        indented: Pretty-print main data files.
        snapshot_dir: Default snapshot directory for CLI snapshots.
        snapshot_indented: Pretty-print snapshot files.
        snapshot_max: Default retention cap for CLI snapshots.
    """

    indented: bool
    snapshot_dir: str | None
    snapshot_indented: bool
    snapshot_max: int | None

    @classmethod
    def from_env(cls) -> "JsonStoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            JsonStoreConfigError: If environment values are invalid.
        """
        snapshot_max_value = os.getenv("JSONSTORE_SNAPSHOT_MAX")
        return cls(
            indented=_parse_bool("JSONSTORE_INDENTED", os.getenv("JSONSTORE_INDENTED", "")),
            snapshot_dir=os.getenv("JSONSTORE_SNAPSHOT_DIR") or None,
            snapshot_indented=_parse_bool(
                "JSONSTORE_SNAPSHOT_INDENTED", os.getenv("JSONSTORE_SNAPSHOT_INDENTED", "")
            ),
            snapshot_max=_parse_max(snapshot_max_value) if snapshot_max_value else None,
        )

    def to_options(self, force_new: bool = False) -> StoreOptions:
        """Build store options with snapshots disabled.

        The CLI runs snapshots as single ticks rather than as a scheduler.
        """
        snapshots = None
        if self.snapshot_dir:
            snapshots = SnapshotOptions(
                enabled=False,
                path=self.snapshot_dir,
                indented=self.snapshot_indented,
                max_snapshots=self.snapshot_max,
            )
        return StoreOptions(force_new=force_new, indented=self.indented, snapshots=snapshots)


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Environment variable name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        JsonStoreConfigError: If value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise JsonStoreConfigError(
        f"Invalid {name} value: expected one of "
        f"{', '.join(_TRUE_VALUES + _FALSE_VALUES[:-1])}, got '{raw_value}'."
    )


def _parse_max(raw_value: str) -> int:
    """Parse the snapshot retention cap.

    Raises:
        JsonStoreConfigError: If value is not a non-negative integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise JsonStoreConfigError(
            "Invalid JSONSTORE_SNAPSHOT_MAX value: "
            f"expected integer, got '{raw_value}'. "
            "Set JSONSTORE_SNAPSHOT_MAX to a numeric value."
        ) from error
    if value < 0:
        raise JsonStoreConfigError(
            f"Invalid JSONSTORE_SNAPSHOT_MAX value: expected non-negative integer, got {value}."
        )
    return value
