"""jsonstore CLI entry points.
This module exposes key/value and snapshot commands for one store file.
It maps argparse commands onto store calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from typing import Any, Sequence

from core.config import JsonStoreConfig
from core.constants import ARRAY_MODE_KEYS, ARRAY_MODE_VALUES
from core.errors import JsonStoreError
from core.types import SnapshotOptions
from schedule.snapshot_scheduler import SnapshotScheduler
from store.instance_registry import build_store, build_tracker
from store.json_store import JsonStore

_SINGLE_TICK_INTERVAL_MS = 1.0


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="jsonstore", description="JSON file key/value store")
    parser.add_argument("file", help="JSON file used as the store")
    parser.add_argument(
        "--indented",
        action="store_true",
        default=None,
        help="Pretty-print the store file (overrides JSONSTORE_INDENTED)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_key_commands(subparsers)
    _add_array_command(subparsers)
    _add_snapshot_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the jsonstore CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = JsonStoreConfig.from_env()
        store = _build_store(config, args)
        return _dispatch(parser, store, args)
    except JsonStoreError as error:
        print(f"jsonstore_error={error}")
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    store: JsonStore,
    args: argparse.Namespace,
) -> int:
    """Route a parsed command to its handler."""
    if args.command == "get":
        return _run_get_command(store, args)
    if args.command == "set":
        return _run_set_command(store, args)
    if args.command == "delete":
        store.delete(args.key)
        return 0
    if args.command == "has":
        return 0 if store.has(args.key) else 1
    if args.command == "array":
        return _run_array_command(store, args)
    if args.command == "clear":
        store.delete_all()
        return 0
    if args.command == "snapshot":
        return _run_snapshot_command(store, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_store(config: JsonStoreConfig, args: argparse.Namespace) -> JsonStore:
    """Build a standalone store with env defaults and CLI overrides."""
    options = config.to_options()
    if args.indented is not None:
        options = replace(options, indented=args.indented)
    return build_store(args.file, options)


def _run_get_command(store: JsonStore, args: argparse.Namespace) -> int:
    """Handle get command; a missing key exits with 1."""
    if not store.has(args.key):
        return 1
    print(json.dumps(store.get(args.key), ensure_ascii=False))
    return 0


def _run_set_command(store: JsonStore, args: argparse.Namespace) -> int:
    """Handle set command.

    The value is parsed as JSON when possible and stored as a plain string
    otherwise.
    """
    try:
        value = json.loads(args.value)
    except json.JSONDecodeError:
        value = args.value
    store.set(args.key, value)
    return 0


def _run_array_command(store: JsonStore, args: argparse.Namespace) -> int:
    """Handle array command, printing one JSON value per line."""
    for item in store.array(args.mode):
        if args.mode is None:
            item = {"key": item.key, "value": item.value}
        print(json.dumps(item, ensure_ascii=False))
    return 0


def _run_snapshot_command(store: JsonStore, args: argparse.Namespace) -> int:
    """Handle snapshot command as one scheduler tick.

    Directory, indentation and cap default to the environment settings
    carried in the store options.

    Args:
        store: Store to snapshot.
        args: Parsed CLI args.

    Returns:
        Exit code.

    Raises:
        StoreArgumentError: If the directory is missing or the cap is invalid.
    """
    defaults = store.options.snapshots or SnapshotOptions()
    snapshot_options = SnapshotOptions(
        enabled=True,
        path=args.dir or defaults.path,
        interval_ms=_SINGLE_TICK_INTERVAL_MS,
        indented=args.snapshot_indented or defaults.indented,
        max_snapshots=args.max if args.max is not None else defaults.max_snapshots,
    )
    snapshot_options.validate()
    snapshot_dir = snapshot_options.directory
    tracker = None
    if snapshot_options.max_snapshots is not None:
        tracker = build_tracker(snapshot_dir, snapshot_options.max_snapshots)
    scheduler = SnapshotScheduler(
        store,
        snapshot_dir,
        _SINGLE_TICK_INTERVAL_MS,
        indented=snapshot_options.indented,
        tracker=tracker,
    )
    print(scheduler.tick())
    return 0


def _add_key_commands(subparsers: Any) -> None:
    """Register single-key subcommands."""
    get_parser = subparsers.add_parser("get", help="Print the JSON value for a key")
    get_parser.add_argument("key", help="Store key")
    set_parser = subparsers.add_parser("set", help="Store a JSON value under a key")
    set_parser.add_argument("key", help="Store key")
    set_parser.add_argument("value", help="JSON value; non-JSON text is stored as a string")
    delete_parser = subparsers.add_parser("delete", help="Remove a key")
    delete_parser.add_argument("key", help="Store key")
    has_parser = subparsers.add_parser("has", help="Exit 0 when a key is present, 1 otherwise")
    has_parser.add_argument("key", help="Store key")
    subparsers.add_parser("clear", help="Remove every key")


def _add_array_command(subparsers: Any) -> None:
    """Register array subcommand."""
    parser = subparsers.add_parser("array", help="List keys, values, or key/value pairs")
    parser.add_argument(
        "--mode",
        choices=(ARRAY_MODE_KEYS, ARRAY_MODE_VALUES),
        help="Project keys or values only; pairs when omitted",
    )


def _add_snapshot_command(subparsers: Any) -> None:
    """Register snapshot subcommand."""
    parser = subparsers.add_parser(
        "snapshot",
        help="Write one snapshot and apply retention",
    )
    parser.add_argument("--dir", help="Snapshot directory (default: JSONSTORE_SNAPSHOT_DIR)")
    parser.add_argument(
        "--indented",
        dest="snapshot_indented",
        action="store_true",
        help="Pretty-print the snapshot file",
    )
    parser.add_argument("--max", type=int, help="Keep at most this many tracked snapshots")
