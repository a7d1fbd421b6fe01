"""Snapshot scheduling.

This package runs periodic snapshots for a store on a background thread.
"""
