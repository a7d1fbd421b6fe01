"""Storage layer.

This package holds the file-backed JSON store, snapshot writing,
retention tracking, and the path-keyed store registry.
"""
