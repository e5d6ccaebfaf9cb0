"""Snapshot storage for cached GitHub issues."""

from .manager import StorageManager, load_collection, load_snapshot, select_kind

__all__ = ["StorageManager", "load_collection", "load_snapshot", "select_kind"]
