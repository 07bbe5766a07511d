"""Device storage layer for liftlog."""

from .engine import get_db_path, init_db
from .repositories import DeviceStorageRepository
from .snapshot_store import MARKER_KEY, SNAPSHOT_KEY, LocalSnapshotStore

__all__ = [
    "DeviceStorageRepository",
    "get_db_path",
    "init_db",
    "LocalSnapshotStore",
    "MARKER_KEY",
    "SNAPSHOT_KEY",
]
