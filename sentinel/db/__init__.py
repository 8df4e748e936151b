"""Database package."""

from sentinel.db.base import Base, get_engine, get_session_factory, init_db
from sentinel.db.snapshot_store import SnapshotStore
from sentinel.db.tables import Snapshot

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "init_db",
    "Snapshot",
    "SnapshotStore",
]
