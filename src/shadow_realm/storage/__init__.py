"""Storage module for Shadow Realm persistence.

Provides SQLite-based storage for the game snapshots:
- The logged-in user
- The shadow collection
- Adventure progress and the stage list
"""

from shadow_realm.storage.database import (
    SnapshotDatabase,
    SnapshotRecord,
    get_database,
    reset_database,
)
from shadow_realm.storage.snapshots import (
    PROGRESS_KEY,
    SHADOWS_KEY,
    SNAPSHOT_KEYS,
    STAGES_KEY,
    USER_KEY,
    SnapshotGateway,
)

__all__ = [
    "SnapshotDatabase",
    "SnapshotRecord",
    "get_database",
    "reset_database",
    "SnapshotGateway",
    "USER_KEY",
    "SHADOWS_KEY",
    "PROGRESS_KEY",
    "STAGES_KEY",
    "SNAPSHOT_KEYS",
]
