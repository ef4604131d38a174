"""SQLite snapshot store for Shadow Realm.

Stores one JSON document per key. The game writes four keys (user, shadow
collection, adventure progress, stage list); the store itself knows
nothing about their shape.

Storage location: settings.storage.database_path (data/shadow_realm.db)
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from shadow_realm.core.config import get_settings
from shadow_realm.core.exceptions import StorageError
from shadow_realm.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class SnapshotRecord:
    """A stored snapshot.

    Attributes:
        key: Snapshot key.
        payload: Raw JSON document.
        updated_at: When the snapshot was last written.
    """

    key: str
    payload: str
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> SnapshotRecord:
        """Create from database row."""
        return cls(
            key=row[0],
            payload=row[1],
            updated_at=datetime.fromisoformat(row[2]),
        )

    def get_document(self) -> Any:
        """Parse the JSON payload."""
        return json.loads(self.payload)


# =============================================================================
# Database Class
# =============================================================================


class SnapshotDatabase:
    """SQLite key/value store for game snapshots.

    Every sqlite3 failure surfaces as StorageError carrying the key.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. Every operation opens its own
                connection, so in-memory databases are not supported.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.debug("Snapshot database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self, key: str | None = None) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open snapshot database: {exc}", key=key) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Snapshot operation failed: {exc}", key=key) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Snapshot Operations
    # =========================================================================

    def save_snapshot(self, key: str, document: Any) -> SnapshotRecord:
        """Write a snapshot, replacing any previous one.

        Args:
            key: Snapshot key.
            document: JSON-serializable document.

        Returns:
            The stored record.

        Raises:
            StorageError: If the document cannot be serialized or written.
        """
        try:
            payload = json.dumps(document, default=str)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Snapshot is not serializable: {exc}", key=key) from exc
        now = datetime.now()

        with self._get_connection(key) as conn:
            conn.execute("""
                INSERT INTO snapshots (key, payload, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
            """, (key, payload, now.isoformat()))

        logger.debug("Snapshot saved", key=key, size=len(payload))
        return SnapshotRecord(key=key, payload=payload, updated_at=now)

    def get_snapshot(self, key: str) -> SnapshotRecord | None:
        """Get a snapshot record by key."""
        with self._get_connection(key) as conn:
            row = conn.execute(
                "SELECT key, payload, updated_at FROM snapshots WHERE key = ?",
                (key,),
            ).fetchone()
        if row:
            return SnapshotRecord.from_row(tuple(row))
        return None

    def load_snapshot(self, key: str) -> Any | None:
        """Load and parse a snapshot document.

        Returns:
            The parsed document, or None if the key is absent.

        Raises:
            StorageError: If the stored payload is not valid JSON.
        """
        record = self.get_snapshot(key)
        if record is None:
            return None
        try:
            return record.get_document()
        except json.JSONDecodeError as exc:
            raise StorageError(f"Snapshot is corrupt: {exc}", key=key) from exc

    def delete_snapshot(self, key: str) -> bool:
        """Delete a snapshot.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection(key) as conn:
            deleted = conn.execute("DELETE FROM snapshots WHERE key = ?", (key,)).rowcount > 0
        if deleted:
            logger.debug("Snapshot deleted", key=key)
        return deleted

    def list_keys(self) -> list[str]:
        """List stored snapshot keys in alphabetical order."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT key FROM snapshots ORDER BY key").fetchall()
        return [row[0] for row in rows]


# =============================================================================
# Singleton Instance
# =============================================================================


_database_instance: SnapshotDatabase | None = None


def get_database() -> SnapshotDatabase:
    """Get the global database instance at the configured path."""
    global _database_instance  # noqa: PLW0603

    if _database_instance is None:
        _database_instance = SnapshotDatabase(get_settings().storage.database_path)

    return _database_instance


def reset_database() -> None:
    """Forget the global instance so the next call reopens it."""
    global _database_instance  # noqa: PLW0603
    _database_instance = None


__all__ = [
    "SnapshotRecord",
    "SnapshotDatabase",
    "get_database",
    "reset_database",
]
