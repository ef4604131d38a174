"""Typed snapshot gateway.

Maps the game's entities onto the four snapshot keys and validates them
on the way back in. A missing key loads as None; a document that no
longer matches its schema raises StorageError so the caller can fall back
to defaults.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shadow_realm.core.exceptions import StorageError
from shadow_realm.core.logging import get_logger
from shadow_realm.models.adventure import AdventureProgress, AdventureStage
from shadow_realm.models.shadow import Shadow, User
from shadow_realm.storage.database import SnapshotDatabase


logger = get_logger(__name__)

USER_KEY = "shadowmage_user"
SHADOWS_KEY = "shadowmage_shadows"
PROGRESS_KEY = "shadowmage_adventure_progress"
STAGES_KEY = "shadowmage_adventure_stages"

SNAPSHOT_KEYS: tuple[str, ...] = (USER_KEY, SHADOWS_KEY, PROGRESS_KEY, STAGES_KEY)

_USER = TypeAdapter(User)
_SHADOW_LIST = TypeAdapter(list[Shadow])
_PROGRESS = TypeAdapter(AdventureProgress)
_STAGE_LIST = TypeAdapter(list[AdventureStage])

T = TypeVar("T")


class SnapshotGateway:
    """Load and save game entities as snapshots."""

    def __init__(self, database: SnapshotDatabase) -> None:
        self._db = database

    @property
    def database(self) -> SnapshotDatabase:
        return self._db

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_user(self) -> User | None:
        return self._load(USER_KEY, _USER)

    def load_shadows(self) -> list[Shadow] | None:
        return self._load(SHADOWS_KEY, _SHADOW_LIST)

    def load_progress(self) -> AdventureProgress | None:
        return self._load(PROGRESS_KEY, _PROGRESS)

    def load_stages(self) -> list[AdventureStage] | None:
        return self._load(STAGES_KEY, _STAGE_LIST)

    def _load(self, key: str, adapter: TypeAdapter[T]) -> T | None:
        document = self._db.load_snapshot(key)
        if document is None:
            return None
        try:
            return adapter.validate_python(document)
        except PydanticValidationError as exc:
            raise StorageError(
                "Snapshot does not match its schema",
                key=key,
                details={"errors": exc.error_count()},
            ) from exc

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save_user(self, user: User) -> None:
        self._db.save_snapshot(USER_KEY, _dump(user))

    def save_shadows(self, shadows: list[Shadow]) -> None:
        self._db.save_snapshot(SHADOWS_KEY, _SHADOW_LIST.dump_python(shadows, mode="json"))

    def save_progress(self, progress: AdventureProgress) -> None:
        self._db.save_snapshot(PROGRESS_KEY, _dump(progress))

    def save_stages(self, stages: list[AdventureStage]) -> None:
        self._db.save_snapshot(STAGES_KEY, _STAGE_LIST.dump_python(stages, mode="json"))

    def clear(self) -> None:
        """Delete every game snapshot."""
        for key in SNAPSHOT_KEYS:
            self._db.delete_snapshot(key)
        logger.info("Snapshots cleared")


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")


__all__ = [
    "USER_KEY",
    "SHADOWS_KEY",
    "PROGRESS_KEY",
    "STAGES_KEY",
    "SNAPSHOT_KEYS",
    "SnapshotGateway",
]
