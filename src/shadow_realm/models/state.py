"""Aggregate in-memory game state.

RealmState is the single store the engine components share. It is passed
to them explicitly; nothing in the package reaches for a module-level
instance. Lookup helpers raise the domain errors so callers never have to
check for None.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shadow_realm.core.exceptions import (
    NotAuthenticatedError,
    ShadowNotFoundError,
    StageNotFoundError,
)
from shadow_realm.models.adventure import (
    AdventureProgress,
    AdventureStage,
    default_stages,
    initial_progress,
)
from shadow_realm.models.battle import Battle
from shadow_realm.models.shadow import Shadow, User


class RealmState(BaseModel):
    """Everything the game knows about the current session.

    Attributes:
        user: Logged-in user, or None when logged out.
        shadows: Every known shadow, across owners.
        progress: Adventure progress of the current user.
        stages: Adventure stages in unlock-resolution order.
        battle: The single active battle, if any. Never persisted.
    """

    model_config = ConfigDict(validate_assignment=True)

    user: User | None = None
    shadows: list[Shadow] = Field(default_factory=list)
    progress: AdventureProgress = Field(default_factory=AdventureProgress)
    stages: list[AdventureStage] = Field(default_factory=default_stages)
    battle: Battle | None = None

    @classmethod
    def fresh(cls, user: User | None = None) -> RealmState:
        """Create a state seeded with the default stages and progress."""
        stages = default_stages()
        return cls(user=user, stages=stages, progress=initial_progress(stages))

    def require_user(self) -> User:
        """Return the logged-in user.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
        """
        if self.user is None:
            raise NotAuthenticatedError("No user is logged in")
        return self.user

    def get_shadow(self, shadow_id: str) -> Shadow:
        """Look up any shadow by id.

        Raises:
            ShadowNotFoundError: If the id is unknown.
        """
        for shadow in self.shadows:
            if shadow.id == shadow_id:
                return shadow
        raise ShadowNotFoundError("Shadow not found", shadow_id=shadow_id)

    def get_owned_shadow(self, shadow_id: str) -> Shadow:
        """Look up a shadow owned by the logged-in user.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            ShadowNotFoundError: If the id is unknown or owned by someone else.
        """
        user = self.require_user()
        shadow = self.get_shadow(shadow_id)
        if shadow.owner_id != user.id:
            raise ShadowNotFoundError(
                "Shadow is not owned by the current user",
                shadow_id=shadow_id,
            )
        return shadow

    def owned_shadows(self) -> list[Shadow]:
        """Shadows owned by the logged-in user, in creation order."""
        if self.user is None:
            return []
        return [s for s in self.shadows if s.owner_id == self.user.id]

    def get_stage(self, stage_id: str) -> AdventureStage:
        """Look up a stage by id.

        Raises:
            StageNotFoundError: If the id is unknown.
        """
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        raise StageNotFoundError("Stage not found", stage_id=stage_id)


__all__ = ["RealmState"]
