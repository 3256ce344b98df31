"""Collaborator interfaces the analytics services read from.

The SQLAlchemy implementations live in strength_analytics.db.stores; tests use
in-memory fakes.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Optional, Protocol

from strength_analytics.schemas.analytics import BodyMetrics, ExerciseInfo, SessionRecord


class WorkoutStore(Protocol):
    async def get_session_history(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> list[SessionRecord]:
        """One user's sessions for one exercise, oldest first."""
        ...

    async def get_session_history_across_users(self, exercise_id: uuid.UUID) -> list[SessionRecord]:
        """Every user's sessions for one exercise (population percentiles)."""
        ...

    async def get_user_session_history(self, user_id: uuid.UUID) -> list[SessionRecord]:
        """One user's sessions across all exercises, oldest first."""
        ...


class ProfileStore(Protocol):
    async def get_body_metrics(self, user_id: uuid.UUID) -> BodyMetrics:
        ...

    async def get_body_metrics_many(self, user_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, BodyMetrics]:
        ...

    async def get_display_name(self, user_id: uuid.UUID) -> Optional[str]:
        ...


class SocialGraphStore(Protocol):
    async def list_following(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        ...


class ExerciseStore(Protocol):
    async def get_exercise(self, exercise_id: uuid.UUID) -> Optional[ExerciseInfo]:
        ...

    async def get_exercises(self, exercise_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, ExerciseInfo]:
        ...
