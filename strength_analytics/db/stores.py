"""SQLAlchemy-backed stores: read set history, profiles and follows into analytics payloads.

Each read opens its own short-lived session from the factory, so the
leaderboard fan-out can run reads concurrently (an AsyncSession is not safe
to share between concurrent tasks).
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from strength_analytics.core.enums import Gender, SetLabel
from strength_analytics.models.exercise import Exercise
from strength_analytics.models.follow import Follow
from strength_analytics.models.profile import Profile
from strength_analytics.models.workout import Workout, WorkoutSet
from strength_analytics.schemas.analytics import BodyMetrics, ExerciseInfo, SessionRecord, SetEntry


def _set_rows_query():
    return (
        select(
            WorkoutSet.workout_id,
            WorkoutSet.exercise_id,
            Workout.user_id,
            Workout.started_at,
            WorkoutSet.weight,
            WorkoutSet.reps,
            WorkoutSet.set_label,
        )
        .join(Workout, Workout.id == WorkoutSet.workout_id)
        .order_by(Workout.started_at, Workout.id, WorkoutSet.exercise_id, WorkoutSet.set_order)
    )


def _group_sessions(rows) -> list[SessionRecord]:
    """Fold ordered set rows into one SessionRecord per (workout, exercise)."""
    grouped: dict[tuple[uuid.UUID, uuid.UUID], dict] = {}
    for r in rows:
        key = (r.workout_id, r.exercise_id)
        if key not in grouped:
            grouped[key] = {
                "session_id": r.workout_id,
                "user_id": r.user_id,
                "exercise_id": r.exercise_id,
                "timestamp": r.started_at,
                "sets": [],
            }
        grouped[key]["sets"].append(
            SetEntry(
                weight=float(r.weight) if r.weight is not None else None,
                reps=r.reps,
                is_warmup=r.set_label == SetLabel.WARMUP,
            )
        )
    return [SessionRecord(**{**g, "sets": tuple(g["sets"])}) for g in grouped.values()]


class _SqlStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory


class SqlWorkoutStore(_SqlStore):
    async def _sessions(self, *criteria) -> list[SessionRecord]:
        async with self.session_factory() as db:
            result = await db.execute(_set_rows_query().where(*criteria))
            return _group_sessions(result.all())

    async def get_session_history(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> list[SessionRecord]:
        return await self._sessions(Workout.user_id == user_id, WorkoutSet.exercise_id == exercise_id)

    async def get_session_history_across_users(self, exercise_id: uuid.UUID) -> list[SessionRecord]:
        return await self._sessions(WorkoutSet.exercise_id == exercise_id)

    async def get_user_session_history(self, user_id: uuid.UUID) -> list[SessionRecord]:
        return await self._sessions(Workout.user_id == user_id)


def _metrics(profile: Profile | None) -> BodyMetrics:
    if profile is None:
        return BodyMetrics()
    try:
        gender = Gender((profile.gender or "").strip().lower())
    except ValueError:
        gender = None
    weight = profile.body_weight_kg if profile.body_weight_kg and profile.body_weight_kg > 0 else None
    return BodyMetrics(gender=gender, body_weight_kg=weight)


class SqlProfileStore(_SqlStore):
    async def get_body_metrics(self, user_id: uuid.UUID) -> BodyMetrics:
        async with self.session_factory() as db:
            result = await db.execute(select(Profile).where(Profile.id == user_id))
            return _metrics(result.scalar_one_or_none())

    async def get_body_metrics_many(self, user_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, BodyMetrics]:
        ids = list(user_ids)
        if not ids:
            return {}
        async with self.session_factory() as db:
            result = await db.execute(select(Profile).where(Profile.id.in_(ids)))
            return {p.id: _metrics(p) for p in result.scalars().all()}

    async def get_display_name(self, user_id: uuid.UUID) -> Optional[str]:
        async with self.session_factory() as db:
            result = await db.execute(select(Profile.display_name).where(Profile.id == user_id))
            return result.scalar_one_or_none()


class SqlSocialGraphStore(_SqlStore):
    async def list_following(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Follow.followee_id).where(Follow.follower_id == user_id).order_by(Follow.created_at)
            )
            return list(result.scalars().all())


class SqlExerciseStore(_SqlStore):
    async def get_exercise(self, exercise_id: uuid.UUID) -> Optional[ExerciseInfo]:
        async with self.session_factory() as db:
            result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
            exercise = result.scalar_one_or_none()
            return ExerciseInfo.model_validate(exercise) if exercise else None

    async def get_exercises(self, exercise_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, ExerciseInfo]:
        ids = list(exercise_ids)
        if not ids:
            return {}
        async with self.session_factory() as db:
            result = await db.execute(select(Exercise).where(Exercise.id.in_(ids)))
            return {e.id: ExerciseInfo.model_validate(e) for e in result.scalars().all()}
