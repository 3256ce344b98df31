"""
In-memory fakes of the analytics store protocols.

Seed them with SessionRecords / BodyMetrics; FakeWorkoutStore can also be told
to fail or stall for specific users (or, for population reads, specific
exercises) to exercise the fan-out isolation.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from strength_analytics.core.enums import Gender
from strength_analytics.schemas.analytics import BodyMetrics, ExerciseInfo, SessionRecord, SetEntry


def make_session(
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    when: datetime,
    sets: Iterable[tuple],
    session_id: uuid.UUID | None = None,
) -> SessionRecord:
    """sets: (weight, reps) or (weight, reps, is_warmup) tuples."""
    entries = []
    for s in sets:
        weight, reps, *rest = s
        entries.append(SetEntry(weight=weight, reps=reps, is_warmup=bool(rest and rest[0])))
    return SessionRecord(
        session_id=session_id or uuid.uuid4(),
        user_id=user_id,
        exercise_id=exercise_id,
        timestamp=when,
        sets=tuple(entries),
    )


def day(n: int) -> datetime:
    return datetime(2025, 1, n, 12, 0, tzinfo=timezone.utc)


class FakeWorkoutStore:
    def __init__(self):
        self._sessions: list[SessionRecord] = []
        self.fail_for: set[uuid.UUID] = set()
        self.delay_for: dict[uuid.UUID, float] = {}
        self.calls: list[tuple[uuid.UUID, uuid.UUID]] = []
        # keyed by exercise id: population reads that fail, stall or come back empty
        self.population_fail_for: set[uuid.UUID] = set()
        self.population_delay_for: dict[uuid.UUID, float] = {}
        self.population_missing: set[uuid.UUID] = set()

    def add(self, *sessions: SessionRecord) -> None:
        self._sessions.extend(sessions)

    async def get_session_history(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> list[SessionRecord]:
        self.calls.append((user_id, exercise_id))
        if user_id in self.delay_for:
            await asyncio.sleep(self.delay_for[user_id])
        if user_id in self.fail_for:
            raise RuntimeError(f"history unavailable for {user_id}")
        return [s for s in self._sessions if s.user_id == user_id and s.exercise_id == exercise_id]

    async def get_session_history_across_users(self, exercise_id: uuid.UUID) -> list[SessionRecord]:
        if exercise_id in self.population_delay_for:
            await asyncio.sleep(self.population_delay_for[exercise_id])
        if exercise_id in self.population_fail_for:
            raise RuntimeError(f"population unavailable for {exercise_id}")
        if exercise_id in self.population_missing:
            return []
        return [s for s in self._sessions if s.exercise_id == exercise_id]

    async def get_user_session_history(self, user_id: uuid.UUID) -> list[SessionRecord]:
        return [s for s in self._sessions if s.user_id == user_id]


class FakeProfileStore:
    def __init__(self):
        self._metrics: dict[uuid.UUID, BodyMetrics] = {}
        self._names: dict[uuid.UUID, str] = {}

    def set(
        self,
        user_id: uuid.UUID,
        gender: Gender | None = None,
        body_weight_kg: float | None = None,
        name: str | None = None,
    ) -> None:
        self._metrics[user_id] = BodyMetrics(gender=gender, body_weight_kg=body_weight_kg)
        if name is not None:
            self._names[user_id] = name

    async def get_body_metrics(self, user_id: uuid.UUID) -> BodyMetrics:
        return self._metrics.get(user_id, BodyMetrics())

    async def get_body_metrics_many(self, user_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, BodyMetrics]:
        return {uid: self._metrics[uid] for uid in user_ids if uid in self._metrics}

    async def get_display_name(self, user_id: uuid.UUID) -> Optional[str]:
        return self._names.get(user_id)


class FakeSocialGraphStore:
    def __init__(self):
        self._following: dict[uuid.UUID, list[uuid.UUID]] = {}

    def follow(self, follower: uuid.UUID, *followees: uuid.UUID) -> None:
        self._following.setdefault(follower, []).extend(followees)

    async def list_following(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        return list(self._following.get(user_id, []))


class FakeExerciseStore:
    def __init__(self):
        self._exercises: dict[uuid.UUID, ExerciseInfo] = {}

    def add(self, name: str, standards_key: str | None = None, exercise_id: uuid.UUID | None = None) -> ExerciseInfo:
        info = ExerciseInfo(id=exercise_id or uuid.uuid4(), name=name, standards_key=standards_key)
        self._exercises[info.id] = info
        return info

    async def get_exercise(self, exercise_id: uuid.UUID) -> Optional[ExerciseInfo]:
        return self._exercises.get(exercise_id)

    async def get_exercises(self, exercise_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, ExerciseInfo]:
        return {eid: self._exercises[eid] for eid in exercise_ids if eid in self._exercises}
