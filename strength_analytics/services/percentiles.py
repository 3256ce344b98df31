"""Population percentiles and leaderboards for estimated 1RMs.

Population data is only ever exposed as values, never identities. Every read
recomputes from the stores; the population source is treated as
eventually consistent.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Iterable, Sequence
from typing import Optional

from strength_analytics.core.config import Settings, get_settings
from strength_analytics.core.constants import CURRENT_USER_DISPLAY_NAME, KEY_LIFTS, SOLE_LIFTER_PERCENTILE
from strength_analytics.core.enums import Gender, StrengthLevel
from strength_analytics.schemas.analytics import (
    BodyMetrics,
    ExerciseInfo,
    ExercisePercentile,
    FriendLeaderboardEntry,
    LeaderboardEntry,
    SessionRecord,
)
from strength_analytics.services.fanout import gather_isolated, successes
from strength_analytics.services.personal_records import best_one_rep_max, best_one_rep_maxes, best_rep_count
from strength_analytics.services.stores import ExerciseStore, ProfileStore, SocialGraphStore, WorkoutStore
from strength_analytics.services.strength_standards import classify, is_rep_based, resolve_standards_key

logger = logging.getLogger(__name__)


# ── Pure helpers ─────────────────────────────────────────────────────────

def percentile_rank(value: float, population: Sequence[float]) -> int:
    """
    Share of the population at or below value, 0-100.

    An empty or single-member population ranks as 100: with nobody else to
    compare against the lifter is treated as the best.
    """
    if len(population) <= 1:
        return SOLE_LIFTER_PERCENTILE
    at_or_below = sum(1 for p in population if p <= value)
    return max(0, min(100, round(100 * at_or_below / len(population))))


def weight_bucket(body_weight_kg: float | None, width: float = 5.0) -> Optional[tuple[float, float]]:
    """Bodyweight band [start, end) used for like-for-like comparison."""
    if body_weight_kg is None or body_weight_kg <= 0 or width <= 0:
        return None
    start = math.floor(body_weight_kg / width) * width
    return float(start), float(start + width)


def value_at_percentile(population: Sequence[float], target: float) -> Optional[float]:
    """Smallest population value whose rank reaches target (ascending position ceil(target% * n))."""
    if not population:
        return None
    ordered = sorted(population)
    target = max(0.0, min(100.0, float(target)))
    position = max(1, math.ceil(target / 100 * len(ordered)))
    return ordered[position - 1]


def standards_key_for(info: ExerciseInfo | None) -> Optional[str]:
    if info is None:
        return None
    return info.standards_key or resolve_standards_key(info.name)


def strength_level_for(
    standards_key: str | None,
    metrics: BodyMetrics | None,
    history: Iterable[SessionRecord],
) -> Optional[StrengthLevel]:
    """Tier for a lifter on one exercise, or None when it cannot be classified."""
    if standards_key is None or metrics is None:
        return None
    history = list(history)
    value = best_rep_count(history) if is_rep_based(standards_key) else best_one_rep_max(history)
    result = classify(standards_key, metrics.gender, metrics.body_weight_kg, value)
    return result.level if result else None


class PercentileRanker:
    """Ranks a user's best estimated 1RM against everyone who logged the exercise."""

    def __init__(
        self,
        workouts: WorkoutStore,
        profiles: ProfileStore,
        social: SocialGraphStore,
        exercises: ExerciseStore,
        settings: Settings | None = None,
    ) -> None:
        self.workouts = workouts
        self.profiles = profiles
        self.social = social
        self.exercises = exercises
        self.settings = settings or get_settings()

    async def _population(self, exercise_id: uuid.UUID) -> dict[uuid.UUID, float]:
        sessions = await self.workouts.get_session_history_across_users(exercise_id)
        by_user: dict[uuid.UUID, list[SessionRecord]] = {}
        for session in sessions:
            by_user.setdefault(session.user_id, []).append(session)
        population: dict[uuid.UUID, float] = {}
        for user_id, history in by_user.items():
            best = best_one_rep_max(history)
            if best > 0:
                population[user_id] = best
        return population

    async def get_all_users_max_1rm(self, exercise_id: uuid.UUID) -> list[float]:
        """Each lifter's all-time best estimated 1RM for the exercise (values only)."""
        return list((await self._population(exercise_id)).values())

    async def _user_best(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> float:
        history = await self.workouts.get_session_history(user_id, exercise_id)
        return best_one_rep_max(history)

    async def get_exercise_percentile(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> ExercisePercentile:
        user_best = await self._user_best(user_id, exercise_id)
        info = await self.exercises.get_exercise(exercise_id)
        population = await self._population(exercise_id)
        values = list(population.values())

        result = ExercisePercentile(
            exercise_id=exercise_id,
            exercise_name=info.name if info else None,
            user_max_1rm=round(user_best, 1),
            percentile=percentile_rank(user_best, values),
            total_users=len(values),
        )

        metrics = await self.profiles.get_body_metrics(user_id)
        if metrics.gender is None or not population:
            return result
        others = await self.profiles.get_body_metrics_many(population.keys())

        result.gender = metrics.gender
        same_gender = {uid: v for uid, v in population.items() if _gender_of(others.get(uid)) == metrics.gender}
        result.gender_total_users = len(same_gender)
        if same_gender:
            result.gender_percentile = percentile_rank(user_best, list(same_gender.values()))

        bucket = weight_bucket(metrics.body_weight_kg, self.settings.weight_bucket_kg)
        if bucket is None:
            return result
        result.weight_bucket_start, result.weight_bucket_end = bucket
        same_band = [
            v for uid, v in same_gender.items()
            if weight_bucket(_weight_of(others.get(uid)), self.settings.weight_bucket_kg) == bucket
        ]
        result.gender_weight_total_users = len(same_band)
        if same_band:
            result.gender_weight_percentile = percentile_rank(user_best, same_band)
        return result

    async def get_weight_for_percentile(
        self,
        exercise_id: uuid.UUID,
        target_percentile: float,
        gender: Gender | None = None,
        body_weight_kg: float | None = None,
    ) -> Optional[float]:
        """Estimated 1RM needed to reach target_percentile, optionally within a gender / bodyweight band."""
        population = await self._population(exercise_id)
        if gender is not None or body_weight_kg is not None:
            metrics = await self.profiles.get_body_metrics_many(population.keys())
            bucket = weight_bucket(body_weight_kg, self.settings.weight_bucket_kg)
            population = {
                uid: v for uid, v in population.items()
                if (gender is None or _gender_of(metrics.get(uid)) == gender)
                and (bucket is None or weight_bucket(_weight_of(metrics.get(uid)), self.settings.weight_bucket_kg) == bucket)
            }
        value = value_at_percentile(list(population.values()), target_percentile)
        return round(value, 1) if value is not None else None

    async def get_user_leaderboard_rankings(self, user_id: uuid.UUID) -> list[LeaderboardEntry]:
        """Percentile per key lift the user has logged, best first."""
        history = await self.workouts.get_user_session_history(user_id)
        bests = best_one_rep_maxes(history)
        if not bests:
            return []
        infos = await self.exercises.get_exercises(bests.keys())
        key_lifts = [
            infos[exercise_id] for exercise_id in bests
            if exercise_id in infos and standards_key_for(infos[exercise_id]) in KEY_LIFTS
        ]

        async def _rank(info: ExerciseInfo) -> LeaderboardEntry:
            values = await self.get_all_users_max_1rm(info.id)
            user_best = bests[info.id]
            return LeaderboardEntry(
                exercise_id=info.id,
                exercise_name=info.name,
                user_max_1rm=round(user_best, 1),
                percentile=percentile_rank(user_best, values),
                total_users=len(values),
            )

        outcomes = await gather_isolated(
            key_lifts,
            _rank,
            limit=self.settings.leaderboard_max_concurrency,
            timeout=self.settings.fetch_timeout_seconds,
        )
        rankings = [r for r in successes(outcomes, "Key lift population fetch") if r.total_users > 0]
        rankings.sort(key=lambda r: r.percentile, reverse=True)
        return rankings

    async def get_friends_leaderboard(
        self, user_id: uuid.UUID, exercise_id: uuid.UUID
    ) -> list[FriendLeaderboardEntry]:
        """
        The user and everyone they follow, ranked by best estimated 1RM.

        One fetch per followed user, bounded and isolated: a failing or slow
        friend is logged and left out.
        """
        info = await self.exercises.get_exercise(exercise_id)
        standards_key = standards_key_for(info)

        async def _lifter(lifter_id: uuid.UUID) -> Optional[tuple[uuid.UUID, str | None, float, StrengthLevel | None]]:
            history = await self.workouts.get_session_history(lifter_id, exercise_id)
            best = best_one_rep_max(history)
            if best <= 0 and lifter_id != user_id:
                return None
            metrics = await self.profiles.get_body_metrics(lifter_id)
            name = await self.profiles.get_display_name(lifter_id) if lifter_id != user_id else None
            return lifter_id, name, best, strength_level_for(standards_key, metrics, history)

        following = [f for f in await self.social.list_following(user_id) if f != user_id]
        own = await _lifter(user_id)
        outcomes = await gather_isolated(
            following,
            _lifter,
            limit=self.settings.leaderboard_max_concurrency,
            timeout=self.settings.fetch_timeout_seconds,
        )
        rows = [own] + [r for r in successes(outcomes, "Friend stats fetch") if r is not None]
        rows.sort(key=lambda r: r[2], reverse=True)

        return [
            FriendLeaderboardEntry(
                rank=rank,
                user_id=lifter_id,
                display_name=CURRENT_USER_DISPLAY_NAME if lifter_id == user_id else (name or "User"),
                max_1rm=round(best, 1),
                is_current_user=lifter_id == user_id,
                strength_level=level,
            )
            for rank, (lifter_id, name, best, level) in enumerate(rows, start=1)
        ]


def _gender_of(metrics: BodyMetrics | None) -> Optional[Gender]:
    return metrics.gender if metrics else None


def _weight_of(metrics: BodyMetrics | None) -> Optional[float]:
    return metrics.body_weight_kg if metrics else None
