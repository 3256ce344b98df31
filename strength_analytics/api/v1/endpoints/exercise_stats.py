"""Exercise statistics endpoints - records, progress, standards and rankings for one exercise."""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from strength_analytics.api.deps import (
    get_exercise_store,
    get_percentile_ranker,
    get_profile_store,
    get_workout_store,
)
from strength_analytics.core.config import Settings, get_settings
from strength_analytics.core.enums import Gender
from strength_analytics.schemas.analytics import (
    ExerciseInfo,
    ExercisePercentile,
    ExerciseRecordPoint,
    FriendLeaderboardEntry,
    PersonalBests,
    ProgressPoint,
    StrengthClassification,
)
from strength_analytics.services.percentiles import PercentileRanker, standards_key_for
from strength_analytics.services.personal_records import (
    best_one_rep_max,
    best_rep_count,
    compute_personal_bests,
    exercise_records_by_weight,
    filter_recent,
    rep_max_table,
    running_max_series,
)
from strength_analytics.services.stores import ExerciseStore, ProfileStore, WorkoutStore
from strength_analytics.services.strength_standards import classify, is_rep_based

router = APIRouter()


async def _exercise_or_404(exercises: ExerciseStore, exercise_id: uuid.UUID) -> ExerciseInfo:
    info = await exercises.get_exercise(exercise_id)
    if info is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return info


@router.get("/{exercise_id}/records", response_model=list[ExerciseRecordPoint])
async def exercise_records(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    workouts: WorkoutStore = Depends(get_workout_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    """Best reps per (weight, day), heaviest first."""
    await _exercise_or_404(exercises, exercise_id)
    history = await workouts.get_session_history(user_id, exercise_id)
    return exercise_records_by_weight(history)


@router.get("/{exercise_id}/personal-bests", response_model=PersonalBests)
async def personal_bests(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    workouts: WorkoutStore = Depends(get_workout_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    await _exercise_or_404(exercises, exercise_id)
    history = await workouts.get_session_history(user_id, exercise_id)
    return compute_personal_bests(history)


@router.get("/{exercise_id}/progress", response_model=list[ProgressPoint])
async def progress(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    days_back: Optional[int] = Query(None, description="Window in days (clamped); omit for all history"),
    workouts: WorkoutStore = Depends(get_workout_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
    settings: Settings = Depends(get_settings),
):
    """
    Running best estimated 1RM, one point per session.

    The running max is built over the full history and then windowed, so the
    first point in the window still reflects earlier bests.
    """
    await _exercise_or_404(exercises, exercise_id)
    history = await workouts.get_session_history(user_id, exercise_id)
    series = running_max_series(history)
    if days_back is None:
        return series
    recent = {s.timestamp for s in filter_recent(
        history, days_back, minimum=settings.progress_days_min, maximum=settings.progress_days_max
    )}
    return [p for p in series if p.date in recent]


@router.get("/{exercise_id}/rep-maxes")
async def rep_maxes(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    workouts: WorkoutStore = Depends(get_workout_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    """Heaviest weight per rep count."""
    await _exercise_or_404(exercises, exercise_id)
    history = await workouts.get_session_history(user_id, exercise_id)
    return [{"reps": reps, "weight": weight} for reps, weight in rep_max_table(history).items()]


@router.get("/{exercise_id}/strength-level", response_model=Optional[StrengthClassification])
async def strength_level(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    workouts: WorkoutStore = Depends(get_workout_store),
    profiles: ProfileStore = Depends(get_profile_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    """Standards tier for the user; null when the exercise has no standards or body metrics are missing."""
    info = await _exercise_or_404(exercises, exercise_id)
    key = standards_key_for(info)
    if key is None:
        return None
    metrics = await profiles.get_body_metrics(user_id)
    history = await workouts.get_session_history(user_id, exercise_id)
    value = best_rep_count(history) if is_rep_based(key) else best_one_rep_max(history)
    return classify(key, metrics.gender, metrics.body_weight_kg, value)


@router.get("/{exercise_id}/percentile", response_model=ExercisePercentile)
async def exercise_percentile(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    exercises: ExerciseStore = Depends(get_exercise_store),
    ranker: PercentileRanker = Depends(get_percentile_ranker),
):
    await _exercise_or_404(exercises, exercise_id)
    return await ranker.get_exercise_percentile(user_id, exercise_id)


@router.get("/{exercise_id}/percentile-target")
async def percentile_target(
    exercise_id: uuid.UUID,
    percentile: float = Query(..., ge=0, le=100),
    gender: Optional[Gender] = None,
    body_weight_kg: Optional[float] = Query(None, gt=0),
    exercises: ExerciseStore = Depends(get_exercise_store),
    ranker: PercentileRanker = Depends(get_percentile_ranker),
):
    """Estimated 1RM needed to reach a percentile, optionally within a gender / bodyweight band."""
    await _exercise_or_404(exercises, exercise_id)
    weight = await ranker.get_weight_for_percentile(exercise_id, percentile, gender, body_weight_kg)
    return {"exercise_id": exercise_id, "percentile": percentile, "estimated_1rm": weight}


@router.get("/{exercise_id}/friends-leaderboard", response_model=list[FriendLeaderboardEntry])
async def friends_leaderboard(
    exercise_id: uuid.UUID,
    user_id: uuid.UUID,
    exercises: ExerciseStore = Depends(get_exercise_store),
    ranker: PercentileRanker = Depends(get_percentile_ranker),
):
    await _exercise_or_404(exercises, exercise_id)
    return await ranker.get_friends_leaderboard(user_id, exercise_id)
