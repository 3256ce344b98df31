"""Per-user analytics: key-lift leaderboard and strength score over time."""

import uuid

from fastapi import APIRouter, Depends

from strength_analytics.api.deps import get_percentile_ranker, get_workout_store
from strength_analytics.schemas.analytics import LeaderboardEntry, StrengthScorePoint
from strength_analytics.services.percentiles import PercentileRanker
from strength_analytics.services.personal_records import strength_score_series
from strength_analytics.services.stores import WorkoutStore

router = APIRouter()


@router.get("/{user_id}/leaderboard", response_model=list[LeaderboardEntry])
async def user_leaderboard(
    user_id: uuid.UUID,
    ranker: PercentileRanker = Depends(get_percentile_ranker),
):
    """Percentile per key lift the user has logged, best first."""
    return await ranker.get_user_leaderboard_rankings(user_id)


@router.get("/{user_id}/strength-score", response_model=list[StrengthScorePoint])
async def strength_score(
    user_id: uuid.UUID,
    workouts: WorkoutStore = Depends(get_workout_store),
):
    """Sum of best estimated 1RMs across exercises, after each workout."""
    history = await workouts.get_user_session_history(user_id)
    return strength_score_series(history)
