"""FastAPI dependencies: SQL-backed stores and the analytics services built on them."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from strength_analytics.core.config import Settings, get_settings
from strength_analytics.db.session import get_session_factory
from strength_analytics.db.stores import SqlExerciseStore, SqlProfileStore, SqlSocialGraphStore, SqlWorkoutStore
from strength_analytics.services.percentiles import PercentileRanker
from strength_analytics.services.pr_detection import SessionPrEvaluator
from strength_analytics.services.stores import ExerciseStore, ProfileStore, SocialGraphStore, WorkoutStore


def get_workout_store(factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)) -> WorkoutStore:
    return SqlWorkoutStore(factory)


def get_profile_store(factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)) -> ProfileStore:
    return SqlProfileStore(factory)


def get_social_store(factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)) -> SocialGraphStore:
    return SqlSocialGraphStore(factory)


def get_exercise_store(factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)) -> ExerciseStore:
    return SqlExerciseStore(factory)


def get_percentile_ranker(
    workouts: WorkoutStore = Depends(get_workout_store),
    profiles: ProfileStore = Depends(get_profile_store),
    social: SocialGraphStore = Depends(get_social_store),
    exercises: ExerciseStore = Depends(get_exercise_store),
    settings: Settings = Depends(get_settings),
) -> PercentileRanker:
    return PercentileRanker(workouts, profiles, social, exercises, settings)


def get_pr_evaluator(workouts: WorkoutStore = Depends(get_workout_store)) -> SessionPrEvaluator:
    return SessionPrEvaluator(workouts)
