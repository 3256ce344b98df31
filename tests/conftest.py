"""Shared fixtures: fake stores and a ranker wired to them."""

import pytest

from strength_analytics.core.config import Settings
from strength_analytics.services.percentiles import PercentileRanker
from tests.fakes import FakeExerciseStore, FakeProfileStore, FakeSocialGraphStore, FakeWorkoutStore


@pytest.fixture
def workouts():
    return FakeWorkoutStore()


@pytest.fixture
def profiles():
    return FakeProfileStore()


@pytest.fixture
def social():
    return FakeSocialGraphStore()


@pytest.fixture
def exercises():
    return FakeExerciseStore()


@pytest.fixture
def settings():
    return Settings(leaderboard_max_concurrency=2, fetch_timeout_seconds=0.5)


@pytest.fixture
def ranker(workouts, profiles, social, exercises, settings):
    return PercentileRanker(workouts, profiles, social, exercises, settings)
