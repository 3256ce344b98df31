"""ORM models - import all so Base.metadata is complete for migrations."""

from strength_analytics.models.exercise import Exercise
from strength_analytics.models.follow import Follow
from strength_analytics.models.profile import Profile
from strength_analytics.models.workout import Workout, WorkoutSet

__all__ = [
    "Exercise",
    "Follow",
    "Profile",
    "Workout",
    "WorkoutSet",
]
