"""Shared enums for models and API."""

from enum import Enum


class MeasurementMode(str, Enum):
    """How an exercise's strength standard is measured."""

    WEIGHT_REPS = "weight_reps"  # Estimated 1RM vs bodyweight multiple
    BODYWEIGHT_REPS = "bodyweight_reps"  # Absolute rep count (pull-ups, dips)


class SetLabel(str, Enum):
    """Smart set labeling."""

    WARMUP = "warmup"
    WORKING = "working"
    FAILURE = "failure"
    DROP_SET = "drop_set"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class StrengthLevel(str, Enum):
    """Strength tiers, weakest first. UNTRAINED sits below the ladder."""

    UNTRAINED = "Untrained"
    BEGINNER = "Beginner"
    NOVICE = "Novice"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    ELITE = "Elite"
    WORLD_CLASS = "World Class"


class PRKind(str, Enum):
    """Record dimension broken by a session."""

    HEAVIEST_WEIGHT = "heaviest_weight"  # Heaviest weight lifted
    BEST_1RM = "best_1rm"  # Best estimated 1RM
    REP_MAX = "rep_max"  # Most reps at (or above) a given weight
    SET_VOLUME = "set_volume"  # Highest weight × reps in one set
    SESSION_VOLUME = "session_volume"  # Highest total volume in one session
