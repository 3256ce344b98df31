"""Strength standards reference data - hardcoded for O(1) lookups.

Bodyweight multipliers per tier (Beginner → World Class) by gender, based on
published strength standards for major lifts. For bodyweight movements
(pull-ups, dips) the values are absolute rep counts. For weighted
variations the multiplier applies to the added load.
"""

from typing import NamedTuple

from strength_analytics.core.enums import MeasurementMode, StrengthLevel

# Ladder order, weakest first
TIERS: tuple[StrengthLevel, ...] = (
    StrengthLevel.BEGINNER,
    StrengthLevel.NOVICE,
    StrengthLevel.INTERMEDIATE,
    StrengthLevel.ADVANCED,
    StrengthLevel.ELITE,
    StrengthLevel.WORLD_CLASS,
)

# ── Tier text: { tier: (description, recommendation) } ──
TIER_TEXT: dict[StrengthLevel, tuple[str, str]] = {
    StrengthLevel.BEGINNER: (
        "Just starting out",
        "Focus on technique and train the lift 2-3 times a week with moderate loads.",
    ),
    StrengthLevel.NOVICE: (
        "A few months training",
        "Add a little weight every session while form stays solid.",
    ),
    StrengthLevel.INTERMEDIATE: (
        "1-2 years consistent training",
        "Move to weekly progression and vary rep ranges across the week.",
    ),
    StrengthLevel.ADVANCED: (
        "2-5 years dedicated training",
        "Use planned training blocks with deloads to keep progressing.",
    ),
    StrengthLevel.ELITE: (
        "Competitive athlete level",
        "Peak for attempts and prioritise recovery, sleep and accessory weak points.",
    ),
    StrengthLevel.WORLD_CLASS: (
        "World record territory",
        "Maintain strength and manage fatigue; small gains come from precise programming.",
    ),
}


class ExerciseStandards(NamedTuple):
    """One exercise's tables. `male` / `female` hold one threshold per tier."""

    key: str
    name: str
    aliases: tuple[str, ...]
    mode: MeasurementMode
    male: tuple[float, float, float, float, float, float]
    female: tuple[float, float, float, float, float, float]


WEIGHT = MeasurementMode.WEIGHT_REPS
REPS = MeasurementMode.BODYWEIGHT_REPS

STANDARDS_TABLE: tuple[ExerciseStandards, ...] = (
    # ── Chest ──
    ExerciseStandards(
        "bench-press", "Bench Press", ("Barbell Bench Press",), WEIGHT,
        male=(0.5, 0.75, 1.0, 1.5, 1.75, 2.0),
        female=(0.3, 0.5, 0.65, 0.9, 1.1, 1.25),
    ),
    ExerciseStandards(
        "incline-bench-press", "Incline Bench Press", (), WEIGHT,
        male=(0.5, 0.75, 1.0, 1.5, 1.75, 2.0),
        female=(0.2, 0.4, 0.65, 1.0, 1.4, 1.75),
    ),
    ExerciseStandards(
        "dumbbell-bench-press", "Dumbbell Bench Press", (), WEIGHT,
        male=(0.2, 0.35, 0.5, 0.75, 1.0, 1.25),
        female=(0.1, 0.2, 0.3, 0.5, 0.7, 0.9),
    ),
    ExerciseStandards(
        "incline-dumbbell-press", "Incline Dumbbell Press", (), WEIGHT,
        male=(0.25, 0.35, 0.5, 0.65, 0.85, 1.0),
        female=(0.1, 0.2, 0.3, 0.45, 0.6, 0.75),
    ),
    # ── Legs ──
    ExerciseStandards(
        "squat", "Squat", ("Back Squat", "Barbell Squat"), WEIGHT,
        male=(0.75, 1.0, 1.5, 2.0, 2.5, 2.75),
        female=(0.5, 0.75, 1.0, 1.5, 1.75, 2.0),
    ),
    ExerciseStandards(
        "front-squat", "Front Squat", (), WEIGHT,
        male=(0.6, 0.85, 1.25, 1.75, 2.0, 2.25),
        female=(0.4, 0.6, 0.85, 1.25, 1.5, 1.75),
    ),
    ExerciseStandards(
        "leg-press", "Leg Press", (), WEIGHT,
        male=(1.0, 1.75, 2.75, 4.0, 5.25, 6.5),
        female=(0.5, 1.25, 2.0, 3.25, 4.5, 5.75),
    ),
    # ── Hinge ──
    ExerciseStandards(
        "deadlift", "Deadlift", ("Conventional Deadlift",), WEIGHT,
        male=(1.0, 1.25, 1.75, 2.25, 2.75, 3.0),
        female=(0.5, 0.75, 1.25, 1.75, 2.0, 2.25),
    ),
    ExerciseStandards(
        "romanian-deadlift", "Romanian Deadlift", ("RDL",), WEIGHT,
        male=(0.75, 1.0, 1.5, 2.0, 2.25, 2.5),
        female=(0.4, 0.6, 1.0, 1.5, 1.75, 2.0),
    ),
    # ── Shoulders ──
    ExerciseStandards(
        "overhead-press", "Overhead Press", ("Military Press",), WEIGHT,
        male=(0.35, 0.5, 0.75, 1.0, 1.25, 1.5),
        female=(0.2, 0.3, 0.45, 0.65, 0.8, 1.0),
    ),
    ExerciseStandards(
        "dumbbell-shoulder-press", "Dumbbell Shoulder Press", (), WEIGHT,
        male=(0.15, 0.25, 0.4, 0.6, 0.75, 0.9),
        female=(0.1, 0.15, 0.25, 0.35, 0.5, 0.65),
    ),
    # ── Back ──
    ExerciseStandards(
        "bent-over-row", "Bent Over Row", ("Barbell Row",), WEIGHT,
        male=(0.5, 0.75, 1.0, 1.5, 1.75, 2.0),
        female=(0.3, 0.5, 0.65, 1.0, 1.25, 1.5),
    ),
    ExerciseStandards(
        "pull-up", "Pull-Up", ("Pull-ups", "Pull Up", "Pullup"), REPS,
        male=(1, 5, 10, 15, 20, 25),
        female=(1, 3, 6, 10, 15, 20),
    ),
    ExerciseStandards(
        "weighted-pull-up", "Weighted Pull-Ups", ("Weighted Pull-Up",), WEIGHT,
        male=(0.0, 0.1, 0.25, 0.5, 0.75, 1.0),
        female=(0.0, 0.05, 0.15, 0.35, 0.5, 0.65),
    ),
    ExerciseStandards(
        "dips", "Dips", ("Dip",), REPS,
        male=(1, 8, 15, 25, 35, 45),
        female=(1, 5, 10, 15, 20, 30),
    ),
    ExerciseStandards(
        "weighted-dips", "Weighted Dips", ("Weighted Dip",), WEIGHT,
        male=(0.0, 0.15, 0.35, 0.65, 1.0, 1.35),
        female=(0.0, 0.1, 0.25, 0.45, 0.7, 1.0),
    ),
    # ── Arms ──
    ExerciseStandards(
        "dumbbell-curl", "Dumbbell Curl", (), WEIGHT,
        male=(0.1, 0.15, 0.3, 0.5, 0.65, 0.8),
        female=(0.05, 0.1, 0.2, 0.35, 0.45, 0.55),
    ),
    ExerciseStandards(
        "barbell-curl", "Barbell Curl", (), WEIGHT,
        male=(0.2, 0.4, 0.6, 0.85, 1.15, 1.4),
        female=(0.1, 0.2, 0.4, 0.6, 0.85, 1.1),
    ),
)
