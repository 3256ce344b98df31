"""Application constants."""

# Epley: 1RM = weight * (1 + reps / EPLEY_DIVISOR)
EPLEY_DIVISOR = 30

# Key compound lifts used for population leaderboards (stable standards keys)
KEY_LIFTS: tuple[str, ...] = (
    "bench-press",
    "incline-bench-press",
    "dumbbell-bench-press",
    "incline-dumbbell-press",
    "squat",
    "deadlift",
    "overhead-press",
    "dumbbell-shoulder-press",
    "bent-over-row",
    "pull-up",
    "weighted-pull-up",
    "dips",
    "weighted-dips",
)

# Percentile returned when there is nobody (or only the user) to compare against
SOLE_LIFTER_PERCENTILE = 100

# Display name for the requesting user in friends leaderboards
CURRENT_USER_DISPLAY_NAME = "You"
