"""
Shared constants.

Part of AMA-512: Mesocycle generation engine

This module has no dependencies on models or services to avoid circular imports.

Week numbering:
    Progression calculators work in 0-based progression weeks (0..6, with
    week 6 the deload). Persisted workouts and mesocycles use 1-based
    schedule weeks (1..7, with week 7 the deload). Convert only through
    to_progression_week() / to_schedule_week().
"""

# Length of one training block
MESOCYCLE_WEEKS = 7

FIRST_PROGRESSION_WEEK = 0
DELOAD_PROGRESSION_WEEK = MESOCYCLE_WEEKS - 1

FIRST_SCHEDULE_WEEK = 1
DELOAD_SCHEDULE_WEEK = MESOCYCLE_WEEKS

# Deload prescription
DELOAD_WEIGHT_FACTOR = 0.85
DELOAD_VOLUME_FACTOR = 0.5
WEIGHT_ROUNDING_INCREMENT = 2.5

# Dynamic progression: failed weeks at the same weight before dropping weight
CONSECUTIVE_FAILURE_THRESHOLD = 2

# Rep range defaults for plan exercises
DEFAULT_MIN_REPS = 8
DEFAULT_MAX_REPS = 12
DEFAULT_WEIGHT_INCREMENT = 5.0

# Largest number of rows a single batched set write may carry
MAX_SET_BATCH_SIZE = 500


def to_progression_week(schedule_week: int) -> int:
    """Map a 1-based schedule week (1..7) to a 0-based progression week."""
    if not FIRST_SCHEDULE_WEEK <= schedule_week <= DELOAD_SCHEDULE_WEEK:
        raise ValueError(
            f"Schedule week must be between {FIRST_SCHEDULE_WEEK} and "
            f"{DELOAD_SCHEDULE_WEEK}, got {schedule_week}"
        )
    return schedule_week - 1


def to_schedule_week(progression_week: int) -> int:
    """Map a 0-based progression week (0..6) to a 1-based schedule week."""
    if not FIRST_PROGRESSION_WEEK <= progression_week <= DELOAD_PROGRESSION_WEEK:
        raise ValueError(
            f"Progression week must be between {FIRST_PROGRESSION_WEEK} and "
            f"{DELOAD_PROGRESSION_WEEK}, got {progression_week}"
        )
    return progression_week + 1
