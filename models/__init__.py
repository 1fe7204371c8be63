"""Models package for the mesocycle engine."""

from models.mesocycle import (
    Mesocycle,
    MesocycleStatus,
    MesocycleWithDetails,
    WeekSummary,
    Workout,
    WorkoutSet,
    WorkoutSetStatus,
    WorkoutStatus,
    WorkoutSummary,
)
from models.plan import (
    Exercise,
    ExerciseProgression,
    PlanBlueprint,
    PlanDay,
    PlanDayBlueprint,
    PlanDayExercise,
    TrainingPlan,
)
from models.progression import (
    CompletedSet,
    CompletionStatus,
    DynamicProgressionResult,
    PreviousWeekPerformance,
    ProgressionReason,
    WeekTarget,
)

__all__ = [
    # Plans
    "Exercise",
    "ExerciseProgression",
    "PlanBlueprint",
    "PlanDay",
    "PlanDayBlueprint",
    "PlanDayExercise",
    "TrainingPlan",
    # Mesocycles
    "Mesocycle",
    "MesocycleStatus",
    "MesocycleWithDetails",
    "WeekSummary",
    "Workout",
    "WorkoutSet",
    "WorkoutSetStatus",
    "WorkoutStatus",
    "WorkoutSummary",
    # Progression
    "CompletedSet",
    "CompletionStatus",
    "DynamicProgressionResult",
    "PreviousWeekPerformance",
    "ProgressionReason",
    "WeekTarget",
]
