"""
Domain models for training plan templates.

Part of AMA-512: Mesocycle generation engine

A plan is the reusable template a mesocycle is generated from:
TrainingPlan -> PlanDay (one per training weekday) -> PlanDayExercise.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from core.constants import DEFAULT_MAX_REPS, DEFAULT_MIN_REPS, DEFAULT_WEIGHT_INCREMENT


class Exercise(BaseModel):
    """An exercise from the catalog referenced by plan exercises."""

    id: str
    name: str
    weight_increment: float = Field(default=DEFAULT_WEIGHT_INCREMENT, gt=0)
    is_custom: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlanDayExercise(BaseModel):
    """An exercise prescription on a plan day."""

    id: str
    plan_day_id: str
    exercise_id: str
    sets: int = Field(ge=1, description="Base working sets")
    reps: int = Field(ge=1, description="Base reps per set")
    weight: float = Field(ge=0, description="Base working weight")
    min_reps: int = Field(default=DEFAULT_MIN_REPS, ge=1)
    max_reps: int = Field(default=DEFAULT_MAX_REPS, ge=1)
    weight_increment: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-plan override of the exercise's weight increment",
    )
    rest_seconds: int = Field(default=90, ge=0)
    sort_order: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_rep_range(self) -> "PlanDayExercise":
        """Ensure the rep range is ordered."""
        if self.min_reps > self.max_reps:
            raise ValueError(
                f"min_reps ({self.min_reps}) cannot exceed max_reps ({self.max_reps})"
            )
        return self


class PlanDay(BaseModel):
    """A training day within a plan."""

    id: str
    plan_id: str
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday, 6=Saturday")
    name: str
    sort_order: int = Field(default=0, ge=0)


class TrainingPlan(BaseModel):
    """A reusable training plan template."""

    id: str
    name: str
    duration_weeks: int = Field(default=6, ge=1)
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExerciseProgression(BaseModel):
    """
    Calculation view of a plan exercise.

    Flattens the plan prescription and the catalog exercise into the
    values the progression calculators need.
    """

    exercise_id: str
    plan_exercise_id: str
    base_weight: float = Field(ge=0)
    base_reps: int = Field(ge=1)
    base_sets: int = Field(ge=1)
    weight_increment: float = Field(gt=0)
    min_reps: int = Field(default=DEFAULT_MIN_REPS, ge=1)
    max_reps: int = Field(default=DEFAULT_MAX_REPS, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_rep_range(self) -> "ExerciseProgression":
        """Ensure the rep range is ordered."""
        if self.min_reps > self.max_reps:
            raise ValueError(
                f"min_reps ({self.min_reps}) cannot exceed max_reps ({self.max_reps})"
            )
        return self

    @classmethod
    def from_plan_exercise(
        cls,
        plan_exercise: PlanDayExercise,
        exercise: Exercise,
    ) -> "ExerciseProgression":
        """
        Build the calculation view for a plan exercise.

        The plan's weight increment wins over the catalog default.
        """
        increment = plan_exercise.weight_increment or exercise.weight_increment
        return cls(
            exercise_id=exercise.id,
            plan_exercise_id=plan_exercise.id,
            base_weight=plan_exercise.weight,
            base_reps=plan_exercise.reps,
            base_sets=plan_exercise.sets,
            weight_increment=increment,
            min_reps=plan_exercise.min_reps,
            max_reps=plan_exercise.max_reps,
        )


class PlanDayBlueprint(BaseModel):
    """A plan day with every exercise resolved, ready for generation."""

    day: PlanDay
    exercises: List[ExerciseProgression] = []


class PlanBlueprint(BaseModel):
    """A fully validated plan: every day and exercise reference resolved."""

    plan: TrainingPlan
    days: List[PlanDayBlueprint] = []
