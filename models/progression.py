"""
Value objects produced and consumed by the progression calculators.

Part of AMA-512: Mesocycle generation engine

Week numbers in this module are 0-based progression weeks (0..6).
"""

from enum import Enum

from pydantic import BaseModel, Field


class ProgressionReason(str, Enum):
    """Why the dynamic calculator chose its next-week target."""

    FIRST_WEEK = "first_week"  # No previous data, base values
    DELOAD = "deload"  # Recovery week
    HIT_MAX_REPS = "hit_max_reps"  # Top of the rep range, add weight
    HIT_TARGET = "hit_target"  # Met target, add a rep
    HOLD = "hold"  # Missed target, repeat
    REGRESS = "regress"  # Repeated failures at this weight, drop weight


class WeekTarget(BaseModel):
    """Static ladder target for one exercise in one progression week."""

    exercise_id: str
    plan_exercise_id: str
    week_number: int = Field(ge=0)
    target_weight: float
    target_reps: int = Field(ge=1)
    target_sets: int = Field(ge=1)
    is_deload: bool = False

    model_config = {"frozen": True}


class DynamicProgressionResult(BaseModel):
    """Next-week target computed from actual performance."""

    target_weight: float
    target_reps: int = Field(ge=1)
    target_sets: int = Field(ge=1)
    is_deload: bool = False
    reason: ProgressionReason

    model_config = {"frozen": True}


class CompletedSet(BaseModel):
    """Actual weight and reps of one completed set."""

    actual_weight: float = Field(ge=0)
    actual_reps: int = Field(ge=0)

    model_config = {"frozen": True}


class PreviousWeekPerformance(BaseModel):
    """Best-effort summary of one exercise in one past week."""

    exercise_id: str
    week_number: int = Field(ge=0)
    target_weight: float
    target_reps: int
    actual_weight: float
    actual_reps: int
    hit_target: bool
    consecutive_failures: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class CompletionStatus(BaseModel):
    """Whether every prescribed set of an exercise was done in a week."""

    exercise_id: str
    week_number: int = Field(ge=0)
    all_sets_completed: bool
    completed_sets: int = Field(ge=0)
    prescribed_sets: int = Field(ge=0)

    model_config = {"frozen": True}
