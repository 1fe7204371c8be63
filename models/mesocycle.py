"""
Domain models for mesocycles and the workouts generated from them.

Part of AMA-512: Mesocycle generation engine

week_number and current_week on these models are 1-based schedule weeks
(1..7). See core.constants for the mapping to progression weeks.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import DELOAD_SCHEDULE_WEEK, FIRST_SCHEDULE_WEEK


class MesocycleStatus(str, Enum):
    """Mesocycle lifecycle status."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkoutStatus(str, Enum):
    """Scheduled workout status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class WorkoutSetStatus(str, Enum):
    """Individual set status."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class Mesocycle(BaseModel):
    """A training block generated from a plan."""

    id: str
    plan_id: str
    user_id: Optional[str] = None
    start_date: date
    current_week: int = Field(
        default=FIRST_SCHEDULE_WEEK, ge=FIRST_SCHEDULE_WEEK, le=DELOAD_SCHEDULE_WEEK
    )
    status: MesocycleStatus = MesocycleStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Workout(BaseModel):
    """One scheduled session: a plan day in a given week."""

    id: str
    mesocycle_id: str
    plan_day_id: str
    week_number: int = Field(ge=FIRST_SCHEDULE_WEEK, le=DELOAD_SCHEDULE_WEEK)
    scheduled_date: date
    status: WorkoutStatus = WorkoutStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class WorkoutSet(BaseModel):
    """A single prescribed set, with actuals once logged."""

    id: str
    workout_id: str
    exercise_id: str
    set_number: int = Field(ge=1)
    target_reps: int = Field(ge=1)
    target_weight: float = Field(ge=0)
    actual_reps: Optional[int] = Field(default=None, ge=0)
    actual_weight: Optional[float] = Field(default=None, ge=0)
    status: WorkoutSetStatus = WorkoutSetStatus.PENDING


# =============================================================================
# Read Views (computed on read, never persisted)
# =============================================================================


class WorkoutSummary(BaseModel):
    """Workout row with set counts for the week view."""

    id: str
    plan_day_id: str
    plan_day_name: str
    day_of_week: int = Field(ge=0, le=6)
    week_number: int
    scheduled_date: date
    status: WorkoutStatus
    completed_at: Optional[datetime] = None
    exercise_count: int = 0
    set_count: int = 0
    completed_set_count: int = 0


class WeekSummary(BaseModel):
    """All workouts of one schedule week."""

    week_number: int
    is_deload: bool = False
    workouts: List[WorkoutSummary] = []
    total_workouts: int = 0
    completed_workouts: int = 0
    skipped_workouts: int = 0


class MesocycleWithDetails(BaseModel):
    """Mesocycle detail view with per-week summaries."""

    id: str
    plan_id: str
    user_id: Optional[str] = None
    status: MesocycleStatus
    current_week: int
    start_date: date
    plan_name: str
    weeks: List[WeekSummary] = []
    total_workouts: int = 0
    completed_workouts: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
