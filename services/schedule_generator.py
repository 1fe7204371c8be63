"""
Schedule generation for a mesocycle.

Part of AMA-512: Mesocycle generation engine

Expands a plan into one Workout per (schedule week, plan day) and one
WorkoutSet per prescribed set:

1. Plan loading - resolve and validate every day and exercise reference
2. Workout creation - one row per week and plan day, created individually
3. Set materialization - every set row for the block in batched writes

Loading validates everything before the first write, so a broken plan
never leaves partial rows behind.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from application.exceptions import (
    MesocycleEngineError,
    NotFoundError,
    PersistenceError,
    PlanConfigurationError,
)
from application.ports import PlanRepository, WorkoutRepository, WorkoutSetRepository
from core.constants import (
    DELOAD_SCHEDULE_WEEK,
    FIRST_SCHEDULE_WEEK,
    MAX_SET_BATCH_SIZE,
    to_progression_week,
)
from models.mesocycle import Mesocycle, Workout, WorkoutSetStatus, WorkoutStatus
from models.plan import (
    Exercise,
    ExerciseProgression,
    PlanBlueprint,
    PlanDay,
    PlanDayBlueprint,
    PlanDayExercise,
    TrainingPlan,
)
from services.progression import ProgressionService

logger = logging.getLogger(__name__)


def scheduled_date_for(start_date: date, day_of_week: int, week_number: int) -> date:
    """
    Date of a plan day in a given schedule week.

    The first occurrence of day_of_week on or after start_date is week 1;
    later weeks are whole weeks after it.

    Args:
        start_date: Mesocycle start date
        day_of_week: 0=Sunday .. 6=Saturday
        week_number: Schedule week (1..7)

    Returns:
        The scheduled date
    """
    # date.weekday() is Monday=0; plan days are Sunday=0
    start_day = (start_date.weekday() + 1) % 7
    offset = (day_of_week - start_day) % 7
    return start_date + timedelta(days=offset + (week_number - FIRST_SCHEDULE_WEEK) * 7)


@dataclass
class GeneratedSchedule:
    """Workouts created for a mesocycle and the set rows still to write."""

    workouts: List[Workout] = field(default_factory=list)
    set_rows: List[Dict] = field(default_factory=list)


class ScheduleGenerator:
    """
    Service that turns a plan into scheduled workouts.

    Every exercise's targets come from the static progression ladder,
    resolved as if all earlier weeks were completed.
    """

    def __init__(
        self,
        plan_repo: PlanRepository,
        workout_repo: WorkoutRepository,
        progression: Optional[ProgressionService] = None,
    ):
        """
        Initialize the schedule generator.

        Args:
            plan_repo: Repository for plan templates and exercises
            workout_repo: Repository for workout persistence
            progression: Static ladder calculator
        """
        self._plan_repo = plan_repo
        self._workout_repo = workout_repo
        self._progression = progression or ProgressionService()

    def load_plan(self, plan_id: str) -> PlanBlueprint:
        """
        Load a plan with every exercise reference resolved.

        Args:
            plan_id: The plan's ID

        Returns:
            Validated plan blueprint

        Raises:
            NotFoundError: If the plan or any referenced exercise is missing
            PlanConfigurationError: If the plan has no workout days
        """
        plan_row = self._plan_repo.get_by_id(plan_id)
        if not plan_row:
            raise NotFoundError("Plan", plan_id)
        plan = TrainingPlan.model_validate(plan_row)

        days = [PlanDay.model_validate(row) for row in self._plan_repo.get_days(plan_id)]
        if not days:
            raise PlanConfigurationError(f"Plan {plan_id} has no workout days")
        days.sort(key=lambda d: (d.day_of_week, d.sort_order))

        exercise_cache: Dict[str, Exercise] = {}
        day_blueprints = []
        for day in days:
            plan_exercises = sorted(
                (
                    PlanDayExercise.model_validate(row)
                    for row in self._plan_repo.get_day_exercises(day.id)
                ),
                key=lambda e: e.sort_order,
            )
            progressions = []
            for plan_exercise in plan_exercises:
                exercise = self._resolve_exercise(plan_exercise.exercise_id, exercise_cache)
                progressions.append(
                    ExerciseProgression.from_plan_exercise(plan_exercise, exercise)
                )
            day_blueprints.append(PlanDayBlueprint(day=day, exercises=progressions))

        return PlanBlueprint(plan=plan, days=day_blueprints)

    def generate(
        self,
        mesocycle: Mesocycle,
        blueprint: PlanBlueprint,
        schedule: Optional[GeneratedSchedule] = None,
    ) -> GeneratedSchedule:
        """
        Create every workout of the block and collect its set rows.

        Workouts are written here; set rows are returned for the
        SetMaterializer so they can go out in batches. Each workout is
        appended to schedule as soon as it is created, so a caller that
        passes its own schedule still knows what was written if a later
        insert fails.

        Args:
            mesocycle: The mesocycle being started
            blueprint: Validated plan from load_plan()
            schedule: Schedule to fill in (a new one if omitted)

        Returns:
            Created workouts and pending set rows

        Raises:
            PersistenceError: If a workout insert fails
        """
        if schedule is None:
            schedule = GeneratedSchedule()

        for week_number in range(FIRST_SCHEDULE_WEEK, DELOAD_SCHEDULE_WEEK + 1):
            progression_week = to_progression_week(week_number)

            for day_blueprint in blueprint.days:
                day = day_blueprint.day
                created = self._workout_repo.create(
                    {
                        "mesocycle_id": mesocycle.id,
                        "plan_day_id": day.id,
                        "week_number": week_number,
                        "scheduled_date": scheduled_date_for(
                            mesocycle.start_date, day.day_of_week, week_number
                        ).isoformat(),
                        "status": WorkoutStatus.PENDING.value,
                        "started_at": None,
                        "completed_at": None,
                    }
                )
                workout = Workout.model_validate(created)
                schedule.workouts.append(workout)

                for exercise in day_blueprint.exercises:
                    target = self._progression.calculate_targets_for_week(
                        exercise, progression_week, True
                    )
                    # Every week, deload included, carries the plan's base set count
                    for set_number in range(1, exercise.base_sets + 1):
                        schedule.set_rows.append(
                            {
                                "workout_id": workout.id,
                                "exercise_id": exercise.exercise_id,
                                "set_number": set_number,
                                "target_reps": target.target_reps,
                                "target_weight": target.target_weight,
                                "actual_reps": None,
                                "actual_weight": None,
                                "status": WorkoutSetStatus.PENDING.value,
                            }
                        )

        logger.info(
            f"Generated {len(schedule.workouts)} workouts and "
            f"{len(schedule.set_rows)} sets for mesocycle {mesocycle.id}"
        )
        return schedule

    def _resolve_exercise(self, exercise_id: str, cache: Dict[str, Exercise]) -> Exercise:
        if exercise_id not in cache:
            row = self._plan_repo.get_exercise(exercise_id)
            if not row:
                raise NotFoundError("Exercise", exercise_id)
            cache[exercise_id] = Exercise.model_validate(row)
        return cache[exercise_id]


class SetMaterializer:
    """
    Writes generated set rows through the set repository's batch insert.

    Rows are chunked at the batch size; each chunk is all-or-nothing. A
    failed chunk is fatal and earlier chunks are not resumed.
    """

    def __init__(
        self,
        set_repo: WorkoutSetRepository,
        batch_size: int = MAX_SET_BATCH_SIZE,
    ):
        if not 1 <= batch_size <= MAX_SET_BATCH_SIZE:
            raise ValueError(
                f"Batch size must be between 1 and {MAX_SET_BATCH_SIZE}, got {batch_size}"
            )
        self._set_repo = set_repo
        self._batch_size = batch_size

    def materialize(self, rows: Sequence[Dict]) -> int:
        """
        Insert every set row.

        Args:
            rows: Set rows from ScheduleGenerator.generate()

        Returns:
            Number of rows written

        Raises:
            PersistenceError: If any batch fails
        """
        written = 0
        for start in range(0, len(rows), self._batch_size):
            chunk = list(rows[start:start + self._batch_size])
            try:
                self._set_repo.create_batch(chunk)
            except MesocycleEngineError:
                raise
            except Exception as e:
                raise PersistenceError(
                    f"Batched set write failed after {written} of {len(rows)} rows: {e}"
                ) from e
            written += len(chunk)

        logger.info(f"Materialized {written} sets in {self._batch_count(len(rows))} batch(es)")
        return written

    def _batch_count(self, total: int) -> int:
        return (total + self._batch_size - 1) // self._batch_size
