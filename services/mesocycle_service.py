"""
Mesocycle lifecycle management.

Part of AMA-512: Mesocycle generation engine

State machine:

    pending --start--> active --complete--> completed
                              --cancel----> cancelled

start() generates the whole block (workouts and sets) and then flips the
mesocycle to active with one conditional write. Generated rows are never
deleted by complete() or cancel(). A failed start() removes only the rows
it wrote itself, so a retry regenerates from scratch and a concurrent
start of the same mesocycle keeps its rows.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from application.exceptions import (
    ActiveMesocycleConflictError,
    InvalidStateError,
    MesocycleEngineError,
    MesocycleStartError,
    NotFoundError,
    PersistenceError,
    PlanConfigurationError,
)
from application.ports import (
    MesocycleRepository,
    PlanRepository,
    WorkoutRepository,
    WorkoutSetRepository,
)
from core.constants import DELOAD_SCHEDULE_WEEK, FIRST_SCHEDULE_WEEK
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
from models.plan import PlanDay
from services.schedule_generator import (
    GeneratedSchedule,
    ScheduleGenerator,
    SetMaterializer,
)

logger = logging.getLogger(__name__)


class MesocycleService:
    """
    Service for the mesocycle lifecycle.

    Build one instance at startup with its repositories and pass it to
    callers; it holds no per-request state.
    """

    def __init__(
        self,
        mesocycle_repo: MesocycleRepository,
        plan_repo: PlanRepository,
        workout_repo: WorkoutRepository,
        set_repo: WorkoutSetRepository,
        schedule_generator: Optional[ScheduleGenerator] = None,
        set_materializer: Optional[SetMaterializer] = None,
    ):
        """
        Initialize the mesocycle service.

        Args:
            mesocycle_repo: Repository for mesocycle persistence
            plan_repo: Repository for plan templates
            workout_repo: Repository for workouts
            set_repo: Repository for workout sets
            schedule_generator: Generator for workouts (built from repos if omitted)
            set_materializer: Batched set writer (built from set_repo if omitted)
        """
        self._mesocycle_repo = mesocycle_repo
        self._plan_repo = plan_repo
        self._workout_repo = workout_repo
        self._set_repo = set_repo
        self._generator = schedule_generator or ScheduleGenerator(plan_repo, workout_repo)
        self._materializer = set_materializer or SetMaterializer(set_repo)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def create(
        self,
        plan_id: str,
        start_date: date,
        user_id: Optional[str] = None,
    ) -> Mesocycle:
        """
        Create a pending mesocycle for a plan.

        Args:
            plan_id: The plan to generate from
            start_date: First day of the block
            user_id: Scope owner

        Returns:
            The created mesocycle (status pending, week 1)

        Raises:
            NotFoundError: If the plan does not exist
            PlanConfigurationError: If the plan has no workout days
        """
        if not self._plan_repo.get_by_id(plan_id):
            raise NotFoundError("Plan", plan_id)
        if not self._plan_repo.get_days(plan_id):
            raise PlanConfigurationError(f"Plan {plan_id} has no workout days")

        created = self._mesocycle_repo.create(
            {
                "plan_id": plan_id,
                "user_id": user_id,
                "start_date": start_date.isoformat(),
                "current_week": FIRST_SCHEDULE_WEEK,
                "status": MesocycleStatus.PENDING.value,
            }
        )
        mesocycle = Mesocycle.model_validate(created)
        logger.info(f"Created mesocycle {mesocycle.id} for plan {plan_id}")
        return mesocycle

    def start(self, mesocycle_id: str) -> Mesocycle:
        """
        Generate the full schedule and activate the mesocycle.

        The plan is validated before any write. After workouts and sets are
        written, activation is one conditional write that also enforces the
        single-active-mesocycle rule. Any failure after the first write
        removes the generated rows and leaves the mesocycle pending.

        Args:
            mesocycle_id: The mesocycle's ID

        Returns:
            The active mesocycle

        Raises:
            NotFoundError: If the mesocycle, plan or an exercise is missing
            InvalidStateError: If the mesocycle is not pending
            ActiveMesocycleConflictError: If another mesocycle is active in scope
            PlanConfigurationError: If the plan has no workout days
            PersistenceError: If generating workouts or sets fails
            MesocycleStartError: If the final status update fails
        """
        mesocycle = self._get_mesocycle(mesocycle_id)
        if mesocycle.status != MesocycleStatus.PENDING:
            logger.warning(
                f"Refusing to start mesocycle {mesocycle_id} in status {mesocycle.status.value}"
            )
            raise InvalidStateError(
                f"Only pending mesocycles can be started; "
                f"mesocycle {mesocycle_id} is {mesocycle.status.value}"
            )

        # Fast path; the authoritative check is the conditional activate() below
        if self._mesocycle_repo.get_active(mesocycle.user_id):
            raise ActiveMesocycleConflictError(
                "An active mesocycle already exists; complete or cancel it first"
            )

        blueprint = self._generator.load_plan(mesocycle.plan_id)

        # Filled in as rows are written, so rollback only touches this call's rows
        schedule = GeneratedSchedule()
        try:
            self._generator.generate(mesocycle, blueprint, schedule)
            self._materializer.materialize(schedule.set_rows)
        except MesocycleEngineError:
            self._rollback_generation(mesocycle_id, schedule)
            raise
        except Exception as e:
            self._rollback_generation(mesocycle_id, schedule)
            raise PersistenceError(f"Schedule generation failed: {e}") from e

        try:
            activated = self._mesocycle_repo.activate(mesocycle_id)
        except ActiveMesocycleConflictError:
            self._rollback_generation(mesocycle_id, schedule)
            raise
        except Exception as e:
            logger.error(f"Activation of mesocycle {mesocycle_id} failed: {e}")
            self._rollback_generation(mesocycle_id, schedule)
            raise MesocycleStartError(mesocycle_id, str(e)) from e

        if activated is None:
            self._rollback_generation(mesocycle_id, schedule)
            raise MesocycleStartError(mesocycle_id, "mesocycle is no longer pending")

        logger.info(
            f"Started mesocycle {mesocycle_id}: {len(schedule.workouts)} workouts, "
            f"{len(schedule.set_rows)} sets"
        )
        return Mesocycle.model_validate(activated)

    def complete(self, mesocycle_id: str) -> Mesocycle:
        """
        Mark an active mesocycle as completed.

        Raises:
            NotFoundError: If the mesocycle does not exist
            InvalidStateError: If the mesocycle is not active
            PersistenceError: If the status update fails
        """
        return self._finish(mesocycle_id, MesocycleStatus.COMPLETED)

    def cancel(self, mesocycle_id: str) -> Mesocycle:
        """
        Cancel an active mesocycle, keeping its workouts for history.

        Raises:
            NotFoundError: If the mesocycle does not exist
            InvalidStateError: If the mesocycle is not active
            PersistenceError: If the status update fails
        """
        return self._finish(mesocycle_id, MesocycleStatus.CANCELLED)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, user_id: Optional[str] = None) -> List[Mesocycle]:
        """Get all mesocycles in a scope, newest first."""
        return [Mesocycle.model_validate(row) for row in self._mesocycle_repo.list(user_id)]

    def get_active(self, user_id: Optional[str] = None) -> Optional[MesocycleWithDetails]:
        """
        Get the active mesocycle of a scope with week summaries.

        Returns:
            Detail view, or None if nothing is active
        """
        rows = self._mesocycle_repo.get_active(user_id)
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(
                f"Found {len(rows)} active mesocycles for scope {user_id!r}; using the first"
            )
        return self._build_details(Mesocycle.model_validate(rows[0]))

    def get_by_id(self, mesocycle_id: str) -> Optional[MesocycleWithDetails]:
        """
        Get a mesocycle with week summaries.

        Returns:
            Detail view, or None if the mesocycle does not exist
        """
        row = self._mesocycle_repo.get_by_id(mesocycle_id)
        if not row:
            return None
        return self._build_details(Mesocycle.model_validate(row))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _get_mesocycle(self, mesocycle_id: str) -> Mesocycle:
        row = self._mesocycle_repo.get_by_id(mesocycle_id)
        if not row:
            raise NotFoundError("Mesocycle", mesocycle_id)
        return Mesocycle.model_validate(row)

    def _finish(self, mesocycle_id: str, new_status: MesocycleStatus) -> Mesocycle:
        mesocycle = self._get_mesocycle(mesocycle_id)
        if mesocycle.status != MesocycleStatus.ACTIVE:
            logger.warning(
                f"Refusing to mark mesocycle {mesocycle_id} {new_status.value}: "
                f"status is {mesocycle.status.value}"
            )
            raise InvalidStateError(
                f"Only active mesocycles can be {new_status.value}; "
                f"mesocycle {mesocycle_id} is {mesocycle.status.value}"
            )

        updated = self._mesocycle_repo.update_status(
            mesocycle_id, MesocycleStatus.ACTIVE.value, new_status.value
        )
        if updated is None:
            raise PersistenceError(
                f"Failed to mark mesocycle with id {mesocycle_id} {new_status.value}"
            )

        logger.info(f"Mesocycle {mesocycle_id} is now {new_status.value}")
        return Mesocycle.model_validate(updated)

    def _rollback_generation(self, mesocycle_id: str, schedule: GeneratedSchedule) -> None:
        """
        Remove the rows written by this start() call; the caller re-raises.

        Only the workouts in schedule are touched. Rows written by another
        start() of the same mesocycle stay, so a concurrent start that won
        activation keeps its schedule.
        """
        workout_ids = [w.id for w in schedule.workouts]
        if not workout_ids:
            return
        try:
            self._set_repo.delete_by_workout_ids(workout_ids)
            deleted = self._workout_repo.delete_by_ids(workout_ids)
        except Exception:
            logger.exception(
                f"Rollback failed for mesocycle {mesocycle_id}; "
                f"remove workouts {workout_ids} and their sets before retrying start"
            )
            return
        logger.warning(f"Rolled back {deleted} generated workouts for mesocycle {mesocycle_id}")

    def _build_details(self, mesocycle: Mesocycle) -> MesocycleWithDetails:
        plan_row = self._plan_repo.get_by_id(mesocycle.plan_id)
        plan_name = plan_row.get("name", "Unknown Plan") if plan_row else "Unknown Plan"
        days: Dict[str, PlanDay] = {
            row["id"]: PlanDay.model_validate(row)
            for row in self._plan_repo.get_days(mesocycle.plan_id)
        }

        workouts = [
            Workout.model_validate(row)
            for row in self._workout_repo.get_by_mesocycle(mesocycle.id)
        ]
        sets_by_workout: Dict[str, List[WorkoutSet]] = defaultdict(list)
        if workouts:
            for row in self._set_repo.get_by_workout_ids([w.id for w in workouts]):
                workout_set = WorkoutSet.model_validate(row)
                sets_by_workout[workout_set.workout_id].append(workout_set)

        summaries_by_week: Dict[int, List[WorkoutSummary]] = defaultdict(list)
        for workout in workouts:
            summaries_by_week[workout.week_number].append(
                self._summarize_workout(workout, days.get(workout.plan_day_id), sets_by_workout[workout.id])
            )

        weeks = []
        for week_number in range(FIRST_SCHEDULE_WEEK, DELOAD_SCHEDULE_WEEK + 1):
            summaries = sorted(summaries_by_week[week_number], key=lambda s: s.scheduled_date)
            weeks.append(
                WeekSummary(
                    week_number=week_number,
                    is_deload=week_number == DELOAD_SCHEDULE_WEEK,
                    workouts=summaries,
                    total_workouts=len(summaries),
                    completed_workouts=sum(
                        1 for s in summaries if s.status == WorkoutStatus.COMPLETED
                    ),
                    skipped_workouts=sum(
                        1 for s in summaries if s.status == WorkoutStatus.SKIPPED
                    ),
                )
            )

        return MesocycleWithDetails(
            id=mesocycle.id,
            plan_id=mesocycle.plan_id,
            user_id=mesocycle.user_id,
            status=mesocycle.status,
            current_week=mesocycle.current_week,
            start_date=mesocycle.start_date,
            plan_name=plan_name,
            weeks=weeks,
            total_workouts=len(workouts),
            completed_workouts=sum(1 for w in workouts if w.status == WorkoutStatus.COMPLETED),
            created_at=mesocycle.created_at,
            updated_at=mesocycle.updated_at,
        )

    def _summarize_workout(
        self,
        workout: Workout,
        day: Optional[PlanDay],
        sets: List[WorkoutSet],
    ) -> WorkoutSummary:
        return WorkoutSummary(
            id=workout.id,
            plan_day_id=workout.plan_day_id,
            plan_day_name=day.name if day else "Unknown Day",
            day_of_week=day.day_of_week if day else (workout.scheduled_date.weekday() + 1) % 7,
            week_number=workout.week_number,
            scheduled_date=workout.scheduled_date,
            status=workout.status,
            completed_at=workout.completed_at,
            exercise_count=len({s.exercise_id for s in sets}),
            set_count=len(sets),
            completed_set_count=sum(1 for s in sets if s.status == WorkoutSetStatus.COMPLETED),
        )
