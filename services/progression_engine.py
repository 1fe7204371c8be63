"""
Progression tracking engine.

Part of AMA-513: Performance-adaptive progression

Reads what was actually logged in a mesocycle and feeds it to the
progression calculators:
- Per-week best-set summaries with failure streaks
- Per-week completion status for the static ladder
- Next-week targets from the dynamic calculator

Week numbers returned here are 0-based progression weeks.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from application.ports import WorkoutRepository, WorkoutSetRepository
from core.constants import DELOAD_PROGRESSION_WEEK, to_progression_week
from models.mesocycle import Workout, WorkoutSet, WorkoutSetStatus, WorkoutStatus
from models.plan import ExerciseProgression
from models.progression import (
    CompletedSet,
    CompletionStatus,
    DynamicProgressionResult,
    PreviousWeekPerformance,
    WeekTarget,
)
from services.dynamic_progression import DynamicProgressionService
from services.progression import ProgressionService

logger = logging.getLogger(__name__)

_FINISHED_WORKOUT_STATUSES = {WorkoutStatus.COMPLETED, WorkoutStatus.SKIPPED}


@dataclass
class WeekActivity:
    """Workouts containing an exercise in one week, and its sets there."""

    workouts: List[Workout] = field(default_factory=list)
    sets: List[WorkoutSet] = field(default_factory=list)


class ProgressionEngine:
    """
    Engine for tracking and adapting exercise progression.

    Provides the performance-driven call path that runs after workouts
    are logged, separate from initial schedule generation.
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        set_repo: WorkoutSetRepository,
        dynamic: Optional[DynamicProgressionService] = None,
        static: Optional[ProgressionService] = None,
    ):
        self._workout_repo = workout_repo
        self._set_repo = set_repo
        self._dynamic = dynamic or DynamicProgressionService()
        self._static = static or ProgressionService()

    def get_performance_history(
        self,
        mesocycle_id: str,
        exercise_id: str,
        min_reps: int,
    ) -> List[PreviousWeekPerformance]:
        """
        Summarize every week in which the exercise has completed sets.

        Args:
            mesocycle_id: The mesocycle's ID
            exercise_id: The exercise to summarize
            min_reps: Minimum reps threshold for a failed week

        Returns:
            One performance per performed week, newest first
        """
        history: List[PreviousWeekPerformance] = []
        for week_number, week in sorted(
            self._sets_by_week(mesocycle_id, exercise_id).items()
        ):
            completed = [
                CompletedSet(actual_weight=s.actual_weight, actual_reps=s.actual_reps)
                for s in week.sets
                if s.status == WorkoutSetStatus.COMPLETED
                and s.actual_weight is not None
                and s.actual_reps is not None
            ]
            prescribed = min(week.sets, key=lambda s: s.set_number)
            performance = self._dynamic.build_previous_week_performance(
                exercise_id=exercise_id,
                week_number=to_progression_week(week_number),
                target_weight=prescribed.target_weight,
                target_reps=prescribed.target_reps,
                completed_sets=completed,
                min_reps=min_reps,
                performance_history=history,
            )
            if performance is not None:
                history.insert(0, performance)
        return history

    def get_completion_history(
        self,
        mesocycle_id: str,
        exercise_id: str,
    ) -> List[CompletionStatus]:
        """
        Completion status of every finished week for an exercise.

        A week counts once every workout containing the exercise that week
        is completed or skipped; weeks still in progress are left out.

        Args:
            mesocycle_id: The mesocycle's ID
            exercise_id: The exercise to check

        Returns:
            Completion statuses ordered by week
        """
        statuses = []
        for week_number, week in sorted(
            self._sets_by_week(mesocycle_id, exercise_id).items()
        ):
            if not all(w.status in _FINISHED_WORKOUT_STATUSES for w in week.workouts):
                continue
            completed_count = sum(1 for s in week.sets if s.status == WorkoutSetStatus.COMPLETED)
            statuses.append(
                CompletionStatus(
                    exercise_id=exercise_id,
                    week_number=to_progression_week(week_number),
                    all_sets_completed=completed_count == len(week.sets),
                    completed_sets=completed_count,
                    prescribed_sets=len(week.sets),
                )
            )
        return statuses

    def get_adjusted_ladder(
        self,
        mesocycle_id: str,
        exercise: ExerciseProgression,
    ) -> List[WeekTarget]:
        """Static ladder recomputed with the weeks actually completed."""
        completion = self.get_completion_history(mesocycle_id, exercise.exercise_id)
        return self._static.calculate_progression_history(exercise, completion)

    def suggest_next_week(
        self,
        mesocycle_id: str,
        exercise: ExerciseProgression,
    ) -> DynamicProgressionResult:
        """
        Next-week targets from the latest performed week.

        The week after the latest performed week is a deload when it is
        the last week of the block.

        Args:
            mesocycle_id: The mesocycle's ID
            exercise: Exercise configuration with rep range

        Returns:
            Dynamic progression result
        """
        history = self.get_performance_history(
            mesocycle_id, exercise.exercise_id, exercise.min_reps
        )
        latest = history[0] if history else None
        is_deload_week = (
            latest is not None and latest.week_number + 1 == DELOAD_PROGRESSION_WEEK
        )

        result = self._dynamic.calculate_next_week_targets(exercise, latest, is_deload_week)
        logger.info(
            f"Next-week target for exercise {exercise.exercise_id} in mesocycle "
            f"{mesocycle_id}: {result.target_weight} x {result.target_reps} "
            f"({result.reason.value})"
        )
        return result

    def _sets_by_week(
        self,
        mesocycle_id: str,
        exercise_id: str,
    ) -> Dict[int, WeekActivity]:
        """Group an exercise's workouts and sets by schedule week."""
        workouts = [
            Workout.model_validate(row)
            for row in self._workout_repo.get_by_mesocycle(mesocycle_id)
        ]
        if not workouts:
            return {}
        workouts_by_id = {w.id: w for w in workouts}

        grouped: Dict[int, WeekActivity] = defaultdict(WeekActivity)
        for row in self._set_repo.get_by_workout_ids(list(workouts_by_id)):
            workout_set = WorkoutSet.model_validate(row)
            if workout_set.exercise_id != exercise_id:
                continue
            workout = workouts_by_id[workout_set.workout_id]
            week = grouped[workout.week_number]
            if workout not in week.workouts:
                week.workouts.append(workout)
            week.sets.append(workout_set)
        return dict(grouped)
