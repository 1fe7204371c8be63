"""
Static progression ladder.

Part of AMA-512: Mesocycle generation engine

Computes the predetermined week-by-week targets for one exercise across a
7-week block (progression weeks 0..6):

- Week 0: base weight, reps and sets
- Odd weeks (1, 3, 5): +1 rep
- Even weeks (2, 4): +weight increment, reps back to base
- Week 6: deload (85% of week 5 weight, min reps, half the sets)

An incomplete week holds the next week at the same target. The calculator
is pure and keeps no state between calls.
"""

from typing import Dict, List, Sequence

from core.constants import (
    DELOAD_PROGRESSION_WEEK,
    DELOAD_VOLUME_FACTOR,
    DELOAD_WEIGHT_FACTOR,
    FIRST_PROGRESSION_WEEK,
    WEIGHT_ROUNDING_INCREMENT,
)
from core.rounding import round_half_up, round_to_increment
from models.plan import ExerciseProgression
from models.progression import CompletionStatus, WeekTarget


def deload_sets(base_sets: int) -> int:
    """Half the base volume, never fewer than one set."""
    return max(1, round_half_up(base_sets * DELOAD_VOLUME_FACTOR))


def deload_weight(working_weight: float) -> float:
    """85% of the working weight, rounded to the nearest 2.5."""
    return round_to_increment(
        working_weight * DELOAD_WEIGHT_FACTOR, WEIGHT_ROUNDING_INCREMENT
    )


class ProgressionService:
    """
    Calculator for the fixed progressive overload ladder.

    Week numbers are 0-based progression weeks.
    """

    def calculate_targets_for_week(
        self,
        exercise: ExerciseProgression,
        week_number: int,
        previous_week_completed: bool,
    ) -> WeekTarget:
        """
        Calculate targets for a single week.

        Weeks before week_number are resolved as completed; the flag only
        decides whether week_number progresses from its predecessor.

        Args:
            exercise: Exercise base values and rep range
            week_number: Progression week (0..6)
            previous_week_completed: Whether week_number - 1 was fully completed

        Returns:
            Targets for the requested week

        Raises:
            ValueError: If week_number is outside 0..6
        """
        self._validate_week(week_number)

        target = self._base_target(exercise)
        for week in range(FIRST_PROGRESSION_WEEK + 1, week_number + 1):
            completed = previous_week_completed if week == week_number else True
            target = self._next_target(exercise, target, week, completed)
        return target

    def calculate_progression_history(
        self,
        exercise: ExerciseProgression,
        completion_history: Sequence[CompletionStatus],
    ) -> List[WeekTarget]:
        """
        Calculate the full 7-week ladder given what was actually completed.

        Each week builds on the week before it as resolved, so an incomplete
        week holds every later week back by one step.

        Args:
            exercise: Exercise base values and rep range
            completion_history: Completion records; weeks without a record
                for this exercise count as completed

        Returns:
            Seven WeekTargets, weeks 0..6
        """
        completed_by_week: Dict[int, bool] = {
            status.week_number: status.all_sets_completed
            for status in completion_history
            if status.exercise_id == exercise.exercise_id
        }

        ladder = [self._base_target(exercise)]
        for week in range(FIRST_PROGRESSION_WEEK + 1, DELOAD_PROGRESSION_WEEK + 1):
            completed = completed_by_week.get(week - 1, True)
            ladder.append(self._next_target(exercise, ladder[-1], week, completed))
        return ladder

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _validate_week(self, week_number: int) -> None:
        if not FIRST_PROGRESSION_WEEK <= week_number <= DELOAD_PROGRESSION_WEEK:
            raise ValueError(
                f"Week number must be between {FIRST_PROGRESSION_WEEK} and "
                f"{DELOAD_PROGRESSION_WEEK}, got {week_number}"
            )

    def _base_target(self, exercise: ExerciseProgression) -> WeekTarget:
        return WeekTarget(
            exercise_id=exercise.exercise_id,
            plan_exercise_id=exercise.plan_exercise_id,
            week_number=FIRST_PROGRESSION_WEEK,
            target_weight=exercise.base_weight,
            target_reps=exercise.base_reps,
            target_sets=exercise.base_sets,
            is_deload=False,
        )

    def _next_target(
        self,
        exercise: ExerciseProgression,
        previous: WeekTarget,
        week_number: int,
        previous_week_completed: bool,
    ) -> WeekTarget:
        """Derive week_number's target from the resolved previous week."""
        # Deload ignores completion and is not floored at base weight
        if week_number == DELOAD_PROGRESSION_WEEK:
            return previous.model_copy(
                update={
                    "week_number": week_number,
                    "target_weight": deload_weight(previous.target_weight),
                    "target_reps": exercise.min_reps,
                    "target_sets": deload_sets(exercise.base_sets),
                    "is_deload": True,
                }
            )

        if not previous_week_completed:
            return previous.model_copy(update={"week_number": week_number})

        if week_number % 2 == 1:
            return previous.model_copy(
                update={
                    "week_number": week_number,
                    "target_reps": previous.target_reps + 1,
                }
            )

        return previous.model_copy(
            update={
                "week_number": week_number,
                "target_weight": previous.target_weight + exercise.weight_increment,
                "target_reps": exercise.base_reps,
            }
        )
