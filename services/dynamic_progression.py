"""
Dynamic progression based on actual performance.

Part of AMA-513: Performance-adaptive progression

Algorithm (8-12 rep range for hypertrophy):
- Hit max reps -> add weight, drop to min reps
- Hit target reps -> add one rep (capped at max reps)
- Missed target but >= min reps -> hold
- Below min reps -> hold at min reps, or drop one increment after two
  consecutive failures at the same weight (never below base weight)

Deload week: 85% of the last working weight, min reps, half the sets.
"""

from typing import Optional, Sequence

from core.constants import CONSECUTIVE_FAILURE_THRESHOLD
from models.plan import ExerciseProgression
from models.progression import (
    CompletedSet,
    DynamicProgressionResult,
    PreviousWeekPerformance,
    ProgressionReason,
)
from services.progression import deload_sets, deload_weight


REASON_LABELS = {
    ProgressionReason.FIRST_WEEK: "Starting at base values",
    ProgressionReason.DELOAD: "Deload week: reduced weight and volume",
    ProgressionReason.HIT_MAX_REPS: "Top of rep range reached: adding weight",
    ProgressionReason.HIT_TARGET: "Target reached: adding a rep",
    ProgressionReason.HOLD: "Target missed: repeating",
    ProgressionReason.REGRESS: "Repeated misses: reducing weight",
}

# Adding a ProgressionReason without a label fails at import time
_unlabelled = set(ProgressionReason) - set(REASON_LABELS)
if _unlabelled:
    raise RuntimeError(f"Progression reasons without a label: {sorted(_unlabelled)}")


def describe_reason(reason: ProgressionReason) -> str:
    """
    Short human label for a progression reason.

    Raises:
        ValueError: If reason is not a known ProgressionReason
    """
    try:
        return REASON_LABELS[ProgressionReason(reason)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown progression reason: {reason!r}") from e


class DynamicProgressionService:
    """
    Calculator for next-week targets from the previous week's actuals.

    Stateless; safe to share across callers.
    """

    def calculate_next_week_targets(
        self,
        exercise: ExerciseProgression,
        previous_performance: Optional[PreviousWeekPerformance],
        is_deload_week: bool,
    ) -> DynamicProgressionResult:
        """
        Calculate next week's targets.

        Args:
            exercise: Exercise configuration with rep range
            previous_performance: Last week's best set summary (None for the first week)
            is_deload_week: Whether the upcoming week is a deload week

        Returns:
            Targets for next week with the reason they were chosen
        """
        if previous_performance is None:
            return DynamicProgressionResult(
                target_weight=exercise.base_weight,
                target_reps=exercise.base_reps,
                target_sets=exercise.base_sets,
                is_deload=False,
                reason=ProgressionReason.FIRST_WEEK,
            )

        actual_weight = previous_performance.actual_weight
        actual_reps = previous_performance.actual_reps

        if is_deload_week:
            return DynamicProgressionResult(
                target_weight=deload_weight(actual_weight),
                target_reps=exercise.min_reps,
                target_sets=deload_sets(exercise.base_sets),
                is_deload=True,
                reason=ProgressionReason.DELOAD,
            )

        if actual_reps >= exercise.max_reps:
            return self._result(
                exercise,
                actual_weight + exercise.weight_increment,
                exercise.min_reps,
                ProgressionReason.HIT_MAX_REPS,
            )

        if actual_reps >= previous_performance.target_reps:
            return self._result(
                exercise,
                actual_weight,
                min(actual_reps + 1, exercise.max_reps),
                ProgressionReason.HIT_TARGET,
            )

        if actual_reps >= exercise.min_reps:
            return self._result(
                exercise,
                actual_weight,
                previous_performance.target_reps,
                ProgressionReason.HOLD,
            )

        if previous_performance.consecutive_failures >= CONSECUTIVE_FAILURE_THRESHOLD:
            return self._result(
                exercise,
                max(exercise.base_weight, actual_weight - exercise.weight_increment),
                exercise.min_reps,
                ProgressionReason.REGRESS,
            )

        return self._result(
            exercise, actual_weight, exercise.min_reps, ProgressionReason.HOLD
        )

    def calculate_consecutive_failures(
        self,
        performance_history: Sequence[PreviousWeekPerformance],
        current_weight: float,
        min_reps: int,
    ) -> int:
        """
        Count consecutive weeks that missed min reps at the current weight.

        Args:
            performance_history: Previous performances, newest first
            current_weight: The working weight to count failures at
            min_reps: Minimum reps threshold

        Returns:
            Length of the failure streak at the head of the history
        """
        failures = 0
        for performance in performance_history:
            if performance.actual_weight != current_weight:
                break
            if performance.actual_reps >= min_reps:
                break
            failures += 1
        return failures

    def build_previous_week_performance(
        self,
        exercise_id: str,
        week_number: int,
        target_weight: float,
        target_reps: int,
        completed_sets: Sequence[CompletedSet],
        min_reps: int,
        performance_history: Sequence[PreviousWeekPerformance],
    ) -> Optional[PreviousWeekPerformance]:
        """
        Summarize a week from its completed sets.

        The best set is the heaviest, then the one with most reps at that
        weight.

        Args:
            exercise_id: The exercise ID
            week_number: Progression week the sets belong to
            target_weight: Prescribed weight
            target_reps: Prescribed reps
            completed_sets: Actual weight/reps of the completed sets
            min_reps: Minimum reps threshold for a failed week
            performance_history: Earlier performances, newest first

        Returns:
            PreviousWeekPerformance, or None if no sets were completed
        """
        if not completed_sets:
            return None

        best = max(completed_sets, key=lambda s: (s.actual_weight, s.actual_reps))

        if best.actual_reps < min_reps:
            prior = self.calculate_consecutive_failures(
                performance_history, target_weight, min_reps
            )
            consecutive_failures = prior + 1
        else:
            consecutive_failures = 0

        return PreviousWeekPerformance(
            exercise_id=exercise_id,
            week_number=week_number,
            target_weight=target_weight,
            target_reps=target_reps,
            actual_weight=best.actual_weight,
            actual_reps=best.actual_reps,
            hit_target=best.actual_reps >= target_reps,
            consecutive_failures=consecutive_failures,
        )

    def _result(
        self,
        exercise: ExerciseProgression,
        weight: float,
        reps: int,
        reason: ProgressionReason,
    ) -> DynamicProgressionResult:
        return DynamicProgressionResult(
            target_weight=weight,
            target_reps=reps,
            target_sets=exercise.base_sets,
            is_deload=False,
            reason=reason,
        )
