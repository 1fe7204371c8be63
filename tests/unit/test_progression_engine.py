"""
Unit tests for the progression tracking engine.

Part of AMA-513: Performance-adaptive progression
"""

import pytest

from models.progression import ProgressionReason
from tests.conftest import BENCH_ID, PLAN_ID, START_DATE


@pytest.fixture
def active_id(service, seeded_plan) -> str:
    mesocycle = service.create(PLAN_ID, START_DATE)
    return service.start(mesocycle.id).id


@pytest.fixture
def tracker(engine):
    return engine.progression


def _week(workout_repo, set_repo, mesocycle_id, week_number):
    """The week's workout row and its sets, by set number."""
    workout = next(
        w for w in workout_repo.get_by_mesocycle(mesocycle_id) if w["week_number"] == week_number
    )
    return workout, sorted(set_repo.get_by_workout(workout["id"]), key=lambda s: s["set_number"])


def _log_week(workout_repo, set_repo, mesocycle_id, week_number, performed, finish=True):
    """Log (weight, reps) per set; None skips the set."""
    workout, sets = _week(workout_repo, set_repo, mesocycle_id, week_number)
    for workout_set, actual in zip(sets, performed):
        if actual is None:
            set_repo.skip(workout_set["id"])
        else:
            set_repo.log(workout_set["id"], *actual)
    if finish:
        workout_repo.set_status(workout["id"], "completed")
    return workout, sets


@pytest.mark.unit
class TestPerformanceHistory:
    """Tests for ProgressionEngine.get_performance_history."""

    def test_empty_before_logging(self, tracker, active_id):
        assert tracker.get_performance_history(active_id, BENCH_ID, 8) == []

    def test_unknown_mesocycle(self, tracker):
        assert tracker.get_performance_history("nope", BENCH_ID, 8) == []

    def test_best_set_per_week_newest_first(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8), (100.0, 9), (100.0, 8)])
        _log_week(workout_repo, set_repo, active_id, 2, [(100.0, 10), (100.0, 9), (100.0, 9)])

        history = tracker.get_performance_history(active_id, BENCH_ID, 8)

        assert [p.week_number for p in history] == [1, 0]
        latest = history[0]
        assert latest.target_weight == 100.0
        assert latest.target_reps == 9
        assert latest.actual_reps == 10
        assert latest.hit_target is True

    def test_failure_streak_accumulates(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 6)] * 3)
        _log_week(workout_repo, set_repo, active_id, 2, [(100.0, 5)] * 3)

        history = tracker.get_performance_history(active_id, BENCH_ID, 8)

        assert [p.consecutive_failures for p in history] == [2, 1]

    def test_weeks_without_completed_sets_are_left_out(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [None, None, None])

        assert tracker.get_performance_history(active_id, BENCH_ID, 8) == []


@pytest.mark.unit
class TestCompletionHistory:
    """Tests for ProgressionEngine.get_completion_history."""

    def test_unfinished_weeks_are_left_out(self, tracker, active_id):
        assert tracker.get_completion_history(active_id, BENCH_ID) == []

    def test_all_sets_completed(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8)] * 3)

        statuses = tracker.get_completion_history(active_id, BENCH_ID)

        assert len(statuses) == 1
        assert statuses[0].week_number == 0
        assert statuses[0].all_sets_completed is True
        assert (statuses[0].completed_sets, statuses[0].prescribed_sets) == (3, 3)

    def test_skipped_set_is_incomplete(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8), (100.0, 8), None])

        status = tracker.get_completion_history(active_id, BENCH_ID)[0]

        assert status.all_sets_completed is False
        assert status.completed_sets == 2

    def test_in_progress_week_not_counted(self, tracker, active_id, workout_repo, set_repo):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8)] * 3, finish=False)
        assert tracker.get_completion_history(active_id, BENCH_ID) == []


@pytest.mark.unit
class TestAdjustedLadder:
    """Tests for ProgressionEngine.get_adjusted_ladder."""

    def test_unchanged_when_on_track(self, tracker, active_id, workout_repo, set_repo, bench_progression):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8)] * 3)

        ladder = tracker.get_adjusted_ladder(active_id, bench_progression)

        assert ladder[2].target_weight == 105.0

    def test_missed_week_holds_next(self, tracker, active_id, workout_repo, set_repo, bench_progression):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 8)] * 3)
        _log_week(workout_repo, set_repo, active_id, 2, [(100.0, 9), None, None])

        ladder = tracker.get_adjusted_ladder(active_id, bench_progression)

        assert (ladder[2].target_weight, ladder[2].target_reps) == (100.0, 9)
        assert (ladder[3].target_weight, ladder[3].target_reps) == (100.0, 10)


@pytest.mark.unit
class TestSuggestNextWeek:
    """Tests for ProgressionEngine.suggest_next_week."""

    def test_first_week(self, tracker, active_id, bench_progression):
        result = tracker.suggest_next_week(active_id, bench_progression)
        assert result.reason == ProgressionReason.FIRST_WEEK

    def test_hit_target(self, tracker, active_id, workout_repo, set_repo, bench_progression):
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 9), (100.0, 8), (100.0, 8)])

        result = tracker.suggest_next_week(active_id, bench_progression)

        assert result.reason == ProgressionReason.HIT_TARGET
        assert (result.target_weight, result.target_reps) == (100.0, 10)

    def test_regress_after_two_failed_weeks(self, tracker, active_id, workout_repo, set_repo, bench_progression):
        heavier = bench_progression.model_copy(update={"base_weight": 90.0})
        _log_week(workout_repo, set_repo, active_id, 1, [(100.0, 6)] * 3)
        _log_week(workout_repo, set_repo, active_id, 2, [(100.0, 5)] * 3)

        result = tracker.suggest_next_week(active_id, heavier)

        assert result.reason == ProgressionReason.REGRESS
        assert (result.target_weight, result.target_reps) == (95.0, 8)

    def test_deload_follows_last_working_week(self, tracker, active_id, workout_repo, set_repo, bench_progression):
        _log_week(workout_repo, set_repo, active_id, 6, [(110.0, 9)] * 3)

        result = tracker.suggest_next_week(active_id, bench_progression)

        assert result.reason == ProgressionReason.DELOAD
        assert result.is_deload is True
        assert result.target_weight == 92.5
        assert result.target_sets == 2
