"""
Pytest fixtures for mesocycle engine tests.

Part of AMA-512: Mesocycle generation engine
"""

import sys
from datetime import date
from pathlib import Path
from typing import Dict

import pytest

# Ensure the project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from backend.main import MesocycleEngine, build_engine
from backend.settings import Settings
from models.plan import ExerciseProgression
from tests.fakes import (
    FakeMesocycleRepository,
    FakePlanRepository,
    FakeWorkoutRepository,
    FakeWorkoutSetRepository,
)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TEST_USER_ID = "test-user-123"
OTHER_USER_ID = "other-user-456"

PLAN_ID = "plan-upper-lower"
BENCH_ID = "ex-bench"
ROW_ID = "ex-row"

# Wednesday
START_DATE = date(2026, 1, 7)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(
        environment="test",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
        _env_file=None,
    )


# ---------------------------------------------------------------------------
# Calculator Inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def bench_progression() -> ExerciseProgression:
    """100 x 8 x 3 with a 5 lb jump and an 8-12 rep range."""
    return ExerciseProgression(
        exercise_id=BENCH_ID,
        plan_exercise_id="pde-bench",
        base_weight=100.0,
        base_reps=8,
        base_sets=3,
        weight_increment=5.0,
        min_reps=8,
        max_reps=12,
    )


# ---------------------------------------------------------------------------
# Fake Repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def plan_repo() -> FakePlanRepository:
    return FakePlanRepository()


@pytest.fixture
def mesocycle_repo() -> FakeMesocycleRepository:
    return FakeMesocycleRepository()


@pytest.fixture
def set_repo() -> FakeWorkoutSetRepository:
    return FakeWorkoutSetRepository()


@pytest.fixture
def workout_repo() -> FakeWorkoutRepository:
    return FakeWorkoutRepository()


def seed_single_day_plan(plan_repo: FakePlanRepository, plan_id: str = PLAN_ID) -> Dict:
    """One Monday with bench press 100 x 8 x 3."""
    plan = plan_repo.seed_plan({"id": plan_id, "name": "Bench Focus"})
    day = plan_repo.seed_day(plan_id, {"id": f"{plan_id}-mon", "day_of_week": 1, "name": "Push"})
    plan_repo.seed_exercise({"id": BENCH_ID, "name": "Bench Press"})
    plan_repo.seed_day_exercise(
        day["id"],
        {"id": f"{plan_id}-pde-bench", "exercise_id": BENCH_ID, "sets": 3, "reps": 8, "weight": 100.0},
    )
    return plan


def seed_two_day_plan(plan_repo: FakePlanRepository, plan_id: str = PLAN_ID) -> Dict:
    """Monday push and Thursday pull, two exercises each with 4 sets."""
    plan = plan_repo.seed_plan({"id": plan_id, "name": "Upper/Lower"})
    plan_repo.seed_exercise({"id": BENCH_ID, "name": "Bench Press"})
    plan_repo.seed_exercise({"id": ROW_ID, "name": "Barbell Row", "weight_increment": 2.5})

    push = plan_repo.seed_day(plan_id, {"id": f"{plan_id}-mon", "day_of_week": 1, "name": "Push"})
    pull = plan_repo.seed_day(plan_id, {"id": f"{plan_id}-thu", "day_of_week": 4, "name": "Pull"})
    for day in (push, pull):
        plan_repo.seed_day_exercise(
            day["id"],
            {"id": f"{day['id']}-bench", "exercise_id": BENCH_ID, "sets": 4, "reps": 10,
             "weight": 135.0, "sort_order": 0},
        )
        plan_repo.seed_day_exercise(
            day["id"],
            {"id": f"{day['id']}-row", "exercise_id": ROW_ID, "sets": 4, "reps": 10,
             "weight": 95.0, "sort_order": 1},
        )
    return plan


@pytest.fixture
def seeded_plan(plan_repo) -> Dict:
    return seed_single_day_plan(plan_repo)


@pytest.fixture
def engine(
    test_settings,
    plan_repo,
    mesocycle_repo,
    workout_repo,
    set_repo,
) -> MesocycleEngine:
    """Engine wired to in-memory fakes."""
    return build_engine(
        test_settings,
        plan_repo=plan_repo,
        mesocycle_repo=mesocycle_repo,
        workout_repo=workout_repo,
        set_repo=set_repo,
    )


@pytest.fixture
def service(engine):
    return engine.mesocycles
