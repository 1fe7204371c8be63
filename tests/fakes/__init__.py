"""
Fake implementations for testing.

Part of AMA-512: Mesocycle generation engine

This package provides in-memory fake implementations of repository
interfaces for fast, isolated testing without database dependencies.
"""

from tests.fakes.mesocycle_repository import FakeMesocycleRepository
from tests.fakes.plan_repository import FakePlanRepository
from tests.fakes.workout_repository import FakeWorkoutRepository, FakeWorkoutSetRepository

__all__ = [
    "FakeMesocycleRepository",
    "FakePlanRepository",
    "FakeWorkoutRepository",
    "FakeWorkoutSetRepository",
]
