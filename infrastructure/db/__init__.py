"""
Database infrastructure package.

Part of AMA-512: Mesocycle generation engine
"""

from infrastructure.db.mesocycle_repository import SupabaseMesocycleRepository
from infrastructure.db.plan_repository import SupabasePlanRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository
from infrastructure.db.workout_set_repository import SupabaseWorkoutSetRepository

__all__ = [
    "SupabaseMesocycleRepository",
    "SupabasePlanRepository",
    "SupabaseWorkoutRepository",
    "SupabaseWorkoutSetRepository",
]
