"""
Infrastructure layer package for the mesocycle engine.

Part of AMA-512: Mesocycle generation engine

This package contains concrete implementations of the port interfaces.
"""

from infrastructure.db import (
    SupabaseMesocycleRepository,
    SupabasePlanRepository,
    SupabaseWorkoutRepository,
    SupabaseWorkoutSetRepository,
)

__all__ = [
    "SupabaseMesocycleRepository",
    "SupabasePlanRepository",
    "SupabaseWorkoutRepository",
    "SupabaseWorkoutSetRepository",
]
