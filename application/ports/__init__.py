"""
Port interfaces (Protocols) for the mesocycle engine.

Part of AMA-512: Mesocycle generation engine

This package defines the interface contracts that the infrastructure
layer must implement. Using Protocols enables:
- Clean separation of concerns
- Easy testing with in-memory fakes
- Dependency inversion (depend on abstractions, not concretions)
"""

from application.ports.mesocycle_repository import MesocycleRepository
from application.ports.plan_repository import PlanRepository
from application.ports.workout_repository import WorkoutRepository
from application.ports.workout_set_repository import WorkoutSetRepository

__all__ = [
    "MesocycleRepository",
    "PlanRepository",
    "WorkoutRepository",
    "WorkoutSetRepository",
]
