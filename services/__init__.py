"""
Services package for the mesocycle engine.

Part of AMA-512: Mesocycle generation engine
Updated in AMA-513: Added dynamic progression and progression tracking

Contains business logic services for:
- Static progression ladder (pure)
- Dynamic, performance-based progression (pure)
- Schedule generation and batched set materialization
- Mesocycle lifecycle management
- Progression tracking from logged sets
"""

from services.dynamic_progression import DynamicProgressionService, describe_reason
from services.mesocycle_service import MesocycleService
from services.progression import ProgressionService, deload_sets, deload_weight
from services.progression_engine import ProgressionEngine
from services.schedule_generator import (
    GeneratedSchedule,
    ScheduleGenerator,
    SetMaterializer,
    scheduled_date_for,
)

__all__ = [
    # Progression
    "DynamicProgressionService",
    "ProgressionService",
    "deload_sets",
    "deload_weight",
    "describe_reason",
    # Tracking
    "ProgressionEngine",
    # Generation
    "GeneratedSchedule",
    "ScheduleGenerator",
    "SetMaterializer",
    "scheduled_date_for",
    # Lifecycle
    "MesocycleService",
]
