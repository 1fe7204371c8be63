"""
Composition root for the mesocycle engine.

Part of AMA-512: Mesocycle generation engine

Builds the services once, explicitly, from settings. Callers (request
handlers, jobs, tests) receive the built objects instead of reaching for
a global instance.

Usage:
    from backend.main import create_mesocycle_service
    from backend.settings import Settings

    # Default (uses get_settings() and a Supabase client)
    engine = create_mesocycle_service()
    engine.mesocycles.start(mesocycle_id)

    # Tests: inject repositories directly
    engine = build_engine(settings, plan_repo=..., mesocycle_repo=..., ...)
"""

import logging
from dataclasses import dataclass
from typing import Optional

import sentry_sdk
from supabase import Client, create_client

from application.ports import (
    MesocycleRepository,
    PlanRepository,
    WorkoutRepository,
    WorkoutSetRepository,
)
from backend.settings import Settings, get_settings
from infrastructure.db import (
    SupabaseMesocycleRepository,
    SupabasePlanRepository,
    SupabaseWorkoutRepository,
    SupabaseWorkoutSetRepository,
)
from services.dynamic_progression import DynamicProgressionService
from services.mesocycle_service import MesocycleService
from services.progression import ProgressionService
from services.progression_engine import ProgressionEngine
from services.schedule_generator import ScheduleGenerator, SetMaterializer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass
class MesocycleEngine:
    """The wired services, built once per process."""

    settings: Settings
    mesocycles: MesocycleService
    progression: ProgressionEngine


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts and workers."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def build_engine(
    settings: Settings,
    plan_repo: PlanRepository,
    mesocycle_repo: MesocycleRepository,
    workout_repo: WorkoutRepository,
    set_repo: WorkoutSetRepository,
) -> MesocycleEngine:
    """
    Wire services from already-built repositories.

    Args:
        settings: Application settings
        plan_repo: Plan template repository
        mesocycle_repo: Mesocycle repository
        workout_repo: Workout repository
        set_repo: Workout set repository

    Returns:
        The wired engine
    """
    static = ProgressionService()
    dynamic = DynamicProgressionService()

    mesocycles = MesocycleService(
        mesocycle_repo=mesocycle_repo,
        plan_repo=plan_repo,
        workout_repo=workout_repo,
        set_repo=set_repo,
        schedule_generator=ScheduleGenerator(plan_repo, workout_repo, progression=static),
        set_materializer=SetMaterializer(set_repo, batch_size=settings.set_batch_size),
    )
    progression = ProgressionEngine(workout_repo, set_repo, dynamic=dynamic, static=static)

    return MesocycleEngine(settings=settings, mesocycles=mesocycles, progression=progression)


def create_mesocycle_service(
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
) -> MesocycleEngine:
    """
    Build the engine on top of Supabase.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        client: Optional Supabase client. Created from settings if omitted.

    Returns:
        The wired engine

    Raises:
        RuntimeError: If no client is given and Supabase is not configured
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)
    _init_sentry(settings)

    if client is None:
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("Supabase credentials not configured")
        client = create_client(settings.supabase_url, settings.supabase_key)

    engine = build_engine(
        settings,
        plan_repo=SupabasePlanRepository(client),
        mesocycle_repo=SupabaseMesocycleRepository(client),
        workout_repo=SupabaseWorkoutRepository(client),
        set_repo=SupabaseWorkoutSetRepository(client),
    )
    logger.info(f"Mesocycle engine ready (environment={settings.environment})")
    return engine


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for mesocycle engine")
