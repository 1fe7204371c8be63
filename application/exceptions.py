"""
Application-layer exceptions.

Part of AMA-512: Mesocycle generation engine

These exceptions are used across application and infrastructure layers.
Every failure is raised synchronously to the caller; nothing here is
retried internally.
"""


class MesocycleEngineError(Exception):
    """Base class for all mesocycle engine errors."""

    pass


class NotFoundError(MesocycleEngineError):
    """A plan, mesocycle, workout or exercise does not exist."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id {resource_id} not found")


class PlanConfigurationError(MesocycleEngineError):
    """The plan cannot be turned into a schedule (e.g. it has no workout days)."""

    pass


class InvalidStateError(MesocycleEngineError):
    """A lifecycle transition was attempted from the wrong status."""

    pass


class ActiveMesocycleConflictError(MesocycleEngineError):
    """Another mesocycle in the same scope is already active."""

    pass


class PersistenceError(MesocycleEngineError):
    """Error writing to the backing store.

    Raised when an insert, update or batched write fails. This could be
    due to database errors, constraint violations, or RPC failures.
    """

    pass


class MesocycleStartError(PersistenceError):
    """The mesocycle could not be switched to active after generation."""

    def __init__(self, mesocycle_id: str, detail: str = ""):
        self.mesocycle_id = mesocycle_id
        message = f"Failed to start mesocycle with id {mesocycle_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
