"""
Supabase implementation of MesocycleRepository.

Part of AMA-512: Mesocycle generation engine

The single-active-mesocycle rule is enforced by the database with a
partial unique index, so activation is one conditional UPDATE:

    create unique index mesocycles_one_active_per_user
        on mesocycles (coalesce(user_id, ''))
        where status = 'active';

A second concurrent activation fails with unique_violation (23505) and is
reported as ActiveMesocycleConflictError.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import ActiveMesocycleConflictError, PersistenceError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class SupabaseMesocycleRepository:
    """
    Supabase-backed mesocycle repository implementation.

    Queries against the mesocycles table.
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_id(self, mesocycle_id: str) -> Optional[Dict]:
        response = (
            self._client.table("mesocycles")
            .select("*")
            .eq("id", mesocycle_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_active(self, user_id: Optional[str] = None) -> List[Dict]:
        query = self._client.table("mesocycles").select("*").eq("status", "active")
        response = self._scoped(query, user_id).execute()
        return response.data

    def list(self, user_id: Optional[str] = None) -> List[Dict]:
        query = self._client.table("mesocycles").select("*")
        response = self._scoped(query, user_id).order("created_at", desc=True).execute()
        return response.data

    def create(self, data: Dict) -> Dict:
        try:
            response = self._client.table("mesocycles").insert(data).execute()
        except Exception as e:
            raise PersistenceError(f"Mesocycle insert failed: {e}") from e
        if not response.data:
            raise PersistenceError("Mesocycle insert returned no data")
        return response.data[0]

    def update_status(
        self,
        mesocycle_id: str,
        expected_status: str,
        new_status: str,
    ) -> Optional[Dict]:
        """
        Conditional status update.

        The eq("status", expected_status) filter makes the read and the
        write one statement; no matching row means the status had moved.
        """
        try:
            response = (
                self._client.table("mesocycles")
                .update({"status": new_status, "updated_at": _now()})
                .eq("id", mesocycle_id)
                .eq("status", expected_status)
                .execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                raise ActiveMesocycleConflictError(
                    "An active mesocycle already exists; complete or cancel it first"
                ) from e
            raise PersistenceError(
                f"Status update {expected_status} -> {new_status} failed "
                f"for mesocycle {mesocycle_id}: {e}"
            ) from e
        return response.data[0] if response.data else None

    def activate(self, mesocycle_id: str) -> Optional[Dict]:
        return self.update_status(mesocycle_id, "pending", "active")

    def _scoped(self, query, user_id: Optional[str]):
        if user_id is None:
            return query.is_("user_id", "null")
        return query.eq("user_id", user_id)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
