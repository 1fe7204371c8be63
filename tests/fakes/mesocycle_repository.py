"""
Fake mesocycle repository for testing.

Part of AMA-512: Mesocycle generation engine

Conditional writes run under a lock so the fake enforces the same
single-active rule the database index does.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from application.exceptions import ActiveMesocycleConflictError, PersistenceError


class FakeMesocycleRepository:
    """
    In-memory fake implementation of MesocycleRepository.

    Provides the same interface as SupabaseMesocycleRepository
    but stores data in dictionaries for fast, isolated testing.
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._mesocycles: Dict[str, Dict] = {}
        self._lock = threading.Lock()
        self._fail_on_next_activate: bool = False
        self._miss_on_next_activate: bool = False
        self._fail_on_next_update: bool = False
        self.activate_calls: List[str] = []

    # -------------------------------------------------------------------------
    # Test Helpers
    # -------------------------------------------------------------------------

    def seed(self, mesocycles: List[Dict]) -> None:
        """
        Seed the repository with test data.

        Args:
            mesocycles: List of mesocycle dictionaries to add
        """
        for mesocycle in mesocycles:
            mesocycle_id = mesocycle.get("id", str(uuid4()))
            self._mesocycles[mesocycle_id] = {
                "current_week": 1,
                "status": "pending",
                "user_id": None,
                **mesocycle,
                "id": mesocycle_id,
            }

    def reset(self) -> None:
        """Clear all stored data."""
        self._mesocycles.clear()

    def get_all(self) -> List[Dict]:
        """Get all stored mesocycles (for test verification)."""
        return list(self._mesocycles.values())

    def simulate_activation_failure(self) -> None:
        """Make the next activate() raise a PersistenceError."""
        self._fail_on_next_activate = True

    def simulate_activation_miss(self) -> None:
        """Make the next activate() find no pending row (returns None)."""
        self._miss_on_next_activate = True

    def simulate_update_failure(self) -> None:
        """Make the next update_status() match no row (returns None)."""
        self._fail_on_next_update = True

    # -------------------------------------------------------------------------
    # Repository Interface Implementation
    # -------------------------------------------------------------------------

    def get_by_id(self, mesocycle_id: str) -> Optional[Dict]:
        row = self._mesocycles.get(mesocycle_id)
        return dict(row) if row else None

    def get_active(self, user_id: Optional[str] = None) -> List[Dict]:
        return [
            dict(m) for m in self._mesocycles.values()
            if m["status"] == "active" and m.get("user_id") == user_id
        ]

    def list(self, user_id: Optional[str] = None) -> List[Dict]:
        rows = [dict(m) for m in self._mesocycles.values() if m.get("user_id") == user_id]
        return sorted(rows, key=lambda m: m.get("created_at", ""), reverse=True)

    def create(self, data: Dict) -> Dict:
        mesocycle_id = data.get("id", str(uuid4()))
        now = datetime.now(timezone.utc).isoformat()
        mesocycle = {
            **data,
            "id": mesocycle_id,
            "created_at": data.get("created_at", now),
            "updated_at": data.get("updated_at", now),
        }
        self._mesocycles[mesocycle_id] = mesocycle
        return dict(mesocycle)

    def update_status(
        self,
        mesocycle_id: str,
        expected_status: str,
        new_status: str,
    ) -> Optional[Dict]:
        with self._lock:
            if self._fail_on_next_update:
                self._fail_on_next_update = False
                return None
            return self._swap_status(mesocycle_id, expected_status, new_status)

    def activate(self, mesocycle_id: str) -> Optional[Dict]:
        with self._lock:
            self.activate_calls.append(mesocycle_id)
            if self._fail_on_next_activate:
                self._fail_on_next_activate = False
                raise PersistenceError("Simulated activation failure")
            if self._miss_on_next_activate:
                self._miss_on_next_activate = False
                return None

            row = self._mesocycles.get(mesocycle_id)
            if row is None:
                return None
            scope = row.get("user_id")
            if any(
                m["status"] == "active" and m.get("user_id") == scope
                for m in self._mesocycles.values()
                if m["id"] != mesocycle_id
            ):
                raise ActiveMesocycleConflictError(
                    "An active mesocycle already exists; complete or cancel it first"
                )
            return self._swap_status(mesocycle_id, "pending", "active")

    def _swap_status(
        self,
        mesocycle_id: str,
        expected_status: str,
        new_status: str,
    ) -> Optional[Dict]:
        row = self._mesocycles.get(mesocycle_id)
        if row is None or row["status"] != expected_status:
            return None
        row.update(
            {"status": new_status, "updated_at": datetime.now(timezone.utc).isoformat()}
        )
        return dict(row)
