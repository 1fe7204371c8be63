"""
Mesocycle repository port (interface).

Part of AMA-512: Mesocycle generation engine

Status changes go through conditional writes so that two callers racing
on the same mesocycle, or two mesocycles racing to become active, cannot
both win.
"""

from typing import Dict, List, Optional, Protocol


class MesocycleRepository(Protocol):
    """Repository interface for mesocycle persistence."""

    def get_by_id(self, mesocycle_id: str) -> Optional[Dict]:
        """
        Get a mesocycle by its ID.

        Args:
            mesocycle_id: The mesocycle's ID

        Returns:
            Mesocycle dictionary if found, None otherwise
        """
        ...

    def get_active(self, user_id: Optional[str] = None) -> List[Dict]:
        """
        Get active mesocycles in a scope.

        Args:
            user_id: Scope owner; None for the unscoped (single user) scope

        Returns:
            List of mesocycle dictionaries with status 'active'
        """
        ...

    def list(self, user_id: Optional[str] = None) -> List[Dict]:
        """
        Get all mesocycles in a scope, newest first.

        Args:
            user_id: Scope owner; None for the unscoped (single user) scope

        Returns:
            List of mesocycle dictionaries
        """
        ...

    def create(self, data: Dict) -> Dict:
        """
        Create a new mesocycle.

        Args:
            data: Mesocycle data dictionary

        Returns:
            Created mesocycle dictionary with generated ID

        Raises:
            PersistenceError: If the insert fails
        """
        ...

    def update_status(
        self,
        mesocycle_id: str,
        expected_status: str,
        new_status: str,
    ) -> Optional[Dict]:
        """
        Change status only if the row still has expected_status.

        Args:
            mesocycle_id: The mesocycle's ID
            expected_status: Status the row must currently have
            new_status: Status to write

        Returns:
            Updated mesocycle dictionary, or None if the row was missing
            or no longer in expected_status

        Raises:
            PersistenceError: If the update fails
        """
        ...

    def activate(self, mesocycle_id: str) -> Optional[Dict]:
        """
        Atomically move a pending mesocycle to active.

        The write succeeds only if the row is still 'pending' and no other
        mesocycle in the same scope is 'active', checked and written as
        one operation.

        Args:
            mesocycle_id: The mesocycle's ID

        Returns:
            Updated mesocycle dictionary, or None if the row was missing
            or no longer pending

        Raises:
            ActiveMesocycleConflictError: If another mesocycle in scope is active
            PersistenceError: If the update fails
        """
        ...
