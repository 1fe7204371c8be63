"""
Workout repository port (interface).

Part of AMA-512: Mesocycle generation engine

Workouts are created one at a time so that their IDs can key the
batched set insert that follows.
"""

from typing import Dict, List, Protocol, Sequence


class WorkoutRepository(Protocol):
    """Repository interface for scheduled workouts."""

    def get_by_mesocycle(self, mesocycle_id: str) -> List[Dict]:
        """
        Get all workouts of a mesocycle.

        Args:
            mesocycle_id: The mesocycle's ID

        Returns:
            List of workout dictionaries ordered by week_number, scheduled_date
        """
        ...

    def create(self, data: Dict) -> Dict:
        """
        Create a new workout.

        Args:
            data: Workout data dictionary

        Returns:
            Created workout dictionary with generated ID

        Raises:
            PersistenceError: If the insert fails
        """
        ...

    def delete_by_ids(self, workout_ids: Sequence[str]) -> int:
        """
        Delete the given workouts.

        Only used to roll back a failed generation. Delete the workouts'
        sets first; this does not remove them.

        Args:
            workout_ids: IDs of the workouts to delete

        Returns:
            Number of workouts deleted

        Raises:
            PersistenceError: If the delete fails
        """
        ...
