"""
Workout set repository port (interface).

Part of AMA-512: Mesocycle generation engine
"""

from typing import Dict, List, Protocol, Sequence


class WorkoutSetRepository(Protocol):
    """Repository interface for workout sets."""

    def get_by_workout_ids(self, workout_ids: Sequence[str]) -> List[Dict]:
        """
        Get all sets of several workouts in one query.

        Args:
            workout_ids: Workout IDs

        Returns:
            List of set dictionaries
        """
        ...

    def create_batch(self, rows: Sequence[Dict]) -> List[Dict]:
        """
        Insert many set rows as one all-or-nothing write.

        Callers keep each batch at or under MAX_SET_BATCH_SIZE rows.

        Args:
            rows: Set data dictionaries

        Returns:
            Created set dictionaries with generated IDs

        Raises:
            PersistenceError: If any row fails; no row of the batch is kept
        """
        ...

    def delete_by_workout_ids(self, workout_ids: Sequence[str]) -> int:
        """
        Delete every set of the given workouts.

        Only used to roll back a failed generation.

        Args:
            workout_ids: IDs of the workouts whose sets to delete

        Returns:
            Number of sets deleted

        Raises:
            PersistenceError: If the delete fails
        """
        ...
