"""
Supabase implementation of WorkoutSetRepository.

Part of AMA-512: Mesocycle generation engine

A multi-row insert is a single INSERT statement in PostgREST, so each
create_batch() call commits all of its rows or none.
"""

from typing import Dict, List, Sequence

from supabase import Client

from application.exceptions import PersistenceError
from core.constants import MAX_SET_BATCH_SIZE


class SupabaseWorkoutSetRepository:
    """Supabase-backed workout set repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_workout_ids(self, workout_ids: Sequence[str]) -> List[Dict]:
        if not workout_ids:
            return []
        response = (
            self._client.table("workout_sets")
            .select("*")
            .in_("workout_id", list(workout_ids))
            .execute()
        )
        return response.data

    def create_batch(self, rows: Sequence[Dict]) -> List[Dict]:
        if not rows:
            return []
        if len(rows) > MAX_SET_BATCH_SIZE:
            raise ValueError(
                f"Batch of {len(rows)} rows exceeds the limit of {MAX_SET_BATCH_SIZE}"
            )
        try:
            response = self._client.table("workout_sets").insert(list(rows)).execute()
        except Exception as e:
            raise PersistenceError(f"Batched set insert failed: {e}") from e
        if response.data is None:
            raise PersistenceError("Batched set insert returned no data")
        return response.data

    def delete_by_workout_ids(self, workout_ids: Sequence[str]) -> int:
        if not workout_ids:
            return 0
        try:
            response = (
                self._client.table("workout_sets")
                .delete()
                .in_("workout_id", list(workout_ids))
                .execute()
            )
        except Exception as e:
            raise PersistenceError(
                f"Deleting sets of {len(workout_ids)} workouts failed: {e}"
            ) from e
        return len(response.data)
