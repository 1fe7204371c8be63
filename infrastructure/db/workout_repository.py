"""
Supabase implementation of WorkoutRepository.

Part of AMA-512: Mesocycle generation engine

Queries against the workouts table. Rollback deletes a generation's sets
explicitly before its workouts, so no on delete cascade is assumed on
workout_sets.workout_id.
"""

from typing import Dict, List, Sequence

from supabase import Client

from application.exceptions import PersistenceError


class SupabaseWorkoutRepository:
    """Supabase-backed workout repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_mesocycle(self, mesocycle_id: str) -> List[Dict]:
        response = (
            self._client.table("workouts")
            .select("*")
            .eq("mesocycle_id", mesocycle_id)
            .order("week_number")
            .order("scheduled_date")
            .execute()
        )
        return response.data

    def create(self, data: Dict) -> Dict:
        try:
            response = self._client.table("workouts").insert(data).execute()
        except Exception as e:
            raise PersistenceError(f"Workout insert failed: {e}") from e
        if not response.data:
            raise PersistenceError("Workout insert returned no data")
        return response.data[0]

    def delete_by_ids(self, workout_ids: Sequence[str]) -> int:
        if not workout_ids:
            return 0
        try:
            response = (
                self._client.table("workouts")
                .delete()
                .in_("id", list(workout_ids))
                .execute()
            )
        except Exception as e:
            raise PersistenceError(
                f"Deleting {len(workout_ids)} workouts failed: {e}"
            ) from e
        return len(response.data)
