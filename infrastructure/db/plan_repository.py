"""
Supabase implementation of PlanRepository.

Part of AMA-512: Mesocycle generation engine

Queries against:
- plans: Plan template metadata
- plan_days: Training days within a plan
- plan_day_exercises: Exercise prescriptions on a plan day
- exercises: Exercise catalog
"""

from typing import Dict, List, Optional

from supabase import Client


class SupabasePlanRepository:
    """Supabase-backed plan repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_id(self, plan_id: str) -> Optional[Dict]:
        response = (
            self._client.table("plans")
            .select("*")
            .eq("id", plan_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_days(self, plan_id: str) -> List[Dict]:
        response = (
            self._client.table("plan_days")
            .select("*")
            .eq("plan_id", plan_id)
            .order("day_of_week")
            .order("sort_order")
            .execute()
        )
        return response.data

    def get_day_exercises(self, plan_day_id: str) -> List[Dict]:
        response = (
            self._client.table("plan_day_exercises")
            .select("*")
            .eq("plan_day_id", plan_day_id)
            .order("sort_order")
            .execute()
        )
        return response.data

    def get_exercise(self, exercise_id: str) -> Optional[Dict]:
        response = (
            self._client.table("exercises")
            .select("*")
            .eq("id", exercise_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
