"""
Plan repository port (interface).

Part of AMA-512: Mesocycle generation engine

This Protocol defines the read contract for plan templates and the
exercise catalog. Infrastructure implementations (e.g., Supabase) must
satisfy this interface.
"""

from typing import Dict, List, Optional, Protocol


class PlanRepository(Protocol):
    """
    Repository interface for training plan templates.

    All methods work with dictionaries for flexibility.
    The service layer validates rows into domain models.
    """

    def get_by_id(self, plan_id: str) -> Optional[Dict]:
        """
        Get a plan by its ID.

        Args:
            plan_id: The plan's ID

        Returns:
            Plan dictionary if found, None otherwise
        """
        ...

    def get_days(self, plan_id: str) -> List[Dict]:
        """
        Get all training days of a plan.

        Args:
            plan_id: The plan's ID

        Returns:
            List of plan day dictionaries ordered by day_of_week, sort_order
        """
        ...

    def get_day_exercises(self, plan_day_id: str) -> List[Dict]:
        """
        Get the exercises prescribed on a plan day.

        Args:
            plan_day_id: The plan day's ID

        Returns:
            List of plan day exercise dictionaries ordered by sort_order
        """
        ...

    def get_exercise(self, exercise_id: str) -> Optional[Dict]:
        """
        Get a catalog exercise by its ID.

        Args:
            exercise_id: The exercise's ID

        Returns:
            Exercise dictionary if found, None otherwise
        """
        ...
