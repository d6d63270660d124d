"""
Movement History Repository Interface (Port).

Part of FSE-102: Movement memory with confidence and trend

Supplies the raw set records the Movement Memory Resolver summarizes.
"""
from typing import List, Protocol

from domain.models.movement_memory import HistoricalSet


class MovementHistoryRepository(Protocol):
    """
    Abstract interface for reading a user's logged sets of one exercise.
    """

    def get_recent_sets(
        self,
        user_id: str,
        exercise_id: str,
        limit: int = 20,
    ) -> List[HistoricalSet]:
        """
        Get the most recent logged sets for an exercise.

        Args:
            user_id: Owner of the history
            exercise_id: Exercise to read
            limit: Maximum number of sets to return

        Returns:
            Sets ordered newest first (may include warmups), or an empty list
        """
        ...
