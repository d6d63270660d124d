"""
Readiness Repository Interface (Port).

Part of FSE-105: Morning context injection
"""
from datetime import date
from typing import Optional, Protocol

from domain.models.readiness import ReadinessSnapshot


class ReadinessRepository(Protocol):
    """
    Abstract interface for the daily readiness check-in.
    """

    def get_snapshot(self, user_id: str, day: date) -> Optional[ReadinessSnapshot]:
        """
        Get the user's check-in for a given day.

        Args:
            user_id: User ID
            day: Calendar day of the check-in

        Returns:
            ReadinessSnapshot, or None when the user has not checked in
        """
        ...
