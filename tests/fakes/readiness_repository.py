"""
Fake ReadinessRepository for testing.

Part of FSE-105: Morning context injection
"""
from datetime import date
from typing import Dict, Optional, Tuple

from domain.models import ReadinessSnapshot


class FakeReadinessRepository:
    """In-memory fake implementation of ReadinessRepository."""

    def __init__(self):
        self._snapshots: Dict[Tuple[str, date], ReadinessSnapshot] = {}

    def seed(self, user_id: str, day: date, snapshot: ReadinessSnapshot) -> None:
        self._snapshots[(user_id, day)] = snapshot

    def get_snapshot(self, user_id: str, day: date) -> Optional[ReadinessSnapshot]:
        return self._snapshots.get((user_id, day))

    def reset(self) -> None:
        self._snapshots.clear()
