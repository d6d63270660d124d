"""
Fake MovementHistoryRepository for testing.

Part of FSE-102: Movement memory with confidence and trend
"""
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from domain.models import HistoricalSet


class FakeMovementHistoryRepository:
    """
    In-memory fake implementation of MovementHistoryRepository.

    History is stored per (user_id, exercise_id), newest first.
    """

    def __init__(self):
        self._history: Dict[Tuple[str, str], List[HistoricalSet]] = {}
        self.requested_limits: List[int] = []

    def seed(self, user_id: str, exercise_id: str, sets: List[HistoricalSet]) -> None:
        """Store sets for an exercise, newest first."""
        self._history[(user_id, exercise_id)] = sorted(
            sets, key=lambda s: s.session_date, reverse=True
        )

    def get_recent_sets(
        self,
        user_id: str,
        exercise_id: str,
        limit: int = 20,
    ) -> List[HistoricalSet]:
        self.requested_limits.append(limit)
        return list(self._history.get((user_id, exercise_id), []))[:limit]

    def reset(self) -> None:
        self._history.clear()
        self.requested_limits.clear()


def make_history(
    exercise_id: str,
    sessions: List[List[Tuple[Optional[float], Optional[int], Optional[float]]]],
    *,
    last_date: date,
    spacing_days: int = 3,
) -> List[HistoricalSet]:
    """
    Build newest-first history from (weight, reps, rpe) tuples per session.

    ``sessions[0]`` is the most recent session, held on ``last_date``; each
    earlier session is ``spacing_days`` before the previous one.
    """
    history: List[HistoricalSet] = []
    for idx, session in enumerate(sessions):
        session_date = last_date - timedelta(days=idx * spacing_days)
        for weight, reps, rpe in session:
            history.append(
                HistoricalSet(
                    exercise_id=exercise_id,
                    session_date=session_date,
                    weight=weight,
                    reps=reps,
                    rpe=rpe,
                )
            )
    return history
