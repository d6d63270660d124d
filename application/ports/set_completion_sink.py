"""
Set Completion Sink Interface (Port).

Part of FSE-107: Session state machine

The sink is the engine's only persistence point. It is called once per
logged set, in the order sets are logged. Whatever it does with the event
is the caller's concern: a failing sink never changes session state.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol


@dataclass
class SetCompletedEvent:
    """A completed set, as handed to the persistence layer."""
    session_id: str
    exercise_id: str
    set_id: str
    ordinal: int
    target_reps: Optional[int] = None
    target_rpe: Optional[float] = None
    target_load: Optional[float] = None
    actual_weight: Optional[float] = None
    actual_reps: Optional[int] = None
    actual_rpe: Optional[float] = None
    completed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "exercise_id": self.exercise_id,
            "set_id": self.set_id,
            "ordinal": self.ordinal,
            "target_reps": self.target_reps,
            "target_rpe": self.target_rpe,
            "target_load": self.target_load,
            "actual_weight": self.actual_weight,
            "actual_reps": self.actual_reps,
            "actual_rpe": self.actual_rpe,
            "completed_at": self.completed_at.isoformat(),
        }


class SetCompletionSink(Protocol):
    """
    Abstract interface receiving completed sets.
    """

    def on_set_completed(self, event: SetCompletedEvent) -> None:
        """
        Accept one completed set.

        Args:
            event: The completed set's targets and actual values
        """
        ...
