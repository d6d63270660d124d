"""
Set target and live set record models.

Part of FSE-101: Define session engine domain model
"""

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def generate_set_id() -> str:
    """Unique identifier for a set created during a session."""
    return f"set-{uuid.uuid4().hex[:12]}"


class SetStatus(str, Enum):
    """
    Lifecycle of a set within the live session.

    Exactly one set in the queue is ACTIVE while the session is running;
    everything before it is COMPLETED and everything after it PENDING.
    """

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class SetTarget(BaseModel):
    """
    The prescription for one set.

    ``target_load`` is ``None`` for bodyweight sets.
    """

    target_reps: Optional[int] = Field(default=None, ge=0, description="Prescribed reps")
    target_rpe: Optional[float] = Field(default=None, ge=1, le=10, description="Prescribed RPE")
    target_load: Optional[float] = Field(default=None, ge=0, description="Prescribed load")
    ordinal: int = Field(..., ge=1, description="1-based position within the exercise")


class SetRecord(SetTarget):
    """
    A set in the live queue: prescription plus logged performance.

    Examples:
        >>> record = SetRecord(
        ...     exercise_id="ex-squat", ordinal=1, target_reps=5, target_rpe=8, target_load=200
        ... )
        >>> record.status
        <SetStatus.PENDING: 'pending'>
        >>> record.is_logged
        False
    """

    id: str = Field(default_factory=generate_set_id)
    exercise_id: str

    # Logged performance (null until logged)
    actual_load: Optional[float] = Field(default=None, ge=0)
    actual_reps: Optional[int] = Field(default=None, ge=0)
    actual_rpe: Optional[float] = Field(default=None, ge=1, le=10)

    status: SetStatus = SetStatus.PENDING
    rationale: Optional[str] = Field(default=None, description="Why the engine changed this set")
    agent_adjusted: bool = False
    missed_reps: bool = False
    skipped: bool = False
    notes: Optional[str] = None

    @property
    def is_logged(self) -> bool:
        return self.actual_reps is not None

    @property
    def is_completed(self) -> bool:
        return self.status == SetStatus.COMPLETED

    def copy_as_pending(self, ordinal: int) -> "SetRecord":
        """Fresh pending copy of this prescription, used for added sets."""
        return SetRecord(
            exercise_id=self.exercise_id,
            ordinal=ordinal,
            target_reps=self.target_reps,
            target_rpe=self.target_rpe,
            target_load=self.target_load,
        )
