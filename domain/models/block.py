"""
Training block status and scheduled future adjustments.

Part of FSE-108: Timeline-aware disruption handling

Both models belong to the periodization planner. The engine reads the block
status at session start and only proposes deltas: volume debt increments,
block extensions and FutureAdjustment records.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BlockPhase(str, Enum):
    """Phase of the active training block."""

    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"
    PEAKING = "peaking"
    DELOAD = "deload"
    TRANSITION = "transition"


class AdjustmentAction(str, Enum):
    """What the planner should do in the targeted week/day."""

    ADD_VOLUME = "add_volume"
    REDUCE_INTENSITY = "reduce_intensity"
    EXTEND_BLOCK = "extend_block"
    ADD_DELOAD = "add_deload"
    SWAP_EXERCISE = "swap_exercise"


class BlockStatus(BaseModel):
    """
    Snapshot of the active training block.

    Examples:
        >>> status = BlockStatus(phase=BlockPhase.STRENGTH, week_number=2, total_weeks=6)
        >>> status.weeks_remaining
        4
    """

    block_id: Optional[str] = None
    block_name: Optional[str] = None
    phase: BlockPhase = BlockPhase.HYPERTROPHY
    week_number: int = Field(default=1, ge=1)
    total_weeks: int = Field(default=4, ge=1)
    weeks_remaining: Optional[int] = Field(default=None, ge=0)
    adherence_rate: float = Field(default=100.0, ge=0, le=100, description="0-100%")
    volume_debt: float = Field(
        default=0.0,
        ge=0,
        description="Volume-load lost to disruptions, to be made up later",
    )

    def model_post_init(self, __context) -> None:
        """Derive weeks remaining from the block position when not given."""
        if self.weeks_remaining is None:
            self.weeks_remaining = max(self.total_weeks - self.week_number, 0)


class FutureAdjustment(BaseModel):
    """
    A scheduled change to a later week, executed by the periodization planner.

    ``day`` 0 means the adjustment applies to the whole week.
    """

    id: str = Field(default_factory=lambda: f"adj-{uuid.uuid4().hex[:12]}")
    week: int = Field(..., ge=1)
    day: int = Field(..., ge=0, le=7)
    action: AdjustmentAction
    target_exercise_id: Optional[str] = None
    target_exercise_name: Optional[str] = None
    magnitude: Optional[float] = Field(default=None, description="e.g. 1.1 for +10% volume")
    rationale: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    applied_at: Optional[datetime] = None
