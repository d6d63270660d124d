"""
Life-event disruption records.

Part of FSE-108: Timeline-aware disruption handling
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class LifeEventType(str, Enum):
    """Out-of-band events that reshape the present session and the plan."""

    TRAVEL = "travel"
    SICKNESS = "sickness"
    INJURY = "injury"
    STRESS = "stress"


class DisruptionRecord(BaseModel):
    """What happened, for how long, and how the engine responded."""

    event: LifeEventType
    duration_days: int = Field(..., ge=1)
    rationale: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
