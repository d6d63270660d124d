"""
Agent decision audit record.

Part of FSE-106: Real-time set analysis
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class DecisionKind(str, Enum):
    """Kinds of autonomous changes the engine records."""

    WEIGHT_INCREASE = "weight_increase"
    WEIGHT_DECREASE = "weight_decrease"
    VOLUME_ADJUSTMENT = "volume_adjustment"
    EXERCISE_SWAP = "exercise_swap"
    REST_SUGGESTION = "rest_suggestion"


class AgentDecision(BaseModel):
    """
    Append-only audit entry written whenever the engine changes a target.

    Examples:
        >>> AgentDecision(kind=DecisionKind.WEIGHT_INCREASE, rationale="RPE 5.5 (Target 8). +5% load.")
    """

    kind: DecisionKind
    rationale: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}
