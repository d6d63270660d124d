"""
Readiness snapshot and morning context models.

Part of FSE-105: Morning context injection
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


def compute_readiness_score(sleep_quality: int, muscle_soreness: int, stress_level: int) -> int:
    """
    Composite readiness score from the daily check-in triad.

    Sleep contributes 8-40 points, soreness and stress 6-30 points each
    (inverted), giving a 20-100 range.
    """
    return sleep_quality * 8 + (6 - muscle_soreness) * 6 + (6 - stress_level) * 6


class ReadinessSignal(str, Enum):
    """Discrete signal fired by the readiness shaper."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"
    NEUTRAL = "neutral"


class MorningAdjustmentType(str, Enum):
    """Which queue mutation the readiness shaper applied."""

    JOKER_SET_ADDED = "joker_set_added"
    ACCESSORY_VOLUME_REDUCED = "accessory_volume_reduced"
    FULL_VOLUME_REDUCED = "full_volume_reduced"
    NONE = "none"


class ReadinessSnapshot(BaseModel):
    """
    Daily readiness check-in.

    ``readiness_score`` is derived from the triad when not supplied, so a
    snapshot coming from a wearable can carry its own composite score.

    Examples:
        >>> ReadinessSnapshot(sleep_quality=5, muscle_soreness=1, stress_level=1).readiness_score
        100
        >>> ReadinessSnapshot(
        ...     sleep_quality=5, muscle_soreness=2, stress_level=2, readiness_score=85
        ... ).readiness_score
        85
    """

    sleep_quality: int = Field(..., ge=1, le=5, description="1 (terrible) to 5 (great)")
    muscle_soreness: int = Field(..., ge=1, le=5, description="1 (none) to 5 (very sore)")
    stress_level: int = Field(..., ge=1, le=5, description="1 (calm) to 5 (very stressed)")
    readiness_score: Optional[int] = Field(default=None, ge=0, le=100)
    check_in_date: Optional[date] = None

    @model_validator(mode="after")
    def derive_score(self) -> "ReadinessSnapshot":
        """Fill in the composite score from the triad when missing."""
        if self.readiness_score is None:
            self.readiness_score = compute_readiness_score(
                self.sleep_quality, self.muscle_soreness, self.stress_level
            )
        return self


class MorningAdjustment(BaseModel):
    """The queue mutation applied before the session started."""

    type: MorningAdjustmentType = MorningAdjustmentType.NONE
    affected_exercises: List[str] = Field(default_factory=list)
    rationale: str = ""


class MorningContext(BaseModel):
    """
    Audit record of the readiness shaper run, surfaced to the session UI.

    Distinct from AgentDecision: exactly one is attached per session.
    """

    signal: ReadinessSignal
    readiness_score: Optional[int] = None
    sleep_quality: Optional[int] = None
    soreness: Optional[int] = None
    adjustment: MorningAdjustment = Field(default_factory=MorningAdjustment)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
