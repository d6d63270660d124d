"""
Movement memory models.

Part of FSE-102: Movement memory with confidence and trend

A movement memory is the compact per (user, exercise) performance summary
used to seed a session's starting targets.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ConfidenceLevel(str, Enum):
    """How much the engine trusts a memory-derived suggestion."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PerformanceTrend(str, Enum):
    """Direction of estimated strength across recent exposures."""

    PROGRESSING = "progressing"
    STAGNANT = "stagnant"
    REGRESSING = "regressing"


class HistoricalSet(BaseModel):
    """A single logged set from a past session, as read from history."""

    exercise_id: str
    session_date: date
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    is_warmup: bool = False


class RepRange(BaseModel):
    """Typical rep range observed for an exercise."""

    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    @property
    def spread(self) -> int:
        return self.max - self.min


class MovementMemory(BaseModel):
    """
    Aggregated performance summary for one exercise.

    Examples:
        >>> memory = MovementMemory(
        ...     exercise_id="ex-squat",
        ...     last_weight=220,
        ...     last_reps=5,
        ...     last_sets=3,
        ...     exposure_count=6,
        ... )
        >>> memory.has_load
        True
    """

    exercise_id: str

    # Last performance
    last_weight: Optional[float] = Field(default=None, ge=0)
    last_reps: Optional[int] = Field(default=None, ge=0)
    last_rpe: Optional[float] = Field(default=None, ge=1, le=10)
    last_date: Optional[date] = None
    last_sets: Optional[int] = Field(default=None, ge=1)
    days_since_last: Optional[int] = None

    # Aggregates
    exposure_count: int = Field(default=0, ge=0)
    avg_rpe: Optional[float] = Field(default=None, ge=1, le=10)
    typical_rep_range: Optional[RepRange] = None
    total_lifetime_volume: float = Field(default=0.0, ge=0)

    # Personal records
    pr_weight: Optional[float] = None
    pr_e1rm: Optional[float] = None
    pr_volume: Optional[float] = None

    # Reliability
    confidence_score: int = Field(default=0, ge=0, le=100)
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
    trend: PerformanceTrend = PerformanceTrend.STAGNANT

    @property
    def has_load(self) -> bool:
        """True when the last performance carried a positive external load."""
        return bool(self.last_weight)

    @property
    def typical_rep_max(self) -> Optional[int]:
        return self.typical_rep_range.max if self.typical_rep_range else None
