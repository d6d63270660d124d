"""
Movement Memory Resolver.

Part of FSE-102: Movement memory with confidence and trend

This module turns raw historical set records for one exercise into a compact
MovementMemory summary:
- Last performance and last session's set count
- Exposure count (distinct session dates)
- Confidence score/level from exposure, recency, rep consistency and RPE reporting
- Trend from estimated 1RM across recent exposures
- Lifetime volume and personal records

It also produces "next time" suggestions from a resolved memory.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from domain.models.movement_memory import (
    ConfidenceLevel,
    HistoricalSet,
    MovementMemory,
    PerformanceTrend,
    RepRange,
)

logger = logging.getLogger(__name__)


# Relative E1RM change that counts as a real trend
TREND_THRESHOLD = 0.02


# =============================================================================
# E1RM
# =============================================================================


def calculate_e1rm(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Epley formula.

    Formula: 1RM = weight * (1 + reps/30)

    Args:
        weight: Weight lifted
        reps: Number of reps completed

    Returns:
        Estimated 1RM (0 for empty sets)
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    return weight * (1.0 + reps / 30.0)


# =============================================================================
# Confidence and Trend
# =============================================================================


@dataclass
class ConfidenceFactors:
    """Inputs to the confidence score."""
    exposure_count: int
    recency_days: int
    consistency: int  # max reps - min reps
    rpe_reporting: float  # 0.0 to 1.0


def compute_confidence_score(factors: ConfidenceFactors) -> int:
    """
    Score how trustworthy a memory is, 0-100.

    - Exposure: 40 pts max (5+ → 40, 3-4 → 25, else 5 per exposure)
    - Recency: 25 pts max (≤7d → 25, ≤14d → 15, ≤28d → 5)
    - Consistency: 20 pts minus 2 per rep of spread
    - RPE reporting: ratio × 15
    """
    score = 0

    if factors.exposure_count >= 5:
        score += 40
    elif factors.exposure_count >= 3:
        score += 25
    else:
        score += factors.exposure_count * 5

    if factors.recency_days <= 7:
        score += 25
    elif factors.recency_days <= 14:
        score += 15
    elif factors.recency_days <= 28:
        score += 5

    score += max(0, 20 - factors.consistency * 2)
    score += round(factors.rpe_reporting * 15)

    return min(score, 100)


def confidence_level(score: int) -> ConfidenceLevel:
    """Map a confidence score to its qualitative level."""
    if score >= 70:
        return ConfidenceLevel.HIGH
    if score >= 40:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def detect_trend(exposure_e1rms: Sequence[float]) -> PerformanceTrend:
    """
    Compare the two most recent exposures against exposures 3-4 back.

    Args:
        exposure_e1rms: Best E1RM per exposure, newest first

    Returns:
        PROGRESSING above +2%, REGRESSING below -2%, STAGNANT otherwise or
        when fewer than three exposures exist.
    """
    if len(exposure_e1rms) < 3:
        return PerformanceTrend.STAGNANT

    recent = sum(exposure_e1rms[:2]) / 2
    older_window = exposure_e1rms[2:4]
    older = sum(older_window) / len(older_window)
    if older == 0:
        return PerformanceTrend.STAGNANT

    delta = (recent - older) / older
    if delta > TREND_THRESHOLD:
        return PerformanceTrend.PROGRESSING
    if delta < -TREND_THRESHOLD:
        return PerformanceTrend.REGRESSING
    return PerformanceTrend.STAGNANT


# =============================================================================
# Resolver
# =============================================================================


class MovementMemoryResolver:
    """
    Builds a MovementMemory from the recent history of one exercise.

    The resolver is pure: all inputs come in as arguments, including "today",
    so it can be replayed deterministically in tests.
    """

    def __init__(self, history_limit: int = 20):
        """
        Initialize the resolver.

        Args:
            history_limit: Maximum number of non-warmup sets considered
        """
        self.history_limit = history_limit

    def resolve(
        self,
        exercise_id: str,
        history: Sequence[HistoricalSet],
        today: Optional[date] = None,
    ) -> Optional[MovementMemory]:
        """
        Resolve a movement memory.

        Args:
            exercise_id: Exercise the history belongs to
            history: Logged sets, newest first
            today: Reference date for recency (defaults to date.today())

        Returns:
            MovementMemory, or None when there is no usable history
        """
        today = today or date.today()

        working = [s for s in history if not s.is_warmup][: self.history_limit]
        valid = [s for s in working if s.weight is not None and s.reps is not None]
        if not valid:
            logger.debug(f"No usable history for exercise {exercise_id}")
            return None

        last = valid[0]
        last_sets = sum(1 for s in valid if s.session_date == last.session_date)

        # Group by session date, preserving newest-first order
        exposures: Dict[date, List[HistoricalSet]] = {}
        for s in valid:
            exposures.setdefault(s.session_date, []).append(s)
        exposure_count = len(exposures)

        days_since = (today - last.session_date).days

        rpe_values = [s.rpe for s in valid if s.rpe is not None]
        avg_rpe = round(sum(rpe_values) / len(rpe_values), 1) if rpe_values else None

        reps = [s.reps for s in valid]
        rep_range = RepRange(min=min(reps), max=max(reps))

        e1rms = [calculate_e1rm(s.weight, s.reps) for s in valid]
        exposure_e1rms = [
            max(calculate_e1rm(s.weight, s.reps) for s in sets)
            for sets in exposures.values()
        ]
        exposure_volumes = [
            sum(s.weight * s.reps for s in sets) for sets in exposures.values()
        ]

        score = compute_confidence_score(
            ConfidenceFactors(
                exposure_count=exposure_count,
                recency_days=days_since,
                consistency=rep_range.spread,
                rpe_reporting=len(rpe_values) / len(valid),
            )
        )

        memory = MovementMemory(
            exercise_id=exercise_id,
            last_weight=last.weight,
            last_reps=last.reps,
            last_rpe=last.rpe,
            last_date=last.session_date,
            last_sets=last_sets,
            days_since_last=days_since,
            exposure_count=exposure_count,
            avg_rpe=avg_rpe,
            typical_rep_range=rep_range,
            total_lifetime_volume=sum(s.weight * s.reps for s in valid),
            pr_weight=max(s.weight for s in valid),
            pr_e1rm=round(max(e1rms), 1),
            pr_volume=max(exposure_volumes),
            confidence_score=score,
            confidence=confidence_level(score),
            trend=detect_trend(exposure_e1rms),
        )
        logger.debug(
            f"Resolved memory for {exercise_id}: {exposure_count} exposures, "
            f"confidence={memory.confidence.value}, trend={memory.trend.value}"
        )
        return memory

    def resolve_many(
        self,
        history_by_exercise: Dict[str, Sequence[HistoricalSet]],
        today: Optional[date] = None,
    ) -> Dict[str, Optional[MovementMemory]]:
        """Resolve memories for several exercises at once."""
        return {
            exercise_id: self.resolve(exercise_id, history, today)
            for exercise_id, history in history_by_exercise.items()
        }


# =============================================================================
# Next-Time Suggestions
# =============================================================================


@dataclass
class NextTimeAlert:
    """A caution attached to a suggestion."""
    type: str  # "missed_session", "regression"
    message: str
    suggested_action: str


@dataclass
class NextTimeSuggestion:
    """Recommendation for the next exposure of an exercise."""
    exercise_id: str
    weight: Optional[float]
    reps: int
    target_rpe: float
    confidence: ConfidenceLevel
    trend: PerformanceTrend
    reasoning: str
    exposure_count: int
    pr_e1rm: Optional[float] = None
    alerts: List[NextTimeAlert] = field(default_factory=list)


def suggest_next_time(memory: MovementMemory, weight_unit: str = "lbs") -> NextTimeSuggestion:
    """
    Turn a movement memory into a next-session recommendation.

    Long breaks and regressions pull the load back to 90%; otherwise the last
    RPE decides between adding a rep, adding load, or matching.
    """
    alerts: List[NextTimeAlert] = []
    weight = memory.last_weight or 0
    reps = memory.last_reps or 8
    reasoning = ""

    if memory.days_since_last is not None and memory.days_since_last > 14:
        alerts.append(NextTimeAlert(
            type="missed_session",
            message=f"{memory.days_since_last} days since last session",
            suggested_action="Start lighter to rebuild",
        ))
        weight = round((memory.last_weight or 0) * 0.9)
        reasoning = "Extended break. Starting conservative."

    if memory.trend == PerformanceTrend.REGRESSING:
        alerts.append(NextTimeAlert(
            type="regression",
            message="Performance declined recently",
            suggested_action="Check recovery",
        ))
        weight = round((memory.last_weight or 0) * 0.9)
        reasoning = "Regression detected. Recovery load suggested."

    if not reasoning and memory.last_weight and memory.last_reps:
        last_rpe = memory.last_rpe or 8
        if last_rpe < 7:
            reps = memory.last_reps + 1
            reasoning = f"Easy last time (RPE {last_rpe}). Try +1 rep."
        elif last_rpe <= 8.5:
            weight = memory.last_weight + 5
            reasoning = f"Good effort (RPE {last_rpe}). Try +5 {weight_unit}."
        else:
            reasoning = f"Challenging (RPE {last_rpe}). Match before progressing."

    if memory.confidence == ConfidenceLevel.LOW:
        plural = "" if memory.exposure_count == 1 else "s"
        reasoning += f" (Low confidence - {memory.exposure_count} session{plural})"

    if not memory.last_weight and not memory.last_reps:
        reasoning = "No history. Start with comfortable weight."

    return NextTimeSuggestion(
        exercise_id=memory.exercise_id,
        weight=weight or None,
        reps=reps,
        target_rpe=8,
        confidence=memory.confidence,
        trend=memory.trend,
        reasoning=reasoning.strip(),
        exposure_count=memory.exposure_count,
        pr_e1rm=memory.pr_e1rm,
        alerts=alerts,
    )
