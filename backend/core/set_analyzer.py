"""
Set Performance Analyzer.

Part of FSE-106: Per-set autoregulation

Given one completed set and its prescription, decides how the next set of the
same exercise should change. Rules are evaluated in order, first match wins:

1. Missed reps   - actual reps < target reps → no load change, rest suggestion
2. Too easy      - RPE ≤ 6 and target RPE ≥ 8 → ×1.05
3. Slightly easy - 6 < RPE ≤ 7 and target RPE ≥ 8 → ×1.025
4. Near failure  - RPE ≥ 9.5 and not the last set → ×0.925
5. Goldilocks    - no change
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.models.decision import DecisionKind
from domain.models.load import PLATE_INCREMENT, scale_load
from domain.models.set_record import SetTarget


DEFAULT_TARGET_REPS = 8
DEFAULT_TARGET_RPE = 8

TOO_EASY_RPE = 6
SLIGHTLY_EASY_RPE = 7
NEAR_FAILURE_RPE = 9.5
HIGH_TARGET_RPE = 8

TOO_EASY_MULTIPLIER = 1.05
SLIGHTLY_EASY_MULTIPLIER = 1.025
NEAR_FAILURE_MULTIPLIER = 0.925

REST_RATIONALE = "Missed target reps - extended rest recommended"


class PerformanceRule(str, Enum):
    """Which analyzer rule produced a verdict."""

    MISSED_REPS = "missed_reps"
    TOO_EASY = "too_easy"
    SLIGHTLY_EASY = "slightly_easy"
    NEAR_FAILURE = "near_failure"
    GOLDILOCKS = "goldilocks"


@dataclass
class SetResult:
    """What the lifter actually did on a set."""
    reps: int
    rpe: Optional[float] = None
    load: Optional[float] = None


@dataclass
class AnalyzerVerdict:
    """
    Outcome of analyzing one completed set.

    ``multiplier`` is 1.0 whenever ``should_adjust`` is False.
    """
    rule: PerformanceRule
    should_adjust: bool = False
    multiplier: float = 1.0
    rationale: str = ""
    message: str = ""
    suggest_rest: bool = False
    missed_reps: bool = False

    @property
    def decision_kind(self) -> Optional[DecisionKind]:
        """Audit-log kind for this verdict, None for goldilocks."""
        if self.should_adjust:
            return (
                DecisionKind.WEIGHT_INCREASE
                if self.multiplier > 1
                else DecisionKind.WEIGHT_DECREASE
            )
        if self.suggest_rest:
            return DecisionKind.REST_SUGGESTION
        return None


def analyze_set_performance(
    result: SetResult,
    target: SetTarget,
    is_last_set: bool,
) -> AnalyzerVerdict:
    """
    Decide how the next set should change.

    Args:
        result: Logged reps/RPE/load of the completed set
        target: The completed set's prescription (null fields use defaults)
        is_last_set: Whether this was the exercise's last set

    Returns:
        AnalyzerVerdict; the function is total and never raises.
    """
    target_reps = target.target_reps if target.target_reps is not None else DEFAULT_TARGET_REPS
    target_rpe = target.target_rpe if target.target_rpe is not None else DEFAULT_TARGET_RPE
    rpe = result.rpe

    if result.reps < target_reps:
        return AnalyzerVerdict(
            rule=PerformanceRule.MISSED_REPS,
            rationale=REST_RATIONALE,
            message="You missed reps. Take an extra 90s rest before the next set.",
            suggest_rest=True,
            missed_reps=True,
        )

    # Without a reported RPE only the rep check applies
    if rpe is None:
        return AnalyzerVerdict(rule=PerformanceRule.GOLDILOCKS)

    if rpe <= TOO_EASY_RPE and target_rpe >= HIGH_TARGET_RPE:
        return AnalyzerVerdict(
            rule=PerformanceRule.TOO_EASY,
            should_adjust=True,
            multiplier=TOO_EASY_MULTIPLIER,
            rationale=f"Previous set RPE {_fmt(rpe)} (Target {_fmt(target_rpe)}). +5% load.",
            message="That looked easy! I've bumped up the weight for your next set.",
        )

    if TOO_EASY_RPE < rpe <= SLIGHTLY_EASY_RPE and target_rpe >= HIGH_TARGET_RPE:
        return AnalyzerVerdict(
            rule=PerformanceRule.SLIGHTLY_EASY,
            should_adjust=True,
            multiplier=SLIGHTLY_EASY_MULTIPLIER,
            rationale=f"RPE {_fmt(rpe)} slightly under target {_fmt(target_rpe)}. +2.5% load.",
            message="Solid set. Let's add a little weight.",
        )

    if rpe >= NEAR_FAILURE_RPE and not is_last_set:
        return AnalyzerVerdict(
            rule=PerformanceRule.NEAR_FAILURE,
            should_adjust=True,
            multiplier=NEAR_FAILURE_MULTIPLIER,
            rationale="Near failure detected. Dropping load to maintain volume.",
            message="That was a grinder. I'm backing off the weight to keep quality high.",
        )

    return AnalyzerVerdict(rule=PerformanceRule.GOLDILOCKS)


def next_set_load(
    verdict: AnalyzerVerdict,
    actual_load: Optional[float],
    next_target_load: Optional[float],
    increment: float = PLATE_INCREMENT,
) -> Optional[float]:
    """
    Apply a verdict's multiplier to produce the next set's load.

    The actual load lifted is the base; the next set's prescription is used
    when nothing was recorded. Bodyweight sets (no load either way) keep
    their load.
    """
    if not verdict.should_adjust:
        return next_target_load
    base = actual_load if actual_load is not None else next_target_load
    if base is None:
        return next_target_load
    return scale_load(base, verdict.multiplier, increment)


def _fmt(value: float) -> str:
    """Render 8.0 as '8' and 5.5 as '5.5' in rationale strings."""
    return f"{value:g}"
