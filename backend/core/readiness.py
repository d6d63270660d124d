"""
Readiness Scorer for the daily check-in.

Part of FSE-105: Morning context injection

Derives the composite readiness score and a coarse training recommendation
from the sleep/soreness/stress triad:
- Score: sleep×8 + (6−soreness)×6 + (6−stress)×6 (20-100)
- Suggestion: full (≥80), moderate (≥60), light (≥40), rest
- Per-factor impact and recommendation strings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from domain.models.readiness import ReadinessSnapshot, compute_readiness_score


class ReadinessSuggestion(str, Enum):
    """Coarse session recommendation for the day."""

    FULL = "full"
    MODERATE = "moderate"
    LIGHT = "light"
    REST = "rest"


@dataclass
class AdjustmentMultipliers:
    """Intensity/volume scaling associated with a suggestion."""
    intensity_multiplier: float
    volume_multiplier: float
    rpe_adjustment: float


SUGGESTION_MULTIPLIERS: Dict[ReadinessSuggestion, AdjustmentMultipliers] = {
    ReadinessSuggestion.FULL: AdjustmentMultipliers(1.0, 1.0, 0),
    ReadinessSuggestion.MODERATE: AdjustmentMultipliers(0.95, 0.9, -0.5),
    ReadinessSuggestion.LIGHT: AdjustmentMultipliers(0.85, 0.7, -1),
    ReadinessSuggestion.REST: AdjustmentMultipliers(0.6, 0.5, -2),
}


@dataclass
class ReadinessAnalysis:
    """Result of analyzing a readiness check-in."""
    score: int
    suggestion: ReadinessSuggestion
    message: str
    sleep_impact: str
    soreness_impact: str
    stress_impact: str
    recommendations: List[str] = field(default_factory=list)

    @property
    def multipliers(self) -> AdjustmentMultipliers:
        return SUGGESTION_MULTIPLIERS[self.suggestion]


def _impact(value: int, positive_max: int, neutral_max: int) -> str:
    if value <= positive_max:
        return "positive"
    if value <= neutral_max:
        return "neutral"
    return "negative"


def analyze_readiness(snapshot: ReadinessSnapshot) -> ReadinessAnalysis:
    """
    Analyze a readiness check-in and generate recommendations.

    The snapshot's own composite score is used when it carries one, so a
    wearable-provided score is respected.

    Args:
        snapshot: The day's readiness check-in

    Returns:
        ReadinessAnalysis with suggestion and recommendations
    """
    score = snapshot.readiness_score
    if score is None:
        score = compute_readiness_score(
            snapshot.sleep_quality, snapshot.muscle_soreness, snapshot.stress_level
        )

    if score >= 80:
        suggestion = ReadinessSuggestion.FULL
        message = "You're primed for a great session. Let's push it!"
    elif score >= 60:
        suggestion = ReadinessSuggestion.MODERATE
        message = "Solid foundation today. We'll keep intensity but watch for fatigue signals."
    elif score >= 40:
        suggestion = ReadinessSuggestion.LIGHT
        message = "Recovery day vibes. Let's dial back intensity and focus on movement quality."
    else:
        suggestion = ReadinessSuggestion.REST
        message = "Your body's asking for a break. Consider active recovery or rest today."

    # Sleep is scored the other way round from soreness and stress
    sleep_impact = (
        "positive" if snapshot.sleep_quality >= 4
        else "neutral" if snapshot.sleep_quality >= 3
        else "negative"
    )

    recommendations: List[str] = []
    if snapshot.sleep_quality <= 2:
        recommendations.append("Poor sleep detected. Consider limiting high-skill movements.")
    if snapshot.muscle_soreness >= 4:
        recommendations.append("High soreness. We'll reduce volume on affected muscle groups.")
    if snapshot.stress_level >= 4:
        recommendations.append("Elevated stress. Training can help, but we'll keep it controlled.")
    if score >= 80:
        recommendations.append("Great day to attempt PRs or push intensity.")
    elif score >= 60:
        recommendations.append("Stick to your planned weights and reps.")
    elif score < 40:
        recommendations.append("Focus on mobility, light cardio, or complete rest.")

    return ReadinessAnalysis(
        score=score,
        suggestion=suggestion,
        message=message,
        sleep_impact=sleep_impact,
        soreness_impact=_impact(snapshot.muscle_soreness, 2, 3),
        stress_impact=_impact(snapshot.stress_level, 2, 3),
        recommendations=recommendations,
    )
