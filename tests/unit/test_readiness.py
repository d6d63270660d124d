"""
Unit tests for the readiness scorer.

Part of FSE-105: Morning context injection
"""

import pytest
from pydantic import ValidationError

from backend.core.readiness import ReadinessSuggestion, analyze_readiness
from domain.models import ReadinessSnapshot, compute_readiness_score


@pytest.mark.unit
class TestReadinessScore:
    def test_best_case(self):
        assert compute_readiness_score(5, 1, 1) == 100

    def test_worst_case(self):
        assert compute_readiness_score(1, 5, 5) == 20

    def test_snapshot_derives_score(self):
        snapshot = ReadinessSnapshot(sleep_quality=3, muscle_soreness=3, stress_level=2)
        assert snapshot.readiness_score == 24 + 18 + 24

    def test_supplied_score_is_kept(self):
        snapshot = ReadinessSnapshot(
            sleep_quality=5, muscle_soreness=1, stress_level=1, readiness_score=42
        )
        assert snapshot.readiness_score == 42

    @pytest.mark.parametrize("field", ["sleep_quality", "muscle_soreness", "stress_level"])
    def test_triad_values_are_bounded(self, field):
        values = {"sleep_quality": 3, "muscle_soreness": 3, "stress_level": 3}
        values[field] = 6
        with pytest.raises(ValidationError):
            ReadinessSnapshot(**values)


@pytest.mark.unit
class TestAnalyzeReadiness:
    @pytest.mark.parametrize(
        "score,suggestion",
        [
            (95, ReadinessSuggestion.FULL),
            (80, ReadinessSuggestion.FULL),
            (79, ReadinessSuggestion.MODERATE),
            (60, ReadinessSuggestion.MODERATE),
            (59, ReadinessSuggestion.LIGHT),
            (40, ReadinessSuggestion.LIGHT),
            (39, ReadinessSuggestion.REST),
        ],
    )
    def test_suggestion_bands(self, score, suggestion):
        snapshot = ReadinessSnapshot(
            sleep_quality=3, muscle_soreness=3, stress_level=3, readiness_score=score
        )
        assert analyze_readiness(snapshot).suggestion == suggestion

    def test_factor_impacts(self):
        analysis = analyze_readiness(
            ReadinessSnapshot(sleep_quality=2, muscle_soreness=4, stress_level=1)
        )
        assert analysis.sleep_impact == "negative"
        assert analysis.soreness_impact == "negative"
        assert analysis.stress_impact == "positive"

    def test_recommendations_for_poor_recovery(self):
        analysis = analyze_readiness(
            ReadinessSnapshot(sleep_quality=1, muscle_soreness=5, stress_level=5)
        )
        assert analysis.suggestion == ReadinessSuggestion.REST
        assert any("Poor sleep" in r for r in analysis.recommendations)
        assert any("High soreness" in r for r in analysis.recommendations)
        assert any("Elevated stress" in r for r in analysis.recommendations)
        assert analysis.recommendations[-1].startswith("Focus on mobility")

    def test_multipliers_follow_suggestion(self):
        analysis = analyze_readiness(
            ReadinessSnapshot(sleep_quality=5, muscle_soreness=1, stress_level=1)
        )
        assert analysis.multipliers.intensity_multiplier == 1.0
        assert analysis.multipliers.volume_multiplier == 1.0
