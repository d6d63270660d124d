"""
Unit tests for the readiness shaper (morning context injection).

Part of FSE-105: Morning context injection
"""

import pytest

from backend.core.readiness_shaper import ReadinessShaper, classify_signal
from domain.models import (
    ExerciseClassification,
    MorningAdjustmentType,
    ReadinessSignal,
    ReadinessSnapshot,
    SetStatus,
)
from tests.fakes import make_exercise

pytestmark = pytest.mark.unit


def _readiness(score, sleep=3, soreness=3, stress=3):
    return ReadinessSnapshot(
        sleep_quality=sleep,
        muscle_soreness=soreness,
        stress_level=stress,
        readiness_score=score,
    )


def _queue():
    return [
        make_exercise("ex-squat", "Back Squat", load=220, reps=5, rpe=8),
        make_exercise("ex-curl", "Barbell Curl", load=50, reps=10),
        make_exercise("ex-raise", "Lateral Raise", load=20, reps=12),
    ]


@pytest.fixture
def shaper():
    return ReadinessShaper()


class TestClassifySignal:
    def test_no_snapshot_is_neutral(self):
        assert classify_signal(None) == ReadinessSignal.NEUTRAL

    def test_green_needs_score_and_sleep(self):
        assert classify_signal(_readiness(85, sleep=5)) == ReadinessSignal.GREEN
        assert classify_signal(_readiness(85, sleep=3)) == ReadinessSignal.NEUTRAL

    def test_red_below_forty(self):
        assert classify_signal(_readiness(35)) == ReadinessSignal.RED

    def test_red_wins_over_amber(self):
        # score 35 also satisfies the amber condition
        assert classify_signal(_readiness(35, soreness=5)) == ReadinessSignal.RED

    def test_amber_on_low_score(self):
        assert classify_signal(_readiness(45)) == ReadinessSignal.AMBER

    def test_amber_on_high_soreness(self):
        assert classify_signal(_readiness(70, soreness=5)) == ReadinessSignal.AMBER

    def test_soreness_four_is_not_amber(self):
        assert classify_signal(_readiness(70, soreness=4)) == ReadinessSignal.NEUTRAL

    @pytest.mark.parametrize("score", [50, 60, 79])
    def test_neutral_band(self, score):
        assert classify_signal(_readiness(score)) == ReadinessSignal.NEUTRAL


class TestGreen:
    def test_joker_set_added_to_first_compound(self, shaper):
        queue = _queue()
        result = shaper.shape(queue, _readiness(85, sleep=5))

        squat = queue[0]
        assert len(squat.sets) == 4
        joker = squat.sets[-1]
        assert joker.target_load == 230
        assert joker.target_reps == 3
        assert joker.target_rpe == 9
        assert joker.ordinal == 4
        assert joker.agent_adjusted is True
        assert joker.status == SetStatus.PENDING

        adjustment = result.morning_context.adjustment
        assert adjustment.type == MorningAdjustmentType.JOKER_SET_ADDED
        assert adjustment.affected_exercises == ["Back Squat"]
        assert result.morning_context.signal == ReadinessSignal.GREEN
        assert "Joker Set" in result.agent_message

    def test_accessories_untouched(self, shaper):
        queue = _queue()
        shaper.shape(queue, _readiness(85, sleep=5))
        assert [len(item.sets) for item in queue[1:]] == [3, 3]

    def test_curator_tag_picks_compound(self, shaper):
        queue = [
            make_exercise("ex-curl", "Barbell Curl"),
            make_exercise(
                "ex-hip-thrust",
                "Glute Bridge Machine",
                classification=ExerciseClassification.COMPOUND,
            ),
        ]
        shaper.shape(queue, _readiness(90, sleep=4))
        assert [len(item.sets) for item in queue] == [3, 4]

    def test_without_compound_nothing_changes(self, shaper):
        queue = _queue()[1:]
        result = shaper.shape(queue, _readiness(85, sleep=5))
        assert [len(item.sets) for item in queue] == [3, 3]
        assert result.morning_context.signal == ReadinessSignal.GREEN
        assert result.morning_context.adjustment.type == MorningAdjustmentType.NONE

    def test_bodyweight_joker_keeps_no_load(self, shaper):
        queue = [make_exercise("ex-pullup", "Pull-Up", load=None, reps=8)]
        shaper.shape(queue, _readiness(85, sleep=5))
        joker = queue[0].sets[-1]
        assert joker.target_load is None
        assert joker.target_reps == 6


class TestRed:
    def test_last_set_dropped_everywhere(self, shaper):
        queue = _queue()
        result = shaper.shape(queue, _readiness(35))

        assert [len(item.sets) for item in queue] == [2, 2, 2]
        adjustment = result.morning_context.adjustment
        assert adjustment.type == MorningAdjustmentType.FULL_VOLUME_REDUCED
        assert adjustment.affected_exercises == ["Back Squat", "Barbell Curl", "Lateral Raise"]

    def test_single_set_exercises_are_kept(self, shaper):
        queue = [make_exercise("ex-squat", "Back Squat", sets=1)]
        result = shaper.shape(queue, _readiness(30))
        assert len(queue[0].sets) == 1
        assert result.morning_context.adjustment.affected_exercises == []


class TestAmber:
    def test_only_accessories_lose_a_set(self, shaper):
        queue = _queue()
        result = shaper.shape(queue, _readiness(45))

        assert [len(item.sets) for item in queue] == [3, 2, 2]
        adjustment = result.morning_context.adjustment
        assert adjustment.type == MorningAdjustmentType.ACCESSORY_VOLUME_REDUCED
        assert adjustment.affected_exercises == ["Barbell Curl", "Lateral Raise"]
        assert adjustment.rationale.startswith("Low readiness score (45)")

    def test_soreness_rationale(self, shaper):
        result = shaper.shape(_queue(), _readiness(70, soreness=5))
        assert result.morning_context.adjustment.rationale.startswith("High soreness (5/5)")


class TestNeutral:
    def test_no_check_in(self, shaper):
        queue = _queue()
        result = shaper.shape(queue, None)

        assert [len(item.sets) for item in queue] == [3, 3, 3]
        context = result.morning_context
        assert context.signal == ReadinessSignal.NEUTRAL
        assert context.readiness_score is None
        assert context.adjustment.type == MorningAdjustmentType.NONE
        assert "No readiness check-in" in context.adjustment.rationale
        assert result.agent_message == "Session initialized. Let's get to work."

    def test_context_records_the_snapshot(self, shaper):
        result = shaper.shape(_queue(), _readiness(65, sleep=4, soreness=2))
        context = result.morning_context
        assert context.readiness_score == 65
        assert context.sleep_quality == 4
        assert context.soreness == 2


class TestStatuses:
    @pytest.mark.parametrize("score,sleep", [(85, 5), (35, 3), (45, 3), (65, 3)])
    def test_exactly_one_active_set_after_shaping(self, shaper, score, sleep):
        queue = _queue()
        shaper.shape(queue, _readiness(score, sleep=sleep))
        statuses = [s.status for item in queue for s in item.sets]
        assert statuses.count(SetStatus.ACTIVE) == 1
        assert queue[0].sets[0].status == SetStatus.ACTIVE

    def test_ordinals_stay_contiguous(self, shaper):
        queue = _queue()
        shaper.shape(queue, _readiness(35))
        for item in queue:
            assert [s.ordinal for s in item.sets] == list(range(1, len(item.sets) + 1))
