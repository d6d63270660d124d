"""
Unit tests for the session queue builder.

Part of FSE-104: Build the initial session queue
"""

import pytest

from backend.core.queue_builder import SessionQueueBuilder, suggest_starting_load
from domain.models import (
    ExerciseDescriptor,
    MovementMemory,
    ReadinessSnapshot,
    RepRange,
    SetStatus,
)
from domain.models.load import is_quantized

SQUAT = ExerciseDescriptor(id="ex-squat", name="Back Squat")
CURL = ExerciseDescriptor(id="ex-curl", name="Barbell Curl")


def _readiness(score):
    return ReadinessSnapshot(
        sleep_quality=3, muscle_soreness=3, stress_level=3, readiness_score=score
    )


@pytest.fixture
def builder():
    return SessionQueueBuilder()


@pytest.fixture
def squat_memory():
    return MovementMemory(
        exercise_id="ex-squat",
        last_weight=201,
        last_reps=5,
        last_sets=4,
        avg_rpe=8.5,
        typical_rep_range=RepRange(min=3, max=6),
        exposure_count=6,
    )


@pytest.mark.unit
class TestSuggestStartingLoad:
    def test_no_memory(self):
        assert suggest_starting_load(None, None) is None

    def test_memory_without_load(self):
        assert suggest_starting_load(MovementMemory(exercise_id="ex-pullup", last_reps=8), None) is None

    def test_rounds_last_load(self, squat_memory):
        assert suggest_starting_load(squat_memory, None) == 200

    def test_low_readiness_reduces(self, squat_memory):
        # 201 × 0.9 = 180.9 → 180
        assert suggest_starting_load(squat_memory, _readiness(45)) == 180

    def test_high_readiness_increases(self, squat_memory):
        # 201 × 1.025 = 206.025 → 205
        assert suggest_starting_load(squat_memory, _readiness(85)) == 205

    @pytest.mark.parametrize("score", [50, 65, 80])
    def test_boundaries_are_unadjusted(self, squat_memory, score):
        assert suggest_starting_load(squat_memory, _readiness(score)) == 200


@pytest.mark.unit
class TestBuild:
    def test_defaults_without_memory(self, builder):
        queue = builder.build([CURL])
        sets = queue[0].sets
        assert len(sets) == 3
        assert all(s.target_reps == 8 and s.target_rpe == 7 for s in sets)
        assert all(s.target_load is None for s in sets)
        assert queue[0].context.last_performance is None

    def test_memory_drives_targets(self, builder, squat_memory):
        item = builder.build([SQUAT], {"ex-squat": squat_memory})[0]
        assert len(item.sets) == 4
        assert {s.target_reps for s in item.sets} == {6}
        assert {s.target_rpe for s in item.sets} == {8.5}
        assert {s.target_load for s in item.sets} == {200}
        assert item.context.suggested_weight == 200
        assert item.context.suggested_reps == 6

    def test_ordinals_are_contiguous(self, builder, squat_memory):
        item = builder.build([SQUAT], {"ex-squat": squat_memory})[0]
        assert [s.ordinal for s in item.sets] == [1, 2, 3, 4]

    def test_first_set_active_everything_else_pending(self, builder, squat_memory):
        queue = builder.build([SQUAT, CURL], {"ex-squat": squat_memory})
        statuses = [s.status for item in queue for s in item.sets]
        assert statuses[0] == SetStatus.ACTIVE
        assert all(status == SetStatus.PENDING for status in statuses[1:])

    def test_loads_are_quantized(self, builder, squat_memory):
        queue = builder.build([SQUAT], {"ex-squat": squat_memory}, _readiness(90))
        assert all(is_quantized(s.target_load) for s in queue[0].sets)

    def test_configured_defaults(self):
        builder = SessionQueueBuilder(default_sets=5, default_reps=12, default_rpe=6)
        sets = builder.build([CURL])[0].sets
        assert len(sets) == 5
        assert sets[0].target_reps == 12
        assert sets[0].target_rpe == 6

    def test_empty_exercise_list(self, builder):
        assert builder.build([]) == []
