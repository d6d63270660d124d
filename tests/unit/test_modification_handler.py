"""
Unit tests for mid-session modification intents.

Part of FSE-111: Mid-session modification intents
"""

import pytest

from backend.core.modification_handler import ModificationHandler, ModificationIntent
from backend.core.session_engine import SESSION_COMPLETE_MESSAGE
from backend.core.disruption_handler import DisruptionHandler
from domain.models import (
    AdjustmentAction,
    BlockPhase,
    BlockStatus,
    DecisionKind,
    LifeEventType,
    SetStatus,
)
from tests.fakes import make_context, make_exercise

pytestmark = pytest.mark.unit


def loads(item):
    return [s.target_load for s in item.sets]


class TestLoadIntents:
    def test_too_hard_reduces_pending_sets_only(self, modifications, ctx):
        assert modifications.request(ctx, ModificationIntent.TOO_HARD) is True

        squat = ctx.queue[0]
        assert loads(squat) == [200, 180, 180]
        assert squat.sets[1].rationale == "Adjusted for difficulty"
        assert loads(ctx.queue[1]) == [50, 50, 50]
        assert ctx.decisions[-1].kind == DecisionKind.WEIGHT_DECREASE
        assert ctx.agent_message == "Got it. I've reduced the load for your remaining sets."

    def test_too_easy_includes_active_set(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.TOO_EASY)
        assert loads(ctx.queue[0]) == [210, 210, 210]
        assert ctx.decisions[-1].kind == DecisionKind.WEIGHT_INCREASE

    def test_bodyweight_sets_keep_no_load(self, modifications):
        ctx = make_context([make_exercise("ex-pullup", "Pull-Up", load=None)])
        modifications.request(ctx, ModificationIntent.TOO_HARD)
        assert loads(ctx.queue[0]) == [None, None, None]

    def test_pain_suggests_rest(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.PAIN)
        assert ctx.decisions[-1].kind == DecisionKind.REST_SUGGESTION
        assert ctx.decisions[-1].rationale == "Pain reported during Back Squat"
        assert ctx.agent_message.startswith("Pain reported.")
        assert loads(ctx.queue[0]) == [200, 200, 200]


class TestVolumeIntents:
    def test_fatigue_removes_one_pending_set(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.FATIGUE)
        assert len(ctx.queue[0].sets) == 2
        assert ctx.decisions[-1].kind == DecisionKind.VOLUME_ADJUSTMENT

    def test_fatigue_never_drops_the_active_set(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.FATIGUE)
        modifications.request(ctx, ModificationIntent.FATIGUE)
        decisions = len(ctx.decisions)

        modifications.request(ctx, ModificationIntent.FATIGUE)
        assert len(ctx.queue[0].sets) == 1
        assert ctx.queue[0].sets[0].status == SetStatus.ACTIVE
        assert len(ctx.decisions) == decisions
        assert ctx.agent_message == "No more sets to remove. Let's finish this one strong."

    def test_add_set(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.ADD_SET)
        squat = ctx.queue[0]
        assert len(squat.sets) == 4
        assert squat.sets[-1].status == SetStatus.PENDING
        assert squat.sets[-1].ordinal == 4

    def test_remove_set(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.REMOVE_SET)
        assert [s.ordinal for s in ctx.queue[0].sets] == [1, 2]
        assert ctx.agent_message == "Removed a set."

    def test_time_crunch_trims_every_remaining_exercise(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.TIME_CRUNCH)
        assert [len(item.sets) for item in ctx.queue] == [2, 2]
        assert "trimmed 2 sets" in ctx.agent_message
        assert ctx.decisions[-1].kind == DecisionKind.VOLUME_ADJUSTMENT

    def test_time_crunch_on_lean_session(self, modifications):
        ctx = make_context(
            [
                make_exercise("ex-squat", "Back Squat", sets=1),
                make_exercise("ex-curl", "Barbell Curl", sets=1),
            ]
        )
        modifications.request(ctx, ModificationIntent.TIME_CRUNCH)
        assert [len(item.sets) for item in ctx.queue] == [1, 1]
        assert ctx.agent_message == "You're already lean on sets. Let's finish strong."
        assert ctx.decisions == []


class TestNavigationIntents:
    def test_skip_exercise(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.SKIP_EXERCISE)
        assert all(s.skipped for s in ctx.queue[0].sets)
        assert ctx.current_exercise.exercise_id == "ex-curl"
        assert ctx.agent_message == "Exercise skipped. Moving to the next one."

    def test_skipping_the_last_exercise_completes(self, modifications):
        ctx = make_context([make_exercise("ex-squat", "Back Squat")])
        modifications.request(ctx, ModificationIntent.SKIP_EXERCISE)
        assert ctx.is_complete is True
        assert ctx.agent_message == SESSION_COMPLETE_MESSAGE

    def test_swap_only_records_the_request(self, modifications, ctx):
        before = ctx.model_dump(include={"queue"})
        modifications.request(ctx, ModificationIntent.SWAP_EXERCISE)
        assert ctx.model_dump(include={"queue"}) == before
        assert ctx.decisions[-1].kind == DecisionKind.EXERCISE_SWAP


class TestLifeEventIntents:
    def test_travel_uses_default_duration(self, modifications, ctx):
        assert modifications.request(ctx, ModificationIntent.TRAVEL) is True
        assert ctx.disruptions[-1].event == LifeEventType.TRAVEL
        assert ctx.disruptions[-1].duration_days == 3
        assert ctx.future_adjustments[0].action == AdjustmentAction.ADD_VOLUME

    def test_sick_clears_the_session(self, modifications, ctx):
        modifications.request(ctx, ModificationIntent.SICK)
        assert ctx.disruptions[-1].event == LifeEventType.SICKNESS
        assert ctx.is_complete is True

    def test_configured_durations(self, ctx):
        handler = ModificationHandler(DisruptionHandler(), travel_default_days=10)
        handler.request(ctx, ModificationIntent.TRAVEL)
        assert ctx.disruptions[-1].duration_days == 10


class TestNoCurrentExercise:
    def test_completed_session_ignores_intents(self, modifications):
        ctx = make_context([make_exercise("ex-squat", "Back Squat", sets=1)])
        modifications.request(ctx, ModificationIntent.SKIP_EXERCISE)

        assert modifications.request(ctx, ModificationIntent.TOO_HARD) is False
        assert ctx.ignored_events == 1

    def test_ended_session_ignores_intents(self, machine, modifications, ctx):
        machine.end_session(ctx)
        assert modifications.request(ctx, ModificationIntent.ADD_SET) is False
        assert len(ctx.queue[0].sets) == 3

    @pytest.mark.parametrize("intent", [ModificationIntent.TRAVEL, ModificationIntent.SICK])
    def test_ended_session_ignores_life_event_intents(self, machine, modifications, intent):
        block = BlockStatus(block_id="block-1", phase=BlockPhase.STRENGTH, week_number=2, total_weeks=6)
        ctx = make_context(
            [make_exercise("ex-squat", "Back Squat", sets=2, load=100, reps=10)],
            block_status=block,
        )
        machine.end_session(ctx)

        assert modifications.request(ctx, intent) is False
        assert ctx.ignored_events == 1
        assert ctx.disruptions == []
        assert ctx.future_adjustments == []
        assert ctx.block_status.volume_debt == 0
        assert len(ctx.queue[0].sets) == 2
        assert {s.target_load for s in ctx.queue[0].sets} == {100}


@pytest.mark.parametrize("intent", list(ModificationIntent))
def test_single_active_set_after_any_intent(modifications, ctx, intent):
    modifications.request(ctx, intent)
    assert ctx.active_set_count == (0 if ctx.is_complete else 1)
