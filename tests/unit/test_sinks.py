"""
Unit tests for the set completion sinks.

Part of FSE-107: Session state machine
"""

import json
import logging

import pytest

from application.ports import SetCompletedEvent
from infrastructure.sinks import InMemorySetCompletionSink, LoggingSetCompletionSink

pytestmark = pytest.mark.unit


def _event(exercise_id="ex-squat", ordinal=1):
    return SetCompletedEvent(
        session_id="session-1",
        exercise_id=exercise_id,
        set_id=f"set-{exercise_id}-{ordinal}",
        ordinal=ordinal,
        target_reps=5,
        target_rpe=8,
        target_load=200,
        actual_weight=200,
        actual_reps=5,
        actual_rpe=8.5,
    )


class TestInMemorySink:
    def test_buffers_in_delivery_order(self):
        sink = InMemorySetCompletionSink()
        events = [_event(ordinal=1), _event("ex-curl", 1), _event(ordinal=2)]
        for event in events:
            sink.on_set_completed(event)

        assert sink.events == events
        assert len(sink) == 3

    def test_groups_by_exercise(self):
        sink = InMemorySetCompletionSink()
        for event in [_event(ordinal=1), _event("ex-curl", 1), _event(ordinal=2)]:
            sink.on_set_completed(event)

        grouped = sink.events_by_exercise()
        assert [e.ordinal for e in grouped["ex-squat"]] == [1, 2]
        assert list(grouped) == ["ex-squat", "ex-curl"]

    def test_flush_empties_the_buffer(self):
        sink = InMemorySetCompletionSink()
        sink.on_set_completed(_event())

        flushed = sink.flush()
        assert len(flushed) == 1
        assert len(sink) == 0
        assert sink.flush() == []

    def test_events_returns_a_copy(self):
        sink = InMemorySetCompletionSink()
        sink.on_set_completed(_event())
        sink.events.clear()
        assert len(sink) == 1


class TestLoggingSink:
    def test_logs_one_json_line_per_set(self, caplog):
        sink = LoggingSetCompletionSink()
        with caplog.at_level(logging.INFO, logger="infrastructure.sinks.logging_sink"):
            sink.on_set_completed(_event())

        (record,) = caplog.records
        prefix, payload = record.getMessage().split(" ", 1)
        assert prefix == "set_completed"
        data = json.loads(payload)
        assert data["exercise_id"] == "ex-squat"
        assert data["actual_rpe"] == 8.5
        assert data["completed_at"].endswith("+00:00")

    def test_configurable_level(self, caplog):
        sink = LoggingSetCompletionSink(level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="infrastructure.sinks.logging_sink"):
            sink.on_set_completed(_event())
        assert caplog.records[0].levelno == logging.DEBUG


def test_event_to_dict_is_json_serializable():
    data = _event().to_dict()
    assert json.loads(json.dumps(data))["set_id"] == "set-ex-squat-1"
