"""
Session replay CLI.

Part of FSE-112: Replay a session from a script

Drives one session from a YAML (or JSON) script and prints the resulting
session, sink events and planner hand-off as JSON. Used to reproduce
reported sessions and to eyeball rule changes.

Script format:

    today: 2026-03-02
    exercises:
      - {id: ex-squat, name: Back Squat}
      - {id: ex-curl, name: Barbell Curl, classification: accessory}
    history:
      ex-squat:
        - {session_date: 2026-02-27, weight: 220, reps: 5, rpe: 8}
    readiness: {sleep_quality: 5, muscle_soreness: 1, stress_level: 1}
    block_status: {phase: strength, week_number: 2, total_weeks: 6}
    events:
      - log: {reps: 5, rpe: 5.5, load: 220}
      - modify: too_hard
      - life_event: {kind: travel, days: 3}
      - command: {op: add_set, exercise_id: ex-curl}
      - advance: set
      - end: true
"""
import argparse
import json
import logging
import sys
from datetime import date
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from backend.core.modification_handler import ModificationIntent
from backend.core.set_analyzer import SetResult
from backend.main import SessionEngine, create_engine
from backend.settings import Settings
from domain.models import (
    BlockStatus,
    ExerciseDescriptor,
    HistoricalSet,
    LifeEventType,
    ReadinessSnapshot,
    SessionCommand,
)
from infrastructure.sinks import InMemorySetCompletionSink

logger = logging.getLogger(__name__)

MAPPING_EVENTS = ("log", "life_event", "command")


class ReplayError(Exception):
    """Raised when a replay script cannot be interpreted."""


def replay_script(
    engine: SessionEngine,
    script: Dict[str, Any],
    sink: InMemorySetCompletionSink,
) -> Dict[str, Any]:
    """
    Run a parsed replay script against an engine.

    Args:
        engine: Configured engine whose state machine writes to ``sink``
        script: Parsed script (see module docstring)
        sink: Buffer receiving completed sets

    Returns:
        JSON-ready dict with the session, sink events and event outcomes
    """
    if not script.get("exercises"):
        raise ReplayError("Script must list at least one exercise")

    today = script.get("today") or date.today()
    if isinstance(today, str):
        today = date.fromisoformat(today)

    exercises = [ExerciseDescriptor(**e) for e in script["exercises"]]
    history = {
        exercise_id: [
            HistoricalSet(exercise_id=exercise_id, **row) for row in rows or []
        ]
        for exercise_id, rows in (script.get("history") or {}).items()
    }
    memories = engine.resolver.resolve_many(history, today=today)
    readiness = (
        ReadinessSnapshot(**script["readiness"]) if script.get("readiness") else None
    )
    block_status = (
        BlockStatus(**script["block_status"]) if script.get("block_status") else None
    )

    ctx = engine.start_session(
        exercises,
        memories,
        readiness,
        block_status,
        user_id=script.get("user_id"),
        workout_id=script.get("workout_id"),
    )

    outcomes: List[Dict[str, Any]] = []
    for index, event in enumerate(script.get("events") or []):
        if not isinstance(event, dict) or len(event) != 1:
            raise ReplayError(f"Event {index} must be a mapping with exactly one key")
        (kind, payload), = event.items()

        if kind in MAPPING_EVENTS and not isinstance(payload, dict):
            raise ReplayError(f"Event {index}: {kind} payload must be a mapping")

        if kind == "log":
            current = ctx.current_set
            applied = engine.state_machine.log_set(
                ctx,
                payload.get("exercise_id") or (current.exercise_id if current else ""),
                payload.get("set_id") or (current.id if current else ""),
                SetResult(reps=payload["reps"], rpe=payload.get("rpe"), load=payload.get("load")),
            )
        elif kind == "modify":
            applied = engine.modifications.request(ctx, ModificationIntent(payload))
        elif kind == "life_event":
            applied = (
                engine.disruptions.handle(ctx, LifeEventType(payload["kind"]), payload["days"])
                is not None
            )
        elif kind == "command":
            applied = engine.state_machine.apply_command(ctx, SessionCommand(**payload)).success
        elif kind == "advance":
            if payload == "exercise":
                applied = engine.state_machine.advance_to_next_exercise(ctx)
            else:
                applied = engine.state_machine.advance_to_next_set(ctx)
        elif kind == "end":
            engine.state_machine.end_session(ctx)
            applied = True
        else:
            raise ReplayError(f"Unknown event type '{kind}' at index {index}")

        outcomes.append({"event": kind, "applied": applied, "agent_message": ctx.agent_message})

    progress = ctx.progress()
    return {
        "session": ctx.model_dump(mode="json"),
        "progress": {
            "completed": progress.completed,
            "total": progress.total,
            "percentage": progress.percentage,
        },
        "events": outcomes,
        "sink_events": [e.to_dict() for e in sink.events],
    }


def main():
    parser = argparse.ArgumentParser(description="Replay a training session from a YAML/JSON script")
    parser.add_argument("input", help="Script file path (YAML or JSON)")
    parser.add_argument("-o", "--output", help="Output JSON file path (default: stdout)")
    parser.add_argument("--log-level", help="Override the configured log level")

    args = parser.parse_args()

    try:
        # YAML is a superset of JSON, so one loader covers both
        with open(args.input, 'r') as f:
            script = yaml.safe_load(f)
        if not isinstance(script, dict):
            raise ReplayError("Script must be a mapping")

        overrides = {"log_level": args.log_level} if args.log_level else {}
        sink = InMemorySetCompletionSink()
        engine = create_engine(settings=Settings(**overrides), sink=sink)

        result = replay_script(engine, script, sink)
        output = json.dumps(result, indent=2)

        if args.output:
            with open(args.output, 'w') as f:
                f.write(output)
        else:
            print(output)

    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid script: {e}", file=sys.stderr)
        sys.exit(1)
    except (ReplayError, ValidationError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
