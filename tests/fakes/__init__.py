"""
Fake Port Implementations for Testing.

Part of FSE-110: Session start collaborators

This package provides in-memory fake implementations of the engine's ports
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation

Usage:
    from tests.fakes import FakeExerciseCatalog, FakeMovementHistoryRepository

    catalog = FakeExerciseCatalog()
    history = FakeMovementHistoryRepository()
    history.seed("user-1", "ex-squat", make_history("ex-squat", [[(200, 5, 8)]], last_date=today))
"""

from tests.fakes.exercise_catalog import FakeExerciseCatalog
from tests.fakes.movement_history_repository import (
    FakeMovementHistoryRepository,
    make_history,
)
from tests.fakes.readiness_repository import FakeReadinessRepository
from tests.fakes.block_status_repository import FakeBlockStatusRepository
from tests.fakes.set_completion_sink import (
    FailingSetCompletionSink,
    FlakySetCompletionSink,
)
from tests.fakes.session_factory import default_queue, make_context, make_exercise

__all__ = [
    "FakeExerciseCatalog",
    "FakeMovementHistoryRepository",
    "make_history",
    "FakeReadinessRepository",
    "FakeBlockStatusRepository",
    "FailingSetCompletionSink",
    "FlakySetCompletionSink",
    "make_exercise",
    "make_context",
    "default_queue",
]
