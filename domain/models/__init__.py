"""
Domain models for the adaptive session engine.

This package contains pure domain models that are independent of
infrastructure concerns (persistence, UI, external services).

These models represent the core training concepts:
- SessionContext: The live session aggregate, owned by the caller
- SessionExercise: An exercise in the queue with its ordered sets
- SetRecord: A set's prescription plus logged performance
- MovementMemory: Historical performance summary for one exercise
- ReadinessSnapshot: The daily sleep/soreness/stress check-in
- AgentDecision / FutureAdjustment / BlockStatus: Audit and planning records

Part of FSE-101: Define session engine domain model

Usage:
    >>> from domain.models import ExerciseDescriptor, SessionExercise, SetRecord

    >>> item = SessionExercise(
    ...     exercise=ExerciseDescriptor(id="ex-squat", name="Back Squat"),
    ...     sets=[SetRecord(exercise_id="ex-squat", ordinal=1, target_reps=5, target_load=200)],
    ... )

    >>> # Serialize to JSON
    >>> json_str = item.model_dump_json(indent=2)
"""

from domain.models.block import AdjustmentAction, BlockPhase, BlockStatus, FutureAdjustment
from domain.models.decision import AgentDecision, DecisionKind
from domain.models.disruption import DisruptionRecord, LifeEventType
from domain.models.exercise import ExerciseClassification, ExerciseDescriptor
from domain.models.movement_memory import (
    ConfidenceLevel,
    HistoricalSet,
    MovementMemory,
    PerformanceTrend,
    RepRange,
)
from domain.models.readiness import (
    MorningAdjustment,
    MorningAdjustmentType,
    MorningContext,
    ReadinessSignal,
    ReadinessSnapshot,
    compute_readiness_score,
)
from domain.models.session import (
    CompletedExerciseSets,
    ExerciseContext,
    SessionContext,
    SessionExercise,
    SessionProgress,
)
from domain.models.session_command import SessionCommand
from domain.models.set_record import SetRecord, SetStatus, SetTarget

__all__ = [
    # Session aggregate
    "SessionContext",
    "SessionExercise",
    "ExerciseContext",
    "SessionProgress",
    "CompletedExerciseSets",
    "SessionCommand",
    # Sets
    "SetRecord",
    "SetTarget",
    "SetStatus",
    # Exercises and memory
    "ExerciseDescriptor",
    "ExerciseClassification",
    "MovementMemory",
    "HistoricalSet",
    "RepRange",
    "ConfidenceLevel",
    "PerformanceTrend",
    # Readiness
    "ReadinessSnapshot",
    "ReadinessSignal",
    "MorningContext",
    "MorningAdjustment",
    "MorningAdjustmentType",
    "compute_readiness_score",
    # Audit and planning
    "AgentDecision",
    "DecisionKind",
    "FutureAdjustment",
    "AdjustmentAction",
    "BlockStatus",
    "BlockPhase",
    "DisruptionRecord",
    "LifeEventType",
]
