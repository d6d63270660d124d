"""
Domain layer for the adaptive session engine.

This package contains pure domain models that are independent of
infrastructure concerns (persistence, UI, external services).

Part of FSE-101: Define session engine domain model
"""

from domain.models import (
    ExerciseDescriptor,
    MovementMemory,
    ReadinessSnapshot,
    SessionContext,
    SessionExercise,
    SetRecord,
    SetStatus,
)

__all__ = [
    "ExerciseDescriptor",
    "MovementMemory",
    "ReadinessSnapshot",
    "SessionContext",
    "SessionExercise",
    "SetRecord",
    "SetStatus",
]
