"""
Collaborator Interfaces (Ports) for the Adaptive Session Engine.

Part of FSE-110: Session start collaborators

This package defines the interfaces the engine needs from the outside world.
Implementations are provided in the infrastructure layer (sinks) or by the
host application (catalog, history, readiness and block stores).

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations supplied by the caller

Usage:
    from application.ports import ExerciseCatalog, SetCompletionSink

    class SessionService:
        def __init__(self, catalog: ExerciseCatalog, sink: SetCompletionSink):
            self.catalog = catalog
            self.sink = sink
"""

# Session start inputs
from application.ports.exercise_catalog import ExerciseCatalog
from application.ports.movement_history_repository import MovementHistoryRepository
from application.ports.readiness_repository import ReadinessRepository
from application.ports.block_status_repository import BlockStatusRepository

# Persistence sink
from application.ports.set_completion_sink import (
    SetCompletedEvent,
    SetCompletionSink,
)

__all__ = [
    "ExerciseCatalog",
    "MovementHistoryRepository",
    "ReadinessRepository",
    "BlockStatusRepository",
    "SetCompletedEvent",
    "SetCompletionSink",
]
