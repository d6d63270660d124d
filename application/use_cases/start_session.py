"""
StartSession Use Case.

Part of FSE-110: Session start collaborators

Orchestrates everything that happens before the first set is logged.

Workflow:
1. Resolve exercise descriptors via the catalog (unknown ids are reported)
2. Resolve movement memory per exercise from recent history
3. Read today's readiness check-in and the active training block
4. Build the initial queue
5. Apply the morning readiness mutation
6. Return a running SessionContext
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from application.ports import (
    BlockStatusRepository,
    ExerciseCatalog,
    MovementHistoryRepository,
    ReadinessRepository,
)
from backend.core.movement_memory import MovementMemoryResolver
from backend.core.queue_builder import SessionQueueBuilder
from backend.core.readiness_shaper import ReadinessShaper
from domain.models import (
    BlockStatus,
    ExerciseDescriptor,
    MovementMemory,
    ReadinessSnapshot,
    SessionContext,
)

logger = logging.getLogger(__name__)


def open_session(
    queue_builder: SessionQueueBuilder,
    shaper: ReadinessShaper,
    exercises: Sequence[ExerciseDescriptor],
    memories: Optional[Dict[str, Optional[MovementMemory]]] = None,
    readiness: Optional[ReadinessSnapshot] = None,
    block_status: Optional[BlockStatus] = None,
    *,
    user_id: Optional[str] = None,
    workout_id: Optional[str] = None,
) -> SessionContext:
    """
    Build the queue, apply the morning mutation and start a session.

    Shared by StartSessionUseCase and SessionEngine.start_session, which
    differ only in where the inputs come from.
    """
    queue = queue_builder.build(exercises, memories, readiness)
    shaping = shaper.shape(queue, readiness)
    context = SessionContext.start(
        queue,
        readiness=readiness,
        block_status=block_status,
        user_id=user_id,
        workout_id=workout_id,
    )
    context.morning_context = shaping.morning_context
    context.agent_message = shaping.agent_message

    logger.info(
        f"Started session {context.session_id} for user {user_id}: "
        f"{len(queue)} exercises, {context.progress().total} sets, "
        f"signal={shaping.morning_context.signal.value}"
    )
    return context


@dataclass
class StartSessionResult:
    """Result of the StartSession use case execution."""

    success: bool
    context: Optional[SessionContext] = None
    error: Optional[str] = None
    missing_exercise_ids: List[str] = field(default_factory=list)


class StartSessionUseCase:
    """
    Use case for starting an adaptive training session.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = StartSessionUseCase(
        ...     catalog=catalog,
        ...     history_repo=history_repo,
        ...     readiness_repo=readiness_repo,
        ...     block_repo=block_repo,
        ... )
        >>> result = use_case.execute(user_id="user-123", exercise_ids=["ex-squat", "ex-curl"])
        >>> if result.success:
        ...     print(result.context.agent_message)
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        history_repo: MovementHistoryRepository,
        readiness_repo: Optional[ReadinessRepository] = None,
        block_repo: Optional[BlockStatusRepository] = None,
        *,
        resolver: Optional[MovementMemoryResolver] = None,
        queue_builder: Optional[SessionQueueBuilder] = None,
        shaper: Optional[ReadinessShaper] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            catalog: Exercise descriptor lookup
            history_repo: Recent logged sets per exercise
            readiness_repo: Daily check-ins (optional; missing → neutral day)
            block_repo: Active training block (optional)
            resolver: Movement memory resolver
            queue_builder: Initial queue builder
            shaper: Morning readiness shaper
        """
        self._catalog = catalog
        self._history_repo = history_repo
        self._readiness_repo = readiness_repo
        self._block_repo = block_repo
        self._resolver = resolver or MovementMemoryResolver()
        self._queue_builder = queue_builder or SessionQueueBuilder()
        self._shaper = shaper or ReadinessShaper()

    def execute(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
        *,
        workout_id: Optional[str] = None,
        day: Optional[date] = None,
    ) -> StartSessionResult:
        """
        Execute the start session workflow.

        Args:
            user_id: User starting the session
            exercise_ids: Planned exercises, in session order
            workout_id: Planned workout the session comes from (optional)
            day: Session date (defaults to today)

        Returns:
            StartSessionResult with the running session context
        """
        if not exercise_ids:
            return StartSessionResult(success=False, error="No exercises requested")

        day = day or date.today()
        try:
            # Step 1: Resolve descriptors in requested order
            found = {d.id: d for d in self._catalog.get_exercises(list(exercise_ids))}
            exercises: List[ExerciseDescriptor] = [found[i] for i in exercise_ids if i in found]
            missing = [i for i in exercise_ids if i not in found]
            if missing:
                logger.warning(f"Unknown exercise ids for user {user_id}: {missing}")
            if not exercises:
                return StartSessionResult(
                    success=False,
                    error="None of the requested exercises exist",
                    missing_exercise_ids=missing,
                )

            # Step 2: Movement memory
            memories: Dict[str, Optional[MovementMemory]] = {}
            for exercise in exercises:
                history = self._history_repo.get_recent_sets(
                    user_id, exercise.id, limit=self._resolver.history_limit
                )
                memories[exercise.id] = self._resolver.resolve(exercise.id, history, today=day)

            # Step 3: Readiness and block status
            readiness = (
                self._readiness_repo.get_snapshot(user_id, day) if self._readiness_repo else None
            )
            block_status = self._block_repo.get_active_block(user_id) if self._block_repo else None

            # Step 4-6: Build, shape and start
            context = open_session(
                self._queue_builder,
                self._shaper,
                exercises,
                memories,
                readiness,
                block_status,
                user_id=user_id,
                workout_id=workout_id,
            )
            return StartSessionResult(
                success=True,
                context=context,
                missing_exercise_ids=missing,
            )

        except Exception as e:
            logger.exception(f"StartSession use case failed: {e}")
            return StartSessionResult(success=False, error=str(e))
