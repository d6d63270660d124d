"""
Session queue aggregate and the explicit session context.

Part of FSE-101: Define session engine domain model
Part of FSE-107: Session state machine

The SessionContext is owned by the calling layer and passed into every
engine operation. It is the only place live session state lives; there is
no module-level store.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field

from domain.models.block import BlockStatus, FutureAdjustment
from domain.models.decision import AgentDecision
from domain.models.disruption import DisruptionRecord
from domain.models.exercise import ExerciseDescriptor
from domain.models.movement_memory import MovementMemory
from domain.models.readiness import MorningContext, ReadinessSnapshot
from domain.models.set_record import SetRecord, SetStatus


class ExerciseContext(BaseModel):
    """Movement memory snapshot used to seed an exercise's sets."""

    last_performance: Optional[MovementMemory] = None
    suggested_weight: Optional[float] = None
    suggested_reps: Optional[int] = None


class SessionExercise(BaseModel):
    """
    One exercise in the live queue with its ordered sets.

    Examples:
        >>> exercise = SessionExercise(
        ...     exercise=ExerciseDescriptor(id="ex-squat", name="Back Squat"),
        ...     sets=[SetRecord(exercise_id="ex-squat", ordinal=1, target_reps=5)],
        ... )
        >>> exercise.exercise_id
        'ex-squat'
    """

    exercise: ExerciseDescriptor
    sets: List[SetRecord] = Field(..., min_length=1)
    context: ExerciseContext = Field(default_factory=ExerciseContext)

    @property
    def exercise_id(self) -> str:
        return self.exercise.id

    @property
    def name(self) -> str:
        return self.exercise.name

    @property
    def pending_sets(self) -> List[SetRecord]:
        return [s for s in self.sets if s.status == SetStatus.PENDING]

    @property
    def remaining_sets(self) -> List[SetRecord]:
        """Sets not yet completed (the active one included)."""
        return [s for s in self.sets if s.status != SetStatus.COMPLETED]

    @property
    def completed_sets(self) -> List[SetRecord]:
        return [s for s in self.sets if s.status == SetStatus.COMPLETED]

    def find_set(self, set_id: str) -> Optional[int]:
        for idx, record in enumerate(self.sets):
            if record.id == set_id:
                return idx
        return None

    def renumber(self) -> None:
        """Make ordinals 1-based and contiguous again after a removal."""
        for idx, record in enumerate(self.sets):
            record.ordinal = idx + 1


@dataclass
class SessionProgress:
    """Completed/total sets across the whole queue."""

    completed: int
    total: int

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0

    @property
    def percentage(self) -> int:
        return round(self.ratio * 100)


@dataclass
class CompletedExerciseSets:
    """Completed sets of one exercise, grouped for batch export."""

    exercise_id: str
    sets: List[SetRecord]


class SessionContext(BaseModel):
    """
    Explicit live-session state, passed by reference into the engine.

    The queue is mutated in place for the session's lifetime; the block
    status held here is the engine's proposed copy, never the planner's
    original.
    """

    session_id: str = Field(default_factory=lambda: f"session-{uuid.uuid4().hex[:12]}")
    user_id: Optional[str] = None
    workout_id: Optional[str] = None

    is_active: bool = False
    is_complete: bool = False
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    queue: List[SessionExercise] = Field(default_factory=list)
    exercise_index: int = 0
    set_index: int = 0

    agent_message: Optional[str] = None
    decisions: List[AgentDecision] = Field(default_factory=list)
    readiness: Optional[ReadinessSnapshot] = None
    morning_context: Optional[MorningContext] = None

    block_status: Optional[BlockStatus] = None
    future_adjustments: List[FutureAdjustment] = Field(default_factory=list)
    disruptions: List[DisruptionRecord] = Field(default_factory=list)

    # Debug counters
    ignored_events: int = 0
    sink_failures: int = 0

    @classmethod
    def start(
        cls,
        queue: List[SessionExercise],
        *,
        readiness: Optional[ReadinessSnapshot] = None,
        block_status: Optional[BlockStatus] = None,
        user_id: Optional[str] = None,
        workout_id: Optional[str] = None,
    ) -> "SessionContext":
        """Create a running session around a built (and shaped) queue."""
        ctx = cls(
            queue=queue,
            readiness=readiness,
            block_status=block_status.model_copy() if block_status else None,
            user_id=user_id,
            workout_id=workout_id,
            is_active=True,
            started_at=datetime.now(timezone.utc),
        )
        ctx.normalize_position()
        return ctx

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_exercise(self, exercise_id: str) -> Optional[int]:
        for idx, item in enumerate(self.queue):
            if item.exercise_id == exercise_id:
                return idx
        return None

    def iter_sets(self) -> Iterator[Tuple[SessionExercise, SetRecord]]:
        for item in self.queue:
            for record in item.sets:
                yield item, record

    @property
    def current_exercise(self) -> Optional[SessionExercise]:
        if self.is_complete or not self.queue:
            return None
        if 0 <= self.exercise_index < len(self.queue):
            return self.queue[self.exercise_index]
        return None

    @property
    def current_set(self) -> Optional[SetRecord]:
        exercise = self.current_exercise
        if exercise is None or not 0 <= self.set_index < len(exercise.sets):
            return None
        return exercise.sets[self.set_index]

    @property
    def active_set_count(self) -> int:
        return sum(1 for _, record in self.iter_sets() if record.status == SetStatus.ACTIVE)

    def progress(self) -> SessionProgress:
        total = 0
        completed = 0
        for _, record in self.iter_sets():
            total += 1
            if record.status == SetStatus.COMPLETED:
                completed += 1
        return SessionProgress(completed=completed, total=total)

    def completed_sets_by_exercise(self) -> List[CompletedExerciseSets]:
        """Logged sets grouped per exercise, skipped sets excluded."""
        return [
            CompletedExerciseSets(
                exercise_id=item.exercise_id,
                sets=[s for s in item.completed_sets if not s.skipped],
            )
            for item in self.queue
        ]

    # ------------------------------------------------------------------
    # Invariant
    # ------------------------------------------------------------------

    def normalize_position(self) -> Optional[Tuple[int, int]]:
        """
        Re-establish the single-active invariant.

        The first non-completed set in queue order becomes active and every
        later non-completed set pending. Exercises left without sets are
        dropped. Returns the active position, or None when nothing remains.
        """
        self.queue = [item for item in self.queue if item.sets]

        active: Optional[Tuple[int, int]] = None
        for ex_idx, item in enumerate(self.queue):
            for set_idx, record in enumerate(item.sets):
                if record.status == SetStatus.COMPLETED:
                    continue
                if active is None:
                    record.status = SetStatus.ACTIVE
                    active = (ex_idx, set_idx)
                else:
                    record.status = SetStatus.PENDING

        if active is None:
            self.is_complete = True
            self.exercise_index = max(len(self.queue) - 1, 0)
            self.set_index = (
                max(len(self.queue[-1].sets) - 1, 0) if self.queue else 0
            )
        else:
            self.is_complete = False
            self.exercise_index, self.set_index = active
        return active
