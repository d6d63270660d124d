"""
Session Queue Builder.

Part of FSE-104: Build the initial session queue

Combines exercise descriptors, movement memory and the day's readiness into
the initial ordered queue of sets. Missing memory or readiness falls back to
configured defaults; it is never an error.
"""
import logging
from typing import Dict, List, Optional, Sequence

from domain.models.exercise import ExerciseDescriptor
from domain.models.load import PLATE_INCREMENT, round_to_increment
from domain.models.movement_memory import MovementMemory
from domain.models.readiness import ReadinessSnapshot
from domain.models.session import ExerciseContext, SessionExercise
from domain.models.set_record import SetRecord, SetStatus

logger = logging.getLogger(__name__)


# Readiness thresholds for the starting load
LOW_READINESS_SCORE = 50
HIGH_READINESS_SCORE = 80
LOW_READINESS_FACTOR = 0.9
HIGH_READINESS_FACTOR = 1.025


def suggest_starting_load(
    memory: Optional[MovementMemory],
    readiness: Optional[ReadinessSnapshot],
    increment: float = PLATE_INCREMENT,
) -> Optional[float]:
    """
    Readiness-adjusted version of the last load.

    Below 50 readiness the load drops to 90%, above 80 it rises 2.5%. The
    result is always snapped to the plate increment.

    Returns:
        Suggested load, or None when there is no previous load
    """
    if memory is None or not memory.last_weight:
        return None

    load = memory.last_weight
    if readiness is not None and readiness.readiness_score is not None:
        if readiness.readiness_score < LOW_READINESS_SCORE:
            load *= LOW_READINESS_FACTOR
        elif readiness.readiness_score > HIGH_READINESS_SCORE:
            load *= HIGH_READINESS_FACTOR

    return round_to_increment(load, increment)


class SessionQueueBuilder:
    """
    Builds SessionExercises with default targets.

    Usage:
        >>> builder = SessionQueueBuilder()
        >>> queue = builder.build(exercises, memories, readiness)
        >>> queue[0].sets[0].status
        <SetStatus.ACTIVE: 'active'>
    """

    def __init__(
        self,
        default_sets: int = 3,
        default_reps: int = 8,
        default_rpe: float = 7,
        plate_increment: float = PLATE_INCREMENT,
    ):
        self.default_sets = default_sets
        self.default_reps = default_reps
        self.default_rpe = default_rpe
        self.plate_increment = plate_increment

    def build_exercise(
        self,
        exercise: ExerciseDescriptor,
        memory: Optional[MovementMemory],
        readiness: Optional[ReadinessSnapshot],
    ) -> SessionExercise:
        """Build one exercise with all of its sets pending."""
        load = suggest_starting_load(memory, readiness, self.plate_increment)
        set_count = (memory.last_sets if memory else None) or self.default_sets
        reps = (memory.typical_rep_max if memory else None) or self.default_reps
        rpe = (memory.avg_rpe if memory else None) or self.default_rpe

        sets = [
            SetRecord(
                exercise_id=exercise.id,
                ordinal=i + 1,
                target_reps=reps,
                target_rpe=rpe,
                target_load=load,
            )
            for i in range(set_count)
        ]
        return SessionExercise(
            exercise=exercise,
            sets=sets,
            context=ExerciseContext(
                last_performance=memory,
                suggested_weight=load,
                suggested_reps=reps,
            ),
        )

    def build(
        self,
        exercises: Sequence[ExerciseDescriptor],
        memories: Optional[Dict[str, Optional[MovementMemory]]] = None,
        readiness: Optional[ReadinessSnapshot] = None,
    ) -> List[SessionExercise]:
        """
        Build the initial queue.

        Args:
            exercises: Ordered exercise list
            memories: Movement memory per exercise id (missing → defaults)
            readiness: Today's readiness snapshot (optional)

        Returns:
            Ordered queue with the first set of the first exercise active
        """
        memories = memories or {}
        queue = [
            self.build_exercise(exercise, memories.get(exercise.id), readiness)
            for exercise in exercises
        ]
        if queue:
            queue[0].sets[0].status = SetStatus.ACTIVE

        logger.debug(
            f"Built queue with {len(queue)} exercises, "
            f"{sum(len(item.sets) for item in queue)} sets"
        )
        return queue
