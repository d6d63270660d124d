"""
Readiness Shaper ("morning context injection").

Part of FSE-105: Morning context injection

Runs once on the freshly built queue, before any set is logged, and applies
exactly one mutation based on a discrete readiness signal:

| Order | Condition                    | Signal  | Mutation                                   |
|-------|------------------------------|---------|--------------------------------------------|
| 1     | score ≥ 80 and sleep ≥ 4     | green   | Joker set on the first compound exercise   |
| 2     | score < 40                   | red     | Drop last set of every exercise            |
| 3     | score < 50 or soreness > 4   | amber   | Drop last set of every accessory exercise  |
| 4     | otherwise                    | neutral | None                                       |

Red is checked before amber so that a sub-40 score reduces every exercise.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from backend.core.exercise_classifier import is_accessory, is_compound
from domain.models.load import PLATE_INCREMENT, scale_load
from domain.models.readiness import (
    MorningAdjustment,
    MorningAdjustmentType,
    MorningContext,
    ReadinessSignal,
    ReadinessSnapshot,
)
from domain.models.session import SessionExercise
from domain.models.set_record import SetRecord, SetStatus

logger = logging.getLogger(__name__)


GREEN_MIN_SCORE = 80
GREEN_MIN_SLEEP = 4
RED_MAX_SCORE = 40  # exclusive
AMBER_MAX_SCORE = 50  # exclusive
AMBER_MIN_SORENESS = 4  # exclusive

JOKER_LOAD_FACTOR = 1.05
JOKER_TARGET_RPE = 9
JOKER_REP_REDUCTION = 2
JOKER_DEFAULT_REPS = 3


@dataclass
class ShapingResult:
    """Outcome of one shaper run."""
    morning_context: MorningContext
    agent_message: str


def classify_signal(readiness: Optional[ReadinessSnapshot]) -> ReadinessSignal:
    """
    Pick the single readiness signal for today.

    Args:
        readiness: Today's snapshot (None → neutral)

    Returns:
        The signal; exactly one fires.
    """
    if readiness is None or readiness.readiness_score is None:
        return ReadinessSignal.NEUTRAL

    score = readiness.readiness_score
    if score >= GREEN_MIN_SCORE and readiness.sleep_quality >= GREEN_MIN_SLEEP:
        return ReadinessSignal.GREEN
    if score < RED_MAX_SCORE:
        return ReadinessSignal.RED
    if score < AMBER_MAX_SCORE or readiness.muscle_soreness > AMBER_MIN_SORENESS:
        return ReadinessSignal.AMBER
    return ReadinessSignal.NEUTRAL


class ReadinessShaper:
    """
    Applies the morning readiness mutation to a queue, in place.

    Usage:
        >>> shaper = ReadinessShaper()
        >>> result = shaper.shape(queue, readiness)
        >>> result.morning_context.signal
        <ReadinessSignal.GREEN: 'green'>
    """

    def __init__(self, plate_increment: float = PLATE_INCREMENT):
        self.plate_increment = plate_increment

    def shape(
        self,
        queue: List[SessionExercise],
        readiness: Optional[ReadinessSnapshot],
    ) -> ShapingResult:
        """
        Apply exactly one readiness mutation.

        Args:
            queue: Freshly built queue (mutated in place)
            readiness: Today's snapshot

        Returns:
            ShapingResult with the morning context and the agent message
        """
        signal = classify_signal(readiness)

        if signal == ReadinessSignal.GREEN:
            adjustment, message = self._apply_green(queue, readiness)
        elif signal == ReadinessSignal.RED:
            adjustment, message = self._apply_red(queue, readiness)
        elif signal == ReadinessSignal.AMBER:
            adjustment, message = self._apply_amber(queue, readiness)
        else:
            rationale = (
                "Readiness metrics within normal range. Standard session volume applied."
                if readiness is not None
                else "No readiness check-in today. Standard session volume applied."
            )
            adjustment = MorningAdjustment(rationale=rationale)
            message = "Session initialized. Let's get to work."

        _reset_statuses(queue)

        context = MorningContext(
            signal=signal,
            readiness_score=readiness.readiness_score if readiness else None,
            sleep_quality=readiness.sleep_quality if readiness else None,
            soreness=readiness.muscle_soreness if readiness else None,
            adjustment=adjustment,
        )
        logger.info(
            f"Morning context: signal={signal.value}, adjustment={adjustment.type.value}, "
            f"affected={adjustment.affected_exercises}"
        )
        return ShapingResult(morning_context=context, agent_message=message)

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def _apply_green(self, queue: List[SessionExercise], readiness: ReadinessSnapshot):
        target = next((item for item in queue if is_compound(item.exercise)), None)
        if target is None:
            return (
                MorningAdjustment(
                    rationale="Green light conditions met but no compound lift in session to add Joker Set.",
                ),
                "Green light today. Let's get to work.",
            )

        last = target.sets[-1]
        joker = SetRecord(
            exercise_id=target.exercise_id,
            ordinal=len(target.sets) + 1,
            target_load=scale_load(last.target_load, JOKER_LOAD_FACTOR, self.plate_increment),
            target_reps=(
                max(last.target_reps - JOKER_REP_REDUCTION, 1)
                if last.target_reps
                else JOKER_DEFAULT_REPS
            ),
            target_rpe=JOKER_TARGET_RPE,
            status=SetStatus.PENDING,
            rationale="Joker Set @ 105% - you earned this",
            agent_adjusted=True,
        )
        target.sets.append(joker)

        return (
            MorningAdjustment(
                type=MorningAdjustmentType.JOKER_SET_ADDED,
                affected_exercises=[target.name],
                rationale=(
                    f"Sleep quality ({readiness.sleep_quality}/5) and readiness "
                    f"({readiness.readiness_score}) indicate peak performance potential. "
                    f"Added 105% intensity Joker Set to {target.name}."
                ),
            ),
            "Green light today. I've unlocked a Joker Set for your main lift. "
            "Go for it if you feel good.",
        )

    def _apply_red(self, queue: List[SessionExercise], readiness: ReadinessSnapshot):
        affected = _drop_last_sets(queue, lambda item: True)
        return (
            MorningAdjustment(
                type=MorningAdjustmentType.FULL_VOLUME_REDUCED,
                affected_exercises=affected,
                rationale=(
                    f"Critically low readiness ({readiness.readiness_score}). Reduced volume "
                    f"across all {len(affected)} exercises to prevent overreaching."
                ),
            ),
            "Recovery is critical today. I've stripped back the volume to keep you "
            "moving without digging a deeper hole.",
        )

    def _apply_amber(self, queue: List[SessionExercise], readiness: ReadinessSnapshot):
        affected = _drop_last_sets(queue, lambda item: is_accessory(item.exercise))
        reason = (
            f"Low readiness score ({readiness.readiness_score})"
            if readiness.readiness_score < AMBER_MAX_SCORE
            else f"High soreness ({readiness.muscle_soreness}/5)"
        )
        return (
            MorningAdjustment(
                type=MorningAdjustmentType.ACCESSORY_VOLUME_REDUCED,
                affected_exercises=affected,
                rationale=(
                    f"{reason}. Removed last set from {len(affected)} accessory exercise(s) "
                    f"to protect recovery while maintaining compound stimulus."
                ),
            ),
            "Recovery metrics are down. I've trimmed the accessory volume to preserve "
            "your CNS for the main work.",
        )


def _drop_last_sets(
    queue: List[SessionExercise],
    predicate: Callable[[SessionExercise], bool],
) -> List[str]:
    """Remove the last set of every matching exercise that has more than one."""
    affected: List[str] = []
    for item in queue:
        if len(item.sets) > 1 and predicate(item):
            item.sets.pop()
            item.renumber()
            affected.append(item.name)
    return affected


def _reset_statuses(queue: List[SessionExercise]) -> None:
    """First set of the first exercise active, everything else pending."""
    for ex_idx, item in enumerate(queue):
        for set_idx, record in enumerate(item.sets):
            record.status = (
                SetStatus.ACTIVE if ex_idx == 0 and set_idx == 0 else SetStatus.PENDING
            )
