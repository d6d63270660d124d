"""
Modification Handler for user-initiated mid-session requests.

Part of FSE-111: Mid-session modification intents

Maps a coarse intent from the session UI ("too hard", "short on time", ...)
onto the current exercise. Travel and sickness are handed to the
DisruptionHandler with default durations.
"""
import logging
from enum import Enum
from typing import Optional

from backend.core.disruption_handler import DisruptionHandler
from backend.core.session_engine import SESSION_COMPLETE_MESSAGE, skip_remaining_sets
from domain.models.decision import AgentDecision, DecisionKind
from domain.models.disruption import LifeEventType
from domain.models.load import PLATE_INCREMENT, scale_load
from domain.models.session import SessionContext, SessionExercise
from domain.models.set_record import SetStatus

logger = logging.getLogger(__name__)


TOO_HARD_FACTOR = 0.9
TOO_EASY_FACTOR = 1.05


class ModificationIntent(str, Enum):
    """What the lifter asked for."""

    PAIN = "pain"
    TOO_HARD = "too_hard"
    TOO_EASY = "too_easy"
    FATIGUE = "fatigue"
    ADD_SET = "add_set"
    REMOVE_SET = "remove_set"
    SKIP_EXERCISE = "skip_exercise"
    SWAP_EXERCISE = "swap_exercise"
    TIME_CRUNCH = "time_crunch"
    TRAVEL = "travel"
    SICK = "sick"


class ModificationHandler:
    """
    Applies modification intents to the current exercise.

    Usage:
        >>> handler = ModificationHandler(DisruptionHandler())
        >>> handler.request(ctx, ModificationIntent.TOO_HARD)
        True
    """

    def __init__(
        self,
        disruptions: DisruptionHandler,
        plate_increment: float = PLATE_INCREMENT,
        travel_default_days: int = 3,
        sickness_default_days: int = 3,
    ):
        self.disruptions = disruptions
        self.plate_increment = plate_increment
        self.travel_default_days = travel_default_days
        self.sickness_default_days = sickness_default_days

    def request(self, ctx: SessionContext, intent: ModificationIntent) -> bool:
        """
        Apply one intent.

        Args:
            ctx: The live session
            intent: The lifter's request

        Returns:
            True if applied, False if there was no current exercise to apply it to
        """
        if not ctx.is_active:
            ctx.ignored_events += 1
            logger.warning(f"Ignored {intent.value} request on inactive session {ctx.session_id}")
            return False

        if intent == ModificationIntent.TRAVEL:
            return self.disruptions.handle(ctx, LifeEventType.TRAVEL, self.travel_default_days) is not None
        if intent == ModificationIntent.SICK:
            return (
                self.disruptions.handle(ctx, LifeEventType.SICKNESS, self.sickness_default_days)
                is not None
            )

        item = ctx.current_exercise
        if item is None:
            ctx.ignored_events += 1
            logger.warning(f"Ignored {intent.value} request: session {ctx.session_id} has no current exercise")
            return False

        decision: Optional[AgentDecision] = None

        if intent == ModificationIntent.PAIN:
            message = (
                "Pain reported. Consider reducing load or swapping to a pain-free variation. "
                "Let me know if you need to skip this movement."
            )
            decision = AgentDecision(
                kind=DecisionKind.REST_SUGGESTION,
                rationale=f"Pain reported during {item.name}",
            )

        elif intent == ModificationIntent.TOO_HARD:
            self._scale_sets(item, TOO_HARD_FACTOR, "Adjusted for difficulty", include_active=False)
            message = "Got it. I've reduced the load for your remaining sets."
            decision = AgentDecision(
                kind=DecisionKind.WEIGHT_DECREASE,
                rationale="User reported exercise too difficult",
            )

        elif intent == ModificationIntent.TOO_EASY:
            self._scale_sets(item, TOO_EASY_FACTOR, "Bumped for challenge", include_active=True)
            message = "Let's add some weight. Updated your remaining sets."
            decision = AgentDecision(
                kind=DecisionKind.WEIGHT_INCREASE,
                rationale="User requested more challenge",
            )

        elif intent == ModificationIntent.FATIGUE:
            if _drop_last_pending_set(item):
                message = "Fatigue noted. I've removed one set to manage recovery."
                decision = AgentDecision(
                    kind=DecisionKind.VOLUME_ADJUSTMENT,
                    rationale="Fatigue-based volume reduction",
                )
            else:
                message = "No more sets to remove. Let's finish this one strong."

        elif intent == ModificationIntent.ADD_SET:
            item.sets.append(item.sets[-1].copy_as_pending(len(item.sets) + 1))
            message = "Added another set. Let's go."

        elif intent == ModificationIntent.REMOVE_SET:
            if _drop_last_pending_set(item):
                message = "Removed a set."
            else:
                message = "No more sets to remove. Let's finish this one strong."

        elif intent == ModificationIntent.SKIP_EXERCISE:
            skip_remaining_sets(item)
            message = "Exercise skipped. Moving to the next one."

        elif intent == ModificationIntent.SWAP_EXERCISE:
            message = f"Looking for an alternative to {item.name}. Pick a swap when you're ready."
            decision = AgentDecision(
                kind=DecisionKind.EXERCISE_SWAP,
                rationale=f"Swap requested for {item.name}",
            )

        else:
            removed = _trim_remaining_exercises(ctx)
            if not removed:
                message = "You're already lean on sets. Let's finish strong."
            else:
                plural = "s" if removed > 1 else ""
                message = f"Got it, short on time. I've trimmed {removed} set{plural} to keep you moving."
                decision = AgentDecision(
                    kind=DecisionKind.VOLUME_ADJUSTMENT,
                    rationale="Time crunch - reduced volume across remaining exercises",
                )

        was_complete = ctx.is_complete
        ctx.normalize_position()
        if ctx.is_complete and not was_complete:
            message = SESSION_COMPLETE_MESSAGE
            logger.info(f"Session {ctx.session_id} complete")

        if decision is not None:
            ctx.decisions.append(decision)
        ctx.agent_message = message
        logger.debug(f"Applied {intent.value} to {item.name} in session {ctx.session_id}")
        return True

    def _scale_sets(
        self,
        item: SessionExercise,
        factor: float,
        rationale: str,
        include_active: bool,
    ) -> None:
        statuses = {SetStatus.PENDING, SetStatus.ACTIVE} if include_active else {SetStatus.PENDING}
        for record in item.sets:
            if record.status not in statuses or record.target_load is None:
                continue
            record.target_load = scale_load(record.target_load, factor, self.plate_increment)
            record.rationale = rationale
            record.agent_adjusted = True


def _trim_remaining_exercises(ctx: SessionContext) -> int:
    """Drop one pending set from every remaining exercise that has more than one set."""
    removed = 0
    for item in ctx.queue[ctx.exercise_index:]:
        if len(item.sets) > 1 and _drop_last_pending_set(item):
            removed += 1
    return removed


def _drop_last_pending_set(item: SessionExercise) -> bool:
    """Remove the exercise's last pending set; the active set is never dropped."""
    for idx in range(len(item.sets) - 1, -1, -1):
        if item.sets[idx].status == SetStatus.PENDING:
            item.sets.pop(idx)
            item.renumber()
            return True
    return False
