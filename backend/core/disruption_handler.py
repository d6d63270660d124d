"""
Disruption Handler for timeline-aware life events.

Part of FSE-108: Timeline-aware disruption handling

A life event rewrites the *present* session and schedules compensating
*future* adjustments for the periodization planner:

| Event     | Present session                                  | Future                              |
|-----------|--------------------------------------------------|-------------------------------------|
| travel    | compounds → 50% load, 15 reps, RPE 6             | add_volume ×1.10 after return, debt |
| sickness  | >1 day: clear; 1 day: one bodyweight set @ RPE 4 | >3 days: extend block one week      |
| injury    | unchanged (substitution is external)             | none                                |
| stress    | all loads ×0.8, RPE −1 (floor 5)                 | none                                |

Only non-completed sets are touched; logged work is never rewritten.
"""
import logging
import math
from typing import List, Optional

from backend.core.exercise_classifier import is_compound
from domain.models.block import AdjustmentAction, FutureAdjustment
from domain.models.decision import AgentDecision, DecisionKind
from domain.models.disruption import DisruptionRecord, LifeEventType
from domain.models.load import PLATE_INCREMENT, scale_load, volume_load
from domain.models.session import SessionContext, SessionExercise
from domain.models.set_record import SetRecord

logger = logging.getLogger(__name__)


# Travel maintenance prescription
TRAVEL_LOAD_FACTOR = 0.5
TRAVEL_TARGET_REPS = 15
TRAVEL_TARGET_RPE = 6
TRAVEL_MAKEUP_MAGNITUDE = 1.1
DEFAULT_REPS_FOR_VOLUME = 8

# Sickness
SICK_DAY_TARGET_REPS = 10
SICK_DAY_TARGET_RPE = 4
BLOCK_EXTENSION_THRESHOLD_DAYS = 3
BLOCK_EXTENSION_WEEKS = 1

# Stress
STRESS_LOAD_FACTOR = 0.8
STRESS_RPE_DROP = 1
STRESS_RPE_FLOOR = 5
DEFAULT_TARGET_RPE = 8


class DisruptionHandler:
    """
    Applies life-event rules to a live session.

    Usage:
        >>> handler = DisruptionHandler()
        >>> record = handler.handle(ctx, LifeEventType.TRAVEL, 3)
        >>> ctx.future_adjustments[0].action
        <AdjustmentAction.ADD_VOLUME: 'add_volume'>
    """

    def __init__(self, plate_increment: float = PLATE_INCREMENT):
        self.plate_increment = plate_increment

    def handle(
        self,
        ctx: SessionContext,
        event: LifeEventType,
        duration_days: int,
    ) -> Optional[DisruptionRecord]:
        """
        Apply one life event.

        Args:
            ctx: The live session (mutated in place)
            event: Kind of life event
            duration_days: How long the disruption lasts (≥ 1)

        Returns:
            The DisruptionRecord, or None when the event was rejected
        """
        if not ctx.is_active:
            ctx.ignored_events += 1
            logger.warning(f"Ignored {event.value} event on inactive session {ctx.session_id}")
            return None

        if duration_days < 1:
            ctx.ignored_events += 1
            logger.warning(
                f"Ignored {event.value} event with duration {duration_days} "
                f"in session {ctx.session_id}"
            )
            return None

        if event == LifeEventType.TRAVEL:
            message, rationale = self._travel(ctx, duration_days)
        elif event == LifeEventType.SICKNESS:
            message, rationale = self._sickness(ctx, duration_days)
        elif event == LifeEventType.INJURY:
            message = (
                "I've noted the injury. Let's work around it today. Please consult a "
                "professional before resuming that movement pattern."
            )
            rationale = (
                f"Injury reported ({duration_days} days). Exercise substitution is "
                f"required before loading the affected pattern again."
            )
        else:
            message, rationale = self._stress(ctx)

        was_complete = ctx.is_complete
        ctx.normalize_position()
        if ctx.is_complete and not was_complete:
            logger.info(f"Session {ctx.session_id} has no remaining sets after {event.value}")

        ctx.decisions.append(
            AgentDecision(
                kind=DecisionKind.VOLUME_ADJUSTMENT,
                rationale=f"Life event: {event.value} ({duration_days} days)",
            )
        )
        record = DisruptionRecord(event=event, duration_days=duration_days, rationale=rationale)
        ctx.disruptions.append(record)
        ctx.agent_message = message

        logger.info(
            f"Life event {event.value} ({duration_days}d) applied to session {ctx.session_id}: "
            f"{rationale}"
        )
        return record

    # =========================================================================
    # Travel
    # =========================================================================

    def _travel(self, ctx: SessionContext, duration_days: int):
        lost_volume = 0.0
        affected: List[SessionExercise] = []

        for item in ctx.queue:
            remaining = item.remaining_sets
            if not remaining or not is_compound(item.exercise):
                continue
            affected.append(item)
            for record in remaining:
                lost_volume += volume_load(
                    record.target_load, record.target_reps or DEFAULT_REPS_FOR_VOLUME
                )
                record.target_load = scale_load(
                    record.target_load, TRAVEL_LOAD_FACTOR, self.plate_increment
                )
                record.target_reps = TRAVEL_TARGET_REPS
                record.target_rpe = TRAVEL_TARGET_RPE
                _mark_adjusted(record, "Travel mode: maintenance stimulus")

        if lost_volume > 0 and affected:
            primary = affected[0]
            ctx.future_adjustments.append(
                FutureAdjustment(
                    week=_current_week(ctx) + math.ceil(duration_days / 7),
                    day=min((duration_days % 7) + 2, 7),
                    action=AdjustmentAction.ADD_VOLUME,
                    target_exercise_id=primary.exercise_id,
                    target_exercise_name=primary.name,
                    magnitude=TRAVEL_MAKEUP_MAGNITUDE,
                    rationale=(
                        f"Makeup for {duration_days}-day travel. "
                        f"Lost {round(lost_volume)} volume-load units."
                    ),
                )
            )
            if ctx.block_status is not None:
                ctx.block_status.volume_debt += lost_volume

        primary_name = affected[0].name if affected else "your main lift"
        message = (
            "I've switched to a hotel-friendly circuit. I've also added a volume booster "
            f"to next week's {primary_name} session to make up for the missed heavy stimulus."
        )
        rationale = (
            f"Travel for {duration_days} days: {len(affected)} compound exercise(s) "
            f"switched to maintenance, {round(lost_volume)} volume-load deferred."
        )
        return message, rationale

    # =========================================================================
    # Sickness
    # =========================================================================

    def _sickness(self, ctx: SessionContext, duration_days: int):
        if duration_days > 1:
            for item in ctx.queue:
                item.sets = item.completed_sets
        else:
            self._reduce_to_light_mobility(ctx)

        block = ctx.block_status
        extended = duration_days > BLOCK_EXTENSION_THRESHOLD_DAYS
        if extended:
            phase = block.phase.value if block is not None else "current"
            if block is not None:
                block.total_weeks += BLOCK_EXTENSION_WEEKS
                block.weeks_remaining = (block.weeks_remaining or 0) + BLOCK_EXTENSION_WEEKS
            ctx.future_adjustments.append(
                FutureAdjustment(
                    week=_current_week(ctx),
                    day=0,
                    action=AdjustmentAction.EXTEND_BLOCK,
                    magnitude=BLOCK_EXTENSION_WEEKS,
                    rationale=(
                        f"Extended {phase} block by {BLOCK_EXTENSION_WEEKS} week due to "
                        f"{duration_days}-day illness."
                    ),
                )
            )
            message = (
                f"Health comes first. I've scrapped today. Since you're out for {duration_days} "
                f"days, I'm extending this {phase} block by a week so we don't rush the progression."
            )
        elif duration_days > 1:
            message = "Health comes first. I've cleared today's session. Focus on rest and recovery."
        else:
            message = (
                "Taking it easy today. I've set up some light mobility work - "
                "skip it if you need to."
            )

        rationale = (
            f"Sickness for {duration_days} days: "
            + ("remaining session cleared" if duration_days > 1 else "reduced to light mobility")
            + ("; block extended by one week." if extended else ".")
        )
        return message, rationale

    def _reduce_to_light_mobility(self, ctx: SessionContext) -> None:
        """Keep a single bodyweight set of the current exercise, drop the rest."""
        current = ctx.current_exercise
        keep: Optional[SetRecord] = ctx.current_set if current is not None else None

        for item in ctx.queue:
            item.sets = [
                s for s in item.sets
                if s.is_completed or (keep is not None and s.id == keep.id)
            ]
            item.renumber()

        if keep is not None:
            keep.target_load = None
            keep.target_reps = SICK_DAY_TARGET_REPS
            keep.target_rpe = SICK_DAY_TARGET_RPE
            _mark_adjusted(keep, "Recovery mode: light mobility only")

    # =========================================================================
    # Stress
    # =========================================================================

    def _stress(self, ctx: SessionContext):
        adjusted = 0
        for _, record in ctx.iter_sets():
            if record.is_completed:
                continue
            record.target_load = scale_load(
                record.target_load, STRESS_LOAD_FACTOR, self.plate_increment
            )
            base_rpe = record.target_rpe if record.target_rpe is not None else DEFAULT_TARGET_RPE
            record.target_rpe = max(base_rpe - STRESS_RPE_DROP, STRESS_RPE_FLOOR)
            _mark_adjusted(record, "Stress management: reduced intensity")
            adjusted += 1

        message = (
            "I can tell you're under stress. I've dialed back the intensity today - "
            "you'll still get a good session without adding to the load."
        )
        rationale = f"High stress: {adjusted} remaining set(s) at 80% load, RPE -1."
        return message, rationale


def _current_week(ctx: SessionContext) -> int:
    return ctx.block_status.week_number if ctx.block_status is not None else 1


def _mark_adjusted(record: SetRecord, rationale: str) -> None:
    record.rationale = rationale
    record.agent_adjusted = True
