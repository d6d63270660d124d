"""
Session State Machine.

Part of FSE-107: Session state machine
Part of FSE-109: Validated mid-session commands

Drives a live session held in an explicit SessionContext:
- log_set: record the active set, notify the completion sink, apply the
  analyzer verdict to the next set and advance the position
- apply_command: validated mid-session edits (add/remove set, skip exercise,
  add/remove exercise)
- navigation and lifecycle helpers (advance, end, reset)

Invalid references never raise. They are ignored, counted on the context and
logged, so a stale UI event cannot corrupt the queue.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from application.exceptions import InvalidSessionCommandError
from application.ports.set_completion_sink import SetCompletedEvent, SetCompletionSink
from backend.core.queue_builder import SessionQueueBuilder
from backend.core.set_analyzer import (
    AnalyzerVerdict,
    SetResult,
    analyze_set_performance,
    next_set_load,
)
from domain.models.block import FutureAdjustment
from domain.models.decision import AgentDecision
from domain.models.load import PLATE_INCREMENT
from domain.models.session import (
    CompletedExerciseSets,
    SessionContext,
    SessionExercise,
    SessionProgress,
)
from domain.models.session_command import SessionCommand
from domain.models.set_record import SetRecord, SetStatus

logger = logging.getLogger(__name__)


SESSION_COMPLETE_MESSAGE = "Session complete! Great work today."
SESSION_ENDED_MESSAGE = "Session ended."
SKIPPED_NOTE = "Skipped"


@dataclass
class CommandResult:
    """Result of applying one SessionCommand."""

    success: bool
    op: str
    error: Optional[str] = None
    message: Optional[str] = None


def transition_message(item: SessionExercise, weight_unit: str = "lbs") -> str:
    """Agent message shown when the session moves onto ``item``."""
    memory = item.context.last_performance
    if memory is not None and memory.last_weight is not None:
        detail = f"Last time: {memory.last_weight:g}{weight_unit} × {memory.last_reps}"
    else:
        detail = "First time logging this movement."
    return f"Moving to {item.name}. {detail}"


def _current_exercise_id(ctx: SessionContext) -> Optional[str]:
    current = ctx.current_exercise
    return current.exercise_id if current is not None else None


def skip_remaining_sets(item: SessionExercise) -> int:
    """Mark every non-completed set of an exercise completed and skipped."""
    skipped = 0
    for record in item.remaining_sets:
        record.status = SetStatus.COMPLETED
        record.skipped = True
        record.notes = SKIPPED_NOTE
        skipped += 1
    return skipped


class SessionStateMachine:
    """
    Owns the rules for moving a SessionContext forward.

    The machine itself is stateless; every call receives the context it acts
    on, so one machine can serve any number of sessions.

    Usage:
        >>> machine = SessionStateMachine(sink=InMemorySetCompletionSink())
        >>> machine.log_set(ctx, "ex-squat", ctx.current_set.id, SetResult(reps=5, rpe=8, load=200))
        True
    """

    def __init__(
        self,
        sink: Optional[SetCompletionSink] = None,
        queue_builder: Optional[SessionQueueBuilder] = None,
        plate_increment: float = PLATE_INCREMENT,
        weight_unit: str = "lbs",
    ):
        """
        Initialize the state machine.

        Args:
            sink: Receives one event per logged set (optional)
            queue_builder: Builds exercises added mid-session
            plate_increment: Load rounding grid
            weight_unit: Unit shown in agent messages
        """
        self.sink = sink
        self.queue_builder = queue_builder or SessionQueueBuilder(plate_increment=plate_increment)
        self.plate_increment = plate_increment
        self.weight_unit = weight_unit

    # =========================================================================
    # Logging sets
    # =========================================================================

    def log_set(
        self,
        ctx: SessionContext,
        exercise_id: str,
        set_id: str,
        result: SetResult,
    ) -> bool:
        """
        Log the active set and move the session forward.

        Args:
            ctx: The live session
            exercise_id: Exercise the set belongs to
            set_id: The set being logged; must be the active set
            result: Actual reps/RPE/load

        Returns:
            True if the set was logged, False if the event was ignored
        """
        if not ctx.is_active or ctx.is_complete:
            return self._ignore(ctx, f"log_set on inactive session ({exercise_id}/{set_id})")

        ex_idx = ctx.find_exercise(exercise_id)
        if ex_idx is None:
            return self._ignore(ctx, f"log_set for unknown exercise {exercise_id}")
        item = ctx.queue[ex_idx]
        set_idx = item.find_set(set_id)
        if set_idx is None:
            return self._ignore(ctx, f"log_set for unknown set {set_id} in {exercise_id}")
        record = item.sets[set_idx]
        if record.status != SetStatus.ACTIVE:
            return self._ignore(
                ctx, f"log_set for {record.status.value} set {set_id}; only the active set can be logged"
            )

        next_record = item.sets[set_idx + 1] if set_idx + 1 < len(item.sets) else None
        verdict = analyze_set_performance(result, record, is_last_set=next_record is None)

        record.actual_load = result.load
        record.actual_reps = result.reps
        record.actual_rpe = result.rpe
        record.missed_reps = verdict.missed_reps
        record.status = SetStatus.COMPLETED

        self._emit(ctx, record)

        if next_record is not None:
            self._apply_verdict(ctx, verdict, record, next_record)

        self._advance(ctx, exercise_id, fallback_message=verdict.message or None)
        return True

    def _apply_verdict(
        self,
        ctx: SessionContext,
        verdict: AnalyzerVerdict,
        record: SetRecord,
        next_record: SetRecord,
    ) -> None:
        if verdict.should_adjust:
            new_load = next_set_load(
                verdict, record.actual_load, next_record.target_load, self.plate_increment
            )
            if new_load is None:
                logger.debug(f"No load to adjust for {next_record.id}; keeping prescription")
                return
            next_record.target_load = new_load
            next_record.rationale = verdict.rationale
            next_record.agent_adjusted = True
        if verdict.decision_kind is not None:
            ctx.decisions.append(
                AgentDecision(kind=verdict.decision_kind, rationale=verdict.rationale)
            )
            logger.debug(f"Decision {verdict.decision_kind.value}: {verdict.rationale}")

    def _emit(self, ctx: SessionContext, record: SetRecord) -> None:
        """Hand a completed set to the sink. Failures never touch session state."""
        if self.sink is None:
            return
        event = SetCompletedEvent(
            session_id=ctx.session_id,
            exercise_id=record.exercise_id,
            set_id=record.id,
            ordinal=record.ordinal,
            target_reps=record.target_reps,
            target_rpe=record.target_rpe,
            target_load=record.target_load,
            actual_weight=record.actual_load,
            actual_reps=record.actual_reps,
            actual_rpe=record.actual_rpe,
        )
        try:
            self.sink.on_set_completed(event)
        except Exception:
            ctx.sink_failures += 1
            logger.exception(
                f"Set completion sink failed for {record.exercise_id}/{record.id} "
                f"(session {ctx.session_id})"
            )

    # =========================================================================
    # Commands
    # =========================================================================

    def apply_command(self, ctx: SessionContext, command: SessionCommand) -> CommandResult:
        """
        Apply a validated mid-session edit.

        Args:
            ctx: The live session
            command: The edit

        Returns:
            CommandResult; a rejected command leaves the queue untouched
        """
        if not ctx.is_active:
            self._ignore(ctx, f"{command.op} on inactive session")
            return CommandResult(success=False, op=command.op, error="Session is not active")

        previous_exercise = _current_exercise_id(ctx)
        try:
            if command.op == "add_set":
                message = self._add_set(ctx, command)
            elif command.op == "remove_set":
                message = self._remove_set(ctx, command)
            elif command.op == "skip_exercise":
                message = self._skip_exercise(ctx, command)
            elif command.op == "add_exercise":
                message = self._add_exercise(ctx, command)
            else:
                message = self._remove_exercise(ctx, command)
        except InvalidSessionCommandError as e:
            self._ignore(ctx, f"Rejected {command.op}: {e}")
            return CommandResult(success=False, op=command.op, error=str(e))

        was_complete = ctx.is_complete
        ctx.normalize_position()
        if ctx.is_complete and not was_complete:
            message = SESSION_COMPLETE_MESSAGE
            logger.info(f"Session {ctx.session_id} complete")
        elif not ctx.is_complete and _current_exercise_id(ctx) != previous_exercise:
            message = transition_message(ctx.current_exercise, self.weight_unit)

        ctx.agent_message = message
        logger.debug(f"Applied {command.op} to session {ctx.session_id}")
        return CommandResult(success=True, op=command.op, message=message)

    def _require_exercise(self, ctx: SessionContext, exercise_id: Optional[str]) -> SessionExercise:
        idx = ctx.find_exercise(exercise_id) if exercise_id else None
        if idx is None:
            raise InvalidSessionCommandError(f"Exercise {exercise_id} is not in the session")
        return ctx.queue[idx]

    def _add_set(self, ctx: SessionContext, command: SessionCommand) -> str:
        item = self._require_exercise(ctx, command.exercise_id)
        item.sets.append(item.sets[-1].copy_as_pending(len(item.sets) + 1))
        return f"Added a set to {item.name}."

    def _remove_set(self, ctx: SessionContext, command: SessionCommand) -> str:
        item = self._require_exercise(ctx, command.exercise_id)
        if command.set_id:
            idx = item.find_set(command.set_id)
            if idx is None:
                raise InvalidSessionCommandError(
                    f"Set {command.set_id} is not in {command.exercise_id}"
                )
            if item.sets[idx].is_completed:
                raise InvalidSessionCommandError("Completed sets cannot be removed")
        else:
            remaining = [i for i, s in enumerate(item.sets) if not s.is_completed]
            if not remaining:
                raise InvalidSessionCommandError(f"{item.name} has no remaining sets")
            idx = remaining[-1]

        item.sets.pop(idx)
        if not item.sets:
            del ctx.queue[ctx.find_exercise(item.exercise_id)]
            return f"Removed {item.name} from your session."
        item.renumber()
        return f"Removed a set from {item.name}."

    def _skip_exercise(self, ctx: SessionContext, command: SessionCommand) -> str:
        item = self._require_exercise(ctx, command.exercise_id)
        current = ctx.current_exercise
        if current is None or current.exercise_id != item.exercise_id:
            raise InvalidSessionCommandError("Only the current exercise can be skipped")
        skip_remaining_sets(item)
        return f"Skipped {item.name}."

    def _add_exercise(self, ctx: SessionContext, command: SessionCommand) -> str:
        exercise = command.exercise
        if ctx.find_exercise(exercise.id) is not None:
            raise InvalidSessionCommandError(f"{exercise.name} is already in the session")
        ctx.queue.append(
            self.queue_builder.build_exercise(exercise, command.memory, ctx.readiness)
        )
        return f"Added {exercise.name} to your session."

    def _remove_exercise(self, ctx: SessionContext, command: SessionCommand) -> str:
        item = self._require_exercise(ctx, command.exercise_id)
        if item.completed_sets:
            raise InvalidSessionCommandError(
                f"{item.name} has completed sets and cannot be removed"
            )
        del ctx.queue[ctx.find_exercise(item.exercise_id)]
        return "Exercise removed from session."

    # =========================================================================
    # Navigation
    # =========================================================================

    def advance_to_next_set(self, ctx: SessionContext) -> bool:
        """Move past the active set without logging it."""
        record = ctx.current_set
        if not ctx.is_active or record is None or record.status != SetStatus.ACTIVE:
            return self._ignore(ctx, "advance_to_next_set with no active set")
        record.status = SetStatus.COMPLETED
        record.skipped = True
        record.notes = SKIPPED_NOTE
        self._advance(ctx, _current_exercise_id(ctx), fallback_message=ctx.agent_message)
        return True

    def advance_to_next_exercise(self, ctx: SessionContext) -> bool:
        """Move past the rest of the current exercise without logging it."""
        item = ctx.current_exercise
        if not ctx.is_active or item is None:
            return self._ignore(ctx, "advance_to_next_exercise with no current exercise")
        skip_remaining_sets(item)
        self._advance(ctx, _current_exercise_id(ctx), fallback_message=ctx.agent_message)
        return True

    def _advance(
        self,
        ctx: SessionContext,
        previous_exercise: Optional[str],
        fallback_message: Optional[str],
    ) -> None:
        """Re-establish the active set and pick the agent message."""
        ctx.normalize_position()
        if ctx.is_complete:
            ctx.agent_message = SESSION_COMPLETE_MESSAGE
            logger.info(f"Session {ctx.session_id} complete")
        elif _current_exercise_id(ctx) != previous_exercise:
            ctx.agent_message = transition_message(ctx.current_exercise, self.weight_unit)
        else:
            ctx.agent_message = fallback_message

    # =========================================================================
    # Lifecycle and planner hand-off
    # =========================================================================

    def dismiss_agent_message(self, ctx: SessionContext) -> None:
        ctx.agent_message = None

    def clear_future_adjustment(self, ctx: SessionContext, adjustment_id: str) -> bool:
        """Remove one future adjustment once the planner has consumed it."""
        before = len(ctx.future_adjustments)
        ctx.future_adjustments = [a for a in ctx.future_adjustments if a.id != adjustment_id]
        if len(ctx.future_adjustments) == before:
            return self._ignore(ctx, f"Unknown future adjustment {adjustment_id}")
        return True

    def drain_future_adjustments(self, ctx: SessionContext) -> List[FutureAdjustment]:
        """Hand every pending future adjustment to the planner and clear the list."""
        drained = ctx.future_adjustments
        ctx.future_adjustments = []
        logger.debug(f"Drained {len(drained)} future adjustments from {ctx.session_id}")
        return drained

    def end_session(self, ctx: SessionContext) -> None:
        """Stop the session. Later events are ignored."""
        ctx.is_active = False
        ctx.ended_at = datetime.now(timezone.utc)
        ctx.agent_message = SESSION_ENDED_MESSAGE
        progress = ctx.progress()
        logger.info(
            f"Session {ctx.session_id} ended with {progress.completed}/{progress.total} sets completed"
        )

    def reset_session(self, ctx: SessionContext) -> None:
        """Discard all session state in place. Not reversible."""
        blank = SessionContext()
        for name in SessionContext.model_fields:
            setattr(ctx, name, getattr(blank, name))
        logger.info(f"Session reset (now {ctx.session_id})")

    # =========================================================================
    # Read-only views
    # =========================================================================

    def progress(self, ctx: SessionContext) -> SessionProgress:
        return ctx.progress()

    def completed_sets(self, ctx: SessionContext) -> List[CompletedExerciseSets]:
        return ctx.completed_sets_by_exercise()

    @staticmethod
    def _ignore(ctx: SessionContext, reason: str) -> bool:
        ctx.ignored_events += 1
        logger.warning(f"Ignored event in session {ctx.session_id}: {reason}")
        return False
