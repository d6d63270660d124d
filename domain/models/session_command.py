"""
Session command model for validated mid-session edits.

Part of FSE-109: Validated mid-session commands

Replaces free-form queue mutation with explicit commands. Each command is
validated against the live session before it is applied, and the
single-active invariant is re-established afterwards.

Supported operations:
- add_set: Append a pending copy of the exercise's last set
- remove_set: Remove a non-completed set (the last pending one when set_id is omitted)
- skip_exercise: Mark the current exercise's remaining sets completed + skipped
- add_exercise: Append a new exercise built from its descriptor and memory
- remove_exercise: Remove an exercise that has no completed sets
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from domain.models.exercise import ExerciseDescriptor
from domain.models.movement_memory import MovementMemory


CommandOp = Literal["add_set", "remove_set", "skip_exercise", "add_exercise", "remove_exercise"]

# Operations that address an exercise already in the queue
EXERCISE_SCOPED_OPS = frozenset(["add_set", "remove_set", "skip_exercise", "remove_exercise"])


class SessionCommand(BaseModel):
    """
    A single mid-session edit.

    Examples:
        >>> SessionCommand(op="add_set", exercise_id="ex-squat")

        >>> SessionCommand(op="remove_set", exercise_id="ex-squat", set_id="set-abc")

        >>> SessionCommand(
        ...     op="add_exercise",
        ...     exercise=ExerciseDescriptor(id="ex-curl", name="Barbell Curl"),
        ... )
    """

    op: CommandOp = Field(..., description="The edit to apply")
    exercise_id: Optional[str] = Field(
        default=None, description="Target exercise (required for exercise-scoped ops)"
    )
    set_id: Optional[str] = Field(default=None, description="Target set for remove_set")
    exercise: Optional[ExerciseDescriptor] = Field(
        default=None, description="Descriptor for add_exercise"
    )
    memory: Optional[MovementMemory] = Field(
        default=None, description="Movement memory used to seed add_exercise"
    )

    @model_validator(mode="after")
    def validate_arguments(self) -> "SessionCommand":
        """Ensure each operation carries the arguments it needs."""
        if self.op in EXERCISE_SCOPED_OPS and not self.exercise_id:
            raise ValueError(f"{self.op} requires exercise_id")
        if self.op == "add_exercise" and self.exercise is None:
            raise ValueError("add_exercise requires an exercise descriptor")
        return self

    def model_post_init(self, __context: Any) -> None:
        """Default add_exercise's exercise_id to the descriptor's id."""
        if self.op == "add_exercise" and self.exercise is not None and not self.exercise_id:
            self.exercise_id = self.exercise.id

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"op": "add_set", "exercise_id": "ex-squat"},
                {"op": "skip_exercise", "exercise_id": "ex-curl"},
                {"op": "remove_exercise", "exercise_id": "ex-dip"},
            ]
        }
    }
