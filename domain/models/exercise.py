"""
Exercise descriptor value object.

Part of FSE-101: Define session engine domain model
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExerciseClassification(str, Enum):
    """
    Coarse movement classification used by readiness and disruption rules.

    - COMPOUND: multi-joint, primary lift (squat, deadlift, press, row)
    - ACCESSORY: single-joint or supplementary work (curl, raise, machine)
    """

    COMPOUND = "compound"
    ACCESSORY = "accessory"


class ExerciseDescriptor(BaseModel):
    """
    Value object describing one exercise from the catalog.

    The ``classification`` field is the curator's authoritative tag. When it
    is absent the engine falls back to the name-based classifier.

    Examples:
        >>> squat = ExerciseDescriptor(id="ex-squat", name="Back Squat")
        >>> squat.classification is None
        True

        >>> ExerciseDescriptor(
        ...     id="ex-press",
        ...     name="Leg Press Machine",
        ...     classification=ExerciseClassification.COMPOUND,
        ... )
    """

    id: str = Field(..., min_length=1, description="Catalog exercise ID")
    name: str = Field(..., min_length=1, description="Display name")
    classification: Optional[ExerciseClassification] = Field(
        default=None,
        description="Authoritative compound/accessory tag (overrides the heuristic)",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"id": "ex-squat", "name": "Back Squat"},
                {"id": "ex-curl", "name": "Cable Curl", "classification": "accessory"},
            ]
        },
    }
