"""
Exercise Classifier for compound/accessory tagging.

Part of FSE-103: Overridable exercise classification

Bootstrap heuristic over display names, checked in order:
1. Curator tag on the descriptor (authoritative)
2. Accessory/isolation patterns (curl, raise, cable, machine, ...)
3. Compound patterns (squat, deadlift, press, row, ...)
4. Press/pull/hinge/squat keyword fallback → compound
5. Everything else → accessory
"""
import logging
import re
from typing import Optional

from domain.models.exercise import ExerciseClassification, ExerciseDescriptor

logger = logging.getLogger(__name__)


ACCESSORY_PATTERNS = [
    re.compile(r"curl", re.IGNORECASE),
    re.compile(r"extension", re.IGNORECASE),
    re.compile(r"fly", re.IGNORECASE),
    re.compile(r"flye", re.IGNORECASE),
    re.compile(r"raise", re.IGNORECASE),  # lateral raise, front raise
    re.compile(r"kickback", re.IGNORECASE),
    re.compile(r"pushdown", re.IGNORECASE),
    re.compile(r"pullover", re.IGNORECASE),
    re.compile(r"shrug", re.IGNORECASE),
    re.compile(r"calf", re.IGNORECASE),
    re.compile(r"\bab\s", re.IGNORECASE),
    re.compile(r"crunch", re.IGNORECASE),
    re.compile(r"plank", re.IGNORECASE),
    re.compile(r"face\s*pull", re.IGNORECASE),
    re.compile(r"reverse\s*fly", re.IGNORECASE),
    re.compile(r"cable", re.IGNORECASE),
    re.compile(r"machine", re.IGNORECASE),
    re.compile(r"isolation", re.IGNORECASE),
]

COMPOUND_PATTERNS = [
    re.compile(r"squat", re.IGNORECASE),
    re.compile(r"deadlift", re.IGNORECASE),
    re.compile(r"bench\s*press", re.IGNORECASE),
    re.compile(r"overhead\s*press", re.IGNORECASE),
    re.compile(r"military\s*press", re.IGNORECASE),
    re.compile(r"row", re.IGNORECASE),
    re.compile(r"pull[\s-]?up", re.IGNORECASE),
    re.compile(r"chin[\s-]?up", re.IGNORECASE),
    re.compile(r"clean", re.IGNORECASE),
    re.compile(r"snatch", re.IGNORECASE),
    re.compile(r"lunge", re.IGNORECASE),
    re.compile(r"\bdips?\b", re.IGNORECASE),
    re.compile(r"press", re.IGNORECASE),  # General press movements
]

# Movement-pattern keywords for names neither list recognises
FALLBACK_COMPOUND_KEYWORDS = re.compile(
    r"\b(press|push|pull|hinge|squat|thrust|carry|step[\s-]?up)", re.IGNORECASE
)


def classify_name(name: str) -> ExerciseClassification:
    """
    Classify an exercise from its display name alone.

    Args:
        name: Exercise display name (e.g., "Incline Dumbbell Press")

    Returns:
        COMPOUND or ACCESSORY; never fails.
    """
    if any(p.search(name) for p in ACCESSORY_PATTERNS):
        return ExerciseClassification.ACCESSORY
    if any(p.search(name) for p in COMPOUND_PATTERNS):
        return ExerciseClassification.COMPOUND
    if FALLBACK_COMPOUND_KEYWORDS.search(name):
        return ExerciseClassification.COMPOUND
    return ExerciseClassification.ACCESSORY


def classify(
    exercise: ExerciseDescriptor,
    override: Optional[ExerciseClassification] = None,
) -> ExerciseClassification:
    """
    Classify an exercise, letting an authoritative tag take precedence.

    Args:
        exercise: The exercise descriptor
        override: Explicit tag that wins over both the descriptor and heuristic

    Returns:
        The effective classification
    """
    authoritative = override or exercise.classification
    heuristic = classify_name(exercise.name)

    if authoritative is None:
        return heuristic

    if authoritative != heuristic:
        logger.debug(
            f"Curator tag for '{exercise.name}' ({authoritative.value}) "
            f"differs from name heuristic ({heuristic.value})"
        )
    return authoritative


def is_compound(exercise: ExerciseDescriptor) -> bool:
    return classify(exercise) == ExerciseClassification.COMPOUND


def is_accessory(exercise: ExerciseDescriptor) -> bool:
    return classify(exercise) == ExerciseClassification.ACCESSORY
