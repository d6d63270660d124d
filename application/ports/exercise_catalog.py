"""
Exercise Catalog Interface (Port).

Part of FSE-110: Session start collaborators

Read-only lookup of exercise descriptors (id, display name, curator tag).
Catalog CRUD lives elsewhere; the engine only resolves ids at session start.
"""
from typing import List, Protocol, Sequence

from domain.models.exercise import ExerciseDescriptor


class ExerciseCatalog(Protocol):
    """
    Abstract interface for resolving exercise ids to descriptors.
    """

    def get_exercises(self, exercise_ids: Sequence[str]) -> List[ExerciseDescriptor]:
        """
        Look up descriptors for the given ids.

        Unknown ids are simply absent from the result; callers compare the
        returned ids against the requested ones.

        Args:
            exercise_ids: Exercise ids to resolve

        Returns:
            Descriptors for the ids that exist, in any order
        """
        ...
