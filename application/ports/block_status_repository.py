"""
Block Status Repository Interface (Port).

Part of FSE-108: Timeline-aware disruption handling

The periodization planner owns block status. The engine reads it once at
session start and works on its own copy.
"""
from typing import Optional, Protocol

from domain.models.block import BlockStatus


class BlockStatusRepository(Protocol):
    """
    Abstract interface for the active training block.
    """

    def get_active_block(self, user_id: str) -> Optional[BlockStatus]:
        """
        Get the user's active training block.

        Args:
            user_id: User ID

        Returns:
            BlockStatus, or None when the user is not following a block
        """
        ...
