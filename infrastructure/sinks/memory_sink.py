"""
In-memory implementation of SetCompletionSink.

Buffers events in log order so a host can flush them in one batch when the
session ends.
"""
from typing import Dict, List

from application.ports.set_completion_sink import SetCompletedEvent


class InMemorySetCompletionSink:
    """
    Buffering sink.

    Events are kept in the order the engine delivered them.
    """

    def __init__(self) -> None:
        self._events: List[SetCompletedEvent] = []

    def on_set_completed(self, event: SetCompletedEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> List[SetCompletedEvent]:
        return list(self._events)

    def events_by_exercise(self) -> Dict[str, List[SetCompletedEvent]]:
        """Buffered events grouped per exercise, order preserved."""
        grouped: Dict[str, List[SetCompletedEvent]] = {}
        for event in self._events:
            grouped.setdefault(event.exercise_id, []).append(event)
        return grouped

    def flush(self) -> List[SetCompletedEvent]:
        """Return every buffered event and empty the buffer."""
        flushed = self._events
        self._events = []
        return flushed

    def __len__(self) -> int:
        return len(self._events)
