"""
Logging implementation of SetCompletionSink.

Writes each completed set as one structured log line. Useful for the replay
CLI and for hosts that ship logs to their persistence pipeline.
"""
import json
import logging

from application.ports.set_completion_sink import SetCompletedEvent

logger = logging.getLogger(__name__)


class LoggingSetCompletionSink:
    """
    Emits completed sets to the ``infrastructure.sinks.logging_sink`` logger.
    """

    def __init__(self, level: int = logging.INFO):
        self._level = level

    def on_set_completed(self, event: SetCompletedEvent) -> None:
        logger.log(self._level, "set_completed %s", json.dumps(event.to_dict(), sort_keys=True))
