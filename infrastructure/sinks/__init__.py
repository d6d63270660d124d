"""
Set completion sink implementations.

Part of FSE-107: Session state machine
"""

from infrastructure.sinks.logging_sink import LoggingSetCompletionSink
from infrastructure.sinks.memory_sink import InMemorySetCompletionSink

__all__ = [
    "LoggingSetCompletionSink",
    "InMemorySetCompletionSink",
]
