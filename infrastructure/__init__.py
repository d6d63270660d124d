"""
Infrastructure Layer for the Adaptive Session Engine.

This package contains concrete implementations of the engine's ports:
- sinks/: SetCompletionSink implementations (logging, in-memory buffer)
"""

from infrastructure.sinks import (
    InMemorySetCompletionSink,
    LoggingSetCompletionSink,
)

__all__ = [
    "InMemorySetCompletionSink",
    "LoggingSetCompletionSink",
]
