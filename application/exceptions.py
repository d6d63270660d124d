"""
Application-layer exceptions.

Part of FSE-109: Validated mid-session commands

These exceptions are raised inside the engine and converted into failed
results at its public boundary; callers never see them propagate.
"""


class SessionEngineError(Exception):
    """Base error for the adaptive session engine."""

    pass


class InvalidSessionCommandError(SessionEngineError):
    """A mid-session command does not fit the live session.

    Raised when a command names an exercise or set that is not in the
    queue, or asks for a change that would break monotonic progress
    (removing a completed set, skipping an exercise that is not current).
    """

    pass
