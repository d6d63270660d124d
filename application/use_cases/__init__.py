"""
Application Use Cases for the Adaptive Session Engine.

Part of FSE-110: Session start collaborators

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports. Use cases are the entry points for business
operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and collaborator ports
- Dependencies are injected via constructors for testability
- Use cases return result objects, never raise

Usage:
    from application.use_cases import StartSessionUseCase, StartSessionResult

    use_case = StartSessionUseCase(
        catalog=catalog,
        history_repo=history_repo,
        readiness_repo=readiness_repo,
        block_repo=block_repo,
    )
    result = use_case.execute(user_id="user-123", exercise_ids=["ex-squat"])
"""

from application.use_cases.start_session import (
    StartSessionResult,
    StartSessionUseCase,
    open_session,
)

__all__ = [
    "StartSessionUseCase",
    "StartSessionResult",
    "open_session",
]
