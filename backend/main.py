"""
Engine factory for the Adaptive Session Engine.

Part of FSE-110: Introduce create_engine() factory

This module wires settings into every engine component. The factory pattern
allows for:
- Easy testing with custom settings
- Multiple engine instances with different configurations
- Clear separation of wiring from decision logic

Usage:
    from backend.main import create_engine
    from backend.settings import Settings

    # Default engine (uses get_settings())
    engine = create_engine()

    # Test engine with custom settings and a buffering sink
    test_settings = Settings(environment="test", _env_file=None)
    engine = create_engine(settings=test_settings, sink=InMemorySetCompletionSink())
"""

import logging
from typing import Dict, Optional, Sequence

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from application.ports import (
    BlockStatusRepository,
    ExerciseCatalog,
    MovementHistoryRepository,
    ReadinessRepository,
    SetCompletionSink,
)
from application.use_cases import StartSessionUseCase, open_session
from backend.core.disruption_handler import DisruptionHandler
from backend.core.modification_handler import ModificationHandler
from backend.core.movement_memory import MovementMemoryResolver
from backend.core.queue_builder import SessionQueueBuilder
from backend.core.readiness_shaper import ReadinessShaper
from backend.core.session_engine import SessionStateMachine
from backend.settings import Settings, get_settings
from domain.models import (
    BlockStatus,
    ExerciseDescriptor,
    MovementMemory,
    ReadinessSnapshot,
    SessionContext,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SessionEngine:
    """
    All engine components, configured from one Settings instance.

    The engine holds no session state. Every operation takes the caller's
    SessionContext.
    """

    def __init__(self, settings: Settings, sink: Optional[SetCompletionSink] = None):
        self.settings = settings
        self.resolver = MovementMemoryResolver(history_limit=settings.history_limit)
        self.queue_builder = SessionQueueBuilder(
            default_sets=settings.default_sets,
            default_reps=settings.default_reps,
            default_rpe=settings.default_rpe,
            plate_increment=settings.plate_increment,
        )
        self.shaper = ReadinessShaper(plate_increment=settings.plate_increment)
        self.state_machine = SessionStateMachine(
            sink=sink,
            queue_builder=self.queue_builder,
            plate_increment=settings.plate_increment,
            weight_unit=settings.weight_unit,
        )
        self.disruptions = DisruptionHandler(plate_increment=settings.plate_increment)
        self.modifications = ModificationHandler(
            self.disruptions,
            plate_increment=settings.plate_increment,
            travel_default_days=settings.travel_default_days,
            sickness_default_days=settings.sickness_default_days,
        )

    def start_session(
        self,
        exercises: Sequence[ExerciseDescriptor],
        memories: Optional[Dict[str, Optional[MovementMemory]]] = None,
        readiness: Optional[ReadinessSnapshot] = None,
        block_status: Optional[BlockStatus] = None,
        *,
        user_id: Optional[str] = None,
        workout_id: Optional[str] = None,
    ) -> SessionContext:
        """Build, shape and start a session from already-resolved inputs."""
        return open_session(
            self.queue_builder,
            self.shaper,
            exercises,
            memories,
            readiness,
            block_status,
            user_id=user_id,
            workout_id=workout_id,
        )

    def start_session_use_case(
        self,
        catalog: ExerciseCatalog,
        history_repo: MovementHistoryRepository,
        readiness_repo: Optional[ReadinessRepository] = None,
        block_repo: Optional[BlockStatusRepository] = None,
    ) -> StartSessionUseCase:
        """StartSessionUseCase sharing this engine's configured components."""
        return StartSessionUseCase(
            catalog=catalog,
            history_repo=history_repo,
            readiness_repo=readiness_repo,
            block_repo=block_repo,
            resolver=self.resolver,
            queue_builder=self.queue_builder,
            shaper=self.shaper,
        )


def create_engine(
    settings: Optional[Settings] = None,
    sink: Optional[SetCompletionSink] = None,
) -> SessionEngine:
    """
    Create and configure a SessionEngine instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        sink: Receives completed sets (optional)

    Returns:
        Configured SessionEngine instance.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings)

    # Sink failures are logged with logger.exception and reach Sentry that way
    _init_sentry(settings)

    return SessionEngine(settings, sink=sink)


def configure_logging(settings: Settings) -> None:
    """Set the root log level, adding a stream handler if none exists."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            integrations=[
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
        )
        logger.info("Sentry initialized for session engine")
