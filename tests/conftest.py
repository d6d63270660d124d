"""
Shared pytest fixtures for the session engine tests.

Part of FSE-110: Session start collaborators
"""
import os
from datetime import date

import pytest

from backend.core.disruption_handler import DisruptionHandler
from backend.core.modification_handler import ModificationHandler
from backend.core.session_engine import SessionStateMachine
from backend.settings import Settings, get_settings
from infrastructure.sinks import InMemorySetCompletionSink
from tests.fakes import make_context

TODAY = date(2026, 3, 2)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def test_settings(monkeypatch):
    """Settings built from defaults only, ignoring the host environment."""
    for var in list(os.environ):
        if var.startswith("SESSION_ENGINE_"):
            monkeypatch.delenv(var, raising=False)
    return Settings(environment="test", _env_file=None)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sink():
    return InMemorySetCompletionSink()


@pytest.fixture
def machine(sink):
    return SessionStateMachine(sink=sink)


@pytest.fixture
def disruptions():
    return DisruptionHandler()


@pytest.fixture
def modifications(disruptions):
    return ModificationHandler(disruptions)


@pytest.fixture
def ctx():
    """Running session: Back Squat 3×5 @ 200, Barbell Curl 3×10 @ 50."""
    return make_context()
