"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from shortlink_app.audit.logger import AuditLogger
from shortlink_app.audit.queue import InMemoryAuditQueue
from shortlink_app.audit.sinks import AuditSink
from shortlink_app.config import settings
from shortlink_app.dependencies import get_audit_queue, get_audit_sink, get_registry
from shortlink_app.registry import ShortcodeRegistry
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy
from shortlink_app.services.url_service import URLService


class FakeClock:
    """Controllable replacement for the registry clock"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class RecordingAuditSink(AuditSink):
    """Keeps every delivered event in memory"""

    def __init__(self):
        self.events = []

    def send(self, event) -> bool:
        self.events.append(event)
        return True


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry(clock):
    """A fresh, empty registry for each test"""
    return ShortcodeRegistry(
        short_code_strategy=RandomShortCodeStrategy(length=6),
        clock=clock,
        default_validity_minutes=30,
        min_code_length=4,
    )


@pytest.fixture
def audit_queue():
    return InMemoryAuditQueue()


@pytest.fixture
def audit_logger(audit_queue):
    return AuditLogger(queue=audit_queue, queue_name=settings.audit_queue_name)


@pytest.fixture
def url_service(registry, audit_logger):
    return URLService(registry=registry, audit=audit_logger)


@pytest.fixture
def audit_sink():
    return RecordingAuditSink()


@pytest.fixture(scope="function")
def client(registry, audit_queue, audit_sink, monkeypatch):
    """
    Create a test client with the registry and audit dependencies overridden.
    This is the main fixture that API tests will use.
    """
    monkeypatch.setattr(settings, "audit_poll_interval", 0.01)

    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_audit_queue] = lambda: audit_queue
    app.dependency_overrides[get_audit_sink] = lambda: audit_sink

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
