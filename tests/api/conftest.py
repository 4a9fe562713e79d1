"""
tests.api.conftest

Shared pytest fixtures for API tests.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.api.main import create_app
from backend.api.settings import Settings
from quote_processor.broker.memory import MemoryBroker
from quote_processor.pricing import fixed_pricing


@pytest.fixture()
def client_factory():
    """
    Factory fixture that creates a fresh TestClient over an isolated app.

    IMPORTANT:
        The lifespan (consumer threads) only runs when the client is used as a
        context manager: `with client_factory() as c: ...`. Without it, submitted
        requests stay pending, which is what lookup-only tests want.
    """

    def _make(*, price=123.456, inline_processor: bool = True) -> TestClient:
        settings = Settings(broker_backend="memory", inline_processor=inline_processor)
        app = create_app(
            settings,
            broker=MemoryBroker(poll_timeout_s=0.01),
            pricing=fixed_pricing(price),
        )
        return TestClient(app, raise_server_exceptions=True)

    return _make


@pytest.fixture()
def client(client_factory) -> TestClient:
    """
    Backward-compatible alias fixture.

    Allows simple tests (health, validation, not-found) to just depend on `client`.
    """
    return client_factory()
