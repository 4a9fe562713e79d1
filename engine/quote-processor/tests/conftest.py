"""
engine.quote-processor.tests.conftest

Purpose:
    Local pytest fixtures for quote-processor engine tests.
    Keeps fixtures discoverable when running pytest from the monorepo root.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import pytest

from quote_processor.broker.memory import MemoryBroker
from quote_processor.contracts.channels import ChannelNames


@pytest.fixture()
def broker() -> MemoryBroker:
    b = MemoryBroker(poll_timeout_s=0.01)
    yield b
    b.close()


@pytest.fixture()
def channels() -> ChannelNames:
    return ChannelNames()


@pytest.fixture()
def collect():
    """
    Returns (handler, bodies): handler appends every delivered body to bodies.
    """
    bodies: list[str] = []

    def _handler(body: str) -> None:
        bodies.append(body)

    return _handler, bodies
