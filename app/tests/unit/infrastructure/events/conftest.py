"""Fixtures for infrastructure event system tests."""

import pytest
from datetime import datetime
from uuid import uuid4
from unittest.mock import MagicMock

from infrastructure.events import Event, EventDispatcher


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = "test.event",
        timestamp: datetime = None,
        correlation_id=None,
        metadata: dict = None,
    ):
        return Event(
            event_type=event_type,
            timestamp=timestamp or datetime.now(),
            correlation_id=correlation_id or uuid4(),
            metadata=metadata or {},
        )

    return _factory


@pytest.fixture
def dispatcher():
    """Fresh dispatcher with no handlers."""
    return EventDispatcher()


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    handler = MagicMock()
    handler.__name__ = "mock_event_handler"
    return handler
