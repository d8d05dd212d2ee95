"""Feature-level fixtures for i18n system tests.

Provides loaded contexts, recording observers and a fake remote API for
resolution, formatting and sync scenarios.
"""

import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from infrastructure.events import Event
from tests.factories.i18n import make_context


@pytest.fixture
def context(locale_dir):
    """Loaded context over the default storage root (active en, GameMode)."""
    return make_context(locale_dir)


@pytest.fixture
def writable_context(locale_dir):
    """Loaded context whose storage accepts sync writes."""
    return make_context(locale_dir, writable=True)


@pytest.fixture
def recorded_events():
    """Observer that records every event it receives."""
    events: List[Event] = []

    def _record(event: Event):
        events.append(event)

    _record.events = events
    return _record


class FakeTranslationAPI:
    """Routes requests to canned JSON documents or failures by URL path."""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def json(self, path: str, document, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(
            status_code, content=json.dumps(document).encode("utf-8")
        )

    def text(self, path: str, body: str, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, text=body)

    def fail(self, path: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request):
            raise exc_factory(request)

        self.routes[path] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        return route(request)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def request_for(self, path: str) -> Optional[httpx.Request]:
        for request in self.requests:
            if request.url.path == path:
                return request
        return None


@pytest.fixture
def fake_api():
    return FakeTranslationAPI()


@pytest.fixture
def http_client(fake_api):
    """AsyncClient wired to the fake API. MockTransport opens no sockets."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))
