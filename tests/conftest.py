"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from collections.abc import Sequence
from email.message import Message
from typing import Any

import pytest

from core.session_client import SessionClient, SessionClientConfig

AUTH_URL = "https://identity.example.test/api/auth/signin"
GRAPHQL_URL = "https://identity.example.test/api/graphql-engine/v1/graphql"


class FakeResponse:
    """Minimal stand-in for the object returned by `urllib.request.urlopen`."""

    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


class FakeHttp:
    """Scripted opener keyed by URL that records every request it receives."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes] | BaseException] = {}
        self.requests: list[urllib.request.Request] = []
        self.timeouts: list[float | None] = []

    def respond(self, url: str, *, status: int = 200, body: bytes | None = None, json_body: Any = None) -> None:
        payload = body if body is not None else json.dumps(json_body).encode("utf-8")
        self.routes[url] = (status, payload)

    def fail(self, url: str, exc: BaseException) -> None:
        self.routes[url] = exc

    def __call__(self, request: urllib.request.Request, timeout: float | None = None) -> FakeResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        route = self.routes[request.full_url]
        if isinstance(route, BaseException):
            raise route
        status, body = route
        if status >= 400:
            raise urllib.error.HTTPError(request.full_url, status, "error", Message(), io.BytesIO(body))
        return FakeResponse(status, body)

    def last_request(self, url: str) -> urllib.request.Request:
        matching = [request for request in self.requests if request.full_url == url]
        assert matching, f"no request sent to {url}"
        return matching[-1]


class MemoryTokenStore:
    """In-memory token store used by unit tests."""

    def __init__(self, token: str | None = None) -> None:
        self.token = token
        self.cleared = False

    def get(self) -> str | None:
        return self.token

    def set(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None
        self.cleared = True


def user_payload(
    *,
    transactions: list[dict[str, Any]] | None = None,
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    audit_ratio: float = 1.2345,
    date_of_birth: str = "2000-06-15T00:00:00Z",
) -> dict[str, Any]:
    """Return a GraphQL response body shaped like the provider's."""

    return {
        "data": {
            "user": [
                {
                    "firstName": first_name,
                    "lastName": last_name,
                    "auditRatio": audit_ratio,
                    "attrs": {"dateOfBirth": date_of_birth},
                    "transactions": transactions if transactions is not None else [],
                }
            ]
        }
    }


SCENARIO_TRANSACTIONS = [
    {"type": "xp", "amount": 5000, "object": {"name": "p1"}},
    {"type": "up", "amount": 200000, "object": {"name": "audit"}},
    {"type": "down", "amount": 50000, "object": {"name": "audit"}},
]


@pytest.fixture
def make_user_payload():
    """Return the GraphQL response body factory."""

    return user_payload


@pytest.fixture
def scenario_transactions() -> list[dict[str, Any]]:
    """Return one xp grant, one audit given and one audit received."""

    return [dict(item) for item in SCENARIO_TRANSACTIONS]


@pytest.fixture
def fake_http() -> FakeHttp:
    """Return an empty scripted opener."""

    return FakeHttp()


@pytest.fixture
def token_store() -> MemoryTokenStore:
    """Return an empty in-memory token store."""

    return MemoryTokenStore()


@pytest.fixture
def client_config() -> SessionClientConfig:
    """Return a SessionClientConfig pointing at the fake endpoints."""

    return SessionClientConfig(auth_url=AUTH_URL, graphql_url=GRAPHQL_URL, event_id=85)


@pytest.fixture
def session_client(client_config, token_store, fake_http) -> SessionClient:
    """Return a SessionClient wired to the fake opener and in-memory store."""

    return SessionClient(client_config, token_store=token_store, opener=fake_http)


@pytest.fixture
def dashboard_http(monkeypatch, settings, fake_http) -> FakeHttp:
    """Route the views' SessionClient through the fake opener."""

    import core.views

    settings.XP_DASHBOARD_AUTH_URL = AUTH_URL
    settings.XP_DASHBOARD_GRAPHQL_URL = GRAPHQL_URL

    def build(token_store):
        config = SessionClientConfig(
            auth_url=settings.XP_DASHBOARD_AUTH_URL,
            graphql_url=settings.XP_DASHBOARD_GRAPHQL_URL,
            event_id=settings.XP_DASHBOARD_EVENT_ID,
        )
        return SessionClient(config, token_store=token_store, opener=fake_http)

    monkeypatch.setattr(core.views, "build_session_client", build)
    return fake_http


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request cycle.
    - `integration`: tests touching Django views, sessions, or templates.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
