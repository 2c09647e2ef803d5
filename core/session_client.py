"""Client for the identity provider and the GraphQL endpoint.

The client performs exactly two kinds of calls, always sequentially:

1. credential exchange (HTTP Basic) returning an opaque bearer token,
2. the fixed user query authenticated with that token.

Failures are returned as `AuthFailure` / `FetchFailure` values and never
raised across this boundary. There is no retry and no timeout beyond the
configured one (default: the transport default).
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from django.conf import settings

from analysis.dto import UserData
from analysis.errors import FormatError

from .graphql import build_user_query, parse_user_payload

logger = logging.getLogger(__name__)

SessionToken = str

Opener = Callable[..., Any]


class TokenStore(Protocol):
    """Durable storage for the session token."""

    def get(self) -> SessionToken | None: ...

    def set(self, token: SessionToken) -> None: ...

    def clear(self) -> None: ...


class SessionTokenStore:
    """Token store backed by the Django session of the current request.

    With the signed-cookie session backend the token is kept client-side, in a
    tamper-proof cookie, under a single fixed key.
    """

    def __init__(self, session, *, key: str) -> None:
        self._session = session
        self._key = key

    def get(self) -> SessionToken | None:
        token = self._session.get(self._key)
        return token if isinstance(token, str) and token else None

    def set(self, token: SessionToken) -> None:
        self._session[self._key] = token
        self._session.modified = True

    def clear(self) -> None:
        """Drop all session state, not only the token."""

        self._session.flush()


@dataclass(frozen=True, slots=True)
class AuthFailure:
    """Credential exchange failed; the provider does not say why."""

    reason: str = "authentication failed"


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """The user query failed.

    Attributes:
        reason: Short description for logs.
        status: HTTP status when the endpoint answered, else None.
    """

    reason: str
    status: int | None = None

    @property
    def unauthorized(self) -> bool:
        return self.status in (401, 403)


@dataclass(frozen=True, slots=True)
class SessionClientConfig:
    """Endpoints and query parameters for a SessionClient.

    Args:
        auth_url: Identity provider sign-in URL.
        graphql_url: GraphQL endpoint URL.
        event_id: Event id embedded in the user query filter.
        timeout: Optional socket timeout in seconds; None keeps the transport default.
    """

    auth_url: str
    graphql_url: str
    event_id: int
    timeout: float | None = None


class SessionClient:
    """Authenticate, fetch the user's transactions, and manage the token."""

    def __init__(
        self,
        config: SessionClientConfig,
        *,
        token_store: TokenStore,
        opener: Opener = urllib.request.urlopen,
    ) -> None:
        self.config = config
        self.token_store = token_store
        self._opener = opener

    def authenticate(self, username: str, password: str) -> SessionToken | AuthFailure:
        """Exchange credentials for a session token.

        On success the token overwrites any previously stored one.
        """

        credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        request = urllib.request.Request(
            self.config.auth_url,
            method="POST",
            headers={"Authorization": f"Basic {credentials}"},
        )
        try:
            status, body = self._send(request)
        except urllib.error.HTTPError as exc:
            exc.close()
            logger.warning("Sign-in rejected for %r (status=%s).", username, exc.code)
            return AuthFailure()
        except (urllib.error.URLError, OSError) as exc:
            logger.warning("Sign-in request failed for %r: %s", username, _describe(exc))
            return AuthFailure()

        token = _extract_token(body)
        if not _is_success(status) or token is None:
            logger.warning("Sign-in rejected for %r (status=%s).", username, status)
            return AuthFailure()

        self.token_store.set(token)
        logger.info("Signed in %r.", username)
        return token

    def fetch_transactions(self, token: SessionToken) -> UserData | FetchFailure:
        """Run the user query with `token` as bearer credential."""

        body = json.dumps({"query": build_user_query(self.config.event_id)}).encode("utf-8")
        request = urllib.request.Request(
            self.config.graphql_url,
            data=body,
            method="POST",
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )
        try:
            status, raw = self._send(request)
        except urllib.error.HTTPError as exc:
            exc.close()
            logger.warning("User query rejected (status=%s).", exc.code)
            return FetchFailure(reason=f"HTTP {exc.code}", status=exc.code)
        except (urllib.error.URLError, OSError) as exc:
            logger.warning("User query failed: %s", _describe(exc))
            return FetchFailure(reason=_describe(exc))

        if not _is_success(status):
            logger.warning("User query rejected (status=%s).", status)
            return FetchFailure(reason=f"HTTP {status}", status=status)

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("User query returned a non-JSON body.")
            return FetchFailure(reason="response is not JSON", status=status)

        try:
            return parse_user_payload(payload)
        except FormatError as exc:
            if isinstance(payload, dict) and payload.get("errors"):
                logger.warning("User query returned GraphQL errors: %s", payload["errors"])
                return FetchFailure(reason="GraphQL errors", status=status)
            logger.warning("User query returned an unexpected shape: %s", exc)
            return FetchFailure(reason=str(exc), status=status)

    def logout(self) -> None:
        """Clear all stored session state. No network call is made."""

        self.token_store.clear()

    def _send(self, request: urllib.request.Request) -> tuple[int, bytes]:
        if self.config.timeout is None:
            response = self._opener(request)
        else:
            response = self._opener(request, timeout=self.config.timeout)
        with response:
            return int(response.status), response.read()


def build_session_client(token_store: TokenStore) -> SessionClient:
    """Build a SessionClient from Django settings."""

    config = SessionClientConfig(
        auth_url=settings.XP_DASHBOARD_AUTH_URL,
        graphql_url=settings.XP_DASHBOARD_GRAPHQL_URL,
        event_id=settings.XP_DASHBOARD_EVENT_ID,
        timeout=settings.XP_DASHBOARD_HTTP_TIMEOUT,
    )
    return SessionClient(config, token_store=token_store)


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _extract_token(body: bytes) -> SessionToken | None:
    """Return the token from a sign-in body, or None when it is empty or zero.

    The provider answers with a JSON string; plain-text bodies are accepted too.
    """

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return None
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        decoded = text.strip()
    if not isinstance(decoded, str):
        return None
    token = decoded.strip()
    if not token or token == "0":
        return None
    return token


def _describe(exc: BaseException) -> str:
    reason = getattr(exc, "reason", None)
    return str(reason or exc)
