"""Template context processors for xpDashboard."""

from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest

from core.session_client import SessionTokenStore


def signed_in(request: HttpRequest) -> dict[str, bool]:
    """Expose whether the current session holds a token.

    Args:
        request: Current request object.

    Returns:
        Context dict with `signed_in` boolean.
    """

    session = getattr(request, "session", None)
    if session is None:
        return {"signed_in": False}
    store = SessionTokenStore(session, key=settings.XP_DASHBOARD_TOKEN_KEY)
    return {"signed_in": store.get() is not None}
