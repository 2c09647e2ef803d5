"""Dashboard orchestration: sign-in state machine and render passes.

States:
- `logged_out`: no token stored (initial state without a token),
- `authenticating`: a credential exchange is in flight,
- `logged_in`: a token is stored.

A render pass fetches the transactions, runs both summaries and the profile
formatter, and emits the two chart configs. Nothing is carried over between
passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Final

from analysis.dto import ProfileSummary
from analysis.errors import FormatError
from analysis.profile import build_profile_summary
from analysis.transactions import summarize_audits, summarize_experience

from .charting.render import RenderedChart, build_dashboard_charts
from .session_client import AuthFailure, FetchFailure, SessionClient

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE: Final[str] = "Username or password is incorrect!"
SIGN_IN_PENDING_MESSAGE: Final[str] = "Signing in, please wait."
FETCH_FAILED_MESSAGE: Final[str] = "We could not load your data. Please try again later."
SESSION_EXPIRED_MESSAGE: Final[str] = "Your session has expired. Please sign in again."
FORMAT_ERROR_MESSAGE: Final[str] = "Your profile data could not be displayed."
SIGNED_OUT_MESSAGE: Final[str] = "Please sign in to view your dashboard."


class DashboardState(str, Enum):
    """Sign-in state of the dashboard."""

    logged_out = "logged_out"
    authenticating = "authenticating"
    logged_in = "logged_in"


@dataclass(frozen=True, slots=True)
class LoginOutcome:
    """Result of a sign-in submission."""

    state: DashboardState
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is DashboardState.logged_in


@dataclass(frozen=True, slots=True)
class DashboardPage:
    """Everything a template needs for one render pass.

    Attributes:
        profile: Profile summary, or None when the pass failed.
        charts: Rendered chart panels (empty when the pass failed).
        error: User-visible error message, if any.
    """

    profile: ProfileSummary | None = None
    charts: tuple[RenderedChart, ...] = ()
    error: str | None = None


class DashboardRenderer:
    """Drive the session client and turn its results into a DashboardPage."""

    def __init__(self, client: SessionClient, *, today: date) -> None:
        self.client = client
        self.today = today
        self.state = DashboardState.logged_in if client.token_store.get() else DashboardState.logged_out

    def submit(self, username: str, password: str) -> LoginOutcome:
        """Handle a sign-in submission.

        A submission made while another one is pending is rejected rather than
        starting a second credential exchange.
        """

        if self.state is DashboardState.authenticating:
            return LoginOutcome(state=self.state, error=SIGN_IN_PENDING_MESSAGE)

        self.state = DashboardState.authenticating
        try:
            result = self.client.authenticate(username, password)
        finally:
            if self.state is DashboardState.authenticating:
                self.state = DashboardState.logged_out

        if isinstance(result, AuthFailure):
            return LoginOutcome(state=self.state, error=INVALID_CREDENTIALS_MESSAGE)
        self.state = DashboardState.logged_in
        return LoginOutcome(state=self.state)

    def render(self) -> DashboardPage:
        """Run one render pass for the stored token."""

        token = self.client.token_store.get()
        if token is None:
            self.state = DashboardState.logged_out
            return DashboardPage(error=SIGNED_OUT_MESSAGE)

        result = self.client.fetch_transactions(token)
        if isinstance(result, FetchFailure):
            logger.warning("Dashboard render failed: %s (status=%s).", result.reason, result.status)
            if result.unauthorized:
                self.logout()
                return DashboardPage(error=SESSION_EXPIRED_MESSAGE)
            return DashboardPage(error=FETCH_FAILED_MESSAGE)

        experience = summarize_experience(result.transactions)
        audits = summarize_audits(result.transactions, audit_ratio=result.profile.audit_ratio)
        try:
            profile = build_profile_summary(result.profile, experience, audits, today=self.today)
        except FormatError as exc:
            logger.warning("Dashboard render failed: %s", exc)
            return DashboardPage(error=FORMAT_ERROR_MESSAGE)

        return DashboardPage(
            profile=profile,
            charts=build_dashboard_charts(experience, audits, profile),
        )

    def logout(self) -> None:
        """Clear all stored session state and return to `logged_out`."""

        self.client.logout()
        self.state = DashboardState.logged_out
