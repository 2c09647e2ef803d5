"""Minimal smoke tests for project wiring."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit


def test_analysis_package_exports_summaries() -> None:
    """Import the analysis package and verify the public entry points exist."""

    from analysis import summarize_audits, summarize_experience

    assert callable(summarize_audits)
    assert callable(summarize_experience)


def test_django_project_loads() -> None:
    """Django settings are valid and use client-side signed-cookie sessions."""

    from django.conf import settings

    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert settings.SESSION_ENGINE == "django.contrib.sessions.backends.signed_cookies"
    assert settings.XP_DASHBOARD_EVENT_ID == 85
    assert settings.XP_DASHBOARD_TOKEN_KEY == "accessToken"
