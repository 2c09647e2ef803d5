"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (sign-in flow and dashboard views)."""

    name = "core"
    verbose_name = "XP dashboard"
