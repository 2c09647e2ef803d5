"""URL configuration for xpDashboard."""

from __future__ import annotations

from django.urls import include, path

from core import views as core_views

urlpatterns = [
    path("", include("core.urls")),
    path("login/", core_views.login_view, name="login"),
    path("logout/", core_views.logout_view, name="logout"),
]
