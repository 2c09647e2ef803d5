"""Views for the sign-in page and the dashboard."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from functools import wraps

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from core.charting.render import chart_payload
from core.dashboard import DashboardRenderer, DashboardState
from core.forms import LoginForm
from core.session_client import SessionClient, SessionTokenStore, build_session_client


def _session_client(request: HttpRequest) -> SessionClient:
    store = SessionTokenStore(request.session, key=settings.XP_DASHBOARD_TOKEN_KEY)
    return build_session_client(store)


def _today() -> date:
    return timezone.localdate()


def _renderer(request: HttpRequest) -> DashboardRenderer:
    return DashboardRenderer(_session_client(request), today=_today())


def token_required(view):
    """Redirect to the sign-in page when the session holds no token."""

    @wraps(view)
    def wrapped(request: HttpRequest, *args, **kwargs) -> HttpResponse:
        store = SessionTokenStore(request.session, key=settings.XP_DASHBOARD_TOKEN_KEY)
        if store.get() is None:
            return redirect(settings.LOGIN_URL)
        return view(request, *args, **kwargs)

    return wrapped


@require_http_methods(["GET", "POST"])
def login_view(request: HttpRequest) -> HttpResponse:
    """Render the sign-in form and exchange submitted credentials for a token.

    Failed sign-ins re-render the form with an inline message; nothing is
    stored in that case.
    """

    renderer = _renderer(request)
    if request.method == "GET" and renderer.state is DashboardState.logged_in:
        return redirect(settings.LOGIN_REDIRECT_URL)

    form = LoginForm()
    error: str | None = None
    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            outcome = renderer.submit(form.cleaned_data["username"], form.cleaned_data["password"])
            if outcome.ok:
                return redirect(settings.LOGIN_REDIRECT_URL)
            error = outcome.error

    return render(
        request,
        "core/login.html",
        {
            "form": form,
            "error": error,
        },
    )


@require_GET
@token_required
def dashboard(request: HttpRequest) -> HttpResponse:
    """Render the profile summary and both charts for the stored token."""

    page = _renderer(request).render()
    return render(
        request,
        "core/dashboard.html",
        {
            "page": page,
            "profile": page.profile,
            "charts": page.charts,
            "chart_payload": chart_payload(page.charts),
            "chart_js_url": settings.XP_DASHBOARD_CHART_JS_URL,
        },
    )


@require_GET
def charts_api(request: HttpRequest) -> JsonResponse:
    """Return the profile summary and chart configs of one render pass as JSON."""

    store = SessionTokenStore(request.session, key=settings.XP_DASHBOARD_TOKEN_KEY)
    if store.get() is None:
        return JsonResponse({"error": "Not signed in."}, status=401)

    renderer = _renderer(request)
    page = renderer.render()
    if page.error is not None:
        status = 401 if renderer.state is DashboardState.logged_out else 502
        return JsonResponse({"error": page.error}, status=status)
    return JsonResponse(
        {
            "profile": asdict(page.profile) if page.profile is not None else None,
            "charts": chart_payload(page.charts),
            "headers": {chart.container_id: list(chart.headers) for chart in page.charts},
        }
    )


@require_POST
def logout_view(request: HttpRequest) -> HttpResponse:
    """Clear all session state and return to the sign-in page."""

    _renderer(request).logout()
    return redirect(settings.LOGIN_URL)
