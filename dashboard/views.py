import logging
import uuid

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import api_login_required
from timetracking.aggregation import weekly_chart_data
from timetracking.permissions import can_view_user
from timetracking.queries import OrmQueryGateway, QueryError

from .renderer import ChartJsCanvas
from .signals import selected_user_changed
from .state import Direction, LegendGroup, ViewState
from .widget import WeeklyChartWidget

logger = logging.getLogger(__name__)

SESSION_KEY = "dashboard.weekly_chart"


def _fetch_weeks(user_id):
    return weekly_chart_data(
        OrmQueryGateway(),
        user_id,
        weeks=getattr(settings, "TIMESHEET_CHART_WEEKS", 12),
    )


def _widget_for(request) -> WeeklyChartWidget:
    state = ViewState.from_session(request.session.get(SESSION_KEY))
    if not state.user_id or not can_view_user(request.user, state.user_id):
        state = ViewState(user_id=request.user.id)
    widget = WeeklyChartWidget(
        fetcher=_fetch_weeks,
        target=ChartJsCanvas(),
        state=state,
        channel=f"chart-{uuid.uuid4().hex}",
    )
    widget.load_library()
    return widget


def _resume(widget: WeeklyChartWidget) -> None:
    widget.resume(widget.fetcher(widget.state.user_id))


def _respond(request, widget: WeeklyChartWidget) -> JsonResponse:
    request.session[SESSION_KEY] = widget.state.to_session()
    payload = widget.target.to_json()
    payload["state"] = widget.state.to_session()
    payload["weeks"] = widget.week_count
    return JsonResponse(payload)


def _error(message: str, status: int = 400) -> JsonResponse:
    return JsonResponse({"detail": message}, status=status)


@login_required
def weekly_chart_page(request):
    ctx = {
        "chart_js_url": getattr(settings, "CHART_JS_URL", ""),
        "legend_groups": [g.value for g in LegendGroup],
    }
    return render(request, "dashboard/weekly_chart.html", ctx)


@api_login_required
@require_GET
def chart_state(request):
    widget = _widget_for(request)
    try:
        _resume(widget)
    except QueryError as e:
        return _error(e.message)
    return _respond(request, widget)


@api_login_required
@require_POST
def chart_navigate(request):
    raw = (request.POST.get("direction") or "").strip().lower()
    try:
        direction = Direction(raw)
    except ValueError:
        return _error(f"Unknown direction: {raw!r}.")
    widget = _widget_for(request)
    try:
        _resume(widget)
    except QueryError as e:
        return _error(e.message)
    widget.navigate(direction)
    return _respond(request, widget)


@api_login_required
@require_POST
def chart_legend(request):
    label = (request.POST.get("label") or "").strip()
    hidden_raw = request.POST.get("hidden")
    hidden = None if hidden_raw is None else hidden_raw.lower() in ("1", "true", "yes")
    widget = _widget_for(request)
    try:
        _resume(widget)
    except QueryError as e:
        return _error(e.message)
    widget.on_legend_click(label, hidden)
    return _respond(request, widget)


@api_login_required
@require_POST
def chart_user(request):
    raw = (request.POST.get("user") or "").strip()
    if not raw.isdigit():
        return _error("A user id is required.")
    user_id = int(raw)
    if not can_view_user(request.user, user_id):
        logger.warning(f"User {request.user.id} may not view user {user_id}")
        return _error("You do not have permission to view this user.", status=403)

    widget = _widget_for(request)
    widget.subscribe()
    try:
        selected_user_changed.send(sender=chart_user, user_id=user_id, channel=widget.channel)
    finally:
        widget.unsubscribe()
    return _respond(request, widget)
