from __future__ import annotations
from typing import Any, Callable, Dict, List

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from accounts.decorators import api_login_required

from . import queries
from .aggregation import weekly_chart_data
from .permissions import can_view_user
from .queries import InvalidArgument, OrmQueryGateway, QueryError
from .utils import parse_iso_date


def _gateway() -> queries.QueryGateway:
    return OrmQueryGateway()


def _serialize(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    out = []
    for row in rows:
        out.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.items()})
    return out


def _date_param(request, name: str):
    raw = request.GET.get(name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise InvalidArgument(f"Invalid date for '{name}': {raw!r}. Use YYYY-MM-DD.")


def _guarded(request, target_id, call: Callable[[], Any]) -> JsonResponse:
    """Permission check, run the query, map errors to JSON responses."""
    if not can_view_user(request.user, target_id):
        return JsonResponse({"detail": "You do not have permission to view this user."}, status=403)
    try:
        result = call()
    except QueryError as e:
        return JsonResponse({"detail": e.message}, status=400)
    return JsonResponse(result if isinstance(result, dict) else {"rows": _serialize(result)})


@api_login_required
@require_GET
def employee_details(request, user_id: int):
    return _guarded(request, user_id, lambda: queries.employee_details(_gateway(), user_id))


@api_login_required
@require_GET
def manager_of(request, user_id: int):
    return _guarded(request, user_id, lambda: queries.manager_of(_gateway(), user_id))


@api_login_required
@require_GET
def team_members(request, manager_id: int):
    return _guarded(request, manager_id, lambda: queries.team_members(_gateway(), manager_id))


@api_login_required
@require_GET
def daily_totals(request, user_id: int):
    def call():
        return queries.daily_totals(
            _gateway(), user_id, _date_param(request, "from"), _date_param(request, "to")
        )
    return _guarded(request, user_id, call)


@api_login_required
@require_GET
def project_hours(request, user_id: int):
    def call():
        return queries.project_hours(
            _gateway(), user_id, _date_param(request, "from"), _date_param(request, "to")
        )
    return _guarded(request, user_id, call)


@api_login_required
@require_GET
def weekly_data(request, user_id: int):
    def call():
        data = weekly_chart_data(_gateway(), user_id, weeks=getattr(settings, "TIMESHEET_CHART_WEEKS", 12))
        payload = data.to_json() if data else {"user_id": user_id, "weeks": []}
        payload["no_data"] = not data
        return payload
    return _guarded(request, user_id, call)
