"""
Read-only timesheet queries.

Every endpoint follows the same shape: validate the identifier (and date range),
run one fixed query through a `QueryGateway`, and hand back the rows. Anything
that goes wrong is raised as a `QueryError` carrying a message fit for the user.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Protocol

from django.contrib.auth import get_user_model
from django.db.models import F, Q, Sum

from accounts.models import display_name
from .models import EntryType, TimeEntry
from .utils import minutes_to_hours

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


# ----- Errors -----

class QueryError(Exception):
    """User-facing failure of a timesheet query."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(QueryError):
    pass


class UnderlyingQueryFailure(QueryError):
    pass


# ----- Data access -----

class QueryGateway(Protocol):
    def run(self, name: str, params: Dict[str, Any]) -> List[Row]:
        ...


def _user_row(u) -> Row:
    profile = getattr(u, "profile", None)
    return {
        "id": u.id,
        "username": u.username,
        "full_name": display_name(u),
        "email": u.email,
        "role": getattr(profile, "role", None),
        "manager_id": getattr(profile, "manager_id", None),
    }


class OrmQueryGateway:
    """Runs the named queries against the Django ORM."""

    def __init__(self) -> None:
        self._queries: Dict[str, Callable[..., List[Row]]] = {
            "employee": self._employee,
            "manager": self._manager,
            "team": self._team,
            "daily_totals": self._daily_totals,
            "project_hours": self._project_hours,
        }

    def run(self, name: str, params: Dict[str, Any]) -> List[Row]:
        try:
            query = self._queries[name]
        except KeyError:
            raise LookupError(f"Unknown query: {name}")
        return query(**params)

    def _users(self):
        return get_user_model().objects.select_related("profile")

    def _employee(self, user_id: int) -> List[Row]:
        return [_user_row(u) for u in self._users().filter(pk=user_id)]

    def _manager(self, user_id: int) -> List[Row]:
        managers = self._users().filter(direct_reports__user_id=user_id)
        return [
            {k: v for k, v in _user_row(u).items() if k not in ("role", "manager_id")}
            for u in managers
        ]

    def _team(self, manager_id: int) -> List[Row]:
        reports = self._users().filter(profile__manager=manager_id).order_by("username")
        return [
            {k: v for k, v in _user_row(u).items() if k != "manager_id"}
            for u in reports
        ]

    def _entries(self, user_id: int, start: Optional[date], end: Optional[date]):
        qs = TimeEntry.objects.filter(user_id=user_id)
        if start:
            qs = qs.filter(work_date__gte=start)
        if end:
            qs = qs.filter(work_date__lte=end)
        return qs

    def _daily_totals(self, user_id: int, start: Optional[date] = None, end: Optional[date] = None) -> List[Row]:
        buckets = (
            self._entries(user_id, start, end)
            .values("work_date")
            .annotate(
                work=Sum("duration_minutes", filter=Q(entry_type=EntryType.WORK)),
                attendance=Sum("duration_minutes", filter=Q(entry_type=EntryType.ATTENDANCE)),
                absence=Sum("duration_minutes", filter=Q(entry_type=EntryType.ABSENCE)),
            )
            .order_by("work_date")
        )
        return [
            {
                "work_date": b["work_date"],
                "duration": minutes_to_hours(b["work"]),
                "attendance": minutes_to_hours(b["attendance"]),
                "absence": minutes_to_hours(b["absence"]),
            }
            for b in buckets
        ]

    def _project_hours(self, user_id: int, start: Optional[date] = None, end: Optional[date] = None) -> List[Row]:
        buckets = (
            self._entries(user_id, start, end)
            .filter(entry_type=EntryType.WORK, project__isnull=False)
            .values("work_date", project_title=F("project__title"))
            .annotate(minutes=Sum("duration_minutes"))
            .order_by("work_date", "project_title")
        )
        return [
            {
                "work_date": b["work_date"],
                "project": b["project_title"],
                "hours": minutes_to_hours(b["minutes"]),
            }
            for b in buckets
        ]


# ----- Validation -----

def _require_id(value: Any, what: str = "user") -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"A {what} id is required.")
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid {what} id: {value!r}.")
    if ident <= 0:
        raise InvalidArgument(f"Invalid {what} id: {value!r}.")
    return ident


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise InvalidArgument(f"Start date {start.isoformat()} is after end date {end.isoformat()}.")


def _run(gateway: QueryGateway, name: str, params: Dict[str, Any]) -> List[Row]:
    try:
        return gateway.run(name, params)
    except QueryError:
        raise
    except Exception as e:
        logger.error(f"Query {name} failed with {params}: {e}")
        raise UnderlyingQueryFailure(f"Could not load {name.replace('_', ' ')}: {e}") from e


# ----- Endpoints -----

def employee_details(gateway: QueryGateway, user_id) -> List[Row]:
    return _run(gateway, "employee", {"user_id": _require_id(user_id)})


def manager_of(gateway: QueryGateway, user_id) -> List[Row]:
    return _run(gateway, "manager", {"user_id": _require_id(user_id)})


def team_members(gateway: QueryGateway, manager_id) -> List[Row]:
    return _run(gateway, "team", {"manager_id": _require_id(manager_id, "manager")})


def daily_totals(gateway: QueryGateway, user_id, start: Optional[date] = None, end: Optional[date] = None) -> List[Row]:
    ident = _require_id(user_id)
    _check_range(start, end)
    return _run(gateway, "daily_totals", {"user_id": ident, "start": start, "end": end})


def project_hours(gateway: QueryGateway, user_id, start: Optional[date] = None, end: Optional[date] = None) -> List[Row]:
    ident = _require_id(user_id)
    _check_range(start, end)
    return _run(gateway, "project_hours", {"user_id": ident, "start": start, "end": end})
