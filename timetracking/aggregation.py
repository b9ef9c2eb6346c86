"""
Per-user weekly time series, as consumed by the dashboard chart.

Days are folded into Sunday-to-Saturday weeks, newest week first. Weeks with no
recorded time are left out; a user with nothing in range gets `NO_DATA`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Union

from django.utils import timezone

from . import queries
from .queries import QueryGateway
from .utils import week_bounds, week_start


@dataclass
class DayRecord:
    day: date
    duration: float = 0.0
    attendance: float = 0.0
    absence: float = 0.0
    projects: Dict[str, float] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "duration": self.duration,
            "attendance": self.attendance,
            "absence": self.absence,
            "projects": dict(self.projects),
        }


@dataclass
class WeekBucket:
    week: date  # the Sunday that opens the week
    days: List[DayRecord] = field(default_factory=list)

    @property
    def start(self) -> date:
        return week_bounds(self.week)[0]

    @property
    def end(self) -> date:
        return week_bounds(self.week)[1]

    def to_json(self) -> Dict[str, Any]:
        return {
            "week": self.week.isoformat(),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "days": [d.to_json() for d in self.days],
        }


@dataclass
class ChartData:
    user_id: int
    weeks: List[WeekBucket]

    def to_json(self) -> Dict[str, Any]:
        return {"user_id": self.user_id, "weeks": [w.to_json() for w in self.weeks]}


class _NoData:
    """Sentinel for "this user has no timesheet data"."""

    _instance: Optional["_NoData"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA = _NoData()

ChartResult = Union[ChartData, _NoData]


def weekly_chart_data(
    gateway: QueryGateway,
    user_id,
    weeks: int = 12,
    today: Optional[date] = None,
) -> ChartResult:
    today = today or timezone.localdate()
    end = week_bounds(today)[1]
    start = week_start(today) - timedelta(weeks=max(weeks, 1) - 1)

    totals = queries.daily_totals(gateway, user_id, start, end)
    per_project = queries.project_hours(gateway, user_id, start, end)

    days: Dict[date, DayRecord] = {}
    for row in totals:
        days[row["work_date"]] = DayRecord(
            day=row["work_date"],
            duration=row["duration"],
            attendance=row["attendance"],
            absence=row["absence"],
        )
    for row in per_project:
        rec = days.setdefault(row["work_date"], DayRecord(day=row["work_date"]))
        rec.projects[row["project"]] = rec.projects.get(row["project"], 0) + row["hours"]

    if not days:
        return NO_DATA

    buckets: Dict[date, WeekBucket] = {}
    for d in sorted(days):
        sunday = week_start(d)
        buckets.setdefault(sunday, WeekBucket(week=sunday)).days.append(days[d])

    return ChartData(
        user_id=int(user_id),
        weeks=[buckets[k] for k in sorted(buckets, reverse=True)],
    )
