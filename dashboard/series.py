from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List

from django.conf import settings

from timetracking.aggregation import DayRecord, WeekBucket
from timetracking.utils import day_label, week_range_label

NO_DATA_TITLE = "No Data"


def daily_target_hours() -> float:
    return getattr(settings, "TIMESHEET_DAILY_TARGET_HOURS", 8)


@dataclass
class ChartSeriesSet:
    labels: List[str] = field(default_factory=list)
    projects: Dict[str, List[float]] = field(default_factory=dict)
    duration: List[float] = field(default_factory=list)
    attendance: List[float] = field(default_factory=list)
    absence: List[float] = field(default_factory=list)
    target: List[float] = field(default_factory=list)
    title: str = NO_DATA_TITLE

    @property
    def is_empty(self) -> bool:
        return not self.labels


def build_series(week: WeekBucket) -> ChartSeriesSet:
    """Spread one week's day records over its seven calendar days.

    Days without a record are zero-filled; a week without any record gives an
    empty set titled "No Data".
    """
    if not week.days:
        return ChartSeriesSet()

    by_day: Dict[date, DayRecord] = {rec.day: rec for rec in week.days}

    # Only projects booked this week get a series.
    projects: Dict[str, List[float]] = {}
    for rec in week.days:
        for name in rec.projects:
            projects.setdefault(name, [])

    out = ChartSeriesSet(
        projects=projects,
        title=f"Week: {week_range_label(week.week)}",
    )

    target = daily_target_hours()
    d = week.start
    while d <= week.end:
        rec = by_day.get(d)
        out.labels.append(day_label(d))
        for name, values in projects.items():
            values.append(rec.projects.get(name, 0) if rec else 0)
        out.duration.append(rec.duration if rec else 0)
        out.attendance.append(rec.attendance if rec else 0)
        out.absence.append(rec.absence if rec else 0)
        out.target.append(target)
        d += timedelta(days=1)

    return out
