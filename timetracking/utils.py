from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Optional, Tuple


# ----- Duration helpers -----

def minutes_to_hours(minutes: Optional[int]) -> float:
    return round((minutes or 0) / 60.0, 2)


# ----- Date helpers -----

def parse_iso_date(text: Optional[str]) -> Optional[date]:
    """Parse "YYYY-MM-DD"; blank input gives None, garbage raises ValueError."""
    s = (text or "").strip()
    if not s:
        return None
    return date.fromisoformat(s)


def day_label(d: date) -> str:
    """Chart label for a day, e.g. "Sun Mar 02 2025"."""
    return d.strftime("%a %b %d %Y")


# ----- Week helpers -----
# Timesheet weeks run Sunday through Saturday.

def week_start(d: date | datetime) -> date:
    if isinstance(d, datetime):
        d = d.date()
    # isoweekday: Mon=1 .. Sun=7
    return d - timedelta(days=d.isoweekday() % 7)


def week_bounds(d: date | datetime) -> Tuple[date, date]:
    """Return (sunday, saturday) for the week containing d, both inclusive."""
    sunday = week_start(d)
    return sunday, sunday + timedelta(days=6)


def week_range_label(d: date) -> str:
    start, end = week_bounds(d)
    return f"{day_label(start)} - {day_label(end)}"
