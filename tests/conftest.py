"""
Shared fixtures for the timesheet dashboard tests.
"""
from datetime import date

import pytest

from accounts.models import UserRole
from timetracking.aggregation import ChartData, DayRecord, WeekBucket


class FakeGateway:
    """In-memory QueryGateway: canned rows per query name, records every call."""

    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.calls = []

    def run(self, name, params):
        self.calls.append((name, dict(params)))
        if self.error is not None:
            raise self.error
        return list(self.results.get(name, []))


class FakeTarget:
    """Records what the widget asks the chart to do."""

    def __init__(self):
        self.library_loads = 0
        self.visible = True
        self.draws = []

    def load_library(self):
        self.library_loads += 1

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False

    def draw(self, labels, datasets, title):
        self.draws.append({"labels": labels, "datasets": datasets, "title": title})

    @property
    def last(self):
        return self.draws[-1]

    def hidden(self, label):
        for ds in self.last["datasets"]:
            if ds["label"] == label:
                return ds["hidden"]
        raise KeyError(label)


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def fake_target():
    return FakeTarget()


def week_of(sunday, *days):
    return WeekBucket(week=sunday, days=list(days))


@pytest.fixture
def sample_week():
    """Sun 2 Mar 2025: Monday full project day, Wednesday half day off."""
    return week_of(
        date(2025, 3, 2),
        DayRecord(day=date(2025, 3, 3), duration=8, attendance=8, absence=0, projects={"Alpha": 8}),
        DayRecord(day=date(2025, 3, 5), duration=4, attendance=0, absence=4),
    )


@pytest.fixture
def three_weeks():
    """Newest first, each week with its own project."""
    return ChartData(
        user_id=1,
        weeks=[
            week_of(date(2025, 3, 16), DayRecord(day=date(2025, 3, 17), duration=6, attendance=6, projects={"Gamma": 6})),
            week_of(date(2025, 3, 9), DayRecord(day=date(2025, 3, 10), duration=7, attendance=7, projects={"Beta": 7})),
            week_of(date(2025, 3, 2), DayRecord(day=date(2025, 3, 3), duration=8, attendance=8, projects={"Alpha": 8})),
        ],
    )


@pytest.fixture
def make_user(django_user_model):
    def _make(username, role=UserRole.DEVELOPER, manager=None, **extra):
        user = django_user_model.objects.create_user(username=username, password="pw", **extra)
        profile = user.profile
        profile.role = role
        profile.manager = manager
        profile.save()
        return user
    return _make
