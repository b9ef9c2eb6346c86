"""
HTTP tests: permission-checked timesheet endpoints and the session-backed chart.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from accounts.models import UserRole
from dashboard.views import SESSION_KEY
from timetracking.models import EntryType, TimeEntry, TrackedProject
from timetracking.utils import week_start

pytestmark = pytest.mark.django_db


@pytest.fixture
def people(make_user):
    boss = make_user("boss", role=UserRole.DEVELOPER)
    ada = make_user("ada", manager=boss)
    eve = make_user("eve")
    pm = make_user("pm", role=UserRole.PROJECT_MANAGER)
    return {"boss": boss, "ada": ada, "eve": eve, "pm": pm}


@pytest.fixture
def ada_weeks(people):
    """Ada has time booked this week and two weeks ago."""
    ada = people["ada"]
    alpha = TrackedProject.objects.create(title="Alpha")
    this_sunday = week_start(timezone.localdate())
    for offset in (0, 14):
        sunday = this_sunday - timedelta(days=offset)
        TimeEntry.objects.create(user=ada, project=alpha, work_date=sunday + timedelta(days=1), duration_minutes=480)
        TimeEntry.objects.create(
            user=ada, entry_type=EntryType.ATTENDANCE, work_date=sunday + timedelta(days=1), duration_minutes=480
        )
    return ada


class TestTimesheetApi:

    def test_anonymous_gets_401(self, client, people):
        url = reverse("timetracking:employee_details", args=[people["ada"].id])

        response = client.get(url)

        assert response.status_code == 401
        assert response.json() == {"detail": "Authentication required."}

    def test_user_reads_self(self, client, people):
        client.force_login(people["ada"])

        response = client.get(reverse("timetracking:employee_details", args=[people["ada"].id]))

        assert response.status_code == 200
        assert response.json()["rows"][0]["username"] == "ada"

    def test_stranger_is_forbidden(self, client, people):
        client.force_login(people["eve"])

        response = client.get(reverse("timetracking:daily_totals", args=[people["ada"].id]))

        assert response.status_code == 403

    def test_manager_reads_direct_report(self, client, people):
        client.force_login(people["boss"])

        response = client.get(reverse("timetracking:manager_of", args=[people["ada"].id]))

        assert response.status_code == 200
        assert [r["username"] for r in response.json()["rows"]] == ["boss"]

    def test_manager_reads_team(self, client, people):
        client.force_login(people["boss"])

        response = client.get(reverse("timetracking:team_members", args=[people["boss"].id]))

        assert [r["username"] for r in response.json()["rows"]] == ["ada"]

    def test_project_manager_reads_anyone(self, client, people, ada_weeks):
        client.force_login(people["pm"])

        response = client.get(reverse("timetracking:project_hours", args=[ada_weeks.id]))

        assert response.status_code == 200
        rows = response.json()["rows"]
        assert {r["project"] for r in rows} == {"Alpha"}
        assert all(isinstance(r["work_date"], str) for r in rows)

    def test_reversed_range_is_400(self, client, people):
        client.force_login(people["ada"])
        url = reverse("timetracking:daily_totals", args=[people["ada"].id])

        response = client.get(url, {"from": "2025-03-09", "to": "2025-03-02"})

        assert response.status_code == 400
        assert "after end date" in response.json()["detail"]

    def test_garbage_date_is_400(self, client, people):
        client.force_login(people["ada"])
        url = reverse("timetracking:daily_totals", args=[people["ada"].id])

        response = client.get(url, {"from": "last tuesday"})

        assert response.status_code == 400

    def test_post_not_allowed(self, client, people):
        client.force_login(people["ada"])

        response = client.post(reverse("timetracking:employee_details", args=[people["ada"].id]))

        assert response.status_code == 405

    def test_weekly_data(self, client, people, ada_weeks):
        client.force_login(ada_weeks)

        payload = client.get(reverse("timetracking:weekly_data", args=[ada_weeks.id])).json()

        assert payload["user_id"] == ada_weeks.id
        assert payload["no_data"] is False
        assert len(payload["weeks"]) == 2
        assert payload["weeks"][0]["week"] > payload["weeks"][1]["week"]

    def test_weekly_data_empty(self, client, people):
        client.force_login(people["eve"])

        payload = client.get(reverse("timetracking:weekly_data", args=[people["eve"].id])).json()

        assert payload == {"user_id": people["eve"].id, "weeks": [], "no_data": True}


class TestChartEndpoints:

    def test_page_requires_login(self, client):
        response = client.get(reverse("dashboard:home"))

        assert response.status_code == 302

    def test_page_renders(self, client, people):
        client.force_login(people["ada"])

        response = client.get(reverse("dashboard:home"))

        assert response.status_code == 200
        assert b"<canvas" in response.content

    def test_initial_chart(self, client, ada_weeks):
        client.force_login(ada_weeks)

        payload = client.get(reverse("dashboard:chart")).json()

        assert payload["visible"] is True
        assert payload["weeks"] == 2
        assert payload["state"] == {
            "week_index": 0,
            "mode": "attendance_absence",
            "target_visible": False,
            "user_id": ada_weeks.id,
        }
        chart = payload["chart"]
        assert chart["type"] == "bar"
        assert len(chart["data"]["labels"]) == 7
        hidden = {ds["label"]: ds["hidden"] for ds in chart["data"]["datasets"]}
        assert hidden == {"Target": True, "Duration": True, "Attendance": False, "Absence": False, "Alpha": True}
        assert [item["text"] for item in chart["legend"]] == ["Target", "Duration", "Attendance", "Absence", "Projects"]

    def test_no_data_hides_chart(self, client, people):
        client.force_login(people["eve"])

        payload = client.get(reverse("dashboard:chart")).json()

        assert payload["visible"] is False
        assert payload["weeks"] == 0

    def test_navigation_wraps_and_persists(self, client, ada_weeks):
        client.force_login(ada_weeks)
        url = reverse("dashboard:chart_navigate")

        assert client.post(url, {"direction": "newer"}).json()["state"]["week_index"] == 1
        assert client.session[SESSION_KEY]["week_index"] == 1
        assert client.post(url, {"direction": "older"}).json()["state"]["week_index"] == 0
        assert client.get(reverse("dashboard:chart")).json()["state"]["week_index"] == 0

    def test_bad_direction(self, client, ada_weeks):
        client.force_login(ada_weeks)

        response = client.post(reverse("dashboard:chart_navigate"), {"direction": "sideways"})

        assert response.status_code == 400

    def test_legend_click_switches_view(self, client, ada_weeks):
        client.force_login(ada_weeks)

        payload = client.post(reverse("dashboard:chart_legend"), {"label": "Projects"}).json()

        assert payload["state"]["mode"] == "projects"
        hidden = {ds["label"]: ds["hidden"] for ds in payload["chart"]["data"]["datasets"]}
        assert hidden["Alpha"] is False
        assert hidden["Attendance"] is True
        legend = {item["text"]: item["hidden"] for item in payload["chart"]["legend"]}
        assert legend["Projects"] is False

    def test_target_toggle(self, client, ada_weeks):
        client.force_login(ada_weeks)
        url = reverse("dashboard:chart_legend")

        payload = client.post(url, {"label": "Target"}).json()

        assert payload["state"]["target_visible"] is True
        assert payload["state"]["mode"] == "attendance_absence"

    def test_manager_switches_to_report(self, client, people, ada_weeks):
        client.force_login(people["boss"])
        client.post(reverse("dashboard:chart_navigate"), {"direction": "older"})

        payload = client.post(reverse("dashboard:chart_user"), {"user": ada_weeks.id}).json()

        assert payload["visible"] is True
        assert payload["state"]["user_id"] == ada_weeks.id
        assert payload["state"]["week_index"] == 0
        assert client.session[SESSION_KEY]["user_id"] == ada_weeks.id

    def test_switching_to_stranger_is_forbidden(self, client, people):
        client.force_login(people["eve"])

        response = client.post(reverse("dashboard:chart_user"), {"user": people["ada"].id})

        assert response.status_code == 403

    def test_chart_api_requires_login(self, client):
        response = client.get(reverse("dashboard:chart"))

        assert response.status_code == 401
