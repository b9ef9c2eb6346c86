from django.urls import path

from .views import (
    employee_details, manager_of, team_members,
    daily_totals, project_hours, weekly_data,
)

app_name = "timetracking"

urlpatterns = [
    # people
    path("api/users/<int:user_id>/", employee_details, name="employee_details"),
    path("api/users/<int:user_id>/manager/", manager_of, name="manager_of"),
    path("api/managers/<int:manager_id>/team/", team_members, name="team_members"),

    # time
    path("api/users/<int:user_id>/daily/", daily_totals, name="daily_totals"),
    path("api/users/<int:user_id>/projects/", project_hours, name="project_hours"),
    path("api/users/<int:user_id>/weekly/", weekly_data, name="weekly_data"),
]
