from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", RedirectView.as_view(pattern_name="dashboard:home", permanent=False)),

    # Internal app
    path("app/dashboard/", include("dashboard.urls")),
    path("app/timesheets/", include("timetracking.urls")),
]
