from __future__ import annotations

import csv

from django.contrib import admin
from django.db import models
from django.db.models import Count, Sum
from django.http import HttpRequest, HttpResponse

from .models import TrackedProject, TimeEntry
from .utils import minutes_to_hours


# ----------------------------
# Project Admin
# ----------------------------

@admin.register(TrackedProject)
class TrackedProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "is_active", "external_ref", "entry_count", "hours_booked", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("title", "slug", "external_ref")
    readonly_fields = ("uid", "slug", "created_at", "updated_at")
    list_per_page = 50

    def get_queryset(self, request: HttpRequest):
        qs = super().get_queryset(request)
        return qs.annotate(_entry_count=Count("entries"), _minutes=Sum("entries__duration_minutes"))

    @admin.display(ordering="_entry_count", description="Entries")
    def entry_count(self, obj: TrackedProject) -> int:
        return getattr(obj, "_entry_count", 0)

    @admin.display(ordering="_minutes", description="Hours")
    def hours_booked(self, obj: TrackedProject) -> float:
        return minutes_to_hours(getattr(obj, "_minutes", 0))


# ----------------------------
# TimeEntry Admin
# ----------------------------

@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    date_hierarchy = "work_date"
    list_display = ("work_date", "user", "entry_type", "project", "duration_hm", "notes_short")
    list_filter = ("entry_type", "project", "user")
    search_fields = ("notes", "project__title", "user__username", "user__first_name", "user__last_name")
    autocomplete_fields = ("project", "user")
    readonly_fields = ("uid", "created_at", "updated_at")
    fields = ("user", "work_date", "entry_type", "project", "duration_minutes", "notes", "uid", "created_at", "updated_at")
    list_select_related = ("project", "user")
    list_per_page = 50

    @admin.display(description="Duration")
    def duration_hm(self, obj: TimeEntry) -> str:
        h, r = divmod(obj.duration_minutes, 60)
        if h and r:
            return f"{h}h {r}m"
        if h:
            return f"{h}h"
        return f"{r}m"

    @admin.display(description="Notes")
    def notes_short(self, obj: TimeEntry) -> str:
        if not obj.notes:
            return ""
        s = obj.notes.strip().replace("\n", " ")
        return s if len(s) <= 80 else f"{s[:77]}..."

    @admin.action(description="Export selected entries to CSV")
    def export_csv(self, request: HttpRequest, queryset: models.QuerySet) -> HttpResponse:
        qs = queryset.select_related("project", "user")
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = 'attachment; filename="time_entries.csv"'
        writer = csv.writer(response)
        writer.writerow(["work_date", "user", "entry_type", "project", "hours", "notes"])
        for e in qs:
            writer.writerow([
                e.work_date.isoformat(),
                e.user.username,
                e.entry_type,
                e.project.title if e.project_id else "",
                minutes_to_hours(e.duration_minutes),
                (e.notes or "").replace("\r", " ").replace("\n", " "),
            ])
        return response

    actions = ("export_csv",)
