from __future__ import annotations

import uuid
from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models
from django.utils import timezone
from django.utils.text import slugify


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class TrackedProject(TimestampedModel):
    uid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True, db_index=True)

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=255, unique=True, db_index=True, blank=True)

    is_active = models.BooleanField(default=True, db_index=True)

    external_ref = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        unique=True,
        db_index=True,
        help_text="Project id in the timesheet package (no FK).",
    )

    class Meta:
        ordering = ["title"]
        indexes = [
            models.Index(fields=["is_active", "title"], name="tt_idx_proj_active_title"),
        ]

    def __str__(self) -> str:
        return self.title

    def _ensure_slug(self) -> None:
        base = slugify(self.title) or "project"
        base = base[:120]
        for n in range(1, 50):
            cand = base if n == 1 else f"{base}-{n}"
            if not TrackedProject.objects.filter(slug=cand).exclude(pk=self.pk).exists():
                self.slug = cand
                return
        raise IntegrityError("Could not generate a unique slug for TrackedProject.")

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.slug:
            self._ensure_slug()
        super().save(*args, **kwargs)


class EntryType(models.TextChoices):
    WORK = "work", "Project work"
    ATTENDANCE = "attendance", "Attendance"
    ABSENCE = "absence", "Absence"


class TimeEntry(TimestampedModel):
    """One line of a user's timesheet.

    Work lines are booked against a project and add up to the day's duration.
    Attendance and absence lines carry no project.
    """

    uid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True, db_index=True)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="time_entries")
    project = models.ForeignKey(
        TrackedProject,
        on_delete=models.PROTECT,
        related_name="entries",
        null=True,
        blank=True,
    )

    work_date = models.DateField(default=timezone.localdate, db_index=True)
    entry_type = models.CharField(max_length=16, choices=EntryType.choices, default=EntryType.WORK, db_index=True)
    duration_minutes = models.PositiveIntegerField(help_text="Exact minutes.")
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-work_date", "-created_at"]
        verbose_name_plural = "time entries"
        indexes = [
            models.Index(fields=["user", "work_date"], name="tt_idx_entry_user_date"),
            models.Index(fields=["user", "entry_type", "work_date"], name="tt_idx_entry_user_type_date"),
            models.Index(fields=["project", "work_date"], name="tt_idx_entry_project_date"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(duration_minutes__gt=0), name="tt_chk_positive_minutes"),
        ]

    def __str__(self) -> str:
        what = self.project.title if self.project_id else self.get_entry_type_display()
        return f"{self.user} · {what} · {self.work_date} · {self.duration_minutes}m"

    def clean(self) -> None:
        if self.entry_type == EntryType.WORK and not self.project_id:
            raise ValidationError({"project": "Project work must be booked against a project."})
        if self.entry_type != EntryType.WORK and self.project_id:
            raise ValidationError({"project": "Attendance and absence are not booked against a project."})
