import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="TrackedProject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("uid", models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, unique=True)),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=255, unique=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                (
                    "external_ref",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Project id in the timesheet package (no FK).",
                        max_length=255,
                        null=True,
                        unique=True,
                    ),
                ),
            ],
            options={
                "ordering": ["title"],
                "indexes": [models.Index(fields=["is_active", "title"], name="tt_idx_proj_active_title")],
            },
        ),
        migrations.CreateModel(
            name="TimeEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("uid", models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, unique=True)),
                ("work_date", models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                (
                    "entry_type",
                    models.CharField(
                        choices=[("work", "Project work"), ("attendance", "Attendance"), ("absence", "Absence")],
                        db_index=True,
                        default="work",
                        max_length=16,
                    ),
                ),
                ("duration_minutes", models.PositiveIntegerField(help_text="Exact minutes.")),
                ("notes", models.TextField(blank=True)),
                (
                    "project",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="entries",
                        to="timetracking.trackedproject",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="time_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "time entries",
                "ordering": ["-work_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["user", "work_date"], name="tt_idx_entry_user_date"),
                    models.Index(fields=["user", "entry_type", "work_date"], name="tt_idx_entry_user_type_date"),
                    models.Index(fields=["project", "work_date"], name="tt_idx_entry_project_date"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(duration_minutes__gt=0), name="tt_chk_positive_minutes"),
                ],
            },
        ),
    ]
