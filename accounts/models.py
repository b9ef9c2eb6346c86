from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

class UserRole(models.TextChoices):
    PROJECT_MANAGER = "pm", "Project Manager"
    DEVELOPER = "dev", "Developer"

class Profile(models.Model):
    """
    One-to-one user profile that stores an admin-assigned role and line manager.
    The manager link drives who may read someone else's timesheet.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=8, choices=UserRole.choices, default=UserRole.DEVELOPER, db_index=True)
    manager = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="direct_reports",
        help_text="Line manager; may read this user's timesheets.",
    )

    def __str__(self):
        return f"{self.user.username} ({self.get_role_display()})"

    @property
    def is_project_manager(self) -> bool:
        return self.role == UserRole.PROJECT_MANAGER


@receiver(post_save, sender=User)
def ensure_profile_exists(sender, instance: User, created: bool, **kwargs):
    if created:
        Profile.objects.get_or_create(user=instance)


def display_name(user: User) -> str:
    return user.get_full_name() or user.username
