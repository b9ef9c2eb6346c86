from django.contrib.auth.models import AnonymousUser


def _profile(user):
    return getattr(user, "profile", None)


def is_pm(user) -> bool:
    if not user or isinstance(user, AnonymousUser) or not user.is_authenticated:
        return False
    profile = _profile(user)
    return bool(profile and profile.is_project_manager)


def is_manager_of(user, target_user_id: int) -> bool:
    """True when `user` is the recorded line manager of `target_user_id`."""
    if not user or not user.is_authenticated:
        return False
    return user.direct_reports.filter(user_id=target_user_id).exists()


def can_view_user(user, target_user_id) -> bool:
    """Read access to another user's profile and timesheets."""
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser or is_pm(user):
        return True
    if str(user.id) == str(target_user_id):
        return True
    try:
        return is_manager_of(user, int(target_user_id))
    except (TypeError, ValueError):
        # default conservative
        return False
