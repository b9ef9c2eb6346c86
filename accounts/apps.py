from django.apps import AppConfig

class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts & roles"

    def ready(self):
        # Ensure the profile receiver is registered in all runtimes
        from . import models  # noqa: F401
