from .settings import *  # noqa: F401,F403
from .settings import env

# --- Core ---
SECRET_KEY = env("DJANGO_SECRET_KEY")  # required in prod
DEBUG = False
ALLOWED_HOSTS = [h.strip() for h in env("DJANGO_ALLOWED_HOSTS").split(",")]

# --- Database (MariaDB 11.x) ---
DATABASES = {
    "default": env.db()  # expects DATABASE_URL
}
if DATABASES["default"]["ENGINE"].endswith("mysql"):
    DATABASES["default"].setdefault("OPTIONS", {})
    DATABASES["default"]["OPTIONS"].update({
        "charset": "utf8mb4",
        "use_unicode": True,
        "init_command": "SET sql_mode='STRICT_TRANS_TABLES,ERROR_FOR_DIVISION_BY_ZERO,NO_ENGINE_SUBSTITUTION'",
    })
DATABASES["default"]["CONN_MAX_AGE"] = 300  # keep connections warm in prod

WHITENOISE_AUTOREFRESH = False
WHITENOISE_USE_FINDERS = False

# --- Security / proxy (production defaults) ---
SECURE_SSL_REDIRECT = True                 # set False temporarily if you must start in plain HTTP
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Trust reverse proxy (e.g., Nginx) for scheme
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# HSTS: enable once HTTPS is confirmed working end-to-end
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# --- Logging (STDOUT for systemd/journald) ---
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "root": {"handlers": ["console"], "level": "INFO"},
    "loggers": {
        "django.server": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "django.security.DisallowedHost": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}
