"""
Hisaab – Django Settings (Infrastructure Only)
==============================================
Django serves as the framework container for Hisaab: ORM, migrations
and app loading. Policy lives in the hisaab package, not here.

Environment:
  DJANGO_DEBUG        "1"/"true" enables debug (default on)
  DJANGO_SECRET_KEY   required outside development
  HISAAB_DB_PATH      SQLite file (default <project>/db.sqlite3)
  HISAAB_LOG_LEVEL    level for the hisaab.* loggers (default INFO)
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── Security ──────────────────────────────────────────────────
DEBUG = _env_flag("DJANGO_DEBUG", True)

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "hisaab-dev-key-replace-before-deployment")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── Hisaab ────────────────────────────────────────────
    "hisaab.tenancy",
    "hisaab.bootstrap",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("HISAAB_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
HISAAB_LOG_LEVEL = os.environ.get("HISAAB_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "hisaab": {
            "handlers": ["console"],
            "level": HISAAB_LOG_LEVEL,
            "propagate": True,
        },
    },
}

# ── Caching ───────────────────────────────────────────────────
# Defaults for TTLCache instances built by the hosting application.
HISAAB_CACHE_MAX_SIZE = int(os.environ.get("HISAAB_CACHE_MAX_SIZE", "1000"))
HISAAB_CACHE_TTL_SECONDS = int(os.environ.get("HISAAB_CACHE_TTL_SECONDS", "300"))
