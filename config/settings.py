"""
Folio - Django Settings (Infrastructure Only)
=============================================
Django serves as the framework container for the guest stay
service. The decider does not import Django; only the event
store backend and the HTTP adapter do.

Environment overrides:
    DJANGO_SECRET_KEY, DJANGO_DEBUG, DJANGO_ALLOWED_HOSTS
    GUEST_STAY_EVENT_STORE            memory | django
    GUEST_STAY_MAX_APPEND_ATTEMPTS    optimistic-concurrency retry budget
    GUEST_STAY_REQUIRE_KNOWN_STAY     1 = consult GUEST_STAY_KNOWN_STAYS
    FOLIO_LOG_LEVEL
"""

import os
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "folio-dev-key-replace-before-deployment")

DEBUG = _env_flag("DJANGO_DEBUG", True)

ALLOWED_HOSTS = [
    host for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",") if host
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "core.event_store",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Guest Stay Service ────────────────────────────────────────
GUEST_STAY_EVENT_STORE = os.environ.get("GUEST_STAY_EVENT_STORE", "memory")
GUEST_STAY_MAX_APPEND_ATTEMPTS = int(os.environ.get("GUEST_STAY_MAX_APPEND_ATTEMPTS", "3"))
GUEST_STAY_REQUIRE_KNOWN_STAY = _env_flag("GUEST_STAY_REQUIRE_KNOWN_STAY", False)
# (guest_id, room_id, "YYYY-MM-DD") triples; stands in for the reservation system.
GUEST_STAY_KNOWN_STAYS = ()
GUEST_STAY_API_BASE_PATH = "/v1"

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "folio": {
            "handlers": ["console"],
            "level": os.environ.get("FOLIO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
