"""
Event enrollment - Django settings
==================================
Django hosts the HTTP adapter and the ORM store. Every deployment-specific
value is read from the environment; the defaults suit local development.
"""

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.environ.get(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = django-api/ (where manage.py lives)
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "eventhub-dev-key-replace-before-deployment")

DEBUG = _env_bool("DJANGO_DEBUG", True)

ALLOWED_HOSTS = _env_list("DJANGO_ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "eventhub",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# SQLite takes the write lock when a transaction begins, so concurrent
# enrollments and admin changes queue instead of interleaving.
DB_ENGINE = os.environ.get("EVENTHUB_DB_ENGINE", "django.db.backends.sqlite3")

if DB_ENGINE == "django.db.backends.sqlite3":
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("EVENTHUB_DB_NAME", str(BASE_DIR / "db.sqlite3")),
            "OPTIONS": {
                "transaction_mode": "IMMEDIATE",
                "timeout": int(os.environ.get("EVENTHUB_DB_TIMEOUT", "20")),
            },
            # File-backed so threaded tests share one database.
            "TEST": {"NAME": str(BASE_DIR / "test_eventhub.sqlite3")},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("EVENTHUB_DB_NAME", "eventhub"),
            "USER": os.environ.get("EVENTHUB_DB_USER", ""),
            "PASSWORD": os.environ.get("EVENTHUB_DB_PASSWORD", ""),
            "HOST": os.environ.get("EVENTHUB_DB_HOST", ""),
            "PORT": os.environ.get("EVENTHUB_DB_PORT", ""),
        }
    }

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("EVENTHUB_TIME_ZONE", "America/Sao_Paulo")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── REST framework ────────────────────────────────────────────
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "eventhub.handlers.authentication.SignedTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "eventhub.handlers.errors.exception_handler",
}

# ── Event enrollment ──────────────────────────────────────────
EVENTHUB_DATETIME_FORMAT = os.environ.get("EVENTHUB_DATETIME_FORMAT", "%d/%m/%Y %H:%M")
EVENTHUB_TOKEN_MAX_AGE = int(os.environ.get("EVENTHUB_TOKEN_MAX_AGE", str(60 * 60 * 12)))

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("EVENTHUB_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "eventhub": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
