"""
Django settings for fieldplan (project package: cc).

Everything environment-specific comes from env vars (optionally a .env file
next to manage.py). Without DATABASE_URL a local SQLite file is used.
"""
from pathlib import Path
import os
import sys

import dj_database_url
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


# --------------------------- env helpers ---------------------------
def env_bool(key: str, default: bool = False) -> bool:
    v = os.environ.get(key)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def env_csv(key: str, default: str = "") -> list[str]:
    return [x.strip() for x in os.environ.get(key, default).split(",") if x.strip()]


def env_int(key: str, default: int) -> int:
    try:
        return int(os.environ.get(key, "").strip())
    except ValueError:
        return default


# --------------------------- mode ---------------------------
IS_RUNSERVER = "runserver" in sys.argv
TESTING = "pytest" in sys.modules or (len(sys.argv) > 1 and sys.argv[1] == "test")
DEBUG = env_bool("DEBUG", IS_RUNSERVER)

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-fieldplan-dev-key")
ALLOWED_HOSTS = env_csv("ALLOWED_HOSTS", "localhost,127.0.0.1")
CSRF_TRUSTED_ORIGINS = env_csv(
    "CSRF_TRUSTED_ORIGINS",
    ",".join(f"https://{h}" for h in ALLOWED_HOSTS if h not in ("localhost", "127.0.0.1")),
)

# ---- transport security: strict unless DEBUG / tests / runserver ----
_relaxed = DEBUG or TESTING or IS_RUNSERVER
SECURE_SSL_REDIRECT = env_bool("FORCE_SSL", not _relaxed)
SESSION_COOKIE_SECURE = not _relaxed
CSRF_COOKIE_SECURE = not _relaxed
SECURE_HSTS_SECONDS = 0 if _relaxed else env_int("SECURE_HSTS_SECONDS", 31536000)
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

SESSION_COOKIE_NAME = "fp_sessionid"
CSRF_COOKIE_NAME = "fp_csrftoken"
SESSION_COOKIE_AGE = 60 * 60 * 12

# --------------------------- apps ---------------------------
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "tenants.apps.TenantsConfig",
    "scheduling.apps.SchedulingConfig",
    "visits.apps.VisitsConfig",
    "insights.apps.InsightsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "cc.middleware.RequestIDMiddleware",
    "cc.middleware.AccessLogMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "cc.urls"
WSGI_APPLICATION = "cc.wsgi.application"

# admin is the only HTML surface
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# --------------------------- database ---------------------------
DATABASE_URL = os.environ.get("DATABASE_URL", "").strip()

if TESTING or not DATABASE_URL:
    DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": BASE_DIR / "db.sqlite3"}}
else:
    DATABASES = {
        "default": dj_database_url.parse(
            DATABASE_URL,
            conn_max_age=env_int("DB_CONN_MAX_AGE", 300),
            conn_health_checks=True,
            ssl_require=not DEBUG,
        )
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --------------------------- auth / i18n ---------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 10}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
]
LANGUAGE_CODE = "en-us"
# weekday schedules and report windows are read in this zone
TIME_ZONE = os.environ.get("TIME_ZONE", "America/Sao_Paulo")
USE_I18N = True
USE_TZ = True

# --------------------------- static ---------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": (
            "django.contrib.staticfiles.storage.StaticFilesStorage"
            if _relaxed
            else "whitenoise.storage.CompressedManifestStaticFilesStorage"
        )
    },
}

# --------------------------- planning engine ---------------------------
FIELDPLAN = {
    # Sunday-based weekdays (0=Sunday .. 6=Saturday)
    "DEFAULT_AVAILABILITY_DAYS": [int(x) for x in env_csv("FIELDPLAN_DEFAULT_AVAILABILITY_DAYS", "1,2,3,4,5")],
    "SUGGESTION_DEFAULT_FREQUENCY": env_int("FIELDPLAN_SUGGESTION_DEFAULT_FREQUENCY", 1),
    "SUGGESTION_MAX_FREQUENCY": 7,
}

# --------------------------- logging ---------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
ACCESS_LOG_PREFIXES = ("/api/", "/healthz/")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "redact_pii": {"()": "cc.logging_filters.RedactPIIFilter"},
    },
    "formatters": {
        "plain": {"format": "[%(asctime)s] %(levelname)s %(name)s %(message)s"},
        "access": {
            "format": "[%(asctime)s] access %(method)s %(path)s status=%(status)s "
                      "latency_ms=%(latency_ms)s user=%(user_id)s agency=%(agency_id)s rid=%(request_id)s",
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain", "filters": ["redact_pii"]},
        "access_console": {"class": "logging.StreamHandler", "formatter": "access", "filters": ["redact_pii"]},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "access": {"handlers": ["access_console"], "level": "INFO", "propagate": False},
        "insights": {"level": "DEBUG" if DEBUG else LOG_LEVEL},
        "scheduling": {"level": "DEBUG" if DEBUG else LOG_LEVEL},
    },
}
