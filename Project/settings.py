"""
Django settings for Project project.

Values come from environment variables so the same module serves local
development, tests and deployments.
"""

import json
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_json(name: str, default):
    value = os.getenv(name)
    if not value:
        return default
    return json.loads(value)


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "movies-insecure-development-key")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "Movies.apps.MoviesConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "Project.urls"
WSGI_APPLICATION = "Project.wsgi.application"

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

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DJANGO_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "movies-authorization",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True

LOGIN_URL = "/account/login/"
MOVIES_ACCESS_DENIED_URL = "/account/denied/"

# Review permission authority. Leave the URL empty to use MOVIES_REVIEWER_COUNTRIES.
MOVIES_REVIEW_PERMISSIONS_API_BASE_URL = os.getenv("MOVIES_REVIEW_PERMISSIONS_API_BASE_URL", "")
MOVIES_REVIEW_PERMISSIONS_API_TOKEN = os.getenv("MOVIES_REVIEW_PERMISSIONS_API_TOKEN", "")
MOVIES_REVIEW_PERMISSIONS_API_TIMEOUT_SECONDS = int(os.getenv("MOVIES_REVIEW_PERMISSIONS_API_TIMEOUT_SECONDS", "5"))
MOVIES_REVIEW_PERMISSIONS_API_MAX_RETRIES = int(os.getenv("MOVIES_REVIEW_PERMISSIONS_API_MAX_RETRIES", "2"))
MOVIES_REVIEW_PERMISSIONS_CACHE_TTL_SECONDS = int(os.getenv("MOVIES_REVIEW_PERMISSIONS_CACHE_TTL_SECONDS", "60"))
MOVIES_REVIEWER_COUNTRIES = _env_json("MOVIES_REVIEWER_COUNTRIES", {})
MOVIES_APP_CLAIMS = _env_json("MOVIES_APP_CLAIMS", {})

MOVIES_AUTHORIZATION_PARALLEL_HANDLERS = _env_bool("MOVIES_AUTHORIZATION_PARALLEL_HANDLERS", False)
MOVIES_AUTHORIZATION_MAX_WORKERS = int(os.getenv("MOVIES_AUTHORIZATION_MAX_WORKERS", "4"))
MOVIES_REQUIRED_POLICIES = ["DefaultPolicy", "SearchPolicy"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "Movies": {
            "handlers": ["console"],
            "level": os.getenv("MOVIES_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "movies.startup": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
