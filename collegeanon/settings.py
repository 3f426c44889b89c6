"""
Django settings for the collegeanon project.

Every deployment-specific value is read from the environment so the same
module serves local development, the test suite and production.
"""

import os
import sys
from pathlib import Path


def _env_truthy(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_int(name, default=None):
    value = os.getenv(name)
    if value in (None, ""):
        return default
    return int(value)


BASE_DIR = Path(__file__).resolve().parent.parent

TESTING = "test" in sys.argv or "pytest" in sys.modules

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-collegeanon-dev-key")

DEBUG = _env_truthy("DJANGO_DEBUG", "true")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]


INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "community",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "collegeanon.urls"

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

WSGI_APPLICATION = "collegeanon.wsgi.application"


DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DATABASE_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

AUTH_USER_MODEL = "community.User"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
]

LANGUAGE_CODE = "en-gb"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Django REST framework
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "community.authentication.FirebaseAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "posts": os.getenv("POST_CREATE_RATE", "20/hour"),
    },
    "EXCEPTION_HANDLER": "community.exceptions.api_exception_handler",
}

API_PAGE_SIZE = _env_int("API_PAGE_SIZE", 20)
API_MAX_PAGE_SIZE = 100


# Firebase (auth collaborator)
FIREBASE_SERVICE_ACCOUNT_FILE = os.getenv("FIREBASE_SERVICE_ACCOUNT_FILE", "")


# External asset host (Cloudinary-compatible upload API)
ASSET_HOST_BASE_URL = os.getenv("ASSET_HOST_BASE_URL", "https://api.cloudinary.com/v1_1")
ASSET_HOST_CLOUD_NAME = os.getenv("ASSET_HOST_CLOUD_NAME", "")
ASSET_HOST_API_KEY = os.getenv("ASSET_HOST_API_KEY", "")
ASSET_HOST_API_SECRET = os.getenv("ASSET_HOST_API_SECRET", "")
ASSET_HOST_FOLDER = os.getenv("ASSET_HOST_FOLDER", "college-anon")
ASSET_HOST_TIMEOUT = _env_int("ASSET_HOST_TIMEOUT", 15)
IMAGE_MAX_BYTES = 5 * 1024 * 1024
IMAGE_CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")


# Automated content pre-screen
# never call the remote screen from the test suite
OPENAI_API_KEY = "" if TESTING else os.getenv("OPENAI_API_KEY", "")
OPENAI_MODERATION_URL = os.getenv("OPENAI_MODERATION_URL", "https://api.openai.com/v1/moderations")
PRESCREEN_TIMEOUT = _env_int("PRESCREEN_TIMEOUT", 8)


# Moderation / reporting
# Number of open reports that moves an approved post to "flagged".
# Unset means reports never change a post's moderation state.
REPORT_AUTO_FLAG_THRESHOLD = _env_int("REPORT_AUTO_FLAG_THRESHOLD")


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "community": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
