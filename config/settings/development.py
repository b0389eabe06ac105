"""
Development settings for the catalog service.
"""

from .base import *

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LOGGING["loggers"]["django"]["level"] = "INFO"
LOGGING["loggers"]["apps.catalog"]["level"] = "DEBUG"

INTERNAL_IPS = ["127.0.0.1"]

AUTH_PASSWORD_VALIDATORS = []
