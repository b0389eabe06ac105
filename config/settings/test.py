"""
Test settings for the catalog service.

Uses in-memory SQLite for fast test execution.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Test logging - minimal output
LOGGING["loggers"]["django"]["level"] = "WARNING"
LOGGING["loggers"]["apps.catalog"]["level"] = "WARNING"

AUTH_PASSWORD_VALIDATORS = []

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CATALOG_FEATURE_TYPE_INCLUDE = ""
CATALOG_FEATURE_TYPE_EXCLUDE = ""
CATALOG_FEATURE_GROUP_ID_MAX_LENGTH = 20
CATALOG_FEATURE_GROUP_ID_HASH_SUFFIX = False
CATALOG_PROGRESS_INTERVAL = 500
