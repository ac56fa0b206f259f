"""
Test settings.

In-memory SQLite and no outbound collaborators.
"""

from .base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Collaborators fall back to their offline behaviour unless a test patches them
AI_API_KEY = ""
STANDUP_TIMEZONE = "UTC"
OUTBOUND_URL_RESOLVE_DNS = False

LOG_JSON = False
LOG_LEVEL = "WARNING"
