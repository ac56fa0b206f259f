"""
Local development settings.

Extends base settings with development-friendly defaults.
"""

from .base import *  # noqa: F403
from .base import BASE_DIR, settings

DEBUG = True
ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# SQLite unless a database engine is configured explicitly
if settings.DB_ENGINE == "django.db.backends.sqlite3":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# Pretty console logs
LOG_JSON = False
LOG_LEVEL = "DEBUG"
