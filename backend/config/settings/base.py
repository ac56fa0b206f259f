"""
Base Django settings for the standup bot.

Shared configuration for all environments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    SECRET_KEY: str = "django-insecure-change-me-in-production"
    DEBUG: bool = False
    ALLOWED_HOSTS: str = ""

    # Database
    DB_ENGINE: str = "django.db.backends.postgresql"
    DB_NAME: str = "standup_bot"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"

    # Logging
    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    # Conversation sessions
    SESSION_TIMEOUT_MINUTES: int = 30
    SESSION_SWEEP_INTERVAL_SECONDS: int = 600

    # Standups
    STANDUP_TIMEZONE: str = "UTC"

    # GitHub
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_MAX_COMMITS: int = 5

    # Jira
    JIRA_MAX_ISSUES: int = 5

    # AI summaries (OpenAI, or Gemini when the key starts with "AIza")
    AI_API_KEY: str = ""
    AI_MODEL: str = "gpt-4"
    AI_MAX_TOKENS: int = 500
    AI_TIMEOUT_SECONDS: float = 30.0
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    GEMINI_API_URL: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
    )

    # Upper bound for GitHub/Jira calls
    COLLABORATOR_TIMEOUT_SECONDS: float = 10.0

    # Resolve hostnames of user-supplied URLs and reject private addresses
    OUTBOUND_URL_RESOLVE_DNS: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = settings.SECRET_KEY

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = settings.DEBUG

ALLOWED_HOSTS = [h.strip() for h in settings.ALLOWED_HOSTS.split(",") if h.strip()]

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.core",
    "apps.organizations",
    "apps.teams",
    "apps.accounts",
    "apps.standups",
    "apps.integrations",
    "apps.conversations",
]

MIDDLEWARE = [
    "apps.core.middleware.CorrelationIdMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database
DATABASES = {
    "default": {
        "ENGINE": settings.DB_ENGINE,
        "NAME": settings.DB_NAME,
        "USER": settings.DB_USER,
        "PASSWORD": settings.DB_PASSWORD,
        "HOST": settings.DB_HOST,
        "PORT": settings.DB_PORT,
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Bot behaviour
SESSION_TIMEOUT_MINUTES = settings.SESSION_TIMEOUT_MINUTES
SESSION_SWEEP_INTERVAL_SECONDS = settings.SESSION_SWEEP_INTERVAL_SECONDS
STANDUP_TIMEZONE = settings.STANDUP_TIMEZONE

GITHUB_API_URL = settings.GITHUB_API_URL
GITHUB_MAX_COMMITS = settings.GITHUB_MAX_COMMITS
JIRA_MAX_ISSUES = settings.JIRA_MAX_ISSUES
COLLABORATOR_TIMEOUT_SECONDS = settings.COLLABORATOR_TIMEOUT_SECONDS
OUTBOUND_URL_RESOLVE_DNS = settings.OUTBOUND_URL_RESOLVE_DNS

AI_API_KEY = settings.AI_API_KEY
AI_MODEL = settings.AI_MODEL
AI_MAX_TOKENS = settings.AI_MAX_TOKENS
AI_TIMEOUT_SECONDS = settings.AI_TIMEOUT_SECONDS
OPENAI_API_URL = settings.OPENAI_API_URL
GEMINI_API_URL = settings.GEMINI_API_URL

LOG_JSON = settings.LOG_JSON
LOG_LEVEL = settings.LOG_LEVEL
