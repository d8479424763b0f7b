# config.py
# Flask application configuration

import os
import warnings

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default) not in ("0", "false", "False", "")


class Config:
    """Flask configuration class."""

    # Secret key for session security
    _secret_key = os.environ.get("FLASK_SECRET_KEY")
    if not _secret_key:
        warnings.warn(
            "FLASK_SECRET_KEY not set. Using default key which is insecure for production!",
            UserWarning,
            stacklevel=2
        )
        _secret_key = "change-me-in-production"
    SECRET_KEY = _secret_key

    # Maximum request body size (5MB)
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 5 * 1024 * 1024))

    # Maximum number of characters accepted for one conversion
    MAX_INPUT_LENGTH = int(os.environ.get("MAX_INPUT_LENGTH", 200_000))

    # Languages preselected for a new session
    DEFAULT_SOURCE_LANG = os.environ.get("DEFAULT_SOURCE_LANG", "en")
    DEFAULT_TARGET_LANG = os.environ.get("DEFAULT_TARGET_LANG", "ta")

    # Timeout in seconds for each Wikipedia / Wikidata request
    HTTP_TIMEOUT = int(os.environ.get("HTTP_TIMEOUT", 10))

    # Bare-text matching options (case-sensitive exact match by default)
    MATCH_CASE_INSENSITIVE = _env_flag("MATCH_CASE_INSENSITIVE")
    MATCH_STRIPPED_TITLE = _env_flag("MATCH_STRIPPED_TITLE")

    # Leave <ref> citations untouched during conversion
    PROTECT_REFS = _env_flag("PROTECT_REFS")

    # Rate limiting: app-wide defaults, plus the JSON conversion endpoint
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "500 per day;100 per hour")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_STRATEGY = "fixed-window"
    API_RATE_LIMIT = os.environ.get("API_RATE_LIMIT", "30 per minute")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    # WTF CSRF protection
    WTF_CSRF_ENABLED = True

    # Session cookie settings
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = 30 * 24 * 60 * 60


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG = True


class TestingConfig(Config):
    """Configuration for the test suite."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Configuration for production deployments behind HTTPS."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True
