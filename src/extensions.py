"""
extensions.py - Shared Flask Extensions

CSRF protection guards the HTML conversion form. The rate limiter guards the
JSON conversion endpoint, which triggers one Wikipedia and one Wikidata
request per linked title.

Both are created unbound and attached in create_app(). The limiter takes its
storage, strategy and default limits from the RATELIMIT_* config keys.
"""

from __future__ import annotations

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

csrf = CSRFProtect()

limiter = Limiter(key_func=get_remote_address)


def api_rate_limit() -> str:
    """Return the limit string for POST /api/convert from API_RATE_LIMIT."""
    return current_app.config.get("API_RATE_LIMIT", "30 per minute")
