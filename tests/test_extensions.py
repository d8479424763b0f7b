"""
tests/test_extensions.py - Tests for Flask extensions

Tests for CSRF protection and rate limiting extensions.
"""

from __future__ import annotations

from extensions import api_rate_limit, limiter
from main_app import create_app
from config import TestingConfig


class TestCSRFProtection:
    """Tests for CSRF protection extension."""

    def test_csrf_initialized(self):
        app = create_app(TestingConfig)
        assert "csrf" in app.extensions

    def test_csrf_disabled_in_testing(self):
        app = create_app(TestingConfig)
        assert app.config["WTF_CSRF_ENABLED"] is False

    def test_form_post_requires_token_when_enabled(self):
        """Test that the HTML form is protected when CSRF is on."""
        csrf_config = type("CSRFConfig", (TestingConfig,), {"WTF_CSRF_ENABLED": True})
        client = create_app(csrf_config).test_client()

        response = client.post("/", data={"text": "[[India]]", "source_lang": "en", "target_lang": "ta"})
        assert response.status_code == 400

    def test_form_contains_token_field(self, client):
        html = client.get("/").get_data(as_text=True)
        assert 'name="csrf_token"' in html


class TestRateLimiter:
    """Tests for rate limiting extension."""

    def test_limiter_initialized(self):
        limited_config = type("LimitedConfig", (TestingConfig,), {"RATELIMIT_ENABLED": True})
        app = create_app(limited_config)
        assert "limiter" in app.extensions

    def test_limiter_skipped_when_disabled(self):
        app = create_app(TestingConfig)
        assert "limiter" not in app.extensions

    def test_api_convert_rate_limited(self, patched_lookups):
        """Test that the JSON endpoint enforces API_RATE_LIMIT."""
        limited_config = type(
            "LimitedConfig",
            (TestingConfig,),
            {"RATELIMIT_ENABLED": True, "API_RATE_LIMIT": "2 per minute"}
        )
        app = create_app(limited_config)
        limiter.reset()
        client = app.test_client()

        payload = {"text": "[[India]]", "source": "en", "target": "ta"}
        assert client.post("/api/convert", json=payload).status_code == 200
        assert client.post("/api/convert", json=payload).status_code == 200
        assert client.post("/api/convert", json=payload).status_code == 429

        limiter.reset()


class TestApiRateLimit:
    """Tests for the JSON endpoint limit lookup."""

    def test_reads_app_config(self):
        limited_config = type("LimitedConfig", (TestingConfig,), {"API_RATE_LIMIT": "5 per second"})
        app = create_app(limited_config)

        with app.app_context():
            assert api_rate_limit() == "5 per second"
