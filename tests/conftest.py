# tests/conftest.py
# Shared pytest fixtures for WikiLink Translator tests

from unittest.mock import patch

import pytest

from config import TestingConfig
from main_app import create_app


class FakeWiki:
    """
    In-memory stand-in for the Wikipedia and Wikidata lookups.

    items: {(lang, title): item_id}
    sitelinks: {(item_id, site): title}
    """

    def __init__(self, items=None, sitelinks=None, failing_titles=()):
        self.items = dict(items or {})
        self.sitelinks = dict(sitelinks or {})
        self.failing_titles = set(failing_titles)
        self.item_calls = []
        self.title_calls = []

    def fetch_item(self, title, lang):
        self.item_calls.append((title, lang))
        if title in self.failing_titles:
            raise RuntimeError("connection reset")
        item = self.items.get((lang, title))
        if item is None:
            return None, f"Article '{title}' has no Wikidata item"
        return item, None

    def fetch_title(self, item_id, site):
        self.title_calls.append((item_id, site))
        title = self.sitelinks.get((item_id, site))
        if title is None:
            return None, f"Wikidata item {item_id} has no {site} sitelink"
        return title, None


@pytest.fixture
def fake_wiki():
    """Lookups knowing India, Bala (actor) and Nepal (no Tamil sitelink)."""
    return FakeWiki(
        items={
            ("en", "India"): "Q668",
            ("en", "Bala (actor)"): "Q4849",
            ("en", "Nepal"): "Q837",
        },
        sitelinks={
            ("Q668", "tawiki"): "இந்தியா",
            ("Q4849", "tawiki"): "பாலா (நடிகர்)",
        },
    )


@pytest.fixture
def patched_lookups(fake_wiki):
    """Route the default HTTP lookups used by the web layer to fake_wiki."""
    with patch(
        "linkops.resolver.fetch_wikibase_item",
        side_effect=lambda title, lang, timeout=10: fake_wiki.fetch_item(title, lang),
    ), patch(
        "linkops.resolver.fetch_sitelink_title",
        side_effect=lambda item_id, site, timeout=10: fake_wiki.fetch_title(item_id, site),
    ):
        yield fake_wiki


@pytest.fixture
def simple_wikitext():
    return "[[India]] is a big country. I like India."


@pytest.fixture
def piped_wikitext():
    return "[[Bala (actor)|Bala]] did many films. Bala (actor) was born in Chennai."


@pytest.fixture
def multiline_wikitext():
    return (
        "Intro.\n"
        "[[India\n"
        "|Bharat]]\n"
        "End."
    )


@pytest.fixture
def wikitext_with_refs():
    return (
        "[[India]] is large.<ref>India Today, [[India]] edition</ref> "
        "India has many states.<ref name=\"x\" />"
    )


@pytest.fixture
def app():
    """Application configured for testing, with CSRF and rate limits off."""
    test_config = type(
        "TestConfig",
        (TestingConfig,),
        {"DEFAULT_SOURCE_LANG": "en", "DEFAULT_TARGET_LANG": "ta"}
    )
    return create_app(test_config)


@pytest.fixture
def client(app):
    return app.test_client()
