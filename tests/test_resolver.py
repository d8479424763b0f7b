# tests/test_resolver.py
# Tests for title resolution and replacement forms

from linkops.models import ProgressReporter, ResolutionEntry, Stage
from linkops.resolver import (
    build_entry,
    has_parentheses,
    resolve_key,
    resolve_keys,
    strip_parentheses,
)


class TestParentheses:
    """Tests for disambiguation suffix helpers."""

    def test_has_parentheses(self):
        assert has_parentheses("பாலா (நடிகர்)") is True
        assert has_parentheses("இந்தியா") is False

    def test_empty_parentheses_do_not_count(self):
        assert has_parentheses("Foo ()") is False

    def test_strip_parentheses(self):
        assert strip_parentheses("பாலா (நடிகர்)") == "பாலா"

    def test_strip_multiple_segments(self):
        assert strip_parentheses("A (x) B (y)") == "A B"

    def test_strip_without_space(self):
        assert strip_parentheses("Mercury(planet)") == "Mercury"


class TestBuildEntry:
    """Tests for replacement form derivation."""

    def test_plain_title(self):
        entry = build_entry("India", "Q668", "இந்தியா")

        assert entry.bracket_form == "[[இந்தியா]]"
        assert entry.plain_form == "இந்தியா"
        assert entry.resolved is True

    def test_title_with_parentheses(self):
        entry = build_entry("Bala (actor)", "Q4849", "பாலா (நடிகர்)")

        assert entry.bracket_form == "[[பாலா (நடிகர்)|]]"
        assert entry.plain_form == "பாலா"

    def test_title_of_only_parentheses_keeps_empty_plain_form(self):
        entry = build_entry("X (album)", "Q1", "( )")

        assert entry.bracket_form == "[[( )|]]"
        assert entry.plain_form == ""

    def test_pipe_marker_iff_parentheses(self):
        for title in ["A", "A (b)", "A (b) c", "(x)", "A ()"]:
            entry = build_entry("Key", "Q1", title)
            assert entry.bracket_form.endswith("|]]") == has_parentheses(title)


class TestFallbackEntry:
    """Tests for the fallback entry invariants."""

    def test_fallback_forms(self):
        entry = ResolutionEntry.fallback("Nepal")

        assert entry.bracket_form == "[[Nepal]]"
        assert entry.plain_form == "Nepal"
        assert entry.target_title is None
        assert entry.resolved is False

    def test_fallback_keeps_item_and_error(self):
        entry = ResolutionEntry.fallback("Nepal", wikibase_item="Q837", error="no sitelink")

        assert entry.wikibase_item == "Q837"
        assert entry.error == "no sitelink"


class TestResolveKey:
    """Tests for single key resolution."""

    def test_resolved(self, fake_wiki):
        entry = resolve_key("India", "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert entry.target_title == "இந்தியா"
        assert entry.wikibase_item == "Q668"
        assert fake_wiki.title_calls == [("Q668", "tawiki")]

    def test_no_item_skips_registry_lookup(self, fake_wiki):
        entry = resolve_key("Atlantis", "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert entry.resolved is False
        assert entry.bracket_form == "[[Atlantis]]"
        assert entry.error is not None
        assert fake_wiki.title_calls == []

    def test_no_sitelink(self, fake_wiki):
        entry = resolve_key("Nepal", "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert entry.resolved is False
        assert entry.wikibase_item == "Q837"
        assert entry.plain_form == "Nepal"

    def test_exception_is_caught(self, fake_wiki):
        fake_wiki.failing_titles.add("India")

        entry = resolve_key("India", "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert entry.resolved is False
        assert entry.bracket_form == "[[India]]"
        assert "connection reset" in entry.error

    def test_target_site_key_from_language(self, fake_wiki):
        resolve_key("India", "en", "zh-yue", fake_wiki.fetch_item, fake_wiki.fetch_title)
        assert fake_wiki.title_calls == [("Q668", "zh_yuewiki")]


class TestResolveKeys:
    """Tests for sequential resolution of many keys."""

    def test_every_key_has_entry(self, fake_wiki):
        keys = ["India", "Nepal", "Atlantis"]
        entries = resolve_keys(keys, "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert list(entries) == keys
        assert entries["India"].resolved
        assert not entries["Nepal"].resolved
        assert not entries["Atlantis"].resolved

    def test_one_failure_does_not_abort(self, fake_wiki):
        fake_wiki.failing_titles.add("Nepal")
        entries = resolve_keys(["Nepal", "India"], "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)

        assert entries["India"].target_title == "இந்தியா"

    def test_lookups_in_key_order(self, fake_wiki):
        resolve_keys(["Nepal", "India"], "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)
        assert fake_wiki.item_calls == [("Nepal", "en"), ("India", "en")]

    def test_duplicate_keys_resolved_once(self, fake_wiki):
        resolve_keys(["India", "India"], "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title)
        assert fake_wiki.item_calls == [("India", "en")]

    def test_progress_monotonic(self, fake_wiki):
        events = []
        reporter = ProgressReporter(lambda stage, pct, msg: events.append((stage, pct, msg)))

        resolve_keys(["India", "Nepal"], "en", "ta", fake_wiki.fetch_item, fake_wiki.fetch_title, progress=reporter)

        percents = [pct for _, pct, _ in events]
        assert percents == sorted(percents)
        assert all(stage is Stage.RESOLVING for stage, _, _ in events)
        assert events[-1] == (Stage.RESOLVING, 90, "Resolved 2/2")
