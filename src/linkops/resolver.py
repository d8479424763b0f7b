"""
linkops/resolver.py - Cross-language Title Resolution

Resolves each reference key to its equivalent title on the target language
Wikipedia in two hops: source title -> Wikidata item -> target sitelink.

Design Decisions:
    - Keys are resolved one at a time, in first-appearance order, so at most
      one request is in flight and progress moves forward linearly
    - Every lookup is attempted exactly once; there is no retry
    - A failed or empty lookup never raises; the key falls back to its
      source title and the reason is kept on the entry for display
    - Target titles with a disambiguation suffix get an empty display text
      in bracket form (``[[பாலா (நடிகர்)|]]``) for the editor to fill in

Example:
    >>> entry = build_entry("Bala (actor)", "Q123", "பாலா (நடிகர்)")
    >>> entry.bracket_form, entry.plain_form
    ('[[பாலா (நடிகர்)|]]', 'பாலா')
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Dict, Final, Iterable, Optional, Tuple

from .languages import site_key
from .models import ProgressReporter, ResolutionEntry, Stage
from .wikipedia import fetch_sitelink_title, fetch_wikibase_item

logger = logging.getLogger(__name__)

# (title, lang) -> (item_id, error_message)
ItemLookup = Callable[[str, str], Tuple[Optional[str], Optional[str]]]
# (item_id, site) -> (title, error_message)
TitleLookup = Callable[[str, str], Tuple[Optional[str], Optional[str]]]

PARENTHESES_PATTERN: Final[re.Pattern[str]] = re.compile(r"\(.+\)")
STRIP_PARENTHESES_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*\([^)]*\)")


def has_parentheses(title: str) -> bool:
    """Return True if title contains a non-empty parenthesized segment."""
    return bool(PARENTHESES_PATTERN.search(title))


def strip_parentheses(title: str) -> str:
    """Remove every parenthesized segment, and the whitespace before it, from title."""
    return STRIP_PARENTHESES_PATTERN.sub("", title).strip()


def build_entry(source_title: str, wikibase_item: str, target_title: str) -> ResolutionEntry:
    """Build a resolved entry with its bracket and plain replacement forms."""
    if has_parentheses(target_title):
        bracket_form = f"[[{target_title}|]]"
    else:
        bracket_form = f"[[{target_title}]]"

    return ResolutionEntry(
        source_title=source_title,
        wikibase_item=wikibase_item,
        target_title=target_title,
        bracket_form=bracket_form,
        plain_form=strip_parentheses(target_title),
    )


def resolve_key(
    key: str,
    source_lang: str,
    target_lang: str,
    fetch_item: ItemLookup,
    fetch_title: TitleLookup,
    report: Optional[Callable[[int, str], None]] = None,
) -> ResolutionEntry:
    """
    Resolve one key to its target language entry.

    Args:
        key: Normalized source language title
        source_lang: Source Wikipedia language code
        target_lang: Target Wikipedia language code
        fetch_item: Source title lookup, see ItemLookup
        fetch_title: Sitelink lookup, see TitleLookup
        report: Optional hook called with (step, message) before each lookup

    Returns:
        The resolved entry, or a fallback entry carrying the failure reason.
    """
    item = None
    try:
        if report:
            report(0, f'Querying {source_lang}.wikipedia.org for "{key}"...')
        item, error = fetch_item(key, source_lang)
        if not item:
            logger.warning("No Wikidata item for %r on %swiki: %s", key, source_lang, error)
            return ResolutionEntry.fallback(key, error=error)

        site = site_key(target_lang)
        if report:
            report(1, f"Fetching Wikidata {item}...")
        title, error = fetch_title(item, site)
        if not title:
            logger.warning("No %s sitelink for %r (%s): %s", site, key, item, error)
            return ResolutionEntry.fallback(key, wikibase_item=item, error=error)

        return build_entry(key, item, title)

    except Exception as e:
        logger.exception("Error resolving %r", key)
        return ResolutionEntry.fallback(key, wikibase_item=item, error=f"Unexpected error: {e}")


def resolve_keys(
    keys: Iterable[str],
    source_lang: str,
    target_lang: str,
    fetch_item: Optional[ItemLookup] = None,
    fetch_title: Optional[TitleLookup] = None,
    timeout: int = 10,
    progress: Optional[ProgressReporter] = None,
) -> Dict[str, ResolutionEntry]:
    """
    Resolve every key, sequentially, into an ordered key -> entry map.

    The default lookups query Wikipedia and Wikidata over HTTP with the given
    timeout. Any callables honouring the ItemLookup / TitleLookup contracts can
    be passed instead.
    """
    if fetch_item is None:
        fetch_item = functools.partial(fetch_wikibase_item, timeout=timeout)
    if fetch_title is None:
        fetch_title = functools.partial(fetch_sitelink_title, timeout=timeout)

    keys = list(keys)
    total = len(keys)
    entries: Dict[str, ResolutionEntry] = {}

    if progress:
        progress(Stage.RESOLVING, 20, f"Resolving {total} item(s)...")

    for done, key in enumerate(keys):
        if key in entries:
            continue

        def report(step: int, message: str) -> None:
            if progress:
                base = 20 if step == 0 else 40
                progress(Stage.RESOLVING, base + round(done / total * 50), message)

        entries[key] = resolve_key(key, source_lang, target_lang, fetch_item, fetch_title, report)

        if progress:
            progress(Stage.RESOLVING, 70 + round((done + 1) / total * 20), f"Resolved {done + 1}/{total}")

    return entries
