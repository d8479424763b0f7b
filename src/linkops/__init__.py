"""
linkops - Wikilink Operations Package

This package converts the wikilinks of a text from one Wikipedia language
edition to another:

Modules:
    extract: Bracketed reference discovery and key normalization
    wikipedia: Wikipedia (page props) and Wikidata (sitelinks) lookups
    resolver: Per-key resolution into bracket and plain replacement forms
    rewriter: Bracket and bare-text replacement passes
    protect: Optional <ref> citation protection using wikitextparser
    languages: Supported languages and Wikidata site ids
    pipeline: The convert() entry point tying the steps together
    models: Dataclasses for spans, entries and results

Typical Usage:
    >>> from linkops import convert_text
    >>> convert_text("[[India]] is a big country. I like India.", "en", "ta")
    '[[இந்தியா]] is a big country. I like இந்தியா.'
"""

from __future__ import annotations

# Re-export commonly used functions for convenience.
from .extract import extract_keys, find_bracket_spans, BRACKET_PATTERN
from .languages import LANGUAGES, site_key, validate_language_code
from .models import BracketSpan, ConversionResult, ResolutionEntry, Stage
from .pipeline import convert, convert_text
from .resolver import build_entry, resolve_keys
from .rewriter import rewrite_text, split_bracket_runs
from .wikipedia import fetch_sitelink_title, fetch_wikibase_item

__all__ = [
    # extract module
    "extract_keys",
    "find_bracket_spans",
    "BRACKET_PATTERN",
    # languages module
    "LANGUAGES",
    "site_key",
    "validate_language_code",
    # models module
    "BracketSpan",
    "ConversionResult",
    "ResolutionEntry",
    "Stage",
    # pipeline module
    "convert",
    "convert_text",
    # resolver module
    "build_entry",
    "resolve_keys",
    # rewriter module
    "rewrite_text",
    "split_bracket_runs",
    # wikipedia module
    "fetch_sitelink_title",
    "fetch_wikibase_item",
]

__version__ = "1.0.0"
