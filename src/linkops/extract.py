"""
linkops/extract.py - Bracketed Reference Extraction

Finds ``[[Title]]`` and ``[[Title|Display]]`` spans in wikitext and reduces
them to the unique lookup keys that need resolving.

Design Decisions:
    - Spans are matched non-greedily and may cross line breaks, so
      ``[[A]] x [[B]]`` yields two spans and never one ``A]] x [[B`` span
    - A key is the interior text up to the first pipe, whitespace trimmed
    - Keys are case-sensitive and kept in order of first appearance
    - Empty keys (``[[]]``, ``[[|x]]``) are dropped; there is nothing to look up

Example:
    >>> from linkops.extract import extract_keys
    >>> extract_keys("[[India]] and [[India|Bharat]] near [[Nepal]]")
    ['India', 'Nepal']
"""

from __future__ import annotations

import re
from typing import Final, List

from .models import BracketSpan


BRACKET_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[\[(.*?)\]\]", re.DOTALL)


def find_bracket_spans(text: str) -> List[BracketSpan]:
    """
    Return every ``[[...]]`` span in text, in document order.

    Args:
        text: Raw wikitext. Empty strings are handled gracefully.

    Returns:
        A list of BracketSpan objects holding the span offsets and the raw
        interior text (pipe and display text included).
    """
    return [
        BracketSpan(start=m.start(), end=m.end(), inner=m.group(1))
        for m in BRACKET_PATTERN.finditer(text)
    ]


def unique_keys(spans: List[BracketSpan]) -> List[str]:
    """De-duplicate the normalized keys of spans, keeping first-seen order."""
    seen = {}
    for span in spans:
        key = span.key
        if key and key not in seen:
            seen[key] = None
    return list(seen)


def extract_keys(text: str) -> List[str]:
    """
    Extract the unique reference keys from text.

    Returns an empty list when the text has no bracketed references, which
    callers treat as "no work to do".
    """
    return unique_keys(find_bracket_spans(text))
