"""
linkops/rewriter.py - Replacement of Resolved References

Applies resolved entries back onto the source text in two strictly ordered
passes:

    1. Bracket pass: every ``[[...]]`` span whose key resolved is replaced
       by the entry's bracket form. Unresolved and unknown keys keep their
       original span byte for byte.
    2. Bare-text pass: for each resolved key, occurrences of the key in the
       text between brackets are replaced by the entry's plain form.

The bare-text pass never looks inside ``[[...]]``: the text is split into
alternating bracketed and plain runs and only plain runs are searched.
Word boundaries are checked with ``unicodedata`` categories rather than
``\\b`` so that combining vowel signs (Tamil, Hindi, ...) count as part of a
word.

Thread Safety:
    This module is stateless. All functions are pure.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Dict, List, Mapping, Tuple

from .extract import BRACKET_PATTERN
from .models import ResolutionEntry, normalize_key
from .resolver import strip_parentheses

logger = logging.getLogger(__name__)

# (text, is_bracketed)
Run = Tuple[str, bool]


def is_word_char(ch: str) -> bool:
    """Return True for letters, combining marks, digits and underscore."""
    return ch == "_" or unicodedata.category(ch)[0] in ("L", "M", "N")


def split_bracket_runs(text: str) -> List[Run]:
    """
    Split text into alternating plain and bracketed runs.

    Joining the run texts in order gives back the input unchanged.

    Example:
        >>> split_bracket_runs("a [[B]] c")
        [('a ', False), ('[[B]]', True), (' c', False)]
    """
    runs: List[Run] = []
    last = 0
    for match in BRACKET_PATTERN.finditer(text):
        if match.start() > last:
            runs.append((text[last:match.start()], False))
        runs.append((match.group(0), True))
        last = match.end()
    if last < len(text) or not runs:
        runs.append((text[last:], False))
    return runs


def rewrite_brackets(text: str, entries: Mapping[str, ResolutionEntry]) -> str:
    """Replace every resolved ``[[...]]`` span with its entry's bracket form."""
    def _repl(match: re.Match[str]) -> str:
        entry = entries.get(normalize_key(match.group(1)))
        if entry is None or not entry.resolved:
            # Unresolved links keep their display text and spacing
            return match.group(0)
        return entry.bracket_form

    return BRACKET_PATTERN.sub(_repl, text)


def compile_bare_pattern(key: str, case_insensitive: bool = False, match_stripped: bool = False) -> re.Pattern[str]:
    """
    Compile the search pattern for bare occurrences of key.

    The pattern rejects matches right after ``[[`` or right before ``|``.
    Word boundaries are checked separately by replace_bare().
    """
    alternatives = [key]
    if match_stripped:
        stripped = strip_parentheses(key)
        if stripped and stripped != key:
            alternatives.append(stripped)

    # Longest alternative first so "Bala (actor)" wins over "Bala"
    body = "|".join(re.escape(alt) for alt in sorted(alternatives, key=len, reverse=True))
    flags = re.IGNORECASE if case_insensitive else 0
    return re.compile(rf"(?<!\[\[)(?:{body})(?!\|)", flags)


def replace_bare(text: str, pattern: re.Pattern[str], replacement: str) -> str:
    """Replace matches of pattern that stand as whole words in text."""
    out: List[str] = []
    last = 0
    pos = 0
    while True:
        match = pattern.search(text, pos)
        if match is None:
            break
        start, end = match.span()
        if end == start:
            pos = start + 1
            continue
        if (start > 0 and is_word_char(text[start - 1])) or (end < len(text) and is_word_char(text[end])):
            pos = start + 1
            continue
        out.append(text[last:start])
        out.append(replacement)
        last = pos = end
    out.append(text[last:])
    return "".join(out)


def rewrite_bare_text(
    text: str,
    entries: Mapping[str, ResolutionEntry],
    case_insensitive: bool = False,
    match_stripped: bool = False,
) -> str:
    """Replace bare occurrences of every resolved key, in map order."""
    for key, entry in entries.items():
        if not entry.resolved:
            continue
        try:
            pattern = compile_bare_pattern(key, case_insensitive, match_stripped)
            runs = split_bracket_runs(text)
            text = "".join(
                run if bracketed else replace_bare(run, pattern, entry.plain_form)
                for run, bracketed in runs
            )
        except re.error as e:
            logger.warning("Skipping bare-text replacement for %r: %s", key, e)
    return text


def rewrite_text(
    text: str,
    entries: Dict[str, ResolutionEntry],
    case_insensitive: bool = False,
    match_stripped: bool = False,
) -> str:
    """
    Apply both replacement passes to text.

    Args:
        text: The original text
        entries: Ordered key -> entry map produced by the resolver
        case_insensitive: Match bare occurrences ignoring case
        match_stripped: Also match bare occurrences of the key with its
                        parenthesized suffix removed

    Returns:
        The rewritten text.
    """
    output = rewrite_brackets(text, entries)
    return rewrite_bare_text(output, entries, case_insensitive, match_stripped)
