"""
linkops/protect.py - Citation Protection

Splits wikitext around its ``<ref>`` tags so that a conversion can leave
citations untouched. It uses the wikitextparser library for robust HTML tag
parsing within WikiText documents.

Handled forms:
    - Standard refs: <ref>citation text</ref>
    - Named refs: <ref name="source">citation text</ref>
    - Self-closing refs: <ref name="source" />

Malformed or unclosed refs are not recognised by wikitextparser and stay in
the convertible text.

Example:
    >>> split_ref_runs('A<ref>[[B]]</ref>C')
    [('A', False), ('<ref>[[B]]</ref>', True), ('C', False)]
"""

from __future__ import annotations

from typing import List, Tuple

import wikitextparser as wtp


# (text, is_ref_tag)
Run = Tuple[str, bool]


def find_ref_spans(text: str) -> List[Tuple[int, int]]:
    """
    Return the (start, end) offsets of every top-level <ref> tag in text.

    Refs nested in other refs are covered by their outer span and are not
    returned separately.
    """
    parsed = wtp.parse(text)

    # wikitextparser identifies tags by their name attribute.
    spans = sorted(
        t.span for t in parsed.get_tags() if (t.name or "").lower() == "ref"
    )

    merged: List[Tuple[int, int]] = []
    for start, end in spans:
        if merged and start < merged[-1][1]:
            continue
        merged.append((start, end))
    return merged


def split_ref_runs(text: str) -> List[Run]:
    """
    Split text into alternating plain runs and <ref> tag runs.

    Joining the run texts in order gives back the input unchanged.
    """
    runs: List[Run] = []
    last = 0
    for start, end in find_ref_spans(text):
        if start > last:
            runs.append((text[last:start], False))
        runs.append((text[start:end], True))
        last = end
    if last < len(text) or not runs:
        runs.append((text[last:], False))
    return runs
