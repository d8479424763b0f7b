# linkops/pipeline.py
# One conversion pass: extract keys, resolve them, rewrite the text

from __future__ import annotations

import logging
from typing import List, Optional

from .extract import find_bracket_spans, unique_keys
from .models import ConversionResult, ProgressCallback, ProgressReporter, Stage
from .protect import split_ref_runs
from .resolver import ItemLookup, TitleLookup, resolve_keys
from .rewriter import rewrite_text

logger = logging.getLogger(__name__)


def convert(
    text: str,
    source_lang: str,
    target_lang: str,
    fetch_item: Optional[ItemLookup] = None,
    fetch_title: Optional[TitleLookup] = None,
    timeout: int = 10,
    progress: Optional[ProgressCallback] = None,
    protect_refs: bool = False,
    case_insensitive: bool = False,
    match_stripped: bool = False,
) -> ConversionResult:
    """
    Convert the wikilinks in text from source_lang to target_lang.

    Args:
        text: Wikitext containing [[Title]] / [[Title|Display]] references
        source_lang: Language code of the wiki the titles belong to
        target_lang: Language code of the wiki to convert to
        fetch_item: Optional source title lookup (defaults to Wikipedia)
        fetch_title: Optional sitelink lookup (defaults to Wikidata)
        timeout: HTTP timeout in seconds for the default lookups
        progress: Optional callback receiving (stage, percent, message)
        protect_refs: Leave <ref> citations untouched
        case_insensitive: Match bare occurrences ignoring case
        match_stripped: Also match bare occurrences without the
                        parenthesized suffix

    Returns:
        ConversionResult with the rewritten text and one entry per key.
        Text without bracketed references comes back unchanged with no
        entries and without any lookup being made.
    """
    report = ProgressReporter(progress)

    if protect_refs:
        runs = split_ref_runs(text)
    else:
        runs = [(text, False)]

    spans = []
    for run, is_ref in runs:
        if not is_ref:
            spans.extend(find_bracket_spans(run))

    keys: List[str] = unique_keys(spans)
    if not keys:
        return ConversionResult(text=text)

    report(Stage.PREPARING, 10, "Preparing queries...")

    entries = resolve_keys(
        keys,
        source_lang,
        target_lang,
        fetch_item=fetch_item,
        fetch_title=fetch_title,
        timeout=timeout,
        progress=report,
    )

    report(Stage.COMPOSING, 90, "Composing output...")

    output = "".join(
        run if is_ref else rewrite_text(run, entries, case_insensitive, match_stripped)
        for run, is_ref in runs
    )

    result = ConversionResult(text=output, entries=list(entries.values()))
    logger.info(
        "Converted %s -> %s: %d/%d reference(s) resolved",
        source_lang, target_lang, result.resolved_count, len(result.entries),
    )

    report(Stage.DONE, 100, "Done")
    return result


def convert_text(text: str, source_lang: str, target_lang: str, **kwargs) -> str:
    """Convert text and return only the rewritten text. See convert()."""
    return convert(text, source_lang, target_lang, **kwargs).text
