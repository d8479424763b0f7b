"""
conversion.py - Request-level Conversion Helpers

Shared by the HTML and JSON blueprints: input validation and running the
linkops pipeline with the application's configured options.
"""

from __future__ import annotations

from typing import Optional

from flask import current_app

from linkops.languages import validate_language_code
from linkops.models import ConversionResult, Stage
from linkops.pipeline import convert


def validate_conversion_request(text: str, source_lang: str, target_lang: str) -> Optional[str]:
    """
    Validate the inputs of one conversion.

    Returns:
        None if the request is valid, otherwise a user-facing error message.
    """
    for code in (source_lang, target_lang):
        is_valid, error = validate_language_code(code)
        if not is_valid:
            return error

    if source_lang == target_lang:
        return "Source and target languages must differ."

    max_length = current_app.config.get("MAX_INPUT_LENGTH", 200_000)
    if len(text) > max_length:
        return f"Text must be {max_length} characters or less."

    return None


def run_conversion(text: str, source_lang: str, target_lang: str) -> ConversionResult:
    """Run the pipeline with the options from the current app's config."""
    config = current_app.config

    def _log_progress(stage: Stage, percent: int, message: str) -> None:
        current_app.logger.debug("[%s %d%%] %s", stage.value, percent, message)

    return convert(
        text,
        source_lang,
        target_lang,
        timeout=config.get("HTTP_TIMEOUT", 10),
        progress=_log_progress,
        protect_refs=config.get("PROTECT_REFS", False),
        case_insensitive=config.get("MATCH_CASE_INSENSITIVE", False),
        match_stripped=config.get("MATCH_STRIPPED_TITLE", False),
    )
