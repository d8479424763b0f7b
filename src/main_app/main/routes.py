"""
main/routes.py - Main Blueprint Routes

Routes for the conversion form and health check.
"""

from __future__ import annotations

from typing import Optional, Tuple

from flask import (
    Response,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from werkzeug.wrappers import Response as WerkzeugResponse

import linkops
from linkops.languages import LANGUAGES
from main_app.conversion import run_conversion, validate_conversion_request
from main_app.main import bp

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse


def _selected_languages() -> Tuple[str, str]:
    """
    Return the (source, target) language pair to preselect in the form.

    Uses the last pair the session converted with, falling back to the
    DEFAULT_SOURCE_LANG / DEFAULT_TARGET_LANG config values.
    """
    source = session.get("source_lang") or current_app.config.get("DEFAULT_SOURCE_LANG", "en")
    target = session.get("target_lang") or current_app.config.get("DEFAULT_TARGET_LANG", "ta")
    return source, target


def _render_form(
    text: str = "",
    output: Optional[str] = None,
    entries: Optional[list] = None,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
) -> str:
    default_source, default_target = _selected_languages()
    return render_template(
        "index.html",
        languages=LANGUAGES,
        text=text,
        output=output,
        entries=entries or [],
        source_lang=source_lang or default_source,
        target_lang=target_lang or default_target,
    )


@bp.route("/", methods=["GET", "POST"])
def index() -> RouteResponse:
    """
    Show the conversion form (GET) or convert the submitted text (POST).

    POST: validates the language pair and text length, flashing an error and
    re-rendering the form with the submitted values on invalid input. A valid
    language pair is remembered in the session. Text that is empty or blank
    renders an empty output without any lookup. Otherwise the text is
    converted and the output is rendered along with one resolution row per
    referenced title.
    """
    if request.method == "POST":
        text = request.form.get("text", "")
        source_lang = request.form.get("source_lang", "").strip()
        target_lang = request.form.get("target_lang", "").strip()

        error = validate_conversion_request(text, source_lang, target_lang)
        if error:
            flash(error, "error")
            return _render_form(text, source_lang=source_lang, target_lang=target_lang)

        # Sticky language choice
        session.permanent = True
        session["source_lang"] = source_lang
        session["target_lang"] = target_lang

        if not text.strip():
            return _render_form(text, output="", source_lang=source_lang, target_lang=target_lang)

        result = run_conversion(text, source_lang, target_lang)
        if result.entries and not result.resolved_count:
            flash("None of the linked titles could be resolved.", "info")

        return _render_form(
            text,
            output=result.text,
            entries=result.entries,
            source_lang=source_lang,
            target_lang=target_lang,
        )

    return _render_form()


@bp.route("/clear", methods=["POST"])
def clear() -> RouteResponse:
    """Discard the current input and output and return to an empty form."""
    return redirect(url_for("main.index"))


@bp.route("/health")
def health() -> Response:
    """
    Health check endpoint returning service status and metadata.

    Returns:
        JSON object with keys "status", "service" and "version".
    """
    return jsonify({
        "status": "healthy",
        "service": "wikilink-translator",
        "version": linkops.__version__
    })
