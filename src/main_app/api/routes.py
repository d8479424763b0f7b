"""
api/routes.py - JSON API Routes

Routes for scripted conversion.
"""

from __future__ import annotations

from flask import Response, current_app, jsonify, request

from extensions import api_rate_limit, limiter
from linkops.languages import LANGUAGES, site_key
from main_app.api import bp
from main_app.conversion import run_conversion, validate_conversion_request


@bp.route("/languages")
def languages() -> Response:
    """Return the supported languages as a list of {code, name, site} objects."""
    return jsonify([
        {"code": code, "name": name, "site": site_key(code)}
        for code, name in LANGUAGES
    ])


@bp.route("/convert", methods=["POST"])
@limiter.limit(api_rate_limit)
def convert() -> tuple[Response, int] | Response:
    """
    Convert the wikilinks of a text.

    Expects a JSON body {"text": ..., "source": ..., "target": ...}. When
    "source" or "target" is omitted the configured defaults are used.

    Returns:
        200 with {"text", "entries", "resolved", "total"} on success, or 400
        with {"error": message} when the body or its values are invalid.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    text = data.get("text", "")
    if not isinstance(text, str):
        return jsonify({"error": "'text' must be a string"}), 400

    source_lang = str(data.get("source") or current_app.config.get("DEFAULT_SOURCE_LANG", "en")).strip()
    target_lang = str(data.get("target") or current_app.config.get("DEFAULT_TARGET_LANG", "ta")).strip()

    error = validate_conversion_request(text, source_lang, target_lang)
    if error:
        return jsonify({"error": error}), 400

    if not text.strip():
        return jsonify({"text": text, "entries": [], "resolved": 0, "total": 0})

    result = run_conversion(text, source_lang, target_lang)
    return jsonify(result.to_dict())
