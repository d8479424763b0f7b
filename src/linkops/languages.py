# linkops/languages.py
# Supported Wikipedia language editions and code validation

from __future__ import annotations

import re
from typing import List, Optional, Tuple

# Language editions offered in the UI, in display order.
LANGUAGES: List[Tuple[str, str]] = [
    ("en", "English"),
    ("hi", "Hindi"),
    ("ta", "Tamil"),
    ("te", "Telugu"),
    ("kn", "Kannada"),
    ("ml", "Malayalam"),
    ("bn", "Bengali"),
    ("mr", "Marathi"),
    ("gu", "Gujarati"),
    ("pa", "Punjabi"),
    ("or", "Odia"),
    ("as", "Assamese"),
    ("ur", "Urdu"),
]

# Wikipedia subdomains: "en", "zh-yue", "be-tarask", ...
LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z0-9]+)*$")


def validate_language_code(code: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a Wikipedia language code.

    The code ends up in the API host name, so anything that is not a plain
    lowercase subdomain label is rejected.

    Returns:
        Tuple of (is_valid, error_message):
        - On success: (True, None)
        - On failure: (False, error_message)
    """
    if not code or not code.strip():
        return False, "Language code is required"

    if not LANGUAGE_CODE_PATTERN.match(code.strip()):
        return False, f"Invalid language code: {code.strip()}"

    return True, None


def site_key(code: str) -> str:
    """
    Return the Wikidata site id of a Wikipedia language edition.

    >>> site_key("ta")
    'tawiki'
    >>> site_key("zh-yue")
    'zh_yuewiki'
    """
    return code.strip().replace("-", "_") + "wiki"


def api_url(code: str) -> str:
    """Return the MediaWiki API endpoint of a Wikipedia language edition."""
    return f"https://{code.strip()}.wikipedia.org/w/api.php"
