# linkops/wikipedia.py
# Lookups against the Wikipedia and Wikidata APIs

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from .languages import api_url

logger = logging.getLogger(__name__)

# Wikidata API endpoint URL (configurable for testing)
WIKIDATA_API_URL = "https://www.wikidata.org/w/api.php"

# User-Agent header for Wikimedia API requests
# Following Wikimedia's User-Agent policy: https://meta.wikimedia.org/wiki/User-Agent_policy
USER_AGENT = "WikiLinkTranslator/1.0 (https://github.com/wikilink-translator; cross-language wikilink converter)"


def _get_json(url: str, params: Dict[str, Any], timeout: int) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Issue one GET request against a MediaWiki API and decode the JSON body.

    Returns:
        Tuple of (data, error_message):
        - On success: (decoded_json, None)
        - On failure: (None, error_message)
    """
    headers = {
        "User-Agent": USER_AGENT
    }

    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()

        data = response.json()

        if not isinstance(data, dict):
            return None, "Received invalid response from the API."

        if "error" in data:
            return None, f"API error: {data['error'].get('info', 'Unknown error')}"

        return data, None

    except requests.exceptions.Timeout:
        return None, "Request timed out."
    except requests.exceptions.ConnectionError:
        return None, f"Failed to connect to {url}."
    except requests.exceptions.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else "unknown"
        if status_code == 429:
            return None, "Too many requests (HTTP 429)."
        return None, f"API returned an error (HTTP {status_code})."
    except requests.exceptions.RequestException:
        return None, "Request failed."
    except ValueError:
        return None, "Received invalid response from the API."


def fetch_wikibase_item(title: str, lang: str, timeout: int = 10) -> Tuple[Optional[str], Optional[str]]:
    """
    Look up the Wikidata item linked to a Wikipedia article.

    Redirects are followed, so the item of the redirect target is returned.

    Args:
        title: Article title in the source language
        lang: Wikipedia language code (e.g. "en")
        timeout: Request timeout in seconds (default: 10)

    Returns:
        Tuple of (item_id, error_message):
        - On success: ("Q668", None)
        - On failure or when the page has no item: (None, error_message)
    """
    if not title or not title.strip():
        return None, "Article title is required"

    params = {
        "action": "query",
        "titles": title.strip(),
        "prop": "pageprops",
        "ppprop": "wikibase_item",
        "redirects": "1",
        "format": "json",
        "formatversion": "2"
    }

    data, error = _get_json(api_url(lang), params, timeout)
    if error:
        return None, error

    pages = (data.get("query") or {}).get("pages") or []
    if not pages:
        return None, f"No page returned for '{title}'"

    page = pages[0]
    if page.get("missing") or page.get("invalid"):
        return None, f"Article '{title}' not found on {lang}.wikipedia.org"

    item = (page.get("pageprops") or {}).get("wikibase_item")
    if not item:
        return None, f"Article '{title}' has no Wikidata item"

    return item, None


def fetch_sitelink_title(item_id: str, site: str, timeout: int = 10) -> Tuple[Optional[str], Optional[str]]:
    """
    Look up the title of a Wikidata item's sitelink on one wiki.

    Args:
        item_id: Wikidata item id (e.g. "Q668")
        site: Wikidata site id (e.g. "tawiki")
        timeout: Request timeout in seconds (default: 10)

    Returns:
        Tuple of (title, error_message):
        - On success: ("இந்தியா", None)
        - On failure or when the item has no sitelink for site: (None, error_message)
    """
    if not item_id:
        return None, "Wikidata item id is required"

    params = {
        "action": "wbgetentities",
        "ids": item_id,
        "props": "sitelinks",
        "sitefilter": site,
        "format": "json"
    }

    data, error = _get_json(WIKIDATA_API_URL, params, timeout)
    if error:
        return None, error

    entities = data.get("entities") or {}
    entity = entities.get(item_id)
    if entity is None and len(entities) == 1:
        # Redirected (merged) items come back under the target id
        entity = next(iter(entities.values()))
    if not entity or "missing" in entity:
        return None, f"Wikidata item {item_id} not found"

    sitelink = (entity.get("sitelinks") or {}).get(site) or {}
    title = sitelink.get("title")
    if not title:
        return None, f"Wikidata item {item_id} has no {site} sitelink"

    return title, None
