"""
PoE2 Wiki client for fetching gem markup and support gem listings.

Wraps the poe2wiki.net MediaWiki API: the revisions endpoint for raw page
wikitext and the Cargo extension for tabular gem queries. Failures never
escape this module's public functions; they are logged and turned into an
empty result so a single bad lookup cannot take the tool server down.
"""

import logging
from typing import Any

import httpx

from poe2_gems.cache import CacheClient
from poe2_gems.config import get_settings
from poe2_gems.exceptions import WikiError
from poe2_gems.markup import extract_supports, filter_compatible, parse_template
from poe2_gems.types import GemRecord, SupportGem, SupportReference

log = logging.getLogger(__name__)

_MISSING_PAGE_ID = "-1"
_SUPPORT_GEM_CLASS = "Support Skill Gem"


def _get_json(params: dict[str, str], what: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        response = httpx.get(settings.wiki_api_url, params=params, timeout=settings.api_timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise WikiError(f"Failed to fetch {what}: HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise WikiError(f"Network error fetching {what}: {e}") from e

    try:
        data = response.json()
    except (ValueError, TypeError) as e:
        raise WikiError(f"Invalid JSON response for {what}") from e

    if not isinstance(data, dict):
        raise WikiError(f"Unexpected wiki API response format for {what}")

    if "error" in data:
        error = data["error"]
        error_info = error.get("info", "Unknown error") if isinstance(error, dict) else error
        raise WikiError(f"Wiki API error for {what}: {error_info}")

    return data


def _fetch_page_content(title: str) -> str | None:
    data = _get_json(
        {
            "action": "query",
            "prop": "revisions",
            "titles": title,
            "rvprop": "content",
            "rvslots": "main",
            "redirects": "1",
            "format": "json",
        },
        f"wiki page '{title}'",
    )

    try:
        pages = (data.get("query") or {}).get("pages")
        if not pages:
            return None

        page_id, page = next(iter(pages.items()))
        if page_id == _MISSING_PAGE_ID or "missing" in page:
            return None

        return page["revisions"][0]["slots"]["main"]["*"]
    except (AttributeError, KeyError, IndexError, TypeError) as e:
        raise WikiError(f"Unexpected wiki API response format for '{title}'") from e


def fetch_gem_data(gem_name: str, cache: CacheClient) -> GemRecord | None:
    cached = cache.get_gem(gem_name)
    if cached is not None:
        log.info("Gem '%s': using cached record", gem_name)
        return cached.value

    log.info("Gem '%s': fetching from wiki API", gem_name)
    try:
        content = _fetch_page_content(gem_name)
    except WikiError as e:
        log.error("Gem '%s': %s", gem_name, e)
        return None

    if content is None:
        log.info("Gem '%s': no such page", gem_name)
        record = None
    else:
        record = parse_template(content)
        if record is None:
            log.warning("Gem '%s': page has no Item template, returning raw excerpt", gem_name)
            record = {"raw": content[: get_settings().raw_excerpt_length]}

    cache.set_gem(gem_name, record)
    return record


def fetch_recommended_supports(gem_name: str) -> list[SupportReference]:
    log.info("Gem '%s': fetching recommended supports from wiki API", gem_name)
    try:
        content = _fetch_page_content(gem_name)
    except WikiError as e:
        log.error("Gem '%s': %s", gem_name, e)
        return []

    if content is None:
        return []
    return extract_supports(content)


def _support_where_clause(tags: list[str]) -> str:
    # Double quotes would terminate the Cargo string literal.
    safe_tags = [tag.replace('"', "") for tag in tags]
    conditions = " OR ".join(f'gem_tags LIKE "%{tag}%"' for tag in safe_tags)
    return f'class_id="{_SUPPORT_GEM_CLASS}" AND ({conditions})'


def _cargo_query(tags: list[str]) -> list[SupportGem]:
    settings = get_settings()
    data = _get_json(
        {
            "action": "cargoquery",
            "tables": "skill_gems",
            "fields": "name, gem_tags, description",
            "where": _support_where_clause(tags),
            "limit": str(settings.support_query_limit),
            "format": "json",
        },
        f"support gems for tags {tags}",
    )

    try:
        rows = data.get("cargoquery") or []
        return [row["title"] for row in rows]
    except (KeyError, TypeError) as e:
        raise WikiError("Unexpected Cargo response format for support gem query") from e


def fetch_compatible_supports(tags: list[str]) -> list[SupportGem]:
    """
    Find support gems sharing at least one tag with ``tags``.

    The Cargo ``LIKE`` filter runs case-insensitively on the wiki's side, so
    rows are filtered again locally with case-sensitive substring matching.
    Order is whatever the wiki returned.
    """
    if not tags:
        return []

    log.info("Support gems for tags %s: querying wiki Cargo tables", tags)
    try:
        rows = _cargo_query(tags)
    except WikiError as e:
        log.error("Support gem query failed: %s", e)
        return []

    return filter_compatible(tags, rows)
