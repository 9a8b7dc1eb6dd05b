"""
MCP tool server exposing PoE2 gem lookups.

Tools
-----
  get_gem_info(gem_name)              → summary + full template field dump
  get_compatible_supports(gem_name)   → supports sharing a tag (Cargo query)
  get_recommended_supports(gem_name)  → supports listed on the gem's page

The tool bodies live in plain functions taking the cache explicitly so they
can be exercised without a transport. ``create_server`` binds them to one
cache instance and registers them with FastMCP.
"""

import logging

from mcp.server.fastmcp import FastMCP

from poe2_gems import formatting, wiki
from poe2_gems.cache import CacheClient
from poe2_gems.config import get_settings
from poe2_gems.exceptions import NoTagsError
from poe2_gems.markup import parse_tags

log = logging.getLogger(__name__)

SERVER_NAME = "poe2-mechanical-source"

_EMPTY_NAME_MESSAGE = "Gem name cannot be empty."


def _not_found(gem_name: str) -> str:
    return f'Could not find gem "{gem_name}".'


def gem_info(gem_name: str, cache: CacheClient) -> list[str]:
    if not gem_name or not gem_name.strip():
        return [_EMPTY_NAME_MESSAGE]

    record = wiki.fetch_gem_data(gem_name, cache)
    if not record:
        return [_not_found(gem_name)]

    return [
        formatting.format_gem_summary(record, gem_name),
        formatting.format_full_data(record),
    ]


def compatible_supports(gem_name: str, cache: CacheClient) -> str:
    if not gem_name or not gem_name.strip():
        return _EMPTY_NAME_MESSAGE

    record = wiki.fetch_gem_data(gem_name, cache)
    if not record:
        return _not_found(gem_name)

    tag_field = record.get("gem_tags")
    try:
        tags = parse_tags(tag_field)
    except NoTagsError:
        log.info("Gem '%s': no gem_tags field, skipping compatibility lookup", gem_name)
        return f"Could not find tags for {gem_name} to determine compatibility."

    supports = wiki.fetch_compatible_supports(tags)
    if not supports:
        return f"No matching support gems found for tags: {tag_field}"

    return formatting.format_compatible_supports(gem_name, tag_field, supports)


def recommended_supports(gem_name: str) -> str:
    if not gem_name or not gem_name.strip():
        return _EMPTY_NAME_MESSAGE

    supports = wiki.fetch_recommended_supports(gem_name)
    if not supports:
        return f"No recommended support gems listed on the wiki page for {gem_name}."

    return formatting.format_recommended_supports(gem_name, supports)


def create_server(cache: CacheClient | None = None) -> FastMCP:
    if cache is None:
        cache = CacheClient(ttl=get_settings().cache_ttl)

    mcp = FastMCP(SERVER_NAME)

    @mcp.tool()
    def get_gem_info(gem_name: str) -> list[str]:
        """
        Fetch complete mechanical template data for a PoE2 gem.

        Returns a readable summary followed by every field of the gem's wiki
        Item template as JSON, including per-level values the summary omits.

        Args:
            gem_name: The name of the gem (e.g., 'Gas Grenade').
        """
        return gem_info(gem_name, cache)

    @mcp.tool()
    def get_compatible_supports(gem_name: str) -> str:
        """
        Find support gems mechanically compatible with an active skill gem.

        Compatibility means the support shares at least one tag with the gem.

        Args:
            gem_name: The active gem to find supports for (e.g., 'Gas Grenade').
        """
        return compatible_supports(gem_name, cache)

    @mcp.tool()
    def get_recommended_supports(gem_name: str) -> str:
        """
        List the support gems the wiki page recommends for a skill gem.

        Args:
            gem_name: The active gem whose page to read (e.g., 'Gas Grenade').
        """
        return recommended_supports(gem_name)

    return mcp
