"""
Entry point for the PoE2 gem MCP server.

Runs over stdio, so stdout belongs to the protocol and all logging goes
to stderr.
"""

import logging
import sys

from poe2_gems.cache import CacheClient
from poe2_gems.config import get_settings
from poe2_gems.server import create_server

log = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
    )

    cache = CacheClient(ttl=settings.cache_ttl)
    mcp = create_server(cache)
    log.info("PoE2 MCP Server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
