#!/usr/bin/env python3
"""
MCP Server for Lunch Money.

Provides conversational access to Lunch Money data: transactions, budgets,
categories, tags, assets, Plaid accounts, recurring items and crypto
holdings. Connects to the Lunch Money API with a bearer access token.

List tools accept ``response_format`` ('json' or 'toon') and
``response_mode`` ('inline' or 'file'); see ``lunchmoney_mcp.response``.
Configuration is read from the environment, see ``lunchmoney_mcp.config``.
"""

import logging
import sys

from lunchmoney_mcp import tools  # noqa: F401  (registers the tools)
from lunchmoney_mcp.app import mcp
from lunchmoney_mcp.config import get_settings


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the stdio MCP transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    """Run the Lunch Money MCP server via stdio transport."""
    configure_logging(get_settings().log_level)
    mcp.run()


if __name__ == "__main__":
    main()
