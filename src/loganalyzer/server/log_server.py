"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: log statistics and line search over a local file
- Resources: help text, a sample log, schemas and rendered summaries
- Prompts: reusable analysis workflows that clients can invoke

Run locally (stdio):
    python -m loganalyzer.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from loganalyzer.prompts.registry import register_prompts
from loganalyzer.resources.registry import register_resources
from loganalyzer.tools.analysis import (
    count_lines_impl,
    level_stats_impl,
    log_summary_impl,
    search_logs_impl,
    time_stats_impl,
    top_messages_impl,
)

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure logging to stderr; stdout is reserved for the stdio transport."""
    level_name = os.getenv("LOG_ANALYZER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-analyzer", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def count_lines(log_path: str) -> dict[str, Any]:
    """Return the total number of lines in a log file (no filtering)."""
    return await count_lines_impl(log_path=log_path)


@mcp.tool()
async def search_logs(
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Return lines that pass every given filter.

    Parameters
    ----------
    log_path:
        Path to a local log file. Supports plain text and .gz.
    level:
        Level keyword (e.g. "error"); matched as an uppercase substring anywhere in the line.
    from_date/to_date:
        Inclusive YYYY-MM-DD bounds checked against the first 10 characters of each line.
        Lines without a leading date are dropped when either bound is set.
    search:
        Case-insensitive substring.
    regex:
        Case-insensitive regular expression searched anywhere in the line.
    limit:
        Maximum number of lines returned (default 200, hard-capped at 5000).

    Returns
    -------
    dict:
        {"count": int, "lines": [{"line_no": int, "text": str}, ...]}
    """
    return await search_logs_impl(
        log_path=log_path,
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
        limit=limit,
    )


@mcp.tool()
async def level_stats(
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    """Count filtered lines per level (ERROR, WARN, INFO, DEBUG, TRACE, FATAL), most frequent first."""
    return await level_stats_impl(
        log_path=log_path,
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
    )


@mcp.tool()
async def time_stats(
    log_path: str,
    granularity: str = "daily",
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    """Count filtered lines per day ("daily") or per hour ("hourly"), oldest first."""
    return await time_stats_impl(
        log_path=log_path,
        granularity=granularity,
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
    )


@mcp.tool()
async def top_messages(
    log_path: str,
    n: int = 10,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    """Return the n most frequent messages (text after the level keyword)."""
    return await top_messages_impl(
        log_path=log_path,
        n=n,
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
    )


@mcp.tool()
async def log_summary(
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    """Return an overview: totals, date range, level mix, busiest dates, top messages and error-rate health."""
    return await log_summary_impl(
        log_path=log_path,
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
