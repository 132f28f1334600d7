"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def _filter_lines(
    *,
    level: str | None,
    from_date: str | None,
    to_date: str | None,
    search: str | None,
) -> list[str]:
    out: list[str] = []
    if level is not None:
        out.append(f"- level: {level.upper()}")
    if from_date is not None:
        out.append(f"- from_date: {from_date}")
    if to_date is not None:
        out.append(f"- to_date: {to_date}")
    if search is not None:
        out.append(f"- search: {search}")
    return out or ["- (none)"]


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def analyze_log_file(
        log_path: str,
        level: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """Build a prompt for a statistics-driven review of one log file."""
        filters = "\n".join(
            _filter_lines(level=level, from_date=from_date, to_date=to_date, search=search)
        )
        return [
            {
                "role": "system",
                "content": (
                    "You are an operations engineer reviewing a single log file. Base every "
                    "statement on tool output; do not guess counts. Percentages are relative to "
                    "the filtered lines, not the whole file."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Analyze the log file at {log_path}.\n"
                    f"Filters:\n{filters}\n\n"
                    "Steps:\n"
                    "1. Call log_summary with these filters.\n"
                    "2. Call time_stats (granularity=hourly) to find spikes.\n"
                    "3. Call top_messages (n=10) to find the dominant messages.\n"
                    "Report: overall health, the busiest periods, the most repeated messages, "
                    "and what to look at next."
                ),
            },
        ]

    @mcp.prompt()
    def investigate_errors(
        log_path: str,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> list[dict[str, Any]]:
        """Build a prompt that drills into ERROR lines."""
        window = "\n".join(
            _filter_lines(level="ERROR", from_date=from_date, to_date=to_date, search=None)
        )
        return [
            {
                "role": "system",
                "content": (
                    "You are a precise incident investigator. Quote line numbers for every claim."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Investigate errors in {log_path}.\n"
                    f"Filters:\n{window}\n\n"
                    "Call top_messages with level=ERROR to group recurring failures, then "
                    "search_logs with level=ERROR and a regex for the top message to see when "
                    "it occurs. Summarize each recurring failure with its first and last line."
                ),
            },
        ]
