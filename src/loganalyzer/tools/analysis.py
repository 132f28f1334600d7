"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from loganalyzer.core.aggregators import LevelCounter, MessageCounter, SummaryCollector, TimeBucketCounter
from loganalyzer.core.filters import FilterConfig, LineFilter
from loganalyzer.core.log_service import aggregate_async, count_lines_async, iter_matches_async

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000
DEFAULT_TOP = 10


def _line_filter(
    *,
    level: str | None,
    from_date: str | None,
    to_date: str | None,
    search: str | None,
    regex: str | None,
) -> LineFilter:
    config = FilterConfig(
        level=level,
        from_date=from_date,
        to_date=to_date,
        search=search,
        regex=regex,
    )
    return LineFilter.from_config(config)


async def count_lines_impl(*, log_path: str) -> dict[str, Any]:
    return {"total_lines": await count_lines_async(log_path)}


async def search_logs_impl(
    *,
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `search_logs` MCP tool.

    ``count`` is the number of matching lines in the whole file; ``lines``
    holds at most ``limit`` of them (hard-capped at HARD_LIMIT).
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_LIMIT)

    lf = _line_filter(level=level, from_date=from_date, to_date=to_date, search=search, regex=regex)
    count = 0
    lines: list[dict[str, Any]] = []
    async for m in iter_matches_async(log_path, lf):
        count += 1
        if len(lines) < limit:
            lines.append({"line_no": m.line_no, "text": m.text})
    return {"count": count, "lines": lines}


async def level_stats_impl(
    *,
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    lf = _line_filter(level=level, from_date=from_date, to_date=to_date, search=search, regex=regex)
    counter = await aggregate_async(log_path, lf, LevelCounter())
    return counter.report().model_dump(mode="json")


async def time_stats_impl(
    *,
    log_path: str,
    granularity: str = "daily",
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    # Build the counter first so a bad granularity fails before any I/O.
    counter = TimeBucketCounter(granularity)
    lf = _line_filter(level=level, from_date=from_date, to_date=to_date, search=search, regex=regex)
    await aggregate_async(log_path, lf, counter)
    return counter.report().model_dump(mode="json")


async def top_messages_impl(
    *,
    log_path: str,
    n: int | None = None,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    if n is None:
        n = DEFAULT_TOP
    if n < 1:
        raise ValueError("n must be a positive integer")
    lf = _line_filter(level=level, from_date=from_date, to_date=to_date, search=search, regex=regex)
    counter = await aggregate_async(log_path, lf, MessageCounter())
    return counter.report(n).model_dump(mode="json")


async def log_summary_impl(
    *,
    log_path: str,
    level: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    search: str | None = None,
    regex: str | None = None,
) -> dict[str, Any]:
    lf = _line_filter(level=level, from_date=from_date, to_date=to_date, search=search, regex=regex)
    collector = await aggregate_async(log_path, lf, SummaryCollector())
    return collector.report().model_dump(mode="json")
