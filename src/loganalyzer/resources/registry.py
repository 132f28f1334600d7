"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from loganalyzer.core.aggregators import SummaryCollector
from loganalyzer.core.filters import LineFilter
from loganalyzer.core.log_service import aggregate_async
from loganalyzer.core.models import LEVEL_PRIORITY
from loganalyzer.core.render import render_summary_report
from loganalyzer.core.reports import SummaryReport

BASE_DIR_ENV = "LOG_ANALYZER_BASE_DIR"

SAMPLE_LOG = (
    "2024-01-01 10:00:00 INFO start\n"
    "2024-01-01 10:05:00 ERROR failure X\n"
    "2024-01-02 09:00:00 ERROR failure X\n"
    "2024-01-02 09:30:00 WARN disk usage at 85%\n"
)


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {p}")
    return p


async def summary_text(path: str) -> str:
    """Render the unfiltered summary report of a file under the base directory."""
    p = _safe_resolve(path)
    collector = await aggregate_async(p, LineFilter(), SummaryCollector())
    buf = io.StringIO()
    render_summary_report(collector.report(), buf)
    return buf.getvalue()


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-analyzer/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://log-analyzer/help\n"
            "- app://log-analyzer/config/levels\n"
            "- app://log-analyzer/schemas/summary-report\n"
            "- app://log-analyzer/examples/sample-log\n"
            f"- summary://{{path}} (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {_base_dir()}\n"
        )

    @mcp.resource("app://log-analyzer/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://log-analyzer/config/levels")
    def levels() -> list[str]:
        """Return level keywords in detection priority order."""
        return [level.value for level in LEVEL_PRIORITY]

    @mcp.resource("app://log-analyzer/schemas/summary-report")
    def summary_schema() -> dict[str, Any]:
        """Return the JSON schema of the log_summary tool result."""
        return SummaryReport.model_json_schema()

    @mcp.resource("summary://{path}")
    async def summary(path: str) -> str:
        """Return the rendered summary report of a log file within LOG_ANALYZER_BASE_DIR."""
        return await summary_text(path)
