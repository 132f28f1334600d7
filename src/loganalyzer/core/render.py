"""Plain-text renderers for report snapshots.

Every renderer writes to the sink it is given and never touches the report.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from .models import MatchedLine
from .reports import (
    CountRow,
    HealthStatus,
    LevelReport,
    SummaryReport,
    TimeReport,
    TopMessagesReport,
)

NO_DATA = "No logs to analyze."
TOP_MESSAGE_WIDTH = 47
SUMMARY_MESSAGE_WIDTH = 45
RULE = "-" * 40

_HEALTH_MARKERS = {
    HealthStatus.HIGH: "[!!] HIGH ERROR RATE - investigate immediately",
    HealthStatus.ELEVATED: "[!] Elevated error rate",
    HealthStatus.NORMAL: "[OK] Error rate normal",
}


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` characters plus ``...`` when longer."""
    if len(text) <= width:
        return text
    return text[:width] + "..."


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def _count_table(rows: Iterable[CountRow], label: str, out: TextIO) -> None:
    print(f"{label:<20} {'Count':>8} {'Percentage':>12}", file=out)
    print(RULE + "-" * 2, file=out)
    for row in rows:
        print(f"{row.key:<20} {row.count:>8} {_pct(row.percentage):>12}", file=out)


def render_level_report(report: LevelReport, out: TextIO) -> None:
    if report.total == 0:
        print(NO_DATA, file=out)
        return
    print("=== Log Level Statistics ===", file=out)
    _count_table(report.rows, "Level", out)
    print(RULE + "-" * 2, file=out)
    print(f"{'Total':<20} {report.total:>8}", file=out)


def render_time_report(report: TimeReport, out: TextIO) -> None:
    if report.total == 0:
        print(NO_DATA, file=out)
        return
    print(f"=== {report.granularity.value.capitalize()} Log Distribution ===", file=out)
    _count_table(report.rows, report.granularity.label, out)
    print(RULE + "-" * 2, file=out)
    print(f"{'Total':<20} {report.total:>8}", file=out)


def render_top_report(report: TopMessagesReport, out: TextIO) -> None:
    if report.total == 0:
        print(NO_DATA, file=out)
        return
    print(f"=== Top {report.limit} Most Frequent Messages ===", file=out)
    print(f"{'Rank':<5} {'Count':>8} {'Percentage':>12}  Message", file=out)
    print(RULE * 2, file=out)
    for rank, row in enumerate(report.rows, start=1):
        message = truncate(row.key, TOP_MESSAGE_WIDTH)
        print(f"{rank:<5} {row.count:>8} {_pct(row.percentage):>12}  {message}", file=out)
    print(RULE * 2, file=out)
    print(f"Total logs analyzed: {report.total}", file=out)


def render_summary_report(report: SummaryReport, out: TextIO) -> None:
    if report.total == 0:
        print(NO_DATA, file=out)
        return

    print("=== Log Summary ===", file=out)
    print("", file=out)
    print("Overview", file=out)
    print(RULE, file=out)
    print(f"Total log entries: {report.total}", file=out)
    if report.first_date is not None:
        print(f"Date range: {report.first_date} to {report.last_date}", file=out)
    else:
        print("Date range: N/A", file=out)
    print(f"Unique dates: {report.unique_dates}", file=out)
    print(f"Unique messages: {report.unique_messages}", file=out)

    print("", file=out)
    print("Level Distribution", file=out)
    print(RULE, file=out)
    for row in report.levels:
        print(f"{row.key:<8} {row.count:>8} {_pct(row.percentage):>10}", file=out)

    print("", file=out)
    print(f"Top {len(report.busiest_dates)} Busiest Dates", file=out)
    print(RULE, file=out)
    for row in report.busiest_dates:
        print(f"{row.key:<12} {row.count:>8}", file=out)

    print("", file=out)
    print(f"Top {len(report.top_messages)} Most Frequent Messages", file=out)
    print(RULE, file=out)
    for row in report.top_messages:
        print(f"{row.count:>8}  {truncate(row.key, SUMMARY_MESSAGE_WIDTH)}", file=out)

    print("", file=out)
    print("Health Indicators", file=out)
    print(RULE, file=out)
    print(f"Error rate: {_pct(report.error_rate)}", file=out)
    print(f"Warning rate: {_pct(report.warning_rate)}", file=out)
    print(_HEALTH_MARKERS[report.health], file=out)


def render_matches(matches: Iterable[MatchedLine], out: TextIO, *, numbered: bool) -> int:
    """Echo matching lines and a footer; return the number of matches."""
    count = 0
    for m in matches:
        if numbered:
            print(f"[Line {m.line_no}] {m.text}", file=out)
        else:
            print(m.text, file=out)
        count += 1
    print(f"\n--- Found {count} matching lines ---", file=out)
    return count
