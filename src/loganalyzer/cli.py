from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from loganalyzer import __version__
from loganalyzer.core.aggregators import LevelCounter, MessageCounter, SummaryCollector, TimeBucketCounter
from loganalyzer.core.export import CsvExporter
from loganalyzer.core.filters import FilterConfig, LineFilter
from loganalyzer.core.log_service import (
    ReadSettings,
    aggregate,
    count_lines,
    iter_matches,
    resolve_read_settings,
)
from loganalyzer.core.models import TimeGranularity
from loganalyzer.core.render import (
    render_level_report,
    render_matches,
    render_summary_report,
    render_time_report,
    render_top_report,
)

LOGGER = logging.getLogger(__name__)

EXIT_FILE_ERROR = 1
EXIT_USAGE = 2


def _configure_logging() -> None:
    # stdout carries the reports; diagnostics go to stderr.
    level_name = os.getenv("LOG_ANALYZER_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024**2:
        return f"{size / 1024:.2f} KB"
    if size < 1024**3:
        return f"{size / 1024**2:.2f} MB"
    return f"{size / 1024**3:.2f} GB"


def _validation_message(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="loganalyzer",
        description="Analyzes log files and provides statistics and filtering capabilities.",
    )
    p.add_argument("log_file", help="Path to the log file to analyze")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--count", action="store_true", help="Display total line count")

    filters = p.add_argument_group("filters")
    filters.add_argument("-l", "--level", help="Filter by log level (ERROR, WARN, INFO, DEBUG, TRACE, FATAL)")
    filters.add_argument("-s", "--search", help="Search for lines containing text (case-insensitive)")
    filters.add_argument("-r", "--regex", help="Search for lines matching a pattern (case-insensitive)")
    filters.add_argument("--from", dest="from_date", metavar="YYYY-MM-DD", help="Start date (inclusive)")
    filters.add_argument("--to", dest="to_date", metavar="YYYY-MM-DD", help="End date (inclusive)")

    reports = p.add_mutually_exclusive_group()
    reports.add_argument("--stats", action="store_true", help="Show log level statistics")
    reports.add_argument("--time-stats", metavar="hourly|daily", help="Show log counts per hour or per day")
    reports.add_argument("--top", type=int, metavar="N", help="Show the N most frequent messages")
    reports.add_argument("--summary", action="store_true", help="Show a comprehensive summary report")

    p.add_argument("-e", "--export", metavar="FILE", help="Also write --stats, --time-stats or --top results to CSV")
    return p


def _describe_filters(config: FilterConfig, out: TextIO) -> None:
    if config.level is not None:
        print(f"Filtering by level: {config.level.upper()}", file=out)
    if config.search is not None:
        print(f"Searching for: '{config.search}'", file=out)
    if config.regex is not None:
        print(f"Matching regex: '{config.regex}'", file=out)
    if config.has_date_range:
        start = config.from_date.isoformat() if config.from_date else "start"
        end = config.to_date.isoformat() if config.to_date else "end"
        print(f"Date range: {start} to {end}", file=out)


def _run_report(
    args: argparse.Namespace,
    path: Path,
    line_filter: LineFilter,
    settings: ReadSettings,
    out: TextIO,
) -> None:
    exporter = CsvExporter(args.export) if args.export else None

    if args.stats:
        report = aggregate(path, line_filter, LevelCounter(), settings=settings).report()
        render_level_report(report, out)
        if exporter is not None and report.total:
            print(f"\nStatistics exported to: {exporter.export_level_stats(report)}", file=out)
    elif args.time_stats is not None:
        report = aggregate(path, line_filter, TimeBucketCounter(args.time_stats), settings=settings).report()
        render_time_report(report, out)
        if exporter is not None and report.total:
            print(f"\nTime statistics exported to: {exporter.export_time_stats(report)}", file=out)
    elif args.top is not None:
        report = aggregate(path, line_filter, MessageCounter(), settings=settings).report(args.top)
        render_top_report(report, out)
        if exporter is not None and report.total:
            print(f"\nTop messages exported to: {exporter.export_top_messages(report)}", file=out)
    elif args.summary:
        render_summary_report(aggregate(path, line_filter, SummaryCollector(), settings=settings).report(), out)


def _check_usage(args: argparse.Namespace) -> None:
    """Reject argument combinations that would otherwise fail mid-run."""
    if args.top is not None and args.top < 1:
        raise ValueError("--top requires a positive integer")
    if args.time_stats is not None:
        TimeGranularity.parse(args.time_stats)
    if args.export and not (args.stats or args.time_stats is not None or args.top is not None):
        raise ValueError("--export requires --stats, --time-stats or --top")


def main(argv: Sequence[str] | None = None) -> None:
    _configure_logging()
    args = build_parser().parse_args(argv)
    out = sys.stdout
    path = Path(args.log_file)

    if not path.exists():
        print(f"Error: File not found - {path}", file=sys.stderr)
        raise SystemExit(EXIT_FILE_ERROR)
    if not path.is_file():
        print(f"Error: Path is not a file - {path}", file=sys.stderr)
        raise SystemExit(EXIT_FILE_ERROR)

    try:
        _check_usage(args)
        settings = resolve_read_settings()
        config = FilterConfig(
            level=args.level,
            from_date=args.from_date,
            to_date=args.to_date,
            search=args.search,
            regex=args.regex,
        )
    except ValidationError as e:
        print(f"Error: {_validation_message(e)}", file=sys.stderr)
        raise SystemExit(EXIT_USAGE)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(EXIT_USAGE)

    line_filter = LineFilter.from_config(config)
    LOGGER.debug("Resolved filters: %s", config.model_dump(exclude_none=True))

    print(f"Analyzing: {path.name}", file=out)
    print(f"File size: {_format_file_size(path.stat().st_size)}", file=out)

    if args.count:
        print(f"Total lines: {count_lines(path, settings=settings)}", file=out)

    reporting = args.stats or args.summary or args.time_stats is not None or args.top is not None
    if config.is_empty and not reporting:
        return

    _describe_filters(config, out)
    print("---", file=out)

    if reporting:
        _run_report(args, path, line_filter, settings, out)
    else:
        render_matches(iter_matches(path, line_filter, settings=settings), out, numbered=config.has_text_search)


if __name__ == "__main__":
    main()
