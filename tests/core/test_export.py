from __future__ import annotations

from pathlib import Path

from loganalyzer.core.aggregators import LevelCounter, MessageCounter, TimeBucketCounter
from loganalyzer.core.export import CsvExporter

SAMPLE_LINES = [
    "2024-01-01 10:00:00 INFO start",
    "2024-01-01 10:05:00 ERROR failure X",
    "2024-01-02 09:00:00 ERROR failure X",
]


def _feed(aggregator, lines):
    for line in lines:
        aggregator.feed(line)
    return aggregator


def test_export_level_stats(tmp_path: Path) -> None:
    out = tmp_path / "levels.csv"
    CsvExporter(out).export_level_stats(_feed(LevelCounter(), SAMPLE_LINES).report())
    assert out.read_text(encoding="utf-8") == (
        "Level,Count,Percentage\n"
        "ERROR,2,66.67%\n"
        "INFO,1,33.33%\n"
    )


def test_export_time_stats(tmp_path: Path) -> None:
    out = tmp_path / "time.csv"
    lines = list(reversed(SAMPLE_LINES))
    CsvExporter(out).export_time_stats(_feed(TimeBucketCounter("daily"), lines).report())
    assert out.read_text(encoding="utf-8") == "Date,Count\n2024-01-01,2\n2024-01-02,1\n"


def test_export_time_stats_hourly_header(tmp_path: Path) -> None:
    out = tmp_path / "hours.csv"
    CsvExporter(out).export_time_stats(_feed(TimeBucketCounter("hourly"), SAMPLE_LINES).report())
    assert out.read_text(encoding="utf-8").splitlines()[0] == "Hour,Count"


def test_export_top_messages_escapes_commas(tmp_path: Path) -> None:
    out = tmp_path / "top.csv"
    lines = SAMPLE_LINES + ["2024-01-03 10:00:00 WARN a, b, c"]
    path = CsvExporter(out).export_top_messages(_feed(MessageCounter(), lines).report(5))
    assert path == out
    assert out.read_text(encoding="utf-8") == (
        "Message,Count,Percentage\n"
        '"failure X",2,50.00%\n'
        '"start",1,25.00%\n'
        '"a; b; c",1,25.00%\n'
    )


def test_export_keeps_full_long_message(tmp_path: Path) -> None:
    out = tmp_path / "top.csv"
    message = "y" * 80
    CsvExporter(out).export_top_messages(_feed(MessageCounter(), [f"ERROR {message}"]).report(1))
    assert f'"{message}",1,100.00%' in out.read_text(encoding="utf-8")
