from __future__ import annotations

from pathlib import Path

import pytest

from loganalyzer.tools.analysis import (
    count_lines_impl,
    level_stats_impl,
    log_summary_impl,
    search_logs_impl,
    time_stats_impl,
    top_messages_impl,
)


def _write_log(path: Path) -> Path:
    path.write_text(
        "\n".join(
            [
                "2024-01-01 10:00:00 INFO start",
                "2024-01-01 10:05:00 ERROR failure X",
                "2024-01-02 09:00:00 ERROR failure X",
                "2024-01-02 09:30:00 WARN disk usage at 85%",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path


@pytest.mark.asyncio
async def test_count_lines_impl(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")
    assert await count_lines_impl(log_path=str(log)) == {"total_lines": 4}


@pytest.mark.asyncio
async def test_search_logs_impl_filters_and_limits(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await search_logs_impl(log_path=str(log), regex="fail.*x", limit=1)

    assert out["count"] == 2
    assert out["lines"] == [{"line_no": 2, "text": "2024-01-01 10:05:00 ERROR failure X"}]


@pytest.mark.asyncio
async def test_search_logs_impl_date_and_level(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await search_logs_impl(log_path=str(log), level="error", from_date="2024-01-02")

    assert out["count"] == 1
    assert out["lines"][0]["line_no"] == 3


@pytest.mark.asyncio
async def test_search_logs_impl_invalid_limit(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")
    with pytest.raises(ValueError):
        await search_logs_impl(log_path=str(log), limit=0)


@pytest.mark.asyncio
async def test_search_logs_impl_invalid_regex(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")
    with pytest.raises(ValueError):
        await search_logs_impl(log_path=str(log), regex="[unclosed")


@pytest.mark.asyncio
async def test_level_stats_impl(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await level_stats_impl(log_path=str(log))

    assert out["total"] == 4
    assert [(r["key"], r["count"]) for r in out["rows"]] == [("ERROR", 2), ("INFO", 1), ("WARN", 1)]
    assert out["rows"][0]["percentage"] == 50.0


@pytest.mark.asyncio
async def test_time_stats_impl(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await time_stats_impl(log_path=str(log), granularity="hourly", level="error")

    assert out["granularity"] == "hourly"
    assert [(r["key"], r["count"]) for r in out["rows"]] == [
        ("2024-01-01 10:00", 1),
        ("2024-01-02 09:00", 1),
    ]


@pytest.mark.asyncio
async def test_time_stats_impl_invalid_granularity(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="hourly"):
        await time_stats_impl(log_path=str(tmp_path / "missing.log"), granularity="weekly")


@pytest.mark.asyncio
async def test_top_messages_impl(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await top_messages_impl(log_path=str(log), n=1)

    assert out["limit"] == 1
    assert out["total"] == 4
    assert out["rows"] == [{"key": "failure X", "count": 2, "percentage": 50.0}]


@pytest.mark.asyncio
async def test_top_messages_impl_rejects_non_positive(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")
    with pytest.raises(ValueError):
        await top_messages_impl(log_path=str(log), n=0)


@pytest.mark.asyncio
async def test_log_summary_impl(tmp_path: Path) -> None:
    log = _write_log(tmp_path / "app.log")

    out = await log_summary_impl(log_path=str(log))

    assert out["total"] == 4
    assert out["first_date"] == "2024-01-01"
    assert out["last_date"] == "2024-01-02"
    assert out["error_rate"] == 50.0
    assert out["warning_rate"] == 25.0
    assert out["health"] == "high"


@pytest.mark.asyncio
async def test_log_summary_impl_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await log_summary_impl(log_path=str(tmp_path / "missing.log"))
