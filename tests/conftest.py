from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_LINES = [
    "2024-01-01 10:00:00 INFO start",
    "2024-01-01 10:05:00 ERROR failure X",
    "2024-01-02 09:00:00 ERROR failure X",
]


@pytest.fixture
def write_sample_log() -> Callable[[Path], Path]:
    def _write(path: Path) -> Path:
        path.write_text("\n".join(SAMPLE_LINES) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_lines() -> Callable[[Path, list[str]], Path]:
    def _write(path: Path, lines: list[str]) -> Path:
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mixed_lines() -> list[str]:
    return [
        "2024-03-01 08:00:00 INFO service started",
        "2024-03-01 08:10:00 WARN slow response route=/api",
        "2024-03-01 09:00:00 ERROR upstream timeout",
        "    at com.example.Handler(Handler.java:42)",
        "2024-03-02 10:00:00 DEBUG cache warmed",
        "2024-03-02 10:30:00 ERROR upstream timeout",
        "2024-03-02 11:00:00 INFO request served",
        "2024-03-03 12:00:00 FATAL out of memory",
        "ERROR x",
    ]
