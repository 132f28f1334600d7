"""Positional and keyword heuristics that derive keys from raw log lines.

These are not a structured parser. They assume lines shaped like
``YYYY-MM-DD HH:MM:SS LEVEL message`` and degrade to ``None`` when a line
does not carry the expected piece.
"""

from __future__ import annotations

import re
from datetime import date

from .models import LEVEL_PRIORITY, LogLevel, TimeGranularity

DATE_WIDTH = 10
HOUR_WIDTH = 13

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _find_level(line: str) -> tuple[LogLevel, int] | None:
    # Priority order decides, not position in the line.
    for level in LEVEL_PRIORITY:
        idx = line.find(level.value)
        if idx >= 0:
            return level, idx
    return None


def extract_level(line: str) -> LogLevel | None:
    """Return the highest-priority level keyword present anywhere in the line."""
    found = _find_level(line)
    return found[0] if found else None


def extract_message(line: str) -> str | None:
    """Return the stripped text after the detected level keyword.

    ``"2024-01-01 10:05:00 ERROR failure X"`` gives ``"failure X"``. Lines
    without a level keyword have no message.
    """
    found = _find_level(line)
    if found is None:
        return None
    level, idx = found
    return line[idx + len(level.value) :].strip()


def extract_time_bucket(line: str, granularity: TimeGranularity | str) -> str | None:
    """Return the daily (``YYYY-MM-DD``) or hourly (``YYYY-MM-DD HH:00``) bucket."""
    granularity = TimeGranularity.parse(granularity)
    if granularity is TimeGranularity.DAILY:
        if len(line) < DATE_WIDTH:
            return None
        return line[:DATE_WIDTH]
    if len(line) < HOUR_WIDTH:
        return None
    return line[:HOUR_WIDTH] + ":00"


def extract_date(line: str) -> date | None:
    """Parse the leading ``YYYY-MM-DD`` of a line as a calendar date."""
    if len(line) < DATE_WIDTH:
        return None
    head = line[:DATE_WIDTH]
    if not ISO_DATE_RE.fullmatch(head):
        return None
    try:
        return date.fromisoformat(head)
    except ValueError:
        return None
