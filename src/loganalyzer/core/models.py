"""Core data models for log analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Severity keywords detected in raw lines.

    Declaration order is the detection priority: when a line contains several
    keywords, the first member listed here wins.
    """

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"
    TRACE = "TRACE"
    FATAL = "FATAL"


LEVEL_PRIORITY: tuple[LogLevel, ...] = tuple(LogLevel)


class TimeGranularity(str, Enum):
    """Bucket width for time-based statistics."""

    DAILY = "daily"
    HOURLY = "hourly"

    @property
    def label(self) -> str:
        return "Date" if self is TimeGranularity.DAILY else "Hour"

    @classmethod
    def parse(cls, value: str | TimeGranularity) -> TimeGranularity:
        """Return the granularity for ``value`` or raise ValueError."""
        if isinstance(value, TimeGranularity):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(
                f"Invalid time-stats type '{value}'. Use 'hourly' or 'daily'."
            ) from e


@dataclass(frozen=True, slots=True)
class MatchedLine:
    """A line that passed every configured filter."""

    line_no: int
    text: str
