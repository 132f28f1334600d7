"""Immutable report snapshots built from aggregate state.

Reports carry rows already ordered for presentation and percentages already
computed, so renderers and exporters only format.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .models import TimeGranularity
from .tally import Tally

SUMMARY_TOP_DATES = 5
SUMMARY_TOP_MESSAGES = 5
HIGH_ERROR_RATE = 20.0
ELEVATED_ERROR_RATE = 10.0


def percentage(count: int, total: int) -> float:
    """Return ``count / total * 100``; zero when nothing was counted."""
    if total <= 0:
        return 0.0
    return count * 100.0 / total


class CountRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    count: int
    percentage: float


def rows_from(pairs: list[tuple[str, int]], total: int) -> list[CountRow]:
    return [CountRow(key=k, count=c, percentage=percentage(c, total)) for k, c in pairs]


class LevelReport(BaseModel):
    """Level distribution, by count descending."""

    model_config = ConfigDict(frozen=True)

    rows: list[CountRow] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_tally(cls, tally: Tally) -> LevelReport:
        return cls(rows=rows_from(tally.ranked(), tally.total), total=tally.total)


class TimeReport(BaseModel):
    """Counts per time bucket, by bucket ascending."""

    model_config = ConfigDict(frozen=True)

    granularity: TimeGranularity
    rows: list[CountRow] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_tally(cls, tally: Tally, granularity: TimeGranularity) -> TimeReport:
        return cls(
            granularity=granularity,
            rows=rows_from(tally.by_key(), tally.total),
            total=tally.total,
        )


class TopMessagesReport(BaseModel):
    """The N most frequent messages; ``total`` is every counted line, not just the shown rows."""

    model_config = ConfigDict(frozen=True)

    limit: int
    rows: list[CountRow] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_tally(cls, tally: Tally, limit: int) -> TopMessagesReport:
        if limit < 1:
            raise ValueError("Top N must be a positive integer")
        return cls(limit=limit, rows=rows_from(tally.ranked(limit), tally.total), total=tally.total)


class HealthStatus(str, Enum):
    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGH = "high"


def classify_error_rate(error_rate: float) -> HealthStatus:
    if error_rate > HIGH_ERROR_RATE:
        return HealthStatus.HIGH
    if error_rate > ELEVATED_ERROR_RATE:
        return HealthStatus.ELEVATED
    return HealthStatus.NORMAL


class SummaryReport(BaseModel):
    """Composite overview of a filtered log file."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    first_date: str | None = None
    last_date: str | None = None
    unique_dates: int = 0
    unique_messages: int = 0
    levels: list[CountRow] = Field(default_factory=list)
    busiest_dates: list[CountRow] = Field(default_factory=list)
    top_messages: list[CountRow] = Field(default_factory=list)
    error_rate: float = 0.0
    warning_rate: float = 0.0
    health: HealthStatus = HealthStatus.NORMAL
