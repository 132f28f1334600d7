"""Accumulators fed one filtered line at a time."""

from __future__ import annotations

from typing import Protocol

from .extractors import extract_level, extract_message, extract_time_bucket
from .models import LogLevel, TimeGranularity
from .reports import (
    SUMMARY_TOP_DATES,
    SUMMARY_TOP_MESSAGES,
    LevelReport,
    SummaryReport,
    TimeReport,
    TopMessagesReport,
    classify_error_rate,
    percentage,
    rows_from,
)
from .tally import Tally


class Aggregator(Protocol):
    """Aggregator interface: count a line if a key can be derived from it."""

    def feed(self, line: str) -> bool:
        """Return True when the line contributed to the aggregate."""
        ...


class LevelCounter:
    def __init__(self) -> None:
        self.tally = Tally()

    def feed(self, line: str) -> bool:
        level = extract_level(line)
        if level is None:
            return False
        self.tally.increment(level.value)
        return True

    def report(self) -> LevelReport:
        return LevelReport.from_tally(self.tally)


class TimeBucketCounter:
    def __init__(self, granularity: TimeGranularity | str) -> None:
        self.granularity = TimeGranularity.parse(granularity)
        self.tally = Tally()

    def feed(self, line: str) -> bool:
        bucket = extract_time_bucket(line, self.granularity)
        if bucket is None:
            return False
        self.tally.increment(bucket)
        return True

    def report(self) -> TimeReport:
        return TimeReport.from_tally(self.tally, self.granularity)


class MessageCounter:
    def __init__(self) -> None:
        self.tally = Tally()

    def feed(self, line: str) -> bool:
        message = extract_message(line)
        if message is None:
            return False
        self.tally.increment(message)
        return True

    def report(self, limit: int) -> TopMessagesReport:
        return TopMessagesReport.from_tally(self.tally, limit)


class SummaryCollector:
    """Tracks levels, dates and messages at once.

    Only lines with a detectable level are counted. Dates are the leading
    ``YYYY-MM-DD``; zero padding makes string order chronological, so
    min/max are plain string comparisons.
    """

    def __init__(self) -> None:
        self.levels = Tally()
        self.dates = Tally()
        self.messages = Tally()
        self.total = 0
        self.first_date: str | None = None
        self.last_date: str | None = None

    def feed(self, line: str) -> bool:
        level = extract_level(line)
        if level is None:
            return False

        self.total += 1
        self.levels.increment(level.value)
        # A detected level always yields a message (possibly empty).
        self.messages.increment(extract_message(line) or "")

        day = extract_time_bucket(line, TimeGranularity.DAILY)
        if day is not None:
            self.dates.increment(day)
            if self.first_date is None or day < self.first_date:
                self.first_date = day
            if self.last_date is None or day > self.last_date:
                self.last_date = day
        return True

    def report(self) -> SummaryReport:
        error_rate = percentage(self.levels[LogLevel.ERROR.value], self.total)
        warning_rate = percentage(self.levels[LogLevel.WARN.value], self.total)
        return SummaryReport(
            total=self.total,
            first_date=self.first_date,
            last_date=self.last_date,
            unique_dates=len(self.dates),
            unique_messages=len(self.messages),
            levels=rows_from(self.levels.ranked(), self.total),
            busiest_dates=rows_from(self.dates.ranked(SUMMARY_TOP_DATES), self.total),
            top_messages=rows_from(self.messages.ranked(SUMMARY_TOP_MESSAGES), self.total),
            error_rate=error_rate,
            warning_rate=warning_rate,
            health=classify_error_rate(error_rate),
        )
