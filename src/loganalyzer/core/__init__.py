"""Filter-and-aggregation engine."""

from __future__ import annotations

from .aggregators import Aggregator, LevelCounter, MessageCounter, SummaryCollector, TimeBucketCounter
from .filters import FilterConfig, LineFilter
from .models import LEVEL_PRIORITY, LogLevel, MatchedLine, TimeGranularity
from .reports import LevelReport, SummaryReport, TimeReport, TopMessagesReport
from .tally import Tally

__all__ = [
    "LEVEL_PRIORITY",
    "Aggregator",
    "FilterConfig",
    "LevelCounter",
    "LevelReport",
    "LineFilter",
    "LogLevel",
    "MatchedLine",
    "MessageCounter",
    "SummaryCollector",
    "SummaryReport",
    "Tally",
    "TimeBucketCounter",
    "TimeGranularity",
    "TimeReport",
    "TopMessagesReport",
]
