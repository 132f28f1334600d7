"""CSV export of report snapshots."""

from __future__ import annotations

import logging
from pathlib import Path

from .reports import LevelReport, TimeReport, TopMessagesReport

logger = logging.getLogger(__name__)


class CsvExporter:
    """Write one report per call to ``path``, replacing any existing file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _write(self, header: str, rows: list[str]) -> Path:
        with self.path.open("w", encoding="utf-8", newline="") as f:
            f.write(header + "\n")
            for row in rows:
                f.write(row + "\n")
        logger.info("Wrote %d rows to %s", len(rows), self.path)
        return self.path

    def export_level_stats(self, report: LevelReport) -> Path:
        """Format: ``Level,Count,Percentage``."""
        rows = [f"{r.key},{r.count},{r.percentage:.2f}%" for r in report.rows]
        return self._write("Level,Count,Percentage", rows)

    def export_time_stats(self, report: TimeReport) -> Path:
        """Format: ``<Date|Hour>,Count``, periods ascending."""
        rows = [f"{r.key},{r.count}" for r in sorted(report.rows, key=lambda r: r.key)]
        return self._write(f"{report.granularity.label},Count", rows)

    def export_top_messages(self, report: TopMessagesReport) -> Path:
        """Format: ``Message,Count,Percentage``; commas in messages become semicolons."""
        rows = []
        for r in report.rows:
            message = r.key.replace(",", ";")
            rows.append(f'"{message}",{r.count},{r.percentage:.2f}%')
        return self._write("Message,Count,Percentage", rows)
