"""Single-pass log file analyzer: filters, level/time/message statistics and summaries."""

from __future__ import annotations

__version__ = "1.0.0"
