"""
Progress reporting for long-running ingestion.

The total row count of a streamed file is not known up front, so progress is
reported as counts and throughput rather than a percentage.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ProgressReporter:
    """Counts processed rows and logs throughput every `report_interval` rows."""

    report_interval: int = 10000
    description: str = "Ingesting"

    # Internal state
    processed: int = 0
    committed: int = 0
    started_at: float = field(default_factory=time.monotonic)
    last_report_at: float = field(default_factory=time.monotonic)
    last_report_count: int = 0

    def update(self, count: int = 1) -> None:
        """Record rows that left the mapper (written or filtered)."""
        self.processed += count

        if self.processed - self.last_report_count >= self.report_interval:
            self._report()

    def record_commit(self, count: int) -> None:
        self.committed += count

    def finish(self) -> None:
        elapsed = time.monotonic() - self.started_at
        rate = self.processed / elapsed if elapsed > 0 else 0
        logger.info(
            "%s finished: %d rows processed, %d committed in %s (%.0f rows/sec)",
            self.description,
            self.processed,
            self.committed,
            _format_duration(elapsed),
            rate,
        )

    def _report(self) -> None:
        now = time.monotonic()
        interval_elapsed = now - self.last_report_at
        interval_rate = (
            (self.processed - self.last_report_count) / interval_elapsed
            if interval_elapsed > 0
            else 0
        )

        logger.info(
            "%s: %d rows processed, %d committed | Rate: %.0f/sec | Elapsed: %s",
            self.description,
            self.processed,
            self.committed,
            interval_rate,
            _format_duration(now - self.started_at),
        )

        self.last_report_at = now
        self.last_report_count = self.processed


def _format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.0f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    return f"{seconds / 3600:.1f}h"
