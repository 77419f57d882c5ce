"""Metrics tracking for scrape submissions."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class SubmissionMetrics:
    """Metrics for a single resolved submission."""

    search_term: str
    timestamp: datetime
    success: bool
    status_code: int | None = None
    elapsed_ms: float | None = None
    record_count: int = 0
    error_kind: str | None = None
    superseded: bool = False


@dataclass
class ServerMetrics:
    """Global submission metrics."""

    start_time: datetime = field(default_factory=datetime.now)
    total_submissions: int = 0
    successful_submissions: int = 0
    failed_submissions: int = 0
    superseded_submissions: int = 0
    total_records: int = 0
    recent_submissions: deque[SubmissionMetrics] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[SubmissionMetrics] = field(default_factory=lambda: deque(maxlen=20))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_submission(
        self,
        search_term: str,
        success: bool,
        status_code: int | None = None,
        elapsed_ms: float | None = None,
        record_count: int = 0,
        error_kind: str | None = None,
        superseded: bool = False,
    ) -> None:
        """Record a resolved submission in the metrics.

        Args:
            search_term: The hashtag that was scraped
            success: Whether the submission succeeded
            status_code: HTTP status code if a response was obtained
            elapsed_ms: Time taken in milliseconds
            record_count: Number of records returned
            error_kind: Classified error kind if failed
            superseded: Whether a newer submission replaced this one before it resolved
        """
        metrics = SubmissionMetrics(
            search_term=search_term,
            timestamp=datetime.now(),
            success=success,
            status_code=status_code,
            elapsed_ms=elapsed_ms,
            record_count=record_count,
            error_kind=error_kind,
            superseded=superseded,
        )

        with self._lock:
            self.total_submissions += 1
            if success:
                self.successful_submissions += 1
                self.total_records += record_count
            else:
                self.failed_submissions += 1
                self.recent_errors.append(metrics)
            if superseded:
                self.superseded_submissions += 1
            self.recent_submissions.append(metrics)

    def get_uptime_seconds(self) -> float:
        """Get server uptime in seconds."""
        return (datetime.now() - self.start_time).total_seconds()

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_submissions == 0:
            return 0.0
        return (self.successful_submissions / self.total_submissions) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        uptime_seconds = self.get_uptime_seconds()

        with self._lock:
            recent = list(self.recent_submissions)[-10:][::-1]  # newest first
            errors = list(self.recent_errors)[-10:][::-1]

            return {
                "status": "healthy",
                "uptime": {
                    "seconds": uptime_seconds,
                    "formatted": self._format_uptime(uptime_seconds),
                },
                "start_time": self.start_time.isoformat(),
                "submissions": {
                    "total": self.total_submissions,
                    "successful": self.successful_submissions,
                    "failed": self.failed_submissions,
                    "superseded": self.superseded_submissions,
                    "success_rate": round(self.get_success_rate(), 2),
                },
                "records": {
                    "total": self.total_records,
                    "average_per_success": (
                        round(self.total_records / self.successful_submissions, 2)
                        if self.successful_submissions > 0
                        else 0.0
                    ),
                },
                "recent_submissions": [
                    {
                        "search_term": s.search_term,
                        "timestamp": s.timestamp.isoformat(),
                        "success": s.success,
                        "status_code": s.status_code,
                        "elapsed_ms": s.elapsed_ms,
                        "record_count": s.record_count,
                        "error_kind": s.error_kind,
                        "superseded": s.superseded,
                    }
                    for s in recent
                ],
                "recent_errors": [
                    {
                        "search_term": s.search_term,
                        "timestamp": s.timestamp.isoformat(),
                        "status_code": s.status_code,
                        "error_kind": s.error_kind,
                    }
                    for s in errors
                ],
            }

    @staticmethod
    def _format_uptime(seconds: float) -> str:
        """Format uptime in human-readable format."""
        if seconds < 60:
            return f"{int(seconds)}s"
        elif seconds < 3600:
            minutes = int(seconds / 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        elif seconds < 86400:
            hours = int(seconds / 3600)
            minutes = int((seconds % 3600) / 60)
            return f"{hours}h {minutes}m"
        else:
            days = int(seconds / 86400)
            hours = int((seconds % 86400) / 3600)
            return f"{days}d {hours}h"


# Global metrics instance
_metrics = ServerMetrics()


def get_metrics() -> ServerMetrics:
    """Get the global metrics instance."""
    return _metrics


def record_submission(
    search_term: str,
    success: bool,
    status_code: int | None = None,
    elapsed_ms: float | None = None,
    record_count: int = 0,
    error_kind: str | None = None,
    superseded: bool = False,
) -> None:
    """Record a resolved submission in the global metrics."""
    _metrics.record_submission(
        search_term,
        success,
        status_code=status_code,
        elapsed_ms=elapsed_ms,
        record_count=record_count,
        error_kind=error_kind,
        superseded=superseded,
    )
