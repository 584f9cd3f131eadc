from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import DEFAULT_PEAK_DAYS, DEFAULT_REPORT_WORKERS, DEFAULT_TREND_THRESHOLD_PERCENT


@dataclass(frozen=True)
class EngineSettings:
    """Tunables for report generation, read from the settings module."""

    workers: int = DEFAULT_REPORT_WORKERS
    trend_threshold_percent: float = DEFAULT_TREND_THRESHOLD_PERCENT
    peak_days: int = DEFAULT_PEAK_DAYS

    @classmethod
    def from_module(cls, settings: Any) -> "EngineSettings":
        return cls(
            workers=max(1, int(getattr(settings, "REPORT_WORKERS", DEFAULT_REPORT_WORKERS))),
            trend_threshold_percent=float(getattr(settings, "TREND_THRESHOLD_PERCENT", DEFAULT_TREND_THRESHOLD_PERCENT)),
            peak_days=max(0, int(getattr(settings, "PEAK_DAYS_LIMIT", DEFAULT_PEAK_DAYS))),
        )
