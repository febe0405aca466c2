"""Trailing date window shared by the filter and the table columns."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

WINDOW_DAYS = 30


def compute_window(today: Optional[date] = None, days: int = WINDOW_DAYS) -> List[str]:
    """Return ``days`` consecutive ISO dates ending at ``today``, oldest first."""

    end = today or date.today()
    return [(end - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def format_for_display(window: Iterable[str]) -> List[str]:
    return [datetime.strptime(day, "%Y-%m-%d").strftime("%m/%d/%Y") for day in window]


__all__ = ["WINDOW_DAYS", "compute_window", "format_for_display"]
