"""Narrow raw contribution days down to the dates a user was active."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Set

from dateutil.relativedelta import relativedelta

from .models import ContributionDay


def filter_to_last_month(
    days: Iterable[ContributionDay], today: Optional[date] = None
) -> List[ContributionDay]:
    """Keep days strictly after the same calendar day one month ago."""

    cutoff = (today or date.today()) - relativedelta(months=1)
    return [day for day in days if date.fromisoformat(day.date) > cutoff]


def to_active_date_set(days: Iterable[ContributionDay]) -> Set[str]:
    return {day.date for day in days if day.count > 0}


__all__ = ["filter_to_last_month", "to_active_date_set"]
