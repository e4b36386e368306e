from __future__ import annotations

from calendar import isleap, monthrange
from datetime import date, datetime
from typing import Optional

from ..core.constants import MIN_REAL_PUNCH_YEAR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> tuple[date, date]:
    """Parse YYYY-MM into (first day, last day) of that month."""
    first = datetime.strptime(value, "%Y-%m").date()
    last = first.replace(day=monthrange(first.year, first.month)[1])
    return first, last


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def same_day_in_year(value: date, year: int) -> date:
    """Move ``value`` into ``year``; Feb 29 becomes Feb 28 in non-leap years."""
    if value.month == 2 and value.day == 29 and not isleap(year):
        return date(year, 2, 28)
    return value.replace(year=year)


def is_real_punch(value: Optional[datetime]) -> bool:
    return value is not None and value.year > MIN_REAL_PUNCH_YEAR


def format_or_empty(value: Optional[datetime], fmt: str) -> str:
    return value.strftime(fmt) if value is not None else ""
