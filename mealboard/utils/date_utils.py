"""
Calendar helpers for monthly menu filters and batch ingestion.
"""

import calendar
from datetime import date, datetime, timezone
from typing import Tuple


def validate_year_month(year: int, month: int) -> Tuple[int, int]:
    """Coerce and check a (year, month) pair."""
    year, month = int(year), int(month)
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if not 1900 <= year <= 9999:
        raise ValueError(f"Year out of range: {year}")
    return year, month


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of the month."""
    year, month = validate_year_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def build_menu_date(year: int, month: int, day: int) -> date:
    """Derive the calendar date of a batch entry; raises ValueError when impossible."""
    year, month = validate_year_month(year, month)
    return date(year, month, int(day))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
