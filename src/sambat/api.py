"""
Process-wide convenience API.

One BikramCalendar is active at a time. The package installs the embedded
table on import; initialize() swaps in another data source. Swapping while
other threads are converting is not supported.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from .core.engine import BikramCalendar, CalendarDataSource
from .core.errors import NotInitializedError
from .core.types import NepaliDate

_calendar: Optional[BikramCalendar] = None


def initialize(source: CalendarDataSource) -> BikramCalendar:
    """Install `source` as the active data source and return the new calendar."""
    global _calendar
    _calendar = BikramCalendar(source)
    return _calendar


def set_calendar(cal: BikramCalendar) -> None:
    global _calendar
    _calendar = cal


def get_calendar() -> BikramCalendar:
    if _calendar is None:
        raise NotInitializedError("Calendar not initialized. Call sambat.initialize(source) first.")
    return _calendar


def convert_ad_to_bs(d: date) -> NepaliDate:
    return get_calendar().ad_to_bs(d)


def convert_bs_to_ad(year: int, month: int, day: int) -> date:
    return get_calendar().bs_to_ad(year, month, day)


def is_valid_bs_date(year: int, month: int, day: int) -> bool:
    return get_calendar().is_valid_date(year, month, day)


def days_in_bs_month(year: int, month: int) -> int:
    return get_calendar().days_in_month(year, month)


def days_in_bs_year(year: int) -> int:
    return get_calendar().days_in_year(year)


def available_bs_years() -> List[int]:
    return get_calendar().available_years()


def available_ad_years() -> List[int]:
    return get_calendar().available_ad_years()


def current_nepali_date(now: Optional[datetime] = None) -> NepaliDate:
    """Today's BS date in Nepal, whatever the host timezone."""
    return get_calendar().today(now)
