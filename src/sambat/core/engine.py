"""
sambat.core.engine
------------------
The data-source boundary and the AD <-> BS conversion engine.

All arithmetic is a whole-day offset from the epoch pair
BS 2000-01-01 == AD 1943-04-14. Month lengths come from the data source;
nothing here knows how the table was obtained.
"""

from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol, Sequence, Tuple

from .errors import InvalidDateError, UnknownYearError
from .time import nepal_today
from .types import AD_EPOCH, BS_EPOCH, NepaliDate


class CalendarDataSource(Protocol):
    """
    Supplies per-year BS month lengths.

    year_data() returns 12 lengths (Baisakh first) or None when the year is
    not covered. Must be free of side effects and safe for concurrent reads.
    """
    @property
    def supported_start_year(self) -> int: ...

    @property
    def supported_end_year(self) -> int: ...

    def year_data(self, year: int) -> Optional[Sequence[int]]: ...


class BikramCalendar:
    """Conversion engine bound to one data source for its whole lifetime."""

    def __init__(self, source: CalendarDataSource):
        self._source = source

    @property
    def source(self) -> CalendarDataSource:
        return self._source

    @property
    def start_year(self) -> int:
        return self._source.supported_start_year

    @property
    def end_year(self) -> int:
        return self._source.supported_end_year

    # ---------------------------------------------------------
    # Table lookups
    # ---------------------------------------------------------
    def _months(self, year: int) -> Sequence[int]:
        months = self._source.year_data(year)
        if months is None:
            raise UnknownYearError(year)
        return months

    def days_in_month(self, year: int, month: int) -> int:
        months = self._months(year)
        if not 1 <= month <= 12:
            raise InvalidDateError(f"Month must be in 1..12, got {month}")
        return months[month - 1]

    def days_in_year(self, year: int) -> int:
        return sum(self._months(year))

    def is_valid_date(self, year: int, month: int, day: int) -> bool:
        if not 1 <= month <= 12 or day < 1:
            return False
        months = self._source.year_data(year)
        if months is None:
            return False
        return day <= months[month - 1]

    def available_years(self) -> List[int]:
        return [
            y for y in range(self.start_year, self.end_year + 1)
            if self._source.year_data(y) is not None
        ]

    def available_ad_years(self) -> List[int]:
        """Gregorian years touched by the covered BS range."""
        years = self.available_years()
        if not years:
            return []
        first = self.bs_to_ad(years[0], 1, 1)
        last_year = years[-1]
        last = self.bs_to_ad(last_year, 12, self.days_in_month(last_year, 12))
        return list(range(first.year, last.year + 1))

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------
    def ad_to_bs(self, d: date) -> NepaliDate:
        """
        Gregorian day -> BS day. Time of day is ignored.

        Dates before AD 1943-04-14 are rejected; dates past the covered
        table raise UnknownYearError for the first missing year.
        """
        if isinstance(d, datetime):
            d = d.date()
        remaining = (d - AD_EPOCH).days
        if remaining < 0:
            raise InvalidDateError(
                f"{d.isoformat()} is before the BS epoch ({AD_EPOCH.isoformat()})"
            )

        year = BS_EPOCH.year
        while True:
            diy = self.days_in_year(year)
            if remaining < diy:
                break
            remaining -= diy
            year += 1

        month = 1
        for dim in self._months(year):
            if remaining < dim:
                break
            remaining -= dim
            month += 1

        return NepaliDate(year, month, remaining + 1)

    def bs_to_ad(self, year: int, month: int, day: int) -> date:
        """BS day -> Gregorian day. Raises InvalidDateError for impossible dates."""
        if year < BS_EPOCH.year or not self.is_valid_date(year, month, day):
            raise InvalidDateError(f"Invalid BS date: {year}/{month}/{day}")

        total = sum(self.days_in_year(y) for y in range(BS_EPOCH.year, year))
        total += sum(self._months(year)[: month - 1])
        total += day - 1
        return AD_EPOCH + timedelta(days=total)

    def to_ad(self, nd: NepaliDate) -> date:
        return self.bs_to_ad(nd.year, nd.month, nd.day)

    # ---------------------------------------------------------
    # Derived helpers
    # ---------------------------------------------------------
    def today(self, now: Optional[datetime] = None) -> NepaliDate:
        """BS date of the current Nepal-local day, independent of host timezone."""
        return self.ad_to_bs(nepal_today(now))

    def month_days(self, year: int, month: int) -> List[Tuple[NepaliDate, date]]:
        """Every day of a BS month paired with its Gregorian date."""
        n = self.days_in_month(year, month)
        first = self.bs_to_ad(year, month, 1)
        return [(NepaliDate(year, month, i + 1), first + timedelta(days=i)) for i in range(n)]
