from __future__ import annotations
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from ..core.errors import DataSourceError

MIN_MONTH_DAYS = 29
MAX_MONTH_DAYS = 32

YearKey = Union[int, str]


def check_month_lengths(year: int, months: Sequence[int]) -> Tuple[int, ...]:
    """Validate one table row and return it as an immutable tuple."""
    try:
        row = tuple(int(m) for m in months)
    except (TypeError, ValueError) as e:
        raise DataSourceError(f"BS year {year}: month lengths must be 12 integers ({e})") from e
    if len(row) != 12:
        raise DataSourceError(f"BS year {year}: expected 12 month lengths, got {len(row)}")
    for i, m in enumerate(row, start=1):
        if not MIN_MONTH_DAYS <= m <= MAX_MONTH_DAYS:
            raise DataSourceError(
                f"BS year {year} month {i}: length {m} outside {MIN_MONTH_DAYS}..{MAX_MONTH_DAYS}"
            )
    return row


class InlineCalendarDataSource:
    """
    Data source backed by an in-memory mapping {year: [12 month lengths]}.

    Keys may be ints or numeric strings (as they come out of JSON). The
    supported range defaults to the smallest and largest key.
    """

    def __init__(
        self,
        years: Mapping[YearKey, Sequence[int]],
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ):
        table: Dict[int, Tuple[int, ...]] = {}
        for key, months in years.items():
            try:
                y = int(key)
            except (TypeError, ValueError) as e:
                raise DataSourceError(f"Year key {key!r} is not an integer") from e
            table[y] = check_month_lengths(y, months)

        if start_year is None or end_year is None:
            if not table:
                raise DataSourceError("Empty table needs an explicit start_year and end_year")
            start_year = min(table) if start_year is None else start_year
            end_year = max(table) if end_year is None else end_year
        if end_year < start_year:
            raise DataSourceError(f"Supported range is empty: {start_year}..{end_year}")

        self._years = table
        self._start = int(start_year)
        self._end = int(end_year)

    @property
    def supported_start_year(self) -> int:
        return self._start

    @property
    def supported_end_year(self) -> int:
        return self._end

    def year_data(self, year: int) -> Optional[Tuple[int, ...]]:
        return self._years.get(year)

    def __len__(self) -> int:
        return len(self._years)

    def __iter__(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        """Iterate over (year, month_lengths) pairs in year order."""
        return iter(sorted(self._years.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._start}..{self._end}, {len(self._years)} years)"
