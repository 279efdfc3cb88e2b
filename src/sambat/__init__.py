"""sambat public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Install the embedded calendar table on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    initialize,
    get_calendar,
    convert_ad_to_bs,
    convert_bs_to_ad,
    is_valid_bs_date,
    days_in_bs_month,
    days_in_bs_year,
    available_bs_years,
    available_ad_years,
    current_nepali_date,
)
from .core.engine import BikramCalendar, CalendarDataSource
from .core.errors import (
    SambatError,
    NotInitializedError,
    UnknownYearError,
    InvalidDateError,
    MalformedInputError,
    DataSourceError,
)
from .core.time import NEPAL_OFFSET, to_nepal_time, from_nepal_time, nepal_today
from .core.types import NepaliDate, EnglishDate
from .formatting import (
    to_nepali_digits,
    from_nepali_digits,
    format_nepali_date,
    format_english_date,
    nepali_month_name,
    nepali_day_name,
    format_nepali_date_with_day,
    current_nepali_date_formatted,
    format_nepal_datetime,
    relative_time_nepali,
)
from .sources.inline import InlineCalendarDataSource
from .sources.json_source import JsonCalendarDataSource

__all__ = [
    "initialize",
    "get_calendar",
    "convert_ad_to_bs",
    "convert_bs_to_ad",
    "is_valid_bs_date",
    "days_in_bs_month",
    "days_in_bs_year",
    "available_bs_years",
    "available_ad_years",
    "current_nepali_date",
    "current_nepali_date_formatted",
    "BikramCalendar",
    "CalendarDataSource",
    "InlineCalendarDataSource",
    "JsonCalendarDataSource",
    "NepaliDate",
    "EnglishDate",
    "SambatError",
    "NotInitializedError",
    "UnknownYearError",
    "InvalidDateError",
    "MalformedInputError",
    "DataSourceError",
    "NEPAL_OFFSET",
    "to_nepal_time",
    "from_nepal_time",
    "nepal_today",
    "to_nepali_digits",
    "from_nepali_digits",
    "format_nepali_date",
    "format_english_date",
    "nepali_month_name",
    "nepali_day_name",
    "format_nepali_date_with_day",
    "format_nepal_datetime",
    "relative_time_nepali",
]
