"""
Presentation helpers: Devanagari digits, month/weekday names, date strings
and Nepali relative-time phrases.

These functions are conveniences for display. They degrade to a safe
default ("" or "हालै") on out-of-range or unparsable input instead of raising.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from .api import get_calendar
from .core.engine import BikramCalendar
from .core.errors import SambatError
from .core.time import TimestampLike, nepal_midnight, nepal_today, to_nepal_time, utc_now
from .core.types import EnglishDate, NepaliDate

NEPALI_MONTHS_EN = (
    "Baisakh", "Jestha", "Asar", "Shrawan", "Bhadra", "Ashwin",
    "Kartik", "Mangsir", "Poush", "Magh", "Falgun", "Chaitra",
)

NEPALI_MONTHS_NE = (
    "बैशाख", "जेठ", "असार", "साउन", "भदौ", "असोज",
    "कार्तिक", "मंसिर", "पौष", "माघ", "फागुन", "चैत्र",
)

ENGLISH_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# index 0 = Sunday
NEPALI_DAYS_EN = (
    "Aaitabar", "Sombar", "Mangalbar", "Budhabar", "Bihibar", "Shukrabar", "Shanibar",
)

NEPALI_DAYS_NE = (
    "आइतबार", "सोमबार", "मंगलबार", "बुधबार", "बिहिबार", "शुक्रबार", "शनिबार",
)

NEPALI_DIGITS = ("०", "१", "२", "३", "४", "५", "६", "७", "८", "९")

JUST_NOW = "हालै"
SECONDS_AGO = "सेकेण्ड अगाडि"
MINUTES_AGO = "मिनेट अगाडि"
HOURS_AGO = "घण्टा अगाडि"

_TO_NE = {str(i): d for i, d in enumerate(NEPALI_DIGITS)}
_FROM_NE = {d: str(i) for i, d in enumerate(NEPALI_DIGITS)}

GregorianLike = Union[date, EnglishDate]


def _is_ne(locale: str) -> bool:
    return locale == "ne"


def _as_date(d: GregorianLike) -> date:
    if isinstance(d, EnglishDate):
        return d.to_date()
    if isinstance(d, datetime):
        return d.date()
    return d


# ---------------------------------------------------------
# Digits and names
# ---------------------------------------------------------
def to_nepali_digits(value: Union[int, str]) -> str:
    """Map every ASCII digit to its Devanagari numeral; other characters pass through."""
    return "".join(_TO_NE.get(ch, ch) for ch in str(value))


def from_nepali_digits(text: str) -> str:
    """Inverse of to_nepali_digits."""
    return "".join(_FROM_NE.get(ch, ch) for ch in text)


def nepali_month_name(month: int, locale: str = "en") -> str:
    """BS month name (1-indexed); empty string when out of range."""
    if not 1 <= month <= 12:
        return ""
    months = NEPALI_MONTHS_NE if _is_ne(locale) else NEPALI_MONTHS_EN
    return months[month - 1]


def weekday_index(d: GregorianLike) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return (_as_date(d).weekday() + 1) % 7


def nepali_day_name(d: GregorianLike, locale: str = "en") -> str:
    days = NEPALI_DAYS_NE if _is_ne(locale) else NEPALI_DAYS_EN
    return days[weekday_index(d)]


# ---------------------------------------------------------
# Date strings
# ---------------------------------------------------------
def format_nepali_date(d: NepaliDate, locale: str = "en") -> str:
    """'Falgun 8, 2082' / 'फागुन 8, 2082'; empty string for a month outside 1..12."""
    name = nepali_month_name(d.month, locale)
    if not name:
        return ""
    return f"{name} {d.day}, {d.year}"


def format_english_date(d: GregorianLike) -> str:
    """'April 14, 2024'; empty string for an impossible EnglishDate."""
    try:
        g = _as_date(d)
    except ValueError:
        return ""
    return f"{ENGLISH_MONTHS[g.month - 1]} {g.day}, {g.year}"


def format_nepali_date_with_day(
    nd: NepaliDate,
    ad: Optional[date] = None,
    *,
    calendar: Optional[BikramCalendar] = None,
) -> str:
    """
    Devanagari date with weekday, e.g. '८ फागुन २०८२, शुक्रबार'.

    The weekday comes from the matching AD date, converted when not given.
    Empty string when the BS date cannot be converted.
    """
    month = nepali_month_name(nd.month, "ne")
    if not month:
        return ""
    if ad is None:
        try:
            cal = calendar or get_calendar()
            ad = cal.bs_to_ad(nd.year, nd.month, nd.day)
        except SambatError:
            return ""
    day = to_nepali_digits(nd.day)
    year = to_nepali_digits(nd.year)
    return f"{day} {month} {year}, {nepali_day_name(ad, 'ne')}"


def current_nepali_date_formatted(
    now: Optional[datetime] = None,
    *,
    calendar: Optional[BikramCalendar] = None,
) -> str:
    """Today's Nepal-local date with weekday, in Devanagari."""
    local = nepal_today(now)
    try:
        cal = calendar or get_calendar()
        nd = cal.ad_to_bs(local)
    except SambatError:
        return ""
    return format_nepali_date_with_day(nd, local)


def format_nepal_datetime(ts: Optional[TimestampLike]) -> str:
    """'YYYY-MM-DD HH:MM' in Nepal time; empty string for missing or unparsable input."""
    if ts is None or ts == "":
        return ""
    try:
        nep = to_nepal_time(ts)
    except (TypeError, ValueError, OverflowError):
        return ""
    return nep.strftime("%Y-%m-%d %H:%M")


# ---------------------------------------------------------
# Relative time
# ---------------------------------------------------------
def _shifted(ts: TimestampLike) -> datetime:
    nep = to_nepal_time(ts)
    if nep.tzinfo is None:
        nep = nep.replace(tzinfo=timezone.utc)
    return nep


def _bs_date_string(nep_day: date, cal: BikramCalendar) -> str:
    nd = cal.ad_to_bs(nep_day)
    return f"{to_nepali_digits(nd.day)} {nepali_month_name(nd.month, 'ne')} {to_nepali_digits(nd.year)}"


def relative_time_nepali(
    ts: Optional[TimestampLike],
    *,
    now: Optional[datetime] = None,
    calendar: Optional[BikramCalendar] = None,
) -> str:
    """
    Nepali relative phrase such as '१५ मिनेट अगाडि'.

    Anything before today's Nepal-local midnight is shown as an absolute
    BS date ('७ फागुन २०८२') rather than 'N hours ago'.
    """
    if ts is None:
        return JUST_NOW
    try:
        then = _shifted(ts)
        now_nep = _shifted(now if now is not None else utc_now())
    except (TypeError, ValueError, OverflowError):
        return JUST_NOW

    cal = calendar or get_calendar()
    try:
        if then < nepal_midnight(now_nep):
            return _bs_date_string(then.date(), cal)

        diff = now_nep - then
        if diff < timedelta(seconds=1):
            return JUST_NOW

        sec = int(diff.total_seconds())
        mins = sec // 60
        hrs = mins // 60
        if sec < 60:
            return f"{to_nepali_digits(sec)} {SECONDS_AGO}"
        if mins < 60:
            return f"{to_nepali_digits(mins)} {MINUTES_AGO}"
        if hrs < 24:
            return f"{to_nepali_digits(hrs)} {HOURS_AGO}"
        return _bs_date_string(then.date(), cal)
    except SambatError:
        return JUST_NOW
