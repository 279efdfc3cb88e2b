from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

# Nepal Standard Time, UTC+05:45, no daylight saving.
NEPAL_OFFSET = timedelta(hours=5, minutes=45)

TimestampLike = Union[datetime, date, str]


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime (the only clock read in the package)."""
    return datetime.now(timezone.utc)


def parse_timestamp(ts: TimestampLike) -> datetime:
    """
    Coerce an ISO-8601 string, date or datetime into a datetime.

    A trailing 'Z' is accepted for UTC. Plain dates become midnight UTC.
    Naive datetimes are returned naive and are read as UTC by callers.
    """
    if isinstance(ts, str):
        s = ts.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        return datetime.fromisoformat(s)
    if isinstance(ts, datetime):
        return ts
    if isinstance(ts, date):
        return datetime(ts.year, ts.month, ts.day, tzinfo=timezone.utc)
    raise TypeError(f"Unsupported timestamp type: {type(ts).__name__}")


def to_nepal_time(ts: TimestampLike) -> datetime:
    """
    Shift an instant by +05:45 so its calendar fields read as Nepal wall-clock time.

    Aware inputs come back UTC-labelled; naive inputs (taken as UTC) come back naive.
    """
    dt = parse_timestamp(ts)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt + NEPAL_OFFSET


def from_nepal_time(shifted: TimestampLike) -> datetime:
    """Inverse of to_nepal_time."""
    dt = parse_timestamp(shifted)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt - NEPAL_OFFSET


def nepal_today(now: Optional[datetime] = None) -> date:
    """Calendar day in Nepal at `now` (default: the current instant)."""
    if now is None:
        now = utc_now()
    return to_nepal_time(now).date()


def nepal_midnight(shifted: datetime) -> datetime:
    """Start of the Nepal-local day containing an already shifted instant."""
    return shifted.replace(hour=0, minute=0, second=0, microsecond=0)
