"""
sambat.sources.json_source

Reference-table loader for the JSON exchange format:

    {
      "version": "...",
      "supportedRange": {"start": 2000, "end": 2090},
      "referencePoint": {"bsYear": 2000, "bsMonth": 1, "bsDay": 1,
                         "adYear": 1943, "adMonth": 4, "adDay": 14},
      "years": {"2000": [30, 32, ...], ...}
    }

Loading happens once, in the constructor helpers; the resulting source is
immutable and is consumed by BikramCalendar like any other data source.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.request
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..core.errors import DataSourceError
from ..core.types import EPOCH, ReferencePoint
from .builtin import default_source
from .inline import InlineCalendarDataSource, YearKey

logger = logging.getLogger(__name__)

ENV_VAR = "SAMBAT_CALENDAR_DATA"
CACHE_FILENAME = "calendar.json"

PathLike = Union[str, "os.PathLike[str]"]


def cache_path() -> Path:
    """User cache location ($XDG_CACHE_HOME/sambat or ~/.cache/sambat)."""
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    cache_dir = (Path(xdg).expanduser() / "sambat") if xdg else (Path.home() / ".cache" / "sambat")
    return cache_dir / CACHE_FILENAME


class JsonCalendarDataSource(InlineCalendarDataSource):
    """Data source populated from the reference JSON format."""

    def __init__(
        self,
        years: Mapping[YearKey, Sequence[int]],
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        *,
        version: str = "",
        reference: ReferencePoint = EPOCH,
        origin: str = "<memory>",
    ):
        if reference != EPOCH:
            raise DataSourceError(
                f"{origin}: reference point {reference.to_dict()} does not match the "
                f"BS {EPOCH.nepali.isoformat()} = AD {EPOCH.gregorian.isoformat()} epoch"
            )
        super().__init__(years, start_year, end_year)
        self.version = version
        self.reference = reference
        self.origin = origin

    # ---------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, origin: str = "<memory>") -> "JsonCalendarDataSource":
        try:
            years = data["years"]
            rng = data.get("supportedRange") or {}
            ref = data.get("referencePoint")
            reference = ReferencePoint.from_dict(ref) if ref is not None else EPOCH
            start = None if rng.get("start") is None else int(rng["start"])
            end = None if rng.get("end") is None else int(rng["end"])
            version = str(data.get("version", ""))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataSourceError(f"{origin}: malformed calendar table ({e})") from e
        if not isinstance(years, Mapping):
            raise DataSourceError(f"{origin}: 'years' must be an object of year -> month lengths")

        src = cls(
            years,
            start,
            end,
            version=version,
            reference=reference,
            origin=origin,
        )
        logger.debug("Loaded calendar table %s (%s, version %r)", origin, src, version)
        return src

    @classmethod
    def from_text(cls, text: str, *, origin: str = "<text>") -> "JsonCalendarDataSource":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataSourceError(f"{origin}: invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise DataSourceError(f"{origin}: top-level JSON value must be an object")
        return cls.from_dict(data, origin=origin)

    @classmethod
    def from_file(cls, path: PathLike) -> "JsonCalendarDataSource":
        p = Path(path).expanduser()
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as e:
            raise DataSourceError(f"Cannot read calendar table {p}: {e}") from e
        return cls.from_text(text, origin=str(p))

    @classmethod
    def from_url(cls, url: str, *, timeout: float = 30.0) -> "JsonCalendarDataSource":
        logger.debug("Fetching calendar table from %s", url)
        try:
            with urllib.request.urlopen(url, timeout=timeout) as r:
                text = r.read().decode("utf-8")
        except (OSError, ValueError) as e:
            raise DataSourceError(f"Failed to load calendar table from {url}: {e}") from e
        return cls.from_text(text, origin=url)

    @classmethod
    def from_source(cls, source: InlineCalendarDataSource, *, version: str = "") -> "JsonCalendarDataSource":
        """Snapshot any inline table (e.g. the built-in one) into this format."""
        years = {y: months for y, months in source}
        return cls(
            years,
            source.supported_start_year,
            source.supported_end_year,
            version=version,
            origin=repr(source),
        )

    # ---------------------------------------------------------
    # Export
    # ---------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "supportedRange": {"start": self.supported_start_year, "end": self.supported_end_year},
            "referencePoint": self.reference.to_dict(),
            "years": {str(y): list(months) for y, months in self},
        }

    def write(self, path: PathLike) -> Path:
        p = Path(path).expanduser()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.debug("Wrote calendar table to %s", p)
        return p


def load_default() -> InlineCalendarDataSource:
    """
    Resolve the calendar table to use.

    Search order:
      1) SAMBAT_CALENDAR_DATA environment variable (path to JSON); errors propagate
      2) user cache (~/.cache/sambat/calendar.json or $XDG_CACHE_HOME/sambat/...);
         an unreadable cache file is skipped with a warning
      3) the embedded table
    """
    p = os.environ.get(ENV_VAR, "").strip()
    if p:
        logger.debug("Using %s=%s", ENV_VAR, p)
        return JsonCalendarDataSource.from_file(p)

    cp = cache_path()
    if cp.is_file():
        try:
            return JsonCalendarDataSource.from_file(cp)
        except DataSourceError as e:
            logger.warning("Ignoring cached calendar table: %s", e)

    logger.debug("Using embedded calendar table")
    return default_source()
