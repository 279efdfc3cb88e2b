from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Tuple

@dataclass(frozen=True, order=True)
class NepaliDate:
    """A Bikram Sambat calendar day. Month and day are 1-based."""
    year: int
    month: int  # 1..12
    day: int

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return self.isoformat()

@dataclass(frozen=True)
class EnglishDate:
    """Gregorian calendar day for display; arithmetic goes through datetime.date."""
    year: int
    month: int  # 1..12
    day: int

    @classmethod
    def from_date(cls, d: date) -> "EnglishDate":
        return cls(d.year, d.month, d.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

@dataclass(frozen=True)
class ReferencePoint:
    """An AD/BS pair naming the same civil day."""
    bs_year: int
    bs_month: int
    bs_day: int
    ad_year: int
    ad_month: int
    ad_day: int

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ReferencePoint":
        return cls(
            bs_year=int(d["bsYear"]),
            bs_month=int(d["bsMonth"]),
            bs_day=int(d["bsDay"]),
            ad_year=int(d["adYear"]),
            ad_month=int(d["adMonth"]),
            ad_day=int(d["adDay"]),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "bsYear": self.bs_year,
            "bsMonth": self.bs_month,
            "bsDay": self.bs_day,
            "adYear": self.ad_year,
            "adMonth": self.ad_month,
            "adDay": self.ad_day,
        }

    @property
    def nepali(self) -> NepaliDate:
        return NepaliDate(self.bs_year, self.bs_month, self.bs_day)

    @property
    def gregorian(self) -> date:
        return date(self.ad_year, self.ad_month, self.ad_day)

# BS 2000 Baisakh 1 == AD 1943-04-14
EPOCH = ReferencePoint(2000, 1, 1, 1943, 4, 14)
BS_EPOCH = EPOCH.nepali
AD_EPOCH = EPOCH.gregorian
