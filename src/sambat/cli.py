from __future__ import annotations

import argparse
from datetime import date
import importlib
import inspect
import logging
import re
import sys
from typing import List, Optional, Tuple

import sambat
from sambat.core.engine import BikramCalendar
from sambat.core.errors import InvalidDateError, MalformedInputError, SambatError, UnknownYearError
from sambat.core.time import nepal_today
from sambat.core.types import NepaliDate
from sambat.formatting import (
    NEPALI_DAYS_EN,
    NEPALI_DAYS_NE,
    format_english_date,
    format_nepali_date,
    format_nepali_date_with_day,
    nepali_month_name,
    relative_time_nepali,
    to_nepali_digits,
    weekday_index,
)
from sambat.sources.builtin import VERSION as BUILTIN_VERSION
from sambat.sources.json_source import JsonCalendarDataSource, cache_path, load_default

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{1,4}-\d{1,2}-\d{1,2}$")

NEPALI_DAYS_SHORT_NE = ("आइ", "सोम", "मंग", "बुध", "बिहि", "शुक्र", "शनि")

EXAMPLES = """\
examples:
  sambat today
  sambat ad2bs 2025-02-20
  sambat bs2ad 2082-11-08
  sambat month 2082 11
  sambat info 2082-11-08
  sambat --data calendar.json month
"""

DIAG_TOOLS = {
    "round-trip": "sambat.diagnostics.round_trip",
    "new-years": "sambat.diagnostics.new_years_table",
    "new-year-scatter": "sambat.diagnostics.new_year_scatter",
}


def _parse_ymd(s: str) -> Tuple[int, int, int]:
    s = s.strip()
    if not _DATE_RE.match(s):
        raise MalformedInputError(f'Invalid date "{s}". Expected YYYY-MM-DD')
    y, m, d = map(int, s.split("-"))
    return y, m, d


def _parse_ad(s: str) -> date:
    y, m, d = _parse_ymd(s)
    try:
        return date(y, m, d)
    except ValueError as e:
        raise MalformedInputError(f'Invalid AD date "{s}": {e}') from e


def _parse_bs(cal: BikramCalendar, s: str) -> NepaliDate:
    y, m, d = _parse_ymd(s)
    if not cal.is_valid_date(y, m, d):
        raise InvalidDateError(f"BS date {y}/{m}/{d} is out of range or invalid")
    return NepaliDate(y, m, d)


def _row(label: str, value: str) -> None:
    print(f"  {label:<20}{value}")


def _divider() -> None:
    print("─" * 44)


def _header(title: str) -> None:
    _divider()
    print(f"  {title}")
    _divider()


def _run_module_main(modpath: str, argv: List[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


# ============================================================
# Commands
# ============================================================

def _print_both(bs: NepaliDate, ad: date) -> None:
    _row("BS:", format_nepali_date_with_day(bs, ad))
    _row("BS (English):", format_nepali_date(bs))
    _row("BS (Nepali):", format_nepali_date(bs, "ne"))
    _row("BS (numeric):", bs.isoformat())
    _row("AD:", format_english_date(ad))
    _row("AD (numeric):", ad.isoformat())
    _row("Weekday (EN):", NEPALI_DAYS_EN[weekday_index(ad)])
    _row("Weekday (NE):", NEPALI_DAYS_NE[weekday_index(ad)])


def cmd_today(cal: BikramCalendar) -> int:
    local = nepal_today()
    bs = cal.ad_to_bs(local)
    _header("आजको मिति (Today's Date)")
    _print_both(bs, local)
    _divider()
    return 0


def cmd_ad2bs(cal: BikramCalendar, raw: str) -> int:
    ad = _parse_ad(raw)
    bs = cal.ad_to_bs(ad)
    _header(f"AD -> BS  ({raw})")
    _print_both(bs, ad)
    _row("Relative:", relative_time_nepali(ad, calendar=cal))
    _divider()
    return 0


def cmd_bs2ad(cal: BikramCalendar, raw: str) -> int:
    bs = _parse_bs(cal, raw)
    ad = cal.to_ad(bs)
    _header(f"BS -> AD  ({raw})")
    _print_both(bs, ad)
    _divider()
    return 0


def cmd_month(cal: BikramCalendar, year: Optional[int], month: Optional[int]) -> int:
    if year is None or month is None:
        today: Optional[NepaliDate] = cal.today()
        year = today.year if year is None else year
        month = today.month if month is None else month
    else:
        try:
            today = cal.today()
        except UnknownYearError:
            today = None
    if not 1 <= month <= 12:
        raise MalformedInputError(f"Month must be in 1..12, got {month}")

    days = cal.month_days(year, month)
    first_ad = days[0][1]
    last_ad = days[-1][1]

    _divider()
    print(f"  {nepali_month_name(month, 'ne')} {to_nepali_digits(year)}  ({nepali_month_name(month)} {year})")
    print(f"  {first_ad.isoformat()} .. {last_ad.isoformat()}")
    _divider()
    print("  " + " ".join(d.rjust(5) for d in NEPALI_DAYS_SHORT_NE))
    print("  " + "─────" * 7)

    row = ["     "] * weekday_index(first_ad)
    for nd, ad in days:
        cell = f"[{nd.day}]" if nd == today else str(nd.day)
        row.append(cell.rjust(5))
        if weekday_index(ad) == 6:
            print("  " + " ".join(row))
            row = []
    if row:
        print("  " + " ".join(row))

    _divider()
    print(f"  Total days: {len(days)}")
    _divider()
    return 0


def cmd_info(cal: BikramCalendar, raw: str) -> int:
    y, _, _ = _parse_ymd(raw)
    if y >= cal.start_year:
        bs = _parse_bs(cal, raw)
        ad = cal.to_ad(bs)
        kind = "BS"
    else:
        ad = _parse_ad(raw)
        bs = cal.ad_to_bs(ad)
        kind = "AD"

    _header(f"Date Info  (input treated as {kind})")
    _print_both(bs, ad)
    _row("Relative (NE):", relative_time_nepali(ad, calendar=cal))
    _divider()
    return 0


def cmd_export_data(cal: BikramCalendar, out: Optional[str]) -> int:
    src = cal.source
    if not isinstance(src, JsonCalendarDataSource):
        src = JsonCalendarDataSource.from_source(src, version=BUILTIN_VERSION)
    path = src.write(out if out else cache_path())
    print(f"Saved: {path}")
    return 0


# ============================================================
# Entry point
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sambat",
        description="Bikram Sambat (BS) <-> Gregorian (AD) calendar CLI.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--data", metavar="PATH", help="Calendar table JSON (default: $SAMBAT_CALENDAR_DATA, cache, built-in)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("today", help="Show today's Nepali (BS) date")

    p_ad = sub.add_parser("ad2bs", help="Convert an AD (Gregorian) date to BS")
    p_ad.add_argument("date", help="YYYY-MM-DD")

    p_bs = sub.add_parser("bs2ad", help="Convert a BS date to AD")
    p_bs.add_argument("date", help="YYYY-MM-DD")

    p_month = sub.add_parser("month", help="Print a BS month calendar grid (default: current month)")
    p_month.add_argument("year", nargs="?", type=int, help="BS year")
    p_month.add_argument("month", nargs="?", type=int, help="1-12")

    p_info = sub.add_parser("info", help="Full info for a date (AD vs BS auto-detected by year)")
    p_info.add_argument("date", help="YYYY-MM-DD")

    p_export = sub.add_parser("export-data", help="Write the active calendar table as JSON")
    p_export.add_argument("out", nargs="?", help="Output path (default: ~/.cache/sambat/calendar.json)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=sorted(DIAG_TOOLS), help="Which diagnostic to run")

    sub.add_parser("help", help="Show this help")
    return p


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = build_parser()
    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "help":
        p.print_help()
        return 0
    if rest and args.cmd != "diag":
        p.error(f"unrecognized arguments: {' '.join(rest)}")

    try:
        source = JsonCalendarDataSource.from_file(args.data) if args.data else load_default()
        cal = sambat.initialize(source)
        logger.debug("Active calendar: %r", source)

        commands = {
            "today": lambda: cmd_today(cal),
            "ad2bs": lambda: cmd_ad2bs(cal, args.date),
            "bs2ad": lambda: cmd_bs2ad(cal, args.date),
            "month": lambda: cmd_month(cal, args.year, args.month),
            "info": lambda: cmd_info(cal, args.date),
            "export-data": lambda: cmd_export_data(cal, args.out),
            "diag": lambda: _run_module_main(DIAG_TOOLS[args.tool], rest),
        }
        return commands[args.cmd or "today"]()
    except SambatError as e:
        print(f"✖ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
