from __future__ import annotations

from datetime import date
import argparse

import sambat
from sambat.formatting import nepali_day_name


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian date of Baisakh 1 (BS New Year) and the year length."
    )
    p.add_argument("--from-year", type=int, default=None, help="First BS year (default: first in table)")
    p.add_argument("--to-year", type=int, default=None, help="Last BS year (default: last in table)")
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="iso",
        help="Display format of the AD column (default: iso).",
    )
    args = p.parse_args(argv)

    cal = sambat.get_calendar()
    years = cal.available_years()
    if not years:
        print("(no calendar data)")
        return 0

    Y0 = years[0] if args.from_year is None else args.from_year
    Y1 = years[-1] if args.to_year is None else args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    headers = ["BS", "AD", "Days", "Weekday"]
    colw = [6, 10, 4, 10]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    counts: dict[int, int] = {}
    for Y in years:
        if not Y0 <= Y <= Y1:
            continue
        d = cal.bs_to_ad(Y, 1, 1)
        n = cal.days_in_year(Y)
        counts[n] = counts.get(n, 0) + 1
        weekday = nepali_day_name(d, "ne")
        row = [str(Y), fmt(d), str(n), weekday]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    print("\nYear lengths:")
    for n in sorted(counts):
        print(f"  {n} days: {counts[n]} years")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
