from __future__ import annotations

import argparse
import random
from datetime import date, timedelta

import sambat
from sambat.core.engine import BikramCalendar


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def exhaustive_bs_test(cal: BikramCalendar, *, max_failures: int) -> int:
    """BS -> AD -> BS for every day in the table; also checks AD days are consecutive."""
    failures = 0
    prev = None
    for Y in cal.available_years():
        for M in range(1, 13):
            for D in range(1, cal.days_in_month(Y, M) + 1):
                ad = cal.bs_to_ad(Y, M, D)
                back = cal.ad_to_bs(ad)
                gap = prev is not None and ad - prev != timedelta(days=1)
                prev = ad
                if back != sambat.NepaliDate(Y, M, D) or gap:
                    failures += 1
                    print("\nFAIL (bs)")
                    print("bs:", (Y, M, D))
                    print("ad:", ad)
                    print("back:", back)
                    if failures >= max_failures:
                        return failures
    return failures


def random_ad_test(cal: BikramCalendar, N: int, seed: int, *, max_failures: int) -> int:
    """AD -> BS -> AD for N random days inside the covered range."""
    years = cal.available_years()
    if not years:
        return 0
    start = cal.bs_to_ad(years[0], 1, 1)
    end = cal.bs_to_ad(years[-1], 12, cal.days_in_month(years[-1], 12))

    random.seed(seed)
    failures = 0
    for _ in range(N):
        d0 = random_date(start, end)
        bs = cal.ad_to_bs(d0)
        back = cal.to_ad(bs)
        if back != d0:
            failures += 1
            print("\nFAIL (ad)")
            print("d0:", d0)
            print("bs:", bs)
            print("back:", back)
            if failures >= max_failures:
                return failures
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Round-trip tests: BS -> AD -> BS (exhaustive) and AD -> BS -> AD (random).")
    p.add_argument("--N", type=int, default=2000, help="Random AD trials.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per test.")
    args = p.parse_args(argv)

    cal = sambat.get_calendar()
    years = cal.available_years()
    print(f"Testing BS {years[0]}..{years[-1]} ({len(years)} years) ..." if years else "Testing (empty table) ...")

    total_fail = exhaustive_bs_test(cal, max_failures=args.max_failures)
    total_fail += random_ad_test(cal, args.N, args.seed, max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
