#!/usr/bin/env python3
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

import argparse

import sambat


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "sambat[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "sambat[diagnostics]"') from e


def day_of_year(d: date) -> int:
    return (d - date(d.year, 1, 1)).days + 1


def days_since_march_equinox(d: date) -> int:
    """Days since March 20 of the same Gregorian year (Mar 20 = 0)."""
    return (d - date(d.year, 3, 20)).days


def build_series(np, start_year: int, end_year: int, *, metric: str) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
    """(BS years, metric of Baisakh 1, year length) for every covered year in range."""
    cal = sambat.get_calendar()
    years = np.array([Y for Y in cal.available_years() if start_year <= Y <= end_year], dtype=int)
    y = np.empty_like(years, dtype=float)
    lengths = np.empty_like(years, dtype=int)

    for i, Y in enumerate(years):
        d = cal.bs_to_ad(int(Y), 1, 1)
        if metric == "doy":
            y[i] = float(day_of_year(d))
        elif metric == "since-equinox":
            y[i] = float(days_since_march_equinox(d))
        else:
            raise ValueError("metric must be 'doy' or 'since-equinox'")
        lengths[i] = cal.days_in_year(int(Y))

    return years, y, lengths


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of the Gregorian day of Baisakh 1 across BS years.")
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2090)
    p.add_argument("--outbase", default="new_year_scatter", help="Output base name (writes .png)")
    p.add_argument(
        "--metric",
        choices=("since-equinox", "doy"),
        default="doy",
        help="Y-axis metric (default: Gregorian day-of-year).",
    )
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    years, y, lengths = build_series(np, args.from_year, args.to_year, metric=args.metric)
    if years.size == 0:
        raise SystemExit("No calendar data in the requested range")

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax.set_xlabel("BS year")
    if args.metric == "doy":
        ax.set_ylabel("Day-of-year of Baisakh 1 (Jan 1 = 1)")
    else:
        ax.set_ylabel("Days after March 20")
    ax.set_title("Bikram Sambat New Year in the Gregorian calendar")

    leap = lengths == 366
    ax.scatter(years[~leap], y[~leap], s=16, marker="o", c="tab:blue", alpha=0.6, label="365-day year")
    ax.scatter(years[leap], y[leap], s=22, marker="s", facecolors="none", edgecolors="tab:red", label="366-day year")
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=200)
    print(f"Saved: {outbase}.png")
    print(f"Mean {args.metric}: {float(np.mean(y)):.2f}  (min {int(np.min(y))}, max {int(np.max(y))})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
