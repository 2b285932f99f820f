#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import taqvim


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "taqvim[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "taqvim[diagnostics]"') from e


def build_series(np, official: str, tabular: str, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    """
    x: fractional Hijri year of each month start
    y: official month start minus tabular month start, in days
    """
    k_off = taqvim.get_engine(official)
    k_tab = taqvim.get_engine(tabular)
    xs: List[float] = []
    ys: List[int] = []
    for Y in range(start_year, end_year + 1):
        for M in range(12):
            xs.append(Y + M / 12.0)
            ys.append(k_off.to_day_count(Y, M, 1) - k_tab.to_day_count(Y, M, 1))
    return np.array(xs, dtype=float), np.array(ys, dtype=int)


def long_month_counts(np, official: str, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    """Number of 30-day months per year."""
    k = taqvim.get_engine(official)
    years = np.arange(start_year, end_year + 1, dtype=int)
    counts = np.array([sum(1 for M in range(12) if k.month_length(int(Y), M) == 30) for Y in years], dtype=int)
    return years, counts


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Drift of the official Hijri month table against the tabular (arithmetic) Hijri calendar."
    )
    p.add_argument("--official", default="hijri")
    p.add_argument("--tabular", default="hijri-tabular")
    p.add_argument("--start-year", type=int, default=None, help="default: first official table year")
    p.add_argument("--end-year", type=int, default=None, help="default: last official table year")
    p.add_argument("--out", default="hijri_drift.png")
    p.add_argument("--title", default="Official minus tabular Hijri month starts")
    p.add_argument("--show", action="store_true", help="Also open an interactive window.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    table = getattr(taqvim.get_engine(args.official), "table", None)
    start_year = args.start_year if args.start_year is not None else (table.first_year if table else 1340)
    end_year = args.end_year if args.end_year is not None else (table.last_year if table else 1448)
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    x, y = build_series(np, args.official, args.tabular, start_year, end_year)
    years, counts = long_month_counts(np, args.official, start_year, end_year)

    fig, (ax0, ax1) = plt.subplots(2, 1, figsize=(11, 6.5), sharex=True, gridspec_kw={"height_ratios": [3, 1]})
    ax0.step(x, y, where="post", color="0.15", lw=1.1)
    ax0.axhline(0, color="0.6", lw=0.8, ls="--")
    ax0.set_ylabel("days")
    ax0.set_title(args.title)

    ax1.bar(years, counts, width=0.8, color="0.55")
    ax1.axhline(6, color="0.3", lw=0.8, ls=":")
    ax1.set_ylabel("30-day months")
    ax1.set_xlabel("Hijri year")

    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print(f"Wrote {args.out}")

    print(f"years {start_year}..{end_year}  months={len(y)}")
    print(f"drift  min={int(y.min())}  max={int(y.max())}  mean={float(y.mean()):.3f}")
    for v, c in zip(*np.unique(y, return_counts=True)):
        print(f"  {int(v):+d} days: {int(c)} months")

    if args.show:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
