from __future__ import annotations

import argparse
import random
from typing import List, Optional, Tuple

import taqvim


def check_engine(name: str, samples: int, seed: int) -> Tuple[int, List[str]]:
    """
    Random civil dates -> day count -> civil date, plus the reverse direction.
    Returns (number of checks, list of failure messages).
    """
    kernel = taqvim.get_engine(name)
    rng = random.Random(seed)
    lo = kernel.to_day_count(kernel.min_year, 0, 1)
    hi = kernel.to_day_count(kernel.max_year, 11, kernel.month_length(kernel.max_year, 11))

    failures: List[str] = []
    checks = 0
    for _ in range(samples):
        y = rng.randint(kernel.min_year, kernel.max_year)
        m = rng.randrange(12)
        d = rng.randint(1, kernel.month_length(y, m))
        n = kernel.to_day_count(y, m, d)
        back = kernel.from_day_count(n)
        checks += 1
        if (back.year, back.month, back.day) != (y, m, d):
            failures.append(f"{name}: ({y},{m},{d}) -> {n} -> {back}")

        n = rng.randint(lo, hi)
        c = kernel.from_day_count(n)
        checks += 1
        if kernel.to_day_count(c.year, c.month, c.day) != n:
            failures.append(f"{name}: {n} -> {c} -> {kernel.to_day_count(c.year, c.month, c.day)}")
    return checks, failures


def check_contiguity(name: str, start: int, days: int) -> List[str]:
    """Consecutive day counts must map to consecutive civil dates."""
    kernel = taqvim.get_engine(name)
    failures: List[str] = []
    prev = kernel.from_day_count(start)
    for n in range(start + 1, start + days):
        cur = kernel.from_day_count(n)
        if (cur.year, cur.month) == (prev.year, prev.month):
            ok = cur.day == prev.day + 1
        else:
            ok = cur.day == 1 and prev.day == kernel.month_length(prev.year, prev.month)
        if not ok:
            failures.append(f"{name}: {n - 1}={prev} then {n}={cur}")
        prev = cur
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Round-trip and contiguity checks for every registered engine.")
    p.add_argument("--samples", type=int, default=2000)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--engines", default=None, help="Comma list (default: all registered)")
    p.add_argument("--span", type=int, default=40000, help="Days of contiguity check around 2000-01-01")
    args = p.parse_args(argv)

    names = [x.strip() for x in args.engines.split(",")] if args.engines else taqvim.list_engines()
    start = 2451545 - args.span // 2

    bad = 0
    for name in names:
        checks, failures = check_engine(name, args.samples, args.seed)
        failures += check_contiguity(name, start, args.span)
        bad += len(failures)
        print(f"{name:16s} checks={checks + args.span - 1:7d}  failures={len(failures)}")
        for msg in failures[:10]:
            print("  " + msg)

    return 1 if bad else 0


if __name__ == "__main__":
    raise SystemExit(main())
