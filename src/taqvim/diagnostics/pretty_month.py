from __future__ import annotations

import argparse

import taqvim


def dow_header(first_weekday: int = 0) -> str:
    names = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]
    return "     ".join(names[(first_weekday + i) % 7] for i in range(7))


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]], first_weekday: int = 0) -> None:
    header = dow_header(first_weekday)
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_weeks(calendar: str, year: int, month: int, *, other: str = "gregorian") -> list[list[tuple[str, str]]]:
    """Cells for one month of `calendar` (0-based month), each paired with its date in `other`."""
    kernel = taqvim.get_engine(calendar)
    n0 = kernel.to_day_count(year, month, 1)
    length = kernel.month_length(year, month)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = (n0 % 7 - kernel.first_weekday) % 7
    for _ in range(pad):
        wk.append(cell("", ""))
    for i in range(length):
        o = taqvim.from_day_count(other, n0 + i)
        wk.append(cell(f"{i + 1:2d}", f"{o.month + 1:02d}-{o.day:02d}"))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def month_calendar(calendar: str, year: int, month: int, *, other: str = "gregorian") -> None:
    kernel = taqvim.get_engine(calendar)
    n0 = kernel.to_day_count(year, month, 1)
    n1 = n0 + kernel.month_length(year, month) - 1
    d0 = taqvim.from_day_count(other, n0)
    d1 = taqvim.from_day_count(other, n1)
    title = f"{calendar} month  Y={year}  M={month + 1}   ({other} {d0} .. {d1})"
    print_grid(title, month_weeks(calendar, year, month, other=other), kernel.first_weekday)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print one month of a calendar as a week grid, paired with dates in another calendar."
    )
    p.add_argument("year", type=int, nargs="?")
    p.add_argument("month", type=int, nargs="?", help="1-based month")
    p.add_argument("--calendar", default="jalali", help="gregorian|jalali|hijri|hijri-tabular (default: jalali)")
    p.add_argument("--other", default="gregorian", help="Calendar for the second label row (default: gregorian)")
    args = p.parse_args(argv)

    if args.year is None or args.month is None:
        # current month by default
        t = taqvim.today(args.calendar)
        year, month = t.year, t.month
    else:
        year, month = args.year, args.month - 1

    month_calendar(args.calendar, year, month, other=args.other)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
