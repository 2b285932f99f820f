"""
taqvim.engines._civil
---------------------
Range checks and month walks shared by the calendar kernels.
"""

from __future__ import annotations

from typing import Tuple

from ..core.errors import InvalidDate


def check_year(year: int, lo: int, hi: int, what: str) -> None:
    if not (lo <= year <= hi):
        raise InvalidDate(f"{what} year {year} out of range {lo}..{hi}")

def check_month(month: int, what: str) -> None:
    if not (0 <= month <= 11):
        raise InvalidDate(f"{what} month {month} out of range 0..11")

def check_date(kernel, year: int, month: int, day: int) -> None:
    what = kernel.system.value.capitalize()
    check_year(year, kernel.min_year, kernel.max_year, what)
    check_month(month, what)
    ml = kernel.month_length(year, month)
    if not (1 <= day <= ml):
        raise InvalidDate(f"{what} day {day} out of range 1..{ml} for {year}/{month + 1}")

def year_length(kernel, year: int) -> int:
    return sum(kernel.month_length(year, m) for m in range(12))

def day_of_year(kernel, year: int, month: int, day: int) -> int:
    return sum(kernel.month_length(year, m) for m in range(month)) + day

def from_day_of_year(kernel, year: int, doy: int) -> Tuple[int, int]:
    """1-based day of year -> (month, day)."""
    m = 0
    while m < 11:
        ml = kernel.month_length(year, m)
        if doy <= ml:
            break
        doy -= ml
        m += 1
    return m, doy
