"""
taqvim.engines.jalali
---------------------
Persian (Jalali) solar calendar with the 33-year arithmetic leap cycle.

A year is leap iff (year mod 33) is one of the cycle's leap residues. With
eight leaps per cycle every cycle is exactly 33*365 + 8 days long, so
  day_count(y, m, d) = epoch + 365*(y-1) + leaps_before(y) + month_offset(m) + d - 1
and the inverse only has to locate a year inside one cycle.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..core.types import CalendarSystem, CivilDate
from ._civil import check_date, check_month, check_year, day_of_year
from .gregorian import WeekParams


@dataclass(frozen=True)
class JalaliParams:
    epoch_jdn: int                       # JDN of 1/01/01
    cycle_years: int = 33
    leap_residues: Tuple[int, ...] = (1, 5, 9, 13, 17, 22, 26, 30)
    week: WeekParams = WeekParams(first_weekday=5, weekend=(4,))  # Saturday, Friday
    min_year: int = 1
    max_year: int = 9999

    def __post_init__(self) -> None:
        if self.cycle_years <= 0:
            raise ValueError("cycle_years must be positive")
        if tuple(sorted(set(self.leap_residues))) != tuple(self.leap_residues):
            raise ValueError("leap_residues must be strictly increasing")
        if any(not (0 <= r < self.cycle_years) for r in self.leap_residues):
            raise ValueError("leap_residues must lie in 0..cycle_years-1")
        if not (1 <= self.min_year <= self.max_year):
            raise ValueError("Require 1 <= min_year <= max_year")

    @property
    def cycle_days(self) -> int:
        return 365 * self.cycle_years + len(self.leap_residues)


class JalaliEngine:
    system = CalendarSystem.JALALI

    def __init__(self, p: JalaliParams, *, name: str = "jalali"):
        self.p = p
        self.name = name
        self.min_year = p.min_year
        self.max_year = p.max_year
        self.first_weekday = p.week.first_weekday
        self.weekend = p.week.weekend

        # Residue 0 closes the cycle (year 33, 66, ...); count it last.
        self._ordered = tuple(r for r in p.leap_residues if r != 0) + ((p.cycle_years,) if 0 in p.leap_residues else ())
        # Day offsets of the k-th year within a cycle, k = 0..cycle_years.
        offs = [0]
        for k in range(p.cycle_years):
            offs.append(offs[-1] + (366 if self._leap_residue((k + 1) % p.cycle_years) else 365))
        self._cycle_offsets: Tuple[int, ...] = tuple(offs)

    def _leap_residue(self, r: int) -> bool:
        return r in self.p.leap_residues

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "system": self.system.value,
            "epoch_jdn": self.p.epoch_jdn,
            "cycle_years": self.p.cycle_years,
            "leap_residues": self.p.leap_residues,
            "years": (self.min_year, self.max_year),
            "first_weekday": self.first_weekday,
            "weekend": self.weekend,
        }

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------
    def is_leap_year(self, year: int) -> bool:
        return self._leap_residue(year % self.p.cycle_years)

    def leaps_before(self, year: int) -> int:
        """Number of leap years in 1..year-1."""
        c, r = divmod(year - 1, self.p.cycle_years)
        return len(self.p.leap_residues) * c + bisect_right(self._ordered, r)

    def month_length(self, year: int, month: int) -> int:
        check_month(month, "Jalali")
        if month < 6:
            return 31
        if month < 11:
            return 30
        return 30 if self.is_leap_year(year) else 29

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def day_of_year(self, year: int, month: int, day: int) -> int:
        return day_of_year(self, year, month, day)

    def validate(self, year: int, month: int, day: int) -> None:
        check_date(self, year, month, day)

    # ---------------------------------------------------------
    # Day-count mapping
    # ---------------------------------------------------------
    @staticmethod
    def _month_offset(month: int) -> int:
        return 31 * month if month < 6 else 186 + 30 * (month - 6)

    def to_day_count(self, year: int, month: int, day: int) -> int:
        check_date(self, year, month, day)
        return self.p.epoch_jdn + 365 * (year - 1) + self.leaps_before(year) + self._month_offset(month) + day - 1

    def from_day_count(self, n: int) -> CivilDate:
        c, rem = divmod(n - self.p.epoch_jdn, self.p.cycle_days)
        k = bisect_right(self._cycle_offsets, rem) - 1
        year = self.p.cycle_years * c + 1 + k
        check_year(year, self.min_year, self.max_year, "Jalali")

        d0 = rem - self._cycle_offsets[k]
        if d0 < 186:
            month, day0 = divmod(d0, 31)
        else:
            month, day0 = divmod(d0 - 186, 30)
            month += 6
        return CivilDate(year, month, day0 + 1)
