"""
taqvim.engines.gregorian
------------------------
Proleptic Gregorian calendar (4/100/400 leap rule) over the JDN timeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..core.time import jdn_to_ymd, ymd_to_jdn
from ..core.types import CalendarSystem, CivilDate
from ._civil import check_date, check_month, check_year, day_of_year

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class WeekParams:
    """Week layout, Python weekday numbering (Monday=0)."""
    first_weekday: int
    weekend: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not (0 <= self.first_weekday <= 6):
            raise ValueError("first_weekday must be in 0..6")
        if any(not (0 <= w <= 6) for w in self.weekend):
            raise ValueError("weekend days must be in 0..6")


@dataclass(frozen=True)
class GregorianParams:
    week: WeekParams = WeekParams(first_weekday=6, weekend=(5, 6))
    min_year: int = 1
    max_year: int = 9999

    def __post_init__(self) -> None:
        if not (1 <= self.min_year <= self.max_year):
            raise ValueError("Require 1 <= min_year <= max_year")


class GregorianEngine:
    system = CalendarSystem.GREGORIAN

    def __init__(self, p: GregorianParams, *, name: str = "gregorian"):
        self.p = p
        self.name = name
        self.min_year = p.min_year
        self.max_year = p.max_year
        self.first_weekday = p.week.first_weekday
        self.weekend = p.week.weekend

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "system": self.system.value,
            "years": (self.min_year, self.max_year),
            "first_weekday": self.first_weekday,
            "weekend": self.weekend,
        }

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    def month_length(self, year: int, month: int) -> int:
        check_month(month, "Gregorian")
        if month == 1 and self.is_leap_year(year):
            return 29
        return _MONTH_DAYS[month]

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def day_of_year(self, year: int, month: int, day: int) -> int:
        return day_of_year(self, year, month, day)

    def validate(self, year: int, month: int, day: int) -> None:
        check_date(self, year, month, day)

    def to_day_count(self, year: int, month: int, day: int) -> int:
        check_date(self, year, month, day)
        return ymd_to_jdn(year, month + 1, day)

    def from_day_count(self, n: int) -> CivilDate:
        y, m, d = jdn_to_ymd(n)
        check_year(y, self.min_year, self.max_year, "Gregorian")
        return CivilDate(y, m - 1, d)
