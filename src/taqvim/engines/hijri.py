"""
taqvim.engines.hijri
--------------------
Islamic (Hijri) lunar calendar.

Two layers:
  1. Tabular arithmetic (30-year cycle, 11 leap years) from the civil epoch.
  2. An optional OfficialMonthTable which takes precedence inside its span.

Outside the table the tabular mapping is shifted at each edge so that it
meets the table exactly; those dates are flagged as not official.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..core.types import CalendarSystem, CivilDate, HijriDate
from ._civil import check_date, check_month, check_year, day_of_year
from .gregorian import WeekParams
from .hijri_table import OfficialMonthTable

log = logging.getLogger(__name__)

_MAX_REFINE = 8


@dataclass(frozen=True)
class HijriParams:
    epoch_jdn: int = 1948440         # 1 Muharram 1 AH (civil epoch)
    synodic_month: float = 29.530588
    table: Optional[OfficialMonthTable] = None
    week: WeekParams = WeekParams(first_weekday=5, weekend=(4,))
    min_year: int = 1
    max_year: int = 9999

    def __post_init__(self) -> None:
        if not (29.0 < self.synodic_month < 30.0):
            raise ValueError("synodic_month must lie between 29 and 30 days")
        if not (1 <= self.min_year <= self.max_year):
            raise ValueError("Require 1 <= min_year <= max_year")


def tabular_is_leap(year: int) -> bool:
    return (11 * year + 14) % 30 < 11

def tabular_month_length(year: int, month: int) -> int:
    if month == 11 and tabular_is_leap(year):
        return 30
    return 30 if month % 2 == 0 else 29


class HijriEngine:
    system = CalendarSystem.HIJRI

    def __init__(self, p: HijriParams, *, name: str = "hijri"):
        self.p = p
        self.name = name
        self.table = p.table
        self.min_year = p.min_year
        self.max_year = p.max_year
        self.first_weekday = p.week.first_weekday
        self.weekend = p.week.weekend

        self._head_shift = 0
        self._tail_shift = 0
        if self.table is not None:
            t = self.table
            self._head_shift = t.start_jdn - self._tabular_to_jdn(t.first_year, 0, 1)
            self._tail_shift = t.end_jdn - self._tabular_to_jdn(t.last_year + 1, 0, 1)
            log.debug("%s: tabular shift %+d before %d, %+d after %d",
                      name, self._head_shift, t.first_year, self._tail_shift, t.last_year)

    def info(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "system": self.system.value,
            "epoch_jdn": self.p.epoch_jdn,
            "years": (self.min_year, self.max_year),
            "first_weekday": self.first_weekday,
            "weekend": self.weekend,
        }
        if self.table is not None:
            out["official_years"] = (self.table.first_year, self.table.last_year)
            out["edge_shifts"] = (self._head_shift, self._tail_shift)
        return out

    # ---------------------------------------------------------
    # Tabular layer
    # ---------------------------------------------------------
    def _tabular_to_jdn(self, year: int, month: int, day: int) -> int:
        return (self.p.epoch_jdn - 1 + day + (59 * month + 1) // 2
                + (year - 1) * 354 + (3 + 11 * year) // 30)

    def _tabular_from_jdn(self, n: int) -> Tuple[int, int, int]:
        # Mean-month estimate, then walk to the containing month.
        k = math.floor((n - self.p.epoch_jdn) / self.p.synodic_month)
        y0, month = divmod(k, 12)
        year = y0 + 1
        start = self._tabular_to_jdn(year, month, 1)
        for _ in range(_MAX_REFINE):
            ml = tabular_month_length(year, month)
            if n < start:
                year, month = (year, month - 1) if month > 0 else (year - 1, 11)
                start -= tabular_month_length(year, month)
            elif n >= start + ml:
                start += ml
                year, month = (year, month + 1) if month < 11 else (year + 1, 0)
            else:
                break
        day = min(max(n - start + 1, 1), tabular_month_length(year, month))
        return year, month, day

    def _shift_for_year(self, year: int) -> int:
        if self.table is None:
            return 0
        return self._head_shift if year < self.table.first_year else self._tail_shift

    # ---------------------------------------------------------
    # Kernel interface
    # ---------------------------------------------------------
    def is_official_year(self, year: int) -> bool:
        return self.table is not None and self.table.covers_year(year)

    def is_leap_year(self, year: int) -> bool:
        """Month 12 has 30 days. Official years take this from the table, not from the year length."""
        if self.is_official_year(year):
            return self.table.months[year][11] == 30
        return tabular_is_leap(year)

    def month_length(self, year: int, month: int) -> int:
        check_month(month, "Hijri")
        if self.is_official_year(year):
            return self.table.months[year][month]
        return tabular_month_length(year, month)

    def year_length(self, year: int) -> int:
        if self.is_official_year(year):
            return sum(self.table.months[year])
        return 355 if tabular_is_leap(year) else 354

    def day_of_year(self, year: int, month: int, day: int) -> int:
        return day_of_year(self, year, month, day)

    def validate(self, year: int, month: int, day: int) -> None:
        check_date(self, year, month, day)

    def to_day_count(self, year: int, month: int, day: int) -> int:
        check_date(self, year, month, day)
        if self.is_official_year(year):
            return self.table.to_day_count(year, month, day)
        return self._tabular_to_jdn(year, month, day) + self._shift_for_year(year)

    def lookup(self, n: int) -> HijriDate:
        """Day count -> Hijri date with its confidence flag."""
        if self.table is not None and self.table.covers_day(n):
            y, m, d = self.table.locate(n)
            official = True
        else:
            if self.table is None:
                shift = 0
            else:
                shift = self._head_shift if n < self.table.start_jdn else self._tail_shift
                log.debug("%s: JDN %d outside official table, tabular months used", self.name, n)
            y, m, d = self._tabular_from_jdn(n - shift)
            official = False
        check_year(y, self.min_year, self.max_year, "Hijri")
        return HijriDate(CivilDate(y, m, d), official)

    def from_day_count(self, n: int) -> CivilDate:
        return self.lookup(n).date
