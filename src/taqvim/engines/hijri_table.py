"""
taqvim.engines.hijri_table
--------------------------
Official Hijri month lengths (Iranian civil observance) and the table object
that turns them into absolute month starts.

The data is a dense run of years; each year lists its 12 month lengths.
Absolute placement comes from a single anchor: the first day of one month
whose Gregorian date is known.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..core.time import ymd_to_jdn

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfficialMonthTable:
    months: Mapping[int, Tuple[int, ...]]
    anchor_year: int
    anchor_month: int   # 0-based
    anchor_jdn: int     # JDN of day 1 of (anchor_year, anchor_month)

    _years: Tuple[int, ...] = field(init=False, repr=False, compare=False)
    _starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        years = tuple(sorted(self.months))
        if not years:
            raise ValueError("Official table is empty")
        if years != tuple(range(years[0], years[-1] + 1)):
            raise ValueError("Official table years must be contiguous")
        for y in years:
            row = self.months[y]
            if len(row) != 12 or any(v not in (29, 30) for v in row):
                raise ValueError(f"Year {y}: need 12 month lengths of 29 or 30 days")
        if self.anchor_year not in self.months or not (0 <= self.anchor_month <= 11):
            raise ValueError("Anchor month must lie inside the table")

        # Year starts relative to the first table year, then shift onto the anchor.
        rel = [0]
        for y in years:
            rel.append(rel[-1] + sum(self.months[y]))
        i = self.anchor_year - years[0]
        base = self.anchor_jdn - rel[i] - sum(self.months[self.anchor_year][: self.anchor_month])
        object.__setattr__(self, "months", MappingProxyType({y: tuple(self.months[y]) for y in years}))
        object.__setattr__(self, "_years", years)
        object.__setattr__(self, "_starts", tuple(base + r for r in rel))
        log.debug("official Hijri table: %d years (%d..%d), JDN %d..%d",
                  len(years), years[0], years[-1], self._starts[0], self._starts[-1] - 1)

    @property
    def first_year(self) -> int:
        return self._years[0]

    @property
    def last_year(self) -> int:
        return self._years[-1]

    @property
    def start_jdn(self) -> int:
        """First day covered."""
        return self._starts[0]

    @property
    def end_jdn(self) -> int:
        """First day after the covered span."""
        return self._starts[-1]

    def covers_year(self, year: int) -> bool:
        return self.first_year <= year <= self.last_year

    def covers_day(self, n: int) -> bool:
        return self.start_jdn <= n < self.end_jdn

    def year_start(self, year: int) -> int:
        return self._starts[year - self.first_year]

    def to_day_count(self, year: int, month: int, day: int) -> int:
        return self.year_start(year) + sum(self.months[year][:month]) + day - 1

    def locate(self, n: int) -> Tuple[int, int, int]:
        """JDN inside the table -> (year, 0-based month, day)."""
        i = bisect_right(self._starts, n) - 1
        year = self._years[i]
        rem = n - self._starts[i]
        month = 0
        for ml in self.months[year]:
            if rem < ml:
                break
            rem -= ml
            month += 1
        return year, month, rem + 1


# ============================================================
# Iranian official month lengths, 1340..1448 AH
# ============================================================

IRAN_MONTHS: Dict[int, Tuple[int, ...]] = {
    1340: (29, 30, 29, 30, 30, 30, 29, 30, 30, 29, 29, 30),
    1341: (29, 29, 30, 29, 30, 29, 30, 30, 30, 29, 30, 29),
    1342: (30, 29, 29, 30, 29, 30, 29, 30, 30, 30, 29, 30),
    1343: (29, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 30),
    1344: (29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30),
    1345: (29, 30, 30, 29, 30, 30, 29, 29, 30, 29, 29, 30),
    1346: (29, 30, 30, 29, 30, 30, 30, 29, 29, 30, 29, 29),
    1347: (30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30, 29),
    1348: (29, 30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30),
    1349: (29, 29, 30, 29, 30, 29, 30, 30, 29, 30, 30, 29),
    1350: (30, 29, 29, 30, 30, 29, 29, 30, 29, 30, 30, 29),
    1351: (30, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 29),
    1352: (30, 30, 29, 30, 30, 30, 29, 29, 29, 30, 29, 30),
    1353: (29, 30, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29),
    1354: (29, 30, 30, 30, 29, 30, 30, 29, 29, 30, 29, 30),
    1355: (29, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30, 29),
    1356: (30, 29, 29, 30, 30, 29, 30, 29, 30, 30, 29, 30),
    1357: (29, 30, 29, 30, 29, 30, 29, 29, 30, 30, 29, 30),
    1358: (30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 29, 30),
    1359: (30, 30, 29, 30, 29, 30, 29, 29, 30, 29, 29, 30),
    1360: (30, 30, 29, 30, 30, 29, 30, 29, 29, 30, 29, 30),
    1361: (29, 30, 29, 30, 30, 29, 30, 30, 29, 29, 30, 29),
    1362: (30, 29, 30, 29, 30, 30, 29, 30, 29, 30, 29, 30),
    1363: (29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 30, 29),
    1364: (30, 29, 30, 29, 29, 30, 29, 30, 29, 30, 30, 30),
    1365: (29, 30, 29, 30, 29, 29, 30, 29, 30, 29, 30, 30),
    1366: (29, 30, 30, 29, 30, 29, 29, 30, 29, 30, 29, 30),
    1367: (30, 29, 30, 30, 29, 30, 29, 29, 30, 29, 30, 29),
    1368: (30, 29, 30, 30, 29, 30, 30, 29, 29, 30, 29, 30),
    1369: (29, 30, 29, 30, 29, 30, 30, 29, 30, 29, 30, 30),
    1370: (29, 29, 30, 29, 30, 29, 30, 29, 30, 30, 29, 30),
    1371: (29, 30, 29, 30, 29, 30, 29, 29, 30, 30, 30, 29),
    1372: (30, 30, 29, 29, 30, 29, 29, 30, 29, 30, 30, 30),
    1373: (29, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 30),
    1374: (29, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30),
    1375: (29, 30, 30, 29, 30, 30, 29, 30, 29, 29, 30, 29),
    1376: (30, 29, 30, 29, 30, 30, 29, 30, 30, 29, 29, 30),
    1377: (29, 30, 29, 29, 30, 30, 29, 30, 30, 30, 29, 30),
    1378: (29, 29, 30, 29, 29, 30, 29, 30, 30, 30, 29, 30),
    1379: (30, 29, 29, 30, 29, 29, 30, 29, 30, 30, 29, 30),
    1380: (30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 29, 30),
    1381: (30, 29, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29),
    1382: (30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 29, 30),
    1383: (29, 29, 30, 30, 29, 30, 30, 30, 29, 30, 29, 29),
    1384: (30, 29, 29, 30, 29, 30, 30, 30, 29, 30, 30, 29),
    1385: (29, 30, 29, 29, 30, 29, 30, 30, 29, 30, 30, 30),
    1386: (29, 29, 30, 29, 29, 30, 29, 30, 29, 30, 30, 30),
    1387: (29, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 30),
    1388: (29, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30),
    1389: (29, 30, 30, 29, 30, 30, 29, 30, 29, 29, 30, 29),
    1390: (30, 29, 30, 29, 30, 30, 30, 29, 30, 29, 30, 29),
    1391: (29, 30, 29, 29, 30, 30, 30, 29, 30, 30, 29, 30),
    1392: (29, 29, 30, 29, 29, 30, 30, 29, 30, 30, 29, 30),
    1393: (30, 29, 29, 30, 29, 29, 30, 30, 29, 30, 29, 30),
    1394: (30, 30, 29, 30, 29, 29, 30, 29, 29, 30, 29, 30),
    1395: (30, 30, 29, 30, 29, 30, 29, 30, 29, 29, 29, 30),
    1396: (30, 29, 30, 30, 30, 29, 30, 29, 30, 29, 29, 30),
    1397: (29, 30, 29, 30, 30, 30, 29, 30, 29, 30, 29, 29),
    1398: (30, 29, 30, 29, 30, 29, 30, 30, 29, 30, 29, 30),
    1399: (29, 30, 29, 30, 29, 29, 30, 30, 29, 30, 30, 29),
    1400: (30, 29, 30, 29, 30, 29, 29, 30, 29, 30, 30, 30),
    1401: (29, 30, 30, 29, 29, 30, 29, 29, 30, 29, 30, 29),
    1402: (30, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29, 30),
    1403: (29, 30, 30, 30, 29, 30, 29, 30, 29, 29, 30, 29),
    1404: (30, 29, 30, 30, 30, 29, 30, 29, 30, 29, 29, 30),
    1405: (29, 30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30),
    1406: (29, 29, 30, 29, 30, 29, 30, 30, 29, 30, 29, 30),
    1407: (30, 29, 30, 29, 29, 30, 29, 30, 29, 30, 30, 29),
    1408: (30, 30, 29, 30, 29, 29, 30, 29, 29, 30, 30, 29),
    1409: (30, 30, 30, 29, 29, 30, 29, 30, 29, 29, 30, 30),
    1410: (29, 30, 30, 29, 30, 29, 30, 29, 30, 29, 29, 30),
    1411: (30, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 29),
    1412: (30, 30, 29, 30, 29, 30, 29, 30, 29, 30, 30, 29),
    1413: (30, 29, 30, 29, 29, 30, 29, 30, 29, 30, 30, 30),
    1414: (29, 30, 29, 29, 30, 29, 30, 29, 29, 30, 30, 30),
    1415: (30, 30, 29, 29, 29, 30, 29, 29, 29, 30, 30, 30),
    1416: (30, 30, 29, 30, 29, 29, 30, 29, 29, 30, 30, 29),
    1417: (30, 30, 30, 29, 29, 30, 29, 30, 29, 30, 29, 29),
    1418: (30, 30, 29, 30, 30, 29, 30, 29, 29, 30, 30, 29),
    1419: (29, 30, 29, 30, 29, 30, 30, 29, 29, 30, 30, 30),
    1420: (29, 29, 30, 29, 30, 29, 30, 30, 29, 30, 30, 29),
    1421: (30, 29, 29, 30, 29, 29, 30, 30, 29, 30, 30, 30),
    1422: (29, 30, 29, 29, 30, 29, 29, 30, 29, 30, 30, 30),
    1423: (29, 30, 30, 29, 29, 30, 29, 30, 29, 30, 29, 30),
    1424: (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29),
    1425: (30, 29, 30, 30, 29, 30, 30, 29, 29, 30, 29, 30),
    1426: (29, 29, 30, 29, 30, 30, 30, 29, 30, 30, 29, 29),
    1427: (30, 29, 29, 30, 29, 30, 30, 30, 29, 30, 29, 30),
    1428: (29, 30, 29, 29, 29, 30, 30, 29, 30, 30, 30, 29),
    1429: (30, 29, 30, 29, 29, 29, 30, 30, 29, 30, 30, 29),
    1430: (30, 30, 29, 29, 30, 29, 30, 29, 29, 30, 30, 29),
    1431: (30, 30, 29, 30, 29, 30, 29, 30, 29, 29, 30, 29),
    1432: (30, 30, 29, 30, 30, 30, 29, 30, 29, 29, 30, 29),
    1433: (29, 30, 29, 30, 30, 30, 29, 30, 29, 30, 29, 30),
    1434: (29, 29, 30, 29, 30, 30, 29, 30, 30, 29, 30, 29),
    1435: (29, 30, 29, 30, 29, 30, 29, 30, 30, 30, 29, 30),
    1436: (29, 30, 29, 29, 30, 29, 30, 29, 30, 29, 30, 30),
    1437: (29, 30, 30, 29, 30, 29, 29, 30, 29, 29, 30, 30),
    1438: (29, 30, 30, 30, 29, 30, 29, 29, 30, 29, 29, 30),
    1439: (29, 30, 30, 30, 30, 29, 30, 29, 29, 30, 29, 29),
    1440: (30, 29, 30, 30, 30, 29, 30, 30, 29, 29, 30, 29),
    1441: (29, 30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30),
    1442: (29, 29, 30, 29, 30, 29, 30, 30, 29, 30, 30, 29),
    1443: (29, 30, 30, 29, 29, 30, 29, 30, 30, 29, 30, 29),
    1444: (30, 30, 29, 30, 29, 29, 30, 29, 30, 29, 30, 29),
    1445: (30, 30, 30, 29, 30, 29, 29, 30, 29, 30, 29, 29),
    1446: (30, 30, 30, 29, 30, 30, 29, 30, 29, 29, 29, 30),
    1447: (29, 30, 30, 29, 30, 30, 30, 29, 30, 29, 29, 29),
    1448: (30, 29, 30, 29, 30, 30, 30, 29, 30, 29, 30, 29),
}


def iran_official_table() -> OfficialMonthTable:
    """Anchor: 1 Rajab 1447 AH = 2025-12-22."""
    return OfficialMonthTable(
        months=IRAN_MONTHS,
        anchor_year=1447,
        anchor_month=6,
        anchor_jdn=ymd_to_jdn(2025, 12, 22),
    )
