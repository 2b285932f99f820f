from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Union

from .core.engine import CalendarKernel, EngineRegistry
from .core.time import ZoneLike, instant_to_local, now_millis, resolve_zone, split_local_millis, to_jdn
from .core.types import CalendarSystem, CivilDate, EngineSpec, HijriDate
from .engines.factory import make_engine as _make_engine

CalendarLike = Union[str, CalendarSystem]

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def engine_name(calendar: CalendarLike) -> str:
    return calendar.value if isinstance(calendar, CalendarSystem) else calendar

def get_engine(calendar: CalendarLike) -> CalendarKernel:
    return _reg().get(engine_name(calendar))

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(calendar: CalendarLike) -> Dict[str, Any]:
    return get_engine(calendar).info()

def make_engine(spec: EngineSpec) -> CalendarKernel:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarKernel, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Day-count conversion
# ============================================================

def to_day_count(calendar: CalendarLike, year: int, month: int, day: int) -> int:
    """(year, 0-based month, day) in `calendar` -> JDN."""
    return get_engine(calendar).to_day_count(year, month, day)

def from_day_count(calendar: CalendarLike, n: int) -> CivilDate:
    return get_engine(calendar).from_day_count(n)

def convert(d: CivilDate, *, source: CalendarLike, target: CalendarLike) -> CivilDate:
    n = to_day_count(source, d.year, d.month, d.day)
    return from_day_count(target, n)

def gregorian_to_day_count(d: CivilDate) -> int:
    return to_day_count(CalendarSystem.GREGORIAN, d.year, d.month, d.day)

def day_count_to_gregorian(n: int) -> CivilDate:
    return from_day_count(CalendarSystem.GREGORIAN, n)

def jalali_to_day_count(d: CivilDate) -> int:
    return to_day_count(CalendarSystem.JALALI, d.year, d.month, d.day)

def day_count_to_jalali(n: int) -> CivilDate:
    return from_day_count(CalendarSystem.JALALI, n)

def hijri_to_day_count(d: CivilDate, *, engine: str = "hijri") -> int:
    return to_day_count(engine, d.year, d.month, d.day)

def day_count_to_hijri(n: int, *, engine: str = "hijri") -> HijriDate:
    """Unlike the other day_count_to_* helpers this keeps the confidence flag."""
    return get_engine(engine).lookup(n)

def gregorian_to_jalali(d: CivilDate) -> CivilDate:
    return day_count_to_jalali(gregorian_to_day_count(d))

def jalali_to_gregorian(d: CivilDate) -> CivilDate:
    return day_count_to_gregorian(jalali_to_day_count(d))

def gregorian_to_hijri(d: CivilDate, *, engine: str = "hijri") -> HijriDate:
    return day_count_to_hijri(gregorian_to_day_count(d), engine=engine)

def hijri_to_gregorian(d: CivilDate, *, engine: str = "hijri") -> CivilDate:
    return day_count_to_gregorian(hijri_to_day_count(d, engine=engine))

# ============================================================
# Calendar structure
# ============================================================

def is_leap_year(calendar: CalendarLike, year: int) -> bool:
    return get_engine(calendar).is_leap_year(year)

def days_in_month(calendar: CalendarLike, year: int, month: int) -> int:
    return get_engine(calendar).month_length(year, month)

def days_in_year(calendar: CalendarLike, year: int) -> int:
    return get_engine(calendar).year_length(year)

# ============================================================
# Python date interop
# ============================================================

def from_date(d: date, calendar: CalendarLike = CalendarSystem.JALALI) -> CivilDate:
    return from_day_count(calendar, to_jdn(d))

def to_date(d: CivilDate, calendar: CalendarLike = CalendarSystem.JALALI) -> date:
    g = day_count_to_gregorian(to_day_count(calendar, d.year, d.month, d.day))
    return date(g.year, g.month + 1, g.day)

def today(calendar: CalendarLike = CalendarSystem.JALALI, *, zone: ZoneLike = None) -> CivilDate:
    jdn, _ = split_local_millis(instant_to_local(now_millis(), resolve_zone(zone)))
    return from_day_count(calendar, jdn)
