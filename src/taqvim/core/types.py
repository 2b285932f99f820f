from __future__ import annotations
from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Literal, Optional


class CalendarSystem(str, Enum):
    GREGORIAN = "gregorian"
    JALALI = "jalali"
    HIJRI = "hijri"


class Field(IntEnum):
    """Calendar field indices accepted by CalendarState.get/set/add/roll."""
    YEAR = 1
    MONTH = 2
    WEEK_OF_YEAR = 3
    WEEK_OF_MONTH = 4
    DAY_OF_MONTH = 5
    DAY_OF_YEAR = 6
    DAY_OF_WEEK = 7
    DAY_OF_WEEK_IN_MONTH = 8
    AM_PM = 9
    HOUR = 10
    HOUR_OF_DAY = 11
    MINUTE = 12
    SECOND = 13
    MILLISECOND = 14


@dataclass(frozen=True, order=True)
class CivilDate:
    """A (year, month, day) triple; month is 0-based (0..11)."""
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"


@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23):
            raise ValueError("hour must be in 0..23")
        if not (0 <= self.minute <= 59):
            raise ValueError("minute must be in 0..59")
        if not (0 <= self.second <= 59):
            raise ValueError("second must be in 0..59")
        if not (0 <= self.millisecond <= 999):
            raise ValueError("millisecond must be in 0..999")

    def to_millis(self) -> int:
        return ((self.hour * 60 + self.minute) * 60 + self.second) * 1000 + self.millisecond

    @classmethod
    def from_millis(cls, ms: int) -> "TimeOfDay":
        s, millis = divmod(ms, 1000)
        m, second = divmod(s, 60)
        hour, minute = divmod(m, 60)
        return cls(hour, minute, second, millis)


@dataclass(frozen=True)
class HijriDate:
    """A Hijri date plus whether it came from the official month table."""
    date: CivilDate
    official: bool

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day


@dataclass(frozen=True)
class FieldSnapshot:
    """Flat, order-independent copy of a CalendarState (persistence/IPC)."""
    calendar: str
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    instant_millis: int
    zone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldSnapshot":
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)


@dataclass(frozen=True)
class EngineSpec:
    """Named engine configuration: a params dataclass plus free-form metadata."""
    kind: Literal["gregorian", "jalali", "hijri"]
    name: str
    params: Any  # GregorianParams | JalaliParams | HijriParams
    meta: Optional[Dict[str, Any]] = None
