"""
taqvim.state
------------
CalendarState: one absolute instant plus its field breakdown in one calendar
system, kept consistent lazily.

Two flags say which side is authoritative:
  _fields_stale   the instant changed; (y, m, d, time) must be re-derived
  _instant_stale  a field changed; the instant must be re-derived
At most one of them is true. Resolving either side costs one kernel call,
after which reads are served from the cache until the next mutation.

Months are 0-based throughout (0..11).
"""

from __future__ import annotations

import copy
from datetime import date, datetime, timedelta, timezone
from functools import total_ordering
from typing import Optional, Tuple, Union

from .api import CalendarLike, engine_name, get_engine
from .core.errors import InvalidDate, UnsupportedField
from .core.time import (
    ZoneLike,
    from_jdn,
    instant_to_local,
    join_local_millis,
    local_to_instant,
    now_millis,
    resolve_zone,
    split_local_millis,
    to_jdn,
    zone_name,
)
from .core.types import CalendarSystem, CivilDate, Field, FieldSnapshot, HijriDate, TimeOfDay
from .engines._civil import from_day_of_year

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_NAIVE = datetime(1970, 1, 1)

_HOUR_MS = 3_600_000

# Fields whose arithmetic runs on the instant rather than the civil date.
_INSTANT_UNITS = {
    Field.AM_PM: 12 * _HOUR_MS,
    Field.HOUR: _HOUR_MS,
    Field.HOUR_OF_DAY: _HOUR_MS,
    Field.MINUTE: 60_000,
    Field.SECOND: 1000,
    Field.MILLISECOND: 1,
}

# Fields whose add() is a walk over days, with the step size in days.
_DAY_STEPS = {
    Field.DAY_OF_MONTH: 1,
    Field.DAY_OF_YEAR: 1,
    Field.DAY_OF_WEEK: 1,
    Field.WEEK_OF_YEAR: 7,
    Field.WEEK_OF_MONTH: 7,
    Field.DAY_OF_WEEK_IN_MONTH: 7,
}


def _field(f: Union[Field, int]) -> Field:
    try:
        return Field(f)
    except ValueError:
        raise UnsupportedField(f"Unknown calendar field {f!r}") from None

def _check(name: str, value: int, lo: int, hi: int) -> None:
    if not (lo <= value <= hi):
        raise InvalidDate(f"{name} {value} out of range {lo}..{hi}")


@total_ordering
class CalendarState:
    """Mutable date/time in one calendar system. Not thread-safe; copies are independent."""

    def __init__(self, calendar: CalendarLike = CalendarSystem.JALALI,
                 instant: Optional[int] = None, zone: ZoneLike = None):
        self._kernel = get_engine(calendar)
        self._calendar = engine_name(calendar)
        self._zone = resolve_zone(zone)

        self._instant = now_millis() if instant is None else int(instant)
        self._year = 0
        self._month = 0
        self._day = 0
        self._hour = 0
        self._minute = 0
        self._second = 0
        self._millis = 0
        self._day_count: Optional[int] = None

        self._fields_stale = True
        self._instant_stale = False

    # ---------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------
    @classmethod
    def now(cls, calendar: CalendarLike = CalendarSystem.JALALI, *, zone: ZoneLike = None) -> "CalendarState":
        return cls(calendar, None, zone)

    @classmethod
    def from_instant(cls, instant: int, calendar: CalendarLike = CalendarSystem.JALALI, *,
                     zone: ZoneLike = None) -> "CalendarState":
        return cls(calendar, instant, zone)

    @classmethod
    def of(cls, calendar: CalendarLike, year: int, month: int, day: int,
           hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0,
           *, zone: ZoneLike = None) -> "CalendarState":
        """Build from civil fields (0-based month). Raises InvalidDate."""
        st = cls(calendar, 0, zone)
        st.set_date(year, month, day)
        st.set_time(hour, minute, second, millisecond)
        return st

    @classmethod
    def from_datetime(cls, dt: datetime, calendar: CalendarLike = CalendarSystem.JALALI) -> "CalendarState":
        """Aware datetimes keep their tzinfo; naive ones are read as host-local wall time."""
        if dt.tzinfo is None:
            local = (dt - _EPOCH_NAIVE) // timedelta(milliseconds=1)
            return cls(calendar, local_to_instant(local, None), None)
        return cls(calendar, (dt - _EPOCH_UTC) // timedelta(milliseconds=1), dt.tzinfo)

    @classmethod
    def from_date(cls, d: date, calendar: CalendarLike = CalendarSystem.JALALI, *,
                  zone: ZoneLike = None) -> "CalendarState":
        """Gregorian date at local midnight."""
        st = cls(calendar, 0, zone)
        c = st._kernel.from_day_count(to_jdn(d))
        st._commit_fields(c.year, c.month, c.day, 0, 0, 0, 0, day_count=to_jdn(d))
        return st

    @classmethod
    def from_snapshot(cls, snap: FieldSnapshot) -> "CalendarState":
        """Restore fields and instant as stored; no kernel call."""
        st = cls(snap.calendar, snap.instant_millis, snap.zone)
        st._year, st._month, st._day = snap.year, snap.month, snap.day
        st._hour, st._minute, st._second, st._millis = snap.hour, snap.minute, snap.second, snap.millisecond
        st._fields_stale = False
        st._instant_stale = False
        return st

    # ---------------------------------------------------------
    # Cache maintenance
    # ---------------------------------------------------------
    def _resolve_fields(self) -> None:
        if not self._fields_stale:
            return
        jdn, tod = split_local_millis(instant_to_local(self._instant, self._zone))
        c = self._kernel.from_day_count(jdn)
        t = TimeOfDay.from_millis(tod)
        self._year, self._month, self._day = c.year, c.month, c.day
        self._hour, self._minute, self._second, self._millis = t.hour, t.minute, t.second, t.millisecond
        self._day_count = jdn
        self._fields_stale = False

    def _resolve_instant(self) -> None:
        if not self._instant_stale:
            return
        local = join_local_millis(self._jdn(), self._tod_millis())
        self._instant = local_to_instant(local, self._zone)
        self._instant_stale = False

    def _jdn(self) -> int:
        self._resolve_fields()
        if self._day_count is None:
            self._day_count = self._kernel.to_day_count(self._year, self._month, self._day)
        return self._day_count

    def _tod_millis(self) -> int:
        return TimeOfDay(self._hour, self._minute, self._second, self._millis).to_millis()

    def _commit_fields(self, y: int, m: int, d: int, h: int, mi: int, s: int, ms: int,
                       *, day_count: Optional[int] = None) -> None:
        self._year, self._month, self._day = y, m, d
        self._hour, self._minute, self._second, self._millis = h, mi, s, ms
        self._day_count = day_count
        self._instant_stale = True
        self._fields_stale = False

    def _commit_instant(self, instant: int) -> None:
        self._instant = instant
        self._day_count = None
        self._fields_stale = True
        self._instant_stale = False

    def _fields(self) -> Tuple[int, int, int, int, int, int, int]:
        self._resolve_fields()
        return (self._year, self._month, self._day,
                self._hour, self._minute, self._second, self._millis)

    # ---------------------------------------------------------
    # Basic properties
    # ---------------------------------------------------------
    @property
    def calendar(self) -> str:
        return self._calendar

    @property
    def system(self) -> CalendarSystem:
        return self._kernel.system

    @property
    def kernel(self):
        return self._kernel

    @property
    def zone(self):
        return self._zone

    @property
    def instant(self) -> int:
        self._resolve_instant()
        return self._instant

    @instant.setter
    def instant(self, value: int) -> None:
        self._commit_instant(int(value))

    @property
    def day_count(self) -> int:
        return self._jdn()

    @property
    def year(self) -> int:
        return self.get(Field.YEAR)

    @property
    def month(self) -> int:
        return self.get(Field.MONTH)

    @property
    def day(self) -> int:
        return self.get(Field.DAY_OF_MONTH)

    @property
    def hour(self) -> int:
        return self.get(Field.HOUR_OF_DAY)

    @property
    def minute(self) -> int:
        return self.get(Field.MINUTE)

    @property
    def second(self) -> int:
        return self.get(Field.SECOND)

    @property
    def millisecond(self) -> int:
        return self.get(Field.MILLISECOND)

    def weekday(self) -> int:
        """Python weekday of the local date (Monday=0)."""
        return self._jdn() % 7

    # ---------------------------------------------------------
    # get / set
    # ---------------------------------------------------------
    def get(self, field: Union[Field, int]) -> int:
        f = _field(field)
        y, m, d, h, mi, s, ms = self._fields()

        if f is Field.YEAR:
            return y
        if f is Field.MONTH:
            return m
        if f is Field.DAY_OF_MONTH:
            return d
        if f is Field.HOUR_OF_DAY:
            return h
        if f is Field.HOUR:
            return h % 12
        if f is Field.AM_PM:
            return 1 if h >= 12 else 0
        if f is Field.MINUTE:
            return mi
        if f is Field.SECOND:
            return s
        if f is Field.MILLISECOND:
            return ms
        if f is Field.DAY_OF_WEEK_IN_MONTH:
            return (d - 1) // 7 + 1

        dow = (self.weekday() - self._kernel.first_weekday) % 7
        if f is Field.DAY_OF_WEEK:
            return dow
        doy = self._kernel.day_of_year(y, m, d)
        if f is Field.DAY_OF_YEAR:
            return doy
        if f is Field.WEEK_OF_YEAR:
            return self._week_number(doy, dow)
        if f is Field.WEEK_OF_MONTH:
            return self._week_number(d, dow)
        raise UnsupportedField(f"Cannot get {f.name}")

    @staticmethod
    def _week_number(pos: int, dow: int) -> int:
        """Week of a period, given the 1-based position in it and today's week-relative weekday."""
        first = (dow - (pos - 1)) % 7
        return (pos - 1 + first) // 7 + 1

    def set(self, field: Union[Field, int], value: int) -> None:
        """Validate, then overwrite one field. Year/month changes clamp the day."""
        f = _field(field)
        k = self._kernel
        y, m, d, h, mi, s, ms = self._fields()

        if f is Field.YEAR:
            _check("year", value, k.min_year, k.max_year)
            y = value
            d = min(d, k.month_length(y, m))
        elif f is Field.MONTH:
            _check("month", value, 0, 11)
            m = value
            d = min(d, k.month_length(y, m))
        elif f is Field.DAY_OF_MONTH:
            _check("day", value, 1, k.month_length(y, m))
            d = value
        elif f is Field.DAY_OF_YEAR:
            _check("day of year", value, 1, k.year_length(y))
            m, d = from_day_of_year(k, y, value)
        elif f is Field.HOUR_OF_DAY:
            _check("hour", value, 0, 23)
            h = value
        elif f is Field.HOUR:
            _check("hour", value, 0, 11)
            h = value + (12 if h >= 12 else 0)
        elif f is Field.AM_PM:
            _check("am/pm", value, 0, 1)
            h = h % 12 + 12 * value
        elif f is Field.MINUTE:
            _check("minute", value, 0, 59)
            mi = value
        elif f is Field.SECOND:
            _check("second", value, 0, 59)
            s = value
        elif f is Field.MILLISECOND:
            _check("millisecond", value, 0, 999)
            ms = value
        else:
            raise UnsupportedField(f"Cannot set {f.name}")

        self._commit_fields(y, m, d, h, mi, s, ms)

    def set_date(self, year: int, month: int, day: int) -> None:
        self._kernel.validate(year, month, day)
        _, _, _, h, mi, s, ms = self._fields_or_zero()
        self._commit_fields(year, month, day, h, mi, s, ms)

    def set_time(self, hour: int, minute: int = 0, second: int = 0, millisecond: int = 0) -> None:
        _check("hour", hour, 0, 23)
        _check("minute", minute, 0, 59)
        _check("second", second, 0, 59)
        _check("millisecond", millisecond, 0, 999)
        y, m, d, *_ = self._fields()
        self._commit_fields(y, m, d, hour, minute, second, millisecond, day_count=self._day_count)

    def _fields_or_zero(self) -> Tuple[int, ...]:
        # set_date must work even if the stored instant lies outside the calendar's range.
        if self._fields_stale:
            tod = split_local_millis(instant_to_local(self._instant, self._zone))[1]
            t = TimeOfDay.from_millis(tod)
            return (0, 0, 0, t.hour, t.minute, t.second, t.millisecond)
        return self._fields()

    # ---------------------------------------------------------
    # add / roll
    # ---------------------------------------------------------
    def add(self, field: Union[Field, int], amount: int) -> None:
        """Calendar arithmetic; carries into higher fields."""
        f = _field(field)
        if f in _INSTANT_UNITS:
            if amount:
                self._move_instant(self.instant + amount * _INSTANT_UNITS[f])
            return
        if amount == 0:
            if f not in _DAY_STEPS and f not in (Field.YEAR, Field.MONTH):
                raise UnsupportedField(f"Cannot add to {f.name}")
            return

        k = self._kernel
        y, m, d, h, mi, s, ms = self._fields()
        if f is Field.YEAR:
            y += amount
            _check("year", y, k.min_year, k.max_year)
            d = min(d, k.month_length(y, m))
            self._commit_fields(y, m, d, h, mi, s, ms)
        elif f is Field.MONTH:
            y, m = divmod(y * 12 + m + amount, 12)
            _check("year", y, k.min_year, k.max_year)
            d = min(d, k.month_length(y, m))
            self._commit_fields(y, m, d, h, mi, s, ms)
        elif f in _DAY_STEPS:
            self._add_days(amount * _DAY_STEPS[f])
        else:
            raise UnsupportedField(f"Cannot add to {f.name}")

    def _add_days(self, n: int) -> None:
        # Walk month boundaries; every crossing re-reads the month length.
        k = self._kernel
        y, m, d, h, mi, s, ms = self._fields()
        known = self._day_count
        d += n
        while d > k.month_length(y, m):
            d -= k.month_length(y, m)
            m += 1
            if m > 11:
                m = 0
                y += 1
                _check("year", y, k.min_year, k.max_year)
        while d < 1:
            m -= 1
            if m < 0:
                m = 11
                y -= 1
                _check("year", y, k.min_year, k.max_year)
            d += k.month_length(y, m)
        self._commit_fields(y, m, d, h, mi, s, ms, day_count=None if known is None else known + n)

    def _move_instant(self, instant: int) -> None:
        # Derive eagerly so an out-of-range result is rejected before anything changes.
        jdn, tod = split_local_millis(instant_to_local(instant, self._zone))
        c = self._kernel.from_day_count(jdn)
        t = TimeOfDay.from_millis(tod)
        self._commit_fields(c.year, c.month, c.day, t.hour, t.minute, t.second, t.millisecond, day_count=jdn)
        self._instant = instant
        self._instant_stale = False

    def roll(self, field: Union[Field, int], up: bool = True) -> None:
        """Step one field by +-1, wrapping within its own period.

        MONTH is the exception: rolling past month 11 (or before month 0)
        also moves the year, matching long-standing behaviour of this API.
        """
        f = _field(field)
        delta = 1 if up else -1
        k = self._kernel
        y, m, d, h, mi, s, ms = self._fields()

        if f is Field.YEAR:
            y += delta
            _check("year", y, k.min_year, k.max_year)
            d = min(d, k.month_length(y, m))
        elif f is Field.MONTH:
            m += delta
            if m > 11:
                m, y = 0, y + 1
            elif m < 0:
                m, y = 11, y - 1
            _check("year", y, k.min_year, k.max_year)
            d = min(d, k.month_length(y, m))
        elif f is Field.DAY_OF_MONTH:
            d = (d - 1 + delta) % k.month_length(y, m) + 1
        elif f is Field.DAY_OF_YEAR:
            doy = (k.day_of_year(y, m, d) - 1 + delta) % k.year_length(y) + 1
            m, d = from_day_of_year(k, y, doy)
        elif f is Field.DAY_OF_WEEK:
            dow = self.get(Field.DAY_OF_WEEK)
            self._add_days((dow + delta) % 7 - dow)
            return
        elif f is Field.HOUR_OF_DAY:
            h = (h + delta) % 24
        elif f is Field.HOUR:
            h = (h % 12 + delta) % 12 + (12 if h >= 12 else 0)
        elif f is Field.AM_PM:
            h = (h + 12) % 24
        elif f is Field.MINUTE:
            mi = (mi + delta) % 60
        elif f is Field.SECOND:
            s = (s + delta) % 60
        elif f is Field.MILLISECOND:
            ms = (ms + delta) % 1000
        else:
            raise UnsupportedField(f"Cannot roll {f.name}")

        same_day = (y, m, d) == (self._year, self._month, self._day)
        self._commit_fields(y, m, d, h, mi, s, ms, day_count=self._day_count if same_day else None)

    # ---------------------------------------------------------
    # Copies
    # ---------------------------------------------------------
    def clone(self) -> "CalendarState":
        return copy.copy(self)

    def _plus(self, field: Field, amount: int) -> "CalendarState":
        c = self.clone()
        c.add(field, amount)
        return c

    def plus_days(self, n: int) -> "CalendarState":
        return self._plus(Field.DAY_OF_MONTH, n)

    def minus_days(self, n: int) -> "CalendarState":
        return self._plus(Field.DAY_OF_MONTH, -n)

    def plus_weeks(self, n: int) -> "CalendarState":
        return self._plus(Field.WEEK_OF_YEAR, n)

    def minus_weeks(self, n: int) -> "CalendarState":
        return self._plus(Field.WEEK_OF_YEAR, -n)

    def plus_months(self, n: int) -> "CalendarState":
        return self._plus(Field.MONTH, n)

    def minus_months(self, n: int) -> "CalendarState":
        return self._plus(Field.MONTH, -n)

    def plus_years(self, n: int) -> "CalendarState":
        return self._plus(Field.YEAR, n)

    def minus_years(self, n: int) -> "CalendarState":
        return self._plus(Field.YEAR, -n)

    def with_first_day_of_month(self) -> "CalendarState":
        c = self.clone()
        c.set(Field.DAY_OF_MONTH, 1)
        return c

    def with_last_day_of_month(self) -> "CalendarState":
        c = self.clone()
        c.set(Field.DAY_OF_MONTH, c.days_in_month())
        return c

    def with_first_day_of_year(self) -> "CalendarState":
        c = self.clone()
        c.set(Field.DAY_OF_YEAR, 1)
        return c

    def with_last_day_of_year(self) -> "CalendarState":
        c = self.clone()
        c.set(Field.DAY_OF_YEAR, c.days_in_year())
        return c

    def at_start_of_day(self) -> "CalendarState":
        c = self.clone()
        c.set_time(0, 0, 0, 0)
        return c

    def at_end_of_day(self) -> "CalendarState":
        c = self.clone()
        c.set_time(23, 59, 59, 999)
        return c

    def with_calendar(self, calendar: CalendarLike) -> "CalendarState":
        """Same instant and zone, viewed in another calendar system."""
        return CalendarState(calendar, self.instant, self._zone)

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------
    def is_leap_year(self) -> bool:
        return self._kernel.is_leap_year(self.year)

    def days_in_month(self) -> int:
        return self._kernel.month_length(self.year, self.month)

    def days_in_year(self) -> int:
        return self._kernel.year_length(self.year)

    def quarter(self) -> int:
        return self.month // 3 + 1

    def is_weekend(self) -> bool:
        return self.weekday() in self._kernel.weekend

    # Official holidays are not modelled; the weekly rest day is the only one.
    is_holiday = is_weekend

    def is_first_day_of_month(self) -> bool:
        return self.day == 1

    def is_last_day_of_month(self) -> bool:
        return self.day == self.days_in_month()

    def days_remaining_in_month(self) -> int:
        return self.days_in_month() - self.day

    # ---------------------------------------------------------
    # Comparison
    # ---------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarState):
            return NotImplemented
        return self.instant == other.instant

    def __lt__(self, other: "CalendarState") -> bool:
        if not isinstance(other, CalendarState):
            return NotImplemented
        return self.instant < other.instant

    __hash__ = None  # mutable

    def is_before(self, other: "CalendarState") -> bool:
        return self.instant < other.instant

    def is_after(self, other: "CalendarState") -> bool:
        return self.instant > other.instant

    def is_equal(self, other: "CalendarState") -> bool:
        return self.instant == other.instant

    def is_between(self, start: "CalendarState", end: "CalendarState") -> bool:
        """Inclusive on both ends."""
        return start.instant <= self.instant <= end.instant

    def _civil_of(self, other: "CalendarState") -> CivilDate:
        return self._kernel.from_day_count(other.day_count)

    def is_same_day(self, other: "CalendarState") -> bool:
        return self.day_count == other.day_count

    def is_same_month(self, other: "CalendarState") -> bool:
        o = self._civil_of(other)
        return (self.year, self.month) == (o.year, o.month)

    def is_same_year(self, other: "CalendarState") -> bool:
        return self.year == self._civil_of(other).year

    def days_between(self, other: "CalendarState") -> int:
        """This day count minus the other's (negative when self is earlier)."""
        return self.day_count - other.day_count

    def months_between(self, other: "CalendarState") -> int:
        """Whole months from `other` to self, in this calendar."""
        o = self._civil_of(other)
        diff = (self.year * 12 + self.month) - (o.year * 12 + o.month)
        if diff > 0 and self.day < o.day:
            diff -= 1
        elif diff < 0 and self.day > o.day:
            diff += 1
        return diff

    def age(self, at: Optional["CalendarState"] = None) -> int:
        """Completed years from self (a birth date) to `at` (default: now)."""
        if at is None:
            at = CalendarState(self._calendar, None, self._zone)
        o = self._civil_of(at)
        years = o.year - self.year
        if (o.month, o.day) < (self.month, self.day):
            years -= 1
        return years

    # ---------------------------------------------------------
    # Views
    # ---------------------------------------------------------
    def to_civil(self) -> CivilDate:
        y, m, d, *_ = self._fields()
        return CivilDate(y, m, d)

    def to_time(self) -> TimeOfDay:
        _, _, _, h, mi, s, ms = self._fields()
        return TimeOfDay(h, mi, s, ms)

    def to_gregorian(self) -> CivilDate:
        return get_engine(CalendarSystem.GREGORIAN).from_day_count(self.day_count)

    def to_jalali(self) -> CivilDate:
        return get_engine(CalendarSystem.JALALI).from_day_count(self.day_count)

    def to_hijri(self, *, engine: str = "hijri") -> HijriDate:
        return get_engine(engine).lookup(self.day_count)

    def to_date(self) -> date:
        return from_jdn(self.day_count)

    def to_datetime(self) -> datetime:
        dt = _EPOCH_UTC + timedelta(milliseconds=self.instant)
        return dt.astimezone(self._zone) if self._zone is not None else dt.astimezone()

    def snapshot(self) -> FieldSnapshot:
        y, m, d, h, mi, s, ms = self._fields()
        return FieldSnapshot(
            calendar=self._calendar,
            year=y, month=m, day=d,
            hour=h, minute=mi, second=s, millisecond=ms,
            instant_millis=self.instant,
            zone=zone_name(self._zone),
        )

    def format(self, pattern: str, *, locale: str = "en", digits: Optional[str] = None) -> str:
        from .format.formatter import DateFormat
        return DateFormat(pattern, locale=locale, digits=digits).format(self)

    def isoformat(self) -> str:
        y, m, d, h, mi, s, ms = self._fields()
        return f"{y:04d}-{m + 1:02d}-{d:02d}T{h:02d}:{mi:02d}:{s:02d}.{ms:03d}"

    def __repr__(self) -> str:
        return f"CalendarState({self._calendar!r}, {self.isoformat()})"
