"""
taqvim.format.formatter
-----------------------
DateFormat: render a CalendarState through a compiled pattern, and parse
strings back. Reading fields never mutates the state.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from ..api import CalendarLike
from ..core.errors import InvalidDate, ParseError
from ..core.time import ZoneLike
from ..core.types import CalendarSystem, CivilDate, Field
from ..state import CalendarState
from . import parser
from .locales import check_locale, default_digits, meridiem, month_name, to_ascii_digits, to_locale_digits, weekday_name
from .pattern import compile_pattern

DEFAULT_PATTERN = "yyyy/MM/dd"
LONG_PATTERN = "dddd d MMMM yyyy"

_LENIENT_RE = re.compile(r"\s*(\d{1,4})\s*([/.\-])\s*(\d{1,2})\s*\2\s*(\d{1,2})\s*")


class DateFormat:
    def __init__(self, pattern: str = DEFAULT_PATTERN, *, locale: str = "en", digits: Optional[str] = None):
        self.pattern = compile_pattern(pattern)
        self.locale = check_locale(locale)
        self.digits = digits or default_digits(locale)

    def __repr__(self) -> str:
        return f"DateFormat({self.pattern.source!r}, locale={self.locale!r}, digits={self.digits!r})"

    def format(self, state: CalendarState) -> str:
        parts = []
        for tok in self.pattern.tokens:
            if tok.is_field:
                parts.append(to_locale_digits(self._render(tok.text, state), self.digits))
            else:
                parts.append(tok.text)
        return "".join(parts)

    def _render(self, code: str, st: CalendarState) -> str:
        if code == "yyyy":
            return f"{st.get(Field.YEAR):04d}"
        if code == "yy":
            return f"{st.get(Field.YEAR) % 100:02d}"
        if code == "MMMM":
            return month_name(st.system, st.get(Field.MONTH), self.locale)
        if code == "MMM":
            return month_name(st.system, st.get(Field.MONTH), self.locale, short=True)
        if code == "MM":
            return f"{st.get(Field.MONTH) + 1:02d}"
        if code == "M":
            return str(st.get(Field.MONTH) + 1)
        if code in ("dddd", "DDDD"):
            return weekday_name(st.weekday(), self.locale)
        if code == "ddd":
            return weekday_name(st.weekday(), self.locale, short=True)
        if code == "dd":
            return f"{st.get(Field.DAY_OF_MONTH):02d}"
        if code == "d":
            return str(st.get(Field.DAY_OF_MONTH))
        if code == "HH":
            return f"{st.get(Field.HOUR_OF_DAY):02d}"
        if code == "H":
            return str(st.get(Field.HOUR_OF_DAY))
        if code in ("hh", "h"):
            h12 = st.get(Field.HOUR) or 12
            return f"{h12:02d}" if code == "hh" else str(h12)
        if code == "mm":
            return f"{st.get(Field.MINUTE):02d}"
        if code == "m":
            return str(st.get(Field.MINUTE))
        if code == "ss":
            return f"{st.get(Field.SECOND):02d}"
        if code == "s":
            return str(st.get(Field.SECOND))
        if code == "a":
            return meridiem(st.get(Field.AM_PM) == 1, self.locale)
        if code == "A":
            return meridiem(st.get(Field.AM_PM) == 1, self.locale, upper=True)
        raise ValueError(f"Unknown pattern token {code!r}")

    def parse(self, text: str, *, calendar: CalendarLike = CalendarSystem.JALALI,
              zone: ZoneLike = None, reference_year: Optional[int] = None) -> CalendarState:
        return parser.parse(text, self.pattern.source, calendar=calendar, zone=zone, reference_year=reference_year)


# ============================================================
# Helpers
# ============================================================

def _as_state(value: Union[CalendarState, CivilDate], calendar: CalendarLike) -> CalendarState:
    if isinstance(value, CivilDate):
        return CalendarState.of(calendar, value.year, value.month, value.day)
    return value

def format_date(
    value: Union[CalendarState, CivilDate],
    pattern: str = DEFAULT_PATTERN,
    *,
    calendar: CalendarLike = CalendarSystem.JALALI,
    locale: str = "en",
    digits: Optional[str] = None,
) -> str:
    """`calendar` is only used when `value` is a bare CivilDate."""
    return DateFormat(pattern, locale=locale, digits=digits).format(_as_state(value, calendar))

def parse_date(
    text: str,
    pattern: str = DEFAULT_PATTERN,
    *,
    calendar: CalendarLike = CalendarSystem.JALALI,
    zone: ZoneLike = None,
    reference_year: Optional[int] = None,
) -> CalendarState:
    return parser.parse(text, pattern, calendar=calendar, zone=zone, reference_year=reference_year)

def parse_or_none(
    text: Optional[str],
    pattern: Optional[str] = None,
    *,
    calendar: CalendarLike = CalendarSystem.JALALI,
    zone: ZoneLike = None,
) -> Optional[CalendarState]:
    """Like parse_date, but None for empty or unparseable input. Without a pattern, y/m/d is auto-detected."""
    if not text or not text.strip():
        return None
    try:
        if pattern is None:
            return parse_lenient(text, calendar=calendar, zone=zone)
        return parse_date(text, pattern, calendar=calendar, zone=zone)
    except ParseError:
        return None

def parse_lenient(text: str, *, calendar: CalendarLike = CalendarSystem.JALALI, zone: ZoneLike = None) -> CalendarState:
    """y/m/d with '/', '-' or '.' as the (consistent) delimiter and 1-based month."""
    m = _LENIENT_RE.fullmatch(to_ascii_digits(text))
    if m is None:
        raise ParseError(text, "y/M/d", "expected year, month and day separated by '/', '-' or '.'")
    y, mo, d = int(m.group(1)), int(m.group(3)), int(m.group(4))
    try:
        return CalendarState.of(calendar, y, mo - 1, d, zone=zone)
    except InvalidDate as e:
        raise ParseError(text, "y/M/d", str(e)) from e

def long_date(state: CalendarState, locale: str = "fa", digits: Optional[str] = None) -> str:
    """e.g. 'چهارشنبه ۱ فروردین ۱۴۰۳'."""
    return DateFormat(LONG_PATTERN, locale=locale, digits=digits).format(state)

def short_date(state: CalendarState, delimiter: str = "/", locale: str = "en", digits: Optional[str] = None) -> str:
    sep = delimiter.replace("'", "''")
    return DateFormat(f"yyyy'{sep}'MM'{sep}'dd", locale=locale, digits=digits).format(state)

__all__ = [
    "DateFormat",
    "format_date",
    "parse_date",
    "parse_or_none",
    "parse_lenient",
    "long_date",
    "short_date",
    "to_ascii_digits",
    "to_locale_digits",
]
