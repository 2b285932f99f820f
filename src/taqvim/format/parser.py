"""
taqvim.format.parser
--------------------
Pattern -> regular expression with one capture group per field token.

Input is normalized to ASCII digits before matching. A pattern holding one
run of date fields and one run of time fields is matched as a whole to find
the two substrings, and each is then parsed against its own sub-pattern.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Dict, Optional, Tuple

from ..api import CalendarLike, engine_name, get_engine, today
from ..core.errors import InvalidDate, ParseError
from ..core.time import ZoneLike
from ..core.types import CalendarSystem
from ..state import CalendarState
from .locales import LOCALES, meridiem_names, month_names, to_ascii_digits, weekday_names
from .pattern import Pattern, Token, compile_pattern

log = logging.getLogger(__name__)

DELIMITERS = "/-.: ,"

_NUMERIC = {
    "yyyy": "[0-9]{4}", "yy": "[0-9]{2}",
    "MM": "[0-9]{2}", "M": "[0-9]{1,2}",
    "dd": "[0-9]{2}", "d": "[0-9]{1,2}",
    "HH": "[0-9]{2}", "H": "[0-9]{1,2}",
    "hh": "[0-9]{2}", "h": "[0-9]{1,2}",
    "mm": "[0-9]{2}", "m": "[0-9]{1,2}",
    "ss": "[0-9]{2}", "s": "[0-9]{1,2}",
}


def _alternation(names) -> str:
    return "|".join(re.escape(n) for n in sorted(set(names), key=len, reverse=True))


def _name_tables(system: CalendarSystem) -> Dict[str, Dict[str, int]]:
    months: Dict[str, int] = {}
    for loc in LOCALES:
        for short in (False, True):
            for i, n in enumerate(month_names(system, loc, short=short)):
                months.setdefault(n.lower(), i)
    weekdays: Dict[str, int] = {}
    for loc in LOCALES:
        for short in (False, True):
            for i, n in enumerate(weekday_names(loc, short=short)):
                weekdays.setdefault(n.lower(), i)
    return {"month": months, "weekday": weekdays, "meridiem": {k: int(v) for k, v in meridiem_names().items()}}


def _token_regex(tok: Token, tables: Dict[str, Dict[str, int]]) -> str:
    if not tok.is_field:
        if tok.text and all(c in DELIMITERS for c in tok.text):
            return r"[/\-.:\s,]+"
        return re.escape(tok.text)
    if tok.text in _NUMERIC:
        return f"({_NUMERIC[tok.text]})"
    if tok.text in ("MMMM", "MMM"):
        return f"({_alternation(tables['month'])})"
    if tok.text in ("dddd", "DDDD", "ddd"):
        return f"({_alternation(tables['weekday'])})"
    return f"({_alternation(tables['meridiem'])})"  # a / A


class _Matcher:
    def __init__(self, pattern: Pattern, system: CalendarSystem):
        self.pattern = pattern
        self.tables = _name_tables(system)
        self.body = "".join(_token_regex(t, self.tables) for t in pattern.tokens)
        self.regex = re.compile(r"\s*" + self.body + r"\s*", re.IGNORECASE)

    def extract(self, text: str) -> Dict[str, int]:
        m = self.regex.fullmatch(text)
        if m is None:
            raise ParseError(text, self.pattern.source, "text does not match pattern")
        out: Dict[str, int] = {}
        for code, raw in zip(self.pattern.fields, m.groups()):
            key, value = self._value(code, raw)
            if key is not None:
                out[key] = value
        return out

    def _value(self, code: str, raw: str) -> Tuple[Optional[str], int]:
        if code == "yyyy":
            return "year", int(raw)
        if code == "yy":
            return "yy", int(raw)
        if code in ("MM", "M"):
            return "month", int(raw) - 1
        if code in ("MMMM", "MMM"):
            return "month", self.tables["month"][raw.lower()]
        if code in ("dd", "d"):
            return "day", int(raw)
        if code in ("HH", "H"):
            return "hour", int(raw)
        if code in ("hh", "h"):
            return "hour12", int(raw)
        if code in ("mm", "m"):
            return "minute", int(raw)
        if code in ("ss", "s"):
            return "second", int(raw)
        if code in ("a", "A"):
            return "pm", self.tables["meridiem"][raw.lower()]
        return None, 0  # weekday names are matched but carry no information


@lru_cache(maxsize=128)
def _matcher(source: str, system: CalendarSystem) -> _Matcher:
    return _Matcher(compile_pattern(source), system)


def _expand_year(yy: int, reference: int) -> int:
    """Two-digit year -> the full year closest to `reference`."""
    year = reference - reference % 100 + yy
    if year > reference + 50:
        year -= 100
    elif year < reference - 50:
        year += 100
    return year


def extract_fields(text: str, pattern: Pattern, system: CalendarSystem) -> Dict[str, int]:
    """Raw field values keyed by name; raises ParseError on mismatch."""
    split = pattern.split_date_time()
    if split is None:
        return _matcher(pattern.source, system).extract(text)

    head, sep, tail = (_matcher(p.source, system) for p in split)
    whole = re.fullmatch(
        rf"\s*(?P<head>{head.body})(?:{sep.body})(?P<tail>{tail.body})\s*", text, re.IGNORECASE,
    )
    if whole is None:
        raise ParseError(text, pattern.source, "text does not match pattern")
    out = head.extract(whole.group("head"))
    out.update(tail.extract(whole.group("tail")))
    return out


def parse(
    text: str,
    pattern: str = "yyyy/MM/dd",
    *,
    calendar: CalendarLike = CalendarSystem.JALALI,
    zone: ZoneLike = None,
    reference_year: Optional[int] = None,
) -> CalendarState:
    """Parse `text` into a new CalendarState, or raise ParseError."""
    p = compile_pattern(pattern)
    kernel = get_engine(calendar)
    normalized = to_ascii_digits(text)
    try:
        values = extract_fields(normalized, p, kernel.system)
    except ParseError as e:
        log.debug("parse failed: %s", e)
        raise ParseError(text, pattern, e.reason) from None

    if "year" not in values:
        if reference_year is None:
            reference_year = today(calendar, zone=zone).year
        year = _expand_year(values["yy"], reference_year) if "yy" in values else reference_year
    else:
        year = values["year"]

    hour = values.get("hour", 0)
    if "hour12" in values:
        if not (1 <= values["hour12"] <= 12):
            raise ParseError(text, pattern, f"12-hour clock value {values['hour12']} out of range 1..12")
        hour = values["hour12"] % 12 + 12 * values.get("pm", 0)
    elif "pm" in values and hour < 12:
        hour += 12 * values["pm"]

    try:
        return CalendarState.of(
            engine_name(calendar), year, values.get("month", 0), values.get("day", 1),
            hour, values.get("minute", 0), values.get("second", 0), zone=zone,
        )
    except InvalidDate as e:
        log.debug("parsed values rejected: %s", e)
        raise ParseError(text, pattern, str(e)) from e
