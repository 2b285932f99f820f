"""taqvim public API.

Gregorian, Jalali and Hijri calendars over one day-count timeline, a lazily
cached CalendarState, and a pattern formatter/parser.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_engines,
    engine_info,
    get_engine,
    make_engine,
    register_engine,
    to_day_count,
    from_day_count,
    convert,
    gregorian_to_day_count,
    day_count_to_gregorian,
    jalali_to_day_count,
    day_count_to_jalali,
    hijri_to_day_count,
    day_count_to_hijri,
    gregorian_to_jalali,
    jalali_to_gregorian,
    gregorian_to_hijri,
    hijri_to_gregorian,
    is_leap_year,
    days_in_month,
    days_in_year,
    from_date,
    to_date,
    today,
)
from .core.errors import EngineUnavailableError, InvalidDate, ParseError, TaqvimError, UnsupportedField
from .core.types import CalendarSystem, CivilDate, Field, FieldSnapshot, HijriDate, TimeOfDay
from .state import CalendarState
from .format.formatter import DateFormat, format_date, parse_date, parse_or_none, parse_lenient, long_date, short_date

__all__ = [
    "list_engines",
    "engine_info",
    "get_engine",
    "make_engine",
    "register_engine",
    "to_day_count",
    "from_day_count",
    "convert",
    "gregorian_to_day_count",
    "day_count_to_gregorian",
    "jalali_to_day_count",
    "day_count_to_jalali",
    "hijri_to_day_count",
    "day_count_to_hijri",
    "gregorian_to_jalali",
    "jalali_to_gregorian",
    "gregorian_to_hijri",
    "hijri_to_gregorian",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "from_date",
    "to_date",
    "today",
    "CalendarState",
    "CalendarSystem",
    "CivilDate",
    "Field",
    "FieldSnapshot",
    "HijriDate",
    "TimeOfDay",
    "DateFormat",
    "format_date",
    "parse_date",
    "parse_or_none",
    "parse_lenient",
    "long_date",
    "short_date",
    "TaqvimError",
    "InvalidDate",
    "ParseError",
    "UnsupportedField",
    "EngineUnavailableError",
]
