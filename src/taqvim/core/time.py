"""
taqvim.core.time
----------------
The day-count timeline. Day counts are Julian Day Numbers (JDN, integer days,
civil midnight); instants are signed milliseconds since 1970-01-01T00:00Z.
"""

from __future__ import annotations

import time as _time
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Tuple, Union

from zoneinfo import ZoneInfo

ZoneLike = Union[str, tzinfo, None]

MILLIS_PER_DAY = 86_400_000
JDN_UNIX_EPOCH = 2440588  # 1970-01-01

# datetime can only express years 1..9999; keep a day of margin on both sides.
_MIN_TS = -62135596800 + 86400
_MAX_TS = 253402300799 - 86400
# Host-local rules go through the C library; stay inside 32-bit time_t.
_MIN_LOCAL_TS = -(2 ** 31)
_MAX_LOCAL_TS = 2 ** 31 - 1


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    return ymd_to_jdn(d.year, d.month, d.day)

def ymd_to_jdn(y: int, m: int, day: int) -> int:
    """Proleptic Gregorian (y, 1-based m, day) -> JDN."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045

def jdn_to_ymd(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of ymd_to_jdn (1-based month)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day

def from_jdn(jdn: int) -> date:
    return date(*jdn_to_ymd(jdn))


# ============================================================
# Instants
# ============================================================

def split_local_millis(local_ms: int) -> Tuple[int, int]:
    """Local wall-clock millis -> (JDN, millis into the day)."""
    days, tod = divmod(local_ms, MILLIS_PER_DAY)
    return JDN_UNIX_EPOCH + days, tod

def join_local_millis(jdn: int, tod_ms: int) -> int:
    return (jdn - JDN_UNIX_EPOCH) * MILLIS_PER_DAY + tod_ms

def now_millis() -> int:
    return _time.time_ns() // 1_000_000


# ============================================================
# Zone offsets
# ============================================================

def resolve_zone(zone: ZoneLike) -> Optional[tzinfo]:
    """None stays None (host rules); strings are IANA ids."""
    if zone is None or isinstance(zone, tzinfo):
        return zone
    if zone.upper() in ("UTC", "Z"):
        return timezone.utc
    fixed = parse_fixed_offset(zone)
    if fixed is not None:
        return fixed
    return ZoneInfo(zone)

def zone_name(zone: Optional[tzinfo]) -> Optional[str]:
    """Inverse of resolve_zone where the zone has a stable name."""
    if zone is None:
        return None
    if zone is timezone.utc:
        return "UTC"
    key = getattr(zone, "key", None)
    if key:
        return key
    if isinstance(zone, timezone):
        off = zone.utcoffset(None)
        total = int(off.total_seconds()) // 60
        sign = "+" if total >= 0 else "-"
        return f"{sign}{abs(total) // 60:02d}:{abs(total) % 60:02d}"
    return None

def parse_fixed_offset(text: str) -> Optional[timezone]:
    """'+03:30' / '-0500' -> timezone, else None."""
    t = text.strip()
    if len(t) < 3 or t[0] not in "+-":
        return None
    digits = t[1:].replace(":", "")
    if not digits.isdigit() or len(digits) not in (2, 4):
        return None
    hours = int(digits[:2])
    minutes = int(digits[2:]) if len(digits) == 4 else 0
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if t[0] == "-" else delta)

def utc_offset_millis(instant_ms: int, zone: Optional[tzinfo]) -> int:
    """Offset of `zone` from UTC at the given instant, in milliseconds."""
    seconds = instant_ms // 1000
    if zone is None:
        seconds = min(max(seconds, _MIN_LOCAL_TS), _MAX_LOCAL_TS)
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone()
    else:
        seconds = min(max(seconds, _MIN_TS), _MAX_TS)
        dt = datetime.fromtimestamp(seconds, tz=zone)
    off = dt.utcoffset()
    return 0 if off is None else off // timedelta(milliseconds=1)

def local_to_instant(local_ms: int, zone: Optional[tzinfo]) -> int:
    """Wall-clock millis in `zone` -> instant (two-pass offset lookup)."""
    off = utc_offset_millis(local_ms, zone)
    off = utc_offset_millis(local_ms - off, zone)
    return local_ms - off

def instant_to_local(instant_ms: int, zone: Optional[tzinfo]) -> int:
    return instant_ms + utc_offset_millis(instant_ms, zone)
