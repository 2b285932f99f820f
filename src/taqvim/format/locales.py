"""
taqvim.format.locales
---------------------
Name tables and digit glyphs for the two supported locales ("en", "fa").
Pure lookups; callers pass the locale explicitly.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..core.types import CalendarSystem

LOCALES = ("en", "fa")

DIGITS: Dict[str, str] = {
    "ascii": "0123456789",
    "persian": "۰۱۲۳۴۵۶۷۸۹",
    "arabic": "٠١٢٣٤٥٦٧٨٩",
}

_TO_ASCII = str.maketrans(DIGITS["persian"] + DIGITS["arabic"], DIGITS["ascii"] * 2)
_FROM_ASCII = {style: str.maketrans(DIGITS["ascii"], glyphs) for style, glyphs in DIGITS.items()}


# ============================================================
# MONTHS
# ============================================================

_MONTHS: Dict[Tuple[CalendarSystem, str], Tuple[str, ...]] = {
    (CalendarSystem.JALALI, "en"): (
        "Farvardin", "Ordibehesht", "Khordad", "Tir", "Mordad", "Shahrivar",
        "Mehr", "Aban", "Azar", "Dey", "Bahman", "Esfand",
    ),
    (CalendarSystem.JALALI, "fa"): (
        "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
        "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
    ),
    (CalendarSystem.GREGORIAN, "en"): (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    (CalendarSystem.GREGORIAN, "fa"): (
        "ژانویه", "فوریه", "مارس", "آوریل", "مه", "ژوئن",
        "ژوئیه", "اوت", "سپتامبر", "اکتبر", "نوامبر", "دسامبر",
    ),
    (CalendarSystem.HIJRI, "en"): (
        "Muharram", "Safar", "Rabi al-Awwal", "Rabi al-Thani", "Jumada al-Awwal", "Jumada al-Thani",
        "Rajab", "Shaban", "Ramadan", "Shawwal", "Dhu al-Qadah", "Dhu al-Hijjah",
    ),
    (CalendarSystem.HIJRI, "fa"): (
        "محرم", "صفر", "ربیع الاول", "ربیع الثانی", "جمادی الاول", "جمادی الثانی",
        "رجب", "شعبان", "رمضان", "شوال", "ذیقعده", "ذیحجه",
    ),
}

_MONTHS_SHORT_EN: Dict[CalendarSystem, Tuple[str, ...]] = {
    CalendarSystem.JALALI: ("Far", "Ord", "Kho", "Tir", "Mor", "Sha", "Meh", "Aba", "Aza", "Dey", "Bah", "Esf"),
    CalendarSystem.GREGORIAN: ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    CalendarSystem.HIJRI: ("Muh", "Saf", "Rb1", "Rb2", "Jm1", "Jm2", "Raj", "Shb", "Ram", "Shw", "DhQ", "DhH"),
}


# ============================================================
# WEEKDAYS (Python numbering, Monday=0)
# ============================================================

_WEEKDAYS: Dict[str, Tuple[str, ...]] = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "fa": ("دوشنبه", "سه‌شنبه", "چهارشنبه", "پنج‌شنبه", "جمعه", "شنبه", "یک‌شنبه"),
}

_WEEKDAYS_SHORT: Dict[str, Tuple[str, ...]] = {
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    "fa": ("د", "س", "چ", "پ", "ج", "ش", "ی"),
}

_MERIDIEM: Dict[str, Tuple[str, str]] = {
    "en": ("am", "pm"),
    "fa": ("ق.ظ", "ب.ظ"),
}


def check_locale(locale: str) -> str:
    if locale not in LOCALES:
        raise ValueError(f"Unknown locale '{locale}'. Available: {list(LOCALES)}")
    return locale

def default_digits(locale: str) -> str:
    return "persian" if check_locale(locale) == "fa" else "ascii"

def month_names(system: CalendarSystem, locale: str = "en", *, short: bool = False) -> Tuple[str, ...]:
    check_locale(locale)
    if short and locale == "en":
        return _MONTHS_SHORT_EN[system]
    return _MONTHS[(system, locale)]

def month_name(system: CalendarSystem, index: int, locale: str = "en", *, short: bool = False) -> str:
    return month_names(system, locale, short=short)[index]

def weekday_names(locale: str = "en", *, short: bool = False) -> Tuple[str, ...]:
    check_locale(locale)
    return (_WEEKDAYS_SHORT if short else _WEEKDAYS)[locale]

def weekday_name(weekday: int, locale: str = "en", *, short: bool = False) -> str:
    return weekday_names(locale, short=short)[weekday]

def meridiem(pm: bool, locale: str = "en", *, upper: bool = False) -> str:
    text = _MERIDIEM[check_locale(locale)][1 if pm else 0]
    return text.upper() if upper else text

def meridiem_names() -> Dict[str, bool]:
    """Every accepted am/pm marker (lower-cased) -> is_pm."""
    return {text.lower(): bool(i) for pair in _MERIDIEM.values() for i, text in enumerate(pair)}


# ============================================================
# DIGITS
# ============================================================

def digit_glyph(d: int, digits: str = "persian") -> str:
    return DIGITS[digits][d]

def to_locale_digits(text: str, digits: str = "persian") -> str:
    if digits not in DIGITS:
        raise ValueError(f"Unknown digit style '{digits}'. Available: {sorted(DIGITS)}")
    return text.translate(_FROM_ASCII[digits])

def to_ascii_digits(text: str) -> str:
    """Persian and Arabic-Indic digits -> ASCII; everything else untouched."""
    return text.translate(_TO_ASCII)
