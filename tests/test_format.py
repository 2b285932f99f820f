# tests/test_format.py

import pytest

from taqvim import (
    CalendarState,
    CivilDate,
    DateFormat,
    ParseError,
    format_date,
    long_date,
    parse_date,
    parse_lenient,
    parse_or_none,
    short_date,
)
from taqvim.format.locales import digit_glyph, to_ascii_digits, to_locale_digits
from taqvim.format.pattern import compile_pattern


def jal(y, m, d, *time):
    return CalendarState.of("jalali", y, m, d, *time, zone="UTC")


def ymd(st):
    return (st.year, st.month, st.day)


# ---------------------------------------------------------
# Patterns
# ---------------------------------------------------------

def test_compile_pattern_tokens():
    p = compile_pattern("yyyy/MM/dd")
    assert p.fields == ("yyyy", "MM", "dd")
    assert [t.text for t in p.tokens] == ["yyyy", "/", "MM", "/", "dd"]
    assert compile_pattern("MMMM").fields == ("MMMM",)
    assert compile_pattern("'yyyy' yyyy").fields == ("yyyy",)
    assert compile_pattern("hh 'o''clock'").tokens[-1].text == " o'clock"


def test_unterminated_quote():
    with pytest.raises(ValueError):
        compile_pattern("yyyy 'year")


def test_split_date_time():
    head, sep, tail = compile_pattern("yyyy/MM/dd HH:mm").split_date_time()
    assert head.source == "yyyy/MM/dd"
    assert sep.source == " "
    assert tail.source == "HH:mm"
    assert compile_pattern("yyyy/MM/dd").split_date_time() is None
    assert compile_pattern("HH yyyy mm").split_date_time() is None


# ---------------------------------------------------------
# Formatting
# ---------------------------------------------------------

def test_format_numeric():
    st = jal(1402, 8, 15)
    assert format_date(st) == "1402/09/15"
    assert format_date(st, "yy-M-d") == "02-9-15"
    assert format_date(st, "yyyy/MM/dd", digits="persian") == "۱۴۰۲/۰۹/۱۵"
    assert format_date(st, "yyyy/MM/dd", digits="arabic") == "١٤٠٢/٠٩/١٥"


def test_format_civil_date_needs_calendar():
    assert format_date(CivilDate(2024, 2, 20), "yyyy-MM-dd", calendar="gregorian") == "2024-03-20"


def test_format_names():
    st = jal(1403, 0, 1)
    assert format_date(st, "dddd d MMMM yyyy") == "Wednesday 1 Farvardin 1403"
    assert format_date(st, "ddd d MMM") == "Wed 1 Far"
    assert long_date(st) == "چهارشنبه ۱ فروردین ۱۴۰۳"
    assert long_date(st, locale="en") == "Wednesday 1 Farvardin 1403"
    assert format_date(st.with_calendar("gregorian"), "d MMMM yyyy") == "20 March 2024"


def test_format_twelve_hour_clock():
    assert format_date(jal(1403, 0, 1, 15, 5), "hh:mm a") == "03:05 pm"
    assert format_date(jal(1403, 0, 1, 0, 5), "h:mm A") == "12:05 AM"
    assert format_date(jal(1403, 0, 1, 12, 0), "h a", locale="fa") == "۱۲ ب.ظ"
    assert format_date(jal(1403, 0, 1, 9, 7, 3), "HH:mm:ss") == "09:07:03"


def test_format_quoted_literals():
    st = jal(1403, 0, 1)
    assert format_date(st, "yyyy 'year' MM") == "1403 year 01"
    assert format_date(st, "dd 'of' MMMM") == "01 of Farvardin"


def test_short_date():
    st = jal(1403, 0, 1)
    assert short_date(st) == "1403/01/01"
    assert short_date(st, "-") == "1403-01-01"
    assert short_date(st, "'") == "1403'01'01"
    assert short_date(st, locale="fa") == "۱۴۰۳/۰۱/۰۱"


def test_format_does_not_mutate():
    st = jal(1403, 0, 1, 8)
    before = st.snapshot()
    DateFormat("dddd yyyy/MM/dd HH:mm", locale="fa").format(st)
    assert st.snapshot() == before


def test_digit_helpers():
    assert to_ascii_digits("۱۴۰۲/٠٧/20") == "1402/07/20"
    assert to_locale_digits("2024-03") == "۲۰۲۴-۰۳"
    assert digit_glyph(3) == "۳"
    assert digit_glyph(3, "arabic") == "٣"
    assert digit_glyph(7, "ascii") == "7"
    with pytest.raises(ValueError):
        to_locale_digits("1", "roman")
    with pytest.raises(ValueError):
        DateFormat("yyyy", locale="de")


# ---------------------------------------------------------
# Parsing
# ---------------------------------------------------------

def test_parse_default_pattern():
    st = parse_date("1402/07/20", zone="UTC")
    assert ymd(st) == (1402, 6, 20)
    assert st.hour == 0


def test_parse_persian_digits_and_flexible_delimiters():
    assert ymd(parse_date("۱۴۰۲/۰۷/۲۰", zone="UTC")) == (1402, 6, 20)
    assert ymd(parse_date("1402-07-20", zone="UTC")) == (1402, 6, 20)
    assert ymd(parse_date(" 1402.07.20 ", zone="UTC")) == (1402, 6, 20)


def test_parse_names():
    st = parse_date("1 Farvardin 1403", "d MMMM yyyy", zone="UTC")
    assert ymd(st) == (1403, 0, 1)
    st = parse_date("چهارشنبه ۱ فروردین ۱۴۰۳", "dddd d MMMM yyyy", zone="UTC")
    assert ymd(st) == (1403, 0, 1)
    st = parse_date("20 march 2024", "d MMMM yyyy", calendar="gregorian", zone="UTC")
    assert ymd(st) == (2024, 2, 20)


def test_parse_date_and_time():
    st = parse_date("1402/07/20 14:30:05", "yyyy/MM/dd HH:mm:ss", zone="UTC")
    assert ymd(st) == (1402, 6, 20)
    assert (st.hour, st.minute, st.second) == (14, 30, 5)

    st = parse_date("14:30 1402/07/20", "HH:mm yyyy/MM/dd", zone="UTC")
    assert (st.hour, st.minute) == (14, 30)
    assert ymd(st) == (1402, 6, 20)


def test_parse_twelve_hour_clock():
    pattern = "yyyy/MM/dd hh:mm a"
    assert parse_date("1403/01/01 03:05 PM", pattern, zone="UTC").hour == 15
    assert parse_date("1403/01/01 12:00 am", pattern, zone="UTC").hour == 0
    assert parse_date("1403/01/01 12:00 pm", pattern, zone="UTC").hour == 12
    assert parse_date("1403/01/01 03:05 ب.ظ", pattern, zone="UTC").hour == 15
    # without a marker the hour is read as AM
    assert parse_date("1403/01/01 03", "yyyy/MM/dd hh", zone="UTC").hour == 3


@pytest.mark.parametrize("text", [
    "1402/07/20 13:30 AM",
    "1402/07/20 13:30 PM",
    "1402/07/20 00:30 pm",
])
def test_parse_twelve_hour_clock_out_of_range(text):
    with pytest.raises(ParseError) as ei:
        parse_date(text, "yyyy/MM/dd hh:mm a", zone="UTC")
    assert ei.value.text == text
    assert "12-hour" in ei.value.reason


def test_parse_two_digit_year():
    p = "yy/MM/dd"
    assert parse_date("03/01/01", p, zone="UTC", reference_year=1402).year == 1403
    assert parse_date("99/01/01", p, zone="UTC", reference_year=1402).year == 1399
    assert parse_date("60/01/01", p, zone="UTC", reference_year=1402).year == 1360


def test_parse_missing_year_uses_reference():
    st = parse_date("07/20", "MM/dd", zone="UTC", reference_year=1400)
    assert ymd(st) == (1400, 6, 20)


def test_parse_quoted_literals():
    st = parse_date("1403 year 05", "yyyy 'year' MM", zone="UTC")
    assert ymd(st) == (1403, 4, 1)
    with pytest.raises(ParseError):
        parse_date("1403 month 05", "yyyy 'year' MM", zone="UTC")


def test_parse_error_attributes():
    with pytest.raises(ParseError) as ei:
        parse_date("abc", "yyyy/MM/dd")
    e = ei.value
    assert e.text == "abc"
    assert e.pattern == "yyyy/MM/dd"
    assert isinstance(e, ValueError)
    assert "abc" in str(e)


def test_parse_invalid_values_are_parse_errors():
    with pytest.raises(ParseError) as ei:
        parse_date("1402/12/30", zone="UTC")
    assert ei.value.__cause__ is not None
    with pytest.raises(ParseError):
        parse_date("1402/13/01", zone="UTC")
    with pytest.raises(ParseError):
        parse_date("1402/01/01 25:00", "yyyy/MM/dd HH:mm", zone="UTC")


def test_dateformat_parse_roundtrip():
    fmt = DateFormat("dddd d MMMM yyyy HH:mm", locale="fa")
    st = jal(1403, 6, 12, 18, 40)
    back = fmt.parse(fmt.format(st), zone="UTC")
    assert back == st


def test_parse_or_none():
    assert parse_or_none("") is None
    assert parse_or_none("   ") is None
    assert parse_or_none(None) is None
    assert parse_or_none("garbage") is None
    assert parse_or_none("1402/12/30") is None
    assert ymd(parse_or_none("1403-1-5", zone="UTC")) == (1403, 0, 5)
    assert ymd(parse_or_none("05 01 1403", "dd MM yyyy", zone="UTC")) == (1403, 0, 5)


def test_parse_lenient():
    assert ymd(parse_lenient("1403/1/5", zone="UTC")) == (1403, 0, 5)
    assert ymd(parse_lenient("۱۴۰۳.۰۱.۰۵", zone="UTC")) == (1403, 0, 5)
    with pytest.raises(ParseError):
        parse_lenient("1403/1-5")
    with pytest.raises(ParseError):
        parse_lenient("1402-12-30")
