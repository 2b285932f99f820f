# tests/test_kernel.py

import random

import pytest

import taqvim
from taqvim import CivilDate, InvalidDate
from taqvim.core.time import from_jdn, jdn_to_ymd, to_jdn, ymd_to_jdn
from datetime import date


ENGINES = ["gregorian", "jalali", "hijri", "hijri-tabular"]


def test_jdn_date_roundtrip():
    random.seed(42)
    # year 1 - 9999 stays inside datetime.date
    for _ in range(10000):
        jdn_in = random.randint(1721426, 5373484)
        assert to_jdn(from_jdn(jdn_in)) == jdn_in


def test_known_jdns():
    assert ymd_to_jdn(2000, 1, 1) == 2451545
    assert ymd_to_jdn(1970, 1, 1) == 2440588
    assert jdn_to_ymd(2460390) == (2024, 3, 20)
    # JDN % 7 == 0 is a Monday
    assert 2460390 % 7 == date(2024, 3, 20).weekday()


@pytest.mark.parametrize("name", ENGINES)
def test_engine_roundtrip(name):
    k = taqvim.get_engine(name)
    rng = random.Random(7)
    years = [1, 2, 9998, 9999] + [rng.randint(1, 9999) for _ in range(3000)]
    for y in years:
        m = rng.randrange(12)
        d = rng.randint(1, k.month_length(y, m))
        n = k.to_day_count(y, m, d)
        assert k.from_day_count(n) == CivilDate(y, m, d)
    for y in (1, 9999):
        for m in (0, 11):
            d = k.month_length(y, m)
            assert k.from_day_count(k.to_day_count(y, m, d)) == CivilDate(y, m, d)


@pytest.mark.parametrize("name", ENGINES)
def test_consecutive_days_are_contiguous(name):
    k = taqvim.get_engine(name)
    start = k.to_day_count(1300, 0, 1) if name != "gregorian" else ymd_to_jdn(1900, 1, 1)
    prev = k.from_day_count(start)
    for n in range(start + 1, start + 60000):
        cur = k.from_day_count(n)
        if (cur.year, cur.month) == (prev.year, prev.month):
            assert cur.day == prev.day + 1
        else:
            assert cur.day == 1
            assert prev.day == k.month_length(prev.year, prev.month)
        prev = cur


@pytest.mark.parametrize("name", ENGINES)
def test_year_lengths_match_day_counts(name):
    k = taqvim.get_engine(name)
    for y in range(1300, 1500):
        assert k.to_day_count(y + 1, 0, 1) - k.to_day_count(y, 0, 1) == k.year_length(y)
        assert sum(k.month_length(y, m) for m in range(12)) == k.year_length(y)


def test_nowruz_1403():
    g = CivilDate(2024, 2, 20)
    j = CivilDate(1403, 0, 1)
    assert taqvim.gregorian_to_jalali(g) == j
    assert taqvim.jalali_to_gregorian(j) == g
    assert taqvim.jalali_to_day_count(j) == 2460390


def test_known_jalali_date():
    assert taqvim.gregorian_to_jalali(CivilDate(1979, 7, 18)) == CivilDate(1358, 4, 27)
    assert taqvim.jalali_to_gregorian(CivilDate(1358, 4, 27)) == CivilDate(1979, 7, 18)
    assert taqvim.gregorian_to_jalali(CivilDate(1970, 0, 1)) == CivilDate(1348, 9, 11)


def test_jalali_leap_years():
    k = taqvim.get_engine("jalali")
    assert k.is_leap_year(1403)
    assert not k.is_leap_year(1402)
    assert k.is_leap_year(1399)
    assert k.month_length(1403, 11) == 30
    assert k.month_length(1402, 11) == 29
    for y in range(1, 2000):
        assert k.year_length(y) == (366 if k.is_leap_year(y) else 365)
    # 8 leap years in every 33-year cycle
    assert sum(k.is_leap_year(y) for y in range(1, 34)) == 8


def test_jalali_month_lengths():
    k = taqvim.get_engine("jalali")
    assert [k.month_length(1402, m) for m in range(12)] == [31] * 6 + [30] * 5 + [29]


def test_gregorian_leap_years():
    k = taqvim.get_engine("gregorian")
    assert k.is_leap_year(2000)
    assert k.is_leap_year(2024)
    assert not k.is_leap_year(1900)
    assert not k.is_leap_year(2023)
    assert k.month_length(2024, 1) == 29


def test_tabular_hijri_leap_years():
    k = taqvim.get_engine("hijri-tabular")
    leaps = [y for y in range(1, 31) if k.is_leap_year(y)]
    assert leaps == [2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29]
    for y in range(1, 600):
        assert k.is_leap_year(y) == (k.year_length(y) == 355)
        assert k.month_length(y, 11) == (30 if k.is_leap_year(y) else 29)


def test_validation_rejects_bad_dates():
    k = taqvim.get_engine("jalali")
    with pytest.raises(InvalidDate):
        k.to_day_count(1402, 11, 30)
    with pytest.raises(InvalidDate):
        k.to_day_count(1402, 12, 1)
    with pytest.raises(InvalidDate):
        k.to_day_count(0, 0, 1)
    with pytest.raises(InvalidDate):
        taqvim.get_engine("gregorian").from_day_count(ymd_to_jdn(1, 1, 1) - 1)


@pytest.mark.parametrize("name", ["hijri", "hijri-tabular"])
def test_hijri_leap_year_means_thirty_day_last_month(name):
    k = taqvim.get_engine(name)
    for y in range(1300, 1500):
        assert k.is_leap_year(y) == (k.month_length(y, 11) == 30)
        assert k.month_length(y, 11) in (29, 30)


def test_official_hijri_leap_years_follow_the_table():
    k = taqvim.get_engine("hijri")
    for y in range(1340, 1449):
        assert k.is_leap_year(y) == (k.month_length(y, 11) == 30)
    # 355 days with a 29-day Dhu al-Hijjah is not a leap year
    assert k.year_length(1347) == 355
    assert k.month_length(1347, 11) == 29
    assert not k.is_leap_year(1347)


def test_gregorian_february_boundary():
    k = taqvim.get_engine("gregorian")
    n = k.to_day_count(2024, 1, 28)
    assert k.from_day_count(n + 1) == CivilDate(2024, 1, 29)
    assert k.from_day_count(n + 2) == CivilDate(2024, 2, 1)
