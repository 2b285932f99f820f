# tests/test_hijri.py

import pytest

import taqvim
from taqvim import CivilDate, HijriDate
from taqvim.core.time import ymd_to_jdn
from taqvim.engines.hijri_table import IRAN_MONTHS, OfficialMonthTable, iran_official_table


@pytest.fixture
def hijri():
    return taqvim.get_engine("hijri")


def test_table_coverage(hijri):
    t = hijri.table
    assert t.first_year == 1340
    assert t.last_year == 1448
    assert t.covers_year(1400)
    assert not t.covers_year(1339)
    assert not t.covers_year(1449)
    assert t.end_jdn - t.start_jdn == sum(sum(v) for v in IRAN_MONTHS.values())


def test_anchor_month(hijri):
    n = ymd_to_jdn(2025, 12, 22)
    assert hijri.to_day_count(1447, 6, 1) == n
    assert hijri.lookup(n) == HijriDate(CivilDate(1447, 6, 1), True)
    assert taqvim.gregorian_to_hijri(CivilDate(2025, 11, 22)).date == CivilDate(1447, 6, 1)
    assert taqvim.hijri_to_gregorian(CivilDate(1447, 6, 1)) == CivilDate(2025, 11, 22)


def test_official_month_lengths_are_used(hijri):
    for y in (1340, 1400, 1447, 1448):
        assert tuple(hijri.month_length(y, m) for m in range(12)) == IRAN_MONTHS[y]
        assert hijri.year_length(y) == sum(IRAN_MONTHS[y])
        assert hijri.is_leap_year(y) == (IRAN_MONTHS[y][11] == 30)


def test_official_flag(hijri):
    t = hijri.table
    assert hijri.lookup(t.start_jdn).official
    assert hijri.lookup(t.end_jdn - 1).official
    assert not hijri.lookup(t.start_jdn - 1).official
    assert not hijri.lookup(t.end_jdn).official
    assert not taqvim.day_count_to_hijri(ymd_to_jdn(2025, 1, 1), engine="hijri-tabular").official


def test_table_edges_are_continuous(hijri):
    # last day before the table is followed by 1 Muharram of the first table year
    before = hijri.lookup(hijri.table.start_jdn - 1).date
    assert before.year == 1339 and before.month == 11
    assert before.day == hijri.month_length(1339, 11)
    assert hijri.lookup(hijri.table.end_jdn).date == CivilDate(1449, 0, 1)

    assert hijri.to_day_count(1340, 0, 1) == hijri.table.start_jdn
    assert hijri.to_day_count(1449, 0, 1) == hijri.table.end_jdn
    assert hijri.to_day_count(1339, 11, before.day) + 1 == hijri.table.start_jdn


def test_official_and_tabular_stay_close(hijri):
    tab = taqvim.get_engine("hijri-tabular")
    for y in range(1340, 1449):
        for m in range(12):
            assert abs(hijri.to_day_count(y, m, 1) - tab.to_day_count(y, m, 1)) <= 3


def test_table_locate_roundtrip():
    t = iran_official_table()
    for n in range(t.start_jdn, t.end_jdn, 7):
        y, m, d = t.locate(n)
        assert t.to_day_count(y, m, d) == n


def test_table_validation():
    with pytest.raises(ValueError):
        OfficialMonthTable({}, 1, 0, 0)
    with pytest.raises(ValueError):
        OfficialMonthTable({1400: (30,) * 11}, 1400, 0, 0)
    with pytest.raises(ValueError):
        OfficialMonthTable({1400: (30, 29) * 6, 1402: (30, 29) * 6}, 1400, 0, 0)
    with pytest.raises(ValueError):
        OfficialMonthTable({1400: (31,) + (29,) * 11}, 1400, 0, 0)
    with pytest.raises(ValueError):
        OfficialMonthTable({1400: (30, 29) * 6}, 1401, 0, 0)
