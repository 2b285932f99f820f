# tests/test_api.py

from datetime import date

import pytest

import taqvim
from taqvim import CalendarSystem, CivilDate, EngineUnavailableError
from taqvim.core.types import EngineSpec
from taqvim.engines.gregorian import WeekParams
from taqvim.engines.hijri import HijriEngine, HijriParams
from taqvim.engines.specs import ALL_SPECS, HIJRI_EPOCH_JDN


def test_registry_lists_builtin_engines():
    assert taqvim.list_engines() == ["gregorian", "hijri", "hijri-tabular", "jalali"]
    assert set(ALL_SPECS) == set(taqvim.list_engines())


def test_engine_lookup_by_enum_or_name():
    assert taqvim.get_engine(CalendarSystem.JALALI) is taqvim.get_engine("jalali")
    assert taqvim.get_engine("hijri-tabular").system is CalendarSystem.HIJRI


def test_unknown_engine():
    with pytest.raises(EngineUnavailableError) as ei:
        taqvim.get_engine("julian")
    assert isinstance(ei.value, KeyError)
    assert "julian" in str(ei.value)
    assert "jalali" in str(ei.value)


def test_engine_info():
    info = taqvim.engine_info("jalali")
    assert info["name"] == "jalali"
    assert info["cycle_years"] == 33
    assert info["first_weekday"] == 5
    assert taqvim.engine_info("gregorian")["weekend"] == (5, 6)


def test_register_engine():
    spec = EngineSpec(
        kind="hijri",
        name="hijri-test",
        params=HijriParams(epoch_jdn=HIJRI_EPOCH_JDN, week=WeekParams(first_weekday=0, weekend=(4,))),
    )
    eng = taqvim.make_engine(spec)
    assert isinstance(eng, HijriEngine)
    taqvim.register_engine("hijri-test", eng)
    try:
        assert taqvim.get_engine("hijri-test") is eng
        with pytest.raises(KeyError):
            taqvim.register_engine("hijri-test", eng)
        taqvim.register_engine("hijri-test", eng, overwrite=True)
    finally:
        taqvim.api._reg()._engines.pop("hijri-test", None)


def test_make_engine_rejects_unknown_params():
    with pytest.raises(TypeError):
        taqvim.make_engine(EngineSpec(kind="julian", name="julian", params=object()))


def test_convert():
    j = CivilDate(1403, 0, 1)
    assert taqvim.convert(j, source="jalali", target="gregorian") == CivilDate(2024, 2, 20)
    assert taqvim.convert(j, source="jalali", target="jalali") == j
    h = taqvim.convert(j, source=CalendarSystem.JALALI, target=CalendarSystem.HIJRI)
    assert taqvim.convert(h, source="hijri", target="jalali") == j


def test_day_count_helpers():
    n = taqvim.to_day_count("jalali", 1403, 0, 1)
    assert n == 2460390
    assert taqvim.from_day_count("gregorian", n) == CivilDate(2024, 2, 20)
    assert taqvim.gregorian_to_day_count(CivilDate(2024, 2, 20)) == n
    assert taqvim.day_count_to_gregorian(n) == CivilDate(2024, 2, 20)
    assert taqvim.day_count_to_jalali(n) == CivilDate(1403, 0, 1)
    h = taqvim.day_count_to_hijri(n)
    assert h.official
    assert taqvim.hijri_to_day_count(h.date) == n


def test_python_date_interop():
    assert taqvim.from_date(date(2024, 3, 20)) == CivilDate(1403, 0, 1)
    assert taqvim.from_date(date(2024, 3, 20), "gregorian") == CivilDate(2024, 2, 20)
    assert taqvim.to_date(CivilDate(1403, 0, 1)) == date(2024, 3, 20)


def test_today_in_fixed_zone():
    t = taqvim.today("gregorian", zone="UTC")
    assert isinstance(t, CivilDate)
    assert t.year >= 2024


def test_year_queries():
    assert taqvim.is_leap_year("jalali", 1403)
    assert taqvim.days_in_month("jalali", 1402, 11) == 29
    assert taqvim.days_in_year("gregorian", 2024) == 366
    assert taqvim.days_in_year("hijri-tabular", 2) == 355


def test_civil_date_str():
    assert str(CivilDate(1403, 0, 1)) == "1403-01-01"
