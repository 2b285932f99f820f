from __future__ import annotations

from typing import Dict

from ..core.types import EngineSpec
from .gregorian import GregorianParams, WeekParams
from .hijri import HijriParams
from .hijri_table import iran_official_table
from .jalali import JalaliParams


# ============================================================
# CONSTANTS
# ============================================================

# Saturday-first week with Friday off (Iranian civil usage)
WEEK_IRAN = WeekParams(first_weekday=5, weekend=(4,))
# Sunday-first week with Saturday/Sunday off
WEEK_WESTERN = WeekParams(first_weekday=6, weekend=(5, 6))

# 1403/01/01 (Nowruz) fell on 2024-03-20; 1948320 is the resulting JDN of 1/01/01.
JALALI_EPOCH_JDN = 1948320

# 1 Muharram 1 AH, civil (Friday) epoch: 622-07-16 Julian.
HIJRI_EPOCH_JDN = 1948440


# ============================================================
# SPECS
# ============================================================

GREGORIAN = EngineSpec(
    kind="gregorian",
    name="gregorian",
    params=GregorianParams(week=WEEK_WESTERN),
    meta={"description": "Proleptic Gregorian"},
)

JALALI = EngineSpec(
    kind="jalali",
    name="jalali",
    params=JalaliParams(epoch_jdn=JALALI_EPOCH_JDN, week=WEEK_IRAN),
    meta={"description": "Persian solar calendar, 33-year leap cycle"},
)

HIJRI = EngineSpec(
    kind="hijri",
    name="hijri",
    params=HijriParams(epoch_jdn=HIJRI_EPOCH_JDN, table=iran_official_table(), week=WEEK_IRAN),
    meta={"description": "Hijri lunar calendar, Iranian official months 1340-1448 AH, tabular elsewhere"},
)

HIJRI_TABULAR = EngineSpec(
    kind="hijri",
    name="hijri-tabular",
    params=HijriParams(epoch_jdn=HIJRI_EPOCH_JDN, week=WEEK_IRAN),
    meta={"description": "Hijri lunar calendar, pure 30-year tabular arithmetic"},
)

ALL_SPECS: Dict[str, EngineSpec] = {
    spec.name: spec for spec in (GREGORIAN, JALALI, HIJRI, HIJRI_TABULAR)
}
