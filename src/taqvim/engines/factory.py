"""
taqvim.engines.factory
----------------------
Builds calendar kernels from the EngineSpec entries of specs.py.
"""

from __future__ import annotations

from taqvim.core.engine import CalendarKernel
from taqvim.core.types import EngineSpec
from taqvim.engines.gregorian import GregorianEngine, GregorianParams
from taqvim.engines.hijri import HijriEngine, HijriParams
from taqvim.engines.jalali import JalaliEngine, JalaliParams


def make_engine(spec: EngineSpec) -> CalendarKernel:
    """Dispatch on the params type."""
    p = spec.params
    if isinstance(p, GregorianParams):
        return GregorianEngine(p, name=spec.name)
    if isinstance(p, JalaliParams):
        return JalaliEngine(p, name=spec.name)
    if isinstance(p, HijriParams):
        return HijriEngine(p, name=spec.name)
    raise TypeError(f"Unknown engine params type: {type(p)}")
