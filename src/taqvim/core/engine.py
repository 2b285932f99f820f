from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Tuple

from .errors import EngineUnavailableError
from .types import CalendarSystem, CivilDate

class CalendarKernel(Protocol):
    """Pure (y, m0, d) <-> day-count conversion for one calendar system."""
    system: CalendarSystem
    first_weekday: int         # Python weekday (Monday=0) that starts the week
    weekend: Tuple[int, ...]   # Python weekdays
    min_year: int
    max_year: int

    def info(self) -> Dict[str, Any]: ...
    def is_leap_year(self, year: int) -> bool: ...
    def month_length(self, year: int, month: int) -> int: ...
    def year_length(self, year: int) -> int: ...
    def day_of_year(self, year: int, month: int, day: int) -> int: ...
    def validate(self, year: int, month: int, day: int) -> None: ...
    def to_day_count(self, year: int, month: int, day: int) -> int: ...
    def from_day_count(self, n: int) -> CivilDate: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarKernel]

    def get(self, name: str) -> CalendarKernel:
        if name not in self._engines:
            raise EngineUnavailableError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarKernel, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
