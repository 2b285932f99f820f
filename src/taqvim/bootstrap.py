from __future__ import annotations

import logging

from taqvim.core.engine import EngineRegistry
from taqvim.engines.factory import make_engine
from taqvim.engines.specs import ALL_SPECS

log = logging.getLogger(__name__)

def build_registry() -> EngineRegistry:
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec)
    log.debug("registry built: %s", sorted(engines))
    return EngineRegistry(engines)
