from __future__ import annotations

from evocosm.evolution.engine.config import EngineConfig
from evocosm.evolution.engine.core import Engine
from evocosm.evolution.engine.metrics import EngineMetrics

__all__ = ["Engine", "EngineConfig", "EngineMetrics"]
