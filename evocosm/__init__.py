"""
Evocosm - a toolkit for evolutionary algorithms.

Populations of caller-defined organisms are tested against a fitness
landscape, scaled, selected, bred and mutated generation after generation.
"""

__version__ = "4.0.0"

from evocosm.evolution.engine import Engine, EngineConfig, EngineMetrics
from evocosm.evolution.mutation import GeneWeights, Precision, RealGeneOps
from evocosm.evolution.roulette import RouletteWheel
from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies import *  # noqa: F401,F403
from evocosm.evolution.strategies import __all__ as _strategies_all
from evocosm.exceptions import (
    EvocosmError,
    EvolutionError,
    StrategyError,
    ValidationError,
)
from evocosm.organisms import Organism, Population
from evocosm.utils.prng import KissRandom

__all__ = [
    "Engine",
    "EngineConfig",
    "EngineMetrics",
    "EvocosmError",
    "EvolutionError",
    "FitnessStats",
    "GeneWeights",
    "KissRandom",
    "Organism",
    "Population",
    "Precision",
    "RealGeneOps",
    "RouletteWheel",
    "StrategyError",
    "ValidationError",
    *_strategies_all,
]
