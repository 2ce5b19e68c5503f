from evocosm.evolution.strategies.analyzers import Analyzer, StagnationAnalyzer
from evocosm.evolution.strategies.base import (
    Landscape,
    Listener,
    Mutator,
    Reproducer,
    Scaler,
    Selector,
)
from evocosm.evolution.strategies.listeners import LoggingListener, NullListener
from evocosm.evolution.strategies.mutators import RealVectorMutator
from evocosm.evolution.strategies.reproducers import (
    RealVectorReproducer,
    random_real_population,
)
from evocosm.evolution.strategies.scalers import (
    ExponentialScaler,
    LinearNormScaler,
    NullScaler,
    QuadraticScaler,
    SigmaScaler,
    WindowedScaler,
)
from evocosm.evolution.strategies.selectors import (
    AllSelector,
    ElitismSelector,
    NullSelector,
)

__all__ = [
    "AllSelector",
    "Analyzer",
    "ElitismSelector",
    "ExponentialScaler",
    "Landscape",
    "LinearNormScaler",
    "Listener",
    "LoggingListener",
    "Mutator",
    "NullListener",
    "NullScaler",
    "NullSelector",
    "QuadraticScaler",
    "RealVectorMutator",
    "RealVectorReproducer",
    "Reproducer",
    "Scaler",
    "Selector",
    "SigmaScaler",
    "StagnationAnalyzer",
    "WindowedScaler",
    "random_real_population",
]
