class EvocosmError(Exception):
    """Base for all Evocosm exceptions."""

    pass


# High-level families
class ValidationError(EvocosmError, ValueError):
    """Invalid arguments or configuration (bad weights, bounds, indices)."""

    pass


class EvolutionError(EvocosmError):
    """Evolution process failures."""

    pass


# Evolution subtypes
class StrategyError(EvolutionError):
    """A strategy was used outside its contract."""

    pass
