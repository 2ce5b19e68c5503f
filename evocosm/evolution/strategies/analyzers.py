from __future__ import annotations

from typing import Any, Sequence

from loguru import logger
import numpy as np

from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies.base import Listener
from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Organism

__all__ = ["Analyzer", "StagnationAnalyzer"]


def _same_genes(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)


class Analyzer:
    """Decides, after fitness testing, whether evolution continues.

    The default policy runs ``max_iterations`` full generations: calls with
    iterations ``1..max_iterations`` return ``True``, later calls ``False``.
    ``max_iterations=0`` runs until another component stops the engine; it has
    to be passed explicitly and is logged as a warning.

    Args:
        max_iterations: Number of generations to run, or ``0`` for no limit.
        listener: Optional listener for reports from subclasses.
    """

    def __init__(self, max_iterations: int, listener: Listener | None = None):
        if max_iterations < 0:
            raise ValidationError(f"max_iterations must be >= 0, got {max_iterations}")
        self.max_iterations = max_iterations
        self.listener = listener
        if max_iterations == 0:
            logger.warning(
                "[{}] max_iterations=0: evolution is unbounded", type(self).__name__
            )

    def within_limit(self, iteration: int) -> bool:
        return self.max_iterations == 0 or iteration <= self.max_iterations

    def analyze(self, population: Sequence[Organism], iteration: int) -> bool:
        """
        Inspect a tested population.

        Args:
            population: Population with fitness assigned for this generation
            iteration: One-based generation number

        Returns:
            True if evolution should continue, False if not
        """
        return self.within_limit(iteration)


class StagnationAnalyzer(Analyzer):
    """Stops when the best organism's genes stop changing.

    Evolution ends once the best genes have been identical for ``patience``
    consecutive generations, or when ``max_iterations`` is exceeded.
    """

    def __init__(
        self,
        max_iterations: int,
        patience: int = 20,
        listener: Listener | None = None,
    ):
        if patience < 1:
            raise ValidationError(f"patience must be at least 1, got {patience}")
        super().__init__(max_iterations, listener)
        self.patience = patience
        self._previous_best: Any = None
        self._unchanged = 0

    @property
    def unchanged_generations(self) -> int:
        return self._unchanged

    def analyze(self, population: Sequence[Organism], iteration: int) -> bool:
        best = FitnessStats(population).best

        if self._previous_best is not None and _same_genes(best.genes, self._previous_best):
            self._unchanged += 1
        else:
            self._unchanged = 0
        self._previous_best = best.genes

        if self._unchanged >= self.patience:
            message = (
                f"Best organism unchanged for {self._unchanged} generations; "
                f"stopping at generation {iteration}"
            )
            logger.info("[StagnationAnalyzer] {}", message)
            if self.listener is not None:
                self.listener.report(message)
            return False

        return self.within_limit(iteration)
