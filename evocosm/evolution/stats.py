from __future__ import annotations

from typing import Sequence

import numpy as np

from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Organism

__all__ = ["FitnessStats"]


class FitnessStats:
    """Fitness summary of a population at one point in time.

    Used by scalers, selectors and analyzers. The snapshot keeps copies of the
    best and worst organisms, so it stays valid after the population it was
    computed from has been replaced. Recompute whenever fitness changes.

    Variance is the sample variance (``n - 1`` denominator); a population of
    one organism has zero variance and zero sigma.
    """

    def __init__(self, population: Sequence[Organism]):
        if not population:
            raise ValidationError("Cannot compute fitness statistics of an empty population")

        fitness = np.fromiter(
            (o.fitness for o in population), dtype=np.float64, count=len(population)
        )

        # argmax/argmin return the first occurrence on ties
        best_index = int(np.argmax(fitness))
        worst_index = int(np.argmin(fitness))

        self._min = float(fitness[worst_index])
        self._max = float(fitness[best_index])
        self._mean = float(fitness.mean())
        if len(fitness) > 1:
            self._variance = float(fitness.var(ddof=1))
        else:
            self._variance = 0.0
        self._sigma = float(np.sqrt(self._variance))
        self._size = len(fitness)

        self._best = population[best_index].clone()
        self._worst = population[worst_index].clone()

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def sigma(self) -> float:
        """Standard deviation of fitness."""
        return self._sigma

    @property
    def size(self) -> int:
        return self._size

    @property
    def best(self) -> Organism:
        """Copy of the highest-fitness organism."""
        return self._best.clone()

    @property
    def worst(self) -> Organism:
        """Copy of the lowest-fitness organism."""
        return self._worst.clone()

    def to_dict(self) -> dict[str, float]:
        return {
            "min": self._min,
            "max": self._max,
            "mean": self._mean,
            "variance": self._variance,
            "sigma": self._sigma,
        }

    def __repr__(self) -> str:
        return (
            f"FitnessStats(size={self._size}, min={self._min:.6g}, max={self._max:.6g}, "
            f"mean={self._mean:.6g}, sigma={self._sigma:.6g})"
        )
