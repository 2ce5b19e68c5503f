from __future__ import annotations

from typing import Sequence

from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies.base import Selector
from evocosm.organisms.organism import Organism, Population

__all__ = ["AllSelector", "ElitismSelector", "NullSelector"]


class NullSelector(Selector):
    """Nobody survives; every generation is bred from scratch."""

    def select_survivors(self, population: Sequence[Organism]) -> Population:
        return []


class AllSelector(Selector):
    """Everybody survives. Mostly useful for development and testing."""

    def select_survivors(self, population: Sequence[Organism]) -> Population:
        return [organism.clone() for organism in population]


class ElitismSelector(Selector):
    """Keeps organisms whose fitness exceeds a share of the best fitness.

    Args:
        factor: Survivors need ``fitness > factor * best_fitness``.
    """

    def __init__(self, factor: float = 0.9):
        self.factor = factor

    def select_survivors(self, population: Sequence[Organism]) -> Population:
        if not population:
            return []
        threshold = self.factor * FitnessStats(population).max
        return [organism.clone() for organism in population if organism.fitness > threshold]
