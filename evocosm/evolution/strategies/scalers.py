"""Fitness scaling.

As a population converges, fitness differences shrink and the best organisms
lose their reproductive advantage. Scalers rewrite fitness in place to restore
(or deliberately flatten) selection pressure.
"""

from __future__ import annotations

import math

from loguru import logger

from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies.base import Scaler
from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Population

__all__ = [
    "ExponentialScaler",
    "LinearNormScaler",
    "NullScaler",
    "QuadraticScaler",
    "SigmaScaler",
    "WindowedScaler",
]


class NullScaler(Scaler):
    """Leaves fitness untouched; for algorithms without scaling."""

    def scale_fitness(self, population: Population) -> None:
        pass


class LinearNormScaler(Scaler):
    """Linear normalization (Goldberg).

    Maps the mean onto itself and the maximum onto ``fitness_multiple * mean``.
    When that line would push the minimum below zero, the "extreme" line
    through ``(min, 0)`` and ``(mean, mean)`` is used instead. A flat
    population is left unchanged.
    """

    def __init__(self, fitness_multiple: float = 2.0):
        if fitness_multiple <= 1.0:
            raise ValidationError(
                f"fitness_multiple must be greater than 1, got {fitness_multiple}"
            )
        self.fitness_multiple = fitness_multiple

    def scale_fitness(self, population: Population) -> None:
        stats = FitnessStats(population)
        multiple = self.fitness_multiple

        if stats.min > (multiple * stats.mean - stats.max) / (multiple - 1.0):
            # normal scaling
            delta = stats.max - stats.mean
            if delta == 0.0:
                return
            slope = (multiple - 1.0) * stats.mean / delta
            intercept = stats.mean * (stats.max - multiple * stats.mean) / delta
        else:
            # extreme scaling
            delta = stats.mean - stats.min
            if delta == 0.0:
                return
            slope = stats.mean / delta
            intercept = -stats.min * stats.mean / delta

        for organism in population:
            organism.fitness = slope * organism.fitness + intercept


class WindowedScaler(Scaler):
    """Sets every fitness to the population minimum."""

    def scale_fitness(self, population: Population) -> None:
        floor = FitnessStats(population).min
        for organism in population:
            organism.fitness = floor


class ExponentialScaler(Scaler):
    """``fitness' = (a * fitness + b) ** power``."""

    def __init__(self, a: float = 1.0, b: float = 1.0, power: float = 2.0):
        self.a = a
        self.b = b
        self.power = power

    def scale_fitness(self, population: Population) -> None:
        for organism in population:
            organism.fitness = math.pow(self.a * organism.fitness + self.b, self.power)


class QuadraticScaler(Scaler):
    """``fitness' = a * fitness**2 + b * fitness + c``."""

    def __init__(self, a: float, b: float, c: float):
        self.a = a
        self.b = b
        self.c = c

    def scale_fitness(self, population: Population) -> None:
        for organism in population:
            f = organism.fitness
            organism.fitness = self.a * f * f + self.b * f + self.c


class SigmaScaler(Scaler):
    """Sigma scaling (Forrest and Tanese).

    Keeps selection pressure steady over a run by expressing fitness relative
    to the standard deviation of the population. Scaled values are floored at
    0.1 so every organism keeps a chance to reproduce; a population with zero
    spread gets a uniform fitness of 1.0.
    """

    FLOOR = 0.1

    def scale_fitness(self, population: Population) -> None:
        stats = FitnessStats(population)
        sigma2 = 2.0 * stats.sigma

        if sigma2 == 0.0:
            for organism in population:
                organism.fitness = 1.0
            return

        if stats.mean == 0.0:
            logger.debug("[SigmaScaler] Zero mean fitness; relative term dropped")

        for organism in population:
            ratio = organism.fitness / stats.mean if stats.mean != 0.0 else 0.0
            organism.fitness = max((1.0 + ratio) / sigma2, self.FLOOR)
