from __future__ import annotations

from typing import Sequence

from loguru import logger

from evocosm.evolution.mutation.real import RealGeneOps
from evocosm.evolution.roulette import RouletteWheel
from evocosm.evolution.strategies.base import Reproducer
from evocosm.exceptions import StrategyError, ValidationError
from evocosm.organisms.organism import Organism, Population
from evocosm.utils.prng import KissRandom

__all__ = ["RealVectorReproducer", "random_real_population"]


class RealVectorReproducer(Reproducer):
    """Fitness-proportional breeding for float-vector genes.

    Parents are drawn from a roulette wheel weighted by fitness (negative
    fitness counts as zero). A child starts as a copy of one parent; with
    probability ``crossover_rate`` a second, different parent is drawn and
    each gene becomes the bit-level crossover of both parents' genes.

    Args:
        crossover_rate: Chance that a child has two parents.
        gene_ops: Operator used for gene crossover.
        rng: Random source for parent choice and the crossover decision.
    """

    def __init__(
        self,
        crossover_rate: float = 0.9,
        gene_ops: RealGeneOps | None = None,
        rng: KissRandom | None = None,
    ):
        if not 0.0 <= crossover_rate <= 1.0:
            raise ValidationError(f"crossover_rate must be in [0, 1], got {crossover_rate}")
        self.crossover_rate = crossover_rate
        self._rng = rng if rng is not None else KissRandom()
        self.gene_ops = gene_ops if gene_ops is not None else RealGeneOps(rng=self._rng)

    MAX_PARENT_DRAWS = 64

    def _second_parent(self, wheel: RouletteWheel, first: int) -> int:
        for _ in range(self.MAX_PARENT_DRAWS):
            second = wheel.get_index()
            if second != first:
                return second
        # one slot dominates the wheel; pick any other organism
        size = wheel.size
        return (first + 1 + self._rng.get_index(size - 1)) % size

    def breed(self, population: Sequence[Organism], count: int) -> Population:
        if count <= 0:
            return []
        if not population:
            raise StrategyError("Cannot breed children from an empty population")

        wheel = RouletteWheel(
            [max(organism.fitness, 0.0) for organism in population], rng=self._rng
        )
        can_cross = len(population) > 1

        children: Population = []
        crossed = 0
        while len(children) < count:
            first = wheel.get_index()
            genes = list(population[first].genes)

            if can_cross and self._rng.get_real() < self.crossover_rate:
                second = self._second_parent(wheel, first)
                other = population[second].genes
                genes = [self.gene_ops.crossover(a, b) for a, b in zip(genes, other)]
                crossed += 1

            children.append(Organism(genes=genes))

        logger.trace(
            "[RealVectorReproducer] Bred {} children ({} by crossover)", len(children), crossed
        )
        return children


def random_real_population(
    size: int,
    gene_count: int,
    low: float,
    high: float,
    rng: KissRandom | None = None,
) -> Population:
    """Create ``size`` organisms with ``gene_count`` genes uniform in ``[low, high)``."""
    if size < 1 or gene_count < 1:
        raise ValidationError(
            f"size and gene_count must be positive, got size={size}, gene_count={gene_count}"
        )
    if low >= high:
        raise ValidationError(f"low must be less than high ({low} >= {high})")

    rng = rng if rng is not None else KissRandom()
    span = high - low
    return [
        Organism(genes=[low + rng.get_real() * span for _ in range(gene_count)])
        for _ in range(size)
    ]
