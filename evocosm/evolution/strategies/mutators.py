from __future__ import annotations

from loguru import logger

from evocosm.evolution.mutation.real import RealGeneOps
from evocosm.evolution.strategies.base import Mutator
from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Population
from evocosm.utils.prng import KissRandom

__all__ = ["RealVectorMutator"]


class RealVectorMutator(Mutator):
    """Mutates organisms whose genes are sequences of floats.

    Every gene is independently replaced by a bit-level mutation with
    probability ``mutation_rate``. Organisms that changed have their fitness
    reset, since it no longer describes their genes.
    """

    def __init__(
        self,
        mutation_rate: float,
        gene_ops: RealGeneOps | None = None,
        rng: KissRandom | None = None,
    ):
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValidationError(f"mutation_rate must be in [0, 1], got {mutation_rate}")
        self.mutation_rate = mutation_rate
        self._rng = rng if rng is not None else KissRandom()
        self.gene_ops = gene_ops if gene_ops is not None else RealGeneOps(rng=self._rng)

    def mutate(self, population: Population) -> None:
        mutated = 0
        for organism in population:
            genes = list(organism.genes)
            changed = False
            for n, gene in enumerate(genes):
                # get_real() is in [0, 1), so a rate of 1.0 always mutates
                if self._rng.get_real() < self.mutation_rate:
                    genes[n] = self.gene_ops.mutate(gene)
                    changed = True
            if changed:
                organism.genes = genes
                organism.reset()
                mutated += 1
        logger.trace("[RealVectorMutator] Mutated {}/{} organisms", mutated, len(population))
