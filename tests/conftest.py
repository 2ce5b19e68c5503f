from __future__ import annotations

from typing import Sequence

import pytest

from evocosm.evolution.strategies.base import Landscape, Listener
from evocosm.organisms.organism import Organism
from evocosm.utils.prng import KissRandom


class SphereLandscape(Landscape):
    """Peak of 1.0 at the origin, falling towards 0 everywhere else."""

    def test(self, organism: Organism) -> float:
        return 1.0 / (1.0 + sum(g * g for g in organism.genes))


class RecordingListener(Listener):
    def __init__(self):
        self.events: list[tuple] = []

    def on_generation_begin(self, population: Sequence[Organism], iteration: int) -> None:
        self.events.append(("begin", iteration, len(population)))

    def on_generation_end(self, population: Sequence[Organism], iteration: int) -> None:
        self.events.append(("end", iteration, len(population)))

    def on_fitness_test_begin(self, organism: Organism) -> None:
        self.events.append(("test_begin",))

    def on_fitness_test_end(self, organism: Organism) -> None:
        self.events.append(("test_end", organism.fitness))

    def report(self, text: str) -> None:
        self.events.append(("report", text))

    def report_error(self, text: str) -> None:
        self.events.append(("error", text))

    def on_run_complete(self, population: Sequence[Organism]) -> None:
        self.events.append(("complete", len(population)))

    def names(self) -> list[str]:
        return [event[0] for event in self.events]


class FixedRandom(KissRandom):
    """Replays a fixed list of reals; integer draws come from a seeded stream."""

    def __init__(self, reals: list[float], seed: int = 1):
        super().__init__(seed)
        self._reals = list(reals)

    def get_real(self) -> float:
        return self._reals.pop(0)


def make_population(fitness: Sequence[float]) -> list[Organism]:
    return [Organism(genes=[float(i)], fitness=f) for i, f in enumerate(fitness)]


@pytest.fixture
def rng() -> KissRandom:
    return KissRandom(seed=20240601)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def sphere() -> SphereLandscape:
    return SphereLandscape()
