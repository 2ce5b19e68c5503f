"""Capability interfaces consumed by :class:`~evocosm.evolution.engine.Engine`.

Every strategy receives the population it works on as an argument and must not
keep references to it after the call returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from loguru import logger

from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Organism, Population


class Listener(ABC):
    """Receives progress events from an evolutionary run.

    All events are side-effect only; return values are ignored.
    """

    @abstractmethod
    def on_generation_begin(self, population: Sequence[Organism], iteration: int) -> None:
        """Processing of generation ``iteration`` (one-based) begins."""

    @abstractmethod
    def on_generation_end(self, population: Sequence[Organism], iteration: int) -> None:
        """Fitness testing of generation ``iteration`` has finished."""

    @abstractmethod
    def on_fitness_test_begin(self, organism: Organism) -> None:
        """Fitness testing of one organism begins."""

    @abstractmethod
    def on_fitness_test_end(self, organism: Organism) -> None:
        """Fitness testing of one organism has finished."""

    @abstractmethod
    def report(self, text: str) -> None:
        """Application-specific status text."""

    @abstractmethod
    def report_error(self, text: str) -> None:
        """Application-specific error text."""

    @abstractmethod
    def on_run_complete(self, population: Sequence[Organism]) -> None:
        """The run has finished; ``population`` is final."""


class Landscape(ABC):
    """
    Fitness environment in which organisms are tested.

    Subclasses implement :meth:`test` for one organism. :meth:`test_population`
    assigns every organism's fitness and returns the summed fitness of the
    population. Organism tests are independent, so with ``workers > 1`` they
    run on a thread pool; results are written back in population order before
    the call returns. Fitness-test pings are then delivered from worker
    threads.

    Args:
        listener: Receives fitness-test pings; ``None`` disables them.
        workers: Number of threads used by :meth:`test_population`.
    """

    def __init__(self, listener: Listener | None = None, workers: int = 1):
        if workers < 1:
            raise ValidationError(f"workers must be at least 1, got {workers}")
        self.listener = listener
        self.workers = workers

    @abstractmethod
    def test(self, organism: Organism) -> float:
        """
        Compute the fitness of a single organism.

        Args:
            organism: The organism to be tested

        Returns:
            Computed fitness for this organism
        """

    def _test_one(self, organism: Organism) -> float:
        if self.listener is not None:
            self.listener.on_fitness_test_begin(organism)
        organism.fitness = float(self.test(organism))
        if self.listener is not None:
            self.listener.on_fitness_test_end(organism)
        return organism.fitness

    def test_population(self, population: Population) -> float:
        """
        Test every organism and assign its fitness.

        Args:
            population: Organisms to test; fitness is updated in place

        Returns:
            Sum of the assigned fitness values
        """
        if self.workers > 1 and len(population) > 1:
            with ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="evocosm-landscape"
            ) as executor:
                results = list(executor.map(self._test_one, population))
            logger.trace(
                "[{}] Tested {} organisms on {} workers",
                type(self).__name__,
                len(population),
                self.workers,
            )
            return sum(results)

        return sum(self._test_one(organism) for organism in population)


class Mutator(ABC):
    """Applies random, usually small changes to organisms."""

    @abstractmethod
    def mutate(self, population: Population) -> None:
        """Mutate some (maybe none, maybe all) organisms in place."""


class Reproducer(ABC):
    """Creates new organisms from parents chosen out of a population."""

    @abstractmethod
    def breed(self, population: Sequence[Organism], count: int) -> Population:
        """
        Create children from the genetic material of ``population``.

        Args:
            population: Source of parents; not modified
            count: Number of children to create

        Returns:
            Exactly ``count`` new organisms
        """


class Scaler(ABC):
    """Adjusts fitness values to control selection pressure."""

    @abstractmethod
    def scale_fitness(self, population: Population) -> None:
        """Rewrite the fitness of every organism in place."""


class Selector(ABC):
    """Decides which organisms survive unchanged into the next generation."""

    @abstractmethod
    def select_survivors(self, population: Sequence[Organism]) -> Population:
        """
        Choose survivors.

        Args:
            population: Current population; not modified

        Returns:
            Copies of the surviving organisms (at most ``len(population)``)
        """
