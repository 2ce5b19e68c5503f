from __future__ import annotations

from typing import Sequence

from loguru import logger

from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies.base import Listener
from evocosm.organisms.organism import Organism


class NullListener(Listener):
    """Ignores every event."""

    def on_generation_begin(self, population: Sequence[Organism], iteration: int) -> None:
        pass

    def on_generation_end(self, population: Sequence[Organism], iteration: int) -> None:
        pass

    def on_fitness_test_begin(self, organism: Organism) -> None:
        pass

    def on_fitness_test_end(self, organism: Organism) -> None:
        pass

    def report(self, text: str) -> None:
        pass

    def report_error(self, text: str) -> None:
        pass

    def on_run_complete(self, population: Sequence[Organism]) -> None:
        pass


class LoggingListener(Listener):
    """Forwards run events to loguru.

    Generation summaries are logged every ``log_interval`` generations at INFO;
    per-organism pings go to TRACE.
    """

    def __init__(self, log_interval: int = 1):
        self.log_interval = max(1, log_interval)

    def on_generation_begin(self, population: Sequence[Organism], iteration: int) -> None:
        logger.debug("[LoggingListener] Generation {} begin | size={}", iteration, len(population))

    def on_generation_end(self, population: Sequence[Organism], iteration: int) -> None:
        if iteration % self.log_interval != 0 or not population:
            return
        stats = FitnessStats(population)
        logger.info(
            "[LoggingListener] Generation {} | best={:.6g} mean={:.6g} worst={:.6g} sigma={:.6g}",
            iteration,
            stats.max,
            stats.mean,
            stats.min,
            stats.sigma,
        )

    def on_fitness_test_begin(self, organism: Organism) -> None:
        logger.trace("[LoggingListener] Fitness test begin")

    def on_fitness_test_end(self, organism: Organism) -> None:
        logger.trace("[LoggingListener] Fitness test end | fitness={}", organism.fitness)

    def report(self, text: str) -> None:
        logger.info("[LoggingListener] {}", text)

    def report_error(self, text: str) -> None:
        logger.error("[LoggingListener] {}", text)

    def on_run_complete(self, population: Sequence[Organism]) -> None:
        if not population:
            logger.info("[LoggingListener] Run complete | empty population")
            return
        best = FitnessStats(population).best
        logger.info(
            "[LoggingListener] Run complete | size={}, best fitness={:.6g}",
            len(population),
            best.fitness,
        )
