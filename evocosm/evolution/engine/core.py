from __future__ import annotations

from datetime import datetime, timezone
import time

from loguru import logger

from evocosm.evolution.engine.config import EngineConfig
from evocosm.evolution.engine.metrics import EngineMetrics
from evocosm.evolution.strategies.analyzers import Analyzer
from evocosm.evolution.strategies.base import (
    Landscape,
    Listener,
    Mutator,
    Reproducer,
    Scaler,
    Selector,
)
from evocosm.evolution.strategies.listeners import NullListener
from evocosm.exceptions import EvolutionError
from evocosm.organisms.organism import Population

__all__ = ["Engine"]


class Engine:
    """
    Generational loop binding a population to the strategies that evolve it.

    Each call to :meth:`run_generation` performs one cycle:

    1. fitness testing by the landscape,
    2. analysis (continue or stop),
    3. fitness scaling, survivor selection, breeding and mutation,
    4. replacement of the population by ``survivors + children``.

    Children are bred from the population as it stood right after fitness
    testing, before scaling and selection. The engine does not check that
    the strategies conserve population size; a mismatch carries over into the
    following generations.

    Strategies are borrowed: the caller owns them and may share them between
    engines, but must not mutate them from elsewhere while a generation runs.
    """

    def __init__(
        self,
        population: Population,
        landscape: Landscape,
        mutator: Mutator,
        reproducer: Reproducer,
        scaler: Scaler,
        selector: Selector,
        analyzer: Analyzer,
        listener: Listener | None = None,
        config: EngineConfig | None = None,
    ):
        self._population = population
        self.landscape = landscape
        self.mutator = mutator
        self.reproducer = reproducer
        self.scaler = scaler
        self.selector = selector
        self.analyzer = analyzer
        self.listener = listener if listener is not None else NullListener()
        self.config = config if config is not None else EngineConfig()

        self._iteration = 0
        self._running = False
        self._stop_requested = False

        self.metrics = EngineMetrics()

        logger.info(
            "[Engine] Init | population={}, landscape={}, scaler={}, selector={}, reproducer={}",
            len(self._population),
            type(self.landscape).__name__,
            type(self.scaler).__name__,
            type(self.selector).__name__,
            type(self.reproducer).__name__,
        )

    @property
    def population(self) -> Population:
        """Direct read-write access to the current population. Use with care."""
        return self._population

    @population.setter
    def population(self, population: Population) -> None:
        self._population = population

    @property
    def iteration(self) -> int:
        """Number of generations started so far."""
        return self._iteration

    @property
    def sleep_time(self) -> float:
        return self.config.sleep_time

    @sleep_time.setter
    def sleep_time(self, seconds: float) -> None:
        self.config.sleep_time = seconds

    def _yield(self) -> None:
        """Cooperative pause between phases; a no-op when sleep_time is 0."""
        if self.config.sleep_time > 0:
            time.sleep(self.config.sleep_time)

    def run_generation(self) -> bool:
        """
        Compute the next generation.

        Returns:
            True if evolution continues, False once the analyzer has stopped it

        Raises:
            EvolutionError: A strategy failed during the generation
        """
        try:
            return self._step()
        except EvolutionError:
            raise
        except Exception as exc:
            logger.error("[Engine] Generation {} failed: {}", self._iteration, exc)
            raise EvolutionError(
                f"Generation {self._iteration} failed: {exc}"
            ) from exc

    def _step(self) -> bool:
        self._iteration += 1
        iteration = self._iteration

        self.listener.on_generation_begin(self._population, iteration)

        # Stage 1: fitness testing
        aggregate = self.landscape.test_population(self._population)
        self.metrics.record_evaluation(len(self._population), aggregate)
        self._yield()

        self.listener.on_generation_end(self._population, iteration)
        self._yield()

        # Stage 2: analysis
        keep_going = self.analyzer.analyze(self._population, iteration)
        if not keep_going:
            logger.info("[Engine] Stop: analyzer finished at generation {}", iteration)
            self.listener.on_run_complete(self._population)
            return False

        # Stage 3: scaling and selection
        evaluated = [organism.clone() for organism in self._population]

        self.scaler.scale_fitness(self._population)
        self._yield()

        survivors = self.selector.select_survivors(self._population)
        self._yield()

        # Stage 4: breeding and mutation
        count = len(self._population) - len(survivors)
        children = self.reproducer.breed(evaluated, count)
        self._yield()

        self.mutator.mutate(children)
        self._yield()

        # Stage 5: replacement
        self._population = survivors + children
        self._yield()

        self.metrics.record_replacement(len(survivors), len(children))
        self.metrics.total_generations += 1
        self.metrics.last_generation_time = datetime.now(timezone.utc)

        logger.debug(
            "[Engine] Generation {} | survivors={}, children={}, aggregate={}",
            iteration,
            len(survivors),
            len(children),
            aggregate,
        )
        if iteration % self.config.log_interval == 0:
            self._log_metrics()

        return True

    def run(self) -> Population:
        """Run generations until the analyzer stops or :meth:`stop` is called.

        Returns:
            The final population
        """
        logger.info("[Engine] Start")
        self._running, self._stop_requested = True, False
        try:
            while not self._stop_requested:
                if not self.run_generation():
                    break
        except KeyboardInterrupt:
            logger.info("[Engine] Interrupted")
        finally:
            self._running = False
            logger.info("[Engine] Stopped after {} generation(s)", self._iteration)
        return self._population

    def stop(self) -> None:
        """Request :meth:`run` to exit after the current generation."""
        self._stop_requested = True

    def is_running(self) -> bool:
        return self._running

    def get_status(self) -> dict[str, object]:
        """Light status snapshot for UIs and tests."""
        return {
            "running": self._running,
            "iteration": self._iteration,
            "population_size": len(self._population),
            **self.metrics.to_dict(),
        }

    def _log_metrics(self) -> None:
        m = self.metrics.to_dict()
        metrics_str = " | ".join(
            f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}" for k, v in m.items()
        )
        logger.info("[Engine] | {}", metrics_str)
