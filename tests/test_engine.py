from typing import Sequence

import pytest

from evocosm.evolution.engine import Engine, EngineConfig
from evocosm.evolution.stats import FitnessStats
from evocosm.evolution.strategies.analyzers import Analyzer
from evocosm.evolution.strategies.base import Mutator, Reproducer, Scaler
from evocosm.evolution.strategies.mutators import RealVectorMutator
from evocosm.evolution.strategies.reproducers import RealVectorReproducer, random_real_population
from evocosm.evolution.strategies.scalers import LinearNormScaler, NullScaler, SigmaScaler
from evocosm.evolution.strategies.selectors import AllSelector, ElitismSelector, NullSelector
from evocosm.exceptions import EvolutionError
from evocosm.organisms.organism import Organism, Population
from evocosm.utils.prng import KissRandom
from tests.conftest import RecordingListener, SphereLandscape


class CloneReproducer(Reproducer):
    def __init__(self, extra: int = 0):
        self.extra = extra
        self.seen_fitness: list[list[float]] = []

    def breed(self, population: Sequence[Organism], count: int) -> Population:
        self.seen_fitness.append([o.fitness for o in population])
        return [Organism(genes=list(population[0].genes)) for _ in range(count + self.extra)]


class NoMutator(Mutator):
    def mutate(self, population: Population) -> None:
        pass


class ConstantScaler(Scaler):
    def scale_fitness(self, population: Population) -> None:
        for organism in population:
            organism.fitness = 123.0


class FailingScaler(Scaler):
    def scale_fitness(self, population: Population) -> None:
        raise RuntimeError("boom")


def real_engine(size=20, max_iterations=10, listener=None, selector=None, scaler=None, seed=1):
    rng = KissRandom(seed=seed)
    return Engine(
        population=random_real_population(size, 2, -1.0, 1.0, rng=rng),
        landscape=SphereLandscape(),
        mutator=RealVectorMutator(0.25, rng=rng),
        reproducer=RealVectorReproducer(0.9, rng=rng),
        scaler=scaler or LinearNormScaler(),
        selector=selector or ElitismSelector(0.9),
        analyzer=Analyzer(max_iterations),
        listener=listener,
    )


def simple_engine(reproducer=None, scaler=None, selector=None, max_iterations=5, listener=None):
    return Engine(
        population=[Organism(genes=[float(i)]) for i in range(4)],
        landscape=SphereLandscape(),
        mutator=NoMutator(),
        reproducer=reproducer or CloneReproducer(),
        scaler=scaler or NullScaler(),
        selector=selector or NullSelector(),
        analyzer=Analyzer(max_iterations),
        listener=listener,
    )


def test_run_generation_honours_max_iterations():
    engine = simple_engine(max_iterations=3)
    assert [engine.run_generation() for _ in range(5)] == [True, True, True, False, False]
    assert engine.iteration == 5


def test_population_size_is_conserved():
    engine = real_engine(size=30)
    for _ in range(10):
        engine.run_generation()
        assert len(engine.population) == 30


@pytest.mark.parametrize("selector", [AllSelector(), NullSelector(), ElitismSelector(0.5)])
def test_size_conserved_with_each_selector(selector):
    engine = real_engine(size=12, selector=selector, scaler=SigmaScaler())
    for _ in range(5):
        engine.run_generation()
        assert len(engine.population) == 12


def test_event_order(listener):
    engine = simple_engine(max_iterations=1, listener=listener)
    engine.run_generation()
    engine.run_generation()
    names = [n for n in listener.names() if not n.startswith("test")]
    assert names == ["begin", "end", "begin", "end", "complete"]
    assert listener.events[0] == ("begin", 1, 4)
    assert listener.events[-1] == ("complete", 4)


def test_run_complete_only_when_stopping(listener):
    engine = simple_engine(max_iterations=2, listener=listener)
    engine.run_generation()
    engine.run_generation()
    assert "complete" not in listener.names()
    engine.run_generation()
    assert listener.names().count("complete") == 1


def test_children_bred_from_unscaled_population():
    reproducer = CloneReproducer()
    engine = simple_engine(reproducer=reproducer, scaler=ConstantScaler(), max_iterations=1)
    engine.run_generation()
    expected = [1.0 / (1.0 + i * i) for i in range(4)]
    assert reproducer.seen_fitness == [pytest.approx(expected)]


def test_selector_sees_scaled_population():
    engine = simple_engine(scaler=ConstantScaler(), selector=AllSelector(), max_iterations=1)
    engine.run_generation()
    assert [o.fitness for o in engine.population] == [123.0] * 4


def test_survivors_come_before_children():
    engine = simple_engine(selector=ElitismSelector(0.9), max_iterations=1)
    engine.run_generation()
    # only the organism at the origin reaches fitness 1.0
    assert engine.population[0].genes == [0.0]
    assert engine.population[0].fitness == 1.0
    assert all(o.fitness == 0.0 for o in engine.population[1:])
    assert len(engine.population) == 4


def test_population_drift_is_not_repaired():
    engine = simple_engine(reproducer=CloneReproducer(extra=1), max_iterations=3)
    sizes = []
    while engine.run_generation():
        sizes.append(len(engine.population))
    assert sizes == [5, 6, 7]


def test_strategy_failure_raises_evolution_error():
    engine = simple_engine(scaler=FailingScaler())
    with pytest.raises(EvolutionError) as info:
        engine.run_generation()
    assert isinstance(info.value.__cause__, RuntimeError)


def test_run_returns_final_population():
    listener = RecordingListener()
    engine = real_engine(size=10, max_iterations=4, listener=listener)
    final = engine.run()
    assert final is engine.population
    assert len(final) == 10
    assert engine.iteration == 5
    assert not engine.is_running()
    assert listener.names().count("complete") == 1


def test_evolution_improves_best_fitness():
    engine = real_engine(size=40, max_iterations=30, seed=9)
    engine.landscape.test_population(engine.population)
    initial_best = FitnessStats(engine.population).max
    engine.run()
    assert FitnessStats(engine.population).max >= initial_best


def test_stop_ends_run():
    class StoppingListener(RecordingListener):
        def __init__(self):
            super().__init__()
            self.engine = None

        def on_generation_end(self, population, iteration):
            super().on_generation_end(population, iteration)
            if iteration == 2:
                self.engine.stop()

    listener = StoppingListener()
    engine = simple_engine(max_iterations=0, listener=listener)
    listener.engine = engine
    engine.run()
    assert engine.iteration == 2


def test_metrics_and_status():
    engine = simple_engine(max_iterations=2)
    while engine.run_generation():
        pass
    assert engine.metrics.total_generations == 2
    assert engine.metrics.organisms_evaluated == 12
    assert engine.metrics.children_bred == 8
    assert engine.metrics.survivors_selected == 0
    status = engine.get_status()
    assert status["iteration"] == 3
    assert status["population_size"] == 4
    assert status["running"] is False


def test_sleep_time_property():
    engine = simple_engine()
    assert engine.sleep_time == 0.0
    engine.sleep_time = 0.001
    assert engine.config.sleep_time == 0.001
    assert engine.run_generation()


def test_config_passed_at_construction():
    engine = Engine(
        population=[Organism(genes=[0.0])],
        landscape=SphereLandscape(),
        mutator=NoMutator(),
        reproducer=CloneReproducer(),
        scaler=NullScaler(),
        selector=NullSelector(),
        analyzer=Analyzer(1),
        config=EngineConfig(sleep_time=0.0, log_interval=5),
    )
    assert engine.config.log_interval == 5
    assert engine.run_generation()
    assert not engine.run_generation()
