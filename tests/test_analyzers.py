import numpy as np
import pytest

from evocosm.evolution.strategies.analyzers import Analyzer, StagnationAnalyzer
from evocosm.exceptions import ValidationError
from evocosm.organisms.organism import Organism
from tests.conftest import make_population


def test_default_policy_runs_max_iterations():
    analyzer = Analyzer(max_iterations=3)
    population = make_population([1.0])
    assert [analyzer.analyze(population, i) for i in range(1, 7)] == [
        True, True, True, False, False, False,
    ]


def test_zero_max_iterations_is_unbounded():
    analyzer = Analyzer(max_iterations=0)
    population = make_population([1.0])
    assert all(analyzer.analyze(population, i) for i in (1, 10, 10_000))


def test_negative_max_iterations_rejected():
    with pytest.raises(ValidationError):
        Analyzer(max_iterations=-1)


def test_stagnation_stops_after_patience(listener):
    analyzer = StagnationAnalyzer(max_iterations=0, patience=3, listener=listener)
    population = make_population([1.0, 4.0, 2.0])
    results = [analyzer.analyze(population, i) for i in range(1, 6)]
    # generation 1 sets the reference, 2-4 repeat it
    assert results == [True, True, True, False, False]
    assert listener.names()[0] == "report"


def test_stagnation_counter_resets_on_progress():
    analyzer = StagnationAnalyzer(max_iterations=0, patience=2)
    analyzer.analyze([Organism(genes=[1.0], fitness=1.0)], 1)
    analyzer.analyze([Organism(genes=[1.0], fitness=1.0)], 2)
    assert analyzer.unchanged_generations == 1
    assert analyzer.analyze([Organism(genes=[2.0], fitness=2.0)], 3)
    assert analyzer.unchanged_generations == 0


def test_stagnation_respects_max_iterations():
    analyzer = StagnationAnalyzer(max_iterations=2, patience=100)
    assert analyzer.analyze([Organism(genes=[1.0], fitness=1.0)], 2)
    assert not analyzer.analyze([Organism(genes=[2.0], fitness=1.0)], 3)


def test_stagnation_rejects_bad_patience():
    with pytest.raises(ValidationError):
        StagnationAnalyzer(max_iterations=5, patience=0)


def test_stagnation_handles_array_genes():
    analyzer = StagnationAnalyzer(10, patience=2)
    population = [Organism(genes=np.array([1.0, 2.0]), fitness=1.0)]
    assert analyzer.analyze(population, 1)
    assert analyzer.analyze(population, 2)
    assert analyzer.unchanged_generations == 1
    assert not analyzer.analyze(population, 3)

    moved = [Organism(genes=np.array([1.0, 2.5]), fitness=1.0)]
    assert analyzer.analyze(moved, 4)
    assert analyzer.unchanged_generations == 0
