import logging
import threading

import numpy as np
import pytest

from popopt.engine.algorithm import GAConfig, GeneticAlgorithmSolver, max_iterations
from popopt.foundation.exceptions import ConfigurationError
from popopt.problem import integer_sum

CONSTRAINTS = [{"from": 0, "to": 10}, {"from": 0, "to": 10}]


def _config(recombination="line", mutation=0.5, generations=3, **extra):
    builder = (
        GAConfig()
        .population_size(4)
        .genotype_space("integer", dimensions=2, recombination_type=recombination, constraints=CONSTRAINTS)
        .mutation_probability(mutation)
        .recombination_probability(0.5)
        .exit_condition(max_iterations(generations))
        .quiet()
    )
    for name, value in extra.items():
        getattr(builder, name)(value)
    return builder.fixed()


class Recorder:
    """Thread-safe fitness wrapper remembering every scored genotype."""

    def __init__(self, func):
        self.func = func
        self.lock = threading.Lock()
        self.seen = []

    def __call__(self, genotype):
        value = self.func(genotype)
        with self.lock:
            self.seen.append((genotype.tolist(), value))
        return value


@pytest.mark.smoke
def test_ga_returns_best_of_all_evaluations():
    func = Recorder(integer_sum)
    solver = GeneticAlgorithmSolver(_config(seed=1, n_workers=2))

    best = solver.solve(func)

    assert solver.generation == 3
    assert len(func.seen) == 3 * 4
    assert best.fitness == max(value for _, value in func.seen)
    assert best.fitness == integer_sum(best.genotype)
    assert ((best.genotype >= 0) & (best.genotype <= 10)).all()


@pytest.mark.parametrize("recombination", ["line", "intermediate"])
def test_ga_history_never_decreases(recombination):
    solver = GeneticAlgorithmSolver(_config(recombination=recombination, mutation=0.0, generations=5, seed=7))

    best = solver.solve(integer_sum)

    assert len(solver.history) == 5
    assert all(b >= a for a, b in zip(solver.history, solver.history[1:]))
    assert solver.history[-1] == best.fitness


def test_ga_evaluates_start_population_first():
    start = [[1, 1], [2, 2], [3, 3], [4, 4]]
    func = Recorder(integer_sum)
    solver = GeneticAlgorithmSolver(_config(generations=1, start_population=start))

    best = solver.solve(func)

    assert sorted(g for g, _ in func.seen) == start
    assert best.genotype.tolist() == [4, 4]
    assert best.fitness == 8.0


def test_ga_rejects_start_population_of_wrong_size():
    with pytest.raises(ConfigurationError, match="start_population"):
        GeneticAlgorithmSolver(_config(start_population=[[1, 1], [2, 2]]))


def test_ga_propagates_evaluation_errors():
    def broken(genotype):
        raise ArithmeticError("evaluation failed")

    solver = GeneticAlgorithmSolver(_config(seed=0))
    with pytest.raises(ArithmeticError, match="evaluation failed"):
        solver.solve(broken)


def test_ga_new_generation_keeps_population_size():
    solver = GeneticAlgorithmSolver(_config(seed=2))
    population = solver.initial_population()
    for i, ind in enumerate(population):
        ind.assign_fitness(float(i))

    children = solver.new_generation(population)

    assert len(children) == 4
    assert all(child.fitness is None for child in children)


def test_ga_seeded_runs_are_reproducible():
    a = GeneticAlgorithmSolver(_config(generations=4, seed=123)).solve(integer_sum)
    b = GeneticAlgorithmSolver(_config(generations=4, seed=123)).solve(integer_sum)
    assert a.genotype.tolist() == b.genotype.tolist()


def test_ga_logs_progress_unless_quiet(caplog):
    logger = logging.getLogger("popopt.tests.ga")
    builder = (
        GAConfig()
        .population_size(4)
        .genotype_space("integer", dimensions=2, recombination_type="line", constraints=CONSTRAINTS)
        .mutation_probability(0.5)
        .recombination_probability(0.5)
        .exit_condition(max_iterations(2))
        .logger(logger, logging.INFO)
        .seed(0)
    )

    with caplog.at_level(logging.INFO, logger="popopt.tests.ga"):
        GeneticAlgorithmSolver(builder.fixed()).solve(integer_sum)
    progress = [r for r in caplog.records if r.getMessage().startswith("> gen")]
    assert len(progress) == 2

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="popopt.tests.ga"):
        GeneticAlgorithmSolver(builder.quiet().fixed()).solve(integer_sum)
    assert not [r for r in caplog.records if r.getMessage().startswith("> gen")]


def test_ga_repr_mentions_population():
    solver = GeneticAlgorithmSolver(_config(seed=0))
    assert "population_size=4" in repr(solver)


def test_ga_rejects_space_that_cannot_seed_a_population():
    builder = (
        GAConfig()
        .population_size(4)
        .genotype_space("integer", dimensions=2, recombination_type="line")
        .mutation_probability(0.5)
        .recombination_probability(0.5)
    )
    with pytest.raises(ConfigurationError, match="initial population"):
        GeneticAlgorithmSolver(builder.fixed())


def test_ga_accepts_start_population_with_space_options():
    start = [[1, 1], [2, 2], [3, 3], [4, 4]]
    builder = (
        GAConfig()
        .population_size(4)
        .genotype_space("integer", dimensions=2, recombination_type="line", start_population=start)
        .mutation_probability(0.0)
        .recombination_probability(0.5)
        .exit_condition(max_iterations(1))
        .quiet()
    )
    func = Recorder(integer_sum)

    best = GeneticAlgorithmSolver(builder.fixed()).solve(func)

    assert sorted(g for g, _ in func.seen) == start
    assert best.fitness == 8.0
