from types import SimpleNamespace

import numpy as np
import pytest

from popopt.engine.algorithm.components import (
    Attractor,
    PositionRecord,
    any_of,
    binary_tournament,
    max_iterations,
    select_fittest,
    target_reached,
)
from popopt.engine.genotype import Individual
from popopt.foundation.exceptions import ContractViolationError


def test_select_fittest_prefers_higher_fitness():
    a, b, c = Individual([0], 1.0), Individual([1], 3.0), Individual([2], 2.0)
    assert select_fittest(a, b, c) is b


def test_select_fittest_ties_go_to_first():
    a, b = Individual([0], 1.0), Individual([1], 1.0)
    assert select_fittest(a, b) is a
    assert select_fittest(b, a) is b


def test_select_fittest_of_nothing_is_a_contract_violation():
    with pytest.raises(ContractViolationError, match="empty population"):
        select_fittest()


def test_binary_tournament_never_pits_an_individual_against_itself():
    rng = np.random.default_rng(0)
    weak, strong = Individual([0], 0.0), Individual([1], 1.0)
    # with two members the stronger one must win every tournament
    assert all(binary_tournament([weak, strong], rng) is strong for _ in range(50))


def test_binary_tournament_needs_two_members():
    with pytest.raises(ContractViolationError):
        binary_tournament([Individual([0], 0.0)], np.random.default_rng(0))


def test_max_iterations():
    stop = max_iterations(3)
    assert not stop(2, None)
    assert stop(3, None)
    with pytest.raises(ValueError):
        max_iterations(0)


def test_target_reached_reads_fitness_or_height():
    assert target_reached(5.0)(1, SimpleNamespace(fitness=5.0))
    assert not target_reached(5.0)(1, Attractor(np.zeros(1), 4.0))
    assert target_reached(0.1, maximize=False)(1, PositionRecord(0.05, np.zeros(1)))


def test_any_of():
    stop = any_of(max_iterations(10), target_reached(1.0))
    assert stop(10, SimpleNamespace(fitness=0.0))
    assert stop(1, SimpleNamespace(fitness=2.0))
    assert not stop(1, SimpleNamespace(fitness=0.0))


def test_attractor_higher_ties_keep_other():
    a = Attractor(np.zeros(1), 1.0)
    b = Attractor(np.ones(1), 1.0)
    assert a.higher(b) is b
    assert a.higher(None) is a
    assert Attractor(np.zeros(1), 2.0).higher(b).height == 2.0
