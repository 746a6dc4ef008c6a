"""Deterministic tests for the integer blend recombinations."""

import numpy as np
import pytest

from popopt.engine.genotype import intermediate_recombination, line_recombination
from popopt.foundation.exceptions import ContractViolationError
from popopt.foundation.variates import RandomVariable, recombination_variable


class ScriptedVariable(RandomVariable):
    """Replays a fixed list of draws and counts how many were taken."""

    def __init__(self, values):
        super().__init__()
        self.values = list(values)
        self.calls = 0

    def next(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def test_identity_coefficients_keep_parents():
    g1 = np.array([1, 5, -3], dtype=np.int64)
    g2 = np.array([4, 0, 7], dtype=np.int64)

    intermediate_recombination(g1, g2, ScriptedVariable([1.0]))

    assert g1.tolist() == [1, 5, -3]
    assert g2.tolist() == [4, 0, 7]


def test_half_blend_rounds_half_up():
    g1 = np.array([0, 1], dtype=np.int64)
    g2 = np.array([3, 4], dtype=np.int64)

    line_recombination(g1, g2, ScriptedVariable([0.5]))

    # 1.5 -> 2 and 2.5 -> 3
    assert g1.tolist() == [2, 3]
    assert g2.tolist() == [2, 3]


def test_negative_midpoints_round_half_up():
    g1 = np.array([-3], dtype=np.int64)
    g2 = np.array([0], dtype=np.int64)

    line_recombination(g1, g2, ScriptedVariable([0.5]))

    # -1.5 -> -1
    assert g1.tolist() == [-1]
    assert g2.tolist() == [-1]


def test_intermediate_draws_a_pair_per_gene():
    rv = ScriptedVariable([0.5, 1.0])
    g1 = np.zeros(4, dtype=np.int64)
    g2 = np.ones(4, dtype=np.int64)

    intermediate_recombination(g1, g2, rv)

    assert rv.calls == 8


def test_line_draws_a_single_pair():
    rv = ScriptedVariable([0.25, 0.75])
    g1 = np.zeros(4, dtype=np.int64)
    g2 = np.full(4, 8, dtype=np.int64)

    line_recombination(g1, g2, rv)

    assert rv.calls == 2
    # alpha = 0.25 everywhere: 0.25*0 + 0.75*8 = 6
    assert g1.tolist() == [6, 6, 6, 6]
    # beta = 0.75 everywhere: 0.75*8 + 0.25*0 = 6
    assert g2.tolist() == [6, 6, 6, 6]


def test_intermediate_uses_independent_coefficients():
    rv = ScriptedVariable([1.0, 1.0, 0.0, 0.0])
    g1 = np.array([2, 2], dtype=np.int64)
    g2 = np.array([9, 9], dtype=np.int64)

    intermediate_recombination(g1, g2, rv)

    assert g1.tolist() == [2, 9]
    assert g2.tolist() == [9, 2]


@pytest.mark.parametrize("operator", [intermediate_recombination, line_recombination])
def test_recombination_keeps_length_and_integrality(operator):
    rng = np.random.default_rng(3)
    rv = recombination_variable(0.25, rng)
    g1 = rng.integers(-50, 50, size=6)
    g2 = rng.integers(-50, 50, size=6)

    operator(g1, g2, rv)

    assert g1.shape == (6,) and g2.shape == (6,)
    assert g1.dtype == np.int64 and g2.dtype == np.int64


@pytest.mark.parametrize("operator", [intermediate_recombination, line_recombination])
def test_recombination_rejects_length_mismatch(operator):
    with pytest.raises(ContractViolationError, match="same dimension"):
        operator(np.zeros(2, dtype=np.int64), np.zeros(3, dtype=np.int64), ScriptedVariable([0.5]))
