import numpy as np

from popopt.engine.genotype import repair
from popopt.foundation.constraints import integer_bounds

BOUNDS = integer_bounds([{"from": 0, "to": 10}, {"from": -5, "to": 5}, {"from": 2, "to": 3}])


def test_repair_clamps_into_closed_range():
    g = np.array([-4, 9, 3], dtype=np.int64)

    repair(g, BOUNDS)

    assert g.tolist() == [0, 5, 3]


def test_repair_leaves_in_bounds_genes_alone():
    g = np.array([10, -5, 2], dtype=np.int64)

    repair(g, BOUNDS)

    assert g.tolist() == [10, -5, 2]


def test_repair_is_idempotent():
    rng = np.random.default_rng(4)
    g = rng.integers(-100, 100, size=3)

    repair(g, BOUNDS)
    once = g.copy()
    repair(g, BOUNDS)

    np.testing.assert_array_equal(g, once)
