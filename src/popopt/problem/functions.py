"""Single-objective test functions.

Each function takes one decision vector and returns a float. ``sphere`` and
``rastrigin`` are minimized (GWO); ``negated_sphere`` peaks at the origin and
suits the maximizing solvers (GA, multi-swarm QPSO); ``integer_sum`` is a
trivial fitness for integer genotypes.
"""

from __future__ import annotations

import numpy as np


def sphere(x) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.sum(np.square(x)))


def negated_sphere(x) -> float:
    return -sphere(x)


def rastrigin(x) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.sum(np.square(x) - 10.0 * np.cos(2.0 * np.pi * x) + 10.0))


def integer_sum(genotype) -> float:
    return float(np.sum(np.asarray(genotype, dtype=np.int64)))


__all__ = ["sphere", "negated_sphere", "rastrigin", "integer_sum"]
