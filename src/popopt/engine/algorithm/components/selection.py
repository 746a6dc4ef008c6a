from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from popopt.foundation.exceptions import ContractViolationError

T = TypeVar("T")


def select_fittest(*candidates: T) -> T:
    """Highest ``fitness`` wins; ties go to the earliest candidate."""
    if not candidates:
        raise ContractViolationError("Attempting to select the fittest sample of an empty population!")
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.fitness > best.fitness:
            best = candidate
    return best


def binary_tournament(population: Sequence[T], rng: np.random.Generator) -> T:
    """Pick two distinct members uniformly at random and keep the fitter."""
    n = len(population)
    if n < 2:
        raise ContractViolationError("Binary tournament needs at least two individuals.", size=n)
    i = int(rng.integers(n))
    j = int(rng.integers(n - 1))
    if j >= i:
        j += 1
    return select_fittest(population[i], population[j])


__all__ = ["select_fittest", "binary_tournament"]
