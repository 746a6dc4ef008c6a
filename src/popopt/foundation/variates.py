"""Random-variate generators feeding the GA variation operators.

Each generator wraps a ``numpy.random.Generator`` and produces successive
draws from one configured distribution through ``next()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .exceptions import ConfigurationError


class RandomVariable(ABC):
    """A stream of draws from a fixed distribution."""

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng or np.random.default_rng()

    @abstractmethod
    def next(self) -> float:
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self) -> float:
        return self.next()


class GeometricVariable(RandomVariable):
    """Number of Bernoulli trials up to the first success (support 1, 2, ...).

    A success probability of 0 is the degenerate distribution that always
    yields 0, which turns random-delta mutation into a no-op.
    """

    def __init__(self, probability_of_success: float, rng: np.random.Generator | None = None) -> None:
        p = float(probability_of_success)
        if not 0.0 <= p <= 1.0:
            raise ConfigurationError(
                f"Geometric probability of success must lie in [0, 1], got {p}.",
                "Check mutation_probability",
            )
        super().__init__(rng)
        self.probability_of_success = p

    def next(self) -> int:
        if self.probability_of_success == 0.0:
            return 0
        return int(self.rng.geometric(self.probability_of_success))


class UniformVariable(RandomVariable):
    """Continuous uniform draws in ``[min_value, max_value)``."""

    def __init__(self, min_value: float = 0.0, max_value: float = 1.0, rng: np.random.Generator | None = None) -> None:
        lo, hi = float(min_value), float(max_value)
        if hi < lo:
            raise ConfigurationError(
                f"Uniform range is inverted: [{lo}, {hi}).",
                "Check recombination_probability",
            )
        super().__init__(rng)
        self.min_value = lo
        self.max_value = hi

    def next(self) -> float:
        return float(self.rng.uniform(self.min_value, self.max_value))


def mutation_variable(mutation_probability: float, rng: np.random.Generator | None = None) -> GeometricVariable:
    """Step-size generator for random-delta mutation."""
    return GeometricVariable(mutation_probability, rng)


def recombination_variable(recombination_probability: float, rng: np.random.Generator | None = None) -> UniformVariable:
    """Blend-coefficient generator: uniform in ``[-p, 1 + p)``."""
    p = float(recombination_probability)
    return UniformVariable(-p, 1.0 + p, rng)


__all__ = [
    "RandomVariable",
    "GeometricVariable",
    "UniformVariable",
    "mutation_variable",
    "recombination_variable",
]
