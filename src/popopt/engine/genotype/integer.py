"""Integer-vector genotype space.

Variation works on ``int64`` numpy vectors in place: random-delta mutation
first, then one of two blend recombinations, then (when constraints exist)
clamping back into the box.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any

import numpy as np

from popopt.foundation.constraints import Box, integer_bounds
from popopt.foundation.exceptions import (
    ConfigurationError,
    ContractViolationError,
    GenerationError,
    InvalidOperatorError,
    ProblemDimensionError,
)
from popopt.foundation.variates import RandomVariable

from .base import Individual, as_genotype


def _check_same_length(g1: np.ndarray, g2: np.ndarray) -> None:
    if g1.shape != g2.shape:
        raise ContractViolationError(
            "g1 and g2 must have the same dimension",
            left=int(g1.shape[0]),
            right=int(g2.shape[0]),
        )


def _blend(g1: np.ndarray, g2: np.ndarray, alpha, beta) -> None:
    # round half up keeps integer genotypes integral
    t = np.floor(alpha * g1 + (1.0 - alpha) * g2 + 0.5)
    s = np.floor(beta * g2 + (1.0 - beta) * g1 + 0.5)
    g1[:] = t.astype(g1.dtype)
    g2[:] = s.astype(g2.dtype)


def random_delta_mutation(g: np.ndarray, mutation_rv: RandomVariable, rng: np.random.Generator) -> None:
    """Add or subtract (with equal odds) a fresh delta to every gene."""
    for i in range(g.shape[0]):
        delta = mutation_rv.next()
        if rng.random() >= 0.5:
            g[i] += delta
        else:
            g[i] -= delta


def intermediate_recombination(g1: np.ndarray, g2: np.ndarray, recombination_rv: RandomVariable) -> None:
    """Blend every gene with its own freshly drawn ``alpha``/``beta`` pair."""
    _check_same_length(g1, g2)
    n = g1.shape[0]
    alpha = np.empty(n)
    beta = np.empty(n)
    for i in range(n):
        alpha[i] = recombination_rv.next()
        beta[i] = recombination_rv.next()
    _blend(g1, g2, alpha, beta)


def line_recombination(g1: np.ndarray, g2: np.ndarray, recombination_rv: RandomVariable) -> None:
    """Blend all genes with a single ``alpha``/``beta`` pair."""
    _check_same_length(g1, g2)
    alpha = recombination_rv.next()
    beta = recombination_rv.next()
    _blend(g1, g2, alpha, beta)


def repair(g: np.ndarray, bounds: Box) -> None:
    """Clamp every gene into ``[from, to]``; in-bounds genes are left alone."""
    np.clip(g, bounds.lower, bounds.upper, out=g)


class RecombinationType(str, Enum):
    INTERMEDIATE = "intermediate"
    LINE = "line"

    @property
    def operator(self) -> Callable[[np.ndarray, np.ndarray, RandomVariable], None]:
        if self is RecombinationType.INTERMEDIATE:
            return intermediate_recombination
        return line_recombination

    @classmethod
    def parse(cls, value: "str | RecombinationType | None") -> "RecombinationType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise InvalidOperatorError("recombination", str(value), [m.value for m in cls])


class IntegerVectorGenotypeSpace:
    """
    Fixed-length integer vectors, optionally boxed by per-dimension constraints.

    Parameters
    ----------
    dimensions : int
        Genotype length, must be positive.
    recombination_type : str or RecombinationType
        ``"intermediate"`` (per-gene coefficients) or ``"line"`` (one
        coefficient pair for the whole vector).
    constraints : sequence, optional
        One ``{"from": a, "to": b}`` pair per dimension.
    random_func : callable, optional
        Zero-argument genotype generator; takes priority over constraint
        sampling in :meth:`get_random`.
    rng : numpy.random.Generator, optional
        Source for mutation signs and constrained sampling. Without one,
        constrained sampling draws from the ``secrets`` CSPRNG; with one
        (as in a seeded GA) it draws from this numpy generator instead, so
        seeded runs are reproducible but not cryptographically random.
    """

    def __init__(
        self,
        dimensions: int,
        recombination_type: "str | RecombinationType",
        constraints: Sequence[Any] | None = None,
        random_func: Callable[[], Sequence[int]] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        try:
            dims = int(dimensions)
        except (TypeError, ValueError) as exc:
            raise ProblemDimensionError("Must have positive integer dimensions", dimensions) from exc
        if dims <= 0:
            raise ProblemDimensionError("Must have positive integer dimensions", dimensions)
        self.dimensions = dims
        self.recombination_type = RecombinationType.parse(recombination_type)
        self._recombine = self.recombination_type.operator
        self.bounds: Box | None = integer_bounds(constraints, dims) if constraints is not None else None
        self.random_func = random_func
        self._rng = rng
        self._sign_rng = rng or np.random.default_rng()

    OPTIONS = ("dimensions", "recombination_type", "constraints", "random_func")

    @classmethod
    def from_options(cls, opts: Mapping[str, Any], rng: np.random.Generator | None = None) -> "IntegerVectorGenotypeSpace":
        unknown = sorted(set(opts) - set(cls.OPTIONS))
        if unknown:
            raise ConfigurationError(
                f"Unknown integer genotype space options: {', '.join(unknown)}.",
                f"Supported options: {', '.join(cls.OPTIONS)}",
            )
        return cls(
            dimensions=opts.get("dimensions"),
            recombination_type=opts.get("recombination_type"),
            constraints=opts.get("constraints"),
            random_func=opts.get("random_func"),
            rng=rng,
        )

    def get_random(self) -> np.ndarray:
        if self.random_func is not None:
            return as_genotype(self.random_func())
        if self.bounds is None:
            raise GenerationError(
                "Automated random genotype generation when no constraints are provided is not supported."
            )
        if self._rng is None:
            return as_genotype(
                [lo + secrets.randbelow(hi - lo) for lo, hi in zip(self.bounds.lower.tolist(), self.bounds.upper.tolist())]
            )
        return self._rng.integers(self.bounds.lower, self.bounds.upper, dtype=np.int64)

    def reproduce_from(
        self,
        p1: Individual,
        p2: Individual,
        mutation_rv: RandomVariable,
        recombination_rv: RandomVariable,
    ) -> tuple[Individual, Individual]:
        c1 = Individual(p1.genotype.copy())
        c2 = Individual(p2.genotype.copy())

        random_delta_mutation(c1.genotype, mutation_rv, self._sign_rng)
        random_delta_mutation(c2.genotype, mutation_rv, self._sign_rng)

        self._recombine(c1.genotype, c2.genotype, recombination_rv)

        if self.bounds is not None:
            repair(c1.genotype, self.bounds)
            repair(c2.genotype, self.bounds)

        return c1, c2

    def repair(self, g: np.ndarray) -> np.ndarray:
        if self.bounds is not None:
            repair(g, self.bounds)
        return g


__all__ = [
    "RecombinationType",
    "IntegerVectorGenotypeSpace",
    "random_delta_mutation",
    "intermediate_recombination",
    "line_recombination",
    "repair",
]
