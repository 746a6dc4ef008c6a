from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence, runtime_checkable

import numpy as np

from popopt.foundation.exceptions import ContractViolationError, InvalidGenotypeSpaceError
from popopt.foundation.variates import RandomVariable


def as_genotype(values: Sequence[int] | np.ndarray) -> np.ndarray:
    """Copy ``values`` into a fresh 1-D ``int64`` genotype."""
    return np.array(values, dtype=np.int64).reshape(-1)


@dataclass(eq=False)
class Individual:
    """A genotype and its fitness (``None`` until evaluated, then fixed)."""

    genotype: np.ndarray
    fitness: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.genotype, np.ndarray) or self.genotype.dtype != np.int64:
            self.genotype = as_genotype(self.genotype)

    @property
    def evaluated(self) -> bool:
        return self.fitness is not None

    def assign_fitness(self, value: float) -> None:
        if self.fitness is not None:
            raise ContractViolationError("Fitness was already assigned to this individual.", fitness=self.fitness)
        self.fitness = value

    def __repr__(self) -> str:
        return f"Individual(genotype={self.genotype.tolist()}, fitness={self.fitness})"


@runtime_checkable
class GenotypeSpace(Protocol):
    def get_random(self) -> np.ndarray: ...

    def reproduce_from(
        self,
        p1: Individual,
        p2: Individual,
        mutation_rv: RandomVariable,
        recombination_rv: RandomVariable,
    ) -> tuple[Individual, Individual]: ...


class GenotypeSpaceType(str, Enum):
    INTEGER = "integer"

    @classmethod
    def parse(cls, value: Any) -> "GenotypeSpaceType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise InvalidGenotypeSpaceError(str(value), [m.value for m in cls])


__all__ = ["Individual", "GenotypeSpace", "GenotypeSpaceType", "as_genotype"]
