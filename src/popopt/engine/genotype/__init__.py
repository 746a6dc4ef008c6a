"""Genotype representations and their variation operators."""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from .base import GenotypeSpace, GenotypeSpaceType, Individual, as_genotype
from .integer import (
    IntegerVectorGenotypeSpace,
    RecombinationType,
    intermediate_recombination,
    line_recombination,
    random_delta_mutation,
    repair,
)


def build_genotype_space(
    kind: "str | GenotypeSpaceType",
    options: Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> GenotypeSpace:
    """Instantiate the genotype space for ``kind`` from its option mapping."""
    kind = GenotypeSpaceType.parse(kind)
    if kind is GenotypeSpaceType.INTEGER:
        return IntegerVectorGenotypeSpace.from_options(options, rng=rng)
    raise AssertionError(f"unhandled genotype space {kind!r}")  # pragma: no cover


__all__ = [
    "GenotypeSpace",
    "GenotypeSpaceType",
    "Individual",
    "as_genotype",
    "build_genotype_space",
    "IntegerVectorGenotypeSpace",
    "RecombinationType",
    "intermediate_recombination",
    "line_recombination",
    "random_delta_mutation",
    "repair",
]
