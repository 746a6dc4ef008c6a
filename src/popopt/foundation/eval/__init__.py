from __future__ import annotations

from typing import Any, Callable, Protocol

EvaluationFunction = Callable[[Any], float]


class Evaluable(Protocol):
    """A record whose genotype is scored once and stored in place."""

    genotype: Any

    def assign_fitness(self, value: float) -> None: ...


from .backends import (  # noqa: E402
    CountDownLatch,
    ThreadedFitnessBackend,
    evaluate_rows,
)

__all__ = [
    "EvaluationFunction",
    "Evaluable",
    "CountDownLatch",
    "ThreadedFitnessBackend",
    "evaluate_rows",
]
