"""Ready-made exit conditions.

An exit condition is any callable ``(iteration, best) -> bool`` evaluated once
per iteration after the best-so-far record has been updated. Solvers run
until it returns ``True``; with no exit condition they never stop.
"""

from __future__ import annotations

from typing import Any, Callable

ExitCondition = Callable[[int, Any], bool]


def _score(best: Any) -> float:
    for attr in ("fitness", "height"):
        value = getattr(best, attr, None)
        if value is not None:
            return value
    raise TypeError(f"Cannot read a score from {best!r}.")


def max_iterations(n: int) -> ExitCondition:
    """Stop once ``n`` iterations (generations) have completed."""
    if int(n) <= 0:
        raise ValueError("max_iterations must be positive.")
    limit = int(n)

    def _stop(iteration: int, best: Any) -> bool:
        return iteration >= limit

    return _stop


def target_reached(target: float, *, maximize: bool = True) -> ExitCondition:
    """Stop once the best score reaches ``target`` in the solver's direction."""

    def _stop(iteration: int, best: Any) -> bool:
        score = _score(best)
        return score >= target if maximize else score <= target

    return _stop


def any_of(*conditions: ExitCondition) -> ExitCondition:
    if not conditions:
        raise ValueError("any_of() needs at least one condition.")

    def _stop(iteration: int, best: Any) -> bool:
        return any(cond(iteration, best) for cond in conditions)

    return _stop


__all__ = ["ExitCondition", "max_iterations", "target_reached", "any_of"]
