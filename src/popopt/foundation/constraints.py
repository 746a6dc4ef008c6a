"""Search-space constraints.

Two shapes are accepted from callers:

- integer genotypes: one ``{"from": a, "to": b}`` mapping (or ``(a, b)`` pair)
  per dimension;
- continuous positions: parallel ``{"min": [...], "max": [...]}`` vectors.

Both normalize to a :class:`Box` holding ``lower``/``upper`` arrays.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .exceptions import BoundsError


@dataclass(frozen=True)
class Box:
    """Per-dimension bounds, ``lower[i] <= upper[i]``."""

    lower: np.ndarray
    upper: np.ndarray

    @property
    def dimensions(self) -> int:
        return int(self.lower.shape[0])

    @property
    def span(self) -> np.ndarray:
        return self.upper - self.lower

    def clip(self, X: np.ndarray) -> np.ndarray:
        return np.clip(X, self.lower, self.upper)

    def as_pairs(self) -> list[dict[str, Any]]:
        return [{"from": lo.item(), "to": hi.item()} for lo, hi in zip(self.lower, self.upper)]

    def as_min_max(self) -> dict[str, list[Any]]:
        return {"min": self.lower.tolist(), "max": self.upper.tolist()}


def _check_count(n: int, dimensions: int | None) -> None:
    if dimensions is not None and n != dimensions:
        raise BoundsError(f"Constraints must be provided for every dimension: got {n}, expected {dimensions}.")


def integer_bounds(constraints: Sequence[Any], dimensions: int | None = None) -> Box:
    """Normalize per-dimension ``{from, to}`` pairs into an integer :class:`Box`.

    ``to`` must be strictly greater than ``from``: random sampling draws from
    the half-open range ``[from, to)``.
    """
    if isinstance(constraints, Mapping):
        raise BoundsError("Integer constraints must be a sequence of {from, to} pairs, one per dimension.")
    lower, upper = [], []
    for i, item in enumerate(constraints):
        if isinstance(item, Mapping):
            try:
                lo, hi = item["from"], item["to"]
            except KeyError as exc:
                raise BoundsError(f"Constraint {i} is missing key {exc.args[0]!r}.") from exc
        else:
            try:
                lo, hi = item
            except (TypeError, ValueError) as exc:
                raise BoundsError(f"Constraint {i} must be a {{from, to}} mapping or a pair.") from exc
        if int(lo) != lo or int(hi) != hi:
            raise BoundsError(f"Constraint {i} must have integer bounds, got [{lo}, {hi}].")
        if hi <= lo:
            raise BoundsError(f"Constraint {i} has an empty range [{lo}, {hi}).")
        lower.append(int(lo))
        upper.append(int(hi))
    _check_count(len(lower), dimensions)
    return Box(lower=np.asarray(lower, dtype=np.int64), upper=np.asarray(upper, dtype=np.int64))


def box_bounds(constraints: Mapping[str, Sequence[float]], dimensions: int | None = None) -> Box:
    """Normalize parallel ``{"min": [...], "max": [...]}`` vectors into a float :class:`Box`."""
    if not isinstance(constraints, Mapping) or "min" not in constraints or "max" not in constraints:
        raise BoundsError("Continuous constraints must be a mapping with 'min' and 'max' vectors.")
    lower = np.asarray(constraints["min"], dtype=float).reshape(-1)
    upper = np.asarray(constraints["max"], dtype=float).reshape(-1)
    if lower.shape != upper.shape:
        raise BoundsError(f"'min' and 'max' differ in length: {lower.shape[0]} vs {upper.shape[0]}.")
    _check_count(lower.shape[0], dimensions)
    if np.any(upper < lower):
        bad = np.flatnonzero(upper < lower).tolist()
        raise BoundsError(f"'max' is below 'min' in dimensions {bad}.")
    return Box(lower=lower, upper=upper)


__all__ = ["Box", "integer_bounds", "box_bounds"]
