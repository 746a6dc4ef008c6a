"""Best-so-far records returned by the continuous solvers.

Each solver owns its comparison direction: GWO keeps the lowest
``fitness``; multi-swarm QPSO keeps the highest ``height``. The GA reports an
:class:`~popopt.engine.genotype.Individual` and keeps the highest fitness.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PositionRecord:
    """GWO best: lower ``fitness`` is better."""

    fitness: float
    position: np.ndarray


@dataclass(frozen=True)
class Attractor:
    """A swarm's best point: higher ``height`` is better."""

    position: np.ndarray
    height: float

    def higher(self, other: "Attractor | None") -> "Attractor":
        """The higher of ``self`` and ``other``; ``other`` wins ties."""
        if other is None or self.height > other.height:
            return self
        return other


__all__ = ["PositionRecord", "Attractor"]
