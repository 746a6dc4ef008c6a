"""Charged swarm used by the multi-swarm QPSO solver.

Half of the particles are neutral (classic constricted PSO with velocities);
the other half are quantum particles that are re-sampled every step inside a
hyper-ball around the swarm attractor.

Reference:
    Blackwell, T. and Branke, J. (2004). Multi-swarm Optimization in Dynamic
    Environments. Applications of Evolutionary Computing, pp. 489-500.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Callable

import numpy as np

from popopt.foundation.constraints import Box, box_bounds
from popopt.foundation.exceptions import ContractViolationError

from ..components.records import Attractor

__all__ = ["Particle", "QPSOSwarm"]

_logger = logging.getLogger(__name__)


class Particle:
    """A point in the search space with its personal best (higher height is better)."""

    __slots__ = ("position", "velocity", "height", "best_position", "best_height")

    def __init__(self, position: np.ndarray, velocity: np.ndarray | None = None) -> None:
        self.position = np.array(position, dtype=float)
        self.velocity = None if velocity is None else np.array(velocity, dtype=float)
        self.height: float | None = None
        self.best_position = self.position.copy()
        self.best_height: float | None = None

    @property
    def quantum(self) -> bool:
        return self.velocity is None

    def evaluate(self, func: Callable[[np.ndarray], float]) -> float:
        self.height = float(func(self.position))
        if self.best_height is None or self.height > self.best_height:
            self.best_height = self.height
            self.best_position = self.position.copy()
        return self.height


class QPSOSwarm:
    """
    A swarm of ``size // 2`` neutral and ``size - size // 2`` quantum particles.

    Parameters
    ----------
    size : int
        Number of particles.
    initial_positions : array-like, shape (size, n_var)
        Starting position of every particle.
    constraints : Box or mapping, optional
        ``{"min": [...], "max": [...]}``; positions are clamped into it.
    logger : logging.Logger, optional
    initial_velocities : array-like, shape (size // 2, n_var), optional
        Starting velocities of the neutral particles (zero when omitted).
    r_cloud : float
        Radius of the quantum cloud around the attractor.
    rng : numpy.random.Generator, optional
    """

    CHI = 0.7298
    C1 = 2.05
    C2 = 2.05

    def __init__(
        self,
        size: int,
        initial_positions: Sequence[Sequence[float]] | np.ndarray,
        constraints: Box | Mapping[str, Sequence[float]] | None = None,
        logger: logging.Logger | None = None,
        *,
        initial_velocities: Sequence[Sequence[float]] | np.ndarray | None = None,
        r_cloud: float = 0.5,
        rng: np.random.Generator | None = None,
    ) -> None:
        X = np.asarray(initial_positions, dtype=float)
        if X.ndim != 2 or X.shape[0] != size:
            raise ContractViolationError("initial_positions must hold one row per particle.", shape=X.shape, size=size)
        n_neutral = size // 2
        if initial_velocities is None:
            V = np.zeros((n_neutral, X.shape[1]))
        else:
            V = np.asarray(initial_velocities, dtype=float)
            if V.shape != (n_neutral, X.shape[1]):
                raise ContractViolationError(
                    "initial_velocities must hold one row per neutral particle.", shape=V.shape, expected=(n_neutral, X.shape[1])
                )

        if constraints is None or isinstance(constraints, Box):
            self.bounds = constraints
        else:
            self.bounds = box_bounds(constraints, X.shape[1])
        self.size = size
        self.n_var = X.shape[1]
        self.r_cloud = float(r_cloud)
        self.rng = rng or np.random.default_rng()
        self.logger = logger or _logger
        self.particles: list[Particle] = [Particle(X[i], V[i]) for i in range(n_neutral)]
        self.particles.extend(Particle(X[i]) for i in range(n_neutral, size))
        self.attractor: Attractor | None = None

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def __len__(self) -> int:
        return len(self.particles)

    @property
    def positions(self) -> np.ndarray:
        return np.stack([p.position for p in self.particles])

    def evaluate(self, func: Callable[[np.ndarray], float]) -> None:
        for particle in self.particles:
            particle.evaluate(func)

    def update_attractor(self) -> Attractor:
        """Recompute, cache and return the best personal best of the swarm."""
        best: Particle | None = None
        for particle in self.particles:
            if particle.best_height is None:
                continue
            if best is None or particle.best_height > best.best_height:
                best = particle
        if best is None:
            raise ContractViolationError("Swarm attractor requested before any particle was evaluated.")
        self.attractor = Attractor(position=best.best_position.copy(), height=best.best_height)
        self.logger.debug("swarm attractor at height %s", self.attractor.height)
        return self.attractor

    def mutate(self) -> None:
        """Advance every particle by one step around the current attractor."""
        attractor = self.attractor if self.attractor is not None else self.update_attractor()
        g = attractor.position
        for particle in self.particles:
            if particle.quantum:
                particle.position = g + self._cloud_offset()
            else:
                r1 = self.rng.random(self.n_var)
                r2 = self.rng.random(self.n_var)
                particle.velocity = self.CHI * (
                    particle.velocity
                    + self.C1 * r1 * (particle.best_position - particle.position)
                    + self.C2 * r2 * (g - particle.position)
                )
                particle.position = particle.position + particle.velocity
            if self.bounds is not None:
                np.clip(particle.position, self.bounds.lower, self.bounds.upper, out=particle.position)

    def _cloud_offset(self) -> np.ndarray:
        # uniform in the n-ball: gaussian direction, radius ~ r * U^(1/n)
        direction = self.rng.standard_normal(self.n_var)
        norm = np.linalg.norm(direction)
        if norm == 0.0:
            return np.zeros(self.n_var)
        radius = self.r_cloud * self.rng.random() ** (1.0 / self.n_var)
        return direction * (radius / norm)
