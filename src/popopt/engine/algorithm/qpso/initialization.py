"""Swarm seeding for the multi-swarm QPSO solver.

Positions come from, in order of priority: the configured start positions,
the random position function, uniform sampling inside the constraints.
Velocities of the neutral particles follow the same order with start
velocities, the random velocity function, and uniform sampling in
``[-span / 2, span / 2]``. A slot whose start slice runs past the supplied
data falls through to the next source; if none is left it wraps around
onto the supplied data.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from popopt.foundation.constraints import Box
from popopt.foundation.exceptions import ConfigurationError, InitializationError

from .swarm import QPSOSwarm

__all__ = ["SwarmSeeder"]


def _as_rows(values: Sequence[Sequence[float]] | None, name: str) -> np.ndarray | None:
    if values is None:
        return None
    rows = np.asarray(values, dtype=float)
    if rows.ndim != 2:
        raise ConfigurationError(f"{name} must be a 2-D sequence (one row per particle).")
    return rows


class SwarmSeeder:
    def __init__(
        self,
        swarm_size: int,
        bounds: Box | None = None,
        *,
        random_position_func: Callable[[], Sequence[float]] | None = None,
        random_velocity_func: Callable[[], Sequence[float]] | None = None,
        start_positions: Sequence[Sequence[float]] | None = None,
        start_velocities: Sequence[Sequence[float]] | None = None,
        r_cloud: float = 0.5,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.swarm_size = swarm_size
        self.n_neutral = swarm_size // 2
        self.bounds = bounds
        self.random_position_func = random_position_func
        self.random_velocity_func = random_velocity_func
        self.start_positions = _as_rows(start_positions, "start_positions")
        self.start_velocities = _as_rows(start_velocities, "start_velocities")
        self.r_cloud = r_cloud
        self.rng = rng or np.random.default_rng()

        if self.start_positions is None and random_position_func is None and bounds is None:
            raise InitializationError("positions")
        if self.start_velocities is None and random_velocity_func is None and bounds is None:
            raise InitializationError("velocities")
        if self.start_positions is not None and self.start_positions.shape[0] < swarm_size:
            raise ConfigurationError(f"start_positions must hold at least swarm_size={swarm_size} rows.")
        if self.start_velocities is not None and self.start_velocities.shape[0] < self.n_neutral:
            raise ConfigurationError(f"start_velocities must hold at least {self.n_neutral} rows.")
        n_var = {rows.shape[1] for rows in (self.start_positions, self.start_velocities) if rows is not None}
        if bounds is not None:
            n_var.add(bounds.dimensions)
        if len(n_var) > 1:
            raise ConfigurationError(f"Start data and constraints disagree on the number of dimensions: {sorted(n_var)}.")

    @staticmethod
    def _slice(rows: np.ndarray, index: int, count: int, *, wrap: bool) -> np.ndarray | None:
        start = index * count
        if not wrap and start + count > rows.shape[0]:
            return None
        n_slots = rows.shape[0] // count
        start = (index % n_slots) * count
        return rows[start : start + count].copy()

    def positions(self, index: int) -> np.ndarray:
        if self.start_positions is not None:
            chunk = self._slice(self.start_positions, index, self.swarm_size, wrap=False)
            if chunk is not None:
                return chunk
        if self.random_position_func is not None:
            return np.asarray([self.random_position_func() for _ in range(self.swarm_size)], dtype=float)
        if self.bounds is not None:
            # SPSO 2011: independent uniform draw along each dimension
            u = self.rng.random((self.swarm_size, self.bounds.dimensions))
            return self.bounds.lower + u * self.bounds.span
        return self._slice(self.start_positions, index, self.swarm_size, wrap=True)

    def velocities(self, index: int) -> np.ndarray:
        if self.start_velocities is not None:
            chunk = self._slice(self.start_velocities, index, self.n_neutral, wrap=False)
            if chunk is not None:
                return chunk
        if self.random_velocity_func is not None:
            return np.asarray([self.random_velocity_func() for _ in range(self.n_neutral)], dtype=float)
        if self.bounds is not None:
            half = self.bounds.span / 2.0
            return -half + self.rng.random((self.n_neutral, self.bounds.dimensions)) * (2.0 * half)
        return self._slice(self.start_velocities, index, self.n_neutral, wrap=True)

    def build(self, index: int, logger: logging.Logger | None = None) -> QPSOSwarm:
        """A fresh, unevaluated swarm for slot ``index``."""
        return QPSOSwarm(
            size=self.swarm_size,
            initial_positions=self.positions(index),
            constraints=self.bounds,
            logger=logger,
            initial_velocities=self.velocities(index),
            r_cloud=self.r_cloud,
            rng=self.rng,
        )
