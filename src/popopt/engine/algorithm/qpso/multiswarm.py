"""Multi-swarm QPSO solver.

Heights are maximized. A dynamic list of charged swarms tracks (possibly
several) optima; three phases keep the swarms diverse:

- anti-convergence: when every swarm has collapsed a new swarm is spawned,
  when too many are still spread out the worst of those is dropped;
- exclusion: of two swarms whose attractors are closer than ``r_excl``, the
  lower one is re-seeded in place.

Reference:
    Blackwell, T. and Branke, J. (2004). Multi-swarm Optimization in Dynamic
    Environments. Applications of Evolutionary Computing, pp. 489-500.
    DOI: 10.1007/978-3-540-24653-4_50
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from popopt.foundation.constraints import box_bounds
from popopt.foundation.logging import resolve_logger

from ..components.records import Attractor
from ..config.qpso import MultiSwarmQPSOConfigData
from .initialization import SwarmSeeder
from .swarm import QPSOSwarm

__all__ = ["MultiSwarmQPSOSolver", "spread_exceeds"]


def spread_exceeds(swarm: QPSOSwarm, limit: float) -> bool:
    """True when some pair of particles is farther apart than ``limit``."""
    P = swarm.positions
    diff = P[:, None, :] - P[None, :, :]
    return bool(np.any(np.sqrt((diff**2).sum(axis=-1)) > limit))


def _best_attractor(swarms: Sequence[QPSOSwarm]) -> Attractor:
    best: Attractor | None = None
    for swarm in swarms:
        if best is None or swarm.attractor.height > best.height:
            best = swarm.attractor
    return best


class MultiSwarmQPSOSolver:
    """Multi-swarm quantum particle swarm optimizer.

    Parameters
    ----------
    config : MultiSwarmQPSOConfigData
        Frozen configuration, usually built with
        ``MultiSwarmQPSOConfig().num_swarms(...)...fixed()``.

    Attributes
    ----------
    swarms : list of QPSOSwarm
        Swarms alive at the end of the last ``solve()``.
    swarm_count : int
        ``len(swarms)``, tracked as swarms are spawned and removed.
    history : list of float
        Overall best height after every iteration.
    """

    def __init__(self, config: MultiSwarmQPSOConfigData):
        self.cfg = config
        self.swarm_size = config.swarm_size
        self.num_swarms = config.num_swarms
        self.r_excl = config.r_excl
        self.n_excess = config.n_excess
        self.exit_condition = config.exit_condition
        self.bounds = box_bounds(config.constraints) if config.constraints is not None else None
        self.rng = np.random.default_rng(config.seed)
        self.quiet = config.quiet
        self.logger = resolve_logger(
            config.logger, config.log_level, default_name=__name__, default_level=logging.INFO
        )
        self.seeder = SwarmSeeder(
            self.swarm_size,
            self.bounds,
            random_position_func=config.random_position_func,
            random_velocity_func=config.random_velocity_func,
            start_positions=config.start_positions,
            start_velocities=config.start_velocities,
            r_cloud=config.r_cloud,
            rng=self.rng,
        )
        self.swarms: list[QPSOSwarm] = []
        self.swarm_count = 0
        self.history: list[float] = []

    def new_swarm(self, index: int, func: Callable[[np.ndarray], float]) -> QPSOSwarm:
        """Seed, evaluate and attract a swarm for slot ``index``."""
        swarm = self.seeder.build(index, logger=self.logger)
        swarm.evaluate(func)
        swarm.update_attractor()
        return swarm

    def solve(self, func: Callable[[np.ndarray], float]) -> Attractor:
        """Iterate until the exit condition holds and return the highest attractor seen.

        Without an exit condition this method never returns.
        """
        swarms = [self.new_swarm(i, func) for i in range(self.num_swarms)]
        self.swarms = swarms
        self.swarm_count = len(swarms)
        overall_best = _best_attractor(swarms)
        self.history = []

        iteration = 0
        while True:
            iteration += 1
            self.logger.debug("MultiSwarm QPSO - Starting iteration %d (%d swarms)", iteration, len(swarms))

            self.anti_convergence(swarms, func)

            for swarm in swarms:
                swarm.mutate()
            for swarm in swarms:
                swarm.evaluate(func)

            for swarm in swarms:
                swarm.update_attractor()
            best_attractor = _best_attractor(swarms)
            overall_best = best_attractor.higher(overall_best)
            self.history.append(overall_best.height)

            if not self.quiet:
                self.logger.info(
                    "> iter %d, best: %s, %s", iteration, best_attractor.position.tolist(), best_attractor.height
                )

            self.reinitialize(swarms, self.exclusion(swarms), func)

            if self.exit_condition is not None and self.exit_condition(iteration, overall_best):
                break

        return overall_best

    def anti_convergence(self, swarms: list[QPSOSwarm], func: Callable[[np.ndarray], float]) -> int:
        """Spawn a swarm when all have converged, drop the worst spread-out one when too many have not.

        Returns the number of swarms that were not converged.
        """
        not_converged = 0
        worst: int | None = None
        for i, swarm in enumerate(swarms):
            if spread_exceeds(swarm, 2.0 * self.r_excl):
                not_converged += 1
                if worst is None or swarm.attractor.height < swarms[worst].attractor.height:
                    worst = i

        if not_converged == 0:
            self.logger.debug("All swarms converged, spawning a new one")
            swarms.append(self.new_swarm(len(swarms), func))
            self.swarm_count += 1
        elif not_converged > self.n_excess:
            self.logger.debug("Removing worst swarm (height %s)", swarms[worst].attractor.height)
            del swarms[worst]
            self.swarm_count -= 1
        return not_converged

    def exclusion(self, swarms: Sequence[QPSOSwarm]) -> list[int]:
        """Slots to re-seed: the lower of every pair of attractors closer than ``r_excl``."""
        marked: list[int] = []
        for i in range(len(swarms)):
            for j in range(i + 1, len(swarms)):
                if i in marked or j in marked:
                    continue
                a, b = swarms[i].attractor, swarms[j].attractor
                dist = float(np.linalg.norm(a.position - b.position))
                if dist < self.r_excl:
                    self.logger.debug("Swarms %d and %d are colliding (%.4g < %.4g)", i, j, dist, self.r_excl)
                    marked.append(i if a.height <= b.height else j)
        return marked

    def reinitialize(self, swarms: list[QPSOSwarm], slots: Sequence[int], func: Callable[[np.ndarray], float]) -> None:
        for index in slots:
            swarms[index] = self.new_swarm(index, func)
