"""Grey Wolf Optimizer (GWO).

Reference:
    Mirjalili, S., Mirjalili, S.M. and Lewis, A. (2014). Grey Wolf
    Optimizer. Advances in Engineering Software, 69, pp. 46-61.

Fitness is minimized. The three lowest-fitness wolves (alpha, beta, delta)
lead every other wolf; the exploration coefficient ``a`` decays linearly from
2 to 0 over ``max_iterations``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from typing import Callable, Sequence

import numpy as np

from popopt.foundation.constraints import box_bounds
from popopt.foundation.eval import evaluate_rows
from popopt.foundation.exceptions import ConfigurationError, ContractViolationError
from popopt.foundation.logging import resolve_logger

from .components.records import PositionRecord
from .config.gwo import GWOConfigData

__all__ = ["GreyWolfSolver", "find_alpha_beta_delta"]


def find_alpha_beta_delta(fitness: Sequence[float]) -> tuple[int, int, int]:
    """Indices of the three lowest fitness values, ties going to the lower index."""
    values = list(fitness)
    if len(values) < 3:
        raise ContractViolationError("Leader search needs at least three wolves.", size=len(values))
    chosen: list[int] = []
    for _ in range(3):
        best = -1
        for i, value in enumerate(values):
            if i in chosen:
                continue
            if best < 0 or value < values[best]:
                best = i
        chosen.append(best)
    return chosen[0], chosen[1], chosen[2]


class GreyWolfSolver:
    """Grey Wolf Optimizer over a continuous box.

    Parameters
    ----------
    config : GWOConfigData
        Frozen configuration, usually built with ``GWOConfig()...fixed()``.

    Attributes
    ----------
    best_history : list of float
        Best fitness of the initial population followed by the best fitness
        of every iteration of the last ``solve()``.
    """

    def __init__(self, config: GWOConfigData):
        self.cfg = config
        self.population_size = config.population_size
        self.dimensions = config.dimensions
        self.max_iterations = config.max_iterations
        self.bounds = box_bounds(config.constraints, self.dimensions) if config.constraints is not None else None
        self.exit_condition = config.exit_condition
        self.rng = np.random.default_rng(config.seed)
        self.quiet = config.quiet
        self.logger = resolve_logger(
            config.logger, config.log_level, default_name=__name__, default_level=logging.INFO
        )
        self.start_population = self._check_start_population(config.start_population)
        self.best_history: list[float] = []

    def _check_start_population(self, positions: Sequence[Sequence[float]] | None) -> np.ndarray | None:
        if positions is None:
            return None
        X = np.asarray(positions, dtype=float)
        expected = (self.population_size, self.dimensions)
        if X.shape != expected:
            raise ConfigurationError(f"start_population has shape {X.shape}, expected {expected}.")
        return X

    def initialize_population(self) -> np.ndarray:
        """Uniform positions inside the constraints, or inside ``[0, 1)`` per dimension without them."""
        shape = (self.population_size, self.dimensions)
        if self.bounds is not None:
            return self.bounds.lower + self.rng.random(shape) * self.bounds.span
        return self.rng.random(shape)

    def exploration_coefficient(self, iteration: int) -> float:
        return max(0.0, 2.0 - iteration * (2.0 / self.max_iterations))

    def solve(self, func: Callable[[np.ndarray], float], concurrent: bool = False) -> PositionRecord:
        """Hunt until the exit condition holds and return the lowest-fitness position seen.

        With ``concurrent=True`` every evaluation of an iteration runs as a
        future on a thread pool; results are gathered in wolf order.
        """
        if not self.quiet:
            self.logger.info("Starting GWO algorithm...")

        positions = self.start_population.copy() if self.start_population is not None else self.initialize_population()

        pool = ThreadPoolExecutor(thread_name_prefix="popopt-gwo") if concurrent else nullcontext()
        with pool as executor:
            fitness = evaluate_rows(positions, func, executor)
            idx = int(np.argmin(fitness))
            overall_best = PositionRecord(fitness=float(fitness[idx]), position=positions[idx].copy())
            self.best_history = [float(fitness[idx])]

            iteration = 0
            while True:
                iteration += 1
                positions = self.update_positions(positions, fitness, iteration)
                fitness = evaluate_rows(positions, func, executor)

                idx = int(np.argmin(fitness))
                iter_best = float(fitness[idx])
                if iter_best < overall_best.fitness:
                    overall_best = PositionRecord(fitness=iter_best, position=positions[idx].copy())
                self.best_history.append(iter_best)

                if not self.quiet:
                    self.logger.info("> iter %d, best fitness: %s", iteration, iter_best)

                if self.exit_condition is not None and self.exit_condition(iteration, overall_best):
                    break

        return overall_best

    def update_positions(self, positions: np.ndarray, fitness: Sequence[float], iteration: int) -> np.ndarray:
        """New positions for every wolf, all computed from the same snapshot."""
        X = np.asarray(positions, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.dimensions:
            raise ContractViolationError("Positions do not match the configured dimensions.", shape=X.shape)

        leaders = X[list(find_alpha_beta_delta(fitness))]
        a = self.exploration_coefficient(iteration)

        shape = (3,) + X.shape
        A = a * (2.0 * self.rng.random(shape) - 1.0)
        C = 2.0 * self.rng.random(shape)
        D = np.abs(C * leaders[:, None, :] - X[None, :, :])
        X_new = (leaders[:, None, :] - A * D).mean(axis=0)

        if self.bounds is not None:
            np.clip(X_new, self.bounds.lower, self.bounds.upper, out=X_new)
        return X_new
