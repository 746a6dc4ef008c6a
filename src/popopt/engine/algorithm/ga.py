"""Generational genetic algorithm over an integer-vector genotype space.

Fitness is maximized. Each generation is scored concurrently on a thread
pool, then rebuilt from scratch by binary-tournament selection and pairwise
reproduction delegated to the genotype space.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from popopt.engine.genotype import Individual, as_genotype, build_genotype_space
from popopt.foundation.eval import ThreadedFitnessBackend
from popopt.foundation.exceptions import ConfigurationError, ContractViolationError
from popopt.foundation.logging import resolve_logger
from popopt.foundation.variates import mutation_variable, recombination_variable

from .components.selection import binary_tournament, select_fittest
from .config.ga import GAConfigData

__all__ = ["GeneticAlgorithmSolver"]


class GeneticAlgorithmSolver:
    """Genetic algorithm with random-delta mutation and blend recombination.

    Parameters
    ----------
    config : GAConfigData
        Frozen configuration, usually built with
        ``GAConfig().population_size(...)...fixed()``.

    Attributes
    ----------
    history : list of float
        Overall best fitness after each generation of the last ``solve()``.
    generation : int
        Number of generations completed by the last ``solve()``.

    Examples
    --------
    >>> config = (
    ...     GAConfig()
    ...     .population_size(4)
    ...     .genotype_space("integer", dimensions=2, recombination_type="line",
    ...                     constraints=[{"from": 0, "to": 10}, {"from": 0, "to": 10}])
    ...     .mutation_probability(0.5)
    ...     .recombination_probability(0.5)
    ...     .exit_condition(max_iterations(3))
    ...     .fixed()
    ... )
    >>> best = GeneticAlgorithmSolver(config).solve(lambda g: float(g.sum()))
    """

    def __init__(self, config: GAConfigData):
        self.cfg = config
        self.population_size = config.population_size
        self.rng = np.random.default_rng(config.seed)

        # unseeded runs keep CSPRNG sampling for random genotypes
        space_rng = self.rng if config.seed is not None else None
        self.genotype_space = build_genotype_space(
            config.genotype_space_type, config.genotype_space_conf, rng=space_rng
        )
        self.mutation_rv = mutation_variable(config.mutation_probability, self.rng)
        self.recombination_rv = recombination_variable(config.recombination_probability, self.rng)

        self.exit_condition = config.exit_condition
        self.start_population = self._check_start_population(config.start_population)
        if (
            self.start_population is None
            and getattr(self.genotype_space, "bounds", None) is None
            and getattr(self.genotype_space, "random_func", None) is None
        ):
            raise ConfigurationError(
                "No way to build the initial population: the genotype space has neither constraints nor a "
                "random_func, and no start_population was given.",
                "Add constraints, a random_func or a start_population",
            )
        self.n_workers = config.n_workers
        self.quiet = config.quiet
        self.logger = resolve_logger(
            config.logger, config.log_level, default_name=__name__, default_level=logging.WARNING
        )

        self.history: list[float] = []
        self.generation = 0

    def _check_start_population(self, genotypes: Sequence[Sequence[int]] | None) -> list[np.ndarray] | None:
        if genotypes is None:
            return None
        checked = [as_genotype(g) for g in genotypes]
        if len(checked) != self.population_size:
            raise ConfigurationError(
                f"start_population has {len(checked)} genotypes, expected population_size={self.population_size}."
            )
        dims = getattr(self.genotype_space, "dimensions", None)
        if dims is not None and any(g.shape[0] != dims for g in checked):
            raise ConfigurationError(f"Every start genotype must have {dims} genes.")
        return checked

    def initial_population(self) -> list[Individual]:
        if self.start_population is not None:
            return [Individual(g.copy()) for g in self.start_population]
        return [Individual(self.genotype_space.get_random()) for _ in range(self.population_size)]

    def solve(self, func: Callable[[np.ndarray], float]) -> Individual:
        """Evolve until the exit condition holds and return the fittest individual seen.

        Parameters
        ----------
        func : callable
            Maps a genotype (1-D ``int64`` array) to a fitness; higher is better.
            Called from worker threads. Exceptions propagate out of ``solve()``.

        Returns
        -------
        Individual
            Overall best. Without an exit condition this method never returns.
        """
        population = self.initial_population()
        gen = 0
        overall_best: Individual | None = None
        self.history = []

        with ThreadedFitnessBackend(self.n_workers) as backend:
            while True:
                gen += 1
                self.logger.debug("GA - Starting generation %d", gen)

                if len(population) != self.population_size:
                    raise ContractViolationError(
                        "Population size error!", size=len(population), expected=self.population_size
                    )
                backend.evaluate(population, func, expected=self.population_size)

                population_best = select_fittest(*population)
                if overall_best is None:
                    overall_best = population_best
                else:
                    overall_best = select_fittest(overall_best, population_best)
                self.history.append(overall_best.fitness)
                self.generation = gen

                if not self.quiet:
                    self.logger.info("> gen %d, best: %s, %s", gen, overall_best.genotype.tolist(), overall_best.fitness)

                if self.exit_condition is not None and self.exit_condition(gen, overall_best):
                    break

                population = self.new_generation(population)

        return overall_best

    def new_generation(self, population: Sequence[Individual]) -> list[Individual]:
        """Select ``population_size`` parents by binary tournament and reproduce them pairwise."""
        selected = [binary_tournament(population, self.rng) for _ in range(self.population_size)]
        self.rng.shuffle(selected)

        children: list[Individual] = []
        for p1, p2 in zip(selected[0::2], selected[1::2]):
            c1, c2 = self.genotype_space.reproduce_from(p1, p2, self.mutation_rv, self.recombination_rv)
            children.extend((c1, c2))
            if len(children) > self.population_size:
                raise ContractViolationError(
                    "Children size error!", size=len(children), expected=self.population_size
                )
        return children

    def __repr__(self) -> str:
        return f"GeneticAlgorithmSolver(population_size={self.population_size}, genotype_space={self.genotype_space!r})"
