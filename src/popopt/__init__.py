"""popopt: population-based optimizers (integer GA, Grey Wolf, multi-swarm QPSO)."""

from importlib.metadata import PackageNotFoundError, version

from .engine.algorithm import (
    GAConfig,
    GeneticAlgorithmSolver,
    GreyWolfSolver,
    GWOConfig,
    MultiSwarmQPSOConfig,
    MultiSwarmQPSOSolver,
    any_of,
    max_iterations,
    target_reached,
)
from .engine.genotype import Individual, IntegerVectorGenotypeSpace, RecombinationType
from .foundation.exceptions import ConfigurationError, OptimizationError, PopoptError
from .foundation.logging import configure_popopt_logging

try:
    __version__ = version("popopt")
except PackageNotFoundError:  # pragma: no cover - source checkout without metadata
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "GAConfig",
    "GeneticAlgorithmSolver",
    "GWOConfig",
    "GreyWolfSolver",
    "MultiSwarmQPSOConfig",
    "MultiSwarmQPSOSolver",
    "any_of",
    "max_iterations",
    "target_reached",
    "Individual",
    "IntegerVectorGenotypeSpace",
    "RecombinationType",
    "ConfigurationError",
    "OptimizationError",
    "PopoptError",
    "configure_popopt_logging",
]
