"""Solvers and their building blocks."""

from .components import Attractor, PositionRecord, any_of, max_iterations, target_reached
from .config import (
    GAConfig,
    GAConfigData,
    GWOConfig,
    GWOConfigData,
    MultiSwarmQPSOConfig,
    MultiSwarmQPSOConfigData,
)
from .ga import GeneticAlgorithmSolver
from .gwo import GreyWolfSolver, find_alpha_beta_delta
from .qpso import MultiSwarmQPSOSolver, QPSOSwarm

__all__ = [
    "Attractor",
    "PositionRecord",
    "any_of",
    "max_iterations",
    "target_reached",
    "GAConfig",
    "GAConfigData",
    "GWOConfig",
    "GWOConfigData",
    "MultiSwarmQPSOConfig",
    "MultiSwarmQPSOConfigData",
    "GeneticAlgorithmSolver",
    "GreyWolfSolver",
    "find_alpha_beta_delta",
    "MultiSwarmQPSOSolver",
    "QPSOSwarm",
]
