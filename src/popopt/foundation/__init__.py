"""Shared building blocks: errors, logging, constraints, random variates, evaluation."""

from .constraints import Box, box_bounds, integer_bounds
from .exceptions import (
    BoundsError,
    ConfigurationError,
    ContractViolationError,
    PopoptError,
)
from .logging import configure_popopt_logging, resolve_logger
from .variates import GeometricVariable, RandomVariable, UniformVariable

__all__ = [
    "Box",
    "box_bounds",
    "integer_bounds",
    "BoundsError",
    "ConfigurationError",
    "ContractViolationError",
    "PopoptError",
    "configure_popopt_logging",
    "resolve_logger",
    "GeometricVariable",
    "RandomVariable",
    "UniformVariable",
]
