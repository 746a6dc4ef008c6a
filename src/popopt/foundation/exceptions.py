"""
popopt exception hierarchy.

Configuration problems are raised while a solver (or a genotype space) is
being built; an invalid configuration never reaches ``solve()``. Runtime
invariant violations signal a bug in a collaborator and abort the run.
Exceptions raised by the caller's evaluation function are never wrapped.

Example:
    try:
        solver = GeneticAlgorithmSolver(config)
    except PopoptError as e:
        print(f"Bad configuration: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class PopoptError(Exception):
    """
    Base exception for all popopt errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PopoptError, ValueError):
    """Raised when configuration is invalid or incomplete."""

    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" (set it on {config_class} before calling fixed())"
        super().__init__(message, suggestion, {"field": field})


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown variation operator is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class InvalidGenotypeSpaceError(ConfigurationError):
    """Raised when an unsupported genotype representation is requested."""

    def __init__(self, space: str, available: list[str] | None = None) -> None:
        available = available or ["integer"]
        message = f"Unsupported genotype space '{space}'."
        suggestion = f"Supported genotype spaces: {', '.join(available)}"
        super().__init__(message, suggestion, {"space": space, "available": available})


class PopulationSizeError(ConfigurationError):
    """Raised when a population (or swarm) size is unusable."""

    def __init__(self, message: str, size: Any = None) -> None:
        suggestion = "Use a positive, even population size"
        super().__init__(message, suggestion, {"size": size})


class ProblemDimensionError(ConfigurationError):
    """Raised when the search-space dimensionality is invalid."""

    def __init__(self, message: str, dimensions: Any = None) -> None:
        suggestion = "dimensions must be a positive integer"
        super().__init__(message, suggestion, {"dimensions": dimensions})


class BoundsError(ConfigurationError):
    """Raised when constraints are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Provide one constraint per dimension with lower bound below upper bound"
        super().__init__(message, suggestion)


class InitializationError(ConfigurationError):
    """Raised when there is no way to seed particle positions or velocities."""

    _GENERATORS = {"positions": "random_position_func", "velocities": "random_velocity_func"}

    def __init__(self, what: str) -> None:
        message = f"Not enough information to initialize particle {what}."
        suggestion = f"Provide start_{what}, a {self._GENERATORS[what]}, or constraints"
        super().__init__(message, suggestion, {"what": what})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(PopoptError):
    """Raised when optimization fails during execution."""

    pass


class ContractViolationError(OptimizationError, RuntimeError):
    """Raised when a runtime invariant is broken (a collaborator bug, not bad input)."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, None, details)


class GenerationError(OptimizationError):
    """Raised when a random genotype cannot be produced."""

    def __init__(self, message: str) -> None:
        suggestion = "Configure constraints or a random_func for the genotype space"
        super().__init__(message, suggestion)


__all__ = [
    # Base
    "PopoptError",
    # Configuration
    "ConfigurationError",
    "MissingConfigError",
    "InvalidOperatorError",
    "InvalidGenotypeSpaceError",
    "PopulationSizeError",
    "ProblemDimensionError",
    "BoundsError",
    "InitializationError",
    # Runtime
    "OptimizationError",
    "ContractViolationError",
    "GenerationError",
]
