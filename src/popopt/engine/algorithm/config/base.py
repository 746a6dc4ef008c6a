"""Base utilities for solver configuration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from popopt.foundation.exceptions import MissingConfigError, PopulationSizeError, ProblemDimensionError

LoggerSelector = str | logging.Logger | None


def _require_fields(cfg: Dict[str, Any], fields: Tuple[str, ...], name: str) -> None:
    """Validate that required fields are present in configuration."""
    for field in fields:
        if field not in cfg or cfg[field] is None:
            raise MissingConfigError(field, f"{name}Config")


def _check_even_population(value: Any, name: str = "population_size", minimum: int = 2) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError) as exc:
        raise PopulationSizeError(f"{name} must be an integer, got {value!r}.", value) from exc
    if size != value:
        raise PopulationSizeError(f"{name} must be an integer, got {value!r}.", value)
    if size <= 0 or size % 2 != 0:
        raise PopulationSizeError("Even population size required!", size)
    if size < minimum:
        raise PopulationSizeError(f"{name} must be at least {minimum}, got {size}.", size)
    return size


def _check_positive_int(value: Any, name: str) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError) as exc:
        raise ProblemDimensionError(f"{name} must be a positive integer, got {value!r}.", value) from exc
    if n <= 0 or n != value:
        raise ProblemDimensionError(f"{name} must be a positive integer, got {value!r}.", value)
    return n


class _LoggingOptions:
    """Builder mixin for the logger selector, level and quiet flag."""

    _cfg: Dict[str, Any]

    def logger(self, selector: LoggerSelector, level: int | str | None = None):
        self._cfg["logger"] = selector
        if level is not None:
            self._cfg["log_level"] = level
        return self

    def log_level(self, value: int | str):
        self._cfg["log_level"] = value
        return self

    def quiet(self, enabled: bool = True):
        self._cfg["quiet"] = bool(enabled)
        return self

    def exit_condition(self, predicate):
        self._cfg["exit_condition"] = predicate
        return self

    def seed(self, value: int | None):
        self._cfg["seed"] = value
        return self


__all__ = ["LoggerSelector"]
