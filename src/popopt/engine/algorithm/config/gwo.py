"""Grey Wolf Optimizer configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from popopt.foundation.constraints import box_bounds

from .base import LoggerSelector, _check_even_population, _check_positive_int, _LoggingOptions, _require_fields


@dataclass(frozen=True)
class GWOConfigData:
    population_size: int
    dimensions: int
    constraints: Optional[Mapping[str, Sequence[float]]] = None
    max_iterations: int = 100
    start_population: Optional[Sequence[Sequence[float]]] = None
    exit_condition: Optional[Callable[[int, Any], bool]] = None
    logger: LoggerSelector = None
    log_level: int | str | None = None
    quiet: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # three distinct leaders are needed every iteration
        object.__setattr__(self, "population_size", _check_even_population(self.population_size, minimum=4))
        object.__setattr__(self, "dimensions", _check_positive_int(self.dimensions, "dimensions"))
        object.__setattr__(self, "max_iterations", _check_positive_int(self.max_iterations, "max_iterations"))
        if self.constraints is not None:
            box_bounds(self.constraints, self.dimensions)


class GWOConfig(_LoggingOptions):
    """Declarative configuration holder for the Grey Wolf Optimizer."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def population_size(self, value: int) -> "GWOConfig":
        self._cfg["population_size"] = value
        return self

    def dimensions(self, value: int) -> "GWOConfig":
        self._cfg["dimensions"] = value
        return self

    def constraints(self, lower: Sequence[float], upper: Sequence[float]) -> "GWOConfig":
        self._cfg["constraints"] = {"min": list(lower), "max": list(upper)}
        return self

    def max_iterations(self, value: int) -> "GWOConfig":
        self._cfg["max_iterations"] = value
        return self

    def start_population(self, positions: Sequence[Sequence[float]]) -> "GWOConfig":
        self._cfg["start_population"] = positions
        return self

    def fixed(self) -> GWOConfigData:
        _require_fields(self._cfg, ("population_size", "dimensions"), "GWO")
        return GWOConfigData(
            population_size=self._cfg["population_size"],
            dimensions=self._cfg["dimensions"],
            constraints=self._cfg.get("constraints"),
            max_iterations=self._cfg.get("max_iterations", 100),
            start_population=self._cfg.get("start_population"),
            exit_condition=self._cfg.get("exit_condition"),
            logger=self._cfg.get("logger"),
            log_level=self._cfg.get("log_level"),
            quiet=bool(self._cfg.get("quiet", False)),
            seed=self._cfg.get("seed"),
        )
