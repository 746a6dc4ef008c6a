"""Multi-swarm QPSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from popopt.foundation.constraints import box_bounds
from popopt.foundation.exceptions import ConfigurationError, InitializationError, PopulationSizeError

from .base import LoggerSelector, _check_positive_int, _LoggingOptions, _require_fields

DEFAULT_SWARM_SIZE = 20
DEFAULT_N_EXCESS = 3
DEFAULT_R_EXCL = 0.5
DEFAULT_R_CLOUD = 0.5


@dataclass(frozen=True)
class MultiSwarmQPSOConfigData:
    num_swarms: int
    swarm_size: int = DEFAULT_SWARM_SIZE
    constraints: Optional[Mapping[str, Sequence[float]]] = None
    random_position_func: Optional[Callable[[], Sequence[float]]] = None
    random_velocity_func: Optional[Callable[[], Sequence[float]]] = None
    start_positions: Optional[Sequence[Sequence[float]]] = None
    start_velocities: Optional[Sequence[Sequence[float]]] = None
    exit_condition: Optional[Callable[[int, Any], bool]] = None
    r_excl: float = DEFAULT_R_EXCL
    r_cloud: float = DEFAULT_R_CLOUD
    n_excess: int = DEFAULT_N_EXCESS
    logger: LoggerSelector = None
    log_level: int | str | None = None
    quiet: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            num_swarms = _check_positive_int(self.num_swarms, "num_swarms")
        except ConfigurationError as exc:
            raise PopulationSizeError("Number of swarms must be a positive integer.", self.num_swarms) from exc
        object.__setattr__(self, "num_swarms", num_swarms)
        swarm_size = int(self.swarm_size)
        if swarm_size < 2:
            raise PopulationSizeError("swarm_size must be at least 2.", self.swarm_size)
        object.__setattr__(self, "swarm_size", swarm_size)
        object.__setattr__(self, "n_excess", _check_positive_int(self.n_excess, "n_excess"))
        for name in ("r_excl", "r_cloud"):
            value = float(getattr(self, name))
            if value <= 0.0:
                raise ConfigurationError(f"{name} must be positive, got {value}.")
            object.__setattr__(self, name, value)
        if self.constraints is not None:
            box_bounds(self.constraints)
        if self.start_positions is None and self.random_position_func is None and self.constraints is None:
            raise InitializationError("positions")
        if self.start_velocities is None and self.random_velocity_func is None and self.constraints is None:
            raise InitializationError("velocities")


class MultiSwarmQPSOConfig(_LoggingOptions):
    """Declarative configuration holder for the multi-swarm QPSO solver."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def num_swarms(self, value: int) -> "MultiSwarmQPSOConfig":
        self._cfg["num_swarms"] = value
        return self

    def swarm_size(self, value: int) -> "MultiSwarmQPSOConfig":
        self._cfg["swarm_size"] = value
        return self

    def constraints(self, lower: Sequence[float], upper: Sequence[float]) -> "MultiSwarmQPSOConfig":
        self._cfg["constraints"] = {"min": list(lower), "max": list(upper)}
        return self

    def random_position_func(self, func: Callable[[], Sequence[float]]) -> "MultiSwarmQPSOConfig":
        self._cfg["random_position_func"] = func
        return self

    def random_velocity_func(self, func: Callable[[], Sequence[float]]) -> "MultiSwarmQPSOConfig":
        self._cfg["random_velocity_func"] = func
        return self

    def start_positions(self, positions: Sequence[Sequence[float]]) -> "MultiSwarmQPSOConfig":
        self._cfg["start_positions"] = positions
        return self

    def start_velocities(self, velocities: Sequence[Sequence[float]]) -> "MultiSwarmQPSOConfig":
        self._cfg["start_velocities"] = velocities
        return self

    def r_excl(self, value: float) -> "MultiSwarmQPSOConfig":
        self._cfg["r_excl"] = value
        return self

    def r_cloud(self, value: float) -> "MultiSwarmQPSOConfig":
        self._cfg["r_cloud"] = value
        return self

    def n_excess(self, value: int) -> "MultiSwarmQPSOConfig":
        self._cfg["n_excess"] = value
        return self

    def fixed(self) -> MultiSwarmQPSOConfigData:
        _require_fields(self._cfg, ("num_swarms",), "MultiSwarmQPSO")
        return MultiSwarmQPSOConfigData(
            num_swarms=self._cfg["num_swarms"],
            swarm_size=self._cfg.get("swarm_size", DEFAULT_SWARM_SIZE),
            constraints=self._cfg.get("constraints"),
            random_position_func=self._cfg.get("random_position_func"),
            random_velocity_func=self._cfg.get("random_velocity_func"),
            start_positions=self._cfg.get("start_positions"),
            start_velocities=self._cfg.get("start_velocities"),
            exit_condition=self._cfg.get("exit_condition"),
            r_excl=self._cfg.get("r_excl", DEFAULT_R_EXCL),
            r_cloud=self._cfg.get("r_cloud", DEFAULT_R_CLOUD),
            n_excess=self._cfg.get("n_excess", DEFAULT_N_EXCESS),
            logger=self._cfg.get("logger"),
            log_level=self._cfg.get("log_level"),
            quiet=bool(self._cfg.get("quiet", False)),
            seed=self._cfg.get("seed"),
        )
