"""Genetic algorithm configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from popopt.engine.genotype import GenotypeSpaceType
from popopt.foundation.exceptions import ConfigurationError

from .base import LoggerSelector, _check_even_population, _LoggingOptions, _require_fields


@dataclass(frozen=True)
class GAConfigData:
    population_size: int
    genotype_space_conf: Mapping[str, Any]
    mutation_probability: float
    recombination_probability: float
    genotype_space_type: GenotypeSpaceType = GenotypeSpaceType.INTEGER
    start_population: Optional[Sequence[Sequence[int]]] = None
    exit_condition: Optional[Callable[[int, Any], bool]] = None
    logger: LoggerSelector = None
    log_level: int | str | None = None
    quiet: bool = False
    seed: Optional[int] = None
    n_workers: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "population_size", _check_even_population(self.population_size))
        object.__setattr__(self, "genotype_space_type", GenotypeSpaceType.parse(self.genotype_space_type))
        conf = dict(self.genotype_space_conf)
        # start genotypes may also arrive with the genotype space options
        nested_start = conf.pop("start_population", None)
        if nested_start is not None:
            if self.start_population is not None:
                raise ConfigurationError("start_population was given twice (directly and in genotype_space options).")
            object.__setattr__(self, "start_population", nested_start)
        object.__setattr__(self, "genotype_space_conf", conf)
        if self.n_workers is not None and int(self.n_workers) <= 0:
            raise ValueError("n_workers must be positive.")


class GAConfig(_LoggingOptions):
    """Declarative configuration holder for the genetic algorithm."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def population_size(self, value: int) -> "GAConfig":
        self._cfg["population_size"] = value
        return self

    def genotype_space(self, kind: str, **conf) -> "GAConfig":
        self._cfg["genotype_space_type"] = kind
        self._cfg["genotype_space_conf"] = conf
        return self

    def mutation_probability(self, value: float) -> "GAConfig":
        self._cfg["mutation_probability"] = value
        return self

    def recombination_probability(self, value: float) -> "GAConfig":
        self._cfg["recombination_probability"] = value
        return self

    def start_population(self, genotypes: Sequence[Sequence[int]]) -> "GAConfig":
        self._cfg["start_population"] = genotypes
        return self

    def n_workers(self, value: int) -> "GAConfig":
        self._cfg["n_workers"] = value
        return self

    def fixed(self) -> GAConfigData:
        _require_fields(
            self._cfg,
            ("population_size", "genotype_space_conf", "mutation_probability", "recombination_probability"),
            "GA",
        )
        return GAConfigData(
            population_size=self._cfg["population_size"],
            genotype_space_conf=self._cfg["genotype_space_conf"],
            mutation_probability=float(self._cfg["mutation_probability"]),
            recombination_probability=float(self._cfg["recombination_probability"]),
            genotype_space_type=self._cfg.get("genotype_space_type", GenotypeSpaceType.INTEGER),
            start_population=self._cfg.get("start_population"),
            exit_condition=self._cfg.get("exit_condition"),
            logger=self._cfg.get("logger"),
            log_level=self._cfg.get("log_level"),
            quiet=bool(self._cfg.get("quiet", False)),
            seed=self._cfg.get("seed"),
            n_workers=self._cfg.get("n_workers"),
        )
