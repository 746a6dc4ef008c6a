import dataclasses

import pytest

from popopt.engine.algorithm.config import GAConfig, GWOConfig, MultiSwarmQPSOConfig, MultiSwarmQPSOConfigData
from popopt.engine.genotype import GenotypeSpaceType
from popopt.foundation.exceptions import (
    BoundsError,
    ConfigurationError,
    InitializationError,
    MissingConfigError,
    PopulationSizeError,
    ProblemDimensionError,
)


def _ga_builder():
    return (
        GAConfig()
        .population_size(4)
        .genotype_space("integer", dimensions=2, recombination_type="line")
        .mutation_probability(0.5)
        .recombination_probability(0.25)
    )


class TestGAConfig:
    def test_fixed_produces_frozen_data(self):
        cfg = _ga_builder().seed(3).quiet().fixed()
        assert cfg.population_size == 4
        assert cfg.genotype_space_type is GenotypeSpaceType.INTEGER
        assert cfg.genotype_space_conf == {"dimensions": 2, "recombination_type": "line"}
        assert cfg.seed == 3
        assert cfg.quiet is True
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.population_size = 6

    @pytest.mark.parametrize("size", [3, 0, -2])
    def test_population_must_be_even_and_positive(self, size):
        with pytest.raises(PopulationSizeError, match="Even population size required!"):
            _ga_builder().population_size(size).fixed()

    def test_missing_field(self):
        builder = GAConfig().population_size(4).genotype_space("integer", dimensions=2, recombination_type="line")
        with pytest.raises(MissingConfigError, match="mutation_probability"):
            builder.fixed()

    def test_unknown_genotype_space(self):
        with pytest.raises(ConfigurationError):
            _ga_builder().genotype_space("tree", dimensions=2).fixed()

    @pytest.mark.parametrize("size", [4.5, "4"])
    def test_population_must_be_an_integer(self, size):
        with pytest.raises(PopulationSizeError, match="must be an integer"):
            _ga_builder().population_size(size).fixed()

    def test_start_population_from_space_options(self):
        start = [[0, 0], [1, 1], [2, 2], [3, 3]]
        cfg = _ga_builder().genotype_space("integer", dimensions=2, recombination_type="line", start_population=start).fixed()
        assert cfg.start_population == start
        assert "start_population" not in cfg.genotype_space_conf

    def test_start_population_given_twice(self):
        start = [[0, 0], [1, 1], [2, 2], [3, 3]]
        builder = _ga_builder().genotype_space("integer", dimensions=2, recombination_type="line", start_population=start)
        with pytest.raises(ConfigurationError, match="twice"):
            builder.start_population(start).fixed()

    def test_worker_count_must_be_positive(self):
        with pytest.raises(ValueError):
            _ga_builder().n_workers(0).fixed()


class TestGWOConfig:
    def test_defaults(self):
        cfg = GWOConfig().population_size(6).dimensions(2).fixed()
        assert cfg.max_iterations == 100
        assert cfg.constraints is None

    def test_needs_room_for_three_leaders(self):
        with pytest.raises(PopulationSizeError):
            GWOConfig().population_size(2).dimensions(2).fixed()

    def test_rejects_bad_dimensions(self):
        with pytest.raises(ProblemDimensionError):
            GWOConfig().population_size(4).dimensions(0).fixed()

    def test_constraint_length_must_match_dimensions(self):
        with pytest.raises(BoundsError):
            GWOConfig().population_size(4).dimensions(3).constraints([0, 0], [1, 1]).fixed()


class TestMultiSwarmQPSOConfig:
    def test_defaults(self):
        cfg = MultiSwarmQPSOConfig().num_swarms(2).constraints([-1, -1], [1, 1]).fixed()
        assert cfg.swarm_size == 20
        assert cfg.r_excl == 0.5
        assert cfg.r_cloud == 0.5
        assert cfg.n_excess == 3

    @pytest.mark.parametrize("n", [0, -1])
    def test_num_swarms_must_be_positive(self, n):
        with pytest.raises(PopulationSizeError):
            MultiSwarmQPSOConfig().num_swarms(n).constraints([0], [1]).fixed()

    def test_num_swarms_is_required(self):
        with pytest.raises(MissingConfigError, match="num_swarms"):
            MultiSwarmQPSOConfig().constraints([0], [1]).fixed()

    def test_positions_need_a_source(self):
        with pytest.raises(InitializationError, match="positions"):
            MultiSwarmQPSOConfigData(num_swarms=1)

    def test_velocities_need_a_source(self):
        with pytest.raises(InitializationError, match="velocities"):
            MultiSwarmQPSOConfig().num_swarms(1).random_position_func(lambda: [0.0, 0.0]).fixed()

    def test_radii_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="r_excl"):
            MultiSwarmQPSOConfig().num_swarms(1).constraints([0], [1]).r_excl(0.0).fixed()
