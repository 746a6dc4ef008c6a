from .ga import GAConfig, GAConfigData
from .gwo import GWOConfig, GWOConfigData
from .qpso import MultiSwarmQPSOConfig, MultiSwarmQPSOConfigData

__all__ = [
    "GAConfig",
    "GAConfigData",
    "GWOConfig",
    "GWOConfigData",
    "MultiSwarmQPSOConfig",
    "MultiSwarmQPSOConfigData",
]
