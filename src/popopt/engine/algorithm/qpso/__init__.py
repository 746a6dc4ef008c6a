from .initialization import SwarmSeeder
from .multiswarm import MultiSwarmQPSOSolver, spread_exceeds
from .swarm import Particle, QPSOSwarm

__all__ = ["MultiSwarmQPSOSolver", "Particle", "QPSOSwarm", "SwarmSeeder", "spread_exceeds"]
