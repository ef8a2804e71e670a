"""Toy agent-based epidemic simulator: bouncing balls on a toroidal arena.

Qualitative illustration only; this is not a validated epidemic model.
"""

from bouncy_epidemics.config.types import (
    ArenaConfig,
    BatchConfig,
    ConfigurationError,
    SimulationConfig,
    SpeedMode,
)
from bouncy_epidemics.domain.disease import DiseaseState, Health
from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.runner import RunSummary, run_to_completion

__all__ = [
    "ArenaConfig",
    "BatchConfig",
    "ConfigurationError",
    "DiseaseState",
    "Health",
    "RunSummary",
    "Simulation",
    "SimulationConfig",
    "SpeedMode",
    "run_to_completion",
]
