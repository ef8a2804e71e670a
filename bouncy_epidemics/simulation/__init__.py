"""Simulation engine: stepping, tallies, and headless runs."""

from bouncy_epidemics.simulation.engine import Simulation, build_population
from bouncy_epidemics.simulation.runner import (
    RunSummary,
    TerminationReason,
    run_to_completion,
    summarize,
)
from bouncy_epidemics.simulation.stats import SimulationStats, StateCounts, tally_states

__all__ = [
    "RunSummary",
    "Simulation",
    "SimulationStats",
    "StateCounts",
    "TerminationReason",
    "build_population",
    "run_to_completion",
    "summarize",
    "tally_states",
]
