"""Headless driver: step a simulation to completion and summarize it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.stats import StateCounts, tally_states


class TerminationReason(str, Enum):
    """Why a run stopped; persisted in run summaries."""

    BURNED_OUT = "burned_out"
    STEP_CAP = "step_cap"


@dataclass(frozen=True)
class RunSummary:
    """Top-level result for one simulation run."""

    seed: int | None
    steps: int
    final: StateCounts
    peak_sick: int
    peak_time: int
    attack_rate: float
    death_rate: float
    termination_reason: TerminationReason | None

    def as_row(self) -> dict[str, object]:
        return {
            "seed": self.seed,
            "steps": self.steps,
            "final_healthy": self.final.healthy,
            "final_sick": self.final.sick,
            "final_immune": self.final.immune,
            "final_dead": self.final.dead,
            "peak_sick": self.peak_sick,
            "peak_time": self.peak_time,
            "attack_rate": self.attack_rate,
            "death_rate": self.death_rate,
            "termination_reason": (
                None if self.termination_reason is None else self.termination_reason.value
            ),
        }


def summarize(simulation: Simulation, seed: int | None = None) -> RunSummary:
    """Summarize the run so far; ``termination_reason`` is None while running."""
    final = tally_states(simulation.agents)
    sick_series = simulation.stats.sick
    if sick_series:
        peak_sick = max(sick_series)
        peak_time = sick_series.index(peak_sick)
    else:
        peak_sick, peak_time = final.sick, 0

    reason: TerminationReason | None = None
    if simulation.is_finished():
        latest = simulation.stats.latest()
        if latest is not None and latest.sick == 0:
            reason = TerminationReason.BURNED_OUT
        else:
            reason = TerminationReason.STEP_CAP

    population = simulation.population
    return RunSummary(
        seed=seed,
        steps=simulation.current_time,
        final=final,
        peak_sick=peak_sick,
        peak_time=peak_time,
        attack_rate=(population - final.healthy) / population,
        death_rate=final.dead / population,
        termination_reason=reason,
    )


def run_to_completion(
    simulation: Simulation,
    seed: int | None = None,
    on_step: Callable[[Simulation], None] | None = None,
) -> RunSummary:
    """Step until finished, calling *on_step* after every applied step."""
    while not simulation.is_finished():
        simulation.step()
        if on_step is not None:
            on_step(simulation)
    return summarize(simulation, seed=seed)
