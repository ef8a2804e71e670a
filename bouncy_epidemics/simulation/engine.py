"""Discrete-time epidemic engine over a fixed ball population."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from bouncy_epidemics.config.types import SimulationConfig, derive_speed
from bouncy_epidemics.domain.agent import Agent, RandomSource, random_heading
from bouncy_epidemics.domain.collision import collide
from bouncy_epidemics.domain.disease import DiseaseState
from bouncy_epidemics.domain.snapshot import Snapshot, render_order
from bouncy_epidemics.simulation.stats import SimulationStats, tally_states

logger = logging.getLogger(__name__)


def build_population(config: SimulationConfig, rng: RandomSource) -> list[Agent]:
    """Create agents at uniform random positions and headings.

    The first ``config.stationary_count`` agents never move, and the agent
    at ``config.patient_zero_index`` starts sick.
    """
    arena = config.arena
    stationary_count = config.stationary_count
    agents = [
        Agent(
            index=i,
            x=rng.random() * arena.width,
            y=rng.random() * arena.height,
            heading=random_heading(rng),
            stationary=i < stationary_count,
            diameter=config.diameter,
        )
        for i in range(config.population)
    ]
    agents[config.patient_zero_index].state = DiseaseState.sick(config.sick_duration)
    return agents


class Simulation:
    """Owns the population, advances it step by step, and records counts.

    Randomness comes exclusively from *rng*; pass a seeded
    ``random.Random`` (or any object with ``random()``) for reproducible runs.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self._config = config or SimulationConfig()
        self._agents: list[Agent] = []
        self._stats = SimulationStats(self._config.population)
        self._current_time = 0
        self._speed = 0.0
        self.initialize()

    # -- lifecycle ----------------------------------------------------------

    def initialize(
        self,
        social_distance_fraction: float | None = None,
        mortality: float | None = None,
        sick_duration: int | None = None,
    ) -> None:
        """Rebuild the population and reset all statistics.

        Omitted parameters keep their current values.  The new state is
        fully built before it replaces the old one.
        """
        overrides: dict[str, object] = {}
        if social_distance_fraction is not None:
            overrides["social_distance_fraction"] = social_distance_fraction
        if mortality is not None:
            overrides["mortality"] = mortality
        if sick_duration is not None:
            overrides["sick_duration"] = sick_duration
        config = replace(self._config, **overrides) if overrides else self._config

        agents = build_population(config, self._rng)
        stats = SimulationStats(config.population)

        self._config = config
        self._agents = agents
        self._stats = stats
        self._current_time = 0
        self._speed = config.derived_speed()
        logger.debug(
            "initialized population=%d stationary=%d mortality=%.3f sick_duration=%d",
            config.population,
            config.stationary_count,
            config.mortality,
            config.sick_duration,
        )

    def set_social_distance_fraction(self, fraction: float) -> None:
        """Apply a live distancing change.

        Only the derived speed is affected, starting with the next step;
        stationary flags stay as they were at initialization.
        """
        self._config = replace(self._config, social_distance_fraction=fraction)
        self._speed = derive_speed(
            self._config.base_speed, fraction, self._config.speed_mode
        )

    # -- read-only state ----------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def agents(self) -> tuple[Agent, ...]:
        return tuple(self._agents)

    @property
    def population(self) -> int:
        return self._config.population

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def max_steps(self) -> int:
        return self._config.resolved_max_steps

    @property
    def stats(self) -> SimulationStats:
        return self._stats

    def snapshot(self) -> Snapshot:
        """Agent views in draw order (dead first)."""
        return render_order(self._agents)

    # -- stepping -----------------------------------------------------------

    def is_finished(self) -> bool:
        if self._current_time == 0:
            return False
        if self._current_time >= self.max_steps - 1:
            return True
        latest = self._stats.latest()
        return latest is not None and latest.sick == 0

    def step(self) -> None:
        """Advance one tick; a no-op once the run is finished."""
        if self.is_finished():
            return
        self._stats.record(tally_states(self._agents))
        self._current_time += 1

        config = self._config
        for agent in self._agents:
            collide(agent, self._agents, config.sick_duration, self._rng)
            agent.advance(self._speed, config.mortality, config.arena, self._rng)

        if self.is_finished():
            logger.debug("run finished at t=%d", self._current_time)
