"""Per-step population tallies and the append-only statistics view."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from bouncy_epidemics.domain.agent import Agent
from bouncy_epidemics.domain.disease import Health


@dataclass(frozen=True)
class StateCounts:
    """Population-wide count of agents in each disease state."""

    healthy: int = 0
    sick: int = 0
    immune: int = 0
    dead: int = 0

    @property
    def total(self) -> int:
        return self.healthy + self.sick + self.immune + self.dead

    def as_dict(self) -> dict[str, int]:
        return {
            "healthy": self.healthy,
            "sick": self.sick,
            "immune": self.immune,
            "dead": self.dead,
        }


def tally_states(agents: Iterable[Agent]) -> StateCounts:
    """Count agents per disease state in a single pass."""
    counts = dict.fromkeys(Health, 0)
    for agent in agents:
        counts[agent.health] += 1
    return StateCounts(
        healthy=counts[Health.HEALTHY],
        sick=counts[Health.SICK],
        immune=counts[Health.IMMUNE],
        dead=counts[Health.DEAD],
    )


class SimulationStats:
    """Four time-aligned, append-only count series.

    Entry ``t`` holds the counts observed at the start of step ``t + 1``,
    i.e. the outcome of the previous step's transitions.
    """

    def __init__(self, population: int) -> None:
        self.population = population
        self._healthy: list[int] = []
        self._sick: list[int] = []
        self._immune: list[int] = []
        self._dead: list[int] = []

    def record(self, counts: StateCounts) -> None:
        if counts.total != self.population:
            raise ValueError(
                f"counts sum to {counts.total}, expected population {self.population}"
            )
        self._healthy.append(counts.healthy)
        self._sick.append(counts.sick)
        self._immune.append(counts.immune)
        self._dead.append(counts.dead)

    def __len__(self) -> int:
        return len(self._sick)

    def __iter__(self) -> Iterator[StateCounts]:
        for h, s, i, d in zip(self._healthy, self._sick, self._immune, self._dead, strict=True):
            yield StateCounts(healthy=h, sick=s, immune=i, dead=d)

    @property
    def healthy(self) -> tuple[int, ...]:
        return tuple(self._healthy)

    @property
    def sick(self) -> tuple[int, ...]:
        return tuple(self._sick)

    @property
    def immune(self) -> tuple[int, ...]:
        return tuple(self._immune)

    @property
    def dead(self) -> tuple[int, ...]:
        return tuple(self._dead)

    def at(self, t: int) -> StateCounts:
        return StateCounts(
            healthy=self._healthy[t],
            sick=self._sick[t],
            immune=self._immune[t],
            dead=self._dead[t],
        )

    def latest(self) -> StateCounts | None:
        if not self._sick:
            return None
        return self.at(-1)

    def percentages(self) -> dict[str, int]:
        """Percentage of the population in each state at the latest step, halves rounded up."""
        latest = self.latest()
        if latest is None:
            return {}
        return {
            name: math.floor(100 * count / self.population + 0.5)
            for name, count in latest.as_dict().items()
        }
