"""Ball agents moving on a toroidal arena."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from bouncy_epidemics.config.types import ArenaConfig
from bouncy_epidemics.domain.disease import DEAD, HEALTHY, IMMUNE, DiseaseState, Health

TWO_PI = 2.0 * math.pi


class RandomSource(Protocol):
    """Anything producing uniform draws in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float: ...


def _wrap(value: float, size: float) -> float:
    """Wrap *value* into [0, size); guards the float case where ``-tiny % size == size``."""
    wrapped = value % size
    return 0.0 if wrapped >= size else wrapped


def random_heading(rng: RandomSource) -> float:
    return rng.random() * TWO_PI


@dataclass
class Agent:
    """A single ball; position and heading mutate, everything else is fixed."""

    index: int
    x: float
    y: float
    heading: float
    stationary: bool
    diameter: float
    state: DiseaseState = HEALTHY

    @property
    def health(self) -> Health:
        return self.state.health

    @property
    def is_healthy(self) -> bool:
        return self.state.is_healthy

    @property
    def is_sick(self) -> bool:
        return self.state.is_sick

    @property
    def is_immune(self) -> bool:
        return self.state.is_immune

    @property
    def is_dead(self) -> bool:
        return self.state.is_dead

    def contact_with(self, other_state: DiseaseState, sick_duration: int) -> None:
        """Catch the disease from a sick contact; no effect unless self is healthy."""
        if self.is_healthy and other_state.is_sick:
            self.state = DiseaseState.sick(sick_duration)

    def redirect(self, rng: RandomSource) -> None:
        self.heading = random_heading(rng)

    def advance(
        self, speed: float, mortality: float, arena: ArenaConfig, rng: RandomSource
    ) -> None:
        """Decay sickness by one step, then move unless stationary or dead.

        When the countdown reaches zero a single uniform draw decides the
        outcome: dead if the draw is below ``mortality``, immune otherwise.
        """
        if self.is_sick:
            remaining = self.state.remaining - 1
            if remaining > 0:
                self.state = DiseaseState.sick(remaining)
            else:
                self.state = DEAD if rng.random() < mortality else IMMUNE
        if self.stationary or self.is_dead:
            return
        self.x = _wrap(self.x + speed * math.cos(self.heading), arena.width)
        self.y = _wrap(self.y + speed * math.sin(self.heading), arena.height)
