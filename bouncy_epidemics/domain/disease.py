"""Per-agent disease state machine.

States progress monotonically ``HEALTHY -> SICK -> {IMMUNE | DEAD}``.
A sick state carries the number of steps it still has to run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Health(str, Enum):
    """Disease classification used for tallies and color mapping."""

    HEALTHY = "healthy"
    SICK = "sick"
    IMMUNE = "immune"
    DEAD = "dead"


@dataclass(frozen=True)
class DiseaseState:
    """Immutable disease state; ``remaining`` is only meaningful when sick."""

    health: Health
    remaining: int = 0

    def __post_init__(self) -> None:
        if self.health == Health.SICK:
            if self.remaining < 1:
                raise ValueError("sick state requires remaining >= 1")
        elif self.remaining != 0:
            raise ValueError(f"{self.health.value} state cannot carry remaining steps")

    @classmethod
    def sick(cls, remaining: int) -> DiseaseState:
        return cls(Health.SICK, remaining)

    @property
    def is_healthy(self) -> bool:
        return self.health == Health.HEALTHY

    @property
    def is_sick(self) -> bool:
        return self.health == Health.SICK

    @property
    def is_immune(self) -> bool:
        return self.health == Health.IMMUNE

    @property
    def is_dead(self) -> bool:
        return self.health == Health.DEAD


HEALTHY = DiseaseState(Health.HEALTHY)
IMMUNE = DiseaseState(Health.IMMUNE)
DEAD = DiseaseState(Health.DEAD)
