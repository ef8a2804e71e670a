"""Read-only agent views handed to renderers.

``AgentView`` carries only what a renderer needs: position, disease
classification for color mapping, and diameter.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bouncy_epidemics.domain.agent import Agent
from bouncy_epidemics.domain.disease import Health


@dataclass(frozen=True)
class AgentView:
    """Immutable snapshot of a single agent at one point in time."""

    agent_id: int
    x: float
    y: float
    health: Health
    diameter: float

    @classmethod
    def of(cls, agent: Agent) -> AgentView:
        return cls(
            agent_id=agent.index,
            x=agent.x,
            y=agent.y,
            health=agent.health,
            diameter=agent.diameter,
        )


Snapshot = tuple[AgentView, ...]
"""Agent views in draw order."""


def render_order(agents: Iterable[Agent]) -> Snapshot:
    """Return views with dead agents first so live agents are drawn over them."""
    views = [AgentView.of(agent) for agent in agents]
    dead = [view for view in views if view.health == Health.DEAD]
    alive = [view for view in views if view.health != Health.DEAD]
    return tuple(dead + alive)
