"""Pairwise contact detection between agents.

Each unordered pair is examined once: agent ``i`` only checks agents with a
lower index.  Cost is O(population^2) per step.
"""

from __future__ import annotations

from collections.abc import Sequence

from bouncy_epidemics.domain.agent import Agent, RandomSource


def overlaps(a: Agent, b: Agent) -> bool:
    """True when the centers are closer than one diameter (squared compare)."""
    dx = b.x - a.x
    dy = b.y - a.y
    return dx * dx + dy * dy < a.diameter * a.diameter


def collide(agent: Agent, agents: Sequence[Agent], sick_duration: int, rng: RandomSource) -> int:
    """Resolve contacts between *agent* and every live lower-indexed agent.

    Both states are captured before either side is mutated, so a partner
    infected by this contact cannot pass the disease back within it.
    Returns the number of contacts.
    """
    if agent.is_dead:
        return 0
    contacts = 0
    for other in agents[: agent.index]:
        if other.is_dead or not overlaps(agent, other):
            continue
        own_state, other_state = agent.state, other.state
        agent.contact_with(other_state, sick_duration)
        other.contact_with(own_state, sick_duration)
        agent.redirect(rng)
        other.redirect(rng)
        contacts += 1
    return contacts
