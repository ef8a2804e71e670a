"""Domain layer: disease states, agents, contacts, and typed snapshots."""

from bouncy_epidemics.domain.agent import Agent, RandomSource, random_heading
from bouncy_epidemics.domain.collision import collide, overlaps
from bouncy_epidemics.domain.disease import DEAD, HEALTHY, IMMUNE, DiseaseState, Health
from bouncy_epidemics.domain.snapshot import AgentView, Snapshot, render_order

__all__ = [
    "Agent",
    "AgentView",
    "DEAD",
    "DiseaseState",
    "HEALTHY",
    "Health",
    "IMMUNE",
    "RandomSource",
    "Snapshot",
    "collide",
    "overlaps",
    "random_heading",
    "render_order",
]
