"""Tests for bouncy_epidemics.domain.snapshot."""

from __future__ import annotations

import dataclasses

import pytest

from bouncy_epidemics.domain.agent import Agent
from bouncy_epidemics.domain.disease import DEAD, HEALTHY, IMMUNE, DiseaseState, Health
from bouncy_epidemics.domain.snapshot import AgentView, render_order


def _agents() -> list[Agent]:
    states = [HEALTHY, DEAD, DiseaseState.sick(2), IMMUNE, DEAD]
    return [
        Agent(index=i, x=float(i), y=float(2 * i), heading=0.0, stationary=False,
              diameter=1.5, state=state)
        for i, state in enumerate(states)
    ]


def test_dead_agents_drawn_first() -> None:
    snapshot = render_order(_agents())
    assert [view.agent_id for view in snapshot] == [1, 4, 0, 2, 3]
    assert [view.health for view in snapshot[:2]] == [Health.DEAD, Health.DEAD]


def test_snapshot_covers_every_agent() -> None:
    assert len(render_order(_agents())) == 5


def test_view_copies_agent_fields() -> None:
    agent = _agents()[2]
    view = AgentView.of(agent)
    assert (view.agent_id, view.x, view.y) == (2, 2.0, 4.0)
    assert view.health == Health.SICK
    assert view.diameter == 1.5


def test_view_is_detached_from_agent() -> None:
    agent = _agents()[0]
    view = AgentView.of(agent)
    agent.x = 99.0
    assert view.x == 0.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.x = 5.0  # type: ignore[misc]
