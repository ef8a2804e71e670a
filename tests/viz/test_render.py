"""Tests for viz/render.py and viz/theme.py."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402
from matplotlib.colors import to_rgba  # noqa: E402

from bouncy_epidemics.config.types import ArenaConfig, SimulationConfig  # noqa: E402
from bouncy_epidemics.domain.disease import Health  # noqa: E402
from bouncy_epidemics.domain.snapshot import AgentView  # noqa: E402
from bouncy_epidemics.simulation.engine import Simulation  # noqa: E402
from bouncy_epidemics.simulation.stats import SimulationStats, StateCounts  # noqa: E402
from bouncy_epidemics.viz.render import (  # noqa: E402
    STACK_ORDER,
    draw_arena,
    draw_counts_chart,
    format_readout,
    render_animation,
    render_chart,
    stacked_series,
)
from bouncy_epidemics.viz.theme import (  # noqa: E402
    DEFAULT_THEME,
    PAPER_THEME,
    get_theme,
)


def _stats() -> SimulationStats:
    stats = SimulationStats(population=4)
    stats.record(StateCounts(healthy=3, sick=1))
    stats.record(StateCounts(healthy=2, sick=1, immune=1))
    stats.record(StateCounts(healthy=2, immune=1, dead=1))
    return stats


class TestTheme:
    def test_every_state_has_color_and_label(self) -> None:
        for theme in (DEFAULT_THEME, PAPER_THEME):
            for health in Health:
                assert theme.color_of(health).startswith("#")
                assert theme.health_labels[health]

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_theme("PAPER") is PAPER_THEME

    def test_unknown_theme_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown theme"):
            get_theme("neon")


class TestSeries:
    def test_stacked_series_order_and_shape(self) -> None:
        series = stacked_series(_stats())
        assert STACK_ORDER[0] == Health.DEAD
        assert series.shape == (4, 3)
        np.testing.assert_array_equal(series[0], [0, 0, 1])
        np.testing.assert_array_equal(series[1], [1, 1, 0])
        np.testing.assert_array_equal(series.sum(axis=0), [4, 4, 4])

    def test_stacked_series_empty(self) -> None:
        assert stacked_series(SimulationStats(population=4)).shape == (4, 0)

    def test_format_readout(self) -> None:
        assert format_readout(_stats()) == "H 50%  S 0%  I 25%  D 25%"

    def test_format_readout_empty(self) -> None:
        assert format_readout(SimulationStats(population=4)) == ""


class TestDrawing:
    def test_draw_arena_keeps_snapshot_order(self) -> None:
        snapshot = (
            AgentView(agent_id=2, x=5.0, y=5.0, health=Health.DEAD, diameter=2.0),
            AgentView(agent_id=0, x=6.0, y=5.0, health=Health.SICK, diameter=2.0),
        )
        fig, ax = plt.subplots()
        collection = draw_arena(ax, snapshot, ArenaConfig(width=40.0, height=30.0))
        colors = collection.get_facecolor()
        assert tuple(colors[0]) == pytest.approx(to_rgba(DEFAULT_THEME.color_of(Health.DEAD)))
        assert tuple(colors[1]) == pytest.approx(to_rgba(DEFAULT_THEME.color_of(Health.SICK)))
        assert ax.get_ylim() == (30.0, 0.0)
        plt.close(fig)

    def test_draw_counts_chart_sets_readout(self) -> None:
        fig, ax = plt.subplots()
        draw_counts_chart(ax, _stats())
        assert ax.get_title(loc="left") == format_readout(_stats())
        assert ax.get_ylim() == (0.0, 4.0)
        plt.close(fig)

    def test_draw_counts_chart_empty(self) -> None:
        fig, ax = plt.subplots()
        draw_counts_chart(ax, SimulationStats(population=4))
        assert ax.get_title(loc="left") == ""
        plt.close(fig)


class TestRenderToFile:
    def test_render_chart_writes_png(self, tmp_path: Path) -> None:
        output = tmp_path / "charts" / "counts.png"
        render_chart(_stats(), output, theme=PAPER_THEME, dpi=50)
        assert output.exists()
        assert output.stat().st_size > 0

    def test_render_animation_respects_max_frames(self, tmp_path: Path) -> None:
        config = SimulationConfig(population=10, sick_duration=20)
        sim = Simulation(config, seed=0)
        output = tmp_path / "run.gif"
        frames = render_animation(sim, output, fps=5, max_frames=3, dpi=20)
        assert frames == 3
        assert sim.current_time == 3
        assert output.exists()

    def test_render_animation_stops_when_finished(self, tmp_path: Path) -> None:
        config = SimulationConfig(population=1, sick_duration=2, mortality=0.0)
        sim = Simulation(config, seed=0)
        frames = render_animation(sim, tmp_path / "short.gif", fps=5, dpi=20)
        assert sim.is_finished()
        assert frames == sim.current_time

    @pytest.mark.parametrize("kwargs", [{"fps": 0}, {"max_frames": 0}])
    def test_render_animation_rejects_bad_args(
        self, tmp_path: Path, kwargs: dict[str, int]
    ) -> None:
        sim = Simulation(SimulationConfig(population=2), seed=0)
        with pytest.raises(ValueError):
            render_animation(sim, tmp_path / "bad.gif", **kwargs)
