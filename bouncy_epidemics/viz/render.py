"""Matplotlib renderers for the arena and the stacked state-count chart.

These functions only read engine state (agent views and statistics); the
engine itself has no knowledge of matplotlib.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import animation
from matplotlib.collections import PatchCollection
from matplotlib.gridspec import GridSpec
from matplotlib.patches import Circle, Patch

from bouncy_epidemics.config.types import ArenaConfig
from bouncy_epidemics.domain.disease import Health
from bouncy_epidemics.domain.snapshot import Snapshot
from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.stats import SimulationStats
from bouncy_epidemics.viz.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

# Bottom-to-top stacking: dead on the floor, sick above it, immune hanging
# from the top, healthy filling the gap in between.
STACK_ORDER: tuple[Health, ...] = (Health.DEAD, Health.SICK, Health.HEALTHY, Health.IMMUNE)


def stacked_series(stats: SimulationStats) -> np.ndarray:
    """Return a (4, T) array of counts in ``STACK_ORDER``."""
    by_health = {
        Health.HEALTHY: stats.healthy,
        Health.SICK: stats.sick,
        Health.IMMUNE: stats.immune,
        Health.DEAD: stats.dead,
    }
    return np.array([by_health[h] for h in STACK_ORDER], dtype=int).reshape(4, len(stats))


def _legend_handles(theme: Theme) -> list[Patch]:
    return [
        Patch(facecolor=theme.color_of(h), edgecolor="gray", label=theme.health_labels[h])
        for h in (Health.HEALTHY, Health.SICK, Health.IMMUNE, Health.DEAD)
    ]


def draw_arena(
    ax: plt.Axes, snapshot: Snapshot, arena: ArenaConfig, theme: Theme = DEFAULT_THEME
) -> PatchCollection:
    """Draw agents as circles in snapshot order (callers pass dead agents first)."""
    circles = [Circle((view.x, view.y), view.diameter / 2) for view in snapshot]
    collection = PatchCollection(
        circles,
        facecolors=[theme.color_of(view.health) for view in snapshot],
        edgecolors="none",
    )
    ax.add_collection(collection)
    ax.set_xlim(0, arena.width)
    ax.set_ylim(arena.height, 0)
    ax.set_aspect("equal")
    ax.set_facecolor(theme.background_color)
    ax.set_xticks([])
    ax.set_yticks([])
    return collection


def format_readout(stats: SimulationStats) -> str:
    """Percent of the population per state at the latest step, e.g. ``H 97% S 2%``."""
    percentages = stats.percentages()
    if not percentages:
        return ""
    return "  ".join(
        f"{name[0].upper()} {percentages[name]}%" for name in ("healthy", "sick", "immune", "dead")
    )


def draw_counts_chart(
    ax: plt.Axes, stats: SimulationStats, theme: Theme = DEFAULT_THEME
) -> None:
    """Draw the stacked-area time series of state counts."""
    ax.set_facecolor(theme.background_color)
    ax.set_ylim(0, stats.population)
    ax.set_xlim(0, max(1, len(stats) - 1))
    ax.set_yticks([])
    if len(stats) == 0:
        return
    series = stacked_series(stats)
    ax.stackplot(
        np.arange(len(stats)),
        series,
        colors=[theme.color_of(h) for h in STACK_ORDER],
        linewidth=0,
    )
    ax.set_title(format_readout(stats), color=theme.text_color, fontsize=9, loc="left")


def render_chart(
    stats: SimulationStats, output_path: Path, theme: Theme = DEFAULT_THEME, dpi: int = 100
) -> None:
    """Write the stacked count chart for a finished or running simulation."""
    fig, ax = plt.subplots(figsize=(8, 3))
    fig.patch.set_facecolor(theme.background_color)
    draw_counts_chart(ax, stats, theme=theme)
    ax.set_xlabel("Step", color=theme.text_color)
    ax.tick_params(colors=theme.text_color)
    ax.legend(handles=_legend_handles(theme), loc="upper right", fontsize=8)
    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, facecolor=theme.background_color)
    plt.close(fig)


def render_animation(
    simulation: Simulation,
    output_path: Path,
    fps: int = 30,
    max_frames: int | None = None,
    theme: Theme = DEFAULT_THEME,
    dpi: int = 80,
) -> int:
    """Drive *simulation* frame by frame and record each frame.

    Per frame: draw the arena from the current agent states, apply one
    step, then draw the updated chart.  Stops when the run finishes or
    after *max_frames* frames.  Returns the number of frames written.
    """
    if fps < 1:
        raise ValueError("fps must be >= 1")
    if max_frames is not None and max_frames < 1:
        raise ValueError("max_frames must be >= 1")

    arena = simulation.config.arena
    height_ratio = arena.height / arena.width
    fig = plt.figure(figsize=(5, 5 * height_ratio + 1.5))
    fig.patch.set_facecolor(theme.background_color)
    gs = GridSpec(2, 1, figure=fig, height_ratios=[arena.height, arena.height / 3])
    ax_arena = fig.add_subplot(gs[0])
    ax_chart = fig.add_subplot(gs[1])

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    writer: animation.PillowWriter | animation.FFMpegWriter
    if output_path.suffix.lower() == ".gif":
        writer = animation.PillowWriter(fps=fps)
    else:
        writer = animation.FFMpegWriter(fps=fps)

    frames = 0
    with writer.saving(fig, str(output_path), dpi):
        while not simulation.is_finished():
            if max_frames is not None and frames >= max_frames:
                break
            ax_arena.clear()
            draw_arena(ax_arena, simulation.snapshot(), arena, theme=theme)
            simulation.step()
            ax_chart.clear()
            draw_counts_chart(ax_chart, simulation.stats, theme=theme)
            writer.grab_frame()
            frames += 1
    plt.close(fig)
    logger.info("wrote %d frames to %s", frames, output_path)
    return frames
