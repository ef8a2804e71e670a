"""Visualization layer: themes, renderers, and CLI."""

from bouncy_epidemics.viz.render import (
    STACK_ORDER,
    draw_arena,
    draw_counts_chart,
    format_readout,
    render_animation,
    render_chart,
    stacked_series,
)
from bouncy_epidemics.viz.theme import (
    DEFAULT_THEME,
    PAPER_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "STACK_ORDER",
    "Theme",
    "draw_arena",
    "draw_counts_chart",
    "format_readout",
    "get_theme",
    "render_animation",
    "render_chart",
    "stacked_series",
]
