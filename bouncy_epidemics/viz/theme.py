"""Visualization theme presets for arena and chart renderers.

Themes are frozen dataclasses that group all styling constants together,
so renderers never reference module-level color literals.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bouncy_epidemics.domain.disease import Health


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    health_colors: dict[Health, str] = field(default_factory=dict)
    health_labels: dict[Health, str] = field(default_factory=dict)
    background_color: str = "#000000"
    text_color: str = "#FFFFFF"

    def color_of(self, health: Health) -> str:
        return self.health_colors[health]


_DEFAULT_LABELS: dict[Health, str] = {
    Health.HEALTHY: "Healthy",
    Health.SICK: "Sick",
    Health.IMMUNE: "Immune",
    Health.DEAD: "Dead",
}

DEFAULT_THEME = Theme(
    health_colors={
        Health.HEALTHY: "#FFFFFF",
        Health.SICK: "#FF0000",
        Health.IMMUNE: "#FFFFA0",
        Health.DEAD: "#404040",
    },
    health_labels=_DEFAULT_LABELS,
)

PAPER_THEME = Theme(
    health_colors={
        Health.HEALTHY: "#1f77b4",
        Health.SICK: "#d62728",
        Health.IMMUNE: "#2ca02c",
        Health.DEAD: "#7f7f7f",
    },
    health_labels=_DEFAULT_LABELS,
    background_color="#FFFFFF",
    text_color="#000000",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
