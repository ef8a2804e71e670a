"""Configuration dataclasses for epidemic simulations and batch runs.

All frozen dataclasses that parameterise a single simulation, its arena,
and multi-seed batch runs live here.  Validation happens in
``__post_init__`` so an invalid configuration never reaches the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

from bouncy_epidemics.config.constants import (
    BASE_SPEED,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DIAMETER_DIVISOR,
    MAX_TIME_FACTOR,
    MORTALITY,
    PATIENT_ZERO_INDEX,
    POPULATION,
    SICK_DURATION,
    SOCIAL_DISTANCE_FRACTION,
)

__all__ = [
    "ArenaConfig",
    "BatchConfig",
    "ConfigurationError",
    "SimulationConfig",
    "SpeedMode",
    "derive_speed",
]


class ConfigurationError(ValueError):
    """Raised when simulation parameters are out of range."""


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArenaConfig:
    """Toroidal arena dimensions in canvas units."""

    width: float = float(CANVAS_HEIGHT)
    height: float = float(CANVAS_HEIGHT - (CANVAS_HEIGHT >> 4) * 4)

    def __post_init__(self) -> None:
        if not self.width > 0 or not self.height > 0:
            raise ConfigurationError("arena dimensions must be > 0")

    @classmethod
    def from_canvas(
        cls, total_width: int = CANVAS_WIDTH, total_height: int = CANVAS_HEIGHT
    ) -> ArenaConfig:
        """Derive the arena from a canvas that also hosts the readout and chart.

        The bottom of the canvas holds a text gap of ``total_height >> 4``
        and a chart strip three gaps high. The arena width equals
        ``total_height`` and its height is what remains above the strip;
        ``total_width`` is only validated.
        """
        if total_width < 1 or total_height < 1:
            raise ConfigurationError("canvas dimensions must be >= 1")
        gap = total_height >> 4
        bar = gap * 3
        return cls(width=float(total_height), height=float(total_height - gap - bar))

    @property
    def diameter(self) -> float:
        """Shared agent collision diameter for this arena."""
        return (self.width + self.height) / DIAMETER_DIVISOR


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


class SpeedMode(Enum):
    """How agent speed depends on the social distancing fraction."""

    FIXED = "fixed"
    DISTANCING = "distancing"


def derive_speed(base_speed: float, social_distance_fraction: float, mode: SpeedMode) -> float:
    """Return movement speed for the given distancing level."""
    if mode == SpeedMode.DISTANCING:
        return base_speed * (1.0 - social_distance_fraction)
    return base_speed


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _check_fraction(name: str, value: float) -> None:
    if not _is_real(value):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be in [0.0, 1.0], got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one simulation run.

    ``social_distance_fraction`` may later be changed live on a running
    simulation; ``mortality`` and ``sick_duration`` are fixed per run.
    """

    social_distance_fraction: float = SOCIAL_DISTANCE_FRACTION
    mortality: float = MORTALITY
    sick_duration: int = SICK_DURATION
    population: int = POPULATION
    arena: ArenaConfig = field(default_factory=ArenaConfig.from_canvas)
    base_speed: float = BASE_SPEED
    speed_mode: SpeedMode = SpeedMode.FIXED
    max_time_factor: int = MAX_TIME_FACTOR
    max_steps: int | None = None
    """Explicit step cap; overrides ``max_time_factor * sick_duration``."""
    patient_zero_index: int = PATIENT_ZERO_INDEX

    def __post_init__(self) -> None:
        _check_int("population", self.population)
        if self.population < 1:
            raise ConfigurationError(f"population must be >= 1, got {self.population}")
        _check_fraction("social_distance_fraction", self.social_distance_fraction)
        _check_fraction("mortality", self.mortality)
        _check_int("sick_duration", self.sick_duration)
        if self.sick_duration < 1:
            raise ConfigurationError(f"sick_duration must be >= 1, got {self.sick_duration}")
        if not _is_real(self.base_speed):
            raise ConfigurationError(f"base_speed must be a number, got {self.base_speed!r}")
        if self.base_speed < 0:
            raise ConfigurationError("base_speed must be >= 0")
        _check_int("max_time_factor", self.max_time_factor)
        if self.max_time_factor < 1:
            raise ConfigurationError("max_time_factor must be >= 1")
        if self.max_steps is not None:
            _check_int("max_steps", self.max_steps)
            if self.max_steps < 1:
                raise ConfigurationError("max_steps must be >= 1")
        _check_int("patient_zero_index", self.patient_zero_index)
        if not 0 <= self.patient_zero_index < self.population:
            raise ConfigurationError(
                f"patient_zero_index must be in [0, {self.population}), "
                f"got {self.patient_zero_index}"
            )

    @property
    def diameter(self) -> float:
        return self.arena.diameter

    @property
    def resolved_max_steps(self) -> int:
        if self.max_steps is not None:
            return self.max_steps
        return self.max_time_factor * self.sick_duration

    @property
    def stationary_count(self) -> int:
        """Number of leading agents (by index) that never move."""
        return int(self.population * self.social_distance_fraction)

    def derived_speed(self) -> float:
        return derive_speed(self.base_speed, self.social_distance_fraction, self.speed_mode)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> SimulationConfig:
        """Build a config from a JSON-style mapping, ignoring unknown keys.

        ``arena`` may be given as ``{"width": ..., "height": ...}`` or as
        ``{"canvas_width": ..., "canvas_height": ...}``.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, object] = {k: v for k, v in raw.items() if k in known}
        arena_raw = kwargs.pop("arena", None)
        if isinstance(arena_raw, Mapping):
            arena_values = {k: float(v) for k, v in arena_raw.items()}
            if "canvas_width" in arena_values or "canvas_height" in arena_values:
                kwargs["arena"] = ArenaConfig.from_canvas(
                    int(arena_values.get("canvas_width", CANVAS_WIDTH)),
                    int(arena_values.get("canvas_height", CANVAS_HEIGHT)),
                )
            else:
                try:
                    kwargs["arena"] = ArenaConfig(
                        width=arena_values["width"], height=arena_values["height"]
                    )
                except KeyError as exc:
                    raise ConfigurationError(f"arena is missing {exc.args[0]!r}") from exc
        elif arena_raw is not None:
            raise ConfigurationError("arena must be a mapping")
        if "speed_mode" in kwargs and not isinstance(kwargs["speed_mode"], SpeedMode):
            try:
                kwargs["speed_mode"] = SpeedMode(kwargs["speed_mode"])
            except ValueError as exc:
                valid = ", ".join(m.value for m in SpeedMode)
                raise ConfigurationError(f"speed_mode must be one of {valid}") from exc
        return cls(**kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Batch runs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchConfig:
    """Multi-seed batch settings around a base simulation config."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    n_seeds: int = 10
    seed_start: int = 0
    out_dir: Path = Path("data")

    def __post_init__(self) -> None:
        if self.n_seeds < 1:
            raise ConfigurationError("n_seeds must be >= 1")
        if self.seed_start < 0:
            raise ConfigurationError("seed_start must be >= 0")
