"""Configuration layer: constants and typed config dataclasses."""

from bouncy_epidemics.config.constants import (
    BASE_SPEED,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DIAMETER_DIVISOR,
    FLUSH_THRESHOLD,
    MAX_BATCH_WORK_UNITS,
    MAX_TIME_FACTOR,
    MORTALITY,
    PATIENT_ZERO_INDEX,
    POPULATION,
    SICK_DURATION,
    SOCIAL_DISTANCE_FRACTION,
)
from bouncy_epidemics.config.types import (
    ArenaConfig,
    BatchConfig,
    ConfigurationError,
    SimulationConfig,
    SpeedMode,
    derive_speed,
)

__all__ = [
    "ArenaConfig",
    "BASE_SPEED",
    "BatchConfig",
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "ConfigurationError",
    "DIAMETER_DIVISOR",
    "FLUSH_THRESHOLD",
    "MAX_BATCH_WORK_UNITS",
    "MAX_TIME_FACTOR",
    "MORTALITY",
    "PATIENT_ZERO_INDEX",
    "POPULATION",
    "SICK_DURATION",
    "SOCIAL_DISTANCE_FRACTION",
    "SimulationConfig",
    "SpeedMode",
    "derive_speed",
]
