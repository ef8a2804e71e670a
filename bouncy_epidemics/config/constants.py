"""Centralized domain constants for epidemic simulations.

All magic numbers shared across modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

CANVAS_WIDTH = 320
"""Default total canvas width (arena plus readout and chart strip)."""

CANVAS_HEIGHT = 320
"""Default total canvas height."""

POPULATION = 1000
"""Default number of agents per simulation."""

BASE_SPEED = 2.0
"""Distance travelled per step by a moving agent."""

DIAMETER_DIVISOR = 150.0
"""Agent diameter is (arena_width + arena_height) / DIAMETER_DIVISOR."""

MAX_TIME_FACTOR = 30
"""Step cap is MAX_TIME_FACTOR * sick_duration unless set explicitly."""

SOCIAL_DISTANCE_FRACTION = 0.95
"""Default fraction of stationary agents."""

MORTALITY = 0.1
"""Default probability that an ending sickness is fatal."""

SICK_DURATION = 100
"""Default number of steps an infected agent stays sick."""

PATIENT_ZERO_INDEX = 0
"""Index of the agent infected at initialization."""

FLUSH_THRESHOLD = 8_192
"""Flush step-count rows to Parquet once this in-memory row count is reached."""

MAX_BATCH_WORK_UNITS = 50_000_000_000
"""Safety cap on seeds * max_steps * population^2 across one batch."""
