"""Parquet schema definitions for exported run artifacts.

Every module that writes or reads batch outputs works against these
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_SCHEMA_VERSION = 1

STEP_COUNTS_SCHEMA = pa.schema(
    [
        ("seed", pa.int64()),
        ("step", pa.int64()),
        ("healthy", pa.int64()),
        ("sick", pa.int64()),
        ("immune", pa.int64()),
        ("dead", pa.int64()),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("seed", pa.int64()),
        ("steps", pa.int64()),
        ("population", pa.int64()),
        ("social_distance_fraction", pa.float64()),
        ("mortality", pa.float64()),
        ("sick_duration", pa.int64()),
        ("final_healthy", pa.int64()),
        ("final_sick", pa.int64()),
        ("final_immune", pa.int64()),
        ("final_dead", pa.int64()),
        ("peak_sick", pa.int64()),
        ("peak_time", pa.int64()),
        ("attack_rate", pa.float64()),
        ("death_rate", pa.float64()),
        ("termination_reason", pa.string()),
    ]
)
