"""Parquet persistence helpers for step-count streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from bouncy_epidemics.io.schemas import STEP_COUNTS_SCHEMA
from bouncy_epidemics.simulation.stats import SimulationStats


def empty_count_columns() -> dict[str, list[int]]:
    """Fresh column buffers keyed by the step-count schema."""
    return {name: [] for name in STEP_COUNTS_SCHEMA.names}


def append_step_counts(
    count_columns: dict[str, list[int]], seed: int, stats: SimulationStats
) -> None:
    """Append one run's recorded series to the in-memory column buffers."""
    for step, counts in enumerate(stats):
        count_columns["seed"].append(seed)
        count_columns["step"].append(step)
        count_columns["healthy"].append(counts.healthy)
        count_columns["sick"].append(counts.sick)
        count_columns["immune"].append(counts.immune)
        count_columns["dead"].append(counts.dead)


def flush_count_columns(
    count_columns: dict[str, list[int]],
    step_counts_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated count rows to Parquet and clear in-memory buffers."""
    if not count_columns["seed"]:
        return writer
    table = pa.Table.from_pydict(count_columns, schema=STEP_COUNTS_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(step_counts_path, STEP_COUNTS_SCHEMA)
    writer.write_table(table)
    for values in count_columns.values():
        values.clear()
    return writer
