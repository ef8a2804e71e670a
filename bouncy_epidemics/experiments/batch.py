"""Multi-seed batch runs with Parquet export of counts and summaries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from bouncy_epidemics.config.constants import FLUSH_THRESHOLD, MAX_BATCH_WORK_UNITS
from bouncy_epidemics.config.types import BatchConfig, ConfigurationError, SimulationConfig
from bouncy_epidemics.io.paths import (
    batch_config_path,
    logs_dir,
    run_summary_path,
    step_counts_path,
)
from bouncy_epidemics.io.schemas import RUN_SCHEMA_VERSION, RUN_SUMMARY_SCHEMA
from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.persistence import (
    append_step_counts,
    empty_count_columns,
    flush_count_columns,
)
from bouncy_epidemics.simulation.runner import RunSummary, TerminationReason, run_to_completion

logger = logging.getLogger(__name__)


def config_payload(config: SimulationConfig) -> dict[str, Any]:
    """JSON-serializable view of a simulation config."""
    return {
        "social_distance_fraction": config.social_distance_fraction,
        "mortality": config.mortality,
        "sick_duration": config.sick_duration,
        "population": config.population,
        "arena": {"width": config.arena.width, "height": config.arena.height},
        "base_speed": config.base_speed,
        "speed_mode": config.speed_mode.value,
        "max_time_factor": config.max_time_factor,
        "max_steps": config.max_steps,
        "patient_zero_index": config.patient_zero_index,
    }


def _check_workload(config: BatchConfig) -> None:
    sim = config.simulation
    work_units = config.n_seeds * sim.resolved_max_steps * sim.population * sim.population
    if work_units > MAX_BATCH_WORK_UNITS:
        raise ConfigurationError(
            "batch workload exceeds safety threshold; reduce n_seeds/population/max_steps"
        )


def run_batch(config: BatchConfig) -> list[RunSummary]:
    """Run one simulation per seed and persist step counts and run summaries."""
    _check_workload(config)
    out_dir = Path(config.out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    sim_config = config.simulation
    count_columns = empty_count_columns()
    summary_rows: list[dict[str, object]] = []
    summaries: list[RunSummary] = []
    writer: pq.ParquetWriter | None = None

    try:
        for i in range(config.n_seeds):
            seed = config.seed_start + i
            simulation = Simulation(sim_config, seed=seed)
            summary = run_to_completion(simulation, seed=seed)
            summaries.append(summary)
            logger.info(
                "seed=%d steps=%d dead=%d reason=%s",
                seed,
                summary.steps,
                summary.final.dead,
                summary.termination_reason.value if summary.termination_reason else None,
            )

            append_step_counts(count_columns, seed, simulation.stats)
            if len(count_columns["seed"]) >= FLUSH_THRESHOLD:
                writer = flush_count_columns(count_columns, step_counts_path(out_dir), writer)

            summary_rows.append(
                {
                    "schema_version": RUN_SCHEMA_VERSION,
                    "population": sim_config.population,
                    "social_distance_fraction": sim_config.social_distance_fraction,
                    "mortality": sim_config.mortality,
                    "sick_duration": sim_config.sick_duration,
                    **summary.as_row(),
                }
            )
        writer = flush_count_columns(count_columns, step_counts_path(out_dir), writer)
    finally:
        if writer is not None:
            writer.close()

    pq.write_table(
        pa.Table.from_pylist(summary_rows, schema=RUN_SUMMARY_SCHEMA),
        run_summary_path(out_dir),
    )
    batch_config_path(out_dir).write_text(
        json.dumps(
            {
                "n_seeds": config.n_seeds,
                "seed_start": config.seed_start,
                "simulation": config_payload(sim_config),
            },
            ensure_ascii=False,
            indent=2,
        )
    )
    return summaries


def summarize_batch(summaries: list[RunSummary]) -> dict[str, Any]:
    """Aggregate outcome statistics across seeds."""
    if not summaries:
        return {"runs": 0}
    attack = np.array([s.attack_rate for s in summaries], dtype=float)
    death = np.array([s.death_rate for s in summaries], dtype=float)
    steps = np.array([s.steps for s in summaries], dtype=float)
    burned_out = sum(
        1 for s in summaries if s.termination_reason == TerminationReason.BURNED_OUT
    )
    return {
        "runs": len(summaries),
        "burned_out": burned_out,
        "step_capped": len(summaries) - burned_out,
        "attack_rate_mean": float(attack.mean()),
        "attack_rate_p25": float(np.percentile(attack, 25)),
        "attack_rate_p50": float(np.percentile(attack, 50)),
        "attack_rate_p75": float(np.percentile(attack, 75)),
        "death_rate_mean": float(death.mean()),
        "steps_mean": float(steps.mean()),
    }
