"""CLI entrypoint for headless simulation runs.

This module owns CLI argument parsing and mode dispatch. All domain logic
lives in the extracted modules:

- ``bouncy_epidemics.config``                – configuration dataclasses
- ``bouncy_epidemics.simulation.engine``     – the ``Simulation`` engine
- ``bouncy_epidemics.simulation.runner``     – run-to-completion driver
- ``bouncy_epidemics.experiments.batch``     – multi-seed batches and Parquet export
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from bouncy_epidemics.config.types import BatchConfig, SimulationConfig, SpeedMode
from bouncy_epidemics.experiments.batch import config_payload, run_batch, summarize_batch
from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.runner import run_to_completion

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_canvas(raw_canvas: str) -> tuple[int, int]:
    """Parse a canvas size formatted as ``WxH``."""
    tokens = raw_canvas.lower().split("x")
    if len(tokens) != 2:
        raise ValueError("canvas must use WxH format")
    try:
        width, height = int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise ValueError("canvas must use integer WxH values") from exc
    if width < 1 or height < 1:
        raise ValueError("canvas must be >= 1x1")
    return width, height


def _parse_speed_mode(raw_mode: str) -> SpeedMode:
    try:
        return SpeedMode(raw_mode)
    except ValueError as exc:
        valid = ", ".join(m.value for m in SpeedMode)
        raise ValueError(f"speed-mode must be one of {valid}") from exc


def add_simulation_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the simulation parameter flags shared by all CLIs."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--social-distance", type=float, default=None)
    parser.add_argument("--mortality", type=float, default=None)
    parser.add_argument("--sick-duration", type=int, default=None)
    parser.add_argument("--population", type=int, default=None)
    parser.add_argument("--canvas", type=str, default=None, help="Canvas size as WxH")
    parser.add_argument("--speed-mode", type=str, default=None)
    parser.add_argument("--base-speed", type=float, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--max-time-factor", type=int, default=None)
    parser.add_argument("--patient-zero", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="WARNING")


def load_file_config(config_path: Path | None) -> dict[str, Any]:
    if config_path is None:
        return {}
    loaded = json.loads(Path(config_path).read_text())
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a JSON object")
    return loaded


def simulation_config_from_args(
    args: argparse.Namespace, file_cfg: dict[str, Any]
) -> SimulationConfig:
    """Merge built-in defaults < config file < CLI flags into a SimulationConfig."""
    merged: dict[str, Any] = dict(file_cfg)
    cli_values = {
        "social_distance_fraction": args.social_distance,
        "mortality": args.mortality,
        "sick_duration": args.sick_duration,
        "population": args.population,
        "base_speed": args.base_speed,
        "max_steps": args.max_steps,
        "max_time_factor": args.max_time_factor,
        "patient_zero_index": args.patient_zero,
    }
    merged.update({key: value for key, value in cli_values.items() if value is not None})
    if args.speed_mode is not None:
        merged["speed_mode"] = _parse_speed_mode(args.speed_mode)
    if args.canvas is not None:
        width, height = _parse_canvas(args.canvas)
        merged["arena"] = {"canvas_width": width, "canvas_height": height}
    return SimulationConfig.from_mapping(merged)


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {level_name!r}")
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for single or batch runs.

    Supports ``--config path/to/config.json`` for reproducibility.
    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = argparse.ArgumentParser(description="Run the bouncing-ball epidemic simulation")
    add_simulation_arguments(parser)
    parser.add_argument("--batch", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--n-seeds", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    file_cfg = load_file_config(args.config)

    def _get(cli_val: object, key: str, default: object) -> object:
        if cli_val is not None:
            return cli_val
        return file_cfg.get(key, default)

    sim_config = simulation_config_from_args(args, file_cfg)
    seed = int(_get(args.seed, "seed", 0))  # type: ignore[call-overload]
    is_batch = bool(_get(args.batch, "batch", False))

    if is_batch:
        batch_config = BatchConfig(
            simulation=sim_config,
            n_seeds=int(_get(args.n_seeds, "n_seeds", 10)),  # type: ignore[call-overload]
            seed_start=seed,
            out_dir=Path(str(_get(args.out_dir, "out_dir", "data"))),
        )
        summaries = run_batch(batch_config)
        summary: dict[str, Any] = {
            "mode": "batch",
            "out_dir": str(batch_config.out_dir),
            **summarize_batch(summaries),
        }
    else:
        simulation = Simulation(sim_config, seed=seed)
        run_summary = run_to_completion(simulation, seed=seed)
        summary = {
            "mode": "single",
            "config": config_payload(sim_config),
            **run_summary.as_row(),
            "percentages": simulation.stats.percentages(),
        }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
