from __future__ import annotations

import argparse
from pathlib import Path

from bouncy_epidemics.io.paths import resolve_within_base
from bouncy_epidemics.run_sim import (
    add_simulation_arguments,
    configure_logging,
    load_file_config,
    simulation_config_from_args,
)
from bouncy_epidemics.simulation.engine import Simulation
from bouncy_epidemics.simulation.runner import run_to_completion
from bouncy_epidemics.viz.render import render_animation, render_chart
from bouncy_epidemics.viz.theme import get_theme


def _build_chart_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("chart", help="Run to completion and render the stacked count chart")
    p.set_defaults(func=_handle_chart)
    add_simulation_arguments(p)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))
    p.add_argument("--dpi", type=int, default=100)


def _build_animate_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("animate", help="Render the arena and chart frame by frame")
    p.set_defaults(func=_handle_animate)
    add_simulation_arguments(p)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))
    p.add_argument("--fps", type=int, default=30)
    p.add_argument("--max-frames", type=int, default=None)


def _simulation_from_args(args: argparse.Namespace) -> Simulation:
    file_cfg = load_file_config(args.config)
    config = simulation_config_from_args(args, file_cfg)
    seed = args.seed if args.seed is not None else file_cfg.get("seed", 0)
    return Simulation(config, seed=int(seed))


def _handle_chart(args: argparse.Namespace) -> None:
    output = resolve_within_base(args.output, Path(args.base_dir).resolve())
    theme = get_theme(args.theme)
    simulation = _simulation_from_args(args)
    run_to_completion(simulation)
    render_chart(simulation.stats, output, theme=theme, dpi=args.dpi)


def _handle_animate(args: argparse.Namespace) -> None:
    output = resolve_within_base(args.output, Path(args.base_dir).resolve())
    theme = get_theme(args.theme)
    simulation = _simulation_from_args(args)
    render_animation(
        simulation,
        output,
        fps=args.fps,
        max_frames=args.max_frames,
        theme=theme,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Visualization tools for epidemic simulations")
    parser.add_argument(
        "--theme",
        type=str,
        default="default",
        help="Theme preset name (default, paper)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_chart_parser(sub)
    _build_animate_parser(sub)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
