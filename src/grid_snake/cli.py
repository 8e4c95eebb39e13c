"""Command-line tools for Grid Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake headless simulation and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless game on a manual clock.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=100)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--keys", type=str, default="",
        help=(
            "Comma-separated key names, one consumed per tick "
            "(empty entries send nothing)."
        ),
    )
    sim_p.add_argument(
        "--frames", action="store_true",
        help="Include every drawing plan in the output.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the default config file.")
    cfg_p.add_argument("output", help="Destination JSON path.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from grid_snake.config import GameConfig
    from grid_snake.render import plan_to_dicts
    from grid_snake.scheduler import GameLoopScheduler

    config = GameConfig.load(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    scheduler = GameLoopScheduler(config)
    keys = [k.strip() for k in args.keys.split(",")] if args.keys else []
    frames = [plan_to_dicts(scheduler.opening())]

    for tick in range(args.ticks):
        if tick < len(keys) and keys[tick]:
            if scheduler.handle_key(keys[tick]) is None:
                logger.warning("Ignoring unmapped key %r.", keys[tick])
        if scheduler.pulse() is None:
            break
        frames.append(plan_to_dicts(scheduler.frame()))

    result = scheduler.state.to_dict()
    if args.frames:
        result["frames"] = frames
    print(json.dumps(result))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
