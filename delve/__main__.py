"""Entry point: ``python -m delve``.

Supports two modes:
  - ``python -m delve``            → Launch the FastAPI server
  - ``python -m delve cli``        → Headless simulation, optionally with scripted moves
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

# Compass heading → (dx, dy); y grows downward
DIRECTIONS: dict[str, tuple[int, int]] = {
    "n": (0, -1),
    "s": (0, 1),
    "e": (1, 0),
    "w": (-1, 0),
    "ne": (1, -1),
    "nw": (-1, -1),
    "se": (1, 1),
    "sw": (-1, 1),
    ".": (0, 0),
}


def parse_moves(text: str) -> list[tuple[int, int]]:
    """Parse a comma-separated list of compass headings, e.g. ``"e,e,se,."``."""
    moves: list[tuple[int, int]] = []
    for token in text.split(","):
        token = token.strip().lower()
        if not token:
            continue
        if token not in DIRECTIONS:
            raise argparse.ArgumentTypeError(
                f"Unknown direction {token!r}; expected one of {', '.join(DIRECTIONS)}"
            )
        moves.append(DIRECTIONS[token])
    return moves


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic dungeon crawler engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--paused", action="store_true", help="Build the level but wait for /control/start")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--cols", type=int, default=64)
    cli.add_argument("--rows", type=int, default=48)
    cli.add_argument("--moves", type=parse_moves, default=[], help="Player headings, one per tick: n,s,e,w,ne,nw,se,sw,.")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from delve.api.app import create_app
    from delve.config import SimulationConfig

    config = SimulationConfig(world_seed=args.seed, log_level=args.log_level)
    app = create_app(config, autostart=not args.paused)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from delve.actions.base import MoveIntent
    from delve.config import SimulationConfig
    from delve.engine.action_queue import InputQueue
    from delve.engine.world_loop import WorldLoop
    from delve.systems.dungeon import build_level
    from delve.utils.logging import setup_logging

    config = SimulationConfig(
        world_seed=args.seed,
        grid_cols=args.cols,
        grid_rows=args.rows,
        max_ticks=args.ticks,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    world = build_level(config)
    # Unbounded: every scripted move is queued before the first tick
    loop = WorldLoop(config=config, world=world, input_queue=InputQueue())
    for dx, dy in args.moves:
        loop.input_queue.push(MoveIntent(dx, dy))

    loop.run()

    player = world.find_player()
    if player is None:
        logger.info("Player was defeated at tick %d.", world.tick)
    else:
        logger.info(
            "Player at (%d, %d) with %d/%d hp; %d monsters remain.",
            player.pos.x, player.pos.y, player.stats.hp, player.stats.max_hp, sum(1 for _ in world.monsters()),
        )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
