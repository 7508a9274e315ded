"""CLI entrypoint: play one headless game or sweep many seeds.

Supports ``--config path/to/config.json``; CLI arguments override config-file
values, and config-file values override built-in defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from seat_chase.config.constants import (
    CHAIR_ROWS,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_TICKS,
    MOVE_INTERVAL,
    NUM_AGENTS,
    SEATS_PER_SIDE,
    USER_INDEX,
)
from seat_chase.config.types import GameConfig, SweepConfig, VenueConfig
from seat_chase.domain.cells import Direction
from seat_chase.experiments.sweep import run_sweep, summarize_sweep
from seat_chase.simulation.controller import GameController

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object], default: int | None
) -> int | None:
    raw = _get_val(cli_val, key, file_cfg, default)
    if raw is None or (isinstance(raw, str) and raw.strip().lower() == "none"):
        return None
    return _coerce_int(raw, key)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _parse_layout(raw: object) -> tuple[str, ...] | None:
    """Accept a list of ASCII rows or a path to a text file holding them."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        if not all(isinstance(row, str) for row in raw):
            raise ValueError("layout rows must be strings")
        return tuple(raw)
    if isinstance(raw, (str, Path)):
        return tuple(Path(raw).read_text().splitlines())
    raise ValueError("layout must be a list of rows or a file path")


def _parse_directions(raw: object) -> list[Direction]:
    """Parse a comma-delimited direction script such as ``up,up,left``."""
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = [part.strip().lower() for part in raw.split(",") if part.strip()]
    elif isinstance(raw, list):
        parts = [str(part).strip().lower() for part in raw]
    else:
        raise ValueError("user_moves must be a comma-delimited string or a list")
    try:
        return [Direction(part) for part in parts]
    except ValueError as exc:
        valid = ", ".join(d.value for d in Direction)
        raise ValueError(f"user_moves entries must be one of {valid}") from exc


def _load_file_config(parser: argparse.ArgumentParser, path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        return json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    return {}


def _build_game_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> GameConfig:
    venue = VenueConfig(
        grid_width=_get_int(args.grid_width, "grid_width", file_cfg, GRID_WIDTH),
        grid_height=_get_int(args.grid_height, "grid_height", file_cfg, GRID_HEIGHT),
        chair_rows=_get_int(args.chair_rows, "chair_rows", file_cfg, CHAIR_ROWS),
        seats_per_side=_get_int(args.seats_per_side, "seats_per_side", file_cfg, SEATS_PER_SIDE),
        layout=_parse_layout(_get_val(args.layout, "layout", file_cfg, None)),
    )
    return GameConfig(
        venue=venue,
        agent_count=_get_int(args.agents, "agent_count", file_cfg, NUM_AGENTS),
        user_index=_get_optional_int(args.user_index, "user_index", file_cfg, USER_INDEX),
        chair_count=_get_optional_int(args.chairs, "chair_count", file_cfg, None),
        move_interval=_get_int(args.move_interval, "move_interval", file_cfg, MOVE_INTERVAL),
        reassign_taken_seats=_get_bool(
            args.reassign_taken_seats, "reassign_taken_seats", file_cfg, True
        ),
        seed=_get_int(args.seed, "seed", file_cfg, 0),
    )


def _add_game_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--agents", type=int, default=None)
    p.add_argument("--user-index", type=str, default=None, help="Agent id of the user, or 'none'")
    p.add_argument("--chairs", type=int, default=None)
    p.add_argument("--move-interval", type=int, default=None)
    p.add_argument("--grid-width", type=int, default=None)
    p.add_argument("--grid-height", type=int, default=None)
    p.add_argument("--chair-rows", type=int, default=None)
    p.add_argument("--seats-per-side", type=int, default=None)
    p.add_argument("--layout", type=Path, default=None, help="ASCII venue layout file")
    p.add_argument(
        "--reassign-taken-seats", action=argparse.BooleanOptionalAction, default=None
    )
    p.add_argument("--max-ticks", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Conference-room seat chase simulation")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Play one headless game")
    run_p.set_defaults(func=_handle_run)
    _add_game_arguments(run_p)
    run_p.add_argument(
        "--user-moves",
        type=str,
        default=None,
        help="Comma-delimited user steps (up/down/left/right), one per tick",
    )
    run_p.add_argument("--show-map", action="store_true", help="Include the final ASCII map")

    sweep_p = sub.add_parser("sweep", help="Play many seeds with an idle user")
    sweep_p.set_defaults(func=_handle_sweep)
    _add_game_arguments(sweep_p)
    sweep_p.add_argument("--n-runs", type=int, default=None)
    sweep_p.add_argument("--out-dir", type=Path, default=None)
    return parser


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _handle_run(args: argparse.Namespace, file_cfg: dict[str, object]) -> dict[str, object]:
    game_config = _build_game_config(args, file_cfg)
    max_ticks = _get_int(args.max_ticks, "max_ticks", file_cfg, MAX_TICKS)
    script = _parse_directions(_get_val(args.user_moves, "user_moves", file_cfg, None))

    controller = GameController(game_config)
    controller.start_game()
    for direction in script:
        if controller.clock.now >= max_ticks:
            break
        controller.request_user_move(direction)
        controller.tick()
    result = controller.run_until_ended(max_ticks=max_ticks)

    summary: dict[str, object] = {"mode": "run", **asdict(result)}
    summary["user_moves"] = controller.user_moves
    if args.show_map:
        summary["final_map"] = controller.snapshot().render_ascii().splitlines()
    return summary


def _handle_sweep(args: argparse.Namespace, file_cfg: dict[str, object]) -> dict[str, object]:
    out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
    sweep_config = SweepConfig(
        n_runs=_get_int(args.n_runs, "n_runs", file_cfg, 10),
        base_seed=_get_int(args.seed, "seed", file_cfg, 0),
        max_ticks=_get_int(args.max_ticks, "max_ticks", file_cfg, MAX_TICKS),
        game=_build_game_config(args, file_cfg),
        out_dir=None if out_dir_raw is None else Path(str(out_dir_raw)),
    )
    results = run_sweep(sweep_config)
    return {"mode": "sweep", **summarize_sweep(results)}


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint; prints a JSON summary of the run or sweep."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    file_cfg = _load_file_config(parser, args.config)
    summary = args.func(args, file_cfg)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
