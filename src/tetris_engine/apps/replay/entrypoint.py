# src/tetris_engine/apps/replay/entrypoint.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from omegaconf import OmegaConf

from tetris_engine.config.game import GameConfig
from tetris_engine.config.io import load_game_config, parse_game_config, to_plain_dict
from tetris_engine.game.core.events import BoardEvent
from tetris_engine.game.factory import make_game_bundle_from_cfg
from tetris_engine.utils.logging import setup_logger


def _split_csv(raw: Optional[str]) -> list[str]:
    if raw is None:
        return []
    return [s.strip() for s in str(raw).split(",") if s.strip()]


def build_config(args: argparse.Namespace) -> GameConfig:
    """
    --config is the base (defaults when omitted), then --set dotlist entries, then the
    dedicated flags.
    """
    overrides = list(args.overrides or [])
    if args.config:
        base = load_game_config(Path(args.config), overrides=overrides)
    elif overrides:
        base = parse_game_config(to_plain_dict(OmegaConf.from_dotlist(overrides)))
    else:
        base = GameConfig()

    updates: Dict[str, Any] = {
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
        "piece_rule": args.piece_rule,
    }
    if args.sequence is not None:
        updates["sequence"] = _split_csv(args.sequence)
        if args.piece_rule is None:
            updates["piece_rule"] = "sequence"
    elif args.piece_rule is not None and args.piece_rule != "sequence":
        # a replay sequence from --config only belongs to the sequence rule
        updates["sequence"] = []

    return base.with_overrides(updates)


def run_replay(args: argparse.Namespace) -> int:
    log = setup_logger(name="tetris_engine.replay", use_rich=not bool(args.no_rich), level=str(args.log_level))

    cfg = build_config(args)
    bundle = make_game_bundle_from_cfg(cfg)
    board, scores = bundle.board, bundle.scores

    rows_cleared = [0]
    board.subscribe(BoardEvent.ROW_CLEARED, lambda _v: rows_cleared.__setitem__(0, rows_cleared[0] + 1))
    board.subscribe(BoardEvent.GAME_OVER, lambda over: log.info("[replay] game over") if over else None)

    board.new_game()
    log.info(f"[replay] board={cfg.width}x{cfg.height} piece_rule={cfg.piece_rule} seed={cfg.seed}")

    actions = _split_csv(args.actions)
    for i, action in enumerate(actions):
        if board.game_over:
            log.info(f"[replay] stopping at action {i}/{len(actions)}: game is over")
            break
        board.apply(action)

    print(board.to_ascii())
    log.info(f"[replay] {scores.summary()} rows_seen={rows_cleared[0]} game_over={board.game_over}")
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay a list of moves on a headless Tetris board and print the result"
    )
    parser.add_argument("--config", type=str, default=None, help="YAML config (top-level 'game:' mapping)")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        help="dotlist override, repeatable (e.g. --set game.scoring.rows_per_level=10)",
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--piece-rule", type=str, default=None, choices=["uniform", "bag7", "sequence"])
    parser.add_argument("--sequence", type=str, default=None, help="comma-separated kinds, e.g. I,O,T")
    parser.add_argument(
        "--actions",
        type=str,
        default="",
        help="comma-separated moves: left,right,down,drop,cw,ccw",
    )
    parser.add_argument("--log-level", type=str, default="info")
    parser.add_argument("--no-rich", action="store_true", help="plain logging handler instead of rich")
    return parser.parse_args(argv)


__all__ = ["build_config", "parse_args", "run_replay"]
