# src/tetris_engine/game/factory.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from tetris_engine.config.game import GameConfig
from tetris_engine.config.io import parse_game_config
from tetris_engine.game.core.game import TetrisBoard
from tetris_engine.game.core.piece_rules import make_piece_rule
from tetris_engine.game.scoring import ScoreKeeper

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameBundle:
    """
    Board engine + the scoring collaborator already subscribed to it.
    """

    board: TetrisBoard
    scores: ScoreKeeper


def _as_game_config(cfg: Any) -> GameConfig:
    if isinstance(cfg, GameConfig):
        return cfg
    if isinstance(cfg, Mapping):
        return parse_game_config(cfg)
    raise TypeError(f"cfg must be GameConfig|mapping, got {type(cfg)!r}")


def make_board_from_cfg(cfg: Any) -> TetrisBoard:
    """
    Build a TetrisBoard from a GameConfig (or a raw mapping validated into one).

    The RNG is numpy.random.default_rng(seed); seed=None gives a fresh stream.
    A 'sequence' rule becomes the board's default rule, so new_game() replays it from the start.
    """
    game_cfg = _as_game_config(cfg)
    rule = make_piece_rule(game_cfg.piece_rule, sequence=game_cfg.sequence)
    rng = np.random.default_rng(game_cfg.seed)
    LOG.debug(
        "board %dx%d piece_rule=%s seed=%s",
        game_cfg.width,
        game_cfg.height,
        game_cfg.piece_rule,
        game_cfg.seed,
    )
    return TetrisBoard(game_cfg.width, game_cfg.height, piece_rule=rule, rng=rng)


def make_game_bundle_from_cfg(cfg: Any) -> GameBundle:
    game_cfg = _as_game_config(cfg)
    board = make_board_from_cfg(game_cfg)
    scores = ScoreKeeper(game_cfg.scoring.to_rules()).attach(board)
    return GameBundle(board=board, scores=scores)


__all__ = ["GameBundle", "make_board_from_cfg", "make_game_bundle_from_cfg"]
