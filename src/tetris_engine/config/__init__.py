# src/tetris_engine/config/__init__.py
from __future__ import annotations

from tetris_engine.config.base import ConfigBase
from tetris_engine.config.game import GameConfig, PieceRuleName, ScoringConfig
from tetris_engine.config.io import load_game_config, load_yaml, parse_game_config, save_yaml, to_plain_dict

__all__ = [
    "ConfigBase",
    "GameConfig",
    "PieceRuleName",
    "ScoringConfig",
    "load_game_config",
    "load_yaml",
    "parse_game_config",
    "save_yaml",
    "to_plain_dict",
]
