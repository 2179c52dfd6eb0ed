# src/tetris_engine/game/rendering/__init__.py
from __future__ import annotations

from tetris_engine.game.rendering.ascii import board_to_ascii

__all__ = ["board_to_ascii"]
