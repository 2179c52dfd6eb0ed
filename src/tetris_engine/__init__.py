# src/tetris_engine/__init__.py
from __future__ import annotations

from tetris_engine.game.core import (
    Action,
    BoardEvent,
    EngineNotInitializedError,
    GameStatus,
    MovablePiece,
    PieceKind,
    Point,
    Rotation,
    TetrisBoard,
)
from tetris_engine.game.scoring import ScoreEvent, ScoreKeeper

__all__ = [
    "Action",
    "BoardEvent",
    "EngineNotInitializedError",
    "GameStatus",
    "MovablePiece",
    "PieceKind",
    "Point",
    "Rotation",
    "ScoreEvent",
    "ScoreKeeper",
    "TetrisBoard",
]
