# src/tetris_engine/game/core/__init__.py
from __future__ import annotations

from tetris_engine.game.core.board import Board
from tetris_engine.game.core.errors import EngineNotInitializedError, TetrisEngineError
from tetris_engine.game.core.events import BoardEvent, EventBus
from tetris_engine.game.core.game import TetrisBoard
from tetris_engine.game.core.movable import MovablePiece
from tetris_engine.game.core.piece_rules import BagPieceRule, PieceRule, SequencePieceRule, UniformPieceRule
from tetris_engine.game.core.pieceset import Block, PieceKind
from tetris_engine.game.core.types import Action, GameStatus, Point, Rotation

__all__ = [
    "Action",
    "BagPieceRule",
    "Block",
    "Board",
    "BoardEvent",
    "EngineNotInitializedError",
    "EventBus",
    "GameStatus",
    "MovablePiece",
    "PieceKind",
    "PieceRule",
    "Point",
    "Rotation",
    "SequencePieceRule",
    "TetrisBoard",
    "TetrisEngineError",
    "UniformPieceRule",
]
