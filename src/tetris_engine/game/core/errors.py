# src/tetris_engine/game/core/errors.py
from __future__ import annotations


class TetrisEngineError(Exception):
    """Base class for engine errors."""


class EngineNotInitializedError(TetrisEngineError, RuntimeError):
    """A piece operation was called before the first new_game()."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"engine not initialized: call new_game() before {operation}()")
        self.operation = str(operation)


__all__ = ["EngineNotInitializedError", "TetrisEngineError"]
