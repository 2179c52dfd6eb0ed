# src/tetris_engine/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from tetris_engine.game.core import pieceset
from tetris_engine.game.core.constants import EMPTY_CELL, HEADROOM_ROWS
from tetris_engine.game.core.movable import MovablePiece
from tetris_engine.game.core.types import Point


@dataclass
class Board:
    """
    Frozen blocks only. grid[y, x] with y = 0 the bottom row; 0 = empty, 1..7 = Block ids.

    The grid always has exactly h rows: clearing replaces removed rows with empty rows on top.
    """

    h: int
    w: int
    grid: np.ndarray

    @classmethod
    def empty(cls, *, h: int, w: int) -> "Board":
        return cls(h=h, w=w, grid=np.zeros((h, w), dtype=np.uint8))

    def is_on_board(self, p: Point) -> bool:
        return 0 <= p.x < self.w and 0 <= p.y < self.h

    def block_at(self, p: Point) -> int:
        """Block id at p, EMPTY_CELL for points off the grid (including headroom)."""
        if not self.is_on_board(p):
            return EMPTY_CELL
        return int(self.grid[p.y, p.x])

    def place(self, piece: MovablePiece) -> List[Point]:
        """
        Write the piece's cells into the grid.

        Cells outside the grid are not written; they are returned so the caller can decide
        what an overflow means (it ends the game).
        """
        block = int(pieceset.block_of(piece.kind))
        overflow: List[Point] = []
        for p in piece.board_points():
            if self.is_on_board(p):
                self.grid[p.y, p.x] = block
            else:
                overflow.append(p)
        return overflow

    def complete_rows(self) -> List[int]:
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        return [int(y) for y in np.flatnonzero(full)]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """
        Remove the given rows (deleted highest index first), then top the grid back up
        with empty rows. Relative order of the remaining rows is preserved.
        """
        grid = self.grid
        removed = 0
        for y in sorted({int(r) for r in rows}, reverse=True):
            grid = np.delete(grid, y, axis=0)
            removed += 1
        if removed <= 0:
            return 0
        new_rows = np.zeros((removed, self.w), dtype=np.uint8)
        self.grid = np.vstack([grid, new_rows])
        return removed

    def frozen_grid(self) -> np.ndarray:
        """Read-only h x w copy of the frozen blocks."""
        out = self.grid.copy()
        out.setflags(write=False)
        return out

    def snapshot(self, piece: Optional[MovablePiece] = None, *, headroom: int = HEADROOM_ROWS) -> np.ndarray:
        """
        Read-only (h + headroom) x w copy with the piece painted in.

        Piece cells above the headroom or outside the walls are dropped.
        """
        out = np.zeros((self.h + int(headroom), self.w), dtype=np.uint8)
        out[: self.h, :] = self.grid
        if piece is not None:
            block = int(pieceset.block_of(piece.kind))
            for p in piece.board_points():
                if 0 <= p.x < self.w and 0 <= p.y < out.shape[0]:
                    out[p.y, p.x] = block
        out.setflags(write=False)
        return out


__all__ = ["Board"]
