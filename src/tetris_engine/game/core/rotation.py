# src/tetris_engine/game/core/rotation.py
from __future__ import annotations

from tetris_engine.game.core.board import Board
from tetris_engine.game.core.constants import EMPTY_CELL
from tetris_engine.game.core.movable import MovablePiece
from tetris_engine.game.core.pieceset import PieceKind
from tetris_engine.game.core.wallkicks import get_wall_kicks


def collides(*, board: Board, piece: MovablePiece) -> bool:
    """
    True if any cell is outside the walls, below the floor, or on a frozen block.

    There is no ceiling: cells with y >= board.h are legal.
    """
    for p in piece.board_points():
        if p.x < 0 or p.x >= board.w or p.y < 0:
            return True
        if board.block_at(p) != EMPTY_CELL:
            return True
    return False


def is_legal(*, board: Board, piece: MovablePiece) -> bool:
    return not collides(board=board, piece=piece)


def try_rotate(*, board: Board, piece: MovablePiece, dir: int) -> MovablePiece:
    """
    Rotate a quarter turn (dir=+1 clockwise, dir=-1 counter-clockwise) with wall kicks.

    Candidates are tried in table order and the first legal one wins. If none is legal
    the input piece is returned unchanged. The O piece never consults the kick table.
    """
    rotated = piece.rotate_cw() if int(dir) > 0 else piece.rotate_ccw()

    if rotated.kind is PieceKind.O:
        return rotated if is_legal(board=board, piece=rotated) else piece

    for kick in get_wall_kicks(rotated.kind, piece.rotation, rotated.rotation):
        cand = rotated.set_position(rotated.position.transform(kick))
        if is_legal(board=board, piece=cand):
            return cand
    return piece


__all__ = ["collides", "is_legal", "try_rotate"]
